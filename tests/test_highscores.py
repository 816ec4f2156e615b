import struct

import pytest

from terminal_snake.enums import Difficulty
from terminal_snake.highscores import (
    HighScore, HighScoreFormatError, HighScoreStore, MemoryHighScoreStore,
    decode, encode, rank, truncate_name,
)

SCORES = [
    HighScore("Player", 230, Difficulty.HARD),
    HighScore("ada", 121, Difficulty.MEDIUM),
    HighScore("", 3, Difficulty.EASY),
]


def test_encode_layout_is_little_endian():
    data = encode([HighScore("Bob", 42, Difficulty.EXTREME)])
    assert data == struct.pack("<i", 1) + struct.pack("<i", 3) + b"Bob" + struct.pack("<ii", 42, 3)


def test_save_then_load_keeps_order(tmp_path):
    store = HighScoreStore(tmp_path / "scores.dat")
    store.save(SCORES)
    assert store.load() == SCORES


def test_save_rewrites_file(tmp_path):
    path = tmp_path / "scores.dat"
    store = HighScoreStore(path)
    store.save(SCORES)
    store.save(SCORES[:1])
    assert store.load() == SCORES[:1]
    assert path.read_bytes() == encode(SCORES[:1])


def test_missing_file_means_no_scores(tmp_path):
    assert HighScoreStore(tmp_path / "nope.dat").load() == []


@pytest.mark.parametrize("data", [
    b"",
    b"\x01\x00",
    struct.pack("<i", 2) + encode(SCORES[:1])[4:],            # count too high
    struct.pack("<ii", 1, 300) + b"x" * 300 + struct.pack("<ii", 1, 0),
    struct.pack("<ii", 1, 1) + b"a" + struct.pack("<ii", 5, 9),   # bad difficulty
    struct.pack("<i", -1),
])
def test_malformed_data_is_rejected(data):
    with pytest.raises(HighScoreFormatError):
        decode(data)


def test_malformed_file_loads_as_empty(tmp_path):
    path = tmp_path / "scores.dat"
    path.write_bytes(b"\xff\xff")
    assert HighScoreStore(path).load() == []


def test_long_names_are_cut_to_256_bytes():
    entry = HighScore("n" * 300, 1, Difficulty.EASY)
    (loaded,) = decode(encode([entry]))
    assert loaded.name == "n" * 256


def test_long_names_are_cut_on_a_character_boundary():
    # 255 ASCII bytes then a 2-byte character that would straddle the limit
    entry = HighScore("n" * 255 + "é", 1, Difficulty.EASY)
    assert len(truncate_name(entry.name)) == 255
    (loaded,) = decode(encode([entry]))
    assert loaded.name == "n" * 255
    assert "\ufffd" not in loaded.name


def test_rank_sorts_descending_and_keeps_top_ten():
    scores = [HighScore(f"p{i}", i * 10, Difficulty.EASY) for i in range(15)]
    ranked = rank(scores)
    assert len(ranked) == 10
    assert [s.score for s in ranked] == list(range(140, 40, -10))


def test_memory_store_round_trip():
    store = MemoryHighScoreStore()
    assert store.load() == []
    store.save(SCORES)
    assert store.load() == SCORES
    assert store.saves == 1
