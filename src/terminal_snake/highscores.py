# highscores.py
"""
Flat high-score list persisted as little-endian binary:

    int32 count
    count * (int32 name_len, name bytes, int32 score, int32 difficulty)

The file is rewritten in full on every save and holds at most the top
MAX_HIGH_SCORES entries, best first.
"""
from __future__ import annotations
from dataclasses import dataclass
import logging
from pathlib import Path
import struct
from typing import List

from .config import MAX_HIGH_SCORES, MAX_NAME_BYTES
from .enums import Difficulty

logger = logging.getLogger(__name__)

_INT = struct.Struct("<i")


class HighScoreFormatError(ValueError):
    """The high-score data is truncated or holds values out of range."""


@dataclass(frozen=True)
class HighScore:
    name: str
    score: int
    difficulty: Difficulty


def rank(scores: List[HighScore], limit: int = MAX_HIGH_SCORES) -> List[HighScore]:
    """Best first, ties keep their insertion order, cut to `limit`."""
    return sorted(scores, key=lambda s: s.score, reverse=True)[:limit]


# ---------- Codec ----------
def truncate_name(name: str) -> bytes:
    """UTF-8 bytes of `name`, cut to MAX_NAME_BYTES without splitting a character."""
    raw = name.encode("utf-8")[:MAX_NAME_BYTES]
    return raw.decode("utf-8", errors="ignore").encode("utf-8")


def encode(scores: List[HighScore]) -> bytes:
    parts = [_INT.pack(len(scores))]
    for entry in scores:
        name = truncate_name(entry.name)
        parts.append(_INT.pack(len(name)))
        parts.append(name)
        parts.append(_INT.pack(entry.score))
        parts.append(_INT.pack(int(entry.difficulty)))
    return b"".join(parts)


def decode(data: bytes) -> List[HighScore]:
    offset = 0

    def read_int() -> int:
        nonlocal offset
        if offset + _INT.size > len(data):
            raise HighScoreFormatError(f"truncated at byte {offset}")
        (value,) = _INT.unpack_from(data, offset)
        offset += _INT.size
        return value

    count = read_int()
    if count < 0:
        raise HighScoreFormatError(f"negative entry count {count}")
    scores = []
    for _ in range(count):
        name_len = read_int()
        if not 0 <= name_len <= MAX_NAME_BYTES:
            raise HighScoreFormatError(f"bad name length {name_len}")
        if offset + name_len > len(data):
            raise HighScoreFormatError(f"truncated name at byte {offset}")
        name = data[offset:offset + name_len].decode("utf-8", errors="replace")
        offset += name_len
        score = read_int()
        ordinal = read_int()
        try:
            difficulty = Difficulty(ordinal)
        except ValueError:
            raise HighScoreFormatError(f"unknown difficulty {ordinal}") from None
        scores.append(HighScore(name, score, difficulty))
    return scores


# ---------- Store ----------
class HighScoreStore:
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> List[HighScore]:
        """Saved scores, or [] when the file is missing or unreadable."""
        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            logger.info("No high-score file at %s", self.path)
            return []
        except OSError as e:
            logger.warning("Could not read high scores from %s: %s", self.path, e)
            return []
        try:
            scores = decode(data)
        except HighScoreFormatError as e:
            logger.warning("Ignoring malformed high-score file %s: %s", self.path, e)
            return []
        logger.info("Loaded %d high score(s) from %s", len(scores), self.path)
        return scores

    def save(self, scores: List[HighScore]) -> None:
        self.path.write_bytes(encode(scores))
        logger.info("Saved %d high score(s) to %s", len(scores), self.path)


class MemoryHighScoreStore:
    """Keeps the encoded list in memory; same interface as HighScoreStore."""

    def __init__(self, data: bytes = b"") -> None:
        self.data = data
        self.saves = 0

    def load(self) -> List[HighScore]:
        if not self.data:
            return []
        try:
            return decode(self.data)
        except HighScoreFormatError as e:
            logger.warning("Ignoring malformed high-score data: %s", e)
            return []

    def save(self, scores: List[HighScore]) -> None:
        self.data = encode(scores)
        self.saves += 1
