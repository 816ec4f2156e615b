import curses

from terminal_snake.enums import Direction, Key
from terminal_snake.input_handler import QueuedInput, map_curses_key


def test_queries_answer_from_the_polled_key():
    inp = QueuedInput([Key.UP, None, Key.ENTER])
    inp.poll()
    assert inp.is_up_pressed() and inp.is_up_pressed()
    assert inp.direction() is Direction.UP
    assert inp.key_pressed()
    inp.poll()
    assert not inp.key_pressed()
    assert inp.direction() is Direction.NONE
    inp.poll()
    assert inp.is_enter_pressed()


def test_clear_keys_drops_current_key():
    inp = QueuedInput([Key.PAUSE, Key.QUIT])
    inp.poll()
    inp.clear_keys()
    assert not inp.is_pause_pressed()
    inp.poll()
    assert inp.is_quit_pressed()


def test_curses_key_mapping():
    assert map_curses_key(-1) is None
    assert map_curses_key(curses.KEY_UP) is Key.UP
    assert map_curses_key(ord("W")) is Key.UP
    assert map_curses_key(ord("a")) is Key.LEFT
    assert map_curses_key(ord("d")) is Key.RIGHT
    assert map_curses_key(ord("s")) is Key.DOWN
    assert map_curses_key(ord("p")) is Key.PAUSE
    assert map_curses_key(ord("Q")) is Key.QUIT
    assert map_curses_key(10) is Key.ENTER
    assert map_curses_key(ord("z")) is Key.OTHER
