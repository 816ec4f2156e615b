from terminal_snake.enums import ColorTag
from terminal_snake.renderer import BufferRenderer, make_renderer, CursesRenderer, PygameRenderer

import pytest


def test_initialize_and_clear(renderer):
    renderer.draw_char(1, 1, "Z", ColorTag.TITLE)
    renderer.clear()
    assert renderer.char_at(1, 1) == " "
    assert renderer.color_at(1, 1) is ColorTag.DEFAULT


def test_out_of_bounds_draws_are_ignored(renderer):
    renderer.draw_char(-1, 0, "a")
    renderer.draw_char(80, 0, "a")
    renderer.draw_char(0, 24, "a")
    renderer.draw_text(0, -1, "hello")
    renderer.draw_text(77, 3, "hello")
    renderer.draw_text(-2, 4, "hello")
    assert renderer.row_text(3).endswith("hel")
    assert renderer.row_text(4).startswith("llo")
    assert renderer.find("a") == []


def test_border():
    r = BufferRenderer()
    r.initialize(5, 4)
    r.draw_border()
    assert r.screen_text() == "+---+\n|   |\n|   |\n+---+"
    assert r.color_at(0, 0) is ColorTag.BORDER


def test_rect_partly_offscreen():
    r = BufferRenderer()
    r.initialize(6, 4)
    r.draw_rect(3, 1, 5, 3, ColorTag.BORDER)
    assert r.row_text(1) == "   +--"
    assert r.row_text(2) == "   |  "
    assert r.row_text(3) == "   +--"


def test_draw_centered(renderer):
    renderer.draw_centered(2, "ab")
    assert renderer.char_at(39, 2) == "a"


def test_refresh_counts_frames(renderer):
    renderer.refresh()
    renderer.refresh()
    assert renderer.frames == 2


def test_make_renderer():
    assert isinstance(make_renderer("terminal"), CursesRenderer)
    assert isinstance(make_renderer("pygame"), PygameRenderer)
    with pytest.raises(ValueError):
        make_renderer("tty")
