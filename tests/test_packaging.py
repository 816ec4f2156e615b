from pathlib import Path

PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def test_curses_is_pulled_in_on_windows():
    # curses is imported at module level; Windows ships without it
    text = PYPROJECT.read_text()
    assert "'windows-curses; platform_system == \"Windows\"'" in text
