from tasklaunch.cli.common.logs import level_for_verbosity
from tasklaunch.cli.common.output import _format_properties, _truncate


def test_truncate_uses_ascii_ellipsis():
    assert _truncate("x" * 20, 10) == "xxxxxxx..."
    assert _truncate("short", 10) == "short"


def test_format_properties_renders_lines_or_dash():
    assert _format_properties({}) == "-"
    assert _format_properties({"a": "b", "c": "d"}) == "a=b\nc=d"


def test_format_properties_escapes_markup():
    assert _format_properties({"a": "[bold]"}) == "a=\\[bold]"


def test_level_for_verbosity_is_clamped():
    import logging

    assert level_for_verbosity(0) == logging.WARNING
    assert level_for_verbosity(1) == logging.INFO
    assert level_for_verbosity(2) == logging.DEBUG
    assert level_for_verbosity(7) == logging.DEBUG
