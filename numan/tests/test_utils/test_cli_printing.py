"""Tests for the console printing helpers."""

import re

from numan.utils.cli_printing import (
    Colors,
    print_box_header,
    print_status,
    print_table_header,
    print_table_row,
)

ANSI = re.compile(r"\x1b\[[0-9;]*m")


def plain(text: str) -> str:
    return ANSI.sub("", text)


def test_print_status_icons(capsys) -> None:
    print_status("saved", "success")
    print_status("broken", "error")
    print_status("plain", "unknown")
    lines = plain(capsys.readouterr().out).splitlines()
    assert lines == ["✓ saved", "✗ broken", "• plain"]


def test_print_status_colors(capsys) -> None:
    print_status("pkg: 1.0.0 -> 1.2.0", "update")
    out = capsys.readouterr().out
    assert out.startswith(Colors.MAGENTA)
    assert Colors.RESET in out


def test_box_header(capsys) -> None:
    print_box_header("Package Check", "🔍", width=10)
    lines = plain(capsys.readouterr().out).splitlines()
    assert lines == ["", "🔍 Package Check", "─" * 10]


def test_table(capsys) -> None:
    columns = [("Published", 10), ("Failed", 6)]
    widths = [w for _, w in columns]
    print_table_header(columns, widths)
    print_table_row(["2", "1"], widths, ["green", "red"])
    print_table_row(["0", "0"], widths)
    lines = plain(capsys.readouterr().out).splitlines()
    assert lines[0] == "  Published  │ Failed"
    assert lines[2] == "  2          │ 1     "
    assert lines[3] == "  0          │ 0     "
