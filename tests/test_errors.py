from __future__ import annotations

import pytest
from rich.cells import cell_len
from rich.console import Console

from nudwim.config import ColorMode
from nudwim.errors import DwimError, InvalidText, NoTargetFound, ParseFailure
from nudwim.reporting.console import print_exception, use_diagnostics


def _render(err: DwimError) -> str:
    console = Console(record=True, width=100, color_system=None)
    console.print(err)
    return console.export_text()


def test_error_keeps_offset_and_text() -> None:
    err = NoTargetFound.at("Unable to find node at cursor position 4", b"echo x", 4)
    assert err.byte_offset == 4
    assert err.text == b"echo x"
    assert err.diagnostic.code == "no-target"
    assert isinstance(err, DwimError)


def test_str_is_one_line() -> None:
    err = ParseFailure.at("Unable to parse command line", b"foo (bar", 4)
    assert str(err) == "ERROR [parse-failure]: Unable to parse command line at <cmdline>:1:5"


def test_rich_rendering_points_at_offending_bytes() -> None:
    text = _render(ParseFailure.at("Unable to parse command line", b"foo (bar", 4))
    assert "foo (bar" in text
    assert "    ^" in text
    assert "byte offset 4 of 8: b'foo (bar'" in text


def test_byte_offsets_map_to_characters() -> None:
    data = "🍳 ".encode() + b"\xff"
    err = InvalidText.at("Command line is not valid UTF-8", data, 5, end=6)
    (line, col) = err.diagnostic.source.line_col(err.diagnostic.span.start)
    assert (line, col) == (1, 3)


def test_print_exception_uses_active_console(capsys: pytest.CaptureFixture[str]) -> None:
    err = ParseFailure.at("Unable to parse command line", b")", 0, hint="close the paren")
    with use_diagnostics(ColorMode.NEVER):
        print_exception(err)
    err_out = capsys.readouterr().err
    assert "Unable to parse command line" in err_out
    assert "Hint: close the paren" in err_out


def _caret_col(rendered: str, marked: str) -> tuple[int, int]:
    """Display column of ``marked`` in the frame line and of the first caret."""
    lines = rendered.splitlines()
    at = next(i for i, line in enumerate(lines) if "^" in line)
    (body, carets) = (lines[at - 1], lines[at])
    return cell_len(body[: body.index(marked)]), cell_len(carets[: carets.index("^")])


@pytest.mark.parametrize(
    "data,offset,marked",
    [
        ("🍳 'x".encode(), 5, "'x"),  # the emoji is two cells wide
        (b"a\t'b", 2, "'b"),
        ("日本 (x".encode(), 7, "(x"),
    ],
)
def test_carets_line_up_under_wide_characters(data: bytes, offset: int, marked: str) -> None:
    rendered = _render(ParseFailure.at("Unable to parse command line", data, offset))
    (want, got) = _caret_col(rendered, marked)
    assert want == got


def test_carets_cover_the_byte_range() -> None:
    rendered = _render(InvalidText.at("Command line is not valid UTF-8", b"ok \xff\xfe x", 3, end=5))
    assert "^^" in rendered
    assert "^^^" not in rendered


def test_multi_line_span_is_cut_at_first_line_end() -> None:
    rendered = _render(ParseFailure.at("Unable to parse command line", b"ab\ncd", 1, end=4))
    (body, carets) = next(
        (a, b) for a, b in zip(rendered.splitlines(), rendered.splitlines()[1:]) if "^" in b
    )
    assert "ab" in body and "cd" not in body
    assert "^^" not in carets


def test_empty_command_line_still_renders() -> None:
    err = NoTargetFound.at("Unable to find node at cursor position 0", b"", 0)
    assert str(err).endswith("at <cmdline>:1:1")
    assert "^" in _render(err)
