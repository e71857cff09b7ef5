from __future__ import annotations

import io

import msgspec
import pytest

from nudwim.cli import build_parser, main
from nudwim.cmdline.bytes import ByteBuffer
from nudwim.errors import ParseFailure


@pytest.fixture(autouse=True)
def _plain_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NUDWIM_COLOR", "never")
    monkeypatch.delenv("NUDWIM_VERBOSITY", raising=False)


@pytest.mark.parametrize(
    "marked,expected",
    [
        ("'|'", "$'(|)'"),
        ('"(ba| "', '$"\\(ba(|) "'),
        ("foo b|ar", "foo b|ar"),
        ("echo ('ba|'", "echo ($'ba(|)'"),
    ],
)
def test_test_string(marked: str, expected: str, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--test-string", marked]) == 0
    assert capsys.readouterr().out == expected + "\n"


def test_test_string_without_cursor_fails(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--test-string", "no cursor"]) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "No '|'" in captured.err


def test_test_string_error_renders_diagnostic(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def fail(buf: ByteBuffer) -> ByteBuffer:
        raise ParseFailure.at("Unable to parse command line", bytes(buf.text), 4)

    monkeypatch.setattr("nudwim.cli.dwim_interpolate", fail)
    assert main(["--test-string", "foo (ba|r"]) == 2
    err = capsys.readouterr().err
    assert "parse-failure" in err
    assert "Unable to parse command line" in err
    assert "Error running against 'foo (ba|r'" in err


def test_wire_round_trip() -> None:
    stdin = io.BytesIO(msgspec.msgpack.encode([7, "foo 'ba '"]))
    stdout = io.BytesIO()
    assert main([], stdin=stdin, stdout=stdout) == 0
    assert msgspec.msgpack.decode(stdout.getvalue()) == [9, "foo $'ba() '"]


def test_wire_bad_payload(capsys: pytest.CaptureFixture[str]) -> None:
    stdout = io.BytesIO()
    assert main(["-q"], stdin=io.BytesIO(b"\xc1"), stdout=stdout) == 2
    assert stdout.getvalue() == b""


def test_verbosity_flags_count() -> None:
    args = build_parser().parse_args(["-vvv", "-q"])
    assert (args.verbose, args.quiet) == (3, 1)


def test_bad_environment_is_a_usage_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NUDWIM_COLOR", "purple")
    with pytest.raises(SystemExit) as excinfo:
        main(["--test-string", "'|'"])
    assert excinfo.value.code == 2
