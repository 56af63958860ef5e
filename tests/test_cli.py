import pytest

from minievm.cli import hex_string_to_bytes, main


def test_hex_string_to_bytes_pairs():
    assert hex_string_to_bytes("6000") == b"\x60\x00"
    assert hex_string_to_bytes("60ff600052") == bytes([0x60, 0xFF, 0x60, 0x00, 0x52])


def test_hex_string_to_bytes_trailing_digit():
    assert hex_string_to_bytes("abc") == b"\xab\x0c"


def test_hex_string_to_bytes_empty():
    assert hex_string_to_bytes("") == b""


@pytest.mark.parametrize("text", ["zz", "0x60", "60 00"])
def test_hex_string_to_bytes_rejects_non_hex(text):
    with pytest.raises(ValueError):
        hex_string_to_bytes(text)


def test_main_runs_default_program(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert "Byte: 0x60" in out
    assert "Byte: 0x59" in out
    expected = [(0x11 << 248) | (0xFF << 8), 64]
    assert f"stack={expected!r}" in out


def test_main_runs_given_program(capsys):
    assert main(["6001"]) == 0
    out = capsys.readouterr().out
    assert "stack=[1]" in out
    assert "pc=1" in out


def test_main_quiet_suppresses_trace(capsys):
    assert main(["--quiet", "6001"]) == 0
    out = capsys.readouterr().out
    assert "Byte:" not in out
    assert "stack=[1]" in out


def test_main_reports_unknown_opcode(capsys):
    assert main(["0c"]) == 1
    assert "unknown opcode" in capsys.readouterr().err


def test_main_reports_truncated_push(capsys):
    assert main(["62"]) == 1
    assert "runs past the end" in capsys.readouterr().err


def test_main_rejects_bad_hex():
    with pytest.raises(SystemExit) as excinfo:
        main(["xyz"])
    assert excinfo.value.code == 2