import io

import pytest

from crossgrid.cli import main, parse_settings, usage_text


def test_parse_settings_with_seed():
    s = parse_settings("2 3 0 1 2 5 42")
    assert (s.rows, s.cols, s.blacks_min, s.blacks_max, s.heuristic, s.options, s.seed) == (
        2, 3, 0, 1, 2, 5, 42,
    )


def test_parse_settings_without_seed():
    assert parse_settings("2 2 0 0 0 0").seed is None


@pytest.mark.parametrize("text", ["2 2 0", "2 x 0 0 0 0", "3 2 0 0 0 0"])
def test_parse_settings_invalid(text):
    with pytest.raises(ValueError):
        parse_settings(text)


def test_usage_text():
    text = usage_text("prog")
    assert text.startswith("Usage: prog <dictionary>\n")
    assert "- [ RNG seed ]" in text


def test_main_wrong_arguments(capsys):
    assert main([]) == 1
    assert "Usage:" in capsys.readouterr().err


def test_main_invalid_settings(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr("sys.stdin", io.StringIO("1 2"))
    assert main([str(tmp_path / "d.txt")]) == 1
    assert "Invalid grid settings" in capsys.readouterr().err


def test_main_missing_dictionary(monkeypatch, capsys, tmp_path):
    monkeypatch.setattr("sys.stdin", io.StringIO("2 2 0 0 0 0 1"))
    assert main([str(tmp_path / "missing.txt")]) == 1
    assert "Could not open the dictionary" in capsys.readouterr().err


def test_main_generates(monkeypatch, capsys, tmp_path):
    path = tmp_path / "d.txt"
    path.write_text("ab\ncd\nac\nbd\n")
    monkeypatch.setattr("sys.stdin", io.StringIO("2 2 0 0 3 0 1"))
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("CHOICES ")
    assert "BLACK SQUARES 0" in out