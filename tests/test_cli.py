"""Tests for the command line front end."""

import os
from datetime import datetime

import pytest

from filetools import __version__, config
from filetools.cli import main, parse_args


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep the user's real configuration file out of the tests."""
    monkeypatch.setattr(config, "CONFIG_FILE", tmp_path / "config.toml")


def test_stamp_prints_first_timestamp(capsys):
    assert main(["stamp", "some-Text_2021-03-31_120059_text.txt"]) == 0
    out = capsys.readouterr().out
    assert out == "some-Text_2021-03-31_120059_text.txt\t2021-03-31 12:00:59\n"


def test_stamp_all_prints_every_match(capsys):
    assert main(["stamp", "--all", "2021-03-31_120059"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "2021-03-31_120059\t2021-03-31 12:00:59",
        "2021-03-31_120059\t2021-03-31 00:00:00",
    ]


def test_stamp_without_timestamp_fails(capsys):
    assert main(["stamp", "justText", "22-03-20"]) == 1
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["justText\t-", "22-03-20\t2020-03-22 00:00:00"]


def test_mtime(tmp_path, capsys):
    path = tmp_path / "testFile.txt"
    path.write_text("text")
    modified = datetime(2024, 5, 6, 7, 8, 9).timestamp()
    os.utime(path, (modified, modified))

    assert main(["mtime", str(path)]) == 0
    assert capsys.readouterr().out == f"{path}\t2024-05-06 07:08:09\n"


def test_mtime_missing_file(tmp_path, capsys):
    missing = tmp_path / "badTestFile.txt"
    assert main(["mtime", str(missing)]) == 1
    assert "No such file" in capsys.readouterr().err


def test_size_uses_configured_locale(capsys):
    assert main(["size", "1024", "268435456"]) == 0
    assert capsys.readouterr().out.splitlines() == ["1024\t1.0 B", "268435456\t256.0 M"]

    config.save_config({"display": {"locale": "de_DE"}})
    assert main(["size", "4194304"]) == 0
    assert capsys.readouterr().out == "4194304\t4,0 M\n"


def test_size_locale_option_overrides_config(capsys):
    config.save_config({"display": {"locale": "de_DE"}})
    assert main(["size", "--locale", "en_US", "1073741824"]) == 0
    assert capsys.readouterr().out == "1073741824\t1.0 G\n"


def test_size_errors(capsys):
    assert main(["size", "--locale", "xx_XX", "1024"]) == 1
    assert "Could not format size" in capsys.readouterr().err

    assert main(["size", "-5"]) == 1
    assert "Could not format size" in capsys.readouterr().err


def test_parse(capsys):
    assert main(["parse", "1024B", "1G"]) == 0
    assert capsys.readouterr().out.splitlines() == ["1024B\t1024", "1G\t1073741824"]


def test_parse_invalid(capsys):
    assert main(["parse", "notanumber"]) == 1
    assert "Could not parse size" in capsys.readouterr().err


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        parse_args(["--version"])
    assert excinfo.value.code == 0
    assert __version__ in capsys.readouterr().out


def test_command_is_required(capsys):
    with pytest.raises(SystemExit) as excinfo:
        parse_args([])
    assert excinfo.value.code == 2


def test_size_reports_every_bad_count_and_continues(capsys):
    assert main(["size", "-5", "1024", "-1", "4194304"]) == 1
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["1024\t1.0 B", "4194304\t4.0 M"]
    assert captured.err.count("Could not format size") == 2


def test_parse_reports_every_bad_size_and_continues(capsys):
    assert main(["parse", "notanumber", "4M", "4m", "1G"]) == 1
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["4M\t4194304", "1G\t1073741824"]
    assert captured.err.count("Could not parse size") == 2
