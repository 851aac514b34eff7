import os
import pathlib

import pytest
from typer.testing import CliRunner

from inidoc.cli import app

runner = CliRunner()

TEST_INI = "top=level\n; about main\n[Main]\nkey = value ; inline\nflag\n"


@pytest.fixture
def config(tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "config.ini"
    path.write_text(TEST_INI, encoding="utf-8")
    return path


def test_sections(config: pathlib.Path):
    result = runner.invoke(app, ["sections", str(config)])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["(preamble)", "Main"]


def test_show(config: pathlib.Path):
    result = runner.invoke(app, ["show", str(config)])

    assert result.exit_code == 0
    assert "value" in result.stdout
    assert "inline" in result.stdout


def test_get(config: pathlib.Path):
    result = runner.invoke(app, ["get", str(config), "MAIN", "KEY"])

    assert result.exit_code == 0
    assert result.stdout == "value\n"


def test_get_missing(config: pathlib.Path):
    result = runner.invoke(app, ["get", str(config), "Main", "nope"])
    assert result.exit_code == 1

    result = runner.invoke(app, ["get", str(config), "Main", "nope", "--default", "x"])
    assert result.exit_code == 0
    assert result.stdout == "x\n"


def test_set(config: pathlib.Path):
    result = runner.invoke(app, ["set", str(config), "main", "new", "a;b"])

    assert result.exit_code == 0
    assert config.read_bytes() == os.linesep.join(
        ['top="level"', "; about main", "[Main]", "; inline", 'key="value"', "flag", 'new="a;b"']
    ).encode()


def test_set_creates_file(tmp_path: pathlib.Path):
    path = tmp_path / "sub" / "new.ini"

    result = runner.invoke(app, ["set", str(path), "Main", "flag"])

    assert result.exit_code == 0
    assert path.read_bytes() == os.linesep.join(["[Main]", "flag"]).encode()


def test_remove(config: pathlib.Path):
    result = runner.invoke(app, ["remove", str(config), "main", "flag"])
    assert result.exit_code == 0
    assert "flag" not in config.read_text(encoding="utf-8")

    result = runner.invoke(app, ["remove", str(config), "main"])
    assert result.exit_code == 0
    assert config.read_text(encoding="utf-8") == 'top="level"'


def test_fmt(config: pathlib.Path):
    result = runner.invoke(app, ["fmt", "--check", str(config)])
    assert result.exit_code == 1

    result = runner.invoke(app, ["fmt", str(config)])
    assert result.exit_code == 0

    result = runner.invoke(app, ["fmt", "--check", str(config)])
    assert result.exit_code == 0


def test_missing_file(tmp_path: pathlib.Path):
    result = runner.invoke(app, ["get", str(tmp_path / "nope.ini"), "a", "b"])

    assert result.exit_code != 0
