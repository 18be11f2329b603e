import logging
import sys
from pathlib import Path

import pytest

from arbor.__main__ import bootstrap, find_arbor_config, main

ACTIONS = """
def greet(command, args):
    print(f"hello {command.flags.get('name')}")
"""

CONFIG = """
use: greeter
commands:
  - use: greet
    short: Say hello
    action: arbor_main_actions:greet
    flags:
      - name: name
        shorthand: n
        default: World
"""


@pytest.fixture(autouse=True)
def fake_home(monkeypatch, tmp_path):
    """Redirect Path.home() to a temporary directory for all tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    return home


@pytest.fixture(autouse=True)
def workdir(monkeypatch, tmp_path):
    """Run every test from an empty directory with a restorable sys.path."""
    cwd = tmp_path / "work"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    monkeypatch.delenv("ARBOR_CONFIG", raising=False)
    monkeypatch.setenv("ARBOR_LOG_MODE", "cli")
    monkeypatch.setattr(sys, "path", list(sys.path))
    return Path.cwd()


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_find_arbor_config(workdir):
    config_file = workdir / "arbor.yaml"
    config_file.touch()
    assert find_arbor_config() == config_file


def test_find_arbor_config_prefers_yaml(workdir):
    (workdir / "arbor.toml").touch()
    (workdir / "arbor.yaml").touch()
    assert find_arbor_config() == workdir / "arbor.yaml"


def test_find_arbor_config_hidden_file(workdir):
    config_file = workdir / ".arbor.toml"
    config_file.touch()
    assert find_arbor_config() == config_file


def test_find_arbor_config_from_env(monkeypatch, tmp_path):
    config_file = tmp_path / "custom.yaml"
    config_file.touch()
    monkeypatch.setenv("ARBOR_CONFIG", str(config_file))
    assert find_arbor_config() == config_file


def test_find_arbor_config_global(fake_home):
    config_file = fake_home / ".config" / "arbor" / "arbor.toml"
    config_file.parent.mkdir(parents=True)
    config_file.touch()
    assert find_arbor_config() == config_file


def test_find_arbor_config_none():
    assert find_arbor_config() is None


def test_bootstrap(workdir):
    config_file = workdir / "arbor.yaml"
    config_file.touch()
    assert bootstrap() == config_file
    assert sys.path[0] == str(workdir)


def test_bootstrap_no_config():
    sys_path_before = list(sys.path)
    assert bootstrap() is None
    assert sys.path == sys_path_before


def test_main_no_config(capsys):
    assert main([]) == 1
    assert "No Arbor configuration found." in capsys.readouterr().out


def test_main_runs_command(workdir, capsys):
    (workdir / "arbor_main_actions.py").write_text(ACTIONS)
    (workdir / "arbor.yaml").write_text(CONFIG)

    assert main(["greet", "-n", "Ann"]) == 0
    assert "hello Ann" in capsys.readouterr().out


def test_main_uses_sys_argv(workdir, capsys, monkeypatch):
    (workdir / "arbor_main_actions.py").write_text(ACTIONS)
    (workdir / "arbor.yaml").write_text(CONFIG)
    monkeypatch.setattr(sys, "argv", ["arbor", "greet"])

    assert main() == 0
    assert "hello World" in capsys.readouterr().out


def test_main_unknown_command(workdir, capsys):
    (workdir / "arbor_main_actions.py").write_text(ACTIONS)
    (workdir / "arbor.yaml").write_text(CONFIG)

    assert main(["nope"]) == 1
    out = capsys.readouterr().out
    assert "Error:" in out
    assert "Command 'nope' not found" in out


def test_main_invalid_config(workdir, capsys):
    (workdir / "arbor.yaml").write_text("- not a command\n")
    assert main([]) == 1
    assert "must contain a dictionary" in capsys.readouterr().out
