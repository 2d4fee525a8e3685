"""
Tests for the blueprint command-line interface.
"""

import logging

import pytest

from blueprint import cli, config


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Point the CLI at an empty config file and restore root logging afterwards."""
    monkeypatch.setattr(config, "BLUEPRINT_CONFIG_FILE", tmp_path / "configuration.json")
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _exit_code(argv):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(argv)
    return exc_info.value.code


def test_nodes_lists_the_catalog(capsys):
    assert _exit_code(["--log-level", "WARNING", "nodes"]) == 0

    out = capsys.readouterr().out
    assert "Flow Control" in out
    assert "FOR_LOOP" in out
    assert "Print String" in out
    assert "Custom" in out
    assert "MY_MACRO" in out


def test_demo_runs_successfully():
    assert _exit_code(["--log-level", "WARNING", "demo", "--fast"]) == 0


def test_demo_announces_engine_start(capsys):
    assert _exit_code(["--log-level", "INFO", "--log-format", "human", "demo", "--fast"]) == 0

    err = capsys.readouterr().err
    assert "Blueprint Engine initialized." in err
    assert err.index("Blueprint Engine initialized.") < err.index("Starting simulation...")


def test_loop_runs_successfully():
    assert _exit_code(["--log-level", "WARNING", "loop", "--first", "0", "--last", "1", "--fast"]) == 0


def test_settings_come_from_the_config_file(tmp_path, capsys):
    (tmp_path / "configuration.json").write_text('{"logging": {"level": "WARNING"}}')

    assert _exit_code(["--log-format", "human", "demo", "--fast"]) == 0

    assert "Blueprint Engine initialized." not in capsys.readouterr().err


def test_command_is_required():
    assert _exit_code([]) == 2
