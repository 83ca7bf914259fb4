import importlib
import json
import logging
import sys

import pytest

import asa_service.server as server_mod

# run.py is imported as a module; start_server is patched so no server starts.

ENV_VARS = ("DATABASE_URL", "SKIP_DATABASE", "HOST", "PORT", "LOG_FILE", "SKIP_DATA_SYNC", "DROP_EXISTING_DB")


@pytest.fixture()
def run_module(monkeypatch, tmp_path):
    # run.main writes DATABASE_URL itself; registering every variable first lets
    # monkeypatch put the environment back afterwards
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setenv("LOG_FILE", str(tmp_path / "app.log"))
    root = logging.getLogger()
    handlers = list(root.handlers)
    if "run" in sys.modules:
        del sys.modules["run"]
    yield importlib.import_module("run")
    for h in list(root.handlers):
        root.removeHandler(h)
        if h not in handlers:
            h.close()
    for h in handlers:
        root.addHandler(h)


@pytest.fixture()
def server_calls(monkeypatch):
    calls = {}

    def fake_start_server(settings, host=None, port=None, debug=False):
        calls.update(settings=settings, host=host, port=port, debug=debug)

    monkeypatch.setattr(server_mod, "start_server", fake_start_server)
    return calls


def test_version_flag_outputs_version(run_module, capsys):
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["--version"])
    assert exc.value.code == 0
    captured = capsys.readouterr().out
    assert "ASA Service" in captured
    assert run_module.__version__ in captured


def test_default_command_is_server(run_module):
    assert run_module.parse_args([]).command == "server"
    assert run_module.parse_args(["populate"]).population_type == "all"


def test_server_main_invokes_start_server(monkeypatch, run_module, server_calls, capsys):
    monkeypatch.setenv("PORT", "5555")
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setenv("SKIP_DATABASE", "1")

    assert run_module.main(["server"]) == 0
    assert server_calls["host"] == "127.0.0.1"
    assert server_calls["port"] == 5555
    assert server_calls["debug"] is False
    assert server_calls["settings"].use_mock_data is True
    assert "mock data" in capsys.readouterr().out


def test_server_flags_override_env(monkeypatch, run_module, server_calls):
    monkeypatch.setenv("PORT", "5555")
    run_module.main(["server", "--port", "7000", "--host", "localhost", "--debug"])
    assert server_calls["port"] == 7000
    assert server_calls["host"] == "localhost"
    assert server_calls["debug"] is True


def test_env_file_argument(tmp_path, run_module, server_calls, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("HOST=0.0.0.0\nPORT=6001\nSKIP_DATABASE=1\n")
    run_module.main(["--env-file", str(env_file), "server"])
    assert server_calls["port"] == 6001
    assert server_calls["settings"].use_mock_data is True


def test_database_commands_need_a_database(monkeypatch, run_module, capsys):
    monkeypatch.setenv("SKIP_DATABASE", "1")
    assert run_module.main(["status"]) == 1
    assert "A database is required" in capsys.readouterr().out


def test_init_db_and_status(tmp_path, run_module, capsys):
    url = f"sqlite:///{(tmp_path / 'cli.db').as_posix()}"
    assert run_module.main(["init-db", "--db", url, "--skip-sync"]) == 0
    report = json.loads(capsys.readouterr().out)
    assert report["healthy"] is True
    assert report["schema_version"] == "3.1.0"

    assert run_module.main(["status", "--db", url]) == 0
    status = json.loads(capsys.readouterr().out)
    assert status["counts"]["maps"] == 0
    assert status["status"]["status"] == "not_started"
