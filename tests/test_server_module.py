import pytest

from asa_service import create_app, get_context
from asa_service.config import Settings
from asa_service.server import initialize_database


def _unreachable(tmp_path, environment):
    url = f"sqlite:///{(tmp_path / 'missing' / 'dir' / 'asa.db').as_posix()}"
    return create_app(Settings(environment=environment, database_url=url, log_file=""))


def test_development_falls_back_to_mock(tmp_path):
    app = _unreachable(tmp_path, "development")
    assert initialize_database(app) is False
    ctx = get_context(app)
    assert ctx.is_mock
    assert ctx.jobs is None
    assert ctx.database_status == "unavailable"
    body = app.test_client().get("/api/maps").get_json()
    assert body["message"] == "Using mock data - database not connected"


def test_production_exits(tmp_path):
    app = _unreachable(tmp_path, "production")
    with pytest.raises(SystemExit) as exc:
        initialize_database(app)
    assert exc.value.code == 1


def test_mock_app_skips_initialization(mock_app):
    assert initialize_database(mock_app) is False


def test_initialize_connects(tmp_path):
    url = f"sqlite:///{(tmp_path / 'ok.db').as_posix()}"
    app = create_app(Settings(environment="test", database_url=url, skip_data_sync=True, log_file=""))
    assert initialize_database(app) is True
    ctx = get_context(app)
    assert ctx.database_status == "connected"
    assert app.test_client().get("/api/health").get_json()["database"]["connected"] is True
    ctx.jobs.shutdown()
