import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from asa_service import create_app, db, get_context  # noqa: E402
from asa_service.config import Settings  # noqa: E402
from asa_service.database import ensure_schema_version  # noqa: E402
from asa_service.services import DataPopulationService  # noqa: E402
from tests.factories import FakeDododex, FakeWiki  # noqa: E402


def _no_sleep(seconds):
    return None


def make_population(wiki=None, dododex=None):
    return DataPopulationService(wiki or FakeWiki(), dododex or FakeDododex(), sleep=_no_sleep)


@pytest.fixture(scope="session")
def test_app(tmp_path_factory):
    db_path = tmp_path_factory.mktemp("db") / "asa_test.db"
    settings = Settings(
        environment="test",
        database_url=f"sqlite:///{db_path.as_posix()}",
        skip_data_sync=True,
        log_file="",
    )
    app = create_app(settings)
    app.config.update({"TESTING": True})
    ctx = get_context(app)
    # Population jobs and admin routes use offline scrapers
    ctx.population = make_population
    with app.app_context():
        ctx.initializer.create_schema()
    yield app
    ctx.jobs.shutdown()


@pytest.fixture(scope="session")
def mock_app():
    app = create_app(Settings(environment="test", skip_database=True, log_file=""))
    app.config.update({"TESTING": True})
    return app


@pytest.fixture(autouse=True)
def _push_app_context(test_app):
    ctx = test_app.app_context()
    ctx.push()
    try:
        yield
    finally:
        ctx.pop()


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture()
def mock_client(mock_app):
    return mock_app.test_client()


@pytest.fixture(autouse=True)
def _conditional_db_isolation(request, test_app):
    """Recreate DB only for tests marked with @pytest.mark.db_isolation.

    Unmarked tests reuse the existing session DB for speed.
    """
    if "db_isolation" in request.keywords:
        with test_app.app_context():
            db.session.remove()
            db.drop_all()
            db.create_all()
            ensure_schema_version()
    yield


@pytest.fixture()
def populated(test_app):
    """Fresh database filled from the offline scrapers; returns the step counts."""
    db.session.remove()
    db.drop_all()
    db.create_all()
    ensure_schema_version()
    return make_population().populate_all_data()
