import pytest

from taskdesk import config
from taskdesk import tasks
from taskdesk.tasks import db


@pytest.fixture()
def db_url(tmp_path, monkeypatch):
    """Fresh SQLite database per test, wired through the config."""
    url = f"sqlite:///{(tmp_path / 'taskdesk.db').as_posix()}"
    monkeypatch.setenv("TASKDESK_DATABASE_URL", url)
    config.reset_config()
    db.dispose_engine()
    tasks.init_db()
    yield url
    db.dispose_engine()
    config.reset_config()


@pytest.fixture()
def project(db_url):
    return tasks.create_project("Work")
