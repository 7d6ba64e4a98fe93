import pytest
from app import app as flask_app
from mongo import JudgeConfig
from mongo import notify
from tests import utils


@pytest.fixture(autouse=True)
def clean_db():
    utils.drop_db()
    yield
    utils.drop_db()


@pytest.fixture
def judge_config(tmp_path):
    return JudgeConfig(
        submissions_dir=tmp_path / 'submissions',
        runner='bin/run_code.sh',
    )


@pytest.fixture
def case_dir(tmp_path):
    return tmp_path / 'cases'


@pytest.fixture
def events(monkeypatch):
    '''
    collect published submission events instead of sending them
    '''
    published = []

    def publish(event, data):
        published.append((event, data))
        return 0

    monkeypatch.setattr(notify, 'publish', publish)
    return published


@pytest.fixture
def app(judge_config):
    app = flask_app(judge_config)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
