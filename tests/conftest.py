import pytest
from fastapi.testclient import TestClient

from app import create_app
from errors import UpstreamError
from screening.store import ScreeningStore, build_engine


class FakeRelay:
    """Records every call; replies with a canned assistant message or fails."""

    def __init__(self, reply=None, fail=False):
        self.reply = reply or {"role": "assistant", "content": "Tell me about yourself."}
        self.fail = fail
        self.calls = []
        self.closed = False

    def respond(self, prompt, history):
        self.calls.append((prompt, history))
        if self.fail:
            raise UpstreamError()
        return self.reply

    def close(self):
        self.closed = True


@pytest.fixture
def store(tmp_path):
    s = ScreeningStore(build_engine(f"sqlite:///{tmp_path / 'db' / 'screenings.db'}"))
    s.init_schema()
    yield s
    s.dispose()


@pytest.fixture
def relay():
    return FakeRelay()


@pytest.fixture
def client(store, relay):
    with TestClient(create_app(store=store, relay=relay)) as c:
        yield c


@pytest.fixture
def new_screening():
    return {
        "id": "t1",
        "jobTitle": "Engineer",
        "companyName": "Acme",
        "jobDescription": "Build things",
    }


@pytest.fixture
def fake_relay_cls():
    return FakeRelay
