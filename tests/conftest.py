"""Shared test fixtures."""
import pytest

from langchain_core.language_models import FakeListLLM

from zenscribe.core import logger
from zenscribe.core.controller import AppController
from zenscribe.core.storage import MemoryStorage, StoreAdapter
from zenscribe.exceptions import GenerationFailed
from zenscribe.models.article import ArticleConfig, GeneratedText
from zenscribe.models.user import User


@pytest.fixture(autouse=True)
def log_file(tmp_path, monkeypatch):
    """Send log events to a temp file instead of ./log.json."""
    path = tmp_path / "log.json"
    monkeypatch.setattr(logger, "LOG_FILE", str(path))
    return path


class StubGenerator:
    """Records calls and returns a fixed result, or raises ``error``."""

    def __init__(self, title="coffee article", content="...", error=None):
        self.title = title
        self.content = content
        self.error = error
        self.calls = []

    async def generate(self, config: ArticleConfig) -> GeneratedText:
        self.calls.append(config)
        if self.error is not None:
            raise self.error
        return GeneratedText(title=self.title, content=self.content)


class ScriptedConfirm:
    def __init__(self, *answers):
        self.answers = list(answers)
        self.messages = []

    def __call__(self, message: str) -> bool:
        self.messages.append(message)
        return self.answers.pop(0) if self.answers else False


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    return StoreAdapter(storage)


@pytest.fixture
def generator():
    return StubGenerator()


@pytest.fixture
def failing_generator():
    return StubGenerator(error=GenerationFailed("quota exceeded"))


@pytest.fixture
def confirm():
    return ScriptedConfirm()


@pytest.fixture
def user():
    return User(name="Aki", email="a@x.com")


@pytest.fixture
def coffee_config():
    return ArticleConfig(topic="coffee", keywords="brew,bean", tone="casual")


@pytest.fixture
def make_controller(store, generator, confirm):
    def _make(**overrides):
        kwargs = {"store": store, "generator": generator, "confirm": confirm}
        kwargs.update(overrides)
        return AppController(**kwargs)
    return _make


@pytest.fixture
def fake_llm():
    return FakeListLLM(responses=["Coffee is brewed from roasted beans."])
