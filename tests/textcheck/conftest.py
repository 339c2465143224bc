import copy
import json
from types import SimpleNamespace

import pytest


SAMPLE_RESULT = {
    "sentiment": "angry",
    "aggressiveness": 2,
    "correctness": 7,
    "errors": ["use estar not ser for temporary states"],
    "solution": "Yo estoy enfadado",
    "language": "Spanish",
}

LLM_ENV_VARS = (
    "LLM_PROVIDER",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "GOOGLE_APPLICATION_CREDENTIALS",
    "GOOGLE_CREDENTIALS_JSON",
    "GOOGLE_CLOUD_PROJECT",
    "GOOGLE_CLOUD_LOCATION",
    "VERTEX_MODEL",
    "LLM_TIMEOUT_S",
    "LLM_MAX_RETRIES",
)


class StubLLM:
    """Stands in for a backend: returns a canned payload and records calls."""

    def __init__(self, payload, *, provider="stub", model="stub-model"):
        self.payload = payload
        self.provider = provider
        self.model = model
        self.calls = []

    def generate_json(self, *, messages, json_schema, schema_name="output"):
        from textcheck.llm.base import LLMResult

        self.calls.append(
            {"messages": messages, "json_schema": json_schema, "schema_name": schema_name}
        )
        return LLMResult(
            provider=self.provider,
            model=self.model,
            output_json=self.payload,
            raw_text=json.dumps(self.payload),
        )


@pytest.fixture
def sample_result():
    return copy.deepcopy(SAMPLE_RESULT)


@pytest.fixture
def stub_llm():
    """Fixture: factory for StubLLM instances."""

    def _factory(payload):
        return StubLLM(payload)

    return _factory


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every LLM-related env var so tests start from a known state."""

    for name in LLM_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def no_sleep(monkeypatch):
    monkeypatch.setattr("textcheck.llm._retry.time.sleep", lambda _s: None)
    monkeypatch.setattr("textcheck.llm._retry.random.random", lambda: 0.0)


class FakeCompletions:
    """Mimics `client.chat.completions` of the OpenAI SDK."""

    def __init__(self, responses):
        self._responses = list(responses)
        self.requests = []

    def create(self, **kwargs):
        self.requests.append(kwargs)
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def openai_tool_response(arguments: str, name: str = "extractor"):
    call = SimpleNamespace(
        type="function", function=SimpleNamespace(name=name, arguments=arguments)
    )
    message = SimpleNamespace(content=None, tool_calls=[call])
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def openai_content_response(content: str):
    message = SimpleNamespace(content=content, tool_calls=None)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def fake_openai():
    """Fixture: build a fake OpenAI SDK client from a list of responses/exceptions."""

    def _factory(*responses):
        completions = FakeCompletions(responses)
        return SimpleNamespace(chat=SimpleNamespace(completions=completions))

    return _factory


class FakeModels:
    """Mimics `client.models` of the google-genai SDK."""

    def __init__(self, responses):
        self._responses = list(responses)
        self.requests = []

    def generate_content(self, **kwargs):
        self.requests.append(kwargs)
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def fake_genai():
    """Fixture: build a fake google-genai client from a list of responses/exceptions."""

    def _factory(*responses):
        return SimpleNamespace(models=FakeModels(responses))

    return _factory


@pytest.fixture
def tool_response():
    return openai_tool_response


@pytest.fixture
def content_response():
    return openai_content_response
