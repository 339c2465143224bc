import json

import httpx
import openai
import pytest

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def _status_error(cls, status):
    return cls("error", response=httpx.Response(status, request=REQUEST), body=None)


def _llm(client, max_retries=3):
    from textcheck.llm.base import LLMConfig
    from textcheck.llm.openai_client import OpenAILLM

    return OpenAILLM(
        LLMConfig(provider="openai", model="gpt-4", max_retries=max_retries),
        client=client,
    )


def _messages():
    from textcheck.classification.prompt import render_messages

    return render_messages("Spanish", "Yo soy enfadado")


def _schema():
    from textcheck.classification.schema import build_classification_schema

    return build_classification_schema("Spanish")


def test_generate_json_sends_forced_tool_call(fake_openai, tool_response, sample_result):
    client = fake_openai(tool_response(json.dumps(sample_result)))
    result = _llm(client).generate_json(
        messages=_messages(), json_schema=_schema(), schema_name="extractor"
    )

    assert result.provider == "openai"
    assert result.model == "gpt-4"
    assert result.output_json == sample_result

    request = client.chat.completions.requests[0]
    assert request["model"] == "gpt-4"
    assert request["temperature"] == 0.0
    assert request["messages"] == [
        {
            "role": "system",
            "content": "You are an expert in Spanish, you have to detect grammar problems sentences",
        },
        {"role": "user", "content": "Yo soy enfadado"},
    ]
    tool = request["tools"][0]
    assert tool["function"]["name"] == "extractor"
    assert tool["function"]["parameters"] == _schema()
    assert request["tool_choice"] == {
        "type": "function",
        "function": {"name": "extractor"},
    }


def test_generate_json_falls_back_to_content(fake_openai, content_response, sample_result):
    client = fake_openai(content_response(json.dumps(sample_result)))
    result = _llm(client).generate_json(
        messages=_messages(), json_schema=_schema(), schema_name="extractor"
    )
    assert result.output_json == sample_result


def test_generate_json_rejects_schema_violation(fake_openai, tool_response, sample_result):
    from textcheck.llm.errors import ValidationError

    bad = dict(sample_result, aggressiveness=15)
    client = fake_openai(tool_response(json.dumps(bad)))
    with pytest.raises(ValidationError):
        _llm(client).generate_json(
            messages=_messages(), json_schema=_schema(), schema_name="extractor"
        )
    assert len(client.chat.completions.requests) == 1


def test_generate_json_rejects_empty_answer(fake_openai, content_response):
    from textcheck.llm.errors import ValidationError

    client = fake_openai(content_response(""))
    with pytest.raises(ValidationError):
        _llm(client).generate_json(
            messages=_messages(), json_schema=_schema(), schema_name="extractor"
        )


def test_generate_json_retries_connection_errors(
    fake_openai, tool_response, sample_result, no_sleep
):
    client = fake_openai(
        openai.APIConnectionError(request=REQUEST),
        openai.APITimeoutError(request=REQUEST),
        tool_response(json.dumps(sample_result)),
    )
    result = _llm(client).generate_json(
        messages=_messages(), json_schema=_schema(), schema_name="extractor"
    )
    assert result.output_json == sample_result
    assert len(client.chat.completions.requests) == 3


def test_generate_json_does_not_retry_auth_errors(fake_openai, no_sleep):
    from textcheck.llm.errors import AuthenticationError

    client = fake_openai(_status_error(openai.AuthenticationError, 401))
    with pytest.raises(AuthenticationError):
        _llm(client).generate_json(
            messages=_messages(), json_schema=_schema(), schema_name="extractor"
        )
    assert len(client.chat.completions.requests) == 1


def test_generate_json_gives_up_on_persistent_rate_limit(fake_openai, no_sleep):
    from textcheck.llm.errors import NetworkError

    client = fake_openai(
        _status_error(openai.RateLimitError, 429),
        _status_error(openai.RateLimitError, 429),
    )
    with pytest.raises(NetworkError):
        _llm(client, max_retries=2).generate_json(
            messages=_messages(), json_schema=_schema(), schema_name="extractor"
        )
    assert len(client.chat.completions.requests) == 2


@pytest.mark.parametrize(
    "error,expected",
    [
        (openai.APIConnectionError(request=REQUEST), "NetworkError"),
        (openai.APITimeoutError(request=REQUEST), "NetworkError"),
        (_status_error(openai.RateLimitError, 429), "NetworkError"),
        (_status_error(openai.APIStatusError, 408), "NetworkError"),
        (_status_error(openai.InternalServerError, 503), "NetworkError"),
        (_status_error(openai.AuthenticationError, 401), "AuthenticationError"),
        (_status_error(openai.PermissionDeniedError, 403), "AuthenticationError"),
        (_status_error(openai.BadRequestError, 400), "LLMError"),
    ],
)
def test_map_openai_error(error, expected):
    from textcheck.llm.openai_client import map_openai_error

    assert type(map_openai_error(error)).__name__ == expected


def test_constructor_requires_key_without_client():
    from textcheck.llm.base import LLMConfig
    from textcheck.llm.errors import LLMError
    from textcheck.llm.openai_client import OpenAILLM

    with pytest.raises(LLMError):
        OpenAILLM(LLMConfig(provider="openai", model="gpt-4"))


def test_generate_json_retries_request_timeout_status(
    fake_openai, tool_response, sample_result, no_sleep
):
    client = fake_openai(
        _status_error(openai.APIStatusError, 408),
        tool_response(json.dumps(sample_result)),
    )
    result = _llm(client).generate_json(
        messages=_messages(), json_schema=_schema(), schema_name="extractor"
    )
    assert result.output_json == sample_result
    assert len(client.chat.completions.requests) == 2
