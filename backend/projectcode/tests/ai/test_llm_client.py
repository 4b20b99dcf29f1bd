from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pydantic import BaseModel

from projectcode.ai.llm_client import LLMClient, create_llm_client, parse_structured_output
from projectcode.exceptions import CredentialRequiredError, FlowOutputError


class DummyModel(BaseModel):
    name: str
    age: int


def _mock_openai(content: str, prompt_tokens: int = 10, completion_tokens: int = 5):
    mock_message = MagicMock()
    mock_message.content = content

    mock_choice = MagicMock()
    mock_choice.message = mock_message

    mock_response = MagicMock()
    mock_response.choices = [mock_choice]
    mock_response.usage = MagicMock(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens)

    mock_completions = MagicMock()
    mock_completions.create = AsyncMock(return_value=mock_response)

    mock_client_instance = AsyncMock()
    mock_client_instance.chat = MagicMock(completions=mock_completions)
    return mock_client_instance, mock_completions


@pytest.mark.asyncio
async def test_llm_client_json_parsing():
    mock_client_instance, mock_completions = _mock_openai('{"name": "Alice", "age": 30}')

    with patch("projectcode.ai.llm_client.AsyncOpenAI", return_value=mock_client_instance):
        client = LLMClient(api_key="dummy_key", model_name="test-model")

        result, tokens = await client.generate_structured_with_usage(
            system_prompt="You are a helpful assistant.",
            user_prompt="Give me Alice's details",
            response_schema=DummyModel,
        )

    assert result == DummyModel(name="Alice", age=30)
    assert tokens == 15
    mock_completions.create.assert_called_once()
    messages = mock_completions.create.call_args.kwargs["messages"]
    assert "EXPECTED SCHEMA" in messages[0]["content"]
    assert messages[1]["content"] == "Give me Alice's details"


@pytest.mark.asyncio
async def test_llm_client_attaches_audio_and_images_to_user_turn():
    mock_client_instance, mock_completions = _mock_openai('{"name": "Bob", "age": 5}')

    with patch("projectcode.ai.llm_client.AsyncOpenAI", return_value=mock_client_instance):
        client = LLMClient(api_key="dummy_key")
        await client.generate_structured(
            system_prompt="sys",
            user_prompt="describe",
            response_schema=DummyModel,
            media=["data:audio/webm;base64,AAAA", "https://example.com/a.png"],
        )

    content = mock_completions.create.call_args.kwargs["messages"][1]["content"]
    assert content[0] == {"type": "text", "text": "describe"}
    assert content[1] == {"type": "input_audio", "input_audio": {"data": "AAAA", "format": "webm"}}
    assert content[2] == {"type": "image_url", "image_url": {"url": "https://example.com/a.png"}}


@pytest.mark.asyncio
async def test_llm_client_makes_a_single_attempt_on_bad_output():
    mock_client_instance, mock_completions = _mock_openai("I cannot answer that.")

    with patch("projectcode.ai.llm_client.AsyncOpenAI", return_value=mock_client_instance):
        client = LLMClient(api_key="dummy_key")
        with pytest.raises(FlowOutputError):
            await client.generate_structured("sys", "user", DummyModel)

    assert mock_completions.create.await_count == 1


def test_parse_structured_output_accepts_fenced_and_prefixed_json():
    fenced = 'Here you go:\n```json\n{"name": "Ann", "age": 41}\n```'
    assert parse_structured_output(fenced, DummyModel).name == "Ann"
    assert parse_structured_output('json: {"name": "Ann", "age": 41}', DummyModel).age == 41


def test_parse_structured_output_rejects_schema_mismatch():
    with pytest.raises(FlowOutputError):
        parse_structured_output('{"name": "Ann"}', DummyModel)


@pytest.mark.parametrize("api_key", [None, "", "   "])
def test_create_llm_client_requires_credential(api_key):
    with patch("projectcode.ai.llm_client.AsyncOpenAI") as mock_openai:
        with pytest.raises(CredentialRequiredError):
            create_llm_client(api_key)
    mock_openai.assert_not_called()


def test_create_llm_client_binds_the_given_key():
    with patch("projectcode.ai.llm_client.AsyncOpenAI") as mock_openai:
        client = create_llm_client(" user-key ", model_name="m")
    assert client.model_name == "m"
    assert mock_openai.call_args.kwargs["api_key"] == "user-key"
