import asyncio
from types import SimpleNamespace

import anthropic
import httpx
import pytest

from core.errors import InferenceError
from services.inference_service import AnthropicCompletionBackend


class FakeMessages:
    def __init__(self, content=None, error=None):
        self.content = content or []
        self.error = error
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=self.content)


def _backend(messages: FakeMessages) -> AnthropicCompletionBackend:
    client = SimpleNamespace(messages=messages)
    return AnthropicCompletionBackend(model="test-model", max_tokens=123, client=client)


def test_complete_sends_system_instruction_and_prompt():
    messages = FakeMessages(content=[SimpleNamespace(type="text", text="A location with similar times is Perth in Australia.")])

    text = asyncio.run(_backend(messages).complete("31.9, 115.8", "be helpful"))

    assert text == "A location with similar times is Perth in Australia."
    assert messages.kwargs["system"] == "be helpful"
    assert messages.kwargs["model"] == "test-model"
    assert messages.kwargs["max_tokens"] == 123
    assert messages.kwargs["messages"] == [{"role": "user", "content": "31.9, 115.8"}]


def test_complete_joins_text_blocks():
    messages = FakeMessages(content=[
        SimpleNamespace(type="text", text="A location with similar times is Cusco in Peru. "),
        SimpleNamespace(type="text", text="Fun fact: it was the Inca capital."),
    ])

    text = asyncio.run(_backend(messages).complete("x", "y"))

    assert text.endswith("Inca capital.")


def test_api_errors_become_inference_errors():
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    messages = FakeMessages(error=anthropic.APIConnectionError(request=request))

    with pytest.raises(InferenceError):
        asyncio.run(_backend(messages).complete("x", "y"))


def test_empty_reply_is_an_inference_error():
    messages = FakeMessages(content=[SimpleNamespace(type="text", text="  ")])

    with pytest.raises(InferenceError):
        asyncio.run(_backend(messages).complete("x", "y"))
