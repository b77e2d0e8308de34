from typing import Optional, Protocol

import anthropic

from core.errors import InferenceError
from core.utils import get_logger

logger = get_logger("inference_service")


class TextCompletionBackend(Protocol):
    """Anything that turns a prompt plus a system instruction into text"""

    async def complete(self, prompt: str, system_instruction: str) -> str:
        ...


class AnthropicCompletionBackend:
    """Text completion through the Anthropic Messages API"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "claude-sonnet-4-6",
        max_tokens: int = 300,
        timeout: float = 60.0,
        client: Optional[anthropic.AsyncAnthropic] = None
    ):
        self.model = model
        self.max_tokens = max_tokens
        if not api_key and client is None:
            logger.warning("Inference API key not found in environment variables")
        self.client = client or anthropic.AsyncAnthropic(api_key=api_key, timeout=timeout)

    async def complete(self, prompt: str, system_instruction: str) -> str:
        try:
            message = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=system_instruction,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            raise InferenceError(f"Anthropic request failed: {e}") from e

        text = "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        )
        if not text.strip():
            raise InferenceError(f"Model {self.model} returned no text")
        return text

    async def close(self) -> None:
        await self.client.close()
