"""Text generation clients

The gateway talks to the provider through a GeneratorClient, which is
either UnconfiguredGenerator (no credential) or OpenAIGenerator. Callers
check ``configured`` on every call instead of testing for None.
"""

import asyncio
from typing import Optional

from openai import AsyncOpenAI

from ..config import Settings


class GeneratorError(Exception):
    """Raised when the provider call fails or returns nothing usable"""


class GeneratorTimeout(GeneratorError):
    """Raised when the provider does not answer within the timeout"""


class GeneratorClient:
    """Base class for text generation clients"""

    configured: bool = False

    async def complete(self, prompt: str, max_tokens: int, temperature: float) -> str:
        """
        Generate text for a prompt

        Args:
            prompt: Natural-language prompt
            max_tokens: Maximum output size
            temperature: Randomness setting

        Returns:
            Raw text from the provider

        Raises:
            GeneratorError: If the provider is unavailable or fails
        """
        raise NotImplementedError


class UnconfiguredGenerator(GeneratorClient):
    """Stand-in used when no credential is configured"""

    configured = False

    async def complete(self, prompt: str, max_tokens: int, temperature: float) -> str:
        raise GeneratorError("Text generation provider is not configured")


class OpenAIGenerator(GeneratorClient):
    """Chat-completions client bounded by a timeout"""

    configured = True

    def __init__(self, api_key: str, model: str = "gpt-3.5-turbo", timeout: float = 15.0,
                 client: Optional[AsyncOpenAI] = None):
        self.model = model
        self.timeout = timeout
        self.client = client or AsyncOpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    async def complete(self, prompt: str, max_tokens: int, temperature: float) -> str:
        try:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.model,
                    messages=[{"role": "user", "content": prompt}],
                    max_tokens=max_tokens,
                    temperature=temperature,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as exc:
            raise GeneratorTimeout(f"No response within {self.timeout}s") from exc
        except Exception as exc:
            raise GeneratorError(str(exc)) from exc

        if not response.choices:
            raise GeneratorError("Provider returned no choices")

        content = response.choices[0].message.content
        if content is None:
            raise GeneratorError("Provider returned empty content")
        return content


def build_generator(settings: Settings) -> GeneratorClient:
    """Pick the generator variant for the configured credential"""

    if settings.OPENAI_API_KEY:
        return OpenAIGenerator(
            api_key=settings.OPENAI_API_KEY,
            model=settings.OPENAI_MODEL,
            timeout=settings.AI_TIMEOUT_SECONDS,
        )
    return UnconfiguredGenerator()
