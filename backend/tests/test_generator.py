"""Tests for the text generation clients"""

import asyncio
from types import SimpleNamespace

import pytest

from catalog_api.config import Settings
from catalog_api.services.generator import (
    GeneratorError,
    GeneratorTimeout,
    OpenAIGenerator,
    UnconfiguredGenerator,
    build_generator,
)


class FakeCompletions:
    """Stands in for client.chat.completions"""

    def __init__(self, content="ok", delay=0.0, error=None, choices=True):
        self.content = content
        self.delay = delay
        self.error = error
        self.choices = choices
        self.kwargs = None

    async def create(self, **kwargs):
        self.kwargs = kwargs
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if not self.choices:
            return SimpleNamespace(choices=[])
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])


def _generator(completions, timeout=1.0):
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return OpenAIGenerator(api_key="test-key", model="gpt-test", timeout=timeout, client=client)


def test_build_generator_without_key():
    generator = build_generator(Settings(OPENAI_API_KEY=None))

    assert isinstance(generator, UnconfiguredGenerator)
    assert generator.configured is False


def test_build_generator_with_key():
    generator = build_generator(Settings(OPENAI_API_KEY="sk-test", OPENAI_MODEL="gpt-4o-mini", AI_TIMEOUT_SECONDS=3))

    assert isinstance(generator, OpenAIGenerator)
    assert generator.configured is True
    assert generator.model == "gpt-4o-mini"
    assert generator.timeout == 3


async def test_unconfigured_generator_raises():
    with pytest.raises(GeneratorError):
        await UnconfiguredGenerator().complete("prompt", 10, 0.5)


async def test_complete_sends_single_user_message():
    completions = FakeCompletions(content="hello")
    generator = _generator(completions)

    text = await generator.complete("Describe this", max_tokens=300, temperature=0.7)

    assert text == "hello"
    assert completions.kwargs == {
        "model": "gpt-test",
        "messages": [{"role": "user", "content": "Describe this"}],
        "max_tokens": 300,
        "temperature": 0.7,
    }


async def test_complete_times_out():
    generator = _generator(FakeCompletions(delay=1.0), timeout=0.01)

    with pytest.raises(GeneratorTimeout):
        await generator.complete("slow", 10, 0.1)


async def test_complete_wraps_provider_errors():
    generator = _generator(FakeCompletions(error=ConnectionError("network down")))

    with pytest.raises(GeneratorError, match="network down"):
        await generator.complete("prompt", 10, 0.1)


async def test_complete_rejects_empty_answers():
    with pytest.raises(GeneratorError):
        await _generator(FakeCompletions(choices=False)).complete("prompt", 10, 0.1)

    with pytest.raises(GeneratorError):
        await _generator(FakeCompletions(content=None)).complete("prompt", 10, 0.1)
