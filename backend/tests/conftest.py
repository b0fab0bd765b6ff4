"""Shared fixtures"""

import pytest
from fastapi.testclient import TestClient

from catalog_api.config import Settings
from catalog_api.main import create_app
from catalog_api.services.augmentation import AugmentationGateway
from catalog_api.services.catalog_store import CatalogStore
from catalog_api.services.generator import GeneratorClient, UnconfiguredGenerator
from catalog_api.services.item_ai import ItemAIService


class ScriptedGenerator(GeneratorClient):
    """Configured generator answering from a script instead of the network"""

    configured = True

    def __init__(self, responses=None, error=None):
        self.responses = list(responses or [])
        self.error = error
        self.calls = []

    async def complete(self, prompt, max_tokens, temperature):
        self.calls.append({"prompt": prompt, "max_tokens": max_tokens, "temperature": temperature})
        if self.error is not None:
            raise self.error
        return self.responses.pop(0)


@pytest.fixture
def settings():
    """Settings with no credential and no ambient middleware side effects"""
    return Settings(
        OPENAI_API_KEY=None,
        ENABLE_METRICS=False,
        RATE_LIMIT_ENABLED=False,
        ENVIRONMENT="test",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Create a test client"""
    return TestClient(app)


@pytest.fixture
def store():
    return CatalogStore()


@pytest.fixture
def scripted():
    """Factory for scripted generators"""
    return ScriptedGenerator


@pytest.fixture
def degraded_gateway():
    return AugmentationGateway(UnconfiguredGenerator())


@pytest.fixture
def item_ai(store, degraded_gateway):
    return ItemAIService(store, degraded_gateway)
