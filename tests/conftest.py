"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest

from advisor_gateway.gateway import Gateway
from advisor_gateway.types import ProviderSuccess
from tests.helpers import StubAdapter, make_settings


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def text_provider():
    return StubAdapter(ProviderSuccess({"choices": [{"message": {"content": "Bonjour"}}]}), name="text")


@pytest.fixture
def multimodal_provider():
    return StubAdapter(ProviderSuccess({"text": "Spray neem oil weekly."}), name="multimodal")


@pytest.fixture
def gateway(settings, text_provider, multimodal_provider):
    return Gateway(settings, text_provider=text_provider, multimodal_provider=multimodal_provider)


@pytest.fixture
def sample_image_base64():
    """A few bytes of a JPEG header, base64-encoded."""
    return "/9j/4AAQSkZJRgABAQAAAQABAAD/2wBDAAgGBgcGBQgHBwcJCQgKDBQNDAsLDBkSEw8UHRofHh0aHBwgJC4nICIsIxwcKDcpLDAxNDQ0Hyc5PTgyPC4zNDL/"
