"""Tests for container wiring."""

import asyncio

from meal_composer.adapters.memory_preference_repository import (
    InMemoryPreferenceRepository,
)
from meal_composer.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container("7", settings)

    assert container.user_id == "7"
    assert container.catalog_service.registry is container.liked_registry
    assert container.basket.is_empty
    assert container.basket.default_quantity == settings.default_quantity
    assert isinstance(container.liked_registry.store, InMemoryPreferenceRepository)
    assert container.user_service.client is container.api_client
    asyncio.run(container.close_resources())
