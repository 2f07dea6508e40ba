"""Shared fixtures."""

import pytest

from newsdesk.models.settings import NewsSettings
from tests.mocks import StubTextGenerator


@pytest.fixture
def news_settings() -> NewsSettings:
    return NewsSettings(
        company_name="Kontena",
        industry="HPC",
        key_products=["Modular HPC solutions", "Energy storage systems"],
        competitors=["Vertiv", "Schneider Electric"],
        interests=["energy efficiency", "modular data centers"],
    )


@pytest.fixture
def stub_generator() -> StubTextGenerator:
    return StubTextGenerator()
