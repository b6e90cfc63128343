"""
Pytest configuration and fixtures for the chatbridge test suite.
"""

from typing import Dict, List

import pytest


@pytest.fixture(autouse=True)
def clean_provider_env(monkeypatch):
    """Credentials from the developer's shell must not leak into tests."""
    for name in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "GOOGLE_API_KEY", "CHATBRIDGE_CONFIG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_messages() -> List[Dict[str, str]]:
    """Sample chat messages for testing."""
    return [
        {"role": "user", "content": "What is the highest mountain in Greece?"}
    ]


@pytest.fixture
def unicode_messages() -> List[Dict[str, str]]:
    """Unicode and emoji messages for testing."""
    return [
        {"role": "user", "content": "Что такое искусственный интеллект? 🤖🚀"}
    ]


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on test location."""
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        if "stream" in item.name:
            item.add_marker(pytest.mark.streaming)
