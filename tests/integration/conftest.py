"""Pytest configuration and fixtures for integration tests."""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from dotenv import load_dotenv

from pyhiveomnia.const import DEFAULT_BASE_URL


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


# Load .env file from project root
env_path = Path(__file__).parents[2] / ".env"
load_dotenv(env_path)


@pytest.fixture(scope="session")
def integration_config() -> dict[str, str]:
    """Load integration test configuration from environment.

    Returns:
        Dictionary with API credentials and configuration.

    Raises:
        ValueError: If required environment variables are missing.
    """
    username = os.getenv("HIVE_USERNAME")
    password = os.getenv("HIVE_PASSWORD")
    base_url = os.getenv("HIVE_API_BASE_URL", DEFAULT_BASE_URL)

    if not username or not password:
        msg = "Missing required environment variables. Please create .env file with HIVE_USERNAME and HIVE_PASSWORD"
        raise ValueError(msg)

    return {
        "username": username,
        "password": password,
        "base_url": base_url,
    }


@pytest.fixture(autouse=True)
async def rate_limit_delay(request: pytest.FixtureRequest) -> AsyncGenerator[None]:
    """Add a delay after each integration test to avoid API rate limiting."""
    yield
    if "integration" in request.keywords:
        await asyncio.sleep(1.0)
