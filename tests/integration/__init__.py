"""Integration tests for pyhiveomnia library.

These tests use real API credentials from .env file and make actual API calls.
They are marked with @pytest.mark.integration and skipped by default.

To run integration tests:
    pytest tests/integration -v -m integration

Environment variables required in .env:
    HIVE_USERNAME: Account email
    HIVE_PASSWORD: Account password
    HIVE_API_BASE_URL: API base URL (optional, defaults to production)
"""
