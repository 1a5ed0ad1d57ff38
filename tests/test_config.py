"""
Podcast Backend: Configuration & Startup Tests
===============================================

What:  Tests for settings validation and how the lifespan reacts to it.
How:   Settings built from keyword arguments; the lifespan runs against a
       bare FastAPI app with logging setup and engine disposal patched out.
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi import FastAPI

from podcast_backend.config import DEFAULT_SECRET_KEY, Settings
from podcast_backend.main import build_lifespan


class TestSecretValidation:
    def test_default_secret_rejected(self):
        config = Settings(secret_key=DEFAULT_SECRET_KEY)
        with pytest.raises(ValueError, match="SECRET_KEY"):
            config.validate_required_for_production()

    def test_empty_secret_rejected(self):
        config = Settings(secret_key="")
        with pytest.raises(ValueError, match="SECRET_KEY"):
            config.validate_required_for_production()

    def test_real_secret_accepted(self):
        Settings(secret_key="a-real-secret-value").validate_required_for_production()


class TestStartup:
    @pytest.mark.asyncio
    async def test_default_secret_is_reported_and_startup_continues(self):
        config = Settings(secret_key=DEFAULT_SECRET_KEY, db_create_all=False)
        lifespan = build_lifespan(config)

        with patch("podcast_backend.main.setup_logging"), \
             patch("podcast_backend.main.dispose_engine", new_callable=AsyncMock) as dispose, \
             patch("podcast_backend.main.logger") as mock_logger:
            async with lifespan(FastAPI()):
                started = True

        assert started
        dispose.assert_awaited_once()
        message = mock_logger.error.call_args[0][0]
        assert message.startswith("Configuration error")
        assert "SECRET_KEY" in str(mock_logger.error.call_args[0][1])

    @pytest.mark.asyncio
    async def test_real_secret_logs_no_error(self):
        config = Settings(secret_key="a-real-secret-value", db_create_all=False)
        lifespan = build_lifespan(config)

        with patch("podcast_backend.main.setup_logging"), \
             patch("podcast_backend.main.dispose_engine", new_callable=AsyncMock), \
             patch("podcast_backend.main.logger") as mock_logger:
            async with lifespan(FastAPI()):
                pass

        mock_logger.error.assert_not_called()
