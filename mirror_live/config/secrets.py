"""Secrets and authentication configuration."""

from __future__ import annotations

ENV_GEMINI_API_KEY = "GEMINI_API_KEY"
ENV_HELPER_TOKEN = "HELPER_TOKEN"

__all__ = ["ENV_GEMINI_API_KEY", "ENV_HELPER_TOKEN"]
