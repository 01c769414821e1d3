"""Slate: local chat client core for OpenAI and OpenRouter."""

__version__ = "1.0.0"
