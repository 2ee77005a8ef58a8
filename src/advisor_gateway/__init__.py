"""Advisor gateway: translation, chat and crop-remedy requests over OpenAI and Gemini."""

__version__ = "0.1.0"
