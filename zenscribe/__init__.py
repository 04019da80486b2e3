"""ZenScribe: AI-powered blog writing assistant."""

__version__ = "0.1.0"
