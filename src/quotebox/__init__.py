"""
QuoteBox: inspirational quotes on demand.

Accepts a mood/emotion tag, asks an OpenRouter chat-completion model for a
short quote about it, stores the result and serves recent quotes back.

Architecture: FastAPI service + OpenRouter client with bounded retry + SQLAlchemy store
"""

__version__ = "0.1.0"
