"""API routes."""

from . import chat, scans

__all__ = ["chat", "scans"]
