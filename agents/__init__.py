"""Jyotishi Baje Agent Module.

Agents:
    AstrologerAgent: Gemini-backed consultation and rashi readings.
"""
from agents.astrologer_agent import AstrologerAgent, CollaboratorError, FailureKind

__all__ = [
    "AstrologerAgent",
    "CollaboratorError",
    "FailureKind",
]
