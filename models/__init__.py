"""Jyotishi Baje Data Models.

This module contains dataclasses for conversation and registration state.

Models:
    OnboardingStage: Enum for the three onboarding stages.
    Speaker: Who wrote a transcript line.
    UserProfile: Name and date of birth collected during onboarding.
    Message: One transcript entry.
    ConversationState: Stage, profile and transcript of one session.
    VisitorRecord: A persisted registration entry.
"""
from models.session import (
    OnboardingStage,
    Speaker,
    UserProfile,
    Message,
    ConversationState,
)
from models.visitor import VisitorRecord

__all__ = [
    "OnboardingStage",
    "Speaker",
    "UserProfile",
    "Message",
    "ConversationState",
    "VisitorRecord",
]
