from typing import Dict, List, Any, Optional
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class OnboardingStage(Enum):
    AWAITING_NAME = "awaiting_name"
    AWAITING_DOB = "awaiting_dob"
    READY = "ready"


class Speaker(Enum):
    USER = "user"
    ASSISTANT = "ai"


@dataclass
class UserProfile:
    """Who the visitor is, collected during onboarding."""
    name: str
    date_of_birth: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "dateOfBirth": self.date_of_birth}


@dataclass
class Message:
    """One line of the visible chat log."""
    speaker: Speaker
    text: str
    sent_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "speaker": self.speaker.value,
            "text": self.text,
            "sentAt": self.sent_at.isoformat(),
        }


@dataclass
class ConversationState:
    """The flowing state of one chat session.

    `stage` only ever moves forward. `profile.name` is set before the stage
    leaves AWAITING_NAME and `profile.date_of_birth` before it reaches READY.
    """
    stage: OnboardingStage = OnboardingStage.AWAITING_NAME
    profile: Optional[UserProfile] = None
    transcript: List[Message] = field(default_factory=list)

    def add_user_message(self, text: str) -> Message:
        msg = Message(Speaker.USER, text)
        self.transcript.append(msg)
        return msg

    def add_assistant_message(self, text: str) -> Message:
        msg = Message(Speaker.ASSISTANT, text)
        self.transcript.append(msg)
        return msg
