"""Conversation Controller

Drives one visitor's chat: a scripted onboarding (name, then date of birth)
followed by free-form consultation with the AstrologerAgent.

    AWAITING_NAME --name--> AWAITING_DOB --dob--> READY --question--> READY ...

Only READY-stage input reaches Gemini. While that call is outstanding the
controller is busy and further submissions are ignored; a call is never
cancelled, it runs to success or failure.
"""
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field
from enum import Enum
import logging
import threading

from agents import prompts
from agents.astrologer_agent import AstrologerAgent, CollaboratorError, FailureKind
from models.session import ConversationState, Message, OnboardingStage, UserProfile
from tools.rashi import is_rashi

logger = logging.getLogger(__name__)


class SubmitStatus(Enum):
    ACCEPTED = "accepted"
    EMPTY = "empty"
    BUSY = "busy"


@dataclass
class SubmitResult:
    status: SubmitStatus
    replies: List[Message] = field(default_factory=list)

    @property
    def accepted(self) -> bool:
        return self.status == SubmitStatus.ACCEPTED


class UnknownRashiError(ValueError):
    """Raised when a rashi reading is requested for a label outside the twelve."""


class BlankApiKeyError(ValueError):
    """Raised when the key picker hands back an empty or whitespace key."""


def apology_for(kind: FailureKind) -> str:
    if kind == FailureKind.QUOTA_EXCEEDED:
        return prompts.QUOTA_APOLOGY
    return prompts.GENERIC_APOLOGY


class ConversationController:
    """Owns the ConversationState of one session."""

    def __init__(self, agent: Optional[AstrologerAgent] = None):
        self.agent = agent or AstrologerAgent()
        self.state = ConversationState()
        self.state.add_assistant_message(prompts.GREETING)

        # Rashi slot: independent of stage and transcript
        self.selected_rashi: Optional[str] = None
        self.rashi_details: Dict[str, str] = {}

        self._busy = threading.Lock()

    @property
    def busy(self) -> bool:
        return self._busy.locked()

    @property
    def stage(self) -> OnboardingStage:
        return self.state.stage

    @property
    def profile(self) -> Optional[UserProfile]:
        return self.state.profile

    @property
    def transcript(self) -> List[Message]:
        return self.state.transcript

    def submit(self, text: str) -> SubmitResult:
        """Handle one visitor message according to the current stage."""
        if not text or not text.strip():
            return SubmitResult(SubmitStatus.EMPTY)

        if not self._busy.acquire(blocking=False):
            logger.debug("Submit ignored: a consultation is still in flight")
            return SubmitResult(SubmitStatus.BUSY)

        try:
            self.state.add_user_message(text)
            entry = text.strip()

            if self.state.stage == OnboardingStage.AWAITING_NAME:
                reply = self._accept_name(entry)
            elif self.state.stage == OnboardingStage.AWAITING_DOB:
                reply = self._accept_dob(entry)
            else:
                reply = self._consult(entry)

            return SubmitResult(SubmitStatus.ACCEPTED, [reply])
        finally:
            self._busy.release()

    def _accept_name(self, name: str) -> Message:
        self.state.profile = UserProfile(name=name)
        self.state.stage = OnboardingStage.AWAITING_DOB
        logger.info("Onboarding: name collected")
        return self.state.add_assistant_message(prompts.ASK_DOB_TEMPLATE.format(name=name))

    def _accept_dob(self, dob: str) -> Message:
        if self.state.profile is None:
            self.state.profile = UserProfile(name="Unknown")
        self.state.profile.date_of_birth = dob
        self.state.stage = OnboardingStage.READY
        logger.info("Onboarding: date of birth collected, consultation ready")
        return self.state.add_assistant_message(prompts.READY_TEMPLATE.format(dob=dob))

    def _consult(self, question: str) -> Message:
        try:
            answer = self.agent.ask(question, self.state.profile)
        except CollaboratorError as e:
            return self.state.add_assistant_message(apology_for(e.kind))
        return self.state.add_assistant_message(answer or prompts.EMPTY_REPLY_FALLBACK)

    def consult_rashi(self, label: str) -> str:
        """Fetch today's reading for `label` into its display slot and return it."""
        if not is_rashi(label):
            raise UnknownRashiError(label)

        self.selected_rashi = label
        self.rashi_details[label] = prompts.RASHI_PENDING
        try:
            detail = self.agent.rashi_reading(label, self.state.profile) or prompts.RASHI_EMPTY_FALLBACK
        except CollaboratorError:
            detail = prompts.RASHI_FAILURE
        self.rashi_details[label] = detail
        return detail

    def select_api_key(self, api_key: str) -> Message:
        """Apply a credential chosen through the host's key picker.

        A blank key is rejected before it can replace a working one.
        """
        if not api_key or not api_key.strip():
            raise BlankApiKeyError("API key must not be blank")
        self.agent.set_api_key(api_key.strip())
        return self.state.add_assistant_message(prompts.API_KEY_UPDATED)

    def snapshot(self) -> Dict[str, Any]:
        profile = self.state.profile
        return {
            "stage": self.state.stage.value,
            "profile": profile.to_dict() if profile else None,
            "busy": self.busy,
            "hasKey": self.agent.has_key,
            "transcript": [m.to_dict() for m in self.state.transcript],
            "selectedRashi": self.selected_rashi,
            "rashiDetails": dict(self.rashi_details),
        }
