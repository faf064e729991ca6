"""AstrologerAgent - the Gemini-backed voice of 'ज्योतिषी बाजे'

This is the only place the application talks to the generative model. The
rest of the code treats it as an opaque collaborator: a question goes in,
text comes out, or a CollaboratorError is raised.

Design Decisions:
    1. Profile Injection: the visitor's name and date of birth are prefixed to
       the system instruction on every call, never to the user turn.
    2. Fresh Model Per Call: the system instruction differs per visitor, so a
       GenerativeModel is built for each request through `model_factory`.
    3. Structured Failures: errors are classified once, here, into a
       FailureKind so callers never inspect provider error text.
    4. Empty Replies: a response with no text part is returned as "" and the
       caller decides what to show.
"""
from typing import Callable, Optional
from enum import Enum
import logging

from google.api_core import exceptions as google_exceptions
from google.generativeai.types import BlockedPromptException, StopCandidateException

from agents import prompts
from config.llm import get_gemini_model
from config.settings import GEMINI_API_KEY, GEMINI_MODEL_NAME
from core.observability import traced
from models.session import UserProfile

logger = logging.getLogger(__name__)


class FailureKind(Enum):
    QUOTA_EXCEEDED = "quota_exceeded"
    NETWORK_FAILURE = "network_failure"
    MALFORMED = "malformed"
    UNKNOWN = "unknown"


class CollaboratorError(Exception):
    """Raised when a Gemini call does not produce a usable response."""

    def __init__(self, kind: FailureKind, message: str = ""):
        super().__init__(message or kind.value)
        self.kind = kind


_QUOTA_ERRORS = (google_exceptions.ResourceExhausted, google_exceptions.TooManyRequests)
_NETWORK_ERRORS = (
    google_exceptions.ServiceUnavailable,
    google_exceptions.DeadlineExceeded,
    google_exceptions.RetryError,
    ConnectionError,
    TimeoutError,
)
_MALFORMED_ERRORS = (BlockedPromptException, StopCandidateException, AttributeError, TypeError)


def classify_error(exc: BaseException) -> FailureKind:
    """Map an exception raised during a Gemini call onto a FailureKind."""
    if isinstance(exc, CollaboratorError):
        return exc.kind
    if isinstance(exc, _QUOTA_ERRORS):
        return FailureKind.QUOTA_EXCEEDED
    if isinstance(exc, _NETWORK_ERRORS):
        return FailureKind.NETWORK_FAILURE
    if isinstance(exc, _MALFORMED_ERRORS):
        return FailureKind.MALFORMED
    # Untyped errors (e.g. wrapped HTTP failures) still mention quota in their text
    if "quota" in str(exc).lower():
        return FailureKind.QUOTA_EXCEEDED
    return FailureKind.UNKNOWN


def build_profile_context(profile: Optional[UserProfile]) -> str:
    """Return the profile prefix injected into every system instruction."""
    if profile is None:
        return ""
    return prompts.PROFILE_CONTEXT_TEMPLATE.format(name=profile.name, dob=profile.date_of_birth)


def _response_text(response) -> str:
    try:
        return response.text or ""
    except ValueError:
        # No text part (empty candidate list or finish without content)
        return ""


class AstrologerAgent:
    """Sends consultation and rashi queries to Gemini on behalf of one visitor."""

    def __init__(self, api_key: Optional[str] = GEMINI_API_KEY,
                 model_name: str = GEMINI_MODEL_NAME,
                 model_factory: Callable = get_gemini_model):
        self.api_key = api_key
        self.model_name = model_name
        self._model_factory = model_factory

    @property
    def has_key(self) -> bool:
        return bool(self.api_key)

    def set_api_key(self, api_key: str):
        """Re-select the credential used for subsequent calls."""
        self.api_key = api_key
        logger.info("Astrologer credential re-selected")

    @traced("AstrologerAgent.ask")
    def ask(self, question: str, profile: Optional[UserProfile] = None) -> str:
        """Free-form consultation. Returns "" when Gemini produced no text."""
        instruction = build_profile_context(profile) + prompts.CHAT_SYSTEM_INSTRUCTION
        return self._generate(question, instruction)

    @traced("AstrologerAgent.rashi_reading")
    def rashi_reading(self, label: str, profile: Optional[UserProfile] = None) -> str:
        """Today's detailed reading for one rashi label."""
        instruction = build_profile_context(profile) + prompts.RASHI_SYSTEM_INSTRUCTION
        query = prompts.RASHI_QUERY_TEMPLATE.format(label=label)
        return self._generate(query, instruction)

    def _generate(self, contents: str, system_instruction: str) -> str:
        try:
            model = self._model_factory(
                self.model_name,
                system_instruction=system_instruction,
                api_key=self.api_key,
            )
            if model is None:
                raise CollaboratorError(FailureKind.UNKNOWN, "Gemini API key is not configured")
            response = model.generate_content(contents)
            return _response_text(response)
        except CollaboratorError:
            raise
        except Exception as e:
            kind = classify_error(e)
            logger.error(f"Gemini call failed ({kind.value}): {e}")
            raise CollaboratorError(kind, str(e)) from e
