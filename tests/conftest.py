"""Shared test fixtures: a fake Gemini model so no test touches the network."""
import threading
from typing import List, Optional

import pytest

from agents.astrologer_agent import AstrologerAgent
from core.observability import metrics
from services.conversation import ConversationController
from services.registration_store import RegistrationStore, StoreConfig


class FakeResponse:
    def __init__(self, text: str):
        self.text = text


class FakeModel:
    def __init__(self, factory: "FakeModelFactory", system_instruction: str):
        self.factory = factory
        self.system_instruction = system_instruction

    def generate_content(self, contents):
        self.factory.calls.append({
            "contents": contents,
            "system_instruction": self.system_instruction,
        })
        if self.factory.gate is not None:
            self.factory.entered.set()
            self.factory.gate.wait(timeout=5)
        if self.factory.error is not None:
            raise self.factory.error
        if self.factory.response is not None:
            return self.factory.response
        return FakeResponse(self.factory.reply)


class FakeModelFactory:
    """Stands in for config.llm.get_gemini_model."""

    def __init__(self, reply: str = "ग्रह दशा अनुकूल छ।"):
        self.reply = reply
        self.error: Optional[Exception] = None
        # Returned as-is instead of FakeResponse(reply) when set
        self.response = None
        self.calls: List[dict] = []
        self.model_names: List[str] = []
        self.api_keys: List[Optional[str]] = []
        # Set `gate` to an Event to hold generate_content until it is set
        self.gate: Optional[threading.Event] = None
        self.entered = threading.Event()

    def __call__(self, model_name, system_instruction=None, api_key=None):
        self.model_names.append(model_name)
        self.api_keys.append(api_key)
        if not api_key:
            return None
        return FakeModel(self, system_instruction)


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def fake_model():
    return FakeModelFactory()


@pytest.fixture
def agent(fake_model):
    return AstrologerAgent(api_key="test-key", model_name="gemini-test", model_factory=fake_model)


@pytest.fixture
def controller(agent):
    return ConversationController(agent=agent)


@pytest.fixture
def ready_controller(controller):
    """A controller that has finished onboarding."""
    controller.submit("Ram Bahadur")
    controller.submit("2050-01-01")
    return controller


@pytest.fixture
def store(tmp_path):
    return RegistrationStore(StoreConfig(path=tmp_path / "users.json"))
