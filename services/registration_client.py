"""Client side of the registration form: posts to /api/register and turns the
outcome into the status line shown to the visitor."""
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from agents import prompts

logger = logging.getLogger(__name__)


@dataclass
class RegistrationStatus:
    kind: str  # "success" | "error"
    message: str
    user_id: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.kind == "success"


def submit_registration(base_url: str, name: str, email: str, phone: str = "",
                        client: Optional[httpx.Client] = None,
                        timeout: float = 10.0) -> RegistrationStatus:
    """POST the form to `base_url`/api/register."""
    payload = {"name": name, "email": email, "phone": phone}
    owns_client = client is None
    client = client or httpx.Client(timeout=timeout)
    try:
        response = client.post(f"{base_url.rstrip('/')}/api/register", json=payload)
    except httpx.HTTPError as e:
        logger.warning(f"Registration request failed: {e}")
        return RegistrationStatus("error", prompts.REGISTRATION_UNREACHABLE)
    finally:
        if owns_client:
            client.close()

    try:
        data = response.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}

    if response.is_success:
        return RegistrationStatus("success", prompts.REGISTRATION_SUCCESS, data.get("userId"))
    return RegistrationStatus("error", data.get("error") or prompts.REGISTRATION_GENERIC_ERROR)
