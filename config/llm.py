"""LLM Configuration for Jyotishi Baje.

This module handles Gemini model initialization with appropriate safety settings.
"""
import logging
from typing import Optional
import google.generativeai as genai
from config.settings import GEMINI_API_KEY, GEMINI_MODEL_NAME

logger = logging.getLogger(__name__)

# Standard safety settings for a consultation persona
SAFETY_SETTINGS = [
    {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_SEXUALLY_EXPLICIT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
]


def get_gemini_model(model_name: str = GEMINI_MODEL_NAME,
                     system_instruction: Optional[str] = None,
                     api_key: Optional[str] = GEMINI_API_KEY):
    """
    Configures and returns a Gemini model instance.

    Args:
        model_name: Gemini model to use.
        system_instruction: Persona and profile context for this call.
        api_key: Credential to configure the client with.

    Returns:
        GenerativeModel instance or None if API key is missing.
    """
    if not api_key:
        logger.warning("GEMINI_API_KEY not set. Astrologer calls will fail until a key is selected.")
        return None

    # genai.configure is process-wide; the last selected key wins.
    genai.configure(api_key=api_key)

    model = genai.GenerativeModel(
        model_name=model_name,
        safety_settings=SAFETY_SETTINGS,
        system_instruction=system_instruction,
    )
    return model
