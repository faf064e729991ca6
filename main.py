"""Jyotishi Baje - Vedic astrologer chat

Usage:
    Web server:   python main.py serve
    Console chat: python main.py chat
"""
import argparse
import logging

import uvicorn

from config import settings
from core.observability import configure_logging, get_metrics_summary
from services.conversation import BlankApiKeyError, ConversationController, SubmitStatus, UnknownRashiError
from services.registration_client import submit_registration
from tools.nepali_calendar import nepali_date
from tools.rashi import RASHI_LABELS

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  /rashi <label>   today's reading for a rashi, e.g. /rashi मेष (Aries)
  /rashis          list the twelve rashi labels
  /register        send your contact details to the running server
  /key <api key>   use a different Gemini API key
  exit             quit"""


def serve():
    """Start uvicorn; development mode reloads on source changes."""
    logger.info(f"Server running on http://localhost:{settings.PORT} ({settings.APP_ENV})")
    uvicorn.run(
        "api.server:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=not settings.IS_PRODUCTION,
        log_level=settings.LOG_LEVEL.lower(),
    )


def _register_from_console(base_url: str):
    name = input("Name: ")
    email = input("Email: ")
    phone = input("Phone (optional): ")
    status = submit_registration(base_url, name, email, phone)
    print(f"Baje: {status.message}")


def chat(base_url: str):
    print(f"=== ज्योतिषी बाजे === {nepali_date()}")
    controller = ConversationController()
    if not controller.agent.has_key:
        print("Warning: GEMINI_API_KEY not found. Use /key <api key> before asking questions.")
    print(HELP_TEXT)
    print(f"\nBaje: {controller.transcript[-1].text}")

    while True:
        user_input = input("\nYou: ").strip()
        if user_input.lower() in ["exit", "quit"]:
            print("Baje: शुभम्! Goodbye.")
            break

        if user_input == "/rashis":
            print("\n".join(RASHI_LABELS))
        elif user_input.startswith("/rashi "):
            try:
                print(f"Baje: {controller.consult_rashi(user_input[len('/rashi '):].strip())}")
            except UnknownRashiError as e:
                print(f"Unknown rashi: {e}. Try /rashis.")
        elif user_input == "/register":
            _register_from_console(base_url)
        elif user_input == "/key" or user_input.startswith("/key "):
            try:
                msg = controller.select_api_key(user_input[len("/key "):])
            except BlankApiKeyError:
                print("Usage: /key <api key>")
            else:
                print(f"Baje: {msg.text}")
        else:
            result = controller.submit(user_input)
            if result.status == SubmitStatus.ACCEPTED:
                for reply in result.replies:
                    print(f"Baje: {reply.text}")

    logger.info(f"Session complete. Metrics: {get_metrics_summary()}")


def main():
    parser = argparse.ArgumentParser(description="Jyotishi Baje - Vedic astrologer chat")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("serve", help="Run the HTTP server")
    chat_parser = sub.add_parser("chat", help="Chat in the terminal")
    chat_parser.add_argument("--server", default=f"http://localhost:{settings.PORT}",
                             help="Server used by /register")
    args = parser.parse_args()

    configure_logging()
    if args.command == "serve":
        serve()
    else:
        chat(args.server)


if __name__ == "__main__":
    main()
