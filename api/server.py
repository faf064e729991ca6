"""Jyotishi Baje HTTP server (FastAPI).

- Visitor registration backed by a JSON file
- Per-session chat with the astrologer persona
- Application shell for every non-API path

Run with `python main.py serve`, or
`uvicorn api.server:create_app --factory`.
"""
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from config import settings
from core.observability import configure_logging, get_metrics_summary
from services.conversation import ConversationController, UnknownRashiError
from services.registration_store import RegistrationError, RegistrationStore, StoreConfig
from services.session_service import InMemorySessionService
from tools.nepali_calendar import nepali_date
from tools.rashi import RASHI_LIST

logger = logging.getLogger(__name__)

SHELL_MISSING_TEXT = "Application not built correctly. Please check build logs."


class RegisterRequest(BaseModel):
    # Optional so that missing fields get the store's 400, not a 422
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class MessageRequest(BaseModel):
    text: str = ""


class RashiRequest(BaseModel):
    label: str


class ApiKeyRequest(BaseModel):
    apiKey: str = Field(min_length=1, pattern=r"\S")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(store: Optional[RegistrationStore] = None,
               sessions: Optional[InMemorySessionService] = None,
               shell_dir: Optional[Path] = None,
               mode: str = settings.APP_ENV) -> FastAPI:
    """Build the application; every collaborator can be injected for tests."""
    configure_logging()
    # An injected registry with no sessions yet is falsy, so test for None
    if store is None:
        store = RegistrationStore(StoreConfig(path=settings.USERS_DB_PATH))
    if sessions is None:
        sessions = InMemorySessionService()
    if shell_dir is None:
        shell_dir = settings.SHELL_DIR
    shell_dir = Path(shell_dir)

    app = FastAPI(title="Jyotishi Baje")
    app.state.store = store
    app.state.sessions = sessions

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    @app.post("/api/register")
    def register(body: RegisterRequest):
        try:
            user_id = store.register(body.name, body.email, body.phone)
        except RegistrationError as e:
            return _error(400, str(e))
        except Exception:
            logger.exception("Registration error")
            return _error(500, "Internal server error")
        return {"success": True, "userId": user_id}

    @app.get("/api/health")
    def health():
        return {"status": "ok", "mode": mode}

    @app.get("/api/metrics")
    def call_metrics():
        return get_metrics_summary()

    @app.get("/api/rashis")
    def rashis():
        return RASHI_LIST

    @app.get("/api/calendar/today")
    def calendar_today():
        return {"date": nepali_date()}

    # ------------------------------------------------------------------
    # Conversation sessions
    # ------------------------------------------------------------------
    def _controller(session_id: str) -> Optional[ConversationController]:
        return sessions.get_session(session_id)

    @app.post("/api/sessions")
    def create_session():
        session_id = sessions.create_session()
        return {"sessionId": session_id, **sessions.get_session(session_id).snapshot()}

    @app.get("/api/sessions/{session_id}")
    def get_session(session_id: str):
        controller = _controller(session_id)
        if controller is None:
            return _error(404, "Session not found")
        return controller.snapshot()

    @app.delete("/api/sessions/{session_id}")
    def delete_session(session_id: str):
        if not sessions.delete_session(session_id):
            return _error(404, "Session not found")
        return {"success": True}

    @app.post("/api/sessions/{session_id}/messages")
    def post_message(session_id: str, body: MessageRequest):
        controller = _controller(session_id)
        if controller is None:
            return _error(404, "Session not found")
        result = controller.submit(body.text)
        return {
            "status": result.status.value,
            "stage": controller.stage.value,
            "replies": [m.to_dict() for m in result.replies],
        }

    @app.post("/api/sessions/{session_id}/rashi")
    def post_rashi(session_id: str, body: RashiRequest):
        controller = _controller(session_id)
        if controller is None:
            return _error(404, "Session not found")
        try:
            detail = controller.consult_rashi(body.label)
        except UnknownRashiError:
            return _error(404, "Unknown rashi")
        return {"label": body.label, "detail": detail}

    @app.post("/api/sessions/{session_id}/api-key")
    def post_api_key(session_id: str, body: ApiKeyRequest):
        controller = _controller(session_id)
        if controller is None:
            return _error(404, "Session not found")
        controller.select_api_key(body.apiKey)
        return controller.snapshot()

    # ------------------------------------------------------------------
    # Application shell (must stay last: it matches every path)
    # ------------------------------------------------------------------
    logger.info(f"{mode} mode: serving application shell from {shell_dir}")

    @app.get("/{full_path:path}")
    def shell(full_path: str):
        if full_path.startswith("api/"):
            return _error(404, "Not found")

        root = shell_dir.resolve()
        candidate = (root / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)

        index_path = root / "index.html"
        if not index_path.is_file():
            logger.error(f"Error sending index.html: {index_path} not found")
            return PlainTextResponse(SHELL_MISSING_TEXT, status_code=500)
        return FileResponse(index_path)

    return app
