"""Central Configuration for the Jyotishi Baje application."""
import os
import tempfile
from pathlib import Path
from dotenv import load_dotenv

# Base Directory (Root of the project)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load Environment Variables
load_dotenv(BASE_DIR / ".env")

# Deployment Mode
APP_ENV = os.getenv("APP_ENV") or os.getenv("NODE_ENV") or "development"
IS_PRODUCTION = APP_ENV == "production"

# LLM Settings
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
GEMINI_MODEL_NAME = os.getenv("GEMINI_MODEL_NAME", "gemini-3-flash-preview")

# Paths
if os.getenv("USERS_DB_PATH"):
    USERS_DB_PATH = Path(os.environ["USERS_DB_PATH"])
elif IS_PRODUCTION:
    USERS_DB_PATH = Path(tempfile.gettempdir()) / "users.json"
else:
    USERS_DB_PATH = Path.cwd() / "users.json"

SHELL_DIR = BASE_DIR / ("dist" if IS_PRODUCTION else "web")

# Server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Conversation sessions idle this long are dropped from memory
SESSION_IDLE_TTL_SECONDS = float(os.getenv("SESSION_IDLE_TTL_SECONDS", "3600"))
