"""
Configuration constants and environment setup.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = Path("/tmp") if os.environ.get("VERCEL") else PROJECT_ROOT / "data"
ASSETS_DIR = Path(os.environ.get("ASSETS_DIR", str(PROJECT_ROOT / "assets")))

# =============================================================================
# STORAGE CONFIGURATION
# =============================================================================

EVENTS_BACKEND = os.environ.get("EVENTS_BACKEND", "file").lower()
EVENTS_FILE_PATH = Path(
    os.environ.get("EVENTS_FILE_PATH", str(DATA_DIR / "events.json"))
)

# =============================================================================
# SUPABASE CREDENTIALS (from environment)
# =============================================================================

SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_SERVICE_ROLE_KEY = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")
SUPABASE_EVENTS_TABLE = os.environ.get("SUPABASE_EVENTS_TABLE", "calendar_documents")
SUPABASE_EVENTS_KEY = os.environ.get("SUPABASE_EVENTS_KEY", "events")

# =============================================================================
# EVENT VOCABULARY
# =============================================================================

EVENT_TYPES = {"booking", "reservation"}
DEFAULT_EVENT_TYPE = "booking"
MEAL_TYPES = {"breakfast", "lunch", "dinner"}

# Default menu per meal identifier, in serving order
MEAL_MENUS = {
    "chicken-qorma": [
        "Chicken Qorma",
        "Vegetable pulao",
        "One type of sweet",
        "1 type of salad",
        "Variety of Naan",
        "Riata",
    ],
    "mutton-qorma": [
        "Mutton Qorma",
        "Vegetable pulao",
        "One type of sweet",
        "1 type of salad",
        "Variety of Naan",
        "Riata",
    ],
}

# =============================================================================
# AUTH CONFIGURATION
# =============================================================================

REQUIRE_VERIFIED_EMAIL = os.environ.get("REQUIRE_VERIFIED_EMAIL", "false").lower() == "true"

# =============================================================================
# API CONFIGURATION
# =============================================================================

API_HOST = os.environ.get("API_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("API_PORT", "3000"))
API_DEBUG = os.environ.get("API_DEBUG", "false").lower() == "true"
CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.environ.get("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
API_VERSION = "1.0.0"

# =============================================================================
# CLIENT CONFIGURATION
# =============================================================================

CALENDAR_API_URL = os.environ.get("CALENDAR_API_URL", f"http://localhost:{API_PORT}")
CALENDAR_API_TIMEOUT = float(os.environ.get("CALENDAR_API_TIMEOUT", "30"))
