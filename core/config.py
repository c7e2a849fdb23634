# ABOUTME: Shared app configuration read from the environment (core package).
# ABOUTME: Server side: Gemini key/model, storage URL, CORS. Client side: Supabase URL/anon key, API URL.

import os

from dotenv import load_dotenv

load_dotenv()

# Server side. GEMINI_API_KEY is checked per request (503 when missing), not at import.
GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY") or None
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")

_DEFAULT_ROADMAPS_DB_URL = "sqlite:///roadmaps.db"
# An explicitly empty value means storage is not configured (500 at request time).
ROADMAPS_DB_URL = os.environ.get("ROADMAPS_DB_URL", _DEFAULT_ROADMAPS_DB_URL).strip()

# CORS: comma-separated origins; "*" for the hosted-function default.
_raw_cors = os.environ.get("CORS_ORIGINS", "*")
CORS_ORIGINS = [o.strip() for o in _raw_cors.split(",") if o.strip()] or ["*"]

# Client side.
SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY", "")
ROADMAP_API_URL = os.environ.get("ROADMAP_API_URL", "http://localhost:8000").rstrip("/")
ROADMAP_API_TIMEOUT_SECONDS = 60
