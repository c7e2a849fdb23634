# ABOUTME: Pytest hooks and shared fixtures. Sets server-side env defaults before app/config load.
# ABOUTME: Loads .env first so a real GEMINI_API_KEY wins over the test placeholder.

import os

import pytest
from dotenv import load_dotenv

load_dotenv()

# core.config reads these at import; tests that need them missing patch core.config directly.
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("ROADMAPS_DB_URL", "sqlite:///:memory:")
os.environ.setdefault("ROADMAP_API_URL", "http://roadmap-api.test")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")



@pytest.fixture
def roadmap_payload() -> dict:
    """A RoadmapSuggestion-shaped dict as Gemini or the endpoint would return it."""
    return {
        "title": "Frontend Developer Roadmap",
        "description": "Twelve weeks from HTML basics to a deployed React app.",
        "steps": [
            "Learn semantic HTML and CSS layout",
            "Study modern JavaScript",
            "Build three small React projects",
        ],
        "resources": [
            {"name": "MDN Web Docs", "type": "documentation", "url": "https://developer.mozilla.org"},
            {"name": "Frontend Mentor", "type": "community"},
        ],
    }
