# ABOUTME: FastAPI app: OPTIONS/POST /generate-roadmap (Gemini roadmap generation with best-effort persistence).
# ABOUTME: 503 missing Gemini key, 400 missing x-user-id or prompt, 500 otherwise; errors as {error, details}.

import json
import logging
import traceback

from fastapi import BackgroundTasks, FastAPI, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from core import config
from core.database import save_roadmap
from core.errors import (
    ConfigurationError,
    InvalidRequestError,
    RoadmapError,
    StorageConfigurationError,
)
from core.schemas import RoadmapSuggestion
from roadmap_coach.generator import generate_roadmap_content

_CORS_ALLOW_HEADERS = "authorization, x-client-info, apikey, content-type, x-user-id"
_CORS_ALLOW_METHODS = "POST, OPTIONS"

app = FastAPI(title="Roadmap Coach API")


def _cors_headers(request: Request) -> dict:
    """CORS headers for this request: "*" when configured, else echo Origin only if it is allowed."""
    headers = {
        "Access-Control-Allow-Headers": _CORS_ALLOW_HEADERS,
        "Access-Control-Allow-Methods": _CORS_ALLOW_METHODS,
    }
    if "*" in config.CORS_ORIGINS:
        headers["Access-Control-Allow-Origin"] = "*"
        return headers
    headers["Vary"] = "Origin"
    origin = request.headers.get("origin")
    if origin and origin in config.CORS_ORIGINS:
        headers["Access-Control-Allow-Origin"] = origin
    return headers


def _error_response(request: Request, error: Exception) -> JSONResponse:
    """Build the {error, details} envelope; status comes from RoadmapError.status_code, else 500."""
    status_code = error.status_code if isinstance(error, RoadmapError) else 500
    message = getattr(error, "message", None) or str(error) or type(error).__name__
    details = "".join(traceback.format_exception(type(error), error, error.__traceback__))
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "details": details},
        headers=_cors_headers(request),
    )


async def _read_prompt(request: Request) -> str:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidRequestError("Valid prompt is required") from e
    prompt = body.get("prompt") if isinstance(body, dict) else None
    if not prompt or not isinstance(prompt, str):
        raise InvalidRequestError("Valid prompt is required")
    return prompt


def _persist_roadmap(user_id: str, prompt: str, roadmap: RoadmapSuggestion) -> None:
    """Best-effort insert; failures are logged and never reach the caller."""
    try:
        save_roadmap(user_id, prompt, roadmap)
    except SQLAlchemyError:
        logging.exception("Error storing roadmap (database error)")
    except Exception:
        logging.exception("Error storing roadmap")


@app.options("/generate-roadmap")
def options_generate_roadmap(request: Request):
    """CORS preflight."""
    return Response(status_code=204, headers=_cors_headers(request))


@app.post("/generate-roadmap", response_model=RoadmapSuggestion)
async def post_generate_roadmap(request: Request, background_tasks: BackgroundTasks):
    """Generate a learning roadmap for the caller's prompt and persist it in the background."""
    try:
        api_key = config.GEMINI_API_KEY
        if not api_key:
            raise ConfigurationError("Gemini API key is not configured")

        user_id = request.headers.get("x-user-id")
        if not user_id:
            raise InvalidRequestError("User ID is required")

        prompt = await _read_prompt(request)

        if not config.ROADMAPS_DB_URL:
            raise StorageConfigurationError("Storage configuration is missing")

        roadmap = await run_in_threadpool(generate_roadmap_content, prompt, api_key)
    except Exception as e:
        logging.exception("generate-roadmap failed")
        return _error_response(request, e)

    background_tasks.add_task(_persist_roadmap, user_id, prompt, roadmap)
    return JSONResponse(
        status_code=200,
        content=roadmap.to_payload(),
        headers=_cors_headers(request),
    )
