# ABOUTME: Client-side roadmap call: builds the prompt from intake answers and POSTs it to /generate-roadmap.
# ABOUTME: Any failure is logged and replaced by FALLBACK_ROADMAP; callers never see an exception.

import logging
from typing import Mapping

import requests

from core.config import ROADMAP_API_TIMEOUT_SECONDS, ROADMAP_API_URL, SUPABASE_ANON_KEY
from core.schemas import RoadmapSuggestion, is_valid_roadmap

GENERATE_ROADMAP_PATH = "/generate-roadmap"

FALLBACK_ROADMAP = {
    "title": "Personalized Learning Path",
    "description": "Based on your profile, here's a suggested learning path.",
    "steps": [
        "Research fundamental concepts in your area of interest",
        "Start with beginner-friendly tutorials and courses",
        "Practice with hands-on projects",
        "Join relevant communities and forums",
    ],
    "resources": [
        {
            "name": "Online Learning Platforms",
            "type": "platform",
            "url": "https://www.coursera.org",
        },
        {"name": "Documentation and Tutorials", "type": "documentation"},
        {"name": "Community Forums", "type": "community"},
    ],
}


class RoadmapRequestError(Exception):
    """The generation endpoint answered with a non-2xx status."""


def build_roadmap_prompt(answers: Mapping[str, str]) -> str:
    """Embed the four intake answers verbatim in a natural-language prompt."""
    return (
        "Create a personalized learning roadmap based on the following information:\n"
        f"- Goals: {answers['goals']}\n"
        f"- Background: {answers['background']}\n"
        f"- Current Skills: {answers['skills']}\n"
        f"- Weekly Time Commitment: {answers['time']}\n"
        "\n"
        "Provide specific steps and resources that align with the user's background and time availability.\n"
        "Focus on actionable steps and high-quality learning resources."
    )


def fallback_roadmap() -> RoadmapSuggestion:
    return RoadmapSuggestion.model_validate(FALLBACK_ROADMAP)


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = {}
    error = body.get("error") if isinstance(body, dict) else None
    return error or response.reason or str(response.status_code)


def request_roadmap(
    answers: Mapping[str, str],
    user_id: str = "",
    *,
    api_url: str = ROADMAP_API_URL,
    api_key: str = SUPABASE_ANON_KEY,
) -> RoadmapSuggestion:
    """POST the prompt to the generation endpoint. Raises on any failure."""
    response = requests.post(
        f"{api_url}{GENERATE_ROADMAP_PATH}",
        json={"prompt": build_roadmap_prompt(answers)},
        headers={
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
            "x-user-id": user_id or "",
        },
        timeout=ROADMAP_API_TIMEOUT_SECONDS,
    )
    if not response.ok:
        raise RoadmapRequestError(f"Failed to generate roadmap: {_error_message(response)}")
    data = response.json()
    if not is_valid_roadmap(data):
        raise RoadmapRequestError("Failed to generate roadmap: response does not match expected format")
    return RoadmapSuggestion.model_validate(data)


def generate_roadmap(
    answers: Mapping[str, str],
    user_id: str = "",
    *,
    api_url: str = ROADMAP_API_URL,
    api_key: str = SUPABASE_ANON_KEY,
) -> RoadmapSuggestion:
    """Request a roadmap; on any error log it and return the fallback roadmap instead."""
    try:
        return request_roadmap(answers, user_id, api_url=api_url, api_key=api_key)
    except Exception:
        logging.exception("Error generating roadmap; using fallback")
        return fallback_roadmap()
