# ABOUTME: Server-side roadmap generation: fixed instruction template, Gemini call via google-genai, JSON parse + shape check.
# ABOUTME: generate_roadmap_content() returns a validated RoadmapSuggestion or raises UpstreamError; telemetry logged to stdout.

import json
import time

from google import genai
from google.genai import errors, types

from core.config import GEMINI_MODEL
from core.errors import UpstreamError
from core.schemas import RoadmapSuggestion, is_valid_roadmap
from core.telemetry import log_run

ROADMAP_INSTRUCTION = """As an expert in educational planning and career development, create a detailed, personalized learning roadmap.

Input Information:
{prompt}

Requirements:
1. The roadmap should be practical and achievable
2. Include specific, actionable steps
3. Recommend high-quality, relevant resources
4. Consider the user's time commitment and background
5. Focus on progressive skill development

Provide the response in this exact JSON format:
{{
  "title": "A clear, motivating title for the roadmap",
  "description": "A comprehensive overview of the learning path, including expected outcomes",
  "steps": [
    "Detailed step 1 with clear action items",
    "Detailed step 2 with clear action items",
    ...
  ],
  "resources": [
    {{
      "name": "Resource name",
      "type": "Specific type (course/book/tutorial/tool/community)",
      "url": "Direct URL to the resource (if applicable)"
    }}
  ]
}}"""

_SAFETY_CATEGORIES = (
    types.HarmCategory.HARM_CATEGORY_HARASSMENT,
    types.HarmCategory.HARM_CATEGORY_HATE_SPEECH,
    types.HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT,
    types.HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
)

GENERATION_CONFIG = types.GenerateContentConfig(
    temperature=0.7,
    top_k=40,
    top_p=0.95,
    max_output_tokens=1000,
    stop_sequences=["}"],
    safety_settings=[
        types.SafetySetting(
            category=category,
            threshold=types.HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
        )
        for category in _SAFETY_CATEGORIES
    ],
)


def build_instruction(prompt: str) -> str:
    """Embed the caller's prompt in the fixed roadmap instruction."""
    return ROADMAP_INSTRUCTION.format(prompt=prompt)


def _first_candidate_text(response) -> str:
    """Return candidates[0].content.parts[0].text or raise UpstreamError."""
    candidates = getattr(response, "candidates", None) or []
    content = getattr(candidates[0], "content", None) if candidates else None
    parts = getattr(content, "parts", None) or []
    text = getattr(parts[0], "text", None) if parts else None
    if not text:
        raise UpstreamError("Invalid response format from Gemini API")
    return text


def _parse_roadmap(text: str) -> RoadmapSuggestion:
    try:
        content = json.loads(text)
    except json.JSONDecodeError as e:
        raise UpstreamError(f"Failed to parse Gemini response: {e}") from e
    if not is_valid_roadmap(content):
        raise UpstreamError(
            "Failed to parse Gemini response: Generated content does not match expected format"
        )
    return RoadmapSuggestion.model_validate(content)


def generate_roadmap_content(prompt: str, api_key: str) -> RoadmapSuggestion:
    """Call Gemini with the fixed template and sampling/safety config; return the validated roadmap."""
    client = genai.Client(api_key=api_key)

    start = time.perf_counter()
    prompt_tokens = 0
    completion_tokens = 0
    step_count: int | None = None
    resource_count: int | None = None
    success = False
    try:
        try:
            response = client.models.generate_content(
                model=GEMINI_MODEL,
                contents=build_instruction(prompt),
                config=GENERATION_CONFIG,
            )
        except errors.APIError as e:
            raise UpstreamError(f"Gemini API error: {e}") from e

        usage = getattr(response, "usage_metadata", None)
        if usage:
            prompt_tokens = getattr(usage, "prompt_token_count", 0) or 0
            completion_tokens = getattr(usage, "candidates_token_count", 0) or 0

        roadmap = _parse_roadmap(_first_candidate_text(response))
        step_count = len(roadmap.steps)
        resource_count = len(roadmap.resources)
        success = True
        return roadmap
    finally:
        log_run(
            model=GEMINI_MODEL,
            latency_ms=(time.perf_counter() - start) * 1000,
            prompt_chars=len(prompt),
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            step_count=step_count,
            resource_count=resource_count,
            success=success,
        )
