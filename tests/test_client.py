# ABOUTME: Tests for the client-side roadmap call: prompt building, request headers, and silent fallback.
# ABOUTME: requests.post is mocked; includes the intake -> client -> fallback end-to-end walk.

from unittest.mock import MagicMock, patch

import requests

from core.schemas import RoadmapSuggestion
from roadmap_coach.client import (
    FALLBACK_ROADMAP,
    build_roadmap_prompt,
    generate_roadmap,
)
from roadmap_coach.intake import Phase, reset, resolve, submit_answer

ANSWERS = {
    "goals": "Become a developer",
    "background": "High school",
    "skills": "None",
    "time": "5 hours",
}


def _http_response(status_code: int, body=None, reason: str = "") -> MagicMock:
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.reason = reason
    if isinstance(body, Exception):
        response.json.side_effect = body
    else:
        response.json.return_value = body
    return response


def test_build_roadmap_prompt_contains_all_answers_verbatim():
    prompt = build_roadmap_prompt(ANSWERS)
    for value in ANSWERS.values():
        assert value in prompt
    assert "- Goals: Become a developer" in prompt
    assert "- Weekly Time Commitment: 5 hours" in prompt


def test_build_roadmap_prompt_does_not_escape_delimiters():
    """Answers with braces, quotes and newlines are embedded as-is and do not break formatting."""
    answers = {**ANSWERS, "goals": 'Learn {rust} "fast"\n- Background: injected', "skills": "%s {0}"}
    prompt = build_roadmap_prompt(answers)
    assert 'Learn {rust} "fast"\n- Background: injected' in prompt
    assert "%s {0}" in prompt
    assert "- Background: High school" in prompt


@patch("roadmap_coach.client.requests.post")
def test_generate_roadmap_sends_prompt_and_headers(mock_post, roadmap_payload):
    mock_post.return_value = _http_response(200, roadmap_payload)

    result = generate_roadmap(ANSWERS, "user-42", api_url="http://api.test", api_key="anon-key")

    mock_post.assert_called_once()
    args, kwargs = mock_post.call_args
    assert args[0] == "http://api.test/generate-roadmap"
    assert kwargs["json"] == {"prompt": build_roadmap_prompt(ANSWERS)}
    assert kwargs["headers"]["Authorization"] == "Bearer anon-key"
    assert kwargs["headers"]["x-user-id"] == "user-42"
    assert kwargs["headers"]["Content-Type"] == "application/json"
    assert isinstance(result, RoadmapSuggestion)
    assert result.title == "Frontend Developer Roadmap"


@patch("roadmap_coach.client.requests.post")
def test_generate_roadmap_sends_empty_user_id_when_signed_out(mock_post, roadmap_payload):
    mock_post.return_value = _http_response(200, roadmap_payload)

    generate_roadmap(ANSWERS)

    assert mock_post.call_args.kwargs["headers"]["x-user-id"] == ""


@patch("roadmap_coach.client.requests.post")
def test_generate_roadmap_falls_back_on_error_status(mock_post):
    mock_post.return_value = _http_response(
        500, {"error": "Failed to parse Gemini response"}, reason="Internal Server Error"
    )

    result = generate_roadmap(ANSWERS, "user-42")

    assert result.title == "Personalized Learning Path"
    assert len(result.steps) == 4


@patch("roadmap_coach.client.requests.post")
def test_generate_roadmap_falls_back_on_error_status_without_json(mock_post):
    mock_post.return_value = _http_response(
        503, ValueError("no json"), reason="Service Unavailable"
    )

    result = generate_roadmap(ANSWERS, "user-42")

    assert result.model_dump(exclude_none=True) == FALLBACK_ROADMAP


@patch("roadmap_coach.client.requests.post")
def test_generate_roadmap_falls_back_on_network_error(mock_post):
    mock_post.side_effect = requests.ConnectionError("connection refused")

    result = generate_roadmap(ANSWERS, "user-42")

    assert result.title == "Personalized Learning Path"
    assert result.resources[0].url == "https://www.coursera.org"
    assert result.resources[1].url is None


@patch("roadmap_coach.client.requests.post")
def test_generate_roadmap_falls_back_on_malformed_success_body(mock_post, roadmap_payload):
    del roadmap_payload["title"]
    mock_post.return_value = _http_response(200, roadmap_payload)

    result = generate_roadmap(ANSWERS, "user-42")

    assert result.title == "Personalized Learning Path"


@patch("roadmap_coach.client.requests.post")
def test_fallback_is_a_fresh_copy(mock_post):
    mock_post.side_effect = requests.Timeout("timed out")

    first = generate_roadmap(ANSWERS)
    first.steps.append("mutated")
    second = generate_roadmap(ANSWERS)

    assert len(second.steps) == 4


@patch("roadmap_coach.client.requests.post")
def test_intake_to_fallback_end_to_end(mock_post):
    """Four answers submitted in order reach the client verbatim; an upstream failure yields the fallback."""
    mock_post.return_value = _http_response(500, {"error": "Gemini API error"})

    state = reset()
    for key in ("goals", "background", "skills", "time"):
        state = submit_answer(state, ANSWERS[key])
    assert state.phase is Phase.LOADING

    state = resolve(state, lambda answers: generate_roadmap(answers, "user-42"))

    sent_prompt = mock_post.call_args.kwargs["json"]["prompt"]
    for value in ANSWERS.values():
        assert value in sent_prompt
    assert state.phase is Phase.SHOWING_ROADMAP
    assert state.roadmap.title == "Personalized Learning Path"
    assert len(state.roadmap.steps) == 4
