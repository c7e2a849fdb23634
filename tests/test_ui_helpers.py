# ABOUTME: Tests for UI helpers (resource line formatting, profile echo rows).
# ABOUTME: Keeps UI logic testable without running Streamlit.

from core.schemas import Resource
from ui.app import _profile_rows, _resource_markdown


def test_resource_markdown_links_name_when_url_present():
    resource = Resource(name="MDN Web Docs", type="documentation", url="https://developer.mozilla.org")
    line = _resource_markdown(resource)
    assert "[MDN Web Docs](https://developer.mozilla.org)" in line
    assert "`documentation`" in line


def test_resource_markdown_plain_name_without_url():
    line = _resource_markdown(Resource(name="Community Forums", type="community"))
    assert "Community Forums" in line
    assert "](" not in line
    assert "`community`" in line


def test_profile_rows_follow_question_order():
    answers = {
        "time": "5 hours",
        "goals": "Become a developer",
        "skills": "None",
        "background": "High school",
    }
    assert _profile_rows(answers) == [
        ("Goals", "Become a developer"),
        ("Background", "High school"),
        ("Current Skills", "None"),
        ("Time Commitment", "5 hours"),
    ]


def test_profile_rows_missing_answer_is_blank():
    rows = _profile_rows({"goals": "Ship a game"})
    assert rows[0] == ("Goals", "Ship a game")
    assert rows[3] == ("Time Commitment", "")


def test_resource_markdown_escapes_link_syntax_in_name_and_url():
    resource = Resource(
        name="Intro [beta] (free)",
        type="course",
        url="https://example.com/Intro_(beta) notes",
    )
    line = _resource_markdown(resource)
    assert r"[Intro \[beta\] \(free\)](https://example.com/Intro_%28beta%29%20notes)" in line


def test_resource_markdown_does_not_link_non_http_urls():
    line = _resource_markdown(Resource(name="Click me", type="tool", url="javascript:alert(1)"))
    assert "](" not in line
    assert "Click me" in line


def test_resource_markdown_escapes_emphasis_and_backticks():
    line = _resource_markdown(Resource(name="**Bold** `code`", type="book`s"))
    assert r"\*\*Bold\*\* \`code\`" in line
    assert "`book's`" in line
