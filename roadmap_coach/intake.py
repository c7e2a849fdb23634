# ABOUTME: Intake stepper as an explicit state machine: Phase enum, immutable IntakeState, transition functions.
# ABOUTME: ASKING(step 0..3) -> LOADING -> SHOWING_ROADMAP, or LOADING -> FAILED -> (retry) LOADING; reset() starts over.

import logging
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Mapping

from core.schemas import RoadmapSuggestion


@dataclass(frozen=True)
class Question:
    key: str
    text: str
    placeholder: str


QUESTIONS: tuple[Question, ...] = (
    Question(
        "goals",
        "What are your educational or career goals?",
        "e.g., Become a software developer, Start a business...",
    ),
    Question(
        "background",
        "What is your educational background?",
        "e.g., High school, Bachelor's degree...",
    ),
    Question(
        "skills",
        "What skills do you currently have?",
        "e.g., Programming, Marketing, Design...",
    ),
    Question(
        "time",
        "How much time can you dedicate weekly?",
        "e.g., 5 hours, 10 hours...",
    ),
)

ANSWER_KEYS = tuple(q.key for q in QUESTIONS)


class Phase(str, Enum):
    ASKING = "asking"
    LOADING = "loading"
    SHOWING_ROADMAP = "showing_roadmap"
    FAILED = "failed"


@dataclass(frozen=True)
class IntakeState:
    """Snapshot of the stepper. Transitions return a new state and never mutate this one."""

    phase: Phase = Phase.ASKING
    step: int = 0
    answers: Mapping[str, str] = field(default_factory=dict)
    roadmap: RoadmapSuggestion | None = None
    error: str | None = None

    @property
    def question(self) -> Question | None:
        """Question being asked, or None outside ASKING."""
        if self.phase is not Phase.ASKING:
            return None
        return QUESTIONS[self.step]

    @property
    def progress_label(self) -> str:
        return f"Step {self.step + 1} of {len(QUESTIONS)}"


def reset() -> IntakeState:
    """Start over at the first question with no answers."""
    return IntakeState()


def submit_answer(state: IntakeState, text: str) -> IntakeState:
    """Record a non-empty answer and advance; empty/whitespace text or a non-ASKING state is a no-op."""
    if state.phase is not Phase.ASKING:
        return state
    value = (text or "").strip()
    if not value:
        return state
    answers = {**state.answers, QUESTIONS[state.step].key: value}
    if state.step < len(QUESTIONS) - 1:
        return replace(state, step=state.step + 1, answers=answers)
    return replace(state, phase=Phase.LOADING, answers=answers)


def finish_loading(state: IntakeState, roadmap: RoadmapSuggestion) -> IntakeState:
    if state.phase is not Phase.LOADING:
        return state
    return replace(state, phase=Phase.SHOWING_ROADMAP, roadmap=roadmap, error=None)


def fail_loading(state: IntakeState, message: str) -> IntakeState:
    if state.phase is not Phase.LOADING:
        return state
    return replace(state, phase=Phase.FAILED, error=message)


def retry(state: IntakeState) -> IntakeState:
    """FAILED -> LOADING with the same answers."""
    if state.phase is not Phase.FAILED:
        return state
    return replace(state, phase=Phase.LOADING, error=None)


def resolve(
    state: IntakeState, generate: Callable[[Mapping[str, str]], RoadmapSuggestion]
) -> IntakeState:
    """Run generate(answers) for a LOADING state and move to SHOWING_ROADMAP or FAILED."""
    if state.phase is not Phase.LOADING:
        return state
    try:
        roadmap = generate(dict(state.answers))
    except Exception as e:
        logging.exception("Roadmap generation failed")
        return fail_loading(state, str(e) or "Roadmap generation failed.")
    return finish_loading(state, roadmap)
