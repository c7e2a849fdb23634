# ABOUTME: Streamlit UI: auth screen, four-question intake stepper, loading, roadmap view, and failure + retry.
# ABOUTME: Auth via Supabase (AuthStore in session_state); roadmap via roadmap_coach.client.generate_roadmap.

import re
from urllib.parse import quote, urlsplit

import streamlit as st

from core.auth import AuthProviderError, AuthStore, SupabaseAuthProvider
from core.schemas import Resource, RoadmapSuggestion
from roadmap_coach.client import generate_roadmap
from roadmap_coach.intake import (
    QUESTIONS,
    IntakeState,
    Phase,
    reset,
    resolve,
    retry,
    submit_answer,
)
from ui.auth_form import RESEND_SUCCESS_MESSAGE, AuthForm

SESSION_AUTH_STORE = "auth_store"
SESSION_AUTH_FORM = "auth_form_state"
SESSION_INTAKE = "intake_state"
ANSWER_INPUT_KEY = "intake_answer"

PROFILE_LABELS = {
    "goals": "Goals",
    "background": "Background",
    "skills": "Current Skills",
    "time": "Time Commitment",
}


_MARKDOWN_SPECIALS = re.compile(r"([\\`*_\[\]()~#<>|])")
_URL_SAFE = ":/?#&=%+@,;~!$'*"


def _escape_markdown(text: str) -> str:
    return _MARKDOWN_SPECIALS.sub(r"\\\1", text)


def _link_target(url: str) -> str | None:
    """Percent-encoded http(s) url usable inside (...), or None for anything else."""
    if urlsplit(url.strip()).scheme.lower() not in ("http", "https"):
        return None
    return quote(url.strip(), safe=_URL_SAFE)


def _resource_markdown(resource: Resource) -> str:
    """Resource as a markdown line: linked name when an http(s) url exists, then its type."""
    name = _escape_markdown(resource.name)
    target = _link_target(resource.url) if resource.url else None
    if target:
        name = f"[{name}]({target})"
    kind = resource.type.replace("`", "'")
    return f"**{name}** · `{kind}`"


def _profile_rows(answers: dict) -> list[tuple[str, str]]:
    """(label, answer) pairs in question order for the profile echo."""
    return [(PROFILE_LABELS[q.key], answers.get(q.key, "")) for q in QUESTIONS]


def _auth_store() -> AuthStore:
    """One AuthStore per browser session; started on first use."""
    store = st.session_state.get(SESSION_AUTH_STORE)
    if store is None:
        store = AuthStore(SupabaseAuthProvider())
        store.start()
        st.session_state[SESSION_AUTH_STORE] = store
    return store


def _intake_state() -> IntakeState:
    if SESSION_INTAKE not in st.session_state:
        st.session_state[SESSION_INTAKE] = reset()
    return st.session_state[SESSION_INTAKE]


def _set_intake_state(state: IntakeState) -> None:
    st.session_state[SESSION_INTAKE] = state


def _render_auth(store: AuthStore):
    form: AuthForm = st.session_state.setdefault(SESSION_AUTH_FORM, AuthForm())
    provider = store.provider

    st.title(form.title)
    if form.error:
        st.error(form.error)
    if form.info:
        st.info(form.info)
    if form.resend_success:
        st.success(RESEND_SUCCESS_MESSAGE)

    with st.form("auth_form"):
        email = st.text_input("Email", key="auth_email")
        password = st.text_input("Password", type="password", key="auth_password")
        if st.form_submit_button(form.submit_label):
            if not (email and email.strip() and password):
                st.error("Enter email and password.")
            else:
                form.submit(provider, email.strip(), password)
                st.rerun()

    if form.show_resend and st.button("Resend Confirmation Email", key="resend_btn"):
        form.resend(provider, (st.session_state.get("auth_email") or "").strip())
        st.rerun()

    if st.button(form.switch_label, key="switch_mode_btn"):
        form.switch_mode()
        st.rerun()


def _render_sign_out(store: AuthStore):
    if st.sidebar.button("Sign Out"):
        try:
            store.provider.sign_out()
        except AuthProviderError as e:
            st.sidebar.error(e.message)
            return
        _set_intake_state(reset())
        st.rerun()


def _on_answer_submitted():
    state = _intake_state()
    _set_intake_state(submit_answer(state, st.session_state.get(ANSWER_INPUT_KEY, "")))
    st.session_state[ANSWER_INPUT_KEY] = ""


def _render_question(state: IntakeState):
    st.title("Your Educational Journey Starts Here")
    st.write("Let's create your personalized learning roadmap together")

    question = state.question
    with st.container(border=True):
        st.subheader(question.text)
        st.text_input(
            question.text,
            placeholder=question.placeholder,
            key=ANSWER_INPUT_KEY,
            on_change=_on_answer_submitted,
            label_visibility="collapsed",
        )
        st.caption("Press Enter to continue")
        st.progress((state.step + 1) / len(QUESTIONS))
        st.caption(state.progress_label)


def _render_loading(state: IntakeState, store: AuthStore):
    with st.spinner("Generating your personalized roadmap..."):
        next_state = resolve(
            state, lambda answers: generate_roadmap(answers, store.user_id)
        )
    _set_intake_state(next_state)
    st.rerun()


def _render_failed(state: IntakeState):
    st.error(f"Could not generate your roadmap: {state.error}")
    col_retry, col_new = st.columns(2)
    with col_retry:
        if st.button("Retry", key="retry_btn"):
            _set_intake_state(retry(state))
            st.rerun()
    with col_new:
        if st.button("New Roadmap", key="new_roadmap_failed_btn"):
            _set_intake_state(reset())
            st.rerun()


def _render_roadmap(state: IntakeState):
    roadmap: RoadmapSuggestion = state.roadmap
    if st.button("New Roadmap", key="new_roadmap_btn"):
        _set_intake_state(reset())
        st.rerun()

    st.title(roadmap.title)

    with st.container(border=True):
        st.subheader("Your Profile")
        rows = _profile_rows(dict(state.answers))
        cols = st.columns(2)
        for i, (label, answer) in enumerate(rows):
            with cols[i % 2]:
                st.caption(f"**{label}**")
                st.write(answer)

    with st.container(border=True):
        st.subheader("Learning Path")
        st.write(roadmap.description)
        for i, step in enumerate(roadmap.steps, start=1):
            st.markdown(f"{i}. {step}")

    st.subheader("Recommended Resources")
    cols = st.columns(2)
    for i, resource in enumerate(roadmap.resources):
        with cols[i % 2]:
            with st.container(border=True):
                st.markdown(_resource_markdown(resource))


def main():
    store = _auth_store()
    if store.user is None:
        _render_auth(store)
        return

    _render_sign_out(store)
    state = _intake_state()
    if state.phase is Phase.ASKING:
        _render_question(state)
    elif state.phase is Phase.LOADING:
        _render_loading(state, store)
    elif state.phase is Phase.FAILED:
        _render_failed(state)
    else:
        _render_roadmap(state)


if __name__ == "__main__":
    main()
