"""
adaptlearn - Adaptive Fraction Lessons

Streamlit application: a learning-style survey, then four fraction levels
unlocked one after another, with AI hints and narration.

Usage:
    streamlit run app.py
"""

import logging
from concurrent.futures import ThreadPoolExecutor

import streamlit as st

from adaptlearn.classroom import (
    STYLE_OPTIONS,
    HintClient,
    HintPanel,
    LessonSession,
    MemoryStore,
    ProgressStore,
    SessionAction,
    SqliteStore,
    StorageError,
    load_catalog,
    load_learning_style,
    save_learning_style,
)
from adaptlearn.config import load_settings, setup_logging
from adaptlearn.schemas import LearningStyle, LevelAvailability
from adaptlearn.viewer import (
    calculate_level_score,
    describe_progress,
    fraction_readout,
    get_content_css,
    get_quiz_css,
    narration_button_label,
    render_feedback,
    render_level_content,
    render_level_score,
    render_question,
    toggle_narration,
    TranscriptNarrator,
)


logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

st.set_page_config(
    page_title="adaptlearn",
    page_icon="🧮",
    layout="wide",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

@st.cache_resource
def get_hint_executor() -> ThreadPoolExecutor:
    """One hint worker pool for the whole server, shared by every session."""
    return ThreadPoolExecutor(max_workers=4, thread_name_prefix="hint")


def init_session_state():
    """Initialize session state variables."""
    if "settings" not in st.session_state:
        settings = load_settings()
        setup_logging(settings.log_level)
        st.session_state.settings = settings

    settings = st.session_state.settings

    if "storage" not in st.session_state:
        try:
            st.session_state.storage = SqliteStore(settings.storage_path)
        except StorageError as e:
            logger.warning(f"Falling back to in-memory storage: {e}")
            st.session_state.storage = MemoryStore()

    if "catalog" not in st.session_state:
        st.session_state.catalog = load_catalog()

    if "progress" not in st.session_state:
        store = ProgressStore(st.session_state.catalog, st.session_state.storage)
        store.load()
        st.session_state.progress = store

    if "style" not in st.session_state:
        st.session_state.style = load_learning_style(st.session_state.storage)

    if "lesson" not in st.session_state:
        st.session_state.lesson = None  # active LessonSession

    if "hints" not in st.session_state:
        client = HintClient(
            settings.api_base_url,
            token=settings.auth_token,
            timeout=settings.hint_timeout,
        )
        st.session_state.hints = HintPanel(client, executor=get_hint_executor())

    if "narrator" not in st.session_state:
        st.session_state.narrator = TranscriptNarrator()


# -----------------------------------------------------------------------------
# Style Survey
# -----------------------------------------------------------------------------

def render_style_survey():
    """Ask how the learner prefers to learn."""
    st.header("Your learning style")
    st.caption("Choose the option that best fits how you prefer to learn.")

    labels = [f"{opt.label} - {opt.helper}" for opt in STYLE_OPTIONS]
    choice = st.radio("Learning style", labels, index=None, label_visibility="collapsed")

    if st.button("Save and continue", type="primary", disabled=choice is None):
        option = STYLE_OPTIONS[labels.index(choice)]
        if save_learning_style(st.session_state.storage, option.value):
            st.toast("Learning style saved. Your lessons will adapt automatically.")
        st.session_state.style = option.value
        st.rerun()


def render_style_badge():
    style = st.session_state.style
    st.info(f"**Your learning style:** {style.value.capitalize()}. "
            f"Content is tailored to your {style.value} learning preferences.")


# -----------------------------------------------------------------------------
# Sidebar
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with overall progress."""
    st.sidebar.title("🧮 adaptlearn")

    progress = st.session_state.progress
    stats = progress.completion_stats()
    st.sidebar.markdown(
        f"**Progress:** {stats['completed']}/{stats['total_levels']} levels "
        f"({stats['completion_percent']}%)"
    )
    st.sidebar.progress(stats["completion_percent"] / 100)

    if not progress.persistent:
        st.sidebar.warning("Progress could not be saved; it will be lost when you close the app.")

    if st.session_state.style and st.sidebar.button("Change learning style"):
        st.session_state.style = None
        st.rerun()


# -----------------------------------------------------------------------------
# Level Selection
# -----------------------------------------------------------------------------

def render_level_grid():
    """Render all levels with lock/complete status."""
    st.header("Learning Levels")
    st.caption("Complete levels to unlock new challenges")

    progress = st.session_state.progress
    columns = st.columns(2)

    for i, level in enumerate(st.session_state.catalog):
        availability = progress.availability(level.id)
        record = progress.progress_for(level.id)

        with columns[i % 2].container(border=True):
            icon = {"completed": "✓", "available": "▶", "locked": "🔒"}[availability.value]
            st.subheader(f"{icon} {level.title}")
            st.caption(f"Level {level.difficulty} · {level.description}")

            if record:
                for line in describe_progress(record, level.question_count):
                    st.markdown(line)

            unlocked = progress.is_unlocked(level.id)
            if not unlocked:
                label = "Locked"
            elif availability == LevelAvailability.COMPLETED:
                label = "Replay Level"
            else:
                label = "Start Level"

            if st.button(
                label,
                key=f"level_{level.id}",
                disabled=not unlocked,
                use_container_width=True,
            ):
                start_level(level.id)


def start_level(level_id: int):
    """Begin a fresh session on a level."""
    if not st.session_state.progress.is_unlocked(level_id):
        logger.warning(f"Refusing to start locked level {level_id}")
        return
    level = st.session_state.catalog.get(level_id)
    st.session_state.lesson = LessonSession(level, on_complete=on_level_complete)
    st.session_state.hints.clear()
    st.session_state.narrator.cancel()
    st.rerun()


def on_level_complete(level_id: int, score: int, attempts: int):
    st.session_state.progress.record_completion(level_id, score, attempts)


# -----------------------------------------------------------------------------
# Lesson View
# -----------------------------------------------------------------------------

def render_lesson_view():
    """Render the active lesson session."""
    session = st.session_state.lesson

    if st.button("← Back to Levels"):
        st.session_state.lesson = None
        st.rerun()

    render_style_badge()

    if session.is_completed:
        render_completion(session)
        return

    level = session.level
    st.header(level.title)

    st.markdown(get_content_css(), unsafe_allow_html=True)
    st.markdown(render_level_content(level, st.session_state.style), unsafe_allow_html=True)
    render_style_extras(level)

    st.markdown(get_quiz_css(), unsafe_allow_html=True)
    st.markdown(render_question(session), unsafe_allow_html=True)

    question = session.current_question
    actions = session.available_actions()
    columns = st.columns(2)
    for i, option in enumerate(question.options):
        marker = "● " if session.selected == i else ""
        if columns[i % 2].button(
            f"{marker}{option}",
            key=f"opt_{level.id}_{session.question_index}_{i}",
            disabled=SessionAction.SELECT not in actions,
            use_container_width=True,
        ):
            session.select_option(i)
            st.rerun()

    st.markdown(render_feedback(session), unsafe_allow_html=True)

    col1, col2 = st.columns([3, 1])
    with col1:
        if SessionAction.ADVANCE in actions:
            label = "Complete Level" if session.is_last_question else "Next Question"
            if st.button(label, type="primary"):
                session.advance()
                st.session_state.hints.clear()
                st.rerun()
        elif SessionAction.RETRY in actions:
            if st.button("Try Again"):
                session.retry()
                st.rerun()
        else:
            if st.button("Submit Answer", type="primary", disabled=SessionAction.SUBMIT not in actions):
                session.submit()
                st.rerun()

        if st.button("End level now"):
            session.finish()
            st.rerun()

    with col2:
        render_hint_panel(question.prompt)


def render_style_extras(level):
    """Interactive bits that only apply to some styles."""
    style = st.session_state.style
    narrator = st.session_state.narrator

    if style == LearningStyle.AUDITORY:
        if st.button(narration_button_label(narrator), key=f"narrate_{level.id}"):
            message = toggle_narration(narrator, level.narration)
            if message:
                st.error(message)
            else:
                st.rerun()
        if narrator.is_speaking() and narrator.transcript:
            st.markdown(f"> {narrator.transcript}")

    elif style == LearningStyle.KINESTHETIC and level.id == 1:
        denominator = st.slider("Denominator", 1, 12, 4, key="kin_den")
        numerator = st.slider("Numerator", 0, denominator, min(1, denominator), key="kin_num")
        st.code(fraction_readout(numerator, denominator))


def render_hint_panel(prompt: str):
    hints = st.session_state.hints

    if st.button("🤖 AI Hint", disabled=hints.loading):
        hints.request(prompt)
        st.rerun()

    if hints.loading:
        render_pending_hint()
        return

    parsed = hints.parsed
    if parsed:
        with st.container(border=True):
            st.markdown("**Hint**")
            st.write(parsed.hint)
            if parsed.next:
                st.markdown("**Next step**")
                st.write(parsed.next)
            if st.button("Dismiss hint"):
                hints.clear()
                st.rerun()


@st.fragment(run_every=1)
def render_pending_hint():
    """Poll the hint panel; only this fragment reruns until the reply lands."""
    if st.session_state.hints.loading:
        st.caption("Thinking...")
    else:
        st.rerun()


def render_completion(session: LessonSession):
    outcome = session.outcome
    record = st.session_state.progress.progress_for(outcome.level_id)

    if record and record.completed:
        st.header("Level Complete!")
        st.balloons()
        next_id = st.session_state.progress.next_level_id(outcome.level_id)
        if next_id:
            st.success(f"Level {next_id} is now unlocked.")
    else:
        st.header("Level Finished")
        st.warning(f"You need {session.level.required_score} correct answers to complete this level.")

    info = calculate_level_score(outcome.score, session.level.question_count, outcome.attempts)
    st.markdown(get_quiz_css(), unsafe_allow_html=True)
    st.markdown(render_level_score(info), unsafe_allow_html=True)


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()

    if not st.session_state.style:
        render_style_survey()
        return

    if st.session_state.lesson is not None:
        render_lesson_view()
    else:
        render_style_badge()
        render_level_grid()


if __name__ == "__main__":
    main()
