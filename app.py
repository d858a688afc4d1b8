"""
KanaDrill - Hiragana Drill Trainer

Streamlit application for drilling hiragana readings by category, custom
selection, or previously missed characters.

Usage:
    streamlit run app.py
"""

import logging
import random
import time

import streamlit as st

from kanadrill.drill import (
    CustomSetBuilder,
    EmptySelection,
    Feedback,
    Completed,
    Idle,
    ManualScheduler,
    NullScheduler,
    Presenting,
    QuizEngine,
    SetSelector,
    WrongAnswerTracker,
    default_catalog,
    load_catalog,
)
from kanadrill.schemas import AllCategories, Category, OneCategory, WrongOnly
from kanadrill.utils import load_settings
from kanadrill.viewer import (
    calculate_quiz_score,
    filter_entries,
    get_quiz_css,
    render_feedback,
    render_question,
    render_quiz_score,
    render_results,
    render_vocabulary_table,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

SETTINGS = load_settings()

logging.basicConfig(
    level=SETTINGS.log_level,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="KanaDrill",
    page_icon="あ",
    layout="centered",
)

MODE_LABELS = {
    "all": "All characters",
    Category.BASE.value: Category.BASE.label,
    Category.DIGRAPH.value: Category.DIGRAPH.label,
    Category.VOICED.value: Category.VOICED.label,
    Category.SEMI_VOICED.value: Category.SEMI_VOICED.label,
}


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "catalog" not in st.session_state:
        if SETTINGS.catalog_path:
            st.session_state.catalog = load_catalog(SETTINGS.catalog_path)
        else:
            st.session_state.catalog = default_catalog()

    if "tracker" not in st.session_state:
        st.session_state.tracker = WrongAnswerTracker()

    if "builder" not in st.session_state:
        st.session_state.builder = CustomSetBuilder()

    if "engine" not in st.session_state:
        scheduler = ManualScheduler()
        selector = SetSelector(
            st.session_state.catalog,
            st.session_state.tracker,
            st.session_state.builder,
            rng=random.Random(SETTINGS.seed),
        )
        st.session_state.scheduler = scheduler
        st.session_state.engine = QuizEngine(
            st.session_state.tracker,
            selector=selector,
            # a zero dwell means "Next" only
            scheduler=scheduler if SETTINGS.dwell_seconds > 0 else NullScheduler(),
            dwell_seconds=SETTINGS.dwell_seconds,
            evict_on_correct=SETTINGS.evict_on_correct,
        )

    if "view_mode" not in st.session_state:
        st.session_state.view_mode = "menu"  # menu, custom, quiz, results, read

    if "last_record" not in st.session_state:
        st.session_state.last_record = None

    if "results" not in st.session_state:
        st.session_state.results = ()


def go(view_mode: str):
    st.session_state.view_mode = view_mode
    st.rerun()


def start_session(request):
    """Start a quiz session, or warn when the selection is empty."""
    engine = st.session_state.engine
    try:
        engine.start_request(request)
    except EmptySelection as e:
        logger.info("Not starting session: %s", e)
        st.warning("Nothing to practice here yet. Pick some characters first.")
        return
    st.session_state.last_record = None
    go("quiz")


def abandon_custom_selection():
    """Drop the staged custom set and its checkbox state."""
    st.session_state.builder.clear()
    for entry in st.session_state.catalog.all():
        st.session_state.pop(f"pick_{entry.symbol}", None)


def leave_current_view():
    """Abort any session and discard custom staging before navigating away."""
    st.session_state.engine.abort()
    if st.session_state.view_mode == "custom":
        abandon_custom_selection()


# -----------------------------------------------------------------------------
# Sidebar
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render navigation and the mistake counter."""
    st.sidebar.title("あ KanaDrill")
    tracker = st.session_state.tracker
    st.sidebar.markdown(f"**Mistakes to review:** {len(tracker)}")

    if st.sidebar.button("Back to Menu", key="nav_menu", use_container_width=True):
        leave_current_view()
        go("menu")
    if st.sidebar.button("Read Mode", key="nav_read", use_container_width=True):
        leave_current_view()
        go("read")
    if st.sidebar.button("Clear mistakes", use_container_width=True, disabled=not tracker):
        tracker.clear()
        st.rerun()


# -----------------------------------------------------------------------------
# Views
# -----------------------------------------------------------------------------

def render_menu_view():
    """Mode selection."""
    st.header("Choose what to practice")

    mode = st.radio(
        "Practice set",
        list(MODE_LABELS.keys()),
        format_func=lambda k: MODE_LABELS[k],
    )

    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("Start", key="start", type="primary", use_container_width=True):
            request = AllCategories() if mode == "all" else OneCategory(category=Category(mode))
            start_session(request)
    with col2:
        if st.button("Custom set", key="open_custom", use_container_width=True):
            go("custom")
    with col3:
        if st.button("Quiz Wrong Only", use_container_width=True):
            start_session(WrongOnly())


def sync_checkboxes(entries, builder):
    """Align staging checkboxes with the builder after a bulk change."""
    for entry in entries:
        st.session_state[f"pick_{entry.symbol}"] = entry.symbol in builder


def render_custom_view():
    """Custom set staging grid."""
    catalog = st.session_state.catalog
    builder = st.session_state.builder
    selector = st.session_state.engine.selector

    st.header("Build a custom set")
    st.caption(f"{len(builder)} selected")

    for category in catalog.categories:
        entries = catalog.entries_for(category)
        with st.expander(category.label, expanded=category == Category.BASE):
            col_all, col_none = st.columns(2)
            if col_all.button("Select all", key=f"all_{category.value}"):
                builder.select_category(entries)
                sync_checkboxes(entries, builder)
                st.rerun()
            if col_none.button("Select none", key=f"none_{category.value}"):
                builder.deselect_category(entries)
                sync_checkboxes(entries, builder)
                st.rerun()

            columns = st.columns(5)
            for i, entry in enumerate(entries):
                key = f"pick_{entry.symbol}"
                if key not in st.session_state:
                    st.session_state[key] = entry.symbol in builder
                checked = columns[i % 5].checkbox(entry.symbol, key=key)
                if checked != (entry.symbol in builder):
                    builder.toggle(entry.symbol)

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Start custom quiz", type="primary", use_container_width=True):
            start_session(selector.request_from_builder())
    with col2:
        if st.button("Cancel", use_container_width=True):
            abandon_custom_selection()
            go("menu")


def render_quit_button(engine):
    """Abort mid-session and show what was answered so far."""
    if st.button("Quit", key="quit", use_container_width=True):
        st.session_state.results = engine.abort()
        go("results")


def render_quiz_view():
    """Question and feedback loop."""
    engine = st.session_state.engine
    scheduler = st.session_state.scheduler

    # a dwell timer may have come due since the last rerun
    scheduler.run_due()

    state = engine.state
    if isinstance(state, Completed):
        st.session_state.results = engine.ledger
        go("results")
    if isinstance(state, Idle):
        go("menu")

    st.markdown(get_quiz_css(), unsafe_allow_html=True)
    answered, total = engine.progress
    correct, asked = engine.score()
    st.progress(answered / total)
    st.caption(f"Score: {correct}/{asked}")

    st.markdown(render_question(engine.current_question(), state.index, total), unsafe_allow_html=True)

    if isinstance(state, Presenting):
        with st.form(key=f"answer_{state.index}", clear_on_submit=True):
            answer = st.text_input("Romaji", placeholder="Type the reading")
            submitted = st.form_submit_button("Check")
        if submitted:
            st.session_state.last_record = engine.submit(answer)
            st.rerun()
        render_quit_button(engine)

    elif isinstance(state, Feedback):
        st.markdown(render_feedback(st.session_state.last_record), unsafe_allow_html=True)
        col_next, col_quit = st.columns(2)
        with col_next:
            if st.button("Next", type="primary", use_container_width=True):
                engine.advance()
                st.rerun()
        with col_quit:
            render_quit_button(engine)
        if SETTINGS.dwell_seconds > 0:
            time.sleep(SETTINGS.dwell_seconds)
            scheduler.run_due()
            st.rerun()


def render_results_view():
    """End-of-session summary."""
    records = st.session_state.results
    st.markdown(get_quiz_css(), unsafe_allow_html=True)
    st.header("Results")

    correct = sum(1 for r in records if r.correct)
    st.markdown(render_quiz_score(calculate_quiz_score(correct, len(records))), unsafe_allow_html=True)
    st.markdown(render_results(records), unsafe_allow_html=True)

    has_wrong = any(not r.correct for r in records)
    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("Review All", use_container_width=True):
            go("read")
    with col2:
        if has_wrong and st.button("Quiz Wrong Only", type="primary", use_container_width=True):
            start_session(WrongOnly())
    with col3:
        if st.button("Change Mode", use_container_width=True):
            go("menu")


def render_read_view():
    """Read mode: searchable vocabulary table."""
    catalog = st.session_state.catalog
    tracker = st.session_state.tracker
    st.header("Read Mode")

    col1, col2 = st.columns(2)
    with col1:
        query = st.text_input("Search", placeholder="Kana or romaji")
    with col2:
        category_key = st.selectbox(
            "Category",
            ["all"] + [c.value for c in catalog.categories],
            format_func=lambda k: MODE_LABELS[k],
        )
    mistakes_only = st.checkbox("Only my mistakes", disabled=not tracker)

    missed = tracker.snapshot()
    entries = filter_entries(
        list(catalog.all()),
        query,
        category=None if category_key == "all" else Category(category_key),
        mistakes=missed if mistakes_only else None,
    )
    st.markdown(f"Showing {len(entries)} characters")
    st.markdown(render_vocabulary_table(entries, missed=missed), unsafe_allow_html=True)


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()

    view_mode = st.session_state.view_mode
    if view_mode == "menu":
        render_menu_view()
    elif view_mode == "custom":
        render_custom_view()
    elif view_mode == "quiz":
        render_quiz_view()
    elif view_mode == "results":
        render_results_view()
    elif view_mode == "read":
        render_read_view()


if __name__ == "__main__":
    main()
