import sys
import os
# Add the root path so Python can find the 'src' module
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import asyncio
import streamlit as st

from src import config
from src.session import ChatSession, create_chat_session
from src.ui.projection import MedicineCard, MessageBlock, TranscriptView, TypingIndicator
from src.utils.logger import configure_logging, get_logger, set_session_id
from src.utils.ui_text import load_ui_text

UI_TEXT = load_ui_text()
AVATARS = {"user": "user", "bot": "assistant"}

logger = get_logger(__name__)


def get_session() -> ChatSession:
    """Returns the chat session of this browser tab, creating it once."""
    if "chat_session" not in st.session_state:
        settings = config.get_settings()
        configure_logging(level=settings.log_level, use_structured=settings.structured_logs)
        st.session_state.chat_session = create_chat_session(settings)
    session = st.session_state.chat_session
    set_session_id(session.session_id)
    return session


def render_card(card: MedicineCard, session: ChatSession, interactive: bool) -> None:
    labels = UI_TEXT["medicines"]
    with st.container(border=True):
        name_col, toggle_col = st.columns([5, 1])
        name_col.markdown(f"**{card.name}**")
        if interactive:
            toggle_col.button(
                labels["collapse_label"] if card.expanded else labels["expand_label"],
                key=f"toggle-{card.record_id}",
                on_click=session.disclosure.toggle,
                args=(card.record_id,),
            )
        st.write(card.uses)
        st.caption(f"{card.category} • {card.price_label}")

        detail = card.detail
        if detail is None:
            return

        st.divider()
        if detail.image_url:
            st.image(detail.image_url, caption=card.name, width=480)
        st.markdown(f"**{labels['composition']}**")
        st.write(detail.composition)
        st.markdown(f"**{labels['side_effects']}**")
        st.write(detail.side_effects)

        left, right = st.columns(2)
        left.markdown(f"**{labels['manufacturer']}**  \n{detail.manufacturer}")
        right.markdown(f"**{labels['pack_size']}**  \n{detail.pack_size}")
        left.markdown(f"**{labels['category']}**  \n{detail.category}")
        right.markdown(f"**{labels['price']}**  \n{detail.price_label}")

        st.markdown(f"**{labels['reviews']}**")
        for review in detail.reviews:
            shown = "-" if review.value is None else f"{review.value}%"
            st.progress(review.width_percent, text=f":{review.color}[{review.label}] {shown}")


def render_view(view: TranscriptView, session: ChatSession, interactive: bool) -> None:
    """Draws every block of the view; widgets only when `interactive`."""
    for block in view.blocks:
        if isinstance(block, TypingIndicator):
            with st.chat_message("assistant"):
                st.caption(block.text)
            continue

        with st.chat_message(AVATARS[block.role]):
            st.markdown(block.text)
            if isinstance(block, MessageBlock) and block.medicines:
                st.markdown(f"##### {block.medicines_heading}")
                for card in block.medicines:
                    render_card(card, session, interactive)


def main() -> None:
    st.set_page_config(page_title=UI_TEXT["header"]["title"], layout="wide")
    session = get_session()
    view = session.view()

    st.title(view.header.title)
    st.caption(view.header.subtitle)
    st.caption(view.header.description)

    transcript_area = st.empty()
    with transcript_area.container():
        render_view(view, session, interactive=True)

    query = st.chat_input(view.input_placeholder, disabled=not view.input_enabled)
    if not query:
        return

    def rerender(_state) -> None:
        # Widgets were already keyed in this run; re-draw them statically.
        with transcript_area.container():
            render_view(session.view(), session, interactive=False)

    unsubscribe = session.store.subscribe(rerender)
    try:
        outcome = asyncio.run(session.dispatcher.submit(query))
        logger.info("chat_submission_finished", outcome=outcome.value)
    finally:
        unsubscribe()
    st.rerun()


main()
