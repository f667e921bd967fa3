"""
Console entry point for the medicine chat.
Same conversation core as the Streamlit page, rendered as text.
"""

import asyncio
from src import config
from src.session import ChatSession, create_chat_session
from src.ui.console import render_text
from src.utils.logger import configure_logging, get_logger, set_session_id

logger = get_logger(__name__)

EXIT_COMMANDS = {"exit", "quit"}
TOGGLE_COMMAND = "/toggle"


def handle_toggle(session: ChatSession, argument: str) -> str | None:
    """
    Toggles the N-th card of the current view.

    Returns:
        Error text for the user, or None on success
    """
    cards = session.view().cards()
    try:
        number = int(argument)
    except ValueError:
        return f"Usage: {TOGGLE_COMMAND} <card number>"
    if not 1 <= number <= len(cards):
        return f"No medicine card #{number}."
    session.disclosure.toggle(cards[number - 1].record_id)
    return None


async def run_console_chat(session: ChatSession | None = None):
    """Async main loop for console chat interaction."""
    settings = config.get_settings()
    configure_logging(level=settings.log_level, use_structured=settings.structured_logs)

    session = session or create_chat_session(settings)
    set_session_id(session.session_id)
    logger.info("console_mode_started")

    def show_typing(state) -> None:
        if state.pending:
            print("\n--- Thinking... ---")

    session.store.subscribe(show_typing)

    print("\n" + "=" * 60)
    header = session.view().header
    print(f"{header.title} - Type 'exit' or 'quit' to stop")
    print(header.description)
    print(f"Use '{TOGGLE_COMMAND} N' to expand or collapse medicine card N")
    print("=" * 60 + "\n")

    while True:
        try:
            line = input("\nYour question: ")
        except (KeyboardInterrupt, EOFError):
            logger.info("conversation_interrupted_by_user")
            break

        if line.strip().lower() in EXIT_COMMANDS:
            break

        if line.strip().startswith(TOGGLE_COMMAND):
            error = handle_toggle(session, line.strip()[len(TOGGLE_COMMAND):].strip())
            if error:
                print(error)
                continue
        else:
            await session.dispatcher.submit(line)

        print("\n" + render_text(session.view()))

    logger.info("conversation_ended")
    print("\nGoodbye! Take care.")


if __name__ == "__main__":
    asyncio.run(run_console_chat())
