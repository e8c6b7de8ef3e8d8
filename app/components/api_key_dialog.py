"""API key configuration dialog"""
import streamlit as st

from services import task_handlers
from services.data_model import NotificationLevel


@st.dialog("API Key Configuration")
def _api_key_dialog() -> None:
    ctx = st.session_state.ctx
    api_key = st.text_input(
        "Enter your OpenAI API key:",
        type="password",
        value=ctx.credential or "",
    )

    save_col, close_col = st.columns(2)
    with save_col:
        if st.button("✔️ Save", key="save_api_key"):
            notification = task_handlers.handle_save_api_key(ctx, api_key)
            if notification.level == NotificationLevel.WARNING:
                st.warning(notification.text)
            else:
                ctx.notify(notification)
                st.rerun()
    with close_col:
        if st.button("✖️ Close", key="close_api_key"):
            st.rerun()


class ApiKeyDialog:
    """Modal for entering the session's OpenAI API key"""

    @staticmethod
    def open() -> None:
        _api_key_dialog()
