"""Debug info component"""
from datetime import datetime
import streamlit as st

from services import task_handlers


class DebugViewer:
    """Shows the session's debug channel"""

    @staticmethod
    def on_clear() -> None:
        """Empty the debug channel"""
        task_handlers.dispatch("clear_debug", st.session_state.ctx)

    @staticmethod
    def render_history_entry(entry: dict) -> None:
        """Render a single debug history entry"""
        timestamp = datetime.fromisoformat(entry['timestamp']).strftime('%Y-%m-%d %H:%M:%S')
        st.markdown(f'<div class="debug-timestamp">{timestamp}</div>', unsafe_allow_html=True)
        st.code(entry['message'], language=None)

    @staticmethod
    def render_debug() -> None:
        """Render the collapsed Debug Info panel"""
        debug = st.session_state.ctx.debug

        with st.expander("🐞 Debug Info", expanded=False):
            if not debug.current:
                st.info("No debug information yet.")
                return

            st.code(debug.current, language=None)

            history = debug.get_history()
            if len(history) > 1:
                st.markdown("#### History")
                for entry in history[1:]:
                    DebugViewer.render_history_entry(entry)

            st.button("🗑️ Clear Debug Info", key="clear_debug", on_click=DebugViewer.on_clear)
