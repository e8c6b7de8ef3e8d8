"""Generation inputs and actions component"""
import logging
import streamlit as st

from services import task_handlers
from services.constants import AVAILABLE_MODELS, DEFAULT_ROW_COUNT
from app.components.field_manager import FieldManager

logger = logging.getLogger(__name__)


class GenerationPanel:
    """Manages the generation form and its buttons"""

    @staticmethod
    def render_inputs() -> None:
        st.text_input(
            "Description (optional)",
            key="description",
            placeholder="e.g., Windows event logs",
        )
        st.number_input(
            "Number of Rows",
            key="row_count",
            min_value=1,
            value=DEFAULT_ROW_COUNT,
            step=1,
        )
        st.selectbox("Select Model", options=AVAILABLE_MODELS, key="model")

    @staticmethod
    def handle_generate() -> None:
        """Run one generation; the button stays disabled while it is in flight"""
        ctx = st.session_state.ctx
        if ctx.has_credential():
            st.toast("Preparing to make API request...")

        try:
            with st.spinner("Generating data..."):
                task_handlers.dispatch(
                    "generate_data",
                    ctx,
                    row_count=st.session_state.row_count,
                    description=st.session_state.description,
                    model=st.session_state.model,
                )
        except Exception as e:
            st.error("❌ Error during generation")
            logger.error(f"Error in generation: {str(e)}")
            with st.expander("See error details"):
                st.exception(e)

    @staticmethod
    def render_actions() -> None:
        ctx = st.session_state.ctx
        if st.button("📊 Generate Data", disabled=ctx.in_flight):
            GenerationPanel.handle_generate()
        st.button("🧹 Clear Fields", on_click=FieldManager.on_clear)
