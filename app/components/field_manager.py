"""Field selection component"""
import html
import streamlit as st

from services import task_handlers
from services.constants import SUPPORTED_UPLOAD_EXTENSIONS


class FieldManager:
    """Manages the field picker, file upload and the fields banner"""

    @staticmethod
    def on_fields_change() -> None:
        """Sync the registry with the picker after the user edits it"""
        task_handlers.dispatch(
            "change_fields",
            st.session_state.ctx,
            names=st.session_state.get("input_field", []),
        )

    @staticmethod
    def on_clear() -> None:
        """Reset the selection"""
        ctx = st.session_state.ctx
        task_handlers.dispatch("clear_fields", ctx)
        st.session_state.input_field = ctx.registry.names

    @staticmethod
    def on_upload() -> None:
        """Replace the selection with the columns of the uploaded file"""
        uploaded = st.session_state.get("data_file")
        if uploaded is None:
            return

        ctx = st.session_state.ctx
        task_handlers.dispatch(
            "upload_file",
            ctx,
            file_name=uploaded.name,
            data=uploaded.getvalue(),
        )
        st.session_state.input_field = ctx.registry.names

    @staticmethod
    def render_field_picker() -> None:
        """Render the multi-select; typing a new name adds it"""
        st.multiselect(
            "Input Field Name",
            options=st.session_state.ctx.field_options,
            key="input_field",
            accept_new_options=True,
            placeholder="Type a field name and press Enter",
            on_change=FieldManager.on_fields_change,
        )

    @staticmethod
    def render_file_upload() -> None:
        st.file_uploader(
            "Upload a CSV or Excel File",
            type=SUPPORTED_UPLOAD_EXTENSIONS,
            key="data_file",
            on_change=FieldManager.on_upload,
        )

    @staticmethod
    def render_fields_banner() -> None:
        """Show the fields that will be sent, with their detected types when known"""
        registry = st.session_state.ctx.registry
        names = ", ".join(html.escape(name) for name in registry.names)
        st.markdown(
            f'<div class="fields-banner">Fields to generate data: {names}</div>',
            unsafe_allow_html=True,
        )

        typed = [
            f"{html.escape(name)} <span class='field-type'>({inferred.value})</span>"
            for name, inferred in registry.types_by_name().items()
            if inferred is not None
        ]
        if typed:
            st.markdown("Detected types: " + ", ".join(typed), unsafe_allow_html=True)
