"""
Synthetic Data Generator

A Streamlit application that asks an OpenAI model to generate tabular data for
user-chosen fields and lets the user download the result.
"""
import sys
from pathlib import Path
import logging
import streamlit as st

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Now we can import our modules
from services.constants import LOG_LEVEL
from services.session import SessionContext
from app.components import ApiKeyDialog, FieldManager, DataTableView, DebugViewer, GenerationPanel, Notifier
from app.styles import STYLES

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

def initialize_session_state():
    """Initialize session state variables"""
    if 'ctx' not in st.session_state:
        st.session_state.ctx = SessionContext()
        logger.info("Started new session")
    if 'input_field' not in st.session_state:
        st.session_state.input_field = []

def render_sidebar():
    """Render sidebar content"""
    with st.sidebar:
        if st.button("🔗 Enter API Key"):
            ApiKeyDialog.open()

        GenerationPanel.render_inputs()
        FieldManager.render_field_picker()
        GenerationPanel.render_actions()
        FieldManager.render_file_upload()

def main():
    """Main application entry point"""
    # Page configuration
    st.set_page_config(layout="wide", page_title="Synthetic Data Generator with OpenAI")
    st.markdown(f"<style>{STYLES}</style>", unsafe_allow_html=True)

    # Initialize session state
    initialize_session_state()

    # Render sidebar
    render_sidebar()

    # Main content area
    st.title("🧪 Synthetic Data Generator with OpenAI")

    Notifier.render_pending(st.session_state.ctx)

    FieldManager.render_fields_banner()

    with st.container():
        DataTableView.render_table()
        st.markdown("---")

    DebugViewer.render_debug()

if __name__ == "__main__":
    main()
