"""CSS styles for the application"""

STYLES = """
    /* General button styling */
    .stButton > button {
        background-color: #17a2b8;
        color: white;
        padding: 8px 16px;
        border-radius: 4px;
        border: none;
    }
    .stButton > button:hover {
        background-color: #138496;
    }

    /* Fields banner */
    .fields-banner {
        font-family: monospace;
        background-color: #f8f9fa;
        border-left: 4px solid #17a2b8;
        padding: 10px 15px;
        margin-bottom: 15px;
        border-radius: 4px;
        white-space: pre-wrap;
    }

    .field-type {
        color: #666;
        font-size: 0.9em;
    }

    /* Debug entries */
    .debug-timestamp {
        color: #666;
        font-size: 0.9em;
    }
"""
