# ------------------------------
# Module: constants.py
# Description: Constants for the services
# ------------------------------

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from project root so local overrides apply to the app and main.py
project_root = Path(__file__).parent.parent
load_dotenv(project_root / '.env')

# :::::: Logging Related :::::: #

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

# :::::: OpenAI Related :::::: #

# Chat completions are posted to f"{OPENAI_BASE_URL}/chat/completions"
OPENAI_BASE_URL = os.environ.get("OPENAI_BASE_URL", "https://api.openai.com/v1")

AVAILABLE_MODELS = ["gpt-4o-mini", "gpt-4o"]

DEFAULT_MODEL = AVAILABLE_MODELS[0]

SYSTEM_PROMPT = "You are a data generation tool."

# :::::: Prompt Related :::::: #

DEFAULT_ROW_COUNT = 10

NO_DESCRIPTION_PLACEHOLDER = "No specific description provided."

PROMPT_ROW_COUNT_LINE = "Generate {row_count} rows of data."

PROMPT_DESCRIPTION_LINE = "-- Description of the data context: {description}"

PROMPT_FIELDS_LINE = "-- In addition to the data being generated, include data generated for the fields: {fields}"

PROMPT_FORMAT_LINE = (
    "Return the data in comma-separated format using the fields as headers. "
    "Do not return anything other than the data. Do not include commas within data strings."
)

FIELD_SEPARATOR = ", "

# :::::: Upload Related :::::: #

SUPPORTED_UPLOAD_EXTENSIONS = ["csv", "xlsx"]

# :::::: Debug Channel Related :::::: #

DEBUG_HISTORY_MAX_ENTRIES = 50                  # Older entries are dropped once the history is full

MASKED_CREDENTIAL_VISIBLE_CHARS = 4             # Num of trailing characters of the API key shown in the debug channel

# :::::: Export Related :::::: #

EXPORT_FILE_STEM = "synthetic_data"

EXPORT_MIME_TYPES = {
    "csv": "text/csv",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "json": "application/json",
    "pdf": "application/pdf",
}

PDF_ROWS_PER_PAGE = 25

PDF_PAGE_SIZE_INCHES = (11.69, 8.27)            # A4 landscape

PDF_FONT_SIZE = 8
