# ------------------------------------------------------------------
# Project's Testing Entry Point
# Run: python main.py --fields name age --rows 5
# Note: Please run the Streamlit app using: streamlit run app/app.py
# ------------------------------------------------------------------

import argparse
import logging
import os

from services import export, task_handlers
from services.constants import AVAILABLE_MODELS, DEFAULT_MODEL, DEFAULT_ROW_COUNT, LOG_LEVEL
from services.prompt_builder import build_prompt
from services.session import SessionContext

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build a generation prompt and optionally run it.")
    parser.add_argument("--fields", nargs="+", default=[], help="Field names to generate.")
    parser.add_argument("--file", help="CSV or Excel file whose columns become the fields.")
    parser.add_argument("--rows", type=int, default=DEFAULT_ROW_COUNT, help="Number of rows to ask for.")
    parser.add_argument("--description", default="", help="Free-text description of the data.")
    parser.add_argument("--model", default=DEFAULT_MODEL, choices=AVAILABLE_MODELS)
    parser.add_argument(
        "--run",
        action="store_true",
        help="Send the request using OPENAI_API_KEY from the environment and print the table as CSV.",
    )
    return parser


def run(args: argparse.Namespace) -> None:
    ctx = SessionContext()

    if args.file:
        with open(args.file, "rb") as f:
            notification = task_handlers.dispatch("upload_file", ctx, file_name=args.file, data=f.read())
        print(notification.text)
    if args.fields:
        task_handlers.dispatch("change_fields", ctx, names=args.fields)

    print(build_prompt(args.rows, args.description, ctx.registry.names))

    if not args.run:
        return

    logger.info(f"Running one generation with {args.model}")
    task_handlers.dispatch("save_api_key", ctx, api_key=os.environ.get("OPENAI_API_KEY"))
    notification = task_handlers.dispatch(
        "generate_data",
        ctx,
        row_count=args.rows,
        description=args.description,
        model=args.model,
    )
    print()
    print(f"[{notification.level.value}] {notification.text}")
    print(ctx.debug.current)
    if ctx.table is not None:
        print(export.to_csv_text(ctx.table))


if __name__ == "__main__":
    run(build_parser().parse_args())
