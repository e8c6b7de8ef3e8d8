# ------------------------------
# Module: task_handlers.py
# Description: Event handlers for the user actions of one session.
#              Each handler takes the session context, updates it, and returns
#              the notification to show (or None).
# ------------------------------

import json
import logging
from typing import Callable, Dict, Iterable, Optional

from openai import OpenAI

from services import generation_client, ingest_file, response_parser
from services.constants import DEFAULT_MODEL
from services.data_model import (
    EmptyChoice,
    Field,
    GenerationRequest,
    HttpError,
    IngestSuccess,
    Notification,
    NotificationLevel,
    ParseEnvelopeError,
    ParseError,
    ParseSeverity,
    Success,
    TransportError,
)
from services.prompt_builder import build_request_body
from services.session import SessionContext
from services.utils import mask_credential

logger = logging.getLogger(__name__)


def _message(text: str) -> Notification:
    return Notification(NotificationLevel.MESSAGE, text)


def _warning(text: str) -> Notification:
    return Notification(NotificationLevel.WARNING, text)


def _error(text: str) -> Notification:
    return Notification(NotificationLevel.ERROR, text)


# :::::: Credential :::::: #

def handle_save_api_key(ctx: SessionContext, api_key: Optional[str]) -> Notification:
    '''
      Store the API key in the session. The key is only ever echoed masked.
    '''
    if api_key is None or not api_key.strip():
        return _warning("Please enter an API key before saving.")

    ctx.credential = api_key.strip()
    ctx.debug.write(f"API Key: {mask_credential(ctx.credential)}")
    logger.info("API key saved for session")
    return _message("API Key Added")


# :::::: Fields :::::: #

def handle_change_fields(ctx: SessionContext, names: Iterable[str]) -> None:
    '''
      Replace the selection with the names picked or typed by the user.
    '''
    field_set = ctx.registry.set_fields(names)
    for name in field_set.names:
        if name not in ctx.field_options:
            ctx.field_options.append(name)
    return None


def handle_clear_fields(ctx: SessionContext) -> None:
    ctx.registry.clear()
    return None


def handle_upload_file(ctx: SessionContext, file_name: str, data: bytes) -> Notification:
    '''
      Detect the columns of an uploaded file and make them the selection.
      On failure the selection is left as it was.
    '''
    result = ingest_file.ingest(data, file_name)
    if not isinstance(result, IngestSuccess):
        ctx.debug.write(f"Error reading {file_name}: {result.message}")
        return _error(result.message)

    ctx.registry.set_fields([Field(c.name, c.inferred_type) for c in result.columns])
    ctx.field_options = ctx.registry.names
    detected = ", ".join(f"{c.name} ({c.inferred_type.value})" for c in result.columns)
    ctx.debug.write(f"Detected columns in {file_name}: {detected}")
    return _message(f"Detected {len(result.columns)} columns in {file_name}")


# :::::: Debug :::::: #

def handle_clear_debug(ctx: SessionContext) -> None:
    ctx.debug.clear()
    return None


# :::::: Generation :::::: #

def validate_generation_input(ctx: SessionContext, row_count) -> Optional[Notification]:
    '''
      Check everything that must hold before a request is sent.
      Returns the warning to show, or None if the input is usable.
    '''
    if not ctx.has_credential():
        return _warning("Please enter a valid OpenAI API key")
    if ctx.in_flight:
        return _warning("A request is already in progress. Please wait for it to finish.")
    if not ctx.registry.names:
        return _warning("Please enter at least one field to generate.")
    try:
        rows = int(row_count)
        whole = rows == float(row_count)
    except (TypeError, ValueError):
        rows, whole = 0, False
    if not whole or rows < 1:
        return _warning("Number of rows must be a positive whole number.")
    return None


def handle_generate_data(
    ctx: SessionContext,
    row_count: int,
    description: Optional[str] = None,
    model: str = DEFAULT_MODEL,
    client: Optional[OpenAI] = None,
) -> Notification:
    """
    Build the request, call the model and parse the reply into the session's table.

    The previous table is only replaced by a fully parsed new one; every
    failure path leaves it as it was.

    Args:
        ctx: Session context
        row_count: Number of rows to ask for
        description: Optional free-text context for the data
        model: Model identifier
        client: Pre-built OpenAI client (tests inject one)

    Returns:
        The notification describing the outcome.
    """
    invalid = validate_generation_input(ctx, row_count)
    if invalid:
        return invalid

    request = GenerationRequest(
        model=model,
        row_count=int(row_count),
        description=description,
        fields=tuple(ctx.registry.names),
    )
    ctx.debug.write(f"Request Body: {json.dumps(build_request_body(request))}")

    ctx.in_flight = True
    try:
        result = generation_client.generate(ctx.credential, request, client=client)
    finally:
        ctx.in_flight = False

    if isinstance(result, TransportError):
        ctx.debug.write(f"Error in API request: {result.description}")
        return _error("Error in API request. Please check your API key and try again.")

    if isinstance(result, HttpError):
        ctx.debug.write(f"HTTP status: {result.status_category} ({result.status_code})\nRaw API response: {result.raw_body}")
        return _warning(f"API request failed with HTTP {result.status_code} ({result.status_category}). See Debug Info for details.")

    if isinstance(result, ParseEnvelopeError):
        ctx.debug.write(f"Error in parsing response: {result.description}\nRaw API response: {result.raw_body}")
        return _error("Error parsing response. Please check the format of the response.")

    if isinstance(result, EmptyChoice):
        ctx.debug.write(
            f"API request successful but no valid 'choices' field in response. Parsed response: {json.dumps(result.envelope)}"
        )
        return _warning("API response received but no valid data was returned.")

    return _apply_reply(ctx, result)


def _apply_reply(ctx: SessionContext, result: Success) -> Notification:
    ctx.debug.write(f"HTTP status: Success ({result.status_code})\nRaw API response: {result.raw_body}")

    parsed = response_parser.parse(result.content)
    if isinstance(parsed, ParseError):
        if parsed.severity == ParseSeverity.WARNING:
            ctx.debug.write(f"Warning during CSV parsing: {parsed.message}")
            return _warning("Warning during CSV parsing. Some data may not have been parsed correctly.")
        ctx.debug.write(f"Error during CSV parsing: {parsed.message}")
        return _error("Error parsing response. Please check the format of the response and try again.")

    ctx.table = parsed
    ctx.debug.write("API request successful. Data rendered as a table.")
    return _message("Synthetic data generated successfully!")


# :::::: Dispatch :::::: #

HANDLERS: Dict[str, Callable[..., Optional[Notification]]] = {
    "save_api_key": handle_save_api_key,
    "change_fields": handle_change_fields,
    "clear_fields": handle_clear_fields,
    "upload_file": handle_upload_file,
    "generate_data": handle_generate_data,
    "clear_debug": handle_clear_debug,
}


def dispatch(action: str, ctx: SessionContext, **kwargs) -> Optional[Notification]:
    """
    Run the handler registered for a user action and queue its notification
    on the session.
    """
    handler = HANDLERS.get(action)
    if handler is None:
        raise ValueError(f"Unknown action={action}")

    notification = handler(ctx, **kwargs)
    if notification is not None:
        ctx.notify(notification)
    return notification
