"""
generation_client.py
Sends the generation prompt to the OpenAI chat-completions endpoint and
returns a typed result instead of raising.
"""

import json
import logging
from typing import Any, Optional

import httpx
from openai import OpenAI, APIConnectionError, APIStatusError, OpenAIError

from services.constants import OPENAI_BASE_URL
from services.data_model import (
    EmptyChoice,
    GenerationRequest,
    GenerationResult,
    HttpError,
    ParseEnvelopeError,
    Success,
    TransportError,
)
from services.prompt_builder import build_request_body
from services.utils import status_category, truncate

logger = logging.getLogger(__name__)


def get_client(credential: str, http_client: Optional[httpx.Client] = None) -> OpenAI:
    """
    Build a client bound to the session's API key.

    Retries are disabled: a failed call is reported once and the user decides
    whether to try again.
    """
    return OpenAI(
        api_key=credential,
        base_url=OPENAI_BASE_URL,
        max_retries=0,
        http_client=http_client,
    )


def extract_content(envelope: Any) -> Optional[str]:
    """
    Return choices[0].message.content, or None when the envelope does not
    have that shape.
    """
    if not isinstance(envelope, dict):
        return None
    choices = envelope.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    return content if isinstance(content, str) else None


def generate(
    credential: str,
    request: GenerationRequest,
    client: Optional[OpenAI] = None,
) -> GenerationResult:
    """
    Issue a single chat-completion call for the request.

    Args:
        credential: OpenAI API key, validated as non-empty by the caller
        request: The generation request
        client: Pre-built client (tests inject one with a mock transport)

    Returns:
        Success with the reply text, or TransportError / HttpError /
        ParseEnvelopeError / EmptyChoice describing why there is no reply.
    """
    if client is None:
        client = get_client(credential)

    body = build_request_body(request)
    logger.info(f"Requesting {request.row_count} rows from {request.model} for {len(request.fields)} fields")
    logger.debug(f"Request body: {json.dumps(body)}")

    try:
        raw_response = client.chat.completions.with_raw_response.create(
            model=body["model"],
            messages=body["messages"],
        )
    except APIConnectionError as e:
        cause = f" ({e.__cause__})" if e.__cause__ else ""
        logger.error(f"OpenAI API request failed: {e}{cause}")
        return TransportError(description=f"{e}{cause}")
    except APIStatusError as e:
        category = status_category(e.status_code)
        logger.error(f"OpenAI API returned HTTP {e.status_code} ({category})")
        return HttpError(status_code=e.status_code, status_category=category, raw_body=e.response.text)
    except OpenAIError as e:
        logger.exception(f"Unexpected error in generate: {e}")
        return TransportError(description=str(e))

    http_response = raw_response.http_response
    raw_body = http_response.text
    logger.info(f"OpenAI API responded with HTTP {http_response.status_code}")

    try:
        envelope = json.loads(raw_body)
    except json.JSONDecodeError as e:
        logger.error(f"Response body is not valid JSON: {truncate(raw_body)}")
        return ParseEnvelopeError(description=str(e), raw_body=raw_body)

    content = extract_content(envelope)
    if content is None:
        logger.warning("Response has no usable 'choices' entry")
        return EmptyChoice(envelope=envelope)

    return Success(content=content, raw_body=raw_body, status_code=http_response.status_code)
