"""Prompt construction helpers."""

from typing import Dict, Iterable, List, Optional

from services.constants import (
    FIELD_SEPARATOR,
    NO_DESCRIPTION_PLACEHOLDER,
    PROMPT_DESCRIPTION_LINE,
    PROMPT_FIELDS_LINE,
    PROMPT_FORMAT_LINE,
    PROMPT_ROW_COUNT_LINE,
    SYSTEM_PROMPT,
)
from services.data_model import GenerationRequest


def resolve_description(description: Optional[str]) -> str:
    """Return the description, or the placeholder when it is missing or blank."""
    if description is None or not description.strip():
        return NO_DESCRIPTION_PLACEHOLDER
    return description


def build_prompt(row_count: int, description: Optional[str], fields: Iterable[str]) -> str:
    """Compose the user prompt. The description line is emitted even for the placeholder."""
    lines = [
        PROMPT_ROW_COUNT_LINE.format(row_count=row_count),
        PROMPT_DESCRIPTION_LINE.format(description=resolve_description(description)),
        PROMPT_FIELDS_LINE.format(fields=FIELD_SEPARATOR.join(fields)),
        PROMPT_FORMAT_LINE,
    ]
    return "\n".join(lines)


def build_messages(request: GenerationRequest) -> List[Dict[str, str]]:
    """Return the chat message payload for the OpenAI API."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_prompt(request.row_count, request.description, request.fields)},
    ]


def build_request_body(request: GenerationRequest) -> Dict:
    """The JSON body posted to the chat-completions endpoint."""
    return {
        "model": request.model,
        "messages": build_messages(request),
    }
