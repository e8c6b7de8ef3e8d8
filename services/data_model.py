"""
data_model.py
Data models for field registration, generation requests and their typed results.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any, Optional, Tuple, Union

import pandas as pd


class InferredType(str, Enum):
    INTEGER = "integer"
    NUMERIC = "numeric"
    TEXT = "text"
    LOGICAL = "logical"
    DATE = "date"


class NotificationLevel(str, Enum):
    MESSAGE = "message"
    WARNING = "warning"
    ERROR = "error"


class ParseSeverity(str, Enum):
    WARNING = "warning"
    ERROR = "error"


# :::::: Fields :::::: #

@dataclass(frozen=True)
class Field:
    """A named column the user wants present in generated output."""
    name: str
    inferred_type: Optional[InferredType] = None


@dataclass(frozen=True)
class FieldSet:
    """Ordered collection of unique fields."""
    fields: Tuple[Field, ...] = ()

    @property
    def names(self) -> List[str]:
        return [f.name for f in self.fields]

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self):
        return iter(self.fields)


# :::::: Ingestion results :::::: #

@dataclass(frozen=True)
class ColumnInfo:
    """A column detected in an uploaded file."""
    name: str
    inferred_type: InferredType


@dataclass(frozen=True)
class IngestSuccess:
    columns: List[ColumnInfo]


@dataclass(frozen=True)
class UnsupportedFormat:
    extension: str

    @property
    def message(self) -> str:
        return "Unsupported file type. Please upload a CSV or Excel file."


@dataclass(frozen=True)
class MalformedFile:
    description: str

    @property
    def message(self) -> str:
        return f"Could not read the uploaded file: {self.description}"


IngestResult = Union[IngestSuccess, UnsupportedFormat, MalformedFile]


# :::::: Generation :::::: #

@dataclass(frozen=True)
class GenerationRequest:
    """One generation attempt. Built once, never mutated."""
    model: str
    row_count: int
    description: Optional[str]
    fields: Tuple[str, ...]


@dataclass(frozen=True)
class Success:
    content: str                # choices[0].message.content
    raw_body: str
    status_code: int


@dataclass(frozen=True)
class TransportError:
    description: str


@dataclass(frozen=True)
class HttpError:
    status_code: int
    status_category: str        # "Client error", "Server error", ...
    raw_body: str


@dataclass(frozen=True)
class ParseEnvelopeError:
    description: str
    raw_body: str


@dataclass(frozen=True)
class EmptyChoice:
    envelope: Any               # the parsed JSON body


GenerationResult = Union[Success, TransportError, HttpError, ParseEnvelopeError, EmptyChoice]


# :::::: Tables :::::: #

@dataclass(frozen=True)
class Table:
    """Header plus rows parsed from the model reply. Every row has the header's arity."""
    columns: List[str]
    rows: List[Dict[str, str]] = field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [[row[col] for col in self.columns] for row in self.rows],
            columns=self.columns,
            dtype=str,
        )


@dataclass(frozen=True)
class ParseError:
    severity: ParseSeverity
    message: str


ParseResult = Union[Table, ParseError]


# :::::: UI-facing :::::: #

@dataclass(frozen=True)
class Notification:
    """Message surfaced to the user after a handler runs."""
    level: NotificationLevel
    text: str
