# ------------------------------
# Module: response_parser.py
# Description: Turns the model's comma-separated reply into a Table.
# ------------------------------

import csv
import io
import logging
from typing import List, Tuple

from services.data_model import ParseError, ParseResult, ParseSeverity, Table

logger = logging.getLogger(__name__)

CODE_FENCE = "```"


def strip_code_fences(raw: str) -> str:
    '''
      Remove a markdown code fence (``` or ```csv) wrapping the whole reply.
    '''
    lines = raw.strip().splitlines()
    if lines and lines[0].strip().startswith(CODE_FENCE):
        lines = lines[1:]
    if lines and lines[-1].strip().startswith(CODE_FENCE):
        lines = lines[:-1]
    return "\n".join(lines)


def tokenize(text: str) -> List[Tuple[int, List[str]]]:
    '''
      Split the text into (line number, fields) pairs, skipping blank lines.
      Field values are kept verbatim, including leading spaces.
      Raises csv.Error on quoting irregularities.
    '''
    reader = csv.reader(io.StringIO(text), delimiter=",", strict=True)
    records = []
    for fields in reader:
        if not fields:
            continue
        records.append((reader.line_num, fields))
    return records


def check_header(header: List[str]) -> str:
    '''
      Return a description of what is wrong with the header, or "" if it is usable.
    '''
    if any(not name.strip() for name in header):
        return "Header contains blank column names"
    duplicates = sorted({name for name in header if header.count(name) > 1})
    if duplicates:
        return f"Header contains duplicate column names: {', '.join(duplicates)}"
    return ""


def parse(raw: str) -> ParseResult:
    """
    Parse the reply as CSV: first line is the header, every following line a
    row with the same number of fields.

    The result is all-or-nothing: a single bad line rejects the whole reply.

    Returns:
        Table on success, otherwise ParseError with severity WARNING (the CSV
        reader flagged a quoting irregularity) or ERROR (arity mismatch,
        unusable header, empty reply).
    """
    text = strip_code_fences(raw or "")
    if not text.strip():
        return ParseError(ParseSeverity.ERROR, "The response did not contain any data")

    try:
        records = tokenize(text)
    except csv.Error as e:
        logger.warning(f"CSV reader warning: {e}")
        return ParseError(ParseSeverity.WARNING, str(e))

    if not records:
        return ParseError(ParseSeverity.ERROR, "The response did not contain any data")

    _, header = records[0]
    header = [name.strip() for name in header]
    header_problem = check_header(header)
    if header_problem:
        logger.warning(header_problem)
        return ParseError(ParseSeverity.ERROR, header_problem)

    rows = []
    for line_num, fields in records[1:]:
        if len(fields) != len(header):
            message = f"Line {line_num}: expected {len(header)} fields, saw {len(fields)}"
            logger.warning(message)
            return ParseError(ParseSeverity.ERROR, message)
        rows.append(dict(zip(header, fields)))

    logger.info(f"Parsed {len(rows)} rows with columns {header}")
    return Table(columns=header, rows=rows)
