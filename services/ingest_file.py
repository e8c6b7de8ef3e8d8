# ------------------------------
# Module: ingest_file.py
# Description: Reads an uploaded CSV / Excel file and detects its columns.
# ------------------------------

import io
import logging
from pathlib import Path
from typing import List

import pandas as pd
from pandas.api import types as pdtypes

from services.constants import SUPPORTED_UPLOAD_EXTENSIONS
from services.data_model import (
    ColumnInfo,
    InferredType,
    IngestResult,
    IngestSuccess,
    MalformedFile,
    UnsupportedFormat,
)

logger = logging.getLogger(__name__)


def get_extension(file_name: str) -> str:
    '''
      Get the lowercase extension of a file name, without the dot.
    '''
    return Path(file_name or "").suffix.lower().lstrip(".")


def infer_column_type(series: pd.Series) -> InferredType:
    '''
      Map the dtype pandas inferred for a column to a primitive type tag.
      Booleans are checked first since pandas also counts them as numeric.
    '''
    if pdtypes.is_bool_dtype(series):
        return InferredType.LOGICAL
    if pdtypes.is_integer_dtype(series):
        return InferredType.INTEGER
    if pdtypes.is_numeric_dtype(series):
        return InferredType.NUMERIC
    if pdtypes.is_datetime64_any_dtype(series):
        return InferredType.DATE
    return InferredType.TEXT


def read_upload(data: bytes, extension: str) -> pd.DataFrame:
    '''
      Read the raw upload into a DataFrame.
      CSV: comma delimiter, first row as header.
      XLSX: first worksheet, first row as header.
    '''
    if extension == "csv":
        return pd.read_csv(io.BytesIO(data), sep=",")
    return pd.read_excel(io.BytesIO(data), sheet_name=0, engine="openpyxl")


def ingest(data: bytes, file_name: str) -> IngestResult:
    """
    Detect the columns of an uploaded file and their inferred types.

    Args:
        data: Raw bytes of the uploaded file
        file_name: Original file name, used to pick the reader

    Returns:
        IngestSuccess with the columns in file order, UnsupportedFormat for any
        extension other than csv/xlsx, or MalformedFile if the reader fails.
    """
    extension = get_extension(file_name)
    if extension not in SUPPORTED_UPLOAD_EXTENSIONS:
        logger.warning(f"Rejected upload {file_name!r}: unsupported extension {extension!r}")
        return UnsupportedFormat(extension=extension)

    try:
        df = read_upload(data, extension)
    except Exception as e:
        logger.error(f"Could not parse {file_name!r}: {e}")
        return MalformedFile(description=str(e))

    columns: List[ColumnInfo] = [
        ColumnInfo(name=str(col), inferred_type=infer_column_type(df[col]))
        for col in df.columns
    ]
    logger.info(f"Detected {len(columns)} columns in {file_name!r}")
    return IngestSuccess(columns=columns)
