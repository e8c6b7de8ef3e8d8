# ------------------------------
# Module: export.py
# Description: Serializes a Table for the download buttons.
#              Every format keeps the Table's column and row order.
# ------------------------------

import io
import logging
from typing import List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.backends.backend_pdf import PdfPages

from services.constants import (
    PDF_FONT_SIZE,
    PDF_PAGE_SIZE_INCHES,
    PDF_ROWS_PER_PAGE,
)
from services.data_model import Table

logger = logging.getLogger(__name__)


def to_csv_text(table: Table) -> str:
    return table.to_dataframe().to_csv(index=False)


def to_csv_bytes(table: Table) -> bytes:
    return to_csv_text(table).encode("utf-8")


def to_excel_bytes(table: Table) -> bytes:
    buffer = io.BytesIO()
    table.to_dataframe().to_excel(buffer, index=False, engine="openpyxl")
    return buffer.getvalue()


def to_json_text(table: Table) -> str:
    return table.to_dataframe().to_json(orient="records", indent=2)


def _page_cells(table: Table, start: int) -> List[List[str]]:
    cells = [
        [row[col] for col in table.columns]
        for row in table.rows[start:start + PDF_ROWS_PER_PAGE]
    ]
    # matplotlib cannot draw a table without body cells
    return cells or [[""] * len(table.columns)]


def to_pdf_bytes(table: Table) -> bytes:
    '''
      Render the table as a paginated PDF, repeating the header on every page.
    '''
    page_starts = list(range(0, len(table.rows), PDF_ROWS_PER_PAGE)) or [0]
    buffer = io.BytesIO()
    with PdfPages(buffer) as pdf:
        for page_num, start in enumerate(page_starts, start=1):
            fig, ax = plt.subplots(figsize=PDF_PAGE_SIZE_INCHES)
            ax.axis("off")
            pdf_table = ax.table(
                cellText=_page_cells(table, start),
                colLabels=table.columns,
                loc="upper center",
                cellLoc="left",
            )
            pdf_table.auto_set_font_size(False)
            pdf_table.set_fontsize(PDF_FONT_SIZE)
            ax.set_title(f"Page {page_num} of {len(page_starts)}", fontsize=PDF_FONT_SIZE)
            pdf.savefig(fig)
            plt.close(fig)
    logger.info(f"Rendered {len(table.rows)} rows into {len(page_starts)} PDF page(s)")
    return buffer.getvalue()
