"""Generated data table component"""
import logging
import streamlit as st

from services import export
from services.constants import EXPORT_FILE_STEM, EXPORT_MIME_TYPES

logger = logging.getLogger(__name__)


class DataTableView:
    """Shows the last generated table and its download buttons"""

    @staticmethod
    def render_downloads(table) -> None:
        """Render CSV / Excel / JSON / PDF downloads in the table's column order"""
        st.markdown("#### 📥 Download")
        csv_col, excel_col, json_col, pdf_col = st.columns(4)

        with csv_col:
            st.download_button("CSV", export.to_csv_bytes(table), f"{EXPORT_FILE_STEM}.csv",
                               EXPORT_MIME_TYPES["csv"], width="stretch")
        with excel_col:
            st.download_button("Excel", export.to_excel_bytes(table), f"{EXPORT_FILE_STEM}.xlsx",
                               EXPORT_MIME_TYPES["xlsx"], width="stretch")
        with json_col:
            st.download_button("JSON", export.to_json_text(table), f"{EXPORT_FILE_STEM}.json",
                               EXPORT_MIME_TYPES["json"], width="stretch")
        with pdf_col:
            st.download_button("PDF", export.to_pdf_bytes(table), f"{EXPORT_FILE_STEM}.pdf",
                               EXPORT_MIME_TYPES["pdf"], width="stretch")

    @staticmethod
    def render_table() -> None:
        """Render the generated data section"""
        st.markdown("### 📋 Generated Data")

        table = st.session_state.ctx.table
        if table is None:
            st.info("No data generated yet. Add some fields and press Generate Data.")
            return

        try:
            st.dataframe(table.to_dataframe(), width="stretch", height=400, hide_index=True)
            DataTableView.render_downloads(table)
        except Exception as e:
            st.error("Error displaying generated data")
            logger.error(f"Error rendering table: {str(e)}")
            with st.expander("See error details"):
                st.exception(e)
