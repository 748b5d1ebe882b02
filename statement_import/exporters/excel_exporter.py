"""
Excel exporter for statement import reviews.

Generates an Excel workbook with 2 sheets:
1. Import Review - One row per candidate transaction, duplicates highlighted
2. Summary - Merged totals, date range and run information
"""
import logging
from pathlib import Path
from datetime import datetime
from typing import Optional

import openpyxl
from openpyxl.styles import Font, PatternFill, Alignment
from openpyxl.utils import get_column_letter

from ..config.settings import DEFAULT_CURRENCY
from ..models import ImportResult, TransactionType

logger = logging.getLogger(__name__)

CURRENCY_FORMATS = {
    'USD': '$#,##0.00',
    'GBP': '£#,##0.00',
    'EUR': '€#,##0.00',
    'CAD': 'CA$#,##0.00',
    'AUD': 'A$#,##0.00',
}


class ExcelExporter:
    """Export import results to a formatted Excel workbook."""

    # Colors
    HEADER_COLOR = "366092"  # Dark blue
    WARNING_COLOR = "FFC7CE"  # Light red
    SUCCESS_COLOR = "C6EFCE"  # Light green
    INFO_COLOR = "FFEB9C"  # Light yellow

    HEADERS = [
        "Date", "Description", "Merchant", "Type", "Category",
        "Amount", "Recurring", "Duplicate", "Suggested Action",
    ]

    def __init__(self, currency: str = DEFAULT_CURRENCY):
        """
        Initialize Excel exporter.

        Args:
            currency: Currency code used for amount formatting
        """
        self.currency_format = CURRENCY_FORMATS.get(currency.upper(), f'{currency} #,##0.00')

    def export(self, result: ImportResult, output_path: Path) -> Path:
        """
        Export import result to Excel.

        Args:
            result: Import result to export
            output_path: Path for output Excel file

        Returns:
            Path to created Excel file
        """
        logger.info(f"Exporting to Excel: {output_path}")

        wb = openpyxl.Workbook()

        # Remove default sheet
        if "Sheet" in wb.sheetnames:
            wb.remove(wb["Sheet"])

        self._create_review_sheet(wb, result)
        self._create_summary_sheet(wb, result)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        logger.info(f"Excel export complete: {output_path}")

        return output_path

    def _create_review_sheet(self, wb: openpyxl.Workbook, result: ImportResult) -> None:
        """Create the review sheet with one row per candidate."""
        ws = wb.create_sheet("Import Review", 0)

        for col, header in enumerate(self.HEADERS, 1):
            cell = ws.cell(row=1, column=col, value=header)
            cell.font = Font(bold=True, color="FFFFFF")
            cell.fill = PatternFill(start_color=self.HEADER_COLOR, fill_type="solid")
            cell.alignment = Alignment(horizontal="center", vertical="center")

        for row, item in enumerate(result.transactions, 2):
            txn = item.transaction
            values = [
                txn.date.isoformat(),
                txn.description,
                txn.merchant_name or "",
                txn.type.value,
                txn.category,
                float(txn.amount),
                "Yes" if txn.is_recurring else "No",
                "Yes" if item.is_duplicate else "No",
                item.suggested_action.value,
            ]
            for col, value in enumerate(values, 1):
                ws.cell(row=row, column=col, value=value)

            ws.cell(row=row, column=6).number_format = self.currency_format

            if item.is_duplicate:
                for col in range(1, len(self.HEADERS) + 1):
                    ws.cell(row=row, column=col).fill = PatternFill(
                        start_color=self.WARNING_COLOR,
                        fill_type="solid"
                    )

        for col in range(1, len(self.HEADERS) + 1):
            ws.column_dimensions[get_column_letter(col)].width = 15
        ws.column_dimensions['B'].width = 50
        ws.column_dimensions['C'].width = 25

        ws.freeze_panes = "A2"

    def _create_summary_sheet(self, wb: openpyxl.Workbook, result: ImportResult) -> None:
        """Create the summary sheet."""
        ws = wb.create_sheet("Summary", 1)

        if not result.summary:
            ws.cell(row=1, column=1, value="No summary available")
            if result.error_message:
                ws.cell(row=2, column=1, value=result.error_message)
            return

        summary = result.summary
        expense_count = sum(
            1 for t in result.transactions if t.transaction.type is TransactionType.EXPENSE
        )

        rows = [
            ("Date Range", ""),
            ("  Start Date", summary.date_range.start),
            ("  End Date", summary.date_range.end),
            ("", ""),
            ("Totals", ""),
            ("  Total Income", float(summary.total_income)),
            ("  Total Expenses", float(summary.total_expenses)),
            ("", ""),
            ("Transaction Count", summary.transaction_count),
            ("  Expenses", expense_count),
            ("  Income", summary.transaction_count - expense_count),
            ("Possible Duplicates", result.duplicate_count),
            ("To Import", len(result.importable_transactions)),
            ("Segments Processed", result.segments_processed),
            ("", ""),
            ("Processing Time", f"{result.processing_time:.2f} seconds"),
            ("Extracted At", result.extracted_at.strftime("%Y-%m-%d %H:%M:%S")),
        ]

        for row, (label, value) in enumerate(rows, 1):
            ws.cell(row=row, column=1, value=label)
            ws.cell(row=row, column=2, value=value)

            if label and not label.startswith("  "):
                ws.cell(row=row, column=1).font = Font(bold=True)
            if label.strip().startswith("Total "):
                ws.cell(row=row, column=2).number_format = self.currency_format

        duplicate_row = 12
        ws.cell(row=duplicate_row, column=2).fill = PatternFill(
            start_color=self.WARNING_COLOR if result.duplicate_count else self.SUCCESS_COLOR,
            fill_type="solid"
        )

        if result.warnings:
            warning_row = len(rows) + 2
            ws.cell(row=warning_row, column=1, value="Warnings").font = Font(bold=True)
            for offset, warning in enumerate(result.warnings, 1):
                cell = ws.cell(row=warning_row + offset, column=1, value=warning)
                cell.fill = PatternFill(start_color=self.INFO_COLOR, fill_type="solid")

        ws.column_dimensions['A'].width = 25
        ws.column_dimensions['B'].width = 30


def generate_output_filename(source_name: str, output_dir: Optional[Path] = None) -> Path:
    """
    Generate standardized output filename.

    Format: {source}_review_{YYYY-MM-DD}_{timestamp}.xlsx

    Args:
        source_name: Statement file stem
        output_dir: Output directory (default: OUTPUT_DIR)

    Returns:
        Path for output file
    """
    from ..config.settings import OUTPUT_DIR

    if output_dir is None:
        output_dir = OUTPUT_DIR

    now = datetime.now()
    filename = f"{source_name.lower()}_review_{now.strftime('%Y-%m-%d')}_{now.strftime('%H%M%S')}.xlsx"

    return output_dir / filename
