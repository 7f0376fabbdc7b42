"""
Excel export functionality for SplitLedger
"""
from __future__ import annotations
import logging
from datetime import date
from typing import Optional, Union

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill, Border, Side
from openpyxl.utils import get_column_letter

from models import Ledger, Period
from computations import compute_period_analysis, settle_period, sort_history

logger = logging.getLogger(__name__)


def _style_header(ws, row=1):
    """Apply header styling to worksheet row"""
    header_font = Font(bold=True, color="FFFFFF")
    fill = PatternFill("solid", fgColor="4F81BD")
    align = Alignment(horizontal="center", vertical="center")
    thin = Side(style="thin", color="A0A0A0")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)
    for cell in ws[row]:
        cell.font = header_font
        cell.fill = fill
        cell.alignment = align
        cell.border = border


def _autosize_columns(ws, min_width=10, max_width=45):
    """Auto-size columns based on content"""
    for col in range(1, ws.max_column + 1):
        letter = get_column_letter(col)
        max_len = 0
        for cell in ws[letter]:
            v = cell.value
            if v is None:
                continue
            max_len = max(max_len, len(str(v)))
        ws.column_dimensions[letter].width = max(min_width, min(max_width, max_len + 2))


def _new_sheet(wb, title, headers):
    ws = wb.create_sheet(title)
    ws.append(headers)
    _style_header(ws, 1)
    ws.freeze_panes = "A2"
    return ws


def _money_format(ws, columns, fmt="0.00"):
    for r in range(2, ws.max_row + 1):
        for c in columns:
            ws.cell(r, c).number_format = fmt


def export_excel(
    ledger: Ledger,
    filepath: str,
    today: Union[date, str],
    period: Optional[Period] = None,
) -> None:
    """
    Export ledger to Excel file with multiple sheets:
    - History: expenses of the settled period, newest first
    - Balances: paid, equal share and balance per participant
    - Transfers: who pays whom to settle the period
    - Analysis: every period's totals by category and by payer
    """
    wb = Workbook()
    # remove default sheet
    wb.remove(wb.active)

    result = settle_period(ledger, today, period)

    ws = _new_sheet(wb, "History", ["Date", "Payer", "Amount", "Category", "ID"])
    for e in sort_history(result.expenses):
        ws.append([e.date, e.payer, e.amount, e.category, e.id])
    _money_format(ws, [3])
    _autosize_columns(ws)

    ws = _new_sheet(wb, "Balances", ["Person", "Paid", "Equal Share", "Balance"])
    for p in ledger.participants:
        paid = result.balances[p] + result.equal_share
        ws.append([p, paid, result.equal_share, result.balances[p]])
    ws.append(["TOTAL", result.total, result.total, None])
    trow = ws.max_row
    ws.cell(trow, 1).font = Font(bold=True)
    ws.cell(trow, 4).value = f"=SUM(D2:D{trow - 1})"
    _money_format(ws, [2, 3, 4])
    _autosize_columns(ws)

    ws = _new_sheet(wb, "Transfers", ["From (Debtor)", "To (Creditor)", "Amount"])
    for t in result.transfers:
        ws.append([t.from_person, t.to_person, t.amount])
    _money_format(ws, [3])
    _autosize_columns(ws)

    ws = _new_sheet(wb, "Analysis", ["Period", "Kind", "Name", "Amount", "Share"])
    for pa in compute_period_analysis(ledger.expenses, ledger.period_config):
        ws.append([pa.period_key, "total", "", pa.total_amount, 1.0 if pa.total_amount else 0.0])
        ws.cell(ws.max_row, 1).font = Font(bold=True)
        ws.cell(ws.max_row, 1).fill = PatternFill("solid", fgColor="D9E1F2")
        for cat, amt in pa.category_totals.items():
            ws.append([pa.period_key, "category", cat, amt, pa.category_share(cat)])
        for person, amt in pa.participant_totals.items():
            ws.append([pa.period_key, "payer", person, amt, pa.participant_share(person)])
    _money_format(ws, [4])
    _money_format(ws, [5], "0.0%")
    _autosize_columns(ws)

    wb.save(filepath)
    logger.info("Exported %s report to %s", result.period.key, filepath)
