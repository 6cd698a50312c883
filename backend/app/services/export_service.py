"""
Spreadsheet exports: one printable sheet per group, and a flat roster sheet
that the roster import reads back.
"""
from __future__ import annotations

import io
import logging
from typing import List, Optional

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from app.core.config import get_settings
from app.grouping.models import Group, GroupingResult
from app.schemas.player import Player

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

GROUP_COLUMNS = ["#", "Name", "Pos", "Status", "Rec", "Hadir", "Height", "Weight", "Age", "Scouting Result"]
GROUP_WIDTHS = [5, 25, 10, 15, 15, 10, 10, 10, 8, 15]

ROSTER_COLUMNS = [
    ("name", "Name", 20),
    ("position", "Position", 15),
    ("age", "Age", 8),
    ("height", "Height", 10),
    ("weight", "Weight", 10),
    ("experience", "Experience", 12),
    ("foot", "Foot", 10),
    ("status", "Status", 15),
    ("tags", "Tags", 20),
    ("domisili", "Domisili", 15),
    ("jurusan", "Jurusan", 15),
    ("scout_recommendation", "Scout Rating", 12),
]

_THIN = Side(style="thin")
BORDER = Border(top=_THIN, left=_THIN, bottom=_THIN, right=_THIN)
HEADER_FILL = PatternFill(fill_type="solid", fgColor="FFD3D3D3")
ROSTER_HEADER_FILL = PatternFill(fill_type="solid", fgColor="FFE0E0E0")
TOP_LEFT = Alignment(vertical="top", horizontal="left", wrap_text=True)


def _style_row(ws, row: int, columns: int, header: bool = False) -> None:
    for col in range(1, columns + 1):
        cell = ws.cell(row=row, column=col)
        cell.border = BORDER
        if header:
            cell.font = Font(bold=True)
            cell.fill = HEADER_FILL


def _group_table(group: Group) -> pd.DataFrame:
    rows = []
    for idx, entry in enumerate(group.players, start=1):
        p = entry.player
        rows.append(
            [
                idx,
                p.name,
                p.position,
                p.status[0] if p.status else "-",
                p.scout_recommendation or 0,
                "",
                p.height if p.height is not None else "",
                p.weight if p.weight is not None else "",
                p.age if p.age else "",
                "",
            ]
        )
    return pd.DataFrame(rows, columns=GROUP_COLUMNS)


def _write_group_sheet(writer: pd.ExcelWriter, index: int, group: Group, top_players: int, summary_rows: int) -> None:
    sheet = f"Group {index + 1}"
    table = _group_table(group)
    # Rows 1-2 hold the sheet heading; the table header lands on row 3
    table.to_excel(writer, sheet_name=sheet, index=False, startrow=2)
    ws = writer.sheets[sheet]

    for col, width in enumerate(GROUP_WIDTHS, start=1):
        ws.column_dimensions[get_column_letter(col)].width = width

    ws.cell(row=1, column=1, value="Scout Name:")
    ws.cell(row=2, column=1, value=f"(Group {index + 1})")
    ws.cell(row=2, column=3, value=f"(Group Rating: {group.total_rating:.1f})")

    header_row = 3
    _style_row(ws, header_row, len(GROUP_COLUMNS), header=True)
    for offset in range(len(table)):
        _style_row(ws, header_row + 1 + offset, len(GROUP_COLUMNS))

    row = header_row + len(table) + 2
    ws.cell(row=row, column=1, value="Scouting Result").font = Font(bold=True)
    row += 1
    for col, label in ((1, "Num"), (2, "Name"), (10, "Summary")):
        ws.cell(row=row, column=col, value=label)
    _style_row(ws, row, len(GROUP_COLUMNS), header=True)

    ranked = sorted(group.players, key=lambda e: e.player.scout_recommendation or 0, reverse=True)[:top_players]
    for entry in ranked:
        start = row + 1
        end = start + summary_rows
        for r in range(start, end + 1):
            _style_row(ws, r, len(GROUP_COLUMNS))
        ws.cell(row=start, column=2, value=entry.player.name)
        ws.cell(row=start, column=10, value="Summary")
        for col in (1, 2, 10):
            ws.merge_cells(start_row=start, start_column=col, end_row=end, end_column=col)
            ws.cell(row=start, column=col).alignment = TOP_LEFT
        row = end


def groups_workbook(result: GroupingResult, top_players: Optional[int] = None, summary_rows: Optional[int] = None) -> bytes:
    if not result.groups:
        raise ValueError("Not enough players to form a group; nothing to export")
    settings = get_settings()
    top = settings.export_top_players if top_players is None else top_players
    blanks = settings.export_summary_rows if summary_rows is None else summary_rows

    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        for index, group in enumerate(result.groups):
            _write_group_sheet(writer, index, group, top, blanks)
    logger.info("Exported %d group sheets", len(result.groups))
    return buf.getvalue()


def roster_workbook(players: List[Player]) -> bytes:
    rows = []
    for p in players:
        data = p.model_dump()
        data["status"] = ", ".join(p.status)
        data["tags"] = ", ".join(p.tags)
        data["scout_recommendation"] = p.scout_recommendation or 0
        rows.append({header: data.get(key) for key, header, _ in ROSTER_COLUMNS})
    df = pd.DataFrame(rows, columns=[header for _, header, _ in ROSTER_COLUMNS])

    buf = io.BytesIO()
    with pd.ExcelWriter(buf, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name="Players", index=False)
        ws = writer.sheets["Players"]
        for col, (_, _, width) in enumerate(ROSTER_COLUMNS, start=1):
            ws.column_dimensions[get_column_letter(col)].width = width
            cell = ws.cell(row=1, column=col)
            cell.font = Font(bold=True)
            cell.fill = ROSTER_HEADER_FILL
    return buf.getvalue()
