"""Tabular renderings of filtered entry and request sets."""
import csv
from io import BytesIO, StringIO
from typing import Iterable, List
from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Border, Side
from app.models.work_entry import WorkEntry
from app.models.work_hour_request import WorkHourRequest

WORK_ENTRY_COLUMNS = ["Employee ID", "Employee", "Date", "Work Type", "Description", "Time Spent", "Status"]
WORK_HOUR_REQUEST_COLUMNS = ["Employee ID", "Employee", "Requested Date", "Reason", "Status", "Manager Comments"]


def work_entry_rows(entries: Iterable[WorkEntry]) -> List[list]:
    """Entries must carry their owner (see ``work_entries.list_all``)."""
    return [
        [
            entry.user.employee_id,
            entry.user.full_name,
            entry.date.isoformat(),
            entry.work_type.value,
            entry.description,
            str(entry.time_spent),
            entry.status.value,
        ]
        for entry in entries
    ]


def work_hour_request_rows(requests: Iterable[WorkHourRequest]) -> List[list]:
    return [
        [
            request.employee.employee_id,
            request.employee.full_name,
            request.requested_date.isoformat(),
            request.reason,
            request.status.value,
            request.manager_comments or "",
        ]
        for request in requests
    ]


def to_csv(columns: List[str], rows: List[list]) -> str:
    buffer = StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(columns)
    writer.writerows(rows)
    return buffer.getvalue()


def to_xlsx(columns: List[str], rows: List[list], title: str = "Work Entries") -> BytesIO:
    wb = Workbook()
    ws = wb.active
    ws.title = title

    header_font = Font(bold=True, color="FFFFFF")
    header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
    border = Border(left=Side(style='thin'), right=Side(style='thin'),
                    top=Side(style='thin'), bottom=Side(style='thin'))

    for col, header in enumerate(columns, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.fill = header_fill
        cell.font = header_font
        cell.border = border

    for row_num, values in enumerate(rows, 2):
        for col, val in enumerate(values, 1):
            cell = ws.cell(row=row_num, column=col, value=val)
            cell.border = border

    for letter, width in zip("ABCDEFG", (14, 24, 12, 14, 48, 12, 12)):
        ws.column_dimensions[letter].width = width

    excel_file = BytesIO()
    wb.save(excel_file)
    excel_file.seek(0)
    return excel_file
