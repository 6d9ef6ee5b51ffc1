"""
Spreadsheet export for team activity (openpyxl).
"""

from io import BytesIO

from django.utils import timezone
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font

WORKSHEET_NAME = 'Team Activities'
FILENAME_PREFIX = 'team-activities'

# (header, column width)
COLUMNS = [
    ('Developer', 15),
    ('Date', 12),
    ('Meeting Type', 15),
    ('Summary', 50),
    ('Tickets', 20),
    ('Submitted', 20),
]

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def format_date(value):
    """e.g. Mar 2, 2026"""
    return f"{value:%b} {value.day}, {value.year}"


def format_datetime(value):
    """e.g. Mar 2, 2026 4:30 PM, in the server time zone."""
    value = timezone.localtime(value)
    hour = value.hour % 12 or 12
    return f"{format_date(value)} {hour}:{value:%M %p}"


def export_filename(today=None):
    today = today or timezone.localdate()
    return f"{FILENAME_PREFIX}-{today.isoformat()}.xlsx"


def build_workbook(activities):
    """
    Build the team activity workbook.

    Args:
        activities: Iterable of Activity with `user` loaded

    Returns:
        openpyxl.Workbook with a single "Team Activities" sheet
    """
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = WORKSHEET_NAME

    sheet.append([header for header, _ in COLUMNS])
    for cell in sheet[1]:
        cell.font = Font(bold=True)

    for activity in activities:
        sheet.append([
            activity.user.get_full_name(),
            format_date(activity.date),
            activity.meeting_type,
            activity.summary,
            ', '.join(activity.ticket_list),
            format_datetime(activity.created_at),
        ])

    for index, (_, width) in enumerate(COLUMNS, start=1):
        sheet.column_dimensions[sheet.cell(row=1, column=index).column_letter].width = width

    summary_column = sheet.cell(row=1, column=4).column_letter
    for cell in sheet[summary_column][1:]:
        cell.alignment = Alignment(wrap_text=True, vertical='top')

    return workbook


def workbook_bytes(workbook):
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
