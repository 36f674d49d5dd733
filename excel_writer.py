"""Write decoded X12 segments to a readable Excel workbook."""

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter


# Styling constants
HEADER_FONT = Font(name="Calibri", bold=True, color="FFFFFF", size=11)
HEADER_FILL = PatternFill(start_color="2B5797", end_color="2B5797", fill_type="solid")
HEADER_ALIGNMENT = Alignment(horizontal="center", vertical="center", wrap_text=True)
THIN_BORDER = Border(
    left=Side(style="thin", color="D0D0D0"),
    right=Side(style="thin", color="D0D0D0"),
    top=Side(style="thin", color="D0D0D0"),
    bottom=Side(style="thin", color="D0D0D0"),
)
ALT_ROW_FILL = PatternFill(start_color="EBF1F8", end_color="EBF1F8", fill_type="solid")
UNRECOGNIZED_FONT = Font(name="Calibri", italic=True, color="808080")

# Excel limits sheet titles to 31 characters
MAX_SHEET_TITLE = 31


def style_header(ws, num_cols):
    """Apply header styling to the first row."""
    for col in range(1, num_cols + 1):
        cell = ws.cell(row=1, column=col)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = HEADER_ALIGNMENT
        cell.border = THIN_BORDER


def style_data(ws, num_rows, num_cols):
    """Apply data styling: alternating rows and borders."""
    for row in range(2, num_rows + 1):
        for col in range(1, num_cols + 1):
            cell = ws.cell(row=row, column=col)
            cell.border = THIN_BORDER
            cell.alignment = Alignment(vertical="center")
            if (row % 2) == 0:
                cell.fill = ALT_ROW_FILL


def auto_width(ws, num_cols, max_width=50):
    """Auto-size column widths based on content."""
    for col in range(1, num_cols + 1):
        max_len = 0
        for row in ws.iter_rows(min_col=col, max_col=col, values_only=True):
            val = str(row[0]) if row[0] is not None else ""
            max_len = max(max_len, len(val))
        adjusted = min(max_len + 3, max_width)
        ws.column_dimensions[get_column_letter(col)].width = max(adjusted, 10)


def cell_text(value):
    """Escape control characters openpyxl refuses to store (e.g. \\x1d delimiters)."""
    if not isinstance(value, str):
        return value
    return ILLEGAL_CHARACTERS_RE.sub(lambda m: f"\\x{ord(m.group()):02x}", value)


def write_sheet(ws, headers, rows):
    """Write a complete sheet with headers, data, and styling."""
    for col_idx, header in enumerate(headers, 1):
        ws.cell(row=1, column=col_idx, value=cell_text(header))

    for row_idx, row_data in enumerate(rows, 2):
        for col_idx, value in enumerate(row_data, 1):
            ws.cell(row=row_idx, column=col_idx, value=cell_text(value))

    num_cols = len(headers)
    style_header(ws, num_cols)
    style_data(ws, len(rows) + 1, num_cols)
    auto_width(ws, num_cols)
    ws.freeze_panes = "A2"


def _raw_text(edi, record):
    if record.raw_value is not None:
        return record.raw_value
    return edi.segments[record.index - 1]


def write_segments_excel(documents, output_path):
    """Write decoded segments from one or more files into a single workbook.

    Sheets:
        Segments  - every decoded segment, recognized or not
        <code>    - one per recognized segment code, a column per declared field
        Errors    - segments skipped while decoding (only when there are any)

    Args:
        documents: list of (filename, EDIFile) tuples
        output_path: file path for the output Excel file
    """
    wb = Workbook()

    # --- Segments overview ---
    ws_segments = wb.active
    ws_segments.title = "Segments"
    overview_headers = ["Source File", "Index", "Segment", "Recognized", "Raw Segment"]
    overview_rows = []
    by_code = {}
    for filename, edi in documents:
        for record in edi.records:
            overview_rows.append([
                filename, record.index, record.code,
                "Yes" if record.recognized else "No",
                _raw_text(edi, record),
            ])
            if record.recognized:
                by_code.setdefault(record.code, []).append((filename, edi, record))
    write_sheet(ws_segments, overview_headers, overview_rows)
    for row_idx, row in enumerate(overview_rows, 2):
        if row[3] == "No":
            ws_segments.cell(row=row_idx, column=3).font = UNRECOGNIZED_FONT

    # --- One sheet per recognized segment code ---
    for code in sorted(by_code):
        entries = by_code[code]
        _, edi, _ = entries[0]
        field_names = [f.name for f in edi.decoder.fields_for(code)]
        ws = wb.create_sheet(code[:MAX_SHEET_TITLE])
        rows = []
        for filename, _, record in entries:
            rows.append([filename, record.index] + [record.get(name) for name in field_names])
        write_sheet(ws, ["Source File", "Index"] + field_names, rows)

    # --- Skipped segments ---
    error_rows = [
        [filename, index, message]
        for filename, edi in documents
        for index, message in edi.errors
    ]
    if error_rows:
        write_sheet(wb.create_sheet("Errors"), ["Source File", "Index", "Error"], error_rows)

    wb.save(output_path)
    return output_path
