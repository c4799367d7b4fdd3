"""Encoders turning a ReportTable into downloadable bytes."""
from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from app.services.report_service import ReportTable

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MEDIA_TYPE = "application/pdf"


def _cell(value):
    return "" if value is None else value


def to_xlsx(table: ReportTable) -> bytes:
    wb = Workbook()
    ws = wb.active
    ws.title = "Report"
    ws.append(table.columns)
    for row in table.rows:
        ws.append([_cell(v) for v in row])

    header_font = Font(bold=True)
    header_fill = PatternFill(start_color="E6E6FA", end_color="E6E6FA", fill_type="solid")
    for cell in ws[1]:
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center")

    for column_cells in ws.columns:
        length = max(len(str(cell.value or "")) for cell in column_cells)
        ws.column_dimensions[get_column_letter(column_cells[0].column)].width = min(length + 2, 50)
    ws.freeze_panes = "A2"

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


def to_pdf(table: ReportTable) -> bytes:
    buffer = BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=landscape(A4), title=table.title)
    styles = getSampleStyleSheet()

    story = [Paragraph(table.title, styles["Title"])]
    if table.generated_at is not None:
        story.append(Paragraph(f"Generated {table.generated_at:%Y-%m-%d %H:%M} UTC", styles["Normal"]))
    story.append(Spacer(1, 12))

    data = [table.columns] + [[str(_cell(v)) for v in row] for row in table.rows]
    grid = Table(data, repeatRows=1)
    grid.setStyle(TableStyle([
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("BACKGROUND", (0, 0), (-1, 0), colors.lavender),
        ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]))
    story.append(grid)

    doc.build(story)
    return buffer.getvalue()


ENCODERS = {
    "excel": (to_xlsx, XLSX_MEDIA_TYPE, "xlsx"),
    "pdf": (to_pdf, PDF_MEDIA_TYPE, "pdf"),
}
