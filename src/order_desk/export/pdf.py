"""
Tabular-print (PDF) renderer for invoices and order reports.

Uses reportlab's platypus layout so long descriptions wrap and tables
continue across pages.
"""

from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from order_desk.export.common import COLUMNS, ExportRequest
from order_desk.utils import format_money

_HEADER_FILL = colors.Color(34 / 255, 34 / 255, 59 / 255)
_ZEBRA_FILL = colors.Color(0.95, 0.95, 0.97)
# Client, Class, Product, Week, Description, Units, Unit Price, Total
_COLUMN_WIDTHS = [38 * mm, 24 * mm, 34 * mm, 20 * mm, 70 * mm, 16 * mm, 24 * mm, 26 * mm]


def render_pdf(request: ExportRequest) -> bytes:
    """
    Render the request as a PDF document.

    Raises:
        ValidationError: If the request has no rows or lacks a client in
            invoice mode.
    """
    request.validate()
    styles = getSampleStyleSheet()
    cell_style = styles["BodyText"].clone("cell", fontSize=8, leading=10)

    story = [
        Paragraph(escape(request.heading), styles["Title"]),
        Paragraph(f"Generated: {request.render_date(request.generated_at)}", styles["Normal"]),
        Paragraph(f"Period: {request.period}", styles["Normal"]),
    ]
    if request.mode == "invoice":
        client = request.client
        story.append(Spacer(1, 4 * mm))
        story.append(Paragraph("<b>Bill To:</b>", styles["Normal"]))
        for line in (client.client_name, client.institution, client.email, client.phone):
            if line:
                story.append(Paragraph(escape(line), styles["Normal"]))
    else:
        story.append(Paragraph(f"Total Orders: {len(request.orders)}", styles["Normal"]))
    story.append(Spacer(1, 6 * mm))

    body = [
        [Paragraph(escape(text), cell_style) if index == 4 else text for index, text in enumerate(row.cells())]
        for row in request.rows
    ]
    summary = ["", "", "", "", "", "", request.total_label, format_money(request.total_amount)]
    table = Table([list(COLUMNS), *body, summary], colWidths=_COLUMN_WIDTHS, repeatRows=1)
    table.setStyle(_table_style(len(body)))
    story.append(table)

    story.append(Spacer(1, 8 * mm))
    if request.mode == "invoice":
        story.append(Paragraph("Thank you for your business!", styles["Italic"]))

    buffer = BytesIO()
    document = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        leftMargin=12 * mm,
        rightMargin=12 * mm,
        topMargin=12 * mm,
        bottomMargin=12 * mm,
        title=request.filename("pdf"),
    )
    document.build(story)
    return buffer.getvalue()


def _table_style(row_count: int) -> TableStyle:
    summary_row = row_count + 1
    commands = [
        ("BACKGROUND", (0, 0), (-1, 0), _HEADER_FILL),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 8),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("ALIGN", (5, 0), (-1, -1), "RIGHT"),
        ("FONTNAME", (7, 1), (7, -1), "Helvetica-Bold"),
        ("LINEABOVE", (0, summary_row), (-1, summary_row), 0.75, colors.black),
        ("FONTNAME", (0, summary_row), (-1, summary_row), "Helvetica-Bold"),
    ]
    for row in range(2, summary_row, 2):
        commands.append(("BACKGROUND", (0, row), (-1, row), _ZEBRA_FILL))
    return TableStyle(commands)
