"""Spreadsheet (XLSX) renderer for invoices and order reports."""

from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from order_desk.export.common import COLUMNS, ExportRequest
from order_desk.utils import round_money

MONEY_FORMAT = "#,##0.00"

# Client, Class, Product, Week, Description, Units, Unit Price, Total
_COLUMN_WIDTHS = [20, 12, 20, 10, 30, 10, 12, 14]


def render_xlsx(request: ExportRequest) -> bytes:
    """
    Render the request as an XLSX workbook.

    Raises:
        ValidationError: If the request has no rows or lacks a client in
            invoice mode.
    """
    request.validate()
    wb = Workbook()
    ws = wb.active
    ws.title = "Invoice" if request.mode == "invoice" else "Report"

    # ---------- Styles ----------
    header_fill = PatternFill("solid", fgColor="22223B")
    header_font = Font(bold=True, color="FFFFFF")
    bold = Font(bold=True)
    thin = Side(style="thin")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)

    # ---------- Document header ----------
    ws.append([request.heading])
    ws["A1"].font = Font(bold=True, size=14)
    ws.append([])
    ws.append(["Generated:", request.render_date(request.generated_at)])
    ws.append(["Period:", request.period])
    if request.mode == "invoice":
        client = request.client
        ws.append([])
        ws.append(["Bill To:"])
        ws.append(["Client Name:", client.client_name])
        ws.append(["Institution:", client.institution])
        ws.append(["Email:", client.email])
        ws.append(["Phone:", client.phone])
    else:
        ws.append(["Total Orders:", len(request.orders)])
    ws.append([])

    # ---------- Table header ----------
    ws.append(list(COLUMNS))
    header_row = ws.max_row
    for col in range(1, len(COLUMNS) + 1):
        cell = ws.cell(row=header_row, column=col)
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = Alignment(horizontal="center", vertical="center")
        cell.border = border

    # ---------- Data rows ----------
    for row in request.rows:
        ws.append(
            [
                row.client,
                row.order_class,
                row.product,
                row.week,
                row.description,
                row.quantity,
                float(round_money(row.unit_price)),
                float(round_money(row.line_total)),
            ]
        )
        current = ws.max_row
        for col in range(1, len(COLUMNS) + 1):
            ws.cell(row=current, column=col).border = border
        ws.cell(row=current, column=7).number_format = MONEY_FORMAT
        ws.cell(row=current, column=8).number_format = MONEY_FORMAT

    # ---------- Summary ----------
    ws.append([])
    ws.append(["", "", "", "", "", "", request.total_label, float(round_money(request.total_amount))])
    summary_row = ws.max_row
    ws.cell(row=summary_row, column=7).font = bold
    total_cell = ws.cell(row=summary_row, column=8)
    total_cell.font = bold
    total_cell.number_format = MONEY_FORMAT

    for index, width in enumerate(_COLUMN_WIDTHS, start=1):
        ws.column_dimensions[get_column_letter(index)].width = width

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
