"""
Document export for invoices and order reports.

export_document() is a pure transform: a validated ExportRequest in,
(filename, bytes) out. No network access is involved.
"""

from order_desk.export.common import (
    COLUMNS,
    ExportFormat,
    ExportMode,
    ExportRequest,
    ExportRow,
)
from order_desk.export.excel import render_xlsx
from order_desk.export.pdf import render_pdf
from order_desk.errors import ExportError, ValidationError
from order_desk.lib import logs

LOG = logs.logger(__file__)

_RENDERERS = {
    "pdf": render_pdf,
    "xlsx": render_xlsx,
}


def export_document(request: ExportRequest, fmt: ExportFormat) -> tuple[str, bytes]:
    """
    Render the request in the given format.

    Returns:
        (filename, document bytes)

    Raises:
        ValidationError: If the request is incomplete (nothing rendered).
        ExportError: If the renderer fails.
    """
    try:
        renderer = _RENDERERS[fmt]
    except KeyError as exc:
        raise ValidationError(f"Unknown export format: {fmt}") from exc
    request.validate()
    try:
        data = renderer(request)
    except ValidationError:
        raise
    except Exception as exc:
        LOG.error("Export to %s failed: %s", fmt, exc, exc_info=True)
        raise ExportError(f"Could not create the {fmt.upper()} file") from exc
    filename = request.filename(fmt)
    LOG.info("Exported %s rows to %s", len(request.orders), filename)
    return filename, data


__all__ = [
    "COLUMNS",
    "ExportFormat",
    "ExportMode",
    "ExportRequest",
    "ExportRow",
    "export_document",
    "render_pdf",
    "render_xlsx",
]
