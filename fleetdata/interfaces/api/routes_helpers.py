"""Helper utilities shared across API route handlers."""

from fastapi import Response

from fleetdata.infrastructure.workbooks import EXCEL_CONTENT_TYPE


def excel_response(content: bytes, filename: str) -> Response:
    """Return ``content`` as a downloadable workbook named ``filename``."""

    return Response(
        content=content,
        media_type=EXCEL_CONTENT_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


__all__ = ["excel_response"]
