"""Local file delivery: one-shot salary slip PDFs and employee photos."""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path
from urllib.parse import unquote

import aiofiles
import aiofiles.os
from fastapi.responses import StreamingResponse

from hrms_service_libs.logging_utils import create_service_logger

logger = create_service_logger("hrms_bff.file_delivery")

CHUNK_SIZE = 64 * 1024


def decode_path(raw_path: str | None) -> str:
    """URL-decode a path received as a query parameter; None becomes ""."""
    return unquote(raw_path or "")


async def file_exists(path: str) -> bool:
    return bool(path) and bool(await aiofiles.os.path.isfile(path))


async def stream_then_delete(path: Path, chunk_size: int = CHUNK_SIZE) -> AsyncIterator[bytes]:
    """Yield the file in chunks, then delete it on every exit path.

    A failed delete is logged and never surfaced to the client.
    """
    try:
        async with aiofiles.open(path, "rb") as f:
            while chunk := await f.read(chunk_size):
                yield chunk
    finally:
        try:
            await aiofiles.os.remove(path)
            logger.info("Deleted delivered file", file_path=str(path))
        except OSError as e:
            logger.warning("Failed to delete delivered file", file_path=str(path), error=str(e))


def one_shot_pdf_response(path: Path, *, as_attachment: bool) -> StreamingResponse:
    """Stream a generated PDF inline or as a download, deleting it afterwards."""
    disposition = f'attachment; filename="{path.name}"' if as_attachment else "inline"
    return StreamingResponse(
        stream_then_delete(path),
        media_type="application/pdf",
        headers={"Content-Disposition": disposition},
    )
