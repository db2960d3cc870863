"""Allowance claim attachments: validation, storage and upstream payload shaping."""

from __future__ import annotations

import os
import random
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from uuid import UUID

import aiofiles
import aiofiles.os
from starlette.datastructures import UploadFile

from hrms_bff_service import SERVICE_NAME
from hrms_bff_service.dto.records_v1 import parse_lenient_float
from hrms_service_libs.error_handling import (
    HrmsError,
    raise_processing_error,
    raise_validation_error,
)
from hrms_service_libs.logging_utils import create_service_logger

logger = create_service_logger("hrms_bff.uploads")

ALLOWED_FILE_TYPES = re.compile(r"jpeg|jpg|png|pdf|doc|docx")
DEFAULT_ATTACHMENT_REMARK = "File attachment"


@dataclass(frozen=True)
class PendingAttachment:
    """An upload that passed validation, buffered but not yet written."""

    field_name: str
    filename: str
    data: bytes


@dataclass(frozen=True)
class StoredAttachment:
    """An uploaded file persisted under the allowance upload directory."""

    field_name: str
    filename: str
    path: Path


def _blank(value: Any) -> bool:
    return value is None or value is False or (isinstance(value, str) and not value.strip())


def validate_allowance_entries(entries: Any) -> str | None:
    """Return the first problem with the claimed entries, or None when all are valid.

    Entries are numbered from 1 in messages.
    """
    if not isinstance(entries, list) or not entries:
        return "At least one allowance entry is required"
    for index, entry in enumerate(entries, start=1):
        if not isinstance(entry, dict) or _blank(entry.get("ls_EXTYPE")):
            return f"Allowance type is required for entry {index}"
        if _blank(entry.get("ld_AMT")) or parse_lenient_float(entry.get("ld_AMT")) <= 0:
            return f"Valid amount is required for entry {index}"
        if _blank(entry.get("ls_APLYDATE")):
            return f"Date is required for entry {index}"
    return None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _line_id(value: Any, fallback: int) -> int:
    try:
        return int(parse_lenient_float(value)) or fallback
    except (TypeError, ValueError, OverflowError):
        return fallback


class AllowanceAttachmentStore:
    """Stores attachments locally and names them the way the upstream expects.

    Uploads go through `accept` first, which checks the type and buffers the
    content within the size limit. Nothing is written until every upload of a
    request has been accepted.
    """

    def __init__(self, upload_dir: Path, upstream_root: str, max_file_bytes: int) -> None:
        self._upload_dir = upload_dir
        self._upstream_root = upstream_root.rstrip("\\")
        self._max_file_bytes = max_file_bytes

    def upstream_path(self, expense_type: str, filename: str) -> str:
        return f"{self._upstream_root}\\{expense_type}\\{filename}"

    def check(self, field_name: str, upload: UploadFile, correlation_id: UUID) -> None:
        """Reject files whose extension or content type is not a document or image."""
        extension = os.path.splitext(upload.filename or "")[1].lower()
        content_type = upload.content_type or ""
        if not (ALLOWED_FILE_TYPES.search(extension) and ALLOWED_FILE_TYPES.search(content_type)):
            raise_validation_error(
                service=SERVICE_NAME,
                operation="allowance_apply",
                field=field_name,
                message="Only images, PDFs, and documents are allowed!",
                correlation_id=correlation_id,
                value=upload.filename,
            )

    async def accept(
        self, field_name: str, upload: UploadFile, correlation_id: UUID
    ) -> PendingAttachment:
        """Check one upload and read it into memory, enforcing the size limit."""
        self.check(field_name, upload, correlation_id)
        data = await upload.read(self._max_file_bytes + 1)
        if len(data) > self._max_file_bytes:
            raise_validation_error(
                service=SERVICE_NAME,
                operation="allowance_apply",
                field=field_name,
                message=(
                    f"File too large. Maximum size is {self._max_file_bytes // (1024 * 1024)}MB"
                ),
                correlation_id=correlation_id,
                value=upload.filename,
            )
        return PendingAttachment(field_name=field_name, filename=upload.filename or "", data=data)

    async def save(self, pending: PendingAttachment, correlation_id: UUID) -> StoredAttachment:
        """Persist one accepted upload under a unique name."""
        extension = os.path.splitext(pending.filename)[1]
        filename = (
            f"{pending.field_name}-{int(time.time() * 1000)}-{random.randint(0, 10**9)}{extension}"
        )
        path = self._upload_dir / filename
        try:
            await aiofiles.os.makedirs(self._upload_dir, exist_ok=True)
            async with aiofiles.open(path, "wb") as f:
                await f.write(pending.data)
        except OSError as e:
            logger.error(
                "Failed to store allowance attachment",
                file_path=str(path),
                correlation_id=str(correlation_id),
                exc_info=True,
            )
            raise_processing_error(
                service=SERVICE_NAME,
                operation="allowance_apply",
                message="Failed to store attachment",
                correlation_id=correlation_id,
                error=str(e),
            )

        logger.info(
            "Stored allowance attachment",
            field_name=pending.field_name,
            file_path=str(path),
            size=len(pending.data),
            correlation_id=str(correlation_id),
        )
        return StoredAttachment(field_name=pending.field_name, filename=filename, path=path)

    async def save_all(
        self, pending: list[PendingAttachment], correlation_id: UUID
    ) -> list[StoredAttachment]:
        """Persist accepted uploads; a failed write removes the ones already stored."""
        stored: list[StoredAttachment] = []
        try:
            for attachment in pending:
                stored.append(await self.save(attachment, correlation_id))
        except HrmsError:
            for attachment in stored:
                await self._discard(attachment, correlation_id)
            raise
        return stored

    async def _discard(self, attachment: StoredAttachment, correlation_id: UUID) -> None:
        try:
            await aiofiles.os.remove(attachment.path)
        except OSError:
            logger.warning(
                "Failed to remove allowance attachment",
                file_path=str(attachment.path),
                correlation_id=str(correlation_id),
                exc_info=True,
            )

    def build_entries(
        self,
        entries: list[dict[str, Any]],
        attachments: list[StoredAttachment],
    ) -> list[dict[str, Any]]:
        """Shape validated entries for AllowenceApply, linking file references to uploads.

        A file reference's `ls_FILEPATH` names the multipart field of its
        upload; references without a matching upload are dropped.
        """
        by_field = {attachment.field_name: attachment for attachment in attachments}
        processed: list[dict[str, Any]] = []
        for index, entry in enumerate(entries, start=1):
            expense_type = _text(entry.get("ls_EXTYPE"))
            files: list[dict[str, str]] = []
            for file_ref in entry.get("lst_ClsAllowenceFileDtl") or []:
                if not isinstance(file_ref, dict):
                    continue
                attachment = by_field.get(_text(file_ref.get("ls_FILEPATH")))
                if attachment is None:
                    continue
                files.append(
                    {
                        "ls_FILEPATH": self.upstream_path(expense_type, attachment.filename),
                        "ls_REMARKS": file_ref.get("ls_REMARKS")
                        or entry.get("ls_REMARKS")
                        or DEFAULT_ATTACHMENT_REMARK,
                    }
                )
            processed.append(
                {
                    "li_LineId": _line_id(entry.get("li_LineId"), index),
                    "ls_EMPCODE": _text(entry.get("ls_EMPCODE")),
                    "ls_EXTYPE": expense_type,
                    "ls_APLYDATE": _text(entry.get("ls_APLYDATE")),
                    "ld_AMT": parse_lenient_float(entry.get("ld_AMT")),
                    "ls_REMARKS": _text(entry.get("ls_REMARKS")),
                    "lst_ClsAllowenceFileDtl": files or None,
                }
            )
        return processed
