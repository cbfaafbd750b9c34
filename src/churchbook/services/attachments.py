"""File manager: receipts and documents attached to transactions."""

from __future__ import annotations

import base64
import binascii
import mimetypes
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from ..errors import AttachmentError
from ..logging_config import get_logger
from ..models.transaction import Transaction, TransactionType
from .ledger_service import sort_newest_first

logger = get_logger("attachments")

_DATA_URL = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(;[^,;]+)*?);base64,(?P<data>.*)$", re.S)

# mimetypes gives odd picks (e.g. .jpe) for a few common types
_PREFERRED_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "application/pdf": ".pdf",
}


@dataclass(frozen=True)
class Attachment:
    """Decoded attachment payload."""

    mime_type: str
    data: bytes

    @property
    def extension(self) -> str:
        return _PREFERRED_EXTENSIONS.get(self.mime_type) or mimetypes.guess_extension(self.mime_type) or ".bin"

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


def list_attachments(
    transactions: Iterable[Transaction],
    *,
    year: Optional[int] = None,
    month: Optional[int] = None,
    txn_type: Optional[TransactionType] = None,
) -> list[Transaction]:
    """Transactions carrying an attachment, filtered and newest first."""

    files = [t for t in transactions if t.attachment_url is not None]
    if year is not None:
        files = [t for t in files if t.date.year == year]
    if month is not None:
        files = [t for t in files if t.date.month == month]
    if txn_type is not None:
        files = [t for t in files if t.type is txn_type]
    return sort_newest_first(files)


def decode_data_url(url: str) -> Attachment:
    """Decode a ``data:<mime>;base64,<payload>`` reference."""

    match = _DATA_URL.match(url.strip())
    if match is None:
        raise AttachmentError("Attachment is not a base64 data URL")
    try:
        payload = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise AttachmentError("Attachment payload is not valid base64") from exc
    return Attachment(mime_type=match.group("mime") or "application/octet-stream", data=payload)


def encode_data_url(data: bytes, mime_type: str) -> str:
    """Build the data URL stored on a transaction for an uploaded file."""

    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def encode_file(path: Path) -> str:
    """Read a file from disk into a data URL, guessing its mime type."""

    mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return encode_data_url(path.read_bytes(), mime_type)


def save_attachment(transaction: Transaction, output_dir: Path) -> Path:
    """Write a transaction's attachment to ``output_dir`` and return the path."""

    if transaction.attachment_url is None:
        raise AttachmentError(f"Transaction {transaction.id} has no attachment")
    attachment = decode_data_url(transaction.attachment_url)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{transaction.date.isoformat()}_{transaction.id}{attachment.extension}"
    path.write_bytes(attachment.data)
    logger.info(
        "Attachment saved",
        extra={"transaction_id": transaction.id, "path": str(path), "size": len(attachment.data)},
    )
    return path
