"""CSV export helpers for Churchbook."""

from __future__ import annotations

import csv
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional

from ..models.member import Member
from ..models.transaction import Transaction

HEADERS = [
    "id",
    "date",
    "type",
    "category",
    "description",
    "amount",
    "payment_method",
    "member",
    "budget_id",
    "has_attachment",
]


def _serialize_value(value):
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return str(value)


def export_transactions_csv(
    *,
    transactions: Iterable[Transaction],
    output_path: Path,
    members: Optional[Iterable[Member]] = None,
) -> Path:
    """Write transactions to CSV at `output_path`.

    Columns are deterministic (see ``HEADERS``). Member ids are replaced by
    names when ``members`` is supplied. Returns the path written.
    """

    names = {m.id: m.name for m in members or ()}
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(
            fh, fieldnames=HEADERS, extrasaction="ignore", quoting=csv.QUOTE_MINIMAL
        )
        writer.writeheader()
        for tx in transactions:
            member = names.get(tx.member_id, tx.member_id) if tx.member_id else None
            writer.writerow(
                {
                    "id": _serialize_value(tx.id),
                    "date": _serialize_value(tx.date),
                    "type": _serialize_value(tx.type),
                    "category": _serialize_value(tx.category),
                    "description": _serialize_value(tx.description),
                    "amount": _serialize_value(tx.amount),
                    "payment_method": _serialize_value(tx.payment_method),
                    "member": _serialize_value(member),
                    "budget_id": _serialize_value(tx.budget_id),
                    "has_attachment": "yes" if tx.attachment_url else "no",
                }
            )

    return output_path
