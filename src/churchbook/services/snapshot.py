"""Load a JSON snapshot of the books into a ``LedgerState``."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import pydantic

from ..errors import SnapshotError
from ..logging_config import get_logger
from ..models import AppSettings, Budget, Member, Transaction
from ..state import LedgerState, sort_by_date_desc

logger = get_logger("snapshot")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_keys(record: dict[str, Any]) -> dict[str, Any]:
    """Accept both ``memberId`` and ``member_id`` style keys."""

    return {_CAMEL_BOUNDARY.sub("_", key).lower(): value for key, value in record.items()}


def _records(model, raw: Any, kind: str) -> list:
    if not isinstance(raw, list):
        raise SnapshotError(f"{kind} is not a list")
    records = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            raise SnapshotError(f"{kind}[{index}] is not an object")
        try:
            records.append(model(**_snake_keys(item)))
        except pydantic.ValidationError as exc:
            raise SnapshotError(f"{kind}[{index}] is invalid: {exc}") from exc
    return records


def state_from_dict(payload: dict[str, Any]) -> LedgerState:
    """Build a state from already-parsed JSON."""

    transactions = _records(Transaction, payload.get("transactions", []), "transactions")
    members = _records(Member, payload.get("members", []), "members")
    budgets = _records(Budget, payload.get("budgets", []), "budgets")

    raw_settings = payload.get("settings") or {}
    if not isinstance(raw_settings, dict):
        raise SnapshotError("settings is not an object")
    try:
        settings = AppSettings(**_snake_keys(raw_settings))
    except pydantic.ValidationError as exc:
        raise SnapshotError(f"settings are invalid: {exc}") from exc

    return LedgerState(
        transactions=sort_by_date_desc(tuple(transactions)),
        members=tuple(members),
        budgets=tuple(budgets),
        settings=settings,
    )


def load_snapshot(path: Path) -> LedgerState:
    """Read ``path`` and validate every record in it."""

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise SnapshotError(f"Snapshot not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"Snapshot is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise SnapshotError("Snapshot root must be a JSON object")

    state = state_from_dict(payload)
    logger.info(
        "Snapshot loaded",
        extra={
            "path": str(path),
            "transactions": len(state.transactions),
            "members": len(state.members),
            "budgets": len(state.budgets),
        },
    )
    return state
