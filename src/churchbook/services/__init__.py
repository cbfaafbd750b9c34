"""Service module exports."""

from . import (
    advisor,
    attachments,
    auth,
    budgeting,
    export_csv,
    formatting,
    ledger_service,
    members,
    reports,
    snapshot,
)

__all__ = [
    "advisor",
    "attachments",
    "auth",
    "budgeting",
    "export_csv",
    "formatting",
    "ledger_service",
    "members",
    "reports",
    "snapshot",
]
