"""Generative-AI advice and receipt scanning.

Both operations talk to the Gemini API through the optional ``google-genai``
package. Failures never escape: every problem becomes a message the caller
can show. Each operation allows one request in flight at a time; a call made
while another is running gets a busy reply instead of queueing.
"""

from __future__ import annotations

import base64
import binascii
import importlib
import json
import threading
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Protocol, Sequence

from ..config import BaseConfig
from ..errors import AdvisorError
from ..logging_config import get_logger
from ..models.member import Member
from ..models.transaction import Transaction
from .formatting import format_currency
from .ledger_service import compute_summary

logger = get_logger("advisor")

ADVICE_ERROR_MESSAGE = "Sorry, I encountered an error while processing your request."
EMPTY_ADVICE_MESSAGE = "I apologize, I couldn't generate a response at this time."
SCAN_ERROR_MESSAGE = "Error scanning document."
SCAN_EMPTY_MESSAGE = "Could not detect details automatically."
BUSY_MESSAGE = "A request is already in progress. Please wait for it to finish."

RECENT_TRANSACTION_COUNT = 10

RECEIPT_PROMPT = (
    "Analyze this receipt or financial document image. "
    "Extract the total amount (as a number), the date (in YYYY-MM-DD format), "
    "and a brief description (e.g. store name or purpose). "
    'Return ONLY a JSON object with keys: "amount", "date", "description". '
    "If a value cannot be found, use null."
)


class GenAIClient(Protocol):
    """The slice of ``google.genai.Client`` used here."""

    models: Any


@dataclass(frozen=True)
class AdvisorReply:
    ok: bool
    text: str


@dataclass(frozen=True)
class ReceiptScan:
    """Fields read off a receipt; any may be missing."""

    amount: Optional[Decimal] = None
    date: Optional[date] = None
    description: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.amount is None and self.date is None and not self.description


@dataclass(frozen=True)
class ScanOutcome:
    scan: Optional[ReceiptScan]
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.scan is not None


def build_advice_prompt(
    transactions: Sequence[Transaction],
    members: Sequence[Member],
    query: str,
    *,
    church_name: str = "a church in India",
    currency_symbol: str = "₹",
) -> str:
    """Compose the prompt: overall totals plus the most recent entries."""

    totals = compute_summary(transactions)
    recent = "\n".join(
        f"{t.date.isoformat()}: {t.type.value} - {t.category} "
        f"({format_currency(t.amount, currency_symbol)}) - {t.description}"
        for t in list(transactions)[:RECENT_TRANSACTION_COUNT]
    )
    return (
        f"You are an expert financial assistant for {church_name}.\n"
        "Here is the current financial context:\n"
        f"- Total Income: {format_currency(totals['income'], currency_symbol)}\n"
        f"- Total Expenses: {format_currency(totals['expense'], currency_symbol)}\n"
        f"- Net Balance: {format_currency(totals['net'], currency_symbol)}\n"
        f"- Registered Members: {len(members)}\n\n"
        f"Recent Transactions:\n{recent or '(none)'}\n\n"
        f'User Query: "{query}"\n\n'
        "Please provide a helpful, concise, and professional response."
    )


def parse_receipt_json(text: str) -> ReceiptScan:
    """Interpret the model's JSON answer, dropping values that do not parse."""

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise AdvisorError("Receipt scan returned malformed JSON") from exc
    if not isinstance(payload, dict):
        raise AdvisorError("Receipt scan did not return a JSON object")

    amount = None
    raw_amount = payload.get("amount")
    if raw_amount is not None and not isinstance(raw_amount, bool):
        try:
            amount = Decimal(str(raw_amount).replace(",", ""))
        except InvalidOperation:
            amount = None
        if amount is not None and (not amount.is_finite() or amount < 0):
            amount = None

    scanned_date = None
    raw_date = payload.get("date")
    if isinstance(raw_date, str):
        try:
            scanned_date = date.fromisoformat(raw_date.strip())
        except ValueError:
            scanned_date = None

    description = payload.get("description")
    if not isinstance(description, str) or not description.strip():
        description = None
    else:
        description = description.strip()

    return ReceiptScan(amount=amount, date=scanned_date, description=description)


class AdvisorService:
    """Gemini-backed advisor with one request in flight per operation."""

    def __init__(self, config: BaseConfig, client: Optional[GenAIClient] = None):
        self.config = config
        self._client = client
        self._advice_lock = threading.Lock()
        self._scan_lock = threading.Lock()

    @property
    def is_busy(self) -> bool:
        return self._advice_lock.locked() or self._scan_lock.locked()

    def _get_client(self) -> GenAIClient:
        if self._client is not None:
            return self._client
        if not self.config.GEMINI_API_KEY:
            raise AdvisorError("No Gemini API key configured (set CHURCHBOOK_GEMINI_API_KEY)")
        try:
            genai = importlib.import_module("google.genai")
        except ModuleNotFoundError as exc:
            raise AdvisorError(
                "google-genai not installed; install the 'ai' extra to enable the advisor"
            ) from exc
        self._client = genai.Client(api_key=self.config.GEMINI_API_KEY)
        return self._client

    def ask(
        self,
        transactions: Sequence[Transaction],
        members: Sequence[Member],
        query: str,
        *,
        church_name: str = "a church in India",
        currency_symbol: str = "₹",
    ) -> AdvisorReply:
        """Answer a free-form question about the books."""

        if not self._advice_lock.acquire(blocking=False):
            return AdvisorReply(ok=False, text=BUSY_MESSAGE)
        try:
            prompt = build_advice_prompt(
                transactions,
                members,
                query,
                church_name=church_name,
                currency_symbol=currency_symbol,
            )
            client = self._get_client()
            response = client.models.generate_content(
                model=self.config.GEMINI_MODEL, contents=prompt
            )
            text = getattr(response, "text", None)
            if not text:
                return AdvisorReply(ok=False, text=EMPTY_ADVICE_MESSAGE)
            return AdvisorReply(ok=True, text=text)
        except Exception:
            logger.exception("Error generating AI response")
            return AdvisorReply(ok=False, text=ADVICE_ERROR_MESSAGE)
        finally:
            self._advice_lock.release()

    def scan_receipt(self, image_b64: str, mime_type: str = "image/jpeg") -> ScanOutcome:
        """Extract amount, date, and description from a receipt image."""

        if not self._scan_lock.acquire(blocking=False):
            return ScanOutcome(scan=None, message=BUSY_MESSAGE)
        try:
            try:
                image = base64.b64decode(image_b64, validate=True)
            except (binascii.Error, ValueError):
                logger.warning("Receipt image is not valid base64")
                return ScanOutcome(scan=None, message=SCAN_ERROR_MESSAGE)

            client = self._get_client()
            response = client.models.generate_content(
                model=self.config.GEMINI_MODEL,
                contents=[
                    {"inline_data": {"data": image, "mime_type": mime_type}},
                    RECEIPT_PROMPT,
                ],
                config={"response_mime_type": "application/json"},
            )
            text = getattr(response, "text", None)
            if not text:
                return ScanOutcome(scan=None, message=SCAN_EMPTY_MESSAGE)
            scan = parse_receipt_json(text)
            if scan.is_empty:
                return ScanOutcome(scan=None, message=SCAN_EMPTY_MESSAGE)
            return ScanOutcome(scan=scan)
        except Exception:
            logger.exception("Error scanning receipt")
            return ScanOutcome(scan=None, message=SCAN_ERROR_MESSAGE)
        finally:
            self._scan_lock.release()
