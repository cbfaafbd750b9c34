"""Reporting utilities: dashboard totals, period summaries, and charts."""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Iterable, Optional, Protocol, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
from matplotlib.figure import Figure

from ..logging_config import get_logger
from ..models.transaction import Transaction, TransactionType
from .formatting import format_currency
from .ledger_service import compute_category_totals, sort_newest_first

logger = get_logger("reports")

ZERO = Decimal("0")


class ReportType(str, Enum):
    DETAILED = "detailed"
    MONTHLY_SUMMARY = "monthly_summary"
    YEARLY_SUMMARY = "yearly_summary"


@dataclass(slots=True)
class PeriodSummary:
    """Income, expense, and net for an arbitrary period."""

    income: Decimal = ZERO
    expense: Decimal = ZERO

    @property
    def net(self) -> Decimal:
        return self.income - self.expense

    def add(self, txn: Transaction) -> None:
        if txn.type is TransactionType.INCOME:
            self.income += txn.amount
        else:
            self.expense += txn.amount


@dataclass(slots=True)
class MonthSummary(PeriodSummary):
    month: int = 1

    @property
    def name(self) -> str:
        return calendar.month_name[self.month]

    @property
    def label(self) -> str:
        return calendar.month_abbr[self.month]


@dataclass(slots=True)
class YearSummary(PeriodSummary):
    year: int = 0


@dataclass
class Report:
    """A rendered report: its rows plus grand totals over the data it covers."""

    report_type: ReportType
    year: Optional[int]
    totals: PeriodSummary
    transactions: list[Transaction] = field(default_factory=list)
    months: list[MonthSummary] = field(default_factory=list)
    years: list[YearSummary] = field(default_factory=list)


class ReportRenderer(Protocol):
    """Protocol describing renderer behavior."""

    def render(self, figure: Figure, *, output_path: Path) -> None:  # pragma: no cover - interface
        ...


def transactions_for_year(transactions: Iterable[Transaction], year: int) -> list[Transaction]:
    return [t for t in transactions if t.date.year == year]


def summarize(transactions: Iterable[Transaction]) -> PeriodSummary:
    summary = PeriodSummary()
    for txn in transactions:
        summary.add(txn)
    return summary


def year_summary(transactions: Iterable[Transaction], year: int) -> PeriodSummary:
    """Dashboard totals for one calendar year."""

    return summarize(transactions_for_year(transactions, year))


def monthly_summary(transactions: Iterable[Transaction], year: int) -> list[MonthSummary]:
    """Twelve month rows for ``year``, January first, zero-filled."""

    months = [MonthSummary(month=m) for m in range(1, 13)]
    for txn in transactions_for_year(transactions, year):
        months[txn.date.month - 1].add(txn)
    return months


def yearly_summary(transactions: Iterable[Transaction]) -> list[YearSummary]:
    """One row per year with activity, most recent year first."""

    by_year: dict[int, YearSummary] = {}
    for txn in transactions:
        row = by_year.setdefault(txn.date.year, YearSummary(year=txn.date.year))
        row.add(txn)
    return [by_year[y] for y in sorted(by_year, reverse=True)]


def build_report(
    transactions: Sequence[Transaction], report_type: ReportType, year: int
) -> Report:
    """Assemble a report; the yearly comparison spans every year on record."""

    if report_type is ReportType.YEARLY_SUMMARY:
        data = list(transactions)
        report = Report(report_type=report_type, year=None, totals=summarize(data))
        report.years = yearly_summary(data)
        return report

    data = transactions_for_year(transactions, year)
    report = Report(report_type=report_type, year=year, totals=summarize(data))
    if report_type is ReportType.MONTHLY_SUMMARY:
        report.months = monthly_summary(data, year)
    else:
        report.transactions = sort_newest_first(data)
    logger.info(
        "Report built",
        extra={"report_type": report_type.value, "year": year, "rows": len(data)},
    )
    return report


# =============================================================================
# Charts
# =============================================================================


def build_spending_chart(
    *,
    transactions: Iterable[Transaction],
    currency_symbol: str = "₹",
    title: str = "Spending by Category",
) -> Figure:
    """Create a matplotlib donut chart of expenses by category."""

    totals = compute_category_totals(transactions, TransactionType.EXPENSE)
    labels = [name for name, _ in totals]
    sizes = [float(amount) for _, amount in totals]
    grand_total = sum(sizes)

    fig, ax = plt.subplots(figsize=(10, 7))

    if sizes:
        cmap = plt.get_cmap("tab20c")
        colors = [cmap(i / max(len(sizes), 1)) for i in range(len(sizes))]

        wedges, _, autotexts = ax.pie(
            sizes,
            labels=None,
            autopct=lambda pct: f"{pct:.1f}%" if pct > 4 else "",
            wedgeprops=dict(width=0.45, edgecolor="white", linewidth=1.5),
            startangle=90,
            colors=colors,
            pctdistance=0.78,
        )
        for autotext in autotexts:
            autotext.set_fontsize(9)
            autotext.set_fontweight("bold")
            autotext.set_color("white")

        ax.text(0, 0.08, "Total Spending", ha="center", va="center", fontsize=11, color="#666")
        ax.text(
            0, -0.08, format_currency(grand_total, currency_symbol),
            ha="center", va="center", fontsize=18, fontweight="bold", color="#1F2937",
        )

        legend_labels = [
            f"{label}: {format_currency(size, currency_symbol)} ({size / grand_total * 100:.1f}%)"
            if grand_total > 0 else label
            for label, size in zip(labels, sizes)
        ]
        ax.legend(
            wedges,
            legend_labels,
            title="Categories",
            title_fontsize=11,
            loc="center left",
            bbox_to_anchor=(1.02, 0.5),
            fontsize=9,
            framealpha=0.9,
        )
        ax.axis("equal")
        ax.set_title(title, fontsize=16, fontweight="bold", pad=20)
    else:
        ax.text(0.5, 0.5, "No expense data", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")

    plt.tight_layout()
    return fig


def build_monthly_chart(
    *,
    labels: Sequence[str],
    income: Sequence[Decimal],
    expense: Sequence[Decimal],
    currency_symbol: str = "₹",
    title: str = "Income vs Expense",
) -> Figure:
    """Grouped bar chart of income and expense per month."""

    x_positions = list(range(len(labels)))
    width = 0.4

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.bar([x - width / 2 for x in x_positions], [float(v) for v in income],
           width=width, label="Income", color="#22C55E")
    ax.bar([x + width / 2 for x in x_positions], [float(v) for v in expense],
           width=width, label="Expense", color="#EF4444")

    ax.grid(True, axis="y", linestyle="--", alpha=0.3)
    ax.set_axisbelow(True)
    ax.set_title(title, fontsize=14, fontweight="bold", pad=15)
    ax.set_xticks(x_positions)
    ax.set_xticklabels(labels)
    ax.yaxis.set_major_formatter(
        mticker.FuncFormatter(lambda x, p: format_currency(x, currency_symbol))
    )
    ax.legend(loc="upper left", framealpha=0.9)

    plt.tight_layout()
    return fig


def _save(fig: Figure, output_path: Path, renderer: ReportRenderer | None) -> Path:
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        if renderer is not None:
            renderer.render(fig, output_path=output_path)
        else:
            fig.savefig(output_path, bbox_inches="tight", dpi=120)
    finally:
        plt.close(fig)
    logger.info("Chart written", extra={"path": str(output_path)})
    return output_path


def export_spending_png(
    *,
    transactions: Iterable[Transaction],
    output_path: Path,
    currency_symbol: str = "₹",
    renderer: ReportRenderer | None = None,
) -> Path:
    """Render spending chart to PNG and return the path."""

    fig = build_spending_chart(transactions=transactions, currency_symbol=currency_symbol)
    return _save(fig, output_path, renderer)


def export_monthly_png(
    *,
    transactions: Iterable[Transaction],
    year: int,
    output_path: Path,
    currency_symbol: str = "₹",
    renderer: ReportRenderer | None = None,
) -> Path:
    """Render the twelve-month income/expense bars for ``year`` to PNG."""

    months = monthly_summary(transactions, year)
    fig = build_monthly_chart(
        labels=[m.label for m in months],
        income=[m.income for m in months],
        expense=[m.expense for m in months],
        currency_symbol=currency_symbol,
        title=f"Income vs Expense {year}",
    )
    return _save(fig, output_path, renderer)
