"""Command line interface for Churchbook."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Optional

import click

from .config import BaseConfig
from .errors import ChurchbookError
from .logging_config import setup_logging
from .models import TransactionType
from .seed import demo_state
from .services import attachments, budgeting, export_csv, members, reports
from .services.advisor import AdvisorService
from .services.formatting import format_currency
from .services.snapshot import load_snapshot
from .state import LedgerStore

TYPE_CHOICES = click.Choice(["income", "expense"], case_sensitive=False)


@dataclass
class CliContext:
    config: BaseConfig
    store: LedgerStore

    @property
    def symbol(self) -> str:
        return self.store.state.settings.currency_symbol or self.config.CURRENCY_SYMBOL

    def money(self, amount) -> str:
        return format_currency(amount, self.symbol)


def _txn_type(value: Optional[str]) -> Optional[TransactionType]:
    return TransactionType(value.upper()) if value else None


def _current_year() -> int:
    return date.today().year


@click.group()
@click.option(
    "--data",
    "data_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="JSON snapshot to load instead of the demo dataset.",
)
@click.pass_context
def cli(ctx: click.Context, data_path: Optional[Path]) -> None:
    """Church financial book: budgets, reports, and exports."""

    config = BaseConfig()
    setup_logging(config)
    try:
        state = load_snapshot(data_path) if data_path else demo_state()
    except ChurchbookError as exc:
        raise click.ClickException(str(exc)) from exc
    ctx.obj = CliContext(config=config, store=LedgerStore(state))


@cli.command("summary")
@click.option("--year", type=int, default=_current_year, show_default="current year")
@click.pass_obj
def summary(obj: CliContext, year: int) -> None:
    """Dashboard totals and month-by-month activity for a year."""

    txs = obj.store.state.transactions
    totals = reports.year_summary(txs, year)
    click.echo(f"{obj.store.state.settings.church_name} - {year}")
    click.echo(f"Income:  {obj.money(totals.income)}")
    click.echo(f"Expense: {obj.money(totals.expense)}")
    click.echo(f"Net:     {obj.money(totals.net)}")
    click.echo("")
    for month in reports.monthly_summary(txs, year):
        click.echo(
            f"{month.label:<4} {obj.money(month.income):>14} "
            f"{obj.money(month.expense):>14} {obj.money(month.net):>14}"
        )


@cli.command("budgets")
@click.option("--year", type=int, default=None, help="Only budgets for this year.")
@click.option("--search", default="", help="Match on name or amount.")
@click.pass_obj
def list_budgets(obj: CliContext, year: Optional[int], search: str) -> None:
    """List budgets with spend against goal."""

    state = obj.store.state
    rows = budgeting.filter_budgets(state.budgets, search=search, year=year)
    if not rows:
        click.echo("No budgets found.")
        return
    for budget in rows:
        stats = budgeting.compute_stats(budget, state.transactions)
        flag = "  OVER BUDGET" if stats.is_over_budget else ""
        click.echo(
            f"[{budget.id}] {budget.name} ({budget.year or 'any year'}): "
            f"{obj.money(stats.total_expense)} of {obj.money(budget.amount)} "
            f"({stats.percentage_used:.0f}%){flag}"
        )


@cli.command("budget")
@click.argument("budget_id")
@click.option("--category", default=None, help="Only related entries in this category.")
@click.pass_obj
def show_budget(obj: CliContext, budget_id: str, category: Optional[str]) -> None:
    """Detail view of one budget."""

    state = obj.store.state
    budget = state.find_budget(budget_id)
    if budget is None:
        raise click.ClickException(f"Unknown budget: {budget_id}")

    stats = budgeting.compute_stats(budget, state.transactions)
    click.echo(f"{budget.name} - goal {obj.money(budget.amount)}")
    click.echo(f"Categories: {', '.join(budget.categories) or '-'}")
    click.echo(f"Income:  {obj.money(stats.total_income)}")
    click.echo(f"Expense: {obj.money(stats.total_expense)}")
    click.echo(f"Net:     {obj.money(stats.net_balance)}")
    click.echo(f"Used:    {stats.percentage_used:.1f}%")
    if stats.is_over_budget:
        click.echo("Status:  OVER BUDGET")

    click.echo("")
    for month in budgeting.compute_monthly_activity(budget, state.transactions):
        if month.income or month.expense:
            click.echo(f"{month.label:<4} +{obj.money(month.income)} -{obj.money(month.expense)}")

    click.echo("")
    for txn in budgeting.filter_related_by_category(budget, state.transactions, category):
        click.echo(
            f"{txn.date.isoformat()} {txn.type.value:<7} {txn.category:<16} "
            f"{obj.money(txn.amount):>12}  {txn.description}"
        )


@cli.command("report")
@click.option(
    "--type",
    "report_type",
    type=click.Choice([r.value for r in reports.ReportType]),
    default=reports.ReportType.MONTHLY_SUMMARY.value,
    show_default=True,
)
@click.option("--year", type=int, default=_current_year, show_default="current year")
@click.pass_obj
def report(obj: CliContext, report_type: str, year: int) -> None:
    """Detailed, monthly, or yearly financial report."""

    state = obj.store.state
    result = reports.build_report(state.transactions, reports.ReportType(report_type), year)
    names = members.member_lookup(state.members)

    if result.report_type is reports.ReportType.YEARLY_SUMMARY:
        for row in result.years:
            click.echo(f"{row.year}  {obj.money(row.income):>14} {obj.money(row.expense):>14} {obj.money(row.net):>14}")
    elif result.report_type is reports.ReportType.MONTHLY_SUMMARY:
        for row in result.months:
            click.echo(f"{row.name:<10} {obj.money(row.income):>14} {obj.money(row.expense):>14} {obj.money(row.net):>14}")
    else:
        for txn in result.transactions:
            who = names.get(txn.member_id, "") if txn.member_id else ""
            click.echo(
                f"{txn.date.isoformat()} {txn.type.value:<7} {txn.category:<16} "
                f"{obj.money(txn.amount):>12}  {txn.description} {who}".rstrip()
            )

    click.echo(
        f"Total income {obj.money(result.totals.income)}, "
        f"expense {obj.money(result.totals.expense)}, "
        f"net {obj.money(result.totals.net)}"
    )


@cli.command("members")
@click.option("--search", default="", help="Match on name or mobile number.")
@click.pass_obj
def list_members(obj: CliContext, search: str) -> None:
    """Church directory with each member's total giving."""

    state = obj.store.state
    for member in members.search_members(state.members, search):
        total = members.member_contribution_total(member.id, state.transactions)
        click.echo(f"{member.name:<20} {member.mobile:<18} {obj.money(total):>12}")


@cli.command("files")
@click.option("--year", type=int, default=None)
@click.option("--month", type=click.IntRange(1, 12), default=None)
@click.option("--type", "txn_type", type=TYPE_CHOICES, default=None)
@click.option(
    "--save-to",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Also write each attachment into this directory.",
)
@click.pass_obj
def list_files(
    obj: CliContext,
    year: Optional[int],
    month: Optional[int],
    txn_type: Optional[str],
    save_to: Optional[Path],
) -> None:
    """Transactions that carry a receipt or document."""

    rows = attachments.list_attachments(
        obj.store.state.transactions, year=year, month=month, txn_type=_txn_type(txn_type)
    )
    if not rows:
        click.echo("No files found.")
        return
    for txn in rows:
        line = f"{txn.date.isoformat()} {txn.category:<16} {obj.money(txn.amount):>12}  {txn.description}"
        if save_to is not None:
            try:
                line += f"  -> {attachments.save_attachment(txn, save_to)}"
            except ChurchbookError as exc:
                line += f"  (unreadable: {exc})"
        click.echo(line)


@cli.command("export")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--year", type=int, default=None, help="Only transactions from this year.")
@click.pass_obj
def export(obj: CliContext, output: Path, year: Optional[int]) -> None:
    """Write transactions to a CSV file."""

    state = obj.store.state
    txs = state.transactions if year is None else reports.transactions_for_year(state.transactions, year)
    path = export_csv.export_transactions_csv(transactions=txs, output_path=output, members=state.members)
    click.echo(f"Export written: {path}")


@cli.command("chart")
@click.argument("output", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--year", type=int, default=_current_year, show_default="current year")
@click.option(
    "--kind",
    type=click.Choice(["spending", "monthly"]),
    default="spending",
    show_default=True,
)
@click.pass_obj
def chart(obj: CliContext, output: Path, year: int, kind: str) -> None:
    """Render a PNG chart for a year."""

    txs = reports.transactions_for_year(obj.store.state.transactions, year)
    if kind == "monthly":
        path = reports.export_monthly_png(
            transactions=txs, year=year, output_path=output, currency_symbol=obj.symbol
        )
    else:
        path = reports.export_spending_png(
            transactions=txs, output_path=output, currency_symbol=obj.symbol
        )
    click.echo(f"Chart written: {path}")


@cli.command("advise")
@click.argument("query")
@click.pass_obj
def advise(obj: CliContext, query: str) -> None:
    """Ask the AI advisor a question about the books."""

    state = obj.store.state
    reply = AdvisorService(obj.config).ask(
        state.transactions,
        state.members,
        query,
        church_name=state.settings.church_name,
        currency_symbol=obj.symbol,
    )
    click.echo(reply.text)


def main() -> None:  # pragma: no cover - console entry point
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
