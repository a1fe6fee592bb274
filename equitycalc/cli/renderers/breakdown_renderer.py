"""Rich renderers for tax breakdowns and sale plans.

Transforms SDK results into formatted Rich tables.
"""

from typing import List

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from equitycalc.sdk import BracketTax, SaleAggregate, SalePlan, TaxBreakdown


def _ils(amount: float) -> str:
    return f"₪{amount:,.2f}"


def render_breakdown(console: Console, result: TaxBreakdown, title: str = "Tax breakdown") -> None:
    """Render a single Matured/Unmatured breakdown.

    Zero tax lines are hidden except surtax, which is always shown so a
    zero is visibly zero.
    """
    track = "matured (capital gains track)" if result.matured else "unmatured (work income track)"
    table = Table(show_header=False, box=box.SIMPLE, padding=(0, 2))
    table.add_column("item")
    table.add_column("amount", justify="right")

    table.add_row("Gross proceeds", _ils(result.proceeds))
    if result.cost:
        table.add_row("Cost", f"-{_ils(result.cost)}")
    table.add_row("Income subject to work tax", _ils(result.income), style="dim")
    if result.income_tax > 0:
        table.add_row("Income tax", _ils(result.income_tax), style="red")
    if result.national_insurance > 0:
        table.add_row("National Insurance", _ils(result.national_insurance), style="red")
    if result.health_tax > 0:
        table.add_row("Health tax", _ils(result.health_tax), style="red")
    if result.capital_gains_tax > 0:
        table.add_row("Capital gains tax", _ils(result.capital_gains_tax), style="red")
    table.add_row("Surtax (yasaf)", _ils(result.surtax), style="red" if result.surtax > 0 else "dim")
    table.add_row("Total tax", _ils(result.total_tax), style="bold red")
    table.add_row("Net", _ils(result.net), style="bold green")
    table.add_row("Effective rate", f"{result.effective_rate:.1%}", style="dim")

    border = "green" if result.matured else "yellow"
    console.print(Panel(table, title=f"{title} - {track}", border_style=border))


def render_bracket_table(console: Console, brackets: List[BracketTax], baseline: float, income: float) -> None:
    """Render the bracket-by-bracket income tax on additional income."""
    table = Table(show_header=True, header_style="bold", title=f"Income tax on {_ils(income)} above {_ils(baseline)}")
    table.add_column("Rate", justify="right")
    table.add_column("Taxable", justify="right")
    table.add_column("Tax", justify="right")

    for b in brackets:
        table.add_row(f"{b.rate:.0%}", _ils(b.taxable), _ils(b.tax))

    total = sum(b.tax for b in brackets)
    table.add_row("Total", _ils(sum(b.taxable for b in brackets)), _ils(total), style="bold")
    console.print(table)


def _add_aggregate_column(table: Table, aggregates: List[SaleAggregate]) -> None:
    rows = [
        ("Shares", lambda a: f"{a.shares:,.0f}"),
        ("Proceeds", lambda a: _ils(a.proceeds)),
        ("Income tax", lambda a: _ils(a.income_tax)),
        ("National Insurance", lambda a: _ils(a.national_insurance)),
        ("Health tax", lambda a: _ils(a.health_tax)),
        ("Capital gains tax", lambda a: _ils(a.capital_gains_tax)),
        ("Surtax (yasaf)", lambda a: _ils(a.surtax)),
        ("Total tax", lambda a: _ils(a.total_tax)),
        ("Net", lambda a: _ils(a.net)),
    ]
    for label, fmt in rows:
        table.add_row(label, *(fmt(a) for a in aggregates))


def render_sale_plan(console: Console, plan: SalePlan) -> None:
    """Render a multi-vest sale with matured/unmatured split and wait scenario."""
    table = Table(show_header=True, header_style="bold", title=f"RSU sale on {plan.sell_date:%d/%m/%Y}")
    table.add_column("", style="cyan")

    columns = []
    if plan.any_matured and plan.any_unmatured:
        table.add_column("Matured", justify="right", style="green")
        table.add_column("Unmatured", justify="right", style="yellow")
        columns = [plan.matured, plan.unmatured]
    table.add_column("Combined", justify="right", style="bold")
    columns.append(plan.combined)
    if plan.wait_scenario:
        table.add_column(f"Wait until {plan.wait_scenario.date_display}", justify="right", style="magenta")
        columns.append(plan.wait_scenario.aggregate)

    _add_aggregate_column(table, columns)
    console.print(table)

    if plan.wait_scenario and plan.wait_savings > 0:
        console.print(Panel(
            f"Waiting until {plan.wait_scenario.date_display} adds {_ils(plan.wait_savings)} net.",
            title="Note",
            border_style="yellow",
        ))
