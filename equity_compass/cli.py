"""Typer CLI interface for Equity Compass."""

import logging
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import NoReturn

import typer

from equity_compass.exceptions import EquityEngineError

app = typer.Typer(
    name="equity-compass",
    help="Equity Compass: RSU and ISO tax modelling for advisors.",
)

CLIENT_ARG = typer.Argument(..., help="Client profile JSON file")
TAX_YEAR_OPT = typer.Option(2026, "--tax-year", help="Projected tax rule set to apply")
AS_OF_OPT = typer.Option(
    None,
    "--as-of",
    formats=["%Y-%m-%d"],
    help="Evaluation date (default: today)",
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Equity Compass: RSU and ISO tax modelling for advisors."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def _load(client_file: Path, tax_year: int):
    """Load the client and build an engine for ``tax_year``. Exits on error."""
    from equity_compass.engine import EquityEngine
    from equity_compass.engines.brackets import get_tax_year_config
    from equity_compass.ingestion.client_file import ClientFileLoader

    loader = ClientFileLoader()
    try:
        config = get_tax_year_config(tax_year)
        client = loader.parse(client_file)
    except FileNotFoundError as exc:
        _fail(str(exc))
    except EquityEngineError as exc:
        _fail(str(exc))

    for warning in loader.validate(client):
        typer.echo(f"Warning: {warning}", err=True)
    return client, EquityEngine(config)


def _as_of(value: datetime | None) -> date:
    return value.date() if value is not None else date.today()


def _find_grant(client, grant_id: str):
    grant = client.get_grant(grant_id)
    if grant is None:
        known = ", ".join(g.id for g in client.grants) or "none"
        _fail(f"Grant '{grant_id}' not found (known grants: {known})")
    return grant


@app.command()
def rates(
    client_file: Path = CLIENT_ARG,
    tax_year: int = TAX_YEAR_OPT,
) -> None:
    """Show the client's effective state and LTCG rates."""
    from equity_compass.reports.formatting import format_percent

    client, engine = _load(client_file, tax_year)
    result = engine.get_effective_rates(client)
    typer.echo(f"State rate ({client.state}): {format_percent(result.state_rate)}")
    typer.echo(f"Federal LTCG rate:     {format_percent(result.fed_ltcg_rate)}")


@app.command()
def schedule(
    client_file: Path = CLIENT_ARG,
    grant_id: str | None = typer.Option(None, "--grant", "-g", help="Limit to one grant"),
    sell_all: bool = typer.Option(False, "--sell-all", help="Simulate selling every RSU tranche"),
    upcoming: bool = typer.Option(False, "--upcoming", help="Only events in the next 12 months"),
    tax_year: int = TAX_YEAR_OPT,
    as_of: datetime | None = AS_OF_OPT,
) -> None:
    """Print the vesting schedule with withholding and tax gap."""
    from equity_compass.reports.formatting import format_currency, format_number

    client, engine = _load(client_file, tax_year)
    eval_date = _as_of(as_of)

    if grant_id is not None:
        grant = _find_grant(client, grant_id)
        events = engine.generate_vesting_schedule(grant, client, sell_all, eval_date)
    else:
        events = engine.vesting.client_schedule(client, sell_all, eval_date)
    if upcoming:
        events = engine.vesting.upcoming_events(events, eval_date)

    if not events:
        typer.echo("No vesting events.")
        raise typer.Exit(0)

    header = (
        f"  {'Status':<6} | {'Date':<10} | {'Type':<4} | {'Shares':>8}"
        f" | {'Gross':>12} | {'Withheld':>10} | {'Net Value':>12} | {'Tax Gap':>10}"
    )
    typer.echo(header)
    typer.echo(f" {'-'*8}|{'-'*12}|{'-'*6}|{'-'*10}|{'-'*14}|{'-'*12}|{'-'*14}|{'-'*11}")
    for e in events:
        status = "VESTED" if e.is_past else "FUTURE"
        typer.echo(
            f"  {status:<6} | {e.vest_date.isoformat():<10} | {e.grant_type.value:<4}"
            f" | {format_number(e.shares):>8} | {format_currency(e.gross_value):>12}"
            f" | {format_currency(e.withholding_amount):>10}"
            f" | {format_currency(e.net_value):>12} | {format_currency(e.tax_gap):>10}"
        )

    total_gap = sum((e.tax_gap for e in events), Decimal("0"))
    typer.echo("")
    typer.echo(f"{len(events)} event(s), total tax gap {format_currency(total_gap)}")


@app.command()
def status(
    client_file: Path = CLIENT_ARG,
    grant_id: str | None = typer.Option(None, "--grant", "-g", help="Limit to one grant"),
    tax_year: int = TAX_YEAR_OPT,
    as_of: datetime | None = AS_OF_OPT,
) -> None:
    """Show vested, unvested, exercised, and available shares per grant."""
    from equity_compass.reports.formatting import format_number

    client, engine = _load(client_file, tax_year)
    eval_date = _as_of(as_of)
    grants = [_find_grant(client, grant_id)] if grant_id else client.grants

    for grant in grants:
        st = engine.get_grant_status(grant, client.exercises_for(grant.id), eval_date)
        typer.echo(
            f"{grant.display_name} ({grant.type.value}): total {format_number(st.total)}, "
            f"vested {format_number(st.vested_total)}, unvested {format_number(st.unvested)}, "
            f"exercised {format_number(st.exercised)}, available {format_number(st.available)}"
        )


@app.command(name="amt-room")
def amt_room(
    client_file: Path = CLIENT_ARG,
    spread: float | None = typer.Option(
        None, "--spread", help="Proposed ISO bargain element to check against the room"
    ),
    tax_year: int = TAX_YEAR_OPT,
    as_of: datetime | None = AS_OF_OPT,
) -> None:
    """Estimate ISO spread available before AMT exceeds regular tax."""
    from equity_compass.reports.formatting import format_currency, format_percent

    client, engine = _load(client_file, tax_year)
    report = engine.calculate_amt_room(client, _as_of(as_of))

    typer.echo(f"=== AMT Room ({report.tax_year}) ===")
    typer.echo(f"  Base income:          {format_currency(report.base_income)}")
    typer.echo(f"  Projected RSU income: {format_currency(report.projected_rsu_income)}")
    typer.echo(f"  Estimated state tax:  {format_currency(report.estimated_state_tax)}")
    deduction_kind = "itemized" if report.is_itemizing else "standard"
    typer.echo(
        f"  Deduction:            {format_currency(report.effective_deduction)} ({deduction_kind})"
    )
    typer.echo(f"  Personal exemptions:  {format_currency(report.personal_exemptions)}")
    marginal = engine.regular_tax.marginal_rate(
        report.regular_taxable_income, client.filing_status
    )
    typer.echo(
        f"  Regular tax:          {format_currency(report.regular_tax)}"
        f" (marginal {format_percent(marginal)})"
    )
    if report.is_indeterminate:
        typer.echo(
            "  AMT room:             indeterminate "
            f"(no crossover below {format_currency(engine.config.amt_search_cap)})"
        )
    else:
        typer.echo(f"  AMT room:             {format_currency(report.room)}")

    if spread is not None:
        proposed = Decimal(str(spread))
        if engine.amt.exceeds_room(report, proposed):
            typer.echo(f"WARNING: spread {format_currency(proposed)} exceeds AMT room")
        else:
            typer.echo(f"Spread {format_currency(proposed)} is within AMT room")


@app.command()
def scenarios(
    client_file: Path = CLIENT_ARG,
    grant_id: str = typer.Option(..., "--grant", "-g", help="ISO grant to model"),
    shares: float = typer.Option(..., "--shares", "-n", help="Shares to exercise"),
    sale_price: float | None = typer.Option(
        None, "--sale-price", help="Future sale price for the qualified case (default: FMV + 10%)"
    ),
    tax_year: int = TAX_YEAR_OPT,
) -> None:
    """Compare qualified, disqualified, and cashless ISO outcomes."""
    from equity_compass.reports.formatting import format_currency, format_percent

    client, engine = _load(client_file, tax_year)
    grant = _find_grant(client, grant_id)
    if not grant.is_iso:
        _fail(f"Grant '{grant_id}' is {grant.type.value}, not ISO")

    n = Decimal(str(shares))
    fmv = grant.current_price
    future = Decimal(str(sale_price)) if sale_price is not None else fmv * Decimal("1.1")

    try:
        comparison = engine.dispositions.compare(n, grant.strike_price, fmv, future, client)
        cashless = engine.dispositions.cashless_exercise(n, grant.strike_price, fmv, client)
    except EquityEngineError as exc:
        _fail(str(exc))

    for scenario in (comparison.qualified, comparison.disqualified):
        t = scenario.taxes
        typer.echo(f"=== {scenario.name} ===")
        typer.echo(f"  {scenario.description}")
        typer.echo(f"  Sale price:        {format_currency(scenario.sale_price)}")
        typer.echo(f"  Ordinary income:   {format_currency(scenario.ordinary_income)}")
        typer.echo(f"  Capital gain:      {format_currency(scenario.capital_gain)}")
        typer.echo(f"  AMT preference:    {format_currency(scenario.amt_preference)}")
        typer.echo(
            f"  Federal tax:       {format_currency(t.fed_amount)} ({format_percent(t.fed_rate)})"
        )
        typer.echo(
            f"  NIIT:              {format_currency(t.niit_amount)} ({format_percent(t.niit_rate)})"
        )
        typer.echo(
            f"  State tax:         {format_currency(t.state_amount)} ({format_percent(t.state_rate)})"
        )
        typer.echo(f"  Total tax:         {format_currency(t.total_tax)}")
        typer.echo(f"  Net profit:        {format_currency(scenario.net_profit)}")
        typer.echo("")

    typer.echo(f"Holding for qualification adds {format_currency(comparison.net_difference)}")
    typer.echo("")
    typer.echo("=== Cashless Exercise (Get Liquidity) ===")
    typer.echo(f"  Gross profit:      {format_currency(cashless.gross_profit)}")
    typer.echo(
        f"  Estimated taxes:   {format_currency(cashless.estimated_taxes)}"
        f" ({format_percent(cashless.estimated_tax_rate)})"
    )
    typer.echo(f"  Net cash:          {format_currency(cashless.net_cash)}")


@app.command()
def plan(
    client_file: Path = CLIENT_ARG,
    grant_id: str = typer.Option(..., "--grant", "-g", help="ISO grant to exercise"),
    shares: float = typer.Option(..., "--shares", "-n", help="Shares to exercise"),
    strategy: str = typer.Option("buy_hold", "--strategy", help="buy_hold or cashless"),
    save: bool = typer.Option(False, "--save", help="Append the plan to the client file"),
    tax_year: int = TAX_YEAR_OPT,
    as_of: datetime | None = AS_OF_OPT,
) -> None:
    """Record a planned ISO exercise, checking available shares and AMT room."""
    from equity_compass.ingestion.client_file import ClientFileLoader
    from equity_compass.models.enums import ExerciseStrategy
    from equity_compass.reports.formatting import format_currency, format_number

    try:
        chosen = ExerciseStrategy(strategy.lower())
    except ValueError:
        valid = ", ".join(s.value for s in ExerciseStrategy)
        _fail(f"Invalid strategy '{strategy}'. Valid: {valid}")

    client, engine = _load(client_file, tax_year)
    grant = _find_grant(client, grant_id)
    eval_date = _as_of(as_of)

    try:
        planned = engine.tracker.plan_exercise(
            grant,
            Decimal(str(shares)),
            client.planned_exercises,
            strategy=chosen,
            as_of=eval_date,
        )
    except EquityEngineError as exc:
        _fail(str(exc))

    typer.echo(
        f"Planned {chosen.value} exercise: {format_number(planned.shares)} shares of "
        f"{grant.display_name} on {planned.exercise_date.isoformat()}"
    )
    typer.echo(f"  Estimated cost: {format_currency(planned.estimated_cost)}")
    typer.echo(f"  AMT exposure:   {format_currency(planned.amt_exposure)}")

    report = engine.calculate_amt_room(client, eval_date)
    if engine.amt.exceeds_room(report, planned.amt_exposure):
        typer.echo(
            f"WARNING: AMT exposure exceeds estimated AMT room of {format_currency(report.room)}"
        )

    if save:
        ClientFileLoader().save(client.with_planned_exercise(planned), client_file)
        typer.echo(f"Saved to {client_file}")


@app.command()
def report(
    client_file: Path = CLIENT_ARG,
    output: Path | None = typer.Option(None, "--output", "-o", help="Write report to a file"),
    sell_all: bool = typer.Option(False, "--sell-all", help="Simulate selling every RSU tranche"),
    tax_year: int = TAX_YEAR_OPT,
    as_of: datetime | None = AS_OF_OPT,
) -> None:
    """Render the full client equity report."""
    from equity_compass.reports.client_report import ClientReportGenerator

    client, engine = _load(client_file, tax_year)
    text = ClientReportGenerator(engine).render(client, sell_all, _as_of(as_of))

    if output is None:
        typer.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text)
    typer.echo(f"Report written to {output}")
