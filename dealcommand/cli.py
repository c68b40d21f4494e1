"""CLI interface for DealCommand."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from dealcommand import rules
from dealcommand.config import load_config, redacted_dump
from dealcommand.models import DealInput, LeadInput, MarketData, MarketStatus, QualificationBadge

app = typer.Typer(
    name="dealcommand",
    help="Wholesale real estate deal engine - score markets, analyze deals, qualify leads.",
    no_args_is_help=True,
)
console = Console()

_STATUS_COLORS = {
    MarketStatus.IDEAL: "green",
    MarketStatus.BORDERLINE: "yellow",
    MarketStatus.DISQUALIFIED: "red",
    QualificationBadge.ELIGIBLE: "green",
    QualificationBadge.MANUAL_REVIEW: "yellow",
    QualificationBadge.INELIGIBLE: "red",
}


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _build(model, **values):
    """Construct an input model, turning validation errors into a clean CLI exit."""
    try:
        return model(**values)
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            console.print(f"[red]{field}: {err['msg']}[/red]")
        raise typer.Exit(code=1)


def _print_checks(passed: list[str], failed: list[str]) -> None:
    for item in passed:
        console.print(f"  [green]+[/green] {item}")
    for item in failed:
        console.print(f"  [red]-[/red] {item}")


@app.command()
def market(
    city: str = typer.Argument(..., help="City name"),
    state: str = typer.Argument(..., help="Two-letter state code"),
    msa_population: int = typer.Option(..., "--msa", help="Metro area population"),
    city_population: int = typer.Option(..., "--city-pop", help="City population"),
    median_price: float = typer.Option(..., "--median", help="Median home price"),
    days_on_market: float = typer.Option(..., "--dom", help="Median days on market"),
    pending_ratio: float = typer.Option(..., "--pending", help="Pending ratio, in percent"),
    save: bool = typer.Option(False, "--save", help="Save the market"),
    config_path: Path = typer.Option(None, "--config", "-c"),
):
    """Score a market against the ideal wholesaling criteria."""
    cfg = load_config(config_path)
    data = _build(
        MarketData,
        city=city,
        state=state,
        msa_population=msa_population,
        city_population=city_population,
        median_price=median_price,
        days_on_market=days_on_market,
        pending_ratio=pending_ratio,
    )

    from dealcommand.analysis import MarketScorer

    result = MarketScorer(cfg.analysis.market).evaluate(data)
    color = _STATUS_COLORS[result.status]
    body = f"Score: [bold]{result.score}/100[/bold]"
    if result.license_requirement:
        body += f"\n[yellow]{result.license_requirement}[/yellow]"
    console.print(Panel(
        body,
        title=f"{data.city}, {data.state} - {result.status.value.upper()}",
        border_style=color,
    ))
    _print_checks(result.passed, result.flags)

    if save:
        from dealcommand.db.repository import Repository
        from dealcommand.models import SavedMarket

        saved = Repository(cfg.database.url).add_market(SavedMarket.from_score(data, result))
        console.print(f"\n[dim]Saved market {saved.id}[/dim]")


@app.command()
def deal(
    address: str = typer.Argument(..., help="Property address"),
    list_price: float = typer.Option(..., "--price", "-p", help="List price"),
    zestimate: float = typer.Option(..., "--zestimate", "-z"),
    arv: float = typer.Option(..., "--arv", help="After repair value"),
    repairs: float = typer.Option(0, "--repairs", "-r", help="Repair estimate"),
    dom: int = typer.Option(0, "--dom", help="Days on market"),
    motivation: float = typer.Option(5, "--motivation", "-m", help="Seller motivation, 1-10"),
    keywords: Optional[list[str]] = typer.Option(None, "--keyword", "-k", help="Listing keyword (repeatable)"),
    description: str = typer.Option("", "--description", "-d", help="Listing text to scan for keywords"),
    save: bool = typer.Option(False, "--save", help="Save the deal"),
    config_path: Path = typer.Option(None, "--config", "-c"),
):
    """Analyze a listing with the 80% qualifier and 70% MAO rules."""
    cfg = load_config(config_path)
    found = list(keywords or []) + rules.find_motivated_keywords(description)
    deal_input = _build(
        DealInput,
        address=address,
        list_price=list_price,
        zestimate=zestimate,
        repair_estimate=repairs,
        arv=arv,
        keywords=found,
        days_on_market=dom,
        seller_motivation=motivation,
    )

    from dealcommand.analysis import DealAnalyzer

    analyzer = DealAnalyzer(cfg.analysis.deal)
    result = analyzer.analyze(deal_input)
    offer = analyzer.offer_range(list_price)

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Key", style="bold")
    table.add_column("Value")
    table.add_row("Qualifier (80% of list)", f"${result.qualifier_price_80:,.0f}")
    table.add_row("Zestimate check (90%)", f"${result.zestimate_check_90:,.0f}")
    table.add_row("MAO (70% ARV - repairs)", f"${result.mao:,.0f}")
    spread_style = "green" if result.spread_potential >= cfg.analysis.deal.min_spread else "red"
    table.add_row("Spread potential", f"[{spread_style}]${result.spread_potential:,.0f}[/{spread_style}]")
    table.add_row("Offer range", f"${offer.low:,.0f} - ${offer.high:,.0f}")
    table.add_row("Motivation", f"{result.motivation_score:g}/10")
    table.add_row("Passes Zestimate rule", "yes" if result.passes_zestimate_rule else "no")
    console.print(Panel(table, title=address))
    _print_checks([], result.flags)

    if save:
        from dealcommand.db.repository import Repository
        from dealcommand.models import SavedDeal

        saved = Repository(cfg.database.url).add_deal(SavedDeal.from_analysis(deal_input, result))
        console.print(f"\n[dim]Saved deal {saved.id}[/dim]")


@app.command()
def qualify(
    state: str = typer.Option(..., "--state", "-s", help="Two-letter state code"),
    asking_price: float = typer.Option(..., "--asking", help="Seller's asking price"),
    zestimate: float = typer.Option(0, "--zestimate", "-z"),
    motivation: float = typer.Option(..., "--motivation", "-m", help="Seller motivation, 1-10"),
    timeline: int = typer.Option(..., "--timeline", "-t", help="Days until the seller wants to close"),
    owner: bool = typer.Option(True, "--owner/--not-owner"),
    motivated: bool = typer.Option(True, "--motivated/--not-motivated"),
    fsbo: bool = typer.Option(False, "--fsbo", help="Listed for sale by owner"),
    mls: bool = typer.Option(False, "--mls", help="Listed on the MLS"),
    under_contract: bool = typer.Option(False, "--under-contract"),
    address: str = typer.Option("", "--address", "-a", help="Save the lead under this address"),
    config_path: Path = typer.Option(None, "--config", "-c"),
):
    """Check a lead against the partner program rules."""
    cfg = load_config(config_path)

    from dealcommand.analysis import LeadQualifier, asking_price_ratio, lead_from_qualification

    lead = _build(
        LeadInput,
        is_owner=owner,
        is_motivated=motivated,
        is_listed_fsbo=fsbo,
        is_listed_mls=mls,
        is_under_contract=under_contract,
        asking_price_ratio=asking_price_ratio(asking_price, zestimate),
        seller_motivation=motivation,
        sale_timeline_days=timeline,
        state=state,
    )
    result = LeadQualifier(cfg.analysis.qualification).qualify(lead)

    color = _STATUS_COLORS[result.badge]
    console.print(Panel(
        f"{len(result.passed_checks)} checks passed, {len(result.reasons)} failed",
        title=result.badge.value.upper(),
        border_style=color,
    ))
    _print_checks(result.passed_checks, result.reasons)

    if address:
        from dealcommand.db.repository import Repository

        repo = Repository(cfg.database.url)
        saved = repo.add_lead(lead_from_qualification(
            result,
            address=address,
            asking_price=asking_price,
            zestimate=zestimate,
            seller_motivation=motivation,
            state=lead.state,
        ))
        if result.qualified:
            repo.bump_kpi("qualified_leads")
        console.print(f"\n[dim]Saved lead {saved.id} ({saved.status.value})[/dim]")


@app.command()
def roi(
    purchase_price: float = typer.Argument(..., help="Purchase price"),
    arv: float = typer.Argument(..., help="After repair value"),
    repairs: float = typer.Option(0, "--repairs", "-r"),
    months: float = typer.Option(6, "--months", help="Holding period in months"),
):
    """Project fix-and-flip profit and ROI."""
    from dealcommand.analysis import calculate_roi

    try:
        result = calculate_roi(purchase_price, repairs, arv, months)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    table = Table(title="Flip Projection", show_header=False)
    table.add_column("Key", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Total investment", f"${result.total_investment:,.0f}")
    table.add_row("Holding costs", f"${result.holding_costs:,.0f}")
    table.add_row("Selling costs", f"${result.selling_costs:,.0f}")
    table.add_row("Total costs", f"${result.total_costs:,.0f}")
    table.add_row("Profit", f"${result.profit:,.0f}")
    table.add_row("ROI", f"{result.roi:.1f}%")
    console.print(table)


@app.command()
def rental(
    purchase_price: float = typer.Argument(..., help="Purchase price"),
    monthly_rent: float = typer.Argument(..., help="Expected monthly rent"),
    repairs: float = typer.Option(0, "--repairs", "-r"),
):
    """Project monthly buy-and-hold cash flow."""
    from dealcommand.analysis import calculate_rental_cashflow

    try:
        result = calculate_rental_cashflow(purchase_price, monthly_rent, repairs)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    table = Table(title="Rental Cash Flow (monthly)", show_header=False)
    table.add_column("Key", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("PITI", f"${result.monthly_piti:,.0f}")
    table.add_row("Vacancy", f"${result.vacancy:,.0f}")
    table.add_row("Maintenance", f"${result.maintenance:,.0f}")
    table.add_row("Management", f"${result.management:,.0f}")
    table.add_row("Net cash flow", f"${result.net_cashflow:,.0f}")
    table.add_row("Annual cash flow", f"${result.annual_cashflow:,.0f}")
    table.add_row("Cash-on-cash", f"{result.cash_on_cash_return:.1f}%")
    console.print(table)


@app.command()
def script(
    address: str = typer.Argument(..., help="Property address"),
    list_price: float = typer.Option(..., "--price", "-p", help="List price"),
    kind: str = typer.Option("all", "--kind", "-k", help="cold_call, sms, email, agent, zillow_offer or all"),
    name: str = typer.Option("", "--name", "-n", help="Your name (defaults to the saved profile name)"),
    assignment_price: Optional[float] = typer.Option(None, "--assign", help="Also print dispo ads at this assignment price"),
    arv: float = typer.Option(0, "--arv"),
    repairs: float = typer.Option(0, "--repairs", "-r"),
    rent: float = typer.Option(0, "--rent", help="Monthly rent for the rental ads"),
    config_path: Path = typer.Option(None, "--config", "-c"),
):
    """Generate seller outreach scripts, and dispo ads for a contracted deal."""
    cfg = load_config(config_path)

    from dealcommand.analysis import DealAnalyzer
    from dealcommand.db.repository import Repository
    from dealcommand.outreach import dispo, scripts

    name = name or Repository(cfg.database.url).get_user_name()
    offer = DealAnalyzer(cfg.analysis.deal).offer_range(list_price)
    qualifier_price = list_price * cfg.analysis.deal.qualifier_pct_of_list
    generated = scripts.seller_scripts(name, address, qualifier_price, offer.low, offer.high)

    if kind != "all":
        if kind not in generated:
            console.print(f"[red]Unknown script kind {kind!r}. Choose from: {', '.join(generated)}[/red]")
            raise typer.Exit(code=1)
        generated = {kind: generated[kind]}

    for title, text in generated.items():
        console.print(Panel(text, title=title.replace("_", " ").title()))

    if assignment_price is not None:
        ads = dispo.dispo_ads(address, list_price, assignment_price, arv, repairs, rent)
        for title, text in ads.items():
            console.print(Panel(text, title=f"Dispo: {title.replace('_', ' ').title()}", border_style="cyan"))


@app.command()
def links(
    address: str = typer.Argument(..., help='Full address, e.g. "9101 E 50th St, Kansas City, MO 64133"'),
    city: str = typer.Option(None, "--city"),
    state: str = typer.Option(None, "--state"),
    zip_code: str = typer.Option(None, "--zip"),
):
    """Print listing and owner-lookup links for an address."""
    from dealcommand.links import build_all_listing_urls

    urls = build_all_listing_urls(address, city, state, zip_code)
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Site", style="bold")
    table.add_column("URL")
    table.add_row("Zillow", urls.zillow)
    table.add_row("Redfin", urls.redfin)
    table.add_row("Realtor.com", urls.realtor)
    table.add_row("Google", urls.google)
    table.add_row("TruePeopleSearch", urls.true_people)
    console.print(table)


@app.command()
def kpi(
    bump: str = typer.Option(None, "--bump", "-b", help="KPI field to increment"),
    amount: float = typer.Option(1, "--amount", help="Increment for --bump"),
    toggle: str = typer.Option(None, "--toggle", "-t", help="Checklist item to tick or untick"),
    reset: bool = typer.Option(False, "--reset", help="Zero today's counters"),
    config_path: Path = typer.Option(None, "--config", "-c"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Show today's KPIs against daily targets, and the daily checklist."""
    setup_logging(verbose)
    cfg = load_config(config_path)

    from dealcommand.db.repository import CHECKLIST_ITEMS, DAILY_TARGETS, Repository, daily_progress

    repo = Repository(cfg.database.url)
    try:
        if reset:
            repo.reset_kpis()
        if bump:
            repo.bump_kpi(bump, amount)
        if toggle:
            repo.toggle_checklist_item(toggle)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    today = repo.get_kpis()
    table = Table(title=f"KPIs for {today.day.isoformat()}")
    table.add_column("Metric", style="bold")
    table.add_column("Today", justify="right")
    table.add_column("Target", justify="right")
    for field, target in DAILY_TARGETS.items():
        value = getattr(today, field)
        style = "green" if value >= target else "white"
        table.add_row(
            field.replace("_", " ").title(),
            f"[{style}]{value:,.0f}[/{style}]",
            f"{target:,.0f}",
        )
    console.print(table)
    console.print(f"Daily target progress: [bold]{daily_progress(today):.0f}%[/bold]\n")

    checklist = repo.get_checklist()
    for key, label in CHECKLIST_ITEMS.items():
        mark = "[green]x[/green]" if checklist.items.get(key) else " "
        console.print(f"  [{mark}] {label} [dim]({key})[/dim]")
    console.print(f"\n{checklist.completed}/{len(CHECKLIST_ITEMS)} done")


@app.command()
def playbook(
    state: str = typer.Option(None, "--state", "-s", help="Show state-specific rules"),
):
    """Show partner program rules, buyer segments and the dispo playbook."""
    from dealcommand.outreach import dispo

    if state:
        state = state.upper()
        notes = []
        if rules.is_restricted(state):
            notes.append(f"[red]{rules.RESTRICTED_STATES[state]}[/red]")
        if rules.is_attorney_state(state):
            notes.append("Attorney state - additional legal costs")
        if rules.is_non_disclosure_state(state):
            notes.append("Non-disclosure state - limited comp data")
        requirement = rules.license_requirement(state)
        if requirement:
            notes.append(f"License: {requirement}")
        console.print(Panel("\n".join(notes) or "No special rules", title=state))

    table = Table(title="Partner Program Rules", show_lines=True)
    table.add_column("Rule", style="bold")
    table.add_column("Detail")
    for rule, detail in rules.PARTNER_RULES:
        table.add_row(rule, detail)
    console.print(table)

    console.print("\n[bold]Disqualified when:[/bold]")
    for reason in rules.PARTNER_DISQUALIFICATION_REASONS:
        console.print(f"  - {reason}")

    segments = Table(title="\nBuyer Segments", show_lines=True)
    segments.add_column("Type", style="cyan")
    segments.add_column("Criteria")
    segments.add_column("Strategy")
    segments.add_column("Ideal Deal")
    for seg in rules.BUYER_SEGMENTS:
        segments.add_row(seg.type, seg.criteria, seg.strategy, seg.ideal_deal)
    console.print(segments)

    console.print(Panel(
        "\n".join(f"- {t}" for t in dispo.DISPO_PRICE_STRATEGY["tactics"]),
        title=dispo.DISPO_PRICE_STRATEGY["goal"],
    ))
    console.print("[bold]Where to find buyers:[/bold]")
    for channel in dispo.DISPO_BUYER_CHANNELS:
        console.print(f"  - {channel['channel']}")
    console.print("\n[bold]Calls to action:[/bold]")
    for cta in dispo.DISPO_CTA_IDEAS:
        console.print(f"  - {cta}")

    objection = dispo.DISPO_OBJECTION_ZILLOW
    console.print(Panel(objection["response"], title=objection["objection"]))
    console.print("[bold]Before you send a buyer anything:[/bold]")
    for item in dispo.DISPO_BUYER_CHECKLIST:
        console.print(f"  - {item}")


@app.command("partner-script")
def partner_script(
    source: str = typer.Argument(..., help="cold-call, facebook, sms, outsourced or website"),
    first_name: str = typer.Option("", "--name", "-n", help="Seller's first name"),
    address: str = typer.Option("", "--address", "-a"),
    city: str = typer.Option("", "--city"),
    partner_phone: str = typer.Option("", "--partner-phone", help="Number the partner will call from"),
):
    """Print the partner-program call flow for a lead."""
    from dealcommand.outreach import scripts

    try:
        opening = scripts.partner_opening(source, first_name, address, city)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    console.print(Panel(opening, title="Opening"))
    console.print(Panel(scripts.QUALIFICATION_QUESTIONS, title="Qualification"))
    console.print(Panel(scripts.PRICE_NEGOTIATION, title="Price"))
    console.print(Panel(scripts.appointment_setting(partner_phone), title="Appointment"))


@app.command()
def profile(
    name: str = typer.Argument(None, help="Name to sign scripts with"),
    config_path: Path = typer.Option(None, "--config", "-c"),
):
    """Show or set the name used in generated scripts."""
    cfg = load_config(config_path)

    from dealcommand.db.repository import Repository

    repo = Repository(cfg.database.url)
    if name:
        repo.set_user_name(name)
    console.print(f"Name: [bold]{repo.get_user_name() or '(not set)'}[/bold]")


@app.command()
def config_show(
    config_path: Path = typer.Option(None, "--config", "-c"),
):
    """Display current configuration."""
    cfg = load_config(config_path)
    console.print_json(json.dumps(redacted_dump(cfg), indent=2, default=str))


@app.command()
def serve(
    config_path: Path = typer.Option(None, "--config", "-c"),
    host: str = typer.Option("0.0.0.0", "--host"),
    port: int = typer.Option(8000, "--port"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Start the HTTP API server."""
    import uvicorn

    setup_logging(verbose)
    cfg = load_config(config_path)

    from dealcommand.api.server import create_app

    web_app = create_app(cfg)
    console.print(f"[bold]Starting DealCommand API at http://{host}:{port}[/bold]")
    uvicorn.run(web_app, host=host, port=port)


if __name__ == "__main__":
    app()
