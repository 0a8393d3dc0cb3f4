"""Client equity report generator."""

from datetime import date
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from equity_compass.engine import EquityEngine
from equity_compass.models.client import Client
from equity_compass.reports.formatting import format_currency, format_number, format_percent

TEMPLATE_DIR = Path(__file__).parent / "templates"


class ClientReportGenerator:
    """Generates a plain-text equity report for one client."""

    def __init__(self, engine: EquityEngine | None = None) -> None:
        self.engine = engine or EquityEngine()
        self.env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)), trim_blocks=True)
        self.env.filters["currency"] = format_currency
        self.env.filters["number"] = format_number
        self.env.filters["percent"] = format_percent

    def render(
        self,
        client: Client,
        simulate_sell_all: bool = False,
        as_of: date | None = None,
    ) -> str:
        """Render grants, full vesting schedule, planned exercises, and AMT room."""
        as_of = as_of or date.today()
        grant_names = {g.id: g.display_name for g in client.grants}
        template = self.env.get_template("client_report.txt")
        return template.render(
            client=client,
            as_of=as_of,
            config=self.engine.config,
            rates=self.engine.get_effective_rates(client),
            events=self.engine.vesting.client_schedule(client, simulate_sell_all, as_of),
            grant_names=grant_names,
            statuses={
                g.id: self.engine.get_grant_status(g, client.exercises_for(g.id), as_of)
                for g in client.grants
            },
            amt=self.engine.calculate_amt_room(client, as_of),
            summary=self.engine.summarizer.summarize(client, simulate_sell_all, as_of),
            simulate_sell_all=simulate_sell_all,
        )
