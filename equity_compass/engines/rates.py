"""Effective state and long-term capital gains rate resolution."""

from decimal import Decimal

from equity_compass.engines.brackets import TaxYearConfig, get_tax_year_config
from equity_compass.models.client import Client
from equity_compass.models.reports import EffectiveRates

HUNDRED = Decimal("100")


class RateResolver:
    """Resolves a client's state and LTCG rates, honoring manual overrides.

    The LTCG model is two-tier on purpose: 20% when the client's ordinary
    bracket exceeds 33%, otherwise 15%. It does not walk the LTCG brackets.
    """

    def __init__(self, config: TaxYearConfig | None = None) -> None:
        self.config = config or get_tax_year_config()

    def state_rate(self, client: Client) -> Decimal:
        if client.custom_state_tax_rate is not None:
            return client.custom_state_tax_rate / HUNDRED
        rates = self.config.state_tax_rates
        code = client.state.strip().upper()
        if code in rates:
            return rates[code]
        return rates[self.config.fallback_state]

    def fed_ltcg_rate(self, client: Client) -> Decimal:
        if client.custom_ltcg_tax_rate is not None:
            return client.custom_ltcg_tax_rate / HUNDRED
        if client.tax_bracket > self.config.ltcg_bracket_threshold:
            return self.config.ltcg_high_rate
        return self.config.ltcg_low_rate

    def resolve(self, client: Client) -> EffectiveRates:
        return EffectiveRates(
            state_rate=self.state_rate(client),
            fed_ltcg_rate=self.fed_ltcg_rate(client),
        )
