"""ISO disposition comparison.

Qualifying disposition (held >2 years from grant and >1 year from exercise):
  the whole gain over strike is long-term capital gain, taxed at the LTCG
  rate plus NIIT plus state. The bargain element is an AMT preference item
  in the exercise year; it is reported, not re-taxed here.

Disqualifying disposition (sold early):
  ordinary income = min(bargain element, actual gain), taxed at the client's
  marginal bracket plus state. Gain above FMV at exercise is capital gain.
  Selling in the exercise year removes the AMT preference.
  A sale below strike makes ordinary income negative; the loss is credited
  at the ordinary + state rate, so the scenario's taxes are negative too.
"""

from decimal import Decimal

from equity_compass.engines.brackets import TaxYearConfig, get_tax_year_config
from equity_compass.engines.rates import HUNDRED, RateResolver
from equity_compass.exceptions import DataValidationError
from equity_compass.models.client import Client
from equity_compass.models.enums import DispositionType
from equity_compass.models.reports import (
    CashlessExerciseEstimate,
    DispositionComparison,
    ISOScenario,
    TaxBreakdown,
)


def _require_non_negative(**values: Decimal) -> None:
    for field, value in values.items():
        if value < 0:
            raise DataValidationError(field, f"must be non-negative, got {value}")


class ISODispositionComparator:
    """Computes qualified and disqualified ISO sale scenarios."""

    def __init__(self, config: TaxYearConfig | None = None) -> None:
        self.config = config or get_tax_year_config()
        self.rates = RateResolver(self.config)

    def scenario(
        self,
        shares: Decimal,
        strike_price: Decimal,
        fmv_at_exercise: Decimal,
        sale_price: Decimal,
        client: Client,
        is_qualified: bool,
    ) -> ISOScenario:
        _require_non_negative(
            shares=shares,
            strike_price=strike_price,
            fmv_at_exercise=fmv_at_exercise,
            sale_price=sale_price,
        )
        rates = self.rates.resolve(client)
        niit_rate = self.config.niit_rate
        ordinary_rate = client.tax_bracket / HUNDRED

        exercise_cost = shares * strike_price
        sale_proceeds = shares * sale_price
        bargain_element = max((fmv_at_exercise - strike_price) * shares, Decimal("0"))

        if is_qualified:
            ordinary_income = Decimal("0")
            capital_gain = max(sale_proceeds - exercise_cost, Decimal("0"))
            amt_preference = bargain_element
            fed_rate = rates.fed_ltcg_rate
            fed_amount = capital_gain * rates.fed_ltcg_rate
            niit_amount = capital_gain * niit_rate
            state_amount = capital_gain * rates.state_rate
        else:
            actual_gain = sale_proceeds - exercise_cost
            ordinary_income = min(bargain_element, actual_gain)
            capital_gain = max(sale_proceeds - shares * fmv_at_exercise, Decimal("0"))
            amt_preference = Decimal("0")
            fed_rate = ordinary_rate
            fed_amount = ordinary_income * ordinary_rate + capital_gain * rates.fed_ltcg_rate
            niit_amount = capital_gain * niit_rate
            state_amount = (ordinary_income + capital_gain) * rates.state_rate

        total_tax = fed_amount + niit_amount + state_amount

        if is_qualified:
            name = "Qualified Disposition (Hold 1yr+)"
            description = (
                "Held >2 years from grant & >1 year from exercise. Taxed at "
                f"long-term capital gains rates ({rates.fed_ltcg_rate * HUNDRED:.1f}%)."
            )
        else:
            name = "Disqualified Disposition (Sell Early)"
            description = (
                "Sold early. The bargain element is taxed as ordinary income "
                "at the marginal rate."
            )

        return ISOScenario(
            name=name,
            description=description,
            disposition=(
                DispositionType.QUALIFYING if is_qualified else DispositionType.DISQUALIFYING
            ),
            shares=shares,
            strike_price=strike_price,
            fmv_at_exercise=fmv_at_exercise,
            sale_price=sale_price,
            exercise_cost=exercise_cost,
            sale_proceeds=sale_proceeds,
            bargain_element=bargain_element,
            ordinary_income=ordinary_income,
            capital_gain=capital_gain,
            amt_preference=amt_preference,
            taxes=TaxBreakdown(
                fed_rate=fed_rate,
                fed_amount=fed_amount,
                niit_rate=niit_rate,
                niit_amount=niit_amount,
                state_rate=rates.state_rate,
                state_amount=state_amount,
                total_tax=total_tax,
            ),
            net_profit=sale_proceeds - exercise_cost - total_tax,
        )

    def compare(
        self,
        shares: Decimal,
        strike_price: Decimal,
        fmv_at_exercise: Decimal,
        future_price: Decimal,
        client: Client,
    ) -> DispositionComparison:
        """Hold-for-qualification at ``future_price`` vs. selling now at FMV."""
        return DispositionComparison(
            qualified=self.scenario(
                shares, strike_price, fmv_at_exercise, future_price, client, True
            ),
            disqualified=self.scenario(
                shares, strike_price, fmv_at_exercise, fmv_at_exercise, client, False
            ),
        )

    def cashless_exercise(
        self,
        shares: Decimal,
        strike_price: Decimal,
        fmv_at_exercise: Decimal,
        client: Client,
    ) -> CashlessExerciseEstimate:
        """Exercise and sell immediately; the whole spread is ordinary income."""
        _require_non_negative(
            shares=shares, strike_price=strike_price, fmv_at_exercise=fmv_at_exercise
        )
        total_proceeds = shares * fmv_at_exercise
        total_cost = shares * strike_price
        gross_profit = total_proceeds - total_cost
        tax_rate = client.tax_bracket / HUNDRED + self.rates.state_rate(client)
        taxes = gross_profit * tax_rate
        return CashlessExerciseEstimate(
            shares=shares,
            total_proceeds=total_proceeds,
            total_cost=total_cost,
            gross_profit=gross_profit,
            estimated_tax_rate=tax_rate,
            estimated_taxes=taxes,
            net_cash=gross_profit - taxes,
        )
