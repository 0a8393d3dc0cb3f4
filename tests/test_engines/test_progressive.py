"""Tests for progressive federal tax.

Expected values are hand-computed from the 2026 projected bracket tables.
"""

from decimal import Decimal

import pytest

from equity_compass.engines.progressive import ProgressiveTaxCalculator
from equity_compass.models.enums import FilingStatus


@pytest.fixture
def calc():
    return ProgressiveTaxCalculator()


class TestComputeTax:
    def test_zero_income(self, calc):
        assert calc.compute_tax(Decimal("0"), FilingStatus.SINGLE) == Decimal("0")

    def test_negative_income(self, calc):
        assert calc.compute_tax(Decimal("-5000"), FilingStatus.MARRIED_JOINT) == Decimal("0")

    def test_first_bracket_boundary(self, calc):
        assert calc.compute_tax(Decimal("11600"), FilingStatus.SINGLE) == Decimal("1160")

    def test_second_bracket_boundary(self, calc):
        """$1,160 + ($47,150 - $11,600) x 15% = $6,492.50"""
        assert calc.compute_tax(Decimal("47150"), FilingStatus.SINGLE) == Decimal("6492.50")

    def test_married_joint_100k(self, calc):
        """$2,320 + $71,100 x 15% + $5,700 x 25% = $14,410"""
        assert calc.compute_tax(Decimal("100000"), FilingStatus.MARRIED_JOINT) == Decimal("14410")

    def test_top_bracket(self, calc):
        low = calc.compute_tax(Decimal("1000000"), FilingStatus.SINGLE)
        high = calc.compute_tax(Decimal("1001000"), FilingStatus.SINGLE)
        assert high - low == Decimal("396")

    def test_monotonic(self, calc):
        for status in FilingStatus:
            prev = Decimal("0")
            for income in range(0, 1_200_000, 7_500):
                tax = calc.compute_tax(Decimal(income), status)
                assert tax >= prev
                prev = tax


class TestMarginalRate:
    def test_rates(self, calc):
        assert calc.marginal_rate(Decimal("0"), FilingStatus.SINGLE) == Decimal("0.10")
        assert calc.marginal_rate(Decimal("200000"), FilingStatus.SINGLE) == Decimal("0.28")
        assert calc.marginal_rate(Decimal("5000000"), FilingStatus.MARRIED_JOINT) == Decimal("0.396")
