"""Tests for effective rate resolution."""

from decimal import Decimal

import pytest

from equity_compass.engines.rates import RateResolver
from equity_compass.models.client import Client


@pytest.fixture
def resolver():
    return RateResolver()


class TestStateRate:
    def test_table_lookup(self, resolver, ca_client: Client):
        assert resolver.state_rate(ca_client) == Decimal("0.144")

    def test_lowercase_code(self, resolver, ca_client: Client):
        client = ca_client.model_copy(update={"state": "ny"})
        assert resolver.state_rate(client) == Decimal("0.109")

    def test_unknown_state_falls_back(self, resolver, ca_client: Client):
        client = ca_client.model_copy(update={"state": "ZZ"})
        assert resolver.state_rate(client) == Decimal("0.05")

    def test_override_percent(self, resolver, ca_client: Client):
        client = ca_client.model_copy(update={"custom_state_tax_rate": Decimal("9.3")})
        assert resolver.state_rate(client) == Decimal("0.093")

    def test_zero_override_is_honored(self, resolver, ca_client: Client):
        """A 0% override must not fall through to the CA table rate."""
        client = ca_client.model_copy(update={"custom_state_tax_rate": Decimal("0")})
        assert resolver.state_rate(client) == Decimal("0")


class TestLTCGRate:
    def test_top_bracket_gets_20_percent(self, resolver, ca_client: Client):
        assert resolver.fed_ltcg_rate(ca_client) == Decimal("0.20")

    def test_bracket_33_gets_15_percent(self, resolver, ca_client: Client):
        client = ca_client.model_copy(update={"tax_bracket": Decimal("33")})
        assert resolver.fed_ltcg_rate(client) == Decimal("0.15")

    def test_override(self, resolver, ca_client: Client):
        client = ca_client.model_copy(update={"custom_ltcg_tax_rate": Decimal("0")})
        assert resolver.fed_ltcg_rate(client) == Decimal("0")

    def test_resolve(self, resolver, ca_client: Client):
        rates = resolver.resolve(ca_client)
        assert rates.state_rate == Decimal("0.144")
        assert rates.fed_ltcg_rate == Decimal("0.20")
