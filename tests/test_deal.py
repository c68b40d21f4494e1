"""Tests for wholesale deal analysis."""

import pytest

from dealcommand import rules
from dealcommand.analysis import DealAnalyzer, analyze_deal
from dealcommand.config import DealRulesConfig
from dealcommand.models import DealInput


def _make_deal(**overrides) -> DealInput:
    defaults = {
        "address": "100 Investor Blvd",
        "list_price": 100_000,
        "zestimate": 120_000,
        "repair_estimate": 20_000,
        "arv": 160_000,
        "keywords": [],
        "days_on_market": 10,
        "seller_motivation": 5,
    }
    defaults.update(overrides)
    return DealInput(**defaults)


class TestDealAnalyzer:
    def setup_method(self):
        self.analyzer = DealAnalyzer(DealRulesConfig())

    def test_core_numbers(self):
        result = self.analyzer.analyze(_make_deal())
        assert result.qualifier_price_80 == pytest.approx(80_000)
        assert result.zestimate_check_90 == pytest.approx(108_000)
        assert result.mao == pytest.approx(92_000)
        assert result.spread_potential == pytest.approx(12_000)
        assert result.passes_zestimate_rule
        assert result.flags == ["No motivated seller keywords detected"]

    def test_motivated_keywords_clear_flag(self):
        result = self.analyzer.analyze(_make_deal(keywords=["Motivated Seller", "pool"]))
        assert result.flags == []

    def test_unknown_keywords_do_not_count(self):
        result = self.analyzer.analyze(_make_deal(keywords=["granite counters"]))
        assert "No motivated seller keywords detected" in result.flags

    def test_keywords_match_exactly_ignoring_case(self):
        assert rules.match_motivated_keywords(["VACANT", " vacant", "vacant "]) == ["VACANT"]
        result = self.analyzer.analyze(_make_deal(keywords=[" motivated seller "]))
        assert "No motivated seller keywords detected" in result.flags

    def test_zestimate_rule_failure(self):
        result = self.analyzer.analyze(_make_deal(list_price=110_000))
        assert not result.passes_zestimate_rule
        assert "List price exceeds 90% of Zestimate" in result.flags

    def test_zestimate_rule_boundary(self):
        result = self.analyzer.analyze(_make_deal(list_price=108_000))
        assert result.passes_zestimate_rule

    def test_mao_floored_at_zero(self):
        result = self.analyzer.analyze(_make_deal(arv=20_000, repair_estimate=50_000))
        assert result.mao == 0
        assert result.spread_potential == pytest.approx(-80_000)
        assert "Spread potential below $5,000 minimum" in result.flags

    def test_small_spread_flagged(self):
        # mao 92k, qualifier 88k -> 4k spread
        result = self.analyzer.analyze(_make_deal(list_price=110_000, zestimate=200_000))
        assert result.spread_potential == pytest.approx(4_000)
        assert "Spread potential below $5,000 minimum" in result.flags

    @pytest.mark.parametrize(
        "dom, flag",
        [
            (30, None),
            (31, "DOM between 30-60 days - moderate"),
            (60, "DOM between 30-60 days - moderate"),
            (61, "DOM exceeds 60 days - potential stale listing"),
        ],
    )
    def test_dom_flags(self, dom, flag):
        flags = self.analyzer.analyze(_make_deal(days_on_market=dom, keywords=["vacant"])).flags
        if flag is None:
            assert flags == []
        else:
            assert flags == [flag]

    @pytest.mark.parametrize("given, expected", [(0, 1), (-4, 1), (7, 7), (15, 10)])
    def test_motivation_clamped(self, given, expected):
        result = self.analyzer.analyze(_make_deal(seller_motivation=given))
        assert result.motivation_score == expected

    def test_offer_range(self):
        offer = self.analyzer.offer_range(200_000)
        assert offer.low == pytest.approx(150_000)
        assert offer.high == pytest.approx(160_000)


def test_analyze_deal_with_custom_rules():
    rules = DealRulesConfig(min_spread=20_000)
    result = analyze_deal(_make_deal(keywords=["as-is"]), rules)
    assert result.flags == ["Spread potential below $20,000 minimum"]
