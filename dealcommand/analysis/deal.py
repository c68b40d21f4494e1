"""Wholesale deal math: 80% qualifier, 90% Zestimate rule and the 70% MAO rule."""

from __future__ import annotations

from dealcommand import rules
from dealcommand.config import DealRulesConfig
from dealcommand.models import DealAnalysis, DealInput, OfferRange
from dealcommand.numbers import format_number


class DealAnalyzer:
    """Analyze a listing for wholesale potential.

    Computes the offer qualifier price, the maximum allowable offer and the
    spread between them, and collects advisory flags. Flags never stop the
    analysis; a negative spread is reported as-is.
    """

    def __init__(self, config: DealRulesConfig | None = None):
        self.cfg = config or DealRulesConfig()

    def analyze(self, deal: DealInput) -> DealAnalysis:
        cfg = self.cfg
        flags: list[str] = []

        qualifier_price = deal.list_price * cfg.qualifier_pct_of_list
        zestimate_check = deal.zestimate * cfg.zestimate_pct
        mao = max(0.0, deal.arv * cfg.mao_pct_of_arv - deal.repair_estimate)
        spread = mao - qualifier_price
        passes_zestimate_rule = deal.list_price <= zestimate_check

        if not passes_zestimate_rule:
            flags.append(f"List price exceeds {cfg.zestimate_pct:.0%} of Zestimate")

        if deal.days_on_market > cfg.stale_dom:
            flags.append(f"DOM exceeds {cfg.stale_dom} days - potential stale listing")
        elif deal.days_on_market > cfg.moderate_dom:
            flags.append(f"DOM between {cfg.moderate_dom}-{cfg.stale_dom} days - moderate")

        if spread < cfg.min_spread:
            flags.append(f"Spread potential below ${format_number(cfg.min_spread)} minimum")

        if not rules.match_motivated_keywords(deal.keywords):
            flags.append("No motivated seller keywords detected")

        motivation = min(10.0, max(1.0, deal.seller_motivation))

        return DealAnalysis(
            qualifier_price_80=qualifier_price,
            zestimate_check_90=zestimate_check,
            mao=mao,
            spread_potential=spread,
            motivation_score=motivation,
            passes_zestimate_rule=passes_zestimate_rule,
            flags=flags,
        )

    def offer_range(self, list_price: float) -> OfferRange:
        """Low/high offer band quoted to listing agents."""
        return OfferRange(
            low=list_price * self.cfg.offer_low_pct,
            high=list_price * self.cfg.offer_high_pct,
        )


def analyze_deal(deal: DealInput, config: DealRulesConfig | None = None) -> DealAnalysis:
    return DealAnalyzer(config).analyze(deal)
