"""Market scoring against the ideal wholesaling market criteria."""

from __future__ import annotations

from dealcommand import rules
from dealcommand.config import MarketCriteriaConfig
from dealcommand.models import MarketData, MarketScore, MarketStatus


class MarketScorer:
    """Score a market out of 100 on five equally weighted checks.

    A restricted state costs a flat penalty and always disqualifies the
    market. Attorney and non-disclosure states only add advisory flags.
    """

    def __init__(self, config: MarketCriteriaConfig | None = None):
        self.cfg = config or MarketCriteriaConfig()

    def evaluate(self, data: MarketData) -> MarketScore:
        cfg = self.cfg
        flags: list[str] = []
        passed: list[str] = []
        score = 0

        if data.msa_population > cfg.min_msa_population:
            score += cfg.points_per_check
            passed.append(f"MSA population > {_short(cfg.min_msa_population)}")
        else:
            flags.append(f"MSA population below {_short(cfg.min_msa_population)} threshold")

        if data.city_population > cfg.min_city_population:
            score += cfg.points_per_check
            passed.append(f"City population > {_short(cfg.min_city_population)}")
        else:
            flags.append(f"City population below {_short(cfg.min_city_population)} threshold")

        low, high = cfg.min_median_price, cfg.max_median_price
        if low <= data.median_price <= high:
            score += cfg.points_per_check
            passed.append(f"Median price in ${_short(low)}-${_short(high)} range")
        elif data.median_price < low:
            flags.append(f"Median price below ${_short(low)}")
        else:
            flags.append(f"Median price above ${_short(high)}")

        if data.days_on_market < cfg.max_days_on_market:
            score += cfg.points_per_check
            passed.append(f"DOM under {cfg.max_days_on_market:g} days")
        else:
            flags.append(f"DOM exceeds {cfg.max_days_on_market:g} days")

        if data.pending_ratio > cfg.min_pending_ratio:
            score += cfg.points_per_check
            passed.append(f"Pending ratio above {cfg.min_pending_ratio:g}%")
        else:
            flags.append(f"Pending ratio below {cfg.min_pending_ratio:g}%")

        restricted = rules.is_restricted(data.state)
        if restricted:
            flags.append(rules.RESTRICTED_STATES[data.state])
            score = max(0, score - cfg.restricted_state_penalty)

        if rules.is_attorney_state(data.state):
            flags.append("Attorney state - additional legal costs")

        if rules.is_non_disclosure_state(data.state):
            flags.append("Non-disclosure state - limited comp data")

        if score < cfg.disqualify_below or restricted:
            status = MarketStatus.DISQUALIFIED
        elif score < cfg.ideal_from:
            status = MarketStatus.BORDERLINE
        else:
            status = MarketStatus.IDEAL

        return MarketScore(
            status=status,
            score=score,
            flags=flags,
            passed=passed,
            license_requirement=rules.license_requirement(data.state),
        )


def _short(amount: float) -> str:
    """400000 -> '400k'."""
    if amount >= 1000 and amount % 1000 == 0:
        return f"{int(amount // 1000)}k"
    return f"{amount:,.0f}"


def evaluate_market(data: MarketData, criteria: MarketCriteriaConfig | None = None) -> MarketScore:
    return MarketScorer(criteria).evaluate(data)
