"""Wholesaling analysis engine: markets, deals, leads and exit projections."""

from dealcommand.analysis.market import MarketScorer, evaluate_market
from dealcommand.analysis.deal import DealAnalyzer, analyze_deal
from dealcommand.analysis.qualification import (
    LeadQualifier,
    asking_price_ratio,
    lead_from_qualification,
    qualify_lead,
)
from dealcommand.analysis.returns import calculate_rental_cashflow, calculate_roi
