"""Flip ROI and rental cash flow projections.

Both use fixed rule-of-thumb percentages rather than configured
assumptions: 1%/month holding, 8% selling costs, PITI at 0.8% of the
all-in cost, and 25% down for cash-on-cash.
"""

from __future__ import annotations

from dealcommand.models import FlipProjection, RentalCashflow
from dealcommand.numbers import round_half_up

HOLDING_COST_PCT_PER_MONTH = 0.01
SELLING_COST_PCT = 0.08
PITI_PCT = 0.008
VACANCY_PCT = 0.08
MAINTENANCE_PCT = 0.10
MANAGEMENT_PCT = 0.10
DOWN_PAYMENT_PCT = 0.25


def _total_investment(purchase_price: float, repair_cost: float) -> float:
    total = purchase_price + repair_cost
    if total <= 0:
        raise ValueError(
            f"Purchase price plus repairs must be positive, got {total:,.2f}"
        )
    return total


def calculate_roi(
    purchase_price: float,
    repair_cost: float,
    arv: float,
    holding_months: float,
) -> FlipProjection:
    total_investment = _total_investment(purchase_price, repair_cost)
    holding_costs = total_investment * HOLDING_COST_PCT_PER_MONTH * holding_months
    selling_costs = arv * SELLING_COST_PCT
    total_costs = total_investment + holding_costs + selling_costs
    profit = arv - total_costs
    roi = profit / total_investment * 100

    return FlipProjection(
        total_investment=total_investment,
        holding_costs=round_half_up(holding_costs),
        selling_costs=round_half_up(selling_costs),
        total_costs=round_half_up(total_costs),
        profit=round_half_up(profit),
        roi=round_half_up(roi, 1),
    )


def calculate_rental_cashflow(
    purchase_price: float,
    monthly_rent: float,
    repair_cost: float,
) -> RentalCashflow:
    total_investment = _total_investment(purchase_price, repair_cost)
    monthly_piti = total_investment * PITI_PCT
    vacancy = monthly_rent * VACANCY_PCT
    maintenance = monthly_rent * MAINTENANCE_PCT
    management = monthly_rent * MANAGEMENT_PCT
    net_cashflow = monthly_rent - monthly_piti - vacancy - maintenance - management
    annual_cashflow = net_cashflow * 12
    cash_on_cash = annual_cashflow / (total_investment * DOWN_PAYMENT_PCT) * 100

    return RentalCashflow(
        monthly_piti=round_half_up(monthly_piti),
        vacancy=round_half_up(vacancy),
        maintenance=round_half_up(maintenance),
        management=round_half_up(management),
        net_cashflow=round_half_up(net_cashflow),
        annual_cashflow=round_half_up(annual_cashflow),
        cash_on_cash_return=round_half_up(cash_on_cash, 1),
    )
