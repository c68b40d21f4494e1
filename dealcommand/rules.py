"""State rules, motivated-seller keywords and buyer segments for wholesaling."""

from __future__ import annotations

from typing import NamedTuple


class BuyerSegment(NamedTuple):
    type: str
    criteria: str
    strategy: str
    ideal_deal: str


US_STATES: tuple[str, ...] = (
    "AL", "AK", "AZ", "AR", "CA", "CO", "CT", "DE", "FL", "GA",
    "HI", "ID", "IL", "IN", "IA", "KS", "KY", "LA", "ME", "MD",
    "MA", "MI", "MN", "MS", "MO", "MT", "NE", "NV", "NH", "NJ",
    "NM", "NY", "NC", "ND", "OH", "OK", "OR", "PA", "RI", "SC",
    "SD", "TN", "TX", "UT", "VT", "VA", "WA", "WV", "WI", "WY",
)

# Wholesale deals are not accepted in these states at all.
RESTRICTED_STATES: dict[str, str] = {
    "SC": "South Carolina - Wholesale restrictions",
    "OR": "Oregon - Wholesale restrictions",
    "PA": "Pennsylvania - Attorney state restrictions",
    "IL": "Illinois - Wholesale restrictions apply",
}

ATTORNEY_STATES: frozenset[str] = frozenset({
    "CT", "DE", "GA", "MA", "ME", "NH", "NJ", "NY", "NC", "ND",
    "RI", "SC", "VT", "VA", "WV",
})

NON_DISCLOSURE_STATES: frozenset[str] = frozenset({
    "AK", "ID", "KS", "LA", "ME", "MS", "MO", "MT", "NM",
    "ND", "TX", "UT", "WY",
})

LICENSE_REQUIRED_STATES: dict[str, str] = {
    "ND": "North Dakota - RE license required",
    "SD": "South Dakota - RE license required",
    "NE": "Nebraska - RE license required",
    "KS": "Kansas - RE license required",
    "OK": "Oklahoma - RE license required",
    "IA": "Iowa - RE license required",
    "IL": "Illinois - License required if >1 transaction/12 months",
    "KY": "Kentucky - License required to market wholesale deal (novations can bypass)",
    "WV": "West Virginia - RE license required",
    "VA": "Virginia - License required if >2 transactions/year",
    "NJ": "New Jersey - RE license required",
    "RI": "Rhode Island - RE license required",
    "NY": "New York - RE license required",
    "VT": "Vermont - RE license required",
    "OH": "Ohio - License required to market wholesale deal (novations can bypass)",
}

MOTIVATED_KEYWORDS: tuple[str, ...] = (
    "fixer-upper", "needs work", "motivated seller", "cash only",
    "as-is", "handyman special", "investor special", "below market",
    "price reduced", "must sell", "estate sale", "bank owned",
    "foreclosure", "short sale", "distressed", "vacant",
    "fire damage", "water damage", "needs rehab", "tlc needed",
)

BUYER_SEGMENTS: tuple[BuyerSegment, ...] = (
    BuyerSegment(
        type="Cash Buyer",
        criteria="Has liquid capital, wants quick close",
        strategy="Fix & Flip",
        ideal_deal="Distressed properties 60-70% ARV",
    ),
    BuyerSegment(
        type="Out-of-State Landlord",
        criteria="Owns rental properties remotely",
        strategy="Buy & Hold",
        ideal_deal="Turnkey or light rehab rentals with 8%+ cap rate",
    ),
    BuyerSegment(
        type="LLC Buyer",
        criteria="Purchases through business entity",
        strategy="Portfolio Building",
        ideal_deal="Multiple properties, bulk deals preferred",
    ),
    BuyerSegment(
        type="Fix & Flip Investor",
        criteria="Active rehabber, contractor connections",
        strategy="Fix & Flip",
        ideal_deal="Heavy rehab with $30k+ spread potential",
    ),
    BuyerSegment(
        type="BRRRR Investor",
        criteria="Buy, Rehab, Rent, Refinance, Repeat",
        strategy="BRRRR",
        ideal_deal="Below market with strong rental potential, refinance-friendly ARV",
    ),
)

PARTNER_DISQUALIFICATION_REASONS: tuple[str, ...] = (
    "They are not the owner or do not have rights to the property",
    "The property is not in a market that meets our Ideal Real Estate Market Criteria",
    "The property is listed FSBO or on the MLS",
    "The property is under contract with another wholesaler",
    "They do not want to sell the property",
    "They are not wanting to sell their property within 90 days",
    "Their asking price is higher than 90% of Zestimate value and they are not willing to negotiate",
)

PARTNER_RULES: tuple[tuple[str, str], ...] = (
    ("Market meets Ideal Real Estate Market Criteria",
     "MSA > 400k, City > 100k, Median $200k-$400k, DOM < 50, Pending > 25%"),
    ("You SPOKE to and qualified the lead before submitting",
     "Must have a live conversation with the seller"),
    ("Seller actually wants to sell the property",
     "Not just looking for an offer because you reached out"),
    ("Asking price <= 90% of Zestimate",
     "Check Zillow Zestimate, then Redfin, then Realtor.com"),
    ("Property NOT listed FSBO or on MLS",
     "Check Zillow to see if actively listed For Sale"),
    ("Property NOT under contract with another wholesaler",
     "Confirm directly with seller"),
    ("Property NOT in OR, IL, SC, or PA",
     "Restricted states due to wholesale regulations"),
    ("Appointment scheduled via Partner Program calendar",
     "Use the Partner Program Calendar Booking Link"),
)


def is_restricted(state: str) -> bool:
    return state.upper() in RESTRICTED_STATES


def is_attorney_state(state: str) -> bool:
    return state.upper() in ATTORNEY_STATES


def is_non_disclosure_state(state: str) -> bool:
    return state.upper() in NON_DISCLOSURE_STATES


def license_requirement(state: str) -> str | None:
    """Return the licensing note for a state, or None if wholesaling is unlicensed."""
    return LICENSE_REQUIRED_STATES.get(state.upper())


def match_motivated_keywords(keywords: list[str]) -> list[str]:
    """Keep the supplied keywords that equal a canonical phrase, ignoring case."""
    canonical = {kw.lower() for kw in MOTIVATED_KEYWORDS}
    return [k for k in keywords if k.lower() in canonical]


def find_motivated_keywords(text: str) -> list[str]:
    """Scan free listing text for canonical motivated-seller phrases."""
    lowered = text.lower()
    return [kw for kw in MOTIVATED_KEYWORDS if kw in lowered]
