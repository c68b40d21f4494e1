"""Disposition marketing: buyer-facing ads and the dispo playbook."""

from __future__ import annotations

from typing import Callable, NamedTuple, Optional

from dealcommand.numbers import format_number, round_half_up

DEFAULT_SAMPLE_RENT = 1200.0


def _address(address: str) -> str:
    return address or "[Address]"


def _money(amount: float) -> str:
    return f"${format_number(amount)}"


def zillow_discount_ad(address: str, list_price: float, offer_price: float) -> str:
    if list_price > 0:
        discount = int(round_half_up((list_price - offer_price) / list_price * 100))
    else:
        discount = 0
    return f"""INVESTOR SPECIAL - Below Zillow Value!

{_address(address)}

Listed at: {_money(list_price)}
YOUR Price: {_money(offer_price)}
Discount: {discount}% Below Market

This deal is {discount}% below Zillow's estimate. Perfect for fix-and-flip or BRRRR strategy investors looking for instant equity.

Cash buyers preferred. Quick close available.
DM for details or contract assignment info."""


def rental_roi_ad(address: str, price: float, monthly_rent: float) -> str:
    annual_rent = monthly_rent * 12
    roi = annual_rent / price * 100 if price > 0 else 0.0
    # Rough PITI at 0.8% of price
    cashflow = monthly_rent - price * 0.008
    return f"""CASH FLOW RENTAL OPPORTUNITY

{_address(address)}

Purchase Price: {_money(price)}
Est. Monthly Rent: {_money(monthly_rent)}
Annual Gross ROI: {roi:.1f}%
Est. Monthly Cash Flow: {_money(round_half_up(cashflow))}

Ideal for buy-and-hold investors seeking passive income. Numbers speak for themselves.

Contact for assignment details."""


def fb_group_post(address: str, price: float, arv: float, repair_cost: float) -> str:
    return f"""HOT DEAL - Wholesale Assignment Available!

Property: {_address(address)}
Assignment Price: {_money(price)}
ARV: {_money(arv)}
Est. Repairs: {_money(repair_cost)}
Potential Spread: {_money(arv - price - repair_cost)}

Looking for serious cash buyers. This deal won't last long.

EMD required to lock it down. Title company ready to go.

Drop a comment or DM if interested!
#WholesaleDeals #RealEstateInvesting #CashBuyers"""


def email_blast(address: str, price: float, arv: float, repair_cost: float) -> str:
    return f"""Subject: Exclusive Deal Alert - {_address(address)}

Hi [Investor Name],

I have a new wholesale deal available:

Property: {_address(address)}
Assignment Price: {_money(price)}
After Repair Value (ARV): {_money(arv)}
Estimated Repairs: {_money(repair_cost)}
Potential Profit: {_money(arv - price - repair_cost)}

This property is under contract and ready for assignment. Title company is in place and ready to close.

If you're interested, please reply to this email or call me directly. First qualified buyer with EMD takes it.

Best,
[Your Name]
[Your Phone]"""


def realtor_pitch(address: str, price: float) -> str:
    return (
        "I've got a property under contract at a better price than it's listed for "
        f"at {_address(address)}. Looking for {_money(price)}. You have anyone looking "
        "for a light flip or easy rental? Happy to offer a 1-2% finder's fee."
    )


def brrrr_ad(address: str, price: float, arv: float, repair_cost: float, monthly_rent: float) -> str:
    return (
        f"BRRRR Opportunity - {_address(address)}\n"
        f"Purchase: {_money(price)}\n"
        f"Est. ARV: {_money(arv)}\n"
        f"Rehab: {_money(repair_cost)}\n"
        f"Rent: {_money(monthly_rent)}/mo\n"
        "Perfect for Buy, Rehab, Rent, Refinance, Repeat strategy.\n"
        "DM for deal packet."
    )


# --- Sample ads ---


class SampleAd(NamedTuple):
    name: str
    template: Callable[..., str]


def _zillow_discount_sample(address: str, list_price: float, assign_price: float, rent: Optional[float] = None) -> str:
    return (
        "Wholesale Deal - Priced BELOW Zillow\n"
        f"{address}\n"
        f"{_money(assign_price)} (Zillow: {_money(list_price)})\n"
        "Under contract & ready to assign\n"
        "Light cosmetic rehab\n"
        "DM for walkthrough, comps, and full packet"
    )


def _zillow_missed_sample(address: str, list_price: float, assign_price: float, rent: Optional[float] = None) -> str:
    return (
        "Zillow Passed - You Profit\n\n"
        "This one's been sitting online.\n"
        "We negotiated it down - now it's a deal.\n"
        f"Asking: {_money(assign_price)} (Zillow: {_money(list_price)})\n"
        "Vacant | Fast close\n"
        "DM for walkthrough & numbers"
    )


def _rental_sample(address: str, list_price: float, assign_price: float, rent: Optional[float] = None) -> str:
    rent = rent or DEFAULT_SAMPLE_RENT
    roi = rent * 12 / assign_price * 100 if assign_price > 0 else 0.0
    return (
        "Turnkey Rental - Day 1 Cashflow\n"
        f"{address}\n"
        f"Rent comps: {_money(rent)}/mo\n"
        f"Asking: {_money(assign_price)}\n"
        f"ROI: {roi:.1f}%+ based on standard mgmt\n"
        'DM "Rental" for access + deal packet'
    )


DISPO_SAMPLE_ADS: tuple[SampleAd, ...] = (
    SampleAd("Zillow Discount", _zillow_discount_sample),
    SampleAd("Zillow Missed It", _zillow_missed_sample),
    SampleAd("Rental Plug-and-Play", _rental_sample),
)


def render_sample_ads(address: str, list_price: float, assign_price: float, rent: Optional[float] = None) -> dict[str, str]:
    return {ad.name: ad.template(address, list_price, assign_price, rent) for ad in DISPO_SAMPLE_ADS}


def dispo_ads(
    address: str,
    list_price: float,
    assign_price: float,
    arv: float,
    repair_cost: float,
    monthly_rent: Optional[float] = None,
) -> dict[str, str]:
    """Every buyer-facing ad for one deal, keyed by channel.

    Rent-based ads fall back to ``DEFAULT_SAMPLE_RENT`` when no rent is known.
    """
    rent = monthly_rent or DEFAULT_SAMPLE_RENT
    return {
        "zillow_discount": zillow_discount_ad(address, list_price, assign_price),
        "rental_roi": rental_roi_ad(address, assign_price, rent),
        "fb_group": fb_group_post(address, assign_price, arv, repair_cost),
        "email_blast": email_blast(address, assign_price, arv, repair_cost),
        "realtor_pitch": realtor_pitch(address, assign_price),
        "turnkey": _rental_sample(_address(address), list_price, assign_price, monthly_rent),
        "brrrr": brrrr_ad(address, assign_price, arv, repair_cost, rent),
    }


# --- Playbook ---

DISPO_PRICE_STRATEGY = {
    "goal": "Lock the deal for LESS than the active Zillow price",
    "tactics": [
        "Even a $5K-$10K spread creates perception of value",
        "Screenshot the Zillow listing price when you get it under contract",
        'Use "Discounted Below Zillow" as the hook in marketing',
        "Don't hide the listing - use it as proof you got a better deal",
    ],
}

DISPO_BUYER_CHANNELS = [
    {
        "channel": "Internal Buyer List",
        "priority": ["Past cash buyers", "Newer investors", "Out-of-state landlords"],
        "methods": ["Email", "SMS / TextBlast", "Call blitz (Top 20 hot buyers)"],
    },
    {
        "channel": "Facebook Investor Groups",
        "tips": [
            "Post in Real Estate Investors - [City/State/Region]",
            "Post in Fix & Flip Deals - [Region]",
            "Post in Out-of-State BRRRR / Turnkey Groups",
            "Post 2-3x/week",
            "Include visuals (Zillow screenshot vs. your price)",
            'CTA = "DM for walkthrough / comps / deal packet"',
        ],
    },
    {
        "channel": "PropStream / BatchLeads / Investor Base",
        "filters": ["Cash purchases last 6-12 months", "LLCs", "Zip code / buy box match"],
        "tactics": ["Cold call", "SMS drip", "Email follow-up", "Add new buyers to list monthly"],
    },
    {
        "channel": "Out-of-State Landlords",
        "best_for": ["Turnkey/light rehab deals", "Faster closings, less friction"],
        "how_to_find": [
            "Pull public records for owners with out-of-state mailing addresses",
            "Skip trace for phone/email",
            "DM on BiggerPockets or investor Facebook groups",
        ],
    },
    {
        "channel": "Investor-Friendly Realtors",
        "pitch": (
            "I've got a property under contract at a better price than it's listed "
            "for. You have anyone looking for a light flip or easy rental?"
        ),
        "note": "Offer them a small finder's fee if needed (1-2%)",
    },
]

DISPO_CTA_IDEAS = (
    "\"DM me 'Zillow' for access\"",
    '"Comment your email for walkthrough"',
    "\"We're assigning this in 48 hours - who's in?\"",
)

DISPO_OBJECTION_ZILLOW = {
    "objection": "But it's on Zillow...",
    "response": (
        "Yeah - and we've got it under contract for less than list. Most people "
        "scroll right past these. We negotiated the deal, lined up access, and now "
        "we're assigning it at a discount."
    ),
    "keys": [
        "Confident",
        "Framing = Value",
        "You're not brokering a listing - you're selling a deal you negotiated",
    ],
}

DISPO_BUYER_CHECKLIST = (
    "Walkthrough video or pics",
    "Repair notes / comps",
    "Access instructions",
    "Contract details (title open, close date, etc.)",
    "Confidence you're real, fast, and professional",
)
