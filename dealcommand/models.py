"""Data models for DealCommand."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from dealcommand import rules


def _state_code(value: str) -> str:
    code = value.strip().upper()
    if code not in rules.US_STATES:
        raise ValueError(f"Unknown state code: {value!r}")
    return code


class MarketStatus(str, Enum):
    IDEAL = "ideal"
    BORDERLINE = "borderline"
    DISQUALIFIED = "disqualified"


class QualificationBadge(str, Enum):
    ELIGIBLE = "eligible"
    INELIGIBLE = "ineligible"
    MANUAL_REVIEW = "manual-review"


class SearchType(str, Enum):
    HOUSES = "houses"
    LAND = "land"


class LeadSource(str, Enum):
    ZILLOW = "zillow"
    COLD_CALL = "cold-call"
    SMS = "sms"
    FACEBOOK = "facebook"
    WEBSITE = "website"
    REFERRAL = "referral"
    OTHER = "other"


class LeadStatus(str, Enum):
    NEW = "new"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    OFFER_SENT = "offer-sent"
    UNDER_CONTRACT = "under-contract"
    DISPO = "dispo"
    CLOSED = "closed"
    DEAD = "dead"


class BuyerType(str, Enum):
    CASH_BUYER = "cash-buyer"
    LANDLORD = "landlord"
    LLC = "llc"
    FIX_FLIP = "fix-flip"
    BRRRR = "brrrr"
    TURNKEY = "turnkey"
    OTHER = "other"


# --- Engine inputs ---


class MarketData(BaseModel):
    """Demographic and listing statistics for one city."""

    model_config = ConfigDict(allow_inf_nan=False)

    city: str = ""
    state: str
    msa_population: int = Field(ge=0)
    city_population: int = Field(ge=0)
    median_price: float = Field(ge=0)
    days_on_market: float = Field(ge=0)
    pending_ratio: float = Field(ge=0)  # percentage, 30 means 30%

    @field_validator("state")
    @classmethod
    def check_state(cls, value: str) -> str:
        return _state_code(value)


class DealInput(BaseModel):
    """A single listing as seen by the deal analyzer."""

    model_config = ConfigDict(allow_inf_nan=False)

    address: str = ""
    list_price: float = Field(ge=0)
    zestimate: float = Field(ge=0)
    repair_estimate: float = Field(ge=0)
    arv: float = Field(ge=0)
    keywords: list[str] = Field(default_factory=list)
    days_on_market: int = Field(default=0, ge=0)
    seller_motivation: float = 5  # clamped to 1-10 by the analyzer


class LeadInput(BaseModel):
    """Answers gathered on a qualification call."""

    model_config = ConfigDict(allow_inf_nan=False)

    is_owner: bool
    is_motivated: bool
    is_listed_fsbo: bool = False
    is_listed_mls: bool = False
    is_under_contract: bool = False
    asking_price_ratio: float = Field(ge=0)  # asking price / zestimate
    seller_motivation: float
    sale_timeline_days: int = Field(ge=0)
    state: str

    @field_validator("state")
    @classmethod
    def check_state(cls, value: str) -> str:
        return _state_code(value)


# --- Engine outputs ---


class MarketScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: MarketStatus
    score: int  # 0-100
    flags: list[str] = Field(default_factory=list)
    passed: list[str] = Field(default_factory=list)
    license_requirement: Optional[str] = None  # advisory, never scored


class DealAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    qualifier_price_80: float
    zestimate_check_90: float
    mao: float
    spread_potential: float
    motivation_score: float
    passes_zestimate_rule: bool
    flags: list[str] = Field(default_factory=list)


class LeadQualification(BaseModel):
    model_config = ConfigDict(frozen=True)

    qualified: bool
    reasons: list[str] = Field(default_factory=list)
    passed_checks: list[str] = Field(default_factory=list)
    badge: QualificationBadge


class OfferRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    low: float
    high: float


class FlipProjection(BaseModel):
    """Fix-and-flip profit projection."""

    model_config = ConfigDict(frozen=True)

    total_investment: float
    holding_costs: float
    selling_costs: float
    total_costs: float
    profit: float
    roi: float  # percentage


class RentalCashflow(BaseModel):
    """Monthly buy-and-hold cash flow projection."""

    model_config = ConfigDict(frozen=True)

    monthly_piti: float
    vacancy: float
    maintenance: float
    management: float
    net_cashflow: float
    annual_cashflow: float
    cash_on_cash_return: float  # percentage


# --- Saved records ---


class SavedMarket(BaseModel):
    id: str = ""
    city: str
    state: str
    search_type: SearchType = SearchType.HOUSES
    msa_population: int = 0
    city_population: int = 0
    median_price: float = 0.0
    days_on_market: float = 0.0
    pending_ratio: float = 0.0
    score: int = 0
    verdict: MarketStatus = MarketStatus.DISQUALIFIED
    ai_summary: str = ""
    zip_codes: list[str] = Field(default_factory=list)
    date_analyzed: Optional[datetime] = None
    is_attorney_state: bool = False
    is_non_disclosure: bool = False
    is_restricted: bool = False
    # Land searches only
    land_max_price: Optional[float] = None
    land_use: Optional[str] = None
    min_acres: Optional[float] = None
    max_acres: Optional[float] = None
    land_exit_strategies: list[str] = Field(default_factory=list)

    @classmethod
    def from_score(cls, data: MarketData, result: MarketScore, **extra) -> SavedMarket:
        return cls(
            city=data.city,
            state=data.state,
            msa_population=data.msa_population,
            city_population=data.city_population,
            median_price=data.median_price,
            days_on_market=data.days_on_market,
            pending_ratio=data.pending_ratio,
            score=result.score,
            verdict=result.status,
            is_attorney_state=rules.is_attorney_state(data.state),
            is_non_disclosure=rules.is_non_disclosure_state(data.state),
            is_restricted=rules.is_restricted(data.state),
            **extra,
        )


class SavedDeal(BaseModel):
    id: str = ""
    address: str
    city: str = ""
    state: str = ""
    list_price: float = 0.0
    zestimate: float = 0.0
    asking_price: float = 0.0
    arv: float = 0.0
    repair_estimate: float = 0.0
    mao: float = 0.0
    qualifier_price: float = 0.0
    spread: float = 0.0
    motivation_score: float = 0.0
    motivated_keywords: list[str] = Field(default_factory=list)
    ai_verdict: str = ""
    date_analyzed: Optional[datetime] = None
    linked_lead_id: Optional[str] = None

    @classmethod
    def from_analysis(cls, deal: DealInput, result: DealAnalysis, **extra) -> SavedDeal:
        extra.setdefault("asking_price", deal.list_price)
        return cls(
            address=deal.address,
            list_price=deal.list_price,
            zestimate=deal.zestimate,
            arv=deal.arv,
            repair_estimate=deal.repair_estimate,
            mao=result.mao,
            qualifier_price=result.qualifier_price_80,
            spread=result.spread_potential,
            motivation_score=result.motivation_score,
            motivated_keywords=rules.match_motivated_keywords(deal.keywords),
            **extra,
        )


class PipelineLead(BaseModel):
    id: str = ""
    address: str
    city: str = ""
    state: str = ""
    list_price: float = 0.0
    zestimate: float = 0.0
    asking_price: float = 0.0
    seller_name: str = ""
    seller_phone: str = ""
    seller_email: str = ""
    lead_source: LeadSource = LeadSource.OTHER
    status: LeadStatus = LeadStatus.NEW
    motivation_score: float = 5
    keywords: list[str] = Field(default_factory=list)
    notes: str = ""
    date_added: Optional[datetime] = None
    last_contact: Optional[datetime] = None
    partner_eligible: bool = False
    arv: float = 0.0
    repair_estimate: float = 0.0
    mao: float = 0.0
    assignment_price: float = 0.0


class SavedBuyer(BaseModel):
    id: str = ""
    name: str
    email: str = ""
    phone: str = ""
    type: BuyerType = BuyerType.CASH_BUYER
    buy_box: str = ""
    markets: list[str] = Field(default_factory=list)
    max_price: float = 0.0
    notes: str = ""
    date_added: Optional[datetime] = None
    last_contact: Optional[datetime] = None
    deals_sent: int = 0


class KpiSnapshot(BaseModel):
    """Activity counters for one calendar day."""

    day: date
    markets_tested: int = 0
    deals_analyzed: int = 0
    leads_contacted: int = 0
    qualified_leads: int = 0
    offers_sent: int = 0
    under_contract: int = 0
    closed_deals: int = 0
    partner_submissions: int = 0
    estimated_spread: float = 0.0
    buyer_contacts: int = 0
    outreach_sent: int = 0


class DailyChecklist(BaseModel):
    day: date
    items: dict[str, bool] = Field(default_factory=dict)

    @property
    def completed(self) -> int:
        return sum(1 for done in self.items.values() if done)


class LoggedContact(BaseModel):
    id: str = ""
    seller_name: str
    address: str
    city: str = ""
    state: str = ""
    seller_phone: str = ""
    seller_email: str = ""
    list_price: float = 0.0
    motivation_level: str = ""
    lead_source: str = ""
    date_logged: Optional[datetime] = None
    arv: Optional[float] = None
    repair_estimate: Optional[float] = None
    notes: Optional[str] = None


# --- Listing links ---


class AddressParts(BaseModel):
    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""


class ListingLinks(BaseModel):
    zillow: str
    redfin: str
    realtor: str
    google: str
    true_people: str
    address: AddressParts


# --- Outreach delivery ---


class DeliveryError(str, Enum):
    MISSING_FIELDS = "missing_fields"
    AUTH_FAILED = "auth_failed"
    PROVIDER_REJECTED = "provider_rejected"
    NETWORK_ERROR = "network_error"


class DeliveryResult(BaseModel):
    """Outcome of a single email or SMS send attempt."""

    success: bool
    method: str = ""  # smtp, compose-link, twilio, sms-link
    link: Optional[str] = None
    message_id: Optional[str] = None
    provider_status: Optional[str] = None
    error: Optional[DeliveryError] = None
    detail: str = ""


class OutreachEmail(BaseModel):
    to: str
    subject: str
    body: str
    type: str = ""
    send_delay: str = ""  # e.g. "+2 days"


class OutreachSMS(BaseModel):
    to: str
    message: str
    type: str = ""
    send_delay: str = ""


class OutreachStatus(str, Enum):
    SENT = "sent"
    SCHEDULED = "scheduled"
    ERROR = "error"


class OutreachItemResult(BaseModel):
    channel: str  # email or sms
    status: OutreachStatus
    method: Optional[str] = None
    scheduled_at: Optional[datetime] = None
    link: Optional[str] = None
    error: Optional[DeliveryError] = None
    detail: str = ""


class OutreachReport(BaseModel):
    results: list[OutreachItemResult] = Field(default_factory=list)

    @property
    def summary(self) -> dict[str, int]:
        return {
            "total": len(self.results),
            "sent": sum(1 for r in self.results if r.status == OutreachStatus.SENT),
            "scheduled": sum(1 for r in self.results if r.status == OutreachStatus.SCHEDULED),
            "errors": sum(1 for r in self.results if r.status == OutreachStatus.ERROR),
        }
