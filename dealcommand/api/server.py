"""FastAPI HTTP surface for DealCommand."""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import Body, FastAPI, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from dealcommand import rules
from dealcommand.analysis import (
    DealAnalyzer,
    LeadQualifier,
    MarketScorer,
    asking_price_ratio,
    calculate_rental_cashflow,
    calculate_roi,
    lead_from_qualification,
)
from dealcommand.config import AppConfig, redacted_dump
from dealcommand.db.repository import CHECKLIST_ITEMS, DAILY_TARGETS, Repository, daily_progress
from dealcommand.delivery import EmailChannel, OutreachSequencer, SMSChannel
from dealcommand.links import build_all_listing_urls
from dealcommand.models import (
    DealInput,
    DeliveryError,
    LeadInput,
    LeadSource,
    LoggedContact,
    MarketData,
    OutreachEmail,
    OutreachSMS,
    PipelineLead,
    SavedBuyer,
    SavedDeal,
    SavedMarket,
)
from dealcommand.outreach import dispo, scripts

logger = logging.getLogger(__name__)


class QualifyRequest(LeadInput):
    """Qualification answers plus the property details needed to save a lead."""

    address: str = ""
    city: str = ""
    asking_price: float = Field(default=0.0, ge=0)
    zestimate: float = Field(default=0.0, ge=0)
    seller_name: str = ""
    seller_phone: str = ""
    seller_email: str = ""
    lead_source: LeadSource = LeadSource.OTHER
    arv: float = Field(default=0.0, ge=0)
    repair_estimate: float = Field(default=0.0, ge=0)
    asking_price_ratio: Optional[float] = Field(default=None, ge=0)


class RoiRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    purchase_price: float = Field(ge=0)
    repair_cost: float = Field(default=0.0, ge=0)
    arv: float = Field(ge=0)
    holding_months: float = Field(default=6, ge=0)


class RentalRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    purchase_price: float = Field(ge=0)
    monthly_rent: float = Field(ge=0)
    repair_cost: float = Field(default=0.0, ge=0)


class ScriptRequest(BaseModel):
    name: str = ""
    address: str = ""
    list_price: float = Field(ge=0)
    assignment_price: Optional[float] = Field(default=None, ge=0)
    arv: float = 0.0
    repair_cost: float = 0.0
    monthly_rent: float = 0.0


class PartnerScriptRequest(BaseModel):
    source: str
    first_name: str = ""
    address: str = ""
    city: str = ""
    partner_phone: str = ""


class EmailRequest(BaseModel):
    to: str = ""
    subject: str = ""
    body: str = ""
    sender_name: str = ""


class SMSRequest(BaseModel):
    to: str = ""
    message: str = ""


class OutreachRequest(BaseModel):
    emails: list[OutreachEmail] = Field(default_factory=list)
    sms_messages: list[OutreachSMS] = Field(default_factory=list)
    sender_name: str = ""
    send_immediate: bool = False


class KpiUpdate(BaseModel):
    field: str
    amount: Optional[float] = None
    value: Optional[float] = None


def _not_found(kind: str, record_id: str) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": f"{kind} {record_id} not found"})


def _delivery_response(result) -> Any:
    if result.success:
        return result
    status = 400 if result.error == DeliveryError.MISSING_FIELDS else 502
    return JSONResponse(status_code=status, content=result.model_dump(mode="json"))


def create_app(cfg: AppConfig) -> FastAPI:
    app = FastAPI(title="DealCommand", version="0.1.0")
    repo = Repository(cfg.database.url)
    market_scorer = MarketScorer(cfg.analysis.market)
    deal_analyzer = DealAnalyzer(cfg.analysis.deal)
    lead_qualifier = LeadQualifier(cfg.analysis.qualification)
    email_channel = EmailChannel(cfg.delivery.email)
    sms_channel = SMSChannel(cfg.delivery.sms)
    sequencer = OutreachSequencer(email_channel, sms_channel)

    @app.exception_handler(ValueError)
    async def value_error(request: Request, exc: ValueError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    # --- engine ---

    @app.post("/api/market/evaluate")
    async def evaluate_market(data: MarketData, save: bool = Query(False)):
        """Score a market and optionally save it."""
        result = market_scorer.evaluate(data)
        saved = repo.add_market(SavedMarket.from_score(data, result)) if save else None
        return {"result": result, "saved": saved}

    @app.post("/api/deal/analyze")
    async def analyze_deal(deal: DealInput, save: bool = Query(False)):
        """Run the 80% / 90% / 70% rules on a listing."""
        result = deal_analyzer.analyze(deal)
        saved = repo.add_deal(SavedDeal.from_analysis(deal, result)) if save else None
        return {
            "result": result,
            "offer_range": deal_analyzer.offer_range(deal.list_price),
            "saved": saved,
        }

    @app.post("/api/lead/qualify")
    async def qualify(req: QualifyRequest, save: bool = Query(False)):
        """Check a lead against the partner program rules."""
        ratio = req.asking_price_ratio
        if ratio is None:
            ratio = asking_price_ratio(req.asking_price, req.zestimate)
        answers = req.model_dump(include=set(LeadInput.model_fields))
        answers["asking_price_ratio"] = ratio
        result = lead_qualifier.qualify(LeadInput(**answers))

        saved = None
        if save:
            if not req.address:
                raise ValueError("An address is required to save a lead")
            saved = repo.add_lead(lead_from_qualification(
                result,
                address=req.address,
                asking_price=req.asking_price,
                zestimate=req.zestimate,
                seller_motivation=req.seller_motivation,
                city=req.city,
                state=req.state,
                seller_name=req.seller_name,
                seller_phone=req.seller_phone,
                seller_email=req.seller_email,
                lead_source=req.lead_source,
                arv=req.arv,
                repair_estimate=req.repair_estimate,
            ))
            if result.qualified:
                repo.bump_kpi("qualified_leads")
        return {"result": result, "saved": saved}

    @app.post("/api/roi")
    async def roi(req: RoiRequest):
        return calculate_roi(req.purchase_price, req.repair_cost, req.arv, req.holding_months)

    @app.post("/api/rental-cashflow")
    async def rental_cashflow(req: RentalRequest):
        return calculate_rental_cashflow(req.purchase_price, req.monthly_rent, req.repair_cost)

    @app.post("/api/scripts")
    async def generate_scripts(req: ScriptRequest):
        """Seller scripts for a listing, plus dispo ads once an assignment price is known."""
        name = req.name or repo.get_user_name()
        qualifier_price = req.list_price * cfg.analysis.deal.qualifier_pct_of_list
        offer = deal_analyzer.offer_range(req.list_price)
        response: dict[str, Any] = {
            "seller": scripts.seller_scripts(name, req.address, qualifier_price, offer.low, offer.high),
            "objections": [h._asdict() for h in scripts.OBJECTION_HANDLERS],
        }
        if req.assignment_price is not None:
            response["dispo"] = dispo.dispo_ads(
                req.address,
                req.list_price,
                req.assignment_price,
                req.arv,
                req.repair_cost,
                req.monthly_rent,
            )
            response["samples"] = dispo.render_sample_ads(
                req.address, req.list_price, req.assignment_price, req.monthly_rent or None
            )
        return response

    @app.post("/api/partner-script")
    async def partner_script(req: PartnerScriptRequest):
        """Partner-program call flow for a lead, from opening to booked appointment."""
        return {
            "opening": scripts.partner_opening(req.source, req.first_name, req.address, req.city),
            "qualification": scripts.QUALIFICATION_QUESTIONS,
            "negotiation": scripts.PRICE_NEGOTIATION,
            "appointment": scripts.appointment_setting(req.partner_phone),
        }

    @app.get("/api/playbook")
    async def playbook():
        return {
            "partner_rules": [{"rule": r, "detail": d} for r, d in rules.PARTNER_RULES],
            "disqualification_reasons": rules.PARTNER_DISQUALIFICATION_REASONS,
            "dispo": {
                "price_strategy": dispo.DISPO_PRICE_STRATEGY,
                "buyer_channels": dispo.DISPO_BUYER_CHANNELS,
                "cta_ideas": dispo.DISPO_CTA_IDEAS,
                "zillow_objection": dispo.DISPO_OBJECTION_ZILLOW,
                "buyer_checklist": dispo.DISPO_BUYER_CHECKLIST,
            },
        }

    # --- delivery ---

    @app.post("/api/send-email")
    async def send_email(req: EmailRequest):
        result = await email_channel.send(req.to, req.subject, req.body, req.sender_name)
        return _delivery_response(result)

    @app.post("/api/send-sms")
    async def send_sms(req: SMSRequest):
        result = await sms_channel.send(req.to, req.message)
        return _delivery_response(result)

    @app.post("/api/send-outreach")
    async def send_outreach(req: OutreachRequest):
        report = await sequencer.send(
            req.emails, req.sms_messages, req.sender_name, req.send_immediate
        )
        if report.summary["sent"]:
            repo.bump_kpi("outreach_sent", report.summary["sent"])
        return {"success": True, "results": report.results, "summary": report.summary}

    # --- saved records ---

    @app.get("/api/markets")
    async def list_markets():
        return {"markets": repo.list_markets()}

    @app.post("/api/markets")
    async def add_market(market: SavedMarket):
        return repo.add_market(market)

    @app.delete("/api/markets/{market_id}")
    async def remove_market(market_id: str):
        if not repo.remove_market(market_id):
            return _not_found("Market", market_id)
        return {"deleted": market_id}

    @app.get("/api/deals")
    async def list_deals():
        return {"deals": repo.list_deals()}

    @app.post("/api/deals")
    async def add_deal(deal: SavedDeal):
        return repo.add_deal(deal)

    @app.delete("/api/deals/{deal_id}")
    async def remove_deal(deal_id: str):
        if not repo.remove_deal(deal_id):
            return _not_found("Deal", deal_id)
        return {"deleted": deal_id}

    @app.get("/api/leads")
    async def list_leads(status: str = Query(None)):
        return {"leads": repo.list_leads(status)}

    @app.post("/api/leads")
    async def add_lead(lead: PipelineLead):
        """Log a lead by hand; counts as a seller contact."""
        return repo.add_lead(lead, contacted=True)

    @app.get("/api/leads/{lead_id}")
    async def get_lead(lead_id: str):
        lead = repo.get_lead(lead_id)
        return lead if lead else _not_found("Lead", lead_id)

    @app.patch("/api/leads/{lead_id}")
    async def update_lead(lead_id: str, updates: dict[str, Any] = Body(...)):
        lead = repo.update_lead(lead_id, updates)
        return lead if lead else _not_found("Lead", lead_id)

    @app.delete("/api/leads/{lead_id}")
    async def remove_lead(lead_id: str):
        if not repo.remove_lead(lead_id):
            return _not_found("Lead", lead_id)
        return {"deleted": lead_id}

    @app.get("/api/buyers")
    async def list_buyers():
        return {"buyers": repo.list_buyers(), "segments": [s._asdict() for s in rules.BUYER_SEGMENTS]}

    @app.post("/api/buyers")
    async def add_buyer(buyer: SavedBuyer):
        return repo.add_buyer(buyer)

    @app.patch("/api/buyers/{buyer_id}")
    async def update_buyer(buyer_id: str, updates: dict[str, Any] = Body(...)):
        buyer = repo.update_buyer(buyer_id, updates)
        return buyer if buyer else _not_found("Buyer", buyer_id)

    @app.delete("/api/buyers/{buyer_id}")
    async def remove_buyer(buyer_id: str):
        if not repo.remove_buyer(buyer_id):
            return _not_found("Buyer", buyer_id)
        return {"deleted": buyer_id}

    @app.get("/api/contacts")
    async def list_contacts():
        return {"contacts": repo.list_contacts()}

    @app.post("/api/contacts")
    async def add_contact(contact: LoggedContact):
        return repo.add_contact(contact)

    @app.delete("/api/contacts/{contact_id}")
    async def remove_contact(contact_id: str):
        if not repo.remove_contact(contact_id):
            return _not_found("Contact", contact_id)
        return {"deleted": contact_id}

    @app.get("/api/profile")
    async def get_profile():
        return {"name": repo.get_user_name()}

    @app.put("/api/profile")
    async def set_profile(name: str = Body(..., embed=True)):
        repo.set_user_name(name)
        return {"name": name}

    # --- daily activity ---

    @app.get("/api/kpis")
    async def get_kpis():
        today = repo.get_kpis()
        return {
            "today": today,
            "targets": DAILY_TARGETS,
            "progress": round(daily_progress(today), 1),
            "stats": repo.pipeline_stats(),
        }

    @app.post("/api/kpis")
    async def update_kpis(update: KpiUpdate):
        """Bump a counter by ``amount`` or overwrite it with ``value``."""
        if update.value is not None:
            return repo.set_kpi_field(update.field, update.value)
        return repo.bump_kpi(update.field, update.amount if update.amount is not None else 1)

    @app.get("/api/checklist")
    async def get_checklist():
        checklist = repo.get_checklist()
        return {
            "day": checklist.day,
            "items": checklist.items,
            "completed": checklist.completed,
            "labels": CHECKLIST_ITEMS,
        }

    @app.post("/api/checklist/{key}")
    async def toggle_checklist(key: str):
        checklist = repo.toggle_checklist_item(key)
        return {"day": checklist.day, "items": checklist.items, "completed": checklist.completed}

    # --- misc ---

    @app.get("/api/links")
    async def listing_links(
        address: str = Query(...),
        city: str = Query(None),
        state: str = Query(None),
        zip_code: str = Query(None, alias="zip"),
    ):
        return build_all_listing_urls(address, city, state, zip_code)

    @app.get("/api/config")
    async def get_config():
        """Return current configuration with secrets masked."""
        return redacted_dump(cfg)

    return app
