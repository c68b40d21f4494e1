"""Partner-program lead qualification checks."""

from __future__ import annotations

from datetime import datetime

from dealcommand import rules
from dealcommand.config import QualificationConfig
from dealcommand.models import (
    LeadInput,
    LeadQualification,
    LeadSource,
    LeadStatus,
    PipelineLead,
    QualificationBadge,
)


class LeadQualifier:
    """Run every qualification check and report the full picture.

    All checks always run. Seller motivation is checked twice, once as the
    yes/no answer and once as the 1-10 score; both gate eligibility.
    """

    def __init__(self, config: QualificationConfig | None = None):
        self.cfg = config or QualificationConfig()

    def qualify(self, lead: LeadInput) -> LeadQualification:
        cfg = self.cfg
        reasons: list[str] = []
        passed: list[str] = []

        def check(ok: bool, success: str, failure: str) -> None:
            if ok:
                passed.append(success)
            else:
                reasons.append(failure)

        check(lead.is_owner, "Verified property owner", "Seller is not the property owner")
        check(lead.is_motivated, "Seller shows motivation", "Seller does not appear motivated")
        check(not lead.is_listed_fsbo, "Not listed FSBO", "Property listed FSBO")
        check(not lead.is_listed_mls, "Not listed on MLS", "Property listed on MLS")
        check(
            not lead.is_under_contract,
            "Not under existing contract",
            "Property already under contract",
        )
        check(
            lead.asking_price_ratio <= cfg.max_asking_price_ratio,
            f"Asking price at or below {cfg.max_asking_price_ratio:.0%} Zestimate",
            f"Asking price exceeds {cfg.max_asking_price_ratio:.0%} of Zestimate",
        )
        check(
            lead.seller_motivation >= cfg.min_seller_motivation,
            "Motivation score meets threshold",
            f"Seller motivation below threshold ({cfg.min_seller_motivation:g})",
        )
        check(
            lead.sale_timeline_days <= cfg.max_sale_timeline_days,
            f"Sale timeline within {cfg.max_sale_timeline_days} days",
            f"Sale timeline exceeds {cfg.max_sale_timeline_days} days",
        )
        check(
            not rules.is_restricted(lead.state),
            "State not restricted",
            f"Restricted state: {lead.state}",
        )

        if not reasons:
            badge = QualificationBadge.ELIGIBLE
        elif len(reasons) <= cfg.manual_review_max_reasons:
            badge = QualificationBadge.MANUAL_REVIEW
        else:
            badge = QualificationBadge.INELIGIBLE

        return LeadQualification(
            qualified=not reasons,
            reasons=reasons,
            passed_checks=passed,
            badge=badge,
        )


def qualify_lead(lead: LeadInput, config: QualificationConfig | None = None) -> LeadQualification:
    return LeadQualifier(config).qualify(lead)


def asking_price_ratio(asking_price: float, zestimate: float) -> float:
    """Asking price as a fraction of the Zestimate; 1.0 when there is no Zestimate."""
    if zestimate > 0:
        return asking_price / zestimate
    return 1.0


def lead_from_qualification(
    result: LeadQualification,
    address: str,
    asking_price: float,
    zestimate: float,
    seller_motivation: float,
    city: str = "",
    state: str = "",
    seller_name: str = "",
    seller_phone: str = "",
    seller_email: str = "",
    lead_source: LeadSource = LeadSource.OTHER,
    arv: float = 0.0,
    repair_estimate: float = 0.0,
    mao: float | None = None,
) -> PipelineLead:
    """Turn a qualification result into a pipeline lead ready to save."""
    if mao is None:
        mao = arv * 0.7 - repair_estimate if arv > 0 else 0.0

    if result.qualified:
        notes = "Qualified via Partner Program checks"
    else:
        notes = f"Qualification: {result.badge.value} - {', '.join(result.reasons)}"

    return PipelineLead(
        address=address,
        city=city,
        state=state,
        list_price=asking_price,
        zestimate=zestimate,
        asking_price=asking_price,
        seller_name=seller_name,
        seller_phone=seller_phone,
        seller_email=seller_email,
        lead_source=lead_source,
        status=LeadStatus.QUALIFIED if result.qualified else LeadStatus.NEW,
        motivation_score=seller_motivation,
        notes=notes,
        last_contact=datetime.utcnow(),
        partner_eligible=result.qualified,
        arv=arv,
        repair_estimate=repair_estimate,
        mao=mao,
    )
