"""Database repository for saved markets, deals, leads, buyers and daily activity."""

from __future__ import annotations

import logging
import re
import uuid
from datetime import date, datetime
from enum import Enum
from typing import Any, Callable, Optional, Type

from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from dealcommand.db.tables import (
    BuyerRow,
    ChecklistRow,
    ContactRow,
    DealRow,
    KpiRow,
    LeadRow,
    MarketRow,
    SettingRow,
    init_db,
)
from dealcommand.models import (
    DailyChecklist,
    KpiSnapshot,
    LeadStatus,
    LoggedContact,
    PipelineLead,
    SavedBuyer,
    SavedDeal,
    SavedMarket,
)

logger = logging.getLogger(__name__)

KPI_FIELDS = tuple(name for name in KpiSnapshot.model_fields if name != "day")

DAILY_TARGETS: dict[str, float] = {
    "markets_tested": 3,
    "deals_analyzed": 10,
    "leads_contacted": 15,
    "qualified_leads": 5,
    "offers_sent": 3,
    "under_contract": 1,
    "partner_submissions": 2,
    "outreach_sent": 20,
    "buyer_contacts": 10,
    "estimated_spread": 25_000,
    "closed_deals": 1,
}

CHECKLIST_ITEMS: dict[str, str] = {
    "zillow-alerts": "Check Zillow saved search alerts",
    "new-leads": "Run new leads through Deal Analyzer",
    "qualify-leads": "Qualify top leads (80% test, motivation)",
    "send-outreach": "Send outreach (calls, SMS, emails)",
    "follow-ups": "Follow up with pending conversations",
    "submit-partner": "Submit qualified leads to Partner Program",
    "dispo-deals": "Market under-contract deals to buyers",
    "update-pipeline": "Update pipeline statuses & notes",
    "add-buyers": "Add new buyer contacts to list",
    "log-kpis": "Log all KPIs and review progress",
}

_INACTIVE_STATUSES = {LeadStatus.DEAD.value, LeadStatus.CLOSED.value}
_WHITESPACE = re.compile(r"\s+")


def normalize_street(address: str) -> str:
    """First comma segment, lower-cased, with runs of whitespace collapsed."""
    return _WHITESPACE.sub(" ", address.split(",")[0].strip().lower())


def daily_progress(snapshot: KpiSnapshot) -> float:
    """Average percent of each daily target reached, each capped at 100."""
    total = sum(
        min(100.0, getattr(snapshot, field) / target * 100)
        for field, target in DAILY_TARGETS.items()
    )
    return total / len(DAILY_TARGETS)


def _column_values(record: BaseModel, exclude: set[str] | None = None) -> dict[str, Any]:
    values = record.model_dump(exclude=exclude)
    return {k: v.value if isinstance(v, Enum) else v for k, v in values.items()}


def _to_model(model: Type[BaseModel], row) -> Any:
    return model.model_validate(row, from_attributes=True)


class Repository:
    """Handles all database operations.

    ``clock`` returns the current time; every date stamp and the notion of
    "today" for KPIs and the checklist come from it.
    """

    def __init__(
        self,
        db_url: str = "sqlite:///dealcommand.db",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._session_factory = init_db(db_url)
        self._clock = clock or datetime.utcnow

    def _session(self) -> Session:
        return self._session_factory()

    def _today(self) -> date:
        return self._clock().date()

    # --- generic helpers ---

    def _insert(self, row_cls, record: BaseModel, stamp_field: str, **extra) -> Any:
        values = _column_values(record, exclude={"id", stamp_field})
        values.update(extra)
        row = row_cls(id=str(uuid.uuid4()), **{stamp_field: self._clock()}, **values)
        with self._session() as session:
            session.add(row)
            session.commit()
            return _to_model(type(record), row)

    def _list(self, row_cls, model: Type[BaseModel]) -> list:
        with self._session() as session:
            rows = session.query(row_cls).order_by(row_cls.seq.desc()).all()
            return [_to_model(model, row) for row in rows]

    def _get(self, row_cls, model: Type[BaseModel], record_id: str):
        with self._session() as session:
            row = session.query(row_cls).filter_by(id=record_id).first()
            return _to_model(model, row) if row else None

    def _remove(self, row_cls, record_id: str) -> bool:
        with self._session() as session:
            deleted = session.query(row_cls).filter_by(id=record_id).delete()
            session.commit()
            return deleted > 0

    def _update(self, row_cls, model: Type[BaseModel], record_id: str, updates: dict[str, Any]):
        unknown = {key for key in updates if key == "id" or key not in model.model_fields}
        if unknown:
            raise ValueError(f"Cannot update field(s): {', '.join(sorted(unknown))}")
        with self._session() as session:
            row = session.query(row_cls).filter_by(id=record_id).first()
            if row is None:
                return None
            current = _to_model(model, row)
            merged = model.model_validate({**current.model_dump(), **updates})
            for key, value in _column_values(merged, exclude={"id"}).items():
                setattr(row, key, value)
            session.commit()
            return merged

    # --- markets ---

    def add_market(self, market: SavedMarket) -> SavedMarket:
        saved = self._insert(MarketRow, market, "date_analyzed")
        self.bump_kpi("markets_tested")
        logger.info("Saved market %s, %s (score %d)", saved.city, saved.state, saved.score)
        return saved

    def remove_market(self, market_id: str) -> bool:
        return self._remove(MarketRow, market_id)

    def list_markets(self) -> list[SavedMarket]:
        return self._list(MarketRow, SavedMarket)

    # --- deals ---

    def add_deal(self, deal: SavedDeal) -> SavedDeal:
        saved = self._insert(DealRow, deal, "date_analyzed")
        self.bump_kpi("deals_analyzed")
        if saved.spread > 0:
            self.bump_kpi("estimated_spread", saved.spread)
        logger.info("Saved deal %s (spread $%.0f)", saved.address, saved.spread)
        return saved

    def remove_deal(self, deal_id: str) -> bool:
        return self._remove(DealRow, deal_id)

    def list_deals(self) -> list[SavedDeal]:
        return self._list(DealRow, SavedDeal)

    # --- leads ---

    def add_lead(self, lead: PipelineLead, contacted: bool = False) -> PipelineLead:
        """Save a lead, merging into an existing lead at the same street address.

        A merge keeps the existing id and date added; every field explicitly
        set on ``lead`` overwrites the stored value. ``contacted`` marks a lead
        logged by hand after talking to the seller: it stamps the last contact
        time and counts toward today's contacted leads.
        """
        if contacted:
            lead = lead.model_copy(update={"last_contact": self._clock()})
        key = normalize_street(lead.address)
        with self._session() as session:
            match = next(
                (row for row in session.query(LeadRow).all() if normalize_street(row.address) == key),
                None,
            )
            existing_id = match.id if match else None

        if existing_id is None:
            saved = self._insert(LeadRow, lead, "date_added")
            logger.info("Added lead %s", saved.address)
        else:
            updates = lead.model_dump(exclude_unset=True, exclude={"id", "date_added"})
            saved = self._update(LeadRow, PipelineLead, existing_id, updates)
            logger.info("Merged lead %s into %s", lead.address, existing_id)
        if contacted:
            self.bump_kpi("leads_contacted")
        return saved

    def update_lead(self, lead_id: str, updates: dict[str, Any]) -> Optional[PipelineLead]:
        """Apply ``updates`` to a lead.

        A status change stamps the last contact time, and moving a lead under
        contract or to closed counts toward today's KPIs.
        """
        current = self.get_lead(lead_id)
        if current is None:
            return None
        if "status" in updates and LeadStatus(updates["status"]) != current.status:
            updates = {"last_contact": self._clock(), **updates}
        updated = self._update(LeadRow, PipelineLead, lead_id, updates)
        if updated is not None and updated.status != current.status:
            if updated.status == LeadStatus.UNDER_CONTRACT:
                self.bump_kpi("under_contract")
            elif updated.status == LeadStatus.CLOSED:
                self.bump_kpi("closed_deals")
            logger.info("Lead %s moved %s -> %s", lead_id, current.status.value, updated.status.value)
        return updated

    def remove_lead(self, lead_id: str) -> bool:
        return self._remove(LeadRow, lead_id)

    def get_lead(self, lead_id: str) -> Optional[PipelineLead]:
        return self._get(LeadRow, PipelineLead, lead_id)

    def list_leads(self, status: Optional[str] = None) -> list[PipelineLead]:
        leads = self._list(LeadRow, PipelineLead)
        if status:
            leads = [lead for lead in leads if lead.status.value == status]
        return leads

    # --- buyers ---

    def add_buyer(self, buyer: SavedBuyer) -> SavedBuyer:
        saved = self._insert(BuyerRow, buyer, "date_added", deals_sent=0)
        self.bump_kpi("buyer_contacts")
        logger.info("Added buyer %s", saved.name)
        return saved

    def update_buyer(self, buyer_id: str, updates: dict[str, Any]) -> Optional[SavedBuyer]:
        return self._update(BuyerRow, SavedBuyer, buyer_id, updates)

    def remove_buyer(self, buyer_id: str) -> bool:
        return self._remove(BuyerRow, buyer_id)

    def list_buyers(self) -> list[SavedBuyer]:
        return self._list(BuyerRow, SavedBuyer)

    # --- logged contacts ---

    def add_contact(self, contact: LoggedContact) -> LoggedContact:
        return self._insert(ContactRow, contact, "date_logged")

    def remove_contact(self, contact_id: str) -> bool:
        return self._remove(ContactRow, contact_id)

    def list_contacts(self) -> list[LoggedContact]:
        return self._list(ContactRow, LoggedContact)

    # --- KPIs ---

    def _today_kpis(self, session: Session) -> KpiRow:
        today = self._today()
        row = session.get(KpiRow, today)
        if row is None:
            row = KpiRow(day=today, **{field: 0 for field in KPI_FIELDS})
            session.add(row)
        return row

    @staticmethod
    def _check_kpi_field(field: str) -> None:
        if field not in KPI_FIELDS:
            raise ValueError(f"Unknown KPI field: {field!r}")

    def _write_kpi(self, field: str, new_value: Callable[[float], float]) -> KpiSnapshot:
        self._check_kpi_field(field)
        with self._session() as session:
            row = self._today_kpis(session)
            value = new_value(getattr(row, field))
            if field != "estimated_spread":
                if value != int(value):
                    session.rollback()
                    raise ValueError(f"KPI field {field!r} takes whole numbers, got {value:g}")
                value = int(value)
            setattr(row, field, value)
            try:
                snapshot = _to_model(KpiSnapshot, row)
            except ValidationError as exc:
                session.rollback()
                raise ValueError(f"Invalid value for KPI field {field!r}: {exc}") from exc
            session.commit()
            return snapshot

    def bump_kpi(self, field: str, amount: float = 1) -> KpiSnapshot:
        """Add ``amount`` to one of today's counters, starting a fresh day if needed."""
        return self._write_kpi(field, lambda current: current + amount)

    def set_kpi_field(self, field: str, value: float) -> KpiSnapshot:
        return self._write_kpi(field, lambda current: value)

    def reset_kpis(self) -> KpiSnapshot:
        """Zero every counter for today."""
        with self._session() as session:
            row = self._today_kpis(session)
            for field in KPI_FIELDS:
                setattr(row, field, 0)
            session.commit()
            return _to_model(KpiSnapshot, row)

    def get_kpis(self, day: Optional[date] = None) -> KpiSnapshot:
        day = day or self._today()
        with self._session() as session:
            row = session.get(KpiRow, day)
            if row is None:
                return KpiSnapshot(day=day)
            return _to_model(KpiSnapshot, row)

    def kpi_history(self, limit: int = 30) -> list[KpiSnapshot]:
        with self._session() as session:
            rows = session.query(KpiRow).order_by(KpiRow.day.desc()).limit(limit).all()
            return [_to_model(KpiSnapshot, row) for row in rows]

    def pipeline_stats(self) -> dict[str, float]:
        """Lifetime totals across saved records."""
        leads = self.list_leads()
        return {
            "saved_markets": len(self.list_markets()),
            "saved_deals": len(self.list_deals()),
            "total_leads": len(leads),
            "active_leads": sum(1 for lead in leads if lead.status.value not in _INACTIVE_STATUSES),
            "buyers": len(self.list_buyers()),
            "pipeline_value": sum(lead.assignment_price - lead.mao for lead in leads),
        }

    # --- daily checklist ---

    def toggle_checklist_item(self, key: str) -> DailyChecklist:
        """Flip one of today's checklist items; yesterday's ticks never carry over."""
        if key not in CHECKLIST_ITEMS:
            raise ValueError(f"Unknown checklist item: {key!r}")
        today = self._today()
        with self._session() as session:
            row = session.get(ChecklistRow, today)
            if row is None:
                row = ChecklistRow(day=today, items={})
                session.add(row)
            items = dict(row.items or {})
            items[key] = not items.get(key, False)
            row.items = items
            session.commit()
            return DailyChecklist(day=today, items=items)

    def get_checklist(self) -> DailyChecklist:
        today = self._today()
        with self._session() as session:
            row = session.get(ChecklistRow, today)
            return DailyChecklist(day=today, items=dict(row.items or {}) if row else {})

    # --- profile ---

    def get_user_name(self) -> str:
        with self._session() as session:
            row = session.get(SettingRow, "user_name")
            return row.value if row else ""

    def set_user_name(self, name: str) -> None:
        with self._session() as session:
            row = session.get(SettingRow, "user_name")
            if row is None:
                session.add(SettingRow(key="user_name", value=name))
            else:
                row.value = name
            session.commit()
