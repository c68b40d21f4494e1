"""SQLAlchemy table definitions."""

from __future__ import annotations

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    Integer,
    String,
    Text,
    create_engine,
)
from sqlalchemy.orm import DeclarativeBase, sessionmaker


class Base(DeclarativeBase):
    pass


class RecordMixin:
    """Saved records get a public uuid plus an insertion sequence for newest-first listing."""

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), nullable=False, unique=True, index=True)


class MarketRow(RecordMixin, Base):
    __tablename__ = "markets"

    city = Column(String(100), nullable=False)
    state = Column(String(2), nullable=False, index=True)
    search_type = Column(String(10), default="houses")
    msa_population = Column(Integer, default=0)
    city_population = Column(Integer, default=0)
    median_price = Column(Float, default=0.0)
    days_on_market = Column(Float, default=0.0)
    pending_ratio = Column(Float, default=0.0)
    score = Column(Integer, default=0)
    verdict = Column(String(20), default="disqualified")
    ai_summary = Column(Text, default="")
    zip_codes = Column(JSON, default=list)
    date_analyzed = Column(DateTime)
    is_attorney_state = Column(Boolean, default=False)
    is_non_disclosure = Column(Boolean, default=False)
    is_restricted = Column(Boolean, default=False)
    land_max_price = Column(Float, nullable=True)
    land_use = Column(String(50), nullable=True)
    min_acres = Column(Float, nullable=True)
    max_acres = Column(Float, nullable=True)
    land_exit_strategies = Column(JSON, default=list)


class DealRow(RecordMixin, Base):
    __tablename__ = "deals"

    address = Column(String(255), nullable=False)
    city = Column(String(100), default="")
    state = Column(String(2), default="")
    list_price = Column(Float, default=0.0)
    zestimate = Column(Float, default=0.0)
    asking_price = Column(Float, default=0.0)
    arv = Column(Float, default=0.0)
    repair_estimate = Column(Float, default=0.0)
    mao = Column(Float, default=0.0)
    qualifier_price = Column(Float, default=0.0)
    spread = Column(Float, default=0.0)
    motivation_score = Column(Float, default=0.0)
    motivated_keywords = Column(JSON, default=list)
    ai_verdict = Column(Text, default="")
    date_analyzed = Column(DateTime)
    linked_lead_id = Column(String(36), nullable=True)


class LeadRow(RecordMixin, Base):
    __tablename__ = "leads"

    address = Column(String(255), nullable=False)
    city = Column(String(100), default="")
    state = Column(String(2), default="")
    list_price = Column(Float, default=0.0)
    zestimate = Column(Float, default=0.0)
    asking_price = Column(Float, default=0.0)
    seller_name = Column(String(255), default="")
    seller_phone = Column(String(50), default="")
    seller_email = Column(String(255), default="")
    lead_source = Column(String(20), default="other")
    status = Column(String(20), default="new", index=True)
    motivation_score = Column(Float, default=5.0)
    keywords = Column(JSON, default=list)
    notes = Column(Text, default="")
    date_added = Column(DateTime)
    last_contact = Column(DateTime, nullable=True)
    partner_eligible = Column(Boolean, default=False)
    arv = Column(Float, default=0.0)
    repair_estimate = Column(Float, default=0.0)
    mao = Column(Float, default=0.0)
    assignment_price = Column(Float, default=0.0)


class BuyerRow(RecordMixin, Base):
    __tablename__ = "buyers"

    name = Column(String(255), nullable=False)
    email = Column(String(255), default="")
    phone = Column(String(50), default="")
    type = Column(String(20), default="cash-buyer")
    buy_box = Column(Text, default="")
    markets = Column(JSON, default=list)
    max_price = Column(Float, default=0.0)
    notes = Column(Text, default="")
    date_added = Column(DateTime)
    last_contact = Column(DateTime, nullable=True)
    deals_sent = Column(Integer, default=0)


class ContactRow(RecordMixin, Base):
    __tablename__ = "contacts"

    seller_name = Column(String(255), nullable=False)
    address = Column(String(255), nullable=False)
    city = Column(String(100), default="")
    state = Column(String(2), default="")
    seller_phone = Column(String(50), default="")
    seller_email = Column(String(255), default="")
    list_price = Column(Float, default=0.0)
    motivation_level = Column(String(50), default="")
    lead_source = Column(String(50), default="")
    date_logged = Column(DateTime)
    arv = Column(Float, nullable=True)
    repair_estimate = Column(Float, nullable=True)
    notes = Column(Text, nullable=True)


class KpiRow(Base):
    __tablename__ = "kpis"

    day = Column(Date, primary_key=True)
    markets_tested = Column(Integer, default=0)
    deals_analyzed = Column(Integer, default=0)
    leads_contacted = Column(Integer, default=0)
    qualified_leads = Column(Integer, default=0)
    offers_sent = Column(Integer, default=0)
    under_contract = Column(Integer, default=0)
    closed_deals = Column(Integer, default=0)
    partner_submissions = Column(Integer, default=0)
    estimated_spread = Column(Float, default=0.0)
    buyer_contacts = Column(Integer, default=0)
    outreach_sent = Column(Integer, default=0)


class ChecklistRow(Base):
    __tablename__ = "checklists"

    day = Column(Date, primary_key=True)
    items = Column(JSON, default=dict)


class SettingRow(Base):
    __tablename__ = "settings"

    key = Column(String(50), primary_key=True)
    value = Column(Text, default="")


def init_db(db_url: str = "sqlite:///dealcommand.db") -> sessionmaker:
    """Initialize the database and return a session factory."""
    engine = create_engine(db_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
