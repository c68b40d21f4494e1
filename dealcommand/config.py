"""Configuration management for DealCommand."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict

CONFIG_DIR = Path(__file__).parent.parent / "config"


class MarketCriteriaConfig(BaseModel):
    min_msa_population: int = 400_000
    min_city_population: int = 100_000
    min_median_price: float = 200_000.0
    max_median_price: float = 400_000.0
    max_days_on_market: float = 50.0
    min_pending_ratio: float = 25.0  # percent
    points_per_check: int = 20
    restricted_state_penalty: int = 30
    disqualify_below: int = 40
    ideal_from: int = 70


class DealRulesConfig(BaseModel):
    qualifier_pct_of_list: float = 0.80
    zestimate_pct: float = 0.90
    mao_pct_of_arv: float = 0.70
    min_spread: float = 5_000.0
    stale_dom: int = 60
    moderate_dom: int = 30
    # Zillow-offer script range, as a fraction of list price
    offer_low_pct: float = 0.75
    offer_high_pct: float = 0.80


class QualificationConfig(BaseModel):
    max_asking_price_ratio: float = 0.90
    min_seller_motivation: float = 5.0
    max_sale_timeline_days: int = 90
    # More reasons than this makes a lead ineligible rather than manual-review
    manual_review_max_reasons: int = 2


class AnalysisConfig(BaseModel):
    market: MarketCriteriaConfig = MarketCriteriaConfig()
    deal: DealRulesConfig = DealRulesConfig()
    qualification: QualificationConfig = QualificationConfig()


class EmailConfig(BaseModel):
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    from_address: str = ""


class SMSConfig(BaseModel):
    account_sid: str = ""
    auth_token: str = ""
    from_number: str = ""
    api_base: str = "https://api.twilio.com/2010-04-01"


class DeliveryConfig(BaseModel):
    email: EmailConfig = EmailConfig()
    sms: SMSConfig = SMSConfig()


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///dealcommand.db"


class AppConfig(BaseModel):
    analysis: AnalysisConfig = AnalysisConfig()
    delivery: DeliveryConfig = DeliveryConfig()
    database: DatabaseConfig = DatabaseConfig()


class DeliveryCredentials(BaseSettings):
    """Provider secrets read from the environment or a .env file."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    TWILIO_ACCOUNT_SID: Optional[str] = None
    TWILIO_AUTH_TOKEN: Optional[str] = None
    TWILIO_PHONE_NUMBER: Optional[str] = None
    SMTP_HOST: Optional[str] = None
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply_credentials(cfg: AppConfig, creds: DeliveryCredentials) -> AppConfig:
    """Fill delivery settings left blank in TOML from environment secrets."""
    email = cfg.delivery.email
    sms = cfg.delivery.sms
    email.smtp_host = email.smtp_host or creds.SMTP_HOST or ""
    email.smtp_user = email.smtp_user or creds.SMTP_USER or ""
    email.smtp_password = email.smtp_password or creds.SMTP_PASSWORD or ""
    sms.account_sid = sms.account_sid or creds.TWILIO_ACCOUNT_SID or ""
    sms.auth_token = sms.auth_token or creds.TWILIO_AUTH_TOKEN or ""
    sms.from_number = sms.from_number or creds.TWILIO_PHONE_NUMBER or ""
    return cfg


def load_config(
    config_path: Path | None = None,
    credentials: DeliveryCredentials | None = None,
) -> AppConfig:
    """Load configuration from TOML files.

    Loads default.toml first, then merges local.toml or a custom path on top.
    Delivery secrets missing from the files are taken from the environment.
    """
    default_path = CONFIG_DIR / "default.toml"
    data: dict[str, Any] = {}

    if default_path.exists():
        with open(default_path, "rb") as f:
            data = tomllib.load(f)

    local_path = config_path or CONFIG_DIR / "local.toml"
    if local_path.exists():
        with open(local_path, "rb") as f:
            overrides = tomllib.load(f)
        data = _deep_merge(data, overrides)

    cfg = AppConfig(**data)
    return _apply_credentials(cfg, credentials or DeliveryCredentials())


def redacted_dump(cfg: AppConfig) -> dict[str, Any]:
    """Dump the config for display with delivery secrets masked."""
    data = cfg.model_dump()
    for channel in data["delivery"].values():
        for key in ("smtp_password", "auth_token"):
            if channel.get(key):
                channel[key] = "***"
    return data
