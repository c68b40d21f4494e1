"""Tests for configuration loading."""

from dealcommand.config import (
    AppConfig,
    DeliveryCredentials,
    _deep_merge,
    load_config,
    redacted_dump,
)


def _no_credentials() -> DeliveryCredentials:
    return DeliveryCredentials(
        _env_file=None,
        TWILIO_ACCOUNT_SID="",
        TWILIO_AUTH_TOKEN="",
        TWILIO_PHONE_NUMBER="",
        SMTP_HOST="",
        SMTP_USER="",
        SMTP_PASSWORD="",
    )


def test_load_default_config(tmp_path):
    cfg = load_config(tmp_path / "missing.toml", credentials=_no_credentials())
    assert isinstance(cfg, AppConfig)
    assert cfg.analysis.market.min_msa_population == 400_000
    assert cfg.analysis.deal.mao_pct_of_arv == 0.70
    assert cfg.analysis.qualification.max_sale_timeline_days == 90
    assert cfg.delivery.email.smtp_port == 587
    assert cfg.database.url


def test_local_override_merges(tmp_path):
    override = tmp_path / "local.toml"
    override.write_text("[analysis.deal]\nmin_spread = 10000.0\n")
    cfg = load_config(override, credentials=_no_credentials())
    assert cfg.analysis.deal.min_spread == 10_000
    # Untouched keys keep their defaults
    assert cfg.analysis.deal.qualifier_pct_of_list == 0.80


def test_credentials_fill_blank_delivery_settings(tmp_path):
    creds = DeliveryCredentials(
        _env_file=None,
        TWILIO_ACCOUNT_SID="AC123",
        TWILIO_AUTH_TOKEN="secret",
        TWILIO_PHONE_NUMBER="+15550100",
        SMTP_HOST="smtp.example.com",
    )
    cfg = load_config(tmp_path / "missing.toml", credentials=creds)
    assert cfg.delivery.sms.account_sid == "AC123"
    assert cfg.delivery.sms.from_number == "+15550100"
    assert cfg.delivery.email.smtp_host == "smtp.example.com"


def test_toml_wins_over_credentials(tmp_path):
    override = tmp_path / "local.toml"
    override.write_text('[delivery.email]\nsmtp_host = "mail.local"\n')
    creds = DeliveryCredentials(_env_file=None, SMTP_HOST="smtp.example.com")
    cfg = load_config(override, credentials=creds)
    assert cfg.delivery.email.smtp_host == "mail.local"


def test_redacted_dump_masks_secrets():
    cfg = AppConfig()
    cfg.delivery.email.smtp_password = "hunter2"
    cfg.delivery.sms.auth_token = "tok"
    data = redacted_dump(cfg)
    assert data["delivery"]["email"]["smtp_password"] == "***"
    assert data["delivery"]["sms"]["auth_token"] == "***"
    assert cfg.delivery.sms.auth_token == "tok"


def test_redacted_dump_leaves_blank_secrets():
    data = redacted_dump(AppConfig())
    assert data["delivery"]["email"]["smtp_password"] == ""


def test_config_deep_merge():
    base = {"a": {"b": 1, "c": 2}, "d": 3}
    override = {"a": {"b": 10}, "e": 5}
    result = _deep_merge(base, override)
    assert result == {"a": {"b": 10, "c": 2}, "d": 3, "e": 5}
