"""Tests for the command line interface."""

import pytest
from typer.testing import CliRunner

from dealcommand.cli import app
from dealcommand.db.repository import Repository

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "local.toml"
    path.write_text(f'[database]\nurl = "sqlite:///{tmp_path / "cli.db"}"\n')
    return str(path)


def test_market_command():
    result = runner.invoke(app, [
        "market", "Tampa", "FL",
        "--msa", "500000", "--city-pop", "150000", "--median", "300000",
        "--dom", "30", "--pending", "30",
    ])
    assert result.exit_code == 0
    assert "100/100" in result.output
    assert "IDEAL" in result.output


def test_market_shows_license_requirement():
    result = runner.invoke(app, [
        "market", "Columbus", "OH",
        "--msa", "2000000", "--city-pop", "900000", "--median", "250000",
        "--dom", "30", "--pending", "30",
    ])
    assert result.exit_code == 0
    assert "100/100" in result.output
    assert "Ohio - License required" in result.output


def test_market_bad_state():
    result = runner.invoke(app, [
        "market", "Nowhere", "ZZ",
        "--msa", "1", "--city-pop", "1", "--median", "1", "--dom", "1", "--pending", "1",
    ])
    assert result.exit_code == 1
    assert "Unknown state code" in result.output


def test_deal_command_scans_description():
    result = runner.invoke(app, [
        "deal", "12 Oak St",
        "--price", "100000", "--zestimate", "120000", "--arv", "160000", "--repairs", "20000",
        "--description", "Estate sale, sold AS-IS",
    ])
    assert result.exit_code == 0
    assert "$92,000" in result.output
    assert "No motivated seller keywords detected" not in result.output


def test_deal_saved(config_file):
    result = runner.invoke(app, [
        "deal", "12 Oak St", "--price", "100000", "--zestimate", "120000", "--arv", "160000",
        "--save", "--config", config_file,
    ])
    assert result.exit_code == 0
    assert "Saved deal" in result.output


def test_qualify_command():
    result = runner.invoke(app, [
        "qualify", "--state", "TX", "--asking", "170000", "--zestimate", "200000",
        "--motivation", "8", "--timeline", "30", "--mls",
    ])
    assert result.exit_code == 0
    assert "MANUAL-REVIEW" in result.output
    assert "Property listed on MLS" in result.output


def test_qualify_saves_and_counts(config_file, tmp_path):
    result = runner.invoke(app, [
        "qualify", "--state", "TX", "--asking", "170000", "--zestimate", "200000",
        "--motivation", "8", "--timeline", "30", "--address", "9 Elm St", "--config", config_file,
    ])
    assert result.exit_code == 0
    assert "(qualified)" in result.output
    repo = Repository(f"sqlite:///{tmp_path / 'cli.db'}")
    assert repo.get_kpis().qualified_leads == 1


def test_roi_rejects_zero_investment():
    result = runner.invoke(app, ["roi", "0", "100000"])
    assert result.exit_code == 1
    assert "must be positive" in result.output


def test_rental_command():
    result = runner.invoke(app, ["rental", "100000", "1500"])
    assert result.exit_code == 0
    assert "13.4%" in result.output


def test_script_uses_profile(config_file):
    runner.invoke(app, ["profile", "Jordan", "--config", config_file])
    result = runner.invoke(app, [
        "script", "12 Oak St", "--price", "100000", "--kind", "sms", "--config", config_file,
    ])
    assert result.exit_code == 0
    assert "Jordan" in result.output
    assert "$80,000" in result.output


def test_script_unknown_kind(config_file):
    result = runner.invoke(app, [
        "script", "12 Oak St", "--price", "100000", "--kind", "fax", "--config", config_file,
    ])
    assert result.exit_code == 1


def test_kpi_bump_and_toggle(config_file):
    result = runner.invoke(app, [
        "kpi", "--bump", "offers_sent", "--toggle", "follow-ups", "--config", config_file,
    ])
    assert result.exit_code == 0
    assert "1/10 done" in result.output


def test_kpi_unknown_field(config_file):
    result = runner.invoke(app, ["kpi", "--bump", "naps", "--config", config_file])
    assert result.exit_code == 1
    assert "Unknown KPI field" in result.output


def test_playbook_state_rules():
    result = runner.invoke(app, ["playbook", "--state", "il"])
    assert result.exit_code == 0
    assert "Illinois - Wholesale restrictions apply" in result.output


def test_partner_script():
    result = runner.invoke(app, [
        "partner-script", "website", "--name", "Sam", "--address", "5 Elm St",
        "--partner-phone", "555-0100",
    ])
    assert result.exit_code == 0
    assert "Hello Sam?" in result.output
    assert "555-0100" in result.output


def test_partner_script_unknown_source():
    result = runner.invoke(app, ["partner-script", "billboard"])
    assert result.exit_code == 1
    assert "Unknown lead source" in result.output
