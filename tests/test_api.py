"""Tests for the HTTP API."""

DEAL = {
    "address": "12 Oak St, Dallas, TX 75201",
    "list_price": 100_000,
    "zestimate": 120_000,
    "repair_estimate": 20_000,
    "arv": 160_000,
    "days_on_market": 10,
}

QUALIFY = {
    "is_owner": True,
    "is_motivated": True,
    "seller_motivation": 8,
    "sale_timeline_days": 30,
    "state": "TX",
    "asking_price": 170_000,
    "zestimate": 200_000,
}


class TestEngine:
    def test_analyze_deal(self, client):
        resp = client.post("/api/deal/analyze", json=DEAL)
        assert resp.status_code == 200
        body = resp.json()
        assert body["result"]["mao"] == 92_000
        assert body["result"]["spread_potential"] == 12_000
        assert body["offer_range"] == {"low": 75_000, "high": 80_000}
        assert body["saved"] is None

    def test_analyze_and_save_deal(self, client):
        saved = client.post("/api/deal/analyze?save=true", json=DEAL).json()["saved"]
        assert saved["qualifier_price"] == 80_000
        assert [d["id"] for d in client.get("/api/deals").json()["deals"]] == [saved["id"]]
        today = client.get("/api/kpis").json()["today"]
        assert today["deals_analyzed"] == 1
        assert today["estimated_spread"] == 12_000

    def test_invalid_deal_rejected(self, client):
        resp = client.post("/api/deal/analyze", json={**DEAL, "list_price": -5})
        assert resp.status_code == 422

    def test_evaluate_restricted_market(self, client):
        market = {
            "city": "Charleston",
            "state": "sc",
            "msa_population": 800_000,
            "city_population": 150_000,
            "median_price": 300_000,
            "days_on_market": 30,
            "pending_ratio": 30,
        }
        resp = client.post("/api/market/evaluate?save=true", json=market)
        body = resp.json()
        assert body["result"]["status"] == "disqualified"
        assert body["result"]["score"] == 70
        assert body["saved"]["is_restricted"]
        assert body["result"]["license_requirement"] is None

    def test_evaluate_reports_license_requirement(self, client):
        market = {
            "city": "Columbus",
            "state": "OH",
            "msa_population": 2_000_000,
            "city_population": 900_000,
            "median_price": 250_000,
            "days_on_market": 30,
            "pending_ratio": 30,
        }
        result = client.post("/api/market/evaluate", json=market).json()["result"]
        assert result["license_requirement"] == (
            "Ohio - License required to market wholesale deal (novations can bypass)"
        )
        assert result["score"] == 100

    def test_qualify_computes_ratio(self, client):
        body = client.post("/api/lead/qualify", json=QUALIFY).json()
        assert body["result"]["badge"] == "eligible"
        assert body["saved"] is None

    def test_qualify_and_save_lead(self, client):
        resp = client.post("/api/lead/qualify?save=true", json={**QUALIFY, "address": "9 Elm St"})
        lead = resp.json()["saved"]
        assert lead["status"] == "qualified"
        assert lead["partner_eligible"]
        assert lead["asking_price"] == 170_000
        assert client.get("/api/kpis").json()["today"]["qualified_leads"] == 1

    def test_unqualified_save_not_counted(self, client):
        resp = client.post("/api/lead/qualify?save=true", json={**QUALIFY, "address": "9 Elm St", "state": "SC"})
        assert resp.json()["saved"]["status"] != "qualified"
        assert client.get("/api/kpis").json()["today"]["qualified_leads"] == 0

    def test_qualify_save_needs_address(self, client):
        resp = client.post("/api/lead/qualify?save=true", json=QUALIFY)
        assert resp.status_code == 400
        assert "address" in resp.json()["error"]

    def test_qualify_ratio_override(self, client):
        body = client.post("/api/lead/qualify", json={**QUALIFY, "asking_price_ratio": 0.95}).json()
        assert body["result"]["reasons"] == ["Asking price exceeds 90% of Zestimate"]
        assert body["result"]["badge"] == "manual-review"

    def test_roi(self, client):
        resp = client.post("/api/roi", json={"purchase_price": 100_000, "repair_cost": 20_000, "arv": 180_000})
        assert resp.json()["roi"] == 32.0

    def test_roi_needs_investment(self, client):
        resp = client.post("/api/roi", json={"purchase_price": 0, "arv": 180_000})
        assert resp.status_code == 400
        assert "must be positive" in resp.json()["error"]

    def test_rental_cashflow(self, client):
        resp = client.post("/api/rental-cashflow", json={"purchase_price": 100_000, "monthly_rent": 1_500})
        assert resp.json()["net_cashflow"] == 280

    def test_scripts_use_profile_name(self, client):
        client.put("/api/profile", json={"name": "Jordan"})
        body = client.post("/api/scripts", json={"address": "12 Oak St", "list_price": 100_000}).json()
        assert body["seller"]["cold_call"].startswith("Hi, this is Jordan.")
        assert "$75,000 - $80,000" in body["seller"]["zillow_offer"]
        assert len(body["objections"]) == 6
        assert "dispo" not in body

    def test_scripts_with_assignment(self, client):
        body = client.post("/api/scripts", json={
            "address": "12 Oak St",
            "list_price": 100_000,
            "assignment_price": 85_000,
            "arv": 150_000,
            "repair_cost": 20_000,
        }).json()
        assert "Discount: 15% Below Market" in body["dispo"]["zillow_discount"]
        assert set(body["samples"]) == {"Zillow Discount", "Zillow Missed It", "Rental Plug-and-Play"}


class TestDelivery:
    def test_email_falls_back_to_compose_link(self, client):
        resp = client.post("/api/send-email", json={"to": "a@b.com", "subject": "Hi", "body": "Offer"})
        assert resp.status_code == 200
        assert resp.json()["method"] == "compose-link"

    def test_email_missing_fields(self, client):
        resp = client.post("/api/send-email", json={"to": "a@b.com"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "missing_fields"

    def test_sms_falls_back_to_link(self, client):
        resp = client.post("/api/send-sms", json={"to": "5550100", "message": "Hi"})
        assert resp.json()["link"] == "sms:5550100?body=Hi"

    def test_outreach_schedules(self, client):
        resp = client.post("/api/send-outreach", json={
            "emails": [{"to": "a@b.com", "subject": "Hi", "body": "Intro", "send_delay": "+1 day"}],
            "sms_messages": [{"to": "5550100", "message": "Hi"}],
        })
        body = resp.json()
        assert body["success"]
        assert body["summary"] == {"total": 2, "sent": 0, "scheduled": 2, "errors": 0}

    def test_outreach_counts_sent(self, client):
        client.post("/api/send-outreach", json={
            "sms_messages": [{"to": "5550100", "message": "Hi"}],
            "send_immediate": True,
        })
        assert client.get("/api/kpis").json()["today"]["outreach_sent"] == 1


class TestRecords:
    def test_lead_crud(self, client):
        lead = client.post("/api/leads", json={"address": "9 Elm St", "seller_name": "Pat"}).json()
        lead_id = lead["id"]
        assert client.get(f"/api/leads/{lead_id}").json()["seller_name"] == "Pat"

        assert lead["last_contact"] is not None
        updated = client.patch(f"/api/leads/{lead_id}", json={"status": "offer-sent"}).json()
        assert updated["status"] == "offer-sent"
        assert [item["id"] for item in client.get("/api/leads?status=offer-sent").json()["leads"]] == [lead_id]

        assert client.delete(f"/api/leads/{lead_id}").status_code == 200
        resp = client.get(f"/api/leads/{lead_id}")
        assert resp.status_code == 404
        assert resp.json() == {"error": f"Lead {lead_id} not found"}

    def test_lead_kpis(self, client):
        lead_id = client.post("/api/leads", json={"address": "9 Elm St"}).json()["id"]
        client.patch(f"/api/leads/{lead_id}", json={"status": "under-contract"})
        client.patch(f"/api/leads/{lead_id}", json={"status": "closed"})
        today = client.get("/api/kpis").json()["today"]
        assert today["leads_contacted"] == 1
        assert today["under_contract"] == 1
        assert today["closed_deals"] == 1

    def test_patch_unknown_field(self, client):
        lead_id = client.post("/api/leads", json={"address": "9 Elm St"}).json()["id"]
        resp = client.patch(f"/api/leads/{lead_id}", json={"shoe_size": 11})
        assert resp.status_code == 400

    def test_buyers_include_segments(self, client):
        client.post("/api/buyers", json={"name": "Acme Holdings", "type": "landlord"})
        body = client.get("/api/buyers").json()
        assert body["buyers"][0]["type"] == "landlord"
        assert len(body["segments"]) == 5

    def test_missing_buyer(self, client):
        assert client.patch("/api/buyers/nope", json={"notes": "x"}).status_code == 404
        assert client.delete("/api/buyers/nope").status_code == 404

    def test_contacts(self, client):
        contact = client.post("/api/contacts", json={"seller_name": "Pat", "address": "9 Elm St"}).json()
        assert client.get("/api/contacts").json()["contacts"][0]["id"] == contact["id"]
        assert client.delete(f"/api/contacts/{contact['id']}").json() == {"deleted": contact["id"]}

    def test_market_and_deal_delete_404(self, client):
        assert client.delete("/api/markets/nope").status_code == 404
        assert client.delete("/api/deals/nope").status_code == 404


class TestDailyActivity:
    def test_kpi_bump_and_set(self, client):
        client.post("/api/kpis", json={"field": "offers_sent"})
        client.post("/api/kpis", json={"field": "offers_sent", "amount": 2})
        assert client.get("/api/kpis").json()["today"]["offers_sent"] == 3
        resp = client.post("/api/kpis", json={"field": "offers_sent", "value": 1})
        assert resp.json()["offers_sent"] == 1

    def test_kpi_unknown_field(self, client):
        resp = client.post("/api/kpis", json={"field": "naps"})
        assert resp.status_code == 400

    def test_kpi_rejects_fractional_counter(self, client):
        resp = client.post("/api/kpis", json={"field": "offers_sent", "amount": 0.5})
        assert resp.status_code == 400
        assert "whole numbers" in resp.json()["error"]
        resp = client.get("/api/kpis")
        assert resp.status_code == 200
        assert resp.json()["today"]["offers_sent"] == 0

    def test_kpi_overview(self, client):
        body = client.get("/api/kpis").json()
        assert body["progress"] == 0
        assert body["targets"]["deals_analyzed"] == 10
        assert body["stats"]["total_leads"] == 0

    def test_checklist(self, client):
        body = client.post("/api/checklist/follow-ups").json()
        assert body["items"] == {"follow-ups": True}
        body = client.get("/api/checklist").json()
        assert body["completed"] == 1
        assert len(body["labels"]) == 10
        assert client.post("/api/checklist/nap-time").status_code == 400


def test_links(client):
    resp = client.get("/api/links", params={"address": "9101 E 50th St, Kansas City, MO 64133"})
    body = resp.json()
    assert body["zillow"] == "https://www.zillow.com/homes/9101-E-50th-St-Kansas-City-MO-64133_rb/"
    assert body["address"]["zip_code"] == "64133"


def test_config_masks_nothing_when_blank(client):
    body = client.get("/api/config").json()
    assert body["analysis"]["deal"]["min_spread"] == 5_000
    assert body["delivery"]["sms"]["auth_token"] == ""


def test_profile_round_trip(client):
    assert client.get("/api/profile").json() == {"name": ""}
    client.put("/api/profile", json={"name": "Jordan"})
    assert client.get("/api/profile").json() == {"name": "Jordan"}


def test_partner_script(client):
    resp = client.post("/api/partner-script", json={
        "source": "sms", "first_name": "Sam", "address": "5 Elm St", "partner_phone": "555-0100",
    })
    body = resp.json()
    assert body["opening"].startswith("Hello Sam?")
    assert body["qualification"].startswith("QUALIFICATION QUESTIONS:")
    assert "calling from is: 555-0100" in body["appointment"]


def test_partner_script_unknown_source(client):
    resp = client.post("/api/partner-script", json={"source": "billboard"})
    assert resp.status_code == 400


def test_playbook(client):
    body = client.get("/api/playbook").json()
    assert len(body["disqualification_reasons"]) == 7
    assert body["dispo"]["zillow_objection"]["objection"] == "But it's on Zillow..."
    assert len(body["dispo"]["cta_ideas"]) == 3
