"""Tests for seller scripts and disposition ads."""

import pytest

from dealcommand.outreach.dispo import (
    DISPO_SAMPLE_ADS,
    dispo_ads,
    email_blast,
    fb_group_post,
    render_sample_ads,
    rental_roi_ad,
    zillow_discount_ad,
)
from dealcommand.outreach.scripts import (
    OBJECTION_HANDLERS,
    appointment_setting,
    cold_call_script,
    email_script,
    partner_opening,
    seller_scripts,
    sms_script,
    zillow_offer_script,
)


class TestSellerScripts:
    def test_cold_call_formats_price(self):
        script = cold_call_script("Jane", "12 Oak St", 80_000)
        assert script.startswith("Hi, this is Jane. I'm reaching out about the property at 12 Oak St.")
        assert "$80,000" in script

    def test_placeholders_when_blank(self):
        script = sms_script("", "", 80_000)
        assert "[Your Name]" in script
        assert "[Address]" in script

    def test_email_subject_line(self):
        script = email_script("Jane", "12 Oak St", 80_000)
        assert script.splitlines()[0] == "Subject: Cash Offer Inquiry - 12 Oak St"
        assert script.endswith("Best regards,\nJane")

    def test_zillow_offer_quotes_range(self):
        script = zillow_offer_script("Jane", "12 Oak St", 75_000, 80_000)
        assert "around $75,000 - $80,000" in script

    def test_seller_scripts_bundle(self):
        scripts = seller_scripts("Jane", "12 Oak St", 80_000, 75_000, 80_000)
        assert set(scripts) == {"cold_call", "sms", "email", "agent", "zillow_offer"}
        assert "$80,000" in scripts["agent"]

    def test_objection_handlers(self):
        assert len(OBJECTION_HANDLERS) == 6
        assert OBJECTION_HANDLERS[0].objection == "That's too low"
        assert all(h.response for h in OBJECTION_HANDLERS)


class TestPartnerScripts:
    def test_cold_call_opening_names_city(self):
        script = partner_opening("cold-call", "Sam", "5 Elm St", "Dallas")
        assert script.startswith("Hi Sam?")
        assert "in the Dallas area" in script

    def test_facebook_opening_asks_about_property(self):
        script = partner_opening("facebook", "Sam", "5 Elm St")
        assert "messaging on Facebook" in script
        assert "condition of the property?" in script

    @pytest.mark.parametrize("source", ["sms", "outsourced", "website"])
    def test_warm_openings(self, source):
        script = partner_opening(source, "", "5 Elm St")
        assert script.startswith("Hello (First name)?")
        assert "5 Elm St" in script

    def test_unknown_source(self):
        with pytest.raises(ValueError, match="Unknown lead source"):
            partner_opening("billboard", "Sam", "5 Elm St")

    def test_appointment_setting_phone(self):
        assert "(Partner Phone Number)" in appointment_setting()
        assert "calling from is: 555-0100" in appointment_setting("555-0100")


class TestDispoAds:
    def test_zillow_discount(self):
        ad = zillow_discount_ad("12 Oak St", 100_000, 85_000)
        assert "Listed at: $100,000" in ad
        assert "YOUR Price: $85,000" in ad
        assert "Discount: 15% Below Market" in ad

    def test_zillow_discount_without_list_price(self):
        assert "Discount: 0% Below Market" in zillow_discount_ad("12 Oak St", 0, 85_000)

    def test_rental_roi(self):
        ad = rental_roi_ad("12 Oak St", 100_000, 1_200)
        assert "Annual Gross ROI: 14.4%" in ad
        assert "Est. Monthly Cash Flow: $400" in ad

    def test_rental_roi_zero_price(self):
        assert "Annual Gross ROI: 0.0%" in rental_roi_ad("12 Oak St", 0, 1_200)

    def test_spread_in_posts(self):
        assert "Potential Spread: $50,000" in fb_group_post("12 Oak St", 120_000, 200_000, 30_000)
        assert "Potential Profit: $50,000" in email_blast("12 Oak St", 120_000, 200_000, 30_000)

    def test_dispo_ads_bundle(self):
        ads = dispo_ads("12 Oak St", 100_000, 85_000, 150_000, 20_000, 1_100)
        assert set(ads) == {
            "zillow_discount", "rental_roi", "fb_group", "email_blast", "realtor_pitch", "turnkey", "brrrr",
        }
        assert "Looking for $85,000." in ads["realtor_pitch"]
        assert "Rent: $1,100/mo" in ads["brrrr"]
        assert ads["turnkey"].startswith("Turnkey Rental - Day 1 Cashflow\n12 Oak St\n")

    def test_dispo_ads_default_rent(self):
        ads = dispo_ads("", 100_000, 85_000, 150_000, 20_000, 0)
        assert "Est. Monthly Rent: $1,200" in ads["rental_roi"]
        assert "Rent: $1,200/mo" in ads["brrrr"]
        assert ads["brrrr"].startswith("BRRRR Opportunity - [Address]\n")
        assert "at [Address]." in ads["realtor_pitch"]

    def test_sample_ads(self):
        ads = render_sample_ads("12 Oak St", 110_000, 100_000)
        assert list(ads) == [ad.name for ad in DISPO_SAMPLE_ADS]
        assert "$100,000 (Zillow: $110,000)" in ads["Zillow Discount"]
        rental = ads["Rental Plug-and-Play"]
        assert "Rent comps: $1,200/mo" in rental
        assert "ROI: 14.4%+" in rental
