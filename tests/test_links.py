"""Tests for listing and owner-lookup links."""

from dealcommand.links import (
    build_all_listing_urls,
    encode_uri_component,
    parse_address,
)

ADDRESS = "9101 E 50th St, Kansas City, MO 64133"


def test_parse_address():
    parts = parse_address(ADDRESS)
    assert parts.street == "9101 E 50th St"
    assert parts.city == "Kansas City"
    assert parts.state == "MO"
    assert parts.zip_code == "64133"


def test_parse_partial_address():
    parts = parse_address("9101 E 50th St")
    assert parts.street == "9101 E 50th St"
    assert parts.city == ""
    assert parts.state == ""
    assert parts.zip_code == ""


def test_encode_uri_component():
    assert encode_uri_component("a b,c:'d'") == "a%20b%2Cc%3A'd'"


class TestBuildAllListingUrls:
    def test_zillow_and_realtor(self):
        links = build_all_listing_urls(ADDRESS)
        assert links.zillow == "https://www.zillow.com/homes/9101-E-50th-St-Kansas-City-MO-64133_rb/"
        assert links.realtor == (
            "https://www.realtor.com/realestateandhomes-detail/9101-E-50th-St_Kansas-City_MO_64133"
        )

    def test_search_links(self):
        links = build_all_listing_urls(ADDRESS)
        assert links.redfin == (
            "https://www.google.com/search?q=9101%20E%2050th%20St%20Kansas%20City%20MO%2064133"
            "%20site%3Aredfin.com&btnI=I"
        )
        assert links.google == (
            "https://www.google.com/search?q=%229101%20E%2050th%20St%22%20%22Kansas%20City%22"
            "%20MO%2064133%20property"
        )
        assert links.true_people == (
            "https://www.truepeoplesearch.com/resultaddress?streetaddress=9101%20E%2050th%20St"
            "&citystatezip=Kansas%20City%2C%20MO%2064133"
        )

    def test_realtor_without_zip(self):
        links = build_all_listing_urls("1 Main St, Austin, TX")
        assert links.realtor.endswith("/1-Main-St_Austin_TX")

    def test_explicit_city_and_state_extract_zip(self):
        links = build_all_listing_urls("77 Pine Rd #4, somewhere 30301", city="Atlanta", state="GA")
        assert links.address.street == "77 Pine Rd #4"
        assert links.address.city == "Atlanta"
        assert links.address.zip_code == "30301"
        assert links.realtor.endswith("/77-Pine-Rd-4_Atlanta_GA_30301")

    def test_explicit_zip_wins(self):
        links = build_all_listing_urls(ADDRESS, city="Kansas City", state="MO", zip_code="64000")
        assert links.address.zip_code == "64000"
