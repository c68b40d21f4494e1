"""Property page and owner-lookup links for Zillow, Redfin, Realtor.com and TruePeopleSearch.

None of these sites need an API key: every link is built from the street
address alone and resolves to the property page on the site.
"""

from __future__ import annotations

import re
from typing import Optional
from urllib.parse import quote

from dealcommand.models import AddressParts, ListingLinks

_SLUG_STRIP = re.compile(r"[,#.]+")
_WHITESPACE = re.compile(r"\s+")
_ZIP = re.compile(r"\d{5}")


def encode_uri_component(value: str) -> str:
    """Percent-encode a query value the way browsers' encodeURIComponent does."""
    return quote(value, safe="-_.!~*'()")


def _slug(text: str) -> str:
    return _WHITESPACE.sub("-", _SLUG_STRIP.sub("", text))


def parse_address(full_address: str) -> AddressParts:
    """Split "9101 E 50th St, Kansas City, MO 64133" into its parts."""
    parts = [p.strip() for p in full_address.split(",")]
    parts += [""] * (3 - len(parts))
    state_zip = parts[2].split()
    return AddressParts(
        street=parts[0],
        city=parts[1],
        state=state_zip[0] if state_zip else "",
        zip_code=state_zip[1] if len(state_zip) > 1 else "",
    )


def zillow_url(addr: AddressParts) -> str:
    slug = _slug(f"{addr.street} {addr.city} {addr.state} {addr.zip_code}")
    return f"https://www.zillow.com/homes/{slug}_rb/"


def redfin_url(addr: AddressParts) -> str:
    # Redfin pages need an internal home id, so go through Google's first hit
    query = f"{addr.street} {addr.city} {addr.state} {addr.zip_code} site:redfin.com"
    return f"https://www.google.com/search?q={encode_uri_component(query)}&btnI=I"


def realtor_url(addr: AddressParts) -> str:
    street = _slug(addr.street)
    city = _WHITESPACE.sub("-", addr.city)
    base = f"https://www.realtor.com/realestateandhomes-detail/{street}_{city}_{addr.state}"
    if addr.zip_code:
        return f"{base}_{addr.zip_code}"
    return base


def google_property_url(addr: AddressParts) -> str:
    query = f'"{addr.street}" "{addr.city}" {addr.state} {addr.zip_code} property'
    return f"https://www.google.com/search?q={encode_uri_component(query)}"


def true_people_search_url(addr: AddressParts) -> str:
    city_state_zip = f"{addr.city}, {addr.state} {addr.zip_code}"
    return (
        "https://www.truepeoplesearch.com/resultaddress"
        f"?streetaddress={encode_uri_component(addr.street)}&citystatezip={encode_uri_component(city_state_zip)}"
    )


def build_all_listing_urls(
    full_address: str,
    city: Optional[str] = None,
    state: Optional[str] = None,
    zip_code: Optional[str] = None,
) -> ListingLinks:
    """Build every link for an address.

    An explicit city and state win over whatever the address string holds; the
    zip is then pulled from the first five-digit run in the address if missing.
    """
    if city and state:
        zip_code = zip_code or ""
        if not zip_code:
            match = _ZIP.search(full_address)
            if match:
                zip_code = match.group(0)
        addr = AddressParts(
            street=full_address.split(",")[0].strip(),
            city=city,
            state=state,
            zip_code=zip_code,
        )
    else:
        addr = parse_address(full_address)

    return ListingLinks(
        zillow=zillow_url(addr),
        redfin=redfin_url(addr),
        realtor=realtor_url(addr),
        google=google_property_url(addr),
        true_people=true_people_search_url(addr),
        address=addr,
    )
