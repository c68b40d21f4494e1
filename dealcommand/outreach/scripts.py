"""Seller outreach scripts and objection handlers.

Every generator falls back to a bracketed placeholder when a name or address
is missing so the script can still be read aloud and filled in by hand.
"""

from __future__ import annotations

from typing import NamedTuple

from dealcommand.numbers import format_number


class ObjectionHandler(NamedTuple):
    objection: str
    response: str


def _name(name: str) -> str:
    return name or "[Your Name]"


def _address(address: str) -> str:
    return address or "[Address]"


def cold_call_script(name: str, address: str, qualifier_price: float) -> str:
    return (
        f"Hi, this is {_name(name)}. I'm reaching out about the property at "
        f"{_address(address)}. I'm a local investor looking to purchase properties "
        "in the area. I noticed your listing and wanted to see if you'd be open to "
        "discussing a fair cash offer. I can close quickly and cover closing costs. "
        f"Would a price around ${format_number(qualifier_price)} be something you'd "
        "consider? I completely understand if the timing isn't right - I just "
        "wanted to reach out."
    )


def sms_script(name: str, address: str, qualifier_price: float) -> str:
    return (
        f"Hi, this is {_name(name)}. I saw your property at {_address(address)} "
        "and I'm interested. I'm a cash buyer looking to close quickly. Would you "
        f"entertain an offer around ${format_number(qualifier_price)}? No pressure "
        "at all - just let me know if you'd like to chat."
    )


def email_script(name: str, address: str, qualifier_price: float) -> str:
    return f"""Subject: Cash Offer Inquiry - {_address(address)}

Hello,

I am reaching out regarding the property listed at {_address(address)}. I am an investor actively purchasing properties in the area and am prepared to make a competitive cash offer.

Based on my analysis, I would like to discuss an offer in the range of ${format_number(qualifier_price)}. I can close on your timeline and handle all closing costs.

I understand if this doesn't align with your expectations, but I'd appreciate the opportunity to discuss further.

Best regards,
{_name(name)}"""


def _agent_pitch(name: str, address: str, price_text: str) -> str:
    return f"""Hello, I am reaching out about the property listed on {_address(address)}. I don't want to waste your time by any means, but I am an investor and am wondering if your seller would entertain an offer around {price_text}. The listing price doesn't make sense for me as an investor. Please let me know if this is at all a possibility.

Talk soon,
{_name(name)}"""


def agent_script(name: str, address: str, qualifier_price: float) -> str:
    return _agent_pitch(name, address, f"${format_number(qualifier_price)}")


def zillow_offer_script(name: str, address: str, low: float, high: float) -> str:
    """Agent script quoting an offer range instead of a single price."""
    return _agent_pitch(name, address, f"${format_number(low)} - ${format_number(high)}")


OBJECTION_HANDLERS: tuple[ObjectionHandler, ...] = (
    ObjectionHandler(
        "That's too low",
        "I completely understand. My offer is based on the current condition and "
        "market data. Could you share what price would work for you? I'm flexible "
        "and want to find a win-win.",
    ),
    ObjectionHandler(
        "I need to think about it",
        "Absolutely, take your time. I'll be here when you're ready. Can I follow "
        "up with you in a few days to see where you're at?",
    ),
    ObjectionHandler(
        "I already have an agent",
        "That's great - I actually work with agents regularly. I can submit my "
        "offer through your agent. Could you share their contact info?",
    ),
    ObjectionHandler(
        "I'm not in a rush to sell",
        "No problem at all. I can work on your timeline. Would it help if I made a "
        "standing offer that you could accept whenever you're ready?",
    ),
    ObjectionHandler(
        "How do I know you're legitimate?",
        "Great question. I can provide proof of funds, references from past "
        "sellers, and we'd use a reputable title company to handle everything. "
        "Your protection is my priority.",
    ),
    ObjectionHandler(
        "I need to talk to my spouse/partner",
        "Of course, that's totally understandable. Would it help if I sent over a "
        "summary of my offer so you can review it together? I can follow up in a "
        "day or two.",
    ),
)


# --- Partner program call scripts ---

_CONDITION_QUESTIONS = (
    "Do you mind if I ask you a few questions about the condition? "
    "It will only take 2 minutes of your time."
)


def partner_cold_call_opening(homeowner_name: str, address: str, city: str) -> str:
    return (
        f"Hi {homeowner_name or '(Homeowner First Name)'}?\n\n"
        f"My name is __________ and I'm calling about your property at "
        f"{address or '(Property Address)'}. I work with a group of buyers in the "
        f"{city or '(Property City)'} area that are actively looking to buy some "
        "homes. Have you ever considered selling your home or would you be open to "
        "selling?\n\n"
        "- If No - If it is something you may consider doing in the near future, we "
        "actually have a flexible closing timeline up to 6 months, so we can provide "
        "you with an offer and then you can decide the best closing time frame.\n\n"
        "- No - Alright, do you happen to have other properties you would like to "
        "sell?\n\n"
        "- If Yes - Great! Do you mind if I ask you a few questions about the "
        "condition? It will only take 2 minutes of your time."
    )


def _warm_opening(first_name: str, intro: str, confirm: str, questions: str = _CONDITION_QUESTIONS) -> str:
    first = first_name or "(First name)"
    return (
        f"Hello {first}?\n\n"
        f"Hey {first} my name is (Your Name), {intro}\n\n"
        "Yes.\n\n"
        f"{confirm}\n\n"
        "No, I've got time now.\n\n"
        f"Okay, awesome. {questions}"
    )


def partner_fb_group_opening(first_name: str, address: str) -> str:
    return _warm_opening(
        first_name,
        "we were just messaging on Facebook about you wanting to sell your "
        f"property at {address or '(Property Address)'}.",
        "Did I catch you at a bad time?",
        "Do you mind if I ask you a few questions about the condition of the "
        "property? It will only take 2 minutes of your time.",
    )


def partner_sms_opening(first_name: str, address: str) -> str:
    return _warm_opening(
        first_name,
        f"we were just texting about your property over at {address or '(Property Address)'}",
        "Did I catch you at a bad time?",
    )


def partner_outsourced_cold_call_opening(first_name: str, address: str) -> str:
    return _warm_opening(
        first_name,
        "I'm reaching out because my referral team said that you guys spoke earlier "
        f"today about your property at {address or '(Property Address)'} and they "
        "mentioned that you may be interested in selling it. Is that accurate?",
        "Great, did I catch you at a bad time?",
    )


def partner_website_lead_opening(first_name: str, address: str) -> str:
    return _warm_opening(
        first_name,
        "I'm reaching out because you filled out a form on our website expressing "
        f"interest in selling your property at {address or '(Property Address)'}. "
        "Is that accurate?",
        "Great, did I catch you at a bad time?",
    )


QUALIFICATION_QUESTIONS = """QUALIFICATION QUESTIONS:

- How many beds and baths does it have?
- Does the house have a garage? (Is it 1 or 2 car?)
- On a scale of 1 to 10 how would you rate your property condition?
- Is it currently listed with a realtor?

Thank you so much for answering these questions, there's just a couple more and we'll be done.

- Is the property occupied by you or tenants?
- (If tenants) may I ask, are they on a monthly lease or an annual lease?
- (If annual) okay, do you know when the lease expires?

Okay, just two more questions about the house...

- Is there a specific reason you are wanting to sell the property right now?
  (If it doesn't sound like there is a clear reason) - Were you thinking about selling before I reached out, or are you just looking for an offer?
- Also, if the numbers make sense with the offer, how soon would you be looking to close?

Thank you so much for taking the time to give me that information. So the next step is going to be to get you connected with our Home Buying Partner to see if your property qualifies for an As-Is offer.

Now, we are looking for homeowners that do want to sell their home. On a scale from 1-10, 10 being you would sell today, how would you rate on this?"""

PRICE_NEGOTIATION = """PRICE NEGOTIATION:

Now before I let you go and get you paired with our Partner, is there a dollar amount you have in mind that you would like to get if you sell the home?

(Let them answer... If their price is more than 90% of Zestimate value, let them know we buy properties AS-IS AND WE PAY ALL CLOSING COST)

Example - "Now, just to let you know, we do buy properties AS-IS and we cover all closing costs. So with that being said, would that price be the lowest you are willing to go, or would you be negotiable on the price?"

If they do not give a price, say:
"If we were to buy it completely as-is, cover all closing cost, and close on your timeline, do you at least have a 10 to 15 thousand dollar range you were hoping for?\""""


def appointment_setting(partner_phone: str = "") -> str:
    """Booking script for a qualified seller; the partner's call-back number is filled in."""
    return f"""SETTING THE APPOINTMENT (If the Seller is Qualified):

(First name), I appreciate you getting this information over to me. This sounds like a property that we may be interested in. I'd like to go ahead and book you that second call with our home-buying partner.

I'm looking at their calendar right now and they have a _________ available this afternoon or a _______ tomorrow morning. Do either of those times work for you?

Ok great.

And is this the best phone number for them to call you at?

Okay, I've got you booked for __(Day)___ at __(Time)__ and they will give you a call at that time. The phone number they will be calling from is: {partner_phone or "(Partner Phone Number)"}

Do you have any other questions for me at this time?

Alright, you are all set. You have a great rest of your day!"""


def partner_opening(source: str, first_name: str, address: str, city: str = "") -> str:
    """Pick the partner-program opening for where the lead came from."""
    openings = {
        "cold-call": lambda: partner_cold_call_opening(first_name, address, city),
        "facebook": lambda: partner_fb_group_opening(first_name, address),
        "sms": lambda: partner_sms_opening(first_name, address),
        "outsourced": lambda: partner_outsourced_cold_call_opening(first_name, address),
        "website": lambda: partner_website_lead_opening(first_name, address),
    }
    if source not in openings:
        raise ValueError(
            f"Unknown lead source {source!r}; expected one of {', '.join(openings)}"
        )
    return openings[source]()


def seller_scripts(name: str, address: str, qualifier_price: float, low: float, high: float) -> dict[str, str]:
    """All seller-facing scripts for one property, keyed by channel."""
    return {
        "cold_call": cold_call_script(name, address, qualifier_price),
        "sms": sms_script(name, address, qualifier_price),
        "email": email_script(name, address, qualifier_price),
        "agent": agent_script(name, address, qualifier_price),
        "zillow_offer": zillow_offer_script(name, address, low, high),
    }
