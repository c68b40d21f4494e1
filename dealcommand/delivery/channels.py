"""Email and SMS delivery channels.

Each channel sends through its provider when credentials are configured and
otherwise hands back a link the user can open to send by hand. Provider
failures come back as a ``DeliveryResult`` with an error code; they are never
raised to the caller.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid
from typing import Optional

import aiosmtplib
import httpx

from dealcommand.config import EmailConfig, SMSConfig
from dealcommand.links import encode_uri_component
from dealcommand.models import DeliveryError, DeliveryResult

logger = logging.getLogger(__name__)

_NOT_DIAL = re.compile(r"[^\d+]")


def gmail_compose_link(to: str, subject: str, body: str) -> str:
    return (
        "https://mail.google.com/mail/?view=cm&fs=1"
        f"&to={encode_uri_component(to)}"
        f"&su={encode_uri_component(subject)}"
        f"&body={encode_uri_component(body)}"
    )


def sms_link(to: str, message: str) -> str:
    return f"sms:{to}?body={encode_uri_component(message)}"


def format_phone(number: str) -> str:
    """Strip everything but digits and '+', assuming a US number without a country code."""
    cleaned = _NOT_DIAL.sub("", number)
    return cleaned if cleaned.startswith("+") else f"+1{cleaned}"


class BaseChannel(ABC):
    @property
    @abstractmethod
    def configured(self) -> bool: ...


class EmailChannel(BaseChannel):
    """Sends plain-text email over SMTP, or returns a Gmail compose link."""

    def __init__(self, config: EmailConfig):
        self.config = config

    @property
    def configured(self) -> bool:
        return bool(self.config.smtp_host)

    async def send(self, to: str, subject: str, body: str, sender_name: str = "") -> DeliveryResult:
        if not to or not subject or not body:
            return DeliveryResult(
                success=False,
                error=DeliveryError.MISSING_FIELDS,
                detail="Missing required fields: to, subject, body",
            )

        if not self.configured:
            return DeliveryResult(
                success=True,
                method="compose-link",
                link=gmail_compose_link(to, subject, body),
                detail="SMTP not configured. Use the compose link to send via Gmail.",
            )

        from_address = self.config.from_address or self.config.smtp_user
        msg = MIMEText(body, "plain", "utf-8")
        msg["Subject"] = subject
        msg["From"] = formataddr((sender_name, from_address)) if sender_name else from_address
        msg["To"] = to
        msg["Message-ID"] = make_msgid()

        try:
            _, response = await aiosmtplib.send(
                msg,
                hostname=self.config.smtp_host,
                port=self.config.smtp_port,
                username=self.config.smtp_user or None,
                password=self.config.smtp_password or None,
                use_tls=False,
                start_tls=True,
            )
        except aiosmtplib.SMTPAuthenticationError as e:
            logger.error("SMTP login failed for %s: %s", self.config.smtp_user, e)
            return DeliveryResult(success=False, method="smtp", error=DeliveryError.AUTH_FAILED, detail=str(e))
        except aiosmtplib.SMTPResponseException as e:
            logger.error("SMTP server rejected email to %s: %s", to, e)
            return DeliveryResult(success=False, method="smtp", error=DeliveryError.PROVIDER_REJECTED, detail=str(e))
        except (aiosmtplib.SMTPException, OSError) as e:
            logger.error("Could not reach SMTP server %s: %s", self.config.smtp_host, e)
            return DeliveryResult(success=False, method="smtp", error=DeliveryError.NETWORK_ERROR, detail=str(e))

        logger.info("Email sent to %s", to)
        return DeliveryResult(
            success=True,
            method="smtp",
            message_id=msg["Message-ID"],
            provider_status=response,
        )


class SMSChannel(BaseChannel):
    """Sends SMS through the Twilio REST API, or returns an ``sms:`` link."""

    def __init__(self, config: SMSConfig, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self._client = client

    @property
    def configured(self) -> bool:
        return bool(self.config.account_sid and self.config.auth_token and self.config.from_number)

    async def send(self, to: str, message: str) -> DeliveryResult:
        if not to or not message:
            return DeliveryResult(
                success=False,
                error=DeliveryError.MISSING_FIELDS,
                detail="Missing required fields: to, message",
            )

        if not self.configured:
            return DeliveryResult(
                success=True,
                method="sms-link",
                link=sms_link(to, message),
                detail="Twilio not configured. Use the SMS link to send from your phone.",
            )

        try:
            response = await self._post(format_phone(to), message)
        except httpx.HTTPError as e:
            logger.error("Twilio request failed: %s", e)
            return DeliveryResult(success=False, method="twilio", error=DeliveryError.NETWORK_ERROR, detail=str(e))

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.status_code in (401, 403):
            logger.error("Twilio rejected credentials for account %s", self.config.account_sid)
            return DeliveryResult(
                success=False,
                method="twilio",
                error=DeliveryError.AUTH_FAILED,
                detail=payload.get("message", response.text),
            )
        if response.is_error:
            logger.error("Twilio send failed (%d): %s", response.status_code, response.text)
            return DeliveryResult(
                success=False,
                method="twilio",
                error=DeliveryError.PROVIDER_REJECTED,
                detail=payload.get("message", response.text),
            )

        logger.info("SMS sent to %s", to)
        return DeliveryResult(
            success=True,
            method="twilio",
            message_id=payload.get("sid"),
            provider_status=payload.get("status"),
        )

    async def _post(self, to: str, message: str) -> httpx.Response:
        url = f"{self.config.api_base}/Accounts/{self.config.account_sid}/Messages.json"
        request = dict(
            auth=(self.config.account_sid, self.config.auth_token),
            data={"To": to, "From": self.config.from_number, "Body": message},
        )
        if self._client is not None:
            return await self._client.post(url, **request)
        async with httpx.AsyncClient(timeout=10.0) as client:
            return await client.post(url, **request)
