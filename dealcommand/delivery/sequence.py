"""Multi-touch outreach sequences across email and SMS."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta
from typing import Callable, Optional

from dealcommand.delivery.channels import EmailChannel, SMSChannel, gmail_compose_link, sms_link
from dealcommand.models import (
    DeliveryResult,
    OutreachEmail,
    OutreachItemResult,
    OutreachReport,
    OutreachSMS,
    OutreachStatus,
)

logger = logging.getLogger(__name__)

_DELAY = re.compile(r"\+(\d+)\s*(day|hour|minute)", re.IGNORECASE)
_UNITS = {
    "day": timedelta(days=1),
    "hour": timedelta(hours=1),
    "minute": timedelta(minutes=1),
}


def parse_delay(delay: str) -> timedelta:
    """'+2 days' -> 2 days. Anything unrecognised means send now."""
    match = _DELAY.search(delay or "")
    if not match:
        return timedelta(0)
    return int(match.group(1)) * _UNITS[match.group(2).lower()]


def _item_from_result(channel: str, result: DeliveryResult) -> OutreachItemResult:
    return OutreachItemResult(
        channel=channel,
        status=OutreachStatus.SENT if result.success else OutreachStatus.ERROR,
        method=result.method or None,
        link=result.link,
        error=result.error,
        detail=result.detail,
    )


class OutreachSequencer:
    """Sends the due touches of a sequence and schedules the rest.

    Only zero-delay items go out, and only when ``send_immediate`` is set.
    Every other item comes back ``scheduled`` with its due time and a link for
    sending it by hand; nothing is queued.
    """

    def __init__(
        self,
        email: EmailChannel,
        sms: SMSChannel,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.email = email
        self.sms = sms
        self._clock = clock or datetime.utcnow

    async def send(
        self,
        emails: list[OutreachEmail],
        sms_messages: list[OutreachSMS],
        sender_name: str = "",
        send_immediate: bool = False,
    ) -> OutreachReport:
        now = self._clock()
        results: list[OutreachItemResult] = []

        for item in emails:
            delay = parse_delay(item.send_delay)
            if send_immediate and not delay:
                result = await self.email.send(item.to, item.subject, item.body, sender_name)
                results.append(_item_from_result("email", result))
            else:
                results.append(OutreachItemResult(
                    channel="email",
                    status=OutreachStatus.SCHEDULED,
                    scheduled_at=now + delay,
                    link=gmail_compose_link(item.to, item.subject, item.body),
                ))

        for item in sms_messages:
            delay = parse_delay(item.send_delay)
            if send_immediate and not delay:
                result = await self.sms.send(item.to, item.message)
                results.append(_item_from_result("sms", result))
            else:
                results.append(OutreachItemResult(
                    channel="sms",
                    status=OutreachStatus.SCHEDULED,
                    scheduled_at=now + delay,
                    link=sms_link(item.to, item.message),
                ))

        report = OutreachReport(results=results)
        summary = report.summary
        logger.info(
            "Outreach sequence: %d sent, %d scheduled, %d errors",
            summary["sent"], summary["scheduled"], summary["errors"],
        )
        return report
