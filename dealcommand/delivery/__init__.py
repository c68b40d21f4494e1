"""Outreach delivery over email and SMS."""

from dealcommand.delivery.channels import EmailChannel, SMSChannel
from dealcommand.delivery.sequence import OutreachSequencer, parse_delay
