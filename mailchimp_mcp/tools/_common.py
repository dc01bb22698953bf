"""Shared pieces for the Mailchimp tools."""

from typing import Any, Optional

from ..base import MCPTool, ToolParameter
from ..client import MailchimpClient


def format_rate(rate: Any) -> Optional[str]:
    """0.423 -> '42.3%'."""
    if rate is None:
        return None
    return f"{rate * 100:.1f}%"


# Mailchimp ids are single path segments
ID_PATTERN = r"^[A-Za-z0-9_-]+$"


def campaign_id_parameter(description: str = "Campaign ID") -> ToolParameter:
    return ToolParameter(
        name="campaign_id",
        type="string",
        description=description,
        required=True,
        min_length=1,
        pattern=ID_PATTERN,
    )


class MailchimpTool(MCPTool):
    """Base for tools that make exactly one Mailchimp API call."""

    def __init__(self, client: Optional[MailchimpClient] = None):
        self._client = client

    @property
    def category(self) -> str:
        return "mailchimp"

    @property
    def client(self) -> MailchimpClient:
        if self._client is None:
            return MailchimpClient()
        return self._client
