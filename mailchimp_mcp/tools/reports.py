"""
Campaign report tool.
"""

from typing import Any, Dict, List

from ..base import ToolAnnotations, ToolParameter
from ._common import MailchimpTool, campaign_id_parameter


def _total_bounces(bounces: Any) -> Any:
    # Mailchimp reports bounces as {hard_bounces, soft_bounces, syntax_errors}
    if isinstance(bounces, dict):
        return sum(v for v in bounces.values() if isinstance(v, (int, float)))
    return bounces


class GetCampaignReportTool(MailchimpTool):
    """Delivery outcomes of a sent campaign."""

    @property
    def name(self) -> str:
        return "mailchimp_get_campaign_report"

    @property
    def title(self) -> str:
        return "Get Campaign Report"

    @property
    def description(self) -> str:
        return "Get performance stats for a sent campaign: opens, clicks, bounces, unsubscribes."

    @property
    def parameters(self) -> List[ToolParameter]:
        return [campaign_id_parameter("Campaign ID to get report for")]

    @property
    def annotations(self) -> ToolAnnotations:
        return ToolAnnotations(read_only=True, idempotent=True)

    async def execute(self, campaign_id: str, **kwargs) -> Dict[str, Any]:
        report = await self.client.execute("GET", f"/reports/{campaign_id}")

        opens = report.get("opens") or {}
        clicks = report.get("clicks") or {}
        return {
            "campaign_id": campaign_id,
            "subject": report.get("subject_line"),
            "emails_sent": report.get("emails_sent"),
            "opens": opens.get("unique_opens"),
            "open_rate": opens.get("open_rate"),
            "clicks": clicks.get("unique_subscriber_clicks"),
            "click_rate": clicks.get("click_rate"),
            "bounces": _total_bounces(report.get("bounces")),
            "unsubscribes": report.get("unsubscribed"),
        }


__all__ = ["GetCampaignReportTool"]
