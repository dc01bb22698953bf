"""
Campaign Tools

Draft, edit, preview, schedule, send and delete Mailchimp campaigns.
Campaign state rules (content only while draft, delete only if unsent, ...)
belong to Mailchimp; its errors are passed through untouched.
"""

import logging
from typing import Any, Dict, List

from ..base import ToolAnnotations, ToolParameter
from ._common import ID_PATTERN, MailchimpTool, campaign_id_parameter

logger = logging.getLogger(__name__)

CAMPAIGN_STATUSES = ["save", "sent", "schedule", "sending", "paused"]
TEST_SEND_TYPES = ["html", "plaintext"]


class ListCampaignsTool(MailchimpTool):
    """List recent campaigns, newest first."""

    @property
    def name(self) -> str:
        return "mailchimp_list_campaigns"

    @property
    def title(self) -> str:
        return "List Mailchimp Campaigns"

    @property
    def description(self) -> str:
        return (
            "List recent campaigns. Filter by status (save=draft, sent, schedule, sending, paused). "
            "Returns campaign IDs, subjects, status, and stats."
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="status",
                type="string",
                description="Filter by campaign status. 'save' = draft campaigns.",
                required=False,
                enum=CAMPAIGN_STATUSES,
            ),
            ToolParameter(
                name="count",
                type="integer",
                description="Number of campaigns to return",
                required=False,
                default=20,
                minimum=1,
                maximum=100,
            ),
        ]

    @property
    def annotations(self) -> ToolAnnotations:
        return ToolAnnotations(read_only=True, idempotent=True)

    async def execute(self, count: int = 20, status: str = None, **kwargs) -> List[Dict[str, Any]]:
        params = {
            "count": str(count),
            "sort_field": "create_time",
            "sort_dir": "DESC",
        }
        if status:
            params["status"] = status

        data = await self.client.execute("GET", "/campaigns", params=params)

        campaigns = []
        for c in data.get("campaigns", []):
            settings = c.get("settings") or {}
            report = c.get("report_summary") or {}
            campaigns.append({
                "id": c.get("id"),
                "title": settings.get("title") or "(untitled)",
                "subject": settings.get("subject_line") or "(no subject)",
                "status": c.get("status"),
                "created": c.get("create_time"),
                "sent": c.get("send_time") or None,
                "emails_sent": c.get("emails_sent") or None,
                "opens": report.get("unique_opens") or None,
                "clicks": report.get("subscriber_clicks") or None,
            })
        return campaigns


class CreateCampaignTool(MailchimpTool):
    """Create a regular campaign draft."""

    @property
    def name(self) -> str:
        return "mailchimp_create_campaign"

    @property
    def title(self) -> str:
        return "Create Mailchimp Campaign"

    @property
    def description(self) -> str:
        return (
            "Create a new email campaign draft in Mailchimp. Returns the campaign ID which "
            "you'll use to set content and send."
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            ToolParameter(
                name="list_id",
                type="string",
                description="Audience/list ID to send the campaign to (from mailchimp_list_audiences)",
                min_length=1,
                pattern=ID_PATTERN,
            ),
            ToolParameter(
                name="subject",
                type="string",
                description="Email subject line",
            ),
            ToolParameter(
                name="preview_text",
                type="string",
                description="Preview text shown in inbox after subject",
                required=False,
            ),
            ToolParameter(
                name="title",
                type="string",
                description="Internal campaign name (for your reference only). Defaults to the subject.",
                required=False,
            ),
            ToolParameter(
                name="from_name",
                type="string",
                description="Sender name",
            ),
            ToolParameter(
                name="reply_to",
                type="string",
                description="Reply-to email address",
                format="email",
            ),
        ]

    @property
    def annotations(self) -> ToolAnnotations:
        return ToolAnnotations()

    async def execute(
        self,
        list_id: str,
        subject: str,
        from_name: str,
        reply_to: str,
        preview_text: str = None,
        title: str = None,
        **kwargs
    ) -> Dict[str, Any]:
        body = {
            "type": "regular",
            "recipients": {"list_id": list_id},
            "settings": {
                "subject_line": subject,
                "preview_text": preview_text or "",
                "title": title or subject,
                "from_name": from_name,
                "reply_to": reply_to,
            },
        }
        campaign = await self.client.execute("POST", "/campaigns", body=body)

        settings = campaign.get("settings") or {}
        logger.info(f"Created campaign {campaign.get('id')} for list {list_id}")
        return {
            "campaign_id": campaign.get("id"),
            "status": campaign.get("status"),
            "subject": settings.get("subject_line"),
            "title": settings.get("title"),
            "message": (
                "Campaign draft created. Use mailchimp_set_campaign_content to add HTML, "
                "then mailchimp_send_test or mailchimp_send_campaign."
            ),
        }


class SetCampaignContentTool(MailchimpTool):

    @property
    def name(self) -> str:
        return "mailchimp_set_campaign_content"

    @property
    def title(self) -> str:
        return "Set Campaign HTML Content"

    @property
    def description(self) -> str:
        return (
            "Set the HTML content of a campaign. Pass the full HTML email (with inline styles, "
            "tables, etc). Mailchimp will auto-generate the plain text version. "
            "Each call replaces the previous content."
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            campaign_id_parameter("Campaign ID to set content for (from mailchimp_create_campaign)"),
            ToolParameter(
                name="html",
                type="string",
                description="Full HTML email content with inline styles",
            ),
        ]

    @property
    def annotations(self) -> ToolAnnotations:
        return ToolAnnotations(idempotent=True)

    async def execute(self, campaign_id: str, html: str, **kwargs) -> Dict[str, Any]:
        await self.client.execute("PUT", f"/campaigns/{campaign_id}/content", body={"html": html})
        return {
            "campaign_id": campaign_id,
            "message": (
                "HTML content set successfully. Use mailchimp_send_test to preview, "
                "or mailchimp_send_campaign to send to your full list."
            ),
        }


class SendTestEmailTool(MailchimpTool):

    @property
    def name(self) -> str:
        return "mailchimp_send_test"

    @property
    def title(self) -> str:
        return "Send Test Email"

    @property
    def description(self) -> str:
        return (
            "Send a test/preview email of a campaign to up to 5 email addresses. "
            "Use this to review the email before sending to your full list."
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            campaign_id_parameter("Campaign ID to send test for"),
            ToolParameter(
                name="test_emails",
                type="array",
                description="Email addresses to receive the test (max 5)",
                items_type="string",
                items_format="email",
                min_items=1,
                max_items=5,
            ),
            ToolParameter(
                name="send_type",
                type="string",
                description="Send HTML or plaintext version",
                required=False,
                default="html",
                enum=TEST_SEND_TYPES,
            ),
        ]

    @property
    def annotations(self) -> ToolAnnotations:
        return ToolAnnotations()

    async def execute(
        self, campaign_id: str, test_emails: List[str], send_type: str = "html", **kwargs
    ) -> Dict[str, Any]:
        await self.client.execute(
            "POST",
            f"/campaigns/{campaign_id}/actions/test",
            body={"test_emails": test_emails, "send_type": send_type},
        )
        return {
            "campaign_id": campaign_id,
            "sent_to": test_emails,
            "send_type": send_type,
            "message": "Test email sent. Check your inbox to preview.",
        }


class SendCampaignTool(MailchimpTool):
    """
    Send a campaign to its whole audience.

    Irreversible and not safe to repeat: a timeout leaves the outcome unknown,
    so callers must not retry blindly.
    """

    @property
    def name(self) -> str:
        return "mailchimp_send_campaign"

    @property
    def title(self) -> str:
        return "Send Campaign"

    @property
    def description(self) -> str:
        return (
            "Send a campaign to the full audience list. This is IRREVERSIBLE: the email will be "
            "delivered to all subscribers. Use mailchimp_send_test first to verify content."
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [campaign_id_parameter("Campaign ID to send")]

    @property
    def annotations(self) -> ToolAnnotations:
        return ToolAnnotations(destructive=True)

    async def execute(self, campaign_id: str, **kwargs) -> Dict[str, Any]:
        await self.client.execute("POST", f"/campaigns/{campaign_id}/actions/send")
        logger.info(f"Campaign {campaign_id} accepted for sending")
        return {
            "campaign_id": campaign_id,
            "message": "Campaign sent! It may take a few minutes to deliver to all subscribers.",
        }


class ScheduleCampaignTool(MailchimpTool):

    @property
    def name(self) -> str:
        return "mailchimp_schedule_campaign"

    @property
    def title(self) -> str:
        return "Schedule Campaign"

    @property
    def description(self) -> str:
        return (
            "Schedule a campaign to send at a specific date and time. Once the time passes the "
            "campaign goes to the full audience, so confirm the campaign ID and time first "
            "(mailchimp_list_campaigns, mailchimp_send_test). Repeating the same call leaves "
            "the same schedule."
        )

    @property
    def parameters(self) -> List[ToolParameter]:
        return [
            campaign_id_parameter("Campaign ID to schedule"),
            ToolParameter(
                name="schedule_time",
                type="string",
                description="Send time as an RFC 3339 date-time with offset (e.g., '2026-02-14T10:00:00Z')",
                format="date-time",
            ),
        ]

    @property
    def annotations(self) -> ToolAnnotations:
        return ToolAnnotations(idempotent=True)

    async def execute(self, campaign_id: str, schedule_time: str, **kwargs) -> Dict[str, Any]:
        await self.client.execute(
            "POST",
            f"/campaigns/{campaign_id}/actions/schedule",
            body={"schedule_time": schedule_time},
        )
        logger.info(f"Campaign {campaign_id} scheduled for {schedule_time}")
        return {
            "campaign_id": campaign_id,
            "scheduled_for": schedule_time,
            "message": "Campaign scheduled successfully.",
        }


class DeleteCampaignTool(MailchimpTool):

    @property
    def name(self) -> str:
        return "mailchimp_delete_campaign"

    @property
    def title(self) -> str:
        return "Delete Campaign"

    @property
    def description(self) -> str:
        return "Delete a campaign. Only works on campaigns that haven't been sent."

    @property
    def parameters(self) -> List[ToolParameter]:
        return [campaign_id_parameter("Campaign ID to delete")]

    @property
    def annotations(self) -> ToolAnnotations:
        return ToolAnnotations(destructive=True)

    async def execute(self, campaign_id: str, **kwargs) -> Dict[str, Any]:
        await self.client.execute("DELETE", f"/campaigns/{campaign_id}")
        logger.info(f"Deleted campaign {campaign_id}")
        return {"campaign_id": campaign_id, "message": "Campaign deleted."}


__all__ = [
    "ListCampaignsTool",
    "CreateCampaignTool",
    "SetCampaignContentTool",
    "SendTestEmailTool",
    "SendCampaignTool",
    "ScheduleCampaignTool",
    "DeleteCampaignTool",
]
