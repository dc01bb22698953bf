"""
Audience (list) tools.
"""

import logging
from typing import Any, Dict, List

from ..base import ToolAnnotations
from ._common import MailchimpTool, format_rate

logger = logging.getLogger(__name__)


class ListAudiencesTool(MailchimpTool):
    """List audiences with their subscriber stats."""

    @property
    def name(self) -> str:
        return "mailchimp_list_audiences"

    @property
    def title(self) -> str:
        return "List Mailchimp Audiences"

    @property
    def description(self) -> str:
        return (
            "List all audiences (lists) in the Mailchimp account. Returns audience IDs, "
            "names, and subscriber stats. You need an audience ID to create campaigns."
        )

    @property
    def annotations(self) -> ToolAnnotations:
        return ToolAnnotations(read_only=True, idempotent=True)

    async def execute(self, **kwargs) -> List[Dict[str, Any]]:
        data = await self.client.execute(
            "GET",
            "/lists",
            params={"count": "100", "fields": "lists.id,lists.name,lists.stats"},
        )

        audiences = []
        for item in data.get("lists", []):
            stats = item.get("stats") or {}
            audiences.append({
                "id": item.get("id"),
                "name": item.get("name"),
                "subscribers": stats.get("member_count"),
                "open_rate": format_rate(stats.get("open_rate")),
                "click_rate": format_rate(stats.get("click_rate")),
            })

        logger.info(f"Listed {len(audiences)} audiences")
        return audiences


__all__ = ["ListAudiencesTool"]
