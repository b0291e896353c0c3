"""
Owner dashboard.

Lists saved forms and shows submission analytics for the selected one.
Purely presentational: every piece of state here is a copy of what the
form API returned.
"""

import json
import logging

from smartform.api_client import SmartFormClient
from smartform.config import get_config
from smartform.exceptions import SmartFormError
from smartform.models.form_schema import FormSummary
from smartform.models.submission import AnalyticsSummary

logger = logging.getLogger("smartform-dashboard")


class Dashboard:
    """Saved forms and per-form analytics of one owner."""

    def __init__(self, client: SmartFormClient):
        self.client = client
        self.forms: list[FormSummary] = []
        self.selected: FormSummary | None = None
        self.analytics: AnalyticsSummary | None = None
        self.message = ""

    async def load_forms(self) -> list[FormSummary]:
        """Refresh the form list. On failure the previous list is kept."""
        try:
            self.forms = await self.client.list_forms()
            self.message = ""
        except SmartFormError as e:
            self.message = f"Error: {e.message}"
        return self.forms

    def find(self, slug: str) -> FormSummary | None:
        for form in self.forms:
            if form.share_slug == slug:
                return form
        return None

    async def select(self, slug: str) -> AnalyticsSummary | None:
        """Select a form and load its analytics."""
        self.selected = self.find(slug)
        self.analytics = None
        try:
            self.analytics = await self.client.get_analytics(slug)
            self.message = ""
        except SmartFormError as e:
            self.message = f"Error: {e.message}"
        return self.analytics

    async def export_csv(self, slug: str) -> str | None:
        try:
            return await self.client.export_csv(slug)
        except SmartFormError as e:
            self.message = f"Error: {e.message}"
            return None

    def share_url(self, slug: str) -> str:
        return self.client.share_url(slug)

    def format_recent(self) -> list[str]:
        """Recent entries of the selected form as indented JSON."""
        if self.analytics is None:
            return []
        indent = get_config().indent_json_output
        return [json.dumps(record.data, indent=indent, default=str) for record in self.analytics.recent]

    def logout(self) -> None:
        """Forget the owner's token and everything loaded with it."""
        self.client.credentials.clear()
        self.forms = []
        self.selected = None
        self.analytics = None
        self.message = ""
        logger.info("Logged out")
