"""Supabase Auth identity adapter."""

import logging
from dataclasses import dataclass

from supabase import Client

from shift_report.domain.reports import Reporter
from shift_report.services.identity import IdentityProvider

logger = logging.getLogger(__name__)


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Resolves Supabase access tokens into reporters."""

    client: Client

    def resolve(self, access_token: str) -> Reporter | None:
        """Look up the user behind an access token."""
        try:
            response = self.client.auth.get_user(access_token)
        except Exception:
            logger.warning("Rejected access token", exc_info=True)
            return None
        user = response.user if response else None
        if user is None:
            return None
        metadata = user.user_metadata or {}
        name = metadata.get("full_name") or metadata.get("name") or "Unknown"
        return Reporter(uid=str(user.id), name=str(name), email=user.email)
