"""Identity resolution for authenticated staff."""

from typing import Protocol

from shift_report.domain.reports import Reporter


class IdentityProvider(Protocol):
    """Resolves an access token issued by the identity provider."""

    def resolve(self, access_token: str) -> Reporter | None:
        """Return the reporter for a valid token, or None."""
