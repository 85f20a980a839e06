"""Failure types shared by the provider adapters and the search session.

Cancellation is not listed here: ``asyncio.CancelledError`` is always
re-raised so a superseded search is never mistaken for an empty one.
"""


class MissingCredentialError(Exception):
    """No API key is configured for a provider."""

    def __init__(self, provider: str):
        super().__init__(f"{provider} API key not configured")
        self.provider = provider


class ProviderRequestError(Exception):
    """A provider call timed out, failed or returned an unreadable body."""


class LocationPermissionDenied(Exception):
    """The client refused to share its device location."""
