"""
Errors raised when Mixpanel answers with something other than the success marker.
"""

from typing import Optional


class MixpanelError(Exception):
    """Base class for Mixpanel domain errors."""

    message = "Unexpected Mixpanel response"

    def __init__(self, response_body: Optional[str] = None):
        self.response_body = response_body
        super().__init__(f"{self.message}: {response_body!r}")


class UnexpectedTrackResponse(MixpanelError):
    """Raised when a track call does not return "1"."""

    message = "Unexpected Mixpanel Track Response"


class UnexpectedEngageResponse(MixpanelError):
    """Raised when a profile (engage) call does not return "1"."""

    message = "Unexpected Mixpanel Engage Response"
