"""
Mixpanel HTTP Client

A small Python client for the Mixpanel track and engage HTTP endpoints.
"""

from .config import ClientConfig, DEFAULT_BASE_URL
from .events import (
    TrackEvent, ProfileOperation, ProfileSet, ProfileSetOnce, ProfileAdd,
    ProfileAppend, ProfileUnion, ProfileUnset, ProfileDelete
)
from .exceptions import MixpanelError, UnexpectedTrackResponse, UnexpectedEngageResponse
from .client import MixpanelClient

__version__ = "1.0.0"

__all__ = [
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "MixpanelClient",
    "MixpanelError",
    "UnexpectedTrackResponse",
    "UnexpectedEngageResponse",
    "TrackEvent",
    "ProfileOperation",
    "ProfileSet",
    "ProfileSetOnce",
    "ProfileAdd",
    "ProfileAppend",
    "ProfileUnion",
    "ProfileUnset",
    "ProfileDelete"
]
