"""
HTTP client for the Mixpanel track and engage endpoints.
"""

import base64
import json
import logging
import requests
from typing import Any, Dict, List, Mapping, Optional
from .config import ClientConfig, DEFAULT_BASE_URL
from .events import (
    TrackEvent, ProfileOperation, ProfileSet, ProfileSetOnce, ProfileAdd,
    ProfileAppend, ProfileUnion, ProfileUnset, ProfileDelete
)
from .exceptions import UnexpectedTrackResponse, UnexpectedEngageResponse

logger = logging.getLogger(__name__)

SUCCESS_RESPONSE = "1"
TRACK_PATH = "/track/"
ENGAGE_PATH = "/engage/"


class MixpanelClient:
    """Client for sending events and profile updates to Mixpanel.

    The configuration is immutable, but the underlying requests.Session is
    not documented as thread-safe. Use one client per thread, or pass each
    thread its own session.
    """

    def __init__(self, token: str, base_url: str = DEFAULT_BASE_URL,
                 override_ip: Optional[str] = None,
                 session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None):
        """
        Initialize the client.

        Args:
            token: Mixpanel project token
            base_url: API base URL
            override_ip: IP address sent as $ip on profile updates
            session: requests session to reuse, a new one is created if omitted
            timeout: Request timeout in seconds, None waits indefinitely
        """
        self._config = ClientConfig(
            token=token,
            base_url=base_url,
            override_ip=override_ip,
            timeout=timeout
        )
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: ClientConfig,
                    session: Optional[requests.Session] = None) -> "MixpanelClient":
        return cls(
            token=config.token,
            base_url=config.base_url,
            override_ip=config.override_ip,
            session=session,
            timeout=config.timeout
        )

    @classmethod
    def from_env(cls, session: Optional[requests.Session] = None) -> "MixpanelClient":
        """Create a client configured from MIXPANEL_* environment variables."""
        return cls.from_config(ClientConfig.from_env(), session=session)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def token(self) -> str:
        return self._config.token

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def override_ip(self) -> Optional[str]:
        return self._config.override_ip

    def track(self, event: str, properties: Optional[Mapping[str, Any]] = None) -> None:
        """
        Track an event.

        The project token is added to a copy of ``properties``; the mapping
        passed in is left untouched.

        Args:
            event: Event name
            properties: Event properties, any JSON serializable values

        Raises:
            UnexpectedTrackResponse: Mixpanel did not answer "1"
        """
        data = TrackEvent(event, properties).to_dict(self.token)

        logger.debug(f"Tracking event: {event}")
        response = self._get(TRACK_PATH, data)

        if response != SUCCESS_RESPONSE:
            logger.error(f"Unexpected track response for event {event}: {response!r}")
            raise UnexpectedTrackResponse(response)

        logger.info(f"Event tracked successfully: {event}")

    def alias(self, old_id: str, new_id: str) -> None:
        """Alias an existing distinct ID to a new one."""
        self.track("$create_alias", {"distinct_id": old_id, "alias": new_id})

    def profile_set(self, distinct_id: str, properties: Mapping[str, Any]) -> None:
        """Set properties on a profile, creating it if needed."""
        self.engage(distinct_id, ProfileSet(properties))

    def profile_set_once(self, distinct_id: str, properties: Mapping[str, Any]) -> None:
        """Set properties that are not already set on the profile."""
        self.engage(distinct_id, ProfileSetOnce(properties))

    def profile_add(self, distinct_id: str, properties: Mapping[str, int]) -> None:
        """Increment numeric properties. Use negative values to decrement."""
        self.engage(distinct_id, ProfileAdd(properties))

    def profile_append(self, distinct_id: str, properties: Mapping[str, Any]) -> None:
        self.engage(distinct_id, ProfileAppend(properties))

    def profile_union(self, distinct_id: str, properties: Mapping[str, Any]) -> None:
        self.engage(distinct_id, ProfileUnion(properties))

    def profile_unset(self, distinct_id: str, properties: List[str]) -> None:
        """Remove the named properties from the profile."""
        self.engage(distinct_id, ProfileUnset(properties))

    def profile_delete(self, distinct_id: str) -> None:
        """Delete the profile."""
        self.engage(distinct_id, ProfileDelete())

    def engage(self, distinct_id: str, operation: ProfileOperation) -> None:
        """
        Apply a profile operation.

        Args:
            distinct_id: Profile primary key
            operation: One of the ProfileOperation subclasses

        Raises:
            UnexpectedEngageResponse: Mixpanel did not answer "1"
        """
        data = operation.to_dict(self.token, distinct_id, self.override_ip)

        logger.debug(f"Engage {operation.key} for profile: {distinct_id}")
        response = self._get(ENGAGE_PATH, data)

        if response != SUCCESS_RESPONSE:
            logger.error(f"Unexpected engage response for {operation.key}: {response!r}")
            raise UnexpectedEngageResponse(response)

        logger.info(f"Profile updated successfully: {distinct_id} ({operation.key})")

    def _get(self, path: str, data: Dict[str, Any]) -> str:
        """Send the base64 encoded JSON envelope and return the response body."""
        # NaN and Infinity are not JSON; raise ValueError instead of sending them
        payload = json.dumps(data, allow_nan=False)
        encoded = base64.b64encode(payload.encode('utf-8')).decode('ascii')
        url = f"{self.base_url}{path}"

        response = self.session.get(
            url,
            params={'data': encoded},
            timeout=self._config.timeout
        )
        return response.text

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "MixpanelClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
