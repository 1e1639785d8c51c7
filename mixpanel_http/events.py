"""
Envelope models for the Mixpanel track and engage endpoints.
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Optional


class TrackEvent:
    """An event sent to the /track/ endpoint."""

    def __init__(self, name: str, properties: Optional[Mapping[str, Any]] = None):
        if not name:
            raise ValueError("event name is required")
        self.name = name
        # Snapshot; the caller's mapping is never mutated
        self.properties = dict(properties or {})

    def to_dict(self, token: str) -> Dict[str, Any]:
        """Build the track envelope with the project token injected."""
        properties = dict(self.properties)
        properties['token'] = token
        return {
            'event': self.name,
            'properties': properties
        }


class ProfileOperation:
    """Base class for a single engage operation.

    Each subclass binds one operation key to the value shape it accepts.
    """

    key: str = ""

    def __init__(self, value: Any):
        if not self.key:
            raise TypeError(f"{type(self).__name__} has no operation key, use a concrete operation")
        self.value = self.validate(value)

    def validate(self, value: Any) -> Any:
        return value

    def to_dict(self, token: str, distinct_id: str,
                ip: Optional[str] = None) -> Dict[str, Any]:
        """Build the engage envelope for this operation."""
        data = {
            '$token': token,
            '$distinct_id': distinct_id
        }
        if ip:
            data['$ip'] = ip
        data[self.key] = self.value
        return data


class _PropertiesOperation(ProfileOperation):
    """Operation whose value is a mapping of property name to value."""

    def validate(self, value: Any) -> Dict[str, Any]:
        if not isinstance(value, Mapping):
            raise TypeError(f"{self.key} expects a mapping of properties")
        for name in value:
            if not isinstance(name, str):
                raise TypeError(f"{self.key} property names must be strings")
        return dict(value)


class ProfileSet(_PropertiesOperation):
    key = "$set"


class ProfileSetOnce(_PropertiesOperation):
    key = "$set_once"


class ProfileAdd(_PropertiesOperation):
    """Increment numeric properties; negative amounts decrement."""

    key = "$add"

    def validate(self, value: Any) -> Dict[str, int]:
        value = super().validate(value)
        for name, amount in value.items():
            # bool is an int subclass but Mixpanel rejects it for $add
            if isinstance(amount, bool) or not isinstance(amount, int):
                raise TypeError(f"$add amount for '{name}' must be an integer")
        return value


class ProfileAppend(_PropertiesOperation):
    key = "$append"


class ProfileUnion(_PropertiesOperation):
    key = "$union"


class ProfileUnset(ProfileOperation):
    """Remove the named properties from a profile."""

    key = "$unset"

    def validate(self, value: Any) -> List[str]:
        if isinstance(value, (str, bytes)) or isinstance(value, Mapping):
            raise TypeError("$unset expects a list of property names")
        names = list(value)
        for name in names:
            if not isinstance(name, str):
                raise TypeError("$unset property names must be strings")
        return names


class ProfileDelete(ProfileOperation):
    """Delete the whole profile. Mixpanel expects an empty string value."""

    key = "$delete"

    def __init__(self):
        super().__init__("")
