"""
GitHub user profile normalization.

Maps the GitHub user and emails API payloads onto a provider-neutral
profile shape. Every upstream field is treated as optional.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .errors import ProfileParseError

PROVIDER = "github"


@dataclass
class EmailEntry:
    """A single email address with optional GitHub flags."""
    value: str
    primary: Optional[bool] = None
    verified: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"value": self.value}
        if self.primary is not None:
            data["primary"] = self.primary
        if self.verified is not None:
            data["verified"] = self.verified
        return data


@dataclass
class ProfileName:
    family_name: str = ""
    given_name: str = ""


@dataclass
class NormalizedProfile:
    """Canonical user profile handed to the verification callback."""
    id: Any
    username: Optional[str]
    display_name: str
    name: ProfileName
    emails: List[EmailEntry]
    raw: str
    json: Dict[str, Any]
    photos: List[Any] = field(default_factory=list)
    provider: str = PROVIDER

    def to_dict(self) -> Dict[str, Any]:
        """Render the profile as plain JSON-compatible data."""
        return {
            "provider": self.provider,
            "id": self.id,
            "username": self.username,
            "display_name": self.display_name,
            "name": {
                "family_name": self.name.family_name,
                "given_name": self.name.given_name,
            },
            "emails": [email.to_dict() for email in self.emails],
            "photos": list(self.photos),
        }


def split_name(display_name: str) -> ProfileName:
    """Split a display name into given and family parts on the first space."""
    if not display_name:
        return ProfileName()
    given_name, _, family_name = display_name.partition(" ")
    return ProfileName(family_name=family_name, given_name=given_name)


def _string_field(data: Dict[str, Any], key: str) -> Optional[str]:
    # Values of the wrong type count as absent
    value = data.get(key)
    return value if isinstance(value, str) else None


def _bool_field(data: Dict[str, Any], key: str) -> Optional[bool]:
    value = data.get(key)
    return value if isinstance(value, bool) else None


def load_json(body: Any) -> Any:
    """Decode a response body, raising ValueError on malformed input."""
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    return json.loads(body)


def parse_profile(body: str) -> NormalizedProfile:
    """
    Build a profile from the GitHub ``/user`` response body.

    Args:
        body: Raw response body

    Returns:
        NormalizedProfile with one email entry (empty if GitHub hides it)

    Raises:
        ProfileParseError: If the body is not a JSON object
    """
    try:
        data = load_json(body)
    except ValueError as e:
        raise ProfileParseError(f"Failed to parse user profile: {e}") from e

    if not isinstance(data, dict):
        raise ProfileParseError(
            f"Failed to parse user profile: expected an object, got {type(data).__name__}"
        )

    display_name = _string_field(data, "name") or ""

    return NormalizedProfile(
        id=data.get("id"),
        username=_string_field(data, "login"),
        display_name=display_name,
        name=split_name(display_name),
        emails=[EmailEntry(value=_string_field(data, "email") or "")],
        raw=body,
        json=data,
    )


def merge_emails(existing: List[EmailEntry], records: List[Any]) -> List[EmailEntry]:
    """
    Merge records from the GitHub ``/user/emails`` endpoint into a profile's emails.

    Entries whose address is already present get their flags updated, new
    addresses are appended in the order GitHub returned them.

    Args:
        existing: Emails already on the profile
        records: Parsed list of ``{"email", "primary", "verified"}`` objects

    Returns:
        New list of email entries
    """
    merged = [EmailEntry(e.value, e.primary, e.verified) for e in existing]
    by_value = {entry.value: entry for entry in merged}

    for record in records:
        if not isinstance(record, dict):
            continue
        value = _string_field(record, "email")
        if not value:
            continue

        primary = _bool_field(record, "primary")
        verified = _bool_field(record, "verified")

        entry = by_value.get(value)
        if entry is not None:
            entry.primary = primary
            entry.verified = verified
        else:
            entry = EmailEntry(value=value, primary=primary, verified=verified)
            merged.append(entry)
            by_value[value] = entry

    return merged
