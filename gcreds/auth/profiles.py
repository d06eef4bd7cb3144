"""Typed Google profiles and their decoding from provider responses.

A profile shape is a pydantic model deriving from ``TokenProfile``.
Required fields must be present in the provider's JSON; fields declared
optional are populated only when the subject granted access to them.
"""

# pylint: disable=logging-too-many-args

from __future__ import annotations

import json
import logging

from collections.abc import Mapping
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from ..exceptions import DecodeError
from ..log import redact_sensitive_data
from ..types import UserProfile, UserProfileEmail, UserProfileName, UserProfilePhoto


logger = logging.getLogger("gcreds.auth")

GOOGLE = "Google"


class TokenProfile(BaseModel):
    """Base class for profile shapes authenticated with a Google token.

    Subclasses add the fields they want from Google. Declare a field as
    ``T | None = None`` when the subject may decline to share it; a
    required field that Google omits makes decoding fail.

    Example::

        class ExampleProfile(TokenProfile):
            email: str | None = None

    Attributes
    ----------
    id : str
        The subject's unique Google identifier.
    name : str
        The subject's display name.
    """

    model_config = ConfigDict(strict=True, frozen=True, extra="ignore")

    provider: ClassVar[str] = GOOGLE

    # Maximum number of profiles cached for this shape (0 = unlimited).
    cache_size: ClassVar[int] = 0

    id: str
    name: str


class GoogleTokenProfile(TokenProfile):
    """Pre-built profile with the default fields Google can return.

    Every field except ``id`` and ``name`` is optional and is only set
    if the subject grants access to it.
    """

    family_name: str | None = None
    given_name: str | None = None
    picture: str | None = None
    locale: str | None = None
    gender: str | None = None
    email: str | None = None
    # Only present if ``email`` has been granted.
    verified_email: bool | None = None


ProfileT = TypeVar("ProfileT", bound=TokenProfile)


def decode_profile(
    profile_type: type[ProfileT],
    payload: bytes | str | Mapping[str, Any],
) -> ProfileT:
    """Decode a Google userinfo response into ``profile_type``.

    Parameters
    ----------
    profile_type : type[TokenProfile]
        The profile shape to produce.
    payload : bytes, str or Mapping
        The raw JSON body, or an already parsed JSON object. Mappings
        are re-serialized so both forms are validated in JSON mode.

    Returns
    -------
    TokenProfile
        A populated instance of ``profile_type``.

    Raises
    ------
    DecodeError
        If the payload is not JSON, lacks a required field, or has a
        field whose JSON type does not match the declared type.
    """
    if isinstance(payload, Mapping):
        try:
            payload = json.dumps(dict(payload))
        except (TypeError, ValueError) as exc:
            msg = f"Payload for {profile_type.__name__} is not JSON serializable"
            raise DecodeError(msg, provider=GOOGLE) from exc
    try:
        return profile_type.model_validate_json(payload)
    except ValidationError as exc:
        logger.error(
            "Failed to decode %s from Google response: %d error(s)",
            profile_type.__name__,
            exc.error_count(),
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Google response data: %s", _describe_payload(payload))
        msg = f"Google response cannot be decoded to {profile_type.__name__}"
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        raise DecodeError(msg, provider=GOOGLE, fields=fields) from exc


def _describe_payload(payload: bytes | str) -> Any:
    """Best-effort redacted rendering of a payload for debug logs."""
    try:
        data = json.loads(payload)
    except ValueError:
        return "<non-JSON body>"
    if isinstance(data, dict):
        return redact_sensitive_data(data)
    return data


def create_user_profile(data: Mapping[str, Any], provider: str = GOOGLE) -> UserProfile:
    """Build a generic ``UserProfile`` from OpenID Connect userinfo data.

    ``sub`` and ``name`` are required. ``email`` yields one e-mail entry,
    ``family_name`` together with ``given_name`` yield a structured name,
    and ``picture`` yields one photo.

    Raises
    ------
    DecodeError
        If ``sub`` or ``name`` is missing or not a string.
    """
    subject = data.get("sub")
    display_name = data.get("name")
    if not isinstance(subject, str) or not isinstance(display_name, str):
        msg = "Userinfo response lacks 'sub' or 'name'"
        raise DecodeError(msg, provider=provider)

    emails = None
    email = data.get("email")
    if isinstance(email, str):
        emails = [UserProfileEmail(value=email, type="")]

    name = None
    family_name = data.get("family_name")
    given_name = data.get("given_name")
    if isinstance(family_name, str) and isinstance(given_name, str):
        middle_name = data.get("middle_name")
        name = UserProfileName(
            family_name=family_name,
            given_name=given_name,
            middle_name=middle_name if isinstance(middle_name, str) else "",
        )

    photos = None
    picture = data.get("picture")
    if isinstance(picture, str):
        photos = [UserProfilePhoto(value=picture)]

    return UserProfile(
        id=subject,
        display_name=display_name,
        provider=provider,
        name=name,
        emails=emails,
        photos=photos,
    )
