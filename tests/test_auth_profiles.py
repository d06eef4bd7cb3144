"""Unit tests for profile shapes and decoding of Google responses."""

from __future__ import annotations

import json

from datetime import datetime
from uuid import UUID

import pytest

from gcreds.auth.profiles import (
    GoogleTokenProfile,
    TokenProfile,
    create_user_profile,
    decode_profile,
)
from gcreds.exceptions import DecodeError
from gcreds.types import UserProfileEmail, UserProfileName, UserProfilePhoto

from tests.constants import GOOGLE_RESPONSE, GOOGLE_RESPONSE_2, ExampleProfile


# ── decode_profile ──────────────────────────────────────────────────


class TestDecodeProfile:
    """Tests for decode_profile()."""

    def test_default_token_profile(self) -> None:
        """GoogleTokenProfile maps every field of the userinfo response."""
        profile = decode_profile(GoogleTokenProfile, GOOGLE_RESPONSE)
        expected = GoogleTokenProfile(
            id="123456789012345678901",
            name="John Doe",
            family_name="Doe",
            given_name="John",
            picture="https://lh4.googleusercontent.com/-abc123/abc123/abc123/abc123/photo.jpg",
            locale="en",
            gender=None,
            email="john_doe@invalid.com",
            verified_email=True,
        )
        assert profile == expected
        assert profile.gender is None
        assert profile.provider == "Google"

    def test_minimal_token_profile(self) -> None:
        """A consumer shape takes only the fields it declares."""
        profile = decode_profile(ExampleProfile, GOOGLE_RESPONSE)
        assert profile == ExampleProfile(
            id="123456789012345678901",
            name="John Doe",
            email="john_doe@invalid.com",
        )
        assert profile.favourite_artist is None
        assert profile.favourite_number is None

    def test_optional_field_absent(self) -> None:
        """Optional fields missing from the response are None."""
        profile = decode_profile(ExampleProfile, GOOGLE_RESPONSE_2)
        assert profile.name == "Jane Doe"
        assert profile.email is None

    def test_accepts_str_and_mapping(self) -> None:
        """Payload may be text or an already parsed object."""
        from_text = decode_profile(GoogleTokenProfile, GOOGLE_RESPONSE.decode())
        from_dict = decode_profile(GoogleTokenProfile, json.loads(GOOGLE_RESPONSE))
        assert from_text == from_dict

    def test_mapping_uses_json_rules(self) -> None:
        """Fields parsed from JSON strings decode the same from a mapping."""

        class DatedProfile(TokenProfile):
            updated: datetime
            session: UUID

        data = {
            "id": "1",
            "name": "John Doe",
            "updated": "2024-01-02T03:04:05Z",
            "session": "12345678-1234-5678-1234-567812345678",
        }
        from_dict = decode_profile(DatedProfile, data)
        from_text = decode_profile(DatedProfile, json.dumps(data))
        assert from_dict == from_text
        assert from_dict.updated.year == 2024
        assert from_dict.session == UUID("12345678-1234-5678-1234-567812345678")

    def test_mapping_not_serializable(self) -> None:
        """A mapping holding non-JSON values fails decoding."""
        with pytest.raises(DecodeError):
            decode_profile(GoogleTokenProfile, {"id": "1", "name": object()})

    @pytest.mark.parametrize("missing", ["id", "name"])
    def test_missing_required_field(self, missing: str) -> None:
        """A missing required field fails decoding."""
        data = json.loads(GOOGLE_RESPONSE)
        del data[missing]
        with pytest.raises(DecodeError) as exc_info:
            decode_profile(GoogleTokenProfile, json.dumps(data))
        assert missing in exc_info.value.context["fields"]

    def test_consumer_required_field_not_granted(self) -> None:
        """A shape requiring a field Google did not return fails."""

        class StrictEmailProfile(TokenProfile):
            email: str

        with pytest.raises(DecodeError):
            decode_profile(StrictEmailProfile, GOOGLE_RESPONSE_2)

    def test_type_mismatch(self) -> None:
        """A string where a boolean is declared fails decoding."""
        data = json.loads(GOOGLE_RESPONSE)
        data["verified_email"] = "true"
        with pytest.raises(DecodeError):
            decode_profile(GoogleTokenProfile, json.dumps(data))

    def test_numeric_id_rejected(self) -> None:
        """Ids are not coerced from JSON numbers."""
        with pytest.raises(DecodeError):
            decode_profile(GoogleTokenProfile, b'{"id": 123, "name": "John Doe"}')

    def test_not_json(self) -> None:
        """A non-JSON body fails decoding."""
        with pytest.raises(DecodeError):
            decode_profile(GoogleTokenProfile, b"<html>Service Unavailable</html>")

    def test_json_array(self) -> None:
        """A JSON array is not a profile."""
        with pytest.raises(DecodeError):
            decode_profile(GoogleTokenProfile, b"[]")

    def test_profile_is_frozen(self) -> None:
        """Decoded profiles cannot be mutated."""
        profile = decode_profile(GoogleTokenProfile, GOOGLE_RESPONSE)
        with pytest.raises(ValueError):
            profile.name = "Someone Else"  # type: ignore[misc]


# ── create_user_profile ─────────────────────────────────────────────


class TestCreateUserProfile:
    """Tests for create_user_profile()."""

    def test_full_userinfo(self) -> None:
        """All granted attributes are carried over."""
        profile = create_user_profile(
            {
                "sub": "42",
                "name": "John Doe",
                "family_name": "Doe",
                "given_name": "John",
                "email": "john_doe@invalid.com",
                "picture": "https://example.com/photo.jpg",
            }
        )
        assert profile.id == "42"
        assert profile.display_name == "John Doe"
        assert profile.provider == "Google"
        assert profile.name == UserProfileName(family_name="Doe", given_name="John", middle_name="")
        assert profile.emails == [UserProfileEmail(value="john_doe@invalid.com", type="")]
        assert profile.photos == [UserProfilePhoto(value="https://example.com/photo.jpg")]

    def test_minimal_userinfo(self) -> None:
        """Only sub and name are needed."""
        profile = create_user_profile({"sub": "42", "name": "John Doe"})
        assert profile.name is None
        assert profile.emails is None
        assert profile.photos is None

    def test_partial_name_is_dropped(self) -> None:
        """A structured name needs both family and given names."""
        profile = create_user_profile({"sub": "42", "name": "John", "given_name": "John"})
        assert profile.name is None

    def test_middle_name(self) -> None:
        """middle_name is used when present."""
        profile = create_user_profile(
            {"sub": "1", "name": "A B C", "family_name": "C", "given_name": "A", "middle_name": "B"}
        )
        assert profile.name is not None
        assert profile.name.middle_name == "B"

    @pytest.mark.parametrize(
        "data",
        [
            {"name": "John Doe"},
            {"sub": "42"},
            {"sub": 42, "name": "John Doe"},
        ],
    )
    def test_missing_sub_or_name(self, data: dict) -> None:
        """sub and name are required strings."""
        with pytest.raises(DecodeError):
            create_user_profile(data)
