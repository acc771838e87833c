"""Unit tests for ProfileValidator."""

import pytest

from letters.domain.error import ValidationError
from letters.domain.service import ProfileValidator
from tests.factories import VALID_PROFILE


def _fields(**overrides):
    fields = dict(VALID_PROFILE)
    fields.update(overrides)
    return {k: v for k, v in fields.items() if v is not None}


class TestProfileValidator:
    """Tests for confirmation field validation."""

    def test_valid_fields_are_trimmed(self):
        """Should trim text fields and keep the password as typed."""
        # Act
        profile = ProfileValidator().validate(
            _fields(first_name="  Ada ", password=" Analytical1 ")
        )

        # Assert
        assert profile.first_name == "Ada"
        assert profile.password == " Analytical1 "

    def test_blank_phone_becomes_none(self):
        """Should treat a blank phone number as not given."""
        # Act
        profile = ProfileValidator().validate(_fields(mobile_phone="   "))

        # Assert
        assert profile.mobile_phone is None

    def test_missing_fields_all_reported(self):
        """Should report every missing required field at once."""
        # Act
        with pytest.raises(ValidationError) as exc_info:
            ProfileValidator().validate({"password": "Analytical1"})

        # Assert
        fields = {error["field"] for error in exc_info.value.errors}
        assert fields == {
            "first_name",
            "last_name",
            "title",
            "organization",
            "relationship_duration",
            "relationship_type",
        }

    @pytest.mark.parametrize(
        "password,message",
        [
            ("Short1", "at least 8"),
            ("alllowercase1", "uppercase"),
            ("ALLUPPERCASE1", "lowercase"),
            ("NoDigitsHere", "digit"),
            ("Aa1" + "x" * 130, "at most 128"),
        ],
    )
    def test_weak_password_rejected(self, password, message):
        """Should enforce the password policy."""
        # Act
        with pytest.raises(ValidationError) as exc_info:
            ProfileValidator().validate(_fields(password=password))

        # Assert
        (error,) = exc_info.value.errors
        assert error["field"] == "password"
        assert message in error["message"]

    def test_name_with_digits_rejected(self):
        """Should only accept letters, spaces, apostrophes and hyphens in names."""
        # Act
        with pytest.raises(ValidationError) as exc_info:
            ProfileValidator().validate(_fields(last_name="L0velace"))

        # Assert
        assert exc_info.value.errors[0]["field"] == "last_name"

    def test_hyphenated_name_accepted(self):
        """Should accept names like O'Brien-Smith."""
        # Act
        profile = ProfileValidator().validate(_fields(last_name="O'Brien-Smith"))

        # Assert
        assert profile.last_name == "O'Brien-Smith"

    def test_invalid_phone_rejected(self):
        """Should reject a phone number with letters in it."""
        # Act
        with pytest.raises(ValidationError) as exc_info:
            ProfileValidator().validate(_fields(mobile_phone="call me maybe"))

        # Assert
        assert exc_info.value.errors == [
            {"field": "mobile_phone", "message": "Invalid phone number format"}
        ]
