"""Tests for services.validation."""

import pytest

from models.post import PostRequest
from models.profile import EducationRequest, ProfileRequest
from services.validation import (
    is_url,
    validate_education_input,
    validate_post_input,
    validate_profile_input,
)


class TestPostInput:
    @pytest.mark.parametrize("text", [None, "", "    "])
    def test_missing_text(self, text) -> None:
        errors, is_valid = validate_post_input(PostRequest(text=text))
        assert not is_valid
        assert errors == {"text": "Text field is required"}

    @pytest.mark.parametrize("text", ["x" * 9, "x" * 301])
    def test_length_bounds(self, text) -> None:
        errors, is_valid = validate_post_input(PostRequest(text=text))
        assert not is_valid
        assert errors["text"] == "Post must be between 10 and 300 characters"

    @pytest.mark.parametrize("text", ["x" * 10, "x" * 300])
    def test_accepted(self, text) -> None:
        assert validate_post_input(PostRequest(text=text)) == ({}, True)


class TestProfileInput:
    def test_valid(self) -> None:
        data = ProfileRequest(handle="bob", status="Student", skills="go", website="bob.dev")
        assert validate_profile_input(data) == ({}, True)

    def test_long_handle(self) -> None:
        errors, _ = validate_profile_input(ProfileRequest(handle="h" * 41, status="s", skills="k"))
        assert set(errors) == {"handle"}


class TestEducationInput:
    def test_from_alias(self) -> None:
        data = EducationRequest.model_validate(
            {"school": "S", "degree": "D", "fieldofstudy": "F", "from": "2019-01-01"}
        )
        assert validate_education_input(data) == ({}, True)

    def test_all_missing(self) -> None:
        errors, is_valid = validate_education_input(EducationRequest())
        assert not is_valid
        assert set(errors) == {"school", "degree", "fieldofstudy", "from"}


@pytest.mark.parametrize(
    "value, expected",
    [("https://example.com", True), ("example.com/me", True), ("not a url", False), ("localhost", False)],
)
def test_is_url(value, expected) -> None:
    assert is_url(value) is expected


@pytest.mark.parametrize("handle", ["a/b", "__ann__", "ann smith", "."])
def test_handle_must_be_a_plain_identifier(handle) -> None:
    errors, is_valid = validate_profile_input(ProfileRequest(handle=handle, status="s", skills="k"))
    assert not is_valid
    assert set(errors) == {"handle"}
