"""
Tests for sealedenv.validator.
"""

import pytest

from sealedenv.exceptions import ValidationError
from sealedenv.loading import Repository
from sealedenv.validator import Validator
from tests.helpers import MemorySink


@pytest.fixture
def repository():
    return Repository(
        [MemorySink({"PORT": "3306", "DEBUG": "true", "BLANK": "  ", "MODE": "prod", "NAME": "app-1"})]
    )


class TestValidator:
    """Test assertions over loaded variables."""

    def test_required(self, repository):
        Validator(repository, ["PORT", "DEBUG"]).required()

    def test_required_missing(self, repository):
        with pytest.raises(ValidationError) as exc_info:
            Validator(repository, ["PORT", "MISSING", "OTHER"]).required()
        assert str(exc_info.value) == (
            "One or more environment variables failed assertions: "
            "MISSING is missing, OTHER is missing."
        )

    def test_not_empty(self, repository):
        with pytest.raises(ValidationError, match="BLANK is empty"):
            Validator(repository, ["PORT", "BLANK"]).not_empty()

    def test_is_integer(self, repository):
        Validator(repository, ["PORT"]).is_integer()
        with pytest.raises(ValidationError, match="MODE is not an integer"):
            Validator(repository, ["MODE"]).is_integer()

    def test_is_boolean(self, repository):
        Validator(repository, ["DEBUG"]).is_boolean()
        with pytest.raises(ValidationError, match="MODE is not a boolean"):
            Validator(repository, ["MODE"]).is_boolean()

    def test_allowed_values(self, repository):
        Validator(repository, ["MODE"]).allowed_values(["prod", "dev"])
        with pytest.raises(ValidationError, match=r"MODE is not one of \[dev, test\]"):
            Validator(repository, ["MODE"]).allowed_values(["dev", "test"])

    def test_allowed_regex(self, repository):
        Validator(repository, ["NAME"]).allowed_regex(r"[a-z]+-\d")
        with pytest.raises(ValidationError, match="does not match"):
            Validator(repository, ["NAME"]).allowed_regex(r"\d+")

    def test_chaining(self, repository):
        validator = Validator(repository, ["PORT"])
        assert validator.required().not_empty().is_integer() is validator

    def test_missing_fails_value_assertions(self, repository):
        with pytest.raises(ValidationError, match="MISSING is missing"):
            Validator(repository, ["MISSING"]).is_integer()

    def test_nullable_skips_missing(self, repository):
        Validator(repository, ["MISSING", "PORT"], nullable=True).is_integer().not_empty()
