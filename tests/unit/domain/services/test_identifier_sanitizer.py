import pytest

from minibase.domain.exceptions import IdentifierError, InvalidIdentifierError
from minibase.domain.services.identifier_sanitizer import (
    IdentifierSanitizer,
    SafeIdentifier,
    sanitize,
)


class TestIdentifierSanitizer:

    def test_valid_names(self):
        for name in ["notes", "user_profiles", "data_2024", "MyCollection", "_private", "a"]:
            identifier = sanitize(name)
            assert isinstance(identifier, SafeIdentifier)
            assert identifier.value == name
            assert str(identifier) == name

    def test_empty_name(self):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            sanitize("")
        assert exc_info.value.code == "name_required"

    def test_non_string_name(self):
        with pytest.raises(InvalidIdentifierError):
            sanitize(None)  # type: ignore[arg-type]

    def test_name_too_long(self):
        assert sanitize("a" * 64).value == "a" * 64
        with pytest.raises(InvalidIdentifierError) as exc_info:
            sanitize("a" * 65)
        assert exc_info.value.code == "name_too_long"

    def test_custom_max_length(self):
        sanitizer = IdentifierSanitizer(max_length=5)
        assert sanitizer.sanitize("abcde").value == "abcde"
        with pytest.raises(InvalidIdentifierError):
            sanitizer.sanitize("abcdef")

    def test_leading_digit(self):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            sanitize("1notes")
        assert exc_info.value.code == "name_leading_digit"

    @pytest.mark.parametrize(
        "name",
        [
            "has-dash",
            "has space",
            "special$char",
            'quote"d',
            "notes; DROP TABLE users",
            "notes\n",
            "café",
            "x.y",
        ],
    )
    def test_invalid_characters(self, name):
        with pytest.raises(InvalidIdentifierError) as exc_info:
            sanitize(name)
        assert exc_info.value.code == "name_invalid_format"

    def test_identifier_error_alias(self):
        assert IdentifierError is InvalidIdentifierError
