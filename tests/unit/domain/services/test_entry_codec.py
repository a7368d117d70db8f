import pytest

from minibase.domain.exceptions import CodecError, InternalError, ValidationError
from minibase.domain.services import entry_codec


@pytest.mark.parametrize(
    "value",
    [
        {"text": "hi"},
        {"nested": {"list": [1, 2.5, None, True, {"deep": []}]}},
        [1, "two", {"three": 3}],
        "plain string",
        42,
        None,
        {"greeting": "こんにちは", "emoji": "\U0001f600"},
    ],
)
def test_round_trip(value):
    assert entry_codec.decode(entry_codec.encode(value)) == value


def test_encode_keeps_unicode_unescaped():
    assert entry_codec.encode({"name": "café"}) == '{"name":"café"}'


def test_decode_bytes():
    assert entry_codec.decode(b'{"a": 1}') == {"a": 1}


def test_decode_invalid_json():
    with pytest.raises(CodecError):
        entry_codec.decode("{not json")


def test_decode_none_is_codec_error():
    with pytest.raises(CodecError):
        entry_codec.decode(None)  # type: ignore[arg-type]


def test_codec_error_is_internal():
    assert issubclass(CodecError, InternalError)


@pytest.mark.parametrize("value", [float("nan"), float("inf"), {"score": float("-inf")}])
def test_encode_rejects_non_finite_numbers(value):
    with pytest.raises(ValidationError):
        entry_codec.encode(value)
