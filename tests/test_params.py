"""Tests for the extensible params codec."""

import json

import pytest
from prometheus_client import REGISTRY

from mcp_wire.protocol.codec import decode_params, encode_params
from mcp_wire.protocol.errors import DecodeError, ErrorCode
from mcp_wire.protocol.params import (
    META_KEY,
    NotificationParams,
    RequestParams,
    Result,
    merge_reserved_key,
    split_reserved_key,
)


def _sample(name: str) -> float:
    return REGISTRY.get_sample_value(name) or 0.0


class TestEncode:
    """Test flattening params onto the wire."""

    def test_empty_params_encode_to_empty_object(self):
        """Test empty params give {} and never null."""
        assert encode_params(NotificationParams()) == "{}"
        assert NotificationParams().to_wire() == {}

    def test_additional_fields_are_top_level(self):
        """Test caller fields become siblings of _meta."""
        params = NotificationParams(
            meta={"trace": "abc"},
            additional_fields={"level": "info", "data": [1, 2]}
        )

        wire = json.loads(encode_params(params))

        assert wire == {"_meta": {"trace": "abc"}, "level": "info", "data": [1, 2]}

    def test_meta_omitted_when_empty(self):
        """Test _meta is left out when there is no metadata."""
        params = NotificationParams(additional_fields={"x": 1})
        assert params.to_wire() == {"x": 1}

    def test_meta_wins_over_stale_additional_entry(self):
        """Test non-empty meta overrides a _meta caller field."""
        params = NotificationParams(
            meta={"fresh": 1},
            additional_fields={"_meta": {"stale": True}}
        )

        assert params.to_wire()[META_KEY] == {"fresh": 1}

    def test_stray_meta_kept_when_meta_empty(self):
        """Test a _meta caller field survives when meta is empty."""
        params = NotificationParams(additional_fields={"_meta": {"stale": True}})
        assert params.to_wire() == {"_meta": {"stale": True}}

    def test_null_values_are_preserved(self):
        """Test caller fields holding null are not dropped."""
        params = NotificationParams(additional_fields={"cursor": None})
        assert encode_params(params) == '{"cursor":null}'


class TestDecode:
    """Test splitting wire objects into params."""

    @pytest.mark.parametrize("raw", ["null", "{}", None, b"{}"])
    def test_null_and_empty_decode_to_empty_maps(self, raw):
        """Test null and {} both give initialised empty mappings."""
        params = decode_params(raw)

        assert params.meta == {}
        assert params.additional_fields == {}
        assert isinstance(params, NotificationParams)

    def test_meta_and_fields_are_split(self):
        """Test _meta entries go to meta and other keys to additional fields."""
        params = decode_params('{"_meta": {"a": 1}, "_meta_dup_test": 2, "x": "y"}')

        assert params.meta == {"a": 1}
        assert params.additional_fields == {"_meta_dup_test": 2, "x": "y"}

    @pytest.mark.parametrize("bad_meta", ['"not-an-object"', "[1, 2]", "3", "true", "null"])
    def test_malformed_meta_is_dropped(self, bad_meta):
        """Test a non-object _meta is discarded without raising."""
        params = decode_params('{"_meta": %s, "x": 1}' % bad_meta)

        assert params.meta == {}
        assert params.additional_fields == {"x": 1}

    def test_malformed_meta_is_counted(self):
        """Test dropped metadata shows up in metrics."""
        before = _sample("mcp_wire_malformed_meta_dropped_total")
        decode_params('{"_meta": "not-an-object"}')
        after = _sample("mcp_wire_malformed_meta_dropped_total")

        assert after == before + 1

    def test_invalid_json_raises(self):
        """Test text that is not JSON is a decode failure."""
        with pytest.raises(DecodeError) as exc_info:
            decode_params('{"x": ')

        assert exc_info.value.code == ErrorCode.PARSE_ERROR

    @pytest.mark.parametrize("raw", ["[1, 2]", '"text"', "42"])
    def test_non_object_raises(self, raw):
        """Test JSON that is not an object is rejected."""
        with pytest.raises(DecodeError) as exc_info:
            decode_params(raw)

        assert exc_info.value.code == ErrorCode.INVALID_PARAMS

    def test_decode_into_other_params_class(self):
        """Test decoding into a chosen params class."""
        params = decode_params('{"_meta": {"progressToken": 7}}', params_class=RequestParams)

        assert isinstance(params, RequestParams)
        assert params.progress_token == 7

    def test_update_accumulates_meta(self):
        """Test repeated decodes onto one value merge metadata."""
        params = NotificationParams(meta={"a": 1})

        params.update_from_wire({"_meta": {"b": 2}, "x": 1})
        params.update_from_wire({"_meta": {"a": 3}})

        assert params.meta == {"a": 3, "b": 2}
        assert params.additional_fields == {"x": 1}

    def test_update_with_empty_input_keeps_value(self):
        """Test null and {} leave an existing value untouched."""
        params = NotificationParams(meta={"a": 1}, additional_fields={"x": 1})

        params.update_from_wire(None)
        params.update_from_wire({})

        assert params.meta == {"a": 1}
        assert params.additional_fields == {"x": 1}


class TestRoundTrip:
    """Test decode(encode(p)) reproduces p."""

    @pytest.mark.parametrize("meta,fields", [
        ({}, {}),
        ({"a": 1}, {}),
        ({}, {"x": [1, {"y": None}]}),
        ({"progressToken": "t-1", "nested": {"k": [True, 1.5]}}, {"name": "n", "count": 3}),
    ])
    def test_round_trip(self, meta, fields):
        """Test well-formed params survive an encode/decode cycle."""
        params = NotificationParams(meta=meta, additional_fields=fields)

        decoded = decode_params(encode_params(params))

        assert decoded.meta == meta
        assert decoded.additional_fields == fields
        assert decoded == params

    def test_unknown_fields_survive(self):
        """Test fields this library does not know about are carried through."""
        raw = '{"futureField":{"deep":[1,2,3]},"_meta":{"x":"y"}}'

        wire = decode_params(raw).to_wire()

        assert wire == json.loads(raw)


class TestHelpers:
    """Test the shared split/merge helpers."""

    def test_split_returns_new_maps(self):
        """Test splitting without target mappings."""
        meta, fields = split_reserved_key({"_meta": {"a": 1}, "b": 2})

        assert meta == {"a": 1}
        assert fields == {"b": 2}

    def test_merge_does_not_mutate_inputs(self):
        """Test merging leaves its inputs alone."""
        meta = {"a": 1}
        fields = {"b": 2}

        wire = merge_reserved_key(meta, fields)
        wire["c"] = 3

        assert fields == {"b": 2}
        assert meta == {"a": 1}

    def test_merge_handles_none(self):
        """Test merging with missing mappings."""
        assert merge_reserved_key(None, None) == {}


class TestParamsClasses:
    """Test the params subclasses."""

    def test_progress_token(self):
        """Test the progress token lives in meta."""
        params = RequestParams()
        assert params.progress_token is None

        params.set_progress_token("abc")

        assert params.progress_token == "abc"
        assert params.to_wire() == {"_meta": {"progressToken": "abc"}}

    def test_result_shares_codec(self):
        """Test results split _meta the same way."""
        result = Result.from_wire({"_meta": {"a": 1}, "tools": []})

        assert result.meta == {"a": 1}
        assert result.additional_fields == {"tools": []}

    def test_is_empty(self):
        """Test emptiness follows the wire form."""
        assert NotificationParams().is_empty()
        assert not NotificationParams(meta={"a": 1}).is_empty()

    def test_unknown_constructor_fields_rejected(self):
        """Test wire-style keyword arguments are not accepted."""
        with pytest.raises(ValueError):
            NotificationParams(x=1)

    def test_from_wire_returns_subclass(self):
        """Test from_wire builds the class it is called on."""
        params = RequestParams.from_wire({"_meta": {"progressToken": 1}})

        assert type(params) is RequestParams
        assert params.progress_token == 1
