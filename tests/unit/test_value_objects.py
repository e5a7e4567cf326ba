"""Unit tests for value objects."""

import pytest
from pydantic import ValidationError

from hls_ingest.domain.exceptions import InvalidAssetIdException
from hls_ingest.domain.value_objects import AssetId


class TestAssetId:
    """Tests for AssetId value object."""

    @pytest.mark.parametrize(
        "value",
        [
            "3f1c0b7e-9a4d-4c55-8a55-8f3e4c2b1d10",
            "asset_1",
            "A",
            "a" * 128,
        ],
    )
    def test_valid_ids(self, value):
        assert AssetId(value=value).value == value

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "../etc",
            "a/b",
            "a\\b",
            ".hidden",
            "-leading-dash",
            "has space",
            "abc\n",
            "abc\r\n",
            "a" * 129,
        ],
    )
    def test_invalid_ids(self, value):
        with pytest.raises(ValidationError):
            AssetId(value=value)

    def test_generate_is_unique_and_valid(self):
        first = AssetId.generate()
        second = AssetId.generate()
        assert first != second
        assert AssetId.parse(first.value) == first

    def test_parse_raises_domain_exception(self):
        with pytest.raises(InvalidAssetIdException) as exc_info:
            AssetId.parse("../../etc/passwd")
        assert exc_info.value.value == "../../etc/passwd"

    def test_str(self):
        assert str(AssetId(value="abc")) == "abc"

    def test_immutable(self):
        asset_id = AssetId(value="abc")
        with pytest.raises(ValidationError):
            asset_id.value = "def"  # type: ignore[misc]

    def test_hashable(self):
        assert len({AssetId(value="abc"), AssetId(value="abc")}) == 1

    def test_parse_rejects_trailing_newline(self):
        with pytest.raises(InvalidAssetIdException):
            AssetId.parse("abc\n")
