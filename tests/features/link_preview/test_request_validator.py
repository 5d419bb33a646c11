import base64

import pytest

from app.features.link_preview.services.request_validator import RequestValidator
from app.platform.exceptions import InvalidInputError, InvalidUrlError, MethodNotAllowedError


def b64(value: str) -> str:
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


class TestDecodeTargetUrl:
    def test_decodes_base64_then_percent_encoding(self):
        raw = b64("https%3A%2F%2Fexample.com%2Farticle%3Fid%3D1")
        assert RequestValidator.decode_target_url(raw) == "https://example.com/article?id=1"

    def test_accepts_unencoded_url_inside_base64(self):
        assert RequestValidator.decode_target_url(b64("https://example.com")) == "https://example.com"

    def test_tolerates_missing_padding(self):
        raw = b64("https://example.com/a").rstrip("=")
        assert RequestValidator.decode_target_url(raw) == "https://example.com/a"

    def test_accepts_urlsafe_alphabet(self):
        url = "https://example.com/?qq=???"
        raw = base64.urlsafe_b64encode(url.encode("utf-8")).decode("ascii")
        assert raw.endswith("Pz8_")
        assert RequestValidator.decode_target_url(raw) == url

    def test_undecodable_value_becomes_empty(self):
        assert RequestValidator.decode_target_url("////") == ""


class TestValidate:
    def test_returns_target_url(self):
        raw = b64("https%3A%2F%2Fexample.com%2Farticle")
        assert RequestValidator.validate([raw], "GET") == "https://example.com/article"

    def test_method_is_case_insensitive(self):
        assert RequestValidator.validate([b64("http://example.com")], "get") == "http://example.com"

    @pytest.mark.parametrize("values", [[], [""], ["a", "b"]])
    def test_requires_exactly_one_value(self, values):
        with pytest.raises(InvalidInputError) as excinfo:
            RequestValidator.validate(values, "GET")
        assert excinfo.value.status_code == 400
        assert excinfo.value.message == "Only one url can be checked"

    @pytest.mark.parametrize(
        "decoded",
        [
            "not a url",
            "ftp://example.com/file",
            "javascript:alert(1)",
            "https://",
            "example.com",
            "https://exa mple.com",
        ],
    )
    def test_rejects_invalid_web_urls(self, decoded):
        with pytest.raises(InvalidUrlError) as excinfo:
            RequestValidator.validate([b64(decoded)], "GET")
        assert excinfo.value.status_code == 400
        assert excinfo.value.message == "Invalid web url"

    def test_non_get_is_rejected_before_url_validation(self):
        with pytest.raises(MethodNotAllowedError) as excinfo:
            RequestValidator.validate([b64("definitely not a url")], "POST")
        assert excinfo.value.status_code == 404
        assert excinfo.value.message == "Method POST not allowed"
