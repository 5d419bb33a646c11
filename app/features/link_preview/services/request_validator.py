import base64
import binascii
from typing import Sequence
from urllib.parse import unquote

from app.platform.exceptions import InvalidInputError, InvalidUrlError, MethodNotAllowedError
from app.platform.utils.url_validator import validate_url


class RequestValidator:
    ALLOWED_METHODS = ("GET",)

    @staticmethod
    def decode_target_url(raw: str) -> str:
        """
        Base64-decode then percent-decode the raw path value.
        Returns an empty string when the value cannot be decoded.
        """
        value = raw.strip()
        padded = value + "=" * (-len(value) % 4)
        try:
            if "-" in value or "_" in value:
                decoded = base64.urlsafe_b64decode(padded)
            else:
                decoded = base64.b64decode(padded)
            return unquote(decoded.decode("utf-8"))
        except (binascii.Error, ValueError):
            return ""

    @staticmethod
    def validate(values: Sequence[str], method: str) -> str:
        """
        Turn the raw `url` values of a request into a TargetUrl.

        Raises InvalidInputError unless exactly one value is given,
        MethodNotAllowedError for anything but GET (checked before the decoded
        URL is validated) and InvalidUrlError when the decoded value is not a
        well-formed http/https URL.
        """
        if len(values) != 1 or not values[0]:
            raise InvalidInputError()

        target_url = RequestValidator.decode_target_url(values[0])

        if method.upper() not in RequestValidator.ALLOWED_METHODS:
            raise MethodNotAllowedError(method.upper())

        is_valid, _ = validate_url(target_url)
        if not is_valid:
            raise InvalidUrlError()

        return target_url
