from typing import Optional, Tuple
from urllib.parse import quote, urlparse

from pydantic import HttpUrl, TypeAdapter, ValidationError

# Characters encodeURI leaves untouched besides alphanumerics and "-_.~"
URI_SAFE_CHARS = ";,/?:@&=+$!*'()#"

_http_url_adapter = TypeAdapter(HttpUrl)


def normalize_url(url: str) -> str:
    """Escape characters a request path may not carry, keeping existing escapes."""
    return quote(url.strip(), safe=URI_SAFE_CHARS + "%")


def validate_url(url: str) -> Tuple[bool, str]:
    if not url or not url.strip():
        return False, "URL cannot be empty"

    try:
        parsed = urlparse(url)

        if parsed.scheme not in ['http', 'https']:
            return False, f"Invalid URL scheme: {parsed.scheme} (must be http or https)"

        if not parsed.hostname:
            return False, "Invalid URL format: missing domain"

        _http_url_adapter.validate_python(url)
        return True, ""

    except (ValueError, ValidationError) as e:
        return False, f"URL parsing error: {str(e)}"


def extract_hostname(url: str) -> Optional[str]:
    return urlparse(url).hostname
