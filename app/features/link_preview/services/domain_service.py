import tldextract

from app.features.link_preview.schemas.link_preview import RootDomain
from app.platform.exceptions import DomainParseError, RootDomainNotFoundError, SldNotFoundError
from app.platform.utils.url_validator import extract_hostname

# Bundled public suffix snapshot only, no fetch at runtime. Private entries
# (github.io, blogspot.com, ...) count as suffixes.
_extractor = tldextract.TLDExtract(
    cache_dir=None,
    suffix_list_urls=(),
    include_psl_private_domains=True,
)


class DomainService:
    @staticmethod
    def get_root_domain(url: str) -> RootDomain:
        """Resolve the registrable domain and its second-level label for a URL."""
        try:
            hostname = extract_hostname(url)
            if not hostname:
                raise RootDomainNotFoundError()
            parts = _extractor(hostname)
        except RootDomainNotFoundError:
            raise
        except ValueError as e:
            raise DomainParseError(f"Domain could not be parsed: {str(e)}") from e

        # A bare public suffix has no registrable domain
        if not parts.suffix or not parts.domain:
            raise RootDomainNotFoundError()

        domain = f"{parts.domain}.{parts.suffix}"
        sld = domain[: -len(parts.suffix) - 1].split(".")[-1]
        if not sld:
            raise SldNotFoundError()

        return RootDomain(domain=domain, sld=sld)
