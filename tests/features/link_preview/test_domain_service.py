import pytest

from app.features.link_preview.services.domain_service import DomainService
from app.platform.exceptions import RootDomainNotFoundError


class TestDomainService:
    @pytest.mark.parametrize(
        "url, domain, sld",
        [
            ("https://example.com/article", "example.com", "example"),
            ("https://www.example.com", "example.com", "example"),
            ("http://blog.news.example.co.uk/post?id=1", "example.co.uk", "example"),
            ("https://WWW.Example.com:8443/", "example.com", "example"),
            ("https://alice.github.io/post", "alice.github.io", "alice"),
            ("https://myblog.blogspot.com/2024/01/entry.html", "myblog.blogspot.com", "myblog"),
            ("https://my-app.herokuapp.com/", "my-app.herokuapp.com", "my-app"),
        ],
    )
    def test_resolves_registrable_domain_and_label(self, url, domain, sld):
        root_domain = DomainService.get_root_domain(url)
        assert root_domain.domain == domain
        assert root_domain.sld == sld

    @pytest.mark.parametrize(
        "url",
        [
            "http://localhost:8000/",
            "http://127.0.0.1/page",
            "http://intranet/",
            "https://co.uk/",
            "https://github.io/",
        ],
    )
    def test_hosts_without_registrable_domain_fail(self, url):
        with pytest.raises(RootDomainNotFoundError) as excinfo:
            DomainService.get_root_domain(url)
        assert excinfo.value.message == "Root domain not found"
