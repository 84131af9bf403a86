"""Tests for the final backplane API connection check."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from backplane_config.connection import check_connection
from backplane_config.errors import ConnectionCheckError, InvalidURLError
from backplane_config.models import ResolvedConfiguration


class TestCheckConnectionLocal:
    """Connection checks against local servers."""

    def test_reachable_url_without_proxy(self, http_server):
        server = http_server(200)

        assert check_connection(ResolvedConfiguration(service_url=server.url)) is None
        assert server.requests == [("HEAD", "/")]

    def test_any_status_counts_as_reachable(self, http_server):
        server = http_server(500)
        check_connection(ResolvedConfiguration(service_url=server.url))
        assert len(server.requests) == 1

    def test_unreachable_url_raises(self, unused_url):
        with pytest.raises(ConnectionCheckError) as exc_info:
            check_connection(ResolvedConfiguration(service_url=unused_url), timeout=1.0)

        assert exc_info.value.url == unused_url
        assert exc_info.value.code == "connection_failed"
        assert isinstance(exc_info.value.__cause__, httpx.RequestError)

    def test_request_is_routed_through_proxy(self, http_server):
        proxy = http_server(200)
        config = ResolvedConfiguration(service_url="http://backplane.invalid", proxy_url=proxy.url)

        check_connection(config)

        assert proxy.requests == [("HEAD", "http://backplane.invalid/")]

    def test_unreachable_proxy_raises(self, unused_url):
        config = ResolvedConfiguration(service_url="http://backplane.invalid", proxy_url=unused_url)
        with pytest.raises(ConnectionCheckError):
            check_connection(config, timeout=1.0)


class TestCheckConnectionMocked:
    """Client construction details."""

    def test_client_is_call_scoped(self):
        """The proxy is passed to a fresh client; environment proxies are ignored."""
        with patch("httpx.Client") as mock_client:
            mock_instance = MagicMock()
            mock_instance.__enter__.return_value = mock_instance
            mock_instance.head.return_value = MagicMock(status_code=404)
            mock_client.return_value = mock_instance

            config = ResolvedConfiguration(service_url="https://api.example", proxy_url="http://proxy:3128")
            check_connection(config, timeout=5.0)

        mock_client.assert_called_once_with(proxy="http://proxy:3128", timeout=5.0, trust_env=False)
        mock_instance.head.assert_called_once_with("https://api.example")
        mock_instance.__exit__.assert_called_once()

    def test_environment_proxy_is_not_used_for_direct_connection(self, monkeypatch, http_server, unused_url):
        """Proxy variables in the environment do not reroute a direct check."""
        server = http_server(200)
        monkeypatch.setenv("HTTP_PROXY", unused_url)
        monkeypatch.setenv("ALL_PROXY", unused_url)

        check_connection(ResolvedConfiguration(service_url=server.url))

        assert len(server.requests) == 1

    def test_failure_message_is_sanitized(self, caplog):
        with patch("httpx.Client") as mock_client:
            mock_instance = MagicMock()
            mock_instance.__enter__.return_value = mock_instance
            mock_instance.head.side_effect = httpx.ConnectError("refused")
            mock_client.return_value = mock_instance

            with pytest.raises(ConnectionCheckError) as exc_info:
                check_connection(ResolvedConfiguration(service_url="https://api.example/a\u2028b"))

        assert "\u2028" not in str(exc_info.value)
        assert "https://api.example/ab" in str(exc_info.value)
        assert not any("\u2028" in r.getMessage() for r in caplog.records)


class TestCheckConnectionInvalidURL:
    """Malformed URLs are fatal before any request is made."""

    @pytest.mark.parametrize("url", ["", "api.backplane.example", "ftp://api.example"])
    def test_malformed_service_url(self, url):
        with patch("httpx.Client") as mock_client:
            with pytest.raises(InvalidURLError):
                check_connection(ResolvedConfiguration(service_url=url))
        mock_client.assert_not_called()

    def test_malformed_proxy_url(self):
        config = ResolvedConfiguration(service_url="https://api.example", proxy_url="not a url")
        with pytest.raises(InvalidURLError, match="invalid proxy URL"):
            check_connection(config)
