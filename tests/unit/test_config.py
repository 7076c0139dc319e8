"""Tests for client configuration."""
import aiohttp

from kalturapy.core.api.config import ClientConfig, ProxyConfig, SSLConfig, TimeoutConfig


class TestProxyConfig:
    """Test suite for ProxyConfig."""

    def test_no_proxy(self):
        """Test empty proxy."""
        assert ProxyConfig().to_aiohttp_proxy() is None

    def test_proxy_with_credentials(self):
        """Test credentials are embedded in the URL."""
        proxy = ProxyConfig(url='http://proxy:8080', username='u', password='p')

        assert proxy.to_aiohttp_proxy() == 'http://u:p@proxy:8080'


class TestClientConfig:
    """Test suite for ClientConfig."""

    def test_defaults(self):
        """Test default upload settings."""
        config = ClientConfig.default()

        assert config.endpoint_url == 'https://www.kaltura.com'
        assert config.chunk_file_size is None
        assert config.chunk_file_disabled is False
        assert config.parallel_uploads_disabled is False
        assert config.max_concurrent_upload_connections == 6
        assert config.nested_response is False

    def test_insecure(self):
        """Test SSL verification disabled."""
        config = ClientConfig.insecure()

        assert config.get_connector_kwargs()['ssl'] is False

    def test_with_proxy(self):
        """Test proxy helper."""
        assert ClientConfig.with_proxy('http://proxy:3128').proxy.url == 'http://proxy:3128'

    def test_session_kwargs(self):
        """Test headers and timeout for the HTTP session."""
        config = ClientConfig(extra_headers={'X-Test': '1'}, timeout=TimeoutConfig(total=30))
        kwargs = config.get_session_kwargs()

        assert kwargs['headers']['X-Test'] == '1'
        assert kwargs['headers']['User-Agent'] == 'kalturapy/1.0.0'
        assert isinstance(kwargs['timeout'], aiohttp.ClientTimeout)
        assert kwargs['timeout'].total == 30

    def test_ssl_context(self):
        """Test verifying context."""
        context = SSLConfig().create_ssl_context()

        assert context.check_hostname is True
