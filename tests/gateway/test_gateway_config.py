"""GatewayConfig 环境变量加载测试"""

import pytest
from bitcrush.core.config import DEFAULT_MAX_CONCURRENT_TRANSFORMS, DEFAULT_MAX_UPLOAD_BYTES
from bitcrush.gateway.config import load_gateway_config

_ENV_VARS = (
    "BITCRUSH_HOST",
    "BITCRUSH_PORT",
    "BITCRUSH_MAX_UPLOAD_BYTES",
    "BITCRUSH_MAX_CONCURRENT_TRANSFORMS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestLoadGatewayConfig:
    """load_gateway_config() 测试"""

    def test_defaults(self):
        config = load_gateway_config()
        assert config.host == "0.0.0.0"
        assert config.port == 3000
        assert config.max_upload_bytes == DEFAULT_MAX_UPLOAD_BYTES
        assert config.max_concurrent_transforms == DEFAULT_MAX_CONCURRENT_TRANSFORMS

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("BITCRUSH_HOST", "127.0.0.1")
        monkeypatch.setenv("BITCRUSH_PORT", "8080")
        monkeypatch.setenv("BITCRUSH_MAX_UPLOAD_BYTES", "1024")
        monkeypatch.setenv("BITCRUSH_MAX_CONCURRENT_TRANSFORMS", "2")

        config = load_gateway_config()
        assert config.host == "127.0.0.1"
        assert config.port == 8080
        assert config.max_upload_bytes == 1024
        assert config.max_concurrent_transforms == 2

    @pytest.mark.parametrize("value", ["abc", "0", "-5", ""])
    def test_invalid_value_falls_back(self, monkeypatch, value):
        monkeypatch.setenv("BITCRUSH_MAX_CONCURRENT_TRANSFORMS", value)
        config = load_gateway_config()
        assert config.max_concurrent_transforms == DEFAULT_MAX_CONCURRENT_TRANSFORMS

    def test_port_out_of_range_falls_back(self, monkeypatch):
        monkeypatch.setenv("BITCRUSH_PORT", "70000")
        assert load_gateway_config().port == 3000
