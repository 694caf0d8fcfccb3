"""Test YAML configuration loading."""

import pytest

from sunx_perps.config import (
    DEFAULT_BASE_URL,
    SunxCredentials,
    get_config,
    load_config,
    parse_config,
    reset_config,
    substitute_env_vars,
)
from sunx_perps.exchanges.structs.enums import ApiVersion
from sunx_perps.infrastructure.exceptions import ConfigurationError


CONFIG_YAML = """
environment:
  name: test
sunx:
  access_key_id: ${TEST_SUNX_KEY}
  secret_key: ${TEST_SUNX_SECRET}
  base_url: ${TEST_SUNX_URL:https://api.sunx.io}
network:
  request_timeout: 15
  connect_timeout: 3
signing:
  diagnostics: true
dispatcher:
  continue_on_fail: true
"""


@pytest.fixture
def sunx_env(monkeypatch):
    monkeypatch.setenv('TEST_SUNX_KEY', 'ak-from-env-1234')
    monkeypatch.setenv('TEST_SUNX_SECRET', 'sk-from-env')
    monkeypatch.delenv('TEST_SUNX_URL', raising=False)


@pytest.fixture
def write_config(tmp_path):
    def factory(content):
        path = tmp_path / 'config.yaml'
        path.write_text(content, encoding='utf-8')
        return path
    return factory


@pytest.fixture
def no_env_file(tmp_path):
    return tmp_path / 'missing.env'


class TestSubstituteEnvVars:
    """Test ${VAR} placeholders."""

    def test_set_variable(self, monkeypatch):
        monkeypatch.setenv('SUNX_TEST_VALUE', 'abc')
        assert substitute_env_vars('key: ${SUNX_TEST_VALUE}') == 'key: abc'

    def test_default_used_when_unset(self, monkeypatch):
        monkeypatch.delenv('SUNX_TEST_VALUE', raising=False)
        assert substitute_env_vars('${SUNX_TEST_VALUE:https://x.io:8443}') == 'https://x.io:8443'

    def test_empty_default(self, monkeypatch):
        monkeypatch.delenv('SUNX_TEST_VALUE', raising=False)
        assert substitute_env_vars('[${SUNX_TEST_VALUE:}]') == '[]'

    def test_missing_required_becomes_empty(self, monkeypatch):
        monkeypatch.delenv('SUNX_TEST_VALUE', raising=False)
        assert substitute_env_vars('[${SUNX_TEST_VALUE}]') == '[]'

    def test_env_overrides_default(self, monkeypatch):
        monkeypatch.setenv('SUNX_TEST_VALUE', 'set')
        assert substitute_env_vars('${SUNX_TEST_VALUE:default}') == 'set'


class TestLoadConfig:
    """Test loading config.yaml into structs."""

    def test_full_config(self, sunx_env, write_config, no_env_file):
        config = load_config(write_config(CONFIG_YAML), no_env_file)

        assert config.environment == 'test'
        assert config.credentials.access_key_id == 'ak-from-env-1234'
        assert config.credentials.secret_key == 'sk-from-env'
        assert config.credentials.base_url == DEFAULT_BASE_URL
        assert config.network.request_timeout == 15.0
        assert config.network.connect_timeout == 3.0
        assert config.signing.diagnostics is True
        assert config.dispatcher.continue_on_fail is True
        assert config.api_version is ApiVersion.SAPI_V1

    def test_defaults(self, write_config, no_env_file):
        config = load_config(write_config("sunx:\n  access_key_id: ''\n  secret_key: ''\n"), no_env_file)

        assert not config.credentials.has_private_api
        assert config.network.request_timeout == 10.0
        assert config.signing.diagnostics is False
        assert config.dispatcher.continue_on_fail is False
        assert config.logging is None

    def test_env_file_loaded(self, tmp_path, write_config, monkeypatch):
        monkeypatch.delenv('TEST_SUNX_KEY', raising=False)
        monkeypatch.delenv('TEST_SUNX_SECRET', raising=False)
        env_file = tmp_path / '.env'
        env_file.write_text('TEST_SUNX_KEY=ak-dotenv-5678\nTEST_SUNX_SECRET=sk-dotenv\n', encoding='utf-8')

        config = load_config(write_config(CONFIG_YAML), env_file)

        assert config.credentials.access_key_id == 'ak-dotenv-5678'
        monkeypatch.delenv('TEST_SUNX_KEY', raising=False)
        monkeypatch.delenv('TEST_SUNX_SECRET', raising=False)

    def test_missing_file(self, tmp_path, no_env_file):
        with pytest.raises(ConfigurationError, match='No valid config.yaml'):
            load_config(tmp_path / 'nope.yaml', no_env_file)

    def test_invalid_yaml(self, write_config, no_env_file):
        with pytest.raises(ConfigurationError, match='Failed to load'):
            load_config(write_config("sunx: [unclosed"), no_env_file)

    def test_missing_sunx_section(self, write_config, no_env_file):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(write_config("network:\n  request_timeout: 5\n"), no_env_file)
        assert exc_info.value.setting_name == 'sunx'

    def test_half_configured_credentials(self, write_config, no_env_file):
        with pytest.raises(ConfigurationError, match='together'):
            load_config(write_config("sunx:\n  access_key_id: abc\n"), no_env_file)

    def test_invalid_timeout(self, write_config, no_env_file):
        content = "sunx: {}\nnetwork:\n  request_timeout: 0\n"
        with pytest.raises(ConfigurationError, match='request_timeout'):
            load_config(write_config(content), no_env_file)

    def test_wrong_type(self, write_config, no_env_file):
        content = "sunx: {}\nnetwork:\n  request_timeout: fast\n"
        with pytest.raises(ConfigurationError, match='Invalid configuration'):
            load_config(write_config(content), no_env_file)

    def test_unknown_api_version_rejected(self):
        with pytest.raises(ConfigurationError, match='Invalid configuration'):
            parse_config({'sunx': {'api_version': 'sapi_v9'}})

    def test_relative_base_url_rejected(self):
        with pytest.raises(ConfigurationError, match='base_url'):
            parse_config({'sunx': {'base_url': 'api.sunx.io'}})

    def test_cached_config(self, monkeypatch, sunx_env, write_config, no_env_file):
        path = write_config(CONFIG_YAML)
        monkeypatch.setattr('sunx_perps.config.config_manager.default_config_paths', lambda: [path])
        reset_config()
        try:
            assert get_config() is get_config()
        finally:
            reset_config()


class TestCredentials:
    """Test credential handling."""

    def test_repr_masks_secret(self):
        credentials = SunxCredentials('ak-0123456789', 'sk-super-secret')
        text = repr(credentials)
        assert 'sk-super-secret' not in text
        assert 'ak-0...6789' in text

    def test_preview_for_short_key(self):
        assert SunxCredentials('short', 'x').get_preview() == '***'
        assert SunxCredentials('', '').get_preview() == 'Not configured'
