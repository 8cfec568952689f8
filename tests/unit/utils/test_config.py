"""Unit tests for configuration utilities in config.py

Test coverage includes:

1. Environment variable resolution
   - Ensures app_env(), app_name(), app_prefix() correctly read environment variables.

2. Project root resolution
   - Ensures project_root() correctly reads PROJECT_ROOT from environment variables.

3. Configuration loading behavior
   - Ensures load_config() returns the lambda's section of the AppConfig document.
   - Ensures missing AppConfig identifiers raise MissingEnvironmentVariableError.
   - Ensures malformed documents raise BadConfigurationError.
   - Ensures AppConfig API failures propagate as ClientError.

4. Redis configuration
   - Ensures redis_config() builds DAO keyword arguments.
"""

import os
import json
from io import BytesIO
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import botocore

from shortlinker.utils import config
from shortlinker.exceptions import BadConfigurationError, MissingEnvironmentVariableError


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    """Set up environment variables for testing."""
    monkeypatch.setenv('APPCONFIG_APP_ID', 'app123')
    monkeypatch.setenv('APPCONFIG_ENV_ID', 'env123')
    monkeypatch.setenv('APPCONFIG_PROFILE_ID', 'prof123')
    monkeypatch.setenv('APP_ENV', 'test')
    monkeypatch.delenv('APPCONFIG_AGENT_URL', raising=False)


@pytest.fixture
def appconfig_payload():
    """Provide a default AppConfig payload used by multiple tests."""
    # fmt: off
    return {
        'build': 42,
        'active_backend': 'redis',
        'configs': {
            'test_lambda': {
                'redis': {
                    'host': 'monkey',
                    'port': 6380,
                    'db': 3
                }
            }
        },
    }
    # fmt: on


@pytest.fixture
def mock_appconfig(monkeypatch, appconfig_payload):
    """Mock the AppConfig Data client returned by boto3.client()."""
    client = MagicMock()
    client.start_configuration_session.return_value = {'InitialConfigurationToken': 'monkey_token'}
    client.get_latest_configuration.return_value = {'Configuration': BytesIO(json.dumps(appconfig_payload).encode('utf-8'))}
    monkeypatch.setattr(config.boto3, 'client', lambda service: client)
    return client


# -------------------------------
# 1. Environment variable resolution
# -------------------------------


def test_app_env(monkeypatch):
    """Ensure app_env() returns the correct environment value from APP_ENV"""
    monkeypatch.setitem(os.environ, 'APP_ENV', 'Prod')
    assert config.app_env() == 'prod'


def test_app_env_default(monkeypatch):
    monkeypatch.delitem(os.environ, 'APP_ENV', raising=False)
    assert config.app_env() == 'local'


def test_app_name(monkeypatch):
    """Ensure app_name() returns the correct environment value from APP_NAME"""
    monkeypatch.setitem(os.environ, 'APP_NAME', 'test-app')
    assert config.app_name() == 'test-app'


def test_app_prefix(monkeypatch):
    monkeypatch.setitem(os.environ, 'APP_NAME', 'test-app')
    monkeypatch.setitem(os.environ, 'APP_ENV', 'test')
    assert config.app_prefix() == 'test-app:test'


def test_app_prefix_without_app_name(monkeypatch):
    """Ensure keys are left unprefixed when APP_NAME is not set"""
    monkeypatch.delitem(os.environ, 'APP_NAME', raising=False)
    assert config.app_prefix() is None


# -------------------------------
# 2. Project root resolution
# -------------------------------


def test_project_root(monkeypatch):
    monkeypatch.setitem(os.environ, 'PROJECT_ROOT', '/monkey/path')
    assert config.project_root() == Path('/monkey/path')


# -------------------------------
# 3. Configuration loading behavior
# -------------------------------


def test_load_config(mock_appconfig):
    """Ensure load_config() returns the active backend section of the requested lambda."""
    result = config.load_config('test_lambda')

    assert result == {'redis': {'host': 'monkey', 'port': 6380, 'db': 3}}
    mock_appconfig.start_configuration_session.assert_called_once_with(
        ApplicationIdentifier='app123',
        EnvironmentIdentifier='env123',
        ConfigurationProfileIdentifier='prof123',
    )
    mock_appconfig.get_latest_configuration.assert_called_once_with(ConfigurationToken='monkey_token')


def test_load_config_with_missing_environment(monkeypatch, mock_appconfig):
    monkeypatch.delenv('APPCONFIG_PROFILE_ID')

    with pytest.raises(MissingEnvironmentVariableError, match='APPCONFIG_PROFILE_ID'):
        config.load_config('test_lambda')

    mock_appconfig.start_configuration_session.assert_not_called()


def test_load_config_with_unknown_lambda(mock_appconfig):
    with pytest.raises(BadConfigurationError, match='unknown_lambda'):
        config.load_config('unknown_lambda')


def test_load_config_with_unsupported_backend(monkeypatch, mock_appconfig, appconfig_payload):
    appconfig_payload['active_backend'] = 'memcached'
    appconfig_payload['configs']['test_lambda']['memcached'] = {'host': 'monkey'}
    mock_appconfig.get_latest_configuration.return_value = {'Configuration': BytesIO(json.dumps(appconfig_payload).encode('utf-8'))}

    with pytest.raises(BadConfigurationError, match="Unsupported backend 'memcached'"):
        config.load_config('test_lambda')


def test_load_config_with_invalid_json(mock_appconfig):
    mock_appconfig.get_latest_configuration.return_value = {'Configuration': BytesIO(b'{not json')}

    with pytest.raises(BadConfigurationError, match='not valid JSON'):
        config.load_config('test_lambda')


def test_load_config_propagates_client_error(mock_appconfig):
    """Ensure load_config() propagates ClientError when AppConfig returns an error."""
    mock_appconfig.start_configuration_session.side_effect = botocore.exceptions.ClientError(
        {'Error': {'Code': 'ResourceNotFoundException'}}, 'StartConfigurationSession'
    )

    with pytest.raises(botocore.exceptions.ClientError):
        config.load_config('test_lambda')


# -------------------------------
# 4. Redis configuration
# -------------------------------


def test_redis_config():
    app_config = {'redis': {'host': 'redis.internal', 'port': 6379, 'db': 0, 'password': 'secret'}}

    assert config.redis_config(app_config) == {
        'redis_host': 'redis.internal',
        'redis_port': 6379,
        'redis_db': 0,
        'redis_password': 'secret',
    }


@pytest.mark.parametrize('app_config', [{}, {'redis': None}])
def test_redis_config_without_redis_section(app_config):
    with pytest.raises(BadConfigurationError):
        config.redis_config(app_config)
