"""Tests for YAML loading with environment variable support."""

import os
from unittest.mock import patch

import pytest
import yaml

from ccbridge.config.yaml import safe_load_with_env


@pytest.mark.parametrize("scenario,yaml_content,env_vars,expected_result", [
    ("required env var present",
     "api_key: !env TEST_API_KEY",
     {'TEST_API_KEY': 'secret-key-123'},
     {'api_key': 'secret-key-123'}),
    ("optional env var present",
     "port: !env [TEST_PORT, 8000]",
     {'TEST_PORT': '9000'},
     {'port': '9000'}),
    ("optional env var missing with defaults",
     "port: !env [MISSING_PORT, 8000]\ntimeout: !env [MISSING_TIMEOUT, null]",
     {},
     {'port': 8000, 'timeout': None}),
    ("plain yaml",
     "nested:\n  values: [1, 2]",
     {},
     {'nested': {'values': [1, 2]}}),
])
def test_env_var_scenarios(scenario, yaml_content, env_vars, expected_result):
    with patch.dict(os.environ, env_vars, clear=True):
        assert safe_load_with_env(yaml_content) == expected_result


def test_required_env_var_missing():
    with patch.dict(os.environ, {}, clear=True):
        with pytest.raises(ValueError, match="Required environment variable 'MISSING_API_KEY' is not set"):
            safe_load_with_env('api_key: !env MISSING_API_KEY')


@pytest.mark.parametrize("yaml_content", [
    "value: !env [ONLY_ONE]",
    "value: !env {a: b}",
])
def test_malformed_env_tag(yaml_content):
    with pytest.raises(yaml.constructor.ConstructorError):
        safe_load_with_env(yaml_content)


def test_plain_safe_load_untouched():
    """The !env tag is only registered on the config loader."""
    with pytest.raises(yaml.constructor.ConstructorError):
        yaml.safe_load('value: !env HOME')
