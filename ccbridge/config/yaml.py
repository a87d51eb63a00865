"""YAML helpers with !env support for configuration files."""

from __future__ import annotations

import os
from typing import Any

import yaml


class _EnvLoader(yaml.SafeLoader):
    """SafeLoader that resolves !env tags."""


def _env_var_name(node: yaml.Node, value: Any) -> str:
    if not isinstance(value, str):
        raise yaml.constructor.ConstructorError(
            None,
            None,
            f'Environment variable name must be a string, got {type(value).__name__}',
            node.start_mark,
        )
    return value


def _env_constructor(loader: _EnvLoader, node: yaml.Node) -> Any:
    if isinstance(node, yaml.ScalarNode):
        var_name = _env_var_name(node, loader.construct_scalar(node))
        value = os.getenv(var_name)
        if value is None:
            raise ValueError(f"Required environment variable '{var_name}' is not set")
        return value

    if isinstance(node, yaml.SequenceNode):
        values = loader.construct_sequence(node)
        if len(values) != 2:
            raise yaml.constructor.ConstructorError(
                None,
                None,
                f'!env sequence must have exactly 2 elements [var_name, default], got {len(values)}',
                node.start_mark,
            )
        var_name, default_value = values
        return os.getenv(_env_var_name(node, var_name), default_value)

    raise yaml.constructor.ConstructorError(
        None,
        None,
        f'!env tag expects scalar (var_name) or sequence ([var_name, default]), got {type(node).__name__}',
        node.start_mark,
    )


_EnvLoader.add_constructor('!env', _env_constructor)


def safe_load_with_env(stream) -> Any:
    """yaml.safe_load() with !env tag support."""

    return yaml.load(stream, Loader=_EnvLoader)


__all__ = ['safe_load_with_env']
