import os
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from ccbridge.config.paths import get_app_dir
from ccbridge.config.yaml import safe_load_with_env

UPSTREAM_MODEL_ENV = 'CCBRIDGE_UPSTREAM_MODEL'


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default='INFO', description='Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)')
    console_enabled: bool = Field(default=True, description='Enable console logging')
    file_enabled: bool = Field(default=False, description='Enable file logging')
    log_file_dir: Optional[str] = Field(default=None, description='Log directory (defaults to ~/.ccbridge/logs)')
    max_file_size: str = Field(default='10MB', description='Maximum log file size before rotation')
    backup_count: int = Field(default=4, ge=0, description='Number of backup files to keep')


class ProxyConfig(BaseModel):
    """Mapper configuration, validated once when loaded."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='ignore')

    upstream_model_override: Optional[str] = Field(
        default=None,
        alias='upstreamModelOverride',
        description='Model name sent upstream regardless of the requested model',
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description='Logging configuration')

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> 'ProxyConfig':
        """Load configuration from YAML file.

        Tries multiple locations in order:
        1. Explicit config_path if provided
        2. ~/.ccbridge/config.yaml in user home directory
        3. ./config.yaml in current directory
        """
        config_paths = []
        if config_path:
            config_paths.append(config_path)
        else:
            home_config = get_app_dir() / 'config.yaml'
            if home_config.exists():
                config_paths.append(str(home_config))
            config_paths.append('config.yaml')

        # Later files override earlier ones
        data = {}
        for path in config_paths:
            try:
                with open(path, 'r') as f:
                    file_data = safe_load_with_env(f) or {}
            except FileNotFoundError:
                continue
            except yaml.YAMLError as e:
                raise ValueError(f'Invalid YAML in config file {path}: {e}') from e
            except Exception as e:
                raise ValueError(f'Error reading config file {path}: {e}') from e
            if not isinstance(file_data, dict):
                raise ValueError(f'Config file {path} must contain a mapping, got {type(file_data).__name__}')
            data.update(file_data)

        if 'upstream_model_override' not in data and 'upstreamModelOverride' not in data:
            if env_model := os.getenv(UPSTREAM_MODEL_ENV):
                data['upstream_model_override'] = env_model

        return cls.model_validate(data)
