"""
Configuration Module

Handles application configuration from YAML files and environment variables.
"""

import os
import logging
import yaml
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class Config:
    """Application configuration manager."""

    def __init__(self, config_file: str = "config.yaml"):
        """
        Initialize configuration from YAML file with fallback to environment variables.

        Args:
            config_file: Path to config YAML file (default: config.yaml)
        """
        self.config_file = config_file
        self.config_data = {}

        # Try to find config.yaml in current directory or parent directory
        config_paths = [
            config_file,  # Current directory
            os.path.join(os.path.dirname(os.path.dirname(__file__)), config_file),  # Project root
            os.path.join("..", config_file),  # Parent directory (relative)
        ]

        config_found = None
        for path in config_paths:
            if os.path.exists(path):
                config_found = path
                break

        if config_found:
            try:
                with open(config_found, 'r') as f:
                    self.config_data = yaml.safe_load(f) or {}
                logger.info(f"✅ Loaded configuration from {config_found}")
                self.config_file = config_found
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"⚠️ Could not load config file: {e}, using environment variables")
        else:
            logger.debug(f"{config_file} not found in {', '.join(config_paths)}, using environment variables")

        # Load values (YAML first, then env vars as fallback)
        self.slack_bot_token = self._get_value(['slack', 'bot_token'], 'SLACK_BOT_TOKEN')
        self.slack_channel = self._get_value(['slack', 'channel'], 'SLACK_CHANNEL', '#istio-version-check')
        self.slack_enabled = self._get_value(['slack', 'enabled'], 'SLACK_ENABLED', 'true').lower() == 'true'
        self.output_dir = self._get_value(['kubernetes', 'output_dir'], 'VERSION_CHECK_OUTPUT_DIR', '/tmp/version-check-results')
        self.max_wait_time = int(self._get_value(['kubernetes', 'max_wait_time'], 'MAX_WAIT_TIME', '300'))
        self.snapshot_file = self._get_value(['kubernetes', 'snapshot_file'], 'SNAPSHOT_FILE')

        # App config
        self.debug = self._get_value(['app', 'debug'], 'DEBUG', 'false').lower() == 'true'
        self.test_mode = self._get_value(['app', 'test_mode'], 'TEST_MODE', 'false').lower() == 'true'
        self.log_level = self._get_value(['app', 'log_level'], 'LOG_LEVEL', 'INFO')

    def _get_value(self, yaml_path: list, env_var: str, default: str = None) -> str:
        """Get value from YAML config or environment variable with fallback."""
        value = self.config_data
        for key in yaml_path:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                value = None
                break

        if value is not None:
            # YAML booleans come back as True/False
            if isinstance(value, bool):
                return str(value).lower()
            return str(value)

        env_value = os.getenv(env_var)
        if env_value:
            return env_value

        return default

    def validate(self) -> bool:
        """
        Validate required configuration.

        Returns:
            True if configuration is valid, False otherwise
        """
        if self.slack_enabled and not self.slack_bot_token:
            return False
        return True

    def get_slack_token(self) -> Optional[str]:
        """Get Slack bot token."""
        return self.slack_bot_token

    def get_slack_channel(self) -> str:
        """Get Slack channel."""
        return self.slack_channel

    def is_slack_enabled(self) -> bool:
        """Check if Slack notifications are enabled."""
        return self.slack_enabled

    def get_output_dir(self) -> str:
        """Get output directory."""
        return self.output_dir

    def get_max_wait_time(self) -> int:
        """Get maximum wait time for scan output."""
        return self.max_wait_time

    def get_snapshot_file(self) -> Optional[str]:
        """Get the offline snapshot manifest file, if configured."""
        return self.snapshot_file

    def is_debug(self) -> bool:
        """Check if debug mode is enabled."""
        return self.debug

    def is_test_mode(self) -> bool:
        """Check if test mode is enabled."""
        return self.test_mode

    def to_dict(self) -> Dict[str, Any]:
        """Get configuration values, with the Slack token masked."""
        return {
            'slack_channel': self.slack_channel,
            'slack_enabled': self.slack_enabled,
            'slack_bot_token': '***' if self.slack_bot_token else None,
            'output_dir': self.output_dir,
            'max_wait_time': self.max_wait_time,
            'snapshot_file': self.snapshot_file,
            'debug': self.debug,
            'log_level': self.log_level
        }
