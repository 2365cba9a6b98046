"""
Application Configuration
Reads dashboard settings from the environment
"""

import os
import logging
from typing import List
from urllib.parse import urlparse

from utils.exceptions import ConfigurationException

logger = logging.getLogger(__name__)

DEFAULT_API_BASE_URL = 'http://localhost:3000/api/v1'
REQUIRED_ENV_VARS = ['API_BASE_URL']


def _env_flag(name: str) -> bool:
    return os.getenv(name, '').strip().lower() == 'true'


class AppConfig:
    """Dashboard configuration management"""

    def __init__(self):
        self.api_base_url = os.getenv('API_BASE_URL', DEFAULT_API_BASE_URL).rstrip('/')
        self.app_name = os.getenv('APP_NAME', 'Credito Insight Dashboard')
        self.app_version = os.getenv('APP_VERSION', '1.0.0')
        self.app_env = os.getenv('APP_ENV', 'development')
        self.enable_debug = _env_flag('ENABLE_DEBUG')
        self.enable_analytics = _env_flag('ENABLE_ANALYTICS')
        self.log_dir = os.getenv('LOG_DIR', 'logs')

        if urlparse(self.api_base_url).scheme not in ('http', 'https'):
            raise ConfigurationException(
                f"API_BASE_URL must be an http(s) URL, got '{self.api_base_url}'", "INVALID_API_BASE_URL"
            )

    @property
    def is_development(self) -> bool:
        return self.app_env == 'development'

    @property
    def is_production(self) -> bool:
        return self.app_env == 'production'

    def validate_env(self) -> List[str]:
        """Return required variables missing from the environment, warning about each"""
        missing = [key for key in REQUIRED_ENV_VARS if not os.getenv(key)]
        for key in missing:
            logger.warning(f"Missing environment variable: {key}")
        if missing:
            logger.warning("Set the missing variables before deploying; falling back to defaults")
        return missing
