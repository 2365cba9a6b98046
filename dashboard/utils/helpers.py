"""
Helper Utilities
Logging setup and common string helpers for the dashboard
"""

import os
import logging
from datetime import datetime
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_FILE_NAME = "dashboard.log"


def configure_logging(config) -> None:
    """Configure root logging once: stderr plus a file under config.log_dir"""
    if not os.path.exists(config.log_dir):
        os.makedirs(config.log_dir)

    level = logging.DEBUG if config.enable_debug else logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(os.path.join(config.log_dir, LOG_FILE_NAME)),
        ],
    )
    # httpx logs every request line at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


class StringUtils:
    """Utility functions for string operations"""

    @staticmethod
    def initials(name: Optional[str], limit: int = 2) -> str:
        """Upper-case initials of up to ``limit`` name parts, 'U' when the name is empty"""
        parts = (name or "").split()
        if not parts:
            return "U"
        return "".join(part[0] for part in parts[:limit]).upper()

    @staticmethod
    def mask_phone_number(phone: Optional[str]) -> str:
        """Mask phone number for display"""
        if not phone:
            return ""
        if len(phone) <= 4:
            return phone

        return phone[:2] + "*" * (len(phone) - 4) + phone[-2:]


class LoggingUtils:
    """Logging utility functions"""

    @staticmethod
    def log_security_event(event_type: str, email: str = None, details: Dict[str, Any] = None):
        """Log security events (login, logout); never pass tokens in details"""
        log_data = {
            'event_type': event_type,
            'email': email,
            'timestamp': datetime.now().isoformat(),
            'details': details or {}
        }

        logger.warning(f"Security Event: {event_type}", extra=log_data)
