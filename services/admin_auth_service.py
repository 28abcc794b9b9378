"""
Admin Auth Service
"""

import hmac
import logging
import secrets
from typing import Optional

logger = logging.getLogger(__name__)


class AdminAuthService:
    """
    Checks admin credentials against configured values. Without a configured
    password no login can succeed.
    """

    def __init__(self, username: str, password: Optional[str]):
        self.username = username
        self.password = password
        if not password:
            logger.warning("ADMIN_PASSWORD is not set; admin login is disabled")

    def login(self, username: str, password: str) -> Optional[str]:
        """
        Returns:
            A fresh token when the credentials match, otherwise None
        """
        if not self.password:
            return None

        user_ok = hmac.compare_digest(username.encode("utf-8"), self.username.encode("utf-8"))
        password_ok = hmac.compare_digest(password.encode("utf-8"), self.password.encode("utf-8"))
        if not (user_ok and password_ok):
            logger.warning("Failed admin login for user %r", username)
            return None

        return "admin-token-" + secrets.token_urlsafe(24)
