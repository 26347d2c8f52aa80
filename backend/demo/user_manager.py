"""
In-memory user store and cookie session for the demo app.

The session cookie holds a signed JWT carrying the user id. Anything that
cannot be turned back into a known user (missing cookie, bad signature,
expired token, unknown id) is a 401.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

import jwt
from flask import Request
from werkzeug.security import check_password_hash, generate_password_hash

from binding.endpoints import error_result
from config import Config


logger = logging.getLogger('demo.users')

UNAUTHORIZED = 401


@dataclass(frozen=True)
class User:
    id: int
    username: str
    password_hash: str

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)


def _seed_users() -> Dict[int, User]:
    return {
        1: User(1, "michael", generate_password_hash("swordfish")),
        3: User(3, "mary", generate_password_hash("catfish")),
    }


class UserManager:
    def __init__(
        self,
        secret: str = Config.JWT_SECRET,
        algorithm: str = Config.JWT_ALGORITHM,
        expiration_hours: int = Config.JWT_EXPIRATION_HOURS,
        cookie_name: str = Config.SESSION_COOKIE_NAME,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expiration_hours = expiration_hours
        self.cookie_name = cookie_name
        self.users = _seed_users()

    def generate_token(self, user_id: int) -> str:
        """Signed session token for a user id."""
        now = datetime.now(timezone.utc)
        payload = {
            'user_id': user_id,
            'exp': now + timedelta(hours=self.expiration_hours),
            'iat': now,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Optional[int]:
        """User id from a session token, or None if it is not valid."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            return None
        except jwt.InvalidTokenError:
            return None
        return payload.get('user_id')

    def get_user(self, request: Request) -> User:
        """
        Logged-in user for this request.

        Raises:
            Error: 401 when the session cookie is absent or not valid
        """
        token = request.cookies.get(self.cookie_name)
        user_id = self.verify_token(token) if token else None
        user = self.users.get(user_id) if user_id is not None else None
        if user is None:
            raise error_result(UNAUTHORIZED)
        return user

    def login(self, username: str, password: str) -> Optional[Dict[str, str]]:
        """Session cookies for valid credentials, None otherwise."""
        for user in self.users.values():
            if user.username == username and user.check_password(password):
                logger.info(f"login user_id={user.id}")
                return {self.cookie_name: self.generate_token(user.id)}
        logger.info(f"login rejected username={username}")
        return None

    def logout(self) -> Dict[str, Optional[str]]:
        """Cookies that remove the session."""
        return {self.cookie_name: None}
