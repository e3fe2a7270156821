# laundry_api/auth.py
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import PasswordValueError

from laundry_api.config import Settings
from laundry_api.errors import InvalidToken, NoTokenProvided

logger = logging.getLogger(__name__)

DEFAULT_BCRYPT_ROUNDS = 10

# Password Hashing Configuration (bcrypt, random salt per hash)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=DEFAULT_BCRYPT_ROUNDS)

# Bearer token extraction; a missing header is reported by the guard itself
bearer_scheme = HTTPBearer(auto_error=False)


@lru_cache
def _context_with_rounds(rounds: int) -> CryptContext:
    return pwd_context.copy(bcrypt__rounds=rounds)


# Password Hashing Functions
def get_password_hash(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    return _context_with_rounds(rounds).hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except PasswordValueError:
        # No stored hash can match a password bcrypt refuses to hash
        return False


def dummy_verify() -> None:
    """Spend the same time as a real check when there is no user to check against."""
    pwd_context.dummy_verify()


@dataclass(frozen=True)
class CurrentUser:
    user_id: uuid.UUID
    username: str


class TokenService:
    """
    Issues and verifies the signed session tokens handed out at login.

    Tokens carry ``{"id", "username", "exp"}`` and are not persisted, so
    there is nothing to revoke: a token is valid until it expires.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: float = 60):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self.expires_in = timedelta(minutes=expire_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(settings.JWT_SECRET, settings.JWT_ALGORITHM, settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    def issue(self, user_id, username: str, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        to_encode = {
            "id": str(user_id),
            "username": username,
            "exp": issued_at + self.expires_in,
        }
        return jwt.encode(to_encode, self._secret, algorithm=self._algorithm)

    def verify(self, token: Optional[str]) -> CurrentUser:
        if not token:
            raise InvalidToken()
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError as exc:
            logger.debug("Token rejected: %s", exc)
            raise InvalidToken()

        user_id = payload.get("id")
        username = payload.get("username")
        if not user_id or not username:
            raise InvalidToken()
        try:
            return CurrentUser(user_id=uuid.UUID(str(user_id)), username=username)
        except ValueError:
            raise InvalidToken()


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


# Access guard for owner-scoped routes
def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> CurrentUser:
    if credentials is None or not credentials.credentials:
        raise NoTokenProvided()

    current_user = tokens.verify(credentials.credentials)
    request.state.user = current_user
    return current_user
