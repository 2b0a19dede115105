# crewdesk/core/security.py
"""
Hash des mots de passe (passlib/bcrypt) et jetons JWT (python-jose).

Claims : {sub, role, type, exp}
    sub  : id du compte (str)
    role : "admin" | "client" - type de principal
    type : "access" | "refresh"
"""
from datetime import datetime, timedelta, timezone

from jose import jwt
from passlib.context import CryptContext

from crewdesk.core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def _encode(data: dict, token_type: str, expires: timedelta) -> str:
    to_encode = dict(data)
    to_encode["type"] = token_type
    to_encode["exp"] = datetime.now(timezone.utc) + expires
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(data: dict) -> str:
    return _encode(data, "access", timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))


def create_refresh_token(data: dict) -> str:
    return _encode(data, "refresh", timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS))


def decode_token(token: str) -> dict:
    """Lève jose.JWTError si la signature est invalide ou le jeton expiré."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
