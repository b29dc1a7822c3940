"""Security helpers for hashing and token generation."""

from datetime import datetime, timedelta
from hashlib import sha256
import secrets
import string

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings

ALGORITHM = "HS256"

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def password_signature(hashed_password: str) -> str:
    """Fingerprint of the stored hash; a password change revokes older tokens."""

    return sha256(hashed_password.encode()).hexdigest()


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.utcnow() + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def generate_secure_password() -> str:
    """Generate a random password between 8 and 12 characters."""

    alphabet = string.ascii_letters + string.digits + string.punctuation
    length = secrets.choice(range(8, 13))

    while True:
        password = "".join(secrets.choice(alphabet) for _ in range(length))
        if (
            any(char.islower() for char in password)
            and any(char.isupper() for char in password)
            and any(char.isdigit() for char in password)
            and any(char in string.punctuation for char in password)
        ):
            return password


def generate_code(prefix: str, digits: int = 6) -> str:
    """Return an identifier such as ``STU004821``."""

    return f"{prefix}{secrets.randbelow(10 ** digits):0{digits}d}"


__all__ = [
    "create_access_token",
    "decode_access_token",
    "generate_code",
    "generate_secure_password",
    "get_password_hash",
    "password_signature",
    "verify_password",
]
