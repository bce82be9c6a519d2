"""Password hashing utilities."""

from passlib.context import CryptContext

# bcrypt_sha256 pre-hashes with SHA-256 so passwords longer than
# bcrypt's 72-byte limit are not silently truncated.
pwd_context = CryptContext(schemes=["bcrypt_sha256"], deprecated="auto")

# Verified against when the email is unknown, so a failed sign-in costs the
# same time whether or not the account exists.
_DUMMY_HASH = pwd_context.hash("notebox-dummy-password")


def hash_password(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify(plain_password: str) -> bool:
    """Burn one verification; always returns False."""
    pwd_context.verify(plain_password, _DUMMY_HASH)
    return False


def needs_update(hashed_password: str) -> bool:
    """Check if password hash needs updating."""
    return pwd_context.needs_update(hashed_password)
