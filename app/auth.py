"""
Authentication utilities for the auction application.

Provides secure password hashing using bcrypt and the operator credential
check used by the login endpoint.
"""

import hmac
from typing import Optional

import bcrypt

from app.logger import get_logger

logger = get_logger(__name__)


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: The plaintext password to hash.

    Returns:
        The hashed password as a string.

    Example:
        >>> hashed = hash_password('my_secure_password')
        >>> verify_password('my_secure_password', hashed)
        True
    """
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a bcrypt hash.

    Args:
        password: The plaintext password to verify.
        hashed: The bcrypt hash to check against.

    Returns:
        True if the password matches, False otherwise.
    """
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))
    except (ValueError, TypeError):
        return False


def check_operator_credentials(
    username: Optional[str],
    password: Optional[str],
    config: dict,
) -> bool:
    """Check a login attempt against the configured operator account.

    A bcrypt hash in ``OPERATOR_PASSWORD_HASH`` takes precedence over a
    plaintext ``OPERATOR_PASSWORD``. With neither set, nobody can log in.
    """
    if not username or not password:
        return False
    if not hmac.compare_digest(username, config.get('OPERATOR_USERNAME') or ''):
        return False

    hashed = config.get('OPERATOR_PASSWORD_HASH')
    if hashed:
        return verify_password(password, hashed)

    expected = config.get('OPERATOR_PASSWORD')
    if not expected:
        logger.warning("Operator login attempted but no operator password is configured")
        return False
    return hmac.compare_digest(password, expected)


def generate_password_hash_cli() -> None:
    """CLI helper to generate a password hash.

    Run from command line:
        python -c "from app.auth import generate_password_hash_cli; generate_password_hash_cli()"
    """
    import sys
    import getpass

    password = getpass.getpass("Enter password to hash: ")
    confirm = getpass.getpass("Confirm password: ")

    if password != confirm:
        logger.error("Password mismatch during hash generation")
        sys.stderr.write("Error: Passwords do not match\n")
        return

    hashed = hash_password(password)
    # CLI output to stdout for user to copy the hash
    sys.stdout.write(f"\nHashed password (set as OPERATOR_PASSWORD_HASH env var):\n{hashed}\n")
