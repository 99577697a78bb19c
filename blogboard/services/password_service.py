from flask import current_app
from werkzeug.security import generate_password_hash, check_password_hash

from blogboard.errors import InvalidPasswordError


def _is_non_empty_string(value):
    return isinstance(value, str) and bool(value.strip())


def hash_password(password):
    if not _is_non_empty_string(password):
        raise ValueError("Password is required")
    return generate_password_hash(password)


def verify_password(password, password_hash, target="entity"):
    """Check a submitted plaintext password against a stored hash.

    Returns True on a match. Any mismatch, including a missing password,
    raises InvalidPasswordError so callers never mutate on a failed check.
    """
    if _is_non_empty_string(password) and check_password_hash(password_hash, password):
        return True

    current_app.logger.warning("Password mismatch for %s", target)
    raise InvalidPasswordError()
