import logging
import secrets

from werkzeug.security import generate_password_hash, check_password_hash

logger = logging.getLogger(__name__)


def encrypt_password(password: str):
    return generate_password_hash(password)


def verify_password(plain_password, hashed_password):
    try:
        return check_password_hash(hashed_password, plain_password)
    except (TypeError, ValueError):
        logger.warning("Stored password hash could not be checked")
        return False


def generate_session_token():
    return secrets.token_urlsafe(32)
