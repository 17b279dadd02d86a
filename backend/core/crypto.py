"""
Encryption utilities for AI provider credentials.

Uses Fernet symmetric encryption. API keys are encrypted at rest and only
decrypted when a caller actually needs the plaintext.
"""

import logging
from typing import Optional
from cryptography.fernet import Fernet, InvalidToken

from core.config import settings

log = logging.getLogger("zap.crypto")


def get_fernet() -> Optional[Fernet]:
    """Get a Fernet instance from the configured ENCRYPTION_KEY."""
    key = settings.encryption_key
    if not key:
        return None
    try:
        return Fernet(key.encode())
    except Exception:
        log.error("ENCRYPTION_KEY is set but invalid, cannot initialize Fernet")
        return None


def encrypt(plaintext: str) -> str:
    """
    Encrypt a string. Returns base64-encoded ciphertext.
    Raises RuntimeError if encryption is not configured.
    """
    if not plaintext:
        return plaintext

    fernet = get_fernet()
    if not fernet:
        log.error("ENCRYPTION_KEY not configured, refusing to store plaintext secret")
        raise RuntimeError(
            "ENCRYPTION_KEY is not configured. Cannot store credentials without encryption."
        )
    return fernet.encrypt(plaintext.encode()).decode()


def decrypt(ciphertext: str) -> Optional[str]:
    """
    Decrypt a string. Returns plaintext.
    Returns the original string if it is not a valid token for the current key.
    """
    if not ciphertext:
        return ciphertext

    fernet = get_fernet()
    if not fernet:
        return ciphertext

    try:
        return fernet.decrypt(ciphertext.encode()).decode()
    except InvalidToken:
        return ciphertext


def is_encrypted(value: str) -> bool:
    """Check if a value appears to be Fernet-encrypted."""
    if not value:
        return False
    # Fernet tokens are base64 and start with 'gAAAAA'
    return value.startswith("gAAAAA") and len(value) > 50
