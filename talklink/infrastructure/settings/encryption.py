"""Password encryption for the settings store (Fernet)."""

import base64

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

DECRYPTION_ERROR_MSG = "Failed to decrypt password - invalid or corrupted data"
KDF_ITERATIONS = 100_000


def derive_key(secret_key: str, salt: str) -> bytes:
    """Derive a Fernet key from secret_key + salt via PBKDF2-HMAC-SHA256."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=salt.encode(),
        iterations=KDF_ITERATIONS,
    )
    return base64.urlsafe_b64encode(kdf.derive(secret_key.encode()))


class CredentialEncryptor:
    """Encrypt/decrypt the remote password for storage at rest."""

    def __init__(self, secret_key: str, salt: str) -> None:
        if not secret_key or not salt:
            raise ValueError("secret_key and salt are required for credential encryption")
        self._fernet = Fernet(derive_key(secret_key, salt))

    def encrypt(self, plaintext: str) -> str:
        """Encrypt plaintext to a string safe for JSON storage."""
        return self._fernet.encrypt(plaintext.encode()).decode()

    def decrypt(self, token: str) -> str:
        """Decrypt a stored value.

        Raises:
            ValueError: If the value was not produced with this key.
        """
        try:
            return self._fernet.decrypt(token.encode()).decode()
        except InvalidToken as e:
            raise ValueError(DECRYPTION_ERROR_MSG) from e
