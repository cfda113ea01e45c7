from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.types import PrivateKeyTypes
from dispatch_analytics.custom_exceptions.snowflake_exceptions import (
    SnowflakePrivateKeyException,
)
from dispatch_analytics.logger import logger


def load_snowflake_private_key(
    private_key_file: str, private_key_password: str | None
) -> bytes:
    """
    Load a PEM private key and return it DER-encoded for the Snowflake JWT authenticator.

    Params:
        private_key_file (str): Path to the PEM private key.
        private_key_password (str | None): Passphrase, or None for an unencrypted key.

    Returns:
        bytes: The private key in PKCS8 DER form.
    """
    try:
        with open(private_key_file, "rb") as key_file:
            private_key_data = key_file.read()
    except FileNotFoundError:
        logger.error(f"Private key file not found: {private_key_file}")
        raise SnowflakePrivateKeyException(f"Private key file not found: {private_key_file}")
    except OSError as e:
        logger.error(f"Error reading private key file: {e}")
        raise SnowflakePrivateKeyException(f"Error reading private key file: {e}")

    try:
        private_key: PrivateKeyTypes = serialization.load_pem_private_key(
            data=private_key_data,
            password=private_key_password.encode() if private_key_password else None,
            backend=default_backend(),
        )
        return private_key.private_bytes(
            encoding=serialization.Encoding.DER,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
    except (ValueError, TypeError) as e:
        logger.error(f"Error loading private key: {e}")
        raise SnowflakePrivateKeyException(f"Error loading private key: {e}")
