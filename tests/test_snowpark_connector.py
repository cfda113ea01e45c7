import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from dispatch_analytics.connector.snowpark_connector import SnowparkConnector
from dispatch_analytics.custom_exceptions.snowflake_exceptions import (
    SnowflakeCredentialException,
    SnowflakePrivateKeyException,
    SnowflakeSessionException,
)
from dispatch_analytics.definitions.custom_definitions import SnowflakeAuthenticatorType
from dispatch_analytics.models.custom_models import SnowflakeCredentials
from dispatch_analytics.operations.key_pair_operations import load_snowflake_private_key


@pytest.fixture(scope="module")
def private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


def _write_key(tmp_path, key, password: bytes | None = None):
    encryption = (
        serialization.BestAvailableEncryption(password) if password else serialization.NoEncryption()
    )
    path = tmp_path / "rsa_key.p8"
    path.write_bytes(
        key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=encryption,
        )
    )
    return str(path)


def test_load_private_key_returns_der(tmp_path, private_key):
    der = load_snowflake_private_key(_write_key(tmp_path, private_key), None)
    expected = private_key.private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    assert der == expected


def test_load_encrypted_private_key(tmp_path, private_key):
    path = _write_key(tmp_path, private_key, password=b"secret")
    assert load_snowflake_private_key(path, "secret")
    with pytest.raises(SnowflakePrivateKeyException):
        load_snowflake_private_key(path, "wrong")


def test_missing_private_key_file(tmp_path):
    with pytest.raises(SnowflakePrivateKeyException) as excinfo:
        load_snowflake_private_key(str(tmp_path / "missing.p8"), None)
    assert "not found" in excinfo.value.message


def test_test_environment_opens_no_session():
    with SnowparkConnector(SnowflakeCredentials()) as connector:
        assert connector.session is None
        with pytest.raises(SnowflakeSessionException):
            connector.execute_query("SELECT 1")


def test_password_connection_options():
    credentials = SnowflakeCredentials(account="xy12345", user="reports", password="pw", warehouse="WH")
    options = SnowparkConnector(credentials)._get_connection_options()
    assert options == {"account": "xy12345", "user": "reports", "warehouse": "WH", "password": "pw"}


def test_jwt_connection_options(tmp_path, private_key):
    credentials = SnowflakeCredentials(
        account="xy12345",
        user="reports",
        authenticator=SnowflakeAuthenticatorType.SNOWFLAKE_JWT,
        private_key_file=_write_key(tmp_path, private_key),
    )
    options = SnowparkConnector(credentials)._get_connection_options()
    assert options["authenticator"] == "SNOWFLAKE_JWT"
    assert isinstance(options["private_key"], bytes)


def test_jwt_requires_key_file():
    credentials = SnowflakeCredentials(authenticator=SnowflakeAuthenticatorType.SNOWFLAKE_JWT)
    with pytest.raises(SnowflakeCredentialException):
        SnowparkConnector(credentials)._get_connection_options()
