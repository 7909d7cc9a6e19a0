"""Static AWS credentials resolved from a function credential bundle."""

from dataclasses import dataclass
from typing import List

from ..errors import CredentialsError
from ..sdk.models import Credentials

ACCESS_KEY_ID = "aws_access_key_id"
SECRET_ACCESS_KEY = "aws_secret_access_key"
SESSION_TOKEN = "aws_session_token"

REQUIRED_KEYS = [ACCESS_KEY_ID, SECRET_ACCESS_KEY, SESSION_TOKEN]


@dataclass(frozen=True)
class StaticCredentials:
    """An access key, secret key and session token."""

    access_key_id: str
    secret_access_key: str
    session_token: str

    def __repr__(self) -> str:
        return f"StaticCredentials(access_key_id={self.access_key_id!r}, secret_access_key=***, session_token=***)"

    @classmethod
    def from_credentials(cls, credentials: Credentials) -> "StaticCredentials":
        """
        Build static credentials from a credential bundle.

        Args:
            credentials: Credential bundle supplied with the request

        Returns:
            StaticCredentials instance

        Raises:
            CredentialsError: If any required key is missing or empty
        """
        missing: List[str] = [key for key in REQUIRED_KEYS if not credentials.data.get(key)]
        if missing:
            raise CredentialsError(f"missing required keys: {', '.join(missing)}")

        return cls(
            access_key_id=credentials.data[ACCESS_KEY_ID],
            secret_access_key=credentials.data[SECRET_ACCESS_KEY],
            session_token=credentials.data[SESSION_TOKEN],
        )
