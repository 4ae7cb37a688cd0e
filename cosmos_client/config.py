"""
Account credentials for the Cosmos DB REST client.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from .constants import ENV_DATABASE, ENV_ENDPOINT, ENV_MASTER_KEY
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class Credentials:
    """Endpoint, master key and database name of one account."""

    endpoint: str
    master_key: str
    database: str

    def __post_init__(self):
        if not self.endpoint:
            raise ConfigurationError("endpoint cannot be empty")
        if not self.master_key:
            raise ConfigurationError("master_key cannot be empty")
        if not self.database:
            raise ConfigurationError("database cannot be empty")
        # resource links are appended directly to the endpoint
        object.__setattr__(self, 'endpoint', self.endpoint.rstrip('/') + '/')

    def __repr__(self):
        return (f"Credentials(endpoint={self.endpoint!r}, "
                f"master_key='***', database={self.database!r})")

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Credentials":
        """
        Load credentials from the environment.

        Reads ENDPOINT_URI, MASTER_KEY and DATABASE. When ``env_file`` is
        given it is loaded first; variables already set in the environment
        take precedence.

        Raises:
            ConfigurationError: If a variable is missing
        """
        if env_file is not None:
            if not os.path.exists(env_file):
                raise ConfigurationError(f"env file not found: {env_file}")
            load_dotenv(env_file)
        else:
            load_dotenv(find_dotenv(usecwd=True))

        values = {}
        missing = []
        for field_name, var in (('endpoint', ENV_ENDPOINT),
                                ('master_key', ENV_MASTER_KEY),
                                ('database', ENV_DATABASE)):
            value = os.environ.get(var, "")
            if not value:
                missing.append(var)
            values[field_name] = value

        if missing:
            raise ConfigurationError(
                f"missing environment variables: {', '.join(missing)}"
            )
        return cls(**values)
