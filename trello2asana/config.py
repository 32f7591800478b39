"""Environment-based configuration for trello2asana."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from trello2asana.exceptions import ConfigurationError
from trello2asana.models import AsanaCredentials, TrelloCredentials

REQUIRED_VARIABLES = ("TRELLO_API_KEY", "TRELLO_TOKEN", "ASANA_ACCESS_TOKEN")

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    trello_api_key: str
    trello_token: str
    asana_access_token: str
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    log_file: str | None = None
    request_timeout: float = DEFAULT_TIMEOUT

    def trello_credentials(self) -> TrelloCredentials:
        return TrelloCredentials(api_key=self.trello_api_key, token=self.trello_token)

    def asana_credentials(self) -> AsanaCredentials:
        return AsanaCredentials(access_token=self.asana_access_token)


def load_env_file(env_file: str | Path) -> None:
    """Load KEY=VALUE lines from a .env file into os.environ.

    Existing environment variables are never overridden. Blank lines and
    lines starting with '#' are ignored; surrounding quotes are stripped.
    """
    path = Path(env_file)
    if not path.exists():
        return

    with open(path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, value = line.split("=", 1)
                key = key.strip()
                value = value.strip().strip("'\"")
                if key not in os.environ:
                    os.environ[key] = value


def load_settings(env_file: str | Path | None = None) -> Settings:
    """Build Settings from the environment (optionally seeded from a .env file)

    Args:
        env_file: Path to a .env file. Defaults to $TRELLO2ASANA_ENV_FILE or ".env".

    Raises:
        ConfigurationError: If a required variable is missing or a numeric
            variable cannot be parsed
    """
    if env_file is None:
        env_file = os.getenv("TRELLO2ASANA_ENV_FILE", ".env")
    load_env_file(env_file)

    missing = [name for name in REQUIRED_VARIABLES if not os.getenv(name)]
    if missing:
        raise ConfigurationError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    port_value = os.getenv("PORT") or str(DEFAULT_PORT)
    try:
        port = int(port_value)
    except ValueError as e:
        raise ConfigurationError(f"PORT must be an integer, got: {port_value}") from e

    timeout_value = os.getenv("REQUEST_TIMEOUT") or str(DEFAULT_TIMEOUT)
    try:
        request_timeout = float(timeout_value)
    except ValueError as e:
        raise ConfigurationError(
            f"REQUEST_TIMEOUT must be a number of seconds, got: {timeout_value}"
        ) from e

    return Settings(
        trello_api_key=os.environ["TRELLO_API_KEY"],
        trello_token=os.environ["TRELLO_TOKEN"],
        asana_access_token=os.environ["ASANA_ACCESS_TOKEN"],
        host=os.getenv("HOST") or DEFAULT_HOST,
        port=port,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_file=os.getenv("LOG_FILE") or None,
        request_timeout=request_timeout,
    )
