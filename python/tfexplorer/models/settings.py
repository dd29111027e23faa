# tfexplorer/models/settings.py

from pydantic import SecretStr, ValidationError
from pydantic_settings import BaseSettings

from tfexplorer.errors import CredentialMissing


class ExplorerSettings(BaseSettings):
    """
    Pydantic settings for the Atlas / Terraform Enterprise clients.
    Fields map to environment variables prefixed with `ATLAS_`,
    e.g. `ATLAS_TOKEN`, `ATLAS_ADDR`.
    """

    token: SecretStr  # No default => must be set (ATLAS_TOKEN)
    addr: str = "https://atlas.hashicorp.com"
    request_timeout_seconds: float = 30.0
    verify_ssl: bool = True

    class Config:
        env_prefix = "ATLAS_"


def load_settings() -> ExplorerSettings:
    """Read ExplorerSettings from the environment.

    Raises:
        CredentialMissing: If ATLAS_TOKEN is unset.
    """
    try:
        return ExplorerSettings()  # type: ignore[call-arg]
    except ValidationError as exc:
        if any(err["loc"] == ("token",) for err in exc.errors()):
            raise CredentialMissing("Must set $ATLAS_TOKEN") from exc
        raise
