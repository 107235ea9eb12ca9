"""
Technician client configuration using Pydantic Settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Settings for talking to the service request API."""

    model_config = SettingsConfigDict(
        env_prefix="FIELDSERVICE_CLIENT_", env_file=".env", extra="ignore"
    )

    BASE_URL: str = "http://localhost:3002"
    TIMEOUT_SECONDS: float = 30.0


client_settings = ClientSettings()
