import logging
import os
import sys
from pathlib import Path
from typing import Any

import httpx
import yaml
from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by FBAUTH_CONFIG_FILE env var."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get the value for a field from the YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML file."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        """Load config from YAML file if specified."""
        config_file = os.environ.get("FBAUTH_CONFIG_FILE")
        if config_file:
            path = Path(config_file)
            if path.exists():
                return yaml.safe_load(path.read_text()) or {}
        return {}


class Server(BaseModel):
    """Server configuration (nested in Config, uses env_nested_delimiter)."""

    name: str = "fbauth"
    version: str = "0.1.0"
    description: str = "Facebook OAuth 2.0 authorization code flow"


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from FBAUTH_LOG_FILE env var."""
        return os.environ.get("FBAUTH_LOG_FILE")


# =============================================================================
# Authentication Configuration
# =============================================================================


REQUIRED_FACEBOOK_FIELDS = ("client_id", "client_secret", "redirect_uri", "state")


class FacebookConfig(BaseModel):
    """Facebook OAuth configuration.

    Field order matters: ``oauth_params`` walks the OAuth fields in declaration
    order, and that order is the order of the authorize query string.
    """

    model_config = ConfigDict(frozen=True)

    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str = ""
    state: str = ""
    scope: str | None = None
    response_type: str | None = None

    graph_version: str = "v9.0"
    dialog_base_url: str = "https://www.facebook.com"
    graph_base_url: str = "https://graph.facebook.com"

    @property
    def auth_url(self) -> str:
        """Login dialog endpoint the browser is redirected to."""
        return f"{self.dialog_base_url}/{self.graph_version}/dialog/oauth"

    @property
    def token_url(self) -> str:
        """Endpoint exchanging an authorization code for an access token."""
        return f"{self.graph_base_url}/{self.graph_version}/oauth/access_token"

    @property
    def debug_token_url(self) -> str:
        """Token inspection endpoint used to resolve the user id (unversioned)."""
        return f"{self.graph_base_url}/debug_token"

    def oauth_params(self) -> dict[str, str]:
        """OAuth fields in declaration order, unset optionals omitted."""
        params = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "redirect_uri": self.redirect_uri,
            "state": self.state,
        }
        if self.scope is not None:
            params["scope"] = self.scope
        if self.response_type is not None:
            params["response_type"] = self.response_type
        return params

    def missing_fields(self) -> list[str]:
        """Names of required fields that are empty."""
        return [name for name in REQUIRED_FACEBOOK_FIELDS if not getattr(self, name)]


class HttpTimeoutConfig(BaseModel):
    """Outbound HTTP timeouts in seconds."""

    connect: float = 5.0
    read: float = 10.0
    write: float = 5.0
    pool: float = 5.0

    def to_httpx(self) -> httpx.Timeout:
        return httpx.Timeout(
            connect=self.connect,
            read=self.read,
            write=self.write,
            pool=self.pool,
        )


class AuthConfig(BaseModel):
    """Authentication configuration."""

    facebook: FacebookConfig = FacebookConfig()
    http: HttpTimeoutConfig = HttpTimeoutConfig()
    # When set, a completed flow redirects here with AuthData in the fragment
    # instead of answering with JSON.
    success_redirect: str | None = None


class Config(BaseSettings):
    # These are BaseModel, so env_nested_delimiter handles their env vars
    server: Server = Server()
    logging: LoggingConfig = LoggingConfig()
    auth: AuthConfig = AuthConfig()

    model_config = {
        "env_prefix": "FBAUTH_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows FBAUTH_AUTH__FACEBOOK__CLIENT_ID override
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config.

        Priority (highest to lowest):
        1. init_settings - values passed to Config()
        2. env_settings - environment variables
        3. dotenv_settings - .env file
        4. yaml_settings - FBAUTH_CONFIG_FILE yaml
        5. file_secret_settings - secrets from files
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Configure Python logging based on config.

    Should be called early in application startup so that all loggers
    pick up the configuration.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(config.level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(config.level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # httpx logs full request URLs at INFO, and ours carry client_secret
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
