# WARNING: Never commit your .env file or share your API keys.
# Ensure .env is listed in .gitignore!

"""Settings loader for the TMDB credentials and filter defaults.

Loads values from (highest priority first) keyword arguments, environment
variables, a ``.env`` file in the working directory, the user config file
(``~/.config/streamscout/config.toml``) and finally the built-in defaults.

Recognised keys:
- TMDB_API_KEY (required for every command that talks to TMDB)
- REGION, PROVIDERS, LANGUAGE
- MIN_RATING, MIN_VOTES
- API_TIMEOUT_SECONDS
- DEBUG
"""

from typing import Any

from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from streamscout.utils.config import read_config_file

DEFAULT_REGION = "DE"
DEFAULT_PROVIDERS = "Netflix,DisneyPlus,Wow,RtlPlus,AmazonPrime"
DEFAULT_LANGUAGE = "de-DE"
DEFAULT_TIMEOUT = 20
DEFAULT_MIN_RATING = 7.5
DEFAULT_MIN_VOTES = 1000


class MissingAPIKeyError(Exception):
    """Raised when a required API key is missing from the environment or .env file."""

    def __init__(self, key: str) -> None:
        """Initialize the error with the missing key name."""
        super().__init__(
            f"Missing required API key: {key}\n"
            "Set it in your environment, a .env file, or with "
            f"'streamscout config set {key.lower()} <value>'."
        )
        self.key = key


class ConfigFileSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by the user's config.toml."""

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)
        self._data = {key.upper(): value for key, value in read_config_file().items()}

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name.upper()), field_name, False

    def __call__(self) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for field_name, field in self.settings_cls.model_fields.items():
            value, key, _ = self.get_field_value(field, field_name)
            if value is not None:
                values[key] = value
        return values


class Settings(BaseSettings):
    """Credentials and filter defaults for streamscout commands."""

    TMDB_API_KEY: str = ""
    REGION: str = DEFAULT_REGION
    PROVIDERS: str = DEFAULT_PROVIDERS
    LANGUAGE: str = DEFAULT_LANGUAGE
    MIN_RATING: float = DEFAULT_MIN_RATING
    MIN_VOTES: int = DEFAULT_MIN_VOTES
    API_TIMEOUT_SECONDS: int = DEFAULT_TIMEOUT
    DEBUG: bool = False

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            ConfigFileSettingsSource(settings_cls),
            file_secret_settings,
        )

    def require_keys(self) -> None:
        """Raise MissingAPIKeyError if any required key is missing."""
        required = ["TMDB_API_KEY"]
        for key in required:
            if not getattr(self, key, None):
                raise MissingAPIKeyError(key)
