"""Configuration management for grocery_planner.

This module provides a centralized configuration system that supports:
- Default values for all settings
- Loading from TOML configuration files
- Environment variable overrides
- Validation of configuration values

Configuration priority (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (GROCERY_PLANNER_*, plus ZESTFUL_API_KEY)
3. Project config file (.grocery-planner.toml)
4. User config file (~/.config/grocery-planner/config.toml)
5. Default values

Example:
    >>> config = PlannerConfig.load()
    >>> config.fetch_timeout = 10.0
    >>> config.save("~/.config/grocery-planner/config.toml")
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .exceptions import ConfigurationError
from .services.normalizer import DEFAULT_ENDPOINT

ENV_PREFIX = "GROCERY_PLANNER_"
LEGACY_API_KEY_ENV = "ZESTFUL_API_KEY"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

_TYPED_FIELDS: tuple[tuple[str, type], ...] = (
    ("normalizer_endpoint", str),
    ("user_agent", str),
    ("follow_redirects", bool),
    ("debug_mode", bool),
)


@dataclass
class PlannerConfig:
    """Configuration for ingredient extraction.

    Attributes:
        Normalizer Settings:
            normalizer_api_key: Credential for the ingredient normalizer;
                None disables normalization
            normalizer_endpoint: URL of the normalizer's parse endpoint

        Fetch Settings:
            fetch_timeout: Timeout in seconds for the shared HTTP client
            follow_redirects: Whether the HTTP client follows redirects
            user_agent: User-Agent header sent with page requests

        Output Settings:
            log_file: File the CLI writes logs to (None disables file logging)
            debug_mode: Log at DEBUG level
    """

    # Normalizer settings
    normalizer_api_key: str | None = None
    normalizer_endpoint: str = DEFAULT_ENDPOINT

    # Fetch settings
    fetch_timeout: float = 30.0
    follow_redirects: bool = True
    user_agent: str = DEFAULT_USER_AGENT

    # Output settings
    log_file: Path | None = field(default_factory=lambda: Path("grocery_planner.log"))
    debug_mode: bool = False

    def __post_init__(self) -> None:
        """Validate configuration values after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ConfigurationError: If any configuration value is invalid
        """
        # Env and TOML values arrive untyped
        if isinstance(self.fetch_timeout, bool) or not isinstance(self.fetch_timeout, int | float):
            raise ConfigurationError(
                "fetch_timeout must be a number",
                fetch_timeout=repr(self.fetch_timeout),
            )
        for name, expected in _TYPED_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, expected):
                raise ConfigurationError(
                    f"{name} must be a {expected.__name__}",
                    value=repr(value),
                )

        if self.fetch_timeout <= 0:
            raise ConfigurationError(
                "fetch_timeout must be positive",
                fetch_timeout=self.fetch_timeout,
            )

        if not self.normalizer_endpoint.startswith(("http://", "https://")):
            raise ConfigurationError(
                "normalizer_endpoint must be an http(s) URL",
                normalizer_endpoint=self.normalizer_endpoint,
            )

        if not self.user_agent.strip():
            raise ConfigurationError("user_agent must not be empty")

        # An empty key means "not configured"
        if self.normalizer_api_key is not None:
            self.normalizer_api_key = str(self.normalizer_api_key).strip() or None

        if self.log_file is not None and not isinstance(self.log_file, Path):  # type: ignore[reportUnnecessaryIsInstance]
            self.log_file = Path(self.log_file)

    @property
    def normalizer_enabled(self) -> bool:
        """Whether a normalizer credential is configured."""
        return self.normalizer_api_key is not None

    @classmethod
    def load(
        cls,
        config_path: str | Path | None = None,
        load_user_config: bool = True,
        load_env: bool = True,
    ) -> "PlannerConfig":
        """Load configuration from file(s) and environment variables.

        Configuration is loaded in this order (later overrides earlier):
        1. Default values
        2. User config file (~/.config/grocery-planner/config.toml)
        3. Project config file (.grocery-planner.toml or specified path)
        4. Environment variables (GROCERY_PLANNER_*)

        Args:
            config_path: Path to project config file (optional)
            load_user_config: Whether to load user config file
            load_env: Whether to load environment variables

        Returns:
            Loaded and validated configuration

        Raises:
            ConfigurationError: If configuration is invalid
        """
        config_dict: dict[str, Any] = {}

        if load_user_config:
            user_config_path = Path.home() / ".config" / "grocery-planner" / "config.toml"
            if user_config_path.exists():
                config_dict.update(cls._load_toml(user_config_path))

        if config_path:
            project_path = Path(config_path)
            if not project_path.exists():
                raise ConfigurationError("Config file not found", path=str(project_path))
            config_dict.update(cls._load_toml(project_path))
        else:
            default_path = Path(".grocery-planner.toml")
            if default_path.exists():
                config_dict.update(cls._load_toml(default_path))

        if load_env:
            config_dict.update(cls._load_env())

        unknown = set(config_dict) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigurationError(
                "Unknown configuration keys",
                keys=", ".join(sorted(unknown)),
            )

        return cls(**config_dict)

    @staticmethod
    def _load_toml(path: Path) -> dict[str, Any]:
        """Load configuration from TOML file.

        Args:
            path: Path to TOML file

        Returns:
            Dictionary of configuration values

        Raises:
            ConfigurationError: If TOML file is invalid
        """
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)

            # Extract grocery-planner section if present
            if "grocery-planner" in data:
                return data["grocery-planner"]
            return data

        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(
                f"Failed to load configuration from {path}",
                path=str(path),
                error=str(e),
            ) from e

    @staticmethod
    def _load_env() -> dict[str, Any]:
        """Load configuration from environment variables.

        Environment variables should be prefixed with GROCERY_PLANNER_ and use
        uppercase snake_case. For example:
        - GROCERY_PLANNER_NORMALIZER_API_KEY=abc123
        - GROCERY_PLANNER_FETCH_TIMEOUT=10
        - GROCERY_PLANNER_DEBUG_MODE=true

        ZESTFUL_API_KEY is read as the normalizer credential when the
        prefixed variable is not set.

        Returns:
            Dictionary of configuration values from environment
        """
        config: dict[str, Any] = {}

        for key, value in os.environ.items():
            if not key.startswith(ENV_PREFIX):
                continue

            config_key = key[len(ENV_PREFIX) :].lower()

            # Credentials are always strings
            if config_key == "normalizer_api_key":
                config[config_key] = value
            elif value.lower() in ("true", "yes"):
                config[config_key] = True
            elif value.lower() in ("false", "no"):
                config[config_key] = False
            elif value.isdigit():
                config[config_key] = int(value)
            elif value.replace(".", "", 1).isdigit():  # Float
                config[config_key] = float(value)
            else:
                config[config_key] = value

        if "normalizer_api_key" not in config and os.environ.get(LEGACY_API_KEY_ENV):
            config["normalizer_api_key"] = os.environ[LEGACY_API_KEY_ENV]

        return config

    def save(self, path: str | Path) -> None:
        """Save configuration to TOML file.

        ``None`` values are omitted since TOML has no null.

        Args:
            path: Path to save configuration file

        Raises:
            ConfigurationError: If save fails
        """
        import tomli_w

        path = Path(path).expanduser()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            config_dict = {k: v for k, v in self.to_dict().items() if v is not None}
            with open(path, "wb") as f:
                tomli_w.dump(config_dict, f)
        except (OSError, TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Failed to save configuration to {path}",
                path=str(path),
                error=str(e),
            ) from e

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Dictionary representation of configuration
        """
        result: dict[str, Any] = {}
        for key, value in self.__dict__.items():
            if isinstance(value, Path):
                result[key] = str(value)
            else:
                result[key] = value
        return result

    def update(self, **kwargs: Any) -> None:
        """Update configuration values.

        Args:
            **kwargs: Configuration values to update

        Raises:
            ConfigurationError: If updated values are invalid

        Example:
            >>> config = PlannerConfig()
            >>> config.update(fetch_timeout=5.0, debug_mode=True)
        """
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                raise ConfigurationError(
                    f"Unknown configuration key: {key}",
                    key=key,
                    valid_keys=", ".join(self.__dataclass_fields__.keys()),
                )

        self._validate()
