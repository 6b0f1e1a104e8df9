"""Configuration Management Package"""

import json
import os
import sys
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from commitcoach import STYLE_NAMES, DEFAULT_STYLE

DEFAULT_SERVER = "https://commitcoach-proxy.onrender.com"

# Valid configuration values
VALID_STYLES = set(STYLE_NAMES)
VALID_PROVIDERS = {"openai", "claude"}

API_KEY_VARS = {
    "openai": "OPENAI_API_KEY",
    "claude": "ANTHROPIC_API_KEY",
}


class ConfigError(Exception):
    """Raised when required configuration (e.g. an API key) is missing or invalid."""
    pass


def load_env(path: str | Path | None = None) -> None:
    """Load .env (searched upward from the cwd) into the environment, once, at startup.

    Existing environment variables win over values in the file.
    """
    load_dotenv(dotenv_path=path or find_dotenv(usecwd=True), override=False)


@dataclass
class Config:
    """CLI configuration with sensible defaults."""
    server: str = DEFAULT_SERVER
    style: str = DEFAULT_STYLE
    timeout: int = 60

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Validate config values and return list of warnings.

        Invalid values are replaced with defaults after warning.
        """
        warnings = []
        defaults = Config()

        if not isinstance(self.server, str) or not self.server.startswith(('http://', 'https://')):
            warnings.append(f"Invalid server '{self.server}', using '{defaults.server}'")
            self.server = defaults.server

        if not isinstance(self.style, str) or self.style not in VALID_STYLES:
            warnings.append(f"Invalid style '{self.style}', using '{defaults.style}'")
            self.style = defaults.style

        if isinstance(self.timeout, bool) or not isinstance(self.timeout, int) or self.timeout <= 0:
            warnings.append(f"Invalid timeout '{self.timeout}', using {defaults.timeout}")
            self.timeout = defaults.timeout

        self.server = self.server.rstrip('/')
        return warnings

    def apply_env(self, environ: Mapping[str, str]) -> 'Config':
        """Overlay COMMITCOACH_* environment variables onto this config."""
        data = self.to_dict()
        if environ.get('COMMITCOACH_SERVER'):
            data['server'] = environ['COMMITCOACH_SERVER']
        if environ.get('COMMITCOACH_STYLE'):
            data['style'] = environ['COMMITCOACH_STYLE']
        if environ.get('COMMITCOACH_TIMEOUT'):
            raw = environ['COMMITCOACH_TIMEOUT']
            data['timeout'] = int(raw) if raw.isdigit() else raw
        return Config.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


class ConfigManager:
    """Manages loading and saving the .commitcoachrc file."""

    CONFIG_FILENAME = ".commitcoachrc"

    def __init__(self):
        self._config: Optional[Config] = None
        self._config_path: Optional[Path] = None

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        for path in (Path.cwd() / self.CONFIG_FILENAME, Path.home() / self.CONFIG_FILENAME):
            if path.exists():
                self._config = self._load_from_file(path)
                self._config_path = path
                return self._config

        self._config = Config()
        return self._config

    def _load_from_file(self, path: Path) -> Config:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            return Config.from_dict(data)
        except (json.JSONDecodeError, ValueError, OSError) as e:
            print(f"Warning: Could not load {path}: {e}", file=sys.stderr)
            return Config()

    def save(self, config: Config, global_config: bool = True) -> Path:
        path = Path.home() / self.CONFIG_FILENAME if global_config else Path.cwd() / self.CONFIG_FILENAME
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(config.to_dict(), f, indent=2)
        return path

    def get_config_path(self) -> Optional[Path]:
        return self._config_path


_manager = ConfigManager()


def load_config() -> Config:
    return _manager.load()


def save_config(config: Config, global_config: bool = True) -> Path:
    return _manager.save(config, global_config)


def get_config_path() -> Optional[Path]:
    return _manager.get_config_path()


@dataclass(frozen=True)
class ProxyConfig:
    """Proxy service settings, read once from the environment."""
    api_key: str
    provider: str = "openai"
    model: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = 8080
    rate_limit: int = 60
    rate_window: float = 60.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> 'ProxyConfig':
        """Build the proxy config from environment variables.

        Raises:
            ConfigError: unknown provider, missing API key, or a malformed number
        """
        env = os.environ if environ is None else environ

        provider = env.get('COMMITCOACH_PROVIDER', 'openai').strip().lower()
        if provider not in VALID_PROVIDERS:
            raise ConfigError(f"Unknown provider '{provider}'. Use one of: {', '.join(sorted(VALID_PROVIDERS))}")

        key_var = API_KEY_VARS[provider]
        api_key = env.get(key_var, '').strip()
        if not api_key:
            raise ConfigError(
                f"No API key found. Set {key_var} in the environment or in .env:\n"
                f"  export {key_var}='your-key-here'"
            )

        return cls(
            api_key=api_key,
            provider=provider,
            model=env.get('COMMITCOACH_MODEL') or None,
            host=env.get('COMMITCOACH_HOST', '0.0.0.0'),
            port=_positive_int(env, 'PORT', 8080),
            rate_limit=_positive_int(env, 'COMMITCOACH_RATE_LIMIT', 60),
            rate_window=float(_positive_int(env, 'COMMITCOACH_RATE_WINDOW', 60)),
            log_level=env.get('COMMITCOACH_LOG_LEVEL', 'INFO').upper(),
        )


def _positive_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == '':
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got '{raw}'")
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


__all__ = [
    "Config",
    "ConfigManager",
    "ConfigError",
    "ProxyConfig",
    "load_config",
    "save_config",
    "get_config_path",
    "load_env",
    "DEFAULT_SERVER",
    "VALID_STYLES",
    "VALID_PROVIDERS",
    "API_KEY_VARS",
]
