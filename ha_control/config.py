"""
Fixed connection settings and the credential loader.

The API key is read from ``~/.env``, which holds ``KEY=VALUE`` lines. Only
``API_KEY_HA`` is looked at; the first line starting with ``API_KEY_HA=``
wins and its value is trimmed.
"""

from pathlib import Path

from ha_control.errors import ConfigError

HA_URL = "https://homeassistant.iot:8123"
API_KEY_NAME = "API_KEY_HA"
API_TIMEOUT = 30.0
USER_AGENT = "HomeAssistant-CLI/1.0"

# Pause after a service call so the next fetch sees the new state
SETTLE_DELAY = 1.0


def default_env_file() -> Path:
    """Path of the credential file in the user's home directory"""
    return Path.home() / ".env"


def load_api_key(path: Path | None = None) -> str:
    """Read the Home Assistant token or raise ConfigError."""
    env_file = path if path is not None else default_env_file()
    hint = f"Create it with your Home Assistant API key as {API_KEY_NAME}=your_token"

    if not env_file.is_file():
        raise ConfigError(f"{env_file} file not found.", hint)

    prefix = f"{API_KEY_NAME}="
    api_key = ""
    try:
        # Undecodable bytes on other lines must not hide the key
        with env_file.open(encoding="utf-8", errors="replace") as handle:
            for line in handle:
                if line.startswith(prefix):
                    api_key = line[len(prefix) :].strip()
                    break
    except OSError as error:
        raise ConfigError(f"Cannot read {env_file}: {error.strerror or error}", hint) from error

    if not api_key:
        raise ConfigError(f"{API_KEY_NAME} not found in {env_file}.", hint)
    return api_key
