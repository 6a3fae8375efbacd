"""Global configuration management for gitbuddy.

Handles user-level configuration stored in ~/.gitbuddy/:
- config.yaml: Vendor, model, sampling and formatting settings
- credentials: API keys for model vendors
"""

import os
import stat
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from gitbuddy.config import (
    API_KEY_ENV_VARS,
    DEFAULT_BASE_URLS,
    DEFAULT_LANGUAGE,
    DEFAULT_TIMEOUT,
    DEFAULT_USAGE_MODE,
    DEFAULT_VENDOR,
    DEFAULT_WRAP_WIDTH,
    VENDORS_WITHOUT_KEY,
    ModelConfig,
    ModelParameters,
    UsageMode,
    Vendor,
    default_model,
)
from gitbuddy.llm.exceptions import MissingAPIKeyError


class GlobalConfigError(Exception):
    """Raised when there's an error with global configuration."""
    pass


_CONFIG_DIR = Path.home() / ".gitbuddy"

# Files excluded from the staged diff unless the user overrides the list
DEFAULT_IGNORE_PATTERNS = [
    "Cargo.lock",
    "node_modules",
    "dist",
    "package-lock.json",
    "pnpm-lock.json",
    "*.lock",
]


def get_global_config_dir() -> Path:
    """Get the global gitbuddy configuration directory.

    Returns:
        Path to ~/.gitbuddy/
    """
    return _CONFIG_DIR


def ensure_global_config_dir() -> Path:
    """Ensure the global config directory exists.

    Returns:
        Path to ~/.gitbuddy/
    """
    config_dir = get_global_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_file_path() -> Path:
    """Get path to config.yaml file."""
    return get_global_config_dir() / "config.yaml"


def get_credentials_file_path() -> Path:
    """Get path to credentials file."""
    return get_global_config_dir() / "credentials"


def load_global_config() -> Dict[str, Any]:
    """Load global configuration from ~/.gitbuddy/config.yaml.

    Returns:
        Dictionary with configuration values. Empty dict if file doesn't exist.

    Raises:
        GlobalConfigError: If the file exists but cannot be read or parsed.
    """
    config_file = get_config_file_path()

    if not config_file.exists():
        return {}

    try:
        with open(config_file, "r") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise GlobalConfigError(f"Failed to load config from {config_file}: {e}")

    if not isinstance(config, dict):
        raise GlobalConfigError(f"Config file {config_file} must contain a mapping")
    return config


def save_global_config(config: Dict[str, Any]) -> None:
    """Save global configuration to ~/.gitbuddy/config.yaml.

    Args:
        config: Configuration dictionary to save.
    """
    ensure_global_config_dir()
    config_file = get_config_file_path()

    try:
        with open(config_file, "w") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)
    except (OSError, yaml.YAMLError) as e:
        raise GlobalConfigError(f"Failed to save config to {config_file}: {e}")


def _parse_credentials(text: str) -> Dict[str, str]:
    credentials = {}
    for line in text.splitlines():
        line = line.strip()
        # Skip empty lines and comments
        if not line or line.startswith("#"):
            continue
        if "=" in line:
            key, value = line.split("=", 1)
            credentials[key.strip()] = value.strip()
    return credentials


def load_credentials() -> Dict[str, str]:
    """Load API keys from ~/.gitbuddy/credentials.

    Returns:
        Dictionary mapping environment variable names to API keys.
    """
    credentials_file = get_credentials_file_path()

    if not credentials_file.exists():
        return {}

    try:
        return _parse_credentials(credentials_file.read_text())
    except OSError as e:
        raise GlobalConfigError(f"Failed to load credentials from {credentials_file}: {e}")


def save_credential(key_name: str, api_key: str) -> None:
    """Save or update an API key in the credentials file.

    Args:
        key_name: Environment variable name (e.g., "DEEPSEEK_API_KEY")
        api_key: The API key value.
    """
    ensure_global_config_dir()
    credentials_file = get_credentials_file_path()

    existing_creds = load_credentials()
    existing_creds[key_name] = api_key

    try:
        with open(credentials_file, "w") as f:
            f.write("# gitbuddy API credentials\n")
            f.write("# Format: VENDOR_API_KEY=your_key_here\n\n")
            for key, value in existing_creds.items():
                f.write(f"{key}={value}\n")

        # Owner read/write only
        os.chmod(credentials_file, stat.S_IRUSR | stat.S_IWUSR)
    except OSError as e:
        raise GlobalConfigError(f"Failed to save credential: {e}")


def get_credential(key_name: str) -> Optional[str]:
    """Get an API key from the credentials file, or None if absent."""
    return load_credentials().get(key_name)


def resolve_api_key(vendor: Vendor) -> Optional[str]:
    """Get the API key for a vendor.

    Checks in order:
    1. Environment variable (including values loaded from .env)
    2. ~/.gitbuddy/credentials file

    Returns:
        The API key, or None for vendors that do not need one.

    Raises:
        MissingAPIKeyError: If a required key is not found.
    """
    env_var_name = API_KEY_ENV_VARS[vendor]

    api_key = os.getenv(env_var_name) or get_credential(env_var_name)
    if api_key:
        return api_key

    if vendor in VENDORS_WITHOUT_KEY:
        return None

    raise MissingAPIKeyError(
        f"{vendor.value} API key not found. Set it using:\n"
        f"  1. Environment variable: export {env_var_name}=your_key_here\n"
        f"  2. Run: gitbuddy config set-key {vendor.value}\n"
        f"  3. Manually add to ~/.gitbuddy/credentials"
    )


def _parse_vendor(value: str) -> Vendor:
    try:
        return Vendor(value.lower())
    except ValueError:
        valid = ", ".join(v.value for v in Vendor)
        raise GlobalConfigError(f"Unknown vendor '{value}'. Valid vendors: {valid}")


def get_default_vendor() -> Vendor:
    """Get the default vendor from global config, falling back to DEFAULT_VENDOR."""
    vendor_str = load_global_config().get("default_vendor")
    if not vendor_str:
        return DEFAULT_VENDOR
    return _parse_vendor(vendor_str)


def set_default_vendor(vendor: Vendor) -> None:
    """Set the default vendor in global config."""
    config = load_global_config()
    config["default_vendor"] = vendor.value
    save_global_config(config)


def set_vendor_config(vendor: Vendor, model: str, base_url: Optional[str] = None) -> None:
    """Store the model and endpoint for a vendor.

    Args:
        vendor: The vendor to configure.
        model: Model identifier.
        base_url: API root; the vendor default is used when omitted.
    """
    config = load_global_config()
    vendors = config.setdefault("vendors", {})
    vendors[vendor.value] = {
        "model": model,
        "base_url": base_url or DEFAULT_BASE_URLS[vendor],
    }
    save_global_config(config)


def load_model_config(vendor: Optional[str] = None, model: Optional[str] = None) -> ModelConfig:
    """Build the ModelConfig used for a request.

    Args:
        vendor: Vendor name override; defaults to the configured default vendor.
        model: Model override; defaults to the vendor's configured model.

    Returns:
        A ModelConfig with its API key resolved.

    Raises:
        GlobalConfigError: If the vendor name is unknown.
        MissingAPIKeyError: If the vendor requires a key and none is set.
    """
    selected = _parse_vendor(vendor) if vendor else get_default_vendor()
    section = load_global_config().get("vendors", {}).get(selected.value, {}) or {}

    return ModelConfig(
        vendor=selected,
        model=model or section.get("model") or default_model(selected),
        base_url=section.get("base_url") or DEFAULT_BASE_URLS[selected],
        api_key=resolve_api_key(selected),
    )


def get_model_parameters() -> ModelParameters:
    """Get sampling options from global config.

    Raises:
        GlobalConfigError: If the configured values are out of range.
    """
    section = load_global_config().get("model_parameters") or {}
    try:
        return ModelParameters(**section)
    except ValidationError as e:
        raise GlobalConfigError(f"Invalid model_parameters in config: {e}")


def get_timeout() -> int:
    """Get request timeout in seconds."""
    return int(load_global_config().get("timeout", DEFAULT_TIMEOUT))


def get_usage_mode() -> UsageMode:
    """Get the usage accounting policy."""
    value = load_global_config().get("usage_mode")
    if not value:
        return DEFAULT_USAGE_MODE
    try:
        return UsageMode(value)
    except ValueError:
        raise GlobalConfigError(
            f"Invalid usage_mode '{value}'. Use 'incremental' or 'cumulative'."
        )


def get_wrap_width() -> int:
    """Get the body/footer wrap width."""
    return int(load_global_config().get("wrap_width", DEFAULT_WRAP_WIDTH))


def get_language() -> str:
    """Get the language requested for subject and body text."""
    return load_global_config().get("language", DEFAULT_LANGUAGE)


def get_ignore_patterns() -> list:
    """Get the patterns excluded from the staged diff."""
    return load_global_config().get("ignore", DEFAULT_IGNORE_PATTERNS)


def initialize_default_config() -> None:
    """Initialize config.yaml with default values if it doesn't exist."""
    if get_config_file_path().exists():
        return

    default_config = {
        "default_vendor": DEFAULT_VENDOR.value,
        "timeout": DEFAULT_TIMEOUT,
        "vendors": {},
        "model_parameters": ModelParameters().model_dump(),
        "usage_mode": DEFAULT_USAGE_MODE.value,
        "wrap_width": DEFAULT_WRAP_WIDTH,
        "language": DEFAULT_LANGUAGE,
        "ignore": list(DEFAULT_IGNORE_PATTERNS),
    }

    save_global_config(default_config)


def is_configured() -> bool:
    """Check if gitbuddy has been configured (config.yaml exists)."""
    return get_config_file_path().exists()
