"""Configuration management for Net Pay.

Two kinds of configuration exist:

1. settings.json - Machine-specific preferences
   - jurisdiction: default jurisdiction name (e.g. "de-2025")
   - tax_class: default tax class for 'net-pay calc'

2. Jurisdiction documents - <name>.yaml with tax and social insurance
   parameters for one country and tax year.

Config directory resolution:
1. NET_PAY_CONFIG_PATH environment variable (if set)
2. ~/.config/net-pay/ (XDG_CONFIG_HOME fallback)

Jurisdiction resolution (load_jurisdiction):
1. An existing file path (YAML or JSON)
2. <config dir>/jurisdictions/<name>.yaml (user-supplied)
3. Bundled netpay/jurisdictions/<name>.yaml

Loaded jurisdictions are cached per file; clear_jurisdiction_cache()
forces the next load to re-read from disk.
"""

import json
import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import ValidationError

from .schemas import SalaryInput
from .taxes.schemas import JurisdictionConfig

logger = logging.getLogger(__name__)

APP_NAME = "net-pay"
SETTINGS_FILENAME = "settings.json"
JURISDICTIONS_DIRNAME = "jurisdictions"
DEFAULT_JURISDICTION = "de-2025"


class JurisdictionNotFoundError(Exception):
    """Raised when no jurisdiction document matches a name or path."""
    pass


class ConfigValidationError(Exception):
    """Raised when a configuration or scenario document fails validation."""

    def __init__(self, source: Path, error: ValidationError):
        self.source = source
        self.error = error
        super().__init__(f"Invalid document {source}:\n{error}")


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. NET_PAY_CONFIG_PATH environment variable
    2. ~/.config/net-pay/ (XDG_CONFIG_HOME)
    """
    env_path = os.environ.get("NET_PAY_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save settings to settings.json.

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json, or default."""
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json."""
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def unset_setting(key: str) -> bool:
    """Remove a setting. Returns True if it was set."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True


# =============================================================================
# Jurisdiction documents
# =============================================================================


def get_bundled_jurisdictions_dir() -> Path:
    """Get the jurisdictions directory shipped with the package."""
    package_root = Path(__file__).parent.parent  # sdk -> netpay
    return package_root / JURISDICTIONS_DIRNAME


def get_user_jurisdictions_dir() -> Path:
    """Get the directory for user-supplied jurisdiction documents."""
    return get_config_dir() / JURISDICTIONS_DIRNAME


def list_jurisdictions() -> List[str]:
    """List available jurisdiction names (user documents shadow bundled ones)."""
    names = set()
    for directory in (get_user_jurisdictions_dir(), get_bundled_jurisdictions_dir()):
        if directory.is_dir():
            names.update(p.stem for p in directory.glob("*.yaml"))
    return sorted(names)


def resolve_jurisdiction_path(name: Optional[str] = None) -> Path:
    """Find the document for a jurisdiction name or path.

    Args:
        name: Jurisdiction name, or path to a YAML/JSON file. Defaults to the
            'jurisdiction' setting, then DEFAULT_JURISDICTION.

    Raises:
        JurisdictionNotFoundError: If nothing matches
    """
    if not name:
        name = get_setting("jurisdiction") or DEFAULT_JURISDICTION

    candidate = Path(name).expanduser()
    if candidate.is_file():
        return candidate.resolve()

    checked = []
    for directory in (get_user_jurisdictions_dir(), get_bundled_jurisdictions_dir()):
        path = directory / f"{name}.yaml"
        if path.is_file():
            return path.resolve()
        checked.append(path)

    locations = "\n".join(f"  - {p}" for p in checked)
    raise JurisdictionNotFoundError(
        f"Jurisdiction '{name}' not found. Checked:\n{locations}\n\n"
        f"Available: {', '.join(list_jurisdictions()) or 'none'}"
    )


def _read_document(path: Path) -> Dict[str, Any]:
    with open(path, "r") as f:
        if path.suffix.lower() == ".json":
            return json.load(f)
        return yaml.safe_load(f) or {}


@lru_cache(maxsize=None)
def _load_jurisdiction_file(path: Path) -> JurisdictionConfig:
    logger.debug(f"loading jurisdiction from {path}")
    try:
        return JurisdictionConfig.model_validate(_read_document(path))
    except ValidationError as e:
        raise ConfigValidationError(path, e) from e


def load_jurisdiction(name: Optional[str] = None) -> JurisdictionConfig:
    """Load and validate a jurisdiction document (parsed once per file).

    Each call returns its own copy, so callers may modify the result
    without affecting later loads.
    """
    return _load_jurisdiction_file(resolve_jurisdiction_path(name)).model_copy(deep=True)


def clear_jurisdiction_cache() -> None:
    """Drop cached jurisdictions so the next load re-reads from disk."""
    logger.debug("clearing jurisdiction cache")
    _load_jurisdiction_file.cache_clear()


def load_salary_input(
    path: Path,
    overrides: Optional[Dict[str, Any]] = None,
    defaults: Optional[Dict[str, Any]] = None,
) -> SalaryInput:
    """Load a salary scenario from YAML or JSON.

    Args:
        path: Scenario file with SalaryInput fields
        overrides: Field values that replace those from the file
        defaults: Field values used only where the file has none

    Raises:
        ConfigValidationError: If the merged data is not a valid SalaryInput
    """
    path = Path(path)
    data = dict(defaults or {})
    data.update(_read_document(path))
    data.update(overrides or {})
    try:
        return SalaryInput.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(path, e) from e
