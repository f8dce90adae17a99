# settings.py - persisted host settings (card size, auto-complete pace, seed)
import os
import json
import logging
from typing import Optional

logger = logging.getLogger(__name__)

# Defaults (may be overridden by persisted settings)
_DEFAULT_SETTINGS = {
    "card_size": "Medium",   # Small | Medium | Large
    "auto_step_ms": 100,     # pause between auto-complete moves
    "seed": None,            # fixed deal seed, or None for random deals
}

_CURRENT_SETTINGS = dict(_DEFAULT_SETTINGS)


def _settings_dir() -> str:
    override = os.environ.get("KLONDIKE_SETTINGS_DIR")
    if override:
        return override
    # Prefer %APPDATA% on Windows, else ~/.klondike_engine
    base = os.environ.get("APPDATA")
    if base:
        return os.path.join(base, "KlondikeEngine")
    return os.path.join(os.path.expanduser("~"), ".klondike_engine")


def _settings_path() -> str:
    return os.path.join(_settings_dir(), "settings.json")


def _coerce(data: dict) -> dict:
    out = {}
    size = str(data.get("card_size", _DEFAULT_SETTINGS["card_size"])).capitalize()
    out["card_size"] = size if size in ("Small", "Medium", "Large") else "Medium"
    out["auto_step_ms"] = max(0, int(data.get("auto_step_ms", _DEFAULT_SETTINGS["auto_step_ms"])))
    seed = data.get("seed")
    out["seed"] = None if seed is None else int(seed)
    return out


def get_current_settings():
    return dict(_CURRENT_SETTINGS)


def reset_settings():
    _CURRENT_SETTINGS.clear()
    _CURRENT_SETTINGS.update(_DEFAULT_SETTINGS)


def load_settings():
    reset_settings()
    try:
        with open(_settings_path(), "r", encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            _CURRENT_SETTINGS.update(_coerce(data))
    except FileNotFoundError:
        pass
    except (OSError, ValueError, TypeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", _settings_path(), exc)
    return get_current_settings()


def save_settings(new_values: dict):
    # Merge and write to disk
    merged = dict(_CURRENT_SETTINGS)
    merged.update({k: new_values[k] for k in _DEFAULT_SETTINGS if k in new_values})
    _CURRENT_SETTINGS.update(_coerce(merged))
    try:
        os.makedirs(_settings_dir(), exist_ok=True)
        with open(_settings_path(), "w", encoding="utf-8") as f:
            json.dump(_CURRENT_SETTINGS, f, indent=2)
    except OSError as exc:
        logger.warning("Could not save settings to %s: %s", _settings_path(), exc)


def size_to_dims(size_name: Optional[str]):
    size_name = (size_name or "Medium").capitalize()
    if size_name == "Small":
        return 75, 105
    if size_name == "Large":
        return 150, 210
    return 100, 140
