import copy
import json
import os

from .calc import PrayerAdjustments, PrayerTimesOptions

CONFIG_DIR = os.path.join(os.path.expanduser("~"), ".config", "islamkit")
CONFIG_PATH = os.environ.get("ISLAMKIT_CONFIG") or os.path.join(CONFIG_DIR, "config.json")

DEFAULT_CONFIG = {
    "location": "Makkah",
    "locations": {
        "Makkah": {"lat": 21.4225, "lng": 39.8262, "tz": "Asia/Riyadh", "label": "Makkah, Saudi Arabia"}
    },
    "method": "MWL",
    "asr_method": "STANDARD",
    "high_latitude_method": "ANGLE_BASED",
    "adjustments": {
        "fajr": 0,
        "sunrise": 0,
        "dhuhr": 0,
        "asr": 0,
        "maghrib": 0,
        "isha": 0
    },
    "time_format": "24h"
}


def _with_defaults(config):
    merged = copy.deepcopy(DEFAULT_CONFIG)
    for key, value in config.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict) and key != "locations":
            merged[key].update(value)
        else:
            merged[key] = value
    return merged


def load_config(path=CONFIG_PATH):
    if not os.path.exists(path):
        save_config(DEFAULT_CONFIG, path)
        return copy.deepcopy(DEFAULT_CONFIG)
    with open(path, "r", encoding="utf-8") as f:
        return _with_defaults(json.load(f))


def save_config(config, path=CONFIG_PATH):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)


def active_location(config):
    key = config.get("location")
    loc = config.get("locations", {}).get(key)
    if not loc:
        raise ValueError(f"Unknown location: {key}")
    return key, loc


def options_from_config(config):
    adjustments = {k: v for k, v in config.get("adjustments", {}).items() if v}
    return PrayerTimesOptions(
        method=config.get("method", "MWL"),
        asr_method=config.get("asr_method", "STANDARD"),
        high_latitude_method=config.get("high_latitude_method", "ANGLE_BASED"),
        adjustments=PrayerAdjustments.from_mapping(adjustments)
    )
