import argparse
import json
import logging
import sys
from datetime import date, datetime, timedelta, timezone

from .calc import PrayerTimesCalculator, asr_method, high_latitude_method
from .config import CONFIG_PATH, active_location, load_config, options_from_config, save_config
from .geo import as_coordinates, format_coordinates
from .methods import CALCULATION_METHODS, PRAYER_LABELS, PRAYER_NAMES, method_id
from .qibla import calculate_qibla
from .render import build_table, format_countdown, format_time, get_timezone


def _save_setting(config, path, key, value):
    config[key] = value
    save_config(config, path)
    return 0


def handle_cli(args):
    path = args.config
    config = load_config(path)

    if args.list_methods:
        for method in CALCULATION_METHODS.values():
            print(f"{method.id.value}: {method.name}")
        return 0

    if args.list_locations:
        for name, loc in config.get("locations", {}).items():
            label = loc.get("label") or name
            tz = loc.get("tz") or "local"
            print(f"{name}: {label} ({loc.get('lat')}, {loc.get('lng')}) [{tz}]")
        return 0

    if args.use_location:
        if args.use_location not in config.get("locations", {}):
            raise ValueError(f"Unknown location: {args.use_location}")
        return _save_setting(config, path, "location", args.use_location)

    if args.set_method:
        return _save_setting(config, path, "method", method_id(args.set_method).value)

    if args.set_asr_method:
        return _save_setting(config, path, "asr_method", asr_method(args.set_asr_method).value)

    if args.set_high_latitude:
        return _save_setting(config, path, "high_latitude_method", high_latitude_method(args.set_high_latitude).value)

    if args.set_offset:
        prayer, minutes = args.set_offset
        prayer_key = prayer.lower()
        if prayer_key not in PRAYER_NAMES:
            raise ValueError(f"Unknown prayer for offset: {prayer}")
        config.setdefault("adjustments", {})[prayer_key] = int(minutes)
        save_config(config, path)
        return 0

    if args.set_location:
        if args.lat is None or args.lng is None:
            raise ValueError("--set-location needs --lat and --lng")
        config.setdefault("locations", {})[args.set_location] = {
            "lat": float(args.lat),
            "lng": float(args.lng),
            "tz": args.tz,
            "label": args.set_location
        }
        return _save_setting(config, path, "location", args.set_location)

    return show_times(config, args)


def show_times(config, args):
    location_key, loc = active_location(config)
    coords = as_coordinates(loc)
    tzinfo = get_timezone(loc.get("tz"))
    label = loc.get("label") or location_key
    time_format = config.get("time_format", "24h")

    if args.qibla:
        result = calculate_qibla(coords)
        if args.json:
            print(json.dumps({"location": label, **result._asdict()}, ensure_ascii=True))
        else:
            print(f"{label} ({format_coordinates(coords)})")
            print(f"Qibla {result.direction:.2f} deg {result.compass}, {result.distance:.0f} km to the Kaaba")
        return 0

    calc = PrayerTimesCalculator(coords, options_from_config(config))
    day = date.fromisoformat(args.date) if args.date else datetime.now(tzinfo).date()

    if args.next:
        now = datetime.now(timezone.utc)
        upcoming = calc.get_next_prayer(calc.get_times(day), now)
        if args.json:
            payload = {"name": upcoming.name, "time": upcoming.time.isoformat(), "location": label}
            print(json.dumps(payload, ensure_ascii=True))
        else:
            when = format_time(upcoming.time, time_format, tzinfo)
            print(f"{PRAYER_LABELS[upcoming.name]} {when} - {format_countdown(upcoming.time - now)}")
        return 0

    days = calc.get_times_for_range(day, day + timedelta(days=max(args.days, 1) - 1))
    if args.json:
        payload = {
            "location": label,
            "method": calc.method.id.value,
            "days": [
                {
                    "date": times.date.isoformat(),
                    **{name: instant.isoformat() if instant else None for name, instant in times.items()}
                }
                for times in days
            ]
        }
        print(json.dumps(payload, ensure_ascii=True))
        return 0

    title = f"{label} ({calc.method.name}, Asr: {calc.options.asr_method.value.title()})"
    print(title)
    for times in days:
        print()
        print(build_table(times, tzinfo, time_format, title=times.date.isoformat()))
    return 0


def build_arg_parser():
    parser = argparse.ArgumentParser(description="Prayer times and Qibla direction")
    parser.add_argument("--config", default=CONFIG_PATH, help="Path of the JSON settings file")
    parser.add_argument("--date", help="Calendar date (YYYY-MM-DD), defaults to today")
    parser.add_argument("--days", type=int, default=1, help="Number of days to print")
    parser.add_argument("--next", action="store_true", help="Show the next prayer and a countdown")
    parser.add_argument("--qibla", action="store_true", help="Show Qibla direction and distance")
    parser.add_argument("--json", action="store_true", help="Print a JSON payload")
    parser.add_argument("--list-methods", action="store_true", help="List calculation methods")
    parser.add_argument("--list-locations", action="store_true", help="List locations from config")
    parser.add_argument("--use-location", help="Switch current location")
    parser.add_argument("--set-location", help="Add or update a location and set it active")
    parser.add_argument("--lat", help="Latitude for --set-location")
    parser.add_argument("--lng", help="Longitude for --set-location")
    parser.add_argument("--tz", help="IANA time zone for --set-location (optional)")
    parser.add_argument("--set-method", help="Set calculation method")
    parser.add_argument("--set-asr-method", help="Set Asr method (STANDARD or HANAFI)")
    parser.add_argument("--set-high-latitude", help="Set high latitude rule")
    parser.add_argument("--set-offset", nargs=2, metavar=("PRAYER", "MIN"), help="Set prayer offset in minutes")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log calculation details")
    return parser


def main(argv=None):
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        return handle_cli(args)
    except Exception as exc:
        if args.json:
            print(json.dumps({"error": str(exc)}, ensure_ascii=True))
            return 0
        print(f"Error: {exc}", file=sys.stderr)
        return 1
