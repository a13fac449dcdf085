"""Command-line interface for the fitness tracker."""

import argparse
import json
import logging
import sys
from datetime import date

from fitness_tracker.config import ACTIVITY_FACTORS, ACTIVITY_LEVEL_LABELS, WEIGHT_HISTORY_LIMIT
from fitness_tracker.dashboard import format_metrics, format_weight_history
from fitness_tracker.measurements import MeasurementError, new_measurement
from fitness_tracker.metrics import compute_metrics
from fitness_tracker.models import Measurement, Profile
from fitness_tracker.store import StoreClient, StoreError
from fitness_tracker.units import ft_in_to_cm, inches_to_cm, lbs_to_kg


# --- Input helpers ---

def _to_metric(args) -> dict:
    """Measurement fields from args, converting imperial input when asked."""
    values = {
        "weight": args.weight,
        "height": args.height,
        "waist": args.waist,
        "neck": args.neck,
        "hip": args.hip,
    }
    if args.imperial:
        for key, value in values.items():
            if value is None:
                continue
            values[key] = lbs_to_kg(value) if key == "weight" else inches_to_cm(value)
    if args.feet is not None:
        values["height"] = ft_in_to_cm(args.feet, args.inches or 0)
    return values


def _parse_dob(text):
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        print(f"Invalid date of birth: {text} (expected YYYY-MM-DD)")
        sys.exit(1)


def _print_metrics(measurement, metrics, as_json: bool) -> None:
    if as_json:
        print(json.dumps(metrics.to_dict(), indent=2))
    else:
        print(format_metrics(measurement, metrics))


# --- Command handlers ---

def cmd_metrics(args):
    values = _to_metric(args)
    measurement = Measurement(
        weight_kg=values["weight"],
        height_cm=values["height"],
        waist_cm=values["waist"],
        neck_cm=values["neck"],
        hip_cm=values["hip"],
        activity_level=args.activity,
    )
    profile = Profile(sex=args.sex, date_of_birth=_parse_dob(args.dob))
    metrics = compute_metrics(profile, measurement)
    _print_metrics(measurement, metrics, args.json)


def cmd_dashboard(args):
    client = StoreClient.from_env()
    profile, measurement = client.fetch_snapshot(args.user)
    metrics = compute_metrics(profile, measurement)
    _print_metrics(measurement, metrics, args.json)


def cmd_log(args):
    values = _to_metric(args)
    measurement = new_measurement(
        values["weight"],
        values["height"],
        values["waist"],
        values["neck"],
        hip=values["hip"],
        activity_level=args.activity,
    )
    client = StoreClient.from_env()
    client.insert_measurement(args.user, measurement)
    print("Measurement saved.")


def cmd_history(args):
    client = StoreClient.from_env()
    points = client.fetch_weight_history(args.user, args.limit)
    print(format_weight_history(points))


# --- Argument parser ---

def _add_measurement_args(parser: argparse.ArgumentParser, required: bool) -> None:
    parser.add_argument("--weight", type=float, required=required, help="Weight (kg, or lbs with --imperial)")
    parser.add_argument("--height", type=float, help="Height (cm, or inches with --imperial)")
    parser.add_argument("--feet", type=int, help="Height (feet), overrides --height")
    parser.add_argument("--inches", type=float, help="Height (inches), used with --feet")
    parser.add_argument("--waist", type=float, required=required, help="Waist circumference")
    parser.add_argument("--neck", type=float, required=required, help="Neck circumference")
    parser.add_argument("--hip", type=float, help="Hip circumference (optional)")
    parser.add_argument("--activity", type=int, choices=list(ACTIVITY_FACTORS.keys()),
                        help=", ".join(f"{k}={v}" for k, v in ACTIVITY_LEVEL_LABELS.items()))
    parser.add_argument("--imperial", action="store_true",
                        help="Read weight in lbs and lengths in inches")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fitness_tracker",
        description="Fitness Tracker - body measurements and derived health metrics",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- metrics ---
    metrics_p = subparsers.add_parser("metrics", help="Compute metrics from given measurements")
    _add_measurement_args(metrics_p, required=False)
    metrics_p.add_argument("--sex", choices=["male", "female", "other"])
    metrics_p.add_argument("--dob", help="Date of birth (YYYY-MM-DD)")
    metrics_p.add_argument("--json", action="store_true", help="Print metrics as JSON")
    metrics_p.set_defaults(func=cmd_metrics)

    # --- dashboard ---
    dash_p = subparsers.add_parser("dashboard", help="Show metrics for a stored user")
    dash_p.add_argument("--user", required=True, help="User ID")
    dash_p.add_argument("--json", action="store_true", help="Print metrics as JSON")
    dash_p.set_defaults(func=cmd_dashboard)

    # --- log ---
    log_p = subparsers.add_parser("log", help="Save a new measurement")
    log_p.add_argument("--user", required=True, help="User ID")
    _add_measurement_args(log_p, required=True)
    log_p.set_defaults(func=cmd_log)

    # --- history ---
    history_p = subparsers.add_parser("history", help="Show weight progress")
    history_p.add_argument("--user", required=True, help="User ID")
    history_p.add_argument("--limit", type=int, default=WEIGHT_HISTORY_LIMIT,
                           help="Number of weigh-ins to show")
    history_p.set_defaults(func=cmd_history)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return

    try:
        args.func(args)
    except (MeasurementError, StoreError) as e:
        print(f"Error: {e}")
        sys.exit(1)
