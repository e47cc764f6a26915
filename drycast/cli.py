"""CLI entry point for the drying-window engine."""

import argparse
import json
import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from drycast.config.loader import (
    get_config_value,
    load_config,
    load_weights,
    save_config,
    save_weights,
    set_config_value,
)
from drycast.config.schema import DryerConfig
from drycast.ingest.openweather import build_bundle
from drycast.models.window import WeatherFeatures
from drycast.pipeline.recommend_pipeline import RecommendPipeline
from drycast.reporting.formatters import format_run_json, format_run_text

DEFAULT_CONFIG = "config/drycast.yaml"

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="drycast",
        description="Laundry drying-window recommendations from weather forecasts",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG, help="Config YAML path"
    )

    sub = parser.add_subparsers(dest="command")

    # recommend
    rec_p = sub.add_parser("recommend", help="Rank drying windows")
    rec_p.add_argument("--onecall", help="One Call JSON payload (hourly + daily)")
    rec_p.add_argument("--forecast3h", help="5 day / 3 hour JSON payload")
    rec_p.add_argument("--utc-offset", type=int, help="UTC offset in seconds")
    rec_p.add_argument("--window-hours", type=int, help="Window width in hours")
    rec_p.add_argument("--top", type=int, help="Number of windows to show")
    rec_p.add_argument("--weights", help="Weights YAML path")
    rec_p.add_argument("--json", action="store_true", help="Emit JSON")

    # feedback
    fb_p = sub.add_parser("feedback", help="Train weights from one outcome")
    fb_p.add_argument("--weights", required=True, help="Weights YAML path")
    fb_p.add_argument("--temp", type=float, required=True, help="Temperature C")
    fb_p.add_argument("--humidity", type=float, required=True, help="RH percent")
    fb_p.add_argument("--wind", type=float, required=True, help="Wind m/s")
    fb_p.add_argument("--cloud", type=float, default=0.5, help="Cloud 0-1")
    fb_p.add_argument("--rain-prob", type=float, default=0.0, help="Rain prob 0-1")
    fb_p.add_argument("--rain-mm", type=float, default=0.0, help="Rain total mm")
    fb_p.add_argument(
        "--label", type=float, required=True, help="1 = dried well, 0 = did not"
    )

    # config show / config set
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    set_p = config_sub.add_parser("set", help="Set a config value")
    set_p.add_argument("keyvalue", help="key=value to set")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _load_config(args.config)
    except (ValidationError, yaml.YAMLError) as e:
        print(f"Error: invalid config {args.config}: {e}")
        return 1

    if args.command == "recommend":
        return _cmd_recommend(config, args)
    elif args.command == "feedback":
        return _cmd_feedback(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _load_config(path: str) -> DryerConfig:
    if not Path(path).exists():
        logger.info("Config %s not found, using defaults", path)
        return DryerConfig()
    return load_config(path)


def _read_json(path: str | None) -> dict | None:
    if path is None:
        return None
    with open(path) as f:
        return json.load(f)


def _cmd_recommend(config: DryerConfig, args) -> int:
    try:
        onecall = _read_json(args.onecall)
        forecast3h = _read_json(args.forecast3h)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: could not read forecast payload: {e}")
        return 1

    if onecall is None and forecast3h is None:
        print("Error: supply --onecall and/or --forecast3h")
        return 1

    if args.window_hours is not None and not 1 <= args.window_hours <= 24:
        print("Error: --window-hours must be between 1 and 24")
        return 1

    try:
        weights = (
            load_weights(args.weights, config.weights)
            if args.weights
            else config.weights.to_vector()
        )
    except ValidationError as e:
        print(f"Error: invalid weights file {args.weights}: {e}")
        return 1

    bundle = build_bundle(
        onecall,
        forecast3h,
        utc_offset_seconds=args.utc_offset,
        default_utc_offset_seconds=config.fusion.default_utc_offset_seconds,
    )
    run = RecommendPipeline(config).run(
        bundle, weights, width_hours=args.window_hours, max_windows=args.top
    )
    print(format_run_json(run) if args.json else format_run_text(run))
    return 0


def _cmd_feedback(config: DryerConfig, args) -> int:
    try:
        weights = load_weights(args.weights, config.weights)
    except ValidationError as e:
        print(f"Error: invalid weights file {args.weights}: {e}")
        return 1

    weather = WeatherFeatures(
        temp_c=args.temp,
        rh=args.humidity,
        wind_ms=args.wind,
        cloud=args.cloud,
        rain_p=args.rain_prob,
        rain_mm=args.rain_mm,
    )
    RecommendPipeline(config).submit_feedback(weights, weather, args.label)
    save_weights(args.weights, weights)
    print("Updated weights: " + ", ".join(
        f"{k}={v:.4f}" for k, v in weights.to_dict().items()
    ))
    return 0


def _cmd_config(config: DryerConfig, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "set":
        kv = args.keyvalue
        if "=" not in kv:
            print("Error: use key=value format")
            return 1
        key, value = kv.split("=", 1)
        try:
            new_config = set_config_value(config, key.strip(), value.strip())
        except (KeyError, ValueError, ValidationError) as e:
            print(f"Error: {e}")
            return 1
        save_config(args.config, new_config)
        print(f"Set {key} = {get_config_value(new_config, key.strip())}")
        return 0
    else:
        print("Use: config show | config set key=value")
        return 1
