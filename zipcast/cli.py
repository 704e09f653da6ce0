"""CLI entry point for ZIP code forecasts."""

import argparse
import logging

from zipcast.config.loader import get_config_value, load_config
from zipcast.errors import ForecastError
from zipcast.reporting.formatters import format_forecast_json, format_forecast_text
from zipcast.reporting.health_checker import HealthChecker
from zipcast.service.forecast_service import ForecastService


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="zipcast",
        description="Current and 3-day temperature forecast by US ZIP code",
    )
    parser.add_argument("--config", default=None, help="Config YAML path")

    sub = parser.add_subparsers(dest="command")

    # forecast
    fc_p = sub.add_parser("forecast", help="Show forecast for one or more ZIPs")
    fc_p.add_argument("zips", nargs="+", metavar="ZIP")
    fc_p.add_argument("--json", action="store_true", help="Emit JSON")
    fc_p.add_argument(
        "--repeat", type=int, default=1,
        help="Request each ZIP this many times (repeats are served from cache)",
    )

    # health
    sub.add_parser("health", help="Check upstream API reachability")

    # config show / config get
    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Get a config value")
    get_p.add_argument("key", help="Dotted key, e.g. cache.freshness_minutes")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    config = load_config(args.config)

    logging.basicConfig(
        level=config.ops.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "forecast":
        return _cmd_forecast(config, args)
    elif args.command == "health":
        return _cmd_health(config, args)
    elif args.command == "config":
        return _cmd_config(config, args)
    else:
        parser.print_help()
        return 1


def _cmd_forecast(config, args) -> int:
    failures = 0
    with ForecastService.from_config(config) as service:
        for _ in range(max(args.repeat, 1)):
            for zip_code in args.zips:
                zip_code = zip_code.strip()
                if not zip_code:
                    print("Enter a ZIP code")
                    failures += 1
                    continue
                try:
                    forecast = service.submit(zip_code).result()
                except ForecastError:
                    print(f"Failed to load forecast for {zip_code}")
                    failures += 1
                    continue
                if args.json:
                    print(format_forecast_json(zip_code, forecast))
                else:
                    print(format_forecast_text(zip_code, forecast))
    return 0 if failures == 0 else 1


def _cmd_health(config, args) -> int:
    status = HealthChecker(config).check()
    print(f"Geocoding API: {'OK' if status.geocoding_reachable else 'FAIL'}")
    print(f"Weather API: {'OK' if status.weather_reachable else 'FAIL'}")
    return 0 if status.ok else 1


def _cmd_config(config, args) -> int:
    if args.config_command == "show":
        print(config.model_dump_json(indent=2))
        return 0
    elif args.config_command == "get":
        try:
            print(f"{args.key} = {get_config_value(config, args.key)}")
            return 0
        except KeyError as e:
            print(f"Error: {e}")
            return 1
    else:
        print("Use: config show | config get KEY")
        return 1
