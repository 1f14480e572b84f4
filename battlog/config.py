# Command line options -> Configuration. The battery path is checked here so
# that an invalid one fails before anything is logged or drawn.

import argparse
import os
from dataclasses import dataclass
from typing import Optional

from battlog.sensors import POWER_SUPPLY_PATH, TEMPERATURE_SOURCES, find_battery

# Logging stays off unless an output file other than this one is given, so
# the tool never silently writes a generically named file.
DEFAULT_LOG_FILE = "battery_log.csv"
DEFAULT_INTERVAL = 60
DEFAULT_TEMPERATURE_SOURCE = "psutil"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class Configuration:
    log_path: Optional[str]
    interval: int
    battery_path: str
    max_runtime: int = 0
    display_enabled: bool = True
    temperature_source: str = DEFAULT_TEMPERATURE_SOURCE

    @property
    def logging_enabled(self):
        return self.log_path is not None


def positive_int(s):
    try:
        n = int(s)
    except ValueError:
        raise argparse.ArgumentTypeError("invalid integer: %r" % s)
    if n <= 0:
        raise argparse.ArgumentTypeError("must be greater than 0: %d" % n)
    return n


def non_negative_int(s):
    try:
        n = int(s)
    except ValueError:
        raise argparse.ArgumentTypeError("invalid integer: %r" % s)
    if n < 0:
        raise argparse.ArgumentTypeError("must not be negative: %d" % n)
    return n


def build_parser():
    parser = argparse.ArgumentParser(
        prog="battlog",
        description="Battlog - periodically log battery telemetry on Linux-based operating systems")
    parser.add_argument("-o", "--output", default=DEFAULT_LOG_FILE,
                        help="output file (default: %(default)s, which disables logging)")
    parser.add_argument("-i", "--interval", type=positive_int, default=DEFAULT_INTERVAL,
                        help="logging interval in seconds (default: %(default)s)")
    parser.add_argument("-b", "--battery", default=None,
                        help="battery path (default: autodetected under " + POWER_SUPPLY_PATH + ")")
    parser.add_argument("-t", "--time", type=non_negative_int, default=0,
                        help="maximum runtime in seconds (default: indefinite)")
    parser.add_argument("--no-interface", action="store_true",
                        help="disable the terminal interface")
    parser.add_argument("--temperature", choices=sorted(TEMPERATURE_SOURCES),
                        default=DEFAULT_TEMPERATURE_SOURCE,
                        help="temperature source (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="print debug messages to stderr")
    return parser


def resolve_log_path(output):
    if not output or output == DEFAULT_LOG_FILE:
        return None
    return output


def resolve_config(args, power_supply_path=POWER_SUPPLY_PATH):
    battery_path = args.battery
    if battery_path is None:
        battery_path = find_battery(power_supply_path)
    if not battery_path or not os.path.isdir(battery_path):
        raise ConfigError("Battery path '%s' not found!" % (battery_path or ""))

    return Configuration(
        log_path=resolve_log_path(args.output),
        interval=args.interval,
        battery_path=battery_path,
        max_runtime=args.time,
        display_enabled=not args.no_interface,
        temperature_source=args.temperature,
    )
