#!/usr/bin/python3

# Battlog - periodically log battery telemetry on Linux-based operating systems

# Usage (Python 3): battlog -o battery.csv -i 30 -t 3600

# Every interval the current, voltage, capacity, charge, temperature and
# charging status of one battery in /sys/class/power_supply are sampled. If
# an output file is given each sample is appended to it as one CSV line, and
# unless --no-interface is passed the terminal shows the latest sample along
# with the remaining runtime when -t is used.

import logging
import sys

from battlog.config import ConfigError, build_parser, resolve_config
from battlog.loop import LoopController
from battlog.sensors import SensorReader, make_temperature_source


def setup_logging(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = resolve_config(args)
    except ConfigError as e:
        print("Error: " + str(e), file=sys.stderr)
        return 1

    reader = SensorReader(make_temperature_source(config.temperature_source))
    controller = LoopController(config, reader)
    try:
        controller.run()
    except KeyboardInterrupt:
        # records are flushed per tick, nothing to clean up
        logging.getLogger(__name__).info("Interrupted after %d samples",
                                         controller.state.ticks if controller.state else 0)
    return 0


if __name__ == "__main__":
    sys.exit(main())
