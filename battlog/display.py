# Terminal interface: a full redraw of the configuration and the latest sample
# on every tick. render() only builds the text; Screen owns the terminal.

import datetime
import math
import os

from rich.console import Console

from battlog.config import DEFAULT_LOG_FILE
from battlog.record import UNAVAILABLE

BAR_LENGTH = 40
SEPARATOR = "=" * 66
BANNER = "========================= BATTERY LOGGER ========================="
DATA_BANNER = "======================== Current Battery Data ====================="
INDEFINITE_MESSAGE = "Running indefinitely... Press CTRL+C to stop."
START_TIME_FORMAT = "%a %b %d %H:%M:%S %Z %Y"
LOGGING_DISABLED = "disabled (no output file, or the default name %s)" % DEFAULT_LOG_FILE
SIZE_UNITS = ["", "K", "M", "G", "T", "P"]


# Size as printed by du -h: one decimal below 10, rounded up
def human_size(nbytes):
    size = float(nbytes)
    i = 0
    while size >= 1024 and i < len(SIZE_UNITS) - 1:
        size /= 1024
        i += 1
    if i == 0:
        return str(int(nbytes))
    if size < 10:
        size = math.ceil(size * 10) / 10
        if size < 10:
            return "%.1f%s" % (size, SIZE_UNITS[i])
    return "%d%s" % (math.ceil(size), SIZE_UNITS[i])


# Bytes allocated on disk for path, or None if it cannot be stat'ed
def disk_usage(path):
    try:
        st = os.stat(path)
    except OSError:
        return None
    blocks = getattr(st, "st_blocks", None)
    if blocks is None:
        return st.st_size
    return blocks * 512


# Local time with its zone name, like date -d @START
def format_start_time(timestamp):
    start = datetime.datetime.fromtimestamp(timestamp, tz=datetime.timezone.utc).astimezone()
    return start.strftime(START_TIME_FORMAT)


def format_remaining(seconds):
    seconds = max(0, int(seconds))
    return "%02d:%02d" % (seconds // 60, seconds % 60)


def progress_bar(elapsed, max_runtime, width=BAR_LENGTH):
    filled = (int(elapsed) * width) // max_runtime
    filled = max(0, min(width, filled))
    return "#" * filled + " " * (width - filled)


def progress_line(elapsed, max_runtime):
    return "Progress: |%s| Remaining Time: %s" % (
        progress_bar(elapsed, max_runtime),
        format_remaining(max_runtime - elapsed))


def field(label, value, unit=""):
    if value is None:
        text = UNAVAILABLE
    elif isinstance(value, float):
        text = "%.1f" % value
    else:
        text = str(value)
    if unit and value is not None:
        text += " " + unit
    return "%-17s: %s" % (label, text)


def render(config, state, sample, elapsed, max_runtime):
    lines = [
        BANNER,
        "Log File: %s" % (config.log_path or LOGGING_DISABLED),
        "Interval: %d seconds" % config.interval,
        "Battery Path: %s" % config.battery_path,
        "Start Time: %s" % format_start_time(state.start_time),
    ]

    # log size only makes sense once logging is on and the file is there
    if config.log_path and os.path.isfile(config.log_path):
        usage = disk_usage(config.log_path)
        if usage is not None:
            lines.append(SEPARATOR)
            lines.append("Current Log File Size: %s" % human_size(usage))

    lines += [
        "",
        DATA_BANNER,
        field("current_now", sample.current, "µA"),
        field("charge_now", sample.charge, "µAh"),
        field("capacity", sample.capacity, "%"),
        field("voltage_now", sample.voltage, "µV"),
        field("temperature", sample.temperature, "°C"),
        field("charging status", sample.status),
        SEPARATOR,
    ]

    if max_runtime > 0:
        lines.append(progress_line(elapsed, max_runtime))
    else:
        lines.append(INDEFINITE_MESSAGE)
    return "\n".join(lines) + "\n"


class Screen:
    def __init__(self, console=None):
        self.console = console or Console()

    def show(self, text):
        self.console.clear()
        self.console.print(text, markup=False, highlight=False, emoji=False, end="")

    def announce(self, message):
        self.console.print(message, markup=False, highlight=False, emoji=False)
