# Log file format: UTF-8 CSV, one header line followed by one line per sample.
# Columns: Timestamp, Current (µA), Voltage (µV), Capacity (%), Charge (µAh),
# Temperature (°C), Charging (1/0). Unreadable values are written as N/A.

import csv
import os

LOG_FILE_FIELDS = ["Timestamp", "Current (µA)", "Voltage (µV)", "Capacity (%)",
                   "Charge (µAh)", "Temperature (°C)", "Charging"]
HEADER = ",".join(LOG_FILE_FIELDS)
UNAVAILABLE = "N/A"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_value(value):
    if value is None:
        return UNAVAILABLE
    if isinstance(value, float):
        return "%.1f" % value
    return str(value)


def format_record(sample):
    return [
        sample.timestamp.strftime(TIMESTAMP_FORMAT),
        format_value(sample.current),
        format_value(sample.voltage),
        format_value(sample.capacity),
        format_value(sample.charge),
        format_value(sample.temperature),
        "1" if sample.is_charging else "0",
    ]


def write_row(path, fields):
    # the file is closed after every row so an interrupt never loses a record
    with open(path, "a", encoding="utf-8", newline="") as log:
        writer = csv.writer(log, lineterminator="\n")
        writer.writerow(fields)


# Creates the log file with its header line if it does not exist yet.
# Safe to call before every append.
def ensure_header(path):
    if os.path.exists(path):
        return False
    write_row(path, LOG_FILE_FIELDS)
    return True


def append(path, sample):
    write_row(path, format_record(sample))
