# battlog - periodic battery telemetry logger for Linux-based operating systems

# Battery attributes are read from /sys/class/power_supply/<BAT>/. Every
# attribute is a small text file; any of them may be missing depending on the
# driver (some batteries expose energy_* instead of charge_*), so each one is
# read on its own and a failure only blanks that field.

# Kernel specifications for /sys/class/power_supply:
# https://www.kernel.org/doc/Documentation/ABI/testing/sysfs-class-power

import datetime
import glob
import logging
import os
import shutil
import subprocess
from dataclasses import dataclass
from typing import Optional

import psutil

log = logging.getLogger(__name__)

POWER_SUPPLY_PATH = "/sys/class/power_supply"
UNKNOWN_STATUS = "Unknown"
ACPI_TIMEOUT = 5

# Preferred psutil chips for the battery/system temperature, in order
PREFERRED_CHIPS = ["acpitz", "BAT0", "BAT1", "coretemp", "k10temp"]


@dataclass(frozen=True)
class Sample:
    timestamp: datetime.datetime
    current: Optional[int] = None
    voltage: Optional[int] = None
    capacity: Optional[int] = None
    charge: Optional[int] = None
    temperature: Optional[float] = None
    status: str = UNKNOWN_STATUS

    @property
    def is_charging(self):
        return self.status == "Charging"


# Reads the entire contents of the file specified, stripped of whitespace at
# the ends. None is returned if the file doesn't exist or is not readable.
def read_path(path):
    try:
        with open(path, "r") as f:
            return f.read().strip()
    except (OSError, UnicodeDecodeError) as e:
        log.debug("Could not read %s: %s", path, e)
        return None


def read_int(path):
    value = read_path(path)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        log.debug("Non-numeric value %r in %s", value, path)
        return None


def parse_float(s):
    try:
        return float(s)
    except (TypeError, ValueError):
        return None


# Returns the first battery (BAT*) under root, or None if there is none.
def find_battery(root=POWER_SUPPLY_PATH):
    batteries = sorted(glob.glob(os.path.join(root, "BAT*")))
    if not batteries:
        return None
    return batteries[0]


# Something that can report a temperature in degrees Celsius
class TemperatureSource:
    name = "none"

    def read(self) -> Optional[float]:
        return None


class PsutilTemperatureSource(TemperatureSource):
    name = "psutil"

    def read(self):
        # not every platform psutil supports has temperature sensors
        if not hasattr(psutil, "sensors_temperatures"):
            return None
        try:
            temps = psutil.sensors_temperatures()
        except (OSError, RuntimeError) as e:
            log.debug("psutil temperature query failed: %s", e)
            return None
        if not temps:
            return None
        chips = [c for c in PREFERRED_CHIPS if c in temps]
        chips += [c for c in sorted(temps) if c not in chips]
        for chip in chips:
            for entry in temps[chip]:
                if entry.current is not None:
                    return float(entry.current)
        return None


# Temperature of the first thermal zone as reported by acpi -t. acpi prints
# one line per zone, e.g. "Thermal 0: ok, 45.0 degrees C"; the reading is the
# fourth whitespace separated field.
class AcpiTemperatureSource(TemperatureSource):
    name = "acpi"

    def __init__(self, command="acpi"):
        self.command = command

    def read(self):
        executable = shutil.which(self.command)
        if executable is None:
            return None
        try:
            result = subprocess.run([executable, "-t"], capture_output=True,
                                    text=True, timeout=ACPI_TIMEOUT)
        except (OSError, subprocess.SubprocessError) as e:
            log.debug("acpi -t failed: %s", e)
            return None
        return self.parse(result.stdout)

    @staticmethod
    def parse(output):
        lines = output.strip().splitlines()
        if not lines:
            return None
        fields = lines[0].split()
        if len(fields) < 4:
            return None
        return parse_float(fields[3])


TEMPERATURE_SOURCES = {
    PsutilTemperatureSource.name: PsutilTemperatureSource,
    AcpiTemperatureSource.name: AcpiTemperatureSource,
}


def make_temperature_source(name):
    try:
        return TEMPERATURE_SOURCES[name]()
    except KeyError:
        raise ValueError("unknown temperature source: " + name) from None


class SensorReader:
    def __init__(self, temperature_source=None):
        self.temperature_source = temperature_source or TemperatureSource()

    def read_temperature(self):
        try:
            return self.temperature_source.read()
        except Exception:
            # a broken source only blanks the temperature column
            log.exception("Temperature source %s failed", self.temperature_source.name)
            return None

    # Read one Sample from battery_path; unreadable attributes are None
    def read(self, battery_path, timestamp=None):
        def attr(name):
            return os.path.join(battery_path, name)

        status = read_path(attr("status"))
        return Sample(
            timestamp=timestamp or datetime.datetime.now().replace(microsecond=0),
            current=read_int(attr("current_now")),
            voltage=read_int(attr("voltage_now")),
            capacity=read_int(attr("capacity")),
            charge=read_int(attr("charge_now")),
            temperature=self.read_temperature(),
            status=status or UNKNOWN_STATUS,
        )
