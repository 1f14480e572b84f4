import os

from battlog.sensors import TemperatureSource

BATTERY_FILES = {
    "current_now": "1523000",
    "voltage_now": "12450000",
    "capacity": "87",
    "charge_now": "4210000",
    "status": "Charging",
}


def make_battery(root, name="BAT0", skip=(), **overrides):
    path = os.path.join(root, name)
    os.makedirs(path, exist_ok=True)
    files = dict(BATTERY_FILES, **overrides)
    for attribute, value in files.items():
        if attribute in skip:
            continue
        with open(os.path.join(path, attribute), "w") as f:
            f.write(value + "\n")
    return path


class FixedTemperature(TemperatureSource):
    name = "fixed"

    def __init__(self, value=41.5):
        self.value = value

    def read(self):
        return self.value


class BrokenTemperature(TemperatureSource):
    name = "broken"

    def read(self):
        raise RuntimeError("sensor exploded")


class FakeClock:
    def __init__(self, now=1733313600.0):
        self.current = now
        self.sleeps = []

    def now(self):
        return self.current

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.current += seconds

    def advance(self, seconds):
        self.current += seconds


class FakeScreen:
    def __init__(self):
        self.shown = []
        self.announcements = []

    def show(self, text):
        self.shown.append(text)

    def announce(self, message):
        self.announcements.append(message)
