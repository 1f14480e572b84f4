# The sampling loop. Each tick: check the runtime limit, read the battery,
# append to the log, redraw the interface, then sleep for one interval.
# Sleep drift from reading and drawing is not compensated.

import datetime
import logging
import time
from dataclasses import dataclass
from typing import Optional

from battlog import display, record
from battlog.sensors import Sample

log = logging.getLogger(__name__)


class SystemClock:
    def now(self):
        return time.time()

    def sleep(self, seconds):
        time.sleep(seconds)


@dataclass
class SessionState:
    start_time: float
    last_sample: Optional[Sample] = None
    ticks: int = 0


class LoopController:
    def __init__(self, config, reader, clock=None, screen=None):
        self.config = config
        self.reader = reader
        self.clock = clock or SystemClock()
        self.screen = screen
        if self.screen is None and config.display_enabled:
            self.screen = display.Screen()
        self.state = None

    def start(self):
        self.state = SessionState(start_time=self.clock.now())
        log.debug("Session started at %s", self.state.start_time)
        return self.state

    def elapsed(self):
        return int(self.clock.now() - self.state.start_time)

    def finished(self, elapsed):
        return self.config.max_runtime > 0 and elapsed >= self.config.max_runtime

    def log_sample(self, sample):
        try:
            record.ensure_header(self.config.log_path)
            record.append(self.config.log_path, sample)
        except OSError as e:
            # the next tick tries again
            log.error("Could not write to %s: %s", self.config.log_path, e)

    # Run one iteration. Returns False once the runtime limit is reached.
    def tick(self):
        if self.state is None:
            self.start()
        elapsed = self.elapsed()
        if self.finished(elapsed):
            log.info("Reached maximum runtime of %d seconds", self.config.max_runtime)
            if self.config.display_enabled:
                self.screen.announce("Reached maximum runtime of %d seconds. Exiting."
                                     % self.config.max_runtime)
            return False

        now = datetime.datetime.fromtimestamp(self.clock.now()).replace(microsecond=0)
        sample = self.reader.read(self.config.battery_path, timestamp=now)
        if self.config.logging_enabled:
            self.log_sample(sample)
        if self.config.display_enabled:
            self.screen.show(display.render(self.config, self.state, sample,
                                            elapsed, self.config.max_runtime))

        self.state.last_sample = sample
        self.state.ticks += 1
        return True

    def run(self):
        self.start()
        while self.tick():
            self.clock.sleep(self.config.interval)
        return self.state
