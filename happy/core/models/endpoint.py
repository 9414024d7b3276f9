from __future__ import annotations

import socket
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from happy.core.errors import SampleOverflowError

from .outcome import Outcome
from .sample import Sample


class EndpointState(Enum):
    IDLE = "IDLE"
    LAUNCHED = "LAUNCHED"


@dataclass(slots=True, eq=False)
class Endpoint:
    """
    One resolved address of a target along with the state of the
    connection attempt currently in flight and the samples gathered
    over all rounds so far.
    """

    family: int
    socktype: int
    protocol: int
    address: tuple[Any, ...]
    capacity: int

    socket: socket.socket | None = None
    launched_at: int = 0

    samples: list[Sample] = field(default_factory=list)
    success_sum: int = 0
    successes: int = 0
    completed: int = 0

    @property
    def active(self) -> bool:
        return bool(self.address)

    @property
    def in_flight(self) -> bool:
        return self.socket is not None

    @property
    def state(self) -> EndpointState:
        return EndpointState.LAUNCHED if self.in_flight else EndpointState.IDLE

    @property
    def cursor(self) -> int:
        return len(self.samples)

    @property
    def mean_latency(self) -> float | None:
        if self.successes == 0:
            return None

        return self.success_sum / self.successes

    def launch(self, sock: socket.socket, launched_at: int):
        self.socket = sock
        self.launched_at = launched_at

    def record(self, elapsed: int, outcome: Outcome):
        if len(self.samples) >= self.capacity:
            raise SampleOverflowError(self.capacity)

        self.samples.append(
            Sample(elapsed, outcome)
        )

        if outcome == Outcome.SUCCESS:
            self.success_sum += elapsed
            self.successes += 1
            self.completed += 1

        elif outcome == Outcome.FAILURE:
            self.completed += 1

    def release(self):
        if self.socket is not None:
            self.socket.close()

        self.socket = None
