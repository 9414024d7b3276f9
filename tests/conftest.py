"""
Shared fixtures for the probe tests.

Network tests only ever touch loopback addresses. Anything that needs
a specific timing or a specific connect outcome uses fake sockets and a
controllable clock instead.
"""

import socket
from typing import Generator
from unittest.mock import MagicMock

import pytest

from happy.core.models import Endpoint, ProbeConfig, Target
from happy.core.registry import TargetRegistry
from happy.logging import LoggingConfig


class FakeClock:
    def __init__(self, now: int = 0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, microseconds: int):
        self.now += microseconds


@pytest.fixture(autouse=True)
def configure_logging():
    config = LoggingConfig()
    config.update(log_level="info", log_output="stderr")
    yield
    config.update(log_level="info", log_output="stderr")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def listener() -> Generator[int, None, None]:
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    server.bind(("127.0.0.1", 0))
    server.listen(128)

    try:
        yield server.getsockname()[1]

    finally:
        server.close()


@pytest.fixture
def closed_port() -> int:
    probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()

    return port


@pytest.fixture
def fake_socket_factory():
    def create_socket(so_error: int = 0) -> MagicMock:
        fake_socket = MagicMock(spec=socket.socket)
        fake_socket.getsockopt.return_value = so_error
        fake_socket.fileno.return_value = -1
        return fake_socket

    return create_socket


@pytest.fixture
def endpoint_factory():
    def create_endpoint(
        address: str = "127.0.0.1",
        port: int = 80,
        capacity: int = 3,
        family: int = socket.AF_INET,
    ) -> Endpoint:
        sockaddr = (address, port) if family == socket.AF_INET else (address, port, 0, 0)

        return Endpoint(
            family=family,
            socktype=socket.SOCK_STREAM,
            protocol=socket.IPPROTO_TCP,
            address=sockaddr,
            capacity=capacity,
        )

    return create_endpoint


@pytest.fixture
def registry_factory():
    def create_registry(*targets: Target) -> TargetRegistry:
        registry = TargetRegistry()
        for target in targets:
            registry.append(target)

        return registry

    return create_registry


@pytest.fixture
def probe_config_factory():
    def create_config(**overrides) -> ProbeConfig:
        values = {
            "queries": 3,
            "timeout": 500,
            "delay": 0,
        }
        values.update(overrides)
        return ProbeConfig(**values)

    return create_config


class ScriptedMultiplexer:
    """
    Replays a list of (advance_us, ready_indexes) steps, moving the
    clock forward before each wait returns.
    """

    def __init__(self, clock: FakeClock, endpoints: list[Endpoint], steps) -> None:
        self._clock = clock
        self._endpoints = endpoints
        self._steps = list(steps)
        self.waits: list[float | None] = []

    async def wait(self, pending, timeout=None):
        self.waits.append(timeout)
        advance, ready = self._steps.pop(0)
        self._clock.advance(advance)

        return {self._endpoints[index] for index in ready}


@pytest.fixture
def scripted_multiplexer_factory(clock: FakeClock):
    def create_multiplexer(endpoints: list[Endpoint], steps) -> ScriptedMultiplexer:
        return ScriptedMultiplexer(clock, endpoints, steps)

    return create_multiplexer
