import socket

from .clock import Clock, monotonic_us
from .errors import SocketStatusError
from .models import Endpoint, Outcome, ProbeConfig
from .multiplexer import ReadinessMultiplexer
from .registry import TargetRegistry


class Collector:
    """
    Drives launched connection attempts to a verdict for the round:
    success, failure, or timeout.
    """

    def __init__(
        self,
        config: ProbeConfig,
        multiplexer: ReadinessMultiplexer,
        clock: Clock = monotonic_us,
    ) -> None:
        self._config = config
        self._multiplexer = multiplexer
        self._clock = clock

    def update(
        self,
        registry: TargetRegistry,
        ready: set[Endpoint],
    ):
        """
        Apply timeouts and completions to every in-flight endpoint. A
        timeout takes precedence over readiness reported by the same
        wait.
        """
        now = self._clock()
        timeout = self._config.timeout_us

        for endpoint in registry.in_flight():
            elapsed = max(now - endpoint.launched_at, 0)

            if timeout and elapsed >= timeout:
                endpoint.record(elapsed, Outcome.TIMEOUT)
                endpoint.release()

            elif endpoint in ready:
                outcome = self._connect_outcome(endpoint)
                endpoint.record(elapsed, outcome)
                endpoint.release()

    async def collect(self, registry: TargetRegistry):
        while pending := registry.in_flight():
            ready = await self._multiplexer.wait(
                pending,
                timeout=self._config.timeout_seconds,
            )

            self.update(registry, ready)

    def _connect_outcome(self, endpoint: Endpoint) -> Outcome:
        try:
            error = endpoint.socket.getsockopt(
                socket.SOL_SOCKET,
                socket.SO_ERROR,
            )

        except OSError as err:
            endpoint.release()
            raise SocketStatusError(err) from err

        if error == 0:
            return Outcome.SUCCESS

        return Outcome.FAILURE
