import errno
import os
import socket

from happy.logging import Logger
from happy.logging.happy_logging_models import SocketError

from .clock import Clock, monotonic_us
from .collector import Collector
from .models import Endpoint, ProbeConfig, Target
from .multiplexer import ReadinessMultiplexer
from .registry import TargetRegistry


UNSUPPORTED_ERRNOS = (
    errno.EAFNOSUPPORT,
    errno.EPROTONOSUPPORT,
)

IN_PROGRESS_ERRNOS = (
    0,
    errno.EINPROGRESS,
)


class Prober:
    """
    Launches one non-blocking connection attempt per endpoint. Launches
    are spaced by the configured delay to avoid bursts of SYN packets,
    and attempts already in flight keep being collected while waiting
    between launches.
    """

    def __init__(
        self,
        config: ProbeConfig,
        multiplexer: ReadinessMultiplexer,
        collector: Collector,
        logger: Logger | None = None,
        clock: Clock = monotonic_us,
    ) -> None:
        self._config = config
        self._multiplexer = multiplexer
        self._collector = collector
        self._clock = clock

        if logger is None:
            logger = Logger()

        self._logger = logger

    async def launch(self, registry: TargetRegistry) -> int:
        launched = 0

        for target, endpoint in list(registry.endpoints()):

            if self._config.delay:
                await self._pace(registry)

            if await self._connect(target, endpoint):
                launched += 1

        return launched

    async def _pace(self, registry: TargetRegistry):
        started = self._clock()
        delay = self._config.delay_us

        while (elapsed := self._clock() - started) < delay:
            ready = await self._multiplexer.wait(
                registry.in_flight(),
                timeout=(delay - elapsed) / 1_000_000,
            )

            self._collector.update(registry, ready)

    async def _connect(
        self,
        target: Target,
        endpoint: Endpoint,
    ) -> bool:
        try:
            sock = socket.socket(
                endpoint.family,
                endpoint.socktype,
                endpoint.protocol,
            )

        except OSError as err:
            if err.errno not in UNSUPPORTED_ERRNOS:
                await self._report(target, endpoint, "socket", err)

            return False

        try:
            sock.setblocking(False)

        except OSError as err:
            sock.close()
            await self._report(target, endpoint, "fcntl", err)

            return False

        try:
            result = sock.connect_ex(endpoint.address)

        except OSError as err:
            result = err.errno

        if result not in IN_PROGRESS_ERRNOS:
            sock.close()
            await self._report(
                target,
                endpoint,
                "connect",
                OSError(result, os.strerror(result)),
            )

            return False

        endpoint.launch(sock, self._clock())

        return True

    async def _report(
        self,
        target: Target,
        endpoint: Endpoint,
        call: str,
        err: OSError,
    ):
        message = err.strerror or str(err)

        await self._logger.log(
            SocketError(
                message=f"{call}: {message} (skipping {target.host} port {target.port})",
                host=target.host,
                port=target.port,
                address=str(endpoint.address[0]),
                call=call,
                error=message,
            ),
            name="happy",
        )
