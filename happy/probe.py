import io
import sys

from happy.core.collector import Collector
from happy.core.models import ProbeConfig
from happy.core.multiplexer import ReadinessMultiplexer
from happy.core.prober import Prober
from happy.core.ranker import rank
from happy.core.registry import TargetRegistry
from happy.core.resolver import EndpointResolver
from happy.core.rounds import RoundController
from happy.logging import Logger
from happy.reporting import HumanReport, MachineReport, OutputLock, Report


class HappyProbe:
    """
    Runs a complete measurement: resolve every target, run the
    configured number of rounds, optionally rank endpoints, and write
    the report while holding the output lock.
    """

    def __init__(
        self,
        config: ProbeConfig,
        logger: Logger | None = None,
    ) -> None:
        if logger is None:
            logger = Logger()

        self.config = config
        self.registry = TargetRegistry()

        self._logger = logger
        self._resolver = EndpointResolver(
            rounds=config.queries,
            logger=logger,
        )

        self._multiplexer = ReadinessMultiplexer()
        self._collector = Collector(
            config,
            self._multiplexer,
        )
        self._prober = Prober(
            config,
            self._multiplexer,
            self._collector,
            logger=logger,
        )
        self._rounds = RoundController(
            config,
            self._prober,
            self._collector,
            logger=logger,
        )

    async def add_targets(
        self,
        hosts: list[str],
        ports: list[str],
    ):
        self.registry.extend(
            await self._resolver.resolve_many([
                (host, port) for host in hosts for port in ports
            ])
        )

    async def measure(self):
        if not self.registry.has_endpoints:
            return

        await self._rounds.run(self.registry)

        if self.config.sort:
            rank(self.registry)

    async def report(self, output: io.TextIOBase | None = None):
        if output is None:
            output = sys.stdout

        if not self.registry.has_endpoints:
            return

        async with OutputLock(output, logger=self._logger) as destination:
            await self.create_report().write(
                self.registry,
                destination,
            )

    def create_report(self) -> Report:
        if self.config.machine:
            return MachineReport(logger=self._logger)

        return HumanReport(logger=self._logger)

    async def run(
        self,
        hosts: list[str],
        ports: list[str],
        output: io.TextIOBase | None = None,
    ):
        await self.add_targets(hosts, ports)
        await self.measure()
        await self.report(output)

        return self.registry
