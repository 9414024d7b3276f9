import time

from happy.logging import Logger
from happy.logging.happy_logging_models import RoundDebug, RoundTrace

from .collector import Collector
from .models import ProbeConfig
from .prober import Prober
from .registry import TargetRegistry


class RoundController:

    def __init__(
        self,
        config: ProbeConfig,
        prober: Prober,
        collector: Collector,
        logger: Logger | None = None,
    ) -> None:
        self._config = config
        self._prober = prober
        self._collector = collector

        if logger is None:
            logger = Logger()

        self._logger = logger

    async def run(self, registry: TargetRegistry):
        rounds = self._config.queries

        for round_number in range(1, rounds + 1):
            start = time.monotonic()

            launched = await self._prober.launch(registry)

            await self._logger.log(
                RoundDebug(
                    message=f"round {round_number}/{rounds} launched {launched} connections",
                    round=round_number,
                    rounds=rounds,
                    launched=launched,
                ),
                name="happy",
            )

            await self._collector.collect(registry)

            elapsed = time.monotonic() - start

            await self._logger.log(
                RoundTrace(
                    message=f"round {round_number}/{rounds} completed in {elapsed:.3f}s",
                    round=round_number,
                    rounds=rounds,
                    elapsed=elapsed,
                ),
                name="happy",
            )
