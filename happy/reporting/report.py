import asyncio
import io
import socket
from abc import ABC, abstractmethod

from happy.core.models import Endpoint, Target
from happy.core.registry import TargetRegistry
from happy.logging import Logger
from happy.logging.happy_logging_models import ReportError


class Report(ABC):
    """
    Base for the report renderers. Subclasses turn the final registry
    state into lines; writing the lines is shared.
    """

    def __init__(self, logger: Logger | None = None) -> None:
        if logger is None:
            logger = Logger()

        self._logger = logger

    async def write(
        self,
        registry: TargetRegistry,
        output: io.TextIOBase,
    ):
        lines = await self.render(registry)

        if len(lines) > 0:
            loop = asyncio.get_running_loop()
            await loop.run_in_executor(
                None,
                output.write,
                "\n".join(lines) + "\n",
            )

    @abstractmethod
    async def render(self, registry: TargetRegistry) -> list[str]:
        ...

    async def numeric_host(
        self,
        target: Target,
        endpoint: Endpoint,
    ) -> str | None:
        try:
            host, _ = socket.getnameinfo(
                endpoint.address,
                socket.NI_NUMERICHOST | socket.NI_NUMERICSERV,
            )

            return host

        except (socket.gaierror, OSError) as err:
            await self._logger.log(
                ReportError(
                    message=f"getnameinfo: {err}",
                    host=target.host,
                    port=target.port,
                    error=str(err),
                ),
                name="happy",
            )

            return None
