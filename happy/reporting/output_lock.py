import asyncio
import fcntl
import io
import os
import stat

from happy.logging import Logger
from happy.logging.happy_logging_models import LockWarning


class OutputLock:
    """
    Exclusive advisory lock over a report destination, so independent
    runs appending to one shared file do not interleave their records.
    Only regular files are locked; terminals, pipes, and in-memory
    streams are written without a lock.
    """

    def __init__(
        self,
        output: io.TextIOBase,
        logger: Logger | None = None,
    ) -> None:
        self._output = output
        self._fileno: int | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

        if logger is None:
            logger = Logger()

        self._logger = logger

    @property
    def locked(self) -> bool:
        return self._fileno is not None

    async def __aenter__(self):
        self._loop = asyncio.get_running_loop()

        fileno = self._regular_fileno()
        if fileno is None:
            return self._output

        try:
            await self._loop.run_in_executor(
                None,
                self._lock,
                fileno,
                fcntl.LOCK_EX,
            )

            self._fileno = fileno

        except OSError as err:
            await self._warn(err)

        return self._output

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        fileno = self._fileno
        if fileno is None:
            return

        self._fileno = None

        try:
            await self._loop.run_in_executor(
                None,
                self._output.flush,
            )

        finally:
            try:
                await self._loop.run_in_executor(
                    None,
                    self._lock,
                    fileno,
                    fcntl.LOCK_UN,
                )

            except OSError as err:
                await self._warn(err)

    def _regular_fileno(self) -> int | None:
        try:
            fileno = self._output.fileno()

        except (AttributeError, ValueError, io.UnsupportedOperation):
            return None

        if stat.S_ISREG(os.fstat(fileno).st_mode):
            return fileno

        return None

    def _lock(self, fileno: int, operation: int):
        fcntl.lockf(fileno, operation, 0, 0, os.SEEK_END)

    async def _warn(self, err: OSError):
        await self._logger.log(
            LockWarning(
                message=f"fcntl: {err.strerror or err} (ignored)",
                call="fcntl",
                error=str(err),
            ),
            name="happy",
        )
