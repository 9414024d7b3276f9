import asyncio
import datetime
import io
import os
import pathlib
import sys
import threading
from typing import (
    Callable,
    TypeVar,
)

import msgspec

from happy.logging.config.logging_config import LoggingConfig
from happy.logging.config.stream_type import StreamType
from happy.logging.models import Entry, Log

T = TypeVar('T', bound=Entry)


DEFAULT_TEMPLATE = "{timestamp} - {level} - {thread_id} - {filename}:{function_name}.{line_number} - {message}"


class LoggerStream:
    """
    Writes log entries for one named logger. Every enabled entry is
    rendered through the template to stdout or stderr. When a logfile
    is set the entry is also appended to it as one JSON object per line.
    """

    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        logfile: str | None = None,
        stdout: io.TextIOBase | None = None,
        stderr: io.TextIOBase | None = None,
    ) -> None:
        if name is None:
            name = "default"

        self._name = name
        self._default_template = template
        self._logfile_path = (
            str(pathlib.Path(logfile).absolute()) if logfile else None
        )

        self._init_lock = asyncio.Lock()
        self._file_lock = asyncio.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._logfile: io.BufferedIOBase | None = None

        self._config = LoggingConfig()
        self._initialized: bool = False

        self._stdout = stdout
        self._stderr = stderr

    async def initialize(self):

        async with self._init_lock:

            if self._initialized:
                return

            if self._loop is None:
                self._loop = asyncio.get_running_loop()

            self._initialized = True

    def _open_file(self, logfile_path: str):
        logfile_directory = os.path.dirname(logfile_path)
        os.makedirs(logfile_directory, exist_ok=True)

        return open(logfile_path, "ab")

    async def close(self):
        if self._logfile is not None:
            async with self._file_lock:
                await self._loop.run_in_executor(
                    None,
                    self._logfile.close,
                )

            self._logfile = None

        self._initialized = False

    def _get_stream(self, stream_type: StreamType) -> io.TextIOBase:
        if stream_type == StreamType.STDOUT:
            return self._stdout or sys.stdout

        return self._stderr or sys.stderr

    async def log(
        self,
        log: Log[T],
        template: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        entry = log.entry

        if self._config.enabled(self._name, entry.level) is False:
            return

        if filter and filter(entry) is False:
            return

        if self._initialized is False:
            await self.initialize()

        if template is None:
            template = self._default_template or DEFAULT_TEMPLATE

        await self._log(log, template)

        if self._logfile_path:
            await self._log_to_file(log)

    async def _log(
        self,
        log: Log[T],
        template: str,
    ):
        stream = self._get_stream(self._config.output)

        await self._loop.run_in_executor(
            None,
            self._write_to_stream,
            stream,
            log.entry.to_template(
                template,
                context={
                    "filename": log.filename,
                    "function_name": log.function_name,
                    "line_number": log.line_number,
                    "thread_id": threading.get_native_id(),
                    "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
                },
            ),
        )

    def _write_to_stream(
        self,
        stream: io.TextIOBase,
        message: str,
    ):
        stream.write(message + "\n")
        stream.flush()

    async def _log_to_file(self, log: Log[T]):
        async with self._file_lock:
            if self._logfile is None:
                self._logfile = await self._loop.run_in_executor(
                    None,
                    self._open_file,
                    self._logfile_path,
                )

            await self._loop.run_in_executor(
                None,
                self._write_to_file,
                log,
            )

    def _write_to_file(self, log: Log[T]):
        if self._logfile is None or self._logfile.closed:
            return

        self._logfile.write(msgspec.json.encode(log) + b"\n")
        self._logfile.flush()
