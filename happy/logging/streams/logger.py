from __future__ import annotations

import datetime
import io
import sys
import threading
from typing import (
    Callable,
    Dict,
    TypeVar,
)

from happy.logging.models import Entry, Log

from .logger_context import LoggerContext

T = TypeVar('T', bound=Entry)


class Logger:
    def __init__(
        self,
        stdout: io.TextIOBase | None = None,
        stderr: io.TextIOBase | None = None,
    ) -> None:
        self._contexts: Dict[str, LoggerContext] = {}
        self._stdout = stdout
        self._stderr = stderr

    def configure(
        self,
        name: str | None = None,
        template: str | None = None,
        path: str | None = None,
    ):
        if name is None:
            name = 'default'

        self._contexts[name] = LoggerContext(
            name=name,
            template=template,
            logfile=path,
            stdout=self._stdout,
            stderr=self._stderr,
        )

    def context(
        self,
        name: str | None = None,
        nested: bool = False,
    ):
        if name is None:
            name = 'default'

        if self._contexts.get(name) is None:
            self._contexts[name] = LoggerContext(
                name=name,
                stdout=self._stdout,
                stderr=self._stderr,
                nested=nested,
            )

        else:
            self._contexts[name].nested = nested

        return self._contexts[name]

    async def log(
        self,
        entry: T,
        name: str | None = None,
        template: str | None = None,
        filter: Callable[[T], bool] | None = None,
    ):
        if name is None:
            name = 'default'

        frame = sys._getframe(1)
        code = frame.f_code

        async with self.context(
            name=name,
            nested=True,
        ) as stream:
            await stream.log(
                Log(
                    entry=entry,
                    filename=code.co_filename,
                    function_name=code.co_name,
                    line_number=frame.f_lineno,
                    thread_id=threading.get_native_id(),
                    timestamp=datetime.datetime.now(datetime.UTC).isoformat()
                ),
                template=template,
                filter=filter,
            )

    async def close(self):
        for context in self._contexts.values():
            await context.stream.close()
