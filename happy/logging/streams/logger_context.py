import io

from .logger_stream import LoggerStream


class LoggerContext:
    def __init__(
        self,
        name: str | None = None,
        template: str | None = None,
        logfile: str | None = None,
        stdout: io.TextIOBase | None = None,
        stderr: io.TextIOBase | None = None,
        nested: bool = False,
    ) -> None:
        self.name = name
        self.template = template
        self.logfile = logfile
        self.stream = LoggerStream(
            name=name,
            template=template,
            logfile=logfile,
            stdout=stdout,
            stderr=stderr,
        )
        self.nested = nested

    async def __aenter__(self):
        await self.stream.initialize()

        return self.stream

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.nested is False:
            await self.stream.close()
