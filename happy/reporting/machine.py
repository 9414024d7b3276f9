import time

from happy.core.registry import TargetRegistry

from .report import Report


RECORD_TAG = "HAPPY.0"


class MachineReport(Report):
    """
    Semicolon separated records, one per endpoint, for consumption by
    other programs:

        HAPPY.0;<unix time>;<OK|FAIL>;<host>;<port>;<address>;<µs>;...

    Every sample is written as a signed microsecond count, negative for
    failed or timed out attempts.
    """

    async def render(self, registry: TargetRegistry) -> list[str]:
        now = int(time.time())
        lines: list[str] = []

        for target in registry.active():
            for endpoint in target.endpoints:
                host = await self.numeric_host(target, endpoint)
                if host is None:
                    continue

                status = "OK" if endpoint.completed else "FAIL"

                fields = [
                    RECORD_TAG,
                    str(now),
                    status,
                    target.host,
                    target.port,
                    host,
                    *[str(sample.value) for sample in endpoint.samples],
                ]

                lines.append(";".join(fields))

        return lines
