from happy.core.models import Sample
from happy.core.registry import TargetRegistry

from .report import Report


ADDRESS_WIDTH = 42
FAILED_SAMPLE = "     *   "


def format_sample(sample: Sample) -> str:
    if sample.ok:
        return f" {sample.value // 1000:4d}.{sample.value % 1000:03d}"

    return FAILED_SAMPLE


class HumanReport(Report):
    """
    One header per target followed by one line per endpoint showing
    each round's connect time in milliseconds, or `*` for rounds that
    failed or timed out.
    """

    async def render(self, registry: TargetRegistry) -> list[str]:
        lines: list[str] = []

        for target in registry.active():
            if lines:
                lines.append("")

            lines.append(target.name)

            for endpoint in target.endpoints:
                host = await self.numeric_host(target, endpoint)
                if host is None:
                    continue

                samples = "".join(
                    format_sample(sample) for sample in endpoint.samples
                )

                lines.append(
                    f" {host}".ljust(ADDRESS_WIDTH) + samples
                )

        return lines
