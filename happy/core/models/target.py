from dataclasses import dataclass, field

from .endpoint import Endpoint


@dataclass(slots=True)
class Target:
    host: str
    port: str
    endpoints: list[Endpoint] = field(default_factory=list)

    @property
    def active(self) -> bool:
        return bool(self.host and self.port and self.endpoints)

    @property
    def name(self) -> str:
        return f"{self.host}:{self.port}"
