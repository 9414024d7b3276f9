from typing import Iterator

from .models import Endpoint, Target


class TargetRegistry:
    """
    Append-only, insertion-ordered collection of targets. Every stage of
    a run is handed the same registry and walks it in the order targets
    were added.
    """

    def __init__(self) -> None:
        self._targets: list[Target] = []

    def __iter__(self) -> Iterator[Target]:
        return iter(self._targets)

    def __len__(self) -> int:
        return len(self._targets)

    def __getitem__(self, index: int) -> Target:
        return self._targets[index]

    def append(self, target: Target | None):
        if target is not None:
            self._targets.append(target)

    def extend(self, targets: list[Target | None]):
        for target in targets:
            self.append(target)

    @property
    def has_endpoints(self) -> bool:
        return any(target.active for target in self._targets)

    def active(self) -> Iterator[Target]:
        for target in self._targets:
            if target.active:
                yield target

    def endpoints(self) -> Iterator[tuple[Target, Endpoint]]:
        for target in self.active():
            for endpoint in target.endpoints:
                if endpoint.active:
                    yield target, endpoint

    def in_flight(self) -> list[Endpoint]:
        return [
            endpoint for _, endpoint in self.endpoints() if endpoint.in_flight
        ]
