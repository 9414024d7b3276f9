import msgspec

from .outcome import Outcome


class Sample(msgspec.Struct, frozen=True):
    elapsed: int
    outcome: Outcome

    @property
    def ok(self) -> bool:
        return self.outcome == Outcome.SUCCESS

    @property
    def value(self) -> int:
        """
        The signed microsecond form of the sample. Failures and timeouts
        are always strictly negative, even when they completed within
        the first microsecond.
        """
        if self.ok:
            return self.elapsed

        return -max(self.elapsed, 1)
