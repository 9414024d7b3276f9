class ProbeError(Exception):
    pass


class ProbeFatalError(ProbeError):
    """Raised when the probe cannot make further progress."""


class MultiplexerError(ProbeFatalError):
    def __init__(self, error: Exception):
        self.error = error
        super().__init__(f"readiness wait failed: {error}")


class SocketStatusError(ProbeFatalError):
    def __init__(self, error: Exception):
        self.error = error
        super().__init__(f"getsockopt: {error}")


class SampleOverflowError(ProbeError):
    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(
            f"Err. - endpoint already holds {capacity} samples"
        )
