from .models import Entry, LogLevel


class ResolutionError(Entry, kw_only=True):
    host: str
    port: str
    error: str
    level: LogLevel = LogLevel.ERROR

class SocketError(Entry, kw_only=True):
    host: str
    port: str
    address: str
    call: str
    error: str
    level: LogLevel = LogLevel.ERROR

class ReportError(Entry, kw_only=True):
    host: str
    port: str
    error: str
    level: LogLevel = LogLevel.ERROR

class LockWarning(Entry, kw_only=True):
    call: str
    error: str
    level: LogLevel = LogLevel.WARN

class ProbeFatal(Entry, kw_only=True):
    error: str
    level: LogLevel = LogLevel.FATAL

class ResolverDebug(Entry, kw_only=True):
    host: str
    port: str
    endpoints: int
    level: LogLevel = LogLevel.DEBUG

class RoundDebug(Entry, kw_only=True):
    round: int
    rounds: int
    launched: int
    level: LogLevel = LogLevel.DEBUG

class RoundTrace(Entry, kw_only=True):
    round: int
    rounds: int
    elapsed: float
    level: LogLevel = LogLevel.TRACE
