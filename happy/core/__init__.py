from .collector import Collector as Collector
from .errors import (
    MultiplexerError as MultiplexerError,
    ProbeError as ProbeError,
    ProbeFatalError as ProbeFatalError,
    SampleOverflowError as SampleOverflowError,
    SocketStatusError as SocketStatusError,
)
from .models import (
    Endpoint as Endpoint,
    EndpointState as EndpointState,
    Outcome as Outcome,
    ProbeConfig as ProbeConfig,
    Sample as Sample,
    Target as Target,
)
from .multiplexer import ReadinessMultiplexer as ReadinessMultiplexer
from .prober import Prober as Prober
from .ranker import (
    rank as rank,
    rank_endpoints as rank_endpoints,
)
from .registry import TargetRegistry as TargetRegistry
from .resolver import EndpointResolver as EndpointResolver
from .rounds import RoundController as RoundController
