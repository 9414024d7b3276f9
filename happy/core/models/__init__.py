from .endpoint import (
    Endpoint as Endpoint,
    EndpointState as EndpointState,
)
from .outcome import Outcome as Outcome
from .probe_config import ProbeConfig as ProbeConfig
from .sample import Sample as Sample
from .target import Target as Target
