from .models import Endpoint, Target
from .registry import TargetRegistry


def rank_key(endpoint: Endpoint) -> tuple[bool, float]:
    mean_latency = endpoint.mean_latency

    if mean_latency is None:
        return (True, 0.0)

    return (False, mean_latency)


def rank_endpoints(endpoints: list[Endpoint]) -> list[Endpoint]:
    """
    Order endpoints by mean successful latency, fastest first.

    Endpoints without a single success carry no ordering information
    and follow the measured ones in the order they already had. The
    sort is stable, so equal means keep their relative order and
    ranking an already ranked list changes nothing.
    """
    return sorted(endpoints, key=rank_key)


def rank_target(target: Target):
    target.endpoints = rank_endpoints(target.endpoints)


def rank(registry: TargetRegistry):
    for target in registry.active():
        rank_target(target)
