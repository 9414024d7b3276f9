"""
Name resolution for probe targets.

Turns a (hostname, port) pair into a target holding one endpoint per
address the system resolver returns for a TCP stream connection.
"""

import asyncio
import socket
from dataclasses import dataclass, field

from happy.logging import Logger
from happy.logging.happy_logging_models import ResolutionError, ResolverDebug

from .models import Endpoint, Target


@dataclass
class EndpointResolver:
    """
    Resolves targets into endpoints using the system resolver.

    Resolution failures are not fatal. The failing host/port pair is
    reported and a target without endpoints is returned, which every
    later stage treats as inert.

    Usage:
        resolver = EndpointResolver(rounds=3)
        target = await resolver.resolve("example.org", "443")
        for endpoint in target.endpoints:
            print(endpoint.address)
    """

    rounds: int = 3
    """Sample capacity given to every endpoint created."""

    logger: Logger = field(default_factory=Logger)
    """Logger used to report resolution failures."""

    async def resolve(
        self,
        host: str,
        port: str,
    ) -> Target:
        """
        Resolve a single host/port pair.

        Args:
            host: The hostname or literal address to resolve
            port: A numeric port or service name

        Returns:
            A Target whose endpoints follow the resolver's address order
        """
        target = Target(host=host, port=port)

        try:
            results = await asyncio.get_running_loop().getaddrinfo(
                host,
                port,
                family=socket.AF_UNSPEC,
                type=socket.SOCK_STREAM,
            )

        except (socket.gaierror, UnicodeError) as err:
            await self.logger.log(
                ResolutionError(
                    message=f"{err} (skipping {host} port {port})",
                    host=host,
                    port=port,
                    error=str(err),
                ),
                name="happy",
            )

            return target

        for family, socktype, protocol, _, address in results:
            target.endpoints.append(
                Endpoint(
                    family=family,
                    socktype=socktype,
                    protocol=protocol,
                    address=address,
                    capacity=self.rounds,
                )
            )

        await self.logger.log(
            ResolverDebug(
                message=f"resolved {host} port {port} to {len(target.endpoints)} endpoints",
                host=host,
                port=port,
                endpoints=len(target.endpoints),
            ),
            name="happy",
        )

        return target

    async def resolve_many(
        self,
        pairs: list[tuple[str, str]],
    ) -> list[Target]:
        """
        Resolve every host/port pair, preserving the order given.
        """
        return list(
            await asyncio.gather(*[
                self.resolve(host, port) for host, port in pairs
            ])
        )
