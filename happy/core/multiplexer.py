import asyncio

from .errors import MultiplexerError
from .models import Endpoint


class ReadinessMultiplexer:
    """
    Waits for in-flight connection attempts to become writable or to
    report an error, with an upper bound on how long to wait.

    Readiness is level-triggered: a writer callback is registered for
    every pending socket on each wait and removed again before the wait
    returns, so an endpoint that was not collected is reported again by
    the next wait.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    async def wait(
        self,
        pending: list[Endpoint],
        timeout: float | None = None,
    ) -> set[Endpoint]:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()

        if len(pending) == 0:
            if timeout is not None and timeout > 0:
                await asyncio.sleep(timeout)

            return set()

        ready: set[Endpoint] = set()
        waiter = self._loop.create_future()

        def on_writable(endpoint: Endpoint):
            ready.add(endpoint)

            if not waiter.done():
                waiter.set_result(None)

        registered: list[Endpoint] = []

        try:
            for endpoint in pending:
                self._loop.add_writer(
                    endpoint.socket.fileno(),
                    on_writable,
                    endpoint,
                )
                registered.append(endpoint)

            await asyncio.wait(
                [waiter],
                timeout=timeout,
            )

        except (OSError, ValueError) as err:
            raise MultiplexerError(err) from err

        finally:
            for endpoint in registered:
                self._loop.remove_writer(endpoint.socket.fileno())

            if not waiter.done():
                waiter.cancel()

        return ready
