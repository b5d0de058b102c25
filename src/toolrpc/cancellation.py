"""Request-scoped cancellation signal.

One :class:`CancellationToken` is created per inbound request and threaded
into every tool that declares a parameter annotated with it.  Tools can poll
:meth:`CancellationToken.raise_if_cancelled`; the invoker additionally races
asynchronous tool bodies against :meth:`CancellationToken.wait`.
"""

from __future__ import annotations

import asyncio

from toolrpc.errors import RequestCancelledError


class CancellationToken:
    """A one-shot cancellation flag bound to a single request.

    Usage::

        token = CancellationToken()
        token.cancel_after(30.0)      # optional deadline
        ...
        token.raise_if_cancelled()    # inside a tool body
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._timer: asyncio.TimerHandle | None = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Signal cancellation; idempotent."""
        self._event.set()
        self._clear_timer()

    def cancel_after(self, seconds: float) -> None:
        """Arm a deadline on the running loop, replacing any earlier one."""
        self._clear_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(seconds, self.cancel)

    async def wait(self) -> None:
        """Suspend until the token is cancelled."""
        await self._event.wait()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise RequestCancelledError()

    def close(self) -> None:
        """Drop a pending deadline without cancelling."""
        self._clear_timer()

    def _clear_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
