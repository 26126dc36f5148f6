"""
Wait-until-terminal loop shared by every asynchronous operation.

The loop reloads the operation at a fixed interval until its status is
terminal or the time budget runs out. Reload errors propagate unchanged;
a timeout leaves the operation usable so the caller can wait again.
"""

from __future__ import annotations
import asyncio
import inspect
import logging
import time
from typing import TYPE_CHECKING, Any, Callable, Optional

from pydantic import BaseModel, Field, ValidationError

from ..constants import DEFAULT_POLL_INTERVAL_SECONDS
from ..runtime.errors import ArgumentError, TimeoutError

if TYPE_CHECKING:
    from .base import AsyncOperation


logger = logging.getLogger(__name__)

ReloadFn = Callable[["AsyncOperation"], Any]


class WaitOptions(BaseModel):
    """Polling options for ``wait_for_terminal``."""

    interval_seconds: float = Field(default=DEFAULT_POLL_INTERVAL_SECONDS, gt=0)
    timeout_seconds: Optional[float] = Field(default=None, ge=0)


async def _default_reload(op: "AsyncOperation") -> Any:
    return await op.reload()


async def wait_for_terminal(
    op: "AsyncOperation",
    reload_fn: Optional[ReloadFn] = None,
    *,
    interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
    timeout_seconds: Optional[float] = None,
) -> "AsyncOperation":
    """
    Wait until the operation reaches a terminal status.

    Args:
        op: Operation to wait on
        reload_fn: Refreshes ``op`` in place; sync or async. Defaults to ``op.reload``
        interval_seconds: Delay between reloads
        timeout_seconds: Time budget; defaults to the operation's own default

    Returns:
        The same operation, now terminal

    Raises:
        TimeoutError: If the budget runs out first; ``operation`` is set
        ArgumentError: If the interval or timeout is out of range
    """
    try:
        options = WaitOptions(interval_seconds=interval_seconds, timeout_seconds=timeout_seconds)
    except ValidationError as e:
        raise ArgumentError(f"Invalid wait options: {e.errors()[0]['msg']}", cause=e)

    if op.is_terminal_state():
        return op

    reload = reload_fn or _default_reload
    timeout = options.timeout_seconds
    if timeout is None:
        timeout = op.default_timeout_seconds

    start = time.monotonic()
    while time.monotonic() - start < timeout:
        result = reload(op)
        if inspect.isawaitable(result):
            await result

        if op.is_terminal_state():
            logger.debug(f"{op.kind} {op.id} reached {op.status}")
            return op

        await asyncio.sleep(options.interval_seconds)

    raise TimeoutError(
        f"{op.kind} timed out. The operation may still succeed; "
        f"retry with a longer timeout using the timeout_seconds option.",
        operation=op,
        details={"id": op.id, "status": str(getattr(op.status, "value", op.status)), "timeout_seconds": timeout},
    )


__all__ = [
    "WaitOptions",
    "wait_for_terminal",
]
