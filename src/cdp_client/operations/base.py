"""
Base class for operations the platform completes asynchronously.

An operation owns its latest snapshot (a pydantic model). Subclasses say
how to fetch a fresh snapshot and how to fold it into local state; the
polling, signing and terminal checks live here.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, FrozenSet, List, Optional, TypeVar

from ..constants import DEFAULT_POLL_INTERVAL_SECONDS
from ..models import ListResponse
from ..pagination import Page, PageFetchFn, PaginationOptions
from .poller import ReloadFn, wait_for_terminal
from .types import TERMINAL_STATUSES

if TYPE_CHECKING:
    from ..signers.base import TransactionSigner
    from ..transport.http import ApiClient


class AsyncOperation(ABC):
    """A platform resource that reaches complete or failed some time after creation."""

    kind: str = "Operation"
    default_timeout_seconds: float = 10.0
    terminal_statuses: FrozenSet[str] = TERMINAL_STATUSES

    def __init__(self, client: Optional["ApiClient"] = None):
        self._client = client

    @property
    def client(self) -> "ApiClient":
        if self._client is None:
            raise RuntimeError(f"{self.kind} is not bound to an API client")
        return self._client

    @property
    @abstractmethod
    def id(self) -> str:
        pass

    @property
    @abstractmethod
    def status(self) -> Any:
        pass

    @property
    def sub_items(self) -> List[Any]:
        """Signable payloads owned by this operation, in server order."""
        return []

    @abstractmethod
    async def fetch_snapshot(self) -> Any:
        """Fetch the current server-side model of this operation."""
        pass

    @abstractmethod
    def apply_snapshot(self, model: Any) -> None:
        """Replace local state with ``model`` without losing local signatures."""
        pass

    async def reload(self) -> "AsyncOperation":
        snapshot = await self.fetch_snapshot()
        if snapshot is not None:
            self.apply_snapshot(snapshot)
        return self

    def is_terminal_state(self) -> bool:
        status = self.status
        return getattr(status, "value", status) in self.terminal_statuses

    def is_signed(self) -> bool:
        items = self.sub_items
        return bool(items) and all(item.is_signed() for item in items)

    def sign(self, signer: "TransactionSigner") -> "AsyncOperation":
        """Sign every unsigned sub-item; already-signed items are left alone."""
        for item in self.sub_items:
            if not item.is_signed():
                item.sign(signer)
        return self

    async def wait(
        self,
        reload_fn: Optional[ReloadFn] = None,
        *,
        interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS,
        timeout_seconds: Optional[float] = None,
    ) -> "AsyncOperation":
        return await wait_for_terminal(
            self, reload_fn, interval_seconds=interval_seconds, timeout_seconds=timeout_seconds
        )


T = TypeVar("T")


def page_fetcher(client: "ApiClient", path: str, build: Callable[[dict], T]) -> PageFetchFn:
    """
    Page-fetch coroutine for a list endpoint.

    Args:
        client: API client
        path: Collection path
        build: Turns one raw item into the caller's type
    """
    async def fetch_page(cursor: Optional[str], page_size: int) -> Page[T]:
        params = PaginationOptions(limit=page_size, page=cursor).to_params()
        response = ListResponse.model_validate(await client.get(path, params=params))
        return Page(
            data=[build(item) for item in response.data],
            has_more=response.has_more,
            next_page=response.next_page,
        )

    return fetch_page


__all__ = ["AsyncOperation", "page_fetcher"]
