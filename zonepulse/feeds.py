"""Result types for data pulled from external feeds (weather, news, sports).

Feed fetchers live outside the grid. Whatever they do, the grid only ever
sees one of these three values, so a failing feed cannot stall or crash a
render pass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    data: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    reason: str

    @property
    def is_ok(self) -> bool:
        return False


@dataclass(frozen=True)
class Loading:
    @property
    def is_ok(self) -> bool:
        return False


FeedResult = Union[Ok, Err, Loading]

LOADING = Loading()


def fetch_safely(fetcher: Callable[..., Any], *args, **kwargs) -> FeedResult:
    """Call ``fetcher`` and wrap its outcome.

    Any exception is logged and returned as :class:`Err`; a fetcher that
    returns None is treated as still loading.
    """
    try:
        data = fetcher(*args, **kwargs)
    except Exception as e:
        name = getattr(fetcher, "__name__", repr(fetcher))
        logger.warning("Feed %s failed: %s", name, e)
        return Err(str(e) or type(e).__name__)
    if data is None:
        return LOADING
    if isinstance(data, (Ok, Err, Loading)):
        return data
    return Ok(data)


def unwrap_or(result: FeedResult, default: Any) -> Any:
    """The data of an Ok result, else ``default``."""
    return result.data if isinstance(result, Ok) else default
