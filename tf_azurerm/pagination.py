"""Pull-based iteration over paged Azure listings.

Azure SDK listings (``ItemPaged``) fetch pages lazily: the first page is
requested on the first ``next()`` and later pages whenever the current one is
exhausted, so any ``next()`` can fail with an ``AzureError`` or, for a
malformed page, a ``DeserializationError``.

``advance_first`` yields an item only after the cursor has been advanced past
it. A failed advance is yielded as a terminal ``AdvanceFailure`` value instead
of being raised, and the item that was in hand when it failed is discarded.
A failure fetching the very first item is raised to the caller.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Iterator, Optional, TypeVar, Union

from azure.core.exceptions import AzureError, DeserializationError

T = TypeVar("T")

# Errors a page fetch can raise; DeserializationError is not an AzureError
PAGING_ERRORS = (AzureError, DeserializationError, TimeoutError)


@dataclass(frozen=True)
class AdvanceFailure:
    """The cursor could not move past the previous item."""

    error: BaseException


class PagedSequence(Generic[T]):
    """A finite, non-restartable sequence over a paged listing.

    Args:
        source: The paged iterable (usually an ``ItemPaged``)
        before_advance: Optional hook called before every advance past the
            first item, e.g. a deadline check. Exceptions it raises are
            reported the same way as a failed advance.
    """

    def __init__(
        self,
        source: Iterable[T],
        before_advance: Optional[Callable[[], None]] = None,
    ) -> None:
        self._source = source
        self._before_advance = before_advance
        self._consumed = False

    def __iter__(self) -> Iterator[Union[T, AdvanceFailure]]:
        if self._consumed:
            raise RuntimeError("Paged sequences can only be iterated once")
        self._consumed = True
        return advance_first(iter(self._source), self._before_advance)


def advance_first(
    iterator: Iterator[T],
    before_advance: Optional[Callable[[], None]] = None,
) -> Iterator[Union[T, AdvanceFailure]]:
    try:
        current = next(iterator)
    except StopIteration:
        return

    while True:
        try:
            if before_advance is not None:
                before_advance()
            upcoming = next(iterator)
        except StopIteration:
            yield current
            return
        except PAGING_ERRORS as exc:
            yield AdvanceFailure(exc)
            return
        yield current
        current = upcoming
