"""First-success-wins combinators.

Manifest candidates, exports condition sets, legacy fields and extension
variants are all ordered lists of attempts where the first success wins.
"""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Iterable, Optional, Sequence, Tuple, Type, TypeVar

T = TypeVar("T")

ErrorTypes = Tuple[Type[BaseException], ...]


def first_of(attempts: Iterable[Callable[[], Optional[T]]]) -> Optional[T]:
    """Return the first truthy result of ``attempts``, or None."""
    for attempt in attempts:
        result = attempt()
        if result:
            return result
    return None


async def first_success(
    attempts: Iterable[Callable[[], Awaitable[T]]],
    errors: ErrorTypes = (Exception,),
) -> T:
    """Await ``attempts`` one at a time and return the first that succeeds.

    Attempts after the first success are never started. When every attempt
    raises one of ``errors``, the error from the first attempt is re-raised.
    """
    first_error: Optional[BaseException] = None
    for attempt in attempts:
        try:
            return await attempt()
        except errors as exc:
            if first_error is None:
                first_error = exc
    if first_error is None:
        raise LookupError("no attempts were given")
    raise first_error


async def first_settled(
    awaitables: Sequence[Awaitable[T]],
    errors: ErrorTypes = (Exception,),
) -> Tuple[int, T]:
    """Run ``awaitables`` concurrently and pick the first success by position.

    Returns:
        Tuple of (index, result) for the earliest successful awaitable.

    Raises:
        The first error (by position) when none succeeded. Errors not listed
        in ``errors`` propagate immediately.
    """
    results = await asyncio.gather(*awaitables, return_exceptions=True)
    first_error: Optional[BaseException] = None
    for index, result in enumerate(results):
        if isinstance(result, BaseException):
            if not isinstance(result, errors):
                raise result
            if first_error is None:
                first_error = result
            continue
        return index, result
    if first_error is None:
        raise LookupError("no awaitables were given")
    raise first_error
