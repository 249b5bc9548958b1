"""Tests for the first-success combinators."""

import asyncio

import pytest

from cdnresolve.common.fallback import first_of, first_settled, first_success


def _failing(exc):
    async def attempt():
        raise exc

    return attempt


def _returning(value, calls=None):
    async def attempt():
        if calls is not None:
            calls.append(value)
        return value

    return attempt


class TestFirstOf:
    """Tests for the synchronous combinator."""

    def test_returns_first_truthy(self):
        """Falsy results are skipped."""
        assert first_of([lambda: None, lambda: "", lambda: "a", lambda: "b"]) == "a"

    def test_returns_none_when_nothing_matches(self):
        """No truthy result means None."""
        assert first_of([lambda: None]) is None
        assert first_of([]) is None


class TestFirstSuccess:
    """Tests for sequential async attempts."""

    def test_stops_after_first_success(self):
        """Later attempts never start."""
        calls = []
        attempts = [_failing(ValueError("a")), _returning(1, calls), _returning(2, calls)]
        assert asyncio.run(first_success(attempts, errors=(ValueError,))) == 1
        assert calls == [1]

    def test_reraises_first_error(self):
        """The first attempt's error is surfaced, not the last."""
        first = ValueError("first")
        attempts = [_failing(first), _failing(ValueError("second"))]
        with pytest.raises(ValueError) as exc_info:
            asyncio.run(first_success(attempts, errors=(ValueError,)))
        assert exc_info.value is first

    def test_unlisted_errors_propagate(self):
        """Only the listed errors count as failed attempts."""
        attempts = [_failing(KeyError("boom")), _returning(1)]
        with pytest.raises(KeyError):
            asyncio.run(first_success(attempts, errors=(ValueError,)))

    def test_no_attempts(self):
        """An empty attempt list is a LookupError."""
        with pytest.raises(LookupError):
            asyncio.run(first_success([]))


class TestFirstSettled:
    """Tests for concurrent attempts picked by position."""

    def test_earliest_success_by_position(self):
        """Position, not completion order, decides the winner."""

        async def _run():
            async def slow():
                await asyncio.sleep(0.01)
                return "slow"

            async def fast():
                return "fast"

            return await first_settled([slow(), fast()])

        assert asyncio.run(_run()) == (0, "slow")

    def test_skips_failures(self):
        """Failed awaitables are skipped."""

        async def _run():
            return await first_settled([_failing(ValueError("x"))(), _returning("ok")()], errors=(ValueError,))

        assert asyncio.run(_run()) == (1, "ok")

    def test_raises_first_error_when_all_fail(self):
        """The first error by position is raised."""
        first = ValueError("first")

        async def _run():
            return await first_settled([_failing(first)(), _failing(ValueError("second"))()], errors=(ValueError,))

        with pytest.raises(ValueError) as exc_info:
            asyncio.run(_run())
        assert exc_info.value is first

    def test_unlisted_errors_propagate(self):
        """Errors outside ``errors`` are not treated as failed candidates."""

        async def _run():
            return await first_settled([_failing(ValueError("x"))(), _failing(KeyError("y"))()], errors=(ValueError,))

        with pytest.raises(KeyError):
            asyncio.run(_run())
