"""Adapters between checks and the host test runner."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional, Protocol

import pytest

if TYPE_CHECKING:
    from subcheck.check import Check
    from subcheck.values import ValueFunc

logger = logging.getLogger(__name__)


class HostContext(Protocol):
    """Anything that can fail the running test, e.g. ``unittest.TestCase``."""

    def fail(self, msg: str) -> None: ...


class Runnable:
    """A deferred test that fails its host when the check fails.

    Call it with no arguments inside a pytest test, or pass a context with a
    ``fail`` method such as a ``unittest.TestCase``.
    """

    def __init__(self, evaluate: Callable[[], Optional[BaseException]], name: str = ""):
        self._evaluate = evaluate
        self.name = name

    def __repr__(self) -> str:
        return f"Runnable({self.name!r})" if self.name else "Runnable()"

    def evaluate(self) -> BaseException | None:
        """Run the check and return its error instead of failing."""
        err = self._evaluate()
        logger.debug("evaluated %s: %s", self.name or "check", "ok" if err is None else "failed")
        return err

    def __call__(self, ctx: HostContext | None = None) -> None:
        err = self.evaluate()
        if err is None:
            return
        msg = str(err)
        logger.info("check failed: %s", msg)
        if ctx is not None:
            ctx.fail(msg)
        else:
            pytest.fail(msg, pytrace=False)


def to_runnable(c: Check, vf: ValueFunc, name: str = "") -> Runnable:
    """Return a runnable evaluating *c* against *vf*, named after *c* by default."""
    return Runnable(lambda: c.check(vf), name=name or repr(c))


def from_func(fn: Callable[[], Optional[BaseException]]) -> Runnable:
    """Wrap a zero-argument function returning an error or None."""
    return Runnable(fn, name=getattr(fn, "__name__", ""))
