"""Aggregate and wrapping errors, and chain-aware error matching."""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from subcheck.formatting import current
from subcheck.kinds import deep_equal


def unwrap(err: BaseException) -> BaseException | None:
    """Return the error wrapped by *err*, if any.

    An ``unwrap()`` method wins; otherwise the explicit cause set by
    ``raise ... from ...`` is followed.
    """
    method = getattr(err, "unwrap", None)
    if callable(method):
        return method()
    return err.__cause__


def is_in_chain(err: BaseException | None, target: BaseException | type | None) -> bool:
    """Report whether *target* appears in the wrap chain of *err*.

    A link matches when it is *target*, compares equal to it, or claims it
    through a ``matches(target)`` method. When *target* is an exception class
    the links are matched with ``isinstance``.
    """
    if err is None or target is None:
        return err is target
    seen: set[int] = set()
    link: BaseException | None = err
    while link is not None and id(link) not in seen:
        seen.add(id(link))
        if isinstance(target, type):
            if isinstance(link, target):
                return True
        elif link is target or link == target:
            return True
        matches = getattr(link, "matches", None)
        if callable(matches) and matches(target):
            return True
        link = unwrap(link)
    return False


class PrefixError(Exception):
    """An error prefixed with a key describing where it happened."""

    def __init__(self, key: str, err: BaseException, newline: bool = False):
        super().__init__(key, err)
        self.key = key
        self.err = err
        self.newline = newline

    def unwrap(self) -> BaseException:
        return self.err

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrefixError):
            return NotImplemented
        return (
            self.key == other.key
            and self.newline == other.newline
            and deep_equal(self.err, other.err)
        )

    def __hash__(self) -> int:
        return hash((self.key, self.newline))

    def __str__(self) -> str:
        if self.newline:
            return f"{self.key}:\n{self.err}"
        return f"{self.key}: {self.err}"

    def __repr__(self) -> str:
        return f"PrefixError(key={self.key!r}, err={self.err!r})"


def key_error(key: Any, err: BaseException) -> PrefixError:
    """Prefix *err* with the mapping key it was found under."""
    return PrefixError(f"key {key!r}", err)


class Errors(Exception):
    """An ordered collection of errors reported together."""

    def __init__(self, errors: Iterable[BaseException] = ()):
        self.errors: list[BaseException] = list(errors)
        super().__init__(self.errors)

    def append(self, err: BaseException) -> None:
        self.errors.append(err)

    def extend(self, errs: Iterable[BaseException]) -> None:
        self.errors.extend(errs)

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self.errors)

    def __getitem__(self, i: int) -> BaseException:
        return self.errors[i]

    def __bool__(self) -> bool:
        return bool(self.errors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Errors):
            return NotImplemented
        return len(self) == len(other) and all(
            deep_equal(a, b) for a, b in zip(self.errors, other.errors)
        )

    def __hash__(self) -> int:
        return hash(len(self.errors))

    def matches(self, target: BaseException | type) -> bool:
        """Match when any member's chain matches *target*."""
        return any(is_in_chain(err, target) for err in self.errors)

    def __str__(self) -> str:
        formatting = current()
        lines = [f"{len(self.errors)} issue(s)"]
        for i, err in enumerate(self.errors):
            lines.append(f"issue #{i}:")
            lines.append(formatting.indent_text(str(err)))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Errors({self.errors!r})"
