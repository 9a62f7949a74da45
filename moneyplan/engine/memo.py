"""Identity-keyed memoization for engine calculations.

Budget collections are refetched wholesale after every change, so a new
result is needed exactly when one of the input references changes. Comparing
identities avoids hashing or deep-comparing large snapshot lists.
"""

from collections.abc import Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class IdentityMemo(Generic[T]):
    """Cache the last result of ``func`` keyed by argument identity.

    Example:
        >>> stats = IdentityMemo(calculate_budget_stats)
        >>> a = stats(items, expenses, incomes, actual)
        >>> b = stats(items, expenses, incomes, actual)  # no recompute
        >>> a is b
        True
    """

    def __init__(self, func: Callable[..., T]):
        self.func = func
        self.hits = 0
        self.misses = 0
        self._key: tuple[Any, ...] | None = None
        # strong refs keep ids stable while the key is cached
        self._args: tuple[Any, ...] = ()
        self._result: T | None = None

    def _make_key(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> tuple[Any, ...]:
        positional = tuple(id(a) for a in args)
        named = tuple(sorted((k, id(v)) for k, v in kwargs.items()))
        return positional + named

    def __call__(self, *args: Any, **kwargs: Any) -> T:
        key = self._make_key(args, kwargs)
        if self._key is not None and key == self._key:
            self.hits += 1
            return self._result  # type: ignore[return-value]

        self.misses += 1
        self._result = self.func(*args, **kwargs)
        self._key = key
        self._args = (args, tuple(kwargs.values()))
        return self._result

    def clear(self) -> None:
        """Forget the cached result (e.g. after a mutation)."""
        self._key = None
        self._args = ()
        self._result = None
