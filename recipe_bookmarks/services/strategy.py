"""
Result-or-reason values for extraction strategies.

Every upstream fetcher returns a StrategyResult instead of raising, so the
orchestrator can walk an ordered list of strategies and keep the first one
that produced something.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Iterable, Optional, TypeVar

T = TypeVar("T")


@dataclass
class StrategyResult(Generic[T]):
    """Outcome of a single extraction strategy."""
    value: Optional[T] = None
    error_type: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.value is not None

    @classmethod
    def ok(cls, value: T) -> "StrategyResult[T]":
        return cls(value=value)

    @classmethod
    def failed(cls, error_type: str) -> "StrategyResult[T]":
        return cls(error_type=error_type)


Strategy = Callable[[], Awaitable[StrategyResult[T]]]


async def first_success(strategies: Iterable[Strategy]) -> StrategyResult:
    """
    Run strategies in order and return the first successful result.

    Strategies run lazily, so later ones are never called once an earlier one
    succeeds. If every strategy fails, the last failure is returned.
    """
    last = StrategyResult.failed("no_strategy")
    for strategy in strategies:
        result = await strategy()
        if result.success:
            return result
        last = result
    return last
