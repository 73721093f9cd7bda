from __future__ import annotations
from dataclasses import dataclass
from typing import NamedTuple, Protocol, Tuple, runtime_checkable


@runtime_checkable
class Subscriber(Protocol):
    # return normally = delivered, raise = failed
    def update(self, price: float) -> None: ...


class DeliveryFailure(NamedTuple):
    subscriber: Subscriber
    error: str


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one fan-out of a single price to the subscriber snapshot."""
    price: float
    delivered: Tuple[Subscriber, ...] = ()
    failed: Tuple[DeliveryFailure, ...] = ()
    skipped: Tuple[Subscriber, ...] = ()   # deadline passed before they were reached

    @property
    def ok(self) -> bool:
        return not self.failed and not self.skipped

    def summary(self) -> str:
        return (
            f"price={self.price} delivered={len(self.delivered)} "
            f"failed={len(self.failed)} skipped={len(self.skipped)}"
        )


def describe_error(exc: BaseException) -> str:
    description = getattr(exc, "description", None) or str(exc)
    if not description:
        return type(exc).__name__
    return f"{type(exc).__name__}: {description}"
