"""SeqFlow exception hierarchy."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class SeqFlowError(Exception):
    """Base error for SeqFlow."""


class ConfigurationError(SeqFlowError):
    """Raised when configuration or inputs are invalid."""


class StepFailures(SeqFlowError):
    """Raised by a step that failed with several errors at once.

    In settle-all mode the executor merges ``errors`` into the run's failure
    list instead of recording this exception as a single failure.
    """

    def __init__(self, errors: Iterable[BaseException], message: str | None = None) -> None:
        collected = tuple(errors)
        for index, error in enumerate(collected):
            if not isinstance(error, BaseException):
                raise TypeError(f"StepFailures member {index} is not an exception: {error!r}")
        self.errors: tuple[BaseException, ...] = collected
        super().__init__(message or f"{len(self.errors)} step failures")

    def __iter__(self) -> Iterator[BaseException]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)


class AggregateStepError(StepFailures):
    """Raised when a settle-all run records more than one failure."""

    def __init__(self, errors: Iterable[BaseException]) -> None:
        collected = tuple(errors)
        first = collected[0] if collected else None
        message = f"{len(collected)} steps failed"
        if first is not None:
            message = f"{message} (first: {type(first).__name__}: {first})"
        super().__init__(collected, message)
