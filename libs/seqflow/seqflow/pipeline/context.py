"""Per-run state and hook typing.

A run threads a single *carry* value from step to step and accumulates the
ordered successes and failures it observed. `PipelineRun` is the
un-normalized outcome; `unwrap()` applies the single-item collapsing that
`PipelineExecutor.run()` returns to callers.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from seqflow.exceptions import AggregateStepError, StepFailures

# Steps and hooks may return a value or an awaitable of one.
Step: TypeAlias = Callable[[Any], Any]
DeriveNextInput: TypeAlias = Callable[[Any, Any], Any]
TransformResult: TypeAlias = Callable[[Any, Step], Any]


def keep_carry(previous: Any, current: Any) -> Any:  # noqa: ARG001
    """Default `derive_next_input`: every step receives the run input."""
    return previous


def identity_transform(result: Any, step: Step) -> Any:  # noqa: ARG001
    return result


@dataclass
class RunState:
    carry: Any
    results: list[Any] = field(default_factory=list)
    errors: list[BaseException] = field(default_factory=list)
    steps_run: int = 0

    def record_failure(self, error: BaseException) -> None:
        if isinstance(error, StepFailures):
            self.errors.extend(error.errors)
        else:
            self.errors.append(error)

    def finish(self) -> PipelineRun:
        return PipelineRun(
            results=tuple(self.results),
            errors=tuple(self.errors),
            steps_run=self.steps_run,
        )


@dataclass(frozen=True)
class PipelineRun:
    results: tuple[Any, ...] = ()
    errors: tuple[BaseException, ...] = ()
    steps_run: int = 0

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> Any:
        """Return the run's value, or raise its failure.

        One failure is raised as-is and several as `AggregateStepError`.
        One result is returned as-is, zero as None, several as a list.
        """
        if len(self.errors) == 1:
            raise self.errors[0]
        if self.errors:
            raise AggregateStepError(self.errors)
        if len(self.results) <= 1:
            return self.results[0] if self.results else None
        return list(self.results)
