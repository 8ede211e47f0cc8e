"""Per-run outcome report returned by the scaffolder."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Outcome(str, Enum):
    """Terminal state of a single entry within one run."""

    CREATED = "created"
    SKIPPED = "skipped"
    OVERWRITTEN = "overwritten"
    FAILED = "failed"


class FailureKind(str, Enum):
    """Reason an entry could not be materialised."""

    UNBOUND_PLACEHOLDER = "unbound-placeholder"
    TEMPLATE_ERROR = "template-error"
    PATH_ESCAPE = "path-escape"
    TYPE_MISMATCH = "type-mismatch"
    IO_ERROR = "io-error"
    ENCODING_ERROR = "encoding-error"


class Failure(BaseModel):
    """Why an entry ended in :attr:`Outcome.FAILED`."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: FailureKind = Field(..., description="Category of the failure.")
    detail: str = Field("", description="Human-readable explanation.")

    def __str__(self) -> str:
        if self.detail:
            return f"{self.kind.value}: {self.detail}"
        return self.kind.value


class EntryResult(BaseModel):
    """Outcome recorded for one registry entry."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: str = Field(..., description="Entry path relative to the target root.")
    outcome: Outcome = Field(..., description="Terminal state reached by the entry.")
    failure: Failure | None = Field(None, description="Failure details when outcome is failed.")

    @model_validator(mode="after")
    def _failure_matches_outcome(self) -> "EntryResult":
        if (self.outcome is Outcome.FAILED) != (self.failure is not None):
            raise ValueError("failure must be set exactly when outcome is 'failed'")
        return self

    @classmethod
    def failed(cls, path: str, kind: FailureKind, detail: str = "") -> "EntryResult":
        return cls(path=path, outcome=Outcome.FAILED, failure=Failure(kind=kind, detail=detail))


class MaterializationReport(BaseModel):
    """Immutable summary of one materialisation run.

    Results appear in registration order. A report with failures describes a
    partially successful run: every other entry was still attempted.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    root: str = Field(..., description="Absolute target root the run wrote to.")
    edition: str | None = Field(None, description="Name of the materialised edition.")
    results: Tuple[EntryResult, ...] = Field(default_factory=tuple)
    warnings: Tuple[str, ...] = Field(default_factory=tuple)
    interrupted: bool = Field(False, description="Whether a cancellation stopped the run early.")

    def _paths_with(self, outcome: Outcome) -> list[str]:
        return [result.path for result in self.results if result.outcome is outcome]

    @property
    def created(self) -> list[str]:
        return self._paths_with(Outcome.CREATED)

    @property
    def skipped(self) -> list[str]:
        return self._paths_with(Outcome.SKIPPED)

    @property
    def overwritten(self) -> list[str]:
        return self._paths_with(Outcome.OVERWRITTEN)

    @property
    def failed(self) -> list[EntryResult]:
        return [result for result in self.results if result.outcome is Outcome.FAILED]

    @property
    def ok(self) -> bool:
        """``True`` when no entry failed and the run was not interrupted."""

        return not self.failed and not self.interrupted

    def outcome_for(self, path: str) -> Outcome:
        for result in self.results:
            if result.path == path:
                return result.outcome
        raise KeyError(path)

    def counts(self) -> dict[Outcome, int]:
        totals = {outcome: 0 for outcome in Outcome}
        for result in self.results:
            totals[result.outcome] += 1
        return totals


__all__ = [
    "EntryResult",
    "Failure",
    "FailureKind",
    "MaterializationReport",
    "Outcome",
]
