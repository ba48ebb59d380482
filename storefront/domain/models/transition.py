"""Transition request, gate state, and audit record models."""

from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GateState(str, Enum):
    """States of a TransitionGate.

    ``Idle`` and the three resolved states all mean "no active request".
    """

    Idle = "idle"
    AwaitingStep1 = "awaiting_step_1"
    AwaitingStep2 = "awaiting_step_2"
    Committing = "committing"
    ResolvedSuccess = "resolved_success"
    ResolvedFailure = "resolved_failure"
    Cancelled = "cancelled"

    @property
    def is_open(self) -> bool:
        return self in (GateState.AwaitingStep1, GateState.AwaitingStep2, GateState.Committing)


class TransitionOutcome(str, Enum):
    Committed = "committed"
    Failed = "failed"
    Cancelled = "cancelled"
    Replaced = "replaced"


class TransitionRequest(BaseModel):
    """A proposed change of one entity's status or role awaiting confirmation.

    Only ``confirm_step`` ever changes; the request is discarded on commit,
    failure, cancellation, or replacement.
    """

    entity_id: str = Field(..., min_length=1)
    entity_label: str = Field(default="")
    current_value: str = Field(..., min_length=1)
    proposed_value: str = Field(..., min_length=1)
    confirm_step: Literal[1, 2] = 1

    model_config = ConfigDict(
        validate_assignment=True,
        str_strip_whitespace=True,
    )

    @model_validator(mode="after")
    def reject_no_op(self) -> "TransitionRequest":
        if self.current_value == self.proposed_value:
            raise ValueError(
                f"Transition for {self.entity_id} does not change the value "
                f"({self.current_value!r})"
            )
        return self


class TransitionNotice(BaseModel):
    """What the confirmation dialog tells the admin at each step."""

    headline: str
    summary: str
    notes: list[str] = Field(default_factory=list)
    final_headline: str = "Final Confirmation Required"
    final_summary: str = "Are you absolutely sure you want to proceed?"
    side_effects_intro: str | None = None
    side_effects: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class TransitionRecord(BaseModel):
    """Audit entry for a transition request once the gate let go of it."""

    entity_type: str = Field(..., min_length=1)
    entity_id: str = Field(..., min_length=1)
    from_value: str
    to_value: str
    critical: bool
    outcome: TransitionOutcome
    confirmations: int = Field(default=0, ge=0, le=2)
    error: str | None = None
    resolved_at: datetime = Field(default_factory=datetime.utcnow)
    context: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)
