"""Pydantic schemas describing questionnaire steps and their view state."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from src.models.enums import InputKind


class StepOption(BaseModel):
    """One selectable answer on a step."""

    model_config = ConfigDict(frozen=True)

    value: str
    label: str


class StepDefinition(BaseModel):
    """A single question slide."""

    model_config = ConfigDict(frozen=True)

    number: int
    field: str
    prompt: str
    kind: InputKind = InputKind.SINGLE
    required: bool = True
    options: tuple[StepOption, ...] = ()

    @property
    def values(self) -> set[str]:
        return {o.value for o in self.options}


class QuestionnaireView(BaseModel):
    """What a UI needs to draw the questionnaire after a transition."""

    current_step: int
    total_steps: int
    progress_percent: float
    step: StepDefinition
    show_previous: bool
    show_next: bool
    show_submit: bool
    selections: dict[str, str | list[str]] = Field(default_factory=dict)
