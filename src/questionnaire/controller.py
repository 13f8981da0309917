"""Linear state machine driving the questionnaire for a single session.

The controller owns the draft selections until submission, then builds the
UserResponses in one step. UI layers call the command handlers (advance,
retreat, submit, restart) and redraw from ``view`` afterwards.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable

from src.errors import InvalidSelectionError, InvalidTransitionError, StepValidationError
from src.models.enums import Circumstance, InputKind
from src.questionnaire.steps import (
    STEPS_BY_FIELD,
    TOTAL_STEPS,
    VALIDATION_MESSAGE,
    get_step,
)
from src.schemas.benefits import UserResponses
from src.schemas.questionnaire import QuestionnaireView, StepDefinition

logger = logging.getLogger(__name__)

_CIRCUMSTANCES_FIELD = "circumstances"
_NONE = Circumstance.NONE.value


class QuestionnaireController:
    """Tracks the current step and collected selections of one session.

    Invariant: ``1 <= current_step <= total_steps``. Failed transitions leave
    every attribute untouched.
    """

    total_steps: int = TOTAL_STEPS

    def __init__(self, session_id: uuid.UUID | None = None) -> None:
        self.session_id = session_id or uuid.uuid4()
        self.current_step = 1
        self.responses: UserResponses | None = None
        self._selections: dict[str, str] = {}
        self._circumstances: list[str] = []

    # ── State queries ────────────────────────────────────────────────

    @property
    def is_submitted(self) -> bool:
        return self.responses is not None

    @property
    def active_step(self) -> StepDefinition:
        return get_step(self.current_step)

    @property
    def selections(self) -> dict[str, str | list[str]]:
        """Snapshot of every answer collected so far."""
        snapshot: dict[str, str | list[str]] = dict(self._selections)
        if self._circumstances:
            snapshot[_CIRCUMSTANCES_FIELD] = list(self._circumstances)
        return snapshot

    @property
    def progress_percent(self) -> float:
        return self.current_step / self.total_steps * 100

    @property
    def view(self) -> QuestionnaireView:
        """Render state for the active step."""
        return QuestionnaireView(
            current_step=self.current_step,
            total_steps=self.total_steps,
            progress_percent=self.progress_percent,
            step=self.active_step,
            show_previous=self.current_step > 1,
            show_next=self.current_step < self.total_steps,
            show_submit=self.current_step == self.total_steps,
            selections=self.selections,
        )

    def is_step_valid(self, number: int | None = None) -> bool:
        """A step is valid when each required single choice has a selection.

        Multiple-choice steps are always valid: no box checked is the same
        as "none of the above".
        """
        step = get_step(number or self.current_step)
        if step.kind == InputKind.MULTIPLE or not step.required:
            return True
        return bool(self._selections.get(step.field))

    # ── Input collection ─────────────────────────────────────────────

    def select(self, field: str, value: str) -> None:
        """Record the single-choice answer for ``field``."""
        self._ensure_open()
        step = STEPS_BY_FIELD.get(field)
        if step is None or step.kind != InputKind.SINGLE:
            msg = f"Unknown single-choice field: {field!r}"
            raise InvalidSelectionError(msg)
        if value not in step.values:
            msg = f"Invalid option {value!r} for {field!r} (valid: {sorted(step.values)})"
            raise InvalidSelectionError(msg)
        self._selections[field] = value

    def toggle_circumstance(self, value: str, checked: bool = True) -> None:
        """Check or uncheck one circumstance box.

        Checking "none" clears every other box; checking any other box
        clears "none".
        """
        self._ensure_open()
        self._check_circumstance(value)

        if not checked:
            if value in self._circumstances:
                self._circumstances.remove(value)
            return

        if value == _NONE:
            self._circumstances = [_NONE]
        elif value not in self._circumstances:
            self._circumstances = [c for c in self._circumstances if c != _NONE]
            self._circumstances.append(value)

    def set_circumstances(self, values: Iterable[str]) -> None:
        """Replace the checked circumstance boxes in one go."""
        self._ensure_open()
        wanted = list(dict.fromkeys(values))
        for value in wanted:
            self._check_circumstance(value)
        self._circumstances = [_NONE] if _NONE in wanted else wanted

    # ── Transitions ──────────────────────────────────────────────────

    def advance(self) -> int:
        """Move to the next step if the active one is valid.

        On the final step this is a no-op: only ``submit`` moves on.

        Raises:
            StepValidationError: A required answer is missing.
        """
        self._ensure_open()
        if self.current_step >= self.total_steps:
            return self.current_step

        self._validate_active_step()
        old_step = self.current_step
        self.current_step += 1
        logger.info(
            "Step transition: %d --advance--> %d (session=%s)",
            old_step,
            self.current_step,
            self.session_id,
        )
        return self.current_step

    def retreat(self) -> int:
        """Move back one step. Never validated; a no-op on step 1."""
        self._ensure_open()
        if self.current_step <= 1:
            return self.current_step

        old_step = self.current_step
        self.current_step -= 1
        logger.info(
            "Step transition: %d --retreat--> %d (session=%s)",
            old_step,
            self.current_step,
            self.session_id,
        )
        return self.current_step

    def submit(self) -> UserResponses:
        """Finalize the answers collected across all steps.

        Raises:
            InvalidTransitionError: Not on the final step, or already submitted.
            StepValidationError: The final step is not valid.
        """
        self._ensure_open()
        if self.current_step != self.total_steps:
            msg = f"Submit is only allowed on step {self.total_steps} (current: {self.current_step})"
            raise InvalidTransitionError(msg)

        self._validate_active_step()
        self.responses = UserResponses(
            age_bracket=self._selections.get("age"),
            income_level=self._selections.get("income"),
            household=self._selections.get("household"),
            employment=self._selections.get("employment"),
            housing_status=self._selections.get("housing"),
            circumstances=frozenset(self._circumstances),
        )
        logger.info("Questionnaire submitted (session=%s)", self.session_id)
        return self.responses

    def restart(self) -> None:
        """Discard every answer and return to step 1. Allowed from any state."""
        self.current_step = 1
        self.responses = None
        self._selections.clear()
        self._circumstances.clear()
        logger.info("Questionnaire restarted (session=%s)", self.session_id)

    # ── Internals ────────────────────────────────────────────────────

    def _ensure_open(self) -> None:
        if self.is_submitted:
            msg = "Questionnaire already submitted; restart to change answers"
            raise InvalidTransitionError(msg)

    def _validate_active_step(self) -> None:
        if not self.is_step_valid():
            logger.info(
                "Validation failed on step %d (session=%s)",
                self.current_step,
                self.session_id,
            )
            raise StepValidationError(VALIDATION_MESSAGE, step=self.current_step)

    @staticmethod
    def _check_circumstance(value: str) -> None:
        step = STEPS_BY_FIELD[_CIRCUMSTANCES_FIELD]
        if value not in step.values:
            msg = f"Invalid circumstance {value!r} (valid: {sorted(step.values)})"
            raise InvalidSelectionError(msg)

