"""Tests for the questionnaire controller.

Covers: forward/backward navigation, validation blocking, no-op edges,
submission, restart, circumstance exclusivity and view state.
"""

from __future__ import annotations

import pytest

from src.errors import InvalidSelectionError, InvalidTransitionError, StepValidationError
from src.questionnaire.controller import QuestionnaireController

ANSWERS = {
    "age": "65plus",
    "income": "low",
    "household": "couple",
    "employment": "retired",
    "housing": "owner",
}


@pytest.fixture()
def make_controller():
    """Factory to create a controller already moved to a given step."""
    def _make(step: int = 1) -> QuestionnaireController:
        controller = QuestionnaireController()
        fields = list(ANSWERS)
        while controller.current_step < step:
            controller.select(fields[controller.current_step - 1], ANSWERS[fields[controller.current_step - 1]])
            controller.advance()
        return controller
    return _make


class TestFullPath:

    def test_answer_every_step_and_submit(self, make_controller):
        controller = make_controller(1)
        for step, (field, value) in enumerate(ANSWERS.items(), start=1):
            assert controller.current_step == step
            controller.select(field, value)
            controller.advance()

        assert controller.current_step == 6
        controller.toggle_circumstance("veteran")
        responses = controller.submit()

        assert controller.is_submitted
        assert responses.age_bracket == "65plus"
        assert responses.income_level == "low"
        assert responses.household == "couple"
        assert responses.employment == "retired"
        assert responses.housing_status == "owner"
        assert responses.circumstances == frozenset({"veteran"})

    def test_submit_without_circumstances(self, make_controller):
        controller = make_controller(6)
        responses = controller.submit()
        assert responses.circumstances == frozenset()


class TestValidation:

    def test_advance_blocked_without_selection(self, make_controller):
        controller = make_controller(1)
        with pytest.raises(StepValidationError, match="Please select an option") as exc_info:
            controller.advance()
        assert exc_info.value.step == 1
        assert controller.current_step == 1

    def test_blocked_mid_questionnaire(self, make_controller):
        controller = make_controller(3)
        with pytest.raises(StepValidationError):
            controller.advance()
        assert controller.current_step == 3
        assert "household" not in controller.selections

    def test_circumstances_step_always_valid(self, make_controller):
        controller = make_controller(6)
        assert controller.is_step_valid()

    def test_is_step_valid_for_other_step(self, make_controller):
        controller = make_controller(1)
        assert not controller.is_step_valid(2)
        controller.select("income", "high")
        assert controller.is_step_valid(2)


class TestNavigationEdges:

    def test_retreat_on_first_step_is_noop(self, make_controller):
        controller = make_controller(1)
        assert controller.retreat() == 1
        assert controller.current_step == 1

    def test_advance_on_last_step_is_noop(self, make_controller):
        controller = make_controller(6)
        assert controller.advance() == 6
        assert not controller.is_submitted

    def test_retreat_never_validated(self, make_controller):
        controller = make_controller(4)
        controller.retreat()
        assert controller.current_step == 3

    def test_retreat_keeps_answers(self, make_controller):
        controller = make_controller(3)
        controller.retreat()
        controller.retreat()
        assert controller.selections["age"] == "65plus"
        assert controller.advance() == 2

    def test_submit_before_last_step_rejected(self, make_controller):
        controller = make_controller(5)
        with pytest.raises(InvalidTransitionError, match="only allowed on step 6"):
            controller.submit()
        assert controller.current_step == 5
        assert controller.responses is None

    def test_step_stays_in_bounds(self, make_controller):
        controller = make_controller(6)
        for _ in range(10):
            controller.advance()
        assert controller.current_step == 6
        for _ in range(10):
            controller.retreat()
        assert controller.current_step == 1


class TestSubmittedState:

    @pytest.fixture()
    def submitted(self, make_controller):
        controller = make_controller(6)
        controller.submit()
        return controller

    def test_navigation_after_submit_rejected(self, submitted):
        with pytest.raises(InvalidTransitionError):
            submitted.advance()
        with pytest.raises(InvalidTransitionError):
            submitted.retreat()
        with pytest.raises(InvalidTransitionError):
            submitted.select("age", "under18")
        with pytest.raises(InvalidTransitionError):
            submitted.submit()

    def test_restart_leaves_submitted_state(self, submitted):
        submitted.restart()
        assert not submitted.is_submitted
        assert submitted.current_step == 1


class TestRestart:

    def test_restart_clears_everything(self, make_controller):
        controller = make_controller(4)
        controller.restart()

        assert controller.current_step == 1
        assert controller.selections == {}
        assert controller.responses is None
        # Fresh input is required again
        with pytest.raises(StepValidationError):
            controller.advance()

    def test_restart_from_first_step(self, make_controller):
        controller = make_controller(1)
        controller.select("age", "under18")
        controller.restart()
        assert controller.selections == {}


class TestSelections:

    def test_unknown_field(self, make_controller):
        controller = make_controller(1)
        with pytest.raises(InvalidSelectionError, match="Unknown single-choice field"):
            controller.select("favourite_colour", "blue")

    def test_circumstances_is_not_single_choice(self, make_controller):
        controller = make_controller(1)
        with pytest.raises(InvalidSelectionError):
            controller.select("circumstances", "veteran")

    def test_unknown_option(self, make_controller):
        controller = make_controller(1)
        with pytest.raises(InvalidSelectionError, match="Invalid option"):
            controller.select("age", "40")

    def test_invalid_selection_is_value_error(self, make_controller):
        controller = make_controller(1)
        with pytest.raises(ValueError):
            controller.select("income", "rich")

    def test_later_selection_replaces_earlier(self, make_controller):
        controller = make_controller(1)
        controller.select("age", "under18")
        controller.select("age", "18-64")
        assert controller.selections["age"] == "18-64"


class TestCircumstanceExclusivity:

    def test_none_clears_others(self, make_controller):
        controller = make_controller(6)
        controller.toggle_circumstance("disability")
        controller.toggle_circumstance("veteran")
        controller.toggle_circumstance("none")
        assert controller.selections["circumstances"] == ["none"]

    def test_other_clears_none(self, make_controller):
        controller = make_controller(6)
        controller.toggle_circumstance("none")
        controller.toggle_circumstance("veteran")
        assert controller.selections["circumstances"] == ["veteran"]

    def test_uncheck(self, make_controller):
        controller = make_controller(6)
        controller.toggle_circumstance("disability")
        controller.toggle_circumstance("veteran")
        controller.toggle_circumstance("disability", checked=False)
        assert controller.selections["circumstances"] == ["veteran"]

    def test_set_circumstances_with_none_wins(self, make_controller):
        controller = make_controller(6)
        controller.set_circumstances(["disability", "none"])
        assert controller.selections["circumstances"] == ["none"]
        assert controller.submit().circumstances == frozenset()

    def test_set_circumstances_deduplicates(self, make_controller):
        controller = make_controller(6)
        controller.set_circumstances(["veteran", "veteran", "disability"])
        assert controller.selections["circumstances"] == ["veteran", "disability"]

    def test_set_circumstances_empty(self, make_controller):
        controller = make_controller(6)
        controller.set_circumstances(["veteran"])
        controller.set_circumstances([])
        assert "circumstances" not in controller.selections

    def test_unknown_circumstance(self, make_controller):
        controller = make_controller(6)
        with pytest.raises(InvalidSelectionError):
            controller.toggle_circumstance("astronaut")
        with pytest.raises(InvalidSelectionError):
            controller.set_circumstances(["veteran", "astronaut"])
        assert "circumstances" not in controller.selections


class TestView:

    def test_first_step(self, make_controller):
        view = make_controller(1).view
        assert view.current_step == 1
        assert view.total_steps == 6
        assert view.step.field == "age"
        assert view.show_previous is False
        assert view.show_next is True
        assert view.show_submit is False
        assert view.progress_percent == pytest.approx(100 / 6)

    def test_middle_step(self, make_controller):
        view = make_controller(3).view
        assert view.show_previous is True
        assert view.show_next is True
        assert view.show_submit is False
        assert view.progress_percent == pytest.approx(50.0)

    def test_final_step(self, make_controller):
        view = make_controller(6).view
        assert view.step.field == "circumstances"
        assert view.show_previous is True
        assert view.show_next is False
        assert view.show_submit is True
        assert view.progress_percent == pytest.approx(100.0)

    def test_selections_exposed(self, make_controller):
        view = make_controller(2).view
        assert view.selections == {"age": "65plus"}
