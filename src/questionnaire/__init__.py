"""Six-step questionnaire: step definitions and the navigation controller."""

from src.questionnaire.controller import QuestionnaireController
from src.questionnaire.steps import STEPS, TOTAL_STEPS, get_step

__all__ = ["QuestionnaireController", "STEPS", "TOTAL_STEPS", "get_step"]
