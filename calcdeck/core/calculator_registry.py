"""Evaluator Registry — explicit calculator id → evaluator mapping.

Invariants:
    - Every shipped calculator definition has exactly one entry here
    - Adding a calculator means adding its YAML file and one line below
"""

from calcdeck.core.evaluate_calorie import evaluate_calorie
from calcdeck.core.evaluate_compound_interest import evaluate_compound_interest
from calcdeck.core.evaluate_mulch_gravel import evaluate_mulch_gravel
from calcdeck.core.evaluation import Evaluator

EVALUATORS: dict[str, Evaluator] = {
    "calorie": evaluate_calorie,
    "compound-interest": evaluate_compound_interest,
    "mulch-gravel": evaluate_mulch_gravel,
}


def get_evaluator(calculator_id: str) -> Evaluator | None:
    return EVALUATORS.get(calculator_id)
