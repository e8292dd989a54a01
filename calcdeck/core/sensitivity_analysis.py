"""Sensitivity Analysis — sweep one input around its current value.

Invariants:
    - Pure: re-runs the evaluator, never mutates the request
    - Invalid base request or non-numeric base input → []
    - Points are ordered by offset, from −range% to +range%, with the base value in the middle
    - Swept values stay inside the input's [lower, upper] bounds when given
    - A step whose evaluation is invalid reports result=None instead of being dropped
"""

from dataclasses import replace

from calcdeck.core.evaluation import EvaluationRequest, Evaluator, to_number


def sweep_offsets(steps: int, range_percent: float) -> list[float]:
    """Evenly spaced percentage offsets, e.g. steps=5, range=20 → [-20, -10, 0, 10, 20]."""
    if steps < 2:
        return [0.0]
    width = 2 * range_percent / (steps - 1)
    return [-range_percent + i * width for i in range(steps)]


def clamp(value: float, lower: float | None, upper: float | None) -> float:
    if lower is not None and value < lower:
        return lower
    if upper is not None and value > upper:
        return upper
    return value


def run_sensitivity(
    evaluator: Evaluator,
    request: EvaluationRequest,
    input_id: str,
    result_id: str,
    steps: int = 9,
    range_percent: float = 20.0,
    lower: float | None = None,
    upper: float | None = None,
) -> list[dict]:
    base_result = evaluator(request)
    base_value = to_number(request.values.get(input_id))
    if not base_result.is_valid or base_value is None:
        return []

    points = []
    for offset in sweep_offsets(steps, range_percent):
        value = clamp(base_value * (1 + offset / 100), lower, upper)
        varied = replace(request, values={**request.values, input_id: value})
        result = base_result if value == base_value else evaluator(varied)
        points.append({
            "offsetPercent": offset,
            "input": value,
            "result": result.values.get(result_id) if result.is_valid else None,
        })
    return points
