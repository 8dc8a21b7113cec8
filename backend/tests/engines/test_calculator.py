"""Unit tests for engines.calculator (evaluate_calculation)."""

import pytest

from varflow.engines.calculator import evaluate_calculation
from varflow.engines.errors import CalculationError


class TestEvaluateCalculation:
    def test_expression(self) -> None:
        assert evaluate_calculation("[x * 2 for x in data]", {"data": [1, 2, 3]}) == [2, 4, 6]

    def test_function_body(self) -> None:
        logic = "total = 0\nfor v in data:\n    total += v\nreturn total\n"
        assert evaluate_calculation(logic, {"data": [1, 2, 3]}) == 6

    def test_indented_body(self) -> None:
        logic = "    a = 2\n    return a * 3\n"
        assert evaluate_calculation(logic) == 6

    def test_body_without_return_is_none(self) -> None:
        assert evaluate_calculation("a = 1") is None

    def test_result_normalized(self) -> None:
        assert evaluate_calculation("(1, 2)") == [1, 2]

    def test_empty_logic(self) -> None:
        with pytest.raises(CalculationError, match="empty"):
            evaluate_calculation("   ")

    def test_runtime_error(self) -> None:
        with pytest.raises(CalculationError, match="ZeroDivisionError"):
            evaluate_calculation("1 / 0")

    def test_unknown_name(self) -> None:
        with pytest.raises(CalculationError, match="NameError"):
            evaluate_calculation("missing + 1")

    def test_restricted_code_rejected(self) -> None:
        with pytest.raises(CalculationError):
            evaluate_calculation("data.__class__", {"data": []})
