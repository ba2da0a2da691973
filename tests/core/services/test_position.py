from __future__ import annotations

import pytest

from goldprice.core.exceptions import DataValidationError
from goldprice.core.services.position import AveragePosition, average_cost


def test_weighted_average() -> None:
    position = average_cost(10.0, 450.0, 10.0, 470.0)

    assert position.total_weight == 20.0
    assert position.average_price == pytest.approx(460.0)


def test_empty_position_is_zero() -> None:
    assert average_cost(0.0, 450.0, 0.0, 470.0) == AveragePosition(total_weight=0.0, average_price=0.0)


def test_negative_inputs_rejected() -> None:
    with pytest.raises(DataValidationError) as exc_info:
        average_cost(-1.0, 450.0, 10.0, 470.0)

    assert exc_info.value.validation_errors == {"current_weight": -1.0}
    assert exc_info.value.error_code == "VALIDATION_ERROR"
