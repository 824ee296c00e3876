# inout/sample_parser.py
import json
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Union
from cerberus import Validator

from core.evaluation_types import Point2D
from core.exceptions import InputFormatError
from stats.regression import RegressionLine, linear_regression
from utils.logging_config import get_logger

logger = get_logger(__name__)

NAMED_VALUE_SCHEMA: Dict[str, Any] = {
    'name': {'type': 'string', 'required': True},
    'value': {'type': 'number', 'required': True},
}

POINT_SCHEMA: Dict[str, Any] = {
    'x': {'type': 'number', 'required': True},
    'y': {'type': 'number', 'required': True},
}

CHART_SCHEMAS: Dict[str, Dict[str, Any]] = {
    'bar': NAMED_VALUE_SCHEMA,
    'pie': NAMED_VALUE_SCHEMA,
    'scatter': POINT_SCHEMA,
}

EXAMPLES: Dict[str, str] = {
    'bar': '[{"name": "A", "value": 10}]',
    'pie': '[{"name": "A", "value": 10}]',
    'scatter': '[{"x": 1, "y": 10}]',
}


@dataclass(frozen=True)
class ChartDatum:
    name: str
    value: float


ChartData = Union[List[ChartDatum], List[Point2D]]


def _invalid(kind: str, detail: str) -> InputFormatError:
    return InputFormatError(f"Invalid JSON. Example: {EXAMPLES[kind]} ({detail})")


def _reject_constant(token: str) -> float:
    raise ValueError(f"'{token}' is not a JSON number")


def _finite_number(token: str) -> float:
    value = float(token)
    if not math.isfinite(value):
        raise ValueError(f"number {token[:20]} is out of range")
    return value


def parse_chart_data(text: str, kind: str) -> ChartData:
    """
    Parse a JSON array of chart samples.

    Args:
        text: JSON text; must decode to an array.
        kind: 'bar' or 'pie' for {name, value} elements, 'scatter' for {x, y} elements.

    Returns:
        A list of ChartDatum (bar/pie) or Point2D (scatter).

    Raises:
        InputFormatError: If the text is not JSON, not an array, or an element has the wrong shape.
    """
    if kind not in CHART_SCHEMAS:
        raise ValueError(f"Unknown chart kind '{kind}'. Allowed values are: {sorted(CHART_SCHEMAS)}")
    try:
        data = json.loads(text, parse_float=_finite_number, parse_int=_finite_number,
                          parse_constant=_reject_constant)
    except (TypeError, ValueError, RecursionError) as e:
        raise _invalid(kind, f"not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise _invalid(kind, f"expected an array, got {type(data).__name__}")

    validator = Validator(CHART_SCHEMAS[kind], allow_unknown=True)
    parsed: list = []
    for i, element in enumerate(data):
        if not isinstance(element, dict):
            raise _invalid(kind, f"element {i} is not an object")
        if not validator.validate(element):
            raise _invalid(kind, f"element {i}: {validator.errors}")
        if kind == 'scatter':
            parsed.append(Point2D(float(element['x']), float(element['y'])))
        else:
            parsed.append(ChartDatum(element['name'], float(element['value'])))
    return parsed


class ChartDataStore:
    """
    Holds the last successfully processed dataset per chart kind.

    A failed ``process`` call records an error message for that kind and
    leaves the previously processed dataset untouched.
    """

    def __init__(self):
        self.datasets: Dict[str, ChartData] = {kind: [] for kind in CHART_SCHEMAS}
        self.errors: Dict[str, str] = {kind: '' for kind in CHART_SCHEMAS}

    def process(self, kind: str, text: str) -> ChartData:
        try:
            data = parse_chart_data(text, kind)
        except InputFormatError as e:
            logger.error("Rejected %s data: %s", kind, e)
            self.errors[kind] = str(e)
            raise
        self.datasets[kind] = data
        self.errors[kind] = ''
        return data

    def regression(self) -> RegressionLine:
        return linear_regression(self.datasets['scatter'])
