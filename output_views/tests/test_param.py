import pytest

from output_views.exceptions import ValidationError
from output_views.param import (
    ParameterKind,
    kind_of,
    parse_interactive,
    parse_parameter,
)


def test_kind_of():
    assert kind_of(False) is ParameterKind.BOOLEAN
    assert kind_of(True) is ParameterKind.BOOLEAN
    assert kind_of(1) is ParameterKind.INTEGER
    assert kind_of(1.5) is ParameterKind.FLOAT
    assert kind_of("red") is ParameterKind.STRING
    assert kind_of(None) is None
    assert kind_of([1]) is None


def test_boolean_parameter():
    param = parse_parameter({"name": "show_grid", "value": False})
    assert param.kind is ParameterKind.BOOLEAN
    assert param.value is False
    assert param.label == "show_grid"
    assert param.help == ""
    assert param.options is None


def test_bounded_integer_defaults_step():
    param = parse_parameter({"name": "count", "value": 5, "min": 0, "max": 10})
    assert param.kind is ParameterKind.INTEGER
    assert (param.min, param.max, param.step) == (0, 10, 1)
    assert param.has_bounds


def test_bounded_float_leaves_step_unset():
    param = parse_parameter({"name": "alpha", "value": 0.5, "min": 0, "max": 1})
    assert param.kind is ParameterKind.FLOAT
    assert param.step is None
    assert isinstance(param.min, float) and isinstance(param.max, float)


def test_explicit_step():
    param = parse_parameter(
        {"name": "alpha", "value": 0.5, "min": 0.0, "max": 1.0, "step": 0.1}
    )
    assert param.step == 0.1


def test_plain_options():
    param = parse_parameter(
        {"name": "color", "value": "red", "options": ["red", "green", "blue"]}
    )
    assert param.options == (("red", "red"), ("green", "green"), ("blue", "blue"))
    assert param.option_values() == ["red", "green", "blue"]


def test_labeled_options():
    param = parse_parameter(
        {
            "name": "cmap",
            "value": "gray",
            "options": [("Viridis", "viridis"), ["Gray", "gray"]],
            "label": "Color map",
            "help": "Matplotlib color map",
        }
    )
    assert param.options == (("Viridis", "viridis"), ("Gray", "gray"))
    assert param.label == "Color map"
    assert param.help == "Matplotlib color map"


def test_float_options_are_widened():
    param = parse_parameter({"name": "scale", "value": 2.0, "options": [1, 2.0, 3]})
    assert param.option_values() == [1.0, 2.0, 3.0]
    assert all(isinstance(v, float) for v in param.option_values())


def test_min_equals_max():
    param = parse_parameter({"name": "count", "value": 3, "min": 3, "max": 3})
    assert param.min == param.max == 3


@pytest.mark.parametrize(
    "raw,field",
    [
        ({"value": 1}, "name"),
        ({"name": "1abc", "value": 1}, "name"),
        ({"name": "has space", "value": 1}, "name"),
        ({"name": "class", "value": 1}, "name"),
        ({"name": 10, "value": 1}, "name"),
        ({"name": "count"}, "value"),
        ({"name": "count", "value": None}, "value"),
        ({"name": "count", "value": [1, 2]}, "value"),
        ({"name": "color", "value": "red", "options": ["red", ("Green", "green")]}, "options"),
        ({"name": "color", "value": "red", "options": []}, "options"),
        ({"name": "color", "value": "red", "options": "red"}, "options"),
        ({"name": "color", "value": "red", "options": ["red", 1]}, "options"),
        ({"name": "color", "value": "red", "options": ["green", "blue"]}, "options"),
        ({"name": "count", "value": 1, "options": [1, True]}, "options"),
        ({"name": "count", "value": 5, "min": 10, "max": 0}, "min"),
        ({"name": "count", "value": 20, "min": 0, "max": 10}, "value"),
        ({"name": "count", "value": 5, "step": 1}, "step"),
        ({"name": "count", "value": 5, "min": 0, "step": 1}, "step"),
        ({"name": "count", "value": 5, "min": 0, "max": 10, "step": 0}, "step"),
        ({"name": "color", "value": "red", "min": 0}, "min"),
        ({"name": "flag", "value": True, "max": 1}, "max"),
        ({"name": "count", "value": 5, "min": "0", "max": 10}, "min"),
        ({"name": "count", "value": 5, "label": 3}, "label"),
        ({"name": "count", "value": 5, "type": "int"}, "type"),
    ],
)
def test_invalid_parameters(raw, field):
    with pytest.raises(ValidationError) as excinfo:
        parse_parameter(raw)
    assert excinfo.value.field == field
    assert excinfo.value.todict()["field"] == field


def test_parse_parameter_requires_mapping():
    with pytest.raises(ValidationError):
        parse_parameter(["name", "value"])


def test_parse_interactive():
    params = parse_interactive(
        [{"name": "show_grid", "value": True}, {"name": "count", "value": 2}]
    )
    assert [p.name for p in params] == ["show_grid", "count"]
    assert parse_interactive(None) == []
    assert parse_interactive([]) == []


def test_parse_interactive_duplicate_names():
    with pytest.raises(ValidationError) as excinfo:
        parse_interactive([{"name": "a", "value": 1}, {"name": "a", "value": 2}])
    assert excinfo.value.field == "name"


def test_parse_interactive_requires_list():
    with pytest.raises(ValidationError):
        parse_interactive({"name": "a", "value": 1})
