import pytest

from django import forms

from output_views.fields import (
    RangeInput,
    SliderField,
    coerce,
    coerce_bool,
    coerce_float,
    coerce_int,
    select_field,
)


def test_coerce_bool():
    assert coerce_bool("True") is True
    assert coerce_bool("true") is True
    assert coerce_bool("on") is True
    assert coerce_bool("False") is False
    assert coerce_bool("false") is False
    assert coerce_bool(False) is False
    with pytest.raises(ValueError):
        coerce_bool("maybe")


def test_coerce_int():
    assert coerce_int("1") == 1
    assert coerce_int("2.0") == 2 and isinstance(coerce_int("2.0"), int)
    assert coerce_int(3) == 3
    with pytest.raises(ValueError):
        coerce_int("abc")
    with pytest.raises(ValueError):
        coerce_int("2.5")
    with pytest.raises(ValueError):
        coerce_int(True)


def test_coerce_float():
    assert coerce_float("1") == 1.0 and isinstance(coerce_float("1"), float)
    assert coerce_float(3) == 3.0 and isinstance(coerce_float(3), float)
    with pytest.raises(ValueError):
        coerce_float("abc")
    with pytest.raises(ValueError):
        coerce_float(False)


def test_coerce():
    assert coerce("abc") == "abc"
    with pytest.raises(ValueError):
        coerce(1)


def test_range_input():
    assert RangeInput().input_type == "range"


def test_slider_field():
    field = SliderField(0, 10, coerce=coerce_int, step=1, required=False)
    assert isinstance(field.widget, RangeInput)
    assert field.widget.attrs["step"] == 1
    assert field.clean("5") == 5
    assert field.clean("") is None
    with pytest.raises(forms.ValidationError):
        field.clean("11")
    with pytest.raises(forms.ValidationError):
        field.clean("abc")


def test_slider_field_single_value():
    field = SliderField(3, 3, coerce=coerce_int)
    assert field.clean("3") == 3
    with pytest.raises(forms.ValidationError):
        field.clean("4")


def test_select_field():
    field = select_field("Show", [("Yes", True), ("No", False)], coerce_bool)
    assert field.choices == [("True", "Yes"), ("False", "No")]
    assert field.clean("False") is False
    with pytest.raises(forms.ValidationError):
        field.clean("maybe")
