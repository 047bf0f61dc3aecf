from django import forms
from django.utils.translation import gettext_lazy as _


TRUE_VALUES = ("True", "true", "on", "1")
FALSE_VALUES = ("False", "false", "off", "0", "")


def coerce_bool(val):
    if isinstance(val, bool):
        return val
    if val in TRUE_VALUES:
        return True
    if val in FALSE_VALUES:
        return False
    raise ValueError(f"{val!r} is not a boolean")


def coerce_int(val):
    if isinstance(val, bool):
        raise ValueError(f"{val!r} is not an integer")
    as_float = float(val)
    if not as_float.is_integer():
        raise ValueError(f"{val!r} is not an integer")
    return int(as_float)


def coerce_float(val):
    if isinstance(val, bool):
        raise ValueError(f"{val!r} is not a number")
    return float(val)


def coerce(val):
    if not isinstance(val, str):
        raise ValueError(f"{val!r} is not a string")
    return val


class RangeInput(forms.NumberInput):
    """Slider rendered as ``<input type="range">``."""

    input_type = "range"


class SliderField(forms.Field):
    """
    Bounded numeric field backing a range slider. ``coerce`` is
    ``coerce_int`` or ``coerce_float`` depending on the parameter kind.
    """

    default_error_messages = {
        "invalid_type": _("%(value)s is not able to be converted to the correct type"),
        "out_of_range": _("%(value)s is not between %(min)s and %(max)s"),
    }

    def __init__(self, min_value, max_value, coerce=coerce_float, step=None, **kwargs):
        self.min_value = min_value
        self.max_value = max_value
        self.coerce = coerce
        self.step = step
        attrs = {"min": min_value, "max": max_value}
        if step is not None:
            attrs["step"] = step
        kwargs.setdefault("widget", RangeInput(attrs=attrs))
        super().__init__(**kwargs)

    def to_python(self, value):
        if value in self.empty_values:
            return None
        try:
            return self.coerce(value)
        except (ValueError, TypeError):
            raise forms.ValidationError(
                self.error_messages["invalid_type"],
                params={"value": value},
                code="invalid",
            )

    def validate(self, value):
        super().validate(value)
        if value is None:
            return
        if value < self.min_value or value > self.max_value:
            raise forms.ValidationError(
                self.error_messages["out_of_range"],
                params={"value": value, "min": self.min_value, "max": self.max_value},
                code="out_of_range",
            )


def checkbox_field(label, help_text=""):
    return forms.BooleanField(
        label=label,
        help_text=help_text,
        required=False,
        widget=forms.CheckboxInput(attrs={"class": "output-view-param"}),
    )


def text_field(label, help_text=""):
    return forms.CharField(
        label=label,
        help_text=help_text,
        required=False,
        strip=False,
        widget=forms.TextInput(attrs={"class": "output-view-param"}),
    )


def stepper_field(label, integer, step, help_text=""):
    field = forms.IntegerField if integer else forms.FloatField
    return field(
        label=label,
        help_text=help_text,
        required=False,
        widget=forms.NumberInput(attrs={"step": step, "class": "output-view-param"}),
    )


def slider_field(label, integer, min_value, max_value, step=None, help_text=""):
    attrs = {"min": min_value, "max": max_value, "class": "output-view-param"}
    if step is not None:
        attrs["step"] = step
    return SliderField(
        min_value,
        max_value,
        coerce=coerce_int if integer else coerce_float,
        step=step,
        label=label,
        help_text=help_text,
        required=False,
        widget=RangeInput(attrs=attrs),
    )


def select_field(label, choices, coerce_func, help_text=""):
    return forms.TypedChoiceField(
        label=label,
        help_text=help_text,
        required=False,
        coerce=coerce_func,
        choices=[(str(value), text) for text, value in choices],
        empty_value=None,
        widget=forms.Select(attrs={"class": "output-view-param"}),
    )
