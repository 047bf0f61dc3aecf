from enum import Enum

from .fields import (
    checkbox_field,
    select_field,
    slider_field,
    stepper_field,
    text_field,
)
from .param import ParameterDescriptor, ParameterKind


class ControlKind(str, Enum):
    CHECKBOX = "checkbox"
    TEXT = "text"
    STEPPER = "stepper"
    RANGE = "range"
    SELECT = "select"


def select_control(descriptor: ParameterDescriptor) -> ControlKind:
    """
    Pick the form control for a validated descriptor. Options always win,
    even over numeric bounds.
    """
    if descriptor.options:
        return ControlKind.SELECT
    if descriptor.kind is ParameterKind.BOOLEAN:
        return ControlKind.CHECKBOX
    if descriptor.kind.is_numeric and descriptor.has_bounds:
        return ControlKind.RANGE
    if descriptor.kind.is_numeric:
        return ControlKind.STEPPER
    return ControlKind.TEXT


class Control:
    def __init__(self, descriptor: ParameterDescriptor):
        self.descriptor = descriptor
        self.name = descriptor.name
        self.label = descriptor.label
        self.value = descriptor.value
        self.kind = select_control(descriptor)
        self.step = self.get_step()
        self.form_field = self.get_form_field()

    def __repr__(self):
        return f"Control(name={self.name!r}, kind={self.kind.value!r})"

    def get_step(self):
        if self.kind is ControlKind.STEPPER:
            return self.descriptor.step or 1
        if self.kind is ControlKind.RANGE:
            return self.descriptor.step
        return None

    @property
    def choices(self):
        return list(self.descriptor.options or ())

    @property
    def options(self):
        if self.kind is not ControlKind.SELECT:
            return None
        return [{"text": text, "value": value} for text, value in self.choices]

    def get_form_field(self):
        descriptor = self.descriptor
        integer = descriptor.kind is ParameterKind.INTEGER
        if self.kind is ControlKind.SELECT:
            field = select_field(
                self.label, self.choices, descriptor.kind.coerce_func, descriptor.help
            )
        elif self.kind is ControlKind.CHECKBOX:
            field = checkbox_field(self.label, descriptor.help)
        elif self.kind is ControlKind.RANGE:
            field = slider_field(
                self.label,
                integer,
                descriptor.min,
                descriptor.max,
                step=self.step,
                help_text=descriptor.help,
            )
        elif self.kind is ControlKind.STEPPER:
            field = stepper_field(self.label, integer, self.step, descriptor.help)
        else:
            field = text_field(self.label, descriptor.help)
        field.initial = descriptor.value
        return field


def build_controls(descriptors):
    return [Control(descriptor) for descriptor in descriptors]
