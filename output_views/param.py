"""
Interactive parameter declarations.

A provider declares interactive parameters inline in its result::

    {
        "output": "<div>...</div>",
        "interactive": [
            {"name": "show_grid", "value": False},
            {"name": "count", "value": 5, "min": 0, "max": 10},
            {"name": "color", "value": "red", "options": ["red", "green", "blue"]},
            {
                "name": "cmap",
                "value": "viridis",
                "options": [("Viridis", "viridis"), ("Gray", "gray")],
                "label": "Color map",
                "help": "Matplotlib color map",
            },
        ],
    }

``parse_parameter`` turns one of these mappings into a ``ParameterDescriptor``.
The kind of the parameter is inferred from the runtime type of ``value``.
"""
import keyword
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Tuple

from .exceptions import ValidationError
from .fields import coerce, coerce_bool, coerce_float, coerce_int


class ParameterKind(str, Enum):
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"

    @property
    def is_numeric(self):
        return self in (ParameterKind.INTEGER, ParameterKind.FLOAT)

    @property
    def coerce_func(self):
        return COERCE_FUNCS[self]

    def accepts(self, value) -> bool:
        if self is ParameterKind.BOOLEAN:
            return isinstance(value, bool)
        if isinstance(value, bool):
            return False
        if self is ParameterKind.INTEGER:
            return isinstance(value, int)
        if self is ParameterKind.FLOAT:
            return isinstance(value, (int, float))
        return isinstance(value, str)

    def normalize(self, value):
        # ints are widened for float parameters.
        if self is ParameterKind.FLOAT:
            return float(value)
        return value


COERCE_FUNCS = {
    ParameterKind.BOOLEAN: coerce_bool,
    ParameterKind.INTEGER: coerce_int,
    ParameterKind.FLOAT: coerce_float,
    ParameterKind.STRING: coerce,
}


def kind_of(value) -> Optional[ParameterKind]:
    # bool is a subclass of int so it has to be checked first.
    if isinstance(value, bool):
        return ParameterKind.BOOLEAN
    if isinstance(value, int):
        return ParameterKind.INTEGER
    if isinstance(value, float):
        return ParameterKind.FLOAT
    if isinstance(value, str):
        return ParameterKind.STRING
    return None


@dataclass(frozen=True)
class ParameterDescriptor:
    name: str
    value: Any
    kind: ParameterKind
    label: str
    help: str = ""
    options: Optional[Tuple[Tuple[str, Any], ...]] = None
    min: Optional[float] = None
    max: Optional[float] = None
    step: Optional[float] = None

    @property
    def has_bounds(self):
        return self.min is not None and self.max is not None

    def option_values(self) -> List[Any]:
        return [value for _, value in self.options or ()]


ALLOWED_KEYS = ("name", "value", "label", "help", "options", "min", "max", "step")


def is_pair(option) -> bool:
    return isinstance(option, (list, tuple)) and len(option) == 2


def parse_options(options, kind: ParameterKind):
    if not isinstance(options, (list, tuple)) or not options:
        raise ValidationError("options", "must be a non-empty list")
    pairs = [is_pair(option) for option in options]
    if any(pairs) and not all(pairs):
        raise ValidationError(
            "options", "cannot mix plain values and (label, value) pairs"
        )
    if all(pairs):
        normalized = [(label, value) for label, value in options]
    else:
        normalized = [(str(value), value) for value in options]
    result = []
    for label, value in normalized:
        if not isinstance(label, str):
            raise ValidationError("options", f"label {label!r} is not a string")
        if not kind.accepts(value):
            raise ValidationError(
                "options", f"{value!r} is not compatible with {kind.value}"
            )
        result.append((label, kind.normalize(value)))
    return tuple(result)


def parse_bound(raw, name, kind: ParameterKind):
    bound = raw.get(name)
    if bound is None:
        return None
    if not kind.is_numeric:
        raise ValidationError(name, "only allowed for numeric parameters")
    if not ParameterKind.FLOAT.accepts(bound):
        raise ValidationError(name, f"{bound!r} is not a number")
    return kind.normalize(bound)


def parse_parameter(raw: Mapping) -> ParameterDescriptor:
    """
    Validate and normalize a raw interactive parameter declaration. Raises
    ``ValidationError`` naming the offending field.
    """
    if not isinstance(raw, Mapping):
        raise ValidationError("interactive", f"{raw!r} is not a mapping")
    for key in raw:
        if key not in ALLOWED_KEYS:
            raise ValidationError(key, "unknown parameter attribute")

    name = raw.get("name")
    if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name):
        raise ValidationError("name", f"{name!r} is not a valid identifier")

    if "value" not in raw:
        raise ValidationError("value", "is required")
    value = raw["value"]
    kind = kind_of(value)
    if kind is None:
        raise ValidationError(
            "value", f"{type(value).__name__} values are not supported"
        )

    options = None
    if raw.get("options") is not None:
        options = parse_options(raw["options"], kind)
        if value not in [v for _, v in options]:
            raise ValidationError("options", f"{value!r} is not one of the options")

    min_ = parse_bound(raw, "min", kind)
    max_ = parse_bound(raw, "max", kind)
    if min_ is not None and max_ is not None:
        if min_ > max_:
            raise ValidationError("min", f"{min_} is greater than max {max_}")
        if value < min_ or value > max_:
            raise ValidationError("value", f"{value} is not between {min_} and {max_}")

    step = raw.get("step")
    if step is not None:
        if min_ is None or max_ is None:
            raise ValidationError("step", "requires both min and max")
        if not ParameterKind.FLOAT.accepts(step) or step <= 0:
            raise ValidationError("step", f"{step!r} is not a positive number")
    elif min_ is not None and max_ is not None and kind is ParameterKind.INTEGER:
        step = 1

    label = raw.get("label") or name
    help_text = raw.get("help") or ""
    for attr, text in (("label", label), ("help", help_text)):
        if not isinstance(text, str):
            raise ValidationError(attr, f"{text!r} is not a string")

    return ParameterDescriptor(
        name=name,
        value=kind.normalize(value),
        kind=kind,
        label=label,
        help=help_text,
        options=options,
        min=min_,
        max=max_,
        step=step,
    )


def parse_interactive(entries: Optional[Iterable[Mapping]]) -> List[ParameterDescriptor]:
    if entries is None:
        return []
    if isinstance(entries, (str, bytes, Mapping)):
        raise ValidationError("interactive", "must be a list of parameters")
    descriptors = []
    seen = set()
    for entry in entries:
        descriptor = parse_parameter(entry)
        if descriptor.name in seen:
            raise ValidationError("name", f"duplicate parameter '{descriptor.name}'")
        seen.add(descriptor.name)
        descriptors.append(descriptor)
    return descriptors
