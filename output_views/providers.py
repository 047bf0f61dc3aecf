"""
Output view providers.

Plugin authors usually subclass ``BaseOutputViewProvider``::

    class MyViewProvider(BaseOutputViewProvider):
        display_type = "image"
        name = "My plot"
        immediate = True

        def generate_data(
            self, request, experiment_output, experiment, output_file=None,
            show_grid=False, **kwargs
        ):
            ...
            return {"image": buffer, "mime-type": "image/png",
                    "interactive": [{"name": "show_grid", "value": show_grid}]}

and register the class under the ``airavata.output_view_providers`` entry
point group. Anything that implements ``describe()`` and ``generate()`` is a
provider too; classes that only have ``generate_data`` are wrapped by
``as_provider``.
"""
import inspect
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

from loguru import logger

from .exceptions import ProviderError
from .param import ParameterKind, kind_of
from .results import DisplayType, get_display_type
from .settings import Settings, resolve


CONTEXT_ARGUMENTS = ("self", "request", "experiment_output", "experiment", "output_file")


@dataclass(frozen=True)
class ParameterField:
    name: str
    kind: ParameterKind
    default: Any


@dataclass(frozen=True)
class ProviderMetadata:
    label: str
    name: str
    display_type: DisplayType
    immediate: bool = False
    test_output_file: Optional[str] = None
    parameters: Dict[str, ParameterField] = field(default_factory=dict)

    def defaults(self) -> Dict[str, Any]:
        return {name: param.default for name, param in self.parameters.items()}


@dataclass
class ProviderContext:
    request: Any
    experiment_output: Any
    experiment: Any
    output_file: Any = None

    @property
    def experiment_id(self):
        return getattr(self.experiment, "experiment_id", None) or getattr(
            self.experiment, "experimentId", self.experiment
        )

    @property
    def output_name(self):
        return getattr(self.experiment_output, "name", self.experiment_output)


@runtime_checkable
class OutputViewProvider(Protocol):
    def describe(self) -> ProviderMetadata:
        ...

    def generate(self, context: ProviderContext, params: Mapping[str, Any]) -> Mapping:
        ...


def declared_parameters(func) -> Dict[str, ParameterField]:
    """
    Collect the keyword parameters of ``generate_data`` that have a default
    of a supported type. ``**kwargs`` and the context arguments are skipped.
    """
    parameters = {}
    for name, param in inspect.signature(func).parameters.items():
        if name in CONTEXT_ARGUMENTS:
            continue
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        if param.default is param.empty:
            continue
        kind = kind_of(param.default)
        if kind is None:
            logger.debug(
                "output_views.parameter.skipped name={} default={!r}",
                name,
                param.default,
            )
            continue
        parameters[name] = ParameterField(name, kind, param.default)
    return parameters


def open_test_output_file(path):
    try:
        return open(path, "rb")
    except OSError as e:
        raise ProviderError(f"Unable to open test output file {path}: {e}")


class ClassicProviderMixin:
    """
    Shared ``describe``/``generate`` for providers in the classic shape:
    class attributes plus a ``generate_data`` method.
    """

    label = None

    def get_target(self):
        return self

    def describe(self) -> ProviderMetadata:
        target = self.get_target()
        display_type = get_display_type(getattr(target, "display_type", None))
        return ProviderMetadata(
            label=self.label or type(target).__name__,
            name=getattr(target, "name", None) or type(target).__name__,
            display_type=display_type,
            immediate=bool(getattr(target, "immediate", False)),
            test_output_file=getattr(target, "test_output_file", None),
            parameters=declared_parameters(target.generate_data),
        )

    def generate(self, context: ProviderContext, params: Mapping[str, Any]):
        target = self.get_target()
        output_file = context.output_file
        test_output_file = getattr(target, "test_output_file", None)
        opened = None
        if output_file is None and test_output_file:
            logger.info(
                "output_views.test_output_file provider={} path={}",
                self.label,
                test_output_file,
            )
            output_file = opened = open_test_output_file(test_output_file)
        try:
            return target.generate_data(
                context.request,
                context.experiment_output,
                context.experiment,
                output_file=output_file,
                **params,
            )
        finally:
            if opened is not None:
                opened.close()


class BaseOutputViewProvider(ClassicProviderMixin):
    display_type = None
    name = None
    immediate = False
    test_output_file = None

    def generate_data(
        self, request, experiment_output, experiment, output_file=None, **kwargs
    ):
        raise NotImplementedError()


class ProviderAdapter(ClassicProviderMixin):
    """Wraps a duck-typed classic provider that does not subclass the base."""

    def __init__(self, target, label=None):
        self.target = target
        self.label = label

    def get_target(self):
        return self.target

    def __repr__(self):
        return f"ProviderAdapter({self.target!r})"


def as_provider(obj, label=None):
    if isinstance(obj, ClassicProviderMixin):
        if label is None or obj.label in (None, label):
            if label is not None:
                obj.label = label
            return obj
        # already registered under another label.
        return ProviderAdapter(obj.get_target(), label=label)
    if isinstance(obj, OutputViewProvider):
        return obj
    if callable(getattr(obj, "generate_data", None)) and hasattr(obj, "display_type"):
        return ProviderAdapter(obj, label=label)
    raise ProviderError(
        f"{obj!r} is not an output view provider: it needs describe() and "
        "generate(), or display_type and generate_data()"
    )


class DefaultViewProvider(BaseOutputViewProvider):
    """Link to download the raw output file."""

    display_type = DisplayType.LINK.value
    name = "Download"
    immediate = True

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = resolve(settings)
        self.label = self.settings.DEFAULT_PROVIDER

    def download_url(self, experiment_output, experiment, output_file):
        url = getattr(output_file, "url", None)
        if url:
            return url
        context = ProviderContext(None, experiment_output, experiment, output_file)
        return self.settings.DOWNLOAD_URL_TEMPLATE.format(
            experiment_id=context.experiment_id, output_name=context.output_name
        )

    def generate_data(
        self, request, experiment_output, experiment, output_file=None, **kwargs
    ):
        label = getattr(output_file, "name", None) or ProviderContext(
            request, experiment_output, experiment
        ).output_name
        return {
            "url": self.download_url(experiment_output, experiment, output_file),
            "label": str(label),
        }
