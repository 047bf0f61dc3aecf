from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from loguru import logger

from .controls import Control, build_controls
from .exceptions import (
    OutputViewError,
    ProviderError,
    TypeMismatchError,
    UnknownParameterError,
)
from .forms import InteractiveForm
from .invocation import InvocationAdapter
from .param import ParameterDescriptor, parse_interactive
from .providers import ProviderContext
from .registry import ProviderRegistry
from .results import DisplayType, ViewProviderResult, validate_result
from .settings import Settings, resolve


@dataclass
class RenderedView:
    label: str
    display_type: DisplayType
    result: ViewProviderResult
    controls: List[Control] = field(default_factory=list)
    state: Dict[str, Any] = field(default_factory=dict)
    error: Optional[OutputViewError] = None
    fallback: bool = False

    @property
    def descriptors(self) -> List[ParameterDescriptor]:
        return [control.descriptor for control in self.controls]

    @property
    def data(self) -> Dict[str, Any]:
        return self.result.payload()

    def form(self, data=None) -> InteractiveForm:
        return InteractiveForm(self.controls, data=data)


class Displayer:
    """
    Runs output view providers for the host portal. Provider failures never
    escape ``render``: the request is answered with the download view and
    the error is attached for inline display.
    """

    def __init__(
        self,
        registry: Optional[ProviderRegistry] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = resolve(settings)
        self.registry = registry or ProviderRegistry(self.settings)

    def invoke(self, label, context: ProviderContext, adapter: InvocationAdapter):
        provider = self.registry.get(label)
        metadata = provider.describe()
        kwargs = adapter.kwargs()
        logger.debug("output_views.invoke label={} params={}", label, kwargs)
        try:
            data = provider.generate(context, kwargs)
        except OutputViewError:
            raise
        except Exception as e:
            raise ProviderError(f"{label} failed: {type(e).__name__}: {e}") from e
        result = validate_result(metadata.display_type, data)
        controls = build_controls(parse_interactive(result.interactive))
        state = adapter.state
        # the provider's declared values are what the user now sees.
        state.update({control.name: control.value for control in controls})
        return RenderedView(
            label=label,
            display_type=metadata.display_type,
            result=result,
            controls=controls,
            state=state,
        )

    def adapter(
        self,
        label,
        state: Optional[Mapping[str, Any]] = None,
        descriptors=(),
    ) -> InvocationAdapter:
        metadata = self.registry.get(label).describe()
        return InvocationAdapter(metadata.parameters, descriptors, state)

    def render(
        self,
        label: str,
        context: ProviderContext,
        state: Optional[Mapping[str, Any]] = None,
        update: Optional[Mapping[str, Any]] = None,
        descriptors=(),
        raw: bool = False,
    ) -> RenderedView:
        """
        Render ``label`` for ``context``. ``state`` is the last known
        invocation state, ``update`` the user's edit and ``descriptors`` the
        interactive parameters of the previous render. With ``raw`` the
        update values are strings to coerce (query string or form POST).
        """
        try:
            adapter = self.adapter(label, state, descriptors)
        except OutputViewError as e:
            return self.fallback(label, context, e)

        rejected = None
        if update:
            try:
                if raw:
                    adapter.apply_raw(update)
                else:
                    adapter.apply(update)
            except (UnknownParameterError, TypeMismatchError) as e:
                # the edit is dropped, the view is rendered with the prior state.
                rejected = e

        try:
            view = self.invoke(label, context, adapter)
        except OutputViewError as e:
            return self.fallback(label, context, e)
        view.error = rejected
        return view

    def fallback(self, label, context, error: OutputViewError) -> RenderedView:
        default_label = self.settings.DEFAULT_PROVIDER
        if label == default_label:
            raise error
        logger.opt(exception=error).warning(
            "output_views.fallback label={} error={}", label, error
        )
        view = self.invoke(
            default_label, context, self.adapter(default_label)
        )
        view.error = error
        view.fallback = True
        return view

    def render_initial(self, metadata, context, state=None) -> RenderedView:
        """Render the first provider listed in the output's metadata."""
        return self.render(metadata.resolve(self.registry).initial, context, state)
