from .controls import Control, ControlKind, select_control
from .displayer import Displayer, RenderedView
from .exceptions import (
    IncompleteResultError,
    OutputViewError,
    ProviderError,
    ProviderNotFound,
    TypeMismatchError,
    UnknownParameterError,
    ValidationError,
)
from .invocation import InvocationAdapter, SessionStateStore
from .metadata import OutputViewMetadata
from .param import ParameterDescriptor, ParameterKind, parse_interactive, parse_parameter
from .providers import (
    BaseOutputViewProvider,
    DefaultViewProvider,
    OutputViewProvider,
    ProviderContext,
    ProviderMetadata,
    as_provider,
)
from .registry import ProviderRegistry, load_registry
from .results import DisplayType, validate_result

__version__ = "0.0.0"
