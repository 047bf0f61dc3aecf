from typing import Any, Dict, Iterable, Mapping, MutableMapping, Optional

from loguru import logger

from .exceptions import TypeMismatchError, UnknownParameterError
from .param import ParameterDescriptor, ParameterKind, kind_of
from .providers import ParameterField
from .settings import Settings, resolve


class InvocationAdapter:
    """
    Keeps the keyword arguments for the next provider invocation.

    The state starts from the last known state, or the declared defaults
    when there is none. Updates are applied to a copy which only replaces
    the current state once every entry has been checked, so a rejected
    update leaves the state untouched.
    """

    def __init__(
        self,
        defaults: Mapping[str, Any],
        descriptors: Iterable[ParameterDescriptor] = (),
        state: Optional[Mapping[str, Any]] = None,
    ):
        self.kinds: Dict[str, ParameterKind] = {}
        self.defaults: Dict[str, Any] = {}
        for name, default in defaults.items():
            if isinstance(default, ParameterField):
                self.kinds[name] = default.kind
                self.defaults[name] = default.default
            else:
                self.kinds[name] = kind_of(default)
                self.defaults[name] = default
        # the descriptors of the last result are authoritative for kinds and
        # may add parameters a provider only accepts through **kwargs.
        self.descriptors: Dict[str, ParameterDescriptor] = {}
        for descriptor in descriptors:
            self.descriptors[descriptor.name] = descriptor
            self.kinds[descriptor.name] = descriptor.kind
            self.defaults.setdefault(descriptor.name, descriptor.value)

        self._state = dict(self.defaults)
        if state:
            self._state.update(
                {name: value for name, value in state.items() if name in self.kinds}
            )

    @property
    def state(self) -> Dict[str, Any]:
        return dict(self._state)

    def kwargs(self) -> Dict[str, Any]:
        return dict(self._state)

    def check(self, name, value):
        if name not in self.kinds:
            raise UnknownParameterError([name])
        kind = self.kinds[name]
        if kind is None:
            return value
        if not kind.accepts(value):
            raise TypeMismatchError(name, kind.value, value)
        value = kind.normalize(value)
        descriptor = self.descriptors.get(name)
        if descriptor is not None:
            self.check_declared(descriptor, value)
        return value

    def check_declared(self, descriptor: ParameterDescriptor, value):
        """Values must stay within the options and bounds the provider declared."""
        if descriptor.options and value not in descriptor.option_values():
            raise TypeMismatchError(
                descriptor.name,
                "one of the options",
                value,
                f"{descriptor.name}: {value!r} is not one of the options",
            )
        too_low = descriptor.min is not None and value < descriptor.min
        too_high = descriptor.max is not None and value > descriptor.max
        if too_low or too_high:
            raise TypeMismatchError(
                descriptor.name,
                f"a value between {descriptor.min} and {descriptor.max}",
                value,
                f"{descriptor.name}: {value} is not between "
                f"{descriptor.min} and {descriptor.max}",
            )

    def apply(self, update: Mapping[str, Any]) -> Dict[str, Any]:
        unknown = [name for name in update if name not in self.kinds]
        if unknown:
            logger.info("output_views.update.rejected unknown={}", unknown)
            raise UnknownParameterError(unknown)
        new_state = dict(self._state)
        for name, value in update.items():
            new_state[name] = self.check(name, value)
        self._state = new_state
        return self.state

    def coerce(self, name, raw):
        if name not in self.kinds:
            raise UnknownParameterError([name])
        kind = self.kinds[name]
        if kind is None or not isinstance(raw, str):
            return raw
        try:
            return kind.coerce_func(raw)
        except (ValueError, TypeError):
            logger.info("output_views.update.rejected name={} raw={!r}", name, raw)
            raise TypeMismatchError(name, kind.value, raw)

    def apply_raw(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Apply string values from a query string or form POST. Each value is
        converted with the coercion function of the parameter's kind.
        """
        unknown = [name for name in data if name not in self.kinds]
        if unknown:
            raise UnknownParameterError(unknown)
        return self.apply({name: self.coerce(name, raw) for name, raw in data.items()})


class SessionStateStore:
    """
    Persists invocation state in a Django session (or any mutable
    mapping). Last writer wins.
    """

    def __init__(
        self,
        session: MutableMapping,
        prefix: Optional[str] = None,
        settings: Optional[Settings] = None,
    ):
        self.session = session
        self.prefix = prefix or resolve(settings).SESSION_KEY_PREFIX

    def key(self, experiment_id, output_name, provider_label):
        return f"{self.prefix}:{experiment_id}:{output_name}:{provider_label}"

    def load(self, key) -> Optional[Dict[str, Any]]:
        state = self.session.get(key)
        return dict(state) if state is not None else None

    def save(self, key, state: Mapping[str, Any]):
        self.session[key] = dict(state)
        if hasattr(self.session, "modified"):
            self.session.modified = True

    def clear(self, key):
        self.session.pop(key, None)
