from importlib.metadata import entry_points
from typing import Dict, List, Optional

from loguru import logger

from .exceptions import ProviderError, ProviderNotFound
from .providers import DefaultViewProvider, as_provider
from .settings import Settings, resolve


class ProviderRegistry:
    """
    Maps provider labels to provider instances. Providers are discovered
    through the entry point group in the settings, e.g. in a plugin's
    ``setup.py``::

        entry_points={
            "airavata.output_view_providers": [
                "my-plot = my_package.views:MyViewProvider",
            ]
        }
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = resolve(settings)
        self.providers: Dict[str, object] = {}
        self.register(self.settings.DEFAULT_PROVIDER, DefaultViewProvider(self.settings))

    @property
    def group(self):
        return self.settings.ENTRY_POINT_GROUP

    def register(self, label: str, provider) -> object:
        if label in self.providers:
            raise ProviderError(f"An output view provider is already named '{label}'")
        provider = as_provider(provider, label=label)
        self.providers[label] = provider
        return provider

    def load(self) -> "ProviderRegistry":
        for entry_point in entry_points(group=self.group):
            if entry_point.name in self.providers:
                logger.warning(
                    "output_views.registry.duplicate label={} value={}",
                    entry_point.name,
                    entry_point.value,
                )
                continue
            try:
                provider_class = entry_point.load()
                self.register(entry_point.name, provider_class())
            except Exception:
                logger.opt(exception=True).warning(
                    "output_views.registry.load_failed label={} value={}",
                    entry_point.name,
                    entry_point.value,
                )
                continue
            logger.debug(
                "output_views.registry.loaded label={} value={}",
                entry_point.name,
                entry_point.value,
            )
        return self

    def get(self, label: str):
        try:
            return self.providers[label]
        except KeyError:
            raise ProviderNotFound(label)

    def labels(self) -> List[str]:
        return list(self.providers)

    def __contains__(self, label):
        return label in self.providers


def load_registry(settings: Optional[Settings] = None) -> ProviderRegistry:
    return ProviderRegistry(settings).load()
