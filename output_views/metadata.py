import json
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from loguru import logger

from .exceptions import ValidationError
from .settings import Settings, resolve


@dataclass
class OutputViewMetadata:
    """
    The ``output-view-providers`` list attached to an application output,
    e.g. ``{"output-view-providers": ["my-plot", "default"]}``. The first
    label is shown initially; ``default`` is always available.
    """

    providers: List[str] = field(default_factory=list)
    default_provider: str = "default"

    @classmethod
    def parse(cls, raw, settings: Optional[Settings] = None) -> "OutputViewMetadata":
        settings = resolve(settings)
        if raw is None or raw == "":
            return cls(default_provider=settings.DEFAULT_PROVIDER)
        if isinstance(raw, (str, bytes)):
            try:
                raw = json.loads(raw)
            except json.JSONDecodeError as e:
                raise ValidationError(settings.METADATA_KEY, f"invalid JSON: {e}")
        if not isinstance(raw, Mapping):
            raise ValidationError(settings.METADATA_KEY, "metadata must be an object")
        labels = raw.get(settings.METADATA_KEY)
        if labels is None:
            labels = []
        if not isinstance(labels, list):
            raise ValidationError(settings.METADATA_KEY, "must be a list of labels")
        providers = []
        for label in labels:
            if not isinstance(label, str) or not label:
                raise ValidationError(
                    settings.METADATA_KEY, f"{label!r} is not a provider label"
                )
            if label not in providers:
                providers.append(label)
        return cls(providers=providers, default_provider=settings.DEFAULT_PROVIDER)

    @property
    def initial(self) -> str:
        return self.providers[0] if self.providers else self.default_provider

    @property
    def choices(self) -> List[str]:
        if self.default_provider in self.providers:
            return list(self.providers)
        return self.providers + [self.default_provider]

    def resolve(self, registry) -> "OutputViewMetadata":
        """Drop labels that are not registered, keeping the order."""
        known = []
        for label in self.providers:
            if label in registry or label == self.default_provider:
                known.append(label)
            else:
                logger.warning("output_views.metadata.unknown_provider label={}", label)
        return OutputViewMetadata(
            providers=known, default_provider=self.default_provider
        )
