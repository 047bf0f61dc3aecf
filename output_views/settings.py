from typing import Any, Dict, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    ENTRY_POINT_GROUP: str = "airavata.output_view_providers"
    METADATA_KEY: str = "output-view-providers"
    DEFAULT_PROVIDER: str = "default"
    DOWNLOAD_URL_TEMPLATE: str = (
        "/api/download?experiment-id={experiment_id}&name={output_name}"
    )
    SESSION_KEY_PREFIX: str = "output-views"

    @field_validator("DEFAULT_PROVIDER", "ENTRY_POINT_GROUP", "METADATA_KEY")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    model_config = SettingsConfigDict(env_prefix="OUTPUT_VIEWS_", case_sensitive=True)


def django_overrides() -> Dict[str, Any]:
    """
    Read the ``OUTPUT_VIEWS`` dict from the Django settings when Django is
    configured. Outside of a Django project this is a no-op.
    """
    from django.conf import settings as django_settings

    if not django_settings.configured:
        return {}
    return dict(getattr(django_settings, "OUTPUT_VIEWS", None) or {})


def get_settings(**overrides: Any) -> Settings:
    values: Dict[str, Any] = django_overrides()
    values.update(overrides)
    return Settings(**values)


def resolve(settings: Optional[Settings]) -> Settings:
    return settings if settings is not None else get_settings()
