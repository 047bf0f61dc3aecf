import pytest

from output_views.exceptions import ValidationError
from output_views.metadata import OutputViewMetadata
from output_views.providers import BaseOutputViewProvider
from output_views.registry import ProviderRegistry
from output_views.settings import Settings


class CustomViewProvider(BaseOutputViewProvider):
    display_type = "html"

    def generate_data(self, request, experiment_output, experiment, output_file=None):
        return {"output": "custom"}


def test_custom_then_default():
    metadata = OutputViewMetadata.parse('{"output-view-providers": ["custom", "default"]}')
    assert metadata.initial == "custom"
    assert metadata.choices == ["custom", "default"]


def test_default_first():
    metadata = OutputViewMetadata.parse({"output-view-providers": ["default", "custom"]})
    assert metadata.initial == "default"
    assert metadata.choices == ["default", "custom"]


def test_default_is_appended():
    metadata = OutputViewMetadata.parse({"output-view-providers": ["custom", "custom"]})
    assert metadata.providers == ["custom"]
    assert metadata.choices == ["custom", "default"]


@pytest.mark.parametrize("raw", [None, "", "{}", {"output-view-providers": []}])
def test_empty_metadata(raw):
    metadata = OutputViewMetadata.parse(raw)
    assert metadata.initial == "default"
    assert metadata.choices == ["default"]


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "[1, 2]",
        {"output-view-providers": "custom"},
        {"output-view-providers": ["custom", 3]},
        {"output-view-providers": [""]},
    ],
)
def test_invalid_metadata(raw):
    with pytest.raises(ValidationError) as excinfo:
        OutputViewMetadata.parse(raw)
    assert excinfo.value.field == "output-view-providers"


def test_custom_settings():
    settings = Settings(METADATA_KEY="views", DEFAULT_PROVIDER="download")
    metadata = OutputViewMetadata.parse({"views": ["custom"]}, settings)
    assert metadata.choices == ["custom", "download"]


def test_resolve_drops_unknown_labels():
    registry = ProviderRegistry(Settings())
    registry.register("custom", CustomViewProvider())
    metadata = OutputViewMetadata.parse(
        {"output-view-providers": ["missing", "custom", "default"]}
    ).resolve(registry)
    assert metadata.providers == ["custom", "default"]
    assert metadata.initial == "custom"
