from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import IncompleteResultError, ValidationError


class DisplayType(str, Enum):
    LINK = "link"
    IMAGE = "image"
    HTML = "html"


def get_display_type(value) -> DisplayType:
    try:
        return DisplayType(value)
    except ValueError:
        raise ValidationError(
            "display_type",
            f"{value!r} is not one of {', '.join(t.value for t in DisplayType)}",
        )


class ViewProviderResult(BaseModel):
    display_type: DisplayType
    interactive: Optional[List[Any]] = None

    model_config = ConfigDict(populate_by_name=True)

    def payload(self) -> Dict[str, Any]:
        return self.model_dump(
            by_alias=True, exclude={"display_type", "interactive"}, exclude_none=True
        )


class LinkResult(ViewProviderResult):
    url: str
    label: str


class ImageResult(ViewProviderResult):
    image: bytes
    mime_type: str = Field(alias="mime-type")

    @field_validator("image", mode="before")
    @classmethod
    def read_stream(cls, v):
        # file-like objects (BytesIO, opened files) are read once.
        if hasattr(v, "read"):
            v = v.read()
        if isinstance(v, bytearray):
            v = bytes(v)
        if not isinstance(v, bytes):
            raise ValueError("image must be bytes or a binary stream")
        return v


class HtmlResult(ViewProviderResult):
    output: str
    js: Optional[str] = None


RESULT_MODELS = {
    DisplayType.LINK: LinkResult,
    DisplayType.IMAGE: ImageResult,
    DisplayType.HTML: HtmlResult,
}


def validate_result(display_type, data: Mapping) -> ViewProviderResult:
    """
    Check that ``data`` carries the payload required by ``display_type``.
    """
    display_type = get_display_type(display_type)
    if not isinstance(data, Mapping):
        raise IncompleteResultError(
            display_type.value, [], f"{display_type.value} result is not a mapping"
        )
    model = RESULT_MODELS[display_type]
    try:
        return model.model_validate({**data, "display_type": display_type})
    except PydanticValidationError as e:
        fields = []
        for error in e.errors():
            loc = ".".join(str(part) for part in error["loc"])
            if loc not in fields:
                fields.append(loc)
        raise IncompleteResultError(display_type.value, fields)
