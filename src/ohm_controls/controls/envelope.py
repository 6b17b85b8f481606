"""The OHM response envelope: raw content plus the controls that apply to it."""

from typing import Any

from pydantic import BaseModel

from .models import ControlSet, ControlSetBuilder

OHM_MEDIA_TYPE = "application/ohm+json"


class OhmResponse:
    def __init__(self, content: Any = None, controls: ControlSet | None = None):
        self.content = content
        self.controls = controls if controls is not None else ControlSet()

    @classmethod
    def of(cls, content: Any, builder: ControlSetBuilder | None = None) -> "OhmResponse":
        return cls(content, builder.materialize() if builder is not None else None)

    @classmethod
    def no_content(cls, builder: ControlSetBuilder | None = None) -> "OhmResponse":
        return cls.of(None, builder)

    def to_dict(self) -> dict:
        return {"content": _jsonable(self.content), "controls": self.controls.to_openapi()}


def _jsonable(content: Any) -> Any:
    if isinstance(content, BaseModel):
        return content.model_dump(mode="json")
    if isinstance(content, (list, tuple)):
        return [_jsonable(item) for item in content]
    return content
