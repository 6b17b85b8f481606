"""Controls and the per-response control set.

A Control is one materialized next action (method + concrete path + the
parameters still to be supplied). A ControlSet is what gets serialized into
the `controls` field of an OHM response.
"""

from pydantic import BaseModel, ConfigDict

from ohm_controls.spec.base import HttpMethod, Operation

OPENAPI_VERSION = "3.0.1"


class Control(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    method: HttpMethod
    operation: Operation

    @property
    def summary(self) -> str:
        return self.operation.summary

    @property
    def free_parameters(self) -> list[str]:
        return [p.name for p in self.operation.parameters]


class ControlSet(BaseModel):
    """Materialized controls: path -> {method -> Control}."""

    model_config = ConfigDict(frozen=True)

    paths: dict[str, dict[HttpMethod, Control]] = {}

    def __len__(self) -> int:
        return sum(len(methods) for methods in self.paths.values())

    def get(self, path: str, method: HttpMethod | str = HttpMethod.GET) -> Control | None:
        return self.paths.get(path, {}).get(HttpMethod.parse(method))

    def controls(self) -> list[Control]:
        return [c for methods in self.paths.values() for c in methods.values()]

    def to_openapi(self) -> dict:
        """Serialize as an OpenAPI-shaped document."""
        return {
            "openapi": OPENAPI_VERSION,
            "info": {"title": "", "version": ""},
            "paths": {
                path: {
                    method.value.lower(): control.operation.to_openapi()
                    for method, control in methods.items()
                }
                for path, methods in self.paths.items()
            },
        }


class ControlSetBuilder:
    """Accumulates controls for one response, keyed by (path, method).

    Inserting a control for an existing (path, method) replaces the previous
    one; other methods on the same path are kept.
    """

    def __init__(self):
        self._paths: dict[str, dict[HttpMethod, Control]] = {}

    def __len__(self) -> int:
        return sum(len(methods) for methods in self._paths.values())

    def insert(self, control: Control) -> "ControlSetBuilder":
        self._paths.setdefault(control.path, {})[control.method] = control
        return self

    def add(self, document, path: str, method: HttpMethod | str, bindings: dict | None = None,
            request_body: dict | None = None, summary: str | None = None) -> Control | None:
        """Resolve a control and insert it; unresolvable controls are skipped."""
        from .resolver import resolve_or_none

        control = resolve_or_none(document, path, method, bindings,
                                  request_body=request_body, summary=summary)
        if control is not None:
            self.insert(control)
        return control

    def materialize(self) -> ControlSet:
        return ControlSet(paths={path: dict(methods) for path, methods in self._paths.items()})


def insert_control(builder: ControlSetBuilder, control: Control) -> ControlSetBuilder:
    return builder.insert(control)
