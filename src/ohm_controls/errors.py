"""Exceptions raised while loading documents and resolving controls."""


class InvalidSpecDocument(ValueError):
    """The file or mapping is not a usable OpenAPI document."""


class ControlResolutionError(LookupError):
    """No operation matches the requested (path template, method)."""


class OperationNotFound(ControlResolutionError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Path {path} not found in OpenAPI document")


class MethodNotSupported(ControlResolutionError):
    def __init__(self, path: str, method: str):
        self.path = path
        self.method = method
        super().__init__(f"Method {method} {path} not found in OpenAPI document")


class EntityNotFound(LookupError):
    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class BadRequest(ValueError):
    """The request cannot be applied to the current entity state."""
