"""Materializes one document operation for concrete parameter values.

Bound path parameters are substituted into the path template, bound query
parameters are appended to the query string, and everything left unbound is
returned as the control's parameter list so API consumers know what they
still have to supply.
"""

import logging
from urllib.parse import quote, urlencode

from ohm_controls.errors import ControlResolutionError
from ohm_controls.spec.base import HttpMethod, SpecDocument
from ohm_controls.spec.index import SpecIndex
from .models import Control

logger = logging.getLogger(__name__)


def resolve(
    document: SpecDocument,
    path: str,
    method: HttpMethod | str,
    bindings: dict | None = None,
    request_body: dict | None = None,
    summary: str | None = None,
) -> Control:
    """Resolve `method path` against the document with the given bindings.

    Raises OperationNotFound / MethodNotSupported when the document has no
    such operation.
    """
    operation = SpecIndex(document).lookup(path, method)
    method = HttpMethod.parse(method)
    bindings = bindings or {}

    materialized = path
    query = []
    free = []
    for param in operation.parameters:
        if param.name not in bindings:
            free.append(param)
            continue
        value = bindings[param.name]
        if param.location == "path":
            materialized = materialized.replace("{" + param.name + "}", quote(str(value), safe=""))
        elif param.location == "query":
            query.append((param.name, value))
        # bound header/cookie values are the caller's to send

    if query:
        separator = "&" if "?" in materialized else "?"
        materialized += separator + urlencode(query, doseq=True, safe=",")

    payload = operation.model_copy(update={
        "parameters": tuple(free),
        "request_body": request_body if request_body is not None else operation.request_body,
        "summary": summary if summary is not None else operation.summary,
        "responses": {},
    })
    return Control(path=materialized, method=method, operation=payload)


def resolve_or_none(
    document: SpecDocument,
    path: str,
    method: HttpMethod | str,
    bindings: dict | None = None,
    request_body: dict | None = None,
    summary: str | None = None,
) -> Control | None:
    """Like resolve(), but logs and returns None when no operation matches."""
    try:
        return resolve(document, path, method, bindings, request_body=request_body, summary=summary)
    except ControlResolutionError as e:
        logger.warning("%s, control will be ignored", e)
        return None
