from .envelope import OHM_MEDIA_TYPE, OhmResponse
from .models import Control, ControlSet, ControlSetBuilder, insert_control
from .pagination import PageState, add_pagination
from .resolver import resolve, resolve_or_none

__all__ = [
    "OHM_MEDIA_TYPE",
    "Control",
    "ControlSet",
    "ControlSetBuilder",
    "OhmResponse",
    "PageState",
    "add_pagination",
    "insert_control",
    "resolve",
    "resolve_or_none",
]
