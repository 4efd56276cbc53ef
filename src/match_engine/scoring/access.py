"""Field access on sparse, nested documents."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from match_engine.models.domain import MISSING


def get_value(document: Any, path: Sequence[str]) -> Any:
    """Resolve ``path`` against ``document``.

    An empty path returns the whole document. Any step that hits a
    non-mapping or an absent key yields ``MISSING`` instead of raising.
    """
    value = document
    for key in path:
        if not isinstance(value, Mapping) or key not in value:
            return MISSING
        value = value[key]
    return value


def is_absent(value: Any) -> bool:
    return value is MISSING or value is None
