"""Cache key derivation rules.

A key deriver is any callable turning a request into a CacheKey. It must be
a pure function of the request's observable arguments.
"""

import dataclasses
import logging
from typing import Any, Callable, Optional, Sequence

from memoproxy.domain.models.common import CacheKey, CacheNamespace

logger = logging.getLogger(__name__)

KeyDeriver = Callable[[Any], CacheKey]


class FieldKeyDeriver:
    """Builds a structured key from the fields of a dataclass request.

    Only the named fields take part in the key; by default every field does.
    """

    def __init__(self, namespace: str, fields: Optional[Sequence[str]] = None):
        self.namespace = CacheNamespace(namespace)
        self.fields = tuple(fields) if fields is not None else None

    def __call__(self, request: Any) -> CacheKey:
        if not dataclasses.is_dataclass(request) or isinstance(request, type):
            raise TypeError(
                f"FieldKeyDeriver expects a dataclass instance, got {type(request).__name__}"
            )
        names = self.fields
        if names is None:
            names = tuple(f.name for f in dataclasses.fields(request))
        # Field names are part of the key so reordered fields cannot alias.
        parts = tuple((name, getattr(request, name)) for name in names)
        return CacheKey(self.namespace, parts)

    def __repr__(self) -> str:
        return f"FieldKeyDeriver(namespace={self.namespace!r}, fields={self.fields!r})"


class ConstantKeyDeriver:
    """Maps every request to one fixed key.

    For operations whose result is not parameterized by the request.
    """

    def __init__(self, namespace: str):
        self.key = CacheKey(CacheNamespace(namespace))

    def __call__(self, request: Any) -> CacheKey:
        return self.key

    def __repr__(self) -> str:
        return f"ConstantKeyDeriver(namespace={self.key.namespace!r})"
