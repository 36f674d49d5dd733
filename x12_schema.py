"""Segment schemas: field definitions, the registry that holds them, and the
validating cache the decoder reads them through."""

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from x12_errors import SchemaError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldDefinition:
    """One element of a segment schema.

    ``order`` is the 1-based element position after the segment code.
    """

    name: str
    order: int
    optional: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    description: str = ""


class SchemaRegistry:
    """Maps a segment code to the field definitions declared for it."""

    def __init__(self, schemas=None):
        self._schemas = {}
        for code, fields in (schemas or {}).items():
            self.register(code, fields)

    def register(self, code, fields):
        """Register (or replace) the schema for ``code``."""
        self._schemas[code] = list(fields)

    def fields_for(self, code):
        """Field definitions for ``code`` in declaration order, or None."""
        fields = self._schemas.get(code)
        return list(fields) if fields is not None else None

    def codes(self):
        return list(self._schemas)

    def __contains__(self, code):
        return code in self._schemas

    def __len__(self):
        return len(self._schemas)


class SchemaCache:
    """Validates each registered schema once and keeps the result.

    Building a schema the first time a code is seen is done under a lock,
    so decoders sharing a cache across threads never see a half-built
    entry. ``warm()`` builds everything up front instead.
    """

    def __init__(self, registry):
        self.registry = registry
        self._fields = {}
        self._lock = threading.Lock()

    def is_known(self, code):
        return code in self.registry

    def get_or_build(self, code):
        """Return the validated field tuple for ``code``.

        Unknown codes give an empty tuple rather than an error.

        Raises:
            SchemaError: the registered schema has duplicate or missing orders.
        """
        fields = self._fields.get(code)
        if fields is not None:
            return fields

        with self._lock:
            fields = self._fields.get(code)
            if fields is None:
                source = self.registry.fields_for(code)
                if source is None:
                    return ()
                fields = build_schema(code, source)
                self._fields[code] = fields
        return fields

    def warm(self):
        """Build every registered schema now."""
        for code in self.registry.codes():
            self.get_or_build(code)
        return len(self._fields)

    def __contains__(self, code):
        return code in self._fields


def build_schema(code, fields):
    """Validate field orders and names and return the fields as a tuple.

    Fields are checked in the order given: each order must be new and at
    most one above the highest order seen so far, and each name unique.
    """
    seen = {}
    names = set()
    highest = 0
    result = []

    for field in fields:
        if field.order < 1:
            raise SchemaError(
                f"Field {field.name} has order {field.order}; orders start at 1",
                segment=code,
            )
        if field.order in seen:
            raise SchemaError(
                f"Order {field.order} is already used by field {seen[field.order]}; "
                f"{field.name} cannot use it too (should it be {highest + 1}?)",
                segment=code,
            )
        if field.name in names:
            raise SchemaError(
                f"Field name {field.name} is declared more than once "
                f"(again at order {field.order})",
                segment=code,
            )
        if field.order > highest + 1:
            raise SchemaError(
                f"Field {field.name} has order {field.order} but order "
                f"{highest + 1} was never declared before it",
                segment=code,
            )
        seen[field.order] = field.name
        names.add(field.name)
        highest = max(highest, field.order)
        result.append(field)

    logger.debug("Built schema for %s with %d fields", code, len(result))
    return tuple(result)
