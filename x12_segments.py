"""Decode a single X12 segment into a record using its registered schema."""

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

from x12_errors import FormatError, ValidationError
from x12_schema import SchemaCache

logger = logging.getLogger(__name__)

# Legacy auto-detect splits on either of these when no separators are known.
# "|" is also the usual 00501 repetition separator, so this mode can split
# repeated values as if they were elements.
LEGACY_ELEMENT_SEPARATORS = ("*", "|")
_LEGACY_SPLIT = re.compile("|".join(re.escape(s) for s in LEGACY_ELEMENT_SEPARATORS))


@dataclass(frozen=True)
class SegmentRecord:
    """One decoded segment.

    ``values`` holds an entry for every declared field, keyed by field name
    in schema order. Fallback records (unknown segment codes) have
    ``recognized=False`` and no values.
    """

    code: str
    index: int
    values: Mapping[str, Optional[str]] = field(default_factory=dict, hash=False)
    recognized: bool = True
    raw_value: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def __getitem__(self, name):
        return self.values[name]

    def get(self, name, default=None):
        return self.values.get(name, default)

    def as_dict(self):
        data = {
            "code": self.code,
            "index": self.index,
            "recognized": self.recognized,
            "values": dict(self.values),
        }
        if self.raw_value is not None:
            data["raw"] = self.raw_value
        return data


def fallback_record(code, index, raw_value=None):
    """Record for a segment code that has no registered schema."""
    return SegmentRecord(code=code, index=index, recognized=False, raw_value=raw_value)


def split_elements(line, separators=None, legacy_auto_detect=False):
    """Split a segment line into its elements (code first)."""
    if separators is not None:
        return line.split(separators.element)
    if not legacy_auto_detect:
        raise ValueError(
            "separators are required; pass legacy_auto_detect=True to split on '*' or '|'"
        )
    return _LEGACY_SPLIT.split(line)


def check_value(code, value, field_def, index=None):
    """Check one element value against its field definition.

    Raises:
        ValidationError: the value (or the definition's own bounds) is invalid.
    """
    if field_def.optional and not value:
        return

    min_len = field_def.min_length
    max_len = field_def.max_length
    name = f"{code}.{field_def.name}"

    if min_len is not None and max_len is not None and max_len < min_len:
        raise ValidationError(
            f"Field {name} max length of {max_len} is less than min length of {min_len}",
            segment=code,
            index=index,
        )
    if min_len is not None and len(value) < min_len:
        raise ValidationError(
            f"Field {name} min length is defined as {min_len} but length is {len(value)}",
            segment=code,
            index=index,
        )
    if max_len is not None and len(value) > max_len:
        raise ValidationError(
            f"Field {name} max length is defined as {max_len} but length is {len(value)}",
            segment=code,
            index=index,
        )


def decode_segment(line, index, separators, schema_cache, data_checks=True,
                   bounds_checks=False, include_raw=False, legacy_auto_detect=False):
    """Decode ``line`` into a SegmentRecord.

    Args:
        line: one segment without its terminator
        index: 1-based position of the segment in its document
        separators: MessageSeparators for the document (None only with
            legacy_auto_detect)
        schema_cache: SchemaCache the segment schemas are read through
        data_checks: validate each value against its field's length bounds
        bounds_checks: reject segments with more elements than declared fields
        include_raw: keep the original line on the record
        legacy_auto_detect: split on '*' or '|' when separators is None

    Returns:
        SegmentRecord; unknown codes give a fallback record.

    Raises:
        FormatError: too many elements while bounds_checks is on.
        ValidationError: a value fails its field's constraints.
        SchemaError: the registered schema for the code is invalid.
    """
    elements = split_elements(line, separators, legacy_auto_detect)
    code = elements[0]
    raw_value = line if include_raw else None

    if not schema_cache.is_known(code):
        logger.debug("No schema for segment %s at index %d", code, index)
        return fallback_record(code, index, raw_value)

    fields = schema_cache.get_or_build(code)
    values = elements[1:]

    if bounds_checks and len(values) > len(fields):
        raise FormatError(
            f"Segment {code} has {len(fields)} fields, but we have {len(values)} values",
            segment=code,
            index=index,
        )

    by_order = {f.order: f for f in fields}
    # Optional fields default to empty; mandatory ones stay None until assigned
    assigned = {f.name: ("" if f.optional else None) for f in fields}

    for position, value in enumerate(values, start=1):
        field_def = by_order.get(position)
        if field_def is None:
            break
        if data_checks:
            check_value(code, value, field_def, index)
        assigned[field_def.name] = value

    return SegmentRecord(code=code, index=index, values=assigned, raw_value=raw_value)


class SegmentDecoder:
    """Decodes segments against a registry with fixed checking options."""

    def __init__(self, registry, data_checks=True, bounds_checks=False,
                 include_raw=False, legacy_auto_detect=False):
        self.cache = SchemaCache(registry)
        self.data_checks = data_checks
        self.bounds_checks = bounds_checks
        self.include_raw = include_raw
        self.legacy_auto_detect = legacy_auto_detect

    @property
    def registry(self):
        return self.cache.registry

    def decode(self, line, index, separators=None, data_checks=None, bounds_checks=None):
        """Decode one segment; per-call check flags override the decoder's."""
        return decode_segment(
            line,
            index,
            separators,
            self.cache,
            data_checks=self.data_checks if data_checks is None else data_checks,
            bounds_checks=self.bounds_checks if bounds_checks is None else bounds_checks,
            include_raw=self.include_raw,
            legacy_auto_detect=self.legacy_auto_detect,
        )

    def fields_for(self, code):
        return self.cache.get_or_build(code)
