"""Delimiter detection from the fixed-width ISA interchange header."""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from x12_errors import FormatError

logger = logging.getLogger(__name__)

# ISA01..ISA16 fixed widths per X12
ISA_FIELD_LENGTHS = (2, 10, 2, 10, 2, 15, 2, 15, 6, 4, 1, 5, 9, 1, 1, 1)

# 0-based positions in ISA_FIELD_LENGTHS
ISA11_REPETITION = 10
ISA12_VERSION = 11
ISA16_COMPONENT = 15

# Repetition separators were introduced with 00501
REPETITION_MIN_VERSION = 501

_VERSION_RE = re.compile(r"[+-]?\d+")


@dataclass(frozen=True)
class MessageSeparators:
    """The delimiter set of one interchange."""

    element: str = "*"
    component: str = ">"
    segment: str = "~"
    repetition: Optional[str] = "|"

    def as_dict(self):
        return {
            "element": self.element,
            "component": self.component,
            "segment": self.segment,
            "repetition": self.repetition,
        }


DEFAULT_SEPARATORS = MessageSeparators()


def resolve_separators(text):
    """Read the delimiter set declared by the ISA segment of ``text``.

    Only a leading byte-order mark is stripped; anything else before
    ``ISA`` is skipped by searching for it.

    Raises:
        FormatError: ISA is missing, truncated or malformed.
    """
    text = (text or "").lstrip("\ufeff")

    isa_pos = text.find("ISA")
    if isa_pos < 0:
        raise FormatError("ISA segment not found", segment="ISA")

    if len(text) < isa_pos + 4:
        raise FormatError("Truncated ISA segment", segment="ISA")

    element_sep = text[isa_pos + 3]
    cursor = isa_pos + 4
    last = len(ISA_FIELD_LENGTHS) - 1
    values = []

    for i, length in enumerate(ISA_FIELD_LENGTHS):
        if len(text) < cursor + length:
            raise FormatError(
                f"Truncated ISA segment while reading ISA{i + 1:02d}", segment="ISA"
            )
        values.append(text[cursor:cursor + length])
        cursor += length

        if i < last:
            if len(text) <= cursor:
                raise FormatError(
                    "Truncated ISA segment (missing element separator)", segment="ISA"
                )
            if text[cursor] != element_sep:
                raise FormatError(
                    f"Invalid ISA format: expected element separator "
                    f"'{element_sep}' at position {cursor}",
                    segment="ISA",
                )
            cursor += 1

    if len(text) <= cursor:
        raise FormatError(
            "Truncated ISA segment (missing segment terminator)", segment="ISA"
        )
    segment_term = text[cursor]

    component_sep = values[ISA16_COMPONENT]
    if len(component_sep) != 1:
        raise FormatError("Invalid ISA16 (component element separator)", segment="ISA")

    if len({element_sep, component_sep, segment_term}) != 3:
        raise FormatError(
            f"ISA separators are not distinct: element '{element_sep}', "
            f"component '{component_sep}', segment '{segment_term}'",
            segment="ISA",
        )

    repetition = None
    if _version_number(values[ISA12_VERSION]) >= REPETITION_MIN_VERSION:
        repetition = values[ISA11_REPETITION]

    separators = MessageSeparators(
        element=element_sep,
        component=component_sep,
        segment=segment_term,
        repetition=repetition,
    )
    logger.debug("Resolved separators %s", separators)
    return separators


def resolve_separators_or_default(text):
    """Like :func:`resolve_separators`, but fall back to DEFAULT_SEPARATORS."""
    try:
        return resolve_separators(text)
    except (FormatError, TypeError, AttributeError) as e:
        logger.debug("Using default separators: %s", e)
        return DEFAULT_SEPARATORS


def _version_number(isa12):
    """Return ISA12 as an int, or -1 if it is not numeric."""
    value = isa12.strip()
    if not _VERSION_RE.fullmatch(value):
        return -1
    return int(value)
