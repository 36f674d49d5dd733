"""EDI X12 document reader — resolves delimiters and decodes every segment."""

import logging

from segment_catalog import default_registry
from x12_errors import SchemaError, X12Error
from x12_segments import SegmentDecoder
from x12_separators import resolve_separators

logger = logging.getLogger(__name__)


class EDIFile:
    """Represents a decoded EDI X12 file with its separators and segment records.

    Args:
        raw_content: the document text
        registry: SchemaRegistry to decode against (defaults to the catalog)
        data_checks: validate element lengths against the schemas
        bounds_checks: reject segments with more elements than declared fields
        skip_errors: log and skip segments that fail to decode instead of raising
        include_raw: keep each segment's original text on its record
    """

    def __init__(self, raw_content, registry=None, data_checks=True,
                 bounds_checks=False, skip_errors=False, include_raw=False):
        self.raw = raw_content.lstrip("\ufeff")
        self.decoder = SegmentDecoder(
            registry if registry is not None else default_registry(),
            data_checks=data_checks,
            bounds_checks=bounds_checks,
            include_raw=include_raw,
        )
        self.skip_errors = skip_errors
        self.separators = resolve_separators(self.raw)
        self.segments = []
        self.records = []
        self.errors = []
        self._split_segments()
        self._decode_segments()

    @property
    def element_sep(self):
        return self.separators.element

    @property
    def sub_element_sep(self):
        return self.separators.component

    @property
    def segment_term(self):
        return self.separators.segment

    @property
    def repetition_sep(self):
        return self.separators.repetition

    def _split_segments(self):
        # Split on segment terminator, then strip spaces/newlines from each.
        # str.strip() would also eat \x1c-\x1f, which are common delimiters.
        for seg in self.raw.split(self.segment_term):
            seg = seg.strip(" \r\n").replace("\n", "").replace("\r", "")
            if seg:
                self.segments.append(seg)

    def _decode_segments(self):
        for index, seg in enumerate(self.segments, 1):
            try:
                record = self.decoder.decode(seg, index, self.separators)
            except SchemaError:
                raise
            except X12Error as e:
                if not self.skip_errors:
                    raise
                logger.warning("Skipping segment %d: %s", index, e)
                self.errors.append((index, str(e)))
                continue
            self.records.append(record)

    def get_elements(self, segment_str):
        """Split a segment string into its elements."""
        return segment_str.split(self.element_sep)

    def get_sub_elements(self, element_str):
        """Split a composite element into sub-elements."""
        return element_str.split(self.sub_element_sep)

    def get_repetitions(self, element_str):
        """Split a repeated element; pre-00501 documents have no repetition separator."""
        if not self.repetition_sep:
            return [element_str]
        return element_str.split(self.repetition_sep)

    def records_for(self, code):
        """All decoded records with the given segment code."""
        return [r for r in self.records if r.code == code]

    def get_transaction_type(self):
        """Return the ST01 code of the first transaction, or None."""
        for record in self.records:
            if record.code == "ST" and record.recognized:
                return record.get("ST01") or None
        return None

    def get_transactions(self):
        """Yield lists of records for each ST..SE transaction."""
        current = []
        inside = False
        for record in self.records:
            if record.code == "ST":
                inside = True
                current = [record]
            elif record.code == "SE":
                if inside:
                    current.append(record)
                    yield current
                inside = False
                current = []
            elif inside:
                current.append(record)
