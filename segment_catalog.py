"""Schemas for common X12 005010 segments.

Each segment is listed as (mandatory?, min, max, description) per element in
element order; field names are the X12 reference designators (NM103, ...).
"""

from x12_schema import FieldDefinition, SchemaRegistry
from x12_separators import ISA_FIELD_LENGTHS

REQ = True   # mandatory
OPT = False  # optional

# X12 transaction set names
TRANSACTION_NAMES = {
    "270": "Eligibility Inquiry",
    "271": "Eligibility Response",
    "274": "Health Care Provider Information",
    "275": "Additional Information to Support a Health Care Claim",
    "276": "Claim Status Request",
    "277": "Claim Status Response",
    "278": "Health Care Services Review (Prior Auth)",
    "810": "Invoice",
    "820": "Premium Payment",
    "834": "Benefit Enrollment and Maintenance",
    "835": "Remittance Advice",
    "837": "Health Care Claim",
    "850": "Purchase Order",
    "856": "Ship Notice/Manifest",
    "997": "Functional Acknowledgment",
    "999": "Implementation Acknowledgment",
}

_ISA_DESCRIPTIONS = (
    "Authorization Information Qualifier",
    "Authorization Information",
    "Security Information Qualifier",
    "Security Information",
    "Interchange ID Qualifier (Sender)",
    "Interchange Sender ID",
    "Interchange ID Qualifier (Receiver)",
    "Interchange Receiver ID",
    "Interchange Date",
    "Interchange Time",
    "Repetition Separator",
    "Interchange Control Version Number",
    "Interchange Control Number",
    "Acknowledgment Requested",
    "Interchange Usage Indicator",
    "Component Element Separator",
)

SEGMENT_ELEMENTS = {
    # Interchange header: every element is fixed width
    "ISA": [(REQ, n, n, desc) for n, desc in zip(ISA_FIELD_LENGTHS, _ISA_DESCRIPTIONS)],
    "IEA": [
        (REQ, 1, 5, "Number of Included Functional Groups"),
        (REQ, 9, 9, "Interchange Control Number"),
    ],
    "GS": [
        (REQ, 2, 2, "Functional Identifier Code"),
        (REQ, 2, 15, "Application Sender's Code"),
        (REQ, 2, 15, "Application Receiver's Code"),
        (REQ, 8, 8, "Date"),
        (REQ, 4, 8, "Time"),
        (REQ, 1, 9, "Group Control Number"),
        (REQ, 1, 2, "Responsible Agency Code"),
        (REQ, 1, 12, "Version / Release / Industry Identifier Code"),
    ],
    "GE": [
        (REQ, 1, 6, "Number of Transaction Sets Included"),
        (REQ, 1, 9, "Group Control Number"),
    ],
    "ST": [
        (REQ, 3, 3, "Transaction Set Identifier Code"),
        (REQ, 4, 9, "Transaction Set Control Number"),
        (OPT, 1, 35, "Implementation Convention Reference"),
    ],
    "SE": [
        (REQ, 1, 10, "Number of Included Segments"),
        (REQ, 4, 9, "Transaction Set Control Number"),
    ],
    "BHT": [
        (REQ, 4, 4, "Hierarchical Structure Code"),
        (REQ, 2, 2, "Transaction Set Purpose Code"),
        (OPT, 1, 50, "Reference Identification"),
        (OPT, 8, 8, "Date"),
        (OPT, 4, 8, "Time"),
        (OPT, 2, 2, "Transaction Type Code"),
    ],
    "HL": [
        (REQ, 1, 12, "Hierarchical ID Number"),
        (OPT, 1, 12, "Hierarchical Parent ID Number"),
        (REQ, 1, 2, "Hierarchical Level Code"),
        (OPT, 1, 1, "Hierarchical Child Code"),
    ],
    "NM1": [
        (REQ, 2, 3, "Entity Identifier Code"),
        (REQ, 1, 1, "Entity Type Qualifier"),
        (OPT, 1, 60, "Name Last or Organization Name"),
        (OPT, 1, 35, "Name First"),
        (OPT, 1, 25, "Name Middle"),
        (OPT, 1, 10, "Name Prefix"),
        (OPT, 1, 10, "Name Suffix"),
        (OPT, 1, 2, "Identification Code Qualifier"),
        (OPT, 2, 80, "Identification Code"),
        (OPT, 2, 2, "Entity Relationship Code"),
        (OPT, 2, 3, "Entity Identifier Code"),
        (OPT, 1, 60, "Name Last or Organization Name"),
    ],
    "N3": [
        (REQ, 1, 55, "Address Information"),
        (OPT, 1, 55, "Address Information"),
    ],
    "N4": [
        (OPT, 2, 30, "City Name"),
        (OPT, 2, 2, "State or Province Code"),
        (OPT, 3, 15, "Postal Code"),
        (OPT, 2, 3, "Country Code"),
        (OPT, 1, 2, "Location Qualifier"),
        (OPT, 1, 30, "Location Identifier"),
        (OPT, 1, 3, "Country Subdivision Code"),
    ],
    "REF": [
        (REQ, 2, 3, "Reference Identification Qualifier"),
        (OPT, 1, 50, "Reference Identification"),
        (OPT, 1, 80, "Description"),
    ],
    "PER": [
        (REQ, 2, 2, "Contact Function Code"),
        (OPT, 1, 60, "Name"),
        (OPT, 2, 2, "Communication Number Qualifier"),
        (OPT, 1, 256, "Communication Number"),
        (OPT, 2, 2, "Communication Number Qualifier"),
        (OPT, 1, 256, "Communication Number"),
        (OPT, 2, 2, "Communication Number Qualifier"),
        (OPT, 1, 256, "Communication Number"),
    ],
    "DTP": [
        (REQ, 3, 3, "Date/Time Qualifier"),
        (REQ, 2, 3, "Date Time Period Format Qualifier"),
        (REQ, 1, 35, "Date Time Period"),
    ],
    "DTM": [
        (REQ, 3, 3, "Date/Time Qualifier"),
        (OPT, 8, 8, "Date"),
        (OPT, 4, 8, "Time"),
        (OPT, 2, 2, "Time Code"),
        (OPT, 2, 3, "Date Time Period Format Qualifier"),
        (OPT, 1, 35, "Date Time Period"),
    ],
    "TRN": [
        (REQ, 1, 2, "Trace Type Code"),
        (REQ, 1, 50, "Reference Identification"),
        (OPT, 10, 10, "Originating Company Identifier"),
        (OPT, 1, 50, "Reference Identification"),
    ],
    "CLP": [
        (REQ, 1, 38, "Patient Control Number"),
        (REQ, 1, 2, "Claim Status Code"),
        (REQ, 1, 18, "Total Claim Charge Amount"),
        (REQ, 1, 18, "Claim Payment Amount"),
        (OPT, 1, 18, "Patient Responsibility Amount"),
        (OPT, 1, 2, "Claim Filing Indicator Code"),
        (OPT, 1, 50, "Payer Claim Control Number"),
        (OPT, 1, 2, "Facility Type Code"),
        (OPT, 1, 1, "Claim Frequency Type Code"),
        (OPT, 1, 2, "Patient Status Code"),
        (OPT, 1, 15, "Diagnosis Related Group Code"),
        (OPT, 1, 6, "DRG Weight"),
        (OPT, 1, 15, "Discharge Fraction"),
        (OPT, 1, 1, "Yes/No Condition or Response Code"),
    ],
}


def segment_fields(code, elements):
    """Turn catalog element tuples into FieldDefinitions named CODE01, CODE02, ..."""
    return [
        FieldDefinition(
            name=f"{code}{order:02d}",
            order=order,
            optional=not mandatory,
            min_length=min_len,
            max_length=max_len,
            description=description,
        )
        for order, (mandatory, min_len, max_len, description) in enumerate(elements, 1)
    ]


def default_registry():
    """A SchemaRegistry holding every segment in SEGMENT_ELEMENTS."""
    registry = SchemaRegistry()
    for code, elements in SEGMENT_ELEMENTS.items():
        registry.register(code, segment_fields(code, elements))
    return registry


def transaction_name(code):
    """Human-readable name for an ST01 transaction set code."""
    return TRANSACTION_NAMES.get(code, f"X12 {code}")
