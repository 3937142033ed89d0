"""
templates.py

Template library: pre-built field trees for common document types.

Templates are plain data. They are parsed into frozen field models once,
when this module is imported, so a broken template fails at start-up
instead of at request time. New document shapes only need a new entry in
TEMPLATE_DATA (and TEMPLATE_NAMES); the compiler does not change.
"""

import logging
from typing import Dict, List, Tuple

from docschema.errors import UnknownTemplate
from docschema.schemas.fields import FieldTree, check_tree, parse_tree

logger = logging.getLogger(__name__)

CUSTOM_TEMPLATE = "custom"

# Display order of the template picker
TEMPLATE_NAMES: Dict[str, str] = {
    CUSTOM_TEMPLATE: "Custom Schema",
    "invoice": "Invoice Template",
    "receipt": "Receipt Template",
    "business_card": "Business Card Template",
}

TEMPLATE_DATA: Dict[str, List[dict]] = {
    "invoice": [
        {"name": "invoice_number", "type": "string", "required": True,
         "description": 'The unique identifier of the invoice, usually located at the top and prefixed with "Invoice #" or "INV-"'},
        {"name": "date", "type": "string", "format": "date", "required": True,
         "description": "The invoice date, often in MM/DD/YYYY format near the top"},
        {"name": "due_date", "type": "string", "format": "date", "required": False,
         "description": "The date payment is due"},
        {"name": "vendor_name", "type": "string", "required": True,
         "description": "The name of the company or person who issued the invoice"},
        {"name": "total_amount", "type": "number", "required": True,
         "description": "The total payment amount including taxes and fees"},
        {"name": "subtotal", "type": "number", "required": False,
         "description": "The amount before taxes and additional fees"},
        {"name": "tax_amount", "type": "number", "required": False,
         "description": "The tax amount, often labeled as Tax, GST, VAT, etc."},
        {"name": "line_items", "type": "array", "required": False,
         "description": "List of products or services in the invoice",
         "items": {
             "name": "item", "type": "object", "required": True,
             "properties": [
                 {"name": "description", "type": "string", "required": True,
                  "description": "Description of the product or service"},
                 {"name": "quantity", "type": "number", "required": True,
                  "description": "Number of items"},
                 {"name": "unit_price", "type": "number", "required": True,
                  "description": "Price per unit"},
                 {"name": "amount", "type": "number", "required": True,
                  "description": "Total cost (quantity × unit price)"},
             ],
         }},
    ],
    "receipt": [
        {"name": "merchant_name", "type": "string", "required": True,
         "description": "The name of the business"},
        {"name": "date", "type": "string", "format": "date", "required": True,
         "description": "The date of purchase"},
        {"name": "time", "type": "string", "required": False,
         "description": "The time of purchase"},
        {"name": "total", "type": "number", "required": True,
         "description": "The total amount paid"},
        {"name": "payment_method", "type": "string", "required": False,
         "description": "How the purchase was paid for (credit, cash, etc.)"},
        {"name": "items", "type": "array", "required": False,
         "description": "Items purchased",
         "items": {
             "name": "item", "type": "object", "required": True,
             "properties": [
                 {"name": "name", "type": "string", "required": True,
                  "description": "Name of the item"},
                 {"name": "price", "type": "number", "required": True,
                  "description": "Price of the item"},
                 {"name": "quantity", "type": "number", "required": False,
                  "description": "Quantity purchased"},
             ],
         }},
    ],
    "business_card": [
        {"name": "full_name", "type": "string", "required": True,
         "description": "The person's full name"},
        {"name": "title", "type": "string", "required": False,
         "description": "The person's job title"},
        {"name": "company", "type": "string", "required": False,
         "description": "Company or organization name"},
        {"name": "email", "type": "string", "format": "email", "required": False,
         "description": "Email address"},
        {"name": "phone", "type": "string", "format": "phone", "required": False,
         "description": "Phone number"},
        {"name": "address", "type": "string", "format": "address", "required": False,
         "description": "Physical address"},
        {"name": "website", "type": "string", "required": False,
         "description": "Website URL"},
    ],
    CUSTOM_TEMPLATE: [],
}

# Fields a new session starts with
DEFAULT_TREE_DATA: List[dict] = [
    {"name": "invoice_number", "type": "string", "required": True,
     "description": "The invoice number (e.g., INV-12345)"},
    {"name": "date", "type": "string", "format": "date", "required": True,
     "description": "The invoice date"},
    {"name": "vendor_name", "type": "string", "required": True,
     "description": "The name of the company or person who issued the invoice"},
    {"name": "total_amount", "type": "number", "required": True,
     "description": "The total payment amount"},
    {"name": "tax_amount", "type": "number", "required": False,
     "description": "The tax amount"},
]


def _load(data: List[dict]) -> Tuple:
    tree = parse_tree(data)
    check_tree(tree)
    return tuple(tree)


# Parsed once; tuples of frozen fields cannot be changed by callers
_TEMPLATES = {key: _load(data) for key, data in TEMPLATE_DATA.items()}
_DEFAULT_TREE = _load(DEFAULT_TREE_DATA)

logger.debug(f"Loaded {len(_TEMPLATES)} schema templates")


def list_templates() -> List[Tuple[str, str]]:
    """Return (key, display name) pairs in picker order."""
    return list(TEMPLATE_NAMES.items())


def get_template(key: str) -> FieldTree:
    """
    Return a fresh copy of the template's field list.

    The returned list belongs to the caller. Its fields are frozen and
    shared with the catalog, which is safe since nothing mutates them.

    Raises:
    - UnknownTemplate when `key` is not in the catalog
    """
    if key not in _TEMPLATES:
        raise UnknownTemplate(key)
    return list(_TEMPLATES[key])


def get_template_name(key: str) -> str:
    if key not in TEMPLATE_NAMES:
        raise UnknownTemplate(key)
    return TEMPLATE_NAMES[key]


def default_tree() -> FieldTree:
    """The starter field tree shown before the user picks a template."""
    return list(_DEFAULT_TREE)
