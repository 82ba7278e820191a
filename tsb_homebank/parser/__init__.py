"""
Document parsing and read-only tree queries.

Provides the parser adapter, breadth-first traversal, namespace-aware tag
and attribute lookup, and form extraction.
"""

from tsb_homebank.parser.document import parse_document
from tsb_homebank.parser.forms import (
    FormElement,
    Input,
    find_controls,
    find_form_by_id,
    find_forms,
    find_inputs,
    form_fields,
)
from tsb_homebank.parser.tree import (
    TreeIterator,
    attr,
    find_elements,
    first_element,
    tag_name,
    text_content,
)

__all__ = [
    "parse_document",
    "FormElement",
    "Input",
    "find_controls",
    "find_form_by_id",
    "find_forms",
    "find_inputs",
    "form_fields",
    "TreeIterator",
    "attr",
    "find_elements",
    "first_element",
    "tag_name",
    "text_content",
]
