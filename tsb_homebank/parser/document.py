"""Turn a page body into a namespace-aware document tree."""

from bs4 import BeautifulSoup, FeatureNotFound

from ..errors import ParseError
from ..logging_setup import log

# html5lib records the namespace of every element (HTML, SVG, MathML); the
# lxml and html.parser builders drop it, which would break tag_name().
_BS4_PARSER = "html5lib"


def parse_document(content: str | bytes) -> BeautifulSoup:
    """
    Parse *content* (UTF-8 bytes or text) into a ``BeautifulSoup`` tree.

    Attribute values are kept as plain strings (``class`` is not split into
    a list).  Raises ``ParseError`` when the content cannot be decoded or
    parsed.
    """
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(f"Document is not valid UTF-8: {exc}") from exc

    try:
        soup = BeautifulSoup(content, _BS4_PARSER, multi_valued_attributes=None)
    except FeatureNotFound:
        raise
    except Exception as exc:
        raise ParseError(f"Could not parse document: {exc}") from exc

    log.debug("Parsed document (%d chars)", len(content))
    return soup
