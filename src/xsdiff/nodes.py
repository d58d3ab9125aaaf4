# -*- coding: utf-8 -*-
"""
XML document helpers: parsing, XPath-like node lookup and node serialization.

These resolve a location key against a document into the serialized text of
the node, which is what the semantic tab searches for changed fragments.
"""
import re
import xml.etree.ElementTree as etree

from genshi.core import Stream, QName, Attrs, START, END, TEXT, escape

_POS = (None, -1, -1)
_step_re = re.compile(r'^(?P<name>\*|[^\s\[\]/@()]+)(?:\[(?P<index>\d+)\])?$', re.U)


def localname(tag):
    """
    ElementTree tags render like 'tag' or '{ns}tag', XPath steps like
    'prefix:tag'. Normalize both to the local name.
    """
    s = str(tag)
    if '}' in s:
        return s.split('}', 1)[1]
    if ':' in s:
        return s.split(':', 1)[1]
    return s


def parse_xml(text):
    """Parse an XML document, returning its root element."""
    if isinstance(text, str):
        text = text.encode('utf-8')
    return etree.fromstring(text)


def _root_of(document):
    if hasattr(document, 'getroot'):
        return document.getroot()
    return document


def xpath_segments(xpath):
    return [s for s in (xpath or u'').split('/') if s]


def xpath_depth(xpath):
    """
    Number of path segments in an XPath-like key.

    >>> xpath_depth('/root')
    1
    >>> xpath_depth('/root[1]/child[2]')
    2
    """
    return len(xpath_segments(xpath))


def _parse_step(step):
    match = _step_re.match(step)
    if match is None:
        return None, None
    index = match.group('index')
    return match.group('name'), int(index) if index else 1


def _step_matches(name, element):
    return name == '*' or localname(name) == localname(element.tag)


def find_node(document, xpath):
    """
    Resolve an absolute XPath-like key (``/a/b[2]/c``) to an element.

    Only element steps are understood; anything else (``text()``, ``@attr``)
    as well as a missing node resolves to None.
    """
    if document is None:
        return None
    steps = xpath_segments(xpath)
    if not steps:
        return None
    root = _root_of(document)
    name, index = _parse_step(steps[0])
    if name is None or index != 1 or not _step_matches(name, root):
        return None
    node = root
    for step in steps[1:]:
        name, index = _parse_step(step)
        if name is None:
            return None
        candidates = [child for child in node
                      if isinstance(child.tag, str) and _step_matches(name, child)]
        if index > len(candidates):
            return None
        node = candidates[index - 1]
    return node


def _element_events(element):
    # Local names only, so a child serializes to a substring of its parent.
    tag = QName(localname(element.tag))
    attrs = Attrs([(QName(localname(name)), value) for name, value in element.items()])
    yield START, (tag, attrs), _POS
    if element.text:
        yield TEXT, element.text, _POS
    for child in element:
        if isinstance(child.tag, str):
            for event in _element_events(child):
                yield event
        if child.tail:
            yield TEXT, child.tail, _POS
    yield END, tag, _POS


def node_to_string(node):
    """
    Serialize an element (without its tail) to XML text, using local names
    for elements and attributes.
    """
    if node is None:
        return None
    stream = Stream(list(_element_events(node)))
    return stream.render('xml', encoding=None, strip_whitespace=False)


def node_text(document, xpath):
    """
    Serialized text of the node at ``xpath``, or None if the document is
    absent or the node can not be found.
    """
    if document is None:
        return None
    return node_to_string(find_node(document, xpath))


def attribute_fragment(name, value):
    """
    The ``name="value"`` substring an attribute contributes to the output of
    `node_to_string`.

    >>> attribute_fragment('k', 'v')
    'k="v"'
    """
    return u'%s="%s"' % (localname(name), str(escape(value, quotes=True)))
