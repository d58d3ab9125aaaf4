# -*- coding: utf-8 -*-
"""
    xsdiff
    ~~~~~~

    Tabbed reports of structural differences between two XML documents.
    A structural differ records which children and attributes were added or
    removed under which parent; the report then shows the parent's text with
    exactly those parts marked.  Examples:

    >>> from xsdiff import SemanticDiffFormatter, SpanRecorder, parse_xml, node_text

    >>> new = parse_xml('<doc><list><item n="1"/><item n="2"/></list></doc>')
    >>> formatter = SemanticDiffFormatter()
    >>> formatter.mark_node_added('/doc/list', node_text(new, '/doc/list/item[2]'), new)
    True
    >>> output = SpanRecorder()
    >>> formatter.render_report(output)
    >>> for kind, text in output.tabs['semantic'].spans():
    ...     print(kind, text)
    added all adds for node (/doc/list)
    unchanged <list><item n="1"/>
    added <item n="2"/>
    unchanged </list>

    Changes directly under the document element are not tracked:

    >>> formatter.mark_node_added('/doc', '<list/>', new)
    False
"""
from .changes import ChangeRegistry, NodeChanges
from .config import ReportConfig, ADDED, REMOVED
from .errors import XsDiffError, UnknownRendererError
from .formatter import SemanticDiffFormatter, highlight
from .matcher import KeywordTrie, Emit
from .nodes import parse_xml, find_node, node_to_string, node_text, xpath_depth, attribute_fragment
from .output import DiffOutput, HtmlReportOutput, SpanRecorder
from .renderers import DiffRenderer, EmptyDiff, WordDiff, LineDiff, WikiDiff

__all__ = [
    'SemanticDiffFormatter',
    'ChangeRegistry',
    'NodeChanges',
    'ReportConfig',
    'ADDED',
    'REMOVED',
    'highlight',
    'KeywordTrie',
    'Emit',
    'parse_xml',
    'find_node',
    'node_to_string',
    'node_text',
    'xpath_depth',
    'attribute_fragment',
    'DiffOutput',
    'HtmlReportOutput',
    'SpanRecorder',
    'DiffRenderer',
    'EmptyDiff',
    'WordDiff',
    'LineDiff',
    'WikiDiff',
    'XsDiffError',
    'UnknownRendererError',
]
