# -*- coding: utf-8 -*-
"""
Semantic diff formatter: the tabbed report of structural changes.

For every location in the change registry a row with four tabs is written.
The line, word and wiki tabs come from the renderers attached to the
location. The semantic tab is built here: the serialized text of the parent
node is shown in full, with the substrings that correspond to added or
removed children marked as such. When a child only had attributes changed,
just those attributes are marked inside the child's text.
"""
import logging

from .changes import ChangeRegistry
from .config import ReportConfig, ADDED, REMOVED, LINE, WORD, WIKI
from .matcher import KeywordTrie
from .output import HtmlReportOutput

logger = logging.getLogger(__name__)


def _emitter(output, polarity):
    if polarity == ADDED:
        return output.emit_added
    if polarity == REMOVED:
        return output.emit_removed
    raise ValueError('Unknown polarity: %r' % (polarity,))


def highlight(text, keywords, attribute_lookup, polarity, output):
    """
    Write ``text`` into ``output``, marking every occurrence of a keyword
    with ``polarity`` and everything else as unchanged.

    Overlapping occurrences are resolved by `KeywordTrie` (longest first,
    then earliest). If ``attribute_lookup`` maps a matched keyword to a
    non-empty set of fragments, only those fragments are marked inside the
    match; attribute fragments are not looked up any further.
    """
    emit_marked = _emitter(output, polarity)
    attribute_lookup = attribute_lookup or {}
    trie = KeywordTrie(keywords, remove_overlaps=True)

    cursor = 0
    for emit in trie.parse_text(text):
        if emit.start > cursor:
            output.emit_unchanged(text[cursor:emit.start])
        matched = text[emit.start:emit.end + 1]
        fragments = attribute_lookup.get(emit.keyword)
        if fragments:
            highlight(matched, fragments, None, polarity, output)
        else:
            emit_marked(matched)
        cursor = emit.end + 1
    if cursor < len(text):
        output.emit_unchanged(text[cursor:])


class SemanticDiffFormatter(object):
    """Generates a tabbed view of semantic and other types of diff."""

    def __init__(self, registry=None, config=None):
        self.config = config or ReportConfig()
        self.registry = registry if registry is not None else ChangeRegistry(self.config)

    # Changes are recorded through the registry; these are here so a differ
    # only needs to hold on to the formatter.

    def mark_node_added(self, parent_xpath, node_text, parent_doc):
        return self.registry.mark_added(parent_xpath, node_text, parent_doc)

    def mark_node_removed(self, parent_xpath, node_text, parent_doc):
        return self.registry.mark_removed(parent_xpath, node_text, parent_doc)

    def mark_attribute_added(self, parent_xpath, node_text, fragment, parent_doc):
        return self.registry.mark_attribute_added(parent_xpath, node_text, fragment, parent_doc)

    def mark_attribute_removed(self, parent_xpath, node_text, fragment, parent_doc):
        return self.registry.mark_attribute_removed(parent_xpath, node_text, fragment, parent_doc)

    def attach_word_diff(self, parent_xpath, renderer):
        self.registry.attach_word_diff(parent_xpath, renderer)

    def attach_line_diff(self, parent_xpath, renderer):
        self.registry.attach_line_diff(parent_xpath, renderer)

    def attach_wiki_diff(self, parent_xpath, renderer):
        self.registry.attach_wiki_diff(parent_xpath, renderer)

    def render_report(self, output):
        output.write_header(getattr(self.config, 'report_header', ReportConfig.report_header))
        for key, changes in self.registry.items():
            self.render_changes(key, changes, output)

    def render_changes(self, key, changes, output):
        """Write one report row: the four tabs for one location."""
        output.open_tabs(
            lambda semantic_output: self.render_semantic_tab(key, changes, semantic_output),
            lambda line_output: changes.renderer(LINE).render(line_output),
            lambda word_output: changes.renderer(WORD).render(word_output),
            lambda wiki_output: changes.renderer(WIKI).render(wiki_output),
        )

    def render_semantic_tab(self, key, changes, output):
        if changes.is_something_added():
            self._render_side(key, ADDED, changes.added_parent_text,
                              changes.added_nodes, changes.added_attributes, output)
        if changes.is_something_removed():
            self._render_side(key, REMOVED, changes.removed_parent_text,
                              changes.removed_nodes, changes.removed_attributes, output)

    def _render_side(self, key, polarity, text, node_texts, attributes, output):
        if polarity == ADDED:
            banner = getattr(self.config, 'added_banner', ReportConfig.added_banner) % (key,)
        else:
            banner = getattr(self.config, 'removed_banner', ReportConfig.removed_banner) % (key,)
        output.newline()
        output.newline()
        _emitter(output, polarity)(banner)
        output.newline()
        output.newline()
        if not text:
            logger.debug('No %s parent text for %r', polarity, key)
            placeholder = getattr(self.config, 'null_text_placeholder',
                                  ReportConfig.null_text_placeholder)
            output.emit_unchanged(placeholder)
            return
        keywords = list(node_texts) + list(attributes)
        highlight(text, keywords, attributes, polarity, output)

    def render_html(self):
        """Render the whole report as an HTML fragment."""
        output = HtmlReportOutput(self.config)
        self.render_report(output)
        return output.render()
