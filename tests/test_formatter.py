from __future__ import annotations

import pytest

from xsdiff import (
    ADDED, REMOVED, LineDiff, NodeChanges, SemanticDiffFormatter, SpanRecorder, WordDiff,
    highlight, node_text, parse_xml,
)

OLD = '<r><p><a k="1"/><b/></p></r>'
NEW = '<r><p><a k="2"/><c/></p></r>'


def _highlight(text, keywords, lookup=None, polarity=ADDED) -> SpanRecorder:
    output = SpanRecorder()
    highlight(text, keywords, lookup, polarity, output)
    return output


def _semantic(formatter) -> SpanRecorder:
    output = SpanRecorder()
    formatter.render_report(output)
    return output.tabs['semantic']


def test_match_boundary_resumes_after_the_match():
    output = _highlight('abXcd', ['X'], polarity=REMOVED)
    assert output.spans() == [
        ('unchanged', 'ab'), ('removed', 'X'), ('unchanged', 'cd')]


def test_spans_reconstruct_the_text():
    cases = [
        ('abXcd', ['X']),
        ('XabX', ['X']),
        ('<p><a/><b/><a/></p>', ['<a/>', '<b/>']),
        ('<p><a/><b/></p>', ['<a/><b/>', '<b/>']),
        ('no match here', ['zzz']),
        ('', ['x']),
    ]
    for text, keywords in cases:
        assert _highlight(text, keywords).text() == text


def test_empty_spans_are_not_written():
    output = _highlight('XabX', ['X'])
    assert output.spans() == [('added', 'X'), ('unchanged', 'ab'), ('added', 'X')]


def test_empty_keywords_give_one_unchanged_span():
    assert _highlight('hello', []).spans() == [('unchanged', 'hello')]
    assert _highlight('hello', [], {}).spans() == [('unchanged', 'hello')]


def test_longest_keyword_is_highlighted():
    output = _highlight('xabcdx', ['ab', 'abcd'])
    assert output.spans() == [('unchanged', 'x'), ('added', 'abcd'), ('unchanged', 'x')]


def test_attribute_fragments_are_highlighted_inside_the_node():
    node = '<a k="v"/>'
    output = _highlight('<p>' + node + '</p>', [node], {node: {'k="v"'}})
    assert output.spans() == [
        ('unchanged', '<p>'),
        ('unchanged', '<a '), ('added', 'k="v"'), ('unchanged', '/>'),
        ('unchanged', '</p>'),
    ]
    assert ('added', node) not in output.spans()


def test_empty_attribute_set_highlights_whole_node():
    output = _highlight('<p><a/></p>', ['<a/>'], {'<a/>': set()})
    assert ('added', '<a/>') in output.spans()


def test_unknown_polarity():
    with pytest.raises(ValueError):
        _highlight('abc', ['b'], polarity='moved')


def test_no_change_row_is_empty():
    output = SpanRecorder()
    SemanticDiffFormatter().render_semantic_tab('/r/p', NodeChanges('/r/p'), output)
    assert output.records == []


def test_full_semantic_tab():
    old, new = parse_xml(OLD), parse_xml(NEW)
    formatter = SemanticDiffFormatter()
    assert formatter.mark_node_removed('/r/p', node_text(old, '/r/p/b'), old)
    assert formatter.mark_node_added('/r/p', node_text(new, '/r/p/c'), new)
    assert formatter.mark_attribute_removed('/r/p', '<a k="1"/>', 'k="1"', old)
    assert formatter.mark_attribute_added('/r/p', '<a k="2"/>', 'k="2"', new)

    semantic = _semantic(formatter)
    assert semantic.records[:2] == [('newline', '\n'), ('newline', '\n')]
    assert semantic.spans() == [
        ('added', 'all adds for node (/r/p)'),
        ('unchanged', '<p>'),
        ('unchanged', '<a '), ('added', 'k="2"'), ('unchanged', '/>'),
        ('added', '<c/>'),
        ('unchanged', '</p>'),
        ('removed', 'all removes from node (/r/p)'),
        ('unchanged', '<p>'),
        ('unchanged', '<a '), ('removed', 'k="1"'), ('unchanged', '/>'),
        ('removed', '<b/>'),
        ('unchanged', '</p>'),
    ]


def test_only_removed_side_is_shown():
    old = parse_xml(OLD)
    formatter = SemanticDiffFormatter()
    formatter.mark_node_removed('/r/p', '<b/>', old)
    semantic = _semantic(formatter)
    assert semantic.spans()[0] == ('removed', 'all removes from node (/r/p)')
    assert not semantic.spans(('added',))


def test_missing_parent_text_uses_placeholder():
    formatter = SemanticDiffFormatter()
    formatter.mark_node_added('/r/p', '<c/>', None)
    assert _semantic(formatter).spans() == [
        ('added', 'all adds for node (/r/p)'), ('unchanged', 'NULL TEXT')]


def test_report_rows_follow_registry_order():
    new = parse_xml('<r><p><c/></p><q><d/></q></r>')
    formatter = SemanticDiffFormatter()
    formatter.mark_node_added('/r/q', '<d/>', new)
    formatter.mark_node_added('/r/p', '<c/>', new)
    formatter.mark_node_added('/r/q', '<d/>', new)
    output = SpanRecorder()
    formatter.render_report(output)
    assert output.records == [('header', '++ semantic adds ; removes --')]
    banners = [row['semantic'].spans()[0][1] for row in output.rows]
    assert banners == ['all adds for node (/r/q)', 'all adds for node (/r/p)']


def test_shallow_changes_are_left_to_the_caller():
    formatter = SemanticDiffFormatter()
    assert formatter.mark_node_added('/r', '<p/>', parse_xml(NEW)) is False
    output = SpanRecorder()
    formatter.render_report(output)
    assert output.rows == []


def test_alternate_tabs_use_attached_renderers():
    formatter = SemanticDiffFormatter()
    formatter.mark_node_added('/r/p', '<c/>', parse_xml(NEW))
    formatter.attach_word_diff('/r/p', WordDiff('a b', 'a c'))
    formatter.attach_line_diff('/r/p', LineDiff('a', 'b'))
    output = SpanRecorder()
    formatter.render_report(output)
    tabs = output.tabs
    assert list(tabs) == ['semantic', 'line', 'word', 'wiki']
    assert tabs['word'].spans() == [('unchanged', 'a '), ('removed', 'b'), ('added', 'c')]
    assert tabs['line'].spans() == [('removed', 'a'), ('added', 'b')]
    assert tabs['wiki'].records == []
    # every tab writes into its own sink
    assert len({id(tab) for tab in tabs.values()}) == 4


def test_namespaced_document_is_highlighted():
    new = parse_xml('<r xmlns="urn:x"><p><a k="v"/><b/></p></r>')
    formatter = SemanticDiffFormatter()
    formatter.mark_node_added('/r/p', node_text(new, '/r/p/b'), new)
    assert _semantic(formatter).spans() == [
        ('added', 'all adds for node (/r/p)'),
        ('unchanged', '<p><a k="v"/>'),
        ('added', '<b/>'),
        ('unchanged', '</p>'),
    ]


class _DepthOnlyConfig(object):
    min_xpath_depth = 3


def test_partial_config_falls_back_to_defaults():
    formatter = SemanticDiffFormatter(config=_DepthOnlyConfig())
    assert formatter.mark_node_added('/r/p', '<c/>', None) is False
    assert formatter.mark_node_added('/r/p/q', '<c/>', None) is True
    output = SpanRecorder(_DepthOnlyConfig())
    formatter.render_report(output)
    assert output.records == [('header', '++ semantic adds ; removes --')]
    assert list(output.tabs) == ['semantic', 'line', 'word', 'wiki']
    assert output.tabs['semantic'].spans(None) == [
        ('added', 'all adds for node (/r/p/q)'), ('unchanged', 'NULL TEXT')]


def test_partial_config_renders_html():
    formatter = SemanticDiffFormatter(config=_DepthOnlyConfig())
    formatter.mark_node_removed('/r/p/q', '<c/>', None)
    html = formatter.render_html()
    assert '<li data-tab="semantic">semantic</li>' in html
    assert '<del>all removes from node (/r/p/q)</del>' in html
