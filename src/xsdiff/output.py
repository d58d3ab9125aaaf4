# -*- coding: utf-8 -*-
"""
Output sinks for diff reports.

A sink only knows about spans of text (unchanged, added, removed), line
breaks, headers and the four report tabs. `HtmlReportOutput` turns those into
a Genshi event stream; `SpanRecorder` keeps them as plain tuples.
"""
from genshi.core import Stream, QName, Attrs, START, END, TEXT

from .config import ReportConfig, ADDED, REMOVED

_POS = (None, -1, -1)

HEADER = 'header'
NEWLINE = 'newline'
UNCHANGED = 'unchanged'
TEXT_KINDS = (UNCHANGED, ADDED, REMOVED)


class DiffOutput(object):
    """Interface every report sink implements."""

    def write_header(self, text):
        raise NotImplementedError()

    def newline(self):
        raise NotImplementedError()

    def emit_unchanged(self, text):
        raise NotImplementedError()

    def emit_added(self, text):
        raise NotImplementedError()

    def emit_removed(self, text):
        raise NotImplementedError()

    def open_tabs(self, semantic_fn, line_fn, word_fn, wiki_fn):
        """
        Call each function with its own, independent sub-sink, one per tab
        (semantic, line, word, wiki).
        """
        raise NotImplementedError()


class HtmlReportOutput(DiffOutput):
    """
    Collects Genshi events. Added text is wrapped in ``<ins>``, removed text
    in ``<del>``; tab contents are rendered inside ``<pre>`` so newlines and
    indentation of serialized XML stay visible.
    """

    def __init__(self, config=None):
        self.config = config or ReportConfig()
        self._events = []

    def append(self, type, data, pos=_POS):
        self._events.append((type, data, pos))

    def _start(self, tag, **attrs):
        attrs = Attrs([(QName(k.rstrip('_').replace('_', '-')), v) for k, v in sorted(attrs.items())])
        self.append(START, (QName(tag), attrs))

    def _end(self, tag):
        self.append(END, QName(tag))

    def _wrap_text(self, tag, text):
        if not text:
            return
        self._start(tag)
        self.append(TEXT, text)
        self._end(tag)

    def write_header(self, text):
        self._start('h3', class_='header')
        self.append(TEXT, text)
        self._end('h3')

    def newline(self):
        self.append(TEXT, u'\n')

    def emit_unchanged(self, text):
        if text:
            self.append(TEXT, text)

    def emit_added(self, text):
        self._wrap_text('ins', text)

    def emit_removed(self, text):
        self._wrap_text('del', text)

    def open_tabs(self, semantic_fn, line_fn, word_fn, wiki_fn):
        titles = getattr(self.config, 'tab_titles', ReportConfig.tab_titles)
        panes = []
        for title, fn in zip(titles, (semantic_fn, line_fn, word_fn, wiki_fn)):
            tab_output = HtmlReportOutput(self.config)
            fn(tab_output)
            panes.append((title, tab_output.events))

        self._start('div', class_='tabs')
        self._start('ul', class_='tab-titles')
        for title, _events in panes:
            self._start('li', data_tab=title)
            self.append(TEXT, title)
            self._end('li')
        self._end('ul')
        for title, events in panes:
            self._start('div', class_='tab-pane', data_tab=title)
            self._start('pre')
            self._events.extend(events)
            self._end('pre')
            self._end('div')
        self._end('div')

    @property
    def events(self):
        return list(self._events)

    def get_stream(self):
        """The collected events inside the configured wrapper element."""
        wrapper = QName(getattr(self.config, 'wrapper_element', ReportConfig.wrapper_element))
        cls = getattr(self.config, 'wrapper_class', ReportConfig.wrapper_class)
        attrs = Attrs([(QName('class'), cls)]) if cls else Attrs()
        events = [(START, (wrapper, attrs), _POS)]
        events.extend(self._events)
        events.append((END, wrapper, _POS))
        return Stream(events)

    def render(self):
        return self.get_stream().render('html', encoding=None)


class SpanRecorder(DiffOutput):
    """
    Records what was written as ``(kind, text)`` tuples. Tabs are recorded
    into child recorders kept in ``tabs``, keyed by tab title.
    """

    def __init__(self, config=None):
        self.config = config or ReportConfig()
        self.records = []
        self.tabs = {}
        self.rows = []

    def write_header(self, text):
        self.records.append((HEADER, text))

    def newline(self):
        self.records.append((NEWLINE, u'\n'))

    def _emit(self, kind, text):
        if text:
            self.records.append((kind, text))

    def emit_unchanged(self, text):
        self._emit(UNCHANGED, text)

    def emit_added(self, text):
        self._emit(ADDED, text)

    def emit_removed(self, text):
        self._emit(REMOVED, text)

    def open_tabs(self, semantic_fn, line_fn, word_fn, wiki_fn):
        row = {}
        titles = getattr(self.config, 'tab_titles', ReportConfig.tab_titles)
        for title, fn in zip(titles,
                             (semantic_fn, line_fn, word_fn, wiki_fn)):
            recorder = SpanRecorder(self.config)
            fn(recorder)
            row[title] = recorder
        self.rows.append(row)
        # The most recent row stays reachable as `tabs`
        self.tabs = row

    def spans(self, kinds=None):
        """Recorded spans of the given kinds; unchanged, added and removed by default."""
        if kinds is None:
            kinds = TEXT_KINDS
        return [(kind, text) for kind, text in self.records if kind in kinds]

    def text(self):
        """Concatenation of every unchanged, added and removed span."""
        return u''.join(text for _kind, text in self.spans())
