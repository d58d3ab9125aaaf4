# -*- coding: utf-8 -*-
"""
Alternate renderings of a change: word level, line level and wiki style.

Each renderer is bound to an old and a new text and writes its rendering into
an output sink with `render`. `EmptyDiff` renders nothing and stands in for a
renderer that was never attached.
"""
from difflib import SequenceMatcher

from .config import ReportConfig, _token_split_re


class InsensitiveSequenceMatcher(SequenceMatcher):
    """
    SequenceMatcher that ignores very small matching blocks.

    This prevents "shredded" diffs where unrelated texts get word-by-word
    interleaving due to incidental small matches (e.g., "del" matching "DE").
    """

    def __init__(self, isjunk=None, a='', b='', threshold=2):
        super().__init__(isjunk, a, b)
        self.threshold = threshold

    def get_matching_blocks(self):
        # Dynamically adjust threshold based on sequence size to avoid
        # over-filtering on very short sequences.
        size = min(len(self.a), len(self.b))
        effective_threshold = min(self.threshold, size // 4)

        blocks = super().get_matching_blocks()
        # Keep blocks larger than threshold, or the sentinel (size=0) at the end.
        return [block for block in blocks
                if block[2] > effective_threshold or block[2] == 0]


def text_split(text, config=None):
    """
    Tokenize text for diffing.

    Punctuation is split from words (e.g. "CAD" vs "CAD.") so pure
    punctuation edits become insert/delete instead of a replace that
    accidentally includes adjacent whitespace.
    """
    rx = getattr(config, 'tokenize_regex', _token_split_re)
    return [p for p in rx.split(text or u'') if p != u'']


def emit_opcodes(output, old, new, opcodes):
    """
    Write ``difflib`` opcodes over token lists into ``output``.

    Deletions are written before insertions within each changed region;
    SequenceMatcher can produce delete/insert/delete patterns that would
    otherwise render as an insertion inside a deletion.
    """
    pending_del = []
    pending_ins = []

    def flush_pending():
        if pending_del:
            output.emit_removed(u''.join(pending_del))
            del pending_del[:]
        if pending_ins:
            output.emit_added(u''.join(pending_ins))
            del pending_ins[:]

    for tag, i1, i2, j1, j2 in opcodes:
        if tag == 'equal':
            flush_pending()
            output.emit_unchanged(u''.join(old[i1:i2]))
            continue
        if tag in ('replace', 'delete'):
            pending_del.extend(old[i1:i2])
        if tag in ('replace', 'insert'):
            pending_ins.extend(new[j1:j2])
    flush_pending()


class DiffRenderer(object):
    """Renders the difference between two texts into an output sink."""

    def __init__(self, old_text, new_text, config=None):
        self.config = config or ReportConfig()
        self.old_text = old_text or u''
        self.new_text = new_text or u''

    def render(self, output):
        raise NotImplementedError()


class EmptyDiff(DiffRenderer):
    """Renders nothing."""

    def __init__(self):
        super().__init__(u'', u'')

    def render(self, output):
        pass


class WordDiff(DiffRenderer):
    """Word and punctuation level diff, running inline."""

    def render(self, output):
        old = text_split(self.old_text, self.config)
        new = text_split(self.new_text, self.config)
        threshold = getattr(self.config, 'sequence_match_threshold', 2)
        matcher = InsensitiveSequenceMatcher(None, old, new, threshold=threshold)
        emit_opcodes(output, old, new, matcher.get_opcodes())


def _emit_lines(emit, output, lines):
    for line in lines:
        emit(line)
        output.newline()


class LineDiff(DiffRenderer):
    """Line level diff: removed lines first, then added lines."""

    def render(self, output):
        old = self.old_text.splitlines()
        new = self.new_text.splitlines()
        matcher = SequenceMatcher(None, old, new, autojunk=False)
        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag == 'equal':
                _emit_lines(output.emit_unchanged, output, old[i1:i2])
                continue
            _emit_lines(output.emit_removed, output, old[i1:i2])
            _emit_lines(output.emit_added, output, new[j1:j2])


class WikiDiff(DiffRenderer):
    """
    Revision-history style diff: unchanged stretches are folded down to a few
    lines of context, and a line replaced by a single other line is diffed
    character by character.
    """

    def _context(self, output, lines, first, last):
        if first and last:
            # nothing changed
            return
        context = max(int(getattr(self.config, 'wiki_context_lines', 1)), 0)
        marker = getattr(self.config, 'wiki_gap_marker', u'...')
        keep = context if (first or last) else 2 * context
        if len(lines) <= keep:
            _emit_lines(output.emit_unchanged, output, lines)
            return
        head = [] if first else lines[:context]
        tail = [] if last else lines[len(lines) - context:]
        _emit_lines(output.emit_unchanged, output, head)
        output.emit_unchanged(marker)
        output.newline()
        _emit_lines(output.emit_unchanged, output, tail)

    def _replace_line(self, output, old_line, new_line):
        matcher = SequenceMatcher(None, old_line, new_line, autojunk=False)
        emit_opcodes(output, old_line, new_line, matcher.get_opcodes())
        output.newline()

    def render(self, output):
        old = self.old_text.splitlines()
        new = self.new_text.splitlines()
        matcher = SequenceMatcher(None, old, new, autojunk=False)
        opcodes = matcher.get_opcodes()
        for n, (tag, i1, i2, j1, j2) in enumerate(opcodes):
            if tag == 'equal':
                self._context(output, old[i1:i2], n == 0, n == len(opcodes) - 1)
            elif tag == 'replace' and i2 - i1 == j2 - j1:
                for old_line, new_line in zip(old[i1:i2], new[j1:j2]):
                    self._replace_line(output, old_line, new_line)
            else:
                _emit_lines(output.emit_removed, output, old[i1:i2])
                _emit_lines(output.emit_added, output, new[j1:j2])
