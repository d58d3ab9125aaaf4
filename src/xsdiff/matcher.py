# -*- coding: utf-8 -*-
"""
Multi-keyword substring search (Aho-Corasick).

`KeywordTrie` finds every occurrence of a set of keywords in one pass over a
text. With ``remove_overlaps`` enabled (the default) overlapping occurrences
are resolved with a fixed policy: the longest occurrence wins, and between
occurrences of the same length the one that starts first wins. Accepted
matches are returned ordered by start position.

>>> trie = KeywordTrie(['he', 'she', 'hers'])
>>> [(e.start, e.end, e.keyword) for e in trie.parse_text('ushers')]
[(2, 5, 'hers')]
"""
from bisect import bisect_left
from collections import deque


class Emit(object):
    """
    One keyword occurrence. ``end`` is inclusive: it is the index of the last
    matched character, so the matched text is ``text[start:end + 1]``.
    """

    __slots__ = ('start', 'end', 'keyword')

    def __init__(self, start, end, keyword):
        self.start = start
        self.end = end
        self.keyword = keyword

    def __len__(self):
        return self.end - self.start + 1

    def overlaps(self, other):
        return self.start <= other.end and other.start <= self.end

    def __eq__(self, other):
        if not isinstance(other, Emit):
            return NotImplemented
        return (self.start, self.end, self.keyword) == \
            (other.start, other.end, other.keyword)

    def __hash__(self):
        return hash((self.start, self.end, self.keyword))

    def __repr__(self):
        return '<Emit %d:%d %r>' % (self.start, self.end, self.keyword)


class _State(object):
    __slots__ = ('depth', 'goto', 'fail', 'outputs')

    def __init__(self, depth):
        self.depth = depth
        self.goto = {}
        self.fail = None
        self.outputs = []


class KeywordTrie(object):
    """Aho-Corasick automaton over a set of keywords."""

    def __init__(self, keywords=(), remove_overlaps=True):
        self.remove_overlaps = remove_overlaps
        self._root = _State(0)
        self._keywords = set()
        self._built = False
        for keyword in keywords:
            self.add_keyword(keyword)

    def __len__(self):
        return len(self._keywords)

    def add_keyword(self, keyword):
        # The empty string would match everywhere and consume nothing.
        if not keyword or keyword in self._keywords:
            return
        self._keywords.add(keyword)
        state = self._root
        for char in keyword:
            nxt = state.goto.get(char)
            if nxt is None:
                nxt = state.goto[char] = _State(state.depth + 1)
            state = nxt
        state.outputs.append(keyword)
        self._built = False

    def _build(self):
        root = self._root
        root.fail = root
        queue = deque()
        for state in root.goto.values():
            state.fail = root
            queue.append(state)
        while queue:
            current = queue.popleft()
            for char, target in current.goto.items():
                queue.append(target)
                fail = current.fail
                while fail is not root and char not in fail.goto:
                    fail = fail.fail
                target.fail = fail.goto.get(char, root)
                target.outputs = target.outputs + [
                    k for k in target.fail.outputs if k not in target.outputs]
        self._built = True

    def _step(self, state, char):
        root = self._root
        while state is not root and char not in state.goto:
            state = state.fail
        return state.goto.get(char, root)

    def iter_emits(self, text):
        """Yield every keyword occurrence, in order of end position."""
        if not self._keywords:
            return
        if not self._built:
            self._build()
        state = self._root
        for pos, char in enumerate(text):
            state = self._step(state, char)
            for keyword in state.outputs:
                yield Emit(pos - len(keyword) + 1, pos, keyword)

    def parse_text(self, text):
        """All accepted keyword occurrences in ``text``, ordered by start."""
        emits = list(self.iter_emits(text))
        if self.remove_overlaps:
            emits = remove_overlapping(emits)
        emits.sort(key=lambda e: (e.start, e.end))
        return emits


def remove_overlapping(emits):
    """
    Keep a non-overlapping subset of ``emits``: longer occurrences are
    accepted first, ties go to the earlier start.
    """
    # accepted intervals never overlap, so sorted by start they are also
    # sorted by end and only the neighbours of a candidate can collide
    starts = []
    accepted = []
    for emit in sorted(emits, key=lambda e: (-len(e), e.start)):
        i = bisect_left(starts, emit.start)
        if i > 0 and accepted[i - 1].end >= emit.start:
            continue
        if i < len(accepted) and accepted[i].start <= emit.end:
            continue
        starts.insert(i, emit.start)
        accepted.insert(i, emit)
    return accepted
