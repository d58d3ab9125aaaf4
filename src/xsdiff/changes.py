# -*- coding: utf-8 -*-
"""
Change registry: structural changes aggregated per parent location.

The structural differ reports every added or removed child node (and every
added or removed attribute) against the XPath-like key of its parent. All
changes under one key are collected in a single `NodeChanges`, together with
the serialized text of the parent itself, which is what the semantic tab
later searches.
"""
import logging

from .config import ReportConfig, ADDED, REMOVED, LINE, WORD, WIKI, RENDERER_SLOTS
from .errors import UnknownRendererError
from . import nodes
from .renderers import EmptyDiff

logger = logging.getLogger(__name__)

_EMPTY_DIFF = EmptyDiff()


class NodeChanges(object):
    """All added and removed children and attributes of one parent node."""

    def __init__(self, key):
        self._key = key
        self.added_nodes = []
        self.removed_nodes = []
        # node text -> set of attribute fragments changed on that node
        self.added_attributes = {}
        self.removed_attributes = {}
        self._parent_text = {ADDED: None, REMOVED: None}
        self._renderers = {}

    @property
    def key(self):
        return self._key

    def __repr__(self):
        return '<NodeChanges %r +%d -%d>' % (
            self._key, len(self.added_nodes), len(self.removed_nodes))

    def added_node(self, node_text):
        self.added_nodes.append(node_text)

    def removed_node(self, node_text):
        self.removed_nodes.append(node_text)

    def _attributes(self, side):
        if side == ADDED:
            return self.added_attributes
        if side == REMOVED:
            return self.removed_attributes
        raise ValueError('Unknown change side: %r' % (side,))

    def attribute_changed(self, side, node_text, fragment):
        self._attributes(side).setdefault(node_text, set()).add(fragment)

    def added_attribute(self, node_text, fragment):
        self.attribute_changed(ADDED, node_text, fragment)

    def removed_attribute(self, node_text, fragment):
        self.attribute_changed(REMOVED, node_text, fragment)

    def nodes_with_added_attributes(self):
        return list(self.added_attributes)

    def nodes_with_removed_attributes(self):
        return list(self.removed_attributes)

    def added_attributes_for(self, node_text):
        return self.added_attributes.get(node_text, set())

    def removed_attributes_for(self, node_text):
        return self.removed_attributes.get(node_text, set())

    def is_something_added(self):
        return bool(self.added_nodes or self.added_attributes)

    def is_something_removed(self):
        return bool(self.removed_nodes or self.removed_attributes)

    def set_parent_text(self, side, text):
        if side not in self._parent_text:
            raise ValueError('Unknown change side: %r' % (side,))
        self._parent_text[side] = text

    def parent_text(self, side):
        """Most recently resolved text of the parent node, per side."""
        return self._parent_text[side]

    @property
    def added_parent_text(self):
        return self._parent_text[ADDED]

    @property
    def removed_parent_text(self):
        return self._parent_text[REMOVED]

    def set_renderer(self, which, renderer):
        if which not in RENDERER_SLOTS:
            raise UnknownRendererError(which)
        self._renderers[which] = renderer

    def renderer(self, which):
        """The attached renderer for a slot, or a renderer that does nothing."""
        if which not in RENDERER_SLOTS:
            raise UnknownRendererError(which)
        return self._renderers.get(which) or _EMPTY_DIFF

    @property
    def word_diff(self):
        return self.renderer(WORD)

    @property
    def line_diff(self):
        return self.renderer(LINE)

    @property
    def wiki_diff(self):
        return self.renderer(WIKI)


class ChangeRegistry(object):
    """
    Ordered mapping from location key to `NodeChanges`.

    Iteration follows the order in which each location first had a change
    recorded, which is also the order of the report rows. Keys with fewer
    than ``config.min_xpath_depth`` segments are rejected; callers get None
    or False back and have to show such changes some other way.
    """

    def __init__(self, config=None):
        self.config = config or ReportConfig()
        self._changes = {}

    def __len__(self):
        return len(self._changes)

    def __contains__(self, key):
        return key in self._changes

    def __iter__(self):
        return iter(self._changes)

    def items(self):
        return self._changes.items()

    def get(self, key):
        return self._changes.get(key)

    def is_too_shallow(self, key):
        min_depth = getattr(self.config, 'min_xpath_depth', 2)
        return nodes.xpath_depth(key) < min_depth

    def register(self, key):
        """Get or create the changes for ``key``; None if it is too shallow."""
        changes = self._changes.get(key)
        if changes is not None:
            return changes
        if self.is_too_shallow(key):
            logger.debug('Not tracking changes under shallow location %r', key)
            return None
        changes = self._changes[key] = NodeChanges(key)
        return changes

    def _touch(self, key, document, side):
        changes = self.register(key)
        if changes is not None and document is not None:
            changes.set_parent_text(side, nodes.node_text(document, key))
        return changes

    def mark_added(self, key, node_text, document):
        """
        Record a child node added under ``key``.

        Returns False if the change could not be recorded (the location is
        too shallow); the caller should show the change explicitly.
        """
        changes = self._touch(key, document, ADDED)
        if changes is None:
            return False
        changes.added_node(node_text)
        return True

    def mark_removed(self, key, node_text, document):
        """Record a child node removed from under ``key``. See `mark_added`."""
        changes = self._touch(key, document, REMOVED)
        if changes is None:
            return False
        changes.removed_node(node_text)
        return True

    def mark_attribute_added(self, key, node_text, fragment, document):
        """
        Record an attribute added to the child node serialized as
        ``node_text``; ``fragment`` is the attribute's ``name="value"`` text.
        """
        changes = self._touch(key, document, ADDED)
        if changes is None:
            return False
        changes.added_attribute(node_text, fragment)
        return True

    def mark_attribute_removed(self, key, node_text, fragment, document):
        changes = self._touch(key, document, REMOVED)
        if changes is None:
            return False
        changes.removed_attribute(node_text, fragment)
        return True

    def attach_renderer(self, key, which, renderer):
        """Attach an alternate rendering to the changes for ``key``."""
        if which not in RENDERER_SLOTS:
            raise UnknownRendererError(which)
        changes = self._touch(key, None, None)
        if changes is None:
            return
        changes.set_renderer(which, renderer)

    def attach_word_diff(self, key, renderer):
        self.attach_renderer(key, WORD, renderer)

    def attach_line_diff(self, key, renderer):
        self.attach_renderer(key, LINE, renderer)

    def attach_wiki_diff(self, key, renderer):
        self.attach_renderer(key, WIKI, renderer)
