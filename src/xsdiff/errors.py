# -*- coding: utf-8 -*-
"""
Exception classes that may be raised from the xsdiff package.

Missing documents, unresolvable nodes and locations that are too shallow are
not errors; they are reported through return values and placeholders.
"""


class XsDiffError(Exception):
    "Base exception class for all xsdiff-specific errors."


class UnknownRendererError(XsDiffError, ValueError):
    """
    Raised when a renderer is attached to a slot other than ``line``,
    ``word`` or ``wiki``.
    """

    def __init__(self, which):
        self.which = which
        super().__init__('Unknown renderer slot: %r' % (which,))
