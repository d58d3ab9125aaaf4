# -*- coding: utf-8 -*-
"""
Configuration and constants for xsdiff.
"""
import re

# Polarity of a highlighted span
ADDED = 'added'
REMOVED = 'removed'

# Alternate renderer slots, in the order their tabs are shown
LINE = 'line'
WORD = 'word'
WIKI = 'wiki'
RENDERER_SLOTS = (LINE, WORD, WIKI)

_token_split_re = re.compile(r'(\s+|[^\w\s]+)', re.U)


class ReportConfig(object):
    """
    Runtime configuration for report rendering.

    Class attributes are the defaults; override them on an instance or in a
    subclass.
    """

    # Locations with fewer path segments are not tracked (document root noise)
    min_xpath_depth = 2

    # Shown in place of a parent node whose text could not be resolved
    null_text_placeholder = u'NULL TEXT'

    report_header = u'++ semantic adds ; removes --'
    added_banner = u'all adds for node (%s)'
    removed_banner = u'all removes from node (%s)'

    # semantic tab first, then the alternate renderers
    tab_titles = ('semantic',) + RENDERER_SLOTS

    wrapper_element = 'div'
    wrapper_class = 'xsdiff'

    # Word renderer
    tokenize_regex = _token_split_re
    # Matching blocks with fewer tokens than this are ignored, preventing
    # "shredded" diffs on unrelated texts.
    sequence_match_threshold = 2

    # Wiki renderer: unchanged lines kept around each change
    wiki_context_lines = 1
    wiki_gap_marker = u'...'
