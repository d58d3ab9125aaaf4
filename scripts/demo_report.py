import sys
from pathlib import Path

# Ensure we import the repo-local xsdiff (not a pip-installed one).
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from xsdiff import (  # noqa: E402
    LineDiff, SemanticDiffFormatter, WikiDiff, WordDiff, attribute_fragment, node_text, parse_xml,
)


def main():
    before = parse_xml(
        '<config>\n'
        '  <servers>\n'
        '    <server name="a" port="80"/>\n'
        '    <server name="b" port="80"/>\n'
        '  </servers>\n'
        '</config>'
    )
    after = parse_xml(
        '<config>\n'
        '  <servers>\n'
        '    <server name="a" port="8080"/>\n'
        '    <server name="c" port="80"/>\n'
        '  </servers>\n'
        '</config>'
    )
    key = '/config/servers'
    formatter = SemanticDiffFormatter()
    formatter.mark_node_removed(key, node_text(before, key + '/server[2]'), before)
    formatter.mark_node_added(key, node_text(after, key + '/server[2]'), after)
    formatter.mark_attribute_removed(key, node_text(before, key + '/server[1]'),
                                     attribute_fragment('port', '80'), before)
    formatter.mark_attribute_added(key, node_text(after, key + '/server[1]'),
                                   attribute_fragment('port', '8080'), after)

    old_text, new_text = node_text(before, key), node_text(after, key)
    formatter.attach_line_diff(key, LineDiff(old_text, new_text))
    formatter.attach_word_diff(key, WordDiff(old_text, new_text))
    formatter.attach_wiki_diff(key, WikiDiff(old_text, new_text))
    print(formatter.render_html())


if __name__ == "__main__":
    main()
