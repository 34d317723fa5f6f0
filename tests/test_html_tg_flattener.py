"""Tests for html_tg.flattener - text assembly and entity offsets."""

import pytest

from html_tg.ast import Node, NodeType
from html_tg.flattener import EntityFlattener, flatten

N = NodeType


def root(*children: Node) -> Node:
    return Node(N.ROOT, children=list(children))


def text(value: str) -> Node:
    return Node(N.TEXT, text=value)


# ============================================================================
# Entity types
# ============================================================================


@pytest.mark.parametrize(
    ('node_type', 'entity_type'),
    [
        (N.BOLD, 'bold'),
        (N.ITALIC, 'italic'),
        (N.UNDERLINE, 'underline'),
        (N.STRIKE, 'strikethrough'),
        (N.SPOILER, 'spoiler'),
        (N.CODE, 'code'),
    ],
)
def test_span_entity_types(node_type: NodeType, entity_type: str) -> None:
    """Span nodes map to Telegram entity types."""
    result = flatten(root(text('a '), Node(node_type, children=[text('bc')])))
    assert result == ('a bc', [{'type': entity_type, 'offset': 2, 'length': 2}])


def test_root_and_text_produce_no_entities() -> None:
    """Plain text is concatenated without entities."""
    assert flatten(root(text('one'), text(' two'))) == ('one two', [])


def test_empty_root() -> None:
    """An empty tree flattens to empty text."""
    assert flatten(root()) == ('', [])


# ============================================================================
# Offsets and ordering
# ============================================================================


def test_children_before_parent() -> None:
    """Entities are emitted on exit, so inner spans come first."""
    tree = root(
        Node(N.BOLD, children=[text('a'), Node(N.ITALIC, children=[text('b')]), text('c')])
    )
    text_out, entities = flatten(tree)
    assert text_out == 'abc'
    assert entities == [
        {'type': 'italic', 'offset': 1, 'length': 1},
        {'type': 'bold', 'offset': 0, 'length': 3},
    ]


def test_offsets_count_utf16_units() -> None:
    """Astral characters advance the cursor by two units."""
    tree = root(text('\N{GRINNING FACE} '), Node(N.BOLD, children=[text('\N{FIRE}x')]))
    _, entities = flatten(tree)
    assert entities == [{'type': 'bold', 'offset': 3, 'length': 3}]


def test_cursor_shared_across_siblings() -> None:
    """Sibling spans continue from where the previous one ended."""
    tree = root(
        Node(N.BOLD, children=[text('ab')]),
        text(' '),
        Node(N.ITALIC, children=[text('cd')]),
    )
    _, entities = flatten(tree)
    assert entities == [
        {'type': 'bold', 'offset': 0, 'length': 2},
        {'type': 'italic', 'offset': 3, 'length': 2},
    ]


def test_zero_length_spans_dropped() -> None:
    """Spans that cover no text produce no entity."""
    tree = root(
        Node(N.BOLD),
        Node(N.ITALIC, children=[text('')]),
        Node(N.PRE, text=''),
        Node(N.LINK, text='', url='https://e.com'),
    )
    assert flatten(tree) == ('', [])


def test_flattener_tracks_offset() -> None:
    """The running offset equals the UTF-16 length of the emitted text."""
    flattener = EntityFlattener()
    flattener.render_node(root(text('ab\N{FIRE}')))
    assert flattener.current_offset == 4
    assert flattener.output_text == 'ab\N{FIRE}'


def test_deep_tree_keeps_post_order() -> None:
    """Trees deeper than the recursion limit flatten innermost entity first."""
    depth = 5000
    tree = node = root()
    for index in range(depth):
        node = node.append(Node(N.BOLD if index % 2 == 0 else N.ITALIC))
    node.append(text('x'))

    output, entities = flatten(tree)

    assert output == 'x'
    assert len(entities) == depth
    assert entities[0] == {'type': 'italic', 'offset': 0, 'length': 1}
    assert entities[-1] == {'type': 'bold', 'offset': 0, 'length': 1}



# ============================================================================
# Code blocks, links and custom emoji
# ============================================================================


def test_pre_without_language() -> None:
    """A code block covers its text with a plain pre entity."""
    assert flatten(root(Node(N.PRE, text='x = 1'))) == (
        'x = 1',
        [{'type': 'pre', 'offset': 0, 'length': 5}],
    )


def test_pre_with_language_prefixes_text() -> None:
    """A language is emitted as the first line and carried on the entity."""
    tree = root(Node(N.PRE, text='print(1)', language='python'))
    assert flatten(tree) == (
        'python\nprint(1)',
        [{'type': 'pre', 'offset': 0, 'length': 15, 'language': 'python'}],
    )


def test_link_with_label() -> None:
    """A label that differs from the url makes a text_link."""
    tree = root(Node(N.LINK, text='site', url='https://example.com'))
    assert flatten(tree) == (
        'site',
        [{'type': 'text_link', 'offset': 0, 'length': 4, 'url': 'https://example.com'}],
    )


def test_link_label_equal_to_url() -> None:
    """A label identical to the url makes a bare url entity without url field."""
    tree = root(Node(N.LINK, text='https://x.com', url='https://x.com'))
    assert flatten(tree) == ('https://x.com', [{'type': 'url', 'offset': 0, 'length': 13}])


def test_link_with_empty_url() -> None:
    """An empty target also yields a bare url entity."""
    tree = root(Node(N.LINK, text='label', url=''))
    assert flatten(tree) == ('label', [{'type': 'url', 'offset': 0, 'length': 5}])


def test_custom_emoji() -> None:
    """Custom emoji carry their document id."""
    tree = root(
        text('hi '),
        Node(N.CUSTOM_EMOJI, text='\N{GRINNING FACE}', document_id='123'),
    )
    assert flatten(tree) == (
        'hi \N{GRINNING FACE}',
        [{'type': 'custom_emoji', 'offset': 3, 'length': 2, 'custom_emoji_id': '123'}],
    )


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
