# tests/test_nav_path.py
"""
Tests for nav.path.Path traversal modes.

Covers:
- SINGLE: each node once, then done
- REVERSE: ping-pong sequence, shared endpoints repeated
- LOOP: wraps to the first node
- current_checkpoint is a pure peek
"""

from __future__ import annotations

from typing import List

from nav.node import NavNode, NodeKind, Vec3
from nav.path import Path, PathType


def make_nodes(n: int) -> List[NavNode]:
    return [NavNode(Vec3(float(i * 150), 0.0, 0.0), NodeKind.WAYPOINT) for i in range(n)]


def take(path: Path, count: int) -> List[NavNode]:
    return [path.next_checkpoint() for _ in range(count)]


def test_single_path_yields_each_node_once_then_done():
    nodes = make_nodes(3)
    path = Path(nodes, PathType.SINGLE)

    seen = []
    while not path.is_done():
        seen.append(path.next_checkpoint())

    assert seen == nodes
    assert path.done


def test_single_node_path_is_done_after_one_read():
    node = make_nodes(1)[0]
    path = Path([node])

    assert not path.is_done()
    assert path.next_checkpoint() is node
    assert path.is_done()


def test_empty_path():
    path = Path([], PathType.LOOP)

    assert path.is_done()
    assert path.next_checkpoint() is None
    assert path.current_checkpoint() is None
    assert len(path) == 0


def test_reverse_path_ping_pongs():
    a, b, c = make_nodes(3)
    path = Path([a, b, c], PathType.REVERSE)

    assert take(path, 9) == [a, b, c, b, a, b, c, b, a]
    assert not path.is_done()


def test_reverse_round_trip_is_two_n_minus_one_checkpoints():
    nodes = make_nodes(4)
    path = Path(nodes, PathType.REVERSE)

    out = take(path, 2 * len(nodes) - 1)

    # there and back, the far endpoint read once
    assert out == nodes + list(reversed(nodes))[1:]


def test_reverse_keeps_stored_order():
    nodes = make_nodes(3)
    path = Path(nodes, PathType.REVERSE)

    take(path, 3)

    assert list(path.nodes) == nodes
    assert path.ordered_nodes() == list(reversed(nodes))


def test_loop_path_wraps_to_start():
    a, b, c = make_nodes(3)
    path = Path([a, b, c], PathType.LOOP)

    assert take(path, 7) == [a, b, c, a, b, c, a]
    assert not path.is_done()


def test_cursor_stays_in_bounds():
    for mode in PathType:
        path = Path(make_nodes(3), mode)
        for _ in range(10):
            path.next_checkpoint()
            assert 0 <= path.cursor <= 2


def test_current_checkpoint_is_a_pure_peek():
    for mode in PathType:
        path = Path(make_nodes(3), mode)
        for _ in range(7):
            peeked = path.current_checkpoint()
            cursor = path.cursor
            assert path.current_checkpoint() is peeked
            assert path.cursor == cursor
            assert path.next_checkpoint() is peeked


def test_repr_mentions_name_and_mode():
    path = Path(make_nodes(2), PathType.LOOP, name="patrol")

    text = repr(path)
    assert "patrol" in text
    assert "LOOP" in text
