"""Unit tests for CommentTreeBuilder."""

import random
from uuid import UUID, uuid4

import pytest

from forum.domain.service import CommentNode, CommentTreeBuilder, count_nodes, walk
from forum.domain.value import CommentId, CommentOrder, PostId
from tests.conftest import at, make_comment

POST_ID = PostId(uuid4())


def cid(n: int) -> CommentId:
    """Deterministic comment ID for readable fixtures."""
    return CommentId(UUID(int=n))


def comment(n: int, parent: int | None = None, t: int | None = None):
    return make_comment(
        POST_ID,
        comment_id=cid(n),
        parent_id=cid(parent) if parent is not None else None,
        created_at=at(t if t is not None else n),
        content=f"comment {n}",
    )


def shape(forest: list[CommentNode]) -> list:
    """Structural view of a forest: [(id, [children...]), ...]."""
    return [(node.id, shape(node.children)) for node in forest]


@pytest.fixture
def builder() -> CommentTreeBuilder:
    return CommentTreeBuilder()


class TestBuild:
    """Tests for forest assembly."""

    def test_reply_and_orphan_scenario(self, builder):
        """Replies nest under parents; unknown parents become roots."""
        forest = builder.build(
            [comment(1, t=1), comment(2, parent=1, t=2), comment(3, parent=99, t=3)]
        )

        assert shape(forest) == [
            (cid(1), [(cid(2), [])]),
            (cid(3), []),
        ]
        assert forest[0].children[0].parent is forest[0]
        assert forest[1].parent is None

    def test_empty_input(self, builder):
        assert builder.build([]) == []

    def test_order_independent(self, builder):
        """Every permutation of the input builds the same forest."""
        comments = [
            comment(1),
            comment(2, parent=1),
            comment(3, parent=1),
            comment(4, parent=2),
            comment(5),
            comment(6, parent=42),
            comment(7, parent=5),
        ]
        expected = shape(builder.build(comments))

        rng = random.Random(7)
        for _ in range(25):
            shuffled = comments[:]
            rng.shuffle(shuffled)
            assert shape(builder.build(shuffled)) == expected

    def test_child_listed_before_parent(self, builder):
        """Input order does not matter for attachment."""
        forest = builder.build([comment(2, parent=1), comment(1)])

        assert shape(forest) == [(cid(1), [(cid(2), [])])]

    def test_siblings_oldest_first_by_default(self, builder):
        forest = builder.build(
            [comment(3, parent=1, t=30), comment(1, t=1), comment(2, parent=1, t=20)]
        )

        assert [child.id for child in forest[0].children] == [cid(2), cid(3)]

    def test_newest_first_reverses_every_level(self, builder):
        forest = builder.build(
            [
                comment(1, t=1),
                comment(2, t=2),
                comment(3, parent=1, t=3),
                comment(4, parent=1, t=4),
            ],
            order=CommentOrder.NEWEST_FIRST,
        )

        assert shape(forest) == [
            (cid(2), []),
            (cid(1), [(cid(4), []), (cid(3), [])]),
        ]

    def test_equal_timestamps_break_ties_by_id(self, builder):
        forest = builder.build([comment(9, t=5), comment(4, t=5)])

        assert [node.id for node in forest] == [cid(4), cid(9)]


class TestMalformedInput:
    """Tests for cycles and duplicates."""

    def test_self_parent_becomes_root(self, builder):
        forest = builder.build([comment(1, parent=1)])

        assert shape(forest) == [(cid(1), [])]

    def test_two_cycle_is_broken_not_dropped(self, builder):
        """A <-> B keeps both comments; one becomes a root."""
        forest = builder.build([comment(1, parent=2), comment(2, parent=1)])

        assert count_nodes(forest) == 2
        assert len(forest) == 1
        assert forest[0].children[0].parent is forest[0]

    def test_longer_cycle_keeps_every_comment(self, builder):
        comments = [
            comment(1, parent=3),
            comment(2, parent=1),
            comment(3, parent=2),
            comment(4, parent=2),
        ]

        forest = builder.build(comments)

        assert count_nodes(forest) == 4
        assert all(node.depth == depth for node, depth in walk(forest))

    def test_cycle_result_is_order_independent(self, builder):
        comments = [comment(1, parent=3), comment(2, parent=1), comment(3, parent=2)]
        expected = shape(builder.build(comments))

        assert shape(builder.build(list(reversed(comments)))) == expected

    def test_duplicate_ids_keep_every_record(self, builder):
        """The earliest duplicate receives replies; later copies are kept."""
        first = comment(1, t=1)
        duplicate = make_comment(
            POST_ID, comment_id=cid(1), created_at=at(10), content="edited copy"
        )
        reply = comment(2, parent=1, t=5)

        forest = builder.build([duplicate, reply, first])

        assert count_nodes(forest) == 3
        assert forest[0].comment == first
        assert [child.id for child in forest[0].children] == [cid(2)]
        assert forest[1].comment == duplicate


class TestTraversal:
    """Tests for walk, count_nodes and depth."""

    def test_walk_is_pre_order_with_depth(self, builder):
        forest = builder.build(
            [comment(1), comment(2, parent=1), comment(3, parent=2), comment(4)]
        )

        assert [(node.id, depth) for node, depth in walk(forest)] == [
            (cid(1), 0),
            (cid(2), 1),
            (cid(3), 2),
            (cid(4), 0),
        ]

    def test_walk_respects_max_depth(self, builder):
        forest = builder.build([comment(1), comment(2, parent=1), comment(3, parent=2)])

        assert [node.id for node, _ in walk(forest, max_depth=1)] == [cid(1), cid(2)]
        assert [node.id for node, _ in walk(forest, max_depth=0)] == [cid(1)]

    def test_depth_matches_walk(self, builder):
        forest = builder.build([comment(1), comment(2, parent=1), comment(3, parent=2)])

        for node, depth in walk(forest):
            assert node.depth == depth

    def test_traversal_does_not_mutate(self, builder):
        forest = builder.build([comment(1), comment(2, parent=1)])
        before = shape(forest)

        list(walk(forest))
        count_nodes(forest)

        assert shape(forest) == before
