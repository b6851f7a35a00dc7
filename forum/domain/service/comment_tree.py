"""Comment tree builder.

Turns the flat list of comments stored for a post into a forest of
``CommentNode`` trees. The build is pure and deterministic: any
permutation of the same input produces the same forest.

Placement rules:
- A comment whose parent is known becomes that parent's child.
- A comment without a parent, with an unknown parent (orphan), or whose
  placement would close a cycle becomes a root. Nothing is ever dropped.
- Siblings are ordered by (created_at, id); descending when asked for
  newest first.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Optional

from forum.domain.model.comment import Comment
from forum.domain.value import CommentId, CommentOrder

from .base import Service


@dataclass
class CommentNode:
    """A comment and its replies.

    ``parent`` is a back-reference for traversal only; the forest's root
    list owns every node.
    """

    comment: Comment
    children: list["CommentNode"] = field(default_factory=list)
    parent: Optional["CommentNode"] = field(default=None, repr=False, compare=False)

    @property
    def id(self) -> CommentId:
        return self.comment.id

    @property
    def depth(self) -> int:
        """Number of ancestors (0 for a root)."""
        depth = 0
        seen = {id(self)}
        node = self.parent
        while node is not None and id(node) not in seen:
            seen.add(id(node))
            depth += 1
            node = node.parent
        return depth


def _sort_key(comment: Comment) -> tuple:
    # The JSON dump only matters for exact (created_at, id) duplicates
    return (comment.created_at, str(comment.id), comment.model_dump_json())


class CommentTreeBuilder(Service):
    """Builds comment forests. Stateless; safe to share."""

    def build(
        self,
        comments: Iterable[Comment],
        order: CommentOrder = CommentOrder.OLDEST_FIRST,
    ) -> list[CommentNode]:
        """Assemble a forest from a flat collection of comments.

        Never raises on malformed input: duplicate IDs keep every record
        (the earliest one receives the replies), unknown parents and
        cycles produce extra roots.

        Args:
            comments: Comments in any order
            order: Sibling order at every level, roots included

        Returns:
            Root nodes in display order
        """
        canonical = sorted(comments, key=_sort_key)

        # Pass 1: one fresh node per record, lookup by ID
        nodes = [CommentNode(comment=comment) for comment in canonical]
        lookup: dict[CommentId, CommentNode] = {}
        for node in nodes:
            lookup.setdefault(node.comment.id, node)

        # Pass 2: attach to parent when it is known and not a descendant
        roots: list[CommentNode] = []
        for node in nodes:
            parent_id = node.comment.parent_id
            parent = lookup.get(parent_id) if parent_id is not None else None
            if parent is None or self._is_ancestor_or_self(node, parent):
                roots.append(node)
                continue
            node.parent = parent
            parent.children.append(node)

        self._order(roots, order)
        return roots

    @staticmethod
    def _is_ancestor_or_self(node: CommentNode, candidate: CommentNode) -> bool:
        """Whether ``node`` is ``candidate`` or one of its ancestors."""
        seen: set[int] = set()
        current: CommentNode | None = candidate
        while current is not None and id(current) not in seen:
            if current is node:
                return True
            seen.add(id(current))
            current = current.parent
        return False

    @staticmethod
    def _order(roots: list[CommentNode], order: CommentOrder) -> None:
        reverse = order == CommentOrder.NEWEST_FIRST

        def key(node: CommentNode) -> tuple:
            return _sort_key(node.comment)

        roots.sort(key=key, reverse=reverse)
        stack = list(roots)
        while stack:
            node = stack.pop()
            node.children.sort(key=key, reverse=reverse)
            stack.extend(node.children)


def walk(
    forest: list[CommentNode], max_depth: int | None = None
) -> Iterator[tuple[CommentNode, int]]:
    """Yield ``(node, depth)`` in display order (pre-order).

    Args:
        forest: Root nodes
        max_depth: Deepest level to yield (0 yields roots only); None for all
    """
    stack: list[tuple[CommentNode, int]] = [(root, 0) for root in reversed(forest)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        if max_depth is None or depth < max_depth:
            stack.extend((child, depth + 1) for child in reversed(node.children))


def count_nodes(forest: list[CommentNode]) -> int:
    """Total number of nodes in a forest."""
    return sum(1 for _ in walk(forest))
