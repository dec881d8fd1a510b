"""Group a flat, already-sorted comment list into a reply forest."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar


class Threadable(Protocol):
    """Anything with an id and an optional parent id."""

    id: int
    parent_id: int | None


T = TypeVar("T", bound=Threadable)


@dataclass
class CommentNode(Generic[T]):
    """A comment together with its depth and ordered direct replies."""

    comment: T
    depth: int = 0
    replies: list[CommentNode[T]] = field(default_factory=list)


def thread_comments(comments: Sequence[T]) -> list[CommentNode[T]]:
    """Build a forest of comment nodes from ``comments``.

    Replies keep the relative order of the input sequence. Comments whose
    parent is missing from the input are treated as top-level, and a comment
    caught in a parent cycle starts a new root where the cycle is first seen
    in the input, so every input comment appears exactly once.
    """
    ids = {comment.id for comment in comments}
    children: dict[int, list[T]] = defaultdict(list)
    roots: list[T] = []
    for comment in comments:
        if comment.parent_id is None or comment.parent_id not in ids:
            roots.append(comment)
        else:
            children[comment.parent_id].append(comment)

    forest: list[CommentNode[T]] = []
    visited: set[int] = set()

    def _attach(root: T) -> None:
        root_node = CommentNode(comment=root)
        visited.add(root.id)
        forest.append(root_node)
        stack = [root_node]
        while stack:
            node = stack.pop()
            for child in children.get(node.comment.id, []):
                if child.id in visited:
                    continue
                visited.add(child.id)
                child_node = CommentNode(comment=child, depth=node.depth + 1)
                node.replies.append(child_node)
                stack.append(child_node)

    for root in roots:
        _attach(root)

    for comment in comments:
        if comment.id not in visited:
            _attach(comment)

    return forest


def flatten(forest: Sequence[CommentNode[T]]) -> list[CommentNode[T]]:
    """Return the nodes of ``forest`` in pre-order."""
    ordered: list[CommentNode[T]] = []
    stack = list(reversed(forest))
    while stack:
        node = stack.pop()
        ordered.append(node)
        stack.extend(reversed(node.replies))
    return ordered
