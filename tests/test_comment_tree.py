# mypy: ignore-errors
"""Tests for threading flat comment lists into reply trees."""

from dataclasses import dataclass

from wrench_forum.services.comment_tree import flatten, thread_comments


@dataclass
class FakeComment:
    id: int
    parent_id: int | None = None


def _ids(nodes):
    return [node.comment.id for node in nodes]


def test_empty_input_gives_empty_forest() -> None:
    """No comments means no roots."""
    assert thread_comments([]) == []


def test_replies_attach_to_parent_with_depth() -> None:
    """Each reply sits under its parent one level deeper."""
    comments = [
        FakeComment(1),
        FakeComment(2, parent_id=1),
        FakeComment(3, parent_id=2),
        FakeComment(4),
    ]
    forest = thread_comments(comments)

    assert _ids(forest) == [1, 4]
    assert [n.depth for n in forest] == [0, 0]
    reply = forest[0].replies[0]
    assert reply.comment.id == 2
    assert reply.depth == 1
    assert reply.replies[0].comment.id == 3
    assert reply.replies[0].depth == 2


def test_reply_order_follows_input_order() -> None:
    """Siblings keep the order of the sorted input."""
    comments = [
        FakeComment(10),
        FakeComment(13, parent_id=10),
        FakeComment(11, parent_id=10),
        FakeComment(12, parent_id=10),
    ]
    forest = thread_comments(comments)
    assert _ids(forest[0].replies) == [13, 11, 12]


def test_preorder_flatten_counts_every_comment() -> None:
    """Flattening the forest visits each input comment exactly once."""
    comments = [FakeComment(1), FakeComment(2, 1), FakeComment(3, 1), FakeComment(4, 3), FakeComment(5)]
    flat = flatten(thread_comments(comments))
    assert [n.comment.id for n in flat] == [1, 2, 3, 4, 5]


def test_orphaned_reply_becomes_root() -> None:
    """A reply whose parent is missing is kept at the top level."""
    comments = [FakeComment(1), FakeComment(2, parent_id=99)]
    forest = thread_comments(comments)
    assert _ids(forest) == [1, 2]
    assert forest[1].depth == 0


def test_parent_cycle_terminates_without_dropping_nodes() -> None:
    """Comments whose parents form a loop are still all returned once."""
    comments = [FakeComment(1, parent_id=3), FakeComment(2, parent_id=1), FakeComment(3, parent_id=2)]
    forest = thread_comments(comments)
    flat = flatten(forest)
    assert sorted(n.comment.id for n in flat) == [1, 2, 3]
    assert _ids(forest) == [1]
    assert [n.depth for n in flat] == [0, 1, 2]


def test_deep_chain_does_not_recurse() -> None:
    """Very deep reply chains thread without hitting the recursion limit."""
    comments = [FakeComment(1)] + [FakeComment(i, parent_id=i - 1) for i in range(2, 5001)]
    flat = flatten(thread_comments(comments))
    assert len(flat) == 5000
    assert flat[-1].depth == 4999
