"""Unit tests for Generation."""

from forum.client import Generation


def test_newest_token_is_current():
    generation = Generation()

    first = generation.next()
    second = generation.next()

    assert not generation.is_current(first)
    assert generation.is_current(second)
    assert generation.value == second


def test_closed_generation_has_no_current_token():
    generation = Generation()
    token = generation.next()

    generation.close()

    assert generation.closed
    assert not generation.is_current(token)
    assert not generation.is_current(generation.next())
