"""Tests for logging context propagation."""

import contextvars

from advocate_matching.logging.context import (
    clear_log_context,
    get_log_context,
    log_context,
    pop_log_context,
    push_log_context,
)


def test_empty_context():
    """Test that context starts empty."""
    assert get_log_context() == {}


def test_push_single_field():
    """Test pushing a single field to context."""
    token = push_log_context(opportunity_id="opp-1")
    assert get_log_context() == {"opportunity_id": "opp-1"}
    pop_log_context(token)
    assert get_log_context() == {}


def test_nested_context():
    """Test nested context pushes and pops."""
    token1 = push_log_context(batch_size=2)
    token2 = push_log_context(opportunity_id="opp-1")
    assert get_log_context() == {"batch_size": 2, "opportunity_id": "opp-1"}

    pop_log_context(token2)
    assert get_log_context() == {"batch_size": 2}

    pop_log_context(token1)
    assert get_log_context() == {}


def test_context_override():
    """Test that pushing the same key overwrites previous value."""
    token1 = push_log_context(opportunity_id="opp-1")
    token2 = push_log_context(opportunity_id="opp-2")
    assert get_log_context() == {"opportunity_id": "opp-2"}

    pop_log_context(token2)
    assert get_log_context() == {"opportunity_id": "opp-1"}

    pop_log_context(token1)


def test_context_manager_nested():
    """Test nested context managers."""
    with log_context(batch_size=3):
        with log_context(opportunity_id="opp-1"):
            assert get_log_context() == {"batch_size": 3, "opportunity_id": "opp-1"}

        assert get_log_context() == {"batch_size": 3}

    assert get_log_context() == {}


def test_context_manager_exception():
    """Test that context is restored even when exception occurs."""
    try:
        with log_context(opportunity_id="opp-1"):
            raise ValueError("Test exception")
    except ValueError:
        pass

    assert get_log_context() == {}


def test_clear_context():
    """Test clearing all context."""
    push_log_context(opportunity_id="opp-1", batch_size=2)
    assert get_log_context() != {}

    clear_log_context()
    assert get_log_context() == {}


def test_context_isolation():
    """Test that get_log_context returns a copy, not the actual dict."""
    token = push_log_context(opportunity_id="opp-1")

    context = get_log_context()
    context["batch_size"] = 99

    assert get_log_context() == {"opportunity_id": "opp-1"}
    pop_log_context(token)


def test_separate_contexts_do_not_leak():
    """Fields pushed inside a copied context are invisible outside it."""

    def worker():
        push_log_context(opportunity_id="opp-worker")
        return get_log_context()

    seen = contextvars.copy_context().run(worker)

    assert seen == {"opportunity_id": "opp-worker"}
    assert get_log_context() == {}
