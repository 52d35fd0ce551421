"""
Tests for the issue status state machine
"""

import pytest

from app.buisness.core.errors import ValidationError
from app.buisness.issues.state_machine import IssueStateMachine


def test_forward_path():
    path = ['OPEN', 'ASSIGNED', 'IN_PROGRESS', 'RESOLVED', 'CLOSED']
    for current, following in zip(path, path[1:]):
        assert following in IssueStateMachine.get_allowed_transitions(current), f"{current} -> {following} should be allowed"


def test_cancelled_reachable_from_every_state_and_terminal():
    for status in IssueStateMachine.STATUSES:
        if status != 'CANCELLED':
            assert 'CANCELLED' in IssueStateMachine.get_allowed_transitions(status)
    assert IssueStateMachine.get_allowed_transitions('CANCELLED') == set()


def test_no_backwards_or_skipping_transitions():
    assert IssueStateMachine.get_allowed_transitions('OPEN') == {'ASSIGNED', 'CANCELLED'}
    assert 'OPEN' not in IssueStateMachine.get_allowed_transitions('RESOLVED')
    assert IssueStateMachine.get_allowed_transitions('CLOSED') == {'CANCELLED'}


def test_allowed_transitions_are_copies():
    allowed = IssueStateMachine.get_allowed_transitions('OPEN')
    allowed.add('CLOSED')
    assert 'CLOSED' not in IssueStateMachine.get_allowed_transitions('OPEN')


def test_unknown_status_has_no_transitions():
    assert IssueStateMachine.get_allowed_transitions('DONE') == set()


def test_validate_status_rejects_unknown_values():
    assert IssueStateMachine.validate_status('IN_PROGRESS') == 'IN_PROGRESS'
    with pytest.raises(ValidationError, match="must be one of"):
        IssueStateMachine.validate_status('DONE')
    with pytest.raises(ValidationError, match="cannot be empty"):
        IssueStateMachine.validate_status('   ')
    # Closed set is case-sensitive
    with pytest.raises(ValidationError):
        IssueStateMachine.validate_status('open')
