from __future__ import annotations

import pytest

from app.pool.errors import AlreadyContributed


def test_next_cycle_on_fresh_ledger_advances(ledger):
    assert ledger.get_cycle() == 1
    assert ledger.next_cycle() is True
    assert ledger.get_cycle() == 2


def test_all_paid_is_true_for_empty_queue(ledger):
    assert ledger.all_paid() is True


def test_all_paid_false_while_contributors_queued(ledger, alice):
    ledger.contribute(alice, 100)
    assert ledger.all_paid() is False


def test_next_cycle_noop_while_queue_unpaid(ledger, operator, alice):
    ledger.set_quota(operator, 1)
    ledger.contribute(alice, 100)
    before = ledger.snapshot()

    assert ledger.next_cycle() is False
    assert ledger.snapshot() == before


def test_next_cycle_noop_until_last_payout(ledger, operator, alice, bob):
    ledger.set_quota(operator, 2)
    ledger.contribute(alice, 100)
    ledger.contribute(bob, 100)

    ledger.request_payout(alice)
    ledger.approve_payout(operator)
    assert ledger.get_cycle() == 1
    assert ledger.next_cycle() is False

    ledger.request_payout(bob)
    ledger.approve_payout(operator)
    assert ledger.get_cycle() == 2


def test_history_length_must_match_contributor_count(ledger, operator, alice, bob):
    # quota 1 with two contributors: never reaches payment phase, never rolls
    ledger.set_quota(operator, 1)
    ledger.contribute(alice, 100)
    ledger.contribute(bob, 100)
    assert ledger.next_cycle() is False
    assert ledger.get_cycle() == 1


def test_contributors_may_rejoin_after_rollover(ledger, operator, alice):
    ledger.set_quota(operator, 1)
    ledger.contribute(alice, 100)
    ledger.request_payout(alice)
    ledger.approve_payout(operator)
    assert ledger.get_cycle() == 2

    ledger.contribute(alice, 80)
    assert ledger.balance_of(alice) == 80
    assert ledger.total_contributors() == 1
    with pytest.raises(AlreadyContributed):
        ledger.contribute(alice, 80)


def test_rollover_keeps_configuration(ledger, operator, alice):
    ledger.set_quota(operator, 1)
    ledger.contribute(alice, 100)
    ledger.request_payout(alice)
    ledger.approve_payout(operator)

    assert ledger.get_quota() == 1
    assert ledger.get_min_contribution() == 50
    assert ledger.operator == operator
