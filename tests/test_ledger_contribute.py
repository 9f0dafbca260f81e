from __future__ import annotations

import uuid

import pytest

from app.pool.errors import AlreadyContributed, AmountTooLow, InvalidQuota, NotOperator
from app.pool.ledger import Ledger


def test_fresh_ledger_is_empty(ledger):
    assert ledger.get_total_supply() == 0
    assert ledger.total_contributors() == 0
    assert ledger.get_completed_payouts() == 0
    assert ledger.get_quota() == 0
    assert ledger.get_payout_history() == []
    assert ledger.get_next_requester() is None
    assert ledger.get_pending_request() is None
    assert ledger.get_cycle() == 1


def test_set_quota_by_operator(ledger, operator):
    ledger.set_quota(operator, 10)
    assert ledger.get_quota() == 10


def test_set_quota_non_operator_rejected(ledger, alice):
    with pytest.raises(NotOperator):
        ledger.set_quota(alice, 10)
    assert ledger.get_quota() == 0


def test_set_quota_ignores_current_queue_length(ledger, operator, alice, bob):
    ledger.contribute(alice, 100)
    ledger.contribute(bob, 100)
    ledger.set_quota(operator, 1)
    assert ledger.get_quota() == 1


def test_negative_quota_rejected(ledger, operator):
    with pytest.raises(InvalidQuota):
        ledger.set_quota(operator, -1)
    assert ledger.get_quota() == 0


def test_contribute_updates_pool_and_queue(ledger, alice, events):
    ledger.contribute(alice, 100)

    assert ledger.get_total_supply() == 100
    assert ledger.total_contributors() == 1
    assert ledger.balance_of(alice) == 100
    assert ledger.get_contributors() == [(alice, 100)]
    assert ledger.get_next_requester() == alice

    assert len(events.events) == 1
    ev = events.events[0]
    assert ev.kind == "FUNDS_RECEIVED"
    assert ev.sender is None
    assert ev.recipient == alice
    assert ev.value == 100


def test_funds_received_event_carries_new_pool_total(ledger, alice, bob, events):
    ledger.contribute(alice, 100)
    ledger.contribute(bob, 75)
    assert [e.value for e in events.events] == [100, 175]


def test_repeat_contribution_rejected_not_topped_up(ledger, alice, events):
    ledger.contribute(alice, 100)

    with pytest.raises(AlreadyContributed):
        ledger.contribute(alice, 200)

    assert ledger.get_total_supply() == 100
    assert ledger.balance_of(alice) == 100
    assert ledger.total_contributors() == 1
    assert len(events.events) == 1


def test_amount_below_minimum_has_no_effect(ledger, alice, events):
    before = ledger.snapshot()
    with pytest.raises(AmountTooLow):
        ledger.contribute(alice, 49)

    assert ledger.snapshot() == before
    assert ledger.balance_of(alice) == 0
    assert events.events == []


def test_amount_equal_to_minimum_accepted(ledger, alice):
    ledger.contribute(alice, 50)
    assert ledger.get_total_supply() == 50


def test_already_contributed_checked_before_amount(ledger, alice):
    ledger.contribute(alice, 100)
    with pytest.raises(AlreadyContributed):
        ledger.contribute(alice, 1)


def test_pool_total_is_sum_of_distinct_contributions(ledger):
    amounts = [50, 120, 75, 300, 51]
    ids = [uuid.uuid4() for _ in amounts]
    for i, a in zip(ids, amounts):
        ledger.contribute(i, a)

    assert ledger.get_total_supply() == sum(amounts)
    assert ledger.total_contributors() == len(ids)
    assert [c for c, _ in ledger.get_contributors()] == ids


def test_contributions_beyond_quota_are_accepted(ledger, operator, alice, bob):
    ledger.set_quota(operator, 1)
    ledger.contribute(alice, 100)
    ledger.contribute(bob, 100)
    assert ledger.total_contributors() == 2


def test_next_requester_is_fifo(ledger, operator, alice, bob):
    ledger.set_quota(operator, 2)
    assert ledger.get_next_requester() is None
    ledger.contribute(alice, 100)
    assert ledger.get_next_requester() == alice
    ledger.contribute(bob, 100)
    assert ledger.get_next_requester() == alice


def test_balance_of_unknown_identity_is_zero(ledger, carol):
    assert ledger.balance_of(carol) == 0


def test_custom_min_contribution(provider, operator, alice):
    led = Ledger(operator=operator, transfer=provider, min_contribution=500)
    assert led.get_min_contribution() == 500
    with pytest.raises(AmountTooLow):
        led.contribute(alice, 499)
