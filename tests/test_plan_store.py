"""Tests for the client-side night plan state."""

from unittest.mock import Mock

import pytest

from nightspark_service import PlanStore


@pytest.fixture
def store():
  return PlanStore()


class TestPlanStore:
  def test_add_and_query(self, store, make_event):
    event = make_event("a", price=2500)
    assert store.add_event(event) is True
    assert store.is_in_plan("a")
    assert store.get_events() == [event]

  def test_add_is_idempotent(self, store, make_event):
    listener = Mock()
    store.subscribe(listener)
    store.add_event(make_event("a"))
    assert store.add_event(make_event("a", price=999)) is False
    assert len(store.get_events()) == 1
    assert listener.call_count == 1

  def test_keeps_insertion_order(self, store, make_event):
    for event_id, start in (("late", "23:00"), ("early", "18:00")):
      store.add_event(make_event(event_id, start))
    assert [event.id for event in store.get_events()] == ["late", "early"]

  def test_remove(self, store, make_event):
    listener = Mock()
    store.add_event(make_event("a"))
    store.subscribe(listener)
    assert store.remove_event("missing") is False
    listener.assert_not_called()
    assert store.remove_event("a") is True
    assert not store.is_in_plan("a")
    listener.assert_called_once_with()

  def test_get_events_returns_a_copy(self, store, make_event):
    store.add_event(make_event("a"))
    store.get_events().clear()
    assert store.is_in_plan("a")

  def test_total_price(self, store, make_event):
    store.add_event(make_event("a", price=2500))
    store.add_event(make_event("b", price=0))
    store.add_event(make_event("c", price=1500))
    assert store.total_price() == 4000

  def test_clear_resets_group_context(self, store, make_event):
    store.add_event(make_event("a"))
    store.set_group_context("group-7")
    assert store.group_context == "group-7"
    store.clear_plan()
    assert store.get_events() == []
    assert store.group_context is None

  def test_unsubscribe(self, store, make_event):
    listener = Mock()
    unsubscribe = store.subscribe(listener)
    store.add_event(make_event("a"))
    unsubscribe()
    unsubscribe()
    store.add_event(make_event("b"))
    assert listener.call_count == 1
