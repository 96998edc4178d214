from typing import Callable, List, Optional

from nightspark_service.models import Event

Listener = Callable[[], None]


class PlanStore:
  """A user's night plan: ordered, de-duplicated by event id, with change listeners."""

  def __init__(self) -> None:
    self._events: List[Event] = []
    self._listeners: List[Listener] = []
    self._group_context: Optional[str] = None

  def add_event(self, event: Event) -> bool:
    if self.is_in_plan(event.id):
      return False
    self._events.append(event)
    self._notify()
    return True

  def remove_event(self, event_id: str) -> bool:
    remaining = [event for event in self._events if event.id != event_id]
    if len(remaining) == len(self._events):
      return False
    self._events = remaining
    self._notify()
    return True

  def get_events(self) -> List[Event]:
    return list(self._events)

  def is_in_plan(self, event_id: str) -> bool:
    return any(event.id == event_id for event in self._events)

  def total_price(self) -> int:
    return sum(event.price for event in self._events)

  def clear_plan(self) -> None:
    self._events = []
    self._group_context = None
    self._notify()

  @property
  def group_context(self) -> Optional[str]:
    return self._group_context

  def set_group_context(self, group_id: Optional[str]) -> None:
    self._group_context = group_id
    self._notify()

  def subscribe(self, listener: Listener) -> Callable[[], None]:
    """Register ``listener``; the returned callable unregisters it."""
    self._listeners.append(listener)

    def unsubscribe() -> None:
      if listener in self._listeners:
        self._listeners.remove(listener)

    return unsubscribe

  def _notify(self) -> None:
    for listener in list(self._listeners):
      listener()
