from __future__ import annotations

from itertools import count

from esper import World

from seedmerge.components.scheduled_event import ScheduledEvent
from seedmerge.events.bus import EVENT_SCHEDULE_REQUEST, EVENT_TICK, EventBus


class SchedulerSystem:
    """Fires deferred bus events once enough tick time has elapsed.

    Each request becomes an entity carrying a ScheduledEvent. Events that fall
    due on the same tick fire in due order, then in the order they were
    scheduled. An event scheduled while another fires waits at least for the
    next tick.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self._sequence = count()
        self.event_bus.subscribe(EVENT_SCHEDULE_REQUEST, self.on_schedule_request)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_schedule_request(self, sender, **kwargs):
        event = kwargs.get('event')
        if not event:
            return
        delay = max(0.0, float(kwargs.get('delay', 0.0)))
        payload = dict(kwargs.get('payload') or {})
        self.schedule(event, delay, **payload)

    def schedule(self, event: str, delay: float, **payload) -> int:
        return self.world.create_entity(
            ScheduledEvent(event=event, remaining=delay, sequence=next(self._sequence), payload=payload)
        )

    def pending(self) -> list[ScheduledEvent]:
        entries = [scheduled for _, scheduled in self.world.get_component(ScheduledEvent)]
        return sorted(entries, key=lambda scheduled: (scheduled.remaining, scheduled.sequence))

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        due: list[tuple[int, ScheduledEvent]] = []
        for ent, scheduled in list(self.world.get_component(ScheduledEvent)):
            scheduled.remaining -= dt
            if scheduled.remaining <= 0.0:
                due.append((ent, scheduled))
        due.sort(key=lambda entry: (entry[1].remaining, entry[1].sequence))
        for ent, scheduled in due:
            self.world.delete_entity(ent, immediate=True)
            self.event_bus.emit(scheduled.event, **scheduled.payload)
