"""
Track data model.

A track is an ordered list of events. On disk it is an ``MTrk`` chunk;
see ``smfcodec.formats.smf.track_codec`` for the wire layout.
"""

import copy
from dataclasses import dataclass, field
from typing import Iterator, List, Type

from smfcodec.models.events import EndOfTrackEvent, Event


@dataclass
class Track:
    """
    An ordered sequence of MIDI events.

    Attributes:
        events: Events in playback order, each with its own delta time

    Example:
        track = Track()
        track.append(NoteBeginEvent(0, 0, 60, 100))
        track.append(NoteEndEvent(96, 0, 60, 0))
        track.append(EndOfTrackEvent(0))
    """

    events: List[Event] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def append(self, event: Event) -> None:
        if not isinstance(event, Event):
            raise TypeError(f"Track events must be Event instances, got {type(event).__name__}")
        self.events.append(event)

    def extend(self, events) -> None:
        for event in events:
            self.append(event)

    def clone(self) -> "Track":
        """Return a deep copy sharing no events with this track."""
        return copy.deepcopy(self)

    def events_of_type(self, event_type: Type[Event]) -> List[Event]:
        return [event for event in self.events if isinstance(event, event_type)]

    @property
    def duration(self) -> int:
        """Total length in ticks (sum of all delta times)."""
        return sum(event.delta_time for event in self.events)

    def encoded_length(self) -> int:
        """Byte length of the chunk body, after running-status compression."""
        from smfcodec.formats.smf.running_status import measure_events

        return measure_events(self.events)

    @property
    def has_end_of_track(self) -> bool:
        return bool(self.events) and isinstance(self.events[-1], EndOfTrackEvent)

    def __str__(self) -> str:
        return "Track{events={%s}}" % ", ".join(str(event) for event in self.events)
