"""Timeline and MIDI export utilities.

This module turns a normalized event sequence into absolute start times and
into a Standard MIDI File. Playback and rendering live outside this package;
these helpers give such consumers the two shapes they usually need.
"""

import io
import logging

import mido
from mido import Message, MetaMessage, MidiFile, MidiTrack
from pydantic import BaseModel, Field

from text_to_tone.models import EventType, MusicEvent

logger = logging.getLogger(__name__)

DEFAULT_VELOCITY = 64


class TimedEvent(BaseModel):
    """A music event placed at an absolute time."""

    start_seconds: float = Field(..., ge=0, description="Offset from the start")
    event: MusicEvent = Field(..., description="The event being scheduled")

    class Config:
        frozen = True

    @property
    def end_seconds(self) -> float:
        return self.start_seconds + self.event.duration_seconds


def build_timeline(events: list[MusicEvent]) -> list[TimedEvent]:
    """Assign each event an absolute start time.

    Events are laid end to end in order, so each one starts when the previous
    one finishes. Rests keep their slot in the timeline.

    Args:
        events: Normalized events in playback order.

    Returns:
        List of TimedEvent objects in the same order.
    """
    timeline: list[TimedEvent] = []
    cursor = 0.0
    for event in events:
        timeline.append(TimedEvent(start_seconds=cursor, event=event))
        cursor += event.duration_seconds
    return timeline


def write_midi_file(
    events: list[MusicEvent], tempo_bpm: int = 120, ticks_per_beat: int = 480
) -> bytes:
    """Generate a MIDI file from a list of music events.

    Creates a standard MIDI file with a single track. Every pitch of a note
    or chord gets a note_on/note_off pair spanning the event; rests only
    advance time.

    Args:
        events: Normalized events in playback order.
        tempo_bpm: Tempo in beats per minute (default 120).
        ticks_per_beat: MIDI ticks per quarter note (default 480).

    Returns:
        MIDI file data as bytes, suitable for writing to a .mid file
        or loading in a MIDI player.
    """
    # Create MIDI file with single track
    midi_file = MidiFile(ticks_per_beat=ticks_per_beat)
    track = MidiTrack()
    midi_file.tracks.append(track)

    tempo = mido.bpm2tempo(tempo_bpm)
    track.append(MetaMessage("set_tempo", tempo=tempo, time=0))

    # Create timeline of all note on/off events
    timeline: list[tuple[int, int, str, int]] = []
    for timed in build_timeline(events):
        if timed.event.type is EventType.REST:
            continue
        on_tick = round(mido.second2tick(timed.start_seconds, ticks_per_beat, tempo))
        off_tick = round(mido.second2tick(timed.end_seconds, ticks_per_beat, tempo))
        off_tick = max(off_tick, on_tick + 1)
        for note in timed.event.midi_notes:
            timeline.append((on_tick, 1, "note_on", note))
            timeline.append((off_tick, 0, "note_off", note))

    # Offs sort before ons at the same tick so repeated notes retrigger
    timeline.sort(key=lambda x: (x[0], x[1]))

    # Convert to MIDI messages with delta times
    previous_tick = 0
    for tick, _, message_type, note in timeline:
        track.append(
            Message(
                message_type,
                note=note,
                velocity=DEFAULT_VELOCITY,
                time=tick - previous_tick,
            )
        )
        previous_tick = tick

    logger.debug(f"Wrote {len(timeline) // 2} notes to MIDI track")

    # Serialize to bytes
    buffer = io.BytesIO()
    midi_file.save(file=buffer)
    buffer.seek(0)
    return buffer.getvalue()
