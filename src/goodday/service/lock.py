# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Callable, Iterable, Optional

import pendulum

from goodday.errors import ValidationError
from goodday.model.day_verdict import DayVerdict
from goodday.model.entity_type import EntityType
from goodday.model.reflection_note import ReflectionNote
from goodday.repository.persistence import Persistence
from goodday.template.reflection_note import get_reflection_note_template
from goodday.time import DayLike, day_key, day_range, now_utc

logger = logging.getLogger(__name__)

# A reflection note stays editable on its own day and the day after
NOTE_EDIT_WINDOW_DAYS = 2
MIN_SCORE = 1
MAX_SCORE = 10


class LockManager:
    """
    Freezes historical good-day verdicts and reflection notes.

    A day moves from live to locked once, after local midnight at the end of
    it. Locked verdicts are returned as stored; every other day is evaluated
    live through the evaluate callable.
    """

    def __init__(
        self,
        evaluate: Callable[[pendulum.Date], bool],
        persistence: Optional[Persistence] = None,
        verdicts: Iterable[DayVerdict] = (),
        notes: Iterable[ReflectionNote] = (),
    ) -> None:
        self._evaluate = evaluate
        self._persistence = persistence
        self._verdicts: dict[pendulum.Date, DayVerdict] = {
            day_key(verdict["day"]): deepcopy(verdict) for verdict in verdicts
        }
        self._notes: dict[pendulum.Date, ReflectionNote] = {
            day_key(note["day"]): deepcopy(note) for note in notes
        }

    # ─────────────────────────────────────────────────────────────
    # Day verdicts
    # ─────────────────────────────────────────────────────────────

    def day_verdict(self, day: DayLike) -> Optional[DayVerdict]:
        verdict = self._verdicts.get(day_key(day))
        return deepcopy(verdict) if verdict is not None else None

    def is_locked(self, day: DayLike) -> bool:
        verdict = self._verdicts.get(day_key(day))
        return verdict is not None and verdict["locked_at"] is not None

    def is_good_day(self, day: DayLike) -> bool:
        day = day_key(day)
        verdict = self._verdicts.get(day)
        if verdict is not None and verdict["locked_at"] is not None:
            return verdict["is_good_day"]
        return self._evaluate(day)

    def lock_day(self, day: DayLike, today: DayLike) -> DayVerdict:
        """
        Snapshot the live verdict of a finished day.

        Locking an already locked day returns the stored verdict unchanged.
        """
        day = day_key(day)
        today = day_key(today)

        existing = self._verdicts.get(day)
        if existing is not None and existing["locked_at"] is not None:
            return deepcopy(existing)

        if day >= today:
            raise ValidationError(f"Day {day} is not over yet and cannot be locked")

        verdict: DayVerdict = {
            "entity_type": EntityType.DAY_VERDICT,
            "day": day,
            "is_good_day": self._evaluate(day),
            "locked_at": today,
        }

        # Persist before caching so a failed write is retried by the next pass
        if self._persistence is not None:
            self._persistence.save_day_verdict(deepcopy(verdict))
        self._verdicts[day] = verdict

        logger.info(
            "Locked %s as %s", day, "good" if verdict["is_good_day"] else "not good"
        )
        return deepcopy(verdict)

    def lock_elapsed_days(
        self,
        today: DayLike,
        first_day: Optional[pendulum.Date],
        max_lookback_days: int,
    ) -> list[DayVerdict]:
        """Lock every finished, unlocked day from first_day up to yesterday."""
        today = day_key(today)
        if first_day is None:
            return []

        start = max(first_day, today.subtract(days=max_lookback_days))
        newly_locked = []
        for day in day_range(start, today.subtract(days=1)):
            if not self.is_locked(day):
                newly_locked.append(self.lock_day(day, today))
        return newly_locked

    # ─────────────────────────────────────────────────────────────
    # Reflection notes
    # ─────────────────────────────────────────────────────────────

    def reflection_note(
        self, day: DayLike, today: Optional[DayLike] = None
    ) -> Optional[ReflectionNote]:
        """
        The note for a day.

        With today given, a note whose edit window has closed reads as locked
        even before lock_expired_notes has stored that.
        """
        note = self._notes.get(day_key(day))
        if note is None:
            return None
        return self._note_as_of(note, today)

    def _note_as_of(
        self, note: ReflectionNote, today: Optional[DayLike]
    ) -> ReflectionNote:
        note = deepcopy(note)
        if today is not None and not self.is_note_window_open(note["day"], today):
            note["locked"] = True
        return note

    def recent_reflection_notes(
        self, days: int, today: DayLike
    ) -> list[ReflectionNote]:
        """Notes from the last `days` days including today, newest first."""
        if days < 1:
            raise ValidationError("days must be at least 1")
        today = day_key(today)
        start = today.subtract(days=days - 1)
        return [
            self._note_as_of(self._notes[day], today)
            for day in sorted(self._notes, reverse=True)
            if start <= day <= today
        ]

    def is_note_window_open(self, day: DayLike, today: DayLike) -> bool:
        return day_key(today) < day_key(day).add(days=NOTE_EDIT_WINDOW_DAYS)

    def save_reflection_note(
        self, day: DayLike, text: str, score: int, today: DayLike
    ) -> ReflectionNote:
        """Create or edit the note for a day while its edit window is open."""
        day = day_key(day)
        today = day_key(today)

        if not (MIN_SCORE <= score <= MAX_SCORE):
            raise ValidationError(
                f"Score must be between {MIN_SCORE} and {MAX_SCORE} (inclusive)"
            )
        if day > today:
            raise ValidationError(f"Cannot write a reflection for future day {day}")

        existing = self._notes.get(day)
        if existing is not None and existing["locked"]:
            raise ValidationError(f"Reflection note for {day} is locked")
        if not self.is_note_window_open(day, today):
            raise ValidationError(f"Reflection note for {day} can no longer be edited")

        note = (
            deepcopy(existing)
            if existing is not None
            else get_reflection_note_template(day)
        )
        note["text"] = text
        note["score"] = score
        note["updated"] = now_utc()

        if self._persistence is not None:
            self._persistence.save_reflection_note(deepcopy(note))
        self._notes[day] = note

        return deepcopy(note)

    def lock_expired_notes(self, today: DayLike) -> list[ReflectionNote]:
        today = day_key(today)
        newly_locked = []
        for day, note in sorted(self._notes.items()):
            if note["locked"] or self.is_note_window_open(day, today):
                continue
            locked_note = deepcopy(note)
            locked_note["locked"] = True
            if self._persistence is not None:
                self._persistence.save_reflection_note(deepcopy(locked_note))
            self._notes[day] = locked_note
            newly_locked.append(deepcopy(locked_note))
            logger.info("Locked reflection note for %s", day)
        return newly_locked
