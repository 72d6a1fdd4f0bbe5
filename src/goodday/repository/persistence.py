# SPDX-License-Identifier: MIT

from abc import ABC, abstractmethod

from goodday.model.completion import CompletionRecord
from goodday.model.day_verdict import DayVerdict
from goodday.model.entity_id import EntityId
from goodday.model.group import Group
from goodday.model.item import Item
from goodday.model.reflection_note import ReflectionNote


class Persistence(ABC):
    """
    Storage collaborator used by the habit tracking core.

    Every call is expected to be consistent on its own; the core never opens
    or commits transactions. Implementations raise PersistenceFailure when a
    call cannot be completed.
    """

    @abstractmethod
    def load_items(self) -> list[Item]: ...

    @abstractmethod
    def load_groups(self) -> list[Group]: ...

    @abstractmethod
    def load_completion_records(self, item_id: EntityId) -> list[CompletionRecord]: ...

    @abstractmethod
    def load_day_verdicts(self) -> list[DayVerdict]: ...

    @abstractmethod
    def load_reflection_notes(self) -> list[ReflectionNote]: ...

    @abstractmethod
    def upsert_completion_record(self, record: CompletionRecord) -> None: ...

    @abstractmethod
    def delete_completion_records(self, item_id: EntityId) -> None: ...

    @abstractmethod
    def save_item(self, item: Item) -> None: ...

    @abstractmethod
    def delete_item(self, item_id: EntityId) -> None: ...

    @abstractmethod
    def save_group(self, group: Group) -> None: ...

    @abstractmethod
    def delete_group(self, group_id: EntityId) -> None: ...

    @abstractmethod
    def save_day_verdict(self, verdict: DayVerdict) -> None: ...

    @abstractmethod
    def save_reflection_note(self, note: ReflectionNote) -> None: ...
