# SPDX-License-Identifier: MIT

from pathlib import Path

from goodday import configuration
from goodday.model.completion import CompletionRecord
from goodday.model.day_verdict import DayVerdict
from goodday.model.entity_id import EntityId
from goodday.model.group import Group
from goodday.model.item import Item
from goodday.model.reflection_note import ReflectionNote
from goodday.repository.completion import CompletionRepository
from goodday.repository.day_verdict import DayVerdictRepository
from goodday.repository.group import GroupRepository
from goodday.repository.item import ItemRepository
from goodday.repository.persistence import Persistence
from goodday.repository.reflection_note import ReflectionNoteRepository


class YamlStorage(Persistence):
    """File-backed persistence, one YAML file per entity under data_path."""

    def __init__(self, data_path: Path) -> None:
        self.data_path = data_path
        self.items = ItemRepository(data_path / configuration.ITEMS_DIR_NAME)
        self.groups = GroupRepository(data_path / configuration.GROUPS_DIR_NAME)
        self.completions = CompletionRepository(
            data_path / configuration.COMPLETIONS_DIR_NAME
        )
        self.verdicts = DayVerdictRepository(
            data_path / configuration.VERDICTS_DIR_NAME
        )
        self.reflections = ReflectionNoteRepository(
            data_path / configuration.REFLECTIONS_DIR_NAME
        )

    def ensure_data_dirs(self) -> None:
        for repository in (
            self.items,
            self.groups,
            self.completions,
            self.verdicts,
            self.reflections,
        ):
            repository.directory.mkdir(parents=True, exist_ok=True)

    def load_items(self) -> list[Item]:
        return sorted(self.items.get_all(), key=lambda item: item["sort_order"])

    def load_groups(self) -> list[Group]:
        return sorted(self.groups.get_all(), key=lambda group: group["sort_order"])

    def load_completion_records(self, item_id: EntityId) -> list[CompletionRecord]:
        return self.completions.get_for_item(item_id)

    def load_day_verdicts(self) -> list[DayVerdict]:
        return self.verdicts.get_all()

    def load_reflection_notes(self) -> list[ReflectionNote]:
        return self.reflections.get_all()

    def upsert_completion_record(self, record: CompletionRecord) -> None:
        self.completions.save(record)
        self.completions.flush()

    def delete_completion_records(self, item_id: EntityId) -> None:
        self.completions.delete_for_item(item_id)
        self.completions.flush()

    def save_item(self, item: Item) -> None:
        self.items.save(item)
        self.items.flush()

    def delete_item(self, item_id: EntityId) -> None:
        self.items.delete(item_id)
        self.items.flush()

    def save_group(self, group: Group) -> None:
        self.groups.save(group)
        self.groups.flush()

    def delete_group(self, group_id: EntityId) -> None:
        self.groups.delete(group_id)
        self.groups.flush()

    def save_day_verdict(self, verdict: DayVerdict) -> None:
        self.verdicts.save(verdict)
        self.verdicts.flush()

    def save_reflection_note(self, note: ReflectionNote) -> None:
        self.reflections.save(note)
        self.reflections.flush()
