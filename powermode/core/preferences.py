"""Plain data model for settings screens.

These objects carry what a rendering front-end needs (titles, summaries,
list entries, visibility) and nothing else; the controllers fill them in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional


@dataclass
class Preference:
    key: str
    title: str = ""
    summary: Optional[str] = None
    visible: bool = True
    summary_visible: bool = True


@dataclass
class ListPreference(Preference):
    """Single-select list: ``entries`` are labels, ``entry_values`` the stored values."""

    entries: list[str] = field(default_factory=list)
    entry_values: list[str] = field(default_factory=list)
    value: Optional[str] = None

    def set_entries(self, entries: list[str], entry_values: list[str]) -> None:
        if len(entries) != len(entry_values):
            raise ValueError("entries and entry_values must have the same length")
        self.entries = list(entries)
        self.entry_values = list(entry_values)

    def entry_for_value(self, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        try:
            return self.entries[self.entry_values.index(value)]
        except ValueError:
            return None


@dataclass
class PreferenceGroup(Preference):
    children: list[Preference] = field(default_factory=list)

    def add(self, preference: Preference) -> Preference:
        self.children.append(preference)
        return preference

    def __iter__(self) -> Iterator[Preference]:
        return iter(self.children)

    def __len__(self) -> int:
        return len(self.children)

    def find(self, key: str) -> Optional[Preference]:
        for child in self.children:
            if child.key == key:
                return child
            if isinstance(child, PreferenceGroup):
                found = child.find(key)
                if found is not None:
                    return found
        return None


@dataclass
class PreferenceScreen(PreferenceGroup):
    # Children beyond this count are folded behind an "advanced" entry.
    initial_expanded_children_count: int = 0
