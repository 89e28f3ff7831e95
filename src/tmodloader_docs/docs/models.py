"""Data models for the class catalog."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ClassRecord:
	"""One class or namespace row of the documentation index."""
	name: str
	full_name: str
	description: str
	url: str


@dataclass(frozen=True)
class Catalog:
	"""Snapshot of every parsed class record and the clock time it was fetched."""
	records: tuple[ClassRecord, ...] = field(default_factory=tuple)
	fetched_at: float = 0.0

	def __len__(self) -> int:
		return len(self.records)

	def __iter__(self):
		return iter(self.records)
