"""
adsheets/domain/sheets.py

Domain models describing spreadsheet documents, tabs and parsed rows.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

SheetValue = Union[float, str]
SheetRow = dict[str, SheetValue]
"""One parsed data row keyed by the tab's original header text."""


class TabDataType(str, Enum):
    """
    Domain category of a tab, decided from its header vocabulary.
    """

    ADS = "ads"
    SALES = "sales"


@dataclass
class TabDescriptor:
    """
    One discoverable sub-sheet of a document.

    Created empty by a discovery strategy; ``row_count`` and ``headers``
    are filled in later by hydration.
    """

    name: str
    gid: str
    row_count: int = 0
    headers: list[str] = field(default_factory=list)

    @property
    def is_hydrated(self) -> bool:
        return self.row_count > 0 and bool(self.headers)


@dataclass(frozen=True)
class ParsedSheet:
    """
    Parser output for one tab, with counts of rows skipped as blank.
    """

    headers: list[str] = field(default_factory=list)
    rows: list[SheetRow] = field(default_factory=list)
    header_index: int | None = None
    skipped_rows: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.rows


@dataclass(frozen=True)
class SheetValidationResult:
    """
    Outcome of validating a sheet reference and discovering its tabs.
    """

    valid: bool
    document_id: str | None
    tabs: list[TabDescriptor] = field(default_factory=list)
    error: str | None = None


@dataclass(frozen=True)
class TabSelection:
    """
    A configured tab to ingest, tagged with the platform it reports on.
    """

    name: str
    platform: str
    gid: str | None = None


@dataclass(frozen=True)
class SheetPreview:
    """
    Header list plus the first few rows of a tab, as positional values.
    """

    headers: list[str] = field(default_factory=list)
    rows: list[list[SheetValue]] = field(default_factory=list)
