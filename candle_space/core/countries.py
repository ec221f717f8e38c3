"""
Country catalog used by the annotation country selector.

The list itself comes from an external source; the core only needs
membership checks and display names.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping

logger = logging.getLogger(__name__)


class CountryCatalog:
    """Closed set of country codes with display names, sorted by name."""

    def __init__(self, names_by_code: Mapping[str, str]) -> None:
        self._names = {code.upper(): name for code, name in names_by_code.items() if code}
        self._ordered = sorted(self._names.items(), key=lambda item: item[1].casefold())

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.upper() in self._names

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._names)

    def name_for(self, code: str) -> str:
        """Get the display name for a code, or the code itself if unknown."""
        return self._names.get(code.upper(), code) if code else ""

    def accepts(self, code: str) -> bool:
        """Check if a code may be stored. The empty code means no country."""
        return code == "" or code in self

    @classmethod
    def from_qlocale(cls) -> CountryCatalog:
        """Build the catalog from the ISO 3166 territories Qt knows about."""
        from PyQt6.QtCore import QLocale

        names: dict[str, str] = {}
        for territory in QLocale.Country:
            code = QLocale.territoryToCode(territory)
            if len(code) == 2 and code.isalpha():
                names[code] = QLocale.territoryToString(territory)
        logger.debug("Loaded %d territories from QLocale", len(names))
        return cls(names)
