"""Jutsu catalogue: which jutsus a confirmed seal sequence can lead to."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from handseal.errors import CatalogueError
from handseal.types import Seal

FILTERABLE_FIELDS = ("classification", "nature", "rank", "class_", "range", "hand_seals")


class Jutsu(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    pageid: int
    url: str = ""
    classification: list[str] = Field(default_factory=list)
    nature: list[str] = Field(default_factory=list)
    rank: str | None = None
    class_: str | None = Field(default=None, alias="class")
    range: str | None = None
    hand_seals: list[str] = Field(default_factory=list)


_JUTSU_LIST = TypeAdapter(list[Jutsu])


def canonical_seal_name(name: str | Seal) -> str:
    """Resolve naming drift ("Snake" → "Serpent"); unknown names pass through."""
    if isinstance(name, Seal):
        return name.value
    try:
        return Seal.from_name(name).value
    except ValueError:
        return name


class JutsuCatalogue:
    """Static lookup table from jutsu to its required hand seals.

    Usage:
        >>> catalogue = JutsuCatalogue.load("data/jutsu.json")
        >>> for jutsu in catalogue.match([Seal.TIGER, Seal.RAM]):
        ...     print(jutsu.name)
    """

    def __init__(self, jutsus: Sequence[Jutsu]) -> None:
        self._jutsus = list(jutsus)

    @classmethod
    def load(cls, path: str | Path) -> JutsuCatalogue:
        """Load a catalogue from a JSON array of jutsu objects.

        Raises:
            CatalogueError: If the file is missing, unreadable, or malformed.
        """
        path = Path(path)
        try:
            raw = path.read_bytes()
        except OSError as exc:
            raise CatalogueError(f"Cannot read jutsu catalogue {path}: {exc}") from exc
        try:
            jutsus = _JUTSU_LIST.validate_json(raw)
        except ValidationError as exc:
            raise CatalogueError(f"Invalid jutsu catalogue {path}: {exc}") from exc

        logger.info(f"Loaded {len(jutsus)} jutsus from {path}")
        return cls(jutsus)

    @property
    def jutsus(self) -> list[Jutsu]:
        return list(self._jutsus)

    def __len__(self) -> int:
        return len(self._jutsus)

    def match(self, seals: Iterable[Seal | str]) -> list[Jutsu]:
        """Jutsus whose hand seals include every given seal, in any order.

        Jutsus without hand seals never match. An empty sequence matches
        every jutsu that has hand seals.
        """
        wanted = {canonical_seal_name(s) for s in seals}
        matches = []
        for jutsu in self._jutsus:
            if not jutsu.hand_seals:
                continue
            required = {canonical_seal_name(s) for s in jutsu.hand_seals}
            if wanted <= required:
                matches.append(jutsu)
        return matches

    def filter(self, **criteria: str | Iterable[str]) -> list[Jutsu]:
        """Jutsus whose attributes contain every requested value.

        Keys are jutsu fields (``class`` may be given as ``class_``).

        Raises:
            ValueError: For a field that cannot be filtered on.
        """
        normalized = {}
        for key, values in criteria.items():
            field = self._field_name(key)
            normalized[field] = {values} if isinstance(values, str) else set(values)

        return [
            jutsu for jutsu in self._jutsus
            if all(wanted <= self._values(jutsu, field) for field, wanted in normalized.items())
        ]

    def options(self, field: str) -> list[str]:
        """Sorted distinct values of a field across the catalogue."""
        field = self._field_name(field)
        values: set[str] = set()
        for jutsu in self._jutsus:
            values |= self._values(jutsu, field)
        return sorted(values)

    @staticmethod
    def _field_name(key: str) -> str:
        field = "class_" if key == "class" else key
        if field not in FILTERABLE_FIELDS:
            raise ValueError(f"Cannot filter jutsus on {key!r}")
        return field

    @staticmethod
    def _values(jutsu: Jutsu, field: str) -> set[str]:
        value = getattr(jutsu, field)
        if value is None:
            return set()
        if isinstance(value, list):
            return {v for v in value if v}
        return {value}
