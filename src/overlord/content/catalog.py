"""
Static content catalog for Duck Overlord.

Planets and visitors live in JSON files under `overlord/data/` and are
validated into pydantic models once, then cached. A catalog is immutable
from the engine's point of view: state snapshots copy planets out of it,
and visitors are only ever read.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from ..state.schema import Planet, Visitor

logger = logging.getLogger(__name__)


DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"


class CatalogError(Exception):
    """Content files are missing or malformed."""
    pass


@dataclass(frozen=True)
class Catalog:
    """Immutable planets and visitors tables."""

    planets: tuple[Planet, ...]
    visitors: tuple[Visitor, ...]

    def get_visitor(self, visitor_id: str) -> Visitor | None:
        for visitor in self.visitors:
            if visitor.id == visitor_id:
                return visitor
        return None

    def fresh_planets(self) -> list[Planet]:
        """Independent copies of the planet table for a new game."""
        return [p.model_copy() for p in self.planets]


def _read_list(path: Path, key: str) -> list[dict]:
    if not path.exists():
        raise CatalogError(f"Content file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Invalid JSON in {path}: {e}") from e

    items = data.get(key) if isinstance(data, dict) else data
    if not isinstance(items, list):
        raise CatalogError(f"{path} must contain a list under '{key}'")
    return items


def _check_references(planets: list[Planet], visitors: list[Visitor]) -> None:
    planet_ids = {p.id for p in planets}
    seen: set[str] = set()

    for visitor in visitors:
        if visitor.id in seen:
            raise CatalogError(f"Duplicate visitor id: {visitor.id}")
        seen.add(visitor.id)

        referenced = []
        if visitor.conditions:
            referenced += [
                visitor.conditions.requires_owned_planet,
                visitor.conditions.requires_planet_not_owned,
            ]
        referenced += [o.effects.add_planet_id for o in visitor.options]
        for planet_id in referenced:
            if planet_id is not None and planet_id not in planet_ids:
                raise CatalogError(
                    f"Visitor {visitor.id} references unknown planet: {planet_id}"
                )


def load_catalog(data_dir: Path | str | None = None) -> Catalog:
    """
    Load and validate planets.json and visitors.json.

    Raises:
        CatalogError: If a file is missing, unparsable, fails validation,
            or references a planet that does not exist.
    """
    data_dir = Path(data_dir) if data_dir else DEFAULT_DATA_DIR

    try:
        planets = [
            Planet.model_validate(p)
            for p in _read_list(data_dir / "planets.json", "planets")
        ]
        visitors = [
            Visitor.model_validate(v)
            for v in _read_list(data_dir / "visitors.json", "visitors")
        ]
    except ValidationError as e:
        raise CatalogError(f"Invalid content in {data_dir}: {e}") from e

    if not planets:
        raise CatalogError("Catalog has no planets")
    _check_references(planets, visitors)

    logger.debug(
        "Loaded catalog from %s: %d planets, %d visitors",
        data_dir, len(planets), len(visitors),
    )
    return Catalog(planets=tuple(planets), visitors=tuple(visitors))


_default_catalog: Catalog | None = None


def get_default_catalog() -> Catalog:
    """The bundled catalog, loaded on first use."""
    global _default_catalog
    if _default_catalog is None:
        _default_catalog = load_catalog()
    return _default_catalog
