"""Tests for content loading and validation."""

import json

import pytest

from overlord.content.catalog import CatalogError, load_catalog
from overlord.state.schema import FlagEffect, GambleEffect, StateFlag


def write_content(directory, planets=None, visitors=None):
    """Write planets.json / visitors.json into `directory`."""
    if planets is not None:
        (directory / "planets.json").write_text(json.dumps({"planets": planets}), encoding="utf-8")
    if visitors is not None:
        (directory / "visitors.json").write_text(json.dumps({"visitors": visitors}), encoding="utf-8")


PLANETS = [
    {"id": "home", "name": "Home", "owned": True},
    {"id": "far", "name": "Far"},
]

VISITOR = {
    "id": "merchant",
    "name": "Merchant",
    "sprite": "merchant.png",
    "text": "Hello {user}",
    "options": [{"id": "ok", "text": "Okay"}],
}


class TestBundledCatalog:
    """Test the content shipped with the package."""

    def test_planets(self, catalog):
        assert len(catalog.planets) == 7
        assert [p.id for p in catalog.planets if p.owned] == ["mallard_prime"]

    def test_visitor_ids_unique(self, catalog):
        ids = [v.id for v in catalog.visitors]
        assert len(ids) == len(set(ids))

    def test_every_visitor_has_a_free_option(self, catalog):
        """A broke overlord can always answer someone."""
        for visitor in catalog.visitors:
            assert any(o.effects.coins >= 0 for o in visitor.options), visitor.id

    def test_specials_parse_to_models(self, catalog):
        wizard = catalog.get_visitor("wizard")
        assert isinstance(wizard.get_option("wizard_cast").effects.special, GambleEffect)

        god = catalog.get_visitor("god")
        special = god.get_option("god_deny").effects.special
        assert isinstance(special, FlagEffect)
        assert special.flag == StateFlag.GOD_DENIED

    def test_fresh_planets_are_copies(self, catalog):
        planets = catalog.fresh_planets()
        planets[1].owned = True
        assert catalog.planets[1].owned is False

    def test_get_visitor_unknown(self, catalog):
        assert catalog.get_visitor("nobody") is None


class TestLoadCatalog:
    """Test loading from a directory."""

    def test_loads_valid_content(self, tmp_path):
        write_content(tmp_path, PLANETS, [VISITOR])
        catalog = load_catalog(tmp_path)
        assert [p.id for p in catalog.planets] == ["home", "far"]
        assert catalog.get_visitor("merchant").weight == 1.0

    def test_accepts_bare_lists(self, tmp_path):
        (tmp_path / "planets.json").write_text(json.dumps(PLANETS), encoding="utf-8")
        (tmp_path / "visitors.json").write_text(json.dumps([VISITOR]), encoding="utf-8")
        assert len(load_catalog(tmp_path).visitors) == 1

    def test_missing_file(self, tmp_path):
        write_content(tmp_path, planets=PLANETS)
        with pytest.raises(CatalogError, match="not found"):
            load_catalog(tmp_path)

    def test_invalid_json(self, tmp_path):
        write_content(tmp_path, PLANETS, [VISITOR])
        (tmp_path / "visitors.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogError, match="Invalid JSON"):
            load_catalog(tmp_path)

    def test_wrong_shape(self, tmp_path):
        write_content(tmp_path, PLANETS)
        (tmp_path / "visitors.json").write_text(json.dumps({"visitors": "merchant"}), encoding="utf-8")
        with pytest.raises(CatalogError, match="must contain a list"):
            load_catalog(tmp_path)

    def test_visitor_without_options(self, tmp_path):
        write_content(tmp_path, PLANETS, [{**VISITOR, "options": []}])
        with pytest.raises(CatalogError, match="Invalid content"):
            load_catalog(tmp_path)

    def test_non_positive_weight(self, tmp_path):
        write_content(tmp_path, PLANETS, [{**VISITOR, "weight": 0}])
        with pytest.raises(CatalogError):
            load_catalog(tmp_path)

    def test_unknown_special_kind(self, tmp_path):
        bad = {**VISITOR, "options": [{"id": "x", "text": "x", "effects": {"special": {"kind": "teleport"}}}]}
        write_content(tmp_path, PLANETS, [bad])
        with pytest.raises(CatalogError):
            load_catalog(tmp_path)

    def test_duplicate_visitor_ids(self, tmp_path):
        write_content(tmp_path, PLANETS, [VISITOR, VISITOR])
        with pytest.raises(CatalogError, match="Duplicate visitor id"):
            load_catalog(tmp_path)

    def test_unknown_planet_reference(self, tmp_path):
        envoy = {
            **VISITOR,
            "id": "envoy",
            "options": [{"id": "annex", "text": "Annex", "effects": {"add_planet_id": "atlantis"}}],
        }
        write_content(tmp_path, PLANETS, [envoy])
        with pytest.raises(CatalogError, match="unknown planet"):
            load_catalog(tmp_path)

    def test_no_planets(self, tmp_path):
        write_content(tmp_path, [], [VISITOR])
        with pytest.raises(CatalogError, match="no planets"):
            load_catalog(tmp_path)
