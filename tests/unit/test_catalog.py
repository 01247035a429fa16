"""
Tests for catalog loading and the Resource model.
"""

import json

import pytest


class TestResourceModel:
    """Tests for Resource validation."""

    def test_camel_case_record(self, sample_resource_dict):
        from search.models import Resource

        resource = Resource.model_validate(sample_resource_dict)

        assert resource.sub_category == "Design"
        assert resource.gravity_score == 9.5
        assert resource.featured is True

    def test_gravity_bounds(self, sample_resource_dict):
        from pydantic import ValidationError

        from search.models import Resource

        with pytest.raises(ValidationError):
            Resource.model_validate({**sample_resource_dict, "gravityScore": 11})

    def test_serializes_camel_case(self, figma):
        data = figma.model_dump(by_alias=True)

        assert "subCategory" in data
        assert "gravityScore" in data


class TestLoadCatalog:
    """Tests for load_catalog."""

    def test_loads_records(self, catalog_file):
        from search.catalog import load_catalog

        resources = load_catalog(catalog_file)

        assert len(resources) == 9
        assert resources[0].name == "Figma"

    def test_missing_file_is_empty(self, tmp_path):
        from search.catalog import load_catalog

        assert load_catalog(tmp_path / "missing.json") == []

    def test_not_an_array(self, tmp_path):
        from search.catalog import load_catalog

        path = tmp_path / "resources.json"
        path.write_text(json.dumps({"resources": []}), encoding="utf-8")

        with pytest.raises(ValueError):
            load_catalog(path)

    def test_invalid_records_skipped(self, tmp_path, sample_resource_dict):
        from search.catalog import load_catalog

        path = tmp_path / "resources.json"
        path.write_text(json.dumps([sample_resource_dict, {"id": 2}]), encoding="utf-8")

        resources = load_catalog(path)

        assert [r.name for r in resources] == ["Figma"]


class TestCatalogSingleton:
    """Tests for get_catalog / set_catalog / reset_catalog."""

    def test_loads_from_settings_path(self, catalog_file, monkeypatch):
        from config.settings import get_settings
        from search.catalog import get_catalog

        monkeypatch.setenv("CATALOG_PATH", str(catalog_file))
        get_settings.cache_clear()

        first = get_catalog()

        assert len(first) == 9
        assert get_catalog() is first

    def test_set_and_reset(self, catalog, catalog_file, monkeypatch):
        from config.settings import get_settings
        from search.catalog import get_catalog, reset_catalog, set_catalog

        set_catalog(catalog[:2])
        assert [r.name for r in get_catalog()] == ["Figma", "Cursor"]

        monkeypatch.setenv("CATALOG_PATH", str(catalog_file))
        get_settings.cache_clear()
        reset_catalog()
        assert len(get_catalog()) == 9
