from __future__ import annotations

import pytest

from src.music_school.music_school.catalog.model import class_type_label
from src.music_school.music_school.catalog.repository import SystemConfigRepository
from src.music_school.music_school.catalog.service import CatalogService
from src.music_school.music_school.core.exceptions import NotFoundError, ValidationError
from src.music_school.music_school.storage.memory_store import InMemoryCollectionStore


@pytest.fixture()
def catalog():
    return CatalogService(SystemConfigRepository(InMemoryCollectionStore()))


def test_defaults_when_nothing_stored(catalog):
    config = catalog.get_config()

    assert config.class_type_ids() == ["PRIVATE", "SMALL_GROUP", "LARGE_GROUP"]
    assert len(config.subjects) == 10
    assert len(config.expense_categories) == 6


def test_add_rename_remove_class_type(catalog):
    catalog.add_class_type(type_id="DUET", name="Duet")
    catalog.rename_class_type(type_id="DUET", name="Duo")
    config = catalog.remove_class_type("PRIVATE")

    assert [(ct.id, ct.name) for ct in config.class_types] == [
        ("SMALL_GROUP", "Small group"),
        ("LARGE_GROUP", "Group class"),
        ("DUET", "Duo"),
    ]
    assert catalog.get_config() == config


def test_duplicate_or_missing_class_type(catalog):
    with pytest.raises(ValidationError):
        catalog.add_class_type(type_id="PRIVATE", name="Again")
    with pytest.raises(NotFoundError):
        catalog.remove_class_type("NOPE")


def test_lists_are_deduplicated_and_non_empty(catalog):
    config = catalog.set_subjects(["Piano", " Piano ", "Harp"])

    assert config.subjects == ("Piano", "Harp")
    with pytest.raises(ValidationError):
        catalog.set_expense_categories([])


def test_class_type_label_fallbacks(catalog):
    catalog.remove_class_type("PRIVATE")
    types = catalog.get_config().class_types

    assert class_type_label("SMALL_GROUP", types) == "Small group"
    assert class_type_label("PRIVATE", types) == "Private lesson"
    assert class_type_label("VINTAGE", types) == "VINTAGE"
