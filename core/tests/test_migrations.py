import importlib

import pytest
from django.apps import apps
from django.db import migrations

MIGRATED_APPS = ["users", "resources", "journal", "forum", "messaging", "mood"]


def _created_models(app_label):
    module = importlib.import_module(f"{app_label}.migrations.0001_initial")
    assert module.Migration.initial is True
    return {
        op.name.lower()
        for op in module.Migration.operations
        if isinstance(op, migrations.CreateModel)
    }


@pytest.mark.parametrize("app_label", MIGRATED_APPS)
def test_initial_migration_creates_every_model(app_label):
    expected = {
        model._meta.model_name
        for model in apps.get_app_config(app_label).get_models()
        if not model._meta.auto_created
    }
    assert _created_models(app_label) == expected


@pytest.mark.parametrize("app_label", MIGRATED_APPS)
def test_initial_migration_names_match_model_indexes(app_label):
    module = importlib.import_module(f"{app_label}.migrations.0001_initial")
    migrated = {
        index.name
        for op in module.Migration.operations
        if isinstance(op, migrations.CreateModel)
        for index in op.options.get("indexes", [])
    }
    declared = {
        index.name
        for model in apps.get_app_config(app_label).get_models()
        for index in model._meta.indexes
    }
    assert migrated == declared
