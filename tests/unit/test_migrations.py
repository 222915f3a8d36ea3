"""
Unit tests keeping the alembic revision in step with the ORM models.
The revision is replayed against a recording stand-in for alembic's op.
"""
import importlib.util
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from fluxo.db.session import Base
from fluxo.db import models  # noqa: F401

VERSIONS = Path(__file__).resolve().parents[2] / "alembic" / "versions"


@pytest.fixture
def recorded_upgrade(monkeypatch):
    """Run upgrade() of the initial revision and return the recording op."""
    path = VERSIONS / "3c1f0a9d2b7e_accounts_requests_and_events.py"
    spec = importlib.util.spec_from_file_location("initial_revision", path)
    revision = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(revision)

    op = MagicMock()
    monkeypatch.setattr(revision, "op", op)
    revision.upgrade()
    return op


def migration_indexes(op):
    indexes = {}
    for call in op.create_index.call_args_list:
        name, table, columns = call.args
        indexes[name] = (table, tuple(columns), call.kwargs.get("unique", False))
    return indexes


def migration_columns(op, table_name):
    for call in op.create_table.call_args_list:
        if call.args[0] == table_name:
            return {column.name: column for column in call.args[1:]}
    raise AssertionError(f"{table_name} not created")


@pytest.mark.unit
class TestInitialRevision:
    """Test that the revision creates what the models declare."""

    def test_creates_every_table(self, recorded_upgrade):
        """Test that every mapped table is created by the revision."""
        created = {call.args[0] for call in recorded_upgrade.create_table.call_args_list}

        assert created == set(Base.metadata.tables)

    def test_identity_email_has_one_unique_index(self, recorded_upgrade):
        """Test that identity emails get a single unique index, as on the model."""
        model_indexes = {
            index.name: (tuple(c.name for c in index.columns), index.unique)
            for index in Base.metadata.tables["auth_identities"].indexes
        }

        table, columns, unique = migration_indexes(recorded_upgrade)["ix_auth_identities_email"]

        assert table == "auth_identities"
        assert model_indexes["ix_auth_identities_email"] == (columns, unique)
        assert unique is True
        assert migration_columns(recorded_upgrade, "auth_identities")["email"].unique is not True

    def test_model_indexes_exist_in_revision(self, recorded_upgrade):
        """Test that each index declared on a model is created by the revision."""
        created = migration_indexes(recorded_upgrade)

        for table in Base.metadata.tables.values():
            for index in table.indexes:
                assert created[index.name] == (
                    table.name,
                    tuple(c.name for c in index.columns),
                    bool(index.unique),
                )
