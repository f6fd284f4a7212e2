"""
Tests for the catalog repositories and the graph storage.
"""
import json

import pytest

from pcf_api.db.models import Dataset, Method
from pcf_api.db.repositories import DatasetRepository, MethodRepository
from pcf_api.db.repositories.datasets import to_entity
from pcf_api.db.seed import DEFAULT_DATASETS, seed_datasets
from pcf_api.domain.entities import DatasetKind
from pcf_api.graphstore import GraphStorage

from factories import editor_node


class TestDatasetRepository:
    """Test DatasetRepository operations."""

    def test_create_dataset(self, db_session, default_method):
        repo = DatasetRepository(db_session)

        dataset = repo.create_dataset({
            "name": "Beton C25/30",
            "unit": "m3",
            "value_co2e": 220.0,
            "kind": "material",
            "method_id": default_method.id,
            "not_a_column": "ignored",
        })

        assert dataset.id is not None
        assert dataset.name == "Beton C25/30"
        assert dataset.value_co2e == 220.0
        assert dataset.created_at is not None

    def test_create_dataset_defaults_kind(self, db_session):
        repo = DatasetRepository(db_session)

        dataset = repo.create_dataset({"name": "Sand", "unit": "kg", "value_co2e": 0.005})

        assert dataset.kind == "material"

    def test_list_datasets_ordered_by_id(self, db_session, sample_datasets):
        repo = DatasetRepository(db_session)

        names = [d.name for d in repo.list_datasets()]

        assert names == ["Strommix DE", "Diesel", "LKW-Transport"]

    def test_list_datasets_filters(self, db_session, sample_datasets):
        repo = DatasetRepository(db_session)

        assert [d.name for d in repo.list_datasets(source="invent")] == ["Diesel", "LKW-Transport"]
        assert [d.name for d in repo.list_datasets(geo="DE")] == ["Strommix DE"]
        assert [d.name for d in repo.list_datasets(name="Transport")] == ["LKW-Transport"]
        assert [d.name for d in repo.list_datasets(source="ecoinvent", name="Diesel")] == ["Diesel"]
        assert repo.list_datasets(geo="US") == []

    def test_get_dataset(self, db_session, sample_datasets):
        repo = DatasetRepository(db_session)

        assert repo.get_dataset(sample_datasets[1].id).name == "Diesel"
        assert repo.get_dataset(9999) is None

    def test_get_by_ids(self, db_session, sample_datasets):
        repo = DatasetRepository(db_session)
        ids = [sample_datasets[0].id, sample_datasets[2].id, 9999, sample_datasets[0].id]

        found = repo.get_by_ids(ids)

        assert sorted(d.name for d in found) == ["LKW-Transport", "Strommix DE"]
        assert repo.get_by_ids([]) == []

    def test_update_dataset(self, db_session, sample_datasets):
        repo = DatasetRepository(db_session)

        updated = repo.update_dataset(sample_datasets[0].id, {"value_co2e": 0.38, "year": 2023})

        assert updated.value_co2e == 0.38
        assert updated.year == 2023
        assert updated.name == "Strommix DE"

    def test_update_missing_dataset(self, db_session):
        assert DatasetRepository(db_session).update_dataset(42, {"name": "x"}) is None

    def test_delete_dataset(self, db_session, sample_datasets):
        repo = DatasetRepository(db_session)

        assert repo.delete_dataset(sample_datasets[0].id) is True
        assert repo.get_dataset(sample_datasets[0].id) is None
        assert repo.delete_dataset(sample_datasets[0].id) is False

    def test_replace_method_datasets(self, db_session, sample_datasets, default_method):
        repo = DatasetRepository(db_session)
        other = repo.create_dataset({"name": "Unassigned", "unit": "kg", "value_co2e": 1.0})

        created = repo.replace_method_datasets(default_method.id, [
            {"name": "Aluminium", "unit": "kg", "value_co2e": 8.6, "kind": "material"},
        ])

        remaining = repo.list_datasets()
        assert [d.name for d in remaining] == ["Unassigned", "Aluminium"]
        assert created[0].method_id == default_method.id
        assert remaining[0].id == other.id

    def test_to_entity_normalizes_kind(self, db_session):
        row = Dataset(id=5, name="Old row", unit="kg", value_co2e=1.5, kind="Energie", geo="DE")

        entity = to_entity(row)

        assert entity.kind is DatasetKind.ENERGY
        assert entity.value_co2e == 1.5
        assert entity.geo == "DE"


class TestMethodRepository:
    """Test MethodRepository operations."""

    def test_get_all_methods(self, db_session, default_method):
        db_session.add(Method(id=2, name="EF 3.1", gwp_set="GWP100"))
        db_session.commit()

        methods = MethodRepository(db_session).get_all_methods()

        assert [m.name for m in methods] == ["Default", "EF 3.1"]

    def test_get_method(self, db_session, default_method):
        repo = MethodRepository(db_session)

        assert repo.get_method(1).gwp_set == "GWP100"
        assert repo.get_method(7) is None

    def test_upsert_keeps_existing_method(self, db_session, default_method):
        repo = MethodRepository(db_session)

        method = repo.upsert_method(1, "Renamed", "GWP20")

        assert method.name == "Default"
        assert len(repo.get_all_methods()) == 1

    def test_upsert_creates_missing_method(self, db_session):
        method = MethodRepository(db_session).upsert_method(3, "IPCC 2021", "GWP100", "AR6 factors")

        assert method.id == 3
        assert method.description == "AR6 factors"


class TestSeed:
    """Test the default catalog seed."""

    def test_seed_creates_method_and_datasets(self, db_session):
        count = seed_datasets(db_session)

        assert count == len(DEFAULT_DATASETS)
        method = MethodRepository(db_session).get_method(1)
        assert method.name == "Default"
        assert method.gwp_set == "GWP100"
        datasets = DatasetRepository(db_session).list_datasets()
        assert [(d.name, d.unit, d.value_co2e) for d in datasets] == [
            ("Strommix DE", "kWh", 0.401),
            ("Diesel", "l", 2.68),
            ("LKW-Transport", "tkm", 0.12),
        ]
        assert all(d.method_id == 1 for d in datasets)

    def test_seed_is_repeatable(self, db_session):
        seed_datasets(db_session)
        seed_datasets(db_session)

        assert len(DatasetRepository(db_session).list_datasets()) == len(DEFAULT_DATASETS)


class TestGraphStorage:
    """Test project and graph snapshot storage."""

    def test_create_and_get_project(self, graph_storage):
        project = graph_storage.create_project("Bike frame", "Aluminium frame PCF")

        stored = graph_storage.get_project(project["project_id"])
        assert stored["name"] == "Bike frame"
        assert stored["description"] == "Aluminium frame PCF"
        assert stored["created_at"]

    def test_projects_persist_across_instances(self, tmp_path):
        base = str(tmp_path / "store")
        project = GraphStorage(base_path=base).create_project("Persistent")

        reopened = GraphStorage(base_path=base)

        assert reopened.get_project(project["project_id"])["name"] == "Persistent"

    def test_list_projects_in_creation_order(self, graph_storage):
        first = graph_storage.create_project("First")
        second = graph_storage.create_project("Second")

        ids = [p["project_id"] for p in graph_storage.get_all_projects()]

        assert ids == [first["project_id"], second["project_id"]]

    def test_update_project(self, graph_storage, sample_project):
        updated = graph_storage.update_project(sample_project["project_id"], "Renamed", "New text")

        assert updated["name"] == "Renamed"
        assert graph_storage.update_project("missing", "x", "y") is None

    def test_unsaved_graph_is_empty(self, graph_storage, sample_project):
        graph = graph_storage.load_graph(sample_project["project_id"])

        assert graph == {"nodes": [], "edges": [], "updated_at": None}

    def test_save_and_load_graph(self, graph_storage, sample_project):
        node = editor_node("p1", "Press", "production",
                           inputs=[{"kind": "energy", "name": "Power", "amount": 10, "unit": "kWh", "datasetId": 1}])
        edge = {"id": "e1", "source": "p1", "target": "p2", "data": {"datasetId": 2, "amount": 3}}

        graph_storage.save_graph(sample_project["project_id"], [node, "junk"], [edge, 7])
        graph = graph_storage.load_graph(sample_project["project_id"])

        assert len(graph["nodes"]) == 1
        assert graph["nodes"][0]["data"]["elementary"]["inputs"][0]["datasetId"] == 1
        assert graph["edges"] == [edge]
        assert graph["updated_at"] is not None

    def test_save_graph_migrates_legacy_nodes(self, graph_storage, sample_project):
        legacy = {"id": "p1", "data": {"title": "Old", "elementary": {
            "inflows": [{"kind": "electricity", "name": "Power", "amount": 1}],
            "outflows": [{"kind": "material", "name": "Scrap", "amount": 1}],
        }}}

        graph_storage.save_graph(sample_project["project_id"], [legacy], [])
        elementary = graph_storage.load_graph(sample_project["project_id"])["nodes"][0]["data"]["elementary"]

        assert set(elementary) == {"inputs", "outputs"}
        assert elementary["inputs"][0]["kind"] == "energy"
        assert elementary["outputs"][0]["kind"] == "waste"

    def test_unreadable_graph_file_loads_empty(self, graph_storage, sample_project):
        project_id = sample_project["project_id"]
        graph_storage.save_graph(project_id, [], [])
        graph_file = graph_storage.base_path / "graphs" / f"{project_id}.json"
        graph_file.write_text("{not json", encoding="utf-8")

        assert graph_storage.load_graph(project_id)["nodes"] == []

    def test_delete_project_removes_graph(self, graph_storage, sample_project):
        project_id = sample_project["project_id"]
        graph_storage.save_graph(project_id, [editor_node("p1", "A", "use")], [])

        assert graph_storage.delete_project(project_id) is True
        assert graph_storage.get_project(project_id) is None
        assert graph_storage.get_storage_stats()["graphs"] == 0
        assert graph_storage.delete_project(project_id) is False

    def test_storage_stats(self, graph_storage, sample_project):
        graph_storage.save_graph(sample_project["project_id"], [], [])

        stats = graph_storage.get_storage_stats()

        assert stats["projects"] == 1
        assert stats["graphs"] == 1
        assert stats["metadata_file_exists"] is True

    def test_corrupt_metadata_starts_empty(self, tmp_path):
        base = tmp_path / "store"
        base.mkdir()
        (base / "metadata.json").write_text("[broken", encoding="utf-8")

        storage = GraphStorage(base_path=str(base))

        assert storage.get_all_projects() == []

    def test_metadata_file_is_json(self, graph_storage, sample_project):
        with graph_storage.metadata_file.open(encoding="utf-8") as handle:
            data = json.load(handle)

        assert sample_project["project_id"] in data["projects"]
