"""Unit tests for DirectoryService: directory lifecycle and ownership.

Tests the service layer directly against the test database, bypassing HTTP.
"""

import pytest

from docs_service.exceptions import (
    DataCannotDeleteError,
    DataNotFoundError,
    ForbiddenError,
    ParamsError,
    ResultCode,
)
from docs_service.models import Directory
from docs_service.schemas.directory import DirectoryPayload
from docs_service.services.directory_service import DirectoryService

U1 = 1
U2 = 2
P1 = 100


def _payload(**overrides) -> DirectoryPayload:
    data = {"project_id": P1, "parent_id": 0, "owner_id": U1, "name": "Guides", "sort_code": 0}
    data.update(overrides)
    return DirectoryPayload(**data)


def _count(db) -> int:
    return db.query(Directory).count()


class TestProjectTree:

    def test_owner_gets_assembled_tree(self, db, scenario):
        tree = DirectoryService(db).get_project_tree(P1, U1)
        assert [n.id for n in tree] == [scenario["d1"].id]
        [d2] = tree[0].sub_directories
        assert d2.id == scenario["d2"].id
        assert [doc.id for doc in d2.documents] == [scenario["doc1"].id]

    def test_other_user_forbidden(self, db, scenario):
        with pytest.raises(ForbiddenError):
            DirectoryService(db).get_project_tree(P1, U2)

    def test_empty_project_returns_empty_list(self, db):
        assert DirectoryService(db).get_project_tree(P1, U2) == []

    def test_roots_ordered_by_sort_code(self, db, make_directory):
        make_directory(name="z", sort_code=3)
        make_directory(name="a", sort_code=1)
        tree = DirectoryService(db).get_project_tree(P1, U1)
        assert [n.name for n in tree] == ["a", "z"]

    def test_invalid_project_id(self, db):
        with pytest.raises(ParamsError):
            DirectoryService(db).get_project_tree(0, U1)


class TestReads:

    def test_list_children_is_flat(self, db, scenario):
        children = DirectoryService(db).list_children(scenario["d1"].id, U1)
        assert [c.id for c in children] == [scenario["d2"].id]
        assert not hasattr(children[0], "sub_directories")

    def test_list_children_forbidden(self, db, scenario):
        with pytest.raises(ForbiddenError):
            DirectoryService(db).list_children(scenario["d1"].id, U2)

    def test_get_directory(self, db, scenario):
        directory = DirectoryService(db).get_directory(scenario["d2"].id, U1)
        assert directory.name == "D2"

    def test_get_missing_directory_returns_none(self, db):
        assert DirectoryService(db).get_directory(999, U1) is None

    def test_get_directory_forbidden(self, db, scenario):
        with pytest.raises(ForbiddenError):
            DirectoryService(db).get_directory(scenario["d1"].id, U2)


class TestCreate:

    def test_create_root(self, db):
        directory = DirectoryService(db).create_directory(_payload(name="Guides"), U1)
        assert directory.id is not None
        assert directory.name == "Guides"
        assert directory.parent_id == 0

    def test_create_child(self, db, scenario):
        directory = DirectoryService(db).create_directory(
            _payload(parent_id=scenario["d1"].id, name="Child"), U1
        )
        assert directory.parent_id == scenario["d1"].id

    @pytest.mark.parametrize("overrides, field", [
        ({"name": "   "}, "name"),
        ({"name": None}, "name"),
        ({"project_id": 0}, "project_id"),
        ({"owner_id": None}, "owner_id"),
        ({"parent_id": -1}, "parent_id"),
        ({"parent_id": None}, "parent_id"),
    ])
    def test_invalid_payload_writes_nothing(self, db, overrides, field):
        with pytest.raises(ParamsError) as exc_info:
            DirectoryService(db).create_directory(_payload(**overrides), U1)
        assert exc_info.value.code == ResultCode.PARAMS_ERROR
        assert exc_info.value.details == {"field": field}
        assert _count(db) == 0

    def test_payload_owner_must_be_acting_user(self, db):
        with pytest.raises(ForbiddenError):
            DirectoryService(db).create_directory(_payload(owner_id=U2), U1)
        assert _count(db) == 0

    def test_missing_parent_rejected(self, db):
        with pytest.raises(ParamsError):
            DirectoryService(db).create_directory(_payload(parent_id=999), U1)

    def test_parent_in_other_project_rejected(self, db, make_directory):
        parent = make_directory(project_id=P1 + 1)
        with pytest.raises(ParamsError):
            DirectoryService(db).create_directory(_payload(parent_id=parent.id), U1)

    def test_parent_owned_by_other_user_forbidden(self, db, make_directory):
        parent = make_directory(owner_id=U2)
        with pytest.raises(ForbiddenError):
            DirectoryService(db).create_directory(_payload(parent_id=parent.id), U1)
        assert _count(db) == 1


class TestUpdate:

    def test_full_replace(self, db, scenario):
        d2 = scenario["d2"]
        updated = DirectoryService(db).update_directory(
            _payload(id=d2.id, parent_id=0, name="Renamed", sort_code=9), U1
        )
        assert updated.name == "Renamed"
        assert updated.parent_id == 0
        assert updated.sort_code == 9

    def test_name_stored_as_given(self, db, scenario):
        d1 = scenario["d1"]
        updated = DirectoryService(db).update_directory(_payload(id=d1.id, name="  Spaced Out "), U1)
        assert updated.name == "  Spaced Out "

    def test_missing_directory_not_found(self, db):
        with pytest.raises(DataNotFoundError) as exc_info:
            DirectoryService(db).update_directory(_payload(id=999), U1)
        assert exc_info.value.code == ResultCode.DATA_NOT_FOUND

    def test_invalid_id(self, db):
        with pytest.raises(ParamsError):
            DirectoryService(db).update_directory(_payload(id=None), U1)

    def test_blank_name_writes_nothing(self, db, scenario):
        d1 = scenario["d1"]
        with pytest.raises(ParamsError):
            DirectoryService(db).update_directory(_payload(id=d1.id, name=""), U1)
        db.refresh(d1)
        assert d1.name == "D1"

    def test_other_user_forbidden_and_unchanged(self, db, scenario):
        d1 = scenario["d1"]
        with pytest.raises(ForbiddenError):
            DirectoryService(db).update_directory(_payload(id=d1.id, owner_id=U2, name="Hijack"), U2)
        db.refresh(d1)
        assert d1.name == "D1"
        assert d1.owner_id == U1

    def test_cannot_give_directory_away(self, db, scenario):
        d1 = scenario["d1"]
        with pytest.raises(ForbiddenError):
            DirectoryService(db).update_directory(_payload(id=d1.id, owner_id=U2), U1)

    def test_cannot_be_own_parent(self, db, scenario):
        d1 = scenario["d1"]
        with pytest.raises(ParamsError):
            DirectoryService(db).update_directory(_payload(id=d1.id, parent_id=d1.id), U1)

    def test_cannot_move_under_descendant(self, db, scenario, make_directory):
        d3 = make_directory(name="D3", parent_id=scenario["d2"].id)
        d1 = scenario["d1"]
        with pytest.raises(ParamsError):
            DirectoryService(db).update_directory(_payload(id=d1.id, parent_id=d3.id), U1)
        db.refresh(d1)
        assert d1.parent_id == 0

    def test_cannot_move_subtree_to_other_project(self, db, scenario):
        d1 = scenario["d1"]
        with pytest.raises(ParamsError):
            DirectoryService(db).update_directory(_payload(id=d1.id, project_id=P1 + 1), U1)

    def test_leaf_can_move_to_other_project(self, db, make_directory):
        leaf = make_directory(name="leaf")
        moved = DirectoryService(db).update_directory(
            _payload(id=leaf.id, project_id=P1 + 1, name="leaf"), U1
        )
        assert moved.project_id == P1 + 1


class TestDelete:

    def test_non_empty_directory_cannot_be_deleted(self, db, scenario):
        with pytest.raises(DataCannotDeleteError) as exc_info:
            DirectoryService(db).delete_directory(scenario["d1"].id, U1)
        assert exc_info.value.code == ResultCode.DATA_CANNOT_DELETE
        assert exc_info.value.details["sub_directories"] == 1

    def test_directory_with_documents_cannot_be_deleted(self, db, scenario):
        with pytest.raises(DataCannotDeleteError) as exc_info:
            DirectoryService(db).delete_directory(scenario["d2"].id, U1)
        assert exc_info.value.details["documents"] == 1

    def test_non_empty_guard_applies_to_any_requester(self, db, scenario):
        with pytest.raises(DataCannotDeleteError):
            DirectoryService(db).delete_directory(scenario["d1"].id, U2)

    def test_missing_directory_not_found(self, db):
        with pytest.raises(DataNotFoundError):
            DirectoryService(db).delete_directory(999, U1)

    def test_other_user_forbidden(self, db, make_directory):
        directory = make_directory()
        with pytest.raises(ForbiddenError):
            DirectoryService(db).delete_directory(directory.id, U2)
        assert _count(db) == 1

    def test_empty_directory_deleted(self, db, make_directory):
        directory = make_directory()
        DirectoryService(db).delete_directory(directory.id, U1)
        assert _count(db) == 0
