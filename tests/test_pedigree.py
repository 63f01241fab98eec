"""Tests for pedigree connections, ancestor tree assembly and saved trees."""

import pytest
from fastapi import HTTPException

from app.core import pedigree
from app.models.pedigree_connection import PedigreeConnection
from app.schemas.pedigree_schema import PedigreeTreeCreate, PedigreeTreeReplace


def test_single_father_tree(make_cat, db):
    luna = make_cat(name="Luna")
    rex = make_cat(name="Rex", gender="male")

    pedigree.connect(db, rex.id, luna.id, "father")

    tree = pedigree.build_ancestor_tree(db, luna.id, 1)

    assert tree.cat.id == luna.id
    assert tree.mother is None
    assert tree.father is not None
    assert tree.father.cat.name == "Rex"
    assert tree.father.mother is None
    assert tree.father.father is None


def test_connect_rejects_self_parent(make_cat, db):
    luna = make_cat()

    with pytest.raises(HTTPException) as exc:
        pedigree.connect(db, luna.id, luna.id, "mother")
    assert exc.value.status_code == 400


def test_connect_requires_existing_cats(make_cat, db):
    luna = make_cat()

    with pytest.raises(HTTPException) as exc:
        pedigree.connect(db, "missing", luna.id, "mother")
    assert exc.value.status_code == 404


def test_list_and_disconnect(make_cat, db):
    mother = make_cat(name="Mother")
    kit_a = make_cat(name="Kit A")
    kit_b = make_cat(name="Kit B")

    first = pedigree.connect(db, mother.id, kit_a.id, "mother")
    pedigree.connect(db, mother.id, kit_b.id, "mother")

    assert {c.child_id for c in pedigree.list_by_parent(db, mother.id)} == {kit_a.id, kit_b.id}
    assert [c.parent_id for c in pedigree.list_by_child(db, kit_a.id)] == [mother.id]

    pedigree.disconnect(db, first.id)

    assert pedigree.list_by_child(db, kit_a.id) == []
    assert len(pedigree.list_by_parent(db, mother.id)) == 1


def test_disconnect_unknown_edge_is_not_found(db):
    with pytest.raises(HTTPException) as exc:
        pedigree.disconnect(db, 999)
    assert exc.value.status_code == 404


def test_tree_respects_depth(make_cat, db):
    kit = make_cat(name="Kit")
    dam = make_cat(name="Dam")
    sire = make_cat(name="Sire", gender="male")
    granddam = make_cat(name="Granddam")

    pedigree.connect(db, dam.id, kit.id, "mother")
    pedigree.connect(db, sire.id, kit.id, "father")
    pedigree.connect(db, granddam.id, dam.id, "mother")

    root_only = pedigree.build_ancestor_tree(db, kit.id, 0)
    assert root_only.mother is None and root_only.father is None

    one = pedigree.build_ancestor_tree(db, kit.id, 1)
    assert one.mother.cat.name == "Dam"
    assert one.father.cat.name == "Sire"
    assert one.mother.mother is None

    two = pedigree.build_ancestor_tree(db, kit.id, 2)
    assert two.mother.mother.cat.name == "Granddam"
    assert pedigree.count_nodes(two) == 4


def test_unknown_root_is_not_found(db):
    with pytest.raises(HTTPException) as exc:
        pedigree.build_ancestor_tree(db, "missing", 3)
    assert exc.value.status_code == 404


def test_cycle_is_cut_without_failing(make_cat, db):
    a = make_cat(name="A")
    b = make_cat(name="B", gender="male")

    pedigree.connect(db, b.id, a.id, "father")
    pedigree.connect(db, a.id, b.id, "mother")

    tree = pedigree.build_ancestor_tree(db, a.id, 6)

    assert tree.father.cat.name == "B"
    # A is already on the path, so B's mother branch is dropped
    assert tree.father.mother is None
    assert pedigree.count_nodes(tree) == 2


def test_shared_ancestor_on_both_sides(make_cat, db):
    kit = make_cat(name="Kit")
    dam = make_cat(name="Dam")
    sire = make_cat(name="Sire", gender="male")
    founder = make_cat(name="Founder", gender="male")

    pedigree.connect(db, dam.id, kit.id, "mother")
    pedigree.connect(db, sire.id, kit.id, "father")
    pedigree.connect(db, founder.id, dam.id, "father")
    pedigree.connect(db, founder.id, sire.id, "father")

    tree = pedigree.build_ancestor_tree(db, kit.id, 2)

    assert tree.mother.father.cat.name == "Founder"
    assert tree.father.father.cat.name == "Founder"


def test_duplicate_role_keeps_earliest_edge(make_cat, db):
    kit = make_cat(name="Kit")
    first = make_cat(name="First dam")
    second = make_cat(name="Second dam")

    pedigree.connect(db, first.id, kit.id, "mother")
    pedigree.connect(db, second.id, kit.id, "mother")

    tree = pedigree.build_ancestor_tree(db, kit.id, 1)

    assert tree.mother.cat.name == "First dam"


def test_dangling_edge_is_skipped(make_cat, db):
    kit = make_cat(name="Kit")
    sire = make_cat(name="Sire", gender="male")

    pedigree.connect(db, sire.id, kit.id, "father")
    db.add(PedigreeConnection(parent_id="ghost", child_id=kit.id, type="mother"))
    db.commit()

    tree = pedigree.build_ancestor_tree(db, kit.id, 2)

    assert tree.mother is None
    assert tree.father.cat.name == "Sire"


def test_tree_serialization_round_trip(make_cat, db):
    kit = make_cat(name="Kit", registration_number="REG-7")
    dam = make_cat(name="Dam")
    sire = make_cat(name="Sire", gender="male")
    pedigree.connect(db, dam.id, kit.id, "mother")
    pedigree.connect(db, sire.id, kit.id, "father")

    tree = pedigree.build_ancestor_tree(db, kit.id, 2)
    blob = pedigree.serialize_tree(tree)
    restored = pedigree.deserialize_tree(blob)

    assert restored == tree
    assert pedigree.serialize_tree(restored) == blob


def test_save_and_fetch_tree_by_root(make_cat, db):
    kit = make_cat(name="Kit")
    dam = make_cat(name="Dam")
    pedigree.connect(db, dam.id, kit.id, "mother")

    saved = pedigree.save_tree(
        db,
        PedigreeTreeCreate(root_cat_id=kit.id, name="Kit's line", depth=2),
    )

    fetched = pedigree.get_tree_by_root(db, kit.id)
    assert fetched.id == saved.id

    out = pedigree.serialize_saved_tree(fetched)
    assert out["name"] == "Kit's line"
    assert out["tree"].mother.cat.name == "Dam"


def test_saved_tree_is_a_snapshot_until_replaced(make_cat, db):
    kit = make_cat(name="Kit")
    sire = make_cat(name="Sire", gender="male")

    saved = pedigree.save_tree(db, PedigreeTreeCreate(root_cat_id=kit.id, name="Snapshot"))
    pedigree.connect(db, sire.id, kit.id, "father")

    unchanged = pedigree.deserialize_tree(pedigree.get_tree_or_404(db, saved.id).tree_data)
    assert unchanged.father is None

    replaced = pedigree.replace_tree(db, saved.id, PedigreeTreeReplace(name="Updated"))
    rebuilt = pedigree.deserialize_tree(replaced.tree_data)

    assert replaced.name == "Updated"
    assert replaced.depth == 3
    assert rebuilt.father.cat.name == "Sire"


def test_delete_tree(make_cat, db):
    kit = make_cat()
    saved = pedigree.save_tree(db, PedigreeTreeCreate(root_cat_id=kit.id, name="Tree"))

    pedigree.delete_tree(db, saved.id)

    assert pedigree.get_tree_by_root(db, kit.id) is None
    with pytest.raises(HTTPException):
        pedigree.get_tree_or_404(db, saved.id)
