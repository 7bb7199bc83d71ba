import json

from netbook.storage import (
    create_initial_collection,
    discover_collection,
    get_netbook_dir,
    load_collection,
)


def test_prefers_project_collection(tmp_path):
    (tmp_path / ".netbook").mkdir()
    (tmp_path / ".netbook" / "collection.json").write_text("[]")
    (tmp_path / "netbook.json").write_text("[]")

    assert discover_collection(tmp_path) == tmp_path / ".netbook" / "collection.json"


def test_falls_back_to_simple_collection(tmp_path):
    (tmp_path / "netbook.json").write_text("[]")
    assert discover_collection(tmp_path) == tmp_path / "netbook.json"


def test_defaults_to_new_project_collection(tmp_path):
    path = discover_collection(tmp_path)
    assert path == tmp_path / ".netbook" / "collection.json"
    assert not path.exists()


def test_netbook_dir(tmp_path):
    assert get_netbook_dir(tmp_path / ".netbook" / "collection.json") == tmp_path / ".netbook"
    assert get_netbook_dir(tmp_path / "netbook.json") == tmp_path / ".netbook"


def test_initial_collection_has_examples(tmp_path):
    path = tmp_path / ".netbook" / "collection.json"
    create_initial_collection(path)

    assert len(json.loads(path.read_text())) == 2
    collection = load_collection(path)
    assert [t.method.value for t in collection] == ["GET", "POST"]
