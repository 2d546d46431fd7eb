import pytest

from conftest import read_lines
from svurl.errors import FileAccessError, InvalidModeError, InvalidURLError, UnknownSetError
from svurl.storage import has_backup
from svurl.store import DEFAULT_SETS, Store


def test_defaults_merged_with_overrides(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with Store({"used": str(tmp_path / "u.txt"), "extra": str(tmp_path / "x.txt")}) as store:
        store.wait_all()
        assert store.names() == ["saved", "origins", "used", "extra"]
        assert str(store.find("used").path) == str(tmp_path / "u.txt")
        assert store.paths["saved"] == DEFAULT_SETS["saved"]
    assert (tmp_path / ".saved").exists()


def test_find_unknown(make_store):
    store = make_store()
    with pytest.raises(UnknownSetError):
        store.find("nope")


def test_unreadable_set_aborts_startup(tmp_path, paths):
    paths["saved"].mkdir()
    with Store({k: str(v) for k, v in paths.items()}) as store:
        with pytest.raises(FileAccessError):
            store.wait_all()


def test_insert_into_empty_store(make_store, paths):
    store = make_store(saved=[], used=[])
    result = store.insert_deduped("saved", "https://ex.com/a?x=1", "full", check="used")
    assert result.added
    assert result.message == "added https://ex.com/a"
    assert store.members("saved") == ["https://ex.com/a"]
    assert read_lines(paths["saved"]) == ["https://ex.com/a"]


def test_duplicate_full_path_reported(make_store, paths):
    store = make_store(saved=["https://ex.com/a"])
    result = store.insert_deduped("saved", "https://ex.com/a?y=2", "full", check="used")
    assert not result.added
    assert result.duplicate_in == "saved"
    assert result.position == 1
    assert store.members("saved") == ["https://ex.com/a"]
    assert read_lines(paths["saved"]) == ["https://ex.com/a"]


def test_duplicate_in_check_set(make_store):
    store = make_store(saved=["https://ex.com/z"], used=["https://ex.com/q", "https://ex.com/a"])
    result = store.insert_deduped("saved", "https://ex.com/a#frag", "full", check="used")
    assert (result.duplicate_in, result.position) == ("used", 2)
    assert "https://ex.com/a" not in store.members("saved")


def test_insert_twice_is_idempotent(make_store, paths):
    store = make_store()
    store.insert_deduped("saved", "https://ex.com/b", "full")
    once = store.members("saved")
    store.insert_deduped("saved", "https://ex.com/b", "full")
    assert store.members("saved") == once
    assert read_lines(paths["saved"]) == once


def test_origin_mode_checks_only_target(make_store, paths):
    store = make_store(used=["https://ex.com"])
    result = store.insert_deduped("origins", "https://ex.com/some/page?q=1", "origin", check="used")
    assert result.added
    assert result.value == "https://ex.com"
    again = store.insert_deduped("origins", "https://ex.com/other", "origin")
    assert (again.added, again.position) == (False, 1)
    assert read_lines(paths["origins"]) == ["https://ex.com"]


def test_invalid_mode_leaves_state(make_store, paths):
    store = make_store(saved=["https://ex.com/a"])
    with pytest.raises(InvalidModeError):
        store.insert_deduped("saved", "https://ex.com/b", "path")
    assert store.members("saved") == ["https://ex.com/a"]


def test_invalid_url(make_store):
    store = make_store()
    with pytest.raises(InvalidURLError):
        store.insert_deduped("saved", "nonsense", "full")


def test_save_all_persists_every_set(make_store, paths):
    store = make_store(saved=["a"], used=["b"])
    store.find("origins").members["o"] = None
    store.save_all()
    assert read_lines(paths["origins"]) == ["o"]
    assert read_lines(paths["saved"]) == ["a"]
    assert read_lines(paths["used"]) == ["b"]


def test_save_all_attempts_every_set(make_store, paths, monkeypatch):
    import svurl.store as store_mod

    store = make_store(saved=["a"], used=["b"])
    real = store_mod.save_members
    seen = []

    def flaky(path, members):
        seen.append(path.name)
        if path.name == ".saved":
            raise OSError("disk full")
        real(path, members)

    monkeypatch.setattr(store_mod, "save_members", flaky)
    store.find("used").members["c"] = None
    with pytest.raises(OSError):
        store.save_all()
    assert sorted(seen) == [".origins", ".saved", ".used"]
    assert read_lines(paths["used"]) == ["b", "c"]


def test_undo_restores_both_sets(make_store, paths):
    store = make_store(saved=["x", "y"], used=["u"])
    store.save_all()
    del store.find("saved").members["y"]
    store.find("used").members["y"] = None
    store.save_all()

    result = store.undo("saved", "used")
    assert result.ok
    assert read_lines(paths["saved"]) == ["x", "y"]
    assert read_lines(paths["used"]) == ["u"]
    assert store.members("saved") == ["x", "y"]


def test_undo_without_backup(make_store, paths):
    store = make_store(saved=["x"], used=[])
    result = store.undo("saved", "used")
    assert not result.ok
    assert set(result.missing) == {"saved", "used"}
    assert result.message.startswith("cannot undo")
    assert read_lines(paths["saved"]) == ["x"]


def test_show_lists_positions(make_store):
    store = make_store(saved=["a", "b"])
    text = store.show("saved")
    assert "1. a" in text and "2. b" in text
    assert store.summary()["saved"]["size"] == 2


def test_undo_with_one_backup_missing(make_store, paths):
    store = make_store(saved=["x"], used=["u"])
    store.save("saved")
    store.find("saved").members["y"] = None
    store.save("saved")

    result = store.undo("saved", "used")
    assert result.missing == ["used"]
    assert result.message == "cannot undo: no backup for used"
    assert read_lines(paths["saved"]) == ["x", "y"]
    assert read_lines(paths["used"]) == ["u"]
    assert has_backup(paths["saved"])
