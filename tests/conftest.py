import pytest

from svurl.store import Store


class RecordingOpener:
    def __init__(self, fail: bool = False):
        self.opened = []
        self.fail = fail

    def __call__(self, url):
        self.opened.append(url)
        if self.fail:
            raise RuntimeError("no browser")
        return True


def write_lines(path, lines):
    path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")


def read_lines(path):
    return path.read_text(encoding="utf-8").splitlines()


@pytest.fixture
def paths(tmp_path):
    return {name: tmp_path / f".{name}" for name in ("saved", "origins", "used")}


@pytest.fixture
def opener():
    return RecordingOpener()


@pytest.fixture
def make_store(paths, opener):
    stores = []

    def _make(index_floor=1, **contents):
        for name, lines in contents.items():
            write_lines(paths[name], lines)
        store = Store({k: str(v) for k, v in paths.items()}, opener=opener, index_floor=index_floor)
        store.wait_all()
        stores.append(store)
        return store

    yield _make
    for s in stores:
        s.close()
