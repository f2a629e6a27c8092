import pytest

from britannia.resources import ResourceKind, ResourceManager


class _Loaded:
    def __init__(self, name):
        self.name = name
        self.closed = False

    def close(self):
        self.closed = True


def _manager(calls):
    def loader(name):
        calls.append(name)
        return _Loaded(name)

    return ResourceManager({kind: loader for kind in ResourceKind})


def test_get_loads_once_and_caches():
    calls = []
    manager = _manager(calls)
    first = manager.get(ResourceKind.TEXTURE, "a.png")
    second = manager.get(ResourceKind.TEXTURE, "a.png")
    assert first is second
    assert calls == ["a.png"]


def test_kinds_are_separate():
    calls = []
    manager = _manager(calls)
    texture = manager.get(ResourceKind.TEXTURE, "x")
    sound = manager.get(ResourceKind.SOUND, "x")
    assert texture is not sound
    assert calls == ["x", "x"]


def test_add_replaces_cached():
    calls = []
    manager = _manager(calls)
    first = manager.get(ResourceKind.MODEL, "m")
    second = manager.add(ResourceKind.MODEL, "m")
    assert manager.get(ResourceKind.MODEL, "m") is second
    assert first is not second


def test_missing_loader_raises():
    manager = ResourceManager({})
    with pytest.raises(LookupError):
        manager.get(ResourceKind.MUSIC, "song.ogg")


def test_file_exists(tmp_path):
    path = tmp_path / "present.txt"
    path.write_text("data")
    manager = _manager([])
    assert manager.file_exists(str(path)) is True
    assert manager.file_exists(str(tmp_path / "absent.txt")) is False
    assert manager.file_exists(str(tmp_path)) is False


def test_file_exists_for_cached_texture():
    manager = _manager([])
    manager.get(ResourceKind.TEXTURE, "not-on-disk.png")
    assert manager.file_exists("not-on-disk.png") is True


def test_clear_textures_reloads():
    calls = []
    manager = _manager(calls)
    manager.get(ResourceKind.TEXTURE, "t")
    manager.clear_textures()
    manager.get(ResourceKind.TEXTURE, "t")
    assert calls == ["t", "t"]


def test_shutdown_closes_media_but_not_config():
    manager = _manager([])
    texture = manager.get(ResourceKind.TEXTURE, "t")
    music = manager.get(ResourceKind.MUSIC, "m")
    config = manager.get(ResourceKind.CONFIG, "c")
    manager.shutdown()
    assert texture.closed and music.closed
    assert config.closed is False