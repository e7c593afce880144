# ABOUTME: Tests for MapFloorLocator: floor file lookup order and opening stores per floor
# ABOUTME: User map directory is checked before the bundled one

import pytest

from osrswiki.maps import MapFloorLocator, TileStoreOpenError


@pytest.fixture
def map_dirs(tmp_path):
    user_dir = tmp_path / "user"
    bundled_dir = tmp_path / "bundled"
    user_dir.mkdir()
    bundled_dir.mkdir()
    return user_dir, bundled_dir


def _write_floor(directory, floor, mbtiles_factory, payload: bytes):
    path = mbtiles_factory(f"{directory.name}_floor_{floor}.mbtiles", {(0, 0, 0): payload})
    target = directory / f"map_floor_{floor}.mbtiles"
    path.rename(target)
    return target


class TestLocateFloor:
    def test_user_directory_wins(self, map_dirs, mbtiles_factory):
        user_dir, bundled_dir = map_dirs
        user_file = _write_floor(user_dir, 0, mbtiles_factory, b"user")
        _write_floor(bundled_dir, 0, mbtiles_factory, b"bundled")

        locator = MapFloorLocator(map_directory=user_dir, bundled_directory=bundled_dir)
        assert locator.locate_floor(0) == user_file

    def test_falls_back_to_bundled(self, map_dirs, mbtiles_factory):
        user_dir, bundled_dir = map_dirs
        bundled_file = _write_floor(bundled_dir, 2, mbtiles_factory, b"bundled")

        locator = MapFloorLocator(map_directory=user_dir, bundled_directory=bundled_dir)
        assert locator.locate_floor(2) == bundled_file

    def test_missing_floor(self, map_dirs):
        user_dir, bundled_dir = map_dirs
        assert MapFloorLocator(map_directory=user_dir, bundled_directory=bundled_dir).locate_floor(1) is None

    @pytest.mark.parametrize("floor", [-1, 4, 10])
    def test_floor_out_of_range(self, map_dirs, floor):
        user_dir, _ = map_dirs
        with pytest.raises(ValueError):
            MapFloorLocator(map_directory=user_dir).locate_floor(floor)

    def test_available_floors(self, map_dirs, mbtiles_factory):
        user_dir, bundled_dir = map_dirs
        _write_floor(user_dir, 0, mbtiles_factory, b"0")
        _write_floor(bundled_dir, 3, mbtiles_factory, b"3")

        locator = MapFloorLocator(map_directory=user_dir, bundled_directory=bundled_dir)
        assert locator.available_floors() == [0, 3]

    def test_directories_from_config(self, map_dirs, mbtiles_factory, monkeypatch):
        user_dir, bundled_dir = map_dirs
        _write_floor(bundled_dir, 1, mbtiles_factory, b"1")
        monkeypatch.setenv("OSRSWIKI_MAP_DIRECTORY", str(user_dir))
        monkeypatch.setenv("OSRSWIKI_BUNDLED_MAP_DIRECTORY", str(bundled_dir))
        from osrswiki.config import reload_config

        reload_config()

        assert MapFloorLocator().available_floors() == [1]


class TestOpenFloor:
    def test_opens_store_with_configured_cache(self, map_dirs, mbtiles_factory):
        user_dir, _ = map_dirs
        _write_floor(user_dir, 0, mbtiles_factory, b"ground floor")

        locator = MapFloorLocator(map_directory=user_dir, cache_max_bytes=2048, cache_max_entries=8)
        with locator.open_floor(0) as store:
            assert store.get_tile(0, 0, 0) == b"ground floor"
            assert store.cache.max_bytes == 2048
            assert store.cache.max_entries == 8

    def test_each_floor_gets_its_own_cache(self, map_dirs, mbtiles_factory):
        user_dir, _ = map_dirs
        _write_floor(user_dir, 0, mbtiles_factory, b"0")
        _write_floor(user_dir, 1, mbtiles_factory, b"1")

        locator = MapFloorLocator(map_directory=user_dir)
        with locator.open_floor(0) as ground, locator.open_floor(1) as first:
            assert ground.cache is not first.cache
            assert ground.get_tile(0, 0, 0) == b"0"
            assert first.get_tile(0, 0, 0) == b"1"

    def test_missing_floor_raises(self, map_dirs):
        user_dir, _ = map_dirs
        with pytest.raises(TileStoreOpenError):
            MapFloorLocator(map_directory=user_dir).open_floor(2)
