"""Tests for the directory-backed gazetteer repository."""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest

from navable.adapters.gazetteer import DirectoryGazetteerRepository
from navable.config import GazetteerConfig
from navable.domain.errors import LoadError
from navable.gazetteer import load_gazetteer


@pytest.fixture
def data_dir(tmp_path, campus_text):
    (tmp_path / "b_more.txt").write_text(
        "Kane Hall 1.0 1.0\nPaccar Hall 47.65889 -122.30823\n", encoding="utf-8"
    )
    (tmp_path / "a_campus.txt").write_text(campus_text, encoding="utf-8")
    (tmp_path / "notes.md").write_text("Ignored 1 2", encoding="utf-8")
    return tmp_path


def _repo(path):
    return DirectoryGazetteerRepository(GazetteerConfig(data_dir=path))


class TestDirectoryGazetteerRepository:
    def test_reads_txt_files_in_name_order(self, data_dir):
        gaz = _repo(data_dir).load()

        assert len(gaz) == 7
        assert gaz.names()[-1] == "Paccar Hall"
        assert gaz.get("Kane Hall").source == "a_campus.txt"
        assert "Ignored" not in gaz

    def test_load_returns_same_instance(self, data_dir):
        repo = _repo(data_dir)
        assert repo.load() is repo.load()

    def test_concurrent_loads_build_once(self, data_dir):
        repo = _repo(data_dir)
        with patch(
            "navable.adapters.gazetteer.text_repository.load_gazetteer",
            wraps=load_gazetteer,
        ) as spy:
            with ThreadPoolExecutor(max_workers=8) as pool:
                results = list(pool.map(lambda _: repo.load(), range(16)))

        assert spy.call_count == 1
        assert all(r is results[0] for r in results)

    def test_reload_picks_up_changes(self, data_dir):
        repo = _repo(data_dir)
        first = repo.load()
        (data_dir / "c_new.txt").write_text("Burke Museum 47.66 -122.31", encoding="utf-8")

        second = repo.reload()

        assert second is not first
        assert "Burke Museum" in second
        assert repo.load() is second

    def test_missing_directory(self, tmp_path):
        with pytest.raises(LoadError):
            _repo(tmp_path / "missing").load()

    def test_directory_without_files(self, tmp_path):
        with pytest.raises(LoadError):
            _repo(tmp_path).load()

    def test_unreadable_file_is_skipped(self, data_dir):
        (data_dir / "broken.txt").write_bytes(b"\xff\xfe\xfa not utf-8")
        gaz = _repo(data_dir).load()
        assert len(gaz) == 7

    def test_bundled_campus_data_loads(self):
        gaz = DirectoryGazetteerRepository(GazetteerConfig()).load()
        assert "Suzzallo Library" in gaz
        assert "Husky Union Building" in gaz
