from cuppa_cli.files import ensure_dir, file_exists, is_empty_dir, read_json, write_file, write_json


class TestFiles:
    def test_write_file_creates_parents(self, tmp_path):
        target = write_file(tmp_path / "a" / "b" / "out.txt", "héllo")
        assert target.read_text(encoding="utf-8") == "héllo"
        assert file_exists(target)

    def test_json_round_trip(self, tmp_path):
        path = write_json(tmp_path / "data.json", {"name": "app", "platforms": ["ios"]})
        assert path.read_text().endswith("}\n")
        assert read_json(path) == {"name": "app", "platforms": ["ios"]}

    def test_empty_dir(self, tmp_path):
        directory = ensure_dir(tmp_path / "empty")
        assert is_empty_dir(directory)
        (directory / "x").write_text("")
        assert not is_empty_dir(directory)
        assert not is_empty_dir(tmp_path / "missing")
