"""
Unit tests for filenamer.py - Collision-free destination naming
"""
from airdroppro.common.filenamer import split_name, unique_path


class TestSplitName:

    def test_simple(self):
        assert split_name("report.pdf") == ("report", "pdf")

    def test_multiple_dots(self):
        assert split_name("archive.tar.gz") == ("archive.tar", "gz")

    def test_no_extension(self):
        assert split_name("Makefile") == ("Makefile", "")

    def test_dotfile(self):
        assert split_name(".bashrc") == (".bashrc", "")


class TestUniquePath:
    """Tests for unique_path()"""

    def test_free_name_is_returned_unchanged(self, temp_dir):
        assert unique_path(temp_dir, "a.txt") == temp_dir / "a.txt"

    def test_does_not_create_the_file(self, temp_dir):
        path = unique_path(temp_dir, "a.txt")
        assert not path.exists()

    def test_first_collision_gets_suffix_one(self, temp_dir):
        (temp_dir / "a.txt").write_text("x")
        assert unique_path(temp_dir, "a.txt") == temp_dir / "a(1).txt"

    def test_probes_until_free(self, temp_dir):
        (temp_dir / "a.txt").write_text("x")
        (temp_dir / "a(1).txt").write_text("x")
        (temp_dir / "a(2).txt").write_text("x")
        assert unique_path(temp_dir, "a.txt") == temp_dir / "a(3).txt"

    def test_gap_is_reused(self, temp_dir):
        (temp_dir / "a.txt").write_text("x")
        (temp_dir / "a(2).txt").write_text("x")
        assert unique_path(temp_dir, "a.txt") == temp_dir / "a(1).txt"

    def test_creates_missing_base_dir(self, temp_dir):
        base = temp_dir / "nested" / "downloads"
        path = unique_path(base, "a.txt")
        assert base.is_dir()
        assert path == base / "a.txt"

    def test_accepts_string_base_dir(self, temp_dir):
        assert unique_path(str(temp_dir), "b.bin") == temp_dir / "b.bin"

    def test_collision_without_extension(self, temp_dir):
        (temp_dir / "README").write_text("x")
        assert unique_path(temp_dir, "README") == temp_dir / "README(1)."
