"""Tests for Path normalization, identity and navigation."""

import pytest

from portfs import HostFileSystem, IllegalUsageError, Path, PosixFileSystem, WindowsFileSystem


class TestPosixNormalization:
    """Test normalization with the '/' separator."""

    @pytest.fixture
    def fs(self) -> PosixFileSystem:
        return PosixFileSystem()

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("a/b", "a/b"),
            ("a//b", "a/b"),
            ("a/b/", "a/b"),
            ("./a/./b", "a/b"),
            ("/", "/"),
            ("//a///b//", "/a/b"),
            ("", "."),
            (".", "."),
            ("a/../b", "a/../b"),
        ],
    )
    def test_normalizes(self, fs: PosixFileSystem, raw: str, expected: str) -> None:
        """Should collapse separators and drop '.' and trailing separators."""
        assert str(fs.path(raw)) == expected

    def test_joins_children(self, fs: PosixFileSystem) -> None:
        """Should join children with the separator."""
        assert str(fs.path("build/", "testFolder", "listing/", "1.txt")) == "build/testFolder/listing/1.txt"

    def test_round_trips_through_string(self, fs: PosixFileSystem) -> None:
        """Should produce an equal path when rebuilt from its string form."""
        path = fs.path("//tmp//x/", "y")
        assert fs.path(str(path)) == path

    def test_navigation(self, fs: PosixFileSystem) -> None:
        """Should expose name, parent and parts on the same filesystem."""
        path = fs.path("/tmp/dir/file.txt")

        assert path.name == "file.txt"
        assert path.parts == ("/", "tmp", "dir", "file.txt")
        assert path.parent == fs.path("/tmp/dir")
        assert path.parent.file_system is fs
        assert fs.path("/").parent is None
        assert fs.path("/").name == ""
        assert fs.path("relative").parent is None
        assert fs.path("/tmp") / "x" == fs.path("/tmp/x")


class TestWindowsNormalization:
    """Test normalization with the '\\' separator and drive roots."""

    @pytest.fixture
    def fs(self) -> WindowsFileSystem:
        return WindowsFileSystem()

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("C:/Users//me/", "C:\\Users\\me"),
            ("c:\\Users\\.\\me", "C:\\Users\\me"),
            ("C:\\", "C:\\"),
            ("C:", "C:"),
            ("\\\\\\share\\dir\\", "\\share\\dir"),
            ("dir/sub", "dir\\sub"),
        ],
    )
    def test_normalizes(self, fs: WindowsFileSystem, raw: str, expected: str) -> None:
        """Should rewrite '/' and keep drive roots."""
        assert str(fs.path(raw)) == expected

    def test_navigation_stops_at_drive_root(self, fs: WindowsFileSystem) -> None:
        """Should treat the drive root as the last parent."""
        path = fs.path("C:\\a")

        assert path.parent == fs.path("C:\\")
        assert path.parent.parent is None
        assert path.name == "a"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("\\\\server\\share\\x", "\\\\server\\share\\x"),
            ("//server/share/dir/", "\\\\server\\share\\dir"),
            ("\\\\server\\share", "\\\\server\\share\\"),
        ],
    )
    def test_keeps_unc_root(self, fs: WindowsFileSystem, raw: str, expected: str) -> None:
        """Should keep '\\\\server\\share' as the root of a network path."""
        assert str(fs.path(raw)) == expected

    def test_navigation_stops_at_unc_root(self, fs: WindowsFileSystem) -> None:
        """Should treat the share as the last parent."""
        path = fs.path("\\\\server\\share\\a\\b")

        assert path.parts == ("\\\\server\\share\\", "a", "b")
        assert path.parent == fs.path("\\\\server\\share\\a")
        assert path.parent.parent == fs.path("\\\\server\\share")
        assert path.parent.parent.parent is None
        assert path.parent.parent.name == ""


class TestIdentity:
    """Test equality and hashing."""

    def test_equal_on_same_file_system(self) -> None:
        """Should compare equal for the same normalized string and filesystem."""
        fs = PosixFileSystem()

        assert fs.path("a//b/") == fs.path("a", "b")
        assert hash(fs.path("a//b/")) == hash(fs.path("a", "b"))
        assert len({fs.path("a/b"), fs.path("a", "b"), fs.path("a/b/")}) == 1

    def test_unequal_across_backends(self) -> None:
        """Should never treat string-identical paths of two backends as equal."""
        posix_path = PosixFileSystem().path("a/b")
        host_path = HostFileSystem().path("a/b")

        assert str(posix_path) == str(host_path)
        assert posix_path != host_path

    def test_unequal_across_instances_of_one_backend(self) -> None:
        """Should bind identity to the instance, not the backend class."""
        assert PosixFileSystem().path("a") != PosixFileSystem().path("a")

    def test_not_equal_to_strings(self) -> None:
        """Should not compare equal to a plain string."""
        assert PosixFileSystem().path("a") != "a"


class TestImmutability:
    """Test that paths cannot be changed."""

    def test_rejects_assignment(self) -> None:
        """Should raise on attribute assignment and deletion."""
        path = PosixFileSystem().path("a")

        with pytest.raises(AttributeError):
            path._normalized = "b"  # type: ignore[misc]
        with pytest.raises(AttributeError):
            del path._normalized

        assert str(path) == "a"


class TestCompatibility:
    """Test that paths are refused by foreign filesystems."""

    def test_foreign_path_is_illegal(self, tmp_path) -> None:
        """Should raise IllegalUsageError rather than an I/O failure."""
        posix = PosixFileSystem()
        host = HostFileSystem()
        path = posix.path(str(tmp_path))

        with pytest.raises(IllegalUsageError):
            host.exists(path)
        with pytest.raises(IllegalUsageError):
            host.list(path)
        with pytest.raises(IllegalUsageError):
            posix.copy(path, host.path(str(tmp_path), "copy"))

    def test_non_path_is_illegal(self) -> None:
        """Should reject objects that are not portfs paths."""
        with pytest.raises(IllegalUsageError):
            PosixFileSystem().exists("/tmp")  # type: ignore[arg-type]

    def test_path_constructor_binds_file_system(self) -> None:
        """Should bind a directly constructed path to the given filesystem."""
        fs = HostFileSystem()
        assert Path(fs, "x//y") == fs.path("x/y")
