"""
Unit tests for scanner module functions.
"""

import os
import pytest
from pathlib import Path
from dupecheck.scanner import (
    DirectoryWalkSource,
    GlobPatternSource,
    find_image_files,
    iter_candidates,
    has_image_extension,
    is_excluded_entry,
    calculate_file_hash,
    fingerprint_length,
    read_image_details,
)
from dupecheck.config import IMAGE_EXTENSIONS


class TestCalculateFileHash:
    """Test calculate_file_hash function."""

    def test_identical_files_same_hash(self, workspace):
        hash1 = calculate_file_hash(workspace['target'])
        hash2 = calculate_file_hash(workspace['copy'])
        assert hash1 == hash2
        assert len(hash1) == 32  # MD5 hex length
        assert len(hash1) == fingerprint_length()

    def test_repeated_calls_deterministic(self, workspace):
        assert calculate_file_hash(workspace['unique']) == calculate_file_hash(workspace['unique'])

    def test_different_files_different_hash(self, workspace):
        hash1 = calculate_file_hash(workspace['target'])
        hash2 = calculate_file_hash(workspace['unique'])
        assert hash1 != hash2

    def test_known_digest(self, temp_dir):
        path = temp_dir / "abc.bin"
        path.write_bytes(b"abc")
        assert calculate_file_hash(path) == "900150983cd24fb0d6963f7d28e17f72"

    def test_byte_order_matters(self, temp_dir):
        a = temp_dir / "a.bin"
        b = temp_dir / "b.bin"
        a.write_bytes(b"ab")
        b.write_bytes(b"ba")
        assert calculate_file_hash(a) != calculate_file_hash(b)

    def test_small_chunks_same_digest(self, workspace):
        """Chunk size must not change the fingerprint."""
        assert calculate_file_hash(workspace['target'], chunk_size=7) == \
            calculate_file_hash(workspace['target'])

    def test_nonexistent_file_raises(self):
        with pytest.raises(OSError):
            calculate_file_hash("/nonexistent/file.jpg")

    def test_directory_raises(self, temp_dir):
        with pytest.raises(OSError):
            calculate_file_hash(temp_dir)


class TestExtensionFilter:
    """Test extension and exclusion helpers."""

    def test_case_insensitive(self):
        assert has_image_extension("/a/photo.JPG", IMAGE_EXTENSIONS)
        assert has_image_extension("/a/photo.WebP", IMAGE_EXTENSIONS)

    def test_rejects_other_extensions(self):
        assert not has_image_extension("/a/readme.txt", IMAGE_EXTENSIONS)
        assert not has_image_extension("/a/noext", IMAGE_EXTENSIONS)
        assert not has_image_extension("/a/archive.png.zip", IMAGE_EXTENSIONS)

    def test_excluded_entries(self):
        assert is_excluded_entry("node_modules")
        assert is_excluded_entry(".git")
        assert is_excluded_entry(".hidden.png")
        assert not is_excluded_entry("images")


class TestDirectoryWalkSource:
    """Test recursive directory walking."""

    def test_yields_exactly_image_files(self, workspace):
        files = set(find_image_files(workspace['root']))
        expected = {
            str(workspace['target']),
            str(workspace['copy']),
            str(workspace['nested_copy']),
            str(workspace['unique']),
            str(workspace['jpeg']),
        }
        assert files == expected

    def test_skips_node_modules_and_hidden(self, workspace):
        for path in find_image_files(workspace['root']):
            parts = Path(path).relative_to(workspace['root']).parts
            assert 'node_modules' not in parts
            assert not any(part.startswith('.') for part in parts)

    def test_relative_paths(self, workspace):
        pairs = dict(DirectoryWalkSource([workspace['root']]))
        assert pairs[str(workspace['copy'])] == os.path.join("backup", "red_copy.png")

    def test_relative_to_each_root(self, workspace):
        roots = [workspace['root'] / "images", workspace['root'] / "backup"]
        pairs = dict(DirectoryWalkSource(roots))
        assert pairs[str(workspace['copy'])] == "red_copy.png"
        assert pairs[str(workspace['target'])] == "red.png"

    def test_missing_root_skipped(self, workspace):
        source = DirectoryWalkSource([workspace['root'] / "missing", workspace['root'] / "images"])
        paths = [absolute for absolute, _ in source]
        assert str(workspace['target']) in paths

    def test_overlapping_roots_yield_each_file_once(self, workspace):
        root = workspace['root']
        source = DirectoryWalkSource([
            root / "deep",
            root / "deep" / "a",
            root / "backup",
            root / "backup",
        ])
        paths = [absolute for absolute, _ in source]
        assert len(paths) == len(set(paths))
        assert set(paths) == {str(workspace['nested_copy']), str(workspace['copy'])}

    def test_nested_root_listed_first(self, workspace):
        root = workspace['root']
        pairs = list(DirectoryWalkSource([root / "deep" / "a", root]))
        paths = [absolute for absolute, _ in pairs]
        assert paths.count(str(workspace['nested_copy'])) == 1
        # Relative to the first root that reached it
        assert dict(pairs)[str(workspace['nested_copy'])] == os.path.join("b", "red.PNG")

    def test_source_can_be_iterated_again(self, workspace):
        source = DirectoryWalkSource([workspace['root'], workspace['root']])
        single = list(DirectoryWalkSource([workspace['root']]))
        assert list(source) == single
        assert list(source) == single

    def test_deterministic_order(self, workspace):
        first = [p for p, _ in DirectoryWalkSource([workspace['root']])]
        second = [p for p, _ in DirectoryWalkSource([workspace['root']])]
        assert first == second

    def test_custom_extensions(self, workspace):
        files = find_image_files(workspace['root'], extensions={'.jpg'})
        assert files == [str(workspace['jpeg'])]

    def test_empty_directory(self, temp_dir):
        empty_dir = temp_dir / "empty"
        empty_dir.mkdir()
        assert find_image_files(empty_dir) == []

    @pytest.mark.skipif(os.name == 'nt' or os.geteuid() == 0,
                        reason="permission bits not enforced")
    def test_unreadable_directory_skipped(self, workspace):
        locked = workspace['root'] / "locked"
        locked.mkdir()
        (locked / "x.png").write_bytes(b"x")
        locked.chmod(0)
        try:
            files = find_image_files(workspace['root'])
        finally:
            locked.chmod(0o755)
        assert str(workspace['target']) in files
        assert str(locked / "x.png") not in files


class TestGlobPatternSource:
    """Test glob-pattern candidate resolution."""

    def test_recursive_pattern(self, workspace):
        source = GlobPatternSource(workspace['root'], ["**/*.png"])
        paths = {absolute for absolute, _ in iter_candidates(source, IMAGE_EXTENSIONS)}
        assert str(workspace['target']) in paths
        assert str(workspace['copy']) in paths
        assert str(workspace['modules_copy']) not in paths

    def test_extension_filter_reapplied(self, workspace):
        source = GlobPatternSource(workspace['root'], ["**/*"])
        paths = {absolute for absolute, _ in iter_candidates(source, IMAGE_EXTENSIONS)}
        assert str(workspace['text']) not in paths
        assert str(workspace['jpeg']) in paths

    def test_each_file_once(self, workspace):
        source = GlobPatternSource(workspace['root'], ["images/*.png", "**/*.png"])
        paths = [absolute for absolute, _ in source]
        assert len(paths) == len(set(paths))

    def test_relative_to_base(self, workspace):
        source = GlobPatternSource(workspace['root'], ["backup/*.png"])
        assert list(source) == [(str(workspace['copy']), os.path.join("backup", "red_copy.png"))]

    def test_bad_pattern_skipped(self, workspace):
        source = GlobPatternSource(workspace['root'], ["/absolute/*.png", "images/*.jpg"])
        assert [absolute for absolute, _ in source] == [str(workspace['jpeg'])]

    def test_directories_not_yielded(self, workspace):
        source = GlobPatternSource(workspace['root'], ["*"])
        for absolute, _ in source:
            assert os.path.isfile(absolute)


class TestReadImageDetails:
    """Test read_image_details function."""

    def test_valid_image(self, workspace):
        details = read_image_details(workspace['target'])
        assert details['width'] == 40
        assert details['height'] == 30
        assert details['resolution'] == "40x30"
        assert details['format'] == "PNG"
        assert details['file_size'] > 0
        assert 'error' not in details

    def test_not_an_image(self, workspace):
        details = read_image_details(workspace['text'])
        assert details['file_size'] > 0
        assert details['width'] == 0
        assert 'error' in details

    def test_missing_file(self):
        details = read_image_details("/nonexistent/image.png")
        assert details['file_size'] == 0
        assert 'error' in details
