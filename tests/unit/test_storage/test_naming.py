"""Tests for blogbliss.storage.naming module.

Covers:
    - sanitize_slug: basic sanitization, edge cases, unicode, max length
    - file_extension: normalization and fallback
    - generate_asset_key: format, uniqueness, hostile filenames
"""

import re

from blogbliss.storage.naming import file_extension, generate_asset_key, sanitize_slug


class TestSanitizeSlug:
    """Tests for sanitize_slug()."""

    def test_basic_name(self):
        slug = sanitize_slug("Tesla's New Yorker Hotel, 1943!")
        assert slug == "teslas-new-yorker-hotel-1943"

    def test_lowercase(self):
        assert sanitize_slug("UPPER CASE NAME") == "upper-case-name"

    def test_strips_special_chars(self):
        assert sanitize_slug("hello@world#2024!") == "helloworld2024"

    def test_collapses_hyphens(self):
        assert sanitize_slug("too---many---hyphens") == "too-many-hyphens"

    def test_strips_leading_trailing_hyphens(self):
        assert sanitize_slug("---leading-trailing---") == "leading-trailing"

    def test_underscores_and_dots_to_hyphens(self):
        assert sanitize_slug("my_photo.final") == "my-photo-final"

    def test_max_length_default(self):
        assert len(sanitize_slug("a" * 100)) <= 60

    def test_max_length_custom(self):
        assert len(sanitize_slug("abcdefghijklmnop", max_length=10)) <= 10

    def test_empty_string_fallback(self):
        assert sanitize_slug("!@#$%^&*()") == "asset"

    def test_whitespace_only_fallback(self):
        assert sanitize_slug("   ") == "asset"

    def test_unicode_stripped(self):
        assert sanitize_slug("café au lait") == "caf-au-lait"


class TestFileExtension:
    """Tests for file_extension()."""

    def test_lowercases(self):
        assert file_extension("Beach.JPG") == "jpg"

    def test_last_suffix_only(self):
        assert file_extension("archive.tar.gz") == "gz"

    def test_no_extension(self):
        assert file_extension("README") == "bin"

    def test_none(self):
        assert file_extension(None) == "bin"

    def test_dotfile_has_no_extension(self):
        assert file_extension(".bashrc") == "bin"


class TestGenerateAssetKey:
    """Tests for generate_asset_key()."""

    def test_format_with_fixed_uuid(self):
        key = generate_asset_key("thumbnails", "Beach Day.JPG", uuid_str="abc123")
        assert key == "thumbnails/beach-day-abc123.jpg"

    def test_random_uuid_suffix(self):
        key = generate_asset_key("avatars", "me.png")
        assert re.fullmatch(r"avatars/me-[0-9a-f]{32}\.png", key)

    def test_same_filename_gives_distinct_keys(self):
        keys = {generate_asset_key("avatars", "me.png") for _ in range(20)}
        assert len(keys) == 20

    def test_missing_filename(self):
        key = generate_asset_key("thumbnails", None, uuid_str="u")
        assert key == "thumbnails/asset-u.bin"

    def test_directory_components_dropped(self):
        key = generate_asset_key("avatars", "../../etc/passwd", uuid_str="u")
        assert key == "avatars/passwd-u.bin"
        assert ".." not in key
