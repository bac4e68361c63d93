"""
Unit tests for target list loading.
"""

import pytest
from hypothesis import given, strategies as st

from website_checker.data.targets import load_urls, parse_urls
from website_checker.utils.errors import ConfigurationError, TargetListError


class TestParseUrls:

    def test_strips_and_skips_blank_lines(self):
        text = "  http://a.test/  \n\n\t\nhttp://b.test/\r\n   \n"
        assert parse_urls(text) == ["http://a.test/", "http://b.test/"]

    def test_keeps_order_and_duplicates(self):
        text = "http://b.test/\nhttp://a.test/\nhttp://b.test/\n"
        assert parse_urls(text) == ["http://b.test/", "http://a.test/", "http://b.test/"]

    def test_lines_are_not_validated(self):
        assert parse_urls("not a url\nftp://x\n") == ["not a url", "ftp://x"]

    def test_empty_text(self):
        assert parse_urls("") == []

    @given(st.lists(st.text(alphabet="abc:/. \t", max_size=12), max_size=20))
    def test_no_blank_or_padded_entries(self, lines):
        urls = parse_urls("\n".join(lines))

        assert all(url and url == url.strip() for url in urls)
        assert len(urls) == sum(1 for line in lines if line.strip())


class TestLoadUrls:

    def test_reads_file(self, tmp_path):
        path = tmp_path / "urls.txt"
        path.write_text("http://a.test/\n\nhttp://b.test/\n", encoding="utf-8")

        assert load_urls(path) == ["http://a.test/", "http://b.test/"]

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(TargetListError):
            load_urls(tmp_path / "absent.txt")

    def test_undecodable_file_raises(self, tmp_path):
        path = tmp_path / "urls.txt"
        path.write_bytes(b"http://a.test/\n\xff\xfe\xfa\n")

        with pytest.raises(TargetListError):
            load_urls(path)

    def test_target_list_error_is_configuration_error(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_urls(tmp_path)
