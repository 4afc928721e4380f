import unittest
from urllib.parse import urlsplit

from seesaa_relay.config import RelayConfig
from seesaa_relay.errors import EncodingError, InvalidURLError, PathDecodeError
from seesaa_relay.rewrite import to_display_url, to_fetch_url
from seesaa_relay.transcode import encode_legacy, escape_path


class DisplayUrlTest(unittest.TestCase):
    def setUp(self) -> None:
        self.config = RelayConfig()

    def test_origin_host_is_replaced_and_path_made_readable(self) -> None:
        url = to_display_url("http://seesaawiki.jp/%C5%C1", self.config)
        self.assertEqual(url, "http://seesaawiki.gaato.net/伝")

    def test_query_and_fragment_are_kept(self) -> None:
        url = to_display_url("https://seesaawiki.jp/w/foo/d/%A5%DA%A1%BC%A5%B8?page=2#top", self.config)
        self.assertEqual(url, "http://seesaawiki.gaato.net/w/foo/d/ページ?page=2#top")

    def test_port_is_kept(self) -> None:
        url = to_display_url("http://seesaawiki.jp:8080/x", self.config)
        self.assertEqual(url, "http://seesaawiki.gaato.net:8080/x")

    def test_userinfo_and_host_case_are_kept(self) -> None:
        url = to_display_url("http://user:pw@SeesaaWiki.JP:8080/x", self.config)
        self.assertEqual(url, "http://user:pw@seesaawiki.gaato.net:8080/x")
        self.assertEqual(to_display_url("http://Example.COM/x", self.config), "http://Example.COM/x")

    def test_url_delimiters_in_titles_are_escaped(self) -> None:
        cases = {
            "100%": "/w/d/100%25",
            "何?": "/w/d/何%3F",
            "C#": "/w/d/C%23",
            "a b": "/w/d/a%20b",
        }
        for title, expected_path in cases.items():
            with self.subTest(title=title):
                origin = "https://seesaawiki.jp/w/d/" + escape_path(encode_legacy(title))
                url = to_display_url(origin, self.config)
                parts = urlsplit(url)
                self.assertEqual(parts.path, expected_path)
                self.assertEqual((parts.query, parts.fragment), ("", ""))

    def test_displayed_path_relays_back_to_the_origin_page(self) -> None:
        for title in ("100%", "何?", "C#", "a b", "ページ名", "東方/キャラ"):
            with self.subTest(title=title):
                origin = "https://seesaawiki.jp/w/d/" + escape_path(encode_legacy(title))
                displayed = urlsplit(to_display_url(origin, self.config))
                self.assertEqual(to_fetch_url(displayed.path, self.config), origin)

    def test_display_scheme_comes_from_config(self) -> None:
        config = RelayConfig(display_scheme="https")
        url = to_display_url("http://seesaawiki.jp/x", config)
        self.assertEqual(url, "https://seesaawiki.gaato.net/x")

    def test_other_hosts_are_left_alone(self) -> None:
        url = to_display_url("https://example.com/%C5%C1", self.config)
        self.assertEqual(url, "http://example.com/伝")

    def test_malformed_urls_are_rejected(self) -> None:
        for raw in ("http://[::1", "not a url", "ftp://seesaawiki.jp/x", "http:///path-only"):
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidURLError):
                    to_display_url(raw, self.config)

    def test_bad_escape_is_a_path_decode_error(self) -> None:
        with self.assertRaises(PathDecodeError):
            to_display_url("http://seesaawiki.jp/%zz", self.config)

    def test_non_euc_path_is_an_encoding_error(self) -> None:
        with self.assertRaises(EncodingError):
            to_display_url("http://seesaawiki.jp/%FF%FF", self.config)


class FetchUrlTest(unittest.TestCase):
    def setUp(self) -> None:
        self.config = RelayConfig()

    def test_utf8_title_becomes_escaped_euc_jp(self) -> None:
        url = to_fetch_url("%E3%83%9A%E3%83%BC%E3%82%B8", self.config)
        self.assertEqual(url, "https://seesaawiki.jp/%A5%DA%A1%BC%A5%B8")

    def test_multi_segment_path_keeps_separators(self) -> None:
        url = to_fetch_url("foo/d/%E4%BC%9D", self.config)
        self.assertEqual(url, "https://seesaawiki.jp/foo/d/%C5%C1")

    def test_escaped_slash_is_restored(self) -> None:
        url = to_fetch_url("foo%2Fd%2F%E4%BC%9D", self.config)
        self.assertEqual(url, "https://seesaawiki.jp/foo/d/%C5%C1")

    def test_raw_bytes_are_accepted(self) -> None:
        url = to_fetch_url("伝".encode("utf-8"), self.config)
        self.assertEqual(url, "https://seesaawiki.jp/%C5%C1")

    def test_origin_comes_from_config(self) -> None:
        config = RelayConfig(origin_host="wiki.example.jp", origin_scheme="http")
        self.assertEqual(to_fetch_url("a", config), "http://wiki.example.jp/a")

    def test_non_utf8_path_is_rejected(self) -> None:
        with self.assertRaises(PathDecodeError):
            to_fetch_url("%FF%FE", self.config)

    def test_bad_escape_is_rejected(self) -> None:
        with self.assertRaises(PathDecodeError):
            to_fetch_url("%E3%8", self.config)

    def test_unrepresentable_title_is_rejected(self) -> None:
        with self.assertRaises(EncodingError):
            to_fetch_url("%ED%95%9C", self.config)


if __name__ == "__main__":
    unittest.main()
