"""
Tests for slugs and automatic logo assignment
"""
from m3u_parser import Channel
from auto_logo import generate_logo_url, apply_auto_logos
from utils import slugify


class TestSlugify:
    def test_punctuation_and_spaces(self):
        assert slugify("ESPN 2 (US)!") == "espn-2-us"

    def test_collapses_hyphens_and_trims(self):
        assert slugify("  --BBC   One--  ") == "bbc-one"

    def test_keeps_underscores_and_digits(self):
        assert slugify("Sky_Sports 1") == "sky_sports-1"

    def test_non_ascii_letters_dropped(self):
        assert slugify("Café TV") == "caf-tv"
        assert slugify("Первый канал") == ""

    def test_empty_result(self):
        assert slugify("!!!") == ""
        assert slugify("") == ""


class TestGenerateLogoUrl:
    def test_url_shape(self):
        assert generate_logo_url("CNN International") == \
            "https://raw.githubusercontent.com/iptv-org/tv-logos/master/logos/cnn-international.png"

    def test_base_url_trailing_slash_stripped(self, monkeypatch):
        monkeypatch.setattr("auto_logo.LOGO_BASE_URL", "http://logos.example///")
        assert generate_logo_url("A B") == "http://logos.example/a-b.png"


class TestApplyAutoLogos:
    def test_existing_logo_untouched(self):
        channels = [Channel(name="X", url="http://s", logo="http://x")]
        assert apply_auto_logos(channels)[0].logo == "http://x"

    def test_missing_logo_filled(self):
        channels = [Channel(name="Fox News", url="http://s")]
        result = apply_auto_logos(channels)
        assert result[0].logo == generate_logo_url("Fox News")
        assert channels[0].logo == ""
        assert result[0].id == channels[0].id

    def test_whitespace_logo_counts_as_missing(self):
        channels = [Channel(name="A", url="http://s", logo="   ")]
        assert apply_auto_logos(channels)[0].logo == generate_logo_url("A")

    def test_target_indices_respected(self):
        channels = [Channel(name=n, url="http://s") for n in ("A", "B", "C")]
        result = apply_auto_logos(channels, [1])
        assert [c.logo for c in result] == ["", generate_logo_url("B"), ""]

    def test_override_url(self):
        channels = [
            Channel(name="A", url="http://s"),
            Channel(name="B", url="http://s", logo="http://keep"),
            Channel(name="C", url="http://s"),
        ]
        result = apply_auto_logos(channels, [0, 1, 2], override_url=" http://custom ")
        assert [c.logo for c in result] == ["http://custom", "http://keep", "http://custom"]

    def test_blank_override_falls_back(self):
        channels = [Channel(name="A", url="http://s")]
        assert apply_auto_logos(channels, override_url="  ")[0].logo == generate_logo_url("A")

    def test_length_and_order_preserved(self):
        channels = [Channel(name=n, url="http://s") for n in ("A", "B")]
        assert [c.name for c in apply_auto_logos(channels, [])] == ["A", "B"]
