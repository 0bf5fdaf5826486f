import pytest

from pixeldino.config.themes import (
    Theme,
    list_themes,
    load_theme,
    theme_from_nft_metadata,
    to_rgb,
)


class TestToRgb:
    def test_parses_hex(self):
        assert to_rgb("#7c3aed") == (124, 58, 237)
        assert to_rgb("ffffff") == (255, 255, 255)

    @pytest.mark.parametrize("bad", ["#fff", "#gggggg", ""])
    def test_rejects_invalid(self, bad):
        with pytest.raises(ValueError):
            to_rgb(bad)


class TestTheme:
    def test_defaults_are_classic(self):
        theme = Theme()
        assert theme.rgb("background") == (255, 255, 255)
        assert theme.palette_rgb()[0] is None
        assert theme.palette_rgb()[1] == (83, 83, 83)

    def test_palette_must_start_transparent(self):
        with pytest.raises(ValueError):
            Theme(layout=["#000000", "#ffffff"])

    def test_invalid_color_rejected(self):
        with pytest.raises(ValueError):
            Theme(road="red")

    def test_from_dict_fills_defaults(self):
        theme = Theme.from_dict({"name": "x", "background": "#000000"})
        assert theme.name == "x"
        assert theme.road == Theme().road
        assert Theme.from_dict(theme.to_dict()) == theme


class TestBundledThemes:
    def test_bundled_themes_listed(self):
        assert {"classic", "colorful", "night"} <= set(list_themes())

    @pytest.mark.parametrize("name", ["classic", "colorful", "night"])
    def test_bundled_themes_load(self, name):
        theme = load_theme(name)
        assert theme.name == name
        assert theme.layout[0] is None

    def test_missing_theme_falls_back(self, tmp_path):
        theme = load_theme("nonexistent", tmp_path)
        assert theme.name == "nonexistent"
        assert theme.background == Theme().background

    def test_custom_theme_directory(self, tmp_path):
        (tmp_path / "mine.yaml").write_text(
            'background: "#101010"\nlayout: [null, "#abcdef"]\n', encoding="utf-8"
        )
        theme = load_theme("mine", tmp_path)
        assert theme.name == "mine"
        assert theme.rgb("background") == (16, 16, 16)
        assert list_themes(tmp_path) == ["mine"]


class TestNftTheme:
    def test_traits_pick_colors(self):
        metadata = {
            "name": "Dino #7",
            "attributes": [
                {"trait_type": "background", "value": "purple"},
                {"trait_type": "clothing", "value": "green hoodie"},
            ],
        }
        theme = theme_from_nft_metadata(metadata)

        assert theme.name == "Dino #7"
        assert theme.background == "#a855f7"
        assert theme.layout[1] == "#22c55e"
        assert theme.road == "#7c3aed"

    def test_unknown_traits_fall_back(self):
        theme = theme_from_nft_metadata({"attributes": [{"trait_type": "background", "value": "plaid"}]})
        assert theme.name == "nft"
        assert theme.background == "#ffffff"
        assert theme.layout[1] == "#535353"

    def test_no_attributes(self):
        assert theme_from_nft_metadata({}).layout[0] is None
