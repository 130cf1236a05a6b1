import pytest

from product_sync.utils.images import placeholder_image_url
from product_sync.utils.seeds import default_seed, demo_seeds


@pytest.mark.unit
class TestPlaceholderImage:

    def test_title_is_percent_encoded(self):
        url = placeholder_image_url("Speed Limit: None / 0-60")

        assert url == "https://placehold.co/800x800.png?text=Speed%20Limit%3A%20None%20%2F%200-60"

    def test_deterministic(self):
        assert placeholder_image_url("Hat") == placeholder_image_url("Hat")

    def test_custom_base_and_size(self):
        url = placeholder_image_url("Hat", base_url="https://img.example.com/", size="400x400")

        assert url == "https://img.example.com/400x400.png?text=Hat"

    @pytest.mark.parametrize("title", [None, "", "   "])
    def test_blank_title(self, title):
        assert placeholder_image_url(title).endswith("?text=Product")


@pytest.mark.unit
class TestSeeds:

    def test_demo_lineup(self):
        seeds = demo_seeds()

        assert len(seeds) == 20
        assert seeds[0].product_type == "Hat"
        assert seeds[-1].product_type == "Limited Hoodie"
        assert all(s.brand == "Scary Fast" for s in seeds)
        assert seeds[3].style_notes.endswith("reflective logo chest")

    def test_brand_override(self):
        assert {s.brand for s in demo_seeds("Other Co")} == {"Other Co"}
        assert default_seed("Other Co").brand == "Other Co"

    def test_default_seed(self):
        seed = default_seed()

        assert seed.product_type == "t-shirt"
        assert "Louisiana" in seed.theme_notes
