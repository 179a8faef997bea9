"""
Tests for slug generation from Vietnamese/English names.
"""

import pytest

from app.utils.slug import slugify


class TestSlugify:
    def test_vietnamese_diacritics_are_stripped(self):
        assert slugify("Quán Cơm Nhà") == "quan-com-nha"

    def test_d_with_stroke_maps_to_d(self):
        assert slugify("Đà Nẵng") == "da-nang"
        assert slugify("đường Trần Phú") == "duong-tran-phu"

    def test_stacked_marks(self):
        # ộ carries two combining marks after NFD
        assert slugify("Bún Chả Hà Nội") == "bun-cha-ha-noi"

    def test_runs_of_separators_collapse(self):
        assert slugify("  Phở   24h -- Bắc!!  ") == "pho-24h-bac"

    def test_leading_and_trailing_hyphens_trimmed(self):
        assert slugify("--Cafe--") == "cafe"

    def test_no_alphanumerics_gives_empty(self):
        assert slugify("!!! ???") == ""
        assert slugify("") == ""

    @pytest.mark.parametrize(
        "text",
        ["Quán Cơm Nhà", "Đà Nẵng", "Bánh Mì Phượng (Hội An)", "already-a-slug", "  ", "ĐĐĐ 123 ơi!"],
    )
    def test_idempotent(self, text):
        once = slugify(text)
        assert slugify(once) == once

    def test_deterministic(self):
        assert slugify("Cà Phê Muối") == slugify("Cà Phê Muối") == "ca-phe-muoi"
