"""Tests for extracting dress records from gallery markup."""

from bs4 import BeautifulSoup

from gallery_sync.html_utils import (
    extract_data_attributes,
    extract_dresses,
    extract_dresses_from_file,
    extract_image,
    extract_plain_name,
    extract_price_marker,
)
from gallery_sync.models import Dress


def _item(html: str):
    return BeautifulSoup(html, "html.parser").find(class_="gallery-item")


class TestExtractDresses:
    """Tests for extract_dresses on a full page."""

    def test_extracts_one_record_per_item(self, gallery_html):
        dresses = extract_dresses(gallery_html)

        assert len(dresses) == 3
        assert all(isinstance(d, Dress) for d in dresses)

    def test_data_attributes_win(self, gallery_html):
        first = extract_dresses(gallery_html)[0]

        assert first.name == "Elegant Wedding Dress"
        assert first.price == 299  # data-price beats the price marker
        assert first.type == "wedding"
        assert first.sizes == ("xs", "s")  # xl dropped
        assert first.image == "images/white-lace.jpg"
        assert first.colour == "white"

    def test_fallbacks_from_inner_markup(self, gallery_html):
        second = extract_dresses(gallery_html)[1]

        assert second.name == "Cocktail Classic"  # empty alt skipped
        assert second.price == 199
        assert second.type == "casual"  # "bogus" collapses
        assert second.sizes == ("s", "m", "l")
        assert second.colour == "unknown"

    def test_empty_item_gets_defaults(self, gallery_html):
        third = extract_dresses(gallery_html)[2]

        assert third.to_dict() == {
            "id": 3,
            "name": "Dress 3",
            "price": 0,
            "type": "casual",
            "sizes": ["s", "m", "l"],
            "colour": "unknown",
            "image": "",
        }

    def test_ids_are_sequential_in_document_order(self):
        html = "".join(
            f'<div class="gallery-item" data-name="D{i}"></div>' for i in range(5)
        )
        dresses = extract_dresses(html)

        assert [d.id for d in dresses] == [1, 2, 3, 4, 5]
        assert [d.name for d in dresses] == ["D0", "D1", "D2", "D3", "D4"]

    def test_second_call_restarts_ids(self, gallery_html):
        extract_dresses(gallery_html)
        assert [d.id for d in extract_dresses(gallery_html)] == [1, 2, 3]

    def test_type_wedding_and_bogus(self):
        html = (
            '<div class="gallery-item" data-type="WEDDING"></div>'
            '<div class="gallery-item" data-type="bogus"></div>'
        )
        assert [d.type for d in extract_dresses(html)] == ["wedding", "casual"]

    def test_wedding_guessed_from_name(self):
        html = '<div class="gallery-item"><img src="a.jpg" alt="Boho Wedding Gown"></div>'
        assert extract_dresses(html)[0].type == "wedding"

    def test_nested_element_does_not_cut_block(self):
        """A nested div no longer ends the gallery item early."""
        html = """
        <div class="gallery-item">
          <div class="frame"><img src="blue.jpg" alt="Blue Maxi"></div>
          <p class="price">$120</p>
        </div>
        """
        dress = extract_dresses(html)[0]

        assert dress.name == "Blue Maxi"
        assert dress.price == 120

    def test_item_with_extra_classes(self):
        html = '<article class="card gallery-item" data-name="Red"></article>'
        assert extract_dresses(html)[0].name == "Red"

    def test_no_items(self):
        assert extract_dresses("<html><body><p>Nothing</p></body></html>") == []
        assert extract_dresses("") == []

    def test_malformed_markup_does_not_raise(self):
        html = '<div class="gallery-item" data-price="abc"><img alt="x"><p class="price">call us'
        dress = extract_dresses(html)[0]

        assert dress.price == 0
        assert dress.image == ""
        assert dress.name == "Dress 1"

    def test_data_image_used_without_img(self):
        html = '<div class="gallery-item" data-image="snow-white.png"></div>'
        dress = extract_dresses(html)[0]

        assert dress.image == "snow-white.png"
        assert dress.colour == "white"

    def test_data_colour_overrides_guess(self):
        html = '<div class="gallery-item" data-colour="ivory"><img src="white.jpg" alt="A"></div>'
        assert extract_dresses(html)[0].colour == "ivory"

    def test_extract_from_file(self, gallery_file):
        assert len(extract_dresses_from_file(gallery_file)) == 3

    def test_extract_from_latin1_file(self, latin1_gallery_file):
        dresses = extract_dresses_from_file(latin1_gallery_file)

        assert [d.name for d in dresses] == ["Robe décolletée"]

    def test_extract_from_undeclared_non_utf8_file(self, tmp_path):
        page = tmp_path / "robes.html"
        page.write_bytes(
            '<div class="gallery-item"><img src="r.jpg" alt="Robe décolletée"></div>'.encode("latin-1")
        )

        dresses = extract_dresses_from_file(page)

        assert len(dresses) == 1
        assert dresses[0].name.startswith("Robe d")
        assert dresses[0].image == "r.jpg"


class TestSubExtractions:
    """Tests for the per-block helpers."""

    def test_data_attributes(self):
        tag = _item('<div class="gallery-item" data-name="A" data-price="10" id="x"></div>')
        assert extract_data_attributes(tag) == {"name": "A", "price": "10"}

    def test_duplicate_data_attribute_last_wins(self):
        tag = _item('<div class="gallery-item" data-name="First" data-name="Second"></div>')
        assert extract_data_attributes(tag) == {"name": "Second"}

    def test_image_skips_img_without_src(self):
        tag = _item('<div class="gallery-item"><img alt="none"><img src=" b.jpg " alt=" B "></div>')
        assert extract_image(tag) == ("b.jpg", "B")

    def test_image_missing(self):
        assert extract_image(_item('<div class="gallery-item"></div>')) == (None, None)

    def test_price_marker(self):
        tag = _item('<div class="gallery-item"><span class="price"> €89 / day</span></div>')
        assert extract_price_marker(tag) == 89

    def test_plain_name_skips_attributed_paragraphs(self):
        tag = _item(
            '<div class="gallery-item">'
            '<p class="price">$5</p><p><b>Bold</b></p><p>  </p><p> Plain </p>'
            '</div>'
        )
        assert extract_plain_name(tag) == "Plain"
