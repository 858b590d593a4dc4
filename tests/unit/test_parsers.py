"""Tests for listing row and detail page extraction."""

import httpx
import pytest

from conftest import listing_page, detail_page
from jlpt_scraper.core.http_client import HttpClient
from jlpt_scraper.core.models import NoteTarget
from jlpt_scraper.core.selectors import parse_html
from jlpt_scraper.navigators.base import SiteConfig
from jlpt_scraper.navigators.listing import ListingNavigator
from jlpt_scraper.parsers.detail import DetailParser


@pytest.fixture
def site():
    return SiteConfig()


@pytest.fixture
def target():
    return NoteTarget(
        id="1",
        url="https://jlptsensei.com/learn-japanese-grammar/ageku/",
        grammar="挙句",
        reading="あげく",
        meaning="in the end",
    )


class TestListingExtraction:
    """Tests for ListingNavigator.extract_targets."""

    def test_extracts_rows(self, site, sample_listing_html):
        """Test every row becomes a target."""
        navigator = ListingNavigator(site)
        targets = navigator.extract_targets(parse_html(sample_listing_html), page=3)

        assert len(targets) == 2
        first = targets[0]
        assert first.id == "1"
        assert first.grammar == "挙句"
        assert first.reading == "あげく"
        assert first.meaning == "in the end"
        assert first.url == "https://jlptsensei.com/learn-japanese-grammar/ageku/"
        assert first.page == 3
        assert first.position == 0
        assert targets[1].position == 1

    def test_relative_href_resolved(self, site, sample_listing_html):
        """Test relative links are resolved against base_url."""
        navigator = ListingNavigator(site)
        targets = navigator.extract_targets(parse_html(sample_listing_html))

        assert targets[1].url == "https://jlptsensei.com/learn-japanese-grammar/amari/"

    def test_row_without_link_kept(self, site):
        """Test rows missing a detail link keep their listing fields."""
        html = """
        <table><tbody>
            <tr class="jl-row"><td class="jl-td-num">1</td><td class="jl-td-gm">no link</td></tr>
        </tbody></table>
        """
        navigator = ListingNavigator(site)
        targets = navigator.extract_targets(parse_html(html))

        assert len(targets) == 1
        assert targets[0].id == "1"
        assert targets[0].meaning == "no link"
        assert targets[0].url == ""

    def test_path_relative_href_resolved_against_page(self, site):
        """Test links without a leading slash resolve against the listing page."""
        html = listing_page([("7", "ageku/", "挙句", "あげく", "in the end")])
        listing_url = "https://jlptsensei.com/jlpt-n1-grammar-list/page/2/"
        navigator = ListingNavigator(site)
        targets = navigator.extract_targets(parse_html(html), page=2, listing_url=listing_url)

        assert targets[0].url == "https://jlptsensei.com/jlpt-n1-grammar-list/page/2/ageku/"

    def test_pages_requested_per_instance(self, site):
        first = ListingNavigator(site)
        first.pages_requested = 5

        assert ListingNavigator(site).pages_requested == 0
        assert "pages_requested" in vars(first)

    def test_rows_outside_tbody_ignored(self, site):
        """Test only table body rows are considered."""
        html = """
        <table><thead>
            <tr class="jl-row"><td><a class="jl-link" href="/x/">x</a></td></tr>
        </thead></table>
        """
        navigator = ListingNavigator(site)
        assert navigator.extract_targets(parse_html(html)) == []

    def test_empty_page(self, site):
        navigator = ListingNavigator(site)
        assert navigator.extract_targets(parse_html(listing_page([]))) == []


class TestDetailParsing:
    """Tests for DetailParser.parse_html."""

    def test_image_and_examples(self, site, target, sample_detail_html):
        """Test image and first three examples are extracted."""
        note = DetailParser(site).parse_html(sample_detail_html, target)

        assert note.image == "https://jlptsensei.com/wp-content/uploads/ageku.png"
        assert [e.id for e in note.examples] == ["ex1", "ex2", "ex3"]

        first = note.examples[0]
        assert first.sentence == "彼は悩んだ挙句、会社を辞めた。"
        assert first.reading == "かれはなやんだあげく、かいしゃをやめた。"
        assert first.meaning == "After much worrying, he quit."

    def test_listing_fields_kept(self, site, target, sample_detail_html):
        """Test listing data is carried into the note."""
        note = DetailParser(site).parse_html(sample_detail_html, target)

        assert note.id == "1"
        assert note.grammar == "挙句"
        assert note.url == target.url

    def test_example_without_id_not_counted(self, site, target):
        """Test id-less example blocks are skipped and do not use a slot."""
        html = detail_page(
            "img.png",
            [("a", "1", "", ""), ("b", "2", "", ""), ("c", "3", "", "")],
            extra='<div class="example-cont"><div class="example-main"><p class="jp">none</p></div></div>',
        )
        note = DetailParser(site).parse_html(html, target)

        assert [e.id for e in note.examples] == ["a", "b", "c"]

    def test_fewer_examples(self, site, target):
        """Test pages with fewer than three examples."""
        html = detail_page("img.png", [("only", "文", "ぶん", "sentence")])
        note = DetailParser(site).parse_html(html, target)

        assert len(note.examples) == 1
        assert note.examples[0].meaning == "sentence"

    def test_missing_panels(self, site, target):
        """Test examples without reading/meaning panels."""
        html = """
        <div id="main-content">
            <div class="example-cont" id="ex9">
                <div class="example-main"><p class="jp">文だけ</p></div>
            </div>
        </div>
        """
        note = DetailParser(site).parse_html(html, target)

        assert note.image == ""
        assert note.examples[0].sentence == "文だけ"
        assert note.examples[0].reading == ""
        assert note.examples[0].meaning == ""

    def test_no_main_content(self, site, target):
        """Test page without #main-content gives an empty note."""
        html = '<html><body><img id="header-image" src="x.png"></body></html>'
        note = DetailParser(site).parse_html(html, target)

        assert note.image == ""
        assert note.examples == []
        assert note.grammar == "挙句"

    def test_example_id_with_quote(self, site, target):
        """Test an id with a quote keeps the image and every example."""
        html = detail_page(
            "img.png",
            [("ex&quot;1", "文", "ぶん", "sentence"), ("ex2", "二", "に", "two")],
        )
        note = DetailParser(site).parse_html(html, target)

        assert note.image == "img.png"
        assert [e.id for e in note.examples] == ['ex"1', "ex2"]
        assert note.examples[0].reading == "ぶん"
        assert note.examples[0].meaning == "sentence"

    def test_panels_scoped_to_example(self, site, target):
        """Test reading of one example is not picked up by another."""
        html = detail_page(
            "img.png",
            [("x1", "一", "いち", "one"), ("x2", "二", "に", "two")],
        )
        note = DetailParser(site).parse_html(html, target)

        assert note.examples[0].reading == "いち"
        assert note.examples[1].reading == "に"


class TestExtract:
    """Tests for DetailParser.extract."""

    @pytest.mark.asyncio
    async def test_target_without_url_not_fetched(self, site):
        """Test a row without a link yields its listing data without a request."""
        requested = []

        def handler(request):
            requested.append(str(request.url))
            return httpx.Response(200, text="")

        target = NoteTarget(id="9", url="", grammar="ばかり", meaning="only")

        async with HttpClient(transport=httpx.MockTransport(handler)) as client:
            parser = DetailParser(site, http_client=client)
            note = await parser.extract(target)

        assert requested == []
        assert note.id == "9"
        assert note.grammar == "ばかり"
        assert note.url == ""
        assert note.examples == []
        assert parser.failed == 0


class TestExtractAll:
    """Tests for ParserStrategy.extract_all."""

    @pytest.mark.asyncio
    async def test_failing_extract_still_yields_note(self, site, target):
        """Test an exception in one task does not abort the others."""

        class FlakyParser(DetailParser):
            async def extract(self, t):
                if t.id == "bad":
                    raise RuntimeError("boom")
                return self.parse_html(detail_page("img.png", [("e", "s", "r", "m")]), t)

        bad = NoteTarget(id="bad", url="https://jlptsensei.com/bad/", grammar="x", position=1)
        parser = FlakyParser(site)
        notes = await parser.extract_all([target, bad])

        assert [n.id for n in notes] == ["1", "bad"]
        assert notes[0].image == "img.png"
        assert notes[1].examples == []
        assert parser.failed == 1
