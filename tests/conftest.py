"""Shared HTML fixtures modelled on jlptsensei.com markup."""

import pytest


LISTING_ROW = """
<tr class="jl-row">
    <td class="jl-td-num">{id}</td>
    <td class="jl-td-gj"><a class="jl-link" href="{href}">{grammar}</a></td>
    <td class="jl-td-gr"><a class="jl-link" href="{href}">{reading}</a></td>
    <td class="jl-td-gm">{meaning}</td>
</tr>
"""


def listing_page(rows):
    """Render a listing page for (id, href, grammar, reading, meaning) rows."""
    body = "".join(
        LISTING_ROW.format(id=i, href=h, grammar=g, reading=r, meaning=m)
        for i, h, g, r, m in rows
    )
    return f"""
    <html><body>
        <table class="jl-table">
            <thead><tr><th>#</th><th>Grammar</th><th>Reading</th><th>Meaning</th></tr></thead>
            <tbody>{body}</tbody>
        </table>
    </body></html>
    """


EXAMPLE_BLOCK = """
<div class="example-cont" id="{id}">
    <div class="example-main"><p class="m-0 jp">{sentence}</p></div>
    <div class="collapse" id="{id}_ja"><div class="alert alert-success">{reading}</div></div>
    <div class="collapse" id="{id}_en"><div class="alert alert-primary">{meaning}</div></div>
</div>
"""


def detail_page(image, examples, extra=""):
    """Render a detail page for (id, sentence, reading, meaning) examples."""
    body = "".join(
        EXAMPLE_BLOCK.format(id=i, sentence=s, reading=r, meaning=m)
        for i, s, r, m in examples
    )
    image_tag = f'<img id="header-image" src="{image}">' if image else ""
    return f"""
    <html><body>
        <div id="main-content">
            {image_tag}
            {extra}
            {body}
        </div>
    </body></html>
    """


@pytest.fixture
def sample_listing_html():
    """Listing page with two grammar rows."""
    return listing_page([
        ("1", "https://jlptsensei.com/learn-japanese-grammar/ageku/", "挙句", "あげく", "in the end"),
        ("2", "/learn-japanese-grammar/amari/", "あまり", "あまり", "so much that"),
    ])


@pytest.fixture
def sample_detail_html():
    """Detail page with four examples (only three are kept)."""
    return detail_page(
        "https://jlptsensei.com/wp-content/uploads/ageku.png",
        [
            ("ex1", "彼は悩んだ挙句、会社を辞めた。", "かれはなやんだあげく、かいしゃをやめた。", "After much worrying, he quit."),
            ("ex2", "迷った挙句、買わなかった。", "まよったあげく、かわなかった。", "In the end I did not buy it."),
            ("ex3", "喧嘩の挙句、別れた。", "けんかのあげく、わかれた。", "They broke up after a fight."),
            ("ex4", "四番目の例。", "よんばんめのれい。", "Fourth example."),
        ],
    )
