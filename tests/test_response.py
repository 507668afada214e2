import io
import json

import pytest

from duckspider.request import Request
from duckspider.response import Response, build_data_selection

HTML = (
    b'<html><head><title>Shop</title></head><body>'
    b'<div class="list"><a href="/one">One</a><a href="/two">Two</a></div>'
    b'<p id="note">price 12 and 34</p>'
    b'</body></html>'
)


@pytest.fixture
def page():
    return build_data_selection("https://example.com/", {}, 200, Request("https://example.com/"), HTML)


def test_response_fields():
    request = Request("https://example.com/", meta={"page": 1})
    selection = build_data_selection("https://example.com/", {"X": "y"}, 201, request, HTML)
    response = selection.response
    assert isinstance(response, Response)
    assert response.status == 201
    assert response.body == HTML
    assert response.meta == {"page": 1}
    assert response.request is request


def test_xpath_elements(page):
    links = page.xpath("//a")
    assert len(links.get_all()) == 2
    assert links.get() == '<a href="/one">One</a>'


def test_xpath_attributes(page):
    assert page.xpath("//a/@href").get_all() == ["/one", "/two"]


def test_css_matches_xpath(page):
    assert page.css("div.list a").get_all() == page.xpath("//div[@class='list']/a").get_all()


def test_css_can_match_root(page):
    assert len(page.css("html").get_all()) == 1


def test_chaining(page):
    assert len(page.css("div").xpath(".//a").get_all()) == 2
    assert page.css("p").css("a").get_all() == []
    assert page.xpath("//p").css("p").get_all() == []


def test_invalid_css_raises(page):
    with pytest.raises(ValueError):
        page.css("a[")


def test_regex_returns_whole_matches(page):
    assert page.regex(r"\d+") == ["12", "34"]
    assert page.regex(r"price (\d+)") == ["price 12"]


def test_text_is_body(page):
    assert page.text() == HTML.decode()


def test_root_selection_renders_nothing(page):
    assert page.get() == ""
    assert page.get_all() == []
    assert page.xpath("//table").get() == ""


def test_json_round_trip():
    payload = {"a": [1, 2], "b": "c"}
    selection = build_data_selection("u", {}, 200, None, json.dumps(payload))
    assert selection.json() == payload


def test_json_invalid_raises():
    selection = build_data_selection("u", {}, 200, None, b"<html></html>")
    with pytest.raises(json.JSONDecodeError):
        selection.json()


def test_file_like_body():
    selection = build_data_selection("u", {}, 200, None, io.BytesIO(HTML))
    assert selection.response.body == HTML
    assert len(selection.xpath("//a").get_all()) == 2


def test_empty_body_still_parses():
    selection = build_data_selection("u", {}, 200, None, b"")
    assert len(selection.xpath("//body").get_all()) == 1
    assert selection.text() == ""


def test_charset_from_content_type():
    body = "<p>café</p>".encode("latin-1")
    selection = build_data_selection(
        "u", {"content-type": "text/html; charset=latin-1"}, 200, None, body
    )
    assert selection.text() == "<p>café</p>"
    assert selection.meta if False else selection.response.meta == {}