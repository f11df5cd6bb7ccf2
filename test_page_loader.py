"""
Tests for the static page loader and candidate building
"""
from unittest.mock import MagicMock

import pytest
import requests

from fundamentus_scraper.core.page_loader import PageLoader, candidates_from_html
from fundamentus_scraper.extractors.table_parser import parse_table_html


def make_response(text, status_error=None):
    response = MagicMock()
    response.text = text
    response.raise_for_status.side_effect = status_error
    return response


def test_load_with_http_sends_user_agent_and_timeout(monkeypatch):
    calls = []

    def fake_get(self, url, timeout=None):
        calls.append((url, timeout, self.headers.get('User-Agent')))
        return make_response("<html><table></table></html>")

    monkeypatch.setattr(requests.Session, "get", fake_get)
    loader = PageLoader("TestAgent/1.0", timeout=12)

    assert loader.load_with_http("https://example.com/fii") == "<html><table></table></html>"
    assert calls == [("https://example.com/fii", 12, "TestAgent/1.0")]
    loader.close()


def test_load_with_http_raises_on_error_status(monkeypatch):
    monkeypatch.setattr(
        requests.Session, "get",
        lambda self, url, timeout=None: make_response("", requests.HTTPError("503 Server Error"))
    )
    loader = PageLoader("TestAgent/1.0")

    with pytest.raises(requests.HTTPError):
        loader.load_with_http("https://example.com/fii")


def test_candidates_keep_nbsp_as_entity_like_a_browser():
    candidates = candidates_from_html("<table><tr><td>A&nbsp;B &amp; C</td><td>Preço</td></tr></table>")

    assert len(candidates) == 1
    assert "A&nbsp;B &amp; C" in candidates[0].outer_html
    assert parse_table_html(candidates[0].outer_html) == [["A&nbsp;B &amp; C", "Preço"]]


def test_candidates_in_document_order_with_visible_text():
    html = "<div><table><tr><td>Menu</td></tr></table><table><tr><th>Papel</th></tr></table></div>"

    candidates = candidates_from_html(html)

    assert [c.visible_text.strip() for c in candidates] == ["Menu", "Papel"]


def test_candidates_from_empty_document():
    assert candidates_from_html("") == []
