"""Tests for the template-callable boundary functions."""

from __future__ import annotations

import pytest

from compat_ui.core.config import UIConfig
from compat_ui.core.errors import InvalidArgument, MissingArgument
from compat_ui.runtime.functions import ajax_link, ajax_on_load, query_convert_for_grid

ROWS = [{"id": i} for i in range(1, 11)]


class TestQueryConvertForGrid:
    def test_middle_page(self) -> None:
        result = query_convert_for_grid(ROWS, page=2, page_size=3)

        assert result["TOTALROWCOUNT"] == 10
        assert result["PAGE"] == 2
        assert result["PAGESIZE"] == 3
        assert result["TOTALPAGES"] == 4
        assert result["STARTROW"] == 4
        assert result["ENDROW"] == 6
        assert result["ROWS"] == [{"id": 4}, {"id": 5}, {"id": 6}]

    def test_last_partial_page(self) -> None:
        result = query_convert_for_grid(ROWS, page=4, page_size=3)

        assert result["ENDROW"] == 10
        assert result["ROWS"] == [{"id": 10}]

    def test_page_past_end_is_empty(self) -> None:
        result = query_convert_for_grid(ROWS, page=5, page_size=3)

        assert result["STARTROW"] == 13
        assert result["ENDROW"] == 12
        assert result["ROWS"] == []

    def test_empty_rows(self) -> None:
        result = query_convert_for_grid([], page=1, page_size=10)

        assert result["TOTALPAGES"] == 0
        assert result["ROWS"] == []

    def test_missing_arguments_listed(self) -> None:
        with pytest.raises(MissingArgument, match="requires page, pageSize"):
            query_convert_for_grid(ROWS)

    def test_missing_query(self) -> None:
        with pytest.raises(MissingArgument, match="requires query \\(argument is missing\\)"):
            query_convert_for_grid(page=1, page_size=5)

    def test_invalid_page_size(self) -> None:
        with pytest.raises(InvalidArgument, match="pageSize must be at least 1"):
            query_convert_for_grid(ROWS, page=1, page_size=0)


class TestAjaxLink:
    def test_href(self) -> None:
        assert ajax_link("/content/page2.cfm") == (
            "javascript:void(window.BoxLangAjax && BoxLangAjax.utils "
            "? BoxLangAjax.utils.handleAjaxLink('/content/page2.cfm', event) "
            ": console.error('BoxLang AJAX not initialized'))"
        )

    def test_url_trimmed(self) -> None:
        assert "handleAjaxLink('/a', event)" in ajax_link("  /a  ")

    def test_quotes_escaped(self) -> None:
        href = ajax_link("/search?name=John's \"shop\"")

        assert "John\\'s" in href
        assert "\\x22shop\\x22" in href
        assert '"' not in href

    def test_script_close_escaped(self) -> None:
        assert "</script>" not in ajax_link("/x</script><script>alert(1)</script>")

    @pytest.mark.parametrize("url", [None, "", "   "])
    def test_url_required(self, url: str | None) -> None:
        with pytest.raises(MissingArgument, match="url parameter is required for AjaxLink"):
            ajax_link(url)


class TestAjaxOnLoad:
    def test_script(self) -> None:
        html = ajax_on_load("initPage")

        assert html.startswith('<script type="text/javascript">')
        assert "if (typeof initPage === 'function') {" in html
        assert "initPage();" in html
        assert "console.error('Function initPage is not defined');" in html
        assert "document.addEventListener('DOMContentLoaded', init);" in html

    def test_name_trimmed(self) -> None:
        assert "typeof setup ===" in ajax_on_load(" setup ")

    def test_accepts_config(self) -> None:
        assert "onReady();" in ajax_on_load("onReady", config=UIConfig())

    @pytest.mark.parametrize("name", [None, "", "  "])
    def test_name_required(self, name: str | None) -> None:
        with pytest.raises(
            MissingArgument, match="functionName parameter is required for AjaxOnLoad"
        ):
            ajax_on_load(name)

    @pytest.mark.parametrize("name", ["alert('x')", "my-func", "1st", "a.b"])
    def test_name_must_be_identifier(self, name: str) -> None:
        with pytest.raises(InvalidArgument, match="must be a valid JavaScript function name"):
            ajax_on_load(name)
