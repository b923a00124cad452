"""Tests for bind expression parsing."""

from __future__ import annotations

import logging

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from compat_ui.core.bind import CfcCall, Generic, UrlBind, parse_bind


class TestCfcBinds:
    """cfc:path.method(args) expressions."""

    def test_full_call(self) -> None:
        result = parse_bind("cfc:app.services.UserService.getUsers(status, page)")

        assert result == CfcCall(
            component_path="app.services.UserService",
            method_name="getUsers",
            params=("status", "page"),
        )

    def test_empty_parens_means_no_params(self) -> None:
        result = parse_bind("cfc:mycomponent.getData()")

        assert isinstance(result, CfcCall)
        assert result.component_path == "mycomponent"
        assert result.params == ()

    def test_prefix_is_case_insensitive(self) -> None:
        assert isinstance(parse_bind("CFC:svc.load()"), CfcCall)

    @pytest.mark.parametrize(
        "expr",
        [
            "cfc:myComponent.getData",  # no parentheses
            "cfc:getData()",  # no component path
            "cfc:svc.load(a b)",  # param is not an identifier
        ],
    )
    def test_malformed_degrades_to_generic(self, expr: str) -> None:
        result = parse_bind(expr)

        assert isinstance(result, Generic)
        assert result.raw == expr

    def test_malformed_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="compat_ui.core.bind"):
            parse_bind("cfc:broken")

        assert "Malformed cfc bind expression" in caplog.text


class TestUrlBinds:
    """url: prefixed and path-like expressions."""

    def test_url_prefix_stripped(self) -> None:
        assert parse_bind("url:/api/users") == UrlBind(url="/api/users")

    def test_path(self) -> None:
        assert parse_bind("/api/users?active=1") == UrlBind(url="/api/users?active=1")

    def test_absolute_url(self) -> None:
        assert parse_bind("https://example.com/feed") == UrlBind(url="https://example.com/feed")


class TestGenericBinds:
    """Anything else is kept verbatim."""

    def test_javascript_expression(self) -> None:
        result = parse_bind("javascript:myFunction()")

        assert result == Generic(raw="javascript:myFunction()")

    def test_never_raises_on_empty(self) -> None:
        assert isinstance(parse_bind(""), Generic)

    def test_unsupported_logs_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="compat_ui.core.bind"):
            parse_bind("plainvalue")

        assert "Unsupported bind expression" in caplog.text


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------

_identifiers = st.from_regex(r"[A-Za-z_][A-Za-z0-9_]{0,10}", fullmatch=True)


class TestBindProperties:
    """Invariants over arbitrary bind expressions."""

    @given(st.text(max_size=200))
    @settings(max_examples=300)
    def test_parse_never_raises(self, expr: str) -> None:
        """Invariant: every string yields one of the three descriptors."""
        assert isinstance(parse_bind(expr), (CfcCall, UrlBind, Generic))

    @given(
        path=st.lists(_identifiers, min_size=1, max_size=4),
        method=_identifiers,
        params=st.lists(_identifiers, max_size=4),
    )
    @settings(max_examples=100)
    def test_well_formed_cfc_call(self, path: list[str], method: str, params: list[str]) -> None:
        """Invariant: cfc:<path>.<method>(<params>) splits on the last dot."""
        component = ".".join(path)
        expr = f"cfc:{component}.{method}({', '.join(params)})"

        assert parse_bind(expr) == CfcCall(
            component_path=component, method_name=method, params=tuple(params)
        )

    @given(st.text(max_size=100))
    @settings(max_examples=100)
    def test_url_prefix_always_url(self, rest: str) -> None:
        """Invariant: a url: prefix always parses as a URL bind."""
        assert parse_bind(f"url:{rest}") == UrlBind(url=rest.strip())
