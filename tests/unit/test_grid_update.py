"""Tests for gridupdate form markup and the change-tracking script."""

from __future__ import annotations

from typing import Any

import pytest

from compat_ui.core.config import UIConfig
from compat_ui.core.errors import InvalidAttributeValue, MissingRequiredAttribute
from compat_ui.core.tag_specs import grid_update_mode
from compat_ui.runtime.tags import Tag


def _update(**attributes: Any) -> Tag:
    attributes.setdefault("grid", "myGrid")
    return Tag(name="gridupdate", attributes=attributes)


class TestGridUpdateValidation:
    def test_grid_required(self, render) -> None:
        with pytest.raises(MissingRequiredAttribute, match="grid attribute is required for GridUpdate"):
            render(Tag(name="gridupdate", attributes={"url": "/save"}))

    def test_needs_database_or_url(self, render) -> None:
        with pytest.raises(
            MissingRequiredAttribute,
            match="requires either dataSource\\+tableName for database updates or url for HTTP updates",
        ):
            render(_update())

    def test_data_source_without_table(self, render) -> None:
        with pytest.raises(MissingRequiredAttribute):
            render(_update(dataSource="inventoryDS"))

    def test_invalid_method(self, render) -> None:
        with pytest.raises(
            InvalidAttributeValue, match="method attribute must be one of: POST, PUT, PATCH"
        ):
            render(_update(url="/save", method="DELETE"))


class TestGridUpdateUrlMode:
    def test_form_markup(self, render) -> None:
        html = render(_update(url="/api/update-grid", method="PUT"))

        assert '<form id="gridupdate_myGrid" class="bx-grid-update"' in html
        assert 'method="PUT"' in html
        assert 'action="/api/update-grid"' in html
        assert '<input type="hidden" name="gridName" value="myGrid">' in html
        assert '<input type="hidden" name="gridData" value="">' in html

    def test_script(self, render) -> None:
        html = render(_update(url="/api/update-grid", method="PUT"))

        assert "function updateViaURL()" in html
        assert "const formData = new FormData(updateForm);" in html
        assert "fetch('/api/update-grid', {" in html
        assert "method: 'PUT'," in html
        assert "window['updateGrid_myGrid'] = function() {" in html
        assert "updateDatabase" not in html

    def test_default_method_is_post(self, render) -> None:
        assert 'method="POST"' in render(_update(url="/save"))

    def test_url_used_when_table_name_missing(self, render) -> None:
        html = render(_update(dataSource="inventoryDS", url="/save", method="PATCH"))

        assert 'action="/save"' in html
        assert 'method="PATCH"' in html
        assert "function updateViaURL()" in html
        assert "updateDatabase" not in html
        assert "/bx-compat-ui/gridupdate" not in html

    def test_database_wins_when_complete(self, render) -> None:
        html = render(_update(dataSource="ds", tableName="t", url="/save"))

        assert 'action="/bx-compat-ui/gridupdate"' in html
        assert "function updateDatabase()" in html
        assert "updateViaURL" not in html


class TestGridUpdateDatabaseMode:
    def _render(self, render, **extra: Any) -> str:
        return render(
            _update(
                dataSource="inventoryDS",
                tableName="products",
                tableOwner="inventory",
                tableQualifier="production",
                keyOnly="true",
                **extra,
            )
        )

    def test_payload(self, render) -> None:
        html = self._render(render)

        assert "function updateDatabase()" in html
        assert "dataSource: 'inventoryDS'," in html
        assert "tableName: 'products'," in html
        assert "tableOwner: 'inventory'," in html
        assert "tableQualifier: 'production'," in html
        assert "keyOnly: true," in html
        assert "fetch('/bx-compat-ui/gridupdate', {" in html
        assert "'Content-Type': 'application/json'" in html
        assert "body: JSON.stringify(payload)" in html
        assert 'action="/bx-compat-ui/gridupdate"' in html

    def test_credentials_only_when_given(self, render) -> None:
        without = self._render(render)
        with_creds = self._render(render, username="admin", password="secret")

        assert "payload.username" not in without
        assert "payload.username = 'admin';" in with_creds
        assert "payload.password = 'secret';" in with_creds

    def test_endpoint_from_config(self, render) -> None:
        html = render(
            _update(dataSource="ds", tableName="t"),
            config=UIConfig(grid_update_endpoint="/grid/save"),
        )

        assert "fetch('/grid/save', {" in html


class TestChangeTracking:
    def test_tracking_and_events(self, render) -> None:
        html = render(_update(url="/save"))

        assert "const modifiedCells = new Map();" in html
        assert "const deletedRows = new Set();" in html
        assert "let newRows = [];" in html
        for event in ("gridCellEdit", "gridRowDelete", "gridRowAdd"):
            assert f"addEventListener('{event}'" in html
        assert "modifiedCells.clear();" in html
        assert "deletedRows.clear();" in html
        assert "newRows = [];" in html
        assert "'gridUpdateSuccess'" in html
        assert "'gridUpdateError'" in html

    def test_response_parsing(self, render) -> None:
        html = render(_update(url="/save"))

        assert "response.headers.get('content-type')" in html
        assert "response.json()" in html
        assert "response.text()" in html

    def test_callbacks(self, render) -> None:
        html = render(_update(url="/save", onSuccess="saved", onError="failed"))

        assert "if (typeof saved === 'function') { saved(result); }" in html
        assert "if (typeof failed === 'function') { failed(error.message, error); }" in html

    def test_public_trigger_escapes_grid_name(self, render) -> None:
        html = render(_update(grid="o'grid", url="/save"))

        assert "window['updateGrid_o\\'grid'] = function() {" in html


class TestGridUpdateMode:
    """One rule decides the save mode for validation, markup and script."""

    @pytest.mark.parametrize(
        ("attributes", "expected"),
        [
            ({"dataSource": "ds", "tableName": "t"}, "database"),
            ({"dataSource": "ds", "tableName": "t", "url": "/save"}, "database"),
            ({"dataSource": "ds", "url": "/save"}, "url"),
            ({"url": "/save"}, "url"),
            ({"dataSource": "ds"}, None),
            ({}, None),
        ],
    )
    def test_mode(self, attributes: dict[str, Any], expected: str | None) -> None:
        assert grid_update_mode(attributes) == expected
