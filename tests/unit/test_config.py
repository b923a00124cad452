"""Tests for render configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from compat_ui.core.config import ASSET_TAGS, UIConfig, load_config
from compat_ui.runtime.tags import Tag, render_document


class TestUIConfigDefaults:
    def test_defaults(self) -> None:
        config = UIConfig()

        assert config.asset_root == "/bx-compat-ui"
        assert config.css_base == "/bx-compat-ui/css"
        assert config.script_base == "/bx-compat-ui/js"
        assert config.remote_endpoint == "/bx-compat-ui/remote"
        assert config.default_import_tags == list(ASSET_TAGS)
        assert config.id_strategy == "counter"

    def test_explicit_sources_win(self) -> None:
        config = UIConfig(css_src="/cdn/css/", script_src="/cdn/js")

        assert config.css_base == "/cdn/css"
        assert config.script_base == "/cdn/js"


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_config(tmp_path / "absent.toml") == UIConfig()

    def test_ui_table(self, tmp_path: Path) -> None:
        path = tmp_path / "compat-ui.toml"
        path.write_text(
            "[ui]\n"
            'asset_root = "/static/compat-ui/"\n'
            'remote_endpoint = "/remote"\n'
            'default_import_tags = ["grid", "pod"]\n'
            'id_strategy = "random"\n'
            "id_seed = 42\n"
        )

        config = load_config(path)

        assert config.asset_root == "/static/compat-ui"
        assert config.script_base == "/static/compat-ui/js"
        assert config.remote_endpoint == "/remote"
        assert config.default_import_tags == ["grid", "pod"]
        assert config.id_strategy == "random"
        assert config.id_seed == 42

    def test_file_without_ui_table(self, tmp_path: Path) -> None:
        path = tmp_path / "compat-ui.toml"
        path.write_text('[other]\nkey = "value"\n')

        assert load_config(path) == UIConfig()

    def test_invalid_id_strategy(self, tmp_path: Path) -> None:
        path = tmp_path / "compat-ui.toml"
        path.write_text('[ui]\nid_strategy = "uuid"\n')

        with pytest.raises(ValueError, match="ui.id_strategy must be 'counter' or 'random'"):
            load_config(path)

    def test_unknown_import_tag(self, tmp_path: Path) -> None:
        path = tmp_path / "compat-ui.toml"
        path.write_text('[ui]\ndefault_import_tags = ["grid", "chart"]\n')

        with pytest.raises(ValueError, match="unknown tags: chart"):
            load_config(path)


class TestConfiguredRendering:
    def test_seeded_random_ids_reproducible(self) -> None:
        config = UIConfig(id_strategy="random", id_seed=3)
        nodes = [Tag(name="pod", attributes={"title": "A"})]

        first = render_document(nodes, config)
        second = render_document(nodes, config)

        assert first == second
        assert 'id="pod_1"' not in first
        assert 'id="pod_' in first
