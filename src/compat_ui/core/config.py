"""
Render configuration.

Defaults work without any file. A project can override them in the
``[ui]`` table of ``compat-ui.toml``::

    [ui]
    asset_root = "/static/compat-ui"
    remote_endpoint = "/remote"
    id_strategy = "random"
    id_seed = 42
"""

import tomllib
from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_CONFIG_FILE = "compat-ui.toml"

# Tags that have their own CSS/JS asset pair, in import order.
ASSET_TAGS = ("layout", "div", "grid", "tooltip", "pod")


@dataclass
class UIConfig:
    """Settings shared by the markup renderer and script emitter."""

    module_name: str = "bx-compat-ui"
    version: str = "1.0.0"
    asset_root: str = "/bx-compat-ui"
    css_src: str | None = None  # Defaults to <asset_root>/css
    script_src: str | None = None  # Defaults to <asset_root>/js
    remote_endpoint: str = "/bx-compat-ui/remote"  # Target of cfc: bind calls
    grid_update_endpoint: str = "/bx-compat-ui/gridupdate"
    default_import_tags: list[str] = field(default_factory=lambda: list(ASSET_TAGS))
    id_strategy: str = "counter"  # "counter" | "random"
    id_seed: int | None = None

    @property
    def css_base(self) -> str:
        return (self.css_src or f"{self.asset_root}/css").rstrip("/")

    @property
    def script_base(self) -> str:
        return (self.script_src or f"{self.asset_root}/js").rstrip("/")


def load_config(path: Path | None = None) -> UIConfig:
    """Load ``UIConfig`` from a TOML file.

    Args:
        path: File to read. Defaults to ``compat-ui.toml`` in the working
            directory. A missing file yields the defaults.

    Raises:
        ValueError: if the ``[ui]`` table holds an invalid value.
    """
    config_path = path or Path(DEFAULT_CONFIG_FILE)
    if not config_path.exists():
        return UIConfig()

    data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    ui = data.get("ui", {})

    config = UIConfig(
        module_name=ui.get("module_name", "bx-compat-ui"),
        version=ui.get("version", "1.0.0"),
        asset_root=ui.get("asset_root", "/bx-compat-ui").rstrip("/"),
        css_src=ui.get("css_src"),
        script_src=ui.get("script_src"),
        remote_endpoint=ui.get("remote_endpoint", "/bx-compat-ui/remote"),
        grid_update_endpoint=ui.get("grid_update_endpoint", "/bx-compat-ui/gridupdate"),
        default_import_tags=list(ui.get("default_import_tags", ASSET_TAGS)),
        id_strategy=ui.get("id_strategy", "counter"),
        id_seed=ui.get("id_seed"),
    )

    if config.id_strategy not in ("counter", "random"):
        raise ValueError(
            f"ui.id_strategy must be 'counter' or 'random', got: {config.id_strategy}"
        )
    unknown = [t for t in config.default_import_tags if t not in ASSET_TAGS]
    if unknown:
        raise ValueError(f"ui.default_import_tags has unknown tags: {', '.join(unknown)}")

    return config
