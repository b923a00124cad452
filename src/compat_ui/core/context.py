"""
Component context: the stack of open tag frames for one document render.

Container tags (grid, layout) push a frame of their kind; other tags push a
``NONE`` frame so their body output still has somewhere to go. Child tags
look up the *nearest* open frame of the kind they need and register a
descriptor into it. Frames never outlive the tag that opened them.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from compat_ui.core.errors import ErrorContext, InvalidNesting

logger = logging.getLogger(__name__)


class FrameKind(str, Enum):
    """What kind of children a frame accepts."""

    GRID = "grid"
    LAYOUT = "layout"
    NONE = "none"


# =============================================================================
# Child descriptors
# =============================================================================


class GridColumn(BaseModel):
    """A column registered by a gridcolumn tag."""

    model_config = {"frozen": True}

    name: str
    header: str
    index: int
    attributes: dict[str, Any] = Field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        value = self.attributes.get(key)
        return default if value is None else value


class GridRow(BaseModel):
    """A literal data row registered by a gridrow tag."""

    model_config = {"frozen": True}

    index: int
    data: dict[str, Any]


class LayoutArea(BaseModel):
    """A layout area with its captured body content."""

    model_config = {"frozen": True}

    id: str
    index: int
    title: str | None = None
    position: str | None = None
    content: str = ""
    attributes: dict[str, Any] = Field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        value = self.attributes.get(key)
        return default if value is None else value


# =============================================================================
# Frames
# =============================================================================


@dataclass
class ComponentFrame:
    """One open tag instance.

    Attributes:
        tag: Tag name that opened the frame (``grid``, ``layout``, ``pod`` ...)
        kind: Which child tags may register into this frame
        id: Element id, supplied or generated; stable for the frame's lifetime
        attributes: Validated attributes of the opening tag
        children: Registered columns (grid) or areas (layout), in order
        rows: Literal rows registered by gridrow tags
        body: Output written while the frame was innermost
    """

    tag: str
    kind: FrameKind
    id: str
    attributes: dict[str, Any] = field(default_factory=dict)
    children: list[GridColumn | LayoutArea] = field(default_factory=list)
    rows: list[GridRow] = field(default_factory=list)
    body: list[str] = field(default_factory=list)

    def get(self, key: str, default: Any = None) -> Any:
        """Attribute value, or ``default`` when absent or None."""
        value = self.attributes.get(key)
        return default if value is None else value

    @property
    def content(self) -> str:
        """Captured body output."""
        return "".join(self.body)

    @property
    def columns(self) -> list[GridColumn]:
        return [c for c in self.children if isinstance(c, GridColumn)]

    @property
    def areas(self) -> list[LayoutArea]:
        return [c for c in self.children if isinstance(c, LayoutArea)]


# =============================================================================
# Id generation
# =============================================================================


class IdGenerator:
    """Per-render element id source.

    ``counter`` strategy yields ``grid_1``, ``pod_2`` ...; ``random`` yields
    hex tokens from a seeded ``random.Random`` so output stays reproducible
    under test.
    """

    def __init__(self, strategy: str = "counter", seed: int | None = None) -> None:
        if strategy not in ("counter", "random"):
            raise ValueError(f"Unknown id strategy: {strategy}")
        self.strategy = strategy
        self._counter = 0
        self._random = random.Random(seed)

    def next_id(self, prefix: str) -> str:
        if self.strategy == "random":
            token = f"{self._random.getrandbits(32):08x}"
        else:
            self._counter += 1
            token = str(self._counter)
        generated = f"{prefix}_{token}"
        logger.debug("Generated element id %s", generated)
        return generated


# =============================================================================
# Stack
# =============================================================================


class ComponentContext:
    """Stack of open frames, innermost last. One instance per document render."""

    def __init__(self, ids: IdGenerator | None = None) -> None:
        self.ids = ids or IdGenerator()
        self._frames: list[ComponentFrame] = []

    def __len__(self) -> int:
        return len(self._frames)

    @property
    def current(self) -> ComponentFrame | None:
        return self._frames[-1] if self._frames else None

    def open(
        self,
        tag: str,
        kind: FrameKind,
        attributes: dict[str, Any],
        id_prefix: str | None = None,
    ) -> ComponentFrame:
        """Create a frame for ``tag`` and push it.

        The element id is the supplied ``id`` attribute, or a generated
        ``<id_prefix>_<token>`` when absent. Tags without a prefix get an
        empty id.
        """
        element_id = attributes.get("id") or ""
        if not element_id and id_prefix:
            element_id = self.ids.next_id(id_prefix)
        frame = ComponentFrame(tag=tag, kind=kind, id=element_id, attributes=attributes)
        self.push(frame)
        return frame

    def push(self, frame: ComponentFrame) -> None:
        self._frames.append(frame)
        logger.debug("Opened %s frame %s (depth %d)", frame.tag, frame.id, len(self._frames))

    def pop(self, tag: str) -> ComponentFrame:
        """Pop the innermost frame, which must belong to ``tag``."""
        if not self._frames:
            raise InvalidNesting(
                f"Cannot close {tag}: no tag is open", ErrorContext(tag=tag)
            )
        frame = self._frames[-1]
        if frame.tag != tag:
            raise InvalidNesting(
                f"Cannot close {tag} while {frame.tag} is still open", ErrorContext(tag=tag)
            )
        self._frames.pop()
        logger.debug("Closed %s frame %s", frame.tag, frame.id)
        return frame

    def nearest(self, kind: FrameKind) -> ComponentFrame | None:
        """Innermost open frame of ``kind``, or None."""
        for frame in reversed(self._frames):
            if frame.kind == kind:
                return frame
        return None

    def require(self, kind: FrameKind, child: str, parent: str, tag: str) -> ComponentFrame:
        """Nearest frame of ``kind``; raise InvalidNesting if there is none."""
        frame = self.nearest(kind)
        if frame is None:
            raise InvalidNesting(
                f"{child} component must be used within a {parent} component",
                ErrorContext(tag=tag),
            )
        return frame

    def register(self, frame: ComponentFrame, descriptor: GridColumn | GridRow | LayoutArea) -> None:
        """Append a child descriptor to ``frame``. Registration order is render order."""
        if isinstance(descriptor, GridRow):
            frame.rows.append(descriptor)
        else:
            frame.children.append(descriptor)
        logger.debug("Registered %s into %s frame %s", type(descriptor).__name__, frame.tag, frame.id)

    def write(self, text: str) -> bool:
        """Append body output to the innermost frame. False when no frame is open."""
        if not self._frames:
            return False
        self._frames[-1].body.append(text)
        return True

    def assert_empty(self) -> None:
        if self._frames:
            open_tags = ", ".join(f.tag for f in self._frames)
            raise InvalidNesting(f"Unclosed tags at end of document: {open_tags}")
