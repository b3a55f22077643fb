"""Read-only renderers for tree diagrams.

Three outputs are supported:

* ``generate_dot`` – a Graphviz ``digraph`` with one ``parent -> child;`` line
  per edge.  A lone root is written as a single node line.
* ``render_levels`` – a level-by-level text rendering that marks missing
  children with ``·`` and red nodes with ``*``.
* ``render_image`` – pipes DOT through Graphviz and writes the image bytes.

Renderers only read ``value``, ``left`` and ``right`` from the nodes they are
given, so they work for plain and red-black nodes alike and never modify the
tree.
"""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from typing import Any, Callable, Deque, List, Optional, Protocol, Tuple

import graphviz
from graphviz.quoting import quote

from .errors import TreeRenderingError
from .red_black_tree import Color

logger = logging.getLogger(__name__)

__all__ = [
    "DOT_PREAMBLE",
    "DOT_POSTAMBLE",
    "TreeNodeView",
    "generate_dot",
    "render_levels",
    "render_image",
]

DOT_PREAMBLE = "digraph btree {\n"
DOT_POSTAMBLE = "}\n"
_PLACEHOLDER = "·"
_RED_MARKER = "*"


class TreeNodeView(Protocol):
    """The read interface renderers rely on."""

    @property
    def value(self) -> Any:
        ...

    @property
    def left(self) -> Optional["TreeNodeView"]:
        ...

    @property
    def right(self) -> Optional["TreeNodeView"]:
        ...


class _SupportsPipe(Protocol):
    def pipe(self, format: str) -> bytes:
        """Render the DOT payload using the requested Graphviz format."""


def _children(node: TreeNodeView) -> List[TreeNodeView]:
    return [child for child in (node.left, node.right) if child is not None]


def _dot_id(node: TreeNodeView) -> str:
    return quote(str(node.value))


def generate_dot(root: Optional[TreeNodeView]) -> str:
    """Describe the tree under *root* as a Graphviz digraph.

    Edges are listed parent first, left subtree before right subtree.  Values
    whose string form is not a valid DOT identifier are written quoted.
    """

    lines = [DOT_PREAMBLE]
    if root is not None:
        if not _children(root):
            lines.append(f"{_dot_id(root)};\n")
        stack: List[Tuple[TreeNodeView, TreeNodeView]] = [
            (root, child) for child in reversed(_children(root))
        ]
        while stack:
            parent, node = stack.pop()
            lines.append(f"{_dot_id(parent)} -> {_dot_id(node)};\n")
            stack.extend((node, child) for child in reversed(_children(node)))
    lines.append(DOT_POSTAMBLE)
    return "".join(lines)


def _label(node: TreeNodeView) -> str:
    suffix = _RED_MARKER if getattr(node, "color", None) is Color.RED else ""
    return f"{node.value}{suffix}"


def render_levels(root: Optional[TreeNodeView]) -> str:
    """Render *root* level-by-level, marking missing children with ``·``.

    Only missing children of real nodes get a placeholder; nothing is drawn
    beneath a placeholder, so each level is at most twice as wide as the
    number of nodes above it.  The renderer stops once the next level would
    only hold placeholders.
    """

    if root is None:
        return "<empty>"

    lines: List[str] = []
    queue: Deque[Optional[TreeNodeView]] = deque([root])

    while queue:
        level_count = len(queue)
        level_nodes: List[str] = []
        next_level_has_real_node = False
        for _ in range(level_count):
            node = queue.popleft()
            if node is None:
                level_nodes.append(_PLACEHOLDER)
                continue

            level_nodes.append(_label(node))
            queue.append(node.left)
            queue.append(node.right)
            if node.left is not None or node.right is not None:
                next_level_has_real_node = True

        lines.append(" ".join(level_nodes))
        if not next_level_has_real_node:
            break

    return "\n".join(lines)


def render_image(
    dot_source: str,
    output_path: Path,
    *,
    format: str = "png",
    source_factory: Callable[[str], _SupportsPipe] | None = None,
) -> Path:
    """Render *dot_source* with Graphviz and write the result to *output_path*."""

    factory = source_factory if source_factory is not None else graphviz.Source
    try:
        payload = factory(dot_source).pipe(format=format)
    except graphviz.ExecutableNotFound as exc:
        raise TreeRenderingError(
            "Graphviz executable not found. Install Graphviz to enable rendering."
        ) from exc
    except graphviz.CalledProcessError as exc:
        raise TreeRenderingError(f"Graphviz failed to render DOT source: {exc}") from exc

    if not isinstance(payload, (bytes, bytearray)):
        raise TreeRenderingError("Graphviz output must be bytes")
    output_path.write_bytes(bytes(payload))
    logger.info("Rendered tree diagram to %s (%d bytes)", output_path, len(payload))
    return output_path
