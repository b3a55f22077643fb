"""Command line demo that seeds an ordered tree and prints its shape.

By default the script builds a plain binary search tree from the sequence
``7 3 11 1 5 9 13 4 6 8 12 14`` and prints the Graphviz description of the
result.  Flags select the red-black variant, character elements, a level-order
text rendering or a JSON summary, and can render the DOT source to an image
through Graphviz.
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

from ordtree import (
    BinarySearchTree,
    Int,
    OrderedTree,
    RedBlackTree,
    Rune,
    TreeRenderingError,
    generate_dot,
    render_image,
    render_levels,
)

logger = logging.getLogger(__name__)

DEFAULT_VALUES: Tuple[int, ...] = (7, 3, 11, 1, 5, 9, 13, 4, 6, 8, 12, 14)
VARIANTS = {
    "bst": BinarySearchTree,
    "redblack": RedBlackTree,
}


@dataclass(frozen=True)
class DemoCase:
    """A tree variant together with the elements used to seed it."""

    name: str
    variant: str
    elements: Tuple[Any, ...]

    def build(self) -> OrderedTree[Any]:
        """Materialise the tree described by this case."""

        tree: OrderedTree[Any] = VARIANTS[self.variant]()
        for element in self.elements:
            result = tree.insert(element)
            if not result.created:
                logger.info("Skipped duplicate element %s", element)
        return tree


def _parse_values(raw: str) -> Tuple[Int, ...]:
    return tuple(Int(int(item)) for item in raw.split(",") if item.strip())


def _summary(case: DemoCase, tree: OrderedTree[Any]) -> Dict[str, Any]:
    return {
        "name": case.name,
        "variant": case.variant,
        "count": tree.count,
        "height": tree.height(),
        "balanced": tree.balanced(),
        "inorder": [str(value) for value in tree],
        "dot": generate_dot(tree.root),
    }


def _format_output(case: DemoCase, tree: OrderedTree[Any], output_format: str) -> str:
    if output_format == "json":
        return json.dumps(_summary(case, tree)) + "\n"
    if output_format == "levels":
        return render_levels(tree.root) + "\n"
    return generate_dot(tree.root)


def _image_format(path: Path) -> str:
    suffix = path.suffix.lstrip(".").lower()
    return suffix or "png"


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--variant",
        choices=sorted(VARIANTS),
        default="bst",
        help="Tree implementation to seed",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--values",
        type=str,
        default=None,
        help="Comma separated integers to insert (defaults to the built-in sequence)",
    )
    source.add_argument(
        "--runes",
        type=str,
        default=None,
        help="Insert each character of this string instead of integers",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=["dot", "levels", "json"],
        default="dot",
        help="Output format written to stdout",
    )
    parser.add_argument(
        "--render",
        type=Path,
        default=None,
        help="Also render the DOT source to this image path via Graphviz",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity for diagnostic output.",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Build the requested demo tree and print it."""

    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    elements: Tuple[Any, ...]
    if args.runes is not None:
        elements = tuple(Rune(char) for char in args.runes)
        name = "runes"
    elif args.values is not None:
        try:
            elements = _parse_values(args.values)
        except (TypeError, ValueError) as exc:
            parser.error(f"Failed to parse integer payloads: {exc}")
        name = "values"
    else:
        elements = tuple(Int(value) for value in DEFAULT_VALUES)
        name = "default"

    case = DemoCase(name=name, variant=args.variant, elements=elements)
    tree = case.build()
    print(_format_output(case, tree, args.output_format), end="")

    if args.render is not None:
        try:
            render_image(
                generate_dot(tree.root),
                args.render,
                format=_image_format(args.render),
            )
        except (TreeRenderingError, OSError) as exc:
            logger.exception("Failed to render tree diagram: %s", exc)
            return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
