"""Main entry point for h2vstack."""

import argparse
import logging
import sys

import yaml

from .core.node import StackNode
from .layout import PlacementMode, StackLoader


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="H2VStack - lay out a YAML stack definition and print its geometry",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "path",
        help="Stack definition YAML file",
    )
    width = parser.add_mutually_exclusive_group()
    width.add_argument(
        "-w", "--width",
        type=float,
        help="Override the root stack's width",
    )
    width.add_argument(
        "--unconstrained",
        action="store_true",
        help="Lay out the root stack without a width (never wraps)",
    )
    parser.add_argument(
        "-m", "--mode",
        choices=[mode.value for mode in PlacementMode],
        help="Override the placement mode of every stack in the file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log layout decisions to stderr",
    )
    return parser.parse_args(argv)


def format_tree(root: StackNode) -> list[str]:
    """Describe every node's frame, one line per node, indented by depth."""
    lines = []
    for depth, node in root.iter_nodes():
        indent = "  " * depth
        if node.frame is None:
            lines.append(f"{indent}- {node.name}: not placed")
            continue
        frame = node.frame
        lines.append(
            f"{indent}- {node.name}: "
            f"({frame.min_x:g}, {frame.min_y:g}) {frame.width:g}x{frame.height:g}"
        )
    return lines


def main(argv: list[str] | None = None) -> int:
    """Run the h2vstack command line tool."""
    args = parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    loader = StackLoader()
    try:
        root = loader.load(args.path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.width is not None:
        root.width = args.width
    elif args.unconstrained:
        root.width = None

    if args.mode is not None:
        mode = PlacementMode(args.mode)
        for _, node in root.iter_nodes():
            if isinstance(node, StackNode):
                node.layout.mode = mode

    size = loader.layout(root)

    print(f"{root.name}: {size.width:g}x{size.height:g}")
    for line in format_tree(root)[1:]:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
