"""YAML loader for stack definitions."""

import logging
from numbers import Real
from pathlib import Path
from typing import Any

import yaml

from ..core.geometry import Point, Size
from ..core.node import StackNode, ViewNode
from .flow import H2VStack, PlacementMode

logger = logging.getLogger(__name__)


class StackLoader:
    """Loads H2V stack definitions from YAML files.

    YAML format:
        name: tags
        width: 100          # optional, omitted or null = unconstrained
        mode: unified       # unified | legacy (default: unified)
        origin: [0, 0]      # top-left corner of the root's frame (optional)

        children:
          - name: a
            size: [60, 20]  # intrinsic [width, height]

          - name: group     # a child with 'children' is a nested stack
            width: 40
            children:
              - name: b
                size: [10, 10]

    The mode applies to the whole tree; nested stacks use the root's mode.
    """

    def load(self, path: str | Path) -> StackNode:
        """Load a stack definition from a YAML file.

        Args:
            path: Path to the YAML file

        Returns:
            Root StackNode with its children built
        """
        path = Path(path)
        logger.debug("Loading stack definition from %s", path)
        with open(path) as f:
            data = yaml.safe_load(f)

        return self._build_stack(data)

    def load_string(self, yaml_string: str) -> StackNode:
        """Load a stack definition from a YAML string.

        Args:
            yaml_string: YAML content as a string

        Returns:
            Root StackNode with its children built
        """
        data = yaml.safe_load(yaml_string)
        return self._build_stack(data)

    def layout(self, root: StackNode) -> Size:
        """Measure a loaded root stack and place the whole tree.

        Returns:
            The measured size of the root
        """
        return root.layout_in()

    def _build_stack(self, data: Any) -> StackNode:
        """Build the root stack from parsed YAML data."""
        if not isinstance(data, dict):
            raise ValueError("Stack definition must be a mapping")

        mode_name = data.get("mode", PlacementMode.UNIFIED.value)
        try:
            mode = PlacementMode(mode_name)
        except ValueError:
            choices = ", ".join(m.value for m in PlacementMode)
            raise ValueError(f"Unknown placement mode '{mode_name}' (expected one of: {choices})") from None

        root = self._build_node(data, data.get("name", "stack"), mode, is_root=True)
        if not isinstance(root, StackNode):
            raise ValueError(f"Root '{root.name}' must define 'children'")

        origin = data.get("origin", [0, 0])
        root.origin = Point(*self._parse_pair(origin, root.name, "origin"))
        return root

    def _build_node(
        self, data: Any, default_name: str, mode: PlacementMode, is_root: bool = False
    ) -> ViewNode | StackNode:
        """Build a single node, recursing into nested stacks."""
        if not isinstance(data, dict):
            raise ValueError(f"Child '{default_name}' must be a mapping")

        name = str(data.get("name", default_name))

        if not is_root:
            for key in ("mode", "origin"):
                if key in data:
                    raise ValueError(f"'{key}' is only allowed on the root, found on '{name}'")

        if "children" in data:
            if "size" in data:
                raise ValueError(f"Stack '{name}' cannot have both 'size' and 'children'")

            children = data["children"]
            if children is None:
                children = []
            elif not isinstance(children, list):
                raise ValueError(f"'children' of '{name}' must be a list, got {children!r}")

            width = data.get("width")
            if width is not None and not self._is_number(width):
                raise ValueError(f"Stack '{name}' has a non-numeric width: {width!r}")

            stack = StackNode(name, layout=H2VStack(mode), width=width)
            for i, child_def in enumerate(children):
                stack.add_child(self._build_node(child_def, f"child_{i}", mode))
            return stack

        if "size" not in data:
            raise ValueError(f"Child '{name}' must have 'size' or 'children'")
        if "width" in data:
            raise ValueError(f"Child '{name}' has 'width' but no 'children'")

        width, height = self._parse_pair(data["size"], name, "size")
        return ViewNode(name, Size(width, height))

    def _parse_pair(self, value: Any, name: str, key: str) -> tuple[float, float]:
        """Parse a [a, b] pair of numbers."""
        if (
            not isinstance(value, (list, tuple))
            or len(value) != 2
            or not all(self._is_number(v) for v in value)
        ):
            raise ValueError(f"'{key}' of '{name}' must be two numbers, got {value!r}")
        return float(value[0]), float(value[1])

    @staticmethod
    def _is_number(value: Any) -> bool:
        return isinstance(value, Real) and not isinstance(value, bool)
