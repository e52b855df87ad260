"""
Binary Space Partitioning (BSP) for room layouts.

Nodes live in a flat arena (a list addressed by index) and are split from an
explicit worklist, so large maps never recurse deeply.
"""
import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .rng import SeededRandom

logger = logging.getLogger(__name__)


@dataclass
class BSPContainer:
    """A rectangular region of the map."""
    x: int
    y: int
    w: int
    h: int

    @property
    def center(self) -> Tuple[float, float]:
        return (self.x + self.w / 2, self.y + self.h / 2)

    @property
    def area(self) -> int:
        return self.w * self.h


@dataclass
class BSPNode:
    """A node in the BSP arena. Children are arena indices."""
    container: BSPContainer
    depth: int
    target: int = 1  # Leaves this subtree is expected to produce (hybrid mode)
    left: Optional[int] = None
    right: Optional[int] = None

    def is_leaf(self) -> bool:
        """Check if this is a leaf node."""
        return self.left is None and self.right is None


class SpacePartitioner:
    """
    Splits a root rectangle into non-overlapping leaf containers.

    Two stopping modes:
    - partition(): split every node until max_depth or until it is too small
    - partition_hybrid(): like partition() but a subtree whose share of the
      target room count has dropped to one may stop early at random

    fit_leaf_count() then trims or pads the leaves to an exact count.
    """

    def __init__(
        self,
        rng: SeededRandom,
        min_leaf_size: int = 6,
        min_ratio: float = 0.4,
        max_split_attempts: int = 5,
        early_stop_chance: float = 0.6,
    ):
        """
        Args:
            rng: Shared random stream
            min_leaf_size: Smallest width/height a leaf may have
            min_ratio: Smallest acceptable short/long side ratio along the split axis
            max_split_attempts: Tries per split before a node becomes a leaf
            early_stop_chance: Probability a satisfied subtree stops splitting
        """
        if min_leaf_size < 1:
            raise ValueError("min_leaf_size must be at least 1")
        self.rng = rng
        self.min_leaf_size = min_leaf_size
        self.min_ratio = min_ratio
        self.max_split_attempts = max_split_attempts
        self.early_stop_chance = early_stop_chance
        self.nodes: List[BSPNode] = []

    @staticmethod
    def depth_for(target_leaves: int) -> int:
        """Tree depth that comfortably yields `target_leaves` leaves (clamped 3-7)."""
        base = math.ceil(math.log2(max(1, target_leaves)))
        return max(3, min(base + 1, 7))

    # -------------------------------------------------------------------------
    # Splitting
    # -------------------------------------------------------------------------

    def _can_split(self, span: int) -> bool:
        return span >= self.min_leaf_size * 2

    def _prefer_vertical(self, c: BSPContainer) -> bool:
        """Pick the cut orientation. Vertical cuts divide the width."""
        if c.w / c.h >= 1.25:
            return True
        if c.h / c.w >= 1.25:
            return False
        # Near-square: weight the coin by aspect ratio
        return self.rng.next() < c.w / (c.w + c.h)

    def split_container(self, c: BSPContainer) -> Optional[Tuple[BSPContainer, BSPContainer]]:
        """
        Split a container in two.

        Returns:
            The two children, or None if no acceptable split was found
        """
        if not self._can_split(c.w) and not self._can_split(c.h):
            return None

        for _ in range(self.max_split_attempts):
            vertical = self._prefer_vertical(c)
            if vertical and not self._can_split(c.w):
                vertical = False
            elif not vertical and not self._can_split(c.h):
                vertical = True

            span = c.w if vertical else c.h
            pos = int(span * (0.3 + self.rng.next() * 0.4))  # 30-70%
            pos = max(self.min_leaf_size, min(span - self.min_leaf_size, pos))

            if vertical:
                first = BSPContainer(c.x, c.y, pos, c.h)
                second = BSPContainer(c.x + pos, c.y, c.w - pos, c.h)
                ratios = (first.w / first.h, second.w / second.h)
            else:
                first = BSPContainer(c.x, c.y, c.w, pos)
                second = BSPContainer(c.x, c.y + pos, c.w, c.h - pos)
                ratios = (first.h / first.w, second.h / second.w)

            if min(ratios) >= self.min_ratio:
                return first, second

        return None

    # -------------------------------------------------------------------------
    # Tree construction
    # -------------------------------------------------------------------------

    def _add_node(self, container: BSPContainer, depth: int, target: int = 1) -> int:
        self.nodes.append(BSPNode(container=container, depth=depth, target=target))
        return len(self.nodes) - 1

    def _split_node(self, index: int) -> bool:
        node = self.nodes[index]
        children = self.split_container(node.container)
        if children is None:
            return False

        left_target = math.ceil(node.target / 2)
        right_target = node.target - left_target
        node.left = self._add_node(children[0], node.depth + 1, left_target)
        node.right = self._add_node(children[1], node.depth + 1, right_target)
        return True

    def partition(self, root: BSPContainer, max_depth: int) -> List[BSPContainer]:
        """Split breadth-first until max_depth or until nodes are too small."""
        self.nodes = []
        queue = deque([self._add_node(root, 0)])

        while queue:
            index = queue.popleft()
            if self.nodes[index].depth >= max_depth:
                continue
            if self._split_node(index):
                queue.append(self.nodes[index].left)
                queue.append(self.nodes[index].right)

        return self.leaves()

    def partition_hybrid(
        self,
        root: BSPContainer,
        target_leaves: int,
        max_depth: Optional[int] = None,
    ) -> List[BSPContainer]:
        """
        Split breadth-first, stopping subtrees early once they likely hold enough rooms.

        Each child inherits half of its parent's target; a node whose target
        is down to one stops with probability early_stop_chance.
        """
        if max_depth is None:
            max_depth = self.depth_for(target_leaves)

        self.nodes = []
        queue = deque([self._add_node(root, 0, target_leaves)])

        while queue:
            index = queue.popleft()
            node = self.nodes[index]
            if node.depth >= max_depth:
                continue
            if node.target <= 1 and self.rng.next() < self.early_stop_chance:
                continue
            if self._split_node(index):
                queue.append(node.left)
                queue.append(node.right)

        return self.leaves()

    def leaves(self) -> List[BSPContainer]:
        """Leaf containers of the current tree, left subtree before right."""
        if not self.nodes:
            return []

        result: List[BSPContainer] = []
        stack = [0]
        while stack:
            node = self.nodes[stack.pop()]
            if node.is_leaf():
                result.append(node.container)
            else:
                stack.append(node.right)
                stack.append(node.left)
        return result

    # -------------------------------------------------------------------------
    # Post-pass
    # -------------------------------------------------------------------------

    def fit_leaf_count(self, leaves: List[BSPContainer], target: int) -> List[BSPContainer]:
        """
        Trim or pad leaves to exactly `target`.

        Excess leaves are removed at random. Missing leaves come from
        repeatedly splitting the current largest leaf; padding stops early
        when that leaf cannot be split.
        """
        fitted = list(leaves)

        while len(fitted) > target:
            fitted.pop(self.rng.next_int(0, len(fitted) - 1))

        while len(fitted) < target and fitted:
            largest = max(range(len(fitted)), key=lambda i: fitted[i].area)
            children = self.split_container(fitted[largest])
            if children is None:
                logger.debug(f"Cannot split further; stopping at {len(fitted)}/{target} leaves")
                break
            fitted[largest:largest + 1] = list(children)

        return fitted
