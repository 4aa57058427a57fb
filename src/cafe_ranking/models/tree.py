"""Page tree used to derive depth annotations for the ranker."""

from typing import Dict, Iterator, List, Mapping, Optional

from ..config import DEPTH_DISCOUNT_FACTOR
from .entity import ScorableEntity

# Weight decay applied per tree level and share of child score rolled up
CHILD_WEIGHT_DECAY = 0.9
CHILD_SCORE_SHARE = 0.5


class PageNode:
    """Node wrapping one entity inside a page tree."""

    def __init__(self, entity: ScorableEntity):
        self.entity = entity
        self.parent: Optional["PageNode"] = None
        self.children: List["PageNode"] = []
        self.node_score = 0.0

    def add_child(self, child: "PageNode") -> "PageNode":
        """Attach a child node and return it."""
        child.parent = self
        self.children.append(child)
        return child

    @property
    def depth(self) -> int:
        depth = 0
        current = self
        while current.parent is not None:
            depth += 1
            current = current.parent
        return depth

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def __repr__(self) -> str:
        return (
            f"PageNode(entity={self.entity.id!r}, score={self.node_score:.2f}, "
            f"depth={self.depth}, children={len(self.children)})"
        )


class PageTree:
    """
    Tree of pages reachable from a root page.

    The tree is the source of depth annotations: ``depth_annotations()``
    maps every entity id to its distance from the root.
    """

    def __init__(self, root: ScorableEntity):
        self.root = PageNode(root)

    def walk(self) -> Iterator[PageNode]:
        """Pre-order traversal of all nodes."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, entity_id: str) -> Optional[PageNode]:
        for node in self.walk():
            if node.entity.id == entity_id:
                return node
        return None

    def depth_annotations(self) -> Dict[str, int]:
        """Map entity id -> depth; the shallowest occurrence wins."""
        depths: Dict[str, int] = {}
        for node in self.walk():
            depth = node.depth
            if node.entity.id not in depths or depth < depths[node.entity.id]:
                depths[node.entity.id] = depth
        return depths

    @property
    def height(self) -> int:
        return self._height(self.root)

    def _height(self, node: PageNode) -> int:
        if node.is_leaf:
            return 0
        return 1 + max(self._height(child) for child in node.children)

    @property
    def node_count(self) -> int:
        return sum(1 for _ in self.walk())

    def post_order_score(self, weights: Mapping[str, float]) -> float:
        """
        Score the whole tree bottom-up and return the root score.

        Each node scores its own content with the depth discount and an
        inherited weight (multiplied by 0.9 per level), then adds half of
        the summed child scores.
        """
        return self._score_node(self.root, weights, 1.0)

    def _score_node(self, node: PageNode, weights: Mapping[str, float], weight: float) -> float:
        depth_weight = 1.0 / (1.0 + node.depth * DEPTH_DISCOUNT_FACTOR)
        own_score = node.entity.compute_base_score(weights) * depth_weight * weight

        children_score = sum(
            self._score_node(child, weights, weight * CHILD_WEIGHT_DECAY)
            for child in node.children
        )

        node.node_score = own_score + children_score * CHILD_SCORE_SHARE
        return node.node_score

    @property
    def total_score(self) -> float:
        return self.root.node_score
