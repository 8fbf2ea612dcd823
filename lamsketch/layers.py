"""Layered laminate model: nodes grouped into plies, plies grouped into layers."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterator

from lamsketch.geometry import Ori, Point


@dataclass(frozen=True, order=True)
class NodePos:
    """Address of a node: layer index, ply index within the layer, node index within the ply."""

    layer_pos: int = 0
    ply_pos: int = 0
    node_pos: int = 0


@dataclass
class Node:
    """A point of a ply together with its links to the plies above and below."""

    point: Point
    pos: NodePos = field(default_factory=NodePos)
    top_pos: NodePos | None = None
    bottom_pos: NodePos | None = None


class Ply:
    """An ordered run of nodes laid in one direction."""

    def __init__(self, ori: Ori = Ori.ZERO) -> None:
        self.ori = ori
        self._nodes: list[Node] = []

    def add_node(self, node: Node) -> Node:
        self._nodes.append(node)
        return node

    def insert_node(self, index: int, node: Node) -> Node:
        """Insert a node before index and shift the positions of the nodes after it."""
        if not 0 <= index <= len(self._nodes):
            raise IndexError(f"node index {index} out of range")
        self._nodes.insert(index, node)
        for following in self._nodes[index + 1:]:
            following.pos = replace(following.pos, node_pos=following.pos.node_pos + 1)
        return node

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def __getitem__(self, index: int) -> Node:
        return self._nodes[index]

    def __repr__(self) -> str:
        return f"Ply(ori={self.ori!r}, nodes={self._nodes!r})"


class Layer:
    """A set of plies lying at the same depth of the laminate."""

    def __init__(self) -> None:
        self._plies: list[Ply] = []

    def add_ply(self) -> Ply:
        ply = Ply()
        self._plies.append(ply)
        return ply

    def __len__(self) -> int:
        return len(self._plies)

    def __iter__(self) -> Iterator[Ply]:
        return iter(self._plies)

    def __getitem__(self, index: int) -> Ply:
        return self._plies[index]

    def __repr__(self) -> str:
        return f"Layer({self._plies!r})"


class LaminateData:
    """All layers of a laminate sketch."""

    def __init__(self) -> None:
        self._layers: list[Layer] = []

    @property
    def layers(self) -> list[Layer]:
        return self._layers

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[Layer]:
        return iter(self._layers)

    def __getitem__(self, index: int) -> Layer:
        return self._layers[index]

    def add_layer(self) -> Layer:
        layer = Layer()
        self._layers.append(layer)
        return layer

    def get_layer(self, index: int) -> Layer:
        if not 0 <= index < len(self._layers):
            raise IndexError(f"layer index {index} out of range")
        return self._layers[index]

    def get_node(self, pos: NodePos) -> Node:
        return self._layers[pos.layer_pos][pos.ply_pos][pos.node_pos]

    def last_node_pos(self) -> NodePos:
        """Position of the last node of the last ply of the last layer."""
        if not self._layers:
            raise IndexError("no layers")
        layer = self._layers[-1]
        if not len(layer):
            raise IndexError("last layer has no plies")
        ply = layer[-1]
        if not len(ply):
            raise IndexError("last ply has no nodes")
        return NodePos(len(self._layers) - 1, len(layer) - 1, len(ply) - 1)

    def insert_node(self, pos: NodePos, node: Node) -> Node:
        return self.get_layer(pos.layer_pos)[pos.ply_pos].insert_node(pos.node_pos, node)

    def is_first_node_in_ply(self, pos: NodePos) -> bool:
        return pos.node_pos == 0

    def is_last_node_in_ply(self, pos: NodePos) -> bool:
        return len(self.get_layer(pos.layer_pos)[pos.ply_pos]) - 1 == pos.node_pos

    def reverse_layers(self) -> None:
        self._layers.reverse()

    def __repr__(self) -> str:
        return f"LaminateData({self._layers!r})"