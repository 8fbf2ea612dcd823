import pytest

from lamsketch.geometry import Ori, Point
from lamsketch.layers import LaminateData, Layer, Node, NodePos, Ply


def _build_data(points_per_ply):
    data = LaminateData()
    for layer_pos, plies in enumerate(points_per_ply):
        layer = data.add_layer()
        for ply_pos, points in enumerate(plies):
            ply = layer.add_ply()
            for node_pos, point in enumerate(points):
                ply.add_node(Node(point=point, pos=NodePos(layer_pos, ply_pos, node_pos)))
    return data


def test_node_pos_orders_lexicographically():
    positions = [NodePos(1, 0, 0), NodePos(0, 1, 0), NodePos(0, 0, 2), NodePos(0, 0, 1)]
    assert sorted(positions) == [NodePos(0, 0, 1), NodePos(0, 0, 2),
                                 NodePos(0, 1, 0), NodePos(1, 0, 0)]
    assert NodePos(0, 0, 5) <= NodePos(0, 0, 5)


def test_add_node_returns_the_stored_node():
    ply = Ply()
    node = Node(point=Point(1.0, 2.0))
    stored = ply.add_node(node)
    assert stored is node
    assert list(ply) == [node]


def test_new_ply_has_zero_orientation():
    layer = Layer()
    ply = layer.add_ply()
    assert ply.ori is Ori.ZERO
    assert layer[0] is ply


def test_insert_node_shifts_following_positions():
    ply = Ply()
    for i in range(3):
        ply.add_node(Node(point=Point(float(i), 0.0), pos=NodePos(0, 0, i)))
    inserted = ply.insert_node(1, Node(point=Point(0.5, 0.0), pos=NodePos(0, 0, 1)))
    assert ply[1] is inserted
    assert [node.pos.node_pos for node in ply] == list(range(len(ply)))
    assert [node.point for node in ply] == [Point(0.0, 0.0), Point(0.5, 0.0),
                                            Point(1.0, 0.0), Point(2.0, 0.0)]


def test_insert_node_out_of_range_raises():
    ply = Ply()
    with pytest.raises(IndexError):
        ply.insert_node(2, Node(point=Point()))


def test_get_node_and_last_node_pos():
    data = _build_data([[[Point(0, 0), Point(1, 0)]], [[Point(0, 1)], [Point(2, 1), Point(3, 1)]]])
    last = data.get_node(data.last_node_pos())
    assert last.point == Point(3, 1)
    assert last.pos == data.last_node_pos()
    assert data.get_node(NodePos(0, 0, 1)).point == Point(1, 0)


def test_last_node_pos_of_empty_data_raises():
    with pytest.raises(IndexError):
        LaminateData().last_node_pos()


def test_get_layer_out_of_range_raises():
    data = _build_data([[[Point(0, 0)]]])
    assert data.get_layer(0) is data[0]
    with pytest.raises(IndexError):
        data.get_layer(1)
    with pytest.raises(IndexError):
        data.get_layer(-1)


def test_first_and_last_node_checks():
    data = _build_data([[[Point(0, 0), Point(1, 0), Point(2, 0)]]])
    assert data.is_first_node_in_ply(NodePos(0, 0, 0))
    assert not data.is_first_node_in_ply(NodePos(0, 0, 1))
    assert data.is_last_node_in_ply(NodePos(0, 0, 2))
    assert not data.is_last_node_in_ply(NodePos(0, 0, 1))


def test_insert_node_through_data():
    data = _build_data([[[Point(0, 0), Point(2, 0)]]])
    pos = NodePos(0, 0, 1)
    node = data.insert_node(pos, Node(point=Point(1, 0), pos=pos))
    assert data.get_node(pos) is node
    assert data.is_last_node_in_ply(data.get_node(data.last_node_pos()).pos)
    assert [n.pos.node_pos for n in data[0][0]] == list(range(len(data[0][0])))


def test_reverse_layers():
    data = _build_data([[[Point(0, 0)]], [[Point(0, 1)]], [[Point(0, 2)]]])
    before = list(data)
    data.reverse_layers()
    assert list(data) == before[::-1]
    assert data.layers[0] is before[-1]