import math
import random

import pytest

from linkgraph.graph import Cluster, Graph
from linkgraph.layout import CLUSTER_PADDING, create_layout, rand_float


def _two_cluster_graph():
    graph = Graph()
    first = graph.add_node("http://one.example.com/", 10.0, 5.0, 10)
    second = graph.add_node("http://two.example.com/", -8.0, 12.0, 20)
    graph.clusters[0] = Cluster(id=0, node_ids=[first])
    graph.clusters[1] = Cluster(id=1, node_ids=[second])
    return graph


def test_rand_float_stays_in_range():
    rng = random.Random(3)
    values = [rand_float(rng) for _ in range(1000)]
    assert all(-1.0 <= v < 1.0 for v in values)
    assert min(values) < 0 < max(values)


def test_rand_float_is_reproducible_with_seed():
    first = [rand_float(random.Random(11)) for _ in range(3)]
    second = [rand_float(random.Random(11)) for _ in range(3)]
    assert first == second


def test_cluster_radius_is_sum_of_weights():
    graph = Graph()
    a = graph.add_node("http://example.com/a", 1.0, 1.0, 2)
    b = graph.add_node("http://example.com/b", 1.0, 1.0, 3)
    graph.clusters[0] = Cluster(id=0, node_ids=[a, b])
    create_layout(graph, random.Random(1))
    assert graph.clusters[0].radius == 5.0


def test_clusters_are_pushed_to_minimum_distance():
    graph = _two_cluster_graph()
    create_layout(graph, random.Random(5))
    first, second = graph.clusters[0], graph.clusters[1]
    dist = math.hypot(
        second.center_x - first.center_x, second.center_y - first.center_y
    )
    expected = first.radius + second.radius + CLUSTER_PADDING
    assert dist == pytest.approx(expected, rel=1e-6)


def test_single_node_stays_inside_cluster():
    graph = Graph()
    node_id = graph.add_node("http://example.com/", 3.0, 4.0, 25)
    graph.clusters[0] = Cluster(id=0, node_ids=[node_id])
    create_layout(graph, random.Random(9))
    cluster = graph.clusters[0]
    node = graph.nodes[node_id]
    assert math.hypot(node.x - cluster.center_x, node.y - cluster.center_y) <= cluster.radius


def test_layout_is_deterministic_for_same_seed():
    first = _two_cluster_graph()
    second = _two_cluster_graph()
    create_layout(first, random.Random(42))
    create_layout(second, random.Random(42))
    assert [(n.x, n.y) for n in first.nodes.values()] == [
        (n.x, n.y) for n in second.nodes.values()
    ]


def test_empty_graph_reports_counts(capsys):
    graph = Graph()
    create_layout(graph, random.Random(0))
    assert "0 nodes and 0 clusters" in capsys.readouterr().out
    assert graph.count() == 0