"""Force-directed placement of clusters and of the nodes inside them."""

from __future__ import annotations

import math
import random
from itertools import combinations

from linkgraph.graph import Cluster, Graph

CLUSTER_PADDING = 75.0
CLUSTER_ITERATIONS = 100
CLUSTER_FORCE_STRENGTH = 0.1

NODE_ITERATIONS = 50
NODE_REPEL_STRENGTH = 0.5
NODE_BOUND_STRENGTH = 0.1


def rand_float(rng=None) -> float:
    """Return a random float in [-1, 1)."""
    source = random if rng is None else rng
    return source.random() * 2 - 1


def _size_cluster(graph: Graph, cluster: Cluster, rng) -> None:
    cluster.radius = 0.0
    cluster.center_x = 1.0
    cluster.center_y = 1.0
    for node_id in cluster.node_ids:
        node = graph.nodes[node_id]
        cluster.radius += float(node.weight)
        cluster.center_x += node.x * rand_float(rng)
        cluster.center_y += node.y * rand_float(rng)
    if cluster.node_ids:
        cluster.center_x /= len(cluster.node_ids)
        cluster.center_y /= len(cluster.node_ids)


def _separate_clusters(clusters: list[Cluster]) -> None:
    for _ in range(CLUSTER_ITERATIONS):
        for first, second in combinations(clusters, 2):
            dx = second.center_x - first.center_x
            dy = second.center_y - first.center_y
            dist = math.hypot(dx, dy)
            min_dist = first.radius + second.radius + CLUSTER_PADDING
            if not 0.001 < dist < min_dist:
                continue
            force = (min_dist - dist) * CLUSTER_FORCE_STRENGTH
            move_x = dx / dist * force
            move_y = dy / dist * force
            first.center_x -= move_x
            first.center_y -= move_y
            second.center_x += move_x
            second.center_y += move_y


def _spread_nodes(graph: Graph, cluster: Cluster, rng) -> None:
    nodes = [graph.nodes[node_id] for node_id in cluster.node_ids]
    radii = [math.sqrt(float(node.weight)) * 2 + 1 for node in nodes]

    for node in nodes:
        angle = rand_float(rng) * math.pi * 2
        dist = rand_float(rng) * cluster.radius * 0.8
        node.x = cluster.center_x + dist * math.cos(angle)
        node.y = cluster.center_y + dist * math.sin(angle)

    for _ in range(NODE_ITERATIONS):
        for i, (node, own_radius) in enumerate(zip(nodes, radii)):
            fx = fy = 0.0

            for j, (other, other_radius) in enumerate(zip(nodes, radii)):
                if i == j:
                    continue
                dx = node.x - other.x
                dy = node.y - other.y
                dist = math.hypot(dx, dy)
                min_dist = own_radius + other_radius
                if 0.01 < dist < min_dist:
                    force = (min_dist - dist) * NODE_REPEL_STRENGTH
                    fx += dx / dist * force
                    fy += dy / dist * force

            cdx = node.x - cluster.center_x
            cdy = node.y - cluster.center_y
            cd = math.hypot(cdx, cdy)
            max_dist = cluster.radius - own_radius
            if cd > max_dist and cd > 0.01:
                overshoot = (cd - max_dist) * NODE_BOUND_STRENGTH
                fx -= cdx / cd * overshoot
                fy -= cdy / cd * overshoot

            node.x += fx
            node.y += fy


def create_layout(graph: Graph, rng=None) -> None:
    """Place clusters apart from each other and spread nodes inside each cluster.

    rng is any object with a random() method; the random module is used if omitted.
    """
    print(
        f"Creating layout for {len(graph.nodes)} nodes and "
        f"{len(graph.clusters)} clusters..."
    )
    clusters = [graph.clusters[key] for key in sorted(graph.clusters)]

    for cluster in clusters:
        _size_cluster(graph, cluster, rng)

    _separate_clusters(clusters)

    for cluster in clusters:
        _spread_nodes(graph, cluster, rng)