"""The link graph: nodes, edges, clusters and their JSON persistence."""

from __future__ import annotations

import json
import threading
from dataclasses import asdict, dataclass, field
from typing import Any

from linkgraph.parser import extract_domain


@dataclass
class Node:
    """A page in the graph."""

    id: int
    link: str
    x: float = 0.0
    y: float = 0.0
    weight: int = 0
    edge_ids: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Node:
        return cls(
            int(data.get("id", 0)),
            str(data.get("link", "")),
            float(data.get("x", 0.0)),
            float(data.get("y", 0.0)),
            int(data.get("weight", 0)),
            [int(e) for e in data.get("edge_ids") or []],
        )


@dataclass
class Edge:
    """A directed link from one page to another."""

    id: int
    from_id: int
    to_id: int

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "from": self.from_id, "to": self.to_id}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Edge:
        return cls(int(data.get("id", 0)), int(data.get("from", 0)), int(data.get("to", 0)))


@dataclass
class Cluster:
    """A group of nodes laid out together."""

    id: int
    node_ids: list[int] = field(default_factory=list)
    radius: float = 0.0
    center_x: float = 0.0
    center_y: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {"ID": self.id, "NodeIDs": list(self.node_ids), "Radius": self.radius,
                "CenterX": self.center_x, "CenterY": self.center_y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Cluster:
        return cls(
            int(data.get("ID", 0)),
            [int(n) for n in data.get("NodeIDs") or []],
            float(data.get("Radius", 0.0)),
            float(data.get("CenterX", 0.0)),
            float(data.get("CenterY", 0.0)),
        )


_SECTIONS = (("Nodes", "nodes", Node), ("Edges", "edges", Edge), ("Clusters", "clusters", Cluster))


class Graph:
    """A thread-safe directed graph of pages and links."""

    def __init__(self) -> None:
        self.nodes: dict[int, Node] = {}
        self.edges: dict[int, Edge] = {}
        self.clusters: dict[int, Cluster] = {}
        self._next_node_id = 0
        self._next_edge_id = 0
        self._lock = threading.Lock()

    def add_node(self, link: str, x: float, y: float, weight: int) -> int:
        """Add a node and return its id."""
        with self._lock:
            node_id = self._next_node_id
            self._next_node_id += 1
            self.nodes[node_id] = Node(node_id, link, x, y, weight)
            return node_id

    def add_edge(self, from_id: int, to_id: int) -> int:
        """Add an edge from one node to another and return its id."""
        with self._lock:
            source = self.nodes[from_id]
            edge_id = self._next_edge_id
            self._next_edge_id += 1
            self.edges[edge_id] = Edge(edge_id, from_id, to_id)
            source.edge_ids.append(edge_id)
            return edge_id

    def cluster_by_domain(self) -> None:
        """Group nodes into clusters by the host name of their link."""
        domain_clusters: dict[str, int] = {}
        for node in self.nodes.values():
            domain = extract_domain(node.link)
            if not domain:
                continue
            if domain not in domain_clusters:
                cluster_id = domain_clusters[domain] = len(domain_clusters)
                self.clusters[cluster_id] = Cluster(cluster_id)
            self.clusters[domain_clusters[domain]].node_ids.append(node.id)

    def cluster_by_connectivity(self) -> None:
        """Group nodes into clusters of nodes reachable by depth-first search."""
        visited: set[int] = set()
        for start in self.nodes:
            if start in visited:
                continue
            cluster_id = len(self.clusters)
            cluster = self.clusters[cluster_id] = Cluster(cluster_id)
            visited.add(start)
            cluster.node_ids.append(start)
            stack = [iter(self.nodes[start].edge_ids)]
            while stack:
                for edge_id in stack[-1]:
                    target = self.edges[edge_id].to_id
                    if target not in visited:
                        visited.add(target)
                        cluster.node_ids.append(target)
                        stack.append(iter(self.nodes[target].edge_ids))
                        break
                else:
                    stack.pop()

    def calculate_weight(self) -> None:
        """Set each node's weight to its number of outgoing edges, at least 1."""
        for node in self.nodes.values():
            node.weight = max(len(node.edge_ids), 1)

    def count(self) -> int:
        return len(self.nodes)

    def count_clusters(self) -> int:
        return len(self.clusters)

    def print_graph(self) -> None:
        for node in self.nodes.values():
            print(f"Node {node.id} (x: {node.x:f}, y: {node.y:f}, w: {node.weight}): {node.link}")
            for edge_id in node.edge_ids:
                print(f"  Edge to Node {self.edges[edge_id].to_id}")

    def print_clusters(self) -> None:
        for c in self.clusters.values():
            members = "".join(f"{node_id} " for node_id in c.node_ids)
            print(f"Cluster {c.id} (x: {c.center_x:f}, y: {c.center_y:f}, r: {c.radius:f}): {members}")

    def to_dict(self) -> dict[str, Any]:
        """Return the graph as a JSON-ready mapping."""
        result = {}
        for key, attr, _ in _SECTIONS:
            items = getattr(self, attr)
            result[key] = {str(k): items[k].to_dict() for k in sorted(items)}
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Graph:
        """Build a graph from a mapping produced by to_dict."""
        graph = cls()
        try:
            for key, attr, kind in _SECTIONS:
                setattr(graph, attr, {int(k): kind.from_dict(v) for k, v in (data.get(key) or {}).items()})
        except (AttributeError, TypeError, ValueError) as exc:
            raise ValueError(f"malformed graph data: {exc}") from exc
        graph._next_node_id = max(graph.nodes, default=-1) + 1
        graph._next_edge_id = max(graph.edges, default=-1) + 1
        return graph


def save_graph_to_file(graph: Graph, filename: str) -> None:
    """Write the graph as indented JSON to filename."""
    with open(filename, "w", encoding="utf-8") as handle:
        json.dump(graph.to_dict(), handle, indent=2)
    print(f"Graph saved to file {filename}")


def load_graph_from_file(filename: str) -> Graph:
    """Read a graph from a JSON file written by save_graph_to_file."""
    with open(filename, encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"failed to unmarshal graph: {exc}") from exc
    graph = Graph.from_dict(data)
    print(f"Loaded graph from file: {filename}")
    return graph


def print_info(format: str, *args: Any) -> None:
    """Print a progress message formatted with printf-style placeholders."""
    print(format % args, end="")