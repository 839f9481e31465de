"""Command line entry point and HTTP server for the crawled graph."""

from __future__ import annotations

import argparse
import json
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from urllib.parse import urlsplit

from linkgraph.crawler import parse_page_concurrently
from linkgraph.graph import Graph, load_graph_from_file, save_graph_to_file
from linkgraph.layout import create_layout


def graph_payload(graph: Graph) -> dict[str, Any]:
    """Return the nodes and edges of the graph as JSON-ready lists."""
    return {
        "nodes": [graph.nodes[key].to_dict() for key in sorted(graph.nodes)],
        "edges": [graph.edges[key].to_dict() for key in sorted(graph.edges)],
    }


def make_handler(graph: Graph) -> type[BaseHTTPRequestHandler]:
    """Return a request handler class that serves graph at /graph."""

    class GraphHandler(BaseHTTPRequestHandler):
        def _serve(self) -> None:
            if urlsplit(self.path).path != "/graph":
                self.send_error(404, "page not found")
                return
            body = b""
            if self.command != "OPTIONS":
                body = (json.dumps(graph_payload(graph)) + "\n").encode("utf-8")
            self.send_response(200)
            self.send_header("Access-Control-Allow-Origin", "*")
            self.send_header("Access-Control-Allow-Methods", "GET, OPTIONS")
            self.send_header("Access-Control-Allow-Headers", "Content-Type")
            if body:
                self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        do_GET = do_POST = do_OPTIONS = _serve

        def log_message(self, format, *args):
            pass

    return GraphHandler


def main(argv=None) -> int:
    """Crawl or load a graph, lay it out and serve it over HTTP."""
    parser = argparse.ArgumentParser(description="Crawl a site into a link graph and serve it as JSON.")
    parser.add_argument("link", nargs="?")
    parser.add_argument("--depth", type=int, default=5)
    parser.add_argument("--load", metavar="FILE")
    parser.add_argument("--output", default="graph.json")
    parser.add_argument("--host", default="")
    parser.add_argument("--port", type=int, default=8080)
    args = parser.parse_args(argv)
    if args.load is None and not args.link:
        parser.error("a start link is required unless --load is given")
    start = time.monotonic()

    if args.load is None:
        graph = Graph()
        print(f"Parsing page: {args.link} with depth: {args.depth}")
        parse_page_concurrently(args.link, args.depth, graph)
        graph.calculate_weight()
        graph.cluster_by_domain()
        try:
            save_graph_to_file(graph, args.output)
        except OSError as exc:
            print(f"failed to write graph to file: {exc}")
    else:
        try:
            graph = load_graph_from_file(args.load)
        except (OSError, ValueError) as exc:
            print(f"Error loading graph from file: {exc}")
            return 1

    rule = "=================================== "
    print(f"{rule}\nTotal nodes: {graph.count()}\nTotal clusters: {graph.count_clusters()}\n{rule}")

    create_layout(graph)

    server = ThreadingHTTPServer((args.host, args.port), make_handler(graph))
    print(f"Graph created in {time.monotonic() - start:.3f}s")
    print(f"Server started at {args.host}:{args.port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    finally:
        server.server_close()
    return 0