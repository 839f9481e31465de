"""Crawling pages into a link graph."""

from __future__ import annotations

import threading
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait

from linkgraph.graph import Graph, print_info
from linkgraph.parser import FetchError, get_links, get_links_v2


def parse_page(link: str, depth: int, graph: Graph) -> None:
    """Crawl link recursively to depth, adding a node and edge for every link found."""
    if depth == 0:
        return
    print_info("Depth: %d -- Parsing page: %s\n", depth, link)
    try:
        links = get_links(link)
    except (FetchError, ValueError) as exc:
        print("Error fetching links:", exc)
        return
    node_id = graph.add_node(link, 1, 1, 1)
    for child in links:
        graph.add_edge(node_id, graph.add_node(child, 1, 1, 1))
        parse_page(child, depth - 1, graph)


def parse_page_concurrently(link: str, depth: int, graph: Graph) -> None:
    """Crawl link to depth with a thread pool, fetching each URL at most once."""
    visited: set[str] = set()
    lock = threading.Lock()

    def visit(url: str, remaining: int) -> list[str]:
        with lock:
            if remaining == 0 or url in visited:
                return []
            visited.add(url)
        print_info("Depth: %d -- Parsing: %s\n", remaining, url)
        try:
            links = get_links_v2(url)
        except (FetchError, ValueError):
            return []
        from_id = graph.add_node(url, 1, 1, 1)
        for child in links:
            graph.add_edge(from_id, graph.add_node(child, 1, 1, 1))
        return links

    with ThreadPoolExecutor(max_workers=16) as pool:
        pending = {pool.submit(visit, link, depth): depth - 1}
        while pending:
            finished, _ = wait(pending, return_when=FIRST_COMPLETED)
            for future in finished:
                remaining = pending.pop(future)
                for child in future.result():
                    pending[pool.submit(visit, child, remaining)] = remaining - 1