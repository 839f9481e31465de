"""Crawl web pages into a link graph, cluster and lay it out, and serve it as JSON."""

__version__ = "0.1.0"
__all__ = ["crawler", "graph", "layout", "parser", "server"]