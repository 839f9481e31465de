# linkgraph

linkgraph crawls outward from a starting web page. It follows the links it finds,
to a chosen depth, and records each page as a node in a graph. Each link becomes
an edge. The graph can be grouped into clusters, by domain or by connectivity.
A force-directed layout gives every node a position. The result is served as
JSON over HTTP.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Command line

Crawl from a starting page:

```
linkgraph https://example.com/ --depth 3
```

Serve a graph saved earlier instead of crawling:

```
linkgraph --load graph.json
```

Options:

- `link`: the page to start crawling from. It is required unless `--load` is given.
- `--depth N`: how many levels of links to follow. The default is 5.
- `--load FILE`: read the graph from a JSON file and skip the crawl.
- `--output FILE`: where a crawled graph is saved. The default is `graph.json`.
- `--host HOST`: the address to listen on. The default is every interface.
- `--port PORT`: the port to listen on. The default is 8080.

When it crawls, the command:

1. crawls from the starting page on a pool of threads;
2. sets each node's weight from its number of outgoing links;
3. clusters the nodes by domain;
4. saves the graph to the output file.

When it loads a file, it uses the stored graph as it is.

In both cases it then prints the node and cluster totals and computes the
layout. Last, it serves the graph at `http://localhost:8080/graph`, or at
whatever host and port were given. The server runs until it is interrupted. If
the file given to `--load` cannot be read, the command prints the error and
exits with status 1.

The response is a JSON object with a `nodes` list and an `edges` list, each
sorted by id:

- each node has `id`, `link`, `x`, `y`, `weight` and `edge_ids`;
- each edge has `id`, `from` and `to`.

The endpoint sends permissive CORS headers. An `OPTIONS` request gets those
headers and an empty body. Any other path answers 404.

## Library use

```python
import random

from linkgraph.graph import Graph, save_graph_to_file, load_graph_from_file
from linkgraph.crawler import parse_page_concurrently
from linkgraph.layout import create_layout

graph = Graph()
parse_page_concurrently("https://example.com/", 2, graph)
graph.calculate_weight()
graph.cluster_by_domain()        # or graph.cluster_by_connectivity()
print(graph.count(), "nodes in", graph.count_clusters(), "clusters")

create_layout(graph, random.Random(0))
save_graph_to_file(graph, "graph.json")
restored = load_graph_from_file("graph.json")
```

### Building blocks

- `linkgraph.parser`:
  - `get_links` fetches a page and checks it with `check_response`. It finds the targets of `<a href="...">` tags with a regular expression and returns each distinct one, resolved against the page URL.
  - `get_links_v2` fetches a page and passes its body to `extract_anchor_links`.
  - `extract_anchor_links` parses HTML and returns the distinct absolute URLs of anchor tags. It skips empty, fragment-only and `javascript:` links, and anything left without a scheme or host.
  - `check_response` raises `FetchError` unless the status is 200 and the content type starts with `text/html`.
  - `preprocess_links` resolves links against a base URL. It raises `ValueError` for a URL with control characters.
  - `find_all_matches` returns every regular-expression match as a list of the whole match and its groups.
  - `extract_domain` returns a URL's host name without the port, or an empty string.
  - Network failures raise `FetchError`.
- `linkgraph.graph`:
  - `Graph` holds `Node`, `Edge` and `Cluster` objects, keyed by id.
  - Its methods are `add_node`, `add_edge`, `calculate_weight`, `cluster_by_domain`, `cluster_by_connectivity`, `count` and `count_clusters`. Adding nodes and edges is thread-safe.
  - `to_dict` and `from_dict` convert a graph to and from plain data.
  - `save_graph_to_file` and `load_graph_from_file` store that data as JSON. Malformed data raises `ValueError`.
  - `print_graph` and `print_clusters` print a readable dump.
  - `print_info` prints a printf-style message.
- `linkgraph.crawler`:
  - `parse_page` crawls recursively in a single thread using `get_links`.
  - `parse_page_concurrently` crawls on a thread pool using `get_links_v2`, and fetches each URL only once.
- `linkgraph.layout`:
  - `create_layout` sizes each cluster by the total weight of its nodes and pushes the clusters apart.
  - It then spreads each cluster's nodes inside the cluster's radius.
  - Pass any object with a `random()` method, such as `random.Random`, to make the layout reproducible.
  - `rand_float` returns a random number in [-1, 1).
- `linkgraph.server`:
  - `graph_payload` builds the JSON document.
  - `make_handler` returns an HTTP request handler class for that graph.
  - `main` is the command described above.

## What it does not do

linkgraph serves the graph as JSON only. It ships no web page or viewer that
draws the graph; that has to be supplied separately.