import json
import threading
import urllib.error
import urllib.request
from http.server import ThreadingHTTPServer

import pytest

from linkgraph.graph import Graph, save_graph_to_file
from linkgraph.server import graph_payload, main, make_handler


@pytest.fixture
def sample_graph():
    graph = Graph()
    root = graph.add_node("http://example.com/", 1.5, 2.5, 1)
    child = graph.add_node("http://example.com/a", 3.0, 4.0, 1)
    graph.add_edge(root, child)
    return graph


@pytest.fixture
def base_url(sample_graph):
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), make_handler(sample_graph))
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}"
    httpd.shutdown()
    httpd.server_close()
    thread.join()


def test_graph_payload_lists_nodes_and_edges(sample_graph):
    payload = graph_payload(sample_graph)
    assert [n["link"] for n in payload["nodes"]] == ["http://example.com/", "http://example.com/a"]
    assert payload["edges"] == [{"id": 0, "from": 0, "to": 1}]
    assert payload["nodes"][0]["edge_ids"] == [0]


def test_get_graph_returns_json_with_cors(base_url, sample_graph):
    with urllib.request.urlopen(base_url + "/graph") as response:
        assert response.status == 200
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert response.headers["Content-Type"] == "application/json"
        data = json.loads(response.read())
    assert data == graph_payload(sample_graph)


def test_options_returns_empty_ok(base_url):
    request = urllib.request.Request(base_url + "/graph", method="OPTIONS")
    with urllib.request.urlopen(request) as response:
        assert response.status == 200
        assert response.headers["Access-Control-Allow-Methods"] == "GET, OPTIONS"
        assert response.read() == b""


def test_unknown_path_is_not_found(base_url):
    with pytest.raises(urllib.error.HTTPError) as info:
        urllib.request.urlopen(base_url + "/other")
    assert info.value.code == 404


def test_main_reports_missing_file(tmp_path, capsys):
    result = main(["--load", str(tmp_path / "missing.json")])
    assert result == 1
    assert "Error loading graph from file" in capsys.readouterr().out


def test_main_reports_malformed_file(tmp_path, capsys):
    path = tmp_path / "graph.json"
    path.write_text("not json", encoding="utf-8")
    assert main(["--load", str(path)]) == 1
    assert "Error loading graph from file" in capsys.readouterr().out


def test_main_requires_link_without_load():
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2


def test_saved_graph_payload_survives_round_trip(tmp_path, sample_graph):
    path = tmp_path / "graph.json"
    save_graph_to_file(sample_graph, str(path))
    from linkgraph.graph import load_graph_from_file

    loaded = load_graph_from_file(str(path))
    assert graph_payload(loaded) == graph_payload(sample_graph)