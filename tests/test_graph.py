import pytest

from vizgraph.model import Edge, EdgeIdAllocator, Graph, Node


def _ids(elements) -> set[str]:
    return {e.id for e in elements}


def test_add_edge_adds_missing_nodes() -> None:
    g = Graph("G")
    a, b, c = Node("A"), Node("B"), Node("C")
    g.add_node(a)
    g.add_edge(a, b)
    g.add_edge(c, a)

    assert _ids(g.get_nodes()) == {"A", "B", "C"}
    for source, dest, edge in g.iter_connections():
        assert g.get_node(source.id) is source
        assert g.get_node(dest.id) is dest
        assert g.get_edge(edge.id) is edge


def test_add_edge_returns_edge_for_parameters() -> None:
    g = Graph("G")
    edge = g.add_edge(Node("A"), Node("B"))
    edge.set_param("label", '"uses"')

    assert isinstance(edge, Edge)
    assert edge.dest.id == "B"
    assert g.get_edge(edge.id).get_param("label") == '"uses"'


def test_lookups_return_none_when_absent() -> None:
    g = Graph("G")
    g.add_edge(Node("A"), Node("B"))

    assert g.get_node("Z") is None
    assert g.get_edge("no-such-edge") is None
    assert g.edge_between("B", "A") is None
    assert g.get_connections("Z") is None


def test_connections_empty_for_sink_node() -> None:
    g = Graph("G")
    edge = g.add_edge(Node("A"), Node("B"))

    assert g.get_connections("B") == []
    [(dest, found)] = g.get_connections(g.get_node("A"))
    assert dest.id == "B"
    assert found is edge


def test_parallel_edges_are_kept_but_lookup_returns_first() -> None:
    g = Graph("G")
    a, b = Node("A"), Node("B")
    first = g.add_edge(a, b)
    second = g.add_edge(a, b)

    assert first.id != second.id
    assert _ids(g.get_edges()) == {first.id, second.id}
    assert [e.id for _, e in g.get_connections(a)] == [first.id, second.id]
    assert g.edge_between(a, b) is first


def test_remove_node_removes_exactly_incident_edges() -> None:
    g = Graph("G")
    a, b, c, d = (Node(x) for x in "ABCD")
    ab = g.add_edge(a, b)
    bc = g.add_edge(b, c)
    ca = g.add_edge(c, a)
    cd = g.add_edge(c, d)
    bb = g.add_edge(b, b)

    g.remove_node(b)

    assert _ids(g.get_nodes()) == {"A", "C", "D"}
    assert _ids(g.get_edges()) == {ca.id, cd.id}
    for removed in (ab, bc, bb):
        assert g.get_edge(removed.id) is None
    assert g.get_connections("A") == []
    assert [e.id for _, e in g.get_connections("C")] == [ca.id, cd.id]


def test_remove_absent_node_is_noop() -> None:
    g = Graph("G")
    g.add_edge(Node("A"), Node("B"))
    g.remove_node(Node("Z"))
    assert _ids(g.get_nodes()) == {"A", "B"}


def test_remove_edge_keeps_nodes() -> None:
    g = Graph("G")
    a, b = Node("A"), Node("B")
    first = g.add_edge(a, b)
    second = g.add_edge(a, b)

    g.remove_edge(first)

    assert _ids(g.get_nodes()) == {"A", "B"}
    assert _ids(g.get_edges()) == {second.id}
    assert g.edge_between(a, b) is second

    g.remove(second)
    assert g.get_edges() == []
    assert g.get_connections(a) == []
    assert _ids(g.get_nodes()) == {"A", "B"}


def test_remove_dispatches_on_element_type() -> None:
    g = Graph("G")
    a = Node("A")
    g.add_edge(a, Node("B"))
    g.remove(a)
    assert _ids(g.get_nodes()) == {"B"}
    assert g.get_edges() == []


def test_edge_ids_unique_across_graphs_and_cycles() -> None:
    seen: set[str] = set()
    for _ in range(3):
        g = Graph("G")
        a, b = Node("A"), Node("B")
        for _ in range(4):
            edge = g.add_edge(a, b)
            assert edge.id not in seen
            seen.add(edge.id)
            g.remove_edge(edge)
        g.remove_node(a)
    assert len(seen) == 12


def test_injected_allocator() -> None:
    ids = EdgeIdAllocator(prefix="e", start=10)
    g = Graph("G", edge_ids=ids)
    h = Graph("H", edge_ids=ids)

    assert g.add_edge(Node("A"), Node("B")).id == "e10"
    assert h.add_edge(Node("A"), Node("B")).id == "e11"


def test_readding_node_keeps_its_edges() -> None:
    g = Graph("G")
    edge = g.add_edge(Node("A"), Node("B"))

    replacement = Node("A")
    replacement.set_param("color", "red")
    g.add_node(replacement)

    assert g.get_node("A") is replacement
    assert [e.id for _, e in g.get_connections("A")] == [edge.id]


def test_degrees() -> None:
    g = Graph("G")
    a, b, c = Node("A"), Node("B"), Node("C")
    g.add_edge(a, b)
    g.add_edge(a, c)
    g.add_edge(c, b)
    g.add_node(Node("D"))

    assert (g.out_degree(a), g.in_degree(a)) == (2, 0)
    assert (g.out_degree("B"), g.in_degree("B")) == (0, 2)
    assert (g.out_degree("D"), g.in_degree("D")) == (0, 0)


def test_default_params_proxy() -> None:
    g = Graph("G", "graph")
    g.set_param("rankdir", "LR")
    g.set_node_param("shape", "box")
    g.set_edge_param("color", "gray")

    assert not g.directed
    assert g.get_param("rankdir") == "LR"
    assert g.get_node_param("shape") == "box"
    assert g.get_node_params() == ["shape"]
    assert g.get_edge_param("color") == "gray"
    assert g.get_edge_params() == ["color"]
    assert g.get_edge_param("style") is None


def test_rejects_unknown_graph_type() -> None:
    with pytest.raises(ValueError):
        Graph("G", "hypergraph")
