import json
import re

from vizgraph.correspondence import Correspondence
from vizgraph.html import wrap_html


def test_html_includes_panzoom_script() -> None:
    html = wrap_html("<svg viewBox=\"0 0 10 10\"></svg>", title="t")
    assert "<svg" in html
    assert "Drag to pan" in html
    assert "wheel" in html
    assert "fitBtn" in html
    assert "centerBtn" in html


def test_html_embeds_id_map_for_click_routing() -> None:
    ids = Correspondence()
    ids.nodes.put("node1", "A")
    ids.edges.put("edge1", "edge7")

    html = wrap_html("<svg></svg>", title="g", correspondence=ids)

    m = re.search(r'<script id="vizgraph-ids" type="application/json">(.*?)</script>', html)
    assert m is not None
    assert json.loads(m.group(1)) == {"nodes": {"node1": "A"}, "edges": {"edge1": "edge7"}}
    assert "vizgraph:click" in html


def test_html_escapes_title_and_script_breakout() -> None:
    ids = Correspondence()
    ids.nodes.put("node1", "</script><b>")

    html = wrap_html("<svg></svg>", title="<A & B>", correspondence=ids)

    assert "<title>&lt;A &amp; B&gt;</title>" in html
    assert "</script><b>" not in html
