"""
Tests for flow_svg.py rendering.
"""

import xml.etree.ElementTree as ET

from derive import build_graph
from flow_svg import SVG_NS, layout, render_flow_svg, write_flow_svg


def _parse(svg):
    return ET.fromstring(svg)


def test_empty_graph_is_blank_canvas():
    root = _parse(render_flow_svg({"nodes": [], "links": []}, width=300, height=200))
    assert root.tag == "{%s}svg" % SVG_NS
    assert root.get("viewBox") == "0 0 300 200"
    assert list(root) == []


def test_one_rect_per_node_one_path_per_link(records):
    graph = build_graph(records, ["Overwhelmed", "Rejected"])
    root = _parse(render_flow_svg(graph))
    rects = list(root.iter("{%s}rect" % SVG_NS))
    paths = list(root.iter("{%s}path" % SVG_NS))
    assert len(rects) == len(graph["nodes"])
    assert len(paths) == len(graph["links"])
    assert {r.get("data-id") for r in rects} == {n["id"] for n in graph["nodes"]}


def test_single_xmlns(records):
    svg = render_flow_svg(build_graph(records, ["Numb"]))
    assert svg.count('xmlns="http://www.w3.org/2000/svg"') == 1


def test_columns_left_to_right():
    graph = build_graph([{"fauxFeeling": "Numb", "feelings": ["empty"], "needs": ["rest"]}], ["Numb"])
    pos, _ = layout(graph, width=600, height=300)
    assert pos["faux-Numb"][0] < pos["feeling-empty"][0] < pos["need-rest"][0]


def test_heavier_node_is_taller():
    records = [
        {"fauxFeeling": "A", "feelings": ["sad"], "needs": ["care"]},
        {"fauxFeeling": "B", "feelings": ["sad", "tired"], "needs": ["care"]},
    ]
    pos, _ = layout(build_graph(records, ["A", "B"]))
    assert pos["feeling-sad"][2] > pos["feeling-tired"][2]


def test_nodes_stay_inside_canvas(records):
    graph = build_graph(records, ["Overwhelmed", "Rejected", "Numb", "Unheard"])
    pos, _ = layout(graph, width=500, height=300, margin=20)
    for x, y, h in pos.values():
        assert 0 <= x <= 500
        assert 20 - 1e-6 <= y and y + h <= 280 + 1e-6


def test_write_flow_svg(tmp_path, records):
    out = tmp_path / "out" / "flow.svg"
    write_flow_svg(build_graph(records, ["Numb"]), str(out))
    assert out.read_text(encoding="utf-8").startswith("<svg")
