# scripts/flow_svg.py
# Draw the faux -> feeling -> need graph as a three-column flow (iceberg) diagram in SVG.

import argparse
import os
import xml.etree.ElementTree as ET

SVG_NS = "http://www.w3.org/2000/svg"
ET.register_namespace("", SVG_NS)

COLUMNS = ("faux", "feeling", "need")
COLORS = {
    "faux": "#4a5568",     # slate, the visible tip
    "feeling": "#3182ce",  # blue
    "need": "#2c5282",     # deep blue, under the waterline
}


def _el(tag, attrs=None, text=None):
    e = ET.Element("{%s}%s" % (SVG_NS, tag), {k: str(v) for k, v in (attrs or {}).items()})
    if text is not None:
        e.text = text
    return e


def make_root_svg(width=900, height=520):
    return _el("svg", {
        "viewBox": f"0 0 {width} {height}",
        "width": width,
        "height": height,
        "preserveAspectRatio": "xMidYMid meet",
    })


def layout(graph, width=900, height=520, margin=40, node_width=16, node_pad=12):
    """
    Place nodes in one column per type and stack them top-down.
    Returns ({node_id: (x, y, h)}, scale) where scale converts link value to pixels.
    """
    nodes = graph.get("nodes", [])
    links = graph.get("links", [])
    inflow, outflow = {}, {}
    for l in links:
        outflow[l["source"]] = outflow.get(l["source"], 0) + l["value"]
        inflow[l["target"]] = inflow.get(l["target"], 0) + l["value"]

    def value(n):
        return max(inflow.get(n["id"], 0), outflow.get(n["id"], 0), 1)

    columns = {c: [n for n in nodes if n["type"] == c] for c in COLUMNS}
    usable_h = max(1.0, height - 2 * margin)

    scale = None
    for col in columns.values():
        if not col:
            continue
        total = sum(value(n) for n in col)
        room = max(1.0, usable_h - node_pad * (len(col) - 1))
        s = room / total
        scale = s if scale is None else min(scale, s)
    scale = scale or 1.0

    usable_w = max(1.0, width - 2 * margin - node_width)
    positions = {}
    for i, c in enumerate(COLUMNS):
        x = margin + usable_w * i / (len(COLUMNS) - 1)
        col = columns[c]
        col_h = sum(value(n) * scale for n in col) + node_pad * max(0, len(col) - 1)
        y = margin + (usable_h - col_h) / 2.0
        for n in col:
            h = value(n) * scale
            positions[n["id"]] = (x, y, h)
            y += h + node_pad
    return positions, scale


def render_flow_svg(graph, width=900, height=520, node_width=16):
    """Return SVG text for a graph from derive.build_graph; an empty graph gives an empty canvas."""
    root = make_root_svg(width, height)
    nodes = graph.get("nodes", [])
    if not nodes:
        return ET.tostring(root, encoding="unicode")

    positions, scale = layout(graph, width, height, node_width=node_width)
    kinds = {n["id"]: n["type"] for n in nodes}

    link_group = _el("g", {"class": "links", "fill": "none", "stroke-opacity": "0.35"})
    out_offset, in_offset = {}, {}
    for l in graph.get("links", []):
        s, t = l["source"], l["target"]
        if s not in positions or t not in positions:
            continue
        sx, sy, _ = positions[s]
        tx, ty, _ = positions[t]
        w = l["value"] * scale
        y0 = sy + out_offset.get(s, 0) + w / 2.0
        y1 = ty + in_offset.get(t, 0) + w / 2.0
        out_offset[s] = out_offset.get(s, 0) + w
        in_offset[t] = in_offset.get(t, 0) + w
        x0 = sx + node_width
        x1 = tx
        xm = (x0 + x1) / 2.0
        path = _el("path", {
            "d": f"M{x0:.1f},{y0:.1f} C{xm:.1f},{y0:.1f} {xm:.1f},{y1:.1f} {x1:.1f},{y1:.1f}",
            "stroke": COLORS[kinds[s]],
            "stroke-width": f"{max(1.0, w):.1f}",
        })
        path.append(_el("title", text=f"{s} → {t}: {l['value']}"))
        link_group.append(path)
    root.append(link_group)

    node_group = _el("g", {"class": "nodes", "font-family": "system-ui, sans-serif", "font-size": "12"})
    for n in nodes:
        x, y, h = positions[n["id"]]
        node_group.append(_el("rect", {
            "x": f"{x:.1f}", "y": f"{y:.1f}", "width": node_width, "height": f"{max(1.0, h):.1f}",
            "fill": COLORS[n["type"]], "data-id": n["id"],
        }))
        # labels sit outside the diagram edge for the last column
        right = n["type"] != COLUMNS[-1]
        node_group.append(_el("text", {
            "x": f"{x + node_width + 6 if right else x - 6:.1f}",
            "y": f"{y + h / 2.0:.1f}",
            "dy": "0.35em",
            "text-anchor": "start" if right else "end",
        }, text=n["name"]))
    root.append(node_group)
    return ET.tostring(root, encoding="unicode")


def write_flow_svg(graph, out_path, width=900, height=520):
    d = os.path.dirname(out_path)
    if d:
        os.makedirs(d, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(render_flow_svg(graph, width, height))
    print(f"✅ Wrote {out_path}")


def main():
    from derive import build_graph
    from feelings_data import load_records

    ap = argparse.ArgumentParser()
    ap.add_argument("faux", nargs="+", help="faux feeling labels to select, e.g. Overwhelmed")
    ap.add_argument("--out", required=True)
    ap.add_argument("--width", type=int, default=900)
    ap.add_argument("--height", type=int, default=520)
    args = ap.parse_args()

    records = load_records()
    graph = build_graph(records, args.faux)
    if not graph["nodes"]:
        print("⚠️ Nothing to draw: none of those labels has feelings in the worksheet.")
    write_flow_svg(graph, args.out, args.width, args.height)


if __name__ == "__main__":
    main()
