# scripts/derive.py
# Pure derivations from the current selection: needs to show, chips for the
# visualize tab, and the faux -> feeling -> need flow graph.

from collections import Counter

from feelings_data import find_record
from settings import GATING_ALL_DIMENSIONS, GATING_FAUX_ONLY

NODE_TYPES = ("faux", "feeling", "need")


def node_id(kind, label):
    return f"{kind}-{label}"


def is_suppressed(feeling, selected_faux):
    """A feeling spelled like a selected faux feeling belongs to the faux level."""
    f = feeling.lower()
    return any(f == s.lower() for s in selected_faux)


def _selected_records(records, selected_faux):
    for label in selected_faux:
        r = find_record(records, label)
        if r is not None:
            yield r


def derive_needs(records, selected_faux):
    """Union of needs over the selected faux feelings, in first-discovery order."""
    out = {}
    for r in _selected_records(records, selected_faux):
        for need in r["needs"]:
            out.setdefault(need, None)
    return list(out)


def candidate_feelings(records, selected_faux):
    """Lowercased feelings of the selected faux feelings, promoted ones left out."""
    out = {}
    for r in _selected_records(records, selected_faux):
        for f in r["feelings"]:
            if not is_suppressed(f, selected_faux):
                out.setdefault(f.lower(), None)
    return list(out)


def candidate_needs(records, selected_faux):
    return derive_needs(records, selected_faux)


def empty_graph():
    return {"nodes": [], "links": []}


def build_graph(records, selected_faux, selected_feelings=(), selected_needs=(),
                gating_mode=GATING_FAUX_ONLY):
    """
    Nodes: {"id", "name", "type"} with ids prefixed by type so a faux feeling and a
    feeling sharing a word never collide. Links: {"source", "target", "value"} where
    value counts the record-level co-occurrences behind the edge.

    faux-only: any faux selection draws every feeling and need of the selected records.
    all-dimensions: nothing is drawn until faux, feeling and need selections are all
    non-empty, and only selected feelings and needs are drawn.
    """
    selected_faux = list(selected_faux)
    if not selected_faux:
        return empty_graph()

    gated = gating_mode == GATING_ALL_DIMENSIONS
    if gated and not (selected_feelings and selected_needs):
        return empty_graph()

    feeling_ok = {f.lower() for f in selected_feelings}
    need_ok = set(selected_needs)

    nodes = {}
    weights = Counter()

    def add_node(kind, label):
        nid = node_id(kind, label)
        nodes.setdefault(nid, {"id": nid, "name": label, "type": kind})
        return nid

    for r in _selected_records(records, selected_faux):
        faux_id = None
        for f in r["feelings"]:
            if is_suppressed(f, selected_faux):
                continue
            f = f.lower()
            if gated and f not in feeling_ok:
                continue
            needs = [n for n in r["needs"] if not gated or n in need_ok]
            if faux_id is None:
                faux_id = add_node("faux", r["fauxFeeling"])
            feeling_id = add_node("feeling", f)
            weights[faux_id, feeling_id] += 1
            for n in needs:
                need_id = add_node("need", n)
                weights[feeling_id, need_id] += 1

    if not weights:
        return empty_graph()

    ordered = [n for kind in NODE_TYPES for n in nodes.values() if n["type"] == kind]
    links = []
    for (source, target), value in weights.items():
        links.append({"source": source, "target": target, "value": value})
    return {"nodes": ordered, "links": links}
