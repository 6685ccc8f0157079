# scripts/app.py
# Minimal Flask app: type a word → see matching faux feelings and ranked feelings,
# pick some → see the needs underneath and the faux → feeling → need flow diagram.

from flask import Flask, Response, jsonify, redirect, render_template_string, request, session, url_for

import settings
from feelings_data import DatasetLoadError, load_categories, load_records, load_synonym_table
from flow_svg import render_flow_svg
from search import RANK_NAMES
from selection import Explorer, SelectionState
from suggest_embed import suggest
from synonyms import SynonymConflictError, SynonymResolver

app = Flask(__name__)
app.secret_key = settings.SECRET_KEY

for problem in settings.check_settings():
    app.logger.error("Bad setting: %s", problem)

TABS = ("search", "visualize")
LOAD_ERROR = "Error loading feelings data. Please refresh the page."

# ---------------- Data ----------------

_data_cache = None
def load_data():
    """(records, resolver, categories), read once per process."""
    global _data_cache
    if _data_cache is None:
        records = load_records()
        table = load_synonym_table()
        if not table:
            app.logger.warning("Synonym table empty or missing; searching without synonyms")
        resolver = SynonymResolver(table, strict=settings.STRICT_SYNONYMS)
        _data_cache = (records, resolver, load_categories())
    return _data_cache

def reload_data():
    global _data_cache
    _data_cache = None

def current_explorer():
    records, resolver, _ = load_data()
    state = SelectionState.from_dict(session.get("selection"))
    return Explorer(records, resolver, gating_mode=settings.GRAPH_GATING, state=state)

def save(explorer):
    session["selection"] = explorer.state.to_dict()

def _tab():
    tab = (request.args.get("tab") or "search").lower()
    return tab if tab in TABS else "search"

@app.errorhandler(DatasetLoadError)
@app.errorhandler(SynonymConflictError)
def load_failed(e):
    app.logger.error("Could not load data: %s", e)
    if request.path.startswith("/api/"):
        return jsonify(error=LOAD_ERROR, detail=str(e)), 500
    return render_template_string(ERROR_HTML, message=LOAD_ERROR), 500

# ---------------- HTML ----------------

STYLE = """
<style>
  body { font: 16px/1.4 system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial; margin: 24px; color:#2d3748; }
  form { margin-bottom: 16px; }
  input[type=text]{ padding:8px; width:340px; }
  button { padding:8px; }
  a.chip { display:inline-block; padding:6px 12px; margin:4px; border-radius:16px; background:#edf2f7; color:#2d3748; text-decoration:none; }
  a.chip.selected { background:#3182ce; color:#fff; }
  .need-tag { display:inline-block; padding:4px 10px; margin:3px; border-radius:4px; background:#c6f6d5; }
  .tabs a { margin-right:16px; }
  .tabs a.active { font-weight:bold; }
  .muted { color:#a0aec0; font-style: italic; }
  .rank { font-size: 11px; color:#718096; }
  .error { color:#e53e3e; }
  .card { display:inline-block; width:220px; vertical-align:top; margin:8px; padding:12px; border-radius:8px; }
</style>
"""

ERROR_HTML = """
<!doctype html>
<meta charset="utf-8">
<title>Faux Feelings</title>
<p class="error" style="color: #e53e3e;">{{ message }}</p>
"""

HTML = """
<!doctype html>
<meta charset="utf-8">
<title>Faux Feelings</title>
""" + STYLE + """
<h1>Faux Feelings</h1>
<div class="tabs">
  <a href="{{ url_for('index', q=vm.query, tab='search') }}" class="{{ 'active' if tab=='search' }}">Search</a>
  <a href="{{ url_for('index', q=vm.query, tab='visualize') }}" class="{{ 'active' if tab=='visualize' }}">Visualize</a>
  <a href="{{ url_for('categories') }}">Browse by category</a>
  <a href="{{ url_for('reset', q=vm.query, tab=tab) }}">Clear selections</a>
</div>

{% if tab == 'search' %}
<form method="GET">
  <input type="hidden" name="tab" value="search">
  <input type="text" name="q" placeholder="How are you feeling?" value="{{ vm.query }}" autofocus>
  <button>Search</button>
  {% if vm.query %}<a href="{{ url_for('index', tab='search') }}">✕ clear</a>{% endif %}
</form>

<h2>Faux feelings</h2>
<div>
  {% for label in vm.selected_faux_feelings %}
    <a class="chip selected" href="{{ url_for('toggle', kind='faux', label=label, q=vm.query, tab=tab) }}">{{ label }}</a>
  {% endfor %}
  {% for label in vm.unselected_matching_faux_feelings %}
    <a class="chip" href="{{ url_for('toggle', kind='faux', label=label, q=vm.query, tab=tab) }}">{{ label }}</a>
  {% endfor %}
  {% if not vm.selected_faux_feelings and not vm.unselected_matching_faux_feelings %}
    {% if vm.query %}<p class="muted">No matching feelings found. Try a different search.</p>
    {% else %}<p class="muted">Start typing to search for feelings...</p>{% endif %}
  {% endif %}
</div>

{% if vm.query %}
<h2>Feelings</h2>
<div>
  {% for word, rank in ranked %}
    <a class="chip {{ 'selected' if word in vm.selected_feelings }}" href="{{ url_for('toggle', kind='feeling', label=word, q=vm.query, tab=tab) }}">{{ word }} <span class="rank">{{ rank_names[rank] }}</span></a>
  {% endfor %}
  {% if not ranked %}<p class="muted">No feelings match “{{ vm.query }}”.</p>{% endif %}
</div>
  {% if suggestions %}
    <p class="muted">Nearest feelings:
    {% for s in suggestions %}<a href="{{ url_for('index', q=s.word, tab='search') }}">{{ s.word }}</a>{{ ", " if not loop.last }}{% endfor %}
    </p>
  {% endif %}
{% endif %}

{% if vm.selected_faux_feelings %}
<div class="needs-title"><h2>Underlying Needs:</h2></div>
  {% if vm.needs %}
    <div class="needs-list">{% for need in vm.needs %}<span class="need-tag">{{ need }}</span>{% endfor %}</div>
  {% else %}
    <p class="muted">No needs data available for selected feelings.</p>
  {% endif %}
{% endif %}

{% else %}
<h2>Feelings</h2>
<div>
  {% for f in vm.feeling_choices %}
    <a class="chip {{ 'selected' if f in vm.selected_feelings }}" href="{{ url_for('toggle', kind='feeling', label=f, q=vm.query, tab=tab) }}">{{ f }}</a>
  {% else %}<p class="muted">Select a faux feeling on the Search tab first.</p>{% endfor %}
</div>
<h2>Needs</h2>
<div>
  {% for n in vm.need_choices %}
    <a class="chip {{ 'selected' if n in vm.selected_needs }}" href="{{ url_for('toggle', kind='need', label=n, q=vm.query, tab=tab) }}">{{ n }}</a>
  {% endfor %}
</div>
<h2>Iceberg</h2>
{% if vm.graph.nodes %}
  <img src="{{ url_for('graph_svg') }}" alt="faux feeling to need flow" style="width:100%;max-width:900px;">
{% elif vm.gating_mode == 'all-dimensions' %}
  <p class="muted">Pick at least one faux feeling, one feeling and one need to draw the diagram.</p>
{% else %}
  <p class="muted">Pick a faux feeling to draw the diagram.</p>
{% endif %}
{% endif %}
"""

CATEGORIES_HTML = """
<!doctype html>
<meta charset="utf-8">
<title>Faux Feelings · Categories</title>
""" + STYLE + """
<h1>Browse by category</h1>
<p><a href="{{ url_for('index') }}">← back to search</a></p>
{% for c in categories %}
  <div class="card" style="background: {{ c.color }};">
    <h3><a href="{{ url_for('category', cat_id=c.id) }}">{{ c.label }}</a></h3>
    <p>{{ c.description }}</p>
    {% if selected and selected.id == c.id %}
      {% for f in c.feelings %}<a class="chip" href="{{ url_for('toggle', kind='feeling', label=f, q=f, tab='search') }}">{{ f }}</a>{% endfor %}
    {% endif %}
  </div>
{% else %}
  <p class="muted">No categories available.</p>
{% endfor %}
"""

# ---------------- Main page ----------------

@app.route("/", methods=["GET"])
def index():
    q = (request.args.get("q") or "").strip()
    tab = _tab()
    explorer = current_explorer()
    explorer.state.query = q
    vm = explorer.view_model()
    ranked = explorer.ranked_with_ranks(q)

    suggestions = []
    if q and not ranked and not vm["matching_faux_feelings"]:
        suggestions = suggest(q, k=settings.SUGGEST_K, exclude=vm["selected_faux_feelings"])

    save(explorer)
    return render_template_string(
        HTML,
        vm=vm,
        tab=tab,
        ranked=ranked,
        rank_names=RANK_NAMES,
        suggestions=suggestions,
    )

@app.route("/toggle/<kind>/<path:label>", methods=["GET"])
def toggle(kind, label):
    q = (request.args.get("q") or "").strip()
    explorer = current_explorer()
    explorer.search(q)
    if kind == "faux":
        explorer.toggle_faux_feeling(label)
    elif kind == "feeling":
        explorer.toggle_feeling(label)
    elif kind == "need":
        explorer.toggle_need(label)
    else:
        return f"Unknown selection kind: {kind}", 404
    save(explorer)
    return redirect(url_for("index", q=q or None, tab=_tab()))

@app.route("/reset", methods=["GET"])
def reset():
    explorer = current_explorer()
    explorer.reset()
    save(explorer)
    return redirect(url_for("index", q=request.args.get("q") or None, tab=_tab()))

# ---------------- Categories ----------------

@app.route("/categories", methods=["GET"])
def categories():
    _, _, cats = load_data()
    return render_template_string(CATEGORIES_HTML, categories=cats, selected=None)

@app.route("/categories/<cat_id>", methods=["GET"])
def category(cat_id):
    _, _, cats = load_data()
    selected = next((c for c in cats if c["id"] == cat_id), None)
    if selected is None:
        return f"Not found: {cat_id}", 404
    return render_template_string(CATEGORIES_HTML, categories=cats, selected=selected)

# ---------------- Graph & JSON ----------------

@app.route("/graph.svg", methods=["GET"])
def graph_svg():
    explorer = current_explorer()
    return Response(render_flow_svg(explorer.get_graph()), mimetype="image/svg+xml")

@app.route("/api/graph", methods=["GET"])
def api_graph():
    return jsonify(current_explorer().get_graph())

@app.route("/api/search", methods=["GET"])
def api_search():
    q = (request.args.get("q") or "").strip()
    explorer = current_explorer()
    _, matches = explorer.search(q)
    ranked = explorer.ranked_with_ranks(q)
    return jsonify(
        query=q,
        feelings=[{"feeling": w, "rank": r, "why": RANK_NAMES[r]} for w, r in ranked],
        faux_feelings=matches,
    )

@app.route("/api/needs", methods=["GET"])
def api_needs():
    return jsonify(needs=current_explorer().get_selected_needs())

if __name__ == "__main__":
    settings.validate_settings()
    app.run(host=settings.HOST, port=settings.PORT, debug=False, use_reloader=False)
