# scripts/suggest_embed.py
# Nearest feeling words by sentence embedding, for queries that match nothing as text.

import json, numpy as np
from sentence_transformers import SentenceTransformer

import settings
from build_embeddings import MODEL_NAME, text_for

_model = None
def model():
    global _model
    if _model is None:
        _model = SentenceTransformer(MODEL_NAME)
    return _model

_index_cache = None
def load_index():
    """(matrix, words) from build_embeddings.py, or None when it has not been run."""
    global _index_cache
    if _index_cache is None:
        if not (settings.EMB_NPY.exists() and settings.IDX_JSON.exists()):
            return None
        X = np.load(settings.EMB_NPY)
        words = json.loads(settings.IDX_JSON.read_text(encoding="utf-8"))
        if len(words) != X.shape[0]:
            print(f"⚠️ {settings.IDX_JSON} does not match {settings.EMB_NPY}; rebuild with build_embeddings.py")
            return None
        _index_cache = (X, words)
    return _index_cache


def suggest(word: str, k: int = 5, exclude=()):
    """Top-k [{"word", "score"}] by cosine similarity; [] when disabled or nothing is indexed."""
    word = (word or "").strip()
    if not word or not settings.SUGGEST:
        return []
    index = load_index()
    if index is None:
        return []
    X, words = index
    qv = model().encode([text_for(word.lower())], normalize_embeddings=True)[0]
    sims = X @ qv  # cosine since both normalized
    skip = {e.lower() for e in exclude}
    picks = []
    for j in np.argsort(-sims):
        w = words[j]
        if w.lower() in skip:
            continue
        picks.append({"word": w, "score": float(sims[j])})
        if len(picks) >= k:
            break
    return picks


if __name__ == "__main__":
    import sys
    if len(sys.argv) < 2:
        print("Usage: python scripts/suggest_embed.py <word> [k]")
        raise SystemExit(1)
    word = sys.argv[1]
    k = int(sys.argv[2]) if len(sys.argv) > 2 else 5
    for i, r in enumerate(suggest(word, k), 1):
        print(f"{i}. {r['word']}  sim={r['score']:.3f}")
