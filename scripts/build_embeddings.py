# scripts/build_embeddings.py
# Embed every feeling word (worksheet feelings + synonym table) for the "did you mean" suggestions.

import json, numpy as np
from sentence_transformers import SentenceTransformer

import settings
from feelings_data import load_records, load_synonym_table
from search import candidate_pool
from synonyms import SynonymResolver

MODEL_NAME = "sentence-transformers/all-MiniLM-L6-v2"


def text_for(word):
    # a short frame helps the model read the word as an emotion
    return f"feeling {word}"


def main():
    model = SentenceTransformer(MODEL_NAME)
    records = load_records()
    resolver = SynonymResolver(load_synonym_table(), strict=settings.STRICT_SYNONYMS)
    vocab = candidate_pool(records, resolver)
    X = model.encode([text_for(w) for w in vocab], normalize_embeddings=True)
    settings.EMB_NPY.parent.mkdir(parents=True, exist_ok=True)
    np.save(settings.EMB_NPY, X.astype("float32"))
    settings.IDX_JSON.write_text(json.dumps(vocab, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"✅ Saved {len(vocab)} embeddings to {settings.EMB_NPY} and index to {settings.IDX_JSON}")


if __name__ == "__main__":
    main()
