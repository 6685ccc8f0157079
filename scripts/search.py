# scripts/search.py
# Usage:  python scripts/search.py anx
# Prints matching faux feelings and the ranked feelings for a query.

import sys

PREFIX, SYN_OF_PREFIX, SUBSTRING, SYN_OF_SUBSTRING = 1, 2, 3, 4

RANK_NAMES = {
    PREFIX: "prefix",
    SYN_OF_PREFIX: "synonym of prefix",
    SUBSTRING: "substring",
    SYN_OF_SUBSTRING: "synonym of substring",
}


def normalize_query(q: str):
    return (q or "").strip().lower()


def match_faux_feelings(records, query):
    """Faux-feeling labels containing the query (case-insensitive), in worksheet order."""
    q = normalize_query(query)
    if not q:
        return []
    return [r["fauxFeeling"] for r in records if q in r["fauxFeeling"].lower()]


def candidate_pool(records, resolver=None):
    """Every feeling in the worksheet plus every synonym-table word, lowercased, first-seen order."""
    pool = {}
    for r in records:
        for f in r["feelings"]:
            pool.setdefault(f.lower(), None)
    if resolver:
        for w in resolver.all_words():
            pool.setdefault(w.lower(), None)
    return list(pool)


def _expand(resolver, word):
    if not resolver:
        return [word]
    return resolver.expansion_of(word)


def rank_feelings(query, records, resolver=None, selected_faux=()):
    """
    Return [(feeling, rank)] ordered rank 1, 2, 3, 4; inside a rank, first discovery wins.
    A feeling equal to a selected faux feeling (ignoring case) is dropped.
    """
    q = normalize_query(query)
    if not q:
        return []

    prefix, substring = {}, {}
    for cand in candidate_pool(records, resolver):
        if cand.startswith(q):
            prefix[cand] = PREFIX
        elif q in cand:
            substring[cand] = SUBSTRING

    syn_prefix = {}
    for cand in prefix:
        for w in _expand(resolver, cand):
            if w not in prefix:
                syn_prefix.setdefault(w, SYN_OF_PREFIX)

    # a substring hit that is also a synonym of a prefix hit keeps the better rank
    substring_only = {w: r for w, r in substring.items() if w not in syn_prefix}

    syn_substring = {}
    for cand in substring:
        for w in _expand(resolver, cand):
            if w not in prefix and w not in syn_prefix and w not in substring:
                syn_substring.setdefault(w, SYN_OF_SUBSTRING)

    promoted = {f.lower() for f in selected_faux}
    ranked = []
    for bucket in (prefix, syn_prefix, substring_only, syn_substring):
        for w, rank in bucket.items():
            if w.lower() not in promoted:
                ranked.append((w, rank))
    return ranked


def search(query, records, resolver=None, selected_faux=()):
    """(ranked feelings, matching faux feelings) for a query; both empty for a blank query."""
    if not normalize_query(query):
        return [], []
    ranked = [w for w, _ in rank_feelings(query, records, resolver, selected_faux)]
    return ranked, match_faux_feelings(records, query)


if __name__ == "__main__":
    from feelings_data import load_records, load_synonym_table
    from synonyms import SynonymResolver
    import settings

    if len(sys.argv) < 2:
        print("Usage: python scripts/search.py <query>")
        sys.exit(1)
    query = " ".join(sys.argv[1:])
    records = load_records()
    resolver = SynonymResolver(load_synonym_table(), strict=settings.STRICT_SYNONYMS)

    faux = match_faux_feelings(records, query)
    print(f'Query: "{query}"')
    print("Faux feelings: " + (", ".join(faux) if faux else "(none)"))
    ranked = rank_feelings(query, records, resolver)
    if not ranked:
        print("Feelings: (none)")
    for i, (w, rank) in enumerate(ranked, 1):
        print(f"{i}. {w}  [{RANK_NAMES[rank]}]")
