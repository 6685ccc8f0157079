# scripts/synonyms.py
# Canonical-word lookup and synonym expansion over the synonym table.

import logging

log = logging.getLogger(__name__)


class SynonymConflictError(ValueError):
    """A word is listed under more than one canonical entry."""

    def __init__(self, conflicts):
        self.conflicts = conflicts
        lines = [f"{w!r} under {', '.join(cs)}" for w, cs in sorted(conflicts.items())]
        super().__init__("ambiguous synonym table: " + "; ".join(lines))


def find_conflicts(table):
    """Return {word: [canonicals]} for every word claimed by two or more canonical entries."""
    owners = {}
    for canonical, syns in table.items():
        for w in [canonical] + list(syns):
            w = w.lower()
            bucket = owners.setdefault(w, [])
            if canonical not in bucket:
                bucket.append(canonical)
    return {w: cs for w, cs in owners.items() if len(cs) > 1}


class SynonymResolver:
    def __init__(self, table=None, strict=True):
        self.table = {k.lower(): [s.lower() for s in v] for k, v in (table or {}).items()}
        conflicts = find_conflicts(self.table)
        if conflicts:
            if strict:
                raise SynonymConflictError(conflicts)
            log.warning("%d synonym(s) listed under several canonicals; first entry wins", len(conflicts))

        # word -> canonical, first entry wins
        self._index = {}
        for canonical, syns in self.table.items():
            self._index.setdefault(canonical, canonical)
            for s in syns:
                self._index.setdefault(s, canonical)

    def __bool__(self):
        return bool(self.table)

    def canonical_of(self, word):
        if not word:
            return None
        return self._index.get(word.lower())

    def expansion_of(self, word):
        """Same members as synonyms_of, as a list: canonical first, then synonyms in table order."""
        canonical = self.canonical_of(word)
        if canonical is None:
            return [word]
        out = [canonical]
        out += [s for s in self.table[canonical] if s != canonical and s not in out]
        return out

    def synonyms_of(self, word):
        return set(self.expansion_of(word))

    def all_words(self):
        """Every canonical and synonym in table order, no repeats."""
        out, seen = [], set()
        for canonical, syns in self.table.items():
            for w in [canonical] + syns:
                if w not in seen:
                    seen.add(w)
                    out.append(w)
        return out
