from .keywords import Keywords

FUNCTION_PREFIXES = ("handle", "process", "render", "format", "create", "get", "set")

FALLBACK_VARIABLE = "content"
FALLBACK_FUNCTION = "process"
FALLBACK_TYPE = "Content"


def pick(rng, seq):
    """Uniform choice driven only by rng.random()."""
    return seq[min(int(rng.random() * len(seq)), len(seq) - 1)]


def _seed_word(keywords: Keywords):
    for bucket in (keywords.proper_nouns, keywords.nouns, keywords.verbs, keywords.all_words):
        if bucket:
            return bucket[0]
    return None


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


class NameSynthesizer:
    def __init__(self, rng):
        self.rng = rng

    def variable_name(self, keywords: Keywords, suffix: str = "") -> str:
        seed = _seed_word(keywords)
        base = seed.lower() if seed else FALLBACK_VARIABLE
        return base + suffix

    def function_name(self, keywords: Keywords, prefix: str = None) -> str:
        seed = _seed_word(keywords)
        if not seed:
            return prefix or FALLBACK_FUNCTION
        if prefix is None:
            prefix = pick(self.rng, FUNCTION_PREFIXES)
        return prefix + _capitalize(seed)

    def type_name(self, keywords: Keywords, suffix: str = "") -> str:
        seed = _seed_word(keywords)
        base = _capitalize(seed) if seed else FALLBACK_TYPE
        return base + suffix

    def member_names(self, keywords: Keywords, limit: int = 3) -> list:
        """Distinct lowercase words for properties and enum members."""
        names = []
        for word in keywords.nouns + keywords.verbs + keywords.all_words:
            w = word.lower()
            if w not in names:
                names.append(w)
            if len(names) >= limit:
                break
        return names or [FALLBACK_VARIABLE]
