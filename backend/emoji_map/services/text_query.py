from emoji_map.core.categories import CATEGORY_MAP, VALID_KEYS, get_category, get_valid_keys


def build_text_query_from_keys(keys) -> str:
    """
    Pipe-delimited name and keywords for each key, in key order.

    Repeated keys contribute their block once. When nothing valid is left the
    whole category map is searched, so the result is never empty.
    """
    valid = get_valid_keys(keys or []) or VALID_KEYS

    terms = []
    for key in valid:
        category = get_category(key)
        terms.append(category.name)
        terms.extend(category.keywords)
    return "|".join(terms)


def split_text_query(text_query: str) -> list[str]:
    """Lower-cased keywords, blanks and repeats removed, order kept."""
    keywords = []
    for term in text_query.split("|"):
        term = term.strip().lower()
        if term and term not in keywords:
            keywords.append(term)
    return keywords


def get_primary_category_for_related_word(word: str) -> str | None:
    """
    Name of the first category that is ``word`` or lists it as a keyword.
    Keywords also match when one contains the other ("ice cream" vs "cream").
    """
    normalized = word.lower().strip()
    if not normalized:
        return None

    for category in CATEGORY_MAP:
        if category.name == normalized:
            return category.name

    for category in CATEGORY_MAP:
        for keyword in category.keywords:
            if keyword == normalized:
                return category.name

    for category in CATEGORY_MAP:
        for keyword in category.keywords:
            if normalized in keyword or keyword in normalized:
                return category.name

    return None
