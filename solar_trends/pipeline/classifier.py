"""Keyword classifier: product category, sentiment label and relevance filter.

Two matching rules coexist on purpose:

* relevance filtering (:func:`contains_solar_keywords`) and product
  categorization (:func:`categorize`) use case-insensitive *substring* checks;
* sentiment scoring (:func:`score`) uses *exact tokens* from a whitespace
  split with no punctuation stripping, so ``"growth,"`` or ``"breakthroughs"`` do not count.

Downstream aggregation depends on these exact outputs.
"""

from typing import Iterable, List

PRODUCT_CATEGORIES = ("Solar Panel", "Inverter", "Battery System", "General Solar")
SENTIMENT_LABELS = ("Positive", "Negative", "Neutral")

SOLAR_KEYWORDS: List[str] = [
    "solar panel", "photovoltaic", "inverter", "battery storage",
    "lithium battery", "solar energy", "renewable energy",
    "grid tie", "off grid", "solar installation", "pv system",
    "solar efficiency", "monocrystalline", "polycrystalline",
]

CATEGORY_KEYWORDS = {
    "solar": ["solar panel", "photovoltaic", "pv system"],
    "inverters": ["inverter", "grid tie", "power converter"],
    "batteries": ["battery storage", "lithium battery", "energy storage"],
    "all": SOLAR_KEYWORDS,
}

POSITIVE_WORDS = frozenset(
    ["efficient", "breakthrough", "improved", "innovative", "growth", "success"]
)
NEGATIVE_WORDS = frozenset(
    ["problem", "issue", "decline", "failure", "expensive", "shortage"]
)


def get_category_keywords(category: str) -> List[str]:
    """Keyword set for a request category; unknown categories get the full set."""
    return CATEGORY_KEYWORDS.get(category, CATEGORY_KEYWORDS["all"])


def contains_solar_keywords(text: str, keywords: Iterable[str] = SOLAR_KEYWORDS) -> bool:
    """True if any keyword occurs as a case-insensitive substring of ``text``."""
    lower_text = (text or "").lower()
    return any(keyword.lower() in lower_text for keyword in keywords)


def categorize(text: str) -> str:
    """Map free text to a product category.

    Checks run in a fixed priority order and the first match wins:
    inverter, then battery/storage, then panel/photovoltaic. A title mentioning
    both "panel" and "battery" is therefore a ``Battery System``.
    """
    lower_text = (text or "").lower()
    if "inverter" in lower_text:
        return "Inverter"
    if "battery" in lower_text or "storage" in lower_text:
        return "Battery System"
    if "panel" in lower_text or "photovoltaic" in lower_text:
        return "Solar Panel"
    return "General Solar"


def score(text: str) -> str:
    """Net keyword sentiment of ``text`` as Positive / Negative / Neutral."""
    net = 0
    for word in (text or "").lower().split():
        if word in POSITIVE_WORDS:
            net += 1
        if word in NEGATIVE_WORDS:
            net -= 1

    if net > 0:
        return "Positive"
    if net < 0:
        return "Negative"
    return "Neutral"
