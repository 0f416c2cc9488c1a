"""
Crisis Lexicon

Single immutable table of categorized crisis phrases, plus the
curated phrase subsets used by individual scoring rules.

CLINICAL_REVIEW_REQUIRED: All phrase lists require review by mental
health professionals. English only; other languages would be added
as additional tables with the same shape.

ARCHITECTURE: Loaded once at import and never mutated. All matching
is case-insensitive substring matching against lowercased text.
"""

from dataclasses import dataclass
from types import MappingProxyType

from haven.domain.enums.crisis_enums import LexiconCategory


@dataclass(frozen=True)
class LexiconEntry:
    """
    A categorized lexicon phrase.

    Attributes:
        phrase: Lowercase phrase text
        category: Danger category
        variants: Alternate surface forms counted as this phrase
    """

    phrase: str
    category: LexiconCategory
    variants: tuple[str, ...] = ()


def _entries(category: LexiconCategory, *phrases: str) -> list[LexiconEntry]:
    return [LexiconEntry(phrase=p, category=category) for p in phrases]


_HIGH = LexiconCategory.HIGH_RISK
_MEDIUM = LexiconCategory.MEDIUM_RISK
_MODIFIER = LexiconCategory.CONTEXTUAL_MODIFIER
_FALSE_POSITIVE = LexiconCategory.FALSE_POSITIVE


LEXICON: tuple[LexiconEntry, ...] = tuple(
    # High risk: suicide ideation
    _entries(
        _HIGH,
        "kill myself", "end my life", "ending my life", "suicide", "kill me",
        "better off dead", "want to die",
    )
    + [LexiconEntry("end it all", _HIGH, ("end it", "ending it all", "end everything"))]
    + _entries(
        _HIGH,
        "take my own life", "don't want to live", "planning to die",
        "going to kill myself", "ready to die",
    )
    # High risk: self-harm
    + _entries(
        _HIGH,
        "hurt myself", "cut myself", "harm myself", "injure myself",
        "self harm", "cutting", "burning myself", "poisoning myself",
    )
    # High risk: immediate danger
    + _entries(_HIGH, "going to overdose", "taking pills")
    + [
        LexiconEntry(
            "take all these pills", _HIGH,
            ("take pills", "taking pills", "overdose on pills"),
        ),
    ]
    + _entries(
        _HIGH,
        "taking all these pills", "have a plan", "tonight", "right now",
        "about to", "final goodbye", "last time", "ready to end", "end it",
        "overdose on",
    )
    # Medium risk: hopelessness
    + _entries(
        _MEDIUM,
        "hopeless", "no point", "give up", "can't go on", "no way out",
        "nothing matters", "no future", "trapped", "stuck forever",
        "pointless", "meaningless", "waste of space", "burden",
    )
    + [LexiconEntry("no meaning", _MEDIUM, ("meaningless", "no point", "pointless"))]
    + _entries(_MEDIUM, "life has no meaning", "has no meaning")
    # Medium risk: emotional crisis
    + _entries(
        _MEDIUM,
        "breaking down", "falling apart", "losing it", "can't cope",
        "overwhelming", "too much", "can't handle", "drowning",
        "suffocating", "empty inside", "numb", "dead inside",
    )
    + [
        LexiconEntry(
            "can't take this", _MEDIUM,
            ("cannot take this", "can't handle this", "cannot handle this"),
        ),
    ]
    + _entries(_MEDIUM, "take this anymore")
    # Medium risk: isolation
    + _entries(
        _MEDIUM,
        "alone", "nobody cares", "no one understands", "isolated",
        "abandoned", "rejected", "unwanted", "worthless",
    )
    # Contextual modifiers: amplify risk
    + _entries(
        _MODIFIER,
        "tonight", "today", "right now", "soon", "planning", "decided",
        "final", "last", "goodbye", "enough", "done", "over",
        "ready to", "going to", "about to",
    )
    # Contextual modifiers: hedge, still concerning
    + _entries(
        _MODIFIER,
        "sometimes", "maybe", "thinking about", "wondering",
        "what if", "imagine", "feel like", "wish",
    )
    # False positives
    + _entries(
        _FALSE_POSITIVE,
        "kill time", "dead tired", "dying to know", "hurt feelings",
        "cut corners", "cut off", "break down the problem",
        "traffic is killing", "work is killing", "die of embarrassment",
    )
)


def phrases(category: LexiconCategory) -> tuple[str, ...]:
    """
    Get all phrases of a category in table order.

    Args:
        category: Lexicon category

    Returns:
        Tuple of phrases
    """
    return _PHRASES_BY_CATEGORY[category]


def variants_for(phrase: str) -> tuple[str, ...]:
    """Get fuzzy variants registered for a phrase (empty if none)."""
    return _VARIANTS.get(phrase, ())


_PHRASES_BY_CATEGORY = MappingProxyType({
    category: tuple(e.phrase for e in LEXICON if e.category == category)
    for category in LexiconCategory
})

_VARIANTS = MappingProxyType({
    e.phrase: e.variants for e in LEXICON if e.variants
})


# =============================================================================
# CURATED SUBSETS
# =============================================================================

# Benign idioms that short-circuit scoring to zero
UNAMBIGUOUS_FALSE_POSITIVES: frozenset[str] = frozenset({
    "kill time", "dead tired", "dying to know",
    "traffic is killing", "work is killing",
})

# Medium-risk phrases that pin the score to the medium-only cap
MEDIUM_ONLY_PHRASES: tuple[str, ...] = (
    "life has no meaning", "has no meaning", "no meaning",
)

# Contextual modifiers that indicate immediacy
IMMEDIACY_MODIFIERS: frozenset[str] = frozenset({
    "tonight", "today", "right now", "soon", "planning", "decided",
    "ready to", "going to", "about to",
})

# Unambiguous crisis phrases; guards against category drift
SPECIFIC_HIGH_RISK_PHRASES: tuple[str, ...] = (
    "kill myself", "end my life", "ending my life", "suicide", "want to die",
    "hurt myself", "cut myself", "take my own life", "going to overdose",
    "have a plan", "don't want to live", "ready to die", "better off dead",
    "end it all", "take all these pills", "taking all these pills",
    "ready to end",
)

# Mild sadness expressions that lower low scores
MILD_SADNESS_PHRASES: tuple[str, ...] = (
    "feel sad today", "sad today", "having a bad day",
)

SUBSTANCE_PHRASES: tuple[str, ...] = (
    "drinking", "drunk", "high", "pills", "drugs", "alcohol",
    "drinking a lot", "been drinking",
)

ISOLATION_PHRASES: tuple[str, ...] = (
    "alone", "nobody", "no one", "isolated", "lonely",
)

INTENSITY_KEYWORDS: tuple[str, ...] = (
    "overwhelming", "intense", "extreme", "unbearable", "too much",
    "falling apart", "breaking down",
)

# (previous tone, current tone) pairs that indicate escalation
ESCALATION_TONE_SEQUENCES: frozenset[tuple[str, str]] = frozenset({
    ("sad", "hopeless"),
    ("sad", "overwhelmed"),
    ("hopeless", "overwhelmed"),
    ("worried", "hopeless"),
    ("concerned", "overwhelmed"),
})

# Category detail phrase sets (matched against detected keywords)
SUICIDE_DETAIL_PHRASES: frozenset[str] = frozenset({
    "kill myself", "suicide", "end my life", "want to die",
})
SELF_HARM_DETAIL_PHRASES: frozenset[str] = frozenset({
    "hurt myself", "cut myself", "harm myself",
})
EMOTIONAL_DETAIL_PHRASES: frozenset[str] = frozenset({
    "hopeless", "overwhelming", "can't cope",
})

# Matched against the raw message
ABUSE_PHRASES: tuple[str, ...] = (
    "hurt me", "hitting me", "abusing", "violence",
)

# Crisis phrases copied onto persisted event records
TRIGGER_KEYWORDS: tuple[str, ...] = (
    "kill myself", "suicide", "end my life", "hurt myself", "cut myself",
    "overdose", "hopeless", "no point", "can't go on", "want to die",
)

# Ordered crisis-type sniffing rules for event records
CRISIS_TYPE_PHRASES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("suicide", ("suicide", "kill myself")),
    ("self_harm", ("hurt myself", "cut myself")),
    ("abuse", ("abuse", "violence")),
    ("substance", ("overdose", "pills")),
)
