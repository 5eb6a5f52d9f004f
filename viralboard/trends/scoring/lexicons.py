"""
Lexicons used by the viral scoring engine.

Terms are matched as lowercase substrings of the relevant text, so a term
counts at most once per text regardless of how often it appears. The lists
are bilingual (English and Portuguese) because the dashboard scrapes both.

Changing any list changes scores; treat edits as behavior changes.
"""

import re

# =============================================================================
# EMOTION
# =============================================================================

EMOTION_HIGH = (
    "incrível", "surpreendente", "revolucionário", "extraordinário",
    "impressionante", "chocante", "fantástico",
    "amazing", "incredible", "shocking", "revolutionary",
)

EMOTION_MEDIUM = (
    "interessante", "importante", "relevante", "significativo", "útil",
    "valuable", "important", "interesting", "relevant",
)

EMOTION_LOW = (
    "normal", "comum", "básico", "simples", "regular",
    "standard", "basic", "common", "simple",
)

# =============================================================================
# CLARITY
# =============================================================================

ACTIONABLE_TERMS = (
    "como", "por que", "quando", "onde", "guia", "tutorial", "dicas",
    "how", "why", "guide", "tips",
)

JARGON_TERMS = ("paradigma", "sinergia", "disruptivo", "holístico")

# =============================================================================
# CAROUSEL POTENTIAL
# =============================================================================

LIST_MARKER_PATTERN = re.compile(r"(\d+\.|•|\*|-\s)")

TRANSITION_PATTERN = re.compile(
    r"(primeiro|segundo|terceiro|first|second|third|finally|conclusão|conclusion|introduction)",
    re.IGNORECASE,
)

STATISTIC_PATTERN = re.compile(
    r"(\d+%|\d+\s*(milhão|bilhão|million|billion|thousand|mil)"
    r"|estatística|pesquisa|estudo|statistic|research|study)",
    re.IGNORECASE,
)

LIST_TITLE_TERMS = ("dicas", "passos", "maneiras", "formas", "tips", "ways", "steps")

# =============================================================================
# TREND
# =============================================================================

TRENDING_TERMS = (
    "ai", "artificial intelligence", "machine learning", "blockchain", "crypto",
    "nft", "metaverse", "web3", "sustainability", "climate", "remote work",
    "automation", "robotics", "quantum",
    "inteligência artificial", "aprendizado de máquina", "sustentabilidade", "automação",
)

NOVELTY_TERMS = (
    "novo", "nova", "lançamento", "breakthrough", "inovação", "revolução",
    "new", "latest", "innovation",
)

FUTURITY_TERMS = ("futuro", "próximo", "future", "next", "upcoming")

# =============================================================================
# AUTHORITY
# =============================================================================

HIGH_AUTHORITY_DOMAINS = (
    "techcrunch.com", "wired.com", "theverge.com", "arstechnica.com",
    "mit.edu", "stanford.edu", "harvard.edu",
)

MEDIUM_AUTHORITY_DOMAINS = (
    "medium.com", "linkedin.com", "forbes.com", "businessinsider.com", "mashable.com",
)

# Substrings of blog-platform hosts
LOW_AUTHORITY_MARKERS = ("blog", "wordpress", "blogspot", "tumblr")

AUTHORITY_TERMS = (
    "pesquisa", "estudo", "universidade", "professor", "dr.", "phd",
    "research", "study", "university",
)

# =============================================================================
# SENTIMENT
# =============================================================================

POSITIVE_TERMS = (
    "good", "great", "amazing", "excellent", "awesome", "love", "best",
    "wonderful", "fantastic", "impressive", "innovative", "breakthrough",
    "revolutionary",
)

NEGATIVE_TERMS = (
    "bad", "terrible", "awful", "hate", "worst", "horrible", "disappointing",
    "failed", "broken", "useless", "problematic", "concerning",
)

# News hosts that lift the engagement estimate
ENGAGEMENT_AUTHORITY_DOMAINS = (
    "techcrunch.com", "wired.com", "theverge.com", "bbc.com", "cnn.com",
)


def count_terms(text: str, terms: tuple[str, ...]) -> int:
    """Number of distinct terms that occur in text (already lowercased)."""
    return sum(1 for term in terms if term in text)
