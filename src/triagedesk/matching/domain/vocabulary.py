"""
Matching Vocabulary
===================

Constant tables used by the matching engine: scoring weights, length
thresholds, the stop-word list and the category keyword tables.

Kept as plain data so they can be tested and overridden independently
of the scoring code.
"""

# ========== Scoring weights ==========

KEYWORD_WEIGHT = 3
TITLE_WEIGHT = 2
CONTENT_WEIGHT = 1

# ========== Length filters (a word must be strictly longer) ==========

MIN_TITLE_WORD_LENGTH = 3
MIN_CONTENT_WORD_LENGTH = 4
MIN_KEYWORD_LENGTH = 3

# ========== Thresholds ==========

MIN_CONFIDENCE = 0.3
MAX_EXTRACTED_KEYWORDS = 10

# ========== Stop words ==========

STOP_WORDS = frozenset({
    "the", "a", "an", "and", "or", "but", "in", "on", "at", "to", "for", "of", "with", "by",
    "i", "you", "he", "she", "it", "we", "they", "me", "him", "her", "us", "them",
    "is", "are", "was", "were", "be", "been", "being", "have", "has", "had", "do", "does", "did",
    "will", "would", "could", "should", "may", "might", "can", "cannot", "must",
    "this", "that", "these", "those", "my", "your", "his", "its", "our", "their",
})

# ========== Category keyword tables (checked in this order) ==========

TECHNICAL_KEYWORDS = (
    "login", "password", "access", "portal", "system", "error", "bug", "technical",
)
ACADEMIC_KEYWORDS = (
    "grade", "assignment", "exam", "test", "homework", "course", "class",
)
ADMINISTRATIVE_KEYWORDS = (
    "schedule", "registration", "enrollment", "fee", "payment", "deadline",
)

# (table name, fragment looked up in category names, keywords)
CATEGORY_KEYWORD_TABLES = (
    ("technical", "technical", TECHNICAL_KEYWORDS),
    ("academic", "academic", ACADEMIC_KEYWORDS),
    ("administrative", "admin", ADMINISTRATIVE_KEYWORDS),
)

FALLBACK_CATEGORY_FRAGMENT = "general"
