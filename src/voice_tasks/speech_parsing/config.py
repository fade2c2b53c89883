"""Vocabulary tables for transcript parsing.

Extend these tables to teach the parser new words; the algorithms only
consult them through membership tests.
"""

# Task Classification
MIN_TASK_LENGTH = 3  # characters

# Imperative verbs that usually open a new, independent task
ACTION_VERBS: frozenset[str] = frozenset(
    {
        "ask",
        "book",
        "bring",
        "buy",
        "call",
        "cancel",
        "check",
        "clean",
        "complete",
        "contact",
        "cook",
        "create",
        "delete",
        "do",
        "drop",
        "email",
        "feed",
        "file",
        "finish",
        "fix",
        "get",
        "go",
        "meet",
        "make",
        "message",
        "order",
        "organize",
        "pack",
        "pay",
        "pick",
        "plan",
        "prepare",
        "print",
        "read",
        "remind",
        "renew",
        "return",
        "review",
        "schedule",
        "send",
        "sign",
        "start",
        "submit",
        "take",
        "text",
        "update",
        "visit",
        "walk",
        "wash",
        "water",
        "write",
    }
)

# Subject pronouns; an imperative rarely starts with one
PRONOUNS: frozenset[str] = frozenset({"i", "you", "he", "she", "it", "we", "they"})

# Transcript Splitting
# Strong sentence boundaries, matched as runs
SENTENCE_BOUNDARY_CHARS = ".!;"

# Spoken conjunctions separating tasks inside one sentence
CONJUNCTIONS: tuple[str, ...] = ("and", "also", "plus", "then")

# Separator used when a fragment is merged back onto the previous task
MERGE_JOINER = " and "

# Secondary list separator, only applied when the pieces look like tasks
LIST_SEPARATOR = ","

# Leading/trailing punctuation removed from every phrase
EDGE_PUNCTUATION = ",;"

# Spoken Prefixes (opt-in)
# Checked in order; the bare "to" comes last so longer prefixes win
SPOKEN_PREFIXES: tuple[str, ...] = (
    "don't forget to",
    "remember to",
    "make sure to",
    "i need to",
    "i have to",
    "i must",
    "i should",
    "to",
)

# Filler words dropped when filler filtering is enabled
FILLER_WORDS: frozenset[str] = frozenset(
    {"um", "uh", "er", "ah", "hmm", "okay", "ok", "yes", "no"}
)

# Due Dates
# Ordered as date.isoweekday() % 7 (sunday first); earlier names win on ties
WEEKDAY_NAMES: tuple[str, ...] = (
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)

TODAY_KEYWORD = "today"
TOMORROW_KEYWORD = "tomorrow"
NEXT_WEEK_KEYWORD = "next week"
WEEKEND_KEYWORD = "weekend"
