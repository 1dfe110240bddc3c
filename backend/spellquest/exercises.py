"""Practice game content: decoy spellings, letter masks and pattern sorting.

Generators take an injected ``random.Random`` so games are reproducible
under test and vary in production.
"""
from __future__ import annotations

import random
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .curriculum import WORD_DEFINITIONS
from .progression import _lookup, is_correct


GAME_TYPES = ("spelling_bee", "word_match", "fill_blank", "word_sort")

VOWELS = "aeiou"

# Orthographic confusions, checked in order; the first one found in a word wins
COMMON_MISTAKES: Dict[str, List[str]] = {
    "ie": ["ei"],
    "ei": ["ie"],
    "tion": ["shun", "sion"],
    "sion": ["tion", "shun"],
    "ough": ["uff", "off", "ow"],
    "ible": ["able"],
    "able": ["ible"],
    "ance": ["ence"],
    "ence": ["ance"],
    "ant": ["ent"],
    "ent": ["ant"],
    "er": ["or", "ar"],
    "or": ["er", "ar"],
    "ar": ["er", "or"],
    "ous": ["us"],
    "ful": ["full"],
    "ly": ["ley", "lee"],
    "ness": ["niss"],
    "ment": ["mint"],
    "ck": ["k", "c"],
    "ph": ["f"],
    "gh": ["g", ""],
    "wh": ["w"],
    "kn": ["n"],
    "wr": ["r"],
    "mb": ["m"],
    "sc": ["s"],
    "ps": ["s"],
    "rh": ["r"],
    "gn": ["n"],
}

SILENT_LETTERS = ["kn", "wr", "gn", "mb", "gh", "ps", "rh", "bt", "mn"]
BLENDS = ["bl", "br", "cl", "cr", "dr", "fl", "fr", "gl", "gr", "pl", "pr", "sc", "sk", "sl", "sm", "sn", "sp", "st", "str", "spr", "spl", "shr", "thr", "sw", "tr", "tw"]
VOWEL_TEAMS = ["ai", "ay", "ea", "ee", "oa", "oe", "ow", "ou", "ie", "ei", "ue", "oo", "au", "aw"]
SUFFIXES = ["ing", "ed", "tion", "sion", "ness", "ment", "ful", "less", "able", "ible", "ous", "ive", "ly"]
PREFIXES = ["un", "re", "dis", "mis", "pre", "non", "over", "sub", "inter", "trans"]

REGULAR = "Regular Words"
SORT_CATEGORIES = ["Silent Letters", "Double Letters", "Consonant Blends", "Vowel Teams", "Suffix Words", REGULAR]


# ---- Decoy speller ----

def _swap_adjacent(chars: List[str], rng: random.Random) -> str:
    if len(chars) < 2:
        return "".join(chars)
    i = rng.randrange(len(chars) - 1)
    chars[i], chars[i + 1] = chars[i + 1], chars[i]
    return "".join(chars)


def _double_consonant(chars: List[str], rng: random.Random) -> str:
    consonants = [i for i, c in enumerate(chars) if c.isalpha() and c.lower() not in VOWELS]
    if consonants:
        i = rng.choice(consonants)
        chars.insert(i, chars[i])
    return "".join(chars)


def _drop_double(chars: List[str], rng: random.Random) -> str:
    for i in range(len(chars) - 1):
        if chars[i].lower() == chars[i + 1].lower():
            del chars[i]
            return "".join(chars)
    return _swap_adjacent(chars, rng)


def _swap_vowel(chars: List[str], rng: random.Random) -> str:
    vowels = [i for i, c in enumerate(chars) if c.lower() in VOWELS]
    if vowels:
        i = rng.choice(vowels)
        c = chars[i]
        new = rng.choice(VOWELS.replace(c.lower(), ""))
        chars[i] = new.upper() if c.isupper() else new
    return "".join(chars)


FALLBACK_MUTATIONS = (_swap_adjacent, _double_consonant, _drop_double, _swap_vowel)


def wrong_spelling(word: str, rng: random.Random) -> str:
    """Return a plausible misspelling of ``word`` that never equals it."""
    lower = word.lower()
    result = None
    for correct, wrongs in COMMON_MISTAKES.items():
        if correct in lower:
            replacement = rng.choice(wrongs)
            result = re.sub(re.escape(correct), lambda _m: replacement, word, count=1, flags=re.IGNORECASE)
            break
    if result is None:
        mutation = rng.choice(FALLBACK_MUTATIONS)
        result = mutation(list(word), rng)
    if result.lower() == lower:
        result = word[:-1] + "e"
        if result.lower() == lower:
            result = word[:-1] + "a"
    return result


# ---- Fill-in-blank ----

def fill_blank_mask(word: str, rng: random.Random) -> List[int]:
    if not word:
        return []
    count = max(1, len(word) // 3)
    return sorted(rng.sample(range(len(word)), count))


def masked_display(word: str, hidden: Sequence[int], revealed: Sequence[int] = ()) -> str:
    blanks = set(hidden) - set(revealed)
    return "".join("_" if i in blanks else ch for i, ch in enumerate(word))


def next_hint(hidden: Sequence[int], revealed: Sequence[int]) -> Optional[int]:
    for i in sorted(hidden):
        if i not in revealed:
            return i
    return None


# ---- Pattern sorter ----

def detect_patterns(word: str) -> List[str]:
    w = word.lower()
    patterns = []
    if any(p in w for p in SILENT_LETTERS):
        patterns.append("Silent Letters")
    if any(w[i] == w[i + 1] for i in range(len(w) - 1)):
        patterns.append("Double Letters")
    if any(w.startswith(b) for b in BLENDS):
        patterns.append("Consonant Blends")
    if any(v in w for v in VOWEL_TEAMS):
        patterns.append("Vowel Teams")
    if any(w.endswith(s) for s in SUFFIXES):
        patterns.append("Suffix Words")
    if any(w.startswith(p) and len(w) > len(p) + 2 for p in PREFIXES):
        patterns.append("Prefix Words")
    return patterns


def sort_patterns(words: Sequence[str]) -> Tuple[List[str], Dict[str, str]]:
    """Pick the batch's sorting categories and each word's single category."""
    word_patterns: Dict[str, List[str]] = {}
    counts: Dict[str, int] = {}
    for word in words:
        patterns = detect_patterns(word) or [REGULAR]
        word_patterns[word] = patterns
        for p in patterns:
            counts[p] = counts.get(p, 0) + 1

    ranked = sorted((item for item in counts.items() if item[1] >= 2), key=lambda item: item[1], reverse=True)
    categories = [name for name, _ in ranked[:4]]
    for name in SORT_CATEGORIES:
        if len(categories) >= 3:
            break
        if name not in categories:
            categories.append(name)

    assignment = {}
    for word in words:
        assignment[word] = next((c for c in categories if c in word_patterns[word]), REGULAR)
    if REGULAR not in categories and any(c not in categories for c in assignment.values()):
        categories.append(REGULAR)
    return categories, assignment


# ---- Game assembly and grading ----

def pick_words(words: Sequence[str], rng: random.Random, count: int = 10) -> List[str]:
    unique = list(dict.fromkeys(words))
    return rng.sample(unique, min(count, len(unique)))


def build_exercise(game: str, words: Sequence[str], rng: random.Random) -> Dict[str, Any]:
    if game not in GAME_TYPES:
        raise ValueError(f"unknown game type: {game}")
    items: List[Dict[str, Any]] = []
    exercise: Dict[str, Any] = {"game": game, "items": items}
    if game == "word_sort":
        categories, assignment = sort_patterns(words)
        exercise["categories"] = categories
        for i, word in enumerate(words):
            items.append({"id": i + 1, "word": word, "answer": assignment[word]})
        return exercise

    for i, word in enumerate(words):
        item: Dict[str, Any] = {"id": i + 1, "word": word, "answer": word}
        if game == "spelling_bee":
            item["definition"] = WORD_DEFINITIONS.get(word.lower())
        elif game == "word_match":
            options = [word, wrong_spelling(word, rng)]
            rng.shuffle(options)
            item["options"] = options
        else:
            item["hidden"] = fill_blank_mask(word, rng)
            item["revealed"] = []
        items.append(item)
    return exercise


def public_item(game: str, item: Mapping[str, Any]) -> Dict[str, Any]:
    view: Dict[str, Any] = {"id": item["id"]}
    if game == "spelling_bee":
        # Dictation: the client speaks the word aloud
        view["prompt_word"] = item["word"]
        view["definition"] = item.get("definition")
    elif game == "word_match":
        view["options"] = list(item["options"])
    elif game == "fill_blank":
        view["display"] = masked_display(item["word"], item["hidden"], item["revealed"])
        view["length"] = len(item["word"])
    else:
        view["word"] = item["word"]
    return view


def public_view(exercise: Mapping[str, Any]) -> Dict[str, Any]:
    game = exercise["game"]
    view: Dict[str, Any] = {"game": game, "items": [public_item(game, item) for item in exercise["items"]]}
    if "categories" in exercise:
        view["categories"] = list(exercise["categories"])
    return view


def reveal_hint(exercise: Dict[str, Any], item_id: int) -> Optional[Dict[str, Any]]:
    """Reveal the next hidden letter of a fill-in-blank item in place."""
    for item in exercise["items"]:
        if item["id"] == item_id:
            index = next_hint(item["hidden"], item["revealed"])
            if index is None:
                return None
            item["revealed"].append(index)
            return {"id": item_id, "index": index, "letter": item["word"][index],
                    "display": masked_display(item["word"], item["hidden"], item["revealed"])}
    raise KeyError(item_id)


@dataclass
class ExerciseGrade:
    score: int
    total_questions: int
    accuracy: float
    words_attempted: List[str] = field(default_factory=list)
    incorrect_words: List[str] = field(default_factory=list)
    hints_used: int = 0
    hint_penalty: float = 0.0


def accuracy_pct(score: int, total: int) -> float:
    return (score / total) * 100 if total > 0 else 0.0


def grade_exercise(exercise: Mapping[str, Any], answers: Mapping[Any, Any], hint_penalty: float = 0.5) -> ExerciseGrade:
    items = exercise["items"]
    incorrect = [item["word"] for item in items if not is_correct(_lookup(answers, item["id"]), item["answer"])]
    score = len(items) - len(incorrect)
    hints = sum(len(item.get("revealed", ())) for item in items)
    return ExerciseGrade(
        score=score,
        total_questions=len(items),
        accuracy=accuracy_pct(score, len(items)),
        words_attempted=[item["word"] for item in items],
        incorrect_words=incorrect,
        hints_used=hints,
        hint_penalty=hints * hint_penalty,
    )


def words_mastered_delta(attempted: Sequence[str], incorrect: Sequence[str]) -> int:
    missed = {w.lower() for w in incorrect}
    return sum(1 for w in attempted if w.lower() not in missed)
