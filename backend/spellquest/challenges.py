from __future__ import annotations

from typing import Any, Dict

from .curriculum import CHALLENGE_TEMPLATES, CHALLENGE_THEMES, CHALLENGE_TYPES


MIN_WORD_GOAL = 50
COMPLETION_MIN_WORDS = 50


def scaled_word_goal(base_goal: int, level: str) -> int:
    if level == "Beginner":
        return max(MIN_WORD_GOAL, base_goal * 7 // 10)
    if level == "Advanced":
        return base_goal * 13 // 10
    return base_goal


def generate_challenge(project_number: int, level: str) -> Dict[str, Any]:
    """Reward challenge for completing ``project_number``.

    Templates within a type advance once every four projects.
    """
    challenge_type = CHALLENGE_TYPES[project_number % len(CHALLENGE_TYPES)]
    templates = CHALLENGE_TEMPLATES[challenge_type]
    template = templates[((project_number - 1) // 4) % len(templates)]
    return {
        "challenge_type": challenge_type,
        "title": template["title"],
        "prompt": template["prompt"],
        "guidelines": list(template["guidelines"]),
        "examples": list(template["examples"]),
        "spelling_focus": template["spelling_focus"],
        "word_goal": scaled_word_goal(template["word_goal"], level),
        "level": level,
        "theme": CHALLENGE_THEMES[(project_number - 1) % len(CHALLENGE_THEMES)],
        "source_project_id": project_number,
    }


def count_words(text: str) -> int:
    return len((text or "").split())
