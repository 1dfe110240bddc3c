"""Static curriculum content: diagnostic bank, phases, word lists and catalogs."""
from __future__ import annotations

from typing import Any, Dict, List


# Parts are worth A=40, B=30, C=20, D=10 (100 total)
DIAGNOSTIC_PART_MAX: Dict[str, int] = {"A": 40, "B": 30, "C": 20, "D": 10}

DIAGNOSTIC_QUESTIONS: List[Dict[str, Any]] = [
    # Part A: Phonetic Awareness
    {"id": 1, "part": "A", "type": "spelling", "question": "Spell this word: beautiful", "answer": "beautiful", "points": 5, "category": "phonetic"},
    {"id": 2, "part": "A", "type": "spelling", "question": "Spell this word: receive", "answer": "receive", "points": 5, "category": "phonetic"},
    {"id": 3, "part": "A", "type": "spelling", "question": "Spell this word: separate", "answer": "separate", "points": 5, "category": "phonetic"},
    {"id": 4, "part": "A", "type": "spelling", "question": "Spell this word: believe", "answer": "believe", "points": 5, "category": "phonetic"},
    {"id": 5, "part": "A", "type": "spelling", "question": "Spell this word: beginning", "answer": "beginning", "points": 5, "category": "phonetic"},
    {"id": 6, "part": "A", "type": "fill_blank", "question": "Add '-ed' to 'play'", "answer": "played", "points": 5, "category": "morphophonemic"},
    {"id": 7, "part": "A", "type": "fill_blank", "question": "Add '-ed' to 'cry'", "answer": "cried", "points": 5, "category": "morphophonemic"},
    {"id": 8, "part": "A", "type": "spelling", "question": "Spell this sports word: tournament", "answer": "tournament", "points": 5, "category": "vocabulary"},
    # Part B: Spelling Rules Knowledge
    {"id": 9, "part": "B", "type": "fill_blank", "question": "What happens when you add '-ing' to 'make'?", "answer": "making", "points": 5, "category": "rules"},
    {"id": 10, "part": "B", "type": "fill_blank", "question": "I before E except after ___ (fill in the letter)", "answer": ["c"], "points": 5, "category": "rules"},
    {"id": 11, "part": "B", "type": "multiple_choice", "question": "Choose the correct spelling:", "options": ["accross", "across"], "answer": "across", "points": 4, "category": "rules"},
    {"id": 12, "part": "B", "type": "multiple_choice", "question": "Choose the correct spelling:", "options": ["occured", "occurred"], "answer": "occurred", "points": 4, "category": "rules"},
    {"id": 13, "part": "B", "type": "multiple_choice", "question": "Choose the correct spelling:", "options": ["untill", "until"], "answer": "until", "points": 3, "category": "rules"},
    {"id": 14, "part": "B", "type": "multiple_choice", "question": "Choose the correct spelling:", "options": ["tommorow", "tomorrow"], "answer": "tomorrow", "points": 3, "category": "rules"},
    {"id": 15, "part": "B", "type": "fill_blank", "question": "Form the plural of 'tooth'", "answer": "teeth", "points": 3, "category": "plurals"},
    {"id": 16, "part": "B", "type": "fill_blank", "question": "Form the plural of 'crisis'", "answer": "crises", "points": 3, "category": "plurals"},
    # Part C: Context and Application
    {"id": 17, "part": "C", "type": "multiple_choice", "question": "'She gave me a nice ___' (kind words)", "options": ["compliment", "complement"], "answer": "compliment", "points": 5, "category": "homophones"},
    {"id": 18, "part": "C", "type": "multiple_choice", "question": "'The colors ___ each other' (go well together)", "options": ["compliment", "complement"], "answer": "complement", "points": 3, "category": "homophones"},
    {"id": 19, "part": "C", "type": "spelling", "question": "Spell this word correctly: charactor (character in a story)", "answer": "character", "points": 3, "category": "vocabulary"},
    {"id": 20, "part": "C", "type": "spelling", "question": "Spell this word correctly: favorit (something you like best)", "answer": ["favorite", "favourite"], "points": 3, "category": "vocabulary"},
    {"id": 21, "part": "C", "type": "spelling", "question": "Spell this word correctly: achived (reached a goal)", "answer": "achieved", "points": 3, "category": "vocabulary"},
    {"id": 22, "part": "C", "type": "spelling", "question": "Spell this word correctly: oponent (someone you compete against)", "answer": "opponent", "points": 3, "category": "vocabulary"},
    # Part D: Creative Writing Vocabulary
    {"id": 23, "part": "D", "type": "spelling", "question": "Spell this literary term: protagonist (main character)", "answer": "protagonist", "points": 5, "category": "literary"},
    {"id": 24, "part": "D", "type": "spelling", "question": "Spell this descriptive word: mysterious", "answer": "mysterious", "points": 3, "category": "descriptive"},
    {"id": 25, "part": "D", "type": "spelling", "question": "Spell this descriptive word: courageous", "answer": "courageous", "points": 2, "category": "descriptive"},
]


PHASES: List[Dict[str, Any]] = [
    {
        "phase_number": 1,
        "title": "Phonics Foundation Review",
        "description": "Master sound-symbol correspondence and basic syllable types",
        "weeks": "Weeks 1-4",
        "total_sessions": 20,
        "objectives": [
            "Master sound-symbol correspondence for all 44 phonemes",
            "Identify and apply basic syllable types",
            "Recognize and spell common consonant blends and digraphs",
        ],
    },
    {
        "phase_number": 2,
        "title": "Common Spelling Patterns",
        "description": "Master common spelling patterns and word families",
        "weeks": "Weeks 5-10",
        "total_sessions": 30,
        "objectives": [
            "Apply spelling rules for adding suffixes",
            "Recognize and spell words with common prefixes",
            "Distinguish between similar-sounding spelling patterns",
        ],
    },
    {
        "phase_number": 3,
        "title": "Irregular Words & Exceptions",
        "description": "Master high-frequency irregular words and silent letters",
        "weeks": "Weeks 11-16",
        "total_sessions": 30,
        "objectives": [
            "Master high-frequency irregular words",
            "Recognize and spell words with silent letters",
            "Apply 'I before E' rule and its exceptions",
        ],
    },
    {
        "phase_number": 4,
        "title": "Homophones & Confusing Words",
        "description": "Distinguish between common homophones through context",
        "weeks": "Weeks 17-21",
        "total_sessions": 25,
        "objectives": [
            "Distinguish between common homophones through context",
            "Master commonly confused word pairs",
            "Apply appropriate word choice in writing",
        ],
    },
    {
        "phase_number": 5,
        "title": "Advanced Vocabulary & Academic Words",
        "description": "Master Greek and Latin roots for vocabulary expansion",
        "weeks": "Weeks 22-26",
        "total_sessions": 25,
        "objectives": [
            "Master Greek and Latin roots for vocabulary expansion",
            "Spell complex academic and content-area vocabulary",
            "Apply morphological analysis to unknown words",
        ],
    },
    {
        "phase_number": 6,
        "title": "Creative Writing Mastery",
        "description": "Apply all learned spelling skills in creative writing contexts",
        "weeks": "Weeks 27-30",
        "total_sessions": 20,
        "objectives": [
            "Master specialized vocabulary for creative writing",
            "Self-edit and proofread for spelling accuracy",
            "Create polished, publication-ready creative pieces",
        ],
    },
]

MAX_PHASE = len(PHASES)


SPELLING_WORDS: Dict[int, List[str]] = {
    1: [
        "sprint", "strength", "splash", "shrink", "prompt", "twelfth", "sketch", "flake", "drone", "shrine",
        "basket", "picnic", "robot", "compete", "respond", "burger", "squirrel", "explore", "emergency", "territory",
    ],
    2: [
        "making", "hoping", "creating", "usable", "running", "biggest", "occurred", "traveler", "tried", "happiness",
        "beautiful", "studied", "foxes", "babies", "churches", "leaves", "heroes", "reefs", "shelves", "mice",
        "disagreement", "uncomfortable", "nonexistent", "overreaction", "subtraction", "intercontinental", "meaningful", "fearlessly", "hopelessness",
    ],
    3: [
        "knowledge", "wrestle", "gnome", "psychology", "solemn", "salmon", "receipt", "scissors", "mortgage", "handsome",
        "necessary", "recommend", "occasion", "restaurant", "accommodate", "calendar", "colonel", "rhythm", "Wednesday", "Arctic",
        "receive", "believe", "weird", "neighbor", "ceiling", "achieve", "seizure", "freight",
    ],
    4: [
        "their", "there", "they're", "your", "you're", "its", "it's", "to", "too", "two",
        "whose", "who's", "compliment", "complement", "capitol", "capital", "stationary", "stationery", "principal", "principle",
        "accept", "except", "desert", "dessert", "loose", "lose", "breath", "breathe", "advice", "advise",
    ],
    5: [
        "telephone", "television", "photograph", "biography", "psychology", "automatic", "microscope", "thermometer", "manuscript", "dictionary",
        "interrupt", "transportation", "construction", "submarine", "analysis", "evaluate", "synthesize", "hypothesis", "perspective", "significant",
        "contemporary", "legitimate", "demonstrate", "fundamental", "ecosystem", "democracy", "equation", "civilization", "architecture", "atmosphere",
    ],
    6: [
        "protagonist", "antagonist", "exposition", "foreshadowing", "flashback", "metaphor", "simile", "personification", "alliteration", "onomatopoeia",
        "ferocious", "luminous", "treacherous", "spectacular", "mysterious", "courageous", "melancholy", "exasperated", "triumphant", "ominous",
        "whispered", "exclaimed", "interrupted", "murmured", "declared", "sorcerer", "enchanted", "galaxy", "android", "dimension",
    ],
}


def words_for_phase(phase: int) -> List[str]:
    return SPELLING_WORDS.get(phase) or SPELLING_WORDS[1]


WORD_DEFINITIONS: Dict[str, str] = {
    "sprint": "To run at full speed for a short distance",
    "strength": "The quality of being physically strong",
    "splash": "To cause liquid to scatter in drops",
    "sketch": "A rough or unfinished drawing",
    "squirrel": "A small furry animal with a bushy tail that lives in trees",
    "emergency": "A serious, unexpected situation requiring immediate action",
    "occurred": "Happened or took place",
    "happiness": "The state of being happy",
    "beautiful": "Very pleasing to look at",
    "uncomfortable": "Causing or feeling physical or mental discomfort",
    "knowledge": "Facts, information, and skills acquired through experience or education",
    "rhythm": "A strong, regular repeated pattern of movement or sound",
    "necessary": "Needed to be done or present; essential",
    "compliment": "A polite expression of praise",
    "complement": "A thing that completes or goes well with something",
    "hypothesis": "A proposed explanation made as a starting point for investigation",
    "ecosystem": "A community of living things interacting with their environment",
    "protagonist": "The main character in a story",
    "foreshadowing": "A hint of what is to come later in a story",
    "onomatopoeia": "A word that imitates the sound it describes",
}


ACHIEVEMENTS: List[Dict[str, Any]] = [
    {"achievement_id": "first_session", "title": "Getting Started", "description": "Complete your first study session", "icon_name": "Rocket", "category": "milestones", "requirement": "Complete 1 session", "threshold": 1},
    {"achievement_id": "week_streak_3", "title": "Hot Streak", "description": "Study 3 days in a row", "icon_name": "Flame", "category": "streaks", "requirement": "3 day streak", "threshold": 3},
    {"achievement_id": "week_streak_7", "title": "On Fire!", "description": "Study 7 days in a row", "icon_name": "Fire", "category": "streaks", "requirement": "7 day streak", "threshold": 7},
    {"achievement_id": "words_25", "title": "Word Collector", "description": "Master 25 words", "icon_name": "BookOpen", "category": "vocabulary", "requirement": "Master 25 words", "threshold": 25},
    {"achievement_id": "words_50", "title": "Vocabulary Builder", "description": "Master 50 words", "icon_name": "Library", "category": "vocabulary", "requirement": "Master 50 words", "threshold": 50},
    {"achievement_id": "words_100", "title": "Word Wizard", "description": "Master 100 words", "icon_name": "Wand2", "category": "vocabulary", "requirement": "Master 100 words", "threshold": 100},
    {"achievement_id": "phase_1_complete", "title": "Foundation Master", "description": "Complete Phase 1", "icon_name": "Medal", "category": "phases", "requirement": "Complete Phase 1", "threshold": 1},
    {"achievement_id": "phase_2_complete", "title": "Pattern Pro", "description": "Complete Phase 2", "icon_name": "Puzzle", "category": "phases", "requirement": "Complete Phase 2", "threshold": 1},
    {"achievement_id": "phase_3_complete", "title": "Exception Expert", "description": "Complete Phase 3", "icon_name": "Sparkles", "category": "phases", "requirement": "Complete Phase 3", "threshold": 1},
    {"achievement_id": "phase_4_complete", "title": "Homophone Hero", "description": "Complete Phase 4", "icon_name": "Ear", "category": "phases", "requirement": "Complete Phase 4", "threshold": 1},
    {"achievement_id": "phase_5_complete", "title": "Root Scholar", "description": "Complete Phase 5", "icon_name": "GraduationCap", "category": "phases", "requirement": "Complete Phase 5", "threshold": 1},
    {"achievement_id": "phase_6_complete", "title": "Master Wordsmith", "description": "Complete Phase 6", "icon_name": "Crown", "category": "phases", "requirement": "Complete Phase 6", "threshold": 1},
    {"achievement_id": "perfect_score", "title": "Perfect!", "description": "Get 100% on any exercise", "icon_name": "Star", "category": "accuracy", "requirement": "100% accuracy", "threshold": 1},
    {"achievement_id": "writing_project_1", "title": "Creative Writer", "description": "Complete your first writing project", "icon_name": "Pencil", "category": "writing", "requirement": "Complete 1 project", "threshold": 1},
    {"achievement_id": "writing_project_5", "title": "Author in Training", "description": "Complete 5 writing projects", "icon_name": "BookText", "category": "writing", "requirement": "Complete 5 projects", "threshold": 5},
    {"achievement_id": "diagnostic_complete", "title": "Diagnosed!", "description": "Complete the diagnostic assessment", "icon_name": "ClipboardCheck", "category": "milestones", "requirement": "Complete diagnostic", "threshold": 1},
    {"achievement_id": "accuracy_90", "title": "Sharp Speller", "description": "Achieve 90% overall accuracy", "icon_name": "Target", "category": "accuracy", "requirement": "90% accuracy", "threshold": 90},
    {"achievement_id": "hours_10", "title": "Dedicated Learner", "description": "Study for 10 hours total", "icon_name": "Clock", "category": "time", "requirement": "10 hours", "threshold": 600},
]


WRITING_PROJECTS: List[Dict[str, Any]] = [
    {"project_number": 1, "title": "Sports Trading Cards Collection", "spelling_focus": "Proper nouns, sports vocabulary, past tense verbs", "phase": "1-2", "level": "Beginner"},
    {"project_number": 2, "title": "Game Controls Instruction Manual", "spelling_focus": "Command verbs, gaming vocabulary", "phase": "1-2", "level": "Beginner"},
    {"project_number": 3, "title": "Anime Character Name Tag Design", "spelling_focus": "Adjectives, character trait vocabulary", "phase": "1-2", "level": "Beginner"},
    {"project_number": 4, "title": "Cartoon Episode Summary", "spelling_focus": "Sequence words, action verbs, plot vocabulary", "phase": "2", "level": "Beginner"},
    {"project_number": 5, "title": "Sports Play-by-Play Commentary", "spelling_focus": "Present tense verbs, sports terminology, transition words", "phase": "2", "level": "Beginner"},
    {"project_number": 6, "title": "Video Game Review Blog", "spelling_focus": "Homophones, descriptive vocabulary, irregular words", "phase": "3-4", "level": "Intermediate"},
    {"project_number": 7, "title": "Anime Character Profile Database", "spelling_focus": "Descriptive adjectives, irregular plurals, foreign borrowings", "phase": "3-4", "level": "Intermediate"},
    {"project_number": 8, "title": "Sports Hall of Fame Induction Speech", "spelling_focus": "Silent letters, irregular words, formal vocabulary", "phase": "3-4", "level": "Intermediate"},
    {"project_number": 9, "title": "Game Strategy Guide", "spelling_focus": "Command forms, sequence words, gaming vocabulary", "phase": "3-4", "level": "Intermediate"},
    {"project_number": 10, "title": "Cartoon Crossover Story", "spelling_focus": "Homophones, dialogue punctuation, creative vocabulary", "phase": "4", "level": "Intermediate"},
    {"project_number": 11, "title": "E-Sports Tournament Report", "spelling_focus": "Academic words, gaming terminology, Greek/Latin roots", "phase": "5", "level": "Advanced"},
    {"project_number": 12, "title": "Anime Series Analysis Essay", "spelling_focus": "Literary terms, academic vocabulary, complex words", "phase": "5-6", "level": "Advanced"},
    {"project_number": 13, "title": "Sports Science Article", "spelling_focus": "Scientific vocabulary, academic terms, Greek/Latin roots", "phase": "5", "level": "Advanced"},
    {"project_number": 14, "title": "Original Game Design Document", "spelling_focus": "Technical vocabulary, creative descriptive words", "phase": "5-6", "level": "Advanced"},
    {"project_number": 15, "title": "Anime Episode Script", "spelling_focus": "Literary terms, dialogue tags, descriptive language", "phase": "6", "level": "Advanced"},
    {"project_number": 16, "title": "Sports Commentary Podcast Script", "spelling_focus": "Advanced descriptive vocabulary, Greek/Latin roots", "phase": "6", "level": "Advanced"},
    {"project_number": 17, "title": "Game Review Comparison Article", "spelling_focus": "Comparative language, technical vocabulary", "phase": "6", "level": "Advanced"},
    {"project_number": 18, "title": "Cartoon Animation Storyboard", "spelling_focus": "Cinematic vocabulary, action verbs, descriptive language", "phase": "6", "level": "Advanced"},
    {"project_number": 19, "title": "Fantasy Sports Team Report", "spelling_focus": "Statistical vocabulary, analytical terms", "phase": "5-6", "level": "Advanced"},
    {"project_number": 20, "title": "My Gaming Journey", "spelling_focus": "Narrative vocabulary, reflective language, literary devices", "phase": "6", "level": "Advanced"},
]


CHALLENGE_TYPES: List[str] = ["BONUS_CHALLENGE", "CREATIVE_EXTENSION", "THEMED_CHALLENGE", "SKILL_BUILDER"]

CHALLENGE_THEMES: List[str] = ["sports", "gaming", "anime", "fantasy", "science", "adventure", "mystery", "comedy"]

CHALLENGE_TEMPLATES: Dict[str, List[Dict[str, Any]]] = {
    "BONUS_CHALLENGE": [
        {
            "title": "Quick Character Sketch",
            "prompt": "Create a detailed character description in exactly 100 words. Describe a character from your favorite show or invent one from scratch.",
            "guidelines": ["Use exactly 100 words", "Include physical appearance, personality, and one unique trait", "Show don't tell - use actions to reveal personality"],
            "examples": ["Maya stood at 5'2\", her silver-streaked hair defying gravity..."],
            "spelling_focus": "Descriptive adjectives and character trait vocabulary",
            "word_goal": 100,
        },
        {
            "title": "Six-Word Story Challenge",
            "prompt": "Write TEN six-word stories. Each one should tell a complete tale.",
            "guidelines": ["Each story must be exactly 6 words", "Try different genres", "Make readers feel something with each story"],
            "examples": ["For sale: baby shoes, never worn."],
            "spelling_focus": "Word choice and precise vocabulary",
            "word_goal": 60,
        },
        {
            "title": "Plot Twist Master",
            "prompt": "Write a short scene that ends with a jaw-dropping plot twist.",
            "guidelines": ["Build a normal scene for the first 80%", "Drop subtle hints", "End on the twist - don't explain it"],
            "examples": ["A detective solving a crime... twist: the detective is the criminal"],
            "spelling_focus": "Narrative vocabulary and transition words",
            "word_goal": 200,
        },
    ],
    "CREATIVE_EXTENSION": [
        {
            "title": "Alternate Ending Writer",
            "prompt": "Choose a story you know and write a completely different ending.",
            "guidelines": ["Start from a specific turning point", "Stay true to character personalities", "Show consequences of the changed outcome"],
            "examples": ["What if the villain won?"],
            "spelling_focus": "Narrative vocabulary and story structure words",
            "word_goal": 250,
        },
        {
            "title": "Letter from a Character",
            "prompt": "Write a letter from one character to another: an apology, a confession, a warning, or a farewell.",
            "guidelines": ["Use the character's voice", "Include specific memories or events", "Proper letter format with greeting and closing"],
            "examples": ["A letter from a hero to their rival before the final battle"],
            "spelling_focus": "Formal writing and emotional vocabulary",
            "word_goal": 200,
        },
        {
            "title": "Scene from Another Perspective",
            "prompt": "Rewrite a famous scene from a different character's point of view.",
            "guidelines": ["Choose a scene with strong emotions", "Show thoughts the original didn't reveal", "Maintain consistency with what happened"],
            "examples": ["The Titanic sinking from the iceberg's perspective"],
            "spelling_focus": "Perspective vocabulary and descriptive language",
            "word_goal": 300,
        },
    ],
    "THEMED_CHALLENGE": [
        {
            "title": "Weather Writer",
            "prompt": "Write a story where weather plays a crucial role.",
            "guidelines": ["Describe weather using all five senses", "Use weather to reflect character emotions", "Make weather affect the plot directly"],
            "examples": ["A fog-covered city where the mist hides secrets"],
            "spelling_focus": "Weather vocabulary and atmospheric descriptions",
            "word_goal": 250,
        },
        {
            "title": "Time Traveler's Diary",
            "prompt": "Write diary entries from journeys to 3 different time periods.",
            "guidelines": ["Research historical details", "Include sensory descriptions of each era", "Include one mishap per entry"],
            "examples": ["Day 1 in Ancient Rome: The smell hit me first..."],
            "spelling_focus": "Historical vocabulary and time-related words",
            "word_goal": 300,
        },
        {
            "title": "Monster Creator",
            "prompt": "Design your own original monster and write a short encounter story featuring it.",
            "guidelines": ["Make it unique", "Give it logical strengths AND weaknesses", "Show the monster in action"],
            "examples": ["The Whisperghast - a creature that feeds on secrets"],
            "spelling_focus": "Descriptive vocabulary and creature terminology",
            "word_goal": 350,
        },
    ],
    "SKILL_BUILDER": [
        {
            "title": "Dialogue Duel",
            "prompt": "Write a conversation between two characters who disagree about something important. Only dialogue!",
            "guidelines": ["Each character should have a distinct voice", "Use dialogue tags sparingly", "Build to a climax or resolution"],
            "examples": ["Two superheroes arguing about whether to save one person or many"],
            "spelling_focus": "Dialogue punctuation and speech vocabulary",
            "word_goal": 200,
        },
        {
            "title": "Show Don't Tell Challenge",
            "prompt": "Describe anger, fear, joy, sadness and love WITHOUT naming them.",
            "guidelines": ["Never use the emotion word itself", "Use body language and physical sensations", "Make readers FEEL the emotion"],
            "examples": ["His fists clenched, jaw tight, a vein pulsing at his temple"],
            "spelling_focus": "Emotion vocabulary and sensory words",
            "word_goal": 250,
        },
        {
            "title": "World Builder",
            "prompt": "Create a completely original world: geography, climate, creatures, cultures, and one major conflict.",
            "guidelines": ["Start with a unique hook", "Explain how geography affects culture", "Leave mysteries for readers"],
            "examples": ["A world where gravity reverses every full moon"],
            "spelling_focus": "Geographic and cultural vocabulary",
            "word_goal": 400,
        },
    ],
}


SEGMENTS = ("visual", "auditory", "kinesthetic")

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_PHASE1_SCHEDULE: Dict[str, Dict[str, Dict[str, Any]]] = {
    "monday": {
        "visual": {"title": "Phoneme-Grapheme Mapping", "description": "Review flashcards showing sound-symbol correspondences.", "duration": 10},
        "auditory": {"title": "Sound Blending & Segmentation", "description": "Practice blending sounds aloud using 10 target words.", "duration": 10},
        "kinesthetic": {"title": "Multi-Sensory Reinforcement", "description": "Skywriting: write 5 challenging words in the air while spelling aloud.", "duration": 10},
    },
    "tuesday": {
        "visual": {"title": "Word Families & Pattern Recognition", "description": "Create a word family chart (e.g., -ight family).", "duration": 10},
        "auditory": {"title": "Dictation & Listening", "description": "Listen to 8 words from the weekly list and write them.", "duration": 10},
        "kinesthetic": {"title": "Active Learning", "description": "Letter tile building: use manipulatives to build 6 target words.", "duration": 10},
    },
    "wednesday": {
        "visual": {"title": "Phoneme-Grapheme Mapping", "description": "Color-code syllable types in 5 multisyllabic words.", "duration": 10},
        "auditory": {"title": "Sound Blending & Segmentation", "description": "Say-spell-say practice.", "duration": 10},
        "kinesthetic": {"title": "Multi-Sensory Reinforcement", "description": "Trace letters while saying sounds.", "duration": 10},
    },
    "thursday": {
        "visual": {"title": "Word Families & Pattern Recognition", "description": "Identify common patterns in a themed word list.", "duration": 10},
        "auditory": {"title": "Dictation & Listening", "description": "Create a silly sentence using 4 target words; say it aloud.", "duration": 10},
        "kinesthetic": {"title": "Active Learning", "description": "Movement spelling: bounce a ball for each letter.", "duration": 10},
    },
    "friday": {
        "visual": {"title": "Phoneme-Grapheme Mapping", "description": "Weekly review of sound-symbol correspondences.", "duration": 10},
        "auditory": {"title": "Sound Blending & Segmentation", "description": "Final practice of weekly words.", "duration": 10},
        "kinesthetic": {"title": "Multi-Sensory Reinforcement", "description": "Review all weekly words with movement.", "duration": 10},
    },
}

_DEFAULT_SEGMENTS: Dict[str, Dict[str, Any]] = {
    "visual": {"title": "Visual Learning", "description": "Pattern recognition, flashcards, and color-coded word study.", "duration": 10},
    "auditory": {"title": "Auditory Learning", "description": "Dictation, oral spelling practice, and listening exercises.", "duration": 10},
    "kinesthetic": {"title": "Kinesthetic Learning", "description": "Movement-based activities, games, and hands-on practice.", "duration": 10},
}


def daily_schedule(phase: int, day_of_week: str) -> Dict[str, Any]:
    day = day_of_week.lower()
    segments = _PHASE1_SCHEDULE.get(day) if phase == 1 else None
    return {"day_of_week": day.capitalize(), **(segments or _DEFAULT_SEGMENTS)}
