LANGUAGE_NAMES = {
    "en": "English",
    "es": "Spanish",
    "ru": "Russian",
    "de": "German",
    "fr": "French",
    "it": "Italian",
    "pt": "Portuguese",
}


def language_name(code: str) -> str:
    return LANGUAGE_NAMES.get(code.lower(), code)


SYSTEM_WORD_GENERATOR = (
    "You are an assistant for language learners. "
    "You answer only with JSON arrays of vocabulary items."
)

PROMPT_WORD_GENERATION = """
Generate {count} vocabulary words for a language learner.

Language pair: {target_language} (learning) → {known_language} (known) → English
Level: {level}
{topic_block}{exclusion_block}
Requirements:
- Words must match CEFR level {level}.
- Give every word in three languages: {target_language} → {known_language} → English.
- Add one short example sentence in {target_language}.
- Set the difficulty (one of A1, A2, B1, B2, C1, C2).
- The English word will be used to generate an illustration, so prefer a concrete noun or verb.
{topic_focus}
Return your output as a single **JSON array**, one object per word.
Your response must be *only* the JSON array. It must start with `[` and end with `]`.
Do not include any other text, explanations, or markdown formatting before or after the JSON array.

**Example Output Format:**
[
  {{
    "term": "word in {target_language}",
    "translation": "translation in {known_language}",
    "english": "English translation",
    "example": "example sentence in {target_language}",
    "difficulty": "{level}"
  }}
]
"""


def build_word_prompt(known_language: str, target_language: str, level: str,
                      count: int, topic=None, exclusions=()) -> str:
    topic_block = f"Topic: {topic}\n" if topic else ""
    exclusion_block = ""
    if exclusions:
        exclusion_block = f"Do not use any of these words: {', '.join(sorted(exclusions))}\n"
    topic_focus = f"\nFocus on the topic: {topic}\n" if topic else ""
    return PROMPT_WORD_GENERATION.format(
        count=count,
        known_language=language_name(known_language),
        target_language=language_name(target_language),
        level=level,
        topic_block=topic_block,
        exclusion_block=exclusion_block,
        topic_focus=topic_focus,
    )


IMAGE_STYLE_PROMPTS = {
    "cartoon": "cartoon illustration, bright colors, simple lines, child-friendly style, educational material",
    "realistic": "realistic photograph, high quality, detailed, clear and sharp",
    "artistic": "artistic illustration, beautiful colors, creative style, educational",
    "simple": "simple line drawing, minimal style, clean and clear, educational",
}

IMAGE_SPECIFICITY = [
    "pure white background",
    "centered composition",
    "no other objects",
    "no text or words",
    "no decorative elements",
    "clear and recognizable",
    "educational flashcard quality",
    "high contrast",
    "well-defined edges",
]


def build_image_prompt(word: str, style: str = "cartoon") -> str:
    """Flashcard illustration prompt for a single (English) word."""
    style_prompt = IMAGE_STYLE_PROMPTS.get(style, IMAGE_STYLE_PROMPTS["cartoon"])
    base = f"A single {word}, clearly visible and recognizable, educational flashcard style"
    return f"{base}, {style_prompt}, {', '.join(IMAGE_SPECIFICITY)}"
