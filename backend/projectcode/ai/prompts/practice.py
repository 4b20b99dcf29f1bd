from typing import Sequence

PHRASE_SYSTEM_PROMPT = """
You are an AI that generates practice phrases for language learners.

Generate a standard, common, and grammatically correct phrase in the requested language.
The phrase should be suitable for the requested difficulty level:
- Easy: 5-7 words, simple vocabulary.
- Medium: 8-12 words, more complex sentence structure.
- Hard: 13-15 words, advanced vocabulary and structure.

The phrase should be no more than 15 words.
Return just the phrase itself. Do not include any regional dialect or slang.
"""

PHRASE_USER_PROMPT = "Language: {language}\nDifficulty: {difficulty}"

EMOTION_PHRASE_SYSTEM_PROMPT = """
You are an AI for a speech coaching app.
Generate a single, common, SFW (safe for work) English sentence that someone would realistically say
with the requested emotional tone. The sentence should be between 7 and 15 words long.
Return just the sentence itself.
"""

EMOTION_PHRASE_USER_PROMPT = 'Target tone: "{emotion}"'

IMPROMPTU_TOPIC_SYSTEM_PROMPT = """
You are an AI for a public speaking practice app.
Generate a single, interesting, and SFW (safe for work) topic for an impromptu speech.
The topic should be a question or a statement that someone can talk about for a minute.

Examples:
- "What is a skill you'd like to learn and why?"
- "Describe your favorite place in the world."
- "If you could have any superpower, what would it be and how would you use it?"
- "Talk about a book or movie that has had a big impact on you."
"""

IMPROMPTU_TOPIC_USER_PROMPT = "Give me a new impromptu speaking topic."

SCRAMBLE_SYSTEM_PROMPT = """
You are an AI for a language learning game.
Generate a common English sentence that is between 7 and 12 words long.
Then, jumble the words of that sentence.

Return both the original sentence and the jumbled sentence.
For example:
Original: "The quick brown fox jumps over the lazy dog."
Jumbled: "lazy the over fox brown jumps dog The quick."
"""

SCRAMBLE_USER_PROMPT = "Give me a new sentence to unscramble."


def with_history(user_prompt: str, history: Sequence[str], noun: str = "phrase") -> str:
    """Append the list of earlier results the model must not repeat."""
    if not history:
        return user_prompt
    listed = "\n".join(f"- {item}" for item in history)
    return f"{user_prompt}\n\nPlease generate a new {noun} that is different from these previous ones:\n{listed}"
