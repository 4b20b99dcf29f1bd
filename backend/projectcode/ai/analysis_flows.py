import logging
import re

from projectcode.ai.base import BaseFlow
from projectcode.ai.prompts.analysis import (
    ACCENT_SYSTEM_PROMPT,
    ACCENT_USER_PROMPT,
    SPEECH_SYSTEM_PROMPT,
    SPEECH_USER_PROMPT,
    STORY_SYSTEM_PROMPT,
    STORY_USER_PROMPT,
    TONE_SYSTEM_PROMPT,
    TONE_USER_PROMPT,
    TRANSCRIBE_SYSTEM_PROMPT,
    TRANSCRIBE_USER_PROMPT,
)
from projectcode.ai.schemas import (
    AnalyzeAccentInput,
    AnalyzeAccentOutput,
    AnalyzeSpeechInput,
    AnalyzeSpeechOutput,
    AnalyzeStoryInput,
    AnalyzeStoryOutput,
    AnalyzeToneInput,
    AnalyzeToneOutput,
    TranscribeAudioInput,
    TranscribeAudioOutput,
)

logger = logging.getLogger(__name__)


def reference_words(text: str) -> list[str]:
    """Word tokens of a reference phrase, punctuation stripped."""
    return [w for w in (re.sub(r"^[^\w']+|[^\w']+$", "", tok) for tok in text.split()) if w]


class AnalyzeAccentFlow(BaseFlow[AnalyzeAccentInput, AnalyzeAccentOutput]):
    """Compares a recording against a reference phrase, word by word."""

    async def run(self, input_data: AnalyzeAccentInput) -> AnalyzeAccentOutput:
        analysis = await self.llm.generate_structured(
            system_prompt=ACCENT_SYSTEM_PROMPT,
            user_prompt=ACCENT_USER_PROMPT.format(reference_text=input_data.reference_text),
            response_schema=AnalyzeAccentOutput,
            media=[input_data.recorded_audio_data_uri],
        )

        expected = len(reference_words(input_data.reference_text))
        if len(analysis.detailed_feedback) != expected:
            logger.warning(
                "Accent analysis returned %s word entries for a %s-word reference",
                len(analysis.detailed_feedback),
                expected,
            )
        return analysis


class AnalyzeSpeechFlow(BaseFlow[AnalyzeSpeechInput, AnalyzeSpeechOutput]):
    """Full interview-practice analysis of a free-form answer on a topic."""

    async def run(self, input_data: AnalyzeSpeechInput) -> AnalyzeSpeechOutput:
        analysis, tokens = await self.llm.generate_structured_with_usage(
            system_prompt=SPEECH_SYSTEM_PROMPT,
            user_prompt=SPEECH_USER_PROMPT.format(topic=input_data.topic),
            response_schema=AnalyzeSpeechOutput,
            media=[input_data.audio_data_uri],
        )
        analysis.tokens_used = tokens
        return analysis


class AnalyzeStoryFlow(BaseFlow[AnalyzeStoryInput, AnalyzeStoryOutput]):
    async def run(self, input_data: AnalyzeStoryInput) -> AnalyzeStoryOutput:
        analysis, tokens = await self.llm.generate_structured_with_usage(
            system_prompt=STORY_SYSTEM_PROMPT,
            user_prompt=STORY_USER_PROMPT,
            response_schema=AnalyzeStoryOutput,
            media=[*input_data.image_urls, input_data.story_audio_data_uri],
        )
        analysis.tokens_used = tokens
        return analysis


class AnalyzeToneFlow(BaseFlow[AnalyzeToneInput, AnalyzeToneOutput]):
    async def run(self, input_data: AnalyzeToneInput) -> AnalyzeToneOutput:
        analysis, tokens = await self.llm.generate_structured_with_usage(
            system_prompt=TONE_SYSTEM_PROMPT,
            user_prompt=TONE_USER_PROMPT.format(phrase=input_data.phrase, emotion=input_data.emotion),
            response_schema=AnalyzeToneOutput,
            media=[input_data.recorded_audio_data_uri],
        )
        analysis.tokens_used = tokens
        return analysis


class TranscribeAudioFlow(BaseFlow[TranscribeAudioInput, TranscribeAudioOutput]):
    async def run(self, input_data: TranscribeAudioInput) -> TranscribeAudioOutput:
        result, tokens = await self.llm.generate_structured_with_usage(
            system_prompt=TRANSCRIBE_SYSTEM_PROMPT,
            user_prompt=TRANSCRIBE_USER_PROMPT,
            response_schema=TranscribeAudioOutput,
            media=[input_data.recorded_audio_data_uri],
        )
        result.tokens_used = tokens
        return result


async def analyze_accent(input_data: AnalyzeAccentInput, *, api_key: str | None) -> AnalyzeAccentOutput:
    return await AnalyzeAccentFlow(api_key).run(input_data)


async def analyze_speech(input_data: AnalyzeSpeechInput, *, api_key: str | None) -> AnalyzeSpeechOutput:
    return await AnalyzeSpeechFlow(api_key).run(input_data)


async def analyze_story(input_data: AnalyzeStoryInput, *, api_key: str | None) -> AnalyzeStoryOutput:
    return await AnalyzeStoryFlow(api_key).run(input_data)


async def analyze_tone(input_data: AnalyzeToneInput, *, api_key: str | None) -> AnalyzeToneOutput:
    return await AnalyzeToneFlow(api_key).run(input_data)


async def transcribe_audio(input_data: TranscribeAudioInput, *, api_key: str | None) -> TranscribeAudioOutput:
    return await TranscribeAudioFlow(api_key).run(input_data)
