from projectcode.ai.base import BaseFlow
from projectcode.ai.prompts.code import COMPOUND_CODE_SYSTEM_PROMPT, build_compound_code_prompt
from projectcode.ai.prompts.practice import (
    EMOTION_PHRASE_SYSTEM_PROMPT,
    EMOTION_PHRASE_USER_PROMPT,
    IMPROMPTU_TOPIC_SYSTEM_PROMPT,
    IMPROMPTU_TOPIC_USER_PROMPT,
    PHRASE_SYSTEM_PROMPT,
    PHRASE_USER_PROMPT,
    SCRAMBLE_SYSTEM_PROMPT,
    SCRAMBLE_USER_PROMPT,
    with_history,
)
from projectcode.ai.schemas import (
    GenerateCompoundCodeInput,
    GenerateCompoundCodeOutput,
    GenerateEmotionPhraseInput,
    GenerateEmotionPhraseOutput,
    GenerateImpromptuTopicInput,
    GenerateImpromptuTopicOutput,
    GeneratePhraseInput,
    GeneratePhraseOutput,
    GenerateScrambledSentenceInput,
    GenerateScrambledSentenceOutput,
)


class GeneratePhraseFlow(BaseFlow[GeneratePhraseInput, GeneratePhraseOutput]):
    """Practice phrase in a given language at a given difficulty."""

    async def run(self, input_data: GeneratePhraseInput) -> GeneratePhraseOutput:
        prompt = PHRASE_USER_PROMPT.format(language=input_data.language, difficulty=input_data.difficulty)
        return await self.llm.generate_structured(
            system_prompt=PHRASE_SYSTEM_PROMPT,
            user_prompt=with_history(prompt, input_data.history),
            response_schema=GeneratePhraseOutput,
        )


class GenerateEmotionPhraseFlow(BaseFlow[GenerateEmotionPhraseInput, GenerateEmotionPhraseOutput]):
    async def run(self, input_data: GenerateEmotionPhraseInput) -> GenerateEmotionPhraseOutput:
        prompt = EMOTION_PHRASE_USER_PROMPT.format(emotion=input_data.emotion)
        result, tokens = await self.llm.generate_structured_with_usage(
            system_prompt=EMOTION_PHRASE_SYSTEM_PROMPT,
            user_prompt=with_history(prompt, input_data.history, noun="sentence"),
            response_schema=GenerateEmotionPhraseOutput,
        )
        result.tokens_used = tokens
        return result


class GenerateImpromptuTopicFlow(BaseFlow[GenerateImpromptuTopicInput, GenerateImpromptuTopicOutput]):
    async def run(self, input_data: GenerateImpromptuTopicInput) -> GenerateImpromptuTopicOutput:
        result, tokens = await self.llm.generate_structured_with_usage(
            system_prompt=IMPROMPTU_TOPIC_SYSTEM_PROMPT,
            user_prompt=with_history(IMPROMPTU_TOPIC_USER_PROMPT, input_data.history, noun="topic"),
            response_schema=GenerateImpromptuTopicOutput,
        )
        result.tokens_used = tokens
        return result


class GenerateScrambledSentenceFlow(BaseFlow[GenerateScrambledSentenceInput, GenerateScrambledSentenceOutput]):
    async def run(self, input_data: GenerateScrambledSentenceInput) -> GenerateScrambledSentenceOutput:
        result, tokens = await self.llm.generate_structured_with_usage(
            system_prompt=SCRAMBLE_SYSTEM_PROMPT,
            user_prompt=with_history(SCRAMBLE_USER_PROMPT, input_data.history, noun="sentence"),
            response_schema=GenerateScrambledSentenceOutput,
        )
        result.tokens_used = tokens
        return result


class GenerateCompoundCodeFlow(BaseFlow[GenerateCompoundCodeInput, GenerateCompoundCodeOutput]):
    """Several related source files generated together for one feature."""

    async def run(self, input_data: GenerateCompoundCodeInput) -> GenerateCompoundCodeOutput:
        prompt = build_compound_code_prompt(
            input_data.description,
            input_data.technology,
            input_data.files,
            input_data.dependencies,
        )
        result, tokens = await self.llm.generate_structured_with_usage(
            system_prompt=COMPOUND_CODE_SYSTEM_PROMPT,
            user_prompt=prompt,
            response_schema=GenerateCompoundCodeOutput,
        )
        result.tokens_used = tokens
        return result


async def generate_phrase(input_data: GeneratePhraseInput, *, api_key: str | None) -> GeneratePhraseOutput:
    return await GeneratePhraseFlow(api_key).run(input_data)


async def generate_emotion_phrase(
    input_data: GenerateEmotionPhraseInput, *, api_key: str | None
) -> GenerateEmotionPhraseOutput:
    return await GenerateEmotionPhraseFlow(api_key).run(input_data)


async def generate_impromptu_topic(
    input_data: GenerateImpromptuTopicInput | None = None, *, api_key: str | None
) -> GenerateImpromptuTopicOutput:
    return await GenerateImpromptuTopicFlow(api_key).run(input_data or GenerateImpromptuTopicInput())


async def generate_scrambled_sentence(
    input_data: GenerateScrambledSentenceInput | None = None, *, api_key: str | None
) -> GenerateScrambledSentenceOutput:
    return await GenerateScrambledSentenceFlow(api_key).run(input_data or GenerateScrambledSentenceInput())


async def generate_compound_code(
    input_data: GenerateCompoundCodeInput, *, api_key: str | None
) -> GenerateCompoundCodeOutput:
    return await GenerateCompoundCodeFlow(api_key).run(input_data)
