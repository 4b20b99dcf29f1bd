import asyncio
import logging

from projectcode.ai.base import BaseFlow
from projectcode.ai.media import pcm_to_wav, to_data_uri
from projectcode.ai.prompts.media import SPEECH_PROMPT, STORY_IMAGE_PROMPTS, STORY_IMAGE_STYLE
from projectcode.ai.schemas import GenerateAudioInput, GenerateAudioOutput, GenerateStoryImagesOutput
from projectcode.exceptions import MediaMissingError

logger = logging.getLogger(__name__)


class GenerateAudioFlow(BaseFlow[GenerateAudioInput, GenerateAudioOutput]):
    """Text to speech; the PCM returned by the model is wrapped in a WAV container."""

    async def run(self, input_data: GenerateAudioInput) -> GenerateAudioOutput:
        prompt = SPEECH_PROMPT.format(
            language=input_data.language,
            accent=input_data.accent,
            text=input_data.text,
        )
        pcm = await self.llm.generate_speech(prompt)
        if not pcm:
            raise MediaMissingError("no media returned")
        return GenerateAudioOutput(audio_data_uri=to_data_uri("audio/wav", pcm_to_wav(pcm)))


class GenerateStoryImagesFlow(BaseFlow[None, GenerateStoryImagesOutput]):
    """
    Three storyteller prompt images, requested concurrently.

    All or nothing: if any request comes back without media the whole batch
    is rejected and no partial set is returned.
    """

    async def run(self, input_data: None = None) -> GenerateStoryImagesOutput:
        results = await asyncio.gather(
            *(self.llm.generate_image(STORY_IMAGE_STYLE.format(prompt=p)) for p in STORY_IMAGE_PROMPTS)
        )
        missing = [i for i, image in enumerate(results) if not image]
        if missing:
            logger.error("Image generation returned no media for prompt(s) %s", missing)
            raise MediaMissingError("Image generation failed for one of the prompts.")
        return GenerateStoryImagesOutput(images=list(results), tokens_used=0)


async def generate_audio(input_data: GenerateAudioInput, *, api_key: str | None) -> GenerateAudioOutput:
    return await GenerateAudioFlow(api_key).run(input_data)


async def generate_story_images(*, api_key: str | None) -> GenerateStoryImagesOutput:
    return await GenerateStoryImagesFlow(api_key).run()
