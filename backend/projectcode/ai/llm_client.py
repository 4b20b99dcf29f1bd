import json
import logging
import re
from typing import Sequence, TypeVar

from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError

from projectcode.ai.media import media_content_part
from projectcode.core.config import settings
from projectcode.exceptions import CredentialRequiredError, FlowOutputError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def _extract_fenced_block(text: str) -> str | None:
    blocks = re.findall(r"```(?:json)?\s*(.*?)\s*```", text, re.DOTALL | re.IGNORECASE)
    return blocks[0].strip() if blocks else None


def _extract_balanced_json_span(text: str) -> str | None:
    """Best-effort extraction of the first balanced top-level JSON object/array."""
    if not text:
        return None

    starts = []
    first_obj = text.find("{")
    first_arr = text.find("[")
    if first_obj != -1:
        starts.append((first_obj, "{", "}"))
    if first_arr != -1:
        starts.append((first_arr, "[", "]"))
    if not starts:
        return None

    start_idx, open_ch, close_ch = min(starts, key=lambda x: x[0])
    depth = 0
    in_string = False
    escape = False
    for i in range(start_idx, len(text)):
        ch = text[i]
        if in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == open_ch:
            depth += 1
        elif ch == close_ch:
            depth -= 1
            if depth == 0:
                return text[start_idx:i + 1]
    return None


def _structured_text_candidates(raw_text: str) -> list[str]:
    text = (raw_text or "").strip()
    if not text:
        return []

    candidates: list[str] = []
    fenced = _extract_fenced_block(text)
    if fenced:
        candidates.append(fenced)

    candidates.append(text)

    balanced = _extract_balanced_json_span(text)
    if balanced:
        candidates.append(balanced)

    # Some models emit a leading "json" token before the object.
    if text.lower().startswith("json"):
        trimmed = text[4:].lstrip(": \n\r\t")
        if trimmed:
            candidates.append(trimmed)

    seen = set()
    unique: list[str] = []
    for candidate in candidates:
        c = candidate.strip()
        if not c or c in seen:
            continue
        seen.add(c)
        unique.append(c)
    return unique


def parse_structured_output(text_response: str, response_schema: type[T]) -> T:
    """Validate raw model text against `response_schema` or raise FlowOutputError."""
    parse_candidates = _structured_text_candidates(text_response)
    if not parse_candidates:
        raise FlowOutputError("Model returned empty content for structured response")
    parse_errors: list[str] = []
    for candidate in parse_candidates:
        try:
            parsed_data = json.loads(candidate, strict=False)
            return response_schema.model_validate(parsed_data)
        except (json.JSONDecodeError, ValidationError, ValueError) as candidate_error:
            parse_errors.append(str(candidate_error))
    raise FlowOutputError(
        "Unable to parse structured response: " + " | ".join(parse_errors[:3])
    )


class LLMClient:
    """Client for one OpenAI-compatible model endpoint, bound to one credential."""

    def __init__(
        self,
        api_key: str,
        model_name: str | None = None,
        base_url: str | None = None,
    ):
        self.model_name = model_name or settings.MODEL_DEFAULT
        self.client = AsyncOpenAI(
            base_url=base_url or settings.LLM_BASE_URL,
            api_key=api_key,
        )

    @staticmethod
    def _user_content(user_prompt: str, media: Sequence[str]) -> str | list[dict]:
        if not media:
            return user_prompt
        return [{"type": "text", "text": user_prompt}, *(media_content_part(uri) for uri in media)]

    async def generate_structured_with_usage(
        self,
        system_prompt: str,
        user_prompt: str,
        response_schema: type[T],
        media: Sequence[str] = (),
    ) -> tuple[T, int]:
        """
        Generate a response matching `response_schema` and report the tokens spent.

        The schema is injected into the system prompt; inline media (data URIs
        or image URLs) are attached to the user turn. One attempt only: any
        provider or parse failure propagates to the caller.
        """
        schema_json = json.dumps(response_schema.model_json_schema())
        augmented_system_prompt = (
            f"{system_prompt}\n\n"
            "CRITICAL: You must respond in ONLY valid JSON format matching the following JSON Schema. "
            "Do not include markdown code blocks (```json) or any conversational text around the JSON.\n\n"
            f"EXPECTED SCHEMA:\n{schema_json}"
        )

        logger.info("Issuing structured request to model %s (%s media part(s))", self.model_name, len(media))
        response = await self.client.chat.completions.create(
            model=self.model_name,
            messages=[
                {"role": "system", "content": augmented_system_prompt},
                {"role": "user", "content": self._user_content(user_prompt, media)},
            ],
        )

        if not getattr(response, "choices", None):
            logger.error("Received no choices from %s: %s", self.model_name, response)
            raise FlowOutputError(f"Provider {self.model_name} returned no output.")

        text_response = response.choices[0].message.content or ""
        try:
            result = parse_structured_output(text_response, response_schema)
        except FlowOutputError as e:
            logger.error("Error parsing structured response from %s: %s", self.model_name, e)
            raise

        usage = getattr(response, "usage", None)
        tokens_used = 0
        if usage is not None:
            tokens_used = int(getattr(usage, "prompt_tokens", 0) or 0) + int(
                getattr(usage, "completion_tokens", 0) or 0
            )
        logger.info("Received structured response from %s", self.model_name)
        return result, tokens_used

    async def generate_structured(
        self,
        system_prompt: str,
        user_prompt: str,
        response_schema: type[T],
        media: Sequence[str] = (),
    ) -> T:
        result, _ = await self.generate_structured_with_usage(
            system_prompt, user_prompt, response_schema, media=media
        )
        return result

    async def generate_speech(self, prompt: str, *, model_name: str | None = None, voice: str | None = None) -> bytes:
        """Return raw 16-bit mono 24 kHz PCM for `prompt`."""
        model = model_name or settings.MODEL_TTS
        logger.info("Issuing speech request to model %s", model)
        response = await self.client.audio.speech.create(
            model=model,
            voice=voice or settings.TTS_VOICE,
            input=prompt,
            response_format="pcm",
        )
        return response.content

    async def generate_image(self, prompt: str, *, model_name: str | None = None) -> str | None:
        """Return the generated image as a data URI, or None when no media came back."""
        model = model_name or settings.MODEL_IMAGE
        logger.info("Issuing image request to model %s", model)
        response = await self.client.images.generate(
            model=model,
            prompt=prompt,
            n=1,
            response_format="b64_json",
        )
        data = getattr(response, "data", None) or []
        if not data:
            return None
        image = data[0]
        if getattr(image, "b64_json", None):
            return f"data:image/png;base64,{image.b64_json}"
        return getattr(image, "url", None) or None


def create_llm_client(api_key: str | None, *, model_name: str | None = None, base_url: str | None = None) -> LLMClient:
    """The only way to obtain a client: fails before any network use when no credential is given."""
    key = (api_key or "").strip()
    if not key:
        raise CredentialRequiredError()
    return LLMClient(api_key=key, model_name=model_name, base_url=base_url)
