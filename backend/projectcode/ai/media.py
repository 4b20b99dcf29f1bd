import base64
import binascii
import io
import re
import wave
from dataclasses import dataclass

from projectcode.exceptions import InvalidDataUriError

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)(?P<params>(?:;[\w-]+=[^;,]+)*);base64,(?P<data>.*)$", re.DOTALL)


@dataclass(frozen=True)
class InlineMedia:
    mime_type: str
    data: str  # base64 payload without the data: prefix

    @property
    def subtype(self) -> str:
        return self.mime_type.split("/", 1)[1].split("+", 1)[0]

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data)

    def to_data_uri(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


def parse_data_uri(uri: str) -> InlineMedia:
    """Split a `data:<mime>;base64,<payload>` URI and check the payload decodes."""
    match = _DATA_URI_RE.match((uri or "").strip())
    if not match:
        raise InvalidDataUriError("Expected a base64 data URI of the form 'data:<mimetype>;base64,<encoded_data>'")
    data = match.group("data").strip()
    try:
        base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidDataUriError(f"Data URI payload is not valid base64: {exc}") from exc
    return InlineMedia(mime_type=match.group("mime").lower(), data=data)


def to_data_uri(mime_type: str, payload: bytes) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(payload).decode('ascii')}"


def pcm_to_wav(pcm: bytes, *, channels: int = 1, rate: int = 24000, sample_width: int = 2) -> bytes:
    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as writer:
        writer.setnchannels(channels)
        writer.setsampwidth(sample_width)
        writer.setframerate(rate)
        writer.writeframes(pcm)
    return buffer.getvalue()


def media_content_part(uri: str) -> dict:
    """Build an OpenAI-style content part for an audio clip or an image."""
    if not uri.startswith("data:"):
        # Remote image URLs are passed through untouched.
        return {"type": "image_url", "image_url": {"url": uri}}

    media = parse_data_uri(uri)
    if media.mime_type.startswith("audio/"):
        return {
            "type": "input_audio",
            "input_audio": {"data": media.data, "format": media.subtype},
        }
    if media.mime_type.startswith("image/"):
        return {"type": "image_url", "image_url": {"url": media.to_data_uri()}}
    raise InvalidDataUriError(f"Unsupported media type: {media.mime_type}")
