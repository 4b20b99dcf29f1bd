import json
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from projectcode.ai.analysis_flows import (
    AnalyzeAccentFlow,
    AnalyzeStoryFlow,
    analyze_accent,
    analyze_tone,
    reference_words,
    transcribe_audio,
)
from projectcode.ai.schemas import (
    AnalyzeAccentInput,
    AnalyzeAccentOutput,
    AnalyzeStoryInput,
    AnalyzeStoryOutput,
    AnalyzeToneInput,
    TranscribeAudioInput,
)
from projectcode.exceptions import CredentialRequiredError, FlowOutputError

AUDIO = "data:audio/webm;base64,AAAA"


def _openai_returning(payload: dict | str, prompt_tokens: int = 100, completion_tokens: int = 20):
    content = payload if isinstance(payload, str) else json.dumps(payload)
    mock_response = MagicMock()
    mock_response.choices = [MagicMock(message=MagicMock(content=content))]
    mock_response.usage = MagicMock(prompt_tokens=prompt_tokens, completion_tokens=completion_tokens)

    mock_completions = MagicMock()
    mock_completions.create = AsyncMock(return_value=mock_response)
    mock_client_instance = AsyncMock()
    mock_client_instance.chat = MagicMock(completions=mock_completions)
    return mock_client_instance, mock_completions


ACCENT_RESULT = {
    "overallAccuracy": 88,
    "detailedFeedback": [
        {"word": "The", "pronunciationAccuracy": 95, "errorDetails": "Clear."},
        {"word": "quick", "pronunciationAccuracy": 90, "errorDetails": "Good."},
        {"word": "brown", "pronunciationAccuracy": 80, "errorDetails": "Round the vowel more."},
        {"word": "fox", "pronunciationAccuracy": 86, "errorDetails": "Slightly short."},
    ],
    "suggestions": "Slow down a little.",
}


class AnalyzeAccentFlowTests(unittest.IsolatedAsyncioTestCase):
    async def test_accent_analysis_returns_one_entry_per_word(self):
        mock_client_instance, mock_completions = _openai_returning(ACCENT_RESULT)

        with patch("projectcode.ai.llm_client.AsyncOpenAI", return_value=mock_client_instance):
            result = await analyze_accent(
                AnalyzeAccentInput(recorded_audio_data_uri=AUDIO, reference_text="The quick brown fox"),
                api_key="user-key",
            )

        self.assertIsInstance(result, AnalyzeAccentOutput)
        self.assertEqual(len(result.detailed_feedback), 4)
        self.assertTrue(0 <= result.overall_accuracy <= 100)
        for entry in result.detailed_feedback:
            self.assertTrue(0 <= entry.pronunciation_accuracy <= 100)
        user_content = mock_completions.create.call_args.kwargs["messages"][1]["content"]
        self.assertIn("The quick brown fox", user_content[0]["text"])
        self.assertEqual(user_content[1]["type"], "input_audio")

    async def test_missing_credential_fails_before_any_network_use(self):
        with patch("projectcode.ai.llm_client.AsyncOpenAI") as mock_openai:
            with self.assertRaises(CredentialRequiredError):
                await analyze_accent(
                    AnalyzeAccentInput(recorded_audio_data_uri=AUDIO, reference_text="Hello there"),
                    api_key=None,
                )
        mock_openai.assert_not_called()

    async def test_word_count_mismatch_is_logged_not_rejected(self):
        short = dict(ACCENT_RESULT, detailedFeedback=ACCENT_RESULT["detailedFeedback"][:2])
        mock_client_instance, _ = _openai_returning(short)

        with patch("projectcode.ai.llm_client.AsyncOpenAI", return_value=mock_client_instance):
            flow = AnalyzeAccentFlow("user-key")
            with self.assertLogs("projectcode.ai.analysis_flows", level="WARNING"):
                result = await flow.run(
                    AnalyzeAccentInput(recorded_audio_data_uri=AUDIO, reference_text="The quick brown fox")
                )
        self.assertEqual(len(result.detailed_feedback), 2)

    async def test_out_of_range_score_is_a_flow_output_error(self):
        mock_client_instance, _ = _openai_returning(dict(ACCENT_RESULT, overallAccuracy=140))

        with patch("projectcode.ai.llm_client.AsyncOpenAI", return_value=mock_client_instance):
            with self.assertRaises(FlowOutputError):
                await analyze_accent(
                    AnalyzeAccentInput(recorded_audio_data_uri=AUDIO, reference_text="The quick brown fox"),
                    api_key="user-key",
                )


class AnalysisFlowUsageTests(unittest.IsolatedAsyncioTestCase):
    async def test_story_analysis_sends_images_then_audio(self):
        mock_client_instance, mock_completions = _openai_returning(
            {"relevanceScore": 72, "feedback": "Two of three images used.", "titleSuggestion": "The Long Walk"}
        )
        images = ["https://img/1.png", "https://img/2.png", "https://img/3.png"]

        with patch("projectcode.ai.llm_client.AsyncOpenAI", return_value=mock_client_instance):
            result = await AnalyzeStoryFlow("user-key").run(
                AnalyzeStoryInput(story_audio_data_uri=AUDIO, image_urls=images)
            )

        self.assertIsInstance(result, AnalyzeStoryOutput)
        self.assertEqual(result.tokens_used, 120)
        parts = mock_completions.create.call_args.kwargs["messages"][1]["content"][1:]
        self.assertEqual([p["type"] for p in parts], ["image_url"] * 3 + ["input_audio"])

    async def test_tone_analysis_reports_tokens(self):
        mock_client_instance, mock_completions = _openai_returning(
            {
                "consistencyScore": 64,
                "pitchAnalysis": "Flat.",
                "volumeAnalysis": "Steady.",
                "overallFeedback": "Add more energy.",
            },
            prompt_tokens=7,
            completion_tokens=3,
        )

        with patch("projectcode.ai.llm_client.AsyncOpenAI", return_value=mock_client_instance):
            result = await analyze_tone(
                AnalyzeToneInput(recorded_audio_data_uri=AUDIO, phrase="We won the game!", emotion="Excited"),
                api_key="user-key",
            )

        self.assertEqual(result.tokens_used, 10)
        prompt = mock_completions.create.call_args.kwargs["messages"][1]["content"][0]["text"]
        self.assertIn("Excited", prompt)

    async def test_transcription(self):
        mock_client_instance, _ = _openai_returning({"transcript": "hello world"})

        with patch("projectcode.ai.llm_client.AsyncOpenAI", return_value=mock_client_instance):
            result = await transcribe_audio(TranscribeAudioInput(recorded_audio_data_uri=AUDIO), api_key="k")

        self.assertEqual(result.transcript, "hello world")


def test_reference_words_strips_punctuation():
    assert reference_words("Hello, world! It's   fine.") == ["Hello", "world", "It's", "fine"]
