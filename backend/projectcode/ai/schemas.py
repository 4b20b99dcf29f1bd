from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

LANGUAGES: dict[str, list[str]] = {
    "English": ["American", "British", "Indian", "Australian"],
    "Spanish": ["Spain", "Mexican"],
    "French": ["France", "Canadian"],
    "German": ["Germany"],
}

Difficulty = Literal["Easy", "Medium", "Hard"]
Emotion = Literal["Happy", "Sad", "Angry", "Excited", "Formal", "Calm"]


class FlowModel(BaseModel):
    """Wire models use camelCase; Python code uses snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Accent analysis

class AnalyzeAccentInput(FlowModel):
    recorded_audio_data_uri: str = Field(
        description="The user recorded audio as a data URI: 'data:<mimetype>;base64,<encoded_data>'."
    )
    reference_text: str = Field(min_length=1, description="The original phrase for comparison.")


class WordFeedback(FlowModel):
    word: str = Field(description="The word being analyzed.")
    pronunciation_accuracy: float = Field(ge=0, le=100, description="Pronunciation accuracy score (0-100) for the word.")
    error_details: str = Field(description="Specific feedback on pronunciation errors and suggestions.")


class AnalyzeAccentOutput(FlowModel):
    overall_accuracy: float = Field(ge=0, le=100, description="Overall accuracy score (0-100) of the user's pronunciation.")
    detailed_feedback: list[WordFeedback] = Field(description="Detailed feedback for each word in the phrase.")
    suggestions: str = Field(description="General suggestions for improving accent.")


# Free speech analysis (interview practice)

class AnalyzeSpeechInput(FlowModel):
    audio_data_uri: str = Field(description="Recorded user speech as a data URI (e.g., data:audio/webm;base64,...)")
    topic: str = Field(min_length=1, description="The prompt/topic the user was asked to speak about.")


class GrammarMistake(FlowModel):
    mistake: str
    explanation: str
    correction: str


class GrammarAnalysis(FlowModel):
    corrected_text: str
    accuracy: float = Field(ge=0, le=100)
    mistakes: list[GrammarMistake]


class PronunciationAnalysis(FlowModel):
    overall_accuracy: float = Field(ge=0, le=100)
    detailed_feedback: list[WordFeedback]
    suggestions: str
    accent_notes: str | None = None


class TopicalityAnalysis(FlowModel):
    adherence: float = Field(ge=0, le=100, description="How well the user stuck to the given topic.")
    explanation: str
    missed_points: list[str] | None = None
    strong_points: list[str] | None = None


class DeliveryAnalysis(FlowModel):
    words_per_minute: float | None = None
    filler_words: list[str] | None = None
    structure_feedback: str | None = None
    pacing_feedback: str | None = None


class RoadmapSection(FlowModel):
    title: str
    steps: list[str]


class AnalyzeSpeechOutput(FlowModel):
    transcript: str = Field(description="Best-effort transcript derived from audio.")
    grammar: GrammarAnalysis
    pronunciation: PronunciationAnalysis
    topicality: TopicalityAnalysis
    delivery: DeliveryAnalysis
    summary: str
    improvement_roadmap: list[RoadmapSection]
    tokens_used: int | None = None


# Storyteller

class AnalyzeStoryInput(FlowModel):
    story_audio_data_uri: str = Field(description="The user's recorded story as a data URI.")
    image_urls: list[str] = Field(
        min_length=3, max_length=3, description="The three images that were the prompt for the story."
    )


class AnalyzeStoryOutput(FlowModel):
    relevance_score: float = Field(ge=0, le=100, description="How well the story connects to the provided images (0-100).")
    feedback: str = Field(description="Constructive feedback on how well the story incorporates the images.")
    title_suggestion: str = Field(description="A creative title suggestion for the story.")
    tokens_used: int | None = None


# Tone

class AnalyzeToneInput(FlowModel):
    recorded_audio_data_uri: str = Field(description="The user's recorded audio as a data URI.")
    phrase: str = Field(min_length=1, description="The phrase the user was asked to say.")
    emotion: Emotion = Field(description="The target emotion the user was trying to convey.")


class AnalyzeToneOutput(FlowModel):
    consistency_score: float = Field(ge=0, le=100, description="How well the tone matched the target emotion (0-100).")
    pitch_analysis: str = Field(description="Feedback on the user's pitch and intonation.")
    volume_analysis: str = Field(description="Feedback on the user's volume and dynamics.")
    overall_feedback: str = Field(description="Holistic feedback and suggestions for improvement.")
    tokens_used: int | None = None


# Transcription

class TranscribeAudioInput(FlowModel):
    recorded_audio_data_uri: str = Field(description="The user's recorded audio as a data URI.")


class TranscribeAudioOutput(FlowModel):
    transcript: str = Field(description="The transcribed text of the provided audio.")
    tokens_used: int | None = None


# Prompt generators

class HistoryInput(FlowModel):
    history: list[str] = Field(
        default_factory=list, description="Previously generated items to avoid repeating."
    )


class GeneratePhraseInput(HistoryInput):
    language: str = Field(description="The language for the practice phrase.")
    difficulty: Difficulty = Field(description="The difficulty level of the phrase.")

    @field_validator("language")
    @classmethod
    def _known_language(cls, value: str) -> str:
        if value not in LANGUAGES:
            raise ValueError(f"Unsupported language '{value}'. Choose one of: {', '.join(LANGUAGES)}")
        return value


class GeneratePhraseOutput(FlowModel):
    phrase: str = Field(description="The generated practice phrase.")


class GenerateEmotionPhraseInput(HistoryInput):
    emotion: Emotion = Field(description="The target emotion for the phrase.")


class GenerateEmotionPhraseOutput(FlowModel):
    phrase: str = Field(description="A sentence that is commonly said with the specified emotion.")
    tokens_used: int | None = None


class GenerateImpromptuTopicInput(HistoryInput):
    pass


class GenerateImpromptuTopicOutput(FlowModel):
    topic: str = Field(description="A random, engaging topic for an impromptu speech.")
    tokens_used: int | None = None


class GenerateScrambledSentenceInput(HistoryInput):
    pass


class GenerateScrambledSentenceOutput(FlowModel):
    original: str = Field(description="The original, correct sentence.")
    jumbled: str = Field(description="The jumbled version of the sentence.")
    tokens_used: int | None = None


# Compound code generation (admin tool)

class RequestedFile(FlowModel):
    name: str = Field(description="The file name (e.g., 'Login.tsx').")
    type: str = Field(description="The file type or purpose (e.g., 'component', 'service').")
    description: str = Field(description="What this specific file should contain.")


class GenerateCompoundCodeInput(FlowModel):
    description: str = Field(min_length=1, description="What code needs to be generated.")
    technology: str = Field(min_length=1, description="The technology stack or framework.")
    files: list[RequestedFile] = Field(min_length=1, description="Files to generate.")
    dependencies: list[str] = Field(default_factory=list, description="Libraries that should be used.")


class CodeFile(FlowModel):
    file_name: str = Field(description="The name of the file.")
    file_path: str = Field(description="The relative path where this file should be placed.")
    content: str = Field(description="The complete code content for this file.")
    language: str = Field(description="The programming language (e.g., 'typescript').")
    description: str = Field(description="A brief description of what this file does.")


class GenerateCompoundCodeOutput(FlowModel):
    files: list[CodeFile] = Field(description="The generated code files.")
    setup_instructions: str = Field(description="Instructions for setting up and integrating these files.")
    dependencies: list[str] = Field(description="Dependencies that need to be installed.")
    tokens_used: int | None = Field(default=None, description="Tokens used to generate the code.")


# Text to speech

class GenerateAudioInput(FlowModel):
    text: str = Field(min_length=1, description="The text to convert to audio.")
    language: str = Field(description="The language of the text.")
    accent: str = Field(description="The accent for the generated audio.")

    @model_validator(mode="after")
    def _known_accent(self) -> "GenerateAudioInput":
        accents = LANGUAGES.get(self.language)
        if accents is None:
            raise ValueError(f"Unsupported language '{self.language}'")
        if self.accent not in accents:
            raise ValueError(f"Accent '{self.accent}' is not available for {self.language}")
        return self


class GenerateAudioOutput(FlowModel):
    audio_data_uri: str = Field(description="The generated audio as a data URI in WAV format.")


# Story images

class GenerateStoryImagesOutput(FlowModel):
    images: list[str] = Field(min_length=3, max_length=3, description="Three image data URIs or URLs.")
    tokens_used: int | None = None
