from fastapi import APIRouter

from projectcode.ai import analysis_flows, media_flows, practice_flows
from projectcode.ai.schemas import (
    AnalyzeAccentInput,
    AnalyzeAccentOutput,
    AnalyzeSpeechInput,
    AnalyzeSpeechOutput,
    AnalyzeStoryInput,
    AnalyzeStoryOutput,
    AnalyzeToneInput,
    AnalyzeToneOutput,
    GenerateAudioInput,
    GenerateAudioOutput,
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
    GenerateStoryImagesOutput,
    TranscribeAudioInput,
    TranscribeAudioOutput,
)
from projectcode.api.deps import ApiKeyDep, CurrentAdmin, CurrentUser

router = APIRouter(prefix="/flows", tags=["flows"])


@router.post("/analyze-accent", response_model=AnalyzeAccentOutput)
async def analyze_accent(body: AnalyzeAccentInput, api_key: ApiKeyDep, current_user: CurrentUser):
    return await analysis_flows.analyze_accent(body, api_key=api_key)


@router.post("/analyze-speech", response_model=AnalyzeSpeechOutput)
async def analyze_speech(body: AnalyzeSpeechInput, api_key: ApiKeyDep, current_user: CurrentUser):
    return await analysis_flows.analyze_speech(body, api_key=api_key)


@router.post("/analyze-story", response_model=AnalyzeStoryOutput)
async def analyze_story(body: AnalyzeStoryInput, api_key: ApiKeyDep, current_user: CurrentUser):
    return await analysis_flows.analyze_story(body, api_key=api_key)


@router.post("/analyze-tone", response_model=AnalyzeToneOutput)
async def analyze_tone(body: AnalyzeToneInput, api_key: ApiKeyDep, current_user: CurrentUser):
    return await analysis_flows.analyze_tone(body, api_key=api_key)


@router.post("/transcribe-audio", response_model=TranscribeAudioOutput)
async def transcribe_audio(body: TranscribeAudioInput, api_key: ApiKeyDep, current_user: CurrentUser):
    return await analysis_flows.transcribe_audio(body, api_key=api_key)


@router.post("/generate-phrase", response_model=GeneratePhraseOutput)
async def generate_phrase(body: GeneratePhraseInput, api_key: ApiKeyDep, current_user: CurrentUser):
    return await practice_flows.generate_phrase(body, api_key=api_key)


@router.post("/generate-emotion-phrase", response_model=GenerateEmotionPhraseOutput)
async def generate_emotion_phrase(body: GenerateEmotionPhraseInput, api_key: ApiKeyDep, current_user: CurrentUser):
    return await practice_flows.generate_emotion_phrase(body, api_key=api_key)


@router.post("/generate-impromptu-topic", response_model=GenerateImpromptuTopicOutput)
async def generate_impromptu_topic(
    api_key: ApiKeyDep, current_user: CurrentUser, body: GenerateImpromptuTopicInput | None = None
):
    return await practice_flows.generate_impromptu_topic(body, api_key=api_key)


@router.post(
    "/generate-scrambled-sentence", response_model=GenerateScrambledSentenceOutput
)
async def generate_scrambled_sentence(
    api_key: ApiKeyDep, current_user: CurrentUser, body: GenerateScrambledSentenceInput | None = None
):
    return await practice_flows.generate_scrambled_sentence(body, api_key=api_key)


@router.post("/generate-compound-code", response_model=GenerateCompoundCodeOutput)
async def generate_compound_code(body: GenerateCompoundCodeInput, api_key: ApiKeyDep, current_user: CurrentAdmin):
    return await practice_flows.generate_compound_code(body, api_key=api_key)


@router.post("/generate-audio", response_model=GenerateAudioOutput)
async def generate_audio(body: GenerateAudioInput, api_key: ApiKeyDep, current_user: CurrentUser):
    return await media_flows.generate_audio(body, api_key=api_key)


@router.post("/generate-story-images", response_model=GenerateStoryImagesOutput)
async def generate_story_images(api_key: ApiKeyDep, current_user: CurrentUser):
    return await media_flows.generate_story_images(api_key=api_key)
