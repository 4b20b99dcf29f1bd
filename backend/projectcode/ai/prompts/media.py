SPEECH_PROMPT = "You are a voice actor. Read the following text in {language} with a {accent} accent: {text}"

STORY_IMAGE_PROMPTS = (
    "A mysterious, ancient key held in a gloved hand.",
    "A bustling, futuristic city street at night with flying vehicles.",
    "A serene, hidden waterfall in a lush, green forest.",
)

STORY_IMAGE_STYLE = "cinematic, high detail, photorealistic image: {prompt}"
