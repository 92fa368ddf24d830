APP_NAME = "Lead Generation Assessment API"
APP_VERSION = "1.0.0"
DEFAULT_CORS_ALLOW_ORIGINS = [
	"http://localhost",
	"http://127.0.0.1",
	"http://localhost:3000",
]
DEFAULT_TRUSTED_HOSTS = [
	"127.0.0.1",
	"localhost",
	"testserver",
]

DEFAULT_SITE = "halo"
DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DEFAULT_OPENAI_TIMEOUT_S = 30.0
DEFAULT_LOG_LEVEL = "INFO"

# Frontend model names -> provider model names.
MODEL_ALIASES = {
	"gpt-4o-mini": "gpt-4o-mini",
	"gpt-4.1-nano": "gpt-4o-mini",
}

DEFAULT_METHOD = "1"
INTERACTION_MODES = ("buttons", "conversation")
DEFAULT_INTERACTION_MODE = "buttons"
