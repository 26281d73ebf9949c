"""Network configuration constants for the trivia quiz service."""

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 5000
DEFAULT_FRONTEND_URL: str = "http://localhost:5173"
DEFAULT_API_BASE_URL: str = "http://localhost:5000"
SESSION_COOKIE_NAME: str = "quiz.sid"
SESSION_MAX_AGE_SECONDS: int = 24 * 60 * 60
