"""Quiz-related constants shared across the core and API layers."""

DEFAULT_TARGET_SCORE: int = 100
DEFAULT_QUESTION_COUNT: int = 10
DEFAULT_CACHE_TTL_SECONDS: int = 5 * 60

EASY_SCORE: int = 5
MEDIUM_SCORE: int = 10
HARD_SCORE: int = 20
DEFAULT_SCORE: int = MEDIUM_SCORE

TIER_EASY: str = "easy"
TIER_MEDIUM: str = "medium"
TIER_HARD: str = "hard"
TIER_OTHER: str = "other"
TIER_ORDER: tuple[str, ...] = (TIER_EASY, TIER_MEDIUM, TIER_HARD)
TIER_BY_SCORE: dict[int, str] = {
    EASY_SCORE: TIER_EASY,
    MEDIUM_SCORE: TIER_MEDIUM,
    HARD_SCORE: TIER_HARD,
}
SCORE_BY_DIFFICULTY: dict[str, int] = {tier: score for score, tier in TIER_BY_SCORE.items()}
