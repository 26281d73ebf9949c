"""Static metadata describing the trivia quiz service."""

APP_NAME = "Trivia Quiz"
APP_VERSION = "0.1.0"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "Trivia Quiz serves weighted multiple-choice questions from a Google Sheet, "
    "builds quizzes that add up to a target score, and scores the submitted answers."
)
HEALTH_MESSAGE = "Quiz backend is running"
