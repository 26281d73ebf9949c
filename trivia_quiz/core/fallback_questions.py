"""Built-in question bank used when the spreadsheet cannot provide one."""

from __future__ import annotations

from trivia_quiz.constants.quiz_constants import EASY_SCORE, HARD_SCORE, MEDIUM_SCORE
from trivia_quiz.core.models import QuizQuestion


def _question(
    question_id: int, text: str, options: list[str], correct: int, score: int
) -> QuizQuestion:
    return QuizQuestion(
        id=question_id,
        question_text=text,
        options=tuple(options),
        correct_option_index=correct,
        score=score,
    )


FALLBACK_QUESTIONS: tuple[QuizQuestion, ...] = (
    _question(1, "What is the capital of France?", ["London", "Berlin", "Paris", "Madrid"], 2, EASY_SCORE),
    _question(
        2,
        "Which programming language is known for its use in web development and has a React library?",
        ["Python", "JavaScript", "Java", "C++"],
        1,
        MEDIUM_SCORE,
    ),
    _question(3, "What is 2 + 2?", ["3", "4", "5", "6"], 1, EASY_SCORE),
    _question(4, "Which planet is known as the Red Planet?", ["Venus", "Mars", "Jupiter", "Saturn"], 1, EASY_SCORE),
    _question(
        5,
        "What is the largest ocean on Earth?",
        ["Atlantic Ocean", "Indian Ocean", "Arctic Ocean", "Pacific Ocean"],
        3,
        EASY_SCORE,
    ),
    _question(
        6,
        "Who wrote 'Romeo and Juliet'?",
        ["Charles Dickens", "William Shakespeare", "Jane Austen", "Mark Twain"],
        1,
        MEDIUM_SCORE,
    ),
    _question(7, "What is the chemical symbol for gold?", ["Go", "Gd", "Au", "Ag"], 2, MEDIUM_SCORE),
    _question(8, "Which year did World War II end?", ["1944", "1945", "1946", "1947"], 1, MEDIUM_SCORE),
    _question(9, "What is the smallest prime number?", ["0", "1", "2", "3"], 2, EASY_SCORE),
    _question(
        10,
        "Which continent is the largest by area?",
        ["Africa", "Asia", "North America", "Europe"],
        1,
        EASY_SCORE,
    ),
    _question(
        11,
        "What is the speed of light in vacuum?",
        ["300,000 km/s", "150,000 km/s", "450,000 km/s", "600,000 km/s"],
        0,
        HARD_SCORE,
    ),
    _question(
        12,
        "Which HTML tag is used to create a hyperlink?",
        ["<link>", "<a>", "<href>", "<url>"],
        1,
        MEDIUM_SCORE,
    ),
    _question(13, "What is the square root of 144?", ["10", "11", "12", "13"], 2, EASY_SCORE),
    _question(
        14,
        "Who painted the Mona Lisa?",
        ["Pablo Picasso", "Vincent van Gogh", "Leonardo da Vinci", "Michelangelo"],
        2,
        MEDIUM_SCORE,
    ),
    _question(
        15,
        "What is the most abundant gas in Earth's atmosphere?",
        ["Oxygen", "Carbon Dioxide", "Nitrogen", "Hydrogen"],
        2,
        HARD_SCORE,
    ),
    _question(
        16,
        "In React, what hook is used to manage component state?",
        ["useEffect", "useState", "useContext", "useReducer"],
        1,
        MEDIUM_SCORE,
    ),
    _question(17, "What is the currency of Japan?", ["Yuan", "Won", "Yen", "Dong"], 2, EASY_SCORE),
    _question(
        18,
        "Which CSS property is used to change text color?",
        ["font-color", "text-color", "color", "background-color"],
        2,
        HARD_SCORE,
    ),
    _question(
        19,
        "What is the tallest mountain in the world?",
        ["K2", "Mount Everest", "Kangchenjunga", "Lhotse"],
        1,
        MEDIUM_SCORE,
    ),
    _question(
        20,
        "Which database query language is most commonly used?",
        ["NoSQL", "SQL", "GraphQL", "MongoDB"],
        1,
        HARD_SCORE,
    ),
)
