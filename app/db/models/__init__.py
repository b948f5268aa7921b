"""Database models package."""
from app.db.models.achievement import StudentAchievement
from app.db.models.practice_session import PracticeSession
from app.db.models.student import Student
from app.db.models.word_progress import WordProgress

__all__ = [
    "PracticeSession",
    "Student",
    "StudentAchievement",
    "WordProgress",
]
