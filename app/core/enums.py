"""시험 유형 / 난이도 / 학생 상태 열거형과 표시용 매핑 테이블"""
from enum import Enum


class ExamType(str, Enum):
    HIRAGANA = "hiragana"
    KATAKANA = "katakana"
    VOCABULARY = "vocabulary"
    GRAMMAR = "grammar"
    KANJI = "kanji"


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class StudentStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    DISCONNECTED = "disconnected"


EXAM_TYPE_LABELS: dict[ExamType, str] = {
    ExamType.HIRAGANA: "ひらがな",
    ExamType.KATAKANA: "カタカナ",
    ExamType.VOCABULARY: "語彙 (Kosakata)",
    ExamType.GRAMMAR: "文法 (Tata Bahasa)",
    ExamType.KANJI: "漢字 (Kanji)",
}

DIFFICULTY_LABELS: dict[Difficulty, str] = {
    Difficulty.BEGINNER: "Siswa Baru",
    Difficulty.INTERMEDIATE: "Siswa Menengah",
    Difficulty.ADVANCED: "Siswa Akhir",
}

# 매핑 테이블은 모든 열거값을 빠짐없이 포함해야 함
assert set(EXAM_TYPE_LABELS) == set(ExamType), "EXAM_TYPE_LABELS 누락"
assert set(DIFFICULTY_LABELS) == set(Difficulty), "DIFFICULTY_LABELS 누락"


def get_type_label(exam_type: ExamType | str) -> str:
    """시험 유형 표시 이름 (알 수 없는 값은 그대로 반환)"""
    try:
        return EXAM_TYPE_LABELS[ExamType(exam_type)]
    except ValueError:
        return str(exam_type)


def get_difficulty_label(difficulty: Difficulty | str) -> str:
    """난이도 표시 이름"""
    try:
        return DIFFICULTY_LABELS[Difficulty(difficulty)]
    except ValueError:
        return str(difficulty)
