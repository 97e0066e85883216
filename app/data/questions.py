"""기본 제공 문제 (DB에 해당 카테고리 문제가 없을 때 사용)

기본 제공 문제 ID에는 custom_ 접두사가 없으며 삭제할 수 없다.
"""
from app.core.enums import Difficulty, ExamType
from app.schemas.question import QuestionResponse

CUSTOM_QUESTION_PREFIX = "custom_"


def is_custom_question(question_id: str) -> bool:
    return question_id.startswith(CUSTOM_QUESTION_PREFIX)


def _kana(id, category, exam_type, character, options, correct_answer):
    return QuestionResponse(
        id=id,
        type=exam_type,
        category=category,
        character=character,
        options=options,
        correct_answer=correct_answer,
        difficulty=Difficulty.BEGINNER,
    )


def _text(id, category, exam_type, question, options, correct_answer, chapter=None):
    return QuestionResponse(
        id=id,
        type=exam_type,
        category=category,
        question=question,
        options=options,
        correct_answer=correct_answer,
        chapter=chapter,
        difficulty=Difficulty.BEGINNER,
    )


_VOWELS = ["a", "i", "u", "e"]
_K_ROW = ["ka", "ki", "ku", "ke"]
_S_ROW = ["sa", "shi", "su", "se"]

_HIRAGANA_BASIC_ROWS = [
    ("あ", _VOWELS, 0), ("い", _VOWELS, 1), ("う", _VOWELS, 2), ("え", _VOWELS, 3), ("お", ["o", "a", "i", "u"], 0),
    ("か", _K_ROW, 0), ("き", _K_ROW, 1), ("く", _K_ROW, 2), ("け", _K_ROW, 3), ("こ", ["ko", "ka", "ki", "ku"], 0),
    ("さ", _S_ROW, 0), ("し", _S_ROW, 1), ("す", _S_ROW, 2), ("せ", _S_ROW, 3), ("そ", ["so", "sa", "shi", "su"], 0),
]

HIRAGANA_BASIC_QUESTIONS: list[QuestionResponse] = [
    _kana(f"h_basic_{n}", "hiragana-basic", ExamType.HIRAGANA, character, list(options), correct)
    for n, (character, options, correct) in enumerate(_HIRAGANA_BASIC_ROWS, start=1)
]

VOCABULARY_CH1_2_QUESTIONS: list[QuestionResponse] = [
    _text("v_ch1_2_1", "vocabulary-ch1-2", ExamType.VOCABULARY, 'Apa arti dari "はじめまして"?',
          ["Selamat pagi", "Senang berkenalan", "Terima kasih", "Selamat malam"], 1, "1"),
    _text("v_ch1_2_2", "vocabulary-ch1-2", ExamType.VOCABULARY, 'Bagaimana cara mengatakan "mahasiswa" dalam bahasa Jepang?',
          ["せんせい", "がくせい", "かいしゃいん", "いしゃ"], 1, "1"),
    _text("v_ch1_2_3", "vocabulary-ch1-2", ExamType.VOCABULARY, 'Apa arti dari "これ"?',
          ["Itu (jauh)", "Ini", "Itu (dekat)", "Apa"], 1, "2"),
    _text("v_ch1_2_4", "vocabulary-ch1-2", ExamType.VOCABULARY, 'Bagaimana cara mengatakan "buku" dalam bahasa Jepang?',
          ["ほん", "ペン", "かみ", "つくえ"], 0, "2"),
    _text("v_ch1_2_5", "vocabulary-ch1-2", ExamType.VOCABULARY, 'Apa arti dari "すみません"?',
          ["Terima kasih", "Maaf/Permisi", "Selamat tinggal", "Tidak apa-apa"], 1, "1"),
]

GRAMMAR_CH1_2_QUESTIONS: list[QuestionResponse] = [
    _text("g_ch1_2_1", "grammar-ch1-2", ExamType.GRAMMAR, "Lengkapi kalimat: わたし___がくせいです。",
          ["は", "が", "を", "に"], 0, "1"),
    _text("g_ch1_2_2", "grammar-ch1-2", ExamType.GRAMMAR, 'Bentuk negatif dari "です" adalah:',
          ["ではありません", "じゃありません", "ではないです", "Semua benar"], 3, "1"),
    _text("g_ch1_2_3", "grammar-ch1-2", ExamType.GRAMMAR, "これ___ほんです。",
          ["は", "が", "を", "の"], 0, "2"),
    _text("g_ch1_2_4", "grammar-ch1-2", ExamType.GRAMMAR, 'Untuk menanyakan "apa ini?", kita menggunakan:',
          ["これはなんですか", "これはだれですか", "これはどこですか", "これはいつですか"], 0, "2"),
]

KANJI_BASIC_QUESTIONS: list[QuestionResponse] = [
    _text("k_basic_1", "kanji-basic", ExamType.KANJI, 'Bagaimana cara membaca kanji "人"?',
          ["ひと", "じん", "にん", "Semua benar"], 3),
    _text("k_basic_2", "kanji-basic", ExamType.KANJI, 'Apa arti dari kanji "日"?',
          ["Bulan", "Hari/Matahari", "Tahun", "Minggu"], 1),
    _text("k_basic_3", "kanji-basic", ExamType.KANJI, 'Bagaimana cara membaca "本"?',
          ["ほん", "もと", "ぼん", "A dan B benar"], 3),
    _text("k_basic_4", "kanji-basic", ExamType.KANJI, 'Apa arti dari "学生"?',
          ["Guru", "Mahasiswa", "Sekolah", "Belajar"], 1),
]

BUILTIN_QUESTIONS_BY_CATEGORY: dict[str, list[QuestionResponse]] = {
    "hiragana-basic": HIRAGANA_BASIC_QUESTIONS,
    "vocabulary-ch1-2": VOCABULARY_CH1_2_QUESTIONS,
    "grammar-ch1-2": GRAMMAR_CH1_2_QUESTIONS,
    "kanji-basic": KANJI_BASIC_QUESTIONS,
}


def get_builtin_questions(category: str) -> list[QuestionResponse]:
    return list(BUILTIN_QUESTIONS_BY_CATEGORY.get(category, []))


def get_all_builtin_questions(exam_type: ExamType | None = None) -> list[QuestionResponse]:
    questions = [q for qs in BUILTIN_QUESTIONS_BY_CATEGORY.values() for q in qs]
    if exam_type is not None:
        questions = [q for q in questions if q.type == exam_type]
    return questions
