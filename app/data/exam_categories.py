"""시험 카테고리 정적 데이터"""
from app.core.enums import Difficulty, ExamType
from app.schemas.category import ExamCategory

# 카테고리를 찾을 수 없을 때 사용하는 기본 제한 시간 (분)
DEFAULT_TIME_LIMIT_MINUTES = 30
DEFAULT_TIME_LIMIT_MS = DEFAULT_TIME_LIMIT_MINUTES * 60 * 1000

B, I, A = Difficulty.BEGINNER, Difficulty.INTERMEDIATE, Difficulty.ADVANCED


def _category(id, name, description, type, difficulty, time_limit, question_count, chapters=None):
    return ExamCategory(
        id=id,
        name=name,
        description=description,
        type=type,
        difficulty=difficulty,
        chapters=chapters,
        time_limit=time_limit,
        question_count=question_count,
    )


def _chapters(start: int, end: int) -> list[str]:
    return [str(n) for n in range(start, end + 1)]


EXAM_CATEGORIES: list[ExamCategory] = [
    # Hiragana
    _category("hiragana-basic", "Hiragana Dasar", "Ujian hiragana untuk siswa baru (あ-の)", ExamType.HIRAGANA, B, 20, 15),
    _category("hiragana-intermediate", "Hiragana Menengah", "Ujian hiragana untuk siswa menengah (は-ん)", ExamType.HIRAGANA, I, 25, 20),
    _category("hiragana-advanced", "Hiragana Lengkap", "Ujian hiragana lengkap untuk siswa akhir", ExamType.HIRAGANA, A, 30, 30),
    # Katakana
    _category("katakana-basic", "Katakana Dasar", "Ujian katakana untuk siswa baru (ア-ノ)", ExamType.KATAKANA, B, 20, 15),
    _category("katakana-intermediate", "Katakana Menengah", "Ujian katakana untuk siswa menengah (ハ-ン)", ExamType.KATAKANA, I, 25, 20),
    _category("katakana-advanced", "Katakana Lengkap", "Ujian katakana lengkap untuk siswa akhir", ExamType.KATAKANA, A, 30, 30),
    # Vocabulary (챕터별)
    _category("vocabulary-ch1-2", "Kosakata Bab 1-2", "Kosakata dasar: salam, perkenalan, angka", ExamType.VOCABULARY, B, 25, 20, _chapters(1, 2)),
    _category("vocabulary-ch3-5", "Kosakata Bab 3-5", "Kosakata: tempat, waktu, kegiatan sehari-hari", ExamType.VOCABULARY, B, 30, 25, _chapters(3, 5)),
    _category("vocabulary-ch6-8", "Kosakata Bab 6-8", "Kosakata: makanan, minuman, berbelanja", ExamType.VOCABULARY, B, 30, 25, _chapters(6, 8)),
    _category("vocabulary-ch9-12", "Kosakata Bab 9-12", "Kosakata: hobi, keluarga, pekerjaan", ExamType.VOCABULARY, I, 35, 30, _chapters(9, 12)),
    _category("vocabulary-ch13-16", "Kosakata Bab 13-16", "Kosakata: keinginan, permintaan, cuaca", ExamType.VOCABULARY, I, 35, 30, _chapters(13, 16)),
    _category("vocabulary-ch17-20", "Kosakata Bab 17-20", "Kosakata: bentuk, warna, pengalaman", ExamType.VOCABULARY, I, 40, 35, _chapters(17, 20)),
    _category("vocabulary-ch21-25", "Kosakata Bab 21-25", "Kosakata: pendapat, rencana, kondisi", ExamType.VOCABULARY, A, 45, 40, _chapters(21, 25)),
    # Grammar (챕터별)
    _category("grammar-ch1-2", "Tata Bahasa Bab 1-2", "Grammar: です/である, ini/itu/apa", ExamType.GRAMMAR, B, 30, 20, _chapters(1, 2)),
    _category("grammar-ch3-5", "Tata Bahasa Bab 3-5", "Grammar: ada/tidak ada, kata kerja dasar", ExamType.GRAMMAR, B, 35, 25, _chapters(3, 5)),
    _category("grammar-ch6-8", "Tata Bahasa Bab 6-8", "Grammar: kata kerja transitif, objek", ExamType.GRAMMAR, B, 35, 25, _chapters(6, 8)),
    _category("grammar-ch9-12", "Tata Bahasa Bab 9-12", "Grammar: kata sifat, perbandingan", ExamType.GRAMMAR, I, 40, 30, _chapters(9, 12)),
    _category("grammar-ch13-16", "Tata Bahasa Bab 13-16", "Grammar: keinginan, kemampuan, permintaan", ExamType.GRAMMAR, I, 40, 30, _chapters(13, 16)),
    _category("grammar-ch17-20", "Tata Bahasa Bab 17-20", "Grammar: bentuk kasual, pengalaman", ExamType.GRAMMAR, I, 45, 35, _chapters(17, 20)),
    _category("grammar-ch21-25", "Tata Bahasa Bab 21-25", "Grammar: bentuk kondisional, rencana", ExamType.GRAMMAR, A, 50, 40, _chapters(21, 25)),
    # Kanji
    _category("kanji-basic", "Kanji Dasar N5", "Kanji dasar untuk level N5 (80 kanji)", ExamType.KANJI, B, 40, 30),
    _category("kanji-intermediate", "Kanji Menengah N5", "Kanji menengah untuk level N5", ExamType.KANJI, I, 45, 35),
    _category("kanji-advanced", "Kanji Lengkap N5", "Semua kanji N5 untuk ujian akhir", ExamType.KANJI, A, 60, 50),
]

_CATEGORIES_BY_ID: dict[str, ExamCategory] = {category.id: category for category in EXAM_CATEGORIES}


def get_exam_category(category_id: str) -> ExamCategory | None:
    return _CATEGORIES_BY_ID.get(category_id)


def get_time_limit_ms(category_id: str) -> int:
    """카테고리 제한 시간 (ms), 알 수 없는 카테고리는 기본값"""
    category = get_exam_category(category_id)
    return category.time_limit_ms if category else DEFAULT_TIME_LIMIT_MS
