"""시험 결과 CSV 내보내기 (요약 / 문항별 상세)"""
import csv
import io
from collections.abc import Sequence
from datetime import date, datetime

from app.schemas.exam_result import ExamResultResponse

SUMMARY_HEADERS = [
    "Student Name",
    "Exam Type",
    "Score",
    "Total Questions",
    "Percentage",
    "Time Spent (minutes)",
    "Completed At",
    "Status",
]

DETAIL_HEADERS = [
    "Student Name",
    "Exam Type",
    "Question",
    "Selected Answer",
    "Correct Answer",
    "Is Correct",
    "Completed At",
]


def _exam_type_text(result: ExamResultResponse) -> str:
    return result.exam_type.value.capitalize()


def _completed_at_text(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S")


def _percentage_text(result: ExamResultResponse) -> str:
    if result.total_questions == 0:
        return "0.0%"
    return f"{result.score / result.total_questions * 100:.1f}%"


def _to_csv(headers: list[str], rows: list[list[str]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(headers)
    writer.writerows(rows)
    return buffer.getvalue()


def export_summary_csv(results: Sequence[ExamResultResponse]) -> str:
    """학생별 요약 CSV"""
    rows = [
        [
            result.student_name,
            _exam_type_text(result),
            str(result.score),
            str(result.total_questions),
            _percentage_text(result),
            str(round(result.time_spent / 60000)),
            _completed_at_text(result.completed_at),
            "PASS" if result.passed else "FAIL",
        ]
        for result in results
    ]
    return _to_csv(SUMMARY_HEADERS, rows)


def export_detailed_csv(results: Sequence[ExamResultResponse]) -> str:
    """문항별 상세 CSV"""
    rows = []
    for result in results:
        for answer in result.answers:
            rows.append([
                result.student_name,
                _exam_type_text(result),
                answer.character or answer.question or answer.question_id,
                str(answer.selected_answer),
                str(answer.correct_answer),
                "YES" if answer.is_correct else "NO",
                _completed_at_text(result.completed_at),
            ])
    return _to_csv(DETAIL_HEADERS, rows)


def summary_filename(today: date | None = None) -> str:
    return f"exam_results_{(today or date.today()).isoformat()}.csv"


def detailed_filename(today: date | None = None) -> str:
    return f"detailed_exam_results_{(today or date.today()).isoformat()}.csv"
