from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .chat.providers import GeminiProvider, OpenRouterProvider
from .chat.service import ChatService
from .common.tasks import ExternalTaskRunner
from .core.constants import DEFAULT_EXTERNAL_TIMEOUT_SECONDS
from .core.enums import ChatModel
from .database.connection import DBConfig, DatabaseConnection
from .files.mysql_file_repository import MySQLFileRepository
from .files.service import FileService
from .leaderboard.mysql_leaderboard_repository import MySQLLeaderboardRepository
from .leaderboard.service import LeaderboardService
from .payments.mysql_payment_repository import MySQLPaymentRepository
from .payments.renderer import PillowReceiptRenderer
from .payments.service import PaymentService
from .presence.mysql_presence_repository import MySQLPresenceRepository
from .presence.service import PresenceService
from .quizzes.mysql_quiz_repository import MySQLQuizRepository
from .quizzes.service import QuizService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.photos import StaticPhotoLookup
from .students.service import StudentService


@dataclass(frozen=True)
class Container:
    student_service: StudentService
    presence_service: PresenceService
    leaderboard_service: LeaderboardService
    payment_service: PaymentService
    quiz_service: QuizService
    file_service: FileService
    chat_service: ChatService

    receipts_dir: Path
    runner: ExternalTaskRunner
    render_runner: ExternalTaskRunner

    conn: Optional[DatabaseConnection] = None


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    """Wire MySQL repositories, renderers and AI providers from a settings module."""

    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    timeout = float(getattr(settings, "EXTERNAL_TIMEOUT_SECONDS", DEFAULT_EXTERNAL_TIMEOUT_SECONDS))
    # Separate pools: hung AI calls must not starve receipt rendering.
    runner = ExternalTaskRunner(max_workers=4, timeout_seconds=timeout, name="chat")
    render_runner = ExternalTaskRunner(max_workers=2, timeout_seconds=timeout, name="receipts")
    receipts_dir = Path(getattr(settings, "RECEIPTS_DIR", "receipts")).resolve()

    students_repo = MySQLStudentRepository(conn)
    presence_repo = MySQLPresenceRepository(conn)
    leaderboard_repo = MySQLLeaderboardRepository(conn)
    payments_repo = MySQLPaymentRepository(conn)
    quizzes_repo = MySQLQuizRepository(conn)
    files_repo = MySQLFileRepository(conn)

    renderer = PillowReceiptRenderer(
        receipts_dir,
        center_name=getattr(settings, "CENTER_NAME", "FCC The Gurukul"),
        center_address=getattr(settings, "CENTER_ADDRESS", ""),
        logo_path=getattr(settings, "RECEIPT_LOGO_PATH", None),
    )
    providers = {
        ChatModel.GEMINI: GeminiProvider(
            api_key=getattr(settings, "GEMINI_API_KEY", ""),
            model=getattr(settings, "GEMINI_MODEL", "gemini-pro"),
            timeout_seconds=timeout,
        ),
        ChatModel.DEEPSEEK: OpenRouterProvider(
            api_key=getattr(settings, "OPENROUTER_API_KEY", ""),
            model=getattr(settings, "OPENROUTER_MODEL", "deepseek/deepseek-r1:free"),
            timeout_seconds=timeout,
        ),
    }

    return Container(
        student_service=StudentService(
            students_repo,
            photos=StaticPhotoLookup.from_json(getattr(settings, "STUDENT_PHOTOS", None)),
        ),
        presence_service=PresenceService(presence_repo),
        leaderboard_service=LeaderboardService(leaderboard_repo, students_repo),
        payment_service=PaymentService(
            payments_repo,
            renderer,
            runner=render_runner,
            profile_url_template=getattr(settings, "STUDENT_PROFILE_URL", "{fcc_id}"),
        ),
        quiz_service=QuizService(quizzes_repo),
        file_service=FileService(files_repo),
        chat_service=ChatService(providers, runner),
        receipts_dir=receipts_dir,
        runner=runner,
        render_runner=render_runner,
        conn=conn,
    )
