from __future__ import annotations

from dataclasses import dataclass

from .clients.mysql_client_repository import MySQLClientRepository
from .database.connection import DBConfig, DatabaseConnection
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.service import HolidayService
from .legal_docs.mysql_legal_doc_repository import MySQLLegalDocumentRepository
from .legal_docs.service import LegalDocumentService
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.service import NotificationService
from .scheduling.mysql_schedule_repository import MySQLScheduleEventRepository, MySQLScheduleTemplateRepository
from .scheduling.service import ComplianceScheduleService, TrainingCalendarService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    users_repo: MySQLUserRepository
    clients_repo: MySQLClientRepository
    holidays_repo: MySQLHolidayRepository
    legal_docs_repo: MySQLLegalDocumentRepository
    notifications_repo: MySQLNotificationRepository
    templates_repo: MySQLScheduleTemplateRepository
    events_repo: MySQLScheduleEventRepository

    auth_service: AuthService
    holiday_service: HolidayService
    notification_service: NotificationService
    legal_doc_service: LegalDocumentService
    schedule_service: ComplianceScheduleService
    training_calendar_service: TrainingCalendarService

    default_count_per_title: int = 4


def build_container(*, db_config: dict, default_count_per_title: int = 4) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
        connect_timeout=int(db_config.get("connect_timeout", 10)),
    )
    conn = DatabaseConnection.get_instance(config)

    users_repo = MySQLUserRepository(conn)
    clients_repo = MySQLClientRepository(conn)
    holidays_repo = MySQLHolidayRepository(conn)
    legal_docs_repo = MySQLLegalDocumentRepository(conn)
    notifications_repo = MySQLNotificationRepository(conn)
    templates_repo = MySQLScheduleTemplateRepository(conn)
    events_repo = MySQLScheduleEventRepository(conn)

    auth_service = AuthService(users_repo)
    holiday_service = HolidayService(holidays_repo, clients_repo)
    notification_service = NotificationService(notifications_repo, legal_docs_repo)
    legal_doc_service = LegalDocumentService(legal_docs_repo, clients_repo, notification_service)
    schedule_service = ComplianceScheduleService(templates_repo, events_repo, holiday_service, clients_repo)
    training_calendar_service = TrainingCalendarService(templates_repo, holiday_service, clients_repo)

    return Container(
        conn=conn,
        users_repo=users_repo,
        clients_repo=clients_repo,
        holidays_repo=holidays_repo,
        legal_docs_repo=legal_docs_repo,
        notifications_repo=notifications_repo,
        templates_repo=templates_repo,
        events_repo=events_repo,
        auth_service=auth_service,
        holiday_service=holiday_service,
        notification_service=notification_service,
        legal_doc_service=legal_doc_service,
        schedule_service=schedule_service,
        training_calendar_service=training_calendar_service,
        default_count_per_title=int(default_count_per_title),
    )
