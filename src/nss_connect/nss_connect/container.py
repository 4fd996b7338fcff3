from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_ledger_store import MySQLLedgerStore
from .attendance.repository import LedgerStore
from .attendance.service import LedgerService
from .auth.tokens import TokenService
from .core.constants import DEFAULT_TOKEN_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .events.service import EventService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService
from .volunteers.mysql_volunteer_repository import MySQLVolunteerQueryRepository
from .volunteers.repository import VolunteerQueryRepository
from .volunteers.service import VolunteerQueryService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    events_repo: EventRepository
    ledger_store: LedgerStore
    volunteer_queries: VolunteerQueryRepository

    token_service: TokenService
    auth_service: AuthService
    event_service: EventService
    ledger_service: LedgerService
    volunteer_query_service: VolunteerQueryService


def wire(
    *,
    users_repo: UserRepository,
    events_repo: EventRepository,
    ledger_store: LedgerStore,
    volunteer_queries: VolunteerQueryRepository,
    token_service: TokenService,
    conn: Optional[DatabaseConnection] = None,
    ledger_service: Optional[LedgerService] = None,
) -> Container:
    """Assemble services over the given repositories (MySQL in production, fakes in tests)."""

    return Container(
        conn=conn,
        users_repo=users_repo,
        events_repo=events_repo,
        ledger_store=ledger_store,
        volunteer_queries=volunteer_queries,
        token_service=token_service,
        auth_service=AuthService(users_repo, token_service),
        event_service=EventService(events_repo),
        ledger_service=ledger_service or LedgerService(ledger_store),
        volunteer_query_service=VolunteerQueryService(volunteer_queries),
    )


def build_container(
    *,
    db_config: dict,
    jwt_secret: str,
    jwt_algorithm: str = "HS256",
    jwt_expire_hours: int = DEFAULT_TOKEN_HOURS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        events_repo=MySQLEventRepository(conn),
        ledger_store=MySQLLedgerStore(conn),
        volunteer_queries=MySQLVolunteerQueryRepository(conn),
        token_service=TokenService(jwt_secret, algorithm=jwt_algorithm, expire_hours=jwt_expire_hours),
    )
