from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_MONTHLY_DUE_AMOUNT
from .database.connection import DBConfig, DatabaseConnection
from .dues.mysql_payment_repository import MySQLPaymentRepository
from .dues.reconciler import DuesReconciler
from .dues.service import DuesService
from .expenses.mysql_expense_repository import MySQLExpenseRepository
from .expenses.service import ExpenseService
from .groups.mysql_group_repository import MySQLGroupRepository
from .groups.service import GroupService
from .identity.mysql_identity_repository import MySQLIdentityRepository
from .identity.service import AuthService
from .members.mysql_member_repository import MySQLMemberRepository
from .members.service import MemberService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    identities_repo: MySQLIdentityRepository
    members_repo: MySQLMemberRepository
    attendance_repo: MySQLAttendanceRepository
    payments_repo: MySQLPaymentRepository
    expenses_repo: MySQLExpenseRepository
    groups_repo: MySQLGroupRepository

    auth_service: AuthService
    member_service: MemberService
    attendance_service: AttendanceService
    dues_service: DuesService
    expense_service: ExpenseService
    group_service: GroupService

    def close(self) -> None:
        self.conn.close()


def build_container(*, db_config: dict, monthly_due_amount: Decimal = DEFAULT_MONTHLY_DUE_AMOUNT) -> Container:
    monthly_due_amount = Decimal(str(monthly_due_amount))
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    identities_repo = MySQLIdentityRepository(conn)
    members_repo = MySQLMemberRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    payments_repo = MySQLPaymentRepository(conn)
    expenses_repo = MySQLExpenseRepository(conn)
    groups_repo = MySQLGroupRepository(conn)

    return Container(
        conn=conn,
        identities_repo=identities_repo,
        members_repo=members_repo,
        attendance_repo=attendance_repo,
        payments_repo=payments_repo,
        expenses_repo=expenses_repo,
        groups_repo=groups_repo,
        auth_service=AuthService(identities_repo),
        member_service=MemberService(members_repo),
        attendance_service=AttendanceService(attendance_repo, members_repo, monthly_due_amount=monthly_due_amount),
        dues_service=DuesService(
            payments_repo,
            members_repo,
            reconciler=DuesReconciler(),
            monthly_due_amount=monthly_due_amount,
        ),
        expense_service=ExpenseService(expenses_repo),
        group_service=GroupService(groups_repo),
    )
