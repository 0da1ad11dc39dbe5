from __future__ import annotations

from datetime import date

import pytest
from werkzeug.security import check_password_hash

from src.membership_system.membership_system.core.enums import MemberStatus, Role, ServerLevel
from src.membership_system.membership_system.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.membership_system.membership_system.members.service import MemberService, full_years_between
from tests.fakes import InMemoryMembers, member


@pytest.fixture
def repo():
    return InMemoryMembers(
        [
            member(
                1,
                "Dela Cruz",
                "Juan Carlos",
                email="juan@example.org",
                server_level=ServerLevel.SENIOR,
                date_joined=date(2019, 8, 1),
                birthdate=date(2005, 6, 20),
            ),
            member(2, "Santos", "Maria Luisa", server_level=ServerLevel.SENIOR_SERVER),
            member(3, "Reyes", "Paolo", membership_status=MemberStatus.INACTIVE),
        ]
    )


@pytest.fixture
def svc(repo):
    return MemberService(repo)


def test_full_years_counts_only_passed_anniversaries():
    assert full_years_between(date(2005, 6, 20), date(2025, 6, 19)) == 19
    assert full_years_between(date(2005, 6, 20), date(2025, 6, 20)) == 20


def test_profile_derives_age_service_and_level(svc):
    profile = svc.get_profile(1, today=date(2025, 6, 15))

    assert profile.age == 19
    assert profile.years_of_service == 5
    assert profile.service_level == "Junior"
    assert profile.to_dict()["birthdate"] == "2005-06-20"


def test_profile_without_dates(svc):
    profile = svc.get_profile("2", today=date(2025, 6, 15))

    assert profile.age is None
    assert profile.years_of_service is None
    assert profile.service_level == "Senior Server"


def test_years_of_service_never_negative(repo):
    repo.create_member(
        surname="Lim",
        given_name="Ana",
        email=None,
        password_hash=None,
        server_level=ServerLevel.JUNIOR,
        date_joined=date(2026, 1, 1),
        birthdate=None,
    )
    profile = MemberService(repo).get_profile(4, today=date(2025, 6, 15))

    assert profile.years_of_service == 0
    assert profile.service_level == "Neophyte"


def test_get_member_errors(svc):
    with pytest.raises(ValidationError):
        svc.get_member(None)
    with pytest.raises(ValidationError):
        svc.get_member("abc")
    with pytest.raises(NotFoundError):
        svc.get_member(404)


def test_list_filters_by_status(svc):
    assert [m.id for m in svc.list_members(status=MemberStatus.ACTIVE)] == [1, 2]
    assert [m.id for m in svc.list_members(status=MemberStatus.INACTIVE)] == [3]
    assert len(svc.list_members()) == 3


def test_create_member_hashes_password(svc, repo):
    member_id = svc.create_member(
        current_role=Role.ADMIN,
        surname=" Lim ",
        given_name="Ana",
        email=" Ana@Example.org ",
        password="secret1",
    )

    created = repo.get_by_id(member_id)
    assert created.surname == "Lim"
    assert created.email == "ana@example.org"
    assert check_password_hash(created.password_hash, "secret1")


def test_create_member_validation(svc):
    with pytest.raises(AuthorizationError):
        svc.create_member(current_role=Role.MEMBER, surname="Lim", given_name="Ana")
    with pytest.raises(ValidationError):
        svc.create_member(current_role=Role.ADMIN, surname="  ", given_name="Ana")
    with pytest.raises(ValidationError, match="already registered"):
        svc.create_member(current_role=Role.ADMIN, surname="Lim", given_name="Ana", email="JUAN@example.org")
    with pytest.raises(ValidationError):
        svc.create_member(current_role=Role.ADMIN, surname="Lim", given_name="Ana", password="123")


def test_delete_member_is_admin_only(svc, repo):
    with pytest.raises(AuthorizationError):
        svc.delete_member(current_role=Role.MEMBER, member_id=2)

    deleted = svc.delete_member(current_role=Role.ADMIN, member_id=2)

    assert deleted.surname == "Santos"
    assert repo.get_by_id(2) is None
    with pytest.raises(NotFoundError):
        svc.delete_member(current_role=Role.ADMIN, member_id=2)


def test_set_status(svc, repo):
    svc.set_status(current_role=Role.ADMIN, member_id=3, status=MemberStatus.ACTIVE)

    assert repo.get_by_id(3).is_active


def test_set_status_requires_admin(svc, repo):
    with pytest.raises(AuthorizationError):
        svc.set_status(current_role=Role.MEMBER, member_id=1, status=MemberStatus.INACTIVE)
    with pytest.raises(NotFoundError):
        svc.set_status(current_role=Role.ADMIN, member_id=404, status=MemberStatus.INACTIVE)
    assert repo.get_by_id(1).is_active
    assert repo.get_by_id(1).email == "juan@example.org"
