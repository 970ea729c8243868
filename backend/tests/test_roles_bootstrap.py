"""Tests for role management and the first-admin bootstrap."""
import threading

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from catalog.bootstrap import FileFlagStore, MemoryFlagStore, RoleBootstrap
from catalog.database import Base, enable_sqlite_foreign_keys
from catalog.errors import AuthorizationDenied, NotFound
from catalog.models.enums import AppRole
from catalog.models.user import UserRole
from catalog.services.auth import AuthService
from catalog.services.roles import RoleService


class TestRoleService:
    def test_new_user_has_user_role_only(self, db, test_user):
        roles = RoleService(db)
        assert roles.has_role(test_user.id, AppRole.USER)
        assert not roles.is_admin(test_user.id)

    def test_initial_admin_only_while_none_exists(self, db, test_user):
        roles = RoleService(db)
        roles.grant_initial_admin(test_user.id)
        assert roles.is_admin(test_user.id)

        other = AuthService(db).create_user("second", "secret1")
        with pytest.raises(AuthorizationDenied):
            roles.grant_initial_admin(other.id)

    def test_grant_and_revoke(self, db, admin_user, test_user):
        roles = RoleService(db)
        roles.grant(test_user.id, AppRole.ADMIN)
        assert [u.username for u in roles.list_admins()] == ["adminuser", "testuser"]

        roles.revoke(test_user.id, AppRole.ADMIN)
        assert not roles.is_admin(test_user.id)

    def test_last_admin_cannot_be_revoked(self, db, admin_user):
        with pytest.raises(AuthorizationDenied):
            RoleService(db).revoke(admin_user.id, AppRole.ADMIN)

    def test_revoke_missing_role(self, db, test_user):
        with pytest.raises(NotFound):
            RoleService(db).revoke(test_user.id, AppRole.ADMIN)

    def test_grant_unknown_user(self, db):
        with pytest.raises(NotFound):
            RoleService(db).grant(404, AppRole.ADMIN)


class TestRoleBootstrap:
    def test_first_user_becomes_admin_and_flag_is_set(self, db, test_user):
        flags = MemoryFlagStore()
        assert RoleBootstrap(db, flags).attempt(test_user.id) is True
        assert RoleService(db).is_admin(test_user.id)
        assert flags.get() == test_user.id

    def test_rejection_is_swallowed_and_flag_still_set(self, db, admin_user, test_user):
        flags = MemoryFlagStore()
        assert RoleBootstrap(db, flags).attempt(test_user.id) is False
        assert not RoleService(db).is_admin(test_user.id)
        assert flags.get() == test_user.id

    def test_flag_suppresses_repeat_attempts(self, db, test_user):
        flags = MemoryFlagStore()
        flags.set(test_user.id)
        assert RoleBootstrap(db, flags).attempt(test_user.id) is False
        # No admin was created because nothing was attempted
        assert db.query(UserRole).filter(UserRole.role == AppRole.ADMIN).count() == 0

    def test_flag_for_other_user_does_not_suppress(self, db, test_user):
        flags = MemoryFlagStore()
        flags.set(test_user.id + 100)
        assert RoleBootstrap(db, flags).attempt(test_user.id) is True


class TestFileFlagStore:
    def test_round_trip(self, tmp_path):
        store = FileFlagStore(tmp_path / "state" / "bootstrap.json")
        assert store.get() is None
        store.set(12)
        assert FileFlagStore(tmp_path / "state" / "bootstrap.json").get() == 12

    def test_corrupt_file_reads_as_unset(self, tmp_path):
        path = tmp_path / "bootstrap.json"
        path.write_text("{not json")
        assert FileFlagStore(path).get() is None


class TestConcurrentBootstrap:
    def test_only_one_of_simultaneous_first_logins_becomes_admin(self, tmp_path):
        engine = create_engine(
            f"sqlite:///{tmp_path / 'roles.db'}",
            connect_args={"check_same_thread": False},
        )
        enable_sqlite_foreign_keys(engine)
        Base.metadata.create_all(bind=engine)
        Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

        setup = Session()
        user_ids = [AuthService(setup).create_user(f"user{i}", "secret1").id for i in range(4)]
        setup.close()

        barrier = threading.Barrier(len(user_ids))
        granted = {}

        def login(user_id):
            session = Session()
            try:
                barrier.wait()
                granted[user_id] = RoleBootstrap(session, MemoryFlagStore()).attempt(user_id)
            finally:
                session.close()

        threads = [threading.Thread(target=login, args=(uid,)) for uid in user_ids]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        check = Session()
        try:
            admins = RoleService(check).list_admins()
        finally:
            check.close()
            engine.dispose()

        assert sorted(granted) == sorted(user_ids)
        assert list(granted.values()).count(True) == 1
        assert len(admins) == 1
        assert granted[admins[0].id] is True

    def test_initial_admin_for_unknown_user(self, db):
        with pytest.raises(NotFound):
            RoleService(db).grant_initial_admin(404)
        assert not RoleService(db).admin_exists()
