from __future__ import annotations

import base64
import uuid
from datetime import UTC, datetime
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from qa_backend.app import create_app
from qa_backend.domain.users.entities import User
from qa_backend.domain.users.exceptions import DuplicateEmailError, DuplicateUsernameError
from qa_backend.infrastructure.container import Container
from qa_backend.infrastructure.db import build_engine, init_db
from qa_backend.infrastructure.db.models import Question, UserAuth
from qa_backend.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from qa_backend.infrastructure.unit_of_work import SqlAlchemyUnitOfWork
from qa_backend.shared.config import AppConfig, DatabaseConfig, SecurityConfig
from qa_backend.shared.errors.base import StoreError


@pytest.fixture()
def container(tmp_path) -> Container:
    config = AppConfig(
        database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'qa.db'}"),
        security=SecurityConfig(password_hash_rounds=4),
        log_to_file=False,
    )
    engine = build_engine(config.database)
    init_db(engine)
    yield Container(config, engine=engine)
    engine.dispose()


def _user(username: str, email: str) -> User:
    return User(
        id=0,
        uuid=str(uuid.uuid4()),
        username=username,
        email=email,
        salt="c2FsdA==",
        password_hash="00",
        created_at=datetime.now(UTC),
    )


def test_register_login_logout_flow(container: Container) -> None:
    app = create_app(container)
    basic = base64.b64encode(b"alice:Secret1").decode()

    with app.test_client() as client:
        signup = client.post(
            "/user/signup",
            json={"username": "alice", "email": "a@x.com", "password": "Secret1"},
        )
        assert signup.status_code == 201

        signin = client.post("/user/signin", headers={"Authorization": f"Basic {basic}"})
        assert signin.status_code == 200
        token = signin.headers["access-token"]

        created = client.post(
            "/question/create", json={"content": "First?"}, headers={"Authorization": token}
        )
        assert created.status_code == 201

        signout = client.post("/user/signout", headers={"Authorization": token})
        assert signout.status_code == 200
        assert signout.get_json()["id"] == signup.get_json()["id"]

    with container.session_factory() as session:
        row = session.scalars(select(UserAuth)).one()
        assert row.logout_at is not None
        assert session.scalar(select(func.count()).select_from(Question)) == 1


def test_registered_user_is_persisted_active(container: Container) -> None:
    user = container.register_user_use_case.execute("erin", "e@x.com", "Secret1")

    with SqlAlchemyUnitOfWork(container.session_factory) as uow:
        stored = uow.users.find_by_id(user.id)

    assert stored is not None
    assert stored.status == "active"


def test_session_window_survives_round_trip(container: Container) -> None:
    container.register_user_use_case.execute("alice", "a@x.com", "Secret1")
    issued = container.login_user_use_case.execute("alice", "Secret1")

    user = container.authorization_guard.authorize(issued.access_token)

    assert user.username == "alice"
    assert user.last_seen_at is not None
    assert (issued.expires_at - issued.login_at).total_seconds() == 8 * 3600


def test_store_constraint_closes_username_race(container: Container) -> None:
    container.register_user_use_case.execute("alice", "a@x.com", "Secret1")

    # Skip the pre-checks the use case does to mimic two concurrent sign-ups.
    with pytest.raises(DuplicateUsernameError):
        with SqlAlchemyUnitOfWork(container.session_factory) as uow:
            uow.users.add(_user("alice", "other@x.com"))

    with pytest.raises(DuplicateEmailError):
        with SqlAlchemyUnitOfWork(container.session_factory) as uow:
            uow.users.add(_user("bob", "a@x.com"))


class _DriverError(Exception):
    def __init__(self, message: str, constraint_name: str | None = None) -> None:
        super().__init__(message)
        self.diag = SimpleNamespace(constraint_name=constraint_name)


def _repository_failing_with(orig: Exception) -> SqlAlchemyUserRepository:
    session = MagicMock()
    session.flush.side_effect = IntegrityError("INSERT INTO users", {}, orig)
    return SqlAlchemyUserRepository(session)


def test_email_collision_is_classified_by_constraint_name() -> None:
    repository = _repository_failing_with(
        Exception(
            'duplicate key value violates unique constraint "uq_users_email"\n'
            "DETAIL: Key (email)=(username@x.com) already exists."
        )
    )

    with pytest.raises(DuplicateEmailError):
        repository.add(_user("bob", "username@x.com"))


def test_driver_diagnostics_name_the_constraint() -> None:
    repository = _repository_failing_with(
        _DriverError("Key (username)=(email) already exists.", constraint_name="uq_users_username")
    )

    with pytest.raises(DuplicateUsernameError):
        repository.add(_user("email", "e@x.com"))


def test_unrelated_user_constraint_is_a_store_conflict() -> None:
    repository = _repository_failing_with(
        Exception('duplicate key value violates unique constraint "uq_users_uuid"')
    )

    with pytest.raises(StoreError) as excinfo:
        repository.add(_user("carol", "c@x.com"))

    assert excinfo.value.code == "store_conflict"


def test_failed_unit_of_work_rolls_back(container: Container) -> None:
    with pytest.raises(RuntimeError):
        with SqlAlchemyUnitOfWork(container.session_factory) as uow:
            uow.users.add(_user("carol", "c@x.com"))
            raise RuntimeError("boom")

    with SqlAlchemyUnitOfWork(container.session_factory) as uow:
        assert uow.users.find_by_username("carol") is None


def test_unit_of_work_releases_its_session(container: Container) -> None:
    uow = SqlAlchemyUnitOfWork(container.session_factory)

    with uow:
        uow.users.add(_user("dave", "d@x.com"))

    assert uow._session is None
    with SqlAlchemyUnitOfWork(container.session_factory) as check:
        assert check.users.find_by_username("dave") is not None


def test_store_failures_surface_as_store_error(tmp_path) -> None:
    config = AppConfig(
        database=DatabaseConfig(url=f"sqlite:///{tmp_path / 'empty.db'}"), log_to_file=False
    )
    container = Container(config)

    with pytest.raises(StoreError):
        container.authorization_guard.authorize("anything")
