from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from qa_backend.application.services.password_hashing import BcryptPasswordCipher
from qa_backend.application.services.token_issuer import OpaqueTokenIssuer
from qa_backend.application.use_cases.questions.create_question import CreateQuestionUseCase
from qa_backend.application.use_cases.users.authorize import AuthorizationGuard
from qa_backend.application.use_cases.users.login_user import LoginUserUseCase
from qa_backend.application.use_cases.users.logout_user import LogoutUserUseCase
from qa_backend.application.use_cases.users.register_user import RegisterUserUseCase
from qa_backend.domain.questions.entities import Question
from qa_backend.domain.users.entities import AuthSession, User


class FrozenClock:
    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class InMemoryStore:
    def __init__(self) -> None:
        self.users: dict[int, User] = {}
        self.sessions: dict[int, AuthSession] = {}
        self.questions: dict[int, Question] = {}
        self.commits = 0
        self.rollbacks = 0
        self._seq = itertools.count(1)

    def next_id(self) -> int:
        return next(self._seq)


class InMemoryUserRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def find_by_username(self, username: str) -> User | None:
        return next((u for u in self._store.users.values() if u.username == username), None)

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._store.users.values() if u.email == email), None)

    def find_by_id(self, user_id: int) -> User | None:
        return self._store.users.get(user_id)

    def add(self, user: User) -> User:
        persisted = replace(user, id=self._store.next_id())
        self._store.users[persisted.id] = persisted
        return persisted

    def touch(self, user_id: int, seen_at: datetime) -> None:
        self._store.users[user_id] = replace(self._store.users[user_id], last_seen_at=seen_at)


class InMemoryAuthSessionRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def find_by_token(self, access_token: str) -> AuthSession | None:
        return next(
            (s for s in self._store.sessions.values() if s.access_token == access_token), None
        )

    def add(self, session: AuthSession) -> AuthSession:
        persisted = replace(session, id=self._store.next_id())
        self._store.sessions[persisted.id] = persisted
        return persisted

    def mark_logged_out(self, session_id: int, logout_at: datetime) -> None:
        self._store.sessions[session_id] = self._store.sessions[session_id].logged_out(logout_at)


class InMemoryQuestionRepository:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def add(self, question: Question) -> Question:
        persisted = replace(question, id=self._store.next_id())
        self._store.questions[persisted.id] = persisted
        return persisted


class InMemoryUnitOfWork:
    """Restores the store snapshot taken on entry when the block raises."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store
        self.users = InMemoryUserRepository(store)
        self.sessions = InMemoryAuthSessionRepository(store)
        self.questions = InMemoryQuestionRepository(store)

    def __enter__(self) -> InMemoryUnitOfWork:
        self._snapshot = (
            dict(self._store.users),
            dict(self._store.sessions),
            dict(self._store.questions),
        )
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc is not None:
            self._store.users, self._store.sessions, self._store.questions = self._snapshot
            self._store.rollbacks += 1
        else:
            self._store.commits += 1


@pytest.fixture()
def clock() -> FrozenClock:
    return FrozenClock(datetime(2024, 3, 1, 9, 30, tzinfo=UTC))


@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def uow_factory(store: InMemoryStore):
    return lambda: InMemoryUnitOfWork(store)


@pytest.fixture()
def cipher() -> BcryptPasswordCipher:
    return BcryptPasswordCipher(rounds=4)


@pytest.fixture()
def register(uow_factory, cipher, clock) -> RegisterUserUseCase:
    return RegisterUserUseCase(uow_factory=uow_factory, password_cipher=cipher, clock=clock)


@pytest.fixture()
def login(uow_factory, cipher, clock) -> LoginUserUseCase:
    return LoginUserUseCase(
        uow_factory=uow_factory,
        password_cipher=cipher,
        token_issuer=OpaqueTokenIssuer(),
        clock=clock,
    )


@pytest.fixture()
def logout(uow_factory, clock) -> LogoutUserUseCase:
    return LogoutUserUseCase(uow_factory=uow_factory, clock=clock)


@pytest.fixture()
def guard(uow_factory, clock) -> AuthorizationGuard:
    return AuthorizationGuard(uow_factory=uow_factory, clock=clock)


@pytest.fixture()
def create_question(uow_factory, guard, clock) -> CreateQuestionUseCase:
    return CreateQuestionUseCase(uow_factory=uow_factory, guard=guard, clock=clock)
