from __future__ import annotations

from datetime import timedelta

import pytest

from qa_backend.application.use_cases.users.authorize import AuthorizationGuard
from qa_backend.domain.exceptions import InvariantViolation
from qa_backend.domain.users.exceptions import BadCredentialsError, UnauthenticatedError


@pytest.fixture()
def signed_in(register, login):
    user = register.execute("alice", "a@x.com", "Secret1")
    return user, login.execute("alice", "Secret1")


def test_authorize_returns_token_owner(guard, signed_in) -> None:
    user, session = signed_in

    assert guard.authorize(session.access_token).id == user.id


@pytest.mark.parametrize("token", ["", "unknown"])
def test_authorize_rejects_unknown_token(guard, token: str) -> None:
    with pytest.raises(UnauthenticatedError) as excinfo:
        guard.authorize(token)

    assert excinfo.value.code == "ATHR-001"


def test_authorize_rejects_signed_out_session(guard, logout, signed_in) -> None:
    _, session = signed_in
    logout.execute(session.access_token)

    with pytest.raises(UnauthenticatedError):
        guard.authorize(session.access_token)


def test_authorize_rejects_expired_session(guard, clock, signed_in) -> None:
    _, session = signed_in
    clock.advance(timedelta(hours=8))

    with pytest.raises(UnauthenticatedError):
        guard.authorize(session.access_token)


def test_lenient_guard_only_checks_existence(uow_factory, clock, logout, signed_in) -> None:
    user, session = signed_in
    lenient = AuthorizationGuard(uow_factory=uow_factory, require_active=False, clock=clock)
    logout.execute(session.access_token)
    clock.advance(timedelta(days=2))

    assert lenient.authorize(session.access_token).id == user.id


def test_create_question_stamps_author(create_question, signed_in, store, clock) -> None:
    user, session = signed_in

    question = create_question.execute(session.access_token, "What is a salt?")

    assert question.user_id == user.id
    assert question.created_at == clock.now
    assert store.questions[question.id] == question


def test_create_question_requires_session(create_question, store) -> None:
    with pytest.raises(UnauthenticatedError):
        create_question.execute("missing", "What is a salt?")

    assert store.questions == {}


def test_create_question_rejects_blank_content(create_question, signed_in, store) -> None:
    _, session = signed_in

    with pytest.raises(InvariantViolation):
        create_question.execute(session.access_token, "   ")

    assert store.questions == {}


def test_end_to_end_scenario(register, login, guard, logout, store, clock) -> None:
    alice = register.execute("alice", "a@x.com", "Secret1")

    session = login.execute("alice", "Secret1")
    assert session.expires_at == clock.now + timedelta(hours=8)

    assert guard.authorize(session.access_token).uuid == alice.uuid

    assert logout.execute(session.access_token).uuid == alice.uuid
    assert store.sessions[session.id].logout_at is not None

    with pytest.raises(BadCredentialsError):
        login.execute("alice", "wrong")
