"""End-to-end tests for failures raised while committing a request."""

import pytest
from dishka import Provider, Scope, make_async_container, provide
from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from genie.domain.repository import UnitOfWork
from genie.interface.api.app import create_app
from genie.persistence.unit_of_work import SqlAlchemyUnitOfWork
from genie.util.di import PROVIDERS, get_provider


class FlakySession:
    """Session stand-in whose commits fail while ``fail_commits`` is set."""

    def __init__(self) -> None:
        self.fail_commits = False
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        if self.fail_commits:
            raise OperationalError("COMMIT", {}, Exception("connection reset"))
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


class FlakyCommitProvider(Provider):
    """Wires the SQLAlchemy unit of work over a ``FlakySession``."""

    def __init__(self, session: FlakySession) -> None:
        super().__init__()
        self.session = session

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self) -> UnitOfWork:
        return SqlAlchemyUnitOfWork(self.session)


@pytest.fixture
def session():
    return FlakySession()


@pytest.fixture
def client(session):
    """App over in-memory repositories and a unit of work that can fail."""
    providers = [
        get_provider(base, use_mock=base.__mock_component__ is not None)()
        for base in PROVIDERS
    ]
    container = make_async_container(
        *providers, FlakyCommitProvider(session), FastapiProvider()
    )
    return TestClient(create_app(container))


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def assert_storage_error(response) -> None:
    assert response.status_code == 400
    assert response.json()["detail"]["code"] == "storage_error"


class TestCommitFailures:
    def test_signup_reports_failed_commit(self, client, session):
        session.fail_commits = True

        response = client.post("/auth/signup", json={"email": "paul@example.com"})

        assert_storage_error(response)
        assert session.commits == 0
        assert session.rollbacks == 1

    def test_consume_reports_failed_commit_and_can_be_retried(self, client, session):
        # Arrange: a director with a classroom and a parent link
        director = client.post(
            "/auth/signup", json={"email": "directrice@example.com"}
        ).json()["token"]
        client.post(
            "/onboarding/director",
            json={"school_name": "École Jules Ferry"},
            headers=bearer(director),
        )
        classroom_id = client.post(
            "/onboarding/classrooms",
            json={"name": "CP A", "grade": "CP"},
            headers=bearer(director),
        ).json()["id"]
        link = client.post(
            "/invitations/links",
            json={"classroom_id": classroom_id, "intended_role": "PARENT"},
            headers=bearer(director),
        ).json()
        parent = client.post(
            "/auth/signup", json={"email": "paul@example.com"}
        ).json()["token"]

        # Act
        session.fail_commits = True
        failed = client.post(
            "/invitations/consume",
            json={"token": link["token"], "childFirstName": "Lucas"},
            headers=bearer(parent),
        )
        session.fail_commits = False
        retried = client.post(
            "/invitations/consume",
            json={"token": link["token"], "childFirstName": "Lucas"},
            headers=bearer(parent),
        )

        # Assert
        assert_storage_error(failed)
        assert retried.status_code == 200
        assert retried.json()["role"] == "PARENT"

    def test_revoke_reports_failed_commit(self, client, session):
        director = client.post(
            "/auth/signup", json={"email": "directrice@example.com"}
        ).json()["token"]
        client.post(
            "/onboarding/director",
            json={"school_name": "École Jules Ferry"},
            headers=bearer(director),
        )
        classroom_id = client.post(
            "/onboarding/classrooms",
            json={"name": "CP A", "grade": "CP"},
            headers=bearer(director),
        ).json()["id"]

        session.fail_commits = True
        response = client.post(
            "/invitations/revoke",
            json={"classroom_id": classroom_id, "intended_role": "TEACHER"},
            headers=bearer(director),
        )

        assert_storage_error(response)
