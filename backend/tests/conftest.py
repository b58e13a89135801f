# 공용 테스트 픽스처
# - 테스트마다 새 저장소 + 새 앱 (전역 상태 공유 없음)

import pytest
from fastapi.testclient import TestClient

from userdir.core.config import Settings
from userdir.main import create_app
from userdir.repositories.user_repository import InMemoryUserRepository


@pytest.fixture
def repo():
    repository = InMemoryUserRepository()
    repository.seed()
    return repository


@pytest.fixture
def empty_repo():
    return InMemoryUserRepository()


@pytest.fixture
def client(repo):
    app = create_app(Settings(ENV="development"), repository=repo)
    return TestClient(app)
