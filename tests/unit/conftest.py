"""Fixtures for unit tests."""

from typing import Callable, Generator

import pytest
import structlog

from extension_release_notes.release_notes.models import PullRequest
from tests.unit.fakes import FakeGitHubClient


@pytest.fixture(autouse=True)
def configure_structlog_for_caplog() -> Generator[None, None, None]:
    """Configure structlog for use with caplog."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def fake_client() -> FakeGitHubClient:
    """A fake client bound to oat-sa/extension-tao-foobar."""
    return FakeGitHubClient()


@pytest.fixture
def release_pull_requests() -> Callable[..., list[PullRequest]]:
    """Build release pull requests from titles, numbered downwards from the first."""

    def _build(*titles: str, first_number: int = 100) -> list[PullRequest]:
        return [PullRequest(number=first_number - index, title=title) for index, title in enumerate(titles)]

    return _build
