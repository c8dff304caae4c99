"""Tests for the branch analysis lifecycle and the analysis toggle."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from repopages.services.branches.analysis_lifecycle import (
    AnalysisLifecycle,
    AnalysisState,
    BranchAnalysisAction,
)
from repopages.services.repository.outcomes import Acknowledged, NotFound
from repopages.utils.exception import UnsupportedActionError
from tests.factories import make_branch


@pytest.fixture
def branch_service():
    service = MagicMock()
    service.start_analysis = AsyncMock()
    service.stop_analysis = AsyncMock()
    return service


@pytest.fixture
def lifecycle(branch_service):
    return AnalysisLifecycle(branch_service)


@pytest.mark.unit
def test_state_of_follows_is_analyzed():
    assert AnalysisLifecycle.state_of(make_branch("a", is_analyzed=True)) is AnalysisState.ANALYZING
    assert AnalysisLifecycle.state_of(make_branch("b", is_analyzed=False)) is AnalysisState.INACTIVE


@pytest.mark.asyncio
async def test_toggle_start_issues_start_for_resolved_branch(lifecycle, branch_service, repository):
    branch = make_branch("dev")
    branch_service.get.return_value = branch

    outcome = await lifecycle.toggle(repository, "dev", BranchAnalysisAction.START)

    assert outcome == Acknowledged()
    branch_service.get.assert_called_once_with(repository, "dev")
    branch_service.start_analysis.assert_awaited_once_with(repository, branch)
    branch_service.stop_analysis.assert_not_called()


@pytest.mark.asyncio
async def test_toggle_stop_issues_stop_for_resolved_branch(lifecycle, branch_service, repository):
    branch = make_branch("dev", is_analyzed=True)
    branch_service.get.return_value = branch

    outcome = await lifecycle.toggle(repository, "dev", "stop")

    assert outcome == Acknowledged()
    branch_service.stop_analysis.assert_awaited_once_with(repository, branch)
    branch_service.start_analysis.assert_not_called()


@pytest.mark.asyncio
async def test_stop_on_inactive_branch_is_still_forwarded(lifecycle, branch_service, repository):
    branch = make_branch("dev", is_analyzed=False)
    branch_service.get.return_value = branch

    await lifecycle.toggle(repository, "dev", BranchAnalysisAction.STOP)

    branch_service.stop_analysis.assert_awaited_once_with(repository, branch)
    assert AnalysisLifecycle.state_of(branch) is AnalysisState.INACTIVE


@pytest.mark.asyncio
async def test_toggle_returns_not_found_for_unknown_branch(lifecycle, branch_service, repository):
    branch_service.get.return_value = None

    outcome = await lifecycle.toggle(repository, "ghost", BranchAnalysisAction.START)

    assert isinstance(outcome, NotFound)
    branch_service.start_analysis.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("action", [0, None, "pause"])
async def test_toggle_rejects_unsupported_action_before_any_call(lifecycle, branch_service, repository, action):
    with pytest.raises(UnsupportedActionError):
        await lifecycle.toggle(repository, "dev", action)

    branch_service.get.assert_not_called()
    branch_service.start_analysis.assert_not_called()
    branch_service.stop_analysis.assert_not_called()


@pytest.mark.asyncio
async def test_start_if_inactive_skips_analyzing_branch(lifecycle, branch_service, repository):
    started = await lifecycle.start_if_inactive(repository, make_branch("main", is_analyzed=True))

    assert started is False
    branch_service.start_analysis.assert_not_called()


@pytest.mark.asyncio
async def test_failed_start_propagates_and_branch_stays_inactive(lifecycle, branch_service, repository):
    branch = make_branch("dev")
    branch_service.get.return_value = branch
    branch_service.start_analysis.side_effect = ConnectionError("engine down")

    with pytest.raises(ConnectionError):
        await lifecycle.toggle(repository, "dev", BranchAnalysisAction.START)

    assert AnalysisLifecycle.state_of(branch) is AnalysisState.INACTIVE
