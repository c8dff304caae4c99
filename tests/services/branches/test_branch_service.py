"""
Tests for BranchService analysis control.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from temporalio.exceptions import WorkflowAlreadyStartedError
from temporalio.service import RPCError, RPCStatusCode

from repopages.core.config import settings
from repopages.services.branches.analysis_lifecycle import AnalysisLifecycle, BranchAnalysisAction
from repopages.services.branches.branch_service import BranchService, create_analysis_workflow_id
from repopages.services.branches.default_branch import DefaultBranchSwitcher
from tests.factories import make_branch, make_code_file


@pytest.fixture
def temporal():
    client = MagicMock()
    client.start_workflow = AsyncMock()
    handle = MagicMock()
    handle.cancel = AsyncMock()
    client.get_workflow_handle.return_value = handle

    wrapper = MagicMock()
    wrapper.get_client = AsyncMock(return_value=client)
    return wrapper


@pytest.fixture
def service(temporal):
    service = BranchService(MagicMock(), temporal=temporal)
    service.storage = MagicMock()
    return service


@pytest.mark.unit
def test_workflow_id_is_scoped_to_repository_and_branch(repository):
    workflow_id = create_analysis_workflow_id(repository, make_branch("dev"))

    assert workflow_id == f"branch-analysis-{repository.id}-dev"


@pytest.mark.unit
def test_get_resolves_branch_by_name(service, repository):
    dev = make_branch("dev")
    repository.branches.append(dev)

    assert service.get(repository, "dev") is dev
    assert service.get(repository, "missing") is None
    assert service.get(repository, None) is None


@pytest.mark.unit
def test_hide_code_file_persists_hidden_flag(service):
    code_file = make_code_file("src/app.py")

    service.hide_code_file(code_file)

    assert code_file.is_hidden is True
    service.storage.set.assert_called_once_with(code_file)


@pytest.mark.asyncio
async def test_start_analysis_starts_workflow(service, temporal, repository):
    repository.exclude_patterns = ["*.log"]
    branch = make_branch("dev")
    client = await temporal.get_client()

    await service.start_analysis(repository, branch)

    assert branch.is_analyzed is True
    service.storage.set.assert_called_once_with(branch)
    client.start_workflow.assert_awaited_once()
    args, kwargs = client.start_workflow.call_args
    assert args[0] == settings.ANALYSIS_WORKFLOW_NAME
    assert args[1] == {
        "repository_id": str(repository.id),
        "repository_external_id": "ext-1",
        "branch_name": "dev",
        "exclude_patterns": ["*.log"],
    }
    assert kwargs["id"] == create_analysis_workflow_id(repository, branch)
    assert kwargs["task_queue"] == settings.ANALYSIS_TASK_QUEUE


@pytest.mark.asyncio
async def test_start_analysis_tolerates_running_workflow(service, temporal, repository):
    client = await temporal.get_client()
    client.start_workflow.side_effect = WorkflowAlreadyStartedError("wf", "BranchAnalysisWorkflow")

    branch = make_branch("dev")

    await service.start_analysis(repository, branch)

    client.start_workflow.assert_awaited_once()
    assert branch.is_analyzed is True


@pytest.mark.asyncio
async def test_stop_analysis_cancels_workflow(service, temporal, repository):
    branch = make_branch("dev", is_analyzed=True)
    client = await temporal.get_client()

    await service.stop_analysis(repository, branch)

    client.get_workflow_handle.assert_called_once_with(create_analysis_workflow_id(repository, branch))
    client.get_workflow_handle.return_value.cancel.assert_awaited_once()
    assert branch.is_analyzed is False
    service.storage.set.assert_called_once_with(branch)


@pytest.mark.asyncio
async def test_stop_analysis_ignores_missing_workflow(service, temporal, repository):
    client = await temporal.get_client()
    client.get_workflow_handle.return_value.cancel.side_effect = RPCError(
        "workflow not found", RPCStatusCode.NOT_FOUND, b""
    )

    branch = make_branch("dev", is_analyzed=True)

    await service.stop_analysis(repository, branch)

    assert branch.is_analyzed is False


@pytest.mark.asyncio
async def test_stop_analysis_reraises_other_rpc_errors(service, temporal, repository):
    client = await temporal.get_client()
    client.get_workflow_handle.return_value.cancel.side_effect = RPCError(
        "denied", RPCStatusCode.PERMISSION_DENIED, b""
    )

    branch = make_branch("dev", is_analyzed=True)

    with pytest.raises(RPCError):
        await service.stop_analysis(repository, branch)

    assert branch.is_analyzed is True
    service.storage.set.assert_not_called()


@pytest.mark.asyncio
async def test_failed_start_leaves_branch_inactive(service, temporal, repository):
    client = await temporal.get_client()
    client.start_workflow.side_effect = RPCError("unavailable", RPCStatusCode.UNAVAILABLE, b"")
    branch = make_branch("dev")

    with pytest.raises(RPCError):
        await service.start_analysis(repository, branch)

    assert branch.is_analyzed is False
    service.storage.set.assert_not_called()


@pytest.mark.asyncio
async def test_default_switch_restarts_branch_after_failed_toggle(service, temporal, repository, url_key):
    client = await temporal.get_client()
    old = make_branch("old", is_default=True)
    new = make_branch("new")
    repository.branches.extend([old, new])
    lifecycle = AnalysisLifecycle(service)
    repository_service = MagicMock()
    repository_service.get_default_branch.return_value = old
    switcher = DefaultBranchSwitcher(service, repository_service, service.storage, lifecycle)

    client.start_workflow.side_effect = RPCError("unavailable", RPCStatusCode.UNAVAILABLE, b"")
    with pytest.raises(RPCError):
        await lifecycle.toggle(repository, "new", BranchAnalysisAction.START)

    client.start_workflow.side_effect = None
    client.start_workflow.reset_mock()
    await switcher.switch(repository, url_key, "new")

    client.start_workflow.assert_awaited_once()
    assert new.is_default is True
    assert new.is_analyzed is True


@pytest.mark.asyncio
async def test_default_switch_writes_repository_then_branch_flag(service, temporal, repository, url_key):
    new = make_branch("new")
    repository.branches.append(new)
    repository_service = MagicMock()
    repository_service.get_default_branch.return_value = None
    switcher = DefaultBranchSwitcher(service, repository_service, service.storage, AnalysisLifecycle(service))

    await switcher.switch(repository, url_key, "new")

    assert [c.args[0] for c in service.storage.set.call_args_list] == [repository, new]
