import pytest

from repopages.services.repository.security_service import (
    RepositoryAction,
    RepositoryRole,
    RepositorySecurityService,
)


@pytest.mark.unit
@pytest.mark.parametrize("action", list(RepositoryAction))
def test_owner_may_do_everything(action):
    assert RepositorySecurityService().is_allowed(action, RepositoryRole.OWNER)


@pytest.mark.unit
def test_viewer_may_only_view():
    security = RepositorySecurityService()

    allowed = [action for action in RepositoryAction if security.is_allowed(action, RepositoryRole.VIEWER)]

    assert allowed == [RepositoryAction.VIEW]


@pytest.mark.unit
def test_page_link_carries_permission():
    link = RepositorySecurityService().get_page_link(
        RepositoryAction.TOGGLE_ANALYSIS, RepositoryRole.VIEWER, "/repositories/alice/widgets/branches/analysis"
    )

    assert link.url == "/repositories/alice/widgets/branches/analysis"
    assert link.allowed is False
