from unittest.mock import MagicMock

import pytest

from repopages.services.repository.page_service import RepositoryPageService
from tests.factories import make_branch, make_code_file


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Widgets", "widgets"),
        ("My Cool Repo", "my-cool-repo"),
        ("  --Hello, World!--  ", "hello-world"),
        ("api.v2_final", "api.v2_final"),
        ("", ""),
    ],
)
def test_get_normalized_name(raw, expected):
    assert RepositoryPageService.get_normalized_name(raw) == expected


@pytest.mark.unit
def test_settings_fields_list_default_branch(repository):
    repository.branches.extend([make_branch("dev"), make_branch("main", is_default=True)])

    fields = RepositoryPageService(MagicMock()).get_settings_fields(repository)

    assert fields.name == "widgets"
    assert fields.default_branch == "main"
    assert fields.branches == ["dev", "main"]


@pytest.mark.unit
def test_code_file_detail_missing_file():
    db = MagicMock()
    db.query.return_value.filter.return_value.first.return_value = None

    assert RepositoryPageService(db).get_code_file_detail(make_branch("main"), "x.py") is None


@pytest.mark.unit
def test_branch_files_link_to_code_file_page(url_key, urls):
    db = MagicMock()
    db.query.return_value.filter.return_value.order_by.return_value.all.return_value = [
        make_code_file("src/app.py", is_ignored=True)
    ]

    files = RepositoryPageService(db).get_branch_files(make_branch("feature"), url_key, urls)

    assert len(files) == 1
    assert files[0].path == "src/app.py"
    assert files[0].is_ignored is True
    assert files[0].url == urls.code_file(url_key, "src/app.py")
