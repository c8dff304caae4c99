import pytest
from sqlalchemy.engine import make_url

from repopages.core.config import DEFAULT_DATABASE_URL


@pytest.mark.unit
def test_default_database_url_names_installed_driver():
    url = make_url(DEFAULT_DATABASE_URL)

    assert url.get_backend_name() == "postgresql"
    assert url.get_driver_name() == "psycopg2"
