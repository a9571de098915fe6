import pathlib

import pytest

from ddl2sql.schema.builder import build_graph_from_ddl

FIXTURES = pathlib.Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


@pytest.fixture
def fixture_path():
    """Returns the path of a SQL fixture file by name."""
    return lambda name: FIXTURES / name


@pytest.fixture
def ddl_fixture():
    """Returns the text of a SQL fixture file by name."""
    return load_fixture


@pytest.fixture
def mini_ddl():
    return load_fixture("mini.sql")


@pytest.fixture
def mini_graph(mini_ddl):
    """customers <- orders, one inline foreign key."""
    return build_graph_from_ddl(mini_ddl)


@pytest.fixture
def diamond_graph():
    """accounts -> {projects, teams} -> assignments."""
    return build_graph_from_ddl(load_fixture("diamond.sql"))


@pytest.fixture
def self_fk_graph():
    return build_graph_from_ddl(load_fixture("self_fk.sql"))


@pytest.fixture
def composite_graph():
    return build_graph_from_ddl(load_fixture("composite_fk.sql"))


@pytest.fixture(scope="session")
def northwind_graph():
    """The 14-table Northwind schema in pg_dump layout."""
    return build_graph_from_ddl(load_fixture("northwind.sql"))
