import pytest
from luaudoc.needle import needle
from luaudoc.test_utils.workspace import WorkspaceFactory


@pytest.fixture(autouse=True)
def _restore_needle_roots():
    # The CLI re-points the global needle at `--root`; restore it between tests
    roots = list(needle.roots)
    yield
    needle.roots[:] = roots
    needle.reload()


@pytest.fixture
def workspace_factory(tmp_path, monkeypatch):
    # Use a fixture to ensure a clean workspace and chdir for each test
    factory = WorkspaceFactory(tmp_path)
    monkeypatch.chdir(tmp_path)
    return factory
