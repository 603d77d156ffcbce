import pytest

from cub.repo_utils import Repository


@pytest.fixture
def repo(tmp_path):
    repository = Repository(tmp_path)
    repository.init()
    return repository


@pytest.fixture
def write_file(tmp_path):
    def write(name: str, content: str):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return write
