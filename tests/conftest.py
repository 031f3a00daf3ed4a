"""Test configuration and fixtures."""

import io
from pathlib import Path
from typing import Callable, Generator, Union

import pytest
from git import Actor, Repo
from rich.console import Console


class FakeRunner:
    """Runner returning scripted output for exact git argument tuples."""

    def __init__(self, outputs: dict[tuple[str, ...], Union[str, Exception]]) -> None:
        self.outputs = outputs
        self.calls: list[tuple[str, ...]] = []

    def run(self, *args: str) -> str:
        self.calls.append(args)
        result = self.outputs.get(args, "")
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def fake_runner() -> Callable[..., FakeRunner]:
    """Create scripted runners."""
    return FakeRunner


@pytest.fixture
def console() -> Console:
    """Console writing into a buffer, wide enough to avoid wrapping."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def err_console() -> Console:
    """Buffered console standing in for standard error."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def test_env(tmp_path: Path) -> Generator[tuple[Path, Path], None, None]:
    """Create a test environment with local and remote repositories.

    Branches in the local repository:
    - main: current branch, live on the remote
    - feature/live: live on the remote
    - feature/gone-merged: merged into main, deleted on the remote
    - feature/gone-unmerged: has an unpushed commit, deleted on the remote
    - scratch: never pushed, no upstream

    Both gone branches are deleted directly in the remote, so the local
    remote-tracking refs still list them.

    Returns:
        Tuple of (local_repo_path, remote_repo_path)
    """
    remote_path = tmp_path / "remote"
    local_path = tmp_path / "local"
    remote_path.mkdir()
    local_path.mkdir()

    remote_repo = Repo.init(remote_path, bare=True)
    local_repo = Repo.init(local_path)

    author = Actor("Test User", "test@example.com")
    local_repo.config_writer().set_value("user", "name", author.name).release()
    local_repo.config_writer().set_value("user", "email", author.email).release()

    readme = local_path / "README.md"
    readme.write_text("# Test Repository")
    local_repo.index.add(["README.md"])
    local_repo.index.commit("Initial commit", author=author)

    if "main" not in local_repo.heads:
        local_repo.create_head("main")
    main_branch = local_repo.heads.main
    main_branch.checkout()

    origin = local_repo.create_remote("origin", url=str(remote_path))
    origin.push("main")
    main_branch.set_tracking_branch(origin.refs.main)

    def commit_file(name: str, content: str) -> None:
        test_file = local_path / name
        test_file.parent.mkdir(parents=True, exist_ok=True)
        test_file.write_text(content)
        local_repo.index.add([name])
        local_repo.index.commit(f"Add {name}", author=author)

    def create_branch(name: str, merge: bool = False) -> None:
        """Create a tracked branch with one pushed commit."""
        main_branch.checkout()
        branch = local_repo.create_head(name)
        branch.checkout()
        commit_file(f"{name}.txt", f"{name} content")

        origin.push(name)
        branch.set_tracking_branch(origin.refs[name])

        if merge:
            main_branch.checkout()
            local_repo.git.merge(name, "--no-ff")
            origin.push("main")

    create_branch("feature/live")
    create_branch("feature/gone-merged", merge=True)
    create_branch("feature/gone-unmerged")
    commit_file("feature/gone-unmerged-2.txt", "unpushed content")

    main_branch.checkout()
    local_repo.create_head("scratch")

    remote_repo.git.branch("-D", "feature/gone-merged")
    remote_repo.git.branch("-D", "feature/gone-unmerged")

    yield local_path, remote_path
