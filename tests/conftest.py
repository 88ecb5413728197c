import shutil
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def node_home(tmp_path: Path) -> Path:
    """A node home holding ``node0/config/params.json``."""

    config_dir = tmp_path / "node0" / "config"
    config_dir.mkdir(parents=True)
    shutil.copy(FIXTURES / "params.json", config_dir / "params.json")
    return tmp_path


class StubAccounts:
    def __init__(self, address: str = "faa1proposer") -> None:
        self.address = address
        self.lookups: list[str] = []

    def address_of(self, name: str) -> str:
        self.lookups.append(name)
        return self.address


@pytest.fixture
def accounts() -> StubAccounts:
    return StubAccounts()
