from pathlib import Path

import pytest

TRANSCRIPTS_DIR = Path(__file__).parent / "transcripts"


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    for item in items:
        if TRANSCRIPTS_DIR.parent in item.path.parents:
            item.add_marker(pytest.mark.integration)


@pytest.fixture
def load_transcript():
    def _load(name: str) -> str:
        return (TRANSCRIPTS_DIR / name).read_text(encoding="utf-8")

    return _load
