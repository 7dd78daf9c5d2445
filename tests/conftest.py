from pathlib import Path

import pytest


@pytest.fixture
def write_log(tmp_path):
    def _write(lines: list[str], name: str = "HealthCheck.out") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write
