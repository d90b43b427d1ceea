import pytest

from company_dedup.engine import CONFIG_PRESETS


@pytest.fixture
def balanced():
    return CONFIG_PRESETS["balanced"]


@pytest.fixture
def conservative():
    return CONFIG_PRESETS["conservative"]


@pytest.fixture
def aggressive():
    return CONFIG_PRESETS["aggressive"]


@pytest.fixture
def names_file(tmp_path):
    """Write lines to a temporary .txt file and return its path."""
    def _write(lines, name="companies.txt", newline="\n"):
        path = tmp_path / name
        path.write_text(newline.join(lines), encoding="utf-8")
        return str(path)
    return _write
