from pathlib import Path

import pytest
from structlog.testing import capture_logs

from public_suffix_resolver.rules import Rules

DATA_DIR = Path(__file__).parent / "data"
PSL_PATH = DATA_DIR / "public_suffix_list.dat"


@pytest.fixture(autouse=True)
def log_output():
    """Capture structlog events instead of printing them."""
    with capture_logs() as logs:
        yield logs


@pytest.fixture
def psl_path() -> Path:
    return PSL_PATH


@pytest.fixture
def psl_text() -> str:
    return PSL_PATH.read_text(encoding="utf-8")


@pytest.fixture
def rules(psl_text) -> Rules:
    return Rules.from_string(psl_text)


@pytest.fixture
def ck_rules() -> Rules:
    """``*.ck`` with the ``!www.ck`` exception, nothing else."""
    return Rules.from_data({
        "ICANN_DOMAINS": {"ck": {"*": {}, "www": {"!": {}}}},
        "PRIVATE_DOMAINS": {},
    })
