"""
Pytest configuration and shared fixtures.
"""

import copy
import sys
from pathlib import Path
import pytest

# Add the project root to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from apiinfo.core import ApiInfoConverter
from tests.fixtures import (
    SAMPLE_API_INFO,
    MINIMAL_API_INFO,
    pack,
    payload_command,
    write_fake_nvim,
)


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark as integration test")
    config.addinivalue_line("markers", "subprocess: mark as spawning child processes")


# ============================================================================
# Document Fixtures
# ============================================================================


@pytest.fixture
def sample_document():
    """A fresh copy of the sample API description."""
    return copy.deepcopy(SAMPLE_API_INFO)


@pytest.fixture
def minimal_document():
    """The smallest document the converter is documented against."""
    return copy.deepcopy(MINIMAL_API_INFO)


@pytest.fixture
def sample_payload(sample_document):
    """The sample API description as MessagePack bytes."""
    return pack(sample_document)


# ============================================================================
# Command Fixtures
# ============================================================================


@pytest.fixture
def sample_command(sample_payload):
    """A command that prints the sample payload."""
    return payload_command(sample_payload)


@pytest.fixture
def fake_nvim(tmp_path, sample_payload):
    """Path to an executable that answers --api-info with the sample payload."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    return write_fake_nvim(bin_dir, sample_payload)


@pytest.fixture
def quiet_converter(sample_command):
    """A converter for the sample command that prints no status lines."""
    return ApiInfoConverter(command=sample_command, verbose=False)


# ============================================================================
# Output Fixtures
# ============================================================================


@pytest.fixture
def output_path(tmp_path):
    """Destination path inside a directory that exists."""
    return str(tmp_path / "api_info.yml")


@pytest.fixture
def existing_output(tmp_path):
    """An output file that already holds content from an earlier run."""
    path = tmp_path / "api_info.yml"
    path.write_text("previous: run\n", encoding="utf-8")
    return path
