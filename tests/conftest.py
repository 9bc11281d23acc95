import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from classbuilder import ClassFileBuilder, sample_class


@pytest.fixture
def builder():
    return ClassFileBuilder()


@pytest.fixture
def sample_bytes():
    return sample_class().to_bytes()
