import pytest

from mqttlog.profile import FeatureProfile
from mqttlog.sinks import MemorySink


@pytest.fixture
def sink():
    return MemorySink()


@pytest.fixture
def verbose_profile():
    return FeatureProfile(verbose=True)


@pytest.fixture
def extension_home(tmp_path):
    (tmp_path / "conf").mkdir()
    return tmp_path
