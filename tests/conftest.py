import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, tempo, pitch_percent, skip_silence):
        self.calls.append((float(tempo), float(pitch_percent), skip_silence))

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture(scope="session")
def qapp():
    QtWidgets = pytest.importorskip("PySide6.QtWidgets")
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication([])
    return app
