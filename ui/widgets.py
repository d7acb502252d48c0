from __future__ import annotations

from typing import Optional

from PySide6 import QtCore, QtWidgets

from config import STEP_SIZES
from mappings import SliderMapping
from utils import format_pitch, format_step

# UI Widgets
# -----------------------------

class SeekStepRow(QtWidgets.QWidget):
    """Label row + seek bar flanked by step down/up buttons.

    The seek bar works in integer progress; `mapping` converts between that and
    the playback value the row reports and displays.
    """

    valueDragged = QtCore.Signal(float)  # user-driven only
    stepClicked = QtCore.Signal(int)  # -1 or +1

    def __init__(
        self,
        title: str,
        mapping: SliderMapping,
        minimum_text: str = "",
        maximum_text: str = "",
        parent=None,
    ):
        super().__init__(parent)

        self.title_label = QtWidgets.QLabel(title)
        self.minimum_label = QtWidgets.QLabel(minimum_text)
        self.maximum_label = QtWidgets.QLabel(maximum_text)
        self.current_label = QtWidgets.QLabel("")
        self.current_label.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)

        self.slider = QtWidgets.QSlider(QtCore.Qt.Orientation.Horizontal)
        self.mapping = mapping
        self.slider.setRange(0, int(mapping.resolution))
        self.slider.setToolTip(f"Adjust {title.lower()}.")
        self.slider.setAccessibleName(f"{title} slider")

        self.step_down_btn = QtWidgets.QToolButton(text="-")
        self.step_down_btn.setToolTip(f"Step {title.lower()} down.")
        self.step_down_btn.setAccessibleName(f"{title} step down")
        self.step_up_btn = QtWidgets.QToolButton(text="+")
        self.step_up_btn.setToolTip(f"Step {title.lower()} up.")
        self.step_up_btn.setAccessibleName(f"{title} step up")

        labels = QtWidgets.QHBoxLayout()
        labels.addWidget(self.minimum_label)
        labels.addStretch(1)
        labels.addWidget(self.current_label)
        labels.addStretch(1)
        labels.addWidget(self.maximum_label)

        controls = QtWidgets.QHBoxLayout()
        controls.addWidget(self.step_down_btn)
        controls.addWidget(self.slider, 1)
        controls.addWidget(self.step_up_btn)

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.title_label)
        layout.addLayout(labels)
        layout.addLayout(controls)

        self.slider.valueChanged.connect(self._on_slider_changed)
        self.step_down_btn.clicked.connect(lambda: self.stepClicked.emit(-1))
        self.step_up_btn.clicked.connect(lambda: self.stepClicked.emit(1))

    def _on_slider_changed(self, progress: int) -> None:
        self.valueDragged.emit(self.mapping.value_of(progress))

    def set_value(self, value: float, text: str) -> None:
        # programmatic moves must not echo back as user input
        self.slider.blockSignals(True)
        self.slider.setValue(self.mapping.progress_of(value))
        self.slider.blockSignals(False)
        self.current_label.setText(text)

    def set_step_texts(self, down: str, up: str) -> None:
        self.step_down_btn.setText(down)
        self.step_up_btn.setText(up)


class StepSizeBar(QtWidgets.QWidget):
    stepSizeSelected = QtCore.Signal(float)

    def __init__(self, parent=None):
        super().__init__(parent)

        self.buttons: dict[float, QtWidgets.QToolButton] = {}
        self._group = QtWidgets.QButtonGroup(self)
        self._group.setExclusive(True)

        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(QtWidgets.QLabel("Step"))
        for step in STEP_SIZES:
            button = QtWidgets.QToolButton(text=format_pitch(step))
            button.setCheckable(True)
            button.setToolTip(f"Step buttons change values by {format_pitch(step)}.")
            button.setAccessibleName(f"Step size {format_pitch(step)}")
            button.clicked.connect(lambda _checked=False, s=step: self.stepSizeSelected.emit(s))
            self._group.addButton(button)
            self.buttons[step] = button
            layout.addWidget(button)
        layout.addStretch(1)

    def set_current(self, step: float) -> None:
        button: Optional[QtWidgets.QToolButton] = self.buttons.get(step)
        if button is not None:
            button.setChecked(True)

    @staticmethod
    def step_texts(step: float) -> tuple[str, str]:
        return format_step(step, -1), format_step(step, 1)
