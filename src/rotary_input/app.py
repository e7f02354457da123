"""Qt demo window hosting continuous dials and the mode dial."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List, Optional

import logging
import math
import sys

from PySide6 import QtCore, QtGui, QtWidgets

APP_VERSION: str

if __package__ in (None, ""):
    PACKAGE_ROOT = Path(__file__).resolve().parents[1]
    if str(PACKAGE_ROOT) not in sys.path:
        sys.path.insert(0, str(PACKAGE_ROOT))

    import rotary_input as _pkg

    from rotary_input.dials import continuous, discrete
    from rotary_input.errors import ConfigError, GeometryUnavailable
    from rotary_input.input_adapter import ContinuousDialInput, DiscreteDialInput
    from rotary_input.models import (
        AppConfig,
        DialEvent,
        DialOutput,
        RangeConfig,
        SelectionConfig,
    )
    from rotary_input.utils import Point, point_on_circle
    from rotary_input.utils.qt import (
        continuous_command_for_key,
        discrete_command_for_key,
        qpoint_to_tuple,
        qrect_center,
    )

    APP_VERSION = getattr(_pkg, "__version__", "0.0.0")
else:
    from . import __version__ as APP_VERSION
    from .dials import continuous, discrete
    from .errors import ConfigError, GeometryUnavailable
    from .input_adapter import ContinuousDialInput, DiscreteDialInput
    from .models import AppConfig, DialEvent, DialOutput, RangeConfig, SelectionConfig
    from .utils import Point, point_on_circle
    from .utils.qt import (
        continuous_command_for_key,
        discrete_command_for_key,
        qpoint_to_tuple,
        qrect_center,
    )

logger = logging.getLogger(__name__)

READOUT_HEIGHT = 22

PointerFactory = Callable[[Point, Optional[Point]], DialEvent]


def _knob_rect(widget: QtWidgets.QWidget, size: float) -> QtCore.QRectF:
    x = (widget.width() - size) / 2.0
    return QtCore.QRectF(x, 0.0, size, size)


def _center_or_none(rect: QtCore.QRectF) -> Optional[Point]:
    try:
        return qrect_center(rect)
    except GeometryUnavailable:
        return None


def _paint_knob(
    painter: QtGui.QPainter,
    rect: QtCore.QRectF,
    rotation: float,
    enabled: bool,
) -> None:
    """Ring, knob body and the indicator pip at ``rotation``."""
    center = rect.center()
    radius = min(rect.width(), rect.height()) / 2.0 - 2.0
    body = QtGui.QColor(70, 62, 56) if enabled else QtGui.QColor(120, 120, 120)

    painter.setPen(QtGui.QPen(QtGui.QColor(0, 0, 0, 160), 2))
    painter.setBrush(QtGui.QBrush(QtGui.QColor(40, 36, 32)))
    painter.drawEllipse(center, radius, radius)

    knob_r = radius * 0.82
    gradient = QtGui.QRadialGradient(center, knob_r)
    gradient.setColorAt(0.0, body.lighter(140))
    gradient.setColorAt(1.0, body)
    painter.setPen(QtCore.Qt.PenStyle.NoPen)
    painter.setBrush(QtGui.QBrush(gradient))
    painter.drawEllipse(center, knob_r, knob_r)

    cxy = (center.x(), center.y())
    x0, y0 = point_on_circle(cxy, knob_r * 0.35, rotation)
    x1, y1 = point_on_circle(cxy, knob_r * 0.9, rotation)
    pip_color = QtGui.QColor(255, 140, 0) if enabled else QtGui.QColor(200, 200, 200)
    pip_pen = QtGui.QPen(pip_color)
    pip_pen.setWidth(3)
    pip_pen.setCapStyle(QtCore.Qt.PenCapStyle.RoundCap)
    painter.setPen(pip_pen)
    painter.drawLine(QtCore.QPointF(x0, y0), QtCore.QPointF(x1, y1))


# ------------------------------ Continuous Dial -------------------------------


class RotaryDialWidget(QtWidgets.QWidget):
    """Knob with a limited sweep driving a value in ``config``'s range."""

    valueChanged = QtCore.Signal(float)

    def __init__(
        self,
        config: RangeConfig,
        value: Optional[float] = None,
        size: int = 68,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._config = config
        self._size = max(24, int(size))
        start = config.minimum if value is None else value
        self._value = continuous.quantize(start, config)
        self._input = ContinuousDialInput(config, hit_radius=self._size / 2.0)

        self.setFocusPolicy(QtCore.Qt.FocusPolicy.StrongFocus)
        self.setFixedSize(self._size + 24, self._size + READOUT_HEIGHT)
        self.setToolTip(config.label or "Dial")
        self.setAccessibleName(config.label or "Dial")
        self._refresh_accessibility()

    # ----------------------------- Properties ---------------------------------

    @property
    def config(self) -> RangeConfig:
        return self._config

    def value(self) -> float:
        return self._value

    def set_value(self, value: float) -> None:
        """Programmatic update; the value is quantized like any other input."""
        snapped = continuous.quantize(value, self._config)
        if snapped != self._value:
            self._value = snapped
            self._refresh_accessibility()
            self.valueChanged.emit(snapped)
        self.update()

    def set_disabled(self, disabled: bool) -> None:
        self._input.disabled = bool(disabled)
        self.setFocusPolicy(
            QtCore.Qt.FocusPolicy.NoFocus
            if disabled
            else QtCore.Qt.FocusPolicy.StrongFocus
        )
        self.update()

    def display_text(self) -> str:
        return continuous.format_value(self._value, self._config)

    # ----------------------------- Interaction --------------------------------

    def _dispatch(self, event: DialEvent) -> None:
        out = self._input.handle(event, self._value)
        if out is None:
            return
        self._value = float(out.value)
        self._refresh_accessibility()
        self.valueChanged.emit(self._value)
        self.update()

    def _pointer_event(self, e: QtGui.QMouseEvent, factory: PointerFactory) -> None:
        center = _center_or_none(_knob_rect(self, self._size))
        self._dispatch(factory(qpoint_to_tuple(e.position()), center))

    def mousePressEvent(self, e: QtGui.QMouseEvent) -> None:
        if e.button() == QtCore.Qt.MouseButton.LeftButton:
            self.setFocus(QtCore.Qt.FocusReason.MouseFocusReason)
            self._pointer_event(e, DialEvent.pointer_down)
        e.accept()

    def mouseMoveEvent(self, e: QtGui.QMouseEvent) -> None:
        # Qt keeps delivering moves to the pressed widget (implicit grab).
        self._pointer_event(e, DialEvent.pointer_move)

    def mouseReleaseEvent(self, e: QtGui.QMouseEvent) -> None:
        if e.button() == QtCore.Qt.MouseButton.LeftButton:
            self._pointer_event(e, DialEvent.pointer_up)
        e.accept()

    def hideEvent(self, e: QtGui.QHideEvent) -> None:
        self._dispatch(DialEvent.pointer_cancel())
        super().hideEvent(e)

    def keyPressEvent(self, e: QtGui.QKeyEvent) -> None:
        command = continuous_command_for_key(e.key())
        if command is None:
            super().keyPressEvent(e)
            return
        self._dispatch(DialEvent.key(command))
        e.accept()

    def _refresh_accessibility(self) -> None:
        self.setAccessibleDescription(self.display_text())

    # ----------------------------- Painting -----------------------------------

    def paintEvent(self, e: QtGui.QPaintEvent) -> None:
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing, True)

        rect = _knob_rect(self, self._size)
        enabled = not self._input.disabled
        rotation = continuous.angle_for_value(self._value, self._config)
        _paint_knob(painter, rect, rotation, enabled)

        if self.hasFocus():
            focus_pen = QtGui.QPen(QtGui.QColor(0, 170, 255, 200))
            focus_pen.setWidth(2)
            painter.setPen(focus_pen)
            painter.setBrush(QtCore.Qt.BrushStyle.NoBrush)
            painter.drawEllipse(rect.adjusted(1, 1, -1, -1))

        readout = QtCore.QRectF(0, self._size, self.width(), READOUT_HEIGHT)
        text_color = self.palette().color(QtGui.QPalette.ColorRole.WindowText)
        painter.setPen(QtGui.QPen(text_color))
        align = QtCore.Qt.AlignmentFlag.AlignCenter
        painter.drawText(readout, align, self.display_text())


# --------------------------------- Mode Dial ----------------------------------


class ModeDialWidget(QtWidgets.QWidget):
    """Rotating knob inside a fixed ring of mode labels.

    Dragging turns the knob freely and settles on the nearest label on
    release; clicking a label selects it directly.
    """

    modeChanged = QtCore.Signal(str)

    LABEL_HIT_PX = 14.0

    def __init__(
        self,
        config: SelectionConfig,
        mode: Optional[str] = None,
        size: int = 56,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._config = config
        self._size = max(24, int(size))
        if mode is None:
            mode = config.labels[0]
        self._mode = discrete.apply_direct_select(mode, config)
        self._rotation = discrete.rotation_for_label(self._mode, config)
        self._input = DiscreteDialInput(config, hit_radius=self._size / 2.0)

        outer = int(round(self._size * 2.2))
        self.setFixedSize(outer, outer + READOUT_HEIGHT)
        self.setFocusPolicy(QtCore.Qt.FocusPolicy.StrongFocus)
        self.setToolTip("Mode dial")
        self.setAccessibleName("Program/Mode Dial")

    def mode(self) -> str:
        return self._mode

    def rotation(self) -> float:
        return self._rotation

    def set_mode(self, mode: str) -> None:
        self._dispatch(DialEvent.direct_select(mode))

    # ----------------------------- Geometry -----------------------------------

    def _ring_rect(self) -> QtCore.QRectF:
        side = float(self.width())
        return QtCore.QRectF(0.0, 0.0, side, side)

    def _knob_rect(self) -> QtCore.QRectF:
        ring = self._ring_rect()
        half = self._size / 2.0
        c = ring.center()
        return QtCore.QRectF(c.x() - half, c.y() - half, self._size, self._size)

    def _label_positions(self) -> Dict[str, Point]:
        center = _center_or_none(self._ring_rect())
        if center is None:
            return {}
        radius = self._size / 2.0 * 1.32
        return discrete.label_positions(self._config, center, radius)

    def _label_at(self, pos: Point) -> Optional[str]:
        for label, (x, y) in self._label_positions().items():
            if math.hypot(pos[0] - x, pos[1] - y) <= self.LABEL_HIT_PX:
                return label
        return None

    # ----------------------------- Interaction --------------------------------

    def _dispatch(self, event: DialEvent) -> None:
        out: Optional[DialOutput] = self._input.handle(event, self._mode)
        if out is None:
            return
        self._rotation = out.rotation
        if out.committed:
            changed = out.value != self._mode
            self._mode = str(out.value)
            self.setAccessibleDescription(self._mode)
            if changed:
                self.modeChanged.emit(self._mode)
        self.update()

    def mousePressEvent(self, e: QtGui.QMouseEvent) -> None:
        if e.button() != QtCore.Qt.MouseButton.LeftButton:
            e.ignore()
            return
        self.setFocus(QtCore.Qt.FocusReason.MouseFocusReason)
        pos = qpoint_to_tuple(e.position())
        label = self._label_at(pos)
        if label is not None:
            self._dispatch(DialEvent.direct_select(label))
        else:
            center = _center_or_none(self._knob_rect())
            self._dispatch(DialEvent.pointer_down(pos, center))
        e.accept()

    def mouseMoveEvent(self, e: QtGui.QMouseEvent) -> None:
        center = _center_or_none(self._knob_rect())
        self._dispatch(DialEvent.pointer_move(qpoint_to_tuple(e.position()), center))

    def mouseReleaseEvent(self, e: QtGui.QMouseEvent) -> None:
        if e.button() == QtCore.Qt.MouseButton.LeftButton:
            center = _center_or_none(self._knob_rect())
            self._dispatch(DialEvent.pointer_up(qpoint_to_tuple(e.position()), center))
        e.accept()

    def hideEvent(self, e: QtGui.QHideEvent) -> None:
        self._dispatch(DialEvent.pointer_cancel())
        super().hideEvent(e)

    def keyPressEvent(self, e: QtGui.QKeyEvent) -> None:
        command = discrete_command_for_key(e.key())
        if command is None:
            super().keyPressEvent(e)
            return
        self._dispatch(DialEvent.key(command))
        e.accept()

    # ----------------------------- Painting -----------------------------------

    def paintEvent(self, e: QtGui.QPaintEvent) -> None:
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing, True)

        _paint_knob(painter, self._knob_rect(), self._rotation, True)

        font = painter.font()
        font.setBold(True)
        painter.setFont(font)
        metrics = QtGui.QFontMetricsF(font)
        text_color = self.palette().color(QtGui.QPalette.ColorRole.WindowText)
        for label, (x, y) in self._label_positions().items():
            w = metrics.horizontalAdvance(label) + 10.0
            h = metrics.height() + 4.0
            chip = QtCore.QRectF(x - w / 2.0, y - h / 2.0, w, h)
            active = label == self._mode
            if active:
                painter.setPen(QtCore.Qt.PenStyle.NoPen)
                painter.setBrush(QtGui.QBrush(QtGui.QColor(255, 140, 0)))
                painter.drawRoundedRect(chip, 4, 4)
                painter.setPen(QtGui.QPen(QtGui.QColor(0, 0, 0)))
            else:
                painter.setPen(QtGui.QPen(text_color))
            painter.drawText(chip, QtCore.Qt.AlignmentFlag.AlignCenter, label)

        readout = QtCore.QRectF(0, self.width(), self.width(), READOUT_HEIGHT)
        painter.setPen(QtGui.QPen(text_color))
        painter.drawText(readout, QtCore.Qt.AlignmentFlag.AlignCenter, self._mode)


# -------------------------------- Main Window ---------------------------------


class MainWindow(QtWidgets.QWidget):
    def __init__(self, cfg: AppConfig, app_version: str) -> None:
        super().__init__(None)
        self.setWindowTitle(f"rotary_input {app_version}")

        self.mode_dial = ModeDialWidget(cfg.modes)
        self.dials: List[RotaryDialWidget] = []

        dial_row = QtWidgets.QHBoxLayout()
        for dial_cfg in cfg.dials:
            column = QtWidgets.QVBoxLayout()
            caption = QtWidgets.QLabel(dial_cfg.label)
            caption.setAlignment(QtCore.Qt.AlignmentFlag.AlignHCenter)
            dial = RotaryDialWidget(dial_cfg)
            dial.valueChanged.connect(self._refresh_status)
            column.addWidget(caption)
            column.addWidget(dial, 0, QtCore.Qt.AlignmentFlag.AlignHCenter)
            dial_row.addLayout(column)
            self.dials.append(dial)

        self.status = QtWidgets.QLabel()
        self.mode_dial.modeChanged.connect(self._refresh_status)

        layout = QtWidgets.QVBoxLayout(self)
        layout.addWidget(self.mode_dial, 0, QtCore.Qt.AlignmentFlag.AlignHCenter)
        layout.addLayout(dial_row)
        layout.addWidget(self.status)
        self._refresh_status()

    def _refresh_status(self) -> None:
        parts = [f"Mode {self.mode_dial.mode()}"]
        for dial in self.dials:
            name = dial.config.label or "Dial"
            parts.append(f"{name} {dial.display_text()}")
        self.status.setText("  |  ".join(parts))


# ---------------------------- Main Controller ---------------------------------


class MainController(QtCore.QObject):
    def __init__(self, app: QtWidgets.QApplication) -> None:
        super().__init__(None)
        self.app = app
        self.cfg = self._load_config()
        self._app_version = app.applicationVersion() or APP_VERSION
        self.window = MainWindow(self.cfg, self._app_version)
        self.window.show()

    # ---------------------------- Config I/O ----------------------------------

    def _config_path(self) -> Path:
        home = Path.home()
        return home / ".rotary_input_config.json"

    def _load_config(self) -> AppConfig:
        p = self._config_path()
        if p.exists():
            try:
                cfg = AppConfig.from_json(p.read_text(encoding="utf-8"))
            except (OSError, ConfigError) as exc:
                logger.warning("Ignoring unreadable config %s: %s", p, exc)
            else:
                logger.info("Loaded dial configuration from %s", p)
                return cfg
        return AppConfig()


# ---------------------------------- Main --------------------------------------


def main() -> None:
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName("rotary_input")
    app.setApplicationVersion(APP_VERSION)

    ctrl = MainController(app)  # noqa: F841
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
