"""
Interactive charge editor on matplotlib events.

Click on the canvas to add a negative charge, Ctrl+click (Cmd+click on
macOS) to add a positive one, and drag an existing charge to move it.
Every change triggers a full synchronous redraw of the scene.
"""

import logging
from typing import Optional, Tuple

import matplotlib.pyplot as plt

from ..parameters import SimulationParameters
from ..physics.charges import ChargeSet
from ..rendering.scene import SceneComposer
from ..utils.plotting import MatplotlibSurface, PlotConfig


logger = logging.getLogger(__name__)

POSITIVE_MODIFIERS = ('control', 'ctrl', 'cmd', 'super')


class ChargeEditor:
    """
    Owns the charge set and redraws the scene whenever it changes.

    The composer only ever sees a snapshot of the charges taken at the
    start of each render pass.
    """

    def __init__(self,
                 params: Optional[SimulationParameters] = None,
                 charges: Optional[ChargeSet] = None,
                 ax: Optional[plt.Axes] = None,
                 plot_config: Optional[PlotConfig] = None):
        self.params = params or SimulationParameters()
        self.charges = charges if charges is not None else ChargeSet()
        self.composer = SceneComposer(self.params)
        viewport = self.params.viewport
        self.surface = MatplotlibSurface(viewport.width, viewport.height, ax=ax, config=plot_config)

        self.drag_index: Optional[int] = None
        self._press: Optional[Tuple[float, float, bool]] = None
        self._connections = []

    @property
    def is_dragging(self) -> bool:
        return self.drag_index is not None

    def connect(self) -> None:
        """Attach mouse handlers to the figure canvas."""
        canvas = self.surface.figure.canvas
        self._connections = [
            canvas.mpl_connect('button_press_event', self.on_press),
            canvas.mpl_connect('motion_notify_event', self.on_motion),
            canvas.mpl_connect('button_release_event', self.on_release),
            canvas.mpl_connect('axes_leave_event', self.on_leave),
        ]

    def disconnect(self) -> None:
        canvas = self.surface.figure.canvas
        for cid in self._connections:
            canvas.mpl_disconnect(cid)
        self._connections = []

    def redraw(self) -> None:
        self.composer.draw(self.charges.snapshot(), self.surface)
        self.surface.redraw()

    def on_press(self, event) -> None:
        if event.inaxes is not self.surface.ax or event.button != 1:
            return
        if event.xdata is None or event.ydata is None:
            return

        index = self.charges.find_at(event.xdata, event.ydata, self.params.physics.charge_radius)
        if index is not None:
            self.drag_index = index
            self._press = None
            logger.debug("Dragging charge %d", index)
        else:
            self._press = (event.xdata, event.ydata, self._wants_positive(event))

    def on_motion(self, event) -> None:
        if not self.is_dragging or event.inaxes is not self.surface.ax:
            return
        if event.xdata is None or event.ydata is None:
            return
        self.charges.move(self.drag_index, event.xdata, event.ydata)
        self.redraw()

    def on_release(self, event) -> None:
        if self.is_dragging:
            self.end_drag()
            return
        if self._press is None:
            return

        x, y, is_positive = self._press
        self._press = None
        charge = self.charges.add(x, y, is_positive)
        logger.info("Added %s charge at (%.1f, %.1f)",
                    'positive' if charge.is_positive else 'negative', charge.x, charge.y)
        self.redraw()

    def on_leave(self, event) -> None:
        self._press = None
        if self.is_dragging:
            self.end_drag()

    def end_drag(self) -> None:
        logger.debug("Released charge %d", self.drag_index)
        self.drag_index = None
        self.redraw()

    @staticmethod
    def _wants_positive(event) -> bool:
        key = (getattr(event, 'key', None) or '').lower()
        return any(modifier in key for modifier in POSITIVE_MODIFIERS)

    def show(self) -> None:
        """Connect handlers, draw the initial scene and enter the GUI loop."""
        self.connect()
        self.redraw()
        plt.show()
