"""
Floor Canvas
============
QGraphicsView that paints the active floor and forwards pointer/keyboard
input to the InteractionController.

The scene is rebuilt from the ProjectState on every change signal; no
geometry is ever read back from the graphics items. Scene coordinates are
the absolute pixel coordinates the model stores (background image at 0,0).
"""
import logging
from typing import List, Optional

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QPainter, QPainterPath, QPen, QPixmap, QPolygonF
from PySide6.QtWidgets import QGraphicsScene, QGraphicsView

from floorplantakeoff.config import (
    COLOR_CEILING, COLOR_CEILING_STROKE, COLOR_DRAW_POINT, COLOR_DRAW_SEGMENT, COLOR_EDGE_EXTERIOR,
    COLOR_EDGE_SELECTED, COLOR_SCALE_LINE, COLOR_SPACE, COLOR_SPACE_SELECTED, COLOR_SPACE_SELECTED_STROKE,
    COLOR_SPACE_STROKE, DEFAULT_CANVAS_HEIGHT, DEFAULT_CANVAS_WIDTH, DRAW_POINT_RADIUS, EDGE_HIGHLIGHT_THICKNESS,
    EDGE_OVERLAY_THICKNESS, PAN_STEP, SCALE_LINE_WIDTH, TEMP_EDGE_THICKNESS, VERTEX_HANDLE_SIZE,
)
from floorplantakeoff.controller.hit_testing import HitKind, ceiling_shown
from floorplantakeoff.controller.interaction import (
    CursorHint, DrawCeilingMode, DrawScaleMode, InsertVertexMode, InteractionController, Key
)
from floorplantakeoff.model.geometry_primitives import Point
from floorplantakeoff.model.space import Space

logger = logging.getLogger(__name__)

CURSORS = {
    CursorHint.DEFAULT: Qt.ArrowCursor,
    CursorHint.CROSSHAIR: Qt.CrossCursor,
    CursorHint.POINTER: Qt.PointingHandCursor,
    CursorHint.MOVE: Qt.SizeAllCursor,
}

KEYS = {
    Qt.Key_Escape: Key.ESCAPE,
    Qt.Key_Return: Key.ENTER,
    Qt.Key_Enter: Key.ENTER,
    Qt.Key_Delete: Key.DELETE,
    Qt.Key_Backspace: Key.DELETE,
}


def _color(value) -> QColor:
    if isinstance(value, str):
        return QColor(value)
    return QColor(*value)


def _polygon(points: List[Point]) -> QPolygonF:
    return QPolygonF([QPointF(p.x, p.y) for p in points])


class FloorCanvas(QGraphicsView):
    def __init__(self, controller: InteractionController, parent=None) -> None:
        super().__init__(parent)
        self.controller = controller
        self.setRenderHints(self.renderHints() | QPainter.Antialiasing | QPainter.TextAntialiasing)
        self.setTransformationAnchor(QGraphicsView.AnchorUnderMouse)
        self.setResizeAnchor(QGraphicsView.AnchorViewCenter)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)

        self.scene = QGraphicsScene(self)
        self.setScene(self.scene)

        self._pixmap_cache: dict[str, QPixmap] = {}

        # --- SIGNAL CONNECTIONS ---
        controller.model_changed.connect(self.redraw)
        controller.selection_changed.connect(self.redraw)
        controller.preview_changed.connect(self.redraw)
        controller.floors_changed.connect(self.redraw)
        controller.hover_changed.connect(self._update_cursor)
        controller.mode_changed.connect(self._update_cursor)

        self.redraw()

    # ------------------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------------------

    def _background(self, image_path: Optional[str]) -> Optional[QPixmap]:
        if not image_path:
            return None
        pix = self._pixmap_cache.get(image_path)
        if pix is None:
            pix = QPixmap(image_path)
            if pix.isNull():
                logger.warning(f"Could not load floor image '{image_path}'.")
            self._pixmap_cache[image_path] = pix
        return None if pix.isNull() else pix

    def redraw(self) -> None:
        self.scene.clear()
        floor = self.controller.active_floor()
        if floor is None:
            self.scene.setSceneRect(QRectF(0, 0, DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT))
            return

        pix = self._background(floor.image_path)
        if pix is not None:
            self.scene.addPixmap(pix).setZValue(-10)
            self.scene.setSceneRect(QRectF(pix.rect()))
        else:
            self.scene.setSceneRect(QRectF(0, 0, DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT))

        selected_id = self.controller.selection.space_id
        for space in floor.spaces:
            self._draw_space(space, space.id == selected_id)

        selected = self.controller.selected_space()
        if selected is not None:
            self._draw_selection_overlay(selected)

        scale = floor.scale
        if scale.reference is not None and scale.visible:
            p1, p2 = scale.reference
            pen = QPen(_color(COLOR_SCALE_LINE), SCALE_LINE_WIDTH)
            pen.setCapStyle(Qt.RoundCap)
            self.scene.addLine(p1.x, p1.y, p2.x, p2.y, pen).setZValue(5)
            # draggable endpoints
            half = VERTEX_HANDLE_SIZE / 2
            for p in (p1, p2):
                self.scene.addEllipse(p.x - half, p.y - half, VERTEX_HANDLE_SIZE, VERTEX_HANDLE_SIZE,
                                      QPen(Qt.white, 1), QBrush(_color(COLOR_SCALE_LINE))).setZValue(6)

        self._draw_preview()

    def _draw_space(self, space: Space, is_selected: bool) -> None:
        fill = COLOR_SPACE_SELECTED if is_selected else COLOR_SPACE
        stroke = COLOR_SPACE_SELECTED_STROKE if is_selected else COLOR_SPACE_STROKE
        item = self.scene.addPolygon(_polygon(space.vertices), QPen(_color(stroke), 2), QBrush(_color(fill)))
        item.setZValue(0)

        # exterior walls
        ext_pen = QPen(_color(COLOR_EDGE_EXTERIOR), EDGE_OVERLAY_THICKNESS)
        for i, edge in enumerate(space.edges):
            if edge.is_exterior:
                a, b = space.segment(i)
                self.scene.addLine(a.x, a.y, b.x, b.y, ext_pen).setZValue(1)

        if ceiling_shown(space):
            ceiling = self.scene.addPolygon(
                _polygon(space.ceiling.vertices),
                QPen(_color(COLOR_CEILING_STROKE), 1.5, Qt.DashLine),
                QBrush(_color(COLOR_CEILING)),
            )
            ceiling.setZValue(2)

        # label at the vertex centroid
        cx = sum(v.x for v in space.vertices) / len(space.vertices)
        cy = sum(v.y for v in space.vertices) / len(space.vertices)
        label = self.scene.addSimpleText(space.name or "Room")
        label.setPos(cx - label.boundingRect().width() / 2, cy - label.boundingRect().height() / 2)
        label.setZValue(3)

    def _draw_selection_overlay(self, space: Space) -> None:
        sel = self.controller.selection
        hover = self.controller.hover_target

        if sel.edge_index is not None and sel.edge_index < len(space.edges):
            a, b = space.segment(sel.edge_index)
            pen = QPen(_color(COLOR_EDGE_SELECTED), EDGE_HIGHLIGHT_THICKNESS)
            self.scene.addLine(a.x, a.y, b.x, b.y, pen).setZValue(4)

        # insert mode preview of the edge under the pointer
        if isinstance(self.controller.mode, InsertVertexMode) and hover.is_edge:
            verts = space.ceiling.vertices if hover.kind == HitKind.CEILING_EDGE else space.vertices
            a, b = verts[hover.index], verts[(hover.index + 1) % len(verts)]
            pen = QPen(_color(COLOR_EDGE_SELECTED), EDGE_HIGHLIGHT_THICKNESS, Qt.DashLine)
            self.scene.addLine(a.x, a.y, b.x, b.y, pen).setZValue(4)

        half = VERTEX_HANDLE_SIZE / 2
        for i, v in enumerate(space.vertices):
            selected = sel.vertex_index == i
            brush = QBrush(_color(COLOR_EDGE_SELECTED if selected else COLOR_SPACE_SELECTED_STROKE))
            self.scene.addRect(v.x - half, v.y - half, VERTEX_HANDLE_SIZE, VERTEX_HANDLE_SIZE,
                               QPen(Qt.white, 1), brush).setZValue(6)

        if ceiling_shown(space):
            for i, v in enumerate(space.ceiling.vertices):
                selected = sel.ceiling_vertex_index == i
                brush = QBrush(_color(COLOR_EDGE_SELECTED if selected else COLOR_CEILING_STROKE))
                self.scene.addEllipse(v.x - half, v.y - half, VERTEX_HANDLE_SIZE, VERTEX_HANDLE_SIZE,
                                      QPen(Qt.white, 1), brush).setZValue(6)

    def _draw_preview(self) -> None:
        points = self.controller.draw_points()
        if not points:
            return
        mode = self.controller.mode
        color = _color(COLOR_SCALE_LINE) if isinstance(mode, DrawScaleMode) else _color(COLOR_DRAW_SEGMENT)
        if isinstance(mode, DrawCeilingMode):
            color = _color(COLOR_CEILING_STROKE)
        pen = QPen(color, TEMP_EDGE_THICKNESS)

        path = QPainterPath(QPointF(points[0].x, points[0].y))
        for p in points[1:]:
            path.lineTo(p.x, p.y)
        pointer = self.controller.pointer
        if pointer is not None:
            path.lineTo(pointer.x, pointer.y)
        self.scene.addPath(path, pen).setZValue(7)

        r = DRAW_POINT_RADIUS
        for p in points:
            self.scene.addEllipse(p.x - r, p.y - r, 2 * r, 2 * r, QPen(Qt.NoPen),
                                  QBrush(_color(COLOR_DRAW_POINT))).setZValue(8)

    def _update_cursor(self, *_) -> None:
        self.viewport().setCursor(CURSORS[self.controller.cursor_hint()])

    # ------------------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------------------

    def _scene_point(self, event) -> Point:
        pos = self.mapToScene(event.position().toPoint())
        return Point(pos.x(), pos.y())

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.LeftButton:
            self.controller.pointer_down(self._scene_point(event))
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event) -> None:
        self.controller.pointer_move(self._scene_point(event))
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event) -> None:
        if event.button() == Qt.LeftButton:
            self.controller.pointer_up(self._scene_point(event))
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def wheelEvent(self, event) -> None:
        factor = 1.15 if event.angleDelta().y() > 0 else 1 / 1.15
        self.scale(factor, factor)

    def keyPressEvent(self, event) -> None:
        key = KEYS.get(event.key())
        if key is not None:
            self.controller.key_press(key)
            return

        # arrow keys pan the view
        h, v = self.horizontalScrollBar(), self.verticalScrollBar()
        if event.key() == Qt.Key_Left:
            h.setValue(h.value() - PAN_STEP)
        elif event.key() == Qt.Key_Right:
            h.setValue(h.value() + PAN_STEP)
        elif event.key() == Qt.Key_Up:
            v.setValue(v.value() - PAN_STEP)
        elif event.key() == Qt.Key_Down:
            v.setValue(v.value() + PAN_STEP)
        else:
            super().keyPressEvent(event)
