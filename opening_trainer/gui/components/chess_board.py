# opening_trainer/gui/components/chess_board.py
# -*- coding: utf-8 -*-
import chess
from PyQt5 import QtCore, QtGui, QtWidgets
from PyQt5.QtCore import Qt
from typing import Dict, Optional, Tuple

from ...core.position_engine import BoardView, Feedback, MoveAttempt
import logging

logger = logging.getLogger(__name__)


class ChessBoardWidget(QtWidgets.QGraphicsView):
    moveAttempted = QtCore.pyqtSignal(object)  # MoveAttempt

    COLORS = {
        "light_square": QtGui.QColor("#F0D9B5"),
        "dark_square": QtGui.QColor("#B58863"),
        "selected": QtGui.QColor(30, 144, 255, 150),
        "hint_from": QtGui.QColor(144, 238, 144, 200),
        "frame": QtGui.QColor("#333333"),
        "frame_correct": QtGui.QColor("#22C55E"),
        "frame_incorrect": QtGui.QColor("#EF4444"),
        "white_piece": QtGui.QColor("#FFFFFF"),
        "black_piece": QtGui.QColor("#111111"),
    }

    # 以 Unicode 棋子字元繪製，不需額外圖檔
    GLYPHS: Dict[int, str] = {
        chess.KING: "♚",
        chess.QUEEN: "♛",
        chess.ROOK: "♜",
        chess.BISHOP: "♝",
        chess.KNIGHT: "♞",
        chess.PAWN: "♟",
    }

    FRAME_WIDTH = 4.0

    def __init__(self, parent=None):
        super().__init__(parent)
        self.board = chess.Board()
        self.square_size = 75.0  # 保持為 float 以進行精確計算
        self.flipped = False
        self.allow_user_input = False
        self.selected_square: Optional[int] = None
        self.hint_square: Optional[int] = None
        self.feedback = Feedback.NEUTRAL

        self.setScene(QtWidgets.QGraphicsScene(self))
        self.setRenderHint(QtGui.QPainter.Antialiasing)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self.draw_board()

    def set_view(self, view: BoardView):
        """依模式提供的 BoardView 重繪整個棋盤。"""
        self.board = chess.Board(view.fen)
        self.flipped = view.orientation == chess.BLACK
        self.allow_user_input = view.interactive
        self.hint_square = chess.parse_square(view.hint_square) if view.hint_square else None
        self.feedback = view.feedback
        if not view.interactive:
            self.selected_square = None
        self.draw_board()

    def draw_board(self):
        self.scene().clear()
        for square in chess.SQUARES:
            file, rank = chess.square_file(square), chess.square_rank(square)
            is_light = (file + rank) % 2 != 0
            brush_color = self.COLORS["light_square"] if is_light else self.COLORS["dark_square"]
            if square == self.hint_square:
                brush_color = self.COLORS["hint_from"]
            if square == self.selected_square:
                brush_color = self.COLORS["selected"]

            x, y = self._get_draw_coords(square)
            rect = QtCore.QRectF(x, y, self.square_size, self.square_size)
            self.scene().addRect(rect, QtGui.QPen(Qt.NoPen), QtGui.QBrush(brush_color))

            piece = self.board.piece_at(square)
            if piece:
                self._draw_piece(piece, x, y)

        # 外框顏色即走法回饋：綠=正確、紅=錯誤
        frame_color = {
            Feedback.CORRECT: self.COLORS["frame_correct"],
            Feedback.INCORRECT: self.COLORS["frame_incorrect"],
        }.get(self.feedback, self.COLORS["frame"])
        pen = QtGui.QPen(frame_color)
        pen.setWidthF(self.FRAME_WIDTH)
        size = self.square_size * 8
        self.scene().addRect(QtCore.QRectF(0, 0, size, size), pen, QtGui.QBrush(Qt.NoBrush))

    def _draw_piece(self, piece: chess.Piece, x: float, y: float):
        item = QtWidgets.QGraphicsSimpleTextItem(self.GLYPHS[piece.piece_type])
        font = QtGui.QFont()
        font.setPixelSize(max(1, int(self.square_size * 0.8)))
        item.setFont(font)
        color = self.COLORS["white_piece"] if piece.color == chess.WHITE else self.COLORS["black_piece"]
        item.setBrush(QtGui.QBrush(color))
        outline = QtGui.QPen(self.COLORS["black_piece"] if piece.color == chess.WHITE else self.COLORS["white_piece"])
        outline.setWidthF(1.0)
        item.setPen(outline)
        # 置中於格子內
        bounds = item.boundingRect()
        item.setPos(x + (self.square_size - bounds.width()) / 2, y + (self.square_size - bounds.height()) / 2)
        self.scene().addItem(item)

    def resizeEvent(self, event: QtGui.QResizeEvent):
        super().resizeEvent(event)
        self.scene().setSceneRect(0, 0, self.width(), self.height())
        self.square_size = min(self.width(), self.height()) / 8.0
        self.draw_board()

    def heightForWidth(self, width: int) -> int:
        return width

    def _get_draw_coords(self, square: int) -> Tuple[float, float]:
        file, rank = chess.square_file(square), chess.square_rank(square)
        draw_file = 7 - file if self.flipped else file
        draw_rank = rank if self.flipped else 7 - rank
        return draw_file * self.square_size, draw_rank * self.square_size

    def mousePressEvent(self, event: QtGui.QMouseEvent):
        if not self.allow_user_input or event.button() != Qt.LeftButton:
            return

        pos = self.mapToScene(event.pos())
        # 避免除以零的錯誤
        if self.square_size == 0: return

        file, rank = int(pos.x() // self.square_size), int(pos.y() // self.square_size)

        if not (0 <= file < 8 and 0 <= rank < 8): return

        clicked_file, clicked_rank = (7 - file, rank) if self.flipped else (file, 7 - rank)
        clicked_square = chess.square(clicked_file, clicked_rank)

        piece = self.board.piece_at(clicked_square)

        if self.selected_square is None:
            if piece and piece.color == self.board.turn:
                self.selected_square = clicked_square
                self.draw_board()
            return

        if piece and piece.color == self.board.turn and clicked_square != self.selected_square:
            # 改選同色的另一顆棋子
            self.selected_square = clicked_square
            self.draw_board()
            return

        attempt = MoveAttempt(chess.square_name(self.selected_square), chess.square_name(clicked_square))
        self.selected_square = None
        self.draw_board()
        if attempt.from_square != attempt.to_square:
            logger.debug(f"棋盤走法嘗試: {attempt.from_square}{attempt.to_square}")
            self.moveAttempted.emit(attempt)
