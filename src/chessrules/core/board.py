"""Board - the live game: position, history, move list and rule checks."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace

from chessrules.core.castling import Castling, geometry_for_king_move
from chessrules.core.config import RulesConfig
from chessrules.core.enums import (
    BrowseType,
    CastlingRight,
    Color,
    Disambiguation,
    GameState,
    MoveType,
    PieceType,
)
from chessrules.core.errors import (
    IllegalMoveError,
    InvalidPositionError,
    InvariantViolation,
    SetupModeError,
)
from chessrules.core.history import HistoryStack
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.move_list import MoveList
from chessrules.core.piece import Piece
from chessrules.core.piece_set import PieceSet
from chessrules.core.rules import Rules
from chessrules.core.snapshot import PositionSnapshot
from chessrules.core.types import (
    Square,
    file_of,
    is_valid_square,
    make_square,
    rank_of,
    relative_rank,
    square_name,
)
from chessrules.core.zobrist import PositionHasher

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class _UndoRecord:
    """State saved before each raw move so it can be taken back."""

    castling: CastlingRight
    en_passant: Square | None
    halfmove_clock: int
    fullmove_number: int
    captured: Piece | None = None
    capture_sq: Square | None = None
    rook_from: Square | None = None
    rook_to: Square | None = None


def _check_loadable(snapshot: PositionSnapshot) -> None:
    kings = {Color.WHITE: 0, Color.BLACK: 0}
    for sq, piece in snapshot.pieces().items():
        if piece.is_king:
            kings[piece.color] += 1
        elif piece.is_pawn and rank_of(sq) in (0, 7):
            raise InvalidPositionError(f"Pawn on back rank: {piece} at {square_name(sq)}")
    for color, count in kings.items():
        if count != 1:
            raise InvalidPositionError(f"Expected one {color.name} king, found {count}")
    scratch = Board()
    scratch._restore(snapshot)
    waiting = snapshot.side_to_move.opposite
    if scratch.is_in_check(waiting):
        raise InvalidPositionError(
            f"{waiting.name} king is in check with {snapshot.side_to_move.name} to move"
        )


class Board:
    """One chess game in progress.

    The board owns the live position, the snapshots of every earlier
    position, the list of moves played and the repetition counts. It starts
    empty; :meth:`load_position` sets it up. Player moves are validated and
    classified; the raw :meth:`make_move` / :meth:`undo_move` pair is what
    legality simulation and perft use.
    """

    __slots__ = (
        "_config",
        "_pieces",
        "_castling",
        "_en_passant",
        "_playing_color",
        "_halfmove_clock",
        "_fullmove_number",
        "_captured",
        "_history",
        "_move_list",
        "_hasher",
        "_setup_mode",
        "_state",
        "_undo_stack",
        "_generator",
    )

    def __init__(self, config: RulesConfig | None = None) -> None:
        self._config = config or RulesConfig.standard()
        self._pieces = PieceSet()
        self._castling = Castling()
        self._en_passant: Square | None = None
        self._playing_color = Color.WHITE
        self._halfmove_clock = 0
        self._fullmove_number = 1
        self._captured: list[Piece] = []
        self._history = HistoryStack()
        self._move_list = MoveList()
        self._hasher = PositionHasher()
        self._setup_mode = False
        self._state = GameState.PLAYING
        self._undo_stack: list[_UndoRecord] = []
        self._generator = MoveGenerator(self)
        self._history.reset(self.snapshot())

    # ── Loading ──────────────────────────────────────────────────────────

    def load_position(self, snapshot: PositionSnapshot) -> GameState:
        """Start a new game from *snapshot*; all history is discarded.

        Castling rights whose king or rook is away from its original square
        are dropped.
        """
        _check_loadable(snapshot)
        self._restore(snapshot)
        dropped = self._castling.prune(self._pieces)
        if dropped:
            _LOGGER.warning(
                "Dropping impossible castling rights %s",
                Castling(dropped),
            )
        self._move_list.clear()
        self._hasher.clear()
        self._history.reset(self.snapshot())
        occurrences = self._hasher.record_occurrence(self._hasher.hash(self))
        self._state = self._evaluate(occurrences)
        _LOGGER.debug("Loaded position (%s), state %s", snapshot, self._state.name)
        return self._state

    def load_game(self, snapshot: PositionSnapshot, moves: Iterable[Move]) -> GameState:
        """Load *snapshot* and replay *moves* as player moves."""
        state = self.load_position(snapshot)
        for move in moves:
            state = self.make_player_move(move.from_sq, move.to_sq, move.promotion)
        return state

    def snapshot(self) -> PositionSnapshot:
        """The displayed position as an immutable snapshot."""
        return PositionSnapshot(
            self._pieces.placement(),
            self._playing_color,
            self._castling.rights,
            self._en_passant,
            self._halfmove_clock,
            self._fullmove_number,
            tuple(self._captured),
        )

    # ── Player moves ─────────────────────────────────────────────────────

    def make_player_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> GameState:
        """Validate and play a move for the side to move.

        Raises :class:`IllegalMoveError` and leaves the board untouched when
        the move cannot be played.
        """
        if self._setup_mode:
            raise IllegalMoveError("Cannot play moves in setup mode")
        if self._history.is_browsing:
            raise IllegalMoveError("Cannot play moves while browsing the move list")
        if not (is_valid_square(from_sq) and is_valid_square(to_sq)):
            raise IllegalMoveError(f"Invalid squares: {from_sq} -> {to_sq}")
        piece = self._pieces[from_sq]
        if piece is None:
            raise IllegalMoveError(f"No piece on {square_name(from_sq)}")
        if piece.color != self._playing_color:
            raise IllegalMoveError(
                f"It is {self._playing_color}'s turn, cannot move {piece} "
                f"on {square_name(from_sq)}"
            )
        move = self._generator.find_legal_move(piece, from_sq, to_sq, promotion)
        if move is None:
            raise IllegalMoveError(
                f"Illegal move: {piece} {square_name(from_sq)}-{square_name(to_sq)}"
            )

        disambiguation = self._disambiguation(move)
        self._apply(move)

        result = self._generator.check_game_state(self._playing_color)
        flags = move.flags
        if result == GameState.CHECK:
            flags |= MoveType.CHECK
        elif result == GameState.CHECKMATE:
            flags |= MoveType.CHECKMATE
        move = replace(move, flags=flags, disambiguation=disambiguation)

        occurrences = self._hasher.record_occurrence(self._hasher.hash(self))
        self._state = Rules.classify(
            result, occurrences, self._halfmove_clock, self._pieces, self._config
        )
        self._history.push(self.snapshot())
        self._move_list.add_move(move)
        _LOGGER.debug("Played %s, state %s", move, self._state.name)
        return self._state

    def undo_player_move(self) -> Move:
        """Take back the last move played and return it."""
        if self._setup_mode:
            raise IllegalMoveError("Cannot undo moves in setup mode")
        if not self._move_list:
            raise IllegalMoveError("No move to undo")
        self._return_to_live()
        self._hasher.forget(self._hasher.hash(self))
        self._restore(self._history.pop_last())
        move = self._move_list.remove_last()
        self._state = self._evaluate(self._hasher.count(self._hasher.hash(self)))
        _LOGGER.debug("Took back %s", move)
        return move

    def browse_move_list(self, browse_type: BrowseType) -> PositionSnapshot:
        """Show the position after the move the cursor lands on."""
        if self._setup_mode:
            raise IllegalMoveError("Cannot browse the move list in setup mode")
        index = self._move_list.browse(browse_type)
        shown = self._history.restore_to(index + 1)
        self._restore(shown)
        _LOGGER.debug("Browsing %s to move index %d", browse_type.name, index)
        return shown

    @property
    def is_browsing(self) -> bool:
        return self._history.is_browsing

    def _return_to_live(self) -> None:
        if self._history.is_browsing:
            self._history.restore_to(len(self._history))
            self._move_list.browse(BrowseType.LAST)
            self._restore(self._history.live)

    # ── Raw moves ────────────────────────────────────────────────────────

    def make_move(self, move: Move) -> None:
        """Play *move* without validating it; :meth:`undo_move` takes it back."""
        self._undo_stack.append(self._apply(move))

    def undo_move(self, move: Move) -> None:
        """Take back the last :meth:`make_move`."""
        if not self._undo_stack:
            raise InvariantViolation(f"No raw move to take back for {move.uci}")
        self._revert(move, self._undo_stack.pop())

    def _apply(self, move: Move) -> _UndoRecord:
        pieces = self._pieces
        piece = move.piece
        if pieces[move.from_sq] != piece:
            raise InvariantViolation(
                f"Expected {piece} on {square_name(move.from_sq)}, "
                f"found {pieces[move.from_sq]}"
            )
        record = _UndoRecord(
            self._castling.rights,
            self._en_passant,
            self._halfmove_clock,
            self._fullmove_number,
        )

        capture_sq: Square = move.to_sq
        if (
            piece.is_pawn
            and file_of(move.from_sq) != file_of(move.to_sq)
            and pieces[move.to_sq] is None
        ):
            capture_sq = make_square(file_of(move.to_sq), rank_of(move.from_sq))

        pieces.remove(move.from_sq)
        captured = pieces[capture_sq]
        if captured is not None:
            pieces.remove(capture_sq)
            record.captured = captured
            record.capture_sq = capture_sq
            self._captured.append(captured)
            self._castling.piece_left(captured, capture_sq)

        placed = piece.with_type(move.promotion) if move.promotion is not None else piece
        pieces.set(placed, move.to_sq)

        if piece.is_king:
            geometry = geometry_for_king_move(piece.color, move.from_sq, move.to_sq)
            if geometry is not None:
                rook = pieces[geometry.rook_from]
                if rook is None or not rook.is_rook or rook.color != piece.color:
                    raise InvariantViolation(
                        f"No {piece.color.name} rook on {square_name(geometry.rook_from)} "
                        "to castle with"
                    )
                pieces.remove(geometry.rook_from)
                pieces.set(rook, geometry.rook_to)
                record.rook_from = geometry.rook_from
                record.rook_to = geometry.rook_to
        self._castling.piece_left(piece, move.from_sq)

        if piece.is_pawn and abs(move.to_sq - move.from_sq) == 16:
            self._en_passant = (move.from_sq + move.to_sq) // 2
        else:
            self._en_passant = None

        if piece.is_pawn or captured is not None:
            self._halfmove_clock = 0
        else:
            self._halfmove_clock += 1
        if piece.color == Color.BLACK:
            self._fullmove_number += 1
        self._playing_color = piece.color.opposite
        return record

    def _revert(self, move: Move, record: _UndoRecord) -> None:
        pieces = self._pieces
        pieces.remove(move.to_sq)
        pieces.set(move.piece, move.from_sq)
        if record.rook_from is not None and record.rook_to is not None:
            pieces.set(pieces.remove(record.rook_to), record.rook_from)
        if record.captured is not None and record.capture_sq is not None:
            pieces.set(record.captured, record.capture_sq)
            self._captured.pop()
        self._castling.reset(record.castling)
        self._en_passant = record.en_passant
        self._halfmove_clock = record.halfmove_clock
        self._fullmove_number = record.fullmove_number
        self._playing_color = move.piece.color

    def _restore(self, snapshot: PositionSnapshot) -> None:
        self._pieces.clear()
        for sq, piece in snapshot.pieces().items():
            self._pieces.set(piece, sq)
        self._castling.reset(snapshot.castling)
        self._en_passant = snapshot.en_passant
        self._playing_color = snapshot.side_to_move
        self._halfmove_clock = snapshot.halfmove_clock
        self._fullmove_number = snapshot.fullmove_number
        self._captured = list(snapshot.captured)
        self._undo_stack.clear()

    # ── Game state ───────────────────────────────────────────────────────

    def _evaluate(self, occurrences: int) -> GameState:
        result = self._generator.check_game_state(self._playing_color)
        return Rules.classify(
            result, occurrences, self._halfmove_clock, self._pieces, self._config
        )

    @property
    def game_state(self) -> GameState:
        """State reached by the last move played (or by the loaded position)."""
        return self._state

    def repetition_count(self) -> int:
        """How often the displayed position has occurred in this game."""
        return self._hasher.count(self._hasher.hash(self))

    def _disambiguation(self, move: Move) -> Disambiguation:
        piece = move.piece
        if piece.is_pawn or piece.is_king:
            return Disambiguation.NONE
        other = same_file = same_rank = False
        for sq in self._pieces.group_of(piece):
            if sq == move.from_sq or not self._generator.is_legal_move(piece, sq, move.to_sq):
                continue
            other = True
            same_file |= file_of(sq) == file_of(move.from_sq)
            same_rank |= rank_of(sq) == rank_of(move.from_sq)
        if not other:
            return Disambiguation.NONE
        if not same_file:
            return Disambiguation.FILE
        if not same_rank:
            return Disambiguation.RANK
        return Disambiguation.BOTH

    # ── Move queries ─────────────────────────────────────────────────────

    def find_legal_moves(self, piece: Piece, from_sq: Square) -> list[Move]:
        return self._generator.legal_moves_from(piece, from_sq)

    def legal_moves(self) -> list[Move]:
        """Every legal move of the side to move."""
        return self._generator.legal_moves(self._playing_color)

    def is_legal_move(
        self,
        piece: Piece,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        return self._generator.is_legal_move(piece, from_sq, to_sq, promotion)

    def is_pinned(self, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
        return self._generator.is_pinned(piece, from_sq, to_sq)

    def all_square_attacks(self, square: Square, color: Color) -> list[Square]:
        return self._generator.all_square_attacks(square, color)

    def is_in_check(self, color: Color | None = None) -> bool:
        return self._generator.is_in_check(self._playing_color if color is None else color)

    def resolve_origin(
        self,
        piece: Piece,
        to_sq: Square,
        file: int | None = None,
        rank: int | None = None,
        promotion: PieceType | None = None,
    ) -> Square | None:
        """Square from which *piece* can legally reach *to_sq*.

        *file* and *rank* narrow the search when a move names only part of
        its origin. Returns ``None`` if no piece qualifies.
        """
        for sq in self._pieces.group_of(piece):
            if file is not None and file_of(sq) != file:
                continue
            if rank is not None and rank_of(sq) != rank:
                continue
            if self._generator.is_legal_move(piece, sq, to_sq, promotion):
                return sq
        return None

    # ── Position queries ─────────────────────────────────────────────────

    @property
    def pieces(self) -> PieceSet:
        return self._pieces

    @property
    def castling(self) -> Castling:
        return self._castling

    @property
    def config(self) -> RulesConfig:
        return self._config

    @property
    def generator(self) -> MoveGenerator:
        return self._generator

    def is_square_empty(self, sq: Square) -> bool:
        return self._pieces[sq] is None

    def piece_at(self, sq: Square) -> Piece | None:
        return self._pieces[sq]

    @property
    def castling_rights(self) -> CastlingRight:
        return self._castling.rights

    @property
    def en_passant(self) -> Square | None:
        return self._en_passant

    @property
    def playing_color(self) -> Color:
        return self._playing_color

    @property
    def halfmove_clock(self) -> int:
        return self._halfmove_clock

    @property
    def fullmove_number(self) -> int:
        return self._fullmove_number

    @property
    def captured_pieces(self) -> tuple[Piece, ...]:
        return tuple(self._captured)

    @property
    def move_list(self) -> MoveList:
        return self._move_list

    @property
    def history(self) -> HistoryStack:
        return self._history

    @property
    def current_move(self) -> Move | None:
        return self._move_list.current_move

    def king_square(self, color: Color) -> Square:
        return self._pieces.king_square(color)

    def group_squares(self, piece: Piece) -> list[Square]:
        return self._pieces.group_of(piece)

    # ── Setup mode ───────────────────────────────────────────────────────

    @property
    def setup_mode(self) -> bool:
        return self._setup_mode

    def set_setup_mode(self, value: bool) -> None:
        """Enter or leave free placement.

        Leaving setup mode reloads the edited position as a new game, so it
        raises :class:`InvalidPositionError` (and stays in setup mode) when
        the edited position cannot be played.
        """
        if value == self._setup_mode:
            return
        if value:
            self._return_to_live()
            self._setup_mode = True
            _LOGGER.debug("Entered setup mode")
            return
        self.load_position(replace(self.snapshot(), captured=()))
        self._setup_mode = False
        _LOGGER.debug("Left setup mode")

    def move_piece_in_setup_mode(self, from_sq: Square, to_sq: Square) -> None:
        """Relocate the piece on *from_sq*, replacing whatever is on *to_sq*."""
        self._require_setup_mode()
        piece = self._pieces[from_sq]
        if piece is None:
            raise SetupModeError(f"No piece on {square_name(from_sq)}")
        if from_sq == to_sq:
            return
        self._check_placement(piece, to_sq)
        self._pieces.remove(from_sq)
        if self._pieces[to_sq] is not None:
            self._pieces.remove(to_sq)
        self._pieces.set(piece, to_sq)

    def set_piece_in_setup_mode(self, piece: Piece | None, sq: Square) -> None:
        """Put *piece* on *sq*, or clear *sq* when *piece* is ``None``."""
        self._require_setup_mode()
        existing = self._pieces[sq]
        if existing is not None and existing.is_king:
            raise SetupModeError(f"Cannot remove the {existing.color} king on {square_name(sq)}")
        if piece is not None:
            self._check_placement(piece, sq)
            if piece.is_king and self._pieces.find_king(piece.color) is not None:
                raise SetupModeError(f"The {piece.color} king is already on the board")
        if existing is not None:
            self._pieces.remove(sq)
        if piece is not None:
            self._pieces.set(piece, sq)

    def _require_setup_mode(self) -> None:
        if not self._setup_mode:
            raise SetupModeError("Board is not in setup mode")

    def _check_placement(self, piece: Piece, sq: Square) -> None:
        if piece.is_pawn and relative_rank(piece.color, sq) in (0, 7):
            raise SetupModeError(f"Cannot place a pawn on {square_name(sq)}")
        occupant = self._pieces[sq]
        if occupant is not None and occupant.is_king:
            raise SetupModeError(f"Cannot replace the {occupant.color} king on {square_name(sq)}")

    # ── Dunder helpers ───────────────────────────────────────────────────

    def __repr__(self) -> str:
        return f"{self._pieces!r}\n{self._playing_color} to move, castling {self._castling}"
