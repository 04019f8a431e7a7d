"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessrules.core.castling import CASTLING_GEOMETRY, CastlingGeometry
from chessrules.core.direction import (
    ALL_RAY_DIRECTIONS,
    DIAGONAL_DIRECTIONS,
    STRAIGHT_DIRECTIONS,
    Direction,
)
from chessrules.core.enums import Color, GameState, MoveType, PieceType
from chessrules.core.errors import IllegalMoveError
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.types import (
    Square,
    file_distance,
    file_of,
    make_square,
    rank_of,
    relative_rank,
)

if TYPE_CHECKING:
    from chessrules.core.board import Board


_PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)
_SLIDER_TYPES: tuple[PieceType, ...] = (PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN)
_MOVE_ORDER: tuple[PieceType, ...] = (
    PieceType.PAWN,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.ROOK,
    PieceType.QUEEN,
    PieceType.KING,
)

_CASTLING_BY_COLOR: dict[Color, tuple[CastlingGeometry, ...]] = {
    color: tuple(g for g in CASTLING_GEOMETRY.values() if g.color == color)
    for color in Color
}


# -- Precomputed lookup tables ---------------------------------------------

_KNIGHT_JUMPS: tuple[Direction, ...] = tuple(d for d in Direction if d.is_knight)

# Squares from which a pawn of the given colour strikes a square.
_PAWN_ATTACK_ORIGINS: dict[Color, tuple[Direction, ...]] = {
    Color.WHITE: (Direction.DOWN_LEFT, Direction.DOWN_RIGHT),
    Color.BLACK: (Direction.UP_LEFT, Direction.UP_RIGHT),
}

SquareTable = tuple[tuple[Square, ...], ...]
RayTable = tuple[tuple[tuple[Square, ...], ...], ...]


def _neighbours(directions: tuple[Direction, ...]) -> SquareTable:
    """Per square, the squares one step away along each of *directions*."""
    table: list[tuple[Square, ...]] = []
    for sq in range(64):
        stepped = (d.next(sq) for d in directions)
        table.append(tuple(to_sq for to_sq in stepped if to_sq is not None))
    return tuple(table)


def _rays(directions: tuple[Direction, ...]) -> RayTable:
    """Per square, one ray to the board edge for each of *directions*."""
    return tuple(tuple(tuple(d.open_path(sq)) for d in directions) for sq in range(64))


def _masks(table: SquareTable) -> tuple[int, ...]:
    return tuple(sum(1 << to_sq for to_sq in squares) for squares in table)


_KNIGHT_TARGETS = _neighbours(_KNIGHT_JUMPS)
_KING_TARGETS = _neighbours(ALL_RAY_DIRECTIONS)
_KNIGHT_ATTACK_MASKS = _masks(_KNIGHT_TARGETS)
_KING_ATTACK_MASKS = _masks(_KING_TARGETS)
_PAWN_ATTACKER_MASKS = tuple(
    _masks(_neighbours(_PAWN_ATTACK_ORIGINS[color])) for color in Color
)

_BISHOP_RAYS = _rays(DIAGONAL_DIRECTIONS)
_ROOK_RAYS = _rays(STRAIGHT_DIRECTIONS)
_QUEEN_RAYS = _rays(ALL_RAY_DIRECTIONS)

_SLIDER_RAYS: dict[PieceType, RayTable] = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.QUEEN: _QUEEN_RAYS,
}


def _squares_of(bitboard: int) -> list[Square]:
    squares: list[Square] = []
    while bitboard:
        lsb = bitboard & -bitboard
        squares.append(lsb.bit_length() - 1)
        bitboard ^= lsb
    return squares


class MoveGenerator:
    """Generates and validates moves for the position held by a :class:`Board`.

    Legality is decided by simulation: a candidate is played with the board's
    raw ``make_move`` and taken back with ``undo_move``, and it is legal when
    the mover's king is not attacked in between. The board is always restored
    before a method returns.
    """

    __slots__ = ("_board", "_pieces")

    def __init__(self, board: Board) -> None:
        self._board = board
        self._pieces = board.pieces

    # -- Pseudo-legal generation ------------------------------------------

    def pseudo_legal_moves(self, piece: Piece, from_sq: Square) -> list[Move]:
        """Moves *piece* on *from_sq* could make ignoring checks on its own king."""
        moves: list[Move] = []
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(piece, from_sq, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_jumps(piece, from_sq, _KNIGHT_TARGETS[from_sq], moves)
        elif ptype == PieceType.KING:
            self._gen_jumps(piece, from_sq, _KING_TARGETS[from_sq], moves)
            self._gen_castling(piece, from_sq, moves)
        else:
            self._gen_sliding(piece, from_sq, _SLIDER_RAYS[ptype][from_sq], moves)
        return moves

    def all_pseudo_legal_moves(self, color: Color) -> list[Move]:
        moves: list[Move] = []
        pieces = self._pieces
        for ptype in _MOVE_ORDER:
            piece = Piece(color, ptype)
            for sq in _squares_of(pieces.pieces_bitboard(color, ptype)):
                moves.extend(self.pseudo_legal_moves(piece, sq))
        return moves

    # -- Legal generation -------------------------------------------------

    def legal_moves_from(self, piece: Piece, from_sq: Square) -> list[Move]:
        """Legal moves of *piece* standing on *from_sq*."""
        if self._pieces[from_sq] != piece:
            return []
        return [m for m in self.pseudo_legal_moves(piece, from_sq) if self._is_safe(m)]

    def legal_moves(self, color: Color) -> list[Move]:
        """All strictly legal moves for *color*."""
        return [m for m in self.all_pseudo_legal_moves(color) if self._is_safe(m)]

    def has_legal_move(self, color: Color) -> bool:
        pieces = self._pieces
        for ptype in _MOVE_ORDER:
            piece = Piece(color, ptype)
            for sq in _squares_of(pieces.pieces_bitboard(color, ptype)):
                for move in self.pseudo_legal_moves(piece, sq):
                    if self._is_safe(move):
                        return True
        return False

    def find_legal_move(
        self,
        piece: Piece,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> Move | None:
        """The legal move matching the request, or ``None``.

        *promotion* is required for a promoting pawn move and ignored for
        every other move.
        """
        if self._pieces[from_sq] != piece:
            return None
        for move in self.pseudo_legal_moves(piece, from_sq):
            if move.to_sq != to_sq:
                continue
            if move.promotion is not None and move.promotion != promotion:
                continue
            return move if self._is_safe(move) else None
        return None

    def is_legal_move(
        self,
        piece: Piece,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        return self.find_legal_move(piece, from_sq, to_sq, promotion) is not None

    def check_game_state(self, color: Color) -> GameState:
        """PLAYING, CHECK, CHECKMATE or STALEMATE for *color* to move."""
        in_check = self.is_in_check(color)
        if self.has_legal_move(color):
            return GameState.CHECK if in_check else GameState.PLAYING
        return GameState.CHECKMATE if in_check else GameState.STALEMATE

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._pieces.king_square(color)
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        pieces = self._pieces
        by_idx = int(by_color)

        if (
            pieces.pieces_bitboard(by_color, PieceType.PAWN)
            & _PAWN_ATTACKER_MASKS[by_idx][sq]
        ):
            return True

        if pieces.pieces_bitboard(by_color, PieceType.KNIGHT) & _KNIGHT_ATTACK_MASKS[sq]:
            return True

        if pieces.pieces_bitboard(by_color, PieceType.KING) & _KING_ATTACK_MASKS[sq]:
            return True

        queens = pieces.pieces_bitboard(by_color, PieceType.QUEEN)
        diagonal = pieces.pieces_bitboard(by_color, PieceType.BISHOP) | queens
        straight = pieces.pieces_bitboard(by_color, PieceType.ROOK) | queens
        for attackers, rays in ((diagonal, _BISHOP_RAYS[sq]), (straight, _ROOK_RAYS[sq])):
            if not attackers:
                continue
            for ray in rays:
                for to_sq in ray:
                    if pieces[to_sq] is None:
                        continue
                    if attackers & (1 << to_sq):
                        return True
                    break

        return False

    def all_square_attacks(self, square: Square, color: Color) -> list[Square]:
        """Squares holding a *color* piece that attacks *square*.

        Sliders see through the defending king, so squares behind the king on
        an attacking ray count as attacked.
        """
        pieces = self._pieces
        by_idx = int(color)
        attackers: list[Square] = []
        attackers.extend(
            _squares_of(
                pieces.pieces_bitboard(color, PieceType.PAWN)
                & _PAWN_ATTACKER_MASKS[by_idx][square]
            )
        )
        attackers.extend(
            _squares_of(
                pieces.pieces_bitboard(color, PieceType.KNIGHT) & _KNIGHT_ATTACK_MASKS[square]
            )
        )
        defender = color.opposite
        for ptype in _SLIDER_TYPES:
            slider = Piece(color, ptype)
            for slider_sq in pieces.group_of(slider):
                ray = Direction.between(slider_sq, square)
                if slider.can_move_along(ray) and pieces.is_ray_empty_ignoring_king(
                    ray, slider_sq, square, defender
                ):
                    attackers.append(slider_sq)
        attackers.extend(
            _squares_of(
                pieces.pieces_bitboard(color, PieceType.KING) & _KING_ATTACK_MASKS[square]
            )
        )
        return attackers

    # -- Pins and en passant ------------------------------------------------

    def en_passant_capturable_pawn(
        self, piece: Piece, from_sq: Square, to_sq: Square
    ) -> Piece | None:
        """The pawn *piece* would take en passant by moving to *to_sq*, if any."""
        ep = self._board.en_passant
        if ep is None or to_sq != ep:
            return None
        if not piece.is_pawn or relative_rank(piece.color, from_sq) != 4:
            return None
        return self._pieces[make_square(file_of(ep), rank_of(from_sq))]

    def is_pinned(self, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
        """Would moving *piece* from *from_sq* to *to_sq* expose its own king?

        Only absolute pins by an enemy slider are detected, including the
        case of an en passant capture that clears two pawns off the rank
        shared by the king and an enemy rook or queen.
        """
        pieces = self._pieces
        king_sq = pieces.king_square(piece.color)

        pinning_ray = Direction.between(king_sq, from_sq)
        if not pinning_ray.is_straight:
            return False

        move_ray = Direction.between(from_sq, to_sq)
        if move_ray is Direction.NONE:
            raise IllegalMoveError(
                f"Invalid move for {piece}: {from_sq} to {to_sq} has no direction"
            )
        if move_ray is pinning_ray or move_ray.is_reverse(pinning_ray):
            return False

        en_passant_case = (
            relative_rank(piece.color, king_sq) == 4
            and self.en_passant_capturable_pawn(piece, from_sq, to_sq) is not None
        )

        for ptype in _SLIDER_TYPES:
            slider = Piece(piece.color.opposite, ptype)
            for slider_sq in pieces.group_of(slider):
                ray = Direction.between(king_sq, slider_sq)
                if ray is not pinning_ray or not slider.can_move_along(ray):
                    continue
                if en_passant_case and self._en_passant_rank_pinned(
                    pinning_ray, king_sq, slider_sq, from_sq
                ):
                    return True
                if pieces.is_ray_empty(pinning_ray, king_sq, from_sq) and pieces.is_ray_empty(
                    pinning_ray, from_sq, slider_sq
                ):
                    return True
        return False

    def _en_passant_rank_pinned(
        self, ray: Direction, king_sq: Square, slider_sq: Square, from_sq: Square
    ) -> bool:
        # King, both pawns and the slider share one rank; the two pawns are adjacent.
        ep = self._board.en_passant
        assert ep is not None
        captured_sq = make_square(file_of(ep), rank_of(from_sq))
        if abs(file_distance(king_sq, ep)) < abs(file_distance(king_sq, from_sq)):
            first, second = captured_sq, from_sq
        else:
            first, second = from_sq, captured_sq
        pieces = self._pieces
        return pieces.is_ray_empty(ray, king_sq, first) and pieces.is_ray_empty(
            ray, second, slider_sq
        )

    # -- Simulation ---------------------------------------------------------

    def _is_safe(self, move: Move) -> bool:
        """Play *move*, test the mover's king, take the move back."""
        color = move.piece.color
        if move.is_castling:
            if self.is_in_check(color):
                return False
            geometry = _castling_geometry(move)
            if self.is_square_attacked(geometry.crossed_square, color.opposite):
                return False
        board = self._board
        board.make_move(move)
        try:
            return not self.is_square_attacked(
                self._pieces.king_square(color), color.opposite
            )
        finally:
            board.undo_move(move)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, piece: Piece, sq: Square, moves: list[Move]) -> None:
        pieces = self._pieces
        color = piece.color
        step = 8 if color == Color.WHITE else -8
        rel_rank = relative_rank(color, sq)
        promoting = rel_rank == 6

        one_step = sq + step
        if 0 <= one_step < 64 and pieces[one_step] is None:
            if promoting:
                for pt in _PROMOTION_TYPES:
                    moves.append(Move(piece, sq, one_step, pt))
            else:
                moves.append(Move(piece, sq, one_step))
                two_step = one_step + step
                if rel_rank == 1 and pieces[two_step] is None:
                    moves.append(Move(piece, sq, two_step))

        if rel_rank == 7:
            return
        file_idx = file_of(sq)
        for df in (-1, 1):
            if not 0 <= file_idx + df < 8:
                continue
            cap_sq = one_step + df
            target = pieces[cap_sq]
            if target is not None:
                if target.color == color:
                    continue
                if promoting:
                    for pt in _PROMOTION_TYPES:
                        moves.append(Move(piece, sq, cap_sq, pt, target, MoveType.CAPTURE))
                else:
                    moves.append(Move(piece, sq, cap_sq, None, target, MoveType.CAPTURE))
                continue
            taken = self.en_passant_capturable_pawn(piece, sq, cap_sq)
            if taken is not None and taken == Piece(color.opposite, PieceType.PAWN):
                moves.append(
                    Move(piece, sq, cap_sq, None, taken, MoveType.EN_PASSANT_CAPTURE)
                )

    def _gen_jumps(
        self,
        piece: Piece,
        sq: Square,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        pieces = self._pieces
        for to_sq in targets:
            target = pieces[to_sq]
            if target is None:
                moves.append(Move(piece, sq, to_sq))
            elif target.color != piece.color:
                moves.append(Move(piece, sq, to_sq, None, target, MoveType.CAPTURE))

    def _gen_sliding(
        self,
        piece: Piece,
        sq: Square,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        pieces = self._pieces
        for ray in rays:
            for to_sq in ray:
                target = pieces[to_sq]
                if target is None:
                    moves.append(Move(piece, sq, to_sq))
                    continue
                if target.color != piece.color:
                    moves.append(Move(piece, sq, to_sq, None, target, MoveType.CAPTURE))
                break

    def _gen_castling(self, king: Piece, king_sq: Square, moves: list[Move]) -> None:
        pieces = self._pieces
        castling = self._board.castling
        rook = Piece(king.color, PieceType.ROOK)
        for geometry in _CASTLING_BY_COLOR[king.color]:
            if (
                castling.has_right(geometry.right)
                and king_sq == geometry.king_from
                and pieces[geometry.rook_from] == rook
                and all(pieces[s] is None for s in geometry.empty_squares)
            ):
                flag = MoveType.CASTLE_KINGSIDE if geometry.kingside else MoveType.CASTLE_QUEENSIDE
                moves.append(Move(king, king_sq, geometry.king_to, None, None, flag))


def _castling_geometry(move: Move) -> CastlingGeometry:
    for geometry in _CASTLING_BY_COLOR[move.piece.color]:
        if geometry.king_to == move.to_sq:
            return geometry
    raise IllegalMoveError(f"Not a castling move: {move.uci}")
