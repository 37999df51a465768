"""Unit tests for the draughts rules engine."""

import pytest

from draughts.game.state import Color, PieceKind, Piece, Move, initial_board
from draughts.game.rules import (
    generate_all_moves, generate_quiet_moves, generate_king_captures, apply_move, check_winner,
    count_pieces, moves_for_piece,
)
from draughts.game.board import (
    BOARD_SIZE, STARTING_POSITIONS, NUM_SQUARES, is_dark, rc_to_square, square_to_rc,
    render_board,
)
from draughts.game.validation import (
    InvalidBoard, InvalidSide, validate_board, parse_side, board_to_codes,
)
from draughts.game.notation import (
    move_to_notation, parse_notation, find_move, board_to_ascii, ascii_to_board,
)
from draughts.play.agents import RandomAgent

from conftest import make_board, make_codes


class TestBoard:
    def test_board_size(self):
        assert BOARD_SIZE == 10
        assert NUM_SQUARES == 50

    def test_starting_positions(self):
        white = [rc for rc, code in STARTING_POSITIONS.items() if code == "w"]
        black = [rc for rc, code in STARTING_POSITIONS.items() if code == "b"]
        assert len(white) == 20
        assert len(black) == 20
        assert all(r <= 3 for r, _ in white)
        assert all(r >= 6 for r, _ in black)

    def test_pieces_only_on_dark_squares(self):
        assert all(is_dark(r, c) for r, c in STARTING_POSITIONS)

    def test_square_numbering(self):
        assert rc_to_square(0, 1) == 1
        assert rc_to_square(0, 9) == 5
        assert rc_to_square(1, 0) == 6
        assert rc_to_square(9, 8) == 50

    def test_square_roundtrip(self):
        for sq in range(1, NUM_SQUARES + 1):
            assert rc_to_square(*square_to_rc(sq)) == sq

    def test_light_square_has_no_number(self):
        with pytest.raises(ValueError):
            rc_to_square(0, 0)
        with pytest.raises(ValueError):
            square_to_rc(51)

    def test_render_board(self):
        text = render_board(initial_board(), "b")
        assert text.startswith("Black to move")
        assert "w" in text and "b" in text
        assert len([line for line in text.splitlines() if " | " in line]) == 10


class TestState:
    def test_initial_board(self):
        board = initial_board()
        assert board[0][1] == Piece(Color.WHITE, PieceKind.MAN)
        assert board[9][0] == Piece(Color.BLACK, PieceKind.MAN)
        assert board[4][1] is None
        assert board[0][0] is None

    def test_colors(self):
        assert Color.BLACK.opponent == Color.WHITE
        assert Color.WHITE.forward == 1
        assert Color.BLACK.forward == -1
        assert Color.WHITE.promotion_row == 9
        assert Color.BLACK.promotion_row == 0

    def test_piece_codes(self):
        assert Piece(Color.BLACK, PieceKind.MAN).code == "b"
        assert Piece(Color.WHITE, PieceKind.KING).code == "W"
        assert Piece(Color.BLACK, PieceKind.MAN).promoted().code == "B"

    def test_move_dict_roundtrip(self):
        move = Move((6, 1), ((4, 3), (2, 5)), ((5, 2), (3, 4)))
        d = move.to_dict()
        assert d["from"] == {"r": 6, "c": 1}
        assert d["captures"] == [{"r": 5, "c": 2}, {"r": 3, "c": 4}]
        assert Move.from_dict(d) == move

    def test_move_from_dict_rejects_malformed(self):
        with pytest.raises(ValueError):
            Move.from_dict({"from": {"r": 1}})
        with pytest.raises(ValueError):
            Move.from_dict({"from": {"r": 6, "c": 1}, "path": []})


class TestValidation:
    def test_valid_board(self):
        assert validate_board(board_to_codes(initial_board())) == initial_board()

    def test_wrong_row_count(self):
        with pytest.raises(InvalidBoard):
            validate_board([[0] * 10 for _ in range(9)])

    def test_wrong_row_length(self):
        grid = make_codes({})
        grid[3] = [0] * 9
        with pytest.raises(InvalidBoard, match="Row 3"):
            validate_board(grid)

    def test_not_a_grid(self):
        with pytest.raises(InvalidBoard):
            validate_board("board")
        with pytest.raises(InvalidBoard):
            validate_board(None)

    @pytest.mark.parametrize("cell", ["x", "", None, 1, False, 0.0, "0"])
    def test_invalid_cells(self, cell):
        grid = make_codes({})
        grid[2][5] = cell
        with pytest.raises(InvalidBoard):
            validate_board(grid)

    def test_parse_side(self):
        assert parse_side("b") == Color.BLACK
        assert parse_side("w") == Color.WHITE
        assert parse_side(Color.WHITE) == Color.WHITE

    @pytest.mark.parametrize("side", ["B", "white", "", None, 0])
    def test_invalid_side(self, side):
        with pytest.raises(InvalidSide):
            parse_side(side)

    def test_generate_rejects_invalid_side(self):
        with pytest.raises(InvalidSide):
            generate_all_moves(initial_board(), "x")


class TestQuietMoves:
    def test_opening_moves(self):
        board = initial_board()
        assert len(generate_all_moves(board, "b")) == 9
        assert len(generate_all_moves(board, "w")) == 9

    def test_black_men_move_up(self):
        board = make_board({(6, 3): "b"})
        targets = {m.to_rc for m in generate_all_moves(board, Color.BLACK)}
        assert targets == {(5, 2), (5, 4)}

    def test_white_men_move_down(self):
        board = make_board({(3, 2): "w"})
        targets = {m.to_rc for m in generate_all_moves(board, Color.WHITE)}
        assert targets == {(4, 1), (4, 3)}

    def test_man_at_edge(self):
        board = make_board({(3, 0): "w"})
        moves = generate_all_moves(board, Color.WHITE)
        assert [m.to_rc for m in moves] == [(4, 1)]

    def test_promotion_flag(self):
        board = make_board({(8, 1): "w", (1, 2): "b"})
        white = generate_all_moves(board, Color.WHITE)
        assert {m.to_rc for m in white} == {(9, 0), (9, 2)}
        assert all(m.promotes for m in white)
        black = generate_all_moves(board, Color.BLACK)
        assert {m.to_rc for m in black} == {(0, 1), (0, 3)}
        assert all(m.promotes for m in black)

    def test_no_promotion_before_last_row(self):
        board = make_board({(6, 3): "b"})
        assert not any(m.promotes for m in generate_all_moves(board, Color.BLACK))

    def test_king_slides(self):
        board = make_board({(0, 1): "W"})
        moves = generate_all_moves(board, Color.WHITE)
        # 8 squares down the long diagonal, 1 down-left
        assert len(moves) == 9
        assert (8, 9) in {m.to_rc for m in moves}
        assert not any(m.promotes or m.is_capture for m in moves)

    def test_king_blocked_by_own_piece(self):
        board = make_board({(4, 5): "B", (6, 7): "b"})
        moves = generate_quiet_moves(board, (4, 5), Color.BLACK)
        down_right = [m.to_rc for m in moves if m.to_rc[0] > 4 and m.to_rc[1] > 5]
        assert down_right == [(5, 6)]

    def test_empty_square_has_no_moves(self):
        assert generate_quiet_moves(initial_board(), (4, 1), Color.WHITE) == []

    def test_moves_for_piece(self):
        moves = generate_all_moves(initial_board(), Color.BLACK)
        mine = moves_for_piece(moves, (6, 1))
        assert {m.to_rc for m in mine} == {(5, 0), (5, 2)}


class TestManCaptures:
    def test_capture_is_mandatory(self):
        board = initial_board()
        board[5][4] = Piece(Color.WHITE, PieceKind.MAN)
        moves = generate_all_moves(board, Color.BLACK)
        assert moves
        assert all(m.is_capture for m in moves)
        expected = Move((6, 5), ((4, 3),), ((5, 4),), promotes=False)
        assert expected in moves

    def test_men_capture_backward(self):
        board = make_board({(4, 3): "b", (5, 4): "w"})
        moves = generate_all_moves(board, Color.BLACK)
        assert moves == [Move((4, 3), ((6, 5),), ((5, 4),))]

    def test_cannot_jump_own_piece(self):
        board = make_board({(6, 3): "b", (5, 4): "b"})
        assert not any(m.is_capture for m in generate_all_moves(board, Color.BLACK))

    def test_cannot_land_on_occupied(self):
        board = make_board({(6, 3): "b", (5, 4): "w", (4, 5): "w"})
        assert not any(m.is_capture for m in generate_all_moves(board, Color.BLACK))

    def test_multi_jump(self):
        board = make_board({(6, 1): "b", (5, 2): "w", (3, 4): "w"})
        moves = generate_all_moves(board, Color.BLACK)
        assert moves == [Move((6, 1), ((4, 3), (2, 5)), ((5, 2), (3, 4)))]

    def test_branching_captures_tie(self):
        board = make_board({(6, 5): "b", (5, 4): "w", (5, 6): "w"})
        moves = generate_all_moves(board, Color.BLACK)
        assert {m.to_rc for m in moves} == {(4, 3), (4, 7)}
        assert all(m.num_captures == 1 for m in moves)

    def test_longest_capture_wins(self):
        board = make_board({
            (6, 1): "b", (5, 2): "w", (3, 4): "w",  # two-piece chain
            (8, 7): "b", (7, 6): "w",               # single capture
        })
        moves = generate_all_moves(board, Color.BLACK)
        assert len(moves) == 1
        assert moves[0].from_rc == (6, 1)
        assert moves[0].num_captures == 2

    def test_promotion_on_final_jump(self):
        board = make_board({(2, 3): "b", (1, 4): "w"})
        moves = generate_all_moves(board, Color.BLACK)
        assert moves == [Move((2, 3), ((0, 5),), ((1, 4),), promotes=True)]

    def test_promoted_man_continues_as_king(self):
        # After crowning on (0, 1) the new king flies down the diagonal to take (4, 5)
        board = make_board({(2, 3): "b", (1, 2): "w", (4, 5): "w"})
        moves = generate_all_moves(board, Color.BLACK)
        assert len(moves) == 4
        for m in moves:
            assert m.promotes
            assert m.captures == ((1, 2), (4, 5))
            assert m.path[0] == (0, 1)
        assert {m.to_rc for m in moves} == {(5, 6), (6, 7), (7, 8), (8, 9)}

    def test_white_promotes_by_capture(self):
        board = make_board({(7, 2): "w", (8, 3): "b"})
        moves = generate_all_moves(board, Color.WHITE)
        assert moves == [Move((7, 2), ((9, 4),), ((8, 3),), promotes=True)]


class TestKingCaptures:
    def test_flying_capture_landings(self):
        board = make_board({(0, 1): "W", (3, 4): "b"})
        moves = generate_all_moves(board, Color.WHITE)
        assert {m.to_rc for m in moves} == {(4, 5), (5, 6), (6, 7), (7, 8), (8, 9)}
        assert all(m.captures == ((3, 4),) for m in moves)
        assert not any(m.promotes for m in moves)

    def test_divergent_captures_tie(self):
        board = make_board({(5, 4): "W", (4, 3): "b", (4, 5): "b"})
        moves = generate_all_moves(board, Color.WHITE)
        assert len(moves) == 7
        assert all(m.num_captures == 1 for m in moves)
        assert {m.captures[0] for m in moves} == {(4, 3), (4, 5)}

    def test_captured_pieces_are_lifted_immediately(self):
        # Both men sit on one diagonal; taking one opens the way back to the other
        board = make_board({(5, 4): "W", (4, 3): "b", (6, 5): "b"})
        moves = generate_all_moves(board, Color.WHITE)
        assert len(moves) == 18
        for m in moves:
            assert m.num_captures == 2
            assert set(m.captures) == {(4, 3), (6, 5)}

    def test_cannot_jump_two_in_a_row(self):
        board = make_board({(0, 1): "W", (3, 4): "b", (4, 5): "b"})
        assert not any(m.is_capture for m in generate_all_moves(board, Color.WHITE))

    def test_blocked_by_own_piece(self):
        board = make_board({(0, 1): "W", (2, 3): "w", (3, 4): "b"})
        assert generate_king_captures(board, (0, 1), Color.WHITE) == []
        # Only the man on (2, 3) can take
        moves = generate_all_moves(board, Color.WHITE)
        assert moves == [Move((2, 3), ((4, 5),), ((3, 4),))]


class TestApplyMove:
    def test_quiet_move(self):
        board = initial_board()
        after = apply_move(board, Move((6, 1), ((5, 0),)))
        assert after[6][1] is None
        assert after[5][0] == Piece(Color.BLACK, PieceKind.MAN)

    def test_input_not_modified(self):
        board = initial_board()
        before = board_to_codes(board)
        apply_move(board, Move((6, 1), ((5, 0),)))
        assert board_to_codes(board) == before

    def test_capture_chain(self):
        board = make_board({(6, 1): "b", (5, 2): "w", (3, 4): "w"})
        move = generate_all_moves(board, Color.BLACK)[0]
        after = apply_move(board, move)
        assert after[2][5] == Piece(Color.BLACK, PieceKind.MAN)
        assert after[6][1] is None
        assert after[5][2] is None and after[3][4] is None
        assert count_pieces(after)["white_men"] == 0

    def test_promotion(self):
        board = make_board({(2, 3): "b", (1, 2): "w", (4, 5): "w"})
        move = generate_all_moves(board, Color.BLACK)[0]
        after = apply_move(board, move)
        tr, tc = move.to_rc
        assert after[tr][tc] == Piece(Color.BLACK, PieceKind.KING)

    def test_empty_origin_raises(self):
        with pytest.raises(ValueError):
            apply_move(initial_board(), Move((4, 1), ((3, 0),)))


class TestGameEnd:
    def test_ongoing(self):
        assert check_winner(initial_board(), "b") == (False, None)

    def test_no_pieces_loses(self):
        board = make_board({(6, 1): "b"})
        assert check_winner(board, "w") == (True, Color.BLACK)

    def test_blocked_side_loses(self):
        board = make_board({(0, 1): "w", (1, 0): "b", (1, 2): "b", (2, 3): "b"})
        assert generate_all_moves(board, Color.WHITE) == []
        assert check_winner(board, Color.WHITE) == (True, Color.BLACK)
        assert check_winner(board, Color.BLACK) == (False, None)

    def test_count_pieces(self):
        counts = count_pieces(initial_board())
        assert counts == {"black_men": 20, "black_kings": 0,
                          "white_men": 20, "white_kings": 0}


class TestRandomPlay:
    def test_invariants_hold_over_random_games(self):
        for seed in range(3):
            agent = RandomAgent(seed=seed)
            board = initial_board()
            side = Color.BLACK
            for _ in range(150):
                moves = generate_all_moves(board, side)
                if not moves:
                    break
                if any(m.is_capture for m in moves):
                    assert all(m.is_capture for m in moves)
                    assert len({m.num_captures for m in moves}) == 1
                for m in moves:
                    assert len(set(m.captures)) == len(m.captures)
                    if m.is_capture:
                        assert len(m.path) == len(m.captures)

                move = moves[agent.choose_move(board, side, moves)]
                before = board_to_codes(board)
                total = sum(count_pieces(board).values())
                after = apply_move(board, move)
                assert board_to_codes(board) == before
                assert sum(count_pieces(after).values()) == total - move.num_captures
                board, side = after, side.opponent


class TestNotation:
    def test_quiet_notation(self):
        assert move_to_notation(Move((6, 1), ((5, 0),))) == "31-26"

    def test_capture_notation(self):
        move = Move((6, 1), ((4, 3), (2, 5)), ((5, 2), (3, 4)))
        assert move_to_notation(move) == "31x22x13"

    def test_parse_notation(self):
        assert parse_notation("31-26") == ((6, 1), ((5, 0),), False)
        assert parse_notation("31x22x13") == ((6, 1), ((4, 3), (2, 5)), True)

    @pytest.mark.parametrize("text", ["", "31", "31-", "31x", "a1-b2", "31-26-21", "0-5"])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError):
            parse_notation(text)

    def test_find_move(self):
        moves = generate_all_moves(initial_board(), Color.BLACK)
        assert find_move(moves, "31-26") == Move((6, 1), ((5, 0),))

    def test_find_short_capture(self):
        board = make_board({(6, 1): "b", (5, 2): "w", (3, 4): "w"})
        moves = generate_all_moves(board, Color.BLACK)
        assert find_move(moves, "31x13") == moves[0]
        assert find_move(moves, "31x22x13") == moves[0]

    def test_find_illegal(self):
        moves = generate_all_moves(initial_board(), Color.BLACK)
        with pytest.raises(ValueError, match="not a legal move"):
            find_move(moves, "31-22")

    def test_ascii_roundtrip(self):
        board = initial_board()
        board[4][3] = Piece(Color.WHITE, PieceKind.KING)
        text = board_to_ascii(board)
        assert text.splitlines()[0] == ".w.w.w.w.w"
        assert ascii_to_board(text) == board

    def test_ascii_rejects_bad_input(self):
        with pytest.raises(InvalidBoard):
            ascii_to_board("..........\n" * 9)
        with pytest.raises(InvalidBoard):
            ascii_to_board("x.........\n" + "..........\n" * 9)
