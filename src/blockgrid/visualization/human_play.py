from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence, Tuple

import pygame

from blockgrid.engine import FileHighScoreStore, GameSession, MemoryHighScoreStore, SessionState, shapes
from blockgrid.utils.logging import setup_logger

LOG = logging.getLogger(__name__)

BACKGROUND = (15, 15, 20)
EMPTY_CELL = (102, 43, 0)
FILLED_CELL = (70, 200, 120)
VALID_GHOST = (120, 220, 140)
INVALID_GHOST = (220, 120, 120)
PREVIEW_LINE = (255, 255, 255)


def screen_to_grid(mx: int, my: int, cell_size: int, margin: int) -> Tuple[int, int]:
    return (mx - margin) // cell_size, (my - margin) // cell_size


def _cell_rect(x: int, y: int, cell_size: int, margin: int) -> pygame.Rect:
    return pygame.Rect(margin + x * cell_size, margin + y * cell_size, cell_size - 1, cell_size - 1)


def draw_board(screen: pygame.Surface, session: GameSession, cell_size: int, margin: int) -> None:
    occupancy = session.grid.occupancy()
    screen.fill(BACKGROUND)
    for y in range(session.grid.rows):
        for x in range(session.grid.columns):
            color = FILLED_CELL if occupancy[y, x] else EMPTY_CELL
            pygame.draw.rect(screen, color, _cell_rect(x, y, cell_size, margin))


def piece_origin(shape_index: int, slot: int, x0: int, cell_size: int, margin: int) -> Tuple[int, int]:
    """Screen position of offset (0, 0), keeping the shape one cell inside its slot box."""
    min_dx, min_dy, _, _ = shapes.bounding_box(shape_index)
    slot_top = margin + slot * (cell_size * 5)
    return x0 + (1 - min_dx) * cell_size, slot_top + (1 - min_dy) * cell_size


def draw_pieces(screen: pygame.Surface, session: GameSession, cell_size: int, margin: int, selected_slot: int) -> None:
    x0 = margin * 2 + session.grid.columns * cell_size
    for descriptor in session.descriptors():
        off_x, off_y = piece_origin(descriptor.shape_index, descriptor.slot, x0, cell_size, margin)
        for dx, dy in descriptor.offsets:
            rect = pygame.Rect(off_x + dx * cell_size, off_y + dy * cell_size, cell_size - 1, cell_size - 1)
            pygame.draw.rect(screen, descriptor.color, rect)
        if descriptor.slot == selected_slot:
            slot_top = margin + descriptor.slot * (cell_size * 5)
            outline = pygame.Rect(x0 - 2, slot_top - 2, cell_size * 6, cell_size * 5)
            pygame.draw.rect(screen, (255, 255, 255), outline, 2)


def draw_ghost(screen: pygame.Surface, session: GameSession, anchor: Tuple[int, int], cell_size: int, margin: int, selected_slot: int) -> None:
    piece = session.supply.get(selected_slot)
    if piece is None:
        return
    is_valid = session.can_place(selected_slot, anchor)
    if is_valid:
        preview = session.preview_clear(piece.offsets, anchor)
        for row in preview.rows:
            for x in range(session.grid.columns):
                pygame.draw.rect(screen, PREVIEW_LINE, _cell_rect(x, row, cell_size, margin), 1)
        for col in preview.columns:
            for y in range(session.grid.rows):
                pygame.draw.rect(screen, PREVIEW_LINE, _cell_rect(col, y, cell_size, margin), 1)
    color = VALID_GHOST if is_valid else INVALID_GHOST
    ax, ay = anchor
    for dx, dy in piece.offsets:
        x, y = ax + dx, ay + dy
        if session.grid.is_inside(x, y):
            pygame.draw.rect(screen, color, _cell_rect(x, y, cell_size, margin), 2)


def run(high_score_file: Optional[str] = None, seed: Optional[int] = None) -> None:
    store = FileHighScoreStore(high_score_file) if high_score_file else MemoryHighScoreStore()
    session = GameSession(high_scores=store)
    session.start_session(seed)

    pygame.init()
    try:
        cell_size = 48
        margin = 20
        width = margin * 3 + session.grid.columns * cell_size + 6 * cell_size
        height = margin * 2 + max(session.grid.rows * cell_size, 15 * cell_size)
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption("blockgrid")
        font = pygame.font.SysFont(None, 24)

        selected_slot = 0
        key_to_slot = {
            pygame.K_1: 0,
            pygame.K_2: 1,
            pygame.K_3: 2,
            pygame.K_KP1: 0,
            pygame.K_KP2: 1,
            pygame.K_KP3: 2,
        }

        running = True
        clock = pygame.time.Clock()
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in key_to_slot:
                        selected_slot = key_to_slot[event.key]
                    elif event.key == pygame.K_p:
                        if not session.pause_session():
                            session.resume_session()
                    elif event.key == pygame.K_n:
                        session.restart_session()
                        selected_slot = 0
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    anchor = screen_to_grid(*event.pos, cell_size, margin)
                    result = session.try_place(selected_slot, anchor)
                    if result.accepted:
                        if result.cleared:
                            LOG.info("cleared rows=%s columns=%s (+%d)", result.cleared.rows, result.cleared.columns, result.clear_score)
                        remaining = [d.slot for d in session.descriptors()]
                        selected_slot = remaining[0] if remaining else 0

            draw_board(screen, session, cell_size, margin)
            if session.is_playing():
                anchor = screen_to_grid(*pygame.mouse.get_pos(), cell_size, margin)
                draw_ghost(screen, session, anchor, cell_size, margin, selected_slot)
            draw_pieces(screen, session, cell_size, margin, selected_slot)

            info_lines = [
                f"Score: {session.current_score()}",
                f"Best: {session.high_score}",
                "Select: 1/2/3",
                "Place: Left click",
                "Pause: P  Restart: N",
            ]
            x_text = margin * 2 + session.grid.columns * cell_size
            y_text = margin + 15 * cell_size - len(info_lines) * 20
            for i, txt in enumerate(info_lines):
                img = font.render(txt, True, (230, 230, 230))
                screen.blit(img, (x_text, y_text + i * 20))
            if session.state == SessionState.PAUSED:
                screen.blit(font.render("Paused - press P", True, (255, 220, 100)), (margin, 2))
            elif session.is_game_over():
                screen.blit(font.render("Game Over - press N to restart", True, (255, 100, 100)), (margin, 2))

            pygame.display.flip()
            clock.tick(60)
    finally:
        session.save_high_score()
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play blockgrid with the mouse")
    p.add_argument("--high-score-file", type=str, default=None)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", type=str, default="info", choices=["debug", "info", "warning", "error"])
    return p


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logger(name="blockgrid", use_rich=True, level=args.log_level)
    run(high_score_file=args.high_score_file, seed=args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
