"""Small pygame drawing helpers shared by the game renderers."""

from functools import lru_cache

import pygame

WHITE = (255, 255, 255)


@lru_cache(maxsize=8)
def get_font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
    return pygame.font.Font(None, size)


def draw_text(
    surface: pygame.Surface,
    text: str,
    position: tuple[float, float],
    color: tuple[int, int, int] = WHITE,
    size: int = 24,
    align: str = "left",
) -> None:
    """
    Blit a single line of text.

    Args:
        surface: Target surface.
        text: Text to draw.
        position: Anchor point; x is the left edge, centre or right edge
            depending on align, y is the vertical centre.
        color: RGB color.
        size: Font size in pixels.
        align: One of "left", "center", "right".
    """
    rendered = get_font(size).render(text, True, color)
    rect = rendered.get_rect()
    x, y = position
    if align == "center":
        rect.midleft = (int(x - rect.width / 2), int(y))
    elif align == "right":
        rect.midright = (int(x), int(y))
    else:
        rect.midleft = (int(x), int(y))
    surface.blit(rendered, rect)
