import pygame
from tetris_config import CONFIG, SPEED_FACTOR_MIN, SPEED_FACTOR_MAX, SPEED_FACTOR_STEP


class Overlay:
    """Speed slider (F1). Writes CONFIG and pushes the value into the game."""
    def __init__(self, game):
        self.game = game
        self.active = False

    def toggle(self): self.active = not self.active

    def handle(self, e):
        if e.key in (pygame.K_ESCAPE, pygame.K_F1): self.toggle(); return
        val = CONFIG["SPEED_FACTOR"]
        if e.key == pygame.K_LEFT: val = max(SPEED_FACTOR_MIN, val - SPEED_FACTOR_STEP)
        elif e.key == pygame.K_RIGHT: val = min(SPEED_FACTOR_MAX, val + SPEED_FACTOR_STEP)
        else: return
        CONFIG["SPEED_FACTOR"] = round(val, 1)
        self.game.set_speed_factor(CONFIG["SPEED_FACTOR"])

    def draw(self, screen, font, w, h):
        if not self.active: return
        s = pygame.Surface((w - 80, 120), pygame.SRCALPHA); s.fill((20, 0, 40, 230))
        screen.blit(s, (40, h // 2 - 60))
        screen.blit(font.render("Game Speed (F1/Esc to close)", True, (233, 213, 255)), (60, h // 2 - 44))
        screen.blit(font.render(f"<-  {CONFIG['SPEED_FACTOR']:.1f}x  ->", True, (192, 132, 252)), (60, h // 2 - 10))


class Toast:
    """Short-lived message in the top-left corner (level up, game over)."""
    def __init__(self):
        self.title = ""; self.text = ""; self.left_ms = 0

    def show(self, title, text, duration_ms):
        self.title, self.text, self.left_ms = title, text, duration_ms

    def update(self, dt):
        self.left_ms = max(0, self.left_ms - dt)

    def draw(self, screen, font):
        if self.left_ms <= 0: return
        s = pygame.Surface((220, 52), pygame.SRCALPHA); s.fill((20, 0, 40, 220))
        screen.blit(s, (16, 16))
        screen.blit(font.render(self.title, True, (233, 213, 255)), (26, 22))
        screen.blit(font.render(self.text, True, (192, 132, 252)), (26, 42))
