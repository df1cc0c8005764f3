"""
Tiny Thinkers - help your AI friend learn to see, hear and think

Pygame front end: draws the active stage and forwards clicks, typing and
arrow keys to the stage machine.
"""

import logging
import math
import random

import numpy as np
import pygame

from .audio import SAMPLE_RATE, AudioPlayer
from .config import (
    BLACK,
    BLUE,
    DARK_GRAY,
    DARK_GREEN,
    DOG_BROWN,
    DOG_DARK,
    GESTURE_COOLDOWN,
    GRAY,
    GREEN,
    HOME,
    INDIGO,
    LIGHT_GREEN,
    LIGHT_RED,
    MAX_NAME_LENGTH,
    ORANGE,
    PINK,
    PURPLE,
    RED,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    WALL,
    WHITE,
    YELLOW,
    GameConfig,
)
from .content import CHARACTERS, SCRIPTS, Phase, PatternItem
from .maze import Direction
from .rounds import GuessingPhase
from .stages import Stage, StageMachine

logger = logging.getLogger(__name__)

CELL_SIZE = 64
STAGE_BACKGROUNDS = {
    Stage.INTRO: (192, 132, 252),
    Stage.CHARACTER_SELECT: (192, 132, 252),
    Stage.NAMING: (147, 197, 253),
    Stage.SIGHT_GAME: (110, 231, 183),
    Stage.HEARING_GAME: (249, 168, 212),
    Stage.THINKING_GAME: (165, 180, 252),
    Stage.JOURNEY_COMPLETE: (253, 224, 71),
    Stage.DOG_HELP: (253, 186, 116),
    Stage.MAZE_GAME: (134, 239, 172),
    Stage.FINAL_CELEBRATION: (147, 197, 253),
}
PHASE_BORDERS = {Phase.SIGHT: YELLOW, Phase.HEARING: PINK, Phase.THINKING: INDIGO}

KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP, pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN, pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT, pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT, pygame.K_d: Direction.RIGHT,
}
NUMBER_KEYS = [pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4, pygame.K_5, pygame.K_6]


def capitalize(label):
    return label[:1].upper() + label[1:]


class Button:
    """Clickable rounded rectangle bound to an action"""

    def __init__(self, rect, text, action, color=BLUE, text_color=WHITE, enabled=True, visible=True):
        self.rect = pygame.Rect(rect)
        self.text = text
        self.action = action
        self.color = color
        self.text_color = text_color
        self.enabled = enabled
        self.visible = visible

    @property
    def hovered(self):
        return self.enabled and self.rect.collidepoint(pygame.mouse.get_pos())

    def draw(self, surface, font):
        if not self.visible:
            return
        hovered = self.hovered
        color = self.color if self.enabled else GRAY
        if hovered:
            color = tuple(min(255, c + 30) for c in color)
        pygame.draw.rect(surface, color, self.rect, border_radius=14)
        pygame.draw.rect(surface, WHITE, self.rect, 3, border_radius=14)
        label = font.render(self.text, True, self.text_color)
        surface.blit(label, label.get_rect(center=self.rect.center))

    def click(self, pos):
        if self.enabled and self.rect.collidepoint(pos):
            self.action()
            return True
        return False


class Particle:
    """Confetti piece that swirls in towards a target"""

    def __init__(self, x, y, target_x, target_y, color):
        self.x = float(x)
        self.y = float(y)
        self.target_x = float(target_x)
        self.target_y = float(target_y)
        self.draw_x = self.x
        self.draw_y = self.y
        self.color = color
        self.size = random.randint(3, 8)
        self.angle = random.uniform(0, 2 * math.pi)
        self.angular_speed = random.uniform(0.1, 0.3)
        self.radius = random.uniform(20, 100)
        self.progress = 0.0
        self.speed = random.uniform(0.005, 0.015)

    def update(self):
        """Advance one frame, returns True once the particle has landed"""
        self.progress += self.speed
        self.angle += self.angular_speed
        if self.progress >= 1.0:
            return True

        # Ease in-out
        t = self.progress
        t = t * t * (3 - 2 * t)
        base_x = self.x + (self.target_x - self.x) * t
        base_y = self.y + (self.target_y - self.y) * t

        swirl_factor = (1 - t) * self.radius
        self.draw_x = base_x + math.cos(self.angle) * swirl_factor
        self.draw_y = base_y + math.sin(self.angle) * swirl_factor
        return False

    def draw(self, surface):
        fade = 1 - self.progress * 0.5
        color = tuple(int(c * fade) for c in self.color)
        pygame.draw.circle(surface, color, (int(self.draw_x), int(self.draw_y)), self.size)


class Dog:
    """Vector graphic of the lost dog"""

    def __init__(self):
        self.animation_frame = 0

    def draw(self, surface, px, py, cell_size, facing=Direction.RIGHT):
        size = cell_size * 0.8
        half = size // 2
        flip = -1 if facing == Direction.LEFT else 1

        # Body
        body_rect = pygame.Rect(int(px - half), int(py - half * 0.4), int(size), int(size * 0.6))
        pygame.draw.ellipse(surface, DOG_BROWN, body_rect)

        # Wagging tail
        tail_base = (px - flip * half * 0.9, py)
        wag = math.sin(self.animation_frame * 0.3) * half * 0.4
        tail_tip = (px - flip * half * 1.3, py - half * 0.5 + wag)
        pygame.draw.line(surface, DOG_DARK, tail_base, tail_tip, 3)

        # Head
        head_radius = int(size * 0.3)
        head_x = int(px + flip * half * 0.5)
        head_y = int(py - size * 0.25)
        pygame.draw.circle(surface, DOG_BROWN, (head_x, head_y), head_radius)

        # Floppy ears
        for side in (-1, 1):
            ear = pygame.Rect(0, 0, int(head_radius * 0.6), int(head_radius * 1.2))
            ear.center = (head_x + side * int(head_radius * 0.8), head_y + int(head_radius * 0.2))
            pygame.draw.ellipse(surface, DOG_DARK, ear)

        # Eyes
        eye_radius = max(2, int(head_radius * 0.2))
        for side in (-1, 1):
            eye = (head_x + side * int(head_radius * 0.35), head_y - int(head_radius * 0.15))
            pygame.draw.circle(surface, WHITE, eye, eye_radius)
            pygame.draw.circle(surface, BLACK, eye, max(1, eye_radius // 2))

        # Nose
        pygame.draw.circle(surface, BLACK, (head_x + flip * int(head_radius * 0.2),
                                            head_y + int(head_radius * 0.4)), max(2, eye_radius))

        self.animation_frame += 1


class Game:
    """Main window and loop"""

    def __init__(self, config=None, audio=None):
        self.config = config or GameConfig()
        pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 512)
        pygame.init()

        self.screen_width = SCREEN_WIDTH
        self.screen_height = SCREEN_HEIGHT
        self.screen = pygame.display.set_mode((self.screen_width, self.screen_height))
        pygame.display.set_caption("Tiny Thinkers")
        self.clock = pygame.time.Clock()
        self.running = True
        self.dt = 0.0

        self.audio = audio if audio is not None else AudioPlayer(muted=self.config.muted)
        self.machine = StageMachine(
            audio=self.audio,
            rng=random.Random(self.config.seed),
            skip_intro=self.config.skip_intro,
        )

        self.buttons = []
        self.particles = []
        self.dog = Dog()
        self.last_stage = None
        self.frame_count = 0

        self.gestures = None
        self.gesture_cooldown = 0
        if self.config.gestures:
            self._start_gestures()

        # Fonts
        self.title_font = pygame.font.Font(None, 64)
        self.large_font = pygame.font.Font(None, 44)
        self.medium_font = pygame.font.Font(None, 34)
        self.small_font = pygame.font.Font(None, 26)
        self.glyph_fonts = {}

    def _start_gestures(self):
        try:
            from .gestures import GestureController
        except ImportError as exc:
            logger.warning("Gesture input needs the 'gestures' extra: %s", exc)
            return
        controller = GestureController()
        if controller.start():
            self.gestures = controller

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_events(self):
        """Handle pygame events"""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                for button in list(self.buttons):
                    if button.click(event.pos):
                        break
            elif event.type == pygame.TEXTINPUT:
                if self.machine.stage == Stage.NAMING:
                    self._type_name(event.text)
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)

    def _type_name(self, text):
        printable = "".join(ch for ch in text if ch.isprintable())
        name = (self.machine.friend_name + printable)[:MAX_NAME_LENGTH]
        self.machine.set_name(name)

    def _handle_key(self, event):
        stage = self.machine.stage
        if event.key == pygame.K_ESCAPE:
            self.running = False
            return

        if stage == Stage.NAMING:
            if event.key == pygame.K_BACKSPACE:
                self.machine.set_name(self.machine.friend_name[:-1])
            elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                self.machine.confirm_name()
            return

        if event.key == pygame.K_m:
            self.machine.toggle_mute()
        elif event.key == pygame.K_q:
            self.running = False
        elif stage == Stage.MAZE_GAME and event.key in KEY_DIRECTIONS:
            self.machine.move(KEY_DIRECTIONS[event.key])
        elif event.key in (pygame.K_RETURN, pygame.K_SPACE, pygame.K_KP_ENTER):
            self._continue()
        elif event.key in NUMBER_KEYS:
            self._pick(NUMBER_KEYS.index(event.key))
        elif event.key == pygame.K_p and stage == Stage.HEARING_GAME:
            self.machine.replay_sound()

    def _continue(self):
        stage = self.machine.stage
        if stage == Stage.INTRO:
            self.machine.acknowledge_intro()
        elif stage == Stage.JOURNEY_COMPLETE:
            self.machine.continue_journey()
        elif stage == Stage.DOG_HELP:
            self.machine.start_rescue()
        elif stage == Stage.FINAL_CELEBRATION:
            self.machine.restart()

    def _pick(self, index):
        """Number keys choose a friend or an answer"""
        if self.machine.stage == Stage.CHARACTER_SELECT:
            if index < len(CHARACTERS):
                self.machine.select_character(CHARACTERS[index])
        elif self.machine.phase is not None:
            engine = self.machine.round_engine
            if engine.accepting_input and index < len(engine.choices):
                self.machine.answer(engine.choices[index])

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    def update(self, dt):
        """Update game state"""
        self.machine.update(dt * self.config.speed)
        self.frame_count += 1

        if self.machine.stage != self.last_stage:
            if self.machine.stage == Stage.FINAL_CELEBRATION:
                self._spawn_confetti(120)
            else:
                self.particles = []
            self.last_stage = self.machine.stage

        if self.gestures and self.machine.stage == Stage.MAZE_GAME:
            self._update_gestures()

        self.particles = [p for p in self.particles if not p.update()]
        if self.machine.stage == Stage.FINAL_CELEBRATION and len(self.particles) < 40:
            self._spawn_confetti(20)

    def _update_gestures(self):
        if self.gesture_cooldown > 0:
            self.gesture_cooldown -= 1
            return
        direction = self.gestures.get_direction()
        if direction != Direction.NONE:
            self.machine.move(direction)
            self.gesture_cooldown = GESTURE_COOLDOWN

    def _spawn_confetti(self, count):
        colors = [RED, YELLOW, GREEN, BLUE, PURPLE, PINK, ORANGE]
        for _ in range(count):
            start_x = random.uniform(0, self.screen_width)
            start_y = random.uniform(-50, 50)
            target_x = random.uniform(50, self.screen_width - 50)
            target_y = random.uniform(self.screen_height * 0.5, self.screen_height)
            self.particles.append(Particle(start_x, start_y, target_x, target_y, random.choice(colors)))

    # ------------------------------------------------------------------
    # Drawing helpers
    # ------------------------------------------------------------------

    def _text(self, text, font, color, center):
        surface = font.render(text, True, color)
        rect = surface.get_rect(center=center)
        self.screen.blit(surface, rect)
        return rect

    def _glyph(self, glyph, size, center, fallback=None):
        """Render an emoji glyph, falling back to a text label"""
        font = self.glyph_fonts.get(size)
        if font is None:
            font = pygame.font.SysFont("segoeuiemoji,applecoloremoji,symbola,dejavusans", size)
            self.glyph_fonts[size] = font
        try:
            surface = font.render(glyph, True, BLACK)
        except (pygame.error, UnicodeError):
            surface = self.medium_font.render(fallback or "?", True, BLACK)
        self.screen.blit(surface, surface.get_rect(center=center))

    def _panel(self, rect, border=YELLOW, fill=WHITE):
        rect = pygame.Rect(rect)
        pygame.draw.rect(self.screen, fill, rect, border_radius=24)
        pygame.draw.rect(self.screen, border, rect, 5, border_radius=24)
        return rect

    def _avatar(self, center, radius):
        character = self.machine.character
        color = character.color if character else GRAY
        pygame.draw.circle(self.screen, color, center, radius)
        pygame.draw.circle(self.screen, WHITE, center, radius, 3)
        if character:
            self._glyph(character.glyph, int(radius * 1.2), center, fallback=character.name[:1])

    def _speech_bubble(self, text, center):
        surface = self.small_font.render(text, True, BLACK)
        rect = surface.get_rect(center=center).inflate(40, 24)
        pygame.draw.rect(self.screen, WHITE, rect, border_radius=18)
        pygame.draw.rect(self.screen, BLUE, rect, 4, border_radius=18)
        tail = [(rect.left + 30, rect.bottom - 2), (rect.left + 50, rect.bottom - 2), (rect.left + 32, rect.bottom + 14)]
        pygame.draw.polygon(self.screen, BLUE, tail)
        self.screen.blit(surface, surface.get_rect(center=rect.center))

    def _add_button(self, rect, text, action, **kwargs):
        button = Button(rect, text, action, **kwargs)
        self.buttons.append(button)
        return button

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def draw(self):
        """Draw the active stage"""
        stage = self.machine.stage
        self.screen.fill(STAGE_BACKGROUNDS[stage])
        self.buttons = []

        drawers = {
            Stage.INTRO: self._draw_intro,
            Stage.CHARACTER_SELECT: self._draw_character_select,
            Stage.NAMING: self._draw_naming,
            Stage.SIGHT_GAME: self._draw_training,
            Stage.HEARING_GAME: self._draw_training,
            Stage.THINKING_GAME: self._draw_training,
            Stage.JOURNEY_COMPLETE: self._draw_journey_complete,
            Stage.DOG_HELP: self._draw_dog_help,
            Stage.MAZE_GAME: self._draw_maze,
            Stage.FINAL_CELEBRATION: self._draw_final_celebration,
        }
        drawers[stage]()

        if stage != Stage.INTRO:
            self._draw_volume_control()

        for particle in self.particles:
            particle.draw(self.screen)
        for button in self.buttons:
            button.draw(self.screen, self.medium_font)

        pygame.display.flip()

    def _draw_volume_control(self):
        label = "Sound: Off" if self.audio.muted else "Sound: On"
        self._add_button((self.screen_width - 170, 16, 150, 44), label,
                         self.machine.toggle_mute, color=DARK_GRAY)

    def _draw_intro(self):
        cx = self.screen_width // 2
        self._panel((120, 100, self.screen_width - 240, 520), border=BLUE)
        self._text("Welcome to Tiny Thinkers!", self.title_font, PURPLE, (cx, 170))
        lines = [
            ("Your AI friend cannot see, hear, or think yet.", DARK_GRAY),
            ("They need your help!", PINK),
            ("Play fun games to help your AI friend see, hear, and think.", DARK_GRAY),
            ("Guide them through each challenge and watch them grow!", DARK_GRAY),
        ]
        for i, (line, color) in enumerate(lines):
            self._text(line, self.medium_font, color, (cx, 260 + i * 60))
        self._add_button((cx - 180, 520, 360, 64), "Start the Adventure!",
                         self.machine.acknowledge_intro, color=PURPLE)

    def _draw_character_select(self):
        cx = self.screen_width // 2
        self._text("Tiny Thinkers", self.title_font, WHITE, (cx, 80))
        self._text("Choose your AI friend to train!", self.large_font, WHITE, (cx, 140))

        card_w, card_h, gap = 240, 200, 30
        left = cx - (3 * card_w + 2 * gap) // 2
        for i, character in enumerate(CHARACTERS):
            col, row = i % 3, i // 3
            rect = pygame.Rect(left + col * (card_w + gap), 200 + row * (card_h + gap), card_w, card_h)
            card = self._add_button(rect, character.name,
                                    lambda c=character: self.machine.select_character(c),
                                    visible=False)
            if card.hovered:
                rect = rect.inflate(12, 12)
            pygame.draw.rect(self.screen, character.color, rect, border_radius=20)
            pygame.draw.rect(self.screen, WHITE, rect, 5, border_radius=20)
            self._glyph(character.glyph, 96, (rect.centerx, rect.centery - 20), fallback=character.id)
            self._text(character.name, self.large_font, WHITE, (rect.centerx, rect.bottom - 30))
            self._text(str(i + 1), self.small_font, WHITE, (rect.left + 20, rect.top + 20))

    def _draw_naming(self):
        cx = self.screen_width // 2
        self._panel((cx - 260, 110, 520, 480))
        self._avatar((cx, 210), 70)
        self._text("Name your AI friend!", self.large_font, DARK_GRAY, (cx, 320))

        box = pygame.Rect(cx - 200, 360, 400, 64)
        pygame.draw.rect(self.screen, WHITE, box, border_radius=12)
        pygame.draw.rect(self.screen, BLUE, box, 4, border_radius=12)
        name = self.machine.friend_name
        if name:
            cursor = "|" if (self.frame_count // 30) % 2 == 0 else " "
            self._text(name + cursor, self.large_font, BLACK, box.center)
        else:
            self._text("Enter a name...", self.medium_font, GRAY, box.center)

        self._add_button((cx - 160, 470, 320, 64), "Start Training!",
                         self.machine.confirm_name, color=GREEN,
                         enabled=self.machine.can_confirm_name)

    def _draw_training(self):
        machine = self.machine
        engine = machine.round_engine
        phase = machine.phase
        script = SCRIPTS[phase]
        name = machine.friend_name
        item = engine.current_item
        cx = self.screen_width // 2

        self._text(script.title.format(name=name), self.large_font, WHITE, (cx, 50))
        self._avatar((cx - 60, 115), 36)
        self._text(f"Question {engine.round_index + 1} of {engine.total_rounds}",
                   self.medium_font, WHITE, (cx + 80, 115))

        panel = self._panel((80, 160, self.screen_width - 160, 460), border=PHASE_BORDERS[phase])

        if isinstance(item, PatternItem):
            self._text("Pattern:", self.medium_font, DARK_GRAY, (cx, panel.top + 30))
            tokens = list(item.sequence) + ["?"]
            spacing = 110
            start = cx - spacing * (len(tokens) - 1) // 2
            for i, token in enumerate(tokens):
                self._glyph(token, 56, (start + i * spacing, panel.top + 90))
        else:
            self._glyph(item.glyph, 110, (cx, panel.top + 80), fallback=item.answer.primary)

        y = panel.top + 170
        if item.sound_key is not None:
            self._add_button((cx - 110, panel.top + 140, 220, 50), "Play Sound",
                             machine.replay_sound, color=BLUE)
            y += 40

        if engine.show_speech_bubble:
            self._speech_bubble(engine.speech_bubble_text(), (cx, y))

        if not engine.show_correction and engine.guessing_phase == GuessingPhase.DONE:
            box = pygame.Rect(cx - 300, y + 40, 600, 50)
            pygame.draw.rect(self.screen, LIGHT_RED, box, border_radius=12)
            pygame.draw.rect(self.screen, RED, box, 3, border_radius=12)
            self._text(f'{name} guessed: "{item.wrong_guess}"', self.medium_font, RED, box.center)
            self._text(script.question.format(name=name), self.medium_font, DARK_GRAY, (cx, y + 115))

            for i, choice in enumerate(engine.choices):
                col, row = i % 2, i // 2
                rect = (cx - 290 + col * 300, y + 145 + row * 64, 280, 54)
                self._add_button(rect, capitalize(choice),
                                 lambda value=choice: machine.answer(value), color=PHASE_BORDERS[phase])
        elif engine.show_correction:
            box = pygame.Rect(cx - 320, y + 60, 640, 80)
            pygame.draw.rect(self.screen, LIGHT_GREEN, box, border_radius=12)
            pygame.draw.rect(self.screen, GREEN, box, 3, border_radius=12)
            self._text(engine.thanks_text(), self.medium_font, DARK_GREEN, box.center)
        else:
            self._text(script.status.format(name=name), self.medium_font, GRAY, (cx, y + 90))

        if machine.progress.is_done(phase):
            banner = pygame.Rect(cx - 300, panel.bottom + 20, 600, 60)
            pygame.draw.rect(self.screen, ORANGE, banner, border_radius=18)
            self._text(script.badge.format(name=name), self.large_font, WHITE, banner.center)

    def _draw_journey_complete(self):
        cx = self.screen_width // 2
        self._panel((100, 60, self.screen_width - 200, 600))
        self._avatar((cx, 160), 70)
        self._text('"Wow, what a journey! Thank you for guiding me!"', self.large_font, DARK_GRAY, (cx, 270))
        for i, (label, color) in enumerate([("I can see!", GREEN), ("I can hear!", BLUE), ("I can think!", PURPLE)]):
            self._text(label, self.medium_font, color, (cx - 220 + i * 220, 350))
        self._text("Thanks to your training, I now have all the abilities I need to help others!",
                   self.small_font, DARK_GRAY, (cx, 420))
        self._add_button((cx - 200, 500, 400, 64), "Continue the Adventure!",
                         self.machine.continue_journey, color=GREEN)

    def _draw_dog_help(self):
        cx = self.screen_width // 2
        self._panel((100, 40, self.screen_width - 200, 640), border=RED)
        self._text('"Help! Help!"', self.title_font, RED, (cx, 100))
        self.dog.draw(self.screen, cx, 200, 120)
        self._avatar((cx - 250, 300), 36)
        self._speech_bubble("I can hear someone crying for help! Let me use my new abilities to find them!",
                            (cx + 40, 300))
        self._text("A Lost Dog Needs Help!", self.large_font, DARK_GRAY, (cx, 390))
        self._text(f"{self.machine.friend_name} can now hear the dog's cries, see that it's lost,",
                   self.small_font, DARK_GRAY, (cx, 440))
        self._text("and think of how to help!", self.small_font, DARK_GRAY, (cx, 470))
        self._add_button((cx - 210, 540, 420, 64), "Help Guide the Dog Home!",
                         self.machine.start_rescue, color=GREEN)

    def _draw_maze(self):
        machine = self.machine
        maze = machine.maze
        cx = self.screen_width // 2
        self._text(f"Help {machine.friend_name} Guide the Dog Home!", self.large_font, WHITE, (cx, 40))

        self._avatar((120, 120), 36)
        if machine.show_hint:
            self._speech_bubble("Use the arrows to help guide the dog home! I can see the path!", (cx, 110))

        grid_left = 100
        grid_top = 170
        for y in range(maze.size):
            for x in range(maze.size):
                rect = pygame.Rect(grid_left + x * CELL_SIZE, grid_top + y * CELL_SIZE, CELL_SIZE, CELL_SIZE)
                cell = maze.cell(x, y)
                if cell == WALL:
                    color = DARK_GRAY
                elif cell == HOME:
                    color = YELLOW
                else:
                    color = LIGHT_GREEN
                pygame.draw.rect(self.screen, color, rect)
                pygame.draw.rect(self.screen, GRAY, rect, 2)
                if cell == HOME and maze.position != (x, y):
                    self._draw_house(rect)

        dog_x = grid_left + maze.x * CELL_SIZE + CELL_SIZE // 2
        dog_y = grid_top + maze.y * CELL_SIZE + CELL_SIZE // 2 + 6
        self.dog.draw(self.screen, dog_x, dog_y, CELL_SIZE, maze.facing)

        # Arrow pad
        pad_x = grid_left + maze.size * CELL_SIZE + 180
        pad_y = grid_top + 130
        arrows = [
            (Direction.UP, "Up", (pad_x, pad_y - 80)),
            (Direction.LEFT, "Left", (pad_x - 110, pad_y)),
            (Direction.RIGHT, "Right", (pad_x + 110, pad_y)),
            (Direction.DOWN, "Down", (pad_x, pad_y + 80)),
        ]
        for direction, label, (x, y) in arrows:
            self._add_button((x - 50, y - 30, 100, 60), label,
                             lambda d=direction: machine.move(d), color=BLUE)
        self._text(f"Moves: {maze.moves}", self.medium_font, BLACK, (pad_x, pad_y))

        self._text("Legend: dog = you, yellow = home, dark = wall, green = path",
                   self.small_font, WHITE, (cx, grid_top + maze.size * CELL_SIZE + 40))
        self._text("Arrow keys work too!", self.small_font, WHITE, (cx, grid_top + maze.size * CELL_SIZE + 70))

        if self.gestures:
            self._draw_gesture_indicator(pad_x - 80, pad_y + 140)

    def _draw_house(self, rect):
        body = pygame.Rect(0, 0, rect.width // 2, int(rect.height * 0.35))
        body.midbottom = (rect.centerx, rect.bottom - 8)
        pygame.draw.rect(self.screen, RED, body)
        roof = [(body.left - 6, body.top), (body.right + 6, body.top), (rect.centerx, rect.top + 10)]
        pygame.draw.polygon(self.screen, DOG_DARK, roof)

    def _draw_gesture_indicator(self, x, y):
        """Camera preview with the detected pointing direction"""
        frame = self.gestures.get_frame()
        if frame is not None:
            rgb = np.ascontiguousarray(frame[:, :, ::-1].swapaxes(0, 1))
            preview = pygame.transform.smoothscale(pygame.surfarray.make_surface(rgb), (160, 120))
            self.screen.blit(preview, (x, y))
        direction = self.gestures.get_direction()
        label = "No gesture" if direction == Direction.NONE else direction.name
        self._text(label, self.small_font, BLACK, (x + 80, y + 135))

    def _draw_final_celebration(self):
        machine = self.machine
        name = machine.friend_name
        cx = self.screen_width // 2
        self._panel((80, 40, self.screen_width - 160, 560))
        self._avatar((cx - 90, 110), 46)
        self.dog.draw(self.screen, cx + 90, 115, 90)
        self._text("Mission Complete!", self.title_font, DARK_GREEN, (cx, 200))
        self._text(f"Thanks to your training, {name} successfully helped the lost dog find its way home!",
                   self.small_font, DARK_GRAY, (cx, 250))

        box = pygame.Rect(140, 280, self.screen_width - 280, 150)
        pygame.draw.rect(self.screen, ORANGE, box, border_radius=16)
        self._text(f"What {name} Used:", self.large_font, WHITE, (cx, box.top + 30))
        used = ["Sight to see the dog", "Hearing to hear cries", "Thinking to find the path"]
        for i, line in enumerate(used):
            self._text(line, self.small_font, WHITE, (box.left + 130 + i * 230, box.top + 100))

        lesson = pygame.Rect(140, 445, self.screen_width - 280, 130)
        pygame.draw.rect(self.screen, (219, 234, 254), lesson, border_radius=16)
        self._text("What You Learned!", self.large_font, BLUE, (cx, lesson.top + 30))
        self._text("AI needs human guidance to become helpful! AI is not magic - it's built",
                   self.small_font, BLUE, (cx, lesson.top + 75))
        self._text("by humans like you through careful training and design thinking!",
                   self.small_font, BLUE, (cx, lesson.top + 102))

        self._add_button((cx - 200, 620, 400, 64), "Train Another AI Friend!",
                         machine.restart, color=PURPLE)

    def run(self):
        """Main game loop"""
        try:
            while self.running:
                self.handle_events()
                self.update(self.dt)
                self.draw()
                self.dt = self.clock.tick(self.config.fps) / 1000.0
        finally:
            if self.gestures:
                self.gestures.stop()
            self.audio.close()
            pygame.quit()


def main(argv=None):
    """Entry point"""
    config = GameConfig.from_args(argv)
    config.configure_logging()
    logger.info("Starting Tiny Thinkers (seed=%s, muted=%s)", config.seed, config.muted)
    game = Game(config)
    game.run()


if __name__ == "__main__":
    main()
