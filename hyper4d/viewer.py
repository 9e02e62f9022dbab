import logging
import math

import numpy as np
import pygame

from .config import KernelConfig
from .integrator import FrameState, Intent, PlanePair, RotationInput, advance, clamp_dt
from .projection import ProjectionMode, project_edges
from .shapes import Shape4D

################################################################################
# pygame host for the tesseract kernel, shown as a wireframe.
#
# CONTROLS:
#   W/S: move forward/back
#   A/D: strafe left/right
#   Q/E: move kata/ana (along w)
#   Arrow Keys / mouse drag: rotate in the XY/XZ planes
#   Shift + rotate: rotate in the XW/YW planes
#   R: reset orientation
#   P: toggle parallel/perspective projection
################################################################################

logger = logging.getLogger(__name__)

WIDTH, HEIGHT = 1000, 800

# x red, y green, z blue, w yellow
AXIS_COLORS = [(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 0)]

KEY_INTENTS = {
    pygame.K_w: Intent.MOVE_FORWARD,
    pygame.K_s: Intent.MOVE_BACK,
    pygame.K_a: Intent.STRAFE_LEFT,
    pygame.K_d: Intent.STRAFE_RIGHT,
    pygame.K_e: Intent.MOVE_ANA,
    pygame.K_q: Intent.MOVE_KATA,
}


def intents_from_keys(keys):
    return {intent for key, intent in KEY_INTENTS.items() if keys[key]}


def rotation_from_keys(keys, shift, step):
    """Arrow keys as rotation deltas of +-step per axis."""
    horizontal = (step if keys[pygame.K_LEFT] else 0.0) - (step if keys[pygame.K_RIGHT] else 0.0)
    vertical = (step if keys[pygame.K_UP] else 0.0) - (step if keys[pygame.K_DOWN] else 0.0)
    return RotationInput(horizontal, vertical, PlanePair.HYPER if shift else PlanePair.SPATIAL)


def to_screen(points_3d, width=WIDTH, height=HEIGHT, fov=math.radians(70.0),
              camera_distance=6.0, near=0.1):
    """
    Pinhole projection of 3D points onto the window.
    The camera sits at z = camera_distance looking down -z.
    Returns (N, 2) screen coordinates and a mask of points in front of it.
    """
    pts = np.asarray(points_3d, dtype=float)
    z = pts[:, 2] - camera_distance
    visible = z < -near
    depth = np.where(visible, -z, 1.0)

    f = 1.0 / math.tan(fov / 2.0)
    aspect_ratio = width / height
    x_proj = (f / aspect_ratio) * (pts[:, 0] / depth)
    y_proj = f * (pts[:, 1] / depth)

    screen = np.stack([(x_proj + 1) * 0.5 * width, (1 - y_proj) * 0.5 * height], axis=1)
    return screen, visible


class Viewer:
    def __init__(self, config=KernelConfig(), shape=None, width=WIDTH, height=HEIGHT):
        self.config = config
        self.shape = shape if shape is not None else Shape4D.tesseract(config.size)
        self.colors = [AXIS_COLORS[a] if 0 <= a < 4 else (255, 255, 255) for a in self.shape.axes]
        self.width = width
        self.height = height
        self.mode = config.projection_mode
        self.state = FrameState.initial(config)
        self.key_rotate_speed = 1.2  # radians per second
        self.dragging = False
        self.drag = [0.0, 0.0]

    def handle_event(self, event):
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self.dragging = True
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.dragging = False
        elif event.type == pygame.MOUSEMOTION and self.dragging:
            dx, dy = event.rel
            self.drag[0] += dx
            self.drag[1] += dy
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_r:
                logger.info("orientation reset")
                self.state = self.state.reset_orientation()
            elif event.key == pygame.K_p:
                self.mode = (ProjectionMode.PERSPECTIVE if self.mode is ProjectionMode.PARALLEL
                             else ProjectionMode.PARALLEL)
                logger.info("projection mode: %s", self.mode.value)

    def step(self, dt, keys, shift):
        intents = intents_from_keys(keys)
        if self.drag != [0.0, 0.0]:
            planes = PlanePair.HYPER if shift else PlanePair.SPATIAL
            rotation = RotationInput(self.drag[0], self.drag[1], planes)
            self.drag = [0.0, 0.0]
        else:
            key_dt = clamp_dt(dt, self.config) or 0.0
            step = self.key_rotate_speed * key_dt / self.config.rotation_sensitivity
            rotation = rotation_from_keys(keys, shift, step)
        self.state = advance(self.state, dt, intents, rotation, self.config)
        return project_edges(self.shape.vertices, self.shape.edges, self.state,
                             self.mode, self.config.projection_params())

    def draw(self, screen, font, segments):
        screen.fill((0, 0, 0))
        points_2d, visible = to_screen(segments, self.width, self.height)
        for k, color in enumerate(self.colors):
            a, b = 2 * k, 2 * k + 1
            if visible[a] and visible[b]:
                pygame.draw.aaline(screen, color, points_2d[a], points_2d[b])

        lines = [
            "W/S/A/D move, Q/E kata/ana",
            "Arrows/drag rotate, Shift = W planes",
            "R reset, P projection",
            f"mode: {self.mode.value}",
            "observer: " + ", ".join(f"{c:.2f}" for c in self.state.observer),
        ]
        for i, txt in enumerate(lines):
            surf = font.render(txt, True, (200, 200, 200))
            screen.blit(surf, (10, 10 + 20 * i))
        pygame.display.flip()

    def run(self):
        pygame.init()
        screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption("Tesseract")
        clock = pygame.time.Clock()
        font = pygame.font.SysFont(None, 24)

        running = True
        try:
            while running:
                dt = clock.tick(60) / 1000.0
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    else:
                        self.handle_event(event)

                keys = pygame.key.get_pressed()
                shift = bool(pygame.key.get_mods() & pygame.KMOD_SHIFT)
                segments = self.step(dt, keys, shift)
                self.draw(screen, font, segments)
        finally:
            pygame.quit()
