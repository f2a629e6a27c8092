"""Sprite-based 2D particle emitters and a system that drives them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from britannia.primitives import WHITE, Color, Rect, Sprite, Vector2
from britannia.rng import RNG


def _clamp_channel(value: float) -> int:
    return max(0, min(255, int(value)))


@dataclass
class Particle:
    """A single particle; times are in seconds."""

    pos: Vector2 = Vector2()
    speed: Vector2 = Vector2()
    scale: float = 1.0
    angle: float = 0.0
    angular_velocity: float = 0.0
    start_color: Color = WHITE
    end_color: Color = WHITE
    birth: float = 0.0
    age: float = 0.0
    max_age: float = 1000.0
    is_dead: bool = False
    sprite: int = 0

    def color_at(self) -> Color:
        """Colour blended from start to end by how far through its life the particle is."""
        pct = 0.0
        span = self.max_age - self.birth
        if self.max_age > 0 and span != 0:
            pct = (self.age - self.birth) / span
        pct = min(max(pct, 0.0), 1.0)

        def blend(start: int, end: int) -> int:
            return _clamp_channel(start * (1.0 - pct) + end * pct)

        return Color(
            blend(self.start_color.r, self.end_color.r),
            blend(self.start_color.g, self.end_color.g),
            blend(self.start_color.b, self.end_color.b),
            blend(self.start_color.a, self.end_color.a),
        )


@dataclass(frozen=True)
class DrawCommand:
    """Where and how to draw one particle."""

    sprite: Sprite
    dest: Rect
    angle: float
    color: Color


class Emitter:
    """Owns a set of particles and the sprites they are drawn with."""

    def __init__(self, rng: RNG | None = None) -> None:
        self._rng = rng if rng is not None else RNG()
        self._sprites: list[Sprite] = []
        self.particles: list[Particle] = []
        self.pos = Vector2()
        self.draw_offset = Vector2()
        self.color_mask: Color = WHITE
        self.texture: Any = None
        self.started = False
        self.is_dead = False

    def start(self) -> None:
        """Start updating and drawing particles."""
        self.started = True

    def stop(self) -> None:
        """Stop the emitter; its particles stay where they are."""
        self.started = False

    def add_sprite(self, sprite: Sprite) -> None:
        """Add a sprite that new particles may be drawn with."""
        self._sprites.append(sprite)

    @property
    def sprites(self) -> list[Sprite]:
        """The sprites available to particles."""
        return list(self._sprites)

    def add_particle(self, particle: Particle) -> None:
        """Add a particle, assigning it a randomly chosen sprite."""
        if not self._sprites:
            raise ValueError("an emitter needs a sprite before particles can be added")
        particle.sprite = self._rng.random(len(self._sprites) - 1)
        self.particles.append(particle)

    def spawn(
        self,
        pos: Vector2,
        velocity: Vector2,
        max_age: float,
        now: float = 0.0,
        start_color: Color = WHITE,
        end_color: Color = WHITE,
        rotation: float = 0.0,
        scale: float = 1.0,
    ) -> Particle:
        """Create a particle born at now that lives for max_age seconds."""
        particle = Particle(
            pos=pos,
            speed=velocity,
            scale=scale,
            angle=0.0,
            angular_velocity=rotation,
            start_color=start_color,
            end_color=end_color,
            birth=now,
            age=now,
            max_age=now + max_age,
        )
        self.particles.append(particle)
        return particle

    def update(self, dt: float) -> None:
        """Move and age particles by dt seconds and drop the dead ones."""
        if not self.started:
            return
        for particle in self.particles:
            particle.angle += particle.angular_velocity
            particle.pos = particle.pos + particle.speed * dt
            particle.age += dt
            if particle.age > particle.max_age:
                particle.is_dead = True
        self.particles = [p for p in self.particles if not p.is_dead]

    def _masked(self, color: Color) -> Color:
        mask = self.color_mask
        return Color(
            _clamp_channel(color.r * mask.r / 255),
            _clamp_channel(color.g * mask.g / 255),
            _clamp_channel(color.b * mask.b / 255),
            _clamp_channel(color.a * mask.a / 255),
        )

    def draw_commands(self, screen_width: int, screen_height: int) -> list[DrawCommand]:
        """Draw commands for every particle, centred on the screen."""
        if not self.started:
            return []
        commands = []
        for particle in self.particles:
            draw_x = (self.pos.x + particle.pos.x - self.draw_offset.x) * particle.scale + screen_width // 2
            draw_y = (self.pos.y + particle.pos.y - self.draw_offset.y) * particle.scale + screen_height // 2
            commands.append(
                DrawCommand(
                    sprite=self._sprites[particle.sprite],
                    dest=Rect(draw_x, draw_y, particle.scale, particle.scale),
                    angle=particle.angle,
                    color=self._masked(particle.color_at()),
                )
            )
        return commands


@dataclass
class ParticleSystem:
    """Updates and draws a list of emitters."""

    emitters: list[Emitter] = field(default_factory=list)
    pos: Vector2 = Vector2()

    def __init__(self) -> None:
        self.emitters = []
        self.pos = Vector2()

    def add_emitter(self, emitter: Emitter) -> None:
        """Add an emitter to the system."""
        self.emitters.append(emitter)

    def clear(self) -> None:
        """Remove every emitter."""
        self.emitters.clear()

    def update(self, dt: float) -> None:
        """Update every emitter and drop the dead ones."""
        alive = []
        for emitter in self.emitters:
            emitter.draw_offset = self.pos
            emitter.update(dt)
            if not emitter.is_dead:
                alive.append(emitter)
        self.emitters = alive

    def draw_commands(self, screen_width: int, screen_height: int) -> list[DrawCommand]:
        """Draw commands of all emitters in order."""
        return [
            command
            for emitter in self.emitters
            for command in emitter.draw_commands(screen_width, screen_height)
        ]