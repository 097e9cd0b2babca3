"""Polygons with the derived data needed for no-fit-polygon construction."""

from __future__ import annotations

import base64
import io
import math
import sys
from itertools import pairwise
from typing import Iterable

from PIL import Image, ImageDraw

from .job import Coord

TAU = math.tau
_IMAGE_WIDTH = 400.0
_MAX_IMAGE_HEIGHT = 10000.0
_BACKGROUND = (0, 0, 0, 255)
_LINE_COLOUR = (0, 0, 255, 188)


def _to_coord(point) -> Coord:
    return point if isinstance(point, Coord) else Coord(float(point[0]), float(point[1]))


def _signed_area(ring: list[Coord]) -> float:
    return sum(a.x * b.y - b.x * a.y for a, b in pairwise(ring)) / 2.0


class NestPolygon:
    """A closed, counter-clockwise polygon with its edge slopes and bounds."""

    def __init__(self, points: Iterable) -> None:
        ring = [_to_coord(p) for p in points]
        if ring and ring[0] != ring[-1]:
            ring.append(ring[0])
        if len(ring) < 2:
            raise ValueError("a polygon needs at least two points")
        if _signed_area(ring) < 0:
            ring.reverse()

        self.points: tuple[Coord, ...] = tuple(ring)
        self.slopes: tuple[float, ...] = tuple(
            math.fmod(math.atan2(b.y - a.y, b.x - a.x) + TAU, TAU) for a, b in pairwise(ring)
        )

        zero_index = 0
        pi_index = 0
        prev = self.slopes[-1]
        for i, slope in enumerate(self.slopes):
            if prev > slope:
                zero_index = i
            if prev < math.pi and slope >= math.pi:
                pi_index = i
            prev = slope
        self.zero_index = zero_index
        self.pi_index = pi_index

        rotated = self.slopes[zero_index:] + self.slopes[:zero_index]
        self.is_convex = all(a <= b for a, b in pairwise(rotated))

        self.minx = min(p.x for p in ring)
        self.maxx = max(p.x for p in ring)
        self.miny = min(p.y for p in ring)
        self.maxy = max(p.y for p in ring)
        self.bottom_left = Coord(min(p.x for p in ring if p.y == self.miny), self.miny)

    def __repr__(self) -> str:
        return f"NestPolygon({list(self.points)!r})"

    def translate(self, dx: float, dy: float) -> NestPolygon:
        """Return a copy moved by (dx, dy)."""
        return NestPolygon(Coord(p.x + dx, p.y + dy) for p in self.points)

    def minkowski_sum(self, other: NestPolygon) -> NestPolygon:
        """Return the no-fit polygon of ``other`` orbiting this convex polygon."""
        if not self.is_convex:
            raise ValueError("can't get NFP for concave polygon")

        own, theirs = self.points, other.points
        own_count, their_count = len(self.slopes), len(other.slopes)

        loc = self.bottom_left
        i1 = self.zero_index
        i2 = other.pi_index
        outline = [loc]

        def step_own() -> None:
            nonlocal loc, i1
            loc = loc + own[i1 + 1] - own[i1]
            outline.append(loc)
            i1 = (i1 + 1) % own_count

        def step_other() -> None:
            nonlocal loc, i2
            loc = loc + theirs[i2] - theirs[i2 + 1]
            outline.append(loc)
            i2 = (i2 + 1) % their_count

        while True:
            s1 = self.slopes[i1]
            s2 = math.fmod(other.slopes[i2] + math.pi, TAU)
            if s1 <= s2:
                step_own()
                if i1 == self.zero_index:
                    step_other()
                    while i2 != other.pi_index:
                        step_other()
                    break
            else:
                step_other()
                if i2 == other.pi_index:
                    step_own()
                    while i1 != self.zero_index:
                        step_own()
                    break

        return NestPolygon(outline)


def render_png(polygons: Iterable[NestPolygon]) -> bytes:
    """Render the outlines of the polygons into a PNG image."""
    polygons = list(polygons)
    if not polygons:
        raise ValueError("nothing to render")

    minx = min(p.minx for p in polygons)
    maxx = max(p.maxx for p in polygons)
    miny = min(p.miny for p in polygons)
    maxy = max(p.maxy for p in polygons)
    minx = minx - (maxx - minx) / 20.0
    maxx = maxx + (maxx - minx) / 20.0
    miny = miny - (maxy - miny) / 20.0
    maxy = maxy + (maxy - miny) / 20.0

    dx = maxx - minx
    dy = maxy - miny
    if dx <= 0 or dy <= 0:
        raise ValueError("polygons have no extent to render")

    w = _IMAGE_WIDTH
    h = min(w / dx * dy, _MAX_IMAGE_HEIGHT)

    image = Image.new("RGBA", (int(w), int(h)), _BACKGROUND)
    canvas = ImageDraw.Draw(image)
    for polygon in polygons:
        vertices = [
            ((p.x - minx) * w / dx, h - (p.y - miny) * h / dy) for p in polygon.points[:-1]
        ]
        for start, end in zip([vertices[-1], *vertices[:-1]], vertices):
            canvas.line([start, end], fill=_LINE_COLOUR)

    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def draw(polygons: Iterable[NestPolygon]) -> None:
    """Show the polygons inline in a terminal that understands iTerm image escapes."""
    encoded = base64.b64encode(render_png(polygons)).decode("ascii").rstrip("=")
    sys.stdout.write(f"\x1b]1337;File=inline=1;size={len(encoded)}:")
    print(encoded)
    print("\x07")


def demo() -> None:
    """Slide one polygon around another along their no-fit polygon, drawing each step."""
    fixed = NestPolygon(
        [(20.0, 10.0), (30.0, 0.0), (40.0, 0.0), (50.0, 10.0), (60.0, 20.0), (70.0, 30.0), (50.0, 70.0)]
    )
    orbiting = NestPolygon(
        [(0.0, 20.0), (10.0, 40.0), (20.0, 50.0), (40.0, 60.0), (60.0, 30.0), (40.0, 0.0), (20.0, 10.0)]
    )

    nfp = fixed.minkowski_sum(orbiting)
    print(f"nfp last point = {nfp.points[-1]}")

    shift = fixed.points[fixed.zero_index] - orbiting.points[orbiting.pi_index]
    orbiting = orbiting.translate(shift.x, shift.y)
    for previous, current in pairwise(nfp.points):
        step = current - previous
        orbiting = orbiting.translate(step.x, step.y)
        draw([fixed, orbiting, nfp])