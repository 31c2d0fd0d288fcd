from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, TextIO

from pygame.math import Vector2

from ..sim.types.snapshot import GameColor, Kinematics, MapLayout, Marker, SnapshotError, TurnSnapshot, Vertex


class ProtocolError(SnapshotError):
    pass


class TokenReader:
    """Whitespace-separated tokens pulled lazily from a text stream."""

    def __init__(self, stream: TextIO):
        self._stream = stream
        self._tokens: Iterator[str] = iter(())
        self._pending: Optional[str] = None

    def _next_token(self) -> Optional[str]:
        if self._pending is not None:
            token, self._pending = self._pending, None
            return token
        while True:
            token = next(self._tokens, None)
            if token is not None:
                return token
            line = self._stream.readline()
            if not line:
                return None
            self._tokens = iter(line.split())

    def at_eof(self) -> bool:
        token = self._next_token()
        if token is None:
            return True
        self._pending = token
        return False

    def read_int(self, what: str) -> int:
        token = self._require(what)
        try:
            return int(token)
        except ValueError as exc:
            raise ProtocolError(f"expected integer for {what}, got {token!r}") from exc

    def read_float(self, what: str) -> float:
        token = self._require(what)
        try:
            return float(token)
        except ValueError as exc:
            raise ProtocolError(f"expected number for {what}, got {token!r}") from exc

    def read_count(self, what: str) -> int:
        count = self.read_int(what)
        if count < 0:
            raise ProtocolError(f"negative {what}: {count}")
        return count

    def _require(self, what: str) -> str:
        token = self._next_token()
        if token is None:
            raise ProtocolError(f"unexpected end of input while reading {what}")
        return token


def read_color(reader: TokenReader, what: str) -> GameColor:
    value = reader.read_int(what)
    try:
        return GameColor(value)
    except ValueError as exc:
        raise ProtocolError(f"unknown color {value} for {what}") from exc


def read_layout(reader: TokenReader) -> MapLayout:
    vertices: List[Vertex] = []
    for index in range(reader.read_count("vertex count")):
        what = f"vertex {index}"
        vertices.append(Vertex(reader.read_int(what), reader.read_int(what), reader.read_int(what)))

    regions: List[List[int]] = []
    for index in range(reader.read_count("region count")):
        size = reader.read_count(f"region {index} size")
        regions.append([reader.read_int(f"region {index} vertex") for _ in range(size)])

    return MapLayout.build(vertices, regions)


def _read_vector(reader: TokenReader, what: str) -> Vector2:
    return Vector2(reader.read_float(what), reader.read_float(what))


def read_turn(reader: TokenReader) -> Optional[TurnSnapshot]:
    """Read one turn; ``None`` on a negative turn number or a clean end of input."""
    if reader.at_eof():
        return None
    turn = reader.read_int("turn number")
    if turn < 0:
        return None

    scores = (reader.read_int("red score"), reader.read_int("blue score"))

    region_colors = [read_color(reader, f"region {i} color") for i in range(reader.read_count("region color count"))]

    agents: List[Kinematics] = []
    for index in range(reader.read_count("pusher count")):
        what = f"pusher {index}"
        agents.append(Kinematics(position=_read_vector(reader, what), velocity=_read_vector(reader, what)))

    markers: List[Marker] = []
    for index in range(reader.read_count("marker count")):
        what = f"marker {index}"
        position = _read_vector(reader, what)
        velocity = _read_vector(reader, what)
        markers.append(Marker(position=position, velocity=velocity, color=read_color(reader, what)))

    return TurnSnapshot(turn=turn, scores=scores, region_colors=region_colors, agents=agents, markers=markers)


def format_commands(commands: Sequence[Vector2]) -> str:
    return " ".join(f"{float(command.x)} {float(command.y)}" for command in commands)
