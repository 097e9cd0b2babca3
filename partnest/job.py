"""Job description types: the input of a nesting job and the updates it reports."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping


def _require_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be an object, got {type(data).__name__}")
    return data


def _field(data: Mapping[str, Any], name: str) -> Any:
    try:
        return data[name]
    except KeyError:
        raise ValueError(f"missing field `{name}`") from None


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field `{name}` must be an integer, got {value!r}")
    return value


def _as_float(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"field `{name}` must be a number, got {value!r}")
    return float(value)


def _as_str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"field `{name}` must be a string, got {value!r}")
    return value


def _as_list(value: Any, name: str) -> list:
    if not isinstance(value, list):
        raise ValueError(f"field `{name}` must be a list, got {value!r}")
    return value


@dataclass(frozen=True)
class Coord:
    """A point or a displacement in the plane."""

    x: float
    y: float

    def __add__(self, other: Coord) -> Coord:
        return Coord(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Coord) -> Coord:
        return Coord(self.x - other.x, self.y - other.y)

    @classmethod
    def from_dict(cls, data: Any) -> Coord:
        data = _require_mapping(data, "coordinate")
        return cls(_as_float(_field(data, "x"), "x"), _as_float(_field(data, "y"), "y"))

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


class Status(Enum):
    PENDING = "Pending"
    RUNNING = "Running"
    DONE = "Done"
    FAILED = "Failed"


class ErrorType(Enum):
    TIMEOUT = "Timeout"
    INVALID_INPUT = "InvalidInput"
    PART_DOES_NOT_FIT = "PartDoesNotFit"
    CANCELLED = "Cancelled"
    TOO_BUSY = "TooBusy"


@dataclass
class Part:
    """A part to nest: how many copies, its outline and its allowed rotations."""

    quantity: int
    contour: list[Coord]
    rotations: list[int]

    @classmethod
    def from_dict(cls, data: Any) -> Part:
        data = _require_mapping(data, "part")
        return cls(
            quantity=_as_int(_field(data, "quantity"), "quantity"),
            contour=[Coord.from_dict(c) for c in _as_list(_field(data, "contour"), "contour")],
            rotations=[
                _as_int(r, "rotations") for r in _as_list(_field(data, "rotations"), "rotations")
            ],
        )


@dataclass
class Sheet:
    """A stock sheet the parts are cut from."""

    length: float
    width: float
    cost: float

    @classmethod
    def from_dict(cls, data: Any) -> Sheet:
        data = _require_mapping(data, "sheet")
        return cls(
            length=_as_float(_field(data, "length"), "length"),
            width=_as_float(_field(data, "width"), "width"),
            cost=_as_float(_field(data, "cost"), "cost"),
        )


@dataclass
class Input:
    """Everything a nesting job is given."""

    nesting_job_ulid: str
    parts: list[Part]
    sheets: list[Sheet]
    tool_diameter: float
    timeout: int

    @classmethod
    def from_dict(cls, data: Any) -> Input:
        data = _require_mapping(data, "input")
        return cls(
            nesting_job_ulid=_as_str(_field(data, "nesting_job_ulid"), "nesting_job_ulid"),
            parts=[Part.from_dict(p) for p in _as_list(_field(data, "parts"), "parts")],
            sheets=[Sheet.from_dict(s) for s in _as_list(_field(data, "sheets"), "sheets")],
            tool_diameter=_as_float(_field(data, "tool_diameter"), "tool_diameter"),
            timeout=_as_int(_field(data, "timeout"), "timeout"),
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> Input:
        return cls.from_dict(json.loads(text))


@dataclass(frozen=True)
class Placement:
    """One copy of a part, placed at a given angle."""

    part_index: int
    nth_part: int
    angle: int

    def to_dict(self) -> dict[str, int]:
        return {"part_index": self.part_index, "nth_part": self.nth_part, "angle": self.angle}


@dataclass
class GenerationResult:
    """The best arrangement found in one generation."""

    sheet_count: int
    last_sheet_left_over: int
    cut_loss_ratio: float
    placements_and_location: list[tuple[Placement, Coord]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "sheet_count": self.sheet_count,
            "last_sheet_left_over": self.last_sheet_left_over,
            "cut_loss_ratio": self.cut_loss_ratio,
            "placements_and_location": [
                [placement.to_dict(), location.to_dict()]
                for placement, location in self.placements_and_location
            ],
        }


@dataclass
class JobError:
    """Why a job failed."""

    error_type: ErrorType
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"error_type": self.error_type.value, "message": self.message}


@dataclass
class Update:
    """A progress report sent back while a job runs."""

    status: Status
    nesting_solution: GenerationResult | None = None
    error: JobError | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "nesting_solution": (
                None if self.nesting_solution is None else self.nesting_solution.to_dict()
            ),
            "error": None if self.error is None else self.error.to_dict(),
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))