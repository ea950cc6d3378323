from typing import Iterable, Literal

from pydantic import Field, field_validator

from .entity import Entity

SEAT_COLOR_PALETTE = ("Red", "Green", "Blue", "Yellow", "Orange", "Purple")
DEFAULT_SEAT_COLORS = ["Red", "Green", "Blue"]


class Room(Entity):
    name: str
    building: str = ""
    capacity: int = 0
    status: Literal["available", "occupied", "maintenance"] = "available"
    seat_colors: list[str] = Field(default_factory=lambda: list(DEFAULT_SEAT_COLORS))
    used_seat_colors: list[str] = Field(default_factory=list)

    @field_validator("seat_colors")
    @classmethod
    def _check_palette(cls, colors: list[str]) -> list[str]:
        unknown = [c for c in colors if c not in SEAT_COLOR_PALETTE]
        if unknown:
            raise ValueError(f"Unknown seat colors: {', '.join(unknown)}")
        return list(dict.fromkeys(colors))

    @property
    def is_available(self) -> bool:
        return self.status == "available"

    def free_seat_colors(self, claimed: Iterable[str | None]) -> list[str]:
        """
        Seat colors of this room not in `claimed`, in the room's own order
        """
        taken = set(claimed)
        return [c for c in self.seat_colors if c not in taken]

    def clear_used_seat_colors(self) -> "Room":
        return self.model_copy(update={"used_seat_colors": []})

    def __str__(self):
        return self.name
