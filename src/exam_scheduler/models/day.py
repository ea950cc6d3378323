from enum import IntEnum, auto


class Day(IntEnum):
    MON = auto()
    TUE = auto()
    WED = auto()
    THU = auto()
    FRI = auto()
    SAT = auto()

    @classmethod
    def parse(cls, value: "int | str | Day") -> "Day":
        """
        Accepts a weekday offset (1-6), an enum name ("FRI") or a full day name ("Friday")
        """
        if isinstance(value, str) and not value.isdigit():
            key = value.strip().upper()[:3]
            if key not in cls.__members__:
                raise ValueError(f"Unknown day: {value}")
            return cls[key]
        return cls(int(value))

    @property
    def full_name(self) -> str:
        return {
            Day.MON: "Monday",
            Day.TUE: "Tuesday",
            Day.WED: "Wednesday",
            Day.THU: "Thursday",
            Day.FRI: "Friday",
            Day.SAT: "Saturday",
        }[self]

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        """
        Pretty Print representation of a day
        """
        return self.name
