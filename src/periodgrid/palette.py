from __future__ import annotations

COLOR_NAMES: tuple[str, ...] = (
    "blue",
    "emerald",
    "purple",
    "orange",
    "pink",
    "cyan",
    "amber",
    "rose",
    "indigo",
    "teal",
)


class SubjectPalette:
    """Stable subject -> colour slot mapping, owned by whoever renders blocks.

    Labels are compared case- and whitespace-insensitively; each new subject
    takes the next slot, wrapping after ``size`` subjects.
    """

    def __init__(self, size: int = len(COLOR_NAMES)) -> None:
        if size < 1:
            msg = f"size must be >= 1, got {size}"
            raise ValueError(msg)
        self.size = size
        self._assigned: dict[str, int] = {}
        self._next = 0

    def __len__(self) -> int:
        return len(self._assigned)

    @staticmethod
    def normalize(label: str) -> str:
        return label.strip().lower()

    def color_index(self, label: str) -> int:
        key = self.normalize(label)
        if key not in self._assigned:
            self._assigned[key] = self._next % self.size
            self._next += 1
        return self._assigned[key]

    def color_name(self, label: str) -> str:
        return COLOR_NAMES[self.color_index(label) % len(COLOR_NAMES)]

    def reset(self) -> None:
        self._assigned.clear()
        self._next = 0
