from dataclasses import dataclass, field


@dataclass(frozen=True)
class Activity:
    """A unit of project work. Instances are immutable; updates replace them."""
    code: str
    description: str
    duration: int
    cost: float
    requirements: tuple[str, ...] = field(default_factory=tuple)

    def requires(self, code: str) -> bool:
        return code in self.requirements

    def without_requirement(self, code: str) -> "Activity":
        """Return a copy of this activity that no longer requires `code`."""
        if code not in self.requirements:
            return self
        return Activity(
            code=self.code,
            description=self.description,
            duration=self.duration,
            cost=self.cost,
            requirements=tuple(r for r in self.requirements if r != code),
        )

    def to_row(self) -> dict:
        return {
            "Code": self.code,
            "Description": self.description,
            "Duration": self.duration,
            "Cost": self.cost,
            "Requirements": list(self.requirements),
        }
