"""CommandSpec value object — the command every attempt executes."""

from pydantic import BaseModel, Field


class CommandSpec(BaseModel, frozen=True):
    """Executable name plus its argument list. Read-only for the whole run."""

    name: str = Field(min_length=1)
    args: tuple[str, ...] = ()

    @property
    def argv(self) -> list[str]:
        return [self.name, *self.args]
