"""Command execution data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommandResult:
    """Result of a local command execution."""

    output: str
    error: str
    returncode: int
    duration: float = 0.0
    timed_out: bool = False

    @property
    def ok(self) -> bool:
        """True when the command exited 0 within its timeout."""
        return self.returncode == 0 and not self.timed_out

    @property
    def detail(self) -> str:
        """Best available explanation of a failure."""
        if self.timed_out:
            return f"timed out after {self.duration:.1f}s"
        message = self.error.strip() or self.output.strip()
        return message or f"exit status {self.returncode}"
