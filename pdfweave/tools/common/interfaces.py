"""Core interfaces and context objects shared by pdfweave tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from ...config import EngineSettings, get_settings
from ...core.utils import resolve_path
from ...exceptions import PdfValidationError


@dataclass
class ToolContext:
    """Holds shared execution state for a tool invocation."""

    input_path: Path | None = None
    output_path: Path | None = None
    resources: dict[str, Any] = field(default_factory=dict)
    config: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.input_path, (str, Path)):
            self.input_path = resolve_path(self.input_path)
        if isinstance(self.output_path, (str, Path)):
            self.output_path = resolve_path(self.output_path)

    @property
    def settings(self) -> EngineSettings:
        settings = self.config.get("settings")
        if isinstance(settings, EngineSettings):
            return settings
        return get_settings()

    def with_updates(
        self,
        *,
        input_path: str | Path | None = None,
        output_path: str | Path | None = None,
        config: dict[str, Any] | None = None,
    ) -> "ToolContext":
        data = ToolContext(
            input_path=input_path or self.input_path,
            output_path=output_path or self.output_path,
            resources=dict(self.resources),
            config=dict(self.config),
        )
        if config:
            data.config.update(config)
        return data


class BaseTool:
    """Base class for all pluggable pdfweave tools."""

    name: str

    def __init__(self, context: ToolContext) -> None:
        self.context = context

    def require_input(self) -> Path:
        if self.context.input_path is None:
            raise PdfValidationError(f"Tool '{self.name}' requires an input path")
        return self.context.input_path

    def require_output(self) -> Path:
        if self.context.output_path is None:
            raise PdfValidationError(f"Tool '{self.name}' requires an output path")
        return self.context.output_path

    def run(self) -> Any:  # pragma: no cover - to be implemented by subclasses
        raise NotImplementedError


ToolFactory = Callable[[ToolContext], BaseTool]
