"""Executable actions accepted by the session manager."""

from __future__ import annotations

from typing import Any, ClassVar
from dataclasses import field, dataclass
from collections.abc import Callable, Sequence, Awaitable

from figbridge.errors import BatchExecutionError
from figbridge.markup import compile_batch, compile_markup
from figbridge.config.daemon import ACTION_EVAL, ACTION_RENDER, ACTION_RENDER_BATCH

Evaluate = Callable[[str], Awaitable[Any]]


@dataclass(frozen=True, slots=True)
class EvalAction:
    code: str

    kind: ClassVar[str] = ACTION_EVAL

    async def run(self, evaluate: Evaluate) -> Any:
        return await evaluate(self.code)


@dataclass(frozen=True, slots=True)
class RenderAction:
    markup: str
    script: str

    kind: ClassVar[str] = ACTION_RENDER

    @classmethod
    def from_markup(cls, markup: str) -> RenderAction:
        # Compiling here surfaces syntax errors before any connect happens.
        return cls(markup=markup, script=compile_markup(markup))

    async def run(self, evaluate: Evaluate) -> Any:
        return await evaluate(self.script)


@dataclass(slots=True)
class RenderBatchAction:
    """Best-effort sequential batch.

    `results` survives across retry attempts, so a retry resumes at the unit
    that failed and completed units are never evaluated twice.
    """

    scripts: tuple[str, ...]
    results: list[Any] = field(default_factory=list)

    kind: ClassVar[str] = ACTION_RENDER_BATCH

    @classmethod
    def from_markups(cls, markups: Sequence[str]) -> RenderBatchAction:
        return cls(scripts=tuple(compile_batch(markups)))

    async def run(self, evaluate: Evaluate) -> list[Any]:
        for index in range(len(self.results), len(self.scripts)):
            try:
                self.results.append(await evaluate(self.scripts[index]))
            except Exception as exc:
                raise BatchExecutionError(
                    message=str(exc),
                    results=list(self.results),
                    failed_index=index,
                ) from exc
        return list(self.results)


Action = EvalAction | RenderAction | RenderBatchAction


__all__ = ["Action", "EvalAction", "Evaluate", "RenderAction", "RenderBatchAction"]
