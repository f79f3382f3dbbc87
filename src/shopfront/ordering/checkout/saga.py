"""Compensating saga — runs checkout steps and undoes them on failure.

Each step returns the action that reverses it (or ``None`` when there is
nothing to undo). If a later step raises, the saga runs the compensations
of the completed steps in reverse order and lets the error propagate.

    with Saga("place-order", user_id=user_id) as saga:
        saga.run("redeem-coupon", redeem)
        saga.run("reserve-stock", reserve)
        saga.run("persist-order", persist)
"""

from collections.abc import Callable
from dataclasses import dataclass

import structlog

logger = structlog.get_logger(__name__)

Compensation = Callable[[], None]


@dataclass(frozen=True)
class CompletedStep:
    name: str
    compensation: Compensation | None


class Saga:
    def __init__(self, name: str, **context):
        self.name = name
        self.context = context
        self.completed: list[CompletedStep] = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc is not None:
            self.compensate(exc)
        return False

    def run(self, step: str, action: Callable[[], Compensation | None]) -> None:
        compensation = action()
        self.completed.append(CompletedStep(step, compensation))
        logger.debug("Saga step completed", saga=self.name, step=step, **self.context)

    def compensate(self, cause: BaseException | None = None) -> None:
        """Undo completed steps, most recent first.

        A failing compensation is logged and the remaining ones still run;
        the error that triggered compensation is the one the caller sees.
        """
        logger.info(
            "Compensating saga",
            saga=self.name,
            steps=[step.name for step in self.completed],
            cause=type(cause).__name__ if cause else None,
            **self.context,
        )
        while self.completed:
            step = self.completed.pop()
            if step.compensation is None:
                continue
            try:
                step.compensation()
            except Exception:
                logger.exception("Compensation failed", saga=self.name, step=step.name, **self.context)
