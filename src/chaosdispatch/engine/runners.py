# src/chaosdispatch/engine/runners.py
"""Fixed-signature front ends over ChaosDispatcher.

Each class pins the call shape of its variants (no argument, one argument,
two arguments; value-returning or side-effecting) and exposes the familiar
``run`` / ``run_no_chaos`` / ``run_force_chaos`` trio. Selection, validation
and the chaos switches all come from ChaosDispatcher.

Usage:
    flaky_read = ChaosRunner[str, bytes].from_functions(read_file, raise_eio)
    data = flaky_read.run("/etc/hosts")

    log_sink = ChaosConsumer(
        ChaosVariant(write_line, 0.99),
        ChaosVariant(drop_line, 0.01),
    )
    log_sink.run("hello")
"""

from __future__ import annotations

from chaosdispatch.engine.dispatcher import ChaosDispatcher


class ChaosSupplier[R](ChaosDispatcher[[], R]):
    """Variants take no arguments and return a value."""

    def run(self) -> R:
        return self.dispatch()

    def run_no_chaos(self) -> R:
        return self.dispatch_baseline()

    def run_force_chaos(self) -> R:
        return self.dispatch_forced()


class ChaosAction(ChaosDispatcher[[], object]):
    """Variants take no arguments; results are discarded."""

    def run(self) -> None:
        self.dispatch()

    def run_no_chaos(self) -> None:
        self.dispatch_baseline()

    def run_force_chaos(self) -> None:
        self.dispatch_forced()


class ChaosRunner[T, R](ChaosDispatcher[[T], R]):
    """Variants take one argument and return a value."""

    def run(self, value: T) -> R:
        return self.dispatch(value)

    def run_no_chaos(self, value: T) -> R:
        return self.dispatch_baseline(value)

    def run_force_chaos(self, value: T) -> R:
        return self.dispatch_forced(value)


class ChaosConsumer[T](ChaosDispatcher[[T], object]):
    """Variants take one argument; results are discarded."""

    def run(self, value: T) -> None:
        self.dispatch(value)

    def run_no_chaos(self, value: T) -> None:
        self.dispatch_baseline(value)

    def run_force_chaos(self, value: T) -> None:
        self.dispatch_forced(value)


class ChaosBiRunner[T, U, R](ChaosDispatcher[[T, U], R]):
    """Variants take two arguments and return a value."""

    def run(self, first: T, second: U) -> R:
        return self.dispatch(first, second)

    def run_no_chaos(self, first: T, second: U) -> R:
        return self.dispatch_baseline(first, second)

    def run_force_chaos(self, first: T, second: U) -> R:
        return self.dispatch_forced(first, second)


class ChaosBiConsumer[T, U](ChaosDispatcher[[T, U], object]):
    """Variants take two arguments; results are discarded."""

    def run(self, first: T, second: U) -> None:
        self.dispatch(first, second)

    def run_no_chaos(self, first: T, second: U) -> None:
        self.dispatch_baseline(first, second)

    def run_force_chaos(self, first: T, second: U) -> None:
        self.dispatch_forced(first, second)
