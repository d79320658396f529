# -*- coding: utf-8 -*-
"""
pylinkgen/bindgen/orchestrator.py
Two-phase dump -> classify -> emit -> re-fetch -> re-emit driver.

    INIT -> PHASE1_DUMP -> PHASE1_EMIT -> [PHASE2_FETCH -> PHASE2_EMIT] -> DONE

Phase 2 only runs when phase 1 deferred something, and the secondary lookup
is called at most once per run.
"""

import logging
from enum import Enum
from typing import List, Optional, Sequence

from pylinkgen.core.config import UNSUPPORTED_KIND_POLICIES
from pylinkgen.core.exceptions import (
    ConfigValidationError,
    ModuleMismatchError,
    UnsupportedSymbolKindError,
    KeywordParametersRejected,
)
from .classifier import SymbolClassifier
from .emitter import BindingEmitter
from .interfaces import SymbolSource
from .models import Module, Disposition, DeferredSet, PhaseResult, BindingReport

logger = logging.getLogger(__name__)


class State(Enum):
    INIT = "init"
    PHASE1_DUMP = "phase1_dump"
    PHASE1_EMIT = "phase1_emit"
    PHASE2_FETCH = "phase2_fetch"
    PHASE2_EMIT = "phase2_emit"
    DONE = "done"


class RetryOrchestrator:
    """Drives one binding generation run against a SymbolSource."""

    def __init__(self,
                 source: SymbolSource,
                 classifier: SymbolClassifier = None,
                 emitter: BindingEmitter = None,
                 unsupported_kind_policy: str = "collect"):
        """
        Args:
            source: Where dumps and secondary lookups come from
            classifier: Symbol classifier. Defaults to SymbolClassifier().
            emitter: Declaration builder. Defaults to BindingEmitter().
            unsupported_kind_policy: 'collect' records unsupported kinds and
                keeps going, 'abort' raises the first UnsupportedSymbolKindError.
        """
        if unsupported_kind_policy not in UNSUPPORTED_KIND_POLICIES:
            raise ConfigValidationError(
                f"unsupported_kind_policy must be one of {list(UNSUPPORTED_KIND_POLICIES)}, "
                f"got {unsupported_kind_policy!r}",
                field="unsupported_kind_policy", value=unsupported_kind_policy,
            )
        self._source = source
        self._classifier = classifier or SymbolClassifier()
        self._emitter = emitter or BindingEmitter()
        self._policy = unsupported_kind_policy
        self.state = State.INIT
        self._trail: List[str] = []

    def _enter(self, state: State) -> None:
        logger.debug(f"{self.state.value} -> {state.value}")
        self.state = state
        self._trail.append(state.value)

    def process(self, module: Module, only: Optional[Sequence[str]] = None) -> PhaseResult:
        """Classify and emit every symbol of ``module``.

        Args:
            module: Symbols to process
            only: When given, symbols whose name is not listed are ignored
        """
        result = PhaseResult()
        wanted = set(only) if only is not None else None

        for sym in module.symbols:
            if wanted is not None and sym.name not in wanted:
                logger.debug(f"Ignoring unrequested symbol: {sym.name}")
                result.ignored += 1
                continue

            cls = self._classifier.classify(sym)
            if cls is None:
                result.ignored += 1
                continue

            if cls.disposition is Disposition.EMIT:
                try:
                    result.declarations.append(self._emitter.emit(sym))
                except KeywordParametersRejected as e:
                    logger.warning(str(e))
                    result.rejected.append(e)
            elif cls.disposition is Disposition.DEFER:
                result.deferred.add(sym.name)
            elif cls.disposition is Disposition.UNSUPPORTED:
                err = UnsupportedSymbolKindError(cls.kind, sym.name)
                if self._policy == "abort":
                    raise err
                logger.warning(f"unsupported type: {cls.kind} ({sym.name})")
                result.unsupported.append(err)
            else:
                result.skipped += 1

        return result

    def run(self, module_name: str) -> BindingReport:
        """Run both phases for ``module_name``.

        Raises:
            ModuleMismatchError: the dump does not describe ``module_name``
            UnsupportedSymbolKindError: only with the 'abort' policy
        """
        self._trail = []
        self.state = State.INIT
        self._trail.append(State.INIT.value)

        self._enter(State.PHASE1_DUMP)
        module = self._source.fetch(module_name)
        if module.name != module_name:
            raise ModuleMismatchError(module_name, module.name)
        logger.info(f"Dumped {module_name}: {len(module.symbols)} symbols")

        self._enter(State.PHASE1_EMIT)
        first = self.process(module)
        report = BindingReport(
            module_name=module_name,
            declarations=list(first.declarations),
            unsupported=list(first.unsupported),
            rejected=list(first.rejected),
        )

        requested = first.deferred.freeze()
        if requested:
            report.requested = requested
            report.unresolved = self._second_phase(module_name, requested, report)

        self._enter(State.DONE)
        if report.unresolved:
            logger.warning(f"Skip {len(report.unresolved)} symbols: {list(report.unresolved)}")
        report.states = list(self._trail)
        return report

    def _second_phase(self, module_name: str, requested: Sequence[str], report: BindingReport):
        self._enter(State.PHASE2_FETCH)
        logger.info(f"There are {len(requested)} signatures not found, fetching them again")
        module = self._source.fetch_names(module_name, list(requested))
        if module.name and module.name != module_name:
            logger.warning(f"Secondary lookup answered for {module.name!r}, expected {module_name!r}")

        self._enter(State.PHASE2_EMIT)
        second = self.process(module, only=requested)
        report.declarations.extend(second.declarations)
        report.unsupported.extend(second.unsupported)
        report.rejected.extend(second.rejected)

        # Names not returned at all are just as unresolved as re-deferred ones
        returned = {s.name for s in module.symbols}
        residual = DeferredSet(
            name for name in requested
            if name in second.deferred or name not in returned
        )
        return residual.freeze()


__all__ = ['RetryOrchestrator', 'State']
