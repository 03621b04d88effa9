"""Scope derivation and dependency filtering.

Both steps are pure functions of their inputs; the only side effect is
the info-level record emitted for every decision so the build log shows
why a dependency did or did not reach the classpath.
"""

from __future__ import annotations

import logging
from typing import Iterable

from core.domain.models import DependencyDeclaration
from core.domain.scope import EffectiveScope, ScopeKind

logger = logging.getLogger(__name__)


def resolve_scope(override: str | None, execution_id: str | None) -> EffectiveScope:
    """Derive the effective scope for this run.

    A non-empty override wins verbatim. Otherwise an execution id that
    contains "test" (any case) selects the test scope.
    """

    if override:
        scope = EffectiveScope(token=override, overridden=True)
        logger.info("scope override %r (%s)", override, scope.kind.value)
        return scope

    kind = ScopeKind.TEST if "test" in (execution_id or "").lower() else ScopeKind.default()
    scope = EffectiveScope(token=kind.token())
    logger.info("execution %r -> %s scope", execution_id or "", kind.value)
    return scope


def in_scope(declaration: DependencyDeclaration, scope: EffectiveScope) -> bool:
    if scope.is_test:
        return True
    return not declaration.is_test_only


def filter_dependencies(
    declarations: Iterable[DependencyDeclaration],
    scope: EffectiveScope,
) -> list[DependencyDeclaration]:
    """Keep the declarations eligible for `scope`, preserving order."""

    kept: list[DependencyDeclaration] = []
    for declaration in declarations:
        if in_scope(declaration, scope):
            kept.append(declaration)
        else:
            logger.info("skipping %s", declaration.artifact_id)
    return kept
