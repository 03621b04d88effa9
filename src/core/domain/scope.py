"""Build scope utilities.

This module centralizes the scope classification (ordinary vs. test
artifacts) shared by the resolver, the dependency filter and the CLI.
Keeping it in the domain layer lets every layer agree on what the scope
token means without importing services.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

TEST_TOKEN = "test-"
STANDARD_TOKEN = ""


class ScopeKind(str, Enum):
    """Classification that governs which dependencies are eligible."""

    STANDARD = "standard"
    TEST = "test"

    @classmethod
    def default(cls) -> "ScopeKind":
        """Return the scope used when nothing points at a test build."""

        return cls.STANDARD

    @classmethod
    def from_token(cls, token: str) -> "ScopeKind":
        """Derive the kind from a scope token (`""`, `"test-"`, or an override)."""

        return cls.TEST if token.lower() == TEST_TOKEN else cls.STANDARD

    def token(self) -> str:
        """Canonical token used for default directory naming."""

        return TEST_TOKEN if self is ScopeKind.TEST else STANDARD_TOKEN


class EffectiveScope(BaseModel):
    """Scope in effect for one enhancement run.

    The token is kept verbatim (an explicit override is not normalized) so
    that directory naming follows exactly what the user configured.
    """

    model_config = ConfigDict(frozen=True)

    token: str = Field(
        default=STANDARD_TOKEN,
        description="Token used for `target/<token>classes` ('' or 'test-').",
    )
    overridden: bool = Field(
        default=False,
        description="True when the token came from an explicit override.",
    )

    @property
    def kind(self) -> ScopeKind:
        return ScopeKind.from_token(self.token)

    @property
    def is_test(self) -> bool:
        return self.kind is ScopeKind.TEST

    def default_class_source(self) -> str:
        """Default directory holding compiled classes for this scope."""

        return f"target/{self.token}classes"
