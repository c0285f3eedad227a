"""Concrete credential resolvers."""

from boardmirror.auth.resolvers.env import EnvCredentialResolver
from boardmirror.auth.resolvers.static import StaticCredentialResolver

__all__ = ["EnvCredentialResolver", "StaticCredentialResolver"]
