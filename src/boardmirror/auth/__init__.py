"""Auth module public exports."""

from boardmirror.auth.base import ApiCredentials, CredentialResolver
from boardmirror.auth.factory import create_credential_resolver

__all__ = ["ApiCredentials", "CredentialResolver", "create_credential_resolver"]
