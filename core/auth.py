# ABOUTME: Auth provider adapter (Supabase Auth) and AuthStore, the observable current-user holder.
# ABOUTME: classify_auth_error maps provider error codes (then message substrings) to user-facing kinds.

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from supabase import AuthError, Client, create_client

from core.config import SUPABASE_ANON_KEY, SUPABASE_URL


@dataclass(frozen=True)
class AuthUser:
    """Read-only view of the signed-in user; the provider owns the real session."""

    id: str
    email: str | None = None


AuthListener = Callable[[AuthUser | None], None]
Unsubscribe = Callable[[], None]


class AuthProviderError(Exception):
    """Failure reported by the auth provider; message is the provider's text, code its error code."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code


class AuthProvider(ABC):
    """Operations consumed from the hosted auth provider. Every call may raise AuthProviderError."""

    @abstractmethod
    def get_current_user(self) -> AuthUser | None:
        raise NotImplementedError

    @abstractmethod
    def on_auth_state_change(self, listener: AuthListener) -> Unsubscribe:
        raise NotImplementedError

    @abstractmethod
    def sign_up(self, email: str, password: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def sign_in_with_password(self, email: str, password: str) -> AuthUser | None:
        raise NotImplementedError

    @abstractmethod
    def sign_out(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def resend_confirmation(self, email: str) -> None:
        raise NotImplementedError


def _user_from_session(session) -> AuthUser | None:
    user = getattr(session, "user", None) if session is not None else None
    if user is None:
        return None
    return AuthUser(id=str(user.id), email=getattr(user, "email", None))


def _provider_error(exc: AuthError) -> AuthProviderError:
    message = getattr(exc, "message", None) or str(exc)
    return AuthProviderError(message, code=getattr(exc, "code", None))


class SupabaseAuthProvider(AuthProvider):
    """AuthProvider backed by supabase-py's GoTrue client."""

    def __init__(self, client: Client | None = None):
        self._client = client or create_client(SUPABASE_URL, SUPABASE_ANON_KEY)

    def get_current_user(self) -> AuthUser | None:
        try:
            return _user_from_session(self._client.auth.get_session())
        except AuthError as e:
            raise _provider_error(e) from e

    def on_auth_state_change(self, listener: AuthListener) -> Unsubscribe:
        subscription = self._client.auth.on_auth_state_change(
            lambda _event, session: listener(_user_from_session(session))
        )
        return subscription.unsubscribe

    def sign_up(self, email: str, password: str) -> None:
        try:
            self._client.auth.sign_up({"email": email, "password": password})
        except AuthError as e:
            raise _provider_error(e) from e

    def sign_in_with_password(self, email: str, password: str) -> AuthUser | None:
        try:
            response = self._client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as e:
            raise _provider_error(e) from e
        return _user_from_session(response.session)

    def sign_out(self) -> None:
        try:
            self._client.auth.sign_out()
        except AuthError as e:
            raise _provider_error(e) from e

    def resend_confirmation(self, email: str) -> None:
        try:
            self._client.auth.resend({"type": "signup", "email": email})
        except AuthError as e:
            raise _provider_error(e) from e


class AuthStore:
    """Holds the current user and notifies subscribers when the provider pushes a change.

    start() reads the current session and subscribes to the provider; stop() undoes that.
    """

    def __init__(self, provider: AuthProvider):
        self._provider = provider
        self._user: AuthUser | None = None
        self._listeners: list[AuthListener] = []
        self._provider_unsubscribe: Unsubscribe | None = None

    @property
    def provider(self) -> AuthProvider:
        return self._provider

    @property
    def user(self) -> AuthUser | None:
        return self._user

    @property
    def user_id(self) -> str:
        """Current user id, or empty string when signed out."""
        return self._user.id if self._user else ""

    def start(self) -> None:
        if self._provider_unsubscribe is not None:
            return
        try:
            self._set_user(self._provider.get_current_user())
        except AuthProviderError:
            logging.exception("AuthStore: could not read current session")
            self._set_user(None)
        self._provider_unsubscribe = self._provider.on_auth_state_change(self._set_user)

    def stop(self) -> None:
        if self._provider_unsubscribe is not None:
            self._provider_unsubscribe()
            self._provider_unsubscribe = None

    def subscribe(self, listener: AuthListener) -> Unsubscribe:
        """Register listener for user changes; returns a callable that removes it."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _set_user(self, user: AuthUser | None) -> None:
        self._user = user
        for listener in list(self._listeners):
            listener(user)


class AuthErrorKind(Enum):
    EMAIL_NOT_CONFIRMED = "email_not_confirmed"
    INVALID_CREDENTIALS = "invalid_credentials"
    OTHER = "other"


_KINDS_BY_CODE = {
    "email_not_confirmed": AuthErrorKind.EMAIL_NOT_CONFIRMED,
    "invalid_credentials": AuthErrorKind.INVALID_CREDENTIALS,
}


def classify_auth_error(error: AuthProviderError) -> AuthErrorKind:
    """Map a provider error to a user-facing kind. Codes win; message matching is the fallback."""
    if error.code in _KINDS_BY_CODE:
        return _KINDS_BY_CODE[error.code]
    message = error.message or ""
    if message == "Email not confirmed":
        return AuthErrorKind.EMAIL_NOT_CONFIRMED
    if "Invalid login credentials" in message:
        return AuthErrorKind.INVALID_CREDENTIALS
    if "email_not_confirmed" in message:
        return AuthErrorKind.EMAIL_NOT_CONFIRMED
    return AuthErrorKind.OTHER
