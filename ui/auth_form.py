# ABOUTME: Sign-in / sign-up form state and actions, kept free of Streamlit so it can be tested directly.
# ABOUTME: Provider errors go through classify_auth_error; unconfirmed email unlocks the resend action.

import logging
from dataclasses import dataclass

from core.auth import AuthErrorKind, AuthProvider, AuthProviderError, classify_auth_error

SIGN_IN = "signin"
SIGN_UP = "signup"

EMAIL_NOT_CONFIRMED_MESSAGE = "Please confirm your email address before signing in."
INVALID_CREDENTIALS_MESSAGE = (
    "Invalid email or password. Please check your credentials and try again."
)
GENERIC_AUTH_ERROR_MESSAGE = "An error occurred during authentication"
SIGN_UP_CONFIRMATION_MESSAGE = (
    "Please check your email for a confirmation link to complete your registration."
)
RESEND_SUCCESS_MESSAGE = "Confirmation email has been resent. Please check your inbox."
RESEND_FAILURE_MESSAGE = "Failed to resend confirmation email. Please try again."


@dataclass
class AuthForm:
    """Banners and mode of the auth screen; methods call the provider and update banners."""

    mode: str = SIGN_IN
    error: str | None = None
    info: str | None = None
    show_resend: bool = False
    resend_success: bool = False

    @property
    def title(self) -> str:
        return "Welcome Back" if self.mode == SIGN_IN else "Create Account"

    @property
    def submit_label(self) -> str:
        return "Sign In" if self.mode == SIGN_IN else "Sign Up"

    @property
    def switch_label(self) -> str:
        if self.mode == SIGN_IN:
            return "Don't have an account? Sign Up"
        return "Already have an account? Sign In"

    def clear_banners(self) -> None:
        self.error = None
        self.info = None
        self.show_resend = False
        self.resend_success = False

    def switch_mode(self) -> None:
        self.mode = SIGN_UP if self.mode == SIGN_IN else SIGN_IN
        self.clear_banners()

    def submit(self, provider: AuthProvider, email: str, password: str) -> None:
        """Sign up or sign in. Sign-up never signs the user in; it asks for email confirmation."""
        self.clear_banners()
        try:
            if self.mode == SIGN_UP:
                provider.sign_up(email, password)
                self.info = SIGN_UP_CONFIRMATION_MESSAGE
            else:
                provider.sign_in_with_password(email, password)
        except AuthProviderError as e:
            logging.exception("Auth error")
            self._show_error(e)

    def resend(self, provider: AuthProvider, email: str) -> None:
        """Resend the signup confirmation email. Every call hits the provider."""
        self.error = None
        self.resend_success = False
        try:
            provider.resend_confirmation(email)
        except AuthProviderError:
            logging.exception("Resend error")
            self.error = RESEND_FAILURE_MESSAGE
            return
        self.resend_success = True

    def _show_error(self, error: AuthProviderError) -> None:
        kind = classify_auth_error(error)
        if kind is AuthErrorKind.EMAIL_NOT_CONFIRMED:
            self.error = EMAIL_NOT_CONFIRMED_MESSAGE
            self.show_resend = True
        elif kind is AuthErrorKind.INVALID_CREDENTIALS:
            self.error = INVALID_CREDENTIALS_MESSAGE
        else:
            self.error = error.message or GENERIC_AUTH_ERROR_MESSAGE
