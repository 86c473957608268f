"""
Auth Session - Login state restored from and persisted to local storage.

A persisted session is trusted at startup without asking the server;
an expired token only shows up as the rejection of the next API call.
"""

import json
import logging
from enum import Enum
from typing import Callable, Optional

from pydantic import ValidationError

from crms.application.interfaces import ApiError, AuthApiPort, SessionStoragePort, StorageError
from crms.domain.entities import User
from crms.domain.value_objects import AuthSession
from crms.domain.value_objects.forms import (
    LoginForm,
    PasswordChangeForm,
    PasswordResetForm,
    RegisterForm,
    first_error,
)

from .flash_messages import DEFAULT_CLEAR_DELAY, ActionResult, FlashMessages
from .route_guard import home_path_for


logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"
REGISTRATION_NOTICE_KEY = "registrationSuccess"


class AuthState(Enum):
    """Authentication states."""
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class AuthSessionManager:
    """
    Owns the current AuthSession.

    Manages:
    - Session restore at startup
    - Login / logout and persistence of the session
    - Registration and password reset calls
    """

    def __init__(
        self,
        api: AuthApiPort,
        storage: SessionStoragePort,
        clear_delay: float = DEFAULT_CLEAR_DELAY,
    ) -> None:
        """
        Initialize the manager.

        Args:
            api: Account API adapter.
            storage: Persisted key/value storage.
            clear_delay: Seconds a success notice stays visible.
        """
        self.api = api
        self.storage = storage
        self.messages = FlashMessages(clear_delay, on_change=self._emit)
        self.loading = False

        self._session: Optional[AuthSession] = None
        self._listeners: list[Callable[[], None]] = []

    # ==================== State ====================

    @property
    def state(self) -> AuthState:
        return AuthState.AUTHENTICATED if self._session else AuthState.UNAUTHENTICATED

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    @property
    def session(self) -> Optional[AuthSession]:
        return self._session

    @property
    def user(self) -> Optional[User]:
        return self._session.user if self._session else None

    @property
    def token(self) -> Optional[str]:
        return self._session.token if self._session else None

    @property
    def error(self) -> Optional[str]:
        return self.messages.error

    def add_listener(self, callback: Callable[[], None]) -> None:
        """Register a callback invoked after every state change."""
        self._listeners.append(callback)

    def _emit(self) -> None:
        for callback in list(self._listeners):
            try:
                callback()
            except Exception as e:
                logger.error(f"Auth listener error: {e}")

    def _start(self) -> None:
        self.loading = True
        self.messages.clear_error()

    def _warn(self, message: str) -> ActionResult:
        result = ActionResult.warning(message)
        self.messages.report(result)
        return result

    def _fail(self, message: str) -> ActionResult:
        self.loading = False
        logger.warning(message)
        self.messages.set_error(message)
        return ActionResult.failure(message)

    # ==================== Session lifecycle ====================

    async def restore(self) -> AuthState:
        """
        Rebuild the session from storage.

        Both the token and a readable user must be present; anything less
        leaves the manager unauthenticated.
        """
        token = await self.storage.get_item(TOKEN_KEY)
        raw_user = await self.storage.get_item(USER_KEY)

        self._session = None
        if token and raw_user:
            try:
                user = User.from_dict(json.loads(raw_user))
                self._session = AuthSession(token=token, user=user)
            except (json.JSONDecodeError, TypeError, ValueError, AttributeError) as e:
                logger.warning(f"Discarding unreadable stored session: {e}")

        logger.info(f"Session restore: {self.state.value}")
        self._emit()
        return self.state

    async def login(self, email: str, password: str) -> ActionResult:
        """
        Authenticate and persist the session.

        Returns:
            ActionResult whose ``redirect_to`` is the user's home path.
        """
        try:
            form = LoginForm(email=email, password=password)
        except ValidationError as e:
            return self._warn(first_error(e))

        self._start()
        self._emit()
        try:
            session = await self.api.login(form.email, form.password)
        except ApiError as e:
            self._emit()
            return self._fail(e.message or "Login failed")

        try:
            await self.storage.set_items({
                TOKEN_KEY: session.token,
                USER_KEY: json.dumps(session.user.to_dict()),
            })
        except StorageError as e:
            logger.error(f"Session not persisted: {e}")
            self._emit()
            return self._fail("Could not save your session. Please try again.")

        self._session = session
        self.loading = False
        logger.info(f"Logged in as {session.user.email} ({session.user.role.value})")
        self.messages.set_success("Login successful!")
        return ActionResult.success("Login successful!", redirect_to=home_path_for(session.user))

    async def logout(self) -> ActionResult:
        """Forget the session, locally and in storage."""
        await self.storage.remove_items(TOKEN_KEY, USER_KEY)
        self._session = None
        self.messages.set_success("Logged out successfully!")
        return ActionResult.success("Logged out successfully!", redirect_to="/login")

    # ==================== Account operations ====================

    async def register(
        self,
        name: str,
        email: str,
        password: str,
        confirm_password: str,
        role: str = "user",
    ) -> ActionResult:
        """
        Create an account. Does not log the new user in.

        A one-shot notice is left in storage for the next login page load.
        """
        try:
            form = RegisterForm(
                name=name,
                email=email,
                password=password,
                confirm_password=confirm_password,
                role=role,
            )
        except ValidationError as e:
            return self._warn(first_error(e))

        self._start()
        self._emit()
        try:
            await self.api.register(form.payload())
        except ApiError as e:
            self._emit()
            return self._fail(e.message or "Registration failed")

        message = "Registration successful! Please log in."
        await self.storage.set_item(REGISTRATION_NOTICE_KEY, message)
        self.loading = False
        self._emit()
        logger.info(f"Registered account {form.email}")
        return ActionResult.success(message, redirect_to="/login")

    async def consume_registration_notice(self) -> Optional[str]:
        """Return the pending registration notice once, then forget it."""
        notice = await self.storage.get_item(REGISTRATION_NOTICE_KEY)
        if notice:
            await self.storage.remove_items(REGISTRATION_NOTICE_KEY)
        return notice

    async def request_password_reset(self, email: str) -> ActionResult:
        """Ask the API to send a reset link."""
        try:
            form = PasswordResetForm(email=email)
        except ValidationError as e:
            return self._warn(first_error(e))

        self._start()
        self._emit()
        try:
            await self.api.request_password_reset(form.email)
        except ApiError as e:
            self._emit()
            return self._fail(e.message or "Failed to send reset email")

        self.loading = False
        self.messages.set_success("Password reset link sent to your email")
        return ActionResult.success("Password reset link sent to your email", redirect_to="/login")

    async def change_password(
        self,
        new_password: str,
        reset_token: str,
        confirm_password: Optional[str] = None,
    ) -> ActionResult:
        """Set a new password using the token from the reset email."""
        try:
            form = PasswordChangeForm(
                new_password=new_password,
                reset_token=reset_token,
                confirm_password=confirm_password,
            )
        except ValidationError as e:
            return self._warn(first_error(e))

        self._start()
        self._emit()
        try:
            await self.api.change_password(form.new_password, form.reset_token)
        except ApiError as e:
            self._emit()
            return self._fail(e.message or "Failed to change password")

        self.loading = False
        self.messages.set_success("Password changed successfully")
        return ActionResult.success("Password changed successfully", redirect_to="/login")

    def clear_error(self) -> None:
        self.messages.clear_error()
