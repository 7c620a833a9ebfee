"""Bind the login/sign-up buttons to an external identity widget."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Protocol

logger = logging.getLogger(__name__)

LOGIN_LABEL = "Login"
FALLBACK_NOTICE = (
    "This fallback form doesn't create a real user. Enable the identity "
    "service to allow real sign up and login."
)


class IdentityWidget(Protocol):
    """The only capabilities the client relies on."""

    def open(self, mode: str | None = None) -> None: ...

    def close(self) -> None: ...

    def on(self, event: str, callback: Callable[..., Any]) -> None: ...


@dataclass(slots=True)
class FallbackModal:
    """Local stand-in used when no identity widget is available."""

    visible: bool = False
    signup: bool = False
    notice: str = ""

    @property
    def title(self) -> str:
        return "Sign up" if self.signup else "Login"

    def open(self, *, signup: bool) -> None:
        self.signup = signup
        self.visible = True
        self.notice = ""

    def close(self) -> None:
        self.visible = False

    def submit(self, email: str, password: str, name: str | None = None) -> str:
        self.notice = FALLBACK_NOTICE
        return self.notice


class AuthBinding:
    """Track the account button label for the current identity state."""

    def __init__(self, widget: IdentityWidget | None = None) -> None:
        self._widget = widget
        self.login_label = LOGIN_LABEL
        self.fallback = FallbackModal() if widget is None else None
        if widget is not None:
            widget.on("login", self._on_login)
            widget.on("logout", self._on_logout)

    def click_login(self) -> None:
        if self._widget is not None:
            self._widget.open()
        elif self.fallback is not None:
            self.fallback.open(signup=False)

    def click_signup(self) -> None:
        if self._widget is not None:
            self._widget.open("signup")
        elif self.fallback is not None:
            self.fallback.open(signup=True)

    def _on_login(self, user: Any) -> None:
        if self._widget is not None:
            self._widget.close()
        email = user.get("email") if isinstance(user, dict) else getattr(user, "email", None)
        self.login_label = str(email or LOGIN_LABEL)
        logger.info("Identity login completed")

    def _on_logout(self, *_: Any) -> None:
        self.login_label = LOGIN_LABEL
