"""MediDesk screens."""

from .action import ActionScreen
from .base import Screen
from .home import HomeScreen, HomeState, SelectionMode
from .login import LoginControl, LoginScreen, LoginState
from .register import RegisterControl, RegisterScreen

__all__ = [
    "Screen",
    "LoginScreen",
    "LoginState",
    "LoginControl",
    "RegisterScreen",
    "RegisterControl",
    "HomeScreen",
    "HomeState",
    "SelectionMode",
    "ActionScreen",
]
