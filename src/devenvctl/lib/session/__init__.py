"""In-container session setup: SSH key, transport config, dotfiles, git identity."""

from .initializer import SessionEnvironment, SessionInitializer, SessionState, exec_shell

__all__ = ["SessionEnvironment", "SessionInitializer", "SessionState", "exec_shell"]
