from heritage_puzzle.backend.auth.session import UserSession

__all__ = ["UserSession"]
