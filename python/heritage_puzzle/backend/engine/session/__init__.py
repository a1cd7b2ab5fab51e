from heritage_puzzle.backend.engine.session.host import CompletionResult, GameHost, PlaySession

__all__ = ["CompletionResult", "GameHost", "PlaySession"]
