from heritage_puzzle.backend.engine.gameplay.game import CompletionCallback, PuzzleGame

__all__ = ["CompletionCallback", "PuzzleGame"]
