from heritage_puzzle.backend.engine.gamestate.state import Clock, GameState

__all__ = ["Clock", "GameState"]
