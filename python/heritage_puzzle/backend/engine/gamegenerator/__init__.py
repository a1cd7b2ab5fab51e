from heritage_puzzle.backend.engine.gamegenerator.generator import GameGenerator

__all__ = ["GameGenerator"]
