from heritage_puzzle.backend.engine.timers.timers import IntervalTimer, PreviewTimer

__all__ = ["IntervalTimer", "PreviewTimer"]
