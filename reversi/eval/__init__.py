from .arena import ArenaResult, GameRecord, play_game, run_arena

__all__ = ["ArenaResult", "GameRecord", "play_game", "run_arena"]
