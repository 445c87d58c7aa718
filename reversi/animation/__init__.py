from .flip_animation import FlipAnimationManager, schedule_flips

__all__ = ["FlipAnimationManager", "schedule_flips"]
