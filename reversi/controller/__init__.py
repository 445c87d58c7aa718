from .cpu_controller import CPUController

__all__ = ["CPUController"]
