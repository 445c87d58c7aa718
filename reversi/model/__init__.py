"""Learned move scorer used by the Ultimate CPU."""

from .network import ReversiNet, TorchPredictor, load_predictor

__all__ = ["ReversiNet", "TorchPredictor", "load_predictor"]
