from typing import Tuple

import numpy as np
import torch
import torch.nn as nn
import torch.nn.functional as F

BOARD_SIZE = 8
INPUT_PLANES = 3  # own stones, opponent stones, empty cells


class SEBlock(nn.Module):
    """Squeeze-and-Excitation block"""

    def __init__(self, channels: int, reduction: int = 8):
        super().__init__()
        hidden = max(channels // reduction, 1)
        self.squeeze = nn.AdaptiveAvgPool2d(1)
        self.excitation = nn.Sequential(
            nn.Linear(channels, hidden, bias=False),
            nn.ReLU(inplace=True),
            nn.Linear(hidden, channels, bias=False),
            nn.Sigmoid(),
        )

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        b, c, _, _ = x.size()
        y = self.squeeze(x).view(b, c)
        y = self.excitation(y).view(b, c, 1, 1)
        return x * y.expand_as(x)


class ResidualBlock(nn.Module):
    """Two 3x3 convolutions with SE attention and a skip connection"""

    def __init__(self, channels: int):
        super().__init__()
        self.conv1 = nn.Conv2d(channels, channels, 3, padding=1, bias=False)
        self.bn1 = nn.BatchNorm2d(channels)
        self.conv2 = nn.Conv2d(channels, channels, 3, padding=1, bias=False)
        self.bn2 = nn.BatchNorm2d(channels)
        self.se = SEBlock(channels)
        self.relu = nn.ReLU(inplace=True)

    def forward(self, x: torch.Tensor) -> torch.Tensor:
        residual = x
        out = self.relu(self.bn1(self.conv1(x)))
        out = self.bn2(self.conv2(out))
        out = self.se(out)
        out += residual
        return self.relu(out)


class ReversiNet(nn.Module):
    """ResNet-SE move scorer for 8x8 Reversi with policy and value heads.

    Takes channels-last input of shape (batch, 8, 8, 3) and returns
    (policy_logits of shape (batch, 64), value of shape (batch,)).
    """

    def __init__(self, num_blocks: int = 4, channels: int = 32):
        super().__init__()
        self.num_blocks = num_blocks
        self.channels = channels

        self.input_conv = nn.Sequential(
            nn.Conv2d(INPUT_PLANES, channels, kernel_size=3, padding=1, bias=False),
            nn.BatchNorm2d(channels),
            nn.ReLU(inplace=True),
        )

        self.blocks = nn.ModuleList(
            [ResidualBlock(channels) for _ in range(num_blocks)]
        )

        # Policy head
        self.policy_conv = nn.Sequential(
            nn.Conv2d(channels, 16, kernel_size=1, bias=False),
            nn.BatchNorm2d(16),
            nn.ReLU(inplace=True),
        )
        self.policy_fc = nn.Linear(16 * BOARD_SIZE * BOARD_SIZE, BOARD_SIZE * BOARD_SIZE)

        # Value head
        self.value_conv = nn.Sequential(
            nn.Conv2d(channels, 8, kernel_size=1, bias=False),
            nn.BatchNorm2d(8),
            nn.ReLU(inplace=True),
        )
        self.value_fc = nn.Sequential(
            nn.Linear(8 * BOARD_SIZE * BOARD_SIZE, 64),
            nn.ReLU(inplace=True),
            nn.Linear(64, 1),
            nn.Tanh(),
        )

    def forward(self, x: torch.Tensor) -> Tuple[torch.Tensor, torch.Tensor]:
        # NHWC -> NCHW
        x = x.permute(0, 3, 1, 2).contiguous()

        x = self.input_conv(x)
        for block in self.blocks:
            x = block(x)

        policy = self.policy_conv(x)
        policy = policy.view(policy.size(0), -1)
        policy = self.policy_fc(policy)

        value = self.value_conv(x)
        value = value.view(value.size(0), -1)
        value = self.value_fc(value)

        return policy, value.squeeze(-1)

    def get_model_size(self) -> int:
        """Get number of parameters"""
        return sum(p.numel() for p in self.parameters() if p.requires_grad)


class TorchPredictor:
    """Callable wrapper exposing a ReversiNet as ``predict(array) -> outputs``."""

    def __init__(self, model: ReversiNet, device: str = "cpu"):
        self.device = torch.device(device)
        self.model = model.to(self.device)
        self.model.eval()

    def __call__(self, board_input: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        with torch.inference_mode():
            x = torch.as_tensor(board_input, dtype=torch.float32, device=self.device)
            if x.dim() == 3:
                x = x.unsqueeze(0)
            policy_logits, value = self.model(x)
            policy = F.softmax(policy_logits, dim=1)
            return policy.cpu().numpy(), value.cpu().numpy()


def load_predictor(model_path: str, device: str = "cpu") -> TorchPredictor:
    """Build a TorchPredictor from a checkpoint file.

    The checkpoint may be a raw state_dict or a dict holding
    ``model_state_dict`` and, optionally, ``num_blocks``/``channels``.
    """
    # Set weights_only=False since checkpoints may carry architecture metadata
    checkpoint = torch.load(model_path, map_location=device, weights_only=False)

    if "model_state_dict" in checkpoint:
        model = ReversiNet(
            num_blocks=checkpoint.get("num_blocks", 4),
            channels=checkpoint.get("channels", 32),
        )
        model.load_state_dict(checkpoint["model_state_dict"])
    else:
        model = ReversiNet()
        model.load_state_dict(checkpoint)

    return TorchPredictor(model, device=device)
