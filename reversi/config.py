"""Configuration for the Reversi engine and CPU players."""

from pydantic import BaseModel, Field


class TimingConfig(BaseModel):
    """Delays used by the CPU controller and the flip animation (milliseconds)."""
    thinking_time_ms: int = Field(1000, ge=0)
    cpu_vs_cpu_thinking_time_ms: int = Field(800, ge=0)
    # Flip animation
    flip_delay_per_unit_ms: int = Field(40, ge=0)  # per unit of distance from the placed stone
    flip_duration_ms: int = Field(330, ge=0)
    pause_after_animation_ms: int = Field(300, ge=0)


class ModelConfig(BaseModel):
    """Settings for loading the Ultimate CPU's model."""
    model_path: str = "./models/reversi_model.pt"
    max_load_attempts: int = Field(3, ge=1)
    # Delay after the n-th failed attempt is backoff_base_s * 2**n
    backoff_base_s: float = Field(0.5, ge=0.0)

    def backoff_delay(self, attempts: int) -> float:
        return self.backoff_base_s * (2 ** attempts)


class Settings:
    """Application settings."""

    # Board settings
    BOARD_SIZE: int = 8

    # Hard CPU switches to material counting below this many empty cells
    ENDGAME_EMPTY_THRESHOLD: int = 16

    TIMING: TimingConfig = TimingConfig()

    MODEL: ModelConfig = ModelConfig()


settings = Settings()
