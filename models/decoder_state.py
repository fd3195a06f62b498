"""Snapshot of a progressive decoder's position."""

from dataclasses import dataclass

from models.codec_params import DeliveryMode


@dataclass(frozen=True)
class DecoderState:
    """Progress of a ProgressiveDecoder; 0 <= current_step <= total_steps."""

    mode: DeliveryMode
    current_step: int
    total_steps: int

    @property
    def complete(self) -> bool:
        return self.current_step >= self.total_steps
