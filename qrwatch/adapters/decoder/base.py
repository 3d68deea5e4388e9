from abc import ABC, abstractmethod
from qrwatch.orchestrator.contracts import CapturedImage, DecodeResult


class DecoderAdapter(ABC):
    @abstractmethod
    def decode(self, image: CapturedImage) -> DecodeResult:
        """Return DecodeResult(found=False) when no code is present.

        Raises DecodeError only for malformed input or a decoder fault.
        """
        ...
