"""Base class for output format providers."""

from abc import ABC, abstractmethod

from ..animation import CompiledAnimation


class OutputProvider(ABC):
    """Abstract base class for output format providers."""

    def __init__(self, path: str = ""):
        """
        Initialize the provider with an output file path.

        Args:
            path: Path to the output file
        """
        self.path = path

    @abstractmethod
    def encode(self, animation: CompiledAnimation, max_frames: int | None = None) -> bytes:
        """
        Encode a compiled animation into the output format.

        Args:
            animation: Compiled timeline plus its document
            max_frames: Upper bound on sampled frames, where the format samples

        Returns:
            Encoded output as bytes
        """
        raise NotImplementedError

    def write(self, data: bytes) -> None:
        """
        Write encoded data to the provider's path.

        Raises:
            ValueError: If the provider was created without a path
        """
        if not self.path:
            raise ValueError("Output path not set")
        with open(self.path, "wb") as f:
            f.write(data)
