from __future__ import annotations

from typing import Protocol, Sequence

from .model import Identity


class CandidateRepository(Protocol):
    """Repository interface for enrolled identities.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def list_with_face_images(self) -> Sequence[Identity]:
        """Identities that have a stored reference face image.

        Raises StorageError when the store cannot be read.
        """

        raise NotImplementedError
