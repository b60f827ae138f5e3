from dataclasses import dataclass

from pastebin.domain.identifiers import IdentifierGenerator
from pastebin.infra.storage import BlobStore


@dataclass(frozen=True)
class Paste:
    identifier: str
    content: bytes

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")


class PastesService:
    def __init__(self, *, store: BlobStore, generator: IdentifierGenerator, id_length: int) -> None:
        self._store = store
        self._generator = generator
        self._id_length = id_length

    def new_identifier(self) -> str:
        return self._generator.generate(self._id_length)

    def load(self, identifier: str) -> Paste:
        path = self._store.resolve(identifier)
        return Paste(identifier=identifier, content=self._store.read(path))

    def save(self, identifier: str, content: bytes) -> None:
        path = self._store.resolve(identifier)
        self._store.write(path, content)
