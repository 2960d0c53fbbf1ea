"""
Inline style declarations (the ``style`` attribute value).

Written as ``name:value`` pairs joined by ``;`` with no trailing separator.
Empty declarations are kept in the list but never written.
"""

from dataclasses import dataclass, field
from typing import BinaryIO, List

from structuredvg.io import Writable, WriteSettings


@dataclass(frozen=True)
class Declaration(Writable):
    """
    A single ``name:value`` declaration.

    A declaration with an empty name is an empty declaration, as produced
    by ``;;`` in a style sheet.
    """

    name: str = ""
    value: str = ""

    @classmethod
    def empty(cls) -> "Declaration":
        return cls()

    def is_empty(self) -> bool:
        return not self.name

    def write_to(self, writer: BinaryIO, settings: WriteSettings) -> None:
        if self.is_empty():
            return
        writer.write(self.name.encode("utf-8"))
        writer.write(b":")
        writer.write(self.value.encode("utf-8"))


@dataclass
class DeclarationList(Writable):
    declarations: List[Declaration] = field(default_factory=list)

    def push_property(self, name: str, value: str) -> None:
        self.declarations.append(Declaration(name, value))

    def is_empty(self) -> bool:
        return all(d.is_empty() for d in self.declarations)

    def write_to(self, writer: BinaryIO, settings: WriteSettings) -> None:
        first = True
        for declaration in self.declarations:
            if declaration.is_empty():
                continue
            if not first:
                writer.write(b";")
            declaration.write_to(writer, settings)
            first = False


__all__ = ["Declaration", "DeclarationList"]
