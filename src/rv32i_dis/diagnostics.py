'''
clase Diagnostic y helpers (línea de entrada, índice de palabra, tipos de error)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Literal

from .utils import to_hex32

# Severidad de los diagnósticos (en español)
Severity = Literal["error", "advertencia", "nota"]

_SEV_TO_LABEL = {
    "error": "ERROR",
    "advertencia": "ADVERTENCIA",
    "nota": "NOTA",
}

@dataclass(frozen=True)
class Diagnostic:
    """Estructura de un diagnóstico para reportar problemas.

    Abarca errores, advertencias y notas, con ubicación opcional (archivo y línea
    del texto de entrada), la palabra afectada y su índice en el programa, y un
    mensaje de ayuda (pista) para orientar la corrección.
    """
    severity: Severity
    message: str
    line: Optional[int] = None
    hint: Optional[str] = None
    file: Optional[str] = None
    index: Optional[int] = None
    word: Optional[int] = None

    def __str__(self) -> str:
        parts = []
        if self.file is not None:
            parts.append(self.file)
        if self.line is not None:
            parts.append(str(self.line))
        loc = ":".join(parts) + ": " if parts else ""
        sev = _SEV_TO_LABEL.get(self.severity, str(self.severity).upper())
        core = f"{sev}: {self.message}"
        if self.word is not None:
            where = f"palabra {self.index}: " if self.index is not None else ""
            core += f" [{where}{to_hex32(self.word)}]"
        if self.hint:
            core += f"  (pista: {self.hint})"
        return loc + core

def error(message: str, *, line: int | None = None, file: str | None = None,
          hint: str | None = None, index: int | None = None, word: int | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo error."""
    return Diagnostic("error", message, line, hint, file, index, word)

def warning(message: str, *, line: int | None = None, file: str | None = None,
            hint: str | None = None, index: int | None = None, word: int | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo advertencia."""
    return Diagnostic("advertencia", message, line, hint, file, index, word)

def note(message: str, *, line: int | None = None, file: str | None = None,
         hint: str | None = None, index: int | None = None, word: int | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo nota."""
    return Diagnostic("nota", message, line, hint, file, index, word)
