from __future__ import annotations
import re
from typing import Iterable, List, Optional, Tuple

from .diagnostics import Diagnostic, error
from .utils import U32_MASK

COMMENT_SPLIT_RE = re.compile(r"(#|//)")
HEX_WORD_RE = re.compile(r"^(0[xX])?[0-9a-fA-F]+$")

def strip_comment(line: str) -> str:
    """Remove comments starting with '#' or '//'"""
    return COMMENT_SPLIT_RE.split(line, maxsplit=1)[0].strip()

def parse_words(text: str, *, filename: Optional[str] = None) -> Tuple[List[int], List[Diagnostic]]:
    """Una palabra hexadecimal por línea ('0x' opcional).

    Las líneas vacías y los comentarios se ignoran, así que la salida .hex del
    ensamblador se puede volver a leer tal cual.
    """
    words: List[int] = []
    diags: List[Diagnostic] = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        core = strip_comment(raw)
        if not core:
            continue
        if not HEX_WORD_RE.match(core):
            diags.append(error(f"'{core}' no es un número hexadecimal", line=lineno, file=filename,
                               hint="una palabra de 8 dígitos hex por línea"))
            continue
        value = int(core, 16)
        if value > U32_MASK:
            diags.append(error(f"'{core}' no cabe en 32 bits", line=lineno, file=filename))
            continue
        words.append(value)
    return words, diags

def read_words(path: str) -> Tuple[List[int], List[Diagnostic]]:
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    return parse_words(text, filename=path)

def write_lines(lines: Iterable[str], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write(line + "\n")
