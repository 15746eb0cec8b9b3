'''
dataclases de instrucción decodificada (una por formato: R, I, S, U, B, J)
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Union

# ---- Registros de instrucción (inmutables) ----

@dataclass(frozen=True)
class RInstr:
    """Registro-registro: name rd, rs1, rs2."""
    name: str
    rd: int
    rs1: int
    rs2: int

@dataclass(frozen=True)
class IInstr:
    """Inmediato de 12 bits con signo (sltiu: sin signo), cargas y jalr."""
    name: str
    rd: int
    rs1: int
    imm: int

@dataclass(frozen=True)
class SInstr:
    """Almacén: rs2 es el valor, rs1 la base."""
    name: str
    rs1: int
    rs2: int
    imm: int

@dataclass(frozen=True)
class UInstr:
    """Inmediato superior; imm ya desplazado (12 bits bajos en cero)."""
    name: str
    rd: int
    imm: int

@dataclass(frozen=True)
class BInstr:
    """Salto condicional; imm es el desplazamiento en bytes (par, 13 bits)."""
    name: str
    rs1: int
    rs2: int
    imm: int

@dataclass(frozen=True)
class JInstr:
    """jal rd, offset; imm es el desplazamiento en bytes (par, 21 bits)."""
    rd: int
    imm: int
    name: str = "jal"

Instr = Union[RInstr, IInstr, SInstr, UInstr, BInstr, JInstr]

# ---- Marcador para palabras que no se pudieron decodificar ----

@dataclass(frozen=True)
class RawWord:
    """Palabra cruda conservada en su índice (política 'placeholder')."""
    word: int

ProgramItem = Union[RInstr, IInstr, SInstr, UInstr, BInstr, JInstr, RawWord]
