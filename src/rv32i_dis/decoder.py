# src/rv32i_dis/decoder.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Literal, Optional

from . import fields
from .diagnostics import Diagnostic, warning
from .instr import Instr, RInstr, IInstr, SInstr, UInstr, BInstr, JInstr, RawWord, ProgramItem
from .isa import (
    OPCODE_FORMAT, OP_I_ALU,
    R_NAMES, I_NAMES, SHIFT_NAMES, S_NAMES, B_NAMES, U_NAMES,
)
from .utils import U32_MASK, to_hex32

ErrorKind = Literal["opcode", "funct"]
ErrorPolicy = Literal["abort", "skip", "placeholder"]

ERROR_POLICIES = ("abort", "skip", "placeholder")

_KIND_TO_MESSAGE = {
    "opcode": "opcode no reconocido",
    "funct": "código de función no reconocido",
}

# ---------------- Errores ----------------

class DecodeError(ValueError):
    """Palabra que no corresponde a ninguna instrucción conocida.

    kind: 'opcode' si el opcode no pertenece a ninguna familia,
          'funct' si funct3/funct7 no están en la tabla de la familia.
    """

    def __init__(self, kind: ErrorKind, word: int, index: Optional[int] = None):
        # args completos para que pickle y copy puedan reconstruir el error
        super().__init__(kind, word, index)
        self.kind = kind
        self.word = word
        self.index = index

    def __str__(self) -> str:
        where = f" en la palabra {self.index}" if self.index is not None else ""
        return f"{self.message}{where}: {to_hex32(self.word)}"

    @property
    def message(self) -> str:
        return _KIND_TO_MESSAGE[self.kind]

    def with_index(self, index: int) -> "DecodeError":
        return DecodeError(self.kind, self.word, index)

# ---------------- Decodificadores por formato ----------------

def _decode_r(word: int) -> RInstr:
    name = R_NAMES.get((fields.funct3(word), fields.funct7(word)))
    if name is None:
        raise DecodeError("funct", word)
    return RInstr(name=name, rd=fields.rd(word), rs1=fields.rs1(word), rs2=fields.rs2(word))

def _decode_i(word: int) -> IInstr:
    opc = fields.opcode(word)
    f3 = fields.funct3(word)
    if opc == OP_I_ALU and f3 == 0b001:
        # slli: funct7 debe ser exactamente 0
        name = SHIFT_NAMES.get((f3, fields.funct7(word)))
    elif opc == OP_I_ALU and f3 == 0b101:
        # srli/srai: el bit 0 de funct7 es shamt[5]
        name = SHIFT_NAMES.get((f3, fields.funct7(word) & ~1))
    else:
        name = I_NAMES.get((opc, f3))
    if name is None:
        raise DecodeError("funct", word)
    imm = fields.imm_iu(word) if name == "sltiu" else fields.imm_i(word)
    return IInstr(name=name, rd=fields.rd(word), rs1=fields.rs1(word), imm=imm)

def _decode_s(word: int) -> SInstr:
    name = S_NAMES.get(fields.funct3(word))
    if name is None:
        raise DecodeError("funct", word)
    return SInstr(name=name, rs1=fields.rs1(word), rs2=fields.rs2(word), imm=fields.imm_s(word))

def _decode_u(word: int) -> UInstr:
    # OPCODE_FORMAT ya garantiza que el opcode está en U_NAMES
    name = U_NAMES[fields.opcode(word)]
    return UInstr(name=name, rd=fields.rd(word), imm=fields.imm_u(word))

def _decode_b(word: int) -> BInstr:
    name = B_NAMES.get(fields.funct3(word))
    if name is None:
        raise DecodeError("funct", word)
    return BInstr(name=name, rs1=fields.rs1(word), rs2=fields.rs2(word), imm=fields.imm_b(word))

def _decode_j(word: int) -> JInstr:
    return JInstr(rd=fields.rd(word), imm=fields.imm_j(word))

_DECODERS = {
    "R": _decode_r,
    "I": _decode_i,
    "S": _decode_s,
    "U": _decode_u,
    "B": _decode_b,
    "J": _decode_j,
}

# ---------------- Despachador ----------------

def decode(word: int) -> Instr:
    """Decodifica una palabra de 32 bits; lanza DecodeError si no es válida.

    Valores fuera de [0, 2^32) no son palabras y lanzan ValueError.
    """
    if not 0 <= word <= U32_MASK:
        raise ValueError(f"La palabra no cabe en 32 bits sin signo: {word:#x}")
    fmt = OPCODE_FORMAT.get(fields.opcode(word))
    if fmt is None:
        raise DecodeError("opcode", word)
    return _DECODERS[fmt](word)

# ---------------- Programa completo ----------------

@dataclass(frozen=True)
class DecodeResult:
    # None marca una palabra omitida: los índices siguen siendo pc / 4
    program: List[Optional[ProgramItem]]
    diagnostics: List[Diagnostic]

def decode_program(words: Iterable[int], *, on_error: ErrorPolicy = "abort") -> DecodeResult:
    """Decodifica un programa completo.

    on_error decide qué hacer con una palabra inválida:
      - 'abort': relanza el primer DecodeError (con su índice).
      - 'skip': deja None en su índice; no se emite ninguna línea para ella.
      - 'placeholder': deja un RawWord en su lugar.
    En 'skip' y 'placeholder' cada palabra inválida genera una advertencia.
    """
    if on_error not in ERROR_POLICIES:
        raise ValueError(f"Política de error desconocida: {on_error}")

    program: List[Optional[ProgramItem]] = []
    diags: List[Diagnostic] = []
    for i, w in enumerate(words):
        try:
            program.append(decode(w))
        except DecodeError as ex:
            if on_error == "abort":
                raise ex.with_index(i) from None
            if on_error == "placeholder":
                program.append(RawWord(w))
                hint = "se emite como .word"
            else:
                program.append(None)
                hint = "palabra omitida"
            diags.append(warning(ex.message, index=i, word=ex.word, hint=hint))
    return DecodeResult(program=program, diagnostics=diags)
