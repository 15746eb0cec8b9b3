'''
extracción de campos de una palabra de 32 bits (opcode, registros, funct, inmediatos)

Ninguna función falla: cualquier palabra produce un valor para cada campo;
la validez se decide después en el decodificador.
'''

from __future__ import annotations

from .utils import sign_extend, split_bits

# ---------- Campos fijos ----------

def opcode(word: int) -> int:
    return word & 0x7F

def rd(word: int) -> int:
    return (word >> 7) & 0x1F

def funct3(word: int) -> int:
    return (word >> 12) & 0x7

def rs1(word: int) -> int:
    return (word >> 15) & 0x1F

def rs2(word: int) -> int:
    return (word >> 20) & 0x1F

def funct7(word: int) -> int:
    return (word >> 25) & 0x7F

# ---------- Inmediatos ----------

def imm_iu(word: int) -> int:
    """imm[11:0] = word[31:20] sin extensión de signo (sólo para sltiu)."""
    (imm,) = split_bits(word, ((31, 20),))
    return imm

def imm_i(word: int) -> int:
    """imm[11:0] = word[31:20], con signo."""
    return sign_extend(imm_iu(word), 12)

def imm_s(word: int) -> int:
    """imm[11:5] = word[31:25], imm[4:0] = word[11:7]."""
    hi, lo = split_bits(word, ((31, 25), (11, 7)))
    return sign_extend((hi << 5) | lo, 12)

def imm_u(word: int) -> int:
    """imm[31:12] = word[31:12]; los 12 bits bajos siempre valen cero."""
    return sign_extend(word & 0xFFFFF000, 32)

def imm_b(word: int) -> int:
    """imm[12|10:5] = word[31:25], imm[4:1|11] = word[11:7]; imm[0] = 0."""
    b12, b10_5, b4_1, b11 = split_bits(word, ((31, 31), (30, 25), (11, 8), (7, 7)))
    imm = (b12 << 12) | (b11 << 11) | (b10_5 << 5) | (b4_1 << 1)
    return sign_extend(imm, 13)

def imm_j(word: int) -> int:
    """imm[20|10:1|11|19:12] = word[31:12]; imm[0] = 0."""
    i20, i10_1, i11, i19_12 = split_bits(word, ((31, 31), (30, 21), (20, 20), (19, 12)))
    imm = (i20 << 20) | (i19_12 << 12) | (i11 << 11) | (i10_1 << 1)
    return sign_extend(imm, 21)
