# src/rv32i_dis/render.py
from __future__ import annotations
from typing import FrozenSet, List, Literal, Optional, Sequence

from .instr import RInstr, IInstr, SInstr, UInstr, BInstr, JInstr, RawWord, ProgramItem
from .isa import SHIFT_MNEMONICS, spec as isa_spec
from .labels import collect_targets, target_index
from .utils import to_hex32

Mode = Literal["labelled", "unlabelled"]

MODES = ("labelled", "unlabelled")

INDENT = "  "

# ---------------- Plantillas por formato ----------------

def _mem(imm: int, base: int) -> str:
    return f"{imm}(x{base})"

def render_instr(ins: ProgramItem) -> str:
    """Texto de una instrucción con desplazamientos numéricos en B/J."""
    if isinstance(ins, RInstr):
        return f"{ins.name} x{ins.rd}, x{ins.rs1}, x{ins.rs2}"
    if isinstance(ins, IInstr):
        if isa_spec(ins.name).form == "rd,mem":
            # cargas y jalr
            return f"{ins.name} x{ins.rd}, {_mem(ins.imm, ins.rs1)}"
        imm = ins.imm & 0x3F if ins.name in SHIFT_MNEMONICS else ins.imm
        return f"{ins.name} x{ins.rd}, x{ins.rs1}, {imm}"
    if isinstance(ins, SInstr):
        return f"{ins.name} x{ins.rs2}, {_mem(ins.imm, ins.rs1)}"
    if isinstance(ins, UInstr):
        return f"{ins.name} x{ins.rd}, 0x{(ins.imm >> 12) & 0xFFFFF:x}"
    if isinstance(ins, BInstr):
        return f"{ins.name} x{ins.rs1}, x{ins.rs2}, {ins.imm}"
    if isinstance(ins, JInstr):
        return f"{ins.name} x{ins.rd}, {ins.imm}"
    if isinstance(ins, RawWord):
        return f".word {to_hex32(ins.word)}"
    raise TypeError(f"No es una instrucción: {ins!r}")

def render_instr_labelled(ins: ProgramItem, index: int, targets: FrozenSet[int]) -> str:
    """Como render_instr, pero los B/J con destino en 'targets' usan L<destino>."""
    t = target_index(index, ins)
    if t is None or t not in targets:
        return render_instr(ins)
    if isinstance(ins, BInstr):
        return f"{ins.name} x{ins.rs1}, x{ins.rs2}, L{t}"
    return f"{ins.name} x{ins.rd}, L{t}"

# ---------------- Programa completo ----------------

def render(program: Sequence[Optional[ProgramItem]], mode: Mode = "labelled") -> List[str]:
    """Convierte un programa decodificado en líneas de texto.

    'unlabelled': una línea por instrucción, desplazamientos numéricos.
    'labelled': PASADA 1 calcula los destinos; PASADA 2 emite 'L<i>:' antes de
    cada destino y las instrucciones sangradas con referencias a etiquetas.
    Los índices vacíos (None) no emiten nada pero conservan la numeración.
    """
    if mode not in MODES:
        raise ValueError(f"Modo de salida desconocido: {mode}")
    if mode == "unlabelled":
        return [render_instr(ins) for ins in program if ins is not None]

    targets = collect_targets(program)
    lines: List[str] = []
    for i, ins in enumerate(program):
        if ins is None:
            continue
        if i in targets:
            lines.append(f"L{i}:")
        lines.append(INDENT + render_instr_labelled(ins, i, targets))
    return lines
