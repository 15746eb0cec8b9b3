'''
PASADA 1 del desensamblado: destinos de saltos (B/J) dentro del programa
'''

from __future__ import annotations
from typing import FrozenSet, Optional, Sequence

from .instr import BInstr, JInstr, ProgramItem
from .utils import div_trunc

def branch_offset(ins: ProgramItem) -> Optional[int]:
    """Desplazamiento en bytes de un B/J; None para el resto."""
    if isinstance(ins, (BInstr, JInstr)):
        return ins.imm
    return None

def target_index(index: int, ins: ProgramItem) -> Optional[int]:
    """Índice de palabra al que salta ins (puede quedar fuera del programa)."""
    off = branch_offset(ins)
    if off is None:
        return None
    return index + div_trunc(off, 4)

def collect_targets(program: Sequence[Optional[ProgramItem]]) -> FrozenSet[int]:
    """Conjunto de índices en [0, N) que son destino de algún B/J.

    Un índice vacío (None, palabra omitida) nunca lleva etiqueta.
    """
    n = len(program)
    targets = set()
    for i, ins in enumerate(program):
        t = target_index(i, ins)
        if t is not None and 0 <= t < n and program[t] is not None:
            targets.add(t)
    return frozenset(targets)
