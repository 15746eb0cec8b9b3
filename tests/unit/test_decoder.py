import copy
import pickle

import pytest
from src.rv32i_dis.decoder import DecodeError, decode, decode_program
from src.rv32i_dis.instr import RInstr, IInstr, SInstr, UInstr, BInstr, JInstr, RawWord
from src.rv32i_dis.render import render

def test_add_zero():
    assert decode(0x00000033) == RInstr(name="add", rd=0, rs1=0, rs2=0)

def test_addi_one():
    assert decode(0x00100093) == IInstr(name="addi", rd=1, rs1=0, imm=1)

def test_decode_is_deterministic():
    assert decode(0xFE142C23) == decode(0xFE142C23)

def test_immediates_are_sign_extended():
    assert decode(0xFFF00093).imm == -1          # addi x1, x0, -1
    assert decode(0xFE000EE3) == BInstr(name="beq", rs1=0, rs2=0, imm=-4)
    assert decode(0xFE142C23) == SInstr(name="sw", rs1=8, rs2=1, imm=-8)
    assert decode(0xFFDFF06F) == JInstr(rd=0, imm=-4)

def test_sltiu_zero_extends():
    assert decode(0xFFF03093) == IInstr(name="sltiu", rd=1, rs1=0, imm=4095)

def test_loads_and_jalr():
    assert decode(0x00012503) == IInstr(name="lw", rd=10, rs1=2, imm=0)
    assert decode(0x00008067) == IInstr(name="jalr", rd=0, rs1=1, imm=0)

def test_upper_immediates():
    assert decode(0x123452B7) == UInstr(name="lui", rd=5, imm=0x12345000)
    assert decode(0x00000517) == UInstr(name="auipc", rd=10, imm=0)

def test_shifts():
    assert decode(0x40135313) == IInstr(name="srai", rd=6, rs1=6, imm=0x401)
    # shamt[5] vive en el bit 0 de funct7
    assert decode(0x02105093).name == "srli"
    assert decode(0x42105093).name == "srai"

@pytest.mark.parametrize("word", [
    0x02000033,  # R con funct7 = 1
    0x02101093,  # slli con funct7 != 0
    0x20005093,  # desplazamiento a la derecha con funct7 = 0x10
    0x00007003,  # carga con funct3 = 7
    0x00001067,  # jalr con funct3 != 0
    0x00004023,  # almacén con funct3 = 4
    0x00002063,  # branch con funct3 = 2
])
def test_unrecognized_function_code(word):
    with pytest.raises(DecodeError) as ei:
        decode(word)
    assert ei.value.kind == "funct"
    assert ei.value.word == word
    assert ei.value.index is None

@pytest.mark.parametrize("word", [0x0000007F, 0x00000000, 0x00000073])
def test_unrecognized_opcode(word):
    with pytest.raises(DecodeError) as ei:
        decode(word)
    assert ei.value.kind == "opcode"
    assert "opcode no reconocido" in str(ei.value)

# ---------- políticas de error ----------

_PROG = [0x00100093, 0x0000007F, 0x00000033]

def test_policy_abort_reports_index():
    with pytest.raises(DecodeError) as ei:
        decode_program(_PROG)
    assert ei.value.index == 1
    assert ei.value.kind == "opcode"
    assert "en la palabra 1" in str(ei.value)

def test_policy_skip():
    res = decode_program(_PROG, on_error="skip")
    # el índice 1 queda vacío; la numeración pc / 4 se conserva
    assert res.program[1] is None
    assert [i.name for i in res.program if i is not None] == ["addi", "add"]
    assert len(res.diagnostics) == 1
    d = res.diagnostics[0]
    assert d.severity == "advertencia"
    assert d.index == 1 and d.word == 0x7F

def test_policy_placeholder():
    res = decode_program(_PROG, on_error="placeholder")
    assert res.program[1] == RawWord(0x7F)
    assert len(res.program) == 3
    assert len(res.diagnostics) == 1

def test_unknown_policy():
    with pytest.raises(ValueError):
        decode_program(_PROG, on_error="ignore")

def test_empty_program():
    res = decode_program([])
    assert res.program == [] and res.diagnostics == []

def test_skip_keeps_branch_targets():
    # beq +8 en la palabra 0 salta a la palabra 2 (add), pasando sobre la inválida
    res = decode_program([0x00000463, 0x0000007F, 0x00000033, 0x00100093], on_error="skip")
    assert render(res.program) == [
        "  beq x0, x0, L2",
        "L2:",
        "  add x0, x0, x0",
        "  addi x1, x0, 1",
    ]
    assert render(res.program, "unlabelled") == [
        "beq x0, x0, 8",
        "add x0, x0, x0",
        "addi x1, x0, 1",
    ]

def test_branch_to_skipped_word_keeps_offset():
    res = decode_program([0x00000263, 0x0000007F], on_error="skip")
    assert render(res.program) == ["  beq x0, x0, 4"]

def test_decode_error_pickle_and_copy():
    ex = DecodeError("opcode", 0x7F, 3)
    for clone in (pickle.loads(pickle.dumps(ex)), copy.copy(ex)):
        assert (clone.kind, clone.word, clone.index) == ("opcode", 0x7F, 3)
        assert str(clone) == str(ex) == "opcode no reconocido en la palabra 3: 0x0000007f"

@pytest.mark.parametrize("word", [0x1_0000_0033, -1])
def test_word_out_of_range(word):
    with pytest.raises(ValueError) as ei:
        decode(word)
    assert not isinstance(ei.value, DecodeError)
