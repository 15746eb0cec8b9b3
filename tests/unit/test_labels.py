from src.rv32i_dis.decoder import decode_program
from src.rv32i_dis.instr import RInstr, IInstr, BInstr, JInstr, RawWord
from src.rv32i_dis.labels import branch_offset, collect_targets, target_index
from src.rv32i_dis.render import render

NOP = IInstr("addi", 0, 0, 0)

def test_branch_offset_only_for_b_and_j():
    assert branch_offset(BInstr("beq", 0, 0, -4)) == -4
    assert branch_offset(JInstr(0, 8)) == 8
    assert branch_offset(NOP) is None
    assert branch_offset(RawWord(0)) is None

def test_target_index_truncates_toward_zero():
    assert target_index(1, BInstr("beq", 0, 0, -6)) == 0
    assert target_index(0, JInstr(0, 6)) == 1
    assert target_index(3, NOP) is None

def test_backward_out_of_range_has_no_label():
    prog = [BInstr("beq", 0, 0, -4)]
    assert collect_targets(prog) == frozenset()
    assert render(prog) == ["  beq x0, x0, -4"]

def test_forward_out_of_range_keeps_offset():
    prog = [JInstr(1, 8)]
    assert render(prog) == ["  jal x1, 8"]

def test_forward_branch_gets_label():
    prog = [BInstr("beq", 0, 0, 4), NOP]
    assert render(prog) == ["  beq x0, x0, L1", "L1:", "  addi x0, x0, 0"]

def test_self_loop():
    prog = [JInstr(0, 0)]
    assert render(prog) == ["L0:", "  jal x0, L0"]

def test_duplicate_targets_collapse():
    prog = [BInstr("beq", 0, 0, 8), NOP, RInstr("add", 1, 0, 0), JInstr(0, -4)]
    assert collect_targets(prog) == frozenset({2})
    assert render(prog) == [
        "  beq x0, x0, L2",
        "  addi x0, x0, 0",
        "L2:",
        "  add x1, x0, x0",
        "  jal x0, L2",
    ]
    assert render(prog).count("L2:") == 1

def test_labels_are_instruction_indices():
    prog = [NOP, NOP, NOP, BInstr("bne", 1, 2, -12)]
    assert render(prog)[0] == "L0:"
    assert render(prog)[-1] == "  bne x1, x2, L0"

def test_unlabelled_ignores_targets():
    prog = [BInstr("beq", 0, 0, 4), NOP]
    assert render(prog, "unlabelled") == ["beq x0, x0, 4", "addi x0, x0, 0"]

def test_from_words():
    words = [0x00000463, 0x00000013, 0x00100093, 0xFFDFF06F]
    prog = decode_program(words).program
    assert render(prog) == [
        "  beq x0, x0, L2",
        "  addi x0, x0, 0",
        "L2:",
        "  addi x1, x0, 1",
        "  jal x0, L2",
    ]

def test_skipped_slot_keeps_numbering():
    prog = [JInstr(0, 8), None, NOP]
    assert collect_targets(prog) == frozenset({2})
    assert render(prog) == ["  jal x0, L2", "L2:", "  addi x0, x0, 0"]
